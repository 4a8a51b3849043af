"""Pytest configuration and shared fixtures.

Following Linus's principle: "Simplicity is the ultimate sophistication."
Provides minimal, focused test fixtures and configuration.
"""

import os
import sys
import tempfile
import pytest
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from tree_index_mcp.config import IndexerConfig, reset_config


MAIN_TREE_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<root BTCPP_format="4" main_tree_to_execute="MainTree">
  <BehaviorTree ID="MainTree">
    <Sequence name="root_sequence">
      <SubTree ID="GraspObject"/>
      <MoveArm target="{goal}"/>
      <MoveArm target="{home}"/>
    </Sequence>
  </BehaviorTree>
  <TreeNodesModel>
    <Action ID="MoveArm">
      <input_port name="target"/>
    </Action>
  </TreeNodesModel>
</root>
'''

GRASP_TREE_XML = '''<root BTCPP_format="4">
  <BehaviorTree ID="GraspObject">
    <Fallback>
      <CloseGripper force="10"/>
      <AlwaysFailure/>
    </Fallback>
  </BehaviorTree>
</root>
'''

MOVE_ARM_HPP = '''#pragma once

#include <behaviortree_cpp/action_node.h>

/**
 * @brief Moves the arm.
 *
 * Plans and executes a joint trajectory.
 *
 * Input Ports:
 * - target
 * Output Ports:
 * - reached
 */
class MoveArm : public BT::SyncActionNode
{
public:
  MoveArm(const std::string& name, const BT::NodeConfig& config);
};

// Closes the gripper.
// Input Ports:
// - force
class CloseGripper : public BT::SyncActionNode
{
};
'''


@pytest.fixture
def test_config(monkeypatch):
    """Configuration with a short debounce and no environment overrides."""
    for key in list(os.environ):
        if key.startswith("TREE_INDEX_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TREE_INDEX_DEBOUNCE_MS", "20")
    reset_config()
    yield IndexerConfig()
    reset_config()


@pytest.fixture
def sample_workspace():
    """Create a small behavior-tree workspace for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)

        (root / "trees").mkdir()
        (root / "trees" / "main.xml").write_text(MAIN_TREE_XML)
        (root / "trees" / "grasp.xml").write_text(GRASP_TREE_XML)

        (root / "include").mkdir()
        (root / "include" / "move_arm.hpp").write_text(MOVE_ARM_HPP)

        # Excluded directory: must never be indexed
        (root / "build").mkdir()
        (root / "build" / "copy.xml").write_text(GRASP_TREE_XML)

        (root / "README.md").write_text("# Sample workspace\n")

        yield root


@pytest.fixture
def empty_workspace():
    """Create an empty temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location/name."""
    for item in items:
        # Mark tests of the workspace service and tools as integration
        if "test_workspace_service" in item.nodeid or "test_tools" in item.nodeid:
            item.add_marker(pytest.mark.integration)

        # Mark any test containing "integration" or "end_to_end" as integration
        if "integration" in item.name or "end_to_end" in item.name:
            item.add_marker(pytest.mark.integration)
