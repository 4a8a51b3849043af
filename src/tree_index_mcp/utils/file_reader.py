"""
Async file reading and offset -> position mapping.
"""

import bisect
from pathlib import Path
from typing import List, Tuple, Union

import aiofiles


async def read_text(file_path: Union[str, Path], encoding: str = "utf-8") -> str:
    """Read a whole file without blocking the event loop. OSError propagates."""
    async with aiofiles.open(file_path, "r", encoding=encoding, errors="replace") as f:
        return await f.read()


async def read_lines(file_path: Union[str, Path], encoding: str = "utf-8") -> List[str]:
    """
    Read a file as a list of lines, split on newlines only.

    Numbering matches LineIndex: form feeds and Unicode line separators
    do not start a new line.
    """
    text = await read_text(file_path, encoding)
    return text.split("\n")


class LineIndex:
    """Maps character offsets of one text to zero-based (line, column)."""

    def __init__(self, text: str):
        self._line_starts = [0]
        for i, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(i + 1)
        self._length = len(text)

    def position_at(self, offset: int) -> Tuple[int, int]:
        offset = max(0, min(offset, self._length))
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return line, offset - self._line_starts[line]

    @property
    def line_count(self) -> int:
        return len(self._line_starts)
