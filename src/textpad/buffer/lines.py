"""Pure line-indexing helpers over flat text.

Offsets are code point indices into a ``str``. Line breaks are ``"\\n"``;
any other character, ``"\\r"`` included, is ordinary text.
"""

from __future__ import annotations

from typing import List

from .state import CursorLocation

LINE_BREAK = "\n"


def split_lines(text: str) -> List[str]:
    """Return the lines of ``text``; never empty.

    A trailing line break opens a final empty line, so ``"ab\\n"`` has two
    lines and the position after the break is addressable.
    """

    return text.split(LINE_BREAK)


def line_start(text: str, row: int) -> int:
    lines = split_lines(text)
    return sum(len(line) + 1 for line in lines[:row])


def locate(text: str, offset: int) -> CursorLocation:
    prefix = text[:offset]
    row = prefix.count(LINE_BREAK)
    col = len(prefix) - (prefix.rfind(LINE_BREAK) + 1)
    return CursorLocation(row, col)


__all__ = ["LINE_BREAK", "split_lines", "line_start", "locate"]
