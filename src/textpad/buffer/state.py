"""Cursor location and change tracking state for edit buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class CursorLocation(NamedTuple):
    """Derived ``(row, col)`` of a cursor offset; never stored on the buffer."""

    row: int
    col: int


@dataclass(slots=True)
class BufferState:
    """Mutable cursor offset plus version info for an EditBuffer."""

    offset: int = 0
    version: int = 0
    dirty: bool = False

    def set_offset(self, offset: int) -> None:
        self.offset = offset

    def touch(self) -> None:
        self.version += 1
        self.dirty = True
