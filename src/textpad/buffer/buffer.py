"""Edit buffer: one flat string plus a single cursor offset."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from textpad.runtime import telemetry

from . import lines as _lines
from .state import BufferState, CursorLocation
from .validation import ensure_char, ensure_offset


@dataclass(frozen=True, slots=True)
class BufferView:
    version: int
    text: str
    offset: int
    location: CursorLocation
    dirty: bool


class EditBuffer:
    """Owns the text of one editing session and the cursor inside it.

    Row and column are never stored; ``locate_cursor`` recomputes them from
    the text on every call. All movement goes through ``clamp`` so the cursor
    stays within ``[0, len(text)]`` no matter how often a key repeats.
    """

    def __init__(
        self,
        text: str = "",
        *,
        offset: int = 0,
        name: str = "default",
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self._text = text
        self.state = state or BufferState()
        self.state.set_offset(ensure_offset(text, offset))

    @classmethod
    def from_text(
        cls, text: str, *, offset: int = 0, name: str = "default"
    ) -> "EditBuffer":
        return cls(text, offset=offset, name=name)

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor_offset(self) -> int:
        return self.state.offset

    @property
    def line_count(self) -> int:
        return len(_lines.split_lines(self._text))

    def lines(self) -> tuple[str, ...]:
        return tuple(_lines.split_lines(self._text))

    def __len__(self) -> int:
        return len(self._text)

    def clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self._text)))

    def set_cursor(self, offset: int) -> None:
        self.state.set_offset(ensure_offset(self._text, offset))

    def locate_cursor(self) -> CursorLocation:
        return _lines.locate(self._text, self.state.offset)

    def move_left(self) -> None:
        self.state.set_offset(self.clamp(self.state.offset - 1))

    def move_right(self) -> None:
        self.state.set_offset(self.clamp(self.state.offset + 1))

    def move_up(self) -> None:
        row, col = self.locate_cursor()
        if row == 0:
            return
        self._move_to_row(row - 1, col)

    def move_down(self) -> None:
        row, col = self.locate_cursor()
        if row >= self.line_count - 1:
            return
        self._move_to_row(row + 1, col)

    def _move_to_row(self, row: int, col: int) -> None:
        target = _lines.split_lines(self._text)[row]
        start = _lines.line_start(self._text, row)
        self.state.set_offset(self.clamp(start + min(col, len(target))))

    def insert_char(self, char: str) -> None:
        ensure_char(char)
        with Transaction(self, "insert_char") as tx:
            offset = self.state.offset
            self._text = self._text[:offset] + char + self._text[offset:]
            self.state.set_offset(self.clamp(offset + len(char)))
            tx.commit()

    def delete_char(self) -> None:
        offset = self.state.offset
        if offset == 0:
            return
        with Transaction(self, "delete_char") as tx:
            self._text = self._text[: offset - 1] + self._text[offset:]
            self.move_left()
            tx.commit()

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.state.version,
            text=self._text,
            offset=self.state.offset,
            location=self.locate_cursor(),
            dirty=self.state.dirty,
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one text mutation in a telemetry span and bumps the version."""

    def __init__(self, buffer: EditBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._before_offset: int | None = None

    def __enter__(self) -> "Transaction":
        self._before_offset = self.buffer.cursor_offset
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def commit(self) -> None:
        self.buffer.state.touch()
        if self._handle is not None:
            self._handle.add_metadata("offset_before", self._before_offset)
            self._handle.add_metadata("offset_after", self.buffer.cursor_offset)
            self._handle.add_metadata("version", self.buffer.state.version)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
