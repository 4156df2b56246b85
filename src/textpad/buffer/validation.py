"""Cursor and character checks used by ``EditBuffer``."""

from __future__ import annotations


class BufferValidationError(RuntimeError):
    """Raised when a caller places the cursor outside the text."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


def ensure_offset(text: str, offset: int) -> int:
    if offset < 0 or offset > len(text):
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_char(value: str) -> str:
    if len(value) != 1:
        raise ValueError(f"expected a single character, got {value!r}")
    return value
