"""Edit buffer and cursor model."""

from .buffer import BufferView, EditBuffer, Transaction
from .lines import locate, split_lines
from .state import BufferState, CursorLocation
from .validation import BufferValidationError, ensure_offset

__all__ = [
    "BufferState",
    "BufferView",
    "BufferValidationError",
    "CursorLocation",
    "EditBuffer",
    "Transaction",
    "ensure_offset",
    "locate",
    "split_lines",
]
