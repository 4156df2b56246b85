"""Buffer editing and cursor movement actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textpad.buffer.lines import LINE_BREAK
from textpad.dispatch.base import DispatchResult, EditorContext

if TYPE_CHECKING:  # keymaps.defaults imports this module
    from textpad.keymaps import ResolutionMatch


def move_left(context: EditorContext, match: ResolutionMatch) -> DispatchResult:
    del match
    context.buffer.move_left()
    return DispatchResult(consumed=True, status="move")


def move_right(context: EditorContext, match: ResolutionMatch) -> DispatchResult:
    del match
    context.buffer.move_right()
    return DispatchResult(consumed=True, status="move")


def move_up(context: EditorContext, match: ResolutionMatch) -> DispatchResult:
    del match
    context.buffer.move_up()
    return DispatchResult(consumed=True, status="move")


def move_down(context: EditorContext, match: ResolutionMatch) -> DispatchResult:
    del match
    context.buffer.move_down()
    return DispatchResult(consumed=True, status="move")


def insert_newline(context: EditorContext, match: ResolutionMatch) -> DispatchResult:
    del match
    context.buffer.insert_char(LINE_BREAK)
    return DispatchResult(consumed=True, status="insert")


def delete_backward(context: EditorContext, match: ResolutionMatch) -> DispatchResult:
    del match
    if context.buffer.cursor_offset == 0:
        return DispatchResult(consumed=True, status="noop", message="start_of_buffer")
    context.buffer.delete_char()
    return DispatchResult(consumed=True, status="delete")


def insert_character(context: EditorContext, char: str) -> DispatchResult:
    """Fallback for printable keys that no binding claimed."""

    context.buffer.insert_char(char)
    return DispatchResult(consumed=True, status="insert")


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "insert_newline",
    "delete_backward",
    "insert_character",
]
