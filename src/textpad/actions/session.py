"""Actions that end the editing session."""

from __future__ import annotations

from textpad.dispatch.base import Cancelled, DispatchResult, EditorContext, Saved


def save_and_exit(context: EditorContext, match) -> DispatchResult:
    del match
    return DispatchResult(
        consumed=True,
        status="saved",
        outcome=Saved(context.buffer.text),
    )


def cancel_session(context: EditorContext, match) -> DispatchResult:
    del context, match
    return DispatchResult(consumed=True, status="cancelled", outcome=Cancelled())


__all__ = ["save_and_exit", "cancel_session"]
