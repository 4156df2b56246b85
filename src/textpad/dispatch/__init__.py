"""Input dispatch: key events in, buffer mutations or session outcomes out."""

from .base import (
    Cancelled,
    DispatchResult,
    DispatchState,
    EditorContext,
    KeyInput,
    Saved,
    SessionOutcome,
)

__all__ = [
    "KeyInput",
    "Saved",
    "Cancelled",
    "SessionOutcome",
    "DispatchState",
    "DispatchResult",
    "EditorContext",
]
