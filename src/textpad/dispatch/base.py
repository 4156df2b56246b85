"""Key input, dispatch results, and the session outcomes they can carry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from textpad.buffer import EditBuffer


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed to the dispatcher by a host."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Saved:
    """Terminal outcome carrying the final buffer text to persist."""

    text: str


@dataclass(frozen=True, slots=True)
class Cancelled:
    """Terminal outcome: the caller must not touch storage."""


SessionOutcome = Union[Saved, Cancelled]


class DispatchState(str, Enum):
    EDITING = "editing"
    SAVED = "saved"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class DispatchResult:
    """Result of handling one key event."""

    consumed: bool
    status: str = "ok"
    outcome: Optional[SessionOutcome] = None
    message: Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.outcome is not None


@dataclass(slots=True)
class EditorContext:
    """Services every action can reach."""

    buffer: EditBuffer
    extras: Dict[str, object] = field(default_factory=dict)


__all__ = [
    "KeyInput",
    "Saved",
    "Cancelled",
    "SessionOutcome",
    "DispatchState",
    "DispatchResult",
    "EditorContext",
]
