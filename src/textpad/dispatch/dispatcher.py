"""Editing state machine that turns key events into buffer operations."""

from __future__ import annotations

from typing import Optional

from textpad.actions import editing as editing_actions
from textpad.keymaps import KeymapResolver, KeyStroke, ResolutionMatch
from textpad.runtime import telemetry

from .base import (
    Cancelled,
    DispatchResult,
    DispatchState,
    EditorContext,
    KeyInput,
    Saved,
    SessionOutcome,
)


def key_to_stroke(key: KeyInput) -> KeyStroke:
    return KeyStroke(key.key, key.modifiers, key.text)


def printable_text(key: KeyInput) -> Optional[str]:
    """Return the character a key types, if it types exactly one."""

    text = key.text
    if text is not None and len(text) == 1 and text.isprintable():
        return text
    return None


class InputDispatcher:
    """Owns the Editing -> Saved/Cancelled state machine.

    Every key resolves to exactly one of: a bound action, a printable
    character insert, or a no-op. Once the session reached Saved or
    Cancelled, further keys leave the buffer alone and repeat that outcome.
    """

    def __init__(self, context: EditorContext, resolver: KeymapResolver) -> None:
        self.context = context
        self.logger = telemetry.get_logger("textpad.dispatch")
        self._resolver = resolver
        self._state = DispatchState.EDITING
        self._outcome: Optional[SessionOutcome] = None

    @property
    def state(self) -> DispatchState:
        return self._state

    @property
    def outcome(self) -> Optional[SessionOutcome]:
        return self._outcome

    def dispatch(self, key: KeyInput) -> DispatchResult:
        if self._outcome is not None:
            return DispatchResult(
                consumed=False,
                status=self._state.value,
                outcome=self._outcome,
                message="session_finished",
            )
        if not key.key:
            return DispatchResult(consumed=False, status="ignored")

        stroke = key_to_stroke(key)
        with telemetry.span(
            name="dispatch::key",
            component=True,
            metadata={"token": stroke.token},
        ) as handle:
            result = self._resolve(key, stroke)
            handle.add_metadata("status", result.status)

        if result.outcome is not None:
            self._finish(result.outcome)
        return result

    def _resolve(self, key: KeyInput, stroke: KeyStroke) -> DispatchResult:
        resolution = self._resolver.resolve(stroke)
        if resolution.status == "match" and resolution.match:
            return self._execute_match(resolution.match)

        char = printable_text(key)
        if char is not None:
            return editing_actions.insert_character(self.context, char)

        return DispatchResult(consumed=False, status="ignored", message=stroke.token)

    def _execute_match(self, match: ResolutionMatch) -> DispatchResult:
        outcome = match.action(self.context, match)
        if isinstance(outcome, DispatchResult):
            return outcome
        return DispatchResult(consumed=True)

    def _finish(self, outcome: SessionOutcome) -> None:
        self._outcome = outcome
        if isinstance(outcome, Saved):
            self._state = DispatchState.SAVED
        elif isinstance(outcome, Cancelled):
            self._state = DispatchState.CANCELLED
        telemetry.record_event(
            "session.finish",
            data={"state": self._state.value, "buffer": self.context.buffer.name},
        )


__all__ = ["InputDispatcher", "key_to_stroke", "printable_text"]
