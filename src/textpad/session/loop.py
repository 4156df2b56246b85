"""Draw / poll / dispatch loop for one editing session.

The loop is a single coroutine: it draws a frame, waits at most one poll
interval for a key, dispatches it, and repeats until the dispatcher reaches
Saved or Cancelled. Keys are only applied between draws, so a display never
sees a half-applied edit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from textpad.buffer import CursorLocation, EditBuffer
from textpad.config import EditorConfig
from textpad.dispatch import EditorContext, KeyInput, SessionOutcome
from textpad.dispatch.dispatcher import InputDispatcher
from textpad.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from textpad.runtime import telemetry


@dataclass(frozen=True, slots=True)
class Frame:
    """Everything a display needs to paint one screen."""

    text: str
    offset: int
    location: CursorLocation
    title: str
    dirty: bool
    version: int


class Display(Protocol):
    def draw(self, frame: Frame) -> None:
        ...


class KeySource(Protocol):
    async def poll(self, timeout: float) -> Optional[KeyInput]:
        """Return the next key, or ``None`` if none arrived within ``timeout``."""
        ...


@dataclass(slots=True)
class EditorSession:
    buffer: EditBuffer
    dispatcher: InputDispatcher


def create_session(
    text: str,
    *,
    name: str = "default",
    offset: int = 0,
    registry: KeymapRegistry | None = None,
) -> EditorSession:
    """Build a buffer plus a dispatcher wired to the default keymap."""

    if registry is None:
        registry = KeymapRegistry(logger_name="textpad.keymaps")
        load_default_keymaps(registry)
    resolver = KeymapResolver(registry, logger_name="textpad.keymaps")
    buffer = EditBuffer.from_text(text, offset=offset, name=name)
    context = EditorContext(buffer=buffer, extras={"keymap_registry": registry})
    return EditorSession(buffer=buffer, dispatcher=InputDispatcher(context, resolver))


def build_frame(buffer: EditBuffer, config: EditorConfig) -> Frame:
    view = buffer.snapshot()
    return Frame(
        text=view.text,
        offset=view.offset,
        location=view.location,
        title=config.title,
        dirty=view.dirty,
        version=view.version,
    )


class EditorLoop:
    """Runs a session against a display and a key source."""

    def __init__(
        self,
        session: EditorSession,
        display: Display,
        keys: KeySource,
        *,
        config: EditorConfig | None = None,
    ) -> None:
        self.session = session
        self.display = display
        self.keys = keys
        self.config = config or EditorConfig()
        self.frames = 0

    async def run(self) -> SessionOutcome:
        buffer = self.session.buffer
        dispatcher = self.session.dispatcher
        telemetry.record_event(
            "session.start",
            data={"buffer": buffer.name, "chars": len(buffer)},
        )
        while True:
            self.display.draw(build_frame(buffer, self.config))
            self.frames += 1

            key = await self.keys.poll(self.config.poll_interval)
            if key is None:
                continue

            result = dispatcher.dispatch(key)
            if result.outcome is not None:
                telemetry.record_event(
                    "session.end",
                    data={
                        "state": dispatcher.state.value,
                        "frames": self.frames,
                        "dirty": buffer.state.dirty,
                    },
                )
                return result.outcome


__all__ = [
    "Frame",
    "Display",
    "KeySource",
    "EditorSession",
    "EditorLoop",
    "build_frame",
    "create_session",
]
