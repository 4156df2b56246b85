"""Textual adapter: key normalization plus a Display/KeySource for the loop."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from rich.text import Text

from textpad.dispatch import KeyInput
from textpad.session import Frame

TEXT_STYLE = "yellow"
CURSOR_STYLE = "reverse"

# Textual key names -> keymap names.
_KEY_NAMES: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
}

# Left to Textual so the app can always be quit.
RESERVED_KEYS = frozenset({"ctrl+c", "ctrl+q"})


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def normalize_key(
    key: str, character: Optional[str] = None, *, printable: bool = False
) -> Optional[KeyInput]:
    """Translate a Textual key event into a ``KeyInput``.

    Returns ``None`` for keys the host keeps for itself.
    """

    if key in RESERVED_KEYS:
        return None
    head, _, name = key.rpartition("+")
    if not name:  # "ctrl++" style names end with the separator
        head, name = key[:-2], "+"
    modifiers = tuple(part for part in head.split("+") if part)
    text = character if printable and character else None

    mapped = _KEY_NAMES.get(name)
    if mapped is not None:
        return KeyInput(key=mapped, modifiers=modifiers)
    if len(name) == 1:
        return KeyInput(key=name, modifiers=modifiers, text=text)
    if text is not None:
        return KeyInput(key=text, modifiers=modifiers, text=text)
    return KeyInput(key=name.upper(), modifiers=modifiers)


def render_frame(frame: Frame) -> Text:
    """Return the buffer text with the cursor cell drawn in reverse video."""

    head = frame.text[: frame.offset]
    tail = frame.text[frame.offset :]
    if tail and tail[0] != "\n":
        cursor_cell, tail = tail[0], tail[1:]
    else:
        cursor_cell = " "
    rendered = Text(style=TEXT_STYLE, no_wrap=True)
    rendered.append(head)
    rendered.append(cursor_cell, style=CURSOR_STYLE)
    rendered.append(tail)
    return rendered


def status_line(frame: Frame, *, label: str = "") -> str:
    row, col = frame.location
    parts = [label] if label else []
    parts.append(f"Ln {row + 1}, Col {col + 1}")
    if frame.dirty:
        parts.append("[+]")
    parts.append("^S save  Esc cancel")
    return "  ".join(parts)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Feeds Textual key events to an ``EditorLoop`` and draws its frames.

    Keys are queued by the app's ``on_key`` handler and consumed by the loop
    coroutine on the same event loop, so no threads are involved.
    """

    def __init__(
        self,
        hooks: TextualUIHooks,
        *,
        label: str = "",
        max_pending: int = 1024,
    ) -> None:
        self.hooks = hooks
        self.label = label
        self._queue: asyncio.Queue[KeyInput] = asyncio.Queue(maxsize=max_pending)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Queue a key for the loop; returns ``False`` if the queue is full."""

        event = KeyInput(key=key, text=text, modifiers=tuple(modifiers))
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self._log_state("key dropped", key=key)
            return False
        self._log_state("key ->", key=key, text=text, mods=event.modifiers)
        return True

    async def poll(self, timeout: float) -> Optional[KeyInput]:
        try:
            return await asyncio.wait_for(self._queue.get(), timeout)
        except asyncio.TimeoutError:
            return None

    def draw(self, frame: Frame) -> None:
        self.hooks.update_buffer(frame)
        self.hooks.update_status(status_line(frame, label=self.label))
        self._log_state(
            "frame <-",
            version=frame.version,
            cursor=tuple(frame.location),
            dirty=frame.dirty,
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        parts = [prefix]
        for key, value in fields.items():
            if value is not None:
                parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = [
    "TextualEditorAdapter",
    "TextualUIHooks",
    "normalize_key",
    "render_frame",
    "status_line",
]
