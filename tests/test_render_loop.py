from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional

import pytest

from textpad.config import EditorConfig
from textpad.dispatch import Cancelled, KeyInput, Saved
from textpad.session import EditorLoop, Frame, build_frame, create_session


class RecordingDisplay:
    def __init__(self) -> None:
        self.frames: List[Frame] = []

    def draw(self, frame: Frame) -> None:
        self.frames.append(frame)


class ScriptedKeys:
    """Replays keys; ``None`` entries simulate a poll timeout."""

    def __init__(self, keys: Iterable[Optional[KeyInput]]) -> None:
        self._keys = list(keys)
        self.timeouts: List[float] = []

    async def poll(self, timeout: float) -> Optional[KeyInput]:
        self.timeouts.append(timeout)
        if not self._keys:
            raise AssertionError("key script exhausted before the session finished")
        return self._keys.pop(0)


def char(value: str) -> KeyInput:
    return KeyInput(key=value, text=value)


def make_loop(text: str, keys: Iterable[Optional[KeyInput]], **config):
    session = create_session(text, name="loop")
    display = RecordingDisplay()
    source = ScriptedKeys(keys)
    loop = EditorLoop(session, display, source, config=EditorConfig(**config))
    return loop, display, source


def test_loop_edits_and_saves() -> None:
    loop, display, _ = make_loop(
        "hello",
        [KeyInput("RIGHT"), KeyInput("RIGHT"), char("X"), KeyInput("s", ("ctrl",))],
    )

    outcome = asyncio.run(loop.run())

    assert outcome == Saved("heXllo")
    assert [frame.offset for frame in display.frames] == [0, 1, 2, 3]
    assert display.frames[-1].text == "heXllo"


def test_loop_cancel_returns_cancelled() -> None:
    loop, display, _ = make_loop(
        "", [char("a"), KeyInput("ENTER"), char("b"), KeyInput("ESC")]
    )

    outcome = asyncio.run(loop.run())

    assert outcome == Cancelled()
    assert display.frames[-1].text == "a\nb"
    assert display.frames[-1].location == (1, 1)


def test_loop_redraws_on_poll_timeout() -> None:
    loop, display, source = make_loop(
        "abc", [None, None, KeyInput("ESC")], poll_interval_ms=50
    )

    asyncio.run(loop.run())

    assert loop.frames == 3
    assert len(display.frames) == 3
    assert source.timeouts == [0.05, 0.05, 0.05]


def test_loop_draws_before_first_poll() -> None:
    loop, display, _ = make_loop("x", [KeyInput("ESC")], title="Notes")

    asyncio.run(loop.run())

    (frame,) = display.frames
    assert frame.title == "Notes"
    assert frame.version == 0
    assert frame.dirty is False


def test_frame_tracks_dirty_and_version() -> None:
    session = create_session("ab", offset=2)
    session.buffer.insert_char("c")

    frame = build_frame(session.buffer, EditorConfig())

    assert frame.dirty is True
    assert frame.version == 1
    assert frame.title == "Text Editor"


def test_config_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        EditorConfig(poll_interval_ms=0)
