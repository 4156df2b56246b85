from __future__ import annotations

import asyncio
from typing import List

import textual

from textpad.adapters.textual import (
    TextualEditorAdapter,
    TextualUIHooks,
    normalize_key,
    render_frame,
    status_line,
)
from textpad.adapters.textual.app import TextpadApp
from textpad.buffer import locate
from textpad.config import EditorConfig
from textpad.dispatch import Cancelled, KeyInput, Saved
from textpad.session import Frame


def make_frame(text: str = "ab\ncd", offset: int = 0, *, dirty: bool = False) -> Frame:
    return Frame(
        text=text,
        offset=offset,
        location=locate(text, offset),
        title="Text Editor",
        dirty=dirty,
        version=0,
    )


def make_adapter(**hook_overrides) -> tuple[TextualEditorAdapter, List[Frame]]:
    frames: List[Frame] = []
    hooks = TextualUIHooks(update_buffer=frames.append, **hook_overrides)
    return TextualEditorAdapter(hooks, label="notes.txt", max_pending=2), frames


def test_normalize_key_names() -> None:
    assert normalize_key("escape") == KeyInput("ESC")
    assert normalize_key("enter") == KeyInput("ENTER")
    assert normalize_key("backspace") == KeyInput("BACKSPACE")
    assert normalize_key("shift+left") == KeyInput("LEFT", ("shift",))
    assert normalize_key("ctrl+s", "\x13") == KeyInput("s", ("ctrl",))


def test_normalize_key_printable_characters() -> None:
    assert normalize_key("a", "a", printable=True) == KeyInput("a", text="a")
    assert normalize_key("exclamation_mark", "!", printable=True) == KeyInput(
        "!", text="!"
    )
    assert normalize_key("ctrl++") == KeyInput("+", ("ctrl",))
    assert normalize_key("f5") == KeyInput("F5")


def test_normalize_key_leaves_quit_keys_to_host() -> None:
    assert normalize_key("ctrl+q") is None
    assert normalize_key("ctrl+c") is None


def test_render_frame_highlights_cursor_cell() -> None:
    rendered = render_frame(make_frame("abc", 1))

    assert rendered.plain == "abc"
    cursor_spans = [span for span in rendered.spans if span.style == "reverse"]
    assert [(span.start, span.end) for span in cursor_spans] == [(1, 2)]


def test_render_frame_pads_cursor_at_line_end() -> None:
    assert render_frame(make_frame("ab\ncd", 2)).plain == "ab \ncd"
    assert render_frame(make_frame("ab", 2)).plain == "ab "


def test_status_line_reports_position_and_dirty_flag() -> None:
    status = status_line(make_frame("ab\ncd", 4, dirty=True), label="notes.txt")

    assert status.startswith("notes.txt  Ln 2, Col 2  [+]")
    assert "^S save" in status


def test_adapter_draw_updates_buffer_and_status() -> None:
    statuses: List[str] = []
    logs: List[str] = []
    adapter, frames = make_adapter(update_status=statuses.append, log=logs.append)
    frame = make_frame()

    adapter.draw(frame)

    assert frames == [frame]
    assert statuses[-1].startswith("notes.txt  Ln 1, Col 1")
    assert any(line.startswith("frame <-") for line in logs)


def test_adapter_queues_keys_for_poll() -> None:
    logs: List[str] = []
    adapter, _ = make_adapter(log=logs.append)

    async def scenario():
        assert adapter.handle_textual_key("a", text="a")
        assert adapter.handle_textual_key("ENTER")
        assert not adapter.handle_textual_key("b", text="b")
        first = await adapter.poll(0.01)
        second = await adapter.poll(0.01)
        third = await adapter.poll(0.01)
        return first, second, third

    first, second, third = asyncio.run(scenario())

    assert first == KeyInput("a", text="a")
    assert second == KeyInput("ENTER")
    assert third is None
    assert any(line.startswith("key dropped") for line in logs)


def test_app_edits_and_saves() -> None:
    async def scenario() -> TextpadApp:
        app = TextpadApp("hello", config=EditorConfig(poll_interval_ms=20))
        async with app.run_test() as pilot:
            await pilot.press("right", "right", "x", "ctrl+s")
            await pilot.pause()
        return app

    app = asyncio.run(scenario())

    assert app.return_value == Saved("hexllo")


def test_app_escape_cancels() -> None:
    async def scenario() -> TextpadApp:
        app = TextpadApp("hello", config=EditorConfig(poll_interval_ms=20))
        async with app.run_test() as pilot:
            await pilot.press("x", "escape")
            await pilot.pause()
        return app

    app = asyncio.run(scenario())

    assert app.return_value == Cancelled()
    assert app.session.buffer.text == "xhello"


def test_app_keeps_textual_logger() -> None:
    app = TextpadApp("hello")

    assert isinstance(app.log, textual.Logger)


def test_app_ctrl_p_is_ignored() -> None:
    async def scenario() -> TextpadApp:
        app = TextpadApp("hello", config=EditorConfig(poll_interval_ms=20))
        async with app.run_test() as pilot:
            await pilot.press("ctrl+p", "z", "escape")
            await pilot.pause()
        return app

    app = asyncio.run(scenario())

    assert app.return_value == Cancelled()
    assert app.session.buffer.text == "zhello"
