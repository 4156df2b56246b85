"""Executable Textual app that hosts an editing session."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the editor is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use textpad.adapters.textual.app"
    ) from exc

from textpad.config import DEFAULT_POLL_INTERVAL_MS, DEFAULT_TITLE, EditorConfig
from textpad.dispatch import Cancelled, Saved, SessionOutcome
from textpad.errors import TerminalError, TextpadError
from textpad.runtime import telemetry
from textpad.session import EditorLoop, EditorSession, Frame, create_session
from textpad.session.storage import load_or_create, save

from .controller import (
    TextualEditorAdapter,
    TextualUIHooks,
    normalize_key,
    render_frame,
)


class TextpadApp(App[SessionOutcome]):
    """Bordered single-buffer editor; ``run()`` returns Saved or Cancelled."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $primary;
		border-title-align: left;
		content-align: left top;
		overflow: hidden;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        text: str = "",
        *,
        buffer_name: str = "default",
        config: EditorConfig | None = None,
    ) -> None:
        super().__init__()
        self.config = config or EditorConfig()
        self.session: EditorSession = create_session(text, name=buffer_name)
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._telemetry_logger = telemetry.get_logger("textpad.textual")

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._buffer_widget.border_title = self.config.title
        self._status_widget = Static("", id="status-line")
        yield self._buffer_widget
        yield self._status_widget

    async def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(hooks, label=self.session.buffer.name)
        self.run_worker(self._drive(), name="editor-loop", exclusive=True)

    async def _drive(self) -> None:
        assert self.adapter is not None
        loop = EditorLoop(self.session, self.adapter, self.adapter, config=self.config)
        outcome = await loop.run()
        self.exit(outcome)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = normalize_key(
            event.key, event.character, printable=event.is_printable
        )
        if normalized is None:
            return
        self.adapter.handle_textual_key(
            normalized.key, text=normalized.text, modifiers=normalized.modifiers
        )
        event.stop()

    def _update_buffer(self, frame: Frame) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_frame(frame))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self._telemetry_logger.debug(line)


def run_app(app: TextpadApp) -> SessionOutcome:
    """Run the app; Textual restores the terminal on every exit path."""

    try:
        outcome = app.run()
    except OSError as exc:
        # An outcome already exists only if the failure hit while restoring.
        phase = "setup" if app.session.dispatcher.outcome is None else "teardown"
        raise TerminalError(f"terminal failure: {exc}", phase=phase) from exc
    if app.return_code:
        raise TerminalError(
            "editor session aborted", phase="session", code=app.return_code
        )
    # Quitting through Textual (ctrl+q) ends the session without an outcome.
    return outcome if outcome is not None else Cancelled()


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="textpad",
        description="Edit a text file in the terminal. Ctrl+S saves, Esc cancels.",
    )
    parser.add_argument("path", help="File to edit (created if missing)")
    parser.add_argument(
        "--poll-interval",
        type=_positive_int,
        default=DEFAULT_POLL_INTERVAL_MS,
        help=f"Input poll interval in ms (default: {DEFAULT_POLL_INTERVAL_MS})",
    )
    parser.add_argument(
        "--title",
        default=DEFAULT_TITLE,
        help=f"Border title (default: {DEFAULT_TITLE!r})",
    )
    parser.add_argument("--log-file", default=None, help="Write telemetry to FILE")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=telemetry.LEVELS,
        type=str.lower,
        help="Minimum telemetry level",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_file or args.log_level:
        telemetry.configure_from_options(log_file=args.log_file, level=args.log_level)
    config = EditorConfig(poll_interval_ms=args.poll_interval, title=args.title)

    try:
        text = load_or_create(args.path)
        app = TextpadApp(
            text, buffer_name=os.path.basename(args.path), config=config
        )
        outcome = run_app(app)
        if isinstance(outcome, Saved):
            save(args.path, outcome.text)
    except TextpadError as exc:
        telemetry.record_event(
            "textpad.fatal",
            level="error",
            data={"error": type(exc).__name__, "message": str(exc)},
        )
        print(f"textpad: {exc}", file=sys.stderr)
        return 1

    telemetry.record_event(
        "textpad.exit", data={"outcome": type(outcome).__name__, "path": args.path}
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    raise SystemExit(main())
