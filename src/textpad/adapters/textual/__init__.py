"""Textual host for the editor."""

from .controller import (
    TextualEditorAdapter,
    TextualUIHooks,
    normalize_key,
    render_frame,
    status_line,
)

__all__ = [
    "TextualEditorAdapter",
    "TextualUIHooks",
    "normalize_key",
    "render_frame",
    "status_line",
]
