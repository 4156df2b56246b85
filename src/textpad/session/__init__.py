"""Render loop and file storage for editing sessions."""

from .loop import (
    Display,
    EditorLoop,
    EditorSession,
    Frame,
    KeySource,
    build_frame,
    create_session,
)
from .storage import load_or_create, save

__all__ = [
    "Display",
    "EditorLoop",
    "EditorSession",
    "Frame",
    "KeySource",
    "build_frame",
    "create_session",
    "load_or_create",
    "save",
]
