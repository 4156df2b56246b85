"""Editing and session verbs that key bindings point to."""

from .editing import (
    delete_backward,
    insert_character,
    insert_newline,
    move_down,
    move_left,
    move_right,
    move_up,
)
from .session import cancel_session, save_and_exit

__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "insert_newline",
    "insert_character",
    "delete_backward",
    "save_and_exit",
    "cancel_session",
]
