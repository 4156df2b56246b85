"""Built-in keymap: save, cancel, newline, backspace, and the arrow keys."""

from __future__ import annotations

from typing import Iterable, Sequence

from textpad.actions import editing as editing_actions
from textpad.actions import session as session_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

SAVE_STROKE = KeyStroke("s", ("ctrl",))
CANCEL_STROKE = KeyStroke("ESC")

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="session.save",
        handler=session_actions.save_and_exit,
        description="Save and exit",
    ),
    ActionRef(
        id="session.cancel",
        handler=session_actions.cancel_session,
        description="Discard changes and exit",
    ),
    ActionRef(
        id="edit.newline",
        handler=editing_actions.insert_newline,
        description="Insert a line break",
    ),
    ActionRef(
        id="edit.delete_backward",
        handler=editing_actions.delete_backward,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="cursor.left",
        handler=editing_actions.move_left,
        description="Move cursor left",
    ),
    ActionRef(
        id="cursor.right",
        handler=editing_actions.move_right,
        description="Move cursor right",
    ),
    ActionRef(
        id="cursor.up",
        handler=editing_actions.move_up,
        description="Move cursor up one line",
    ),
    ActionRef(
        id="cursor.down",
        handler=editing_actions.move_down,
        description="Move cursor down one line",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="session.save",
        stroke=SAVE_STROKE,
        action_id="session.save",
        description="Save and exit",
    ),
    Binding(
        id="session.cancel",
        stroke=CANCEL_STROKE,
        action_id="session.cancel",
        description="Cancel",
        any_modifiers=True,
    ),
    Binding(
        id="edit.enter",
        stroke=KeyStroke("ENTER"),
        action_id="edit.newline",
        description="New line",
        any_modifiers=True,
    ),
    Binding(
        id="edit.backspace",
        stroke=KeyStroke("BACKSPACE"),
        action_id="edit.delete_backward",
        description="Backspace",
        any_modifiers=True,
    ),
    Binding(
        id="cursor.left",
        stroke=KeyStroke("LEFT"),
        action_id="cursor.left",
        any_modifiers=True,
    ),
    Binding(
        id="cursor.right",
        stroke=KeyStroke("RIGHT"),
        action_id="cursor.right",
        any_modifiers=True,
    ),
    Binding(
        id="cursor.up",
        stroke=KeyStroke("UP"),
        action_id="cursor.up",
        any_modifiers=True,
    ),
    Binding(
        id="cursor.down",
        stroke=KeyStroke("DOWN"),
        action_id="cursor.down",
        any_modifiers=True,
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and bindings."""

    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = [
    "load_default_keymaps",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "SAVE_STROKE",
    "CANCEL_STROKE",
]
