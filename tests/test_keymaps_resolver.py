from __future__ import annotations

from textpad.keymaps import (
    ActionRef,
    Binding,
    KeyStroke,
    KeymapRegistry,
    KeymapResolver,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    key: str = "LEFT",
    modifiers: tuple[str, ...] = (),
    action_id: str = "cursor.test",
    any_modifiers: bool = False,
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        stroke=KeyStroke(key, modifiers),
        action_id=action_id,
        any_modifiers=any_modifiers,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_token() -> None:
    binding = make_binding("cursor.left")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve(KeyStroke("LEFT"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "cursor.test"


def test_resolver_misses_unbound_key() -> None:
    resolver = KeymapResolver(build_registry([make_binding("cursor.left")]))

    result = resolver.resolve(KeyStroke("TAB"))

    assert result.status == "miss"
    assert result.match is None


def test_exact_binding_ignores_extra_modifiers() -> None:
    save = make_binding("save", key="s", modifiers=("ctrl",), action_id="session.save")
    resolver = KeymapResolver(build_registry([save]))

    assert resolver.resolve(KeyStroke("s")).status == "miss"
    assert resolver.resolve(KeyStroke("s", ("ctrl",))).status == "match"
    assert resolver.resolve(KeyStroke("s", ("ctrl", "alt"))).status == "miss"


def test_loose_binding_matches_with_modifiers() -> None:
    binding = make_binding("cursor.left", any_modifiers=True)
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve(KeyStroke("LEFT", ("shift",)))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.stroke.modifiers == ("shift",)


def test_exact_binding_beats_loose_binding() -> None:
    loose = make_binding("cursor.left", any_modifiers=True, action_id="cursor.left")
    exact = make_binding(
        "cursor.word_left", modifiers=("ctrl",), action_id="cursor.word_left"
    )
    resolver = KeymapResolver(build_registry([loose, exact]))

    result = resolver.resolve(KeyStroke("LEFT", ("ctrl",)))

    assert result.match is not None
    assert result.match.binding.id == "cursor.word_left"


def test_priority_breaks_ties_between_loose_bindings() -> None:
    low = make_binding("a.low", any_modifiers=True, action_id="a")
    high = make_binding(
        "b.high", modifiers=("alt",), any_modifiers=True, action_id="b", priority=5
    )
    resolver = KeymapResolver(build_registry([low, high]))

    result = resolver.resolve(KeyStroke("LEFT", ("shift",)))

    assert result.match is not None
    assert result.match.binding.id == "b.high"


def test_resolver_index_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve(KeyStroke("x"))
    assert miss.status == "miss"

    new_binding = make_binding("edit.x", key="x", action_id="edit.x")
    registry.register_action(make_action("edit.x"))
    registry.register_binding(new_binding)

    match = resolver.resolve(KeyStroke("x"))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id
