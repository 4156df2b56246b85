"""Keystroke resolution against the registry with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional

from textpad.runtime.telemetry import span

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


@dataclass(slots=True)
class KeymapIndex:
    """Lookup tables built from one registry revision."""

    revision: int
    exact: Dict[str, list[Binding]] = field(default_factory=dict)
    loose: Dict[str, list[Binding]] = field(default_factory=dict)

    def add_binding(self, binding: Binding) -> None:
        self.exact.setdefault(binding.stroke.token, []).append(binding)
        if binding.any_modifiers:
            self.loose.setdefault(binding.stroke.key, []).append(binding)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef
    stroke: KeyStroke


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Maps a keystroke to at most one binding.

    Exact tokens are tried first; bindings flagged ``any_modifiers`` then
    match on the bare key. Ties go to the highest priority, then the lowest
    binding id.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._index: Optional[KeymapIndex] = None

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(self, stroke: KeyStroke) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"token": stroke.token},
        ) as handle:
            index = self._ensure_index()
            candidates = index.exact.get(stroke.token)
            if not candidates and stroke.modifiers:
                candidates = index.loose.get(stroke.key)
            if not candidates:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")

            binding = min(candidates, key=lambda b: (-b.priority, b.id))
            action = self._registry.get_action(binding.action_id)
            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", binding.id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(binding=binding, action=action, stroke=stroke),
            )

    def _ensure_index(self) -> KeymapIndex:
        revision = self._registry.revision()
        if self._index is not None and self._index.revision == revision:
            return self._index

        index = KeymapIndex(revision=revision)
        for binding in self._registry.iter_bindings():
            index.add_binding(binding)
        self._index = index
        return index


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
