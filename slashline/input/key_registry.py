"""Reusable key-combo registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .keys import KeyEvent


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more combo tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Small dispatch table keyed by ``KeyEvent.combo`` tokens."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, event: KeyEvent) -> bool | None:
        """Invoke the handler bound to ``event`` and return its result.

        ``None`` means no binding matched, so callers can fall through to
        text handling.
        """
        combo = event.combo
        if combo is None:
            return None
        handler = self._handlers.get(combo)
        if handler is None:
            return None
        return handler()
