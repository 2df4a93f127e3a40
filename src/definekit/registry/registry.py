"""Name-to-declaration store with case-insensitive uniqueness."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterator, Sequence

from definekit.errors import DuplicateDefinitionError, InvalidCallError
from definekit.registry.types import ModuleDeclaration

logger = logging.getLogger(__name__)

__all__ = ["ModuleRegistry", "REGISTRY_EVENTS"]

REGISTRY_EVENTS: dict[str, str] = {
    "REGISTER": "register",
    "UNREGISTER": "unregister",
}


class ModuleRegistry:
    """Owns every ModuleDeclaration, keyed by lowercased name."""

    def __init__(self) -> None:
        self._declarations: dict[str, ModuleDeclaration] = {}
        self._callbacks: dict[str, list[Callable[..., Any]]] = {
            REGISTRY_EVENTS["REGISTER"]: [],
            REGISTRY_EVENTS["UNREGISTER"]: [],
        }
        self._write_lock = threading.RLock()

    def register(
        self,
        name: str,
        dependencies: Sequence[str] = (),
        factory: Any = None,
    ) -> ModuleDeclaration:
        """Store a fresh declaration under the lowercased ``name``.

        A factory of None declares an async placeholder, whose real
        definition may replace it later.

        Raises:
            InvalidCallError: If name is empty.
            DuplicateDefinitionError: If the name already holds a declaration with a factory.
        """
        if not name:
            raise InvalidCallError(message="Module name must be a non-empty string")

        key = name.lower()
        declaration = ModuleDeclaration(name=key, dependencies=list(dependencies), factory=factory)
        with self._write_lock:
            existing = self._declarations.get(key)
            if existing is not None and existing.factory is not None:
                raise DuplicateDefinitionError(name=key)
            self._declarations[key] = declaration

        logger.debug("Registered module '%s' with dependencies %s", key, declaration.dependencies)
        self._trigger_event(REGISTRY_EVENTS["REGISTER"], key, declaration)
        return declaration

    def unregister(self, name: str) -> bool:
        """Delete the declaration under ``name``, permitting redeclaration.

        Returns False if nothing was registered under that name.
        """
        key = name.lower()
        with self._write_lock:
            declaration = self._declarations.pop(key, None)
        if declaration is None:
            return False

        logger.debug("Unregistered module '%s'", key)
        self._trigger_event(REGISTRY_EVENTS["UNREGISTER"], key, declaration)
        return True

    def lookup(self, name: str) -> ModuleDeclaration | None:
        """Case-insensitive lookup. Returns None if not found."""
        with self._write_lock:
            return self._declarations.get(name.lower())

    def has(self, name: str) -> bool:
        with self._write_lock:
            return name.lower() in self._declarations

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __len__(self) -> int:
        return self.count

    def iter(self) -> Iterator[tuple[str, ModuleDeclaration]]:
        """Return an iterator of (name, declaration) tuples (snapshot-based)."""
        with self._write_lock:
            items = list(self._declarations.items())
        return iter(items)

    @property
    def count(self) -> int:
        with self._write_lock:
            return len(self._declarations)

    @property
    def names(self) -> list[str]:
        """Sorted list of registered names."""
        with self._write_lock:
            return sorted(self._declarations)

    # ----- Event System -----

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        """Register ``callback(name, declaration)`` for 'register' or 'unregister'.

        Raises:
            InvalidCallError: If event name is invalid.
        """
        with self._write_lock:
            if event not in self._callbacks:
                raise InvalidCallError(message=f"Invalid event: {event}. Must be 'register' or 'unregister'")
            self._callbacks[event].append(callback)

    def _trigger_event(self, event: str, name: str, declaration: ModuleDeclaration) -> None:
        """Run callbacks for an event. Callback errors are logged and do not abort registration."""
        with self._write_lock:
            callbacks = list(self._callbacks[event])
        for cb in callbacks:
            try:
                cb(name, declaration)
            except Exception as e:
                logger.warning("Callback error for event '%s' on module '%s': %s", event, name, e)
