"""Registry types: ModuleDeclaration and its lifecycle states."""

from __future__ import annotations

import asyncio
import enum
from dataclasses import dataclass, field
from typing import Any

__all__ = ["DeclarationState", "ModuleDeclaration", "UNRESOLVED"]


class _Unresolved:
    """Marker for a declaration whose instance has not been computed."""

    _instance: _Unresolved | None = None

    def __new__(cls) -> _Unresolved:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNRESOLVED"

    def __bool__(self) -> bool:
        return False


UNRESOLVED: Any = _Unresolved()


class DeclarationState(enum.Enum):
    """Instantiation lifecycle of a declaration."""

    NOT_STARTED = "not_started"
    PENDING = "pending"
    INSTANTIATED = "instantiated"


@dataclass(eq=False)
class ModuleDeclaration:
    """A named unit of code and the single cell holding its instance.

    Attributes:
        name: Lowercased registry key, or None for anonymous modules.
        dependencies: Ordered dependency tokens (module names or resource paths).
        factory: A value used as-is, a callable receiving the resolved
            dependency instances positionally, or None for an async placeholder.
        instance: The computed value, or ``UNRESOLVED``.
    """

    name: str | None
    dependencies: list[str] = field(default_factory=list)
    factory: Any = None
    instance: Any = UNRESOLVED
    pending: asyncio.Future[Any] | None = field(default=None, repr=False)

    @property
    def state(self) -> DeclarationState:
        if self.instance is not UNRESOLVED:
            return DeclarationState.INSTANTIATED
        if self.pending is not None:
            return DeclarationState.PENDING
        return DeclarationState.NOT_STARTED

    @property
    def is_placeholder(self) -> bool:
        """True for a factory-less declaration awaiting its real definition."""
        return self.factory is None

    def set_instance(self, value: Any) -> Any:
        """Store ``value`` unless an instance already exists; return the stored instance."""
        if self.instance is UNRESOLVED:
            self.instance = value
        self.pending = None
        return self.instance
