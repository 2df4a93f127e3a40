"""Tagged call shapes accepted by define() and the classifier producing them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from definekit.errors import InvalidCallError

__all__ = [
    "NamedNoDeps",
    "NamedWithDeps",
    "AsyncPlaceholder",
    "Delete",
    "Anonymous",
    "Bulk",
    "DefineCall",
    "classify_call",
]


@dataclass(frozen=True)
class NamedNoDeps:
    """define(name, factory)"""

    name: str
    factory: Any


@dataclass(frozen=True)
class NamedWithDeps:
    """define(name, dependencies, factory)"""

    name: str
    dependencies: list[str]
    factory: Any


@dataclass(frozen=True)
class AsyncPlaceholder:
    """define(name, dependencies): the real module is defined by loading the dependencies."""

    name: str
    dependencies: list[str]


@dataclass(frozen=True)
class Delete:
    """define(name, None) or define(name, dependencies, None)"""

    name: str


@dataclass(frozen=True)
class Anonymous:
    """define(dependencies, factory): runs immediately, never registered."""

    dependencies: list[str]
    factory: Any


@dataclass(frozen=True)
class Bulk:
    """define(mapping): module declarations plus an optional 'config' block."""

    entries: Mapping[str, Any] = field(default_factory=dict)


DefineCall = Union[NamedNoDeps, NamedWithDeps, AsyncPlaceholder, Delete, Anonymous, Bulk]


def _is_token_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def classify_call(*args: Any) -> DefineCall:
    """Map define() positional arguments onto a call shape.

    Raises:
        InvalidCallError: If the arguments match no supported shape.
    """
    if len(args) == 1 and isinstance(args[0], Mapping):
        return Bulk(entries=args[0])

    if len(args) == 2 and _is_token_list(args[0]):
        return Anonymous(dependencies=list(args[0]), factory=args[1])

    if args and isinstance(args[0], str):
        name = args[0]
        if len(args) == 2:
            value = args[1]
            if value is None:
                return Delete(name=name)
            if _is_token_list(value):
                return AsyncPlaceholder(name=name, dependencies=list(value))
            return NamedNoDeps(name=name, factory=value)
        if len(args) == 3:
            dependencies, factory = args[1], args[2]
            if not _is_token_list(dependencies):
                raise InvalidCallError(message=f"Dependencies for module '{name}' must be a list of strings")
            if factory is None:
                return Delete(name=name)
            return NamedWithDeps(name=name, dependencies=list(dependencies), factory=factory)

    raise InvalidCallError(message=f"Unsupported define() call with {len(args)} argument(s)")
