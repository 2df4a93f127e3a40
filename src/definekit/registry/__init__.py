"""Module declarations and the registry that owns them."""

from __future__ import annotations

from definekit.registry.registry import REGISTRY_EVENTS, ModuleRegistry
from definekit.registry.types import UNRESOLVED, DeclarationState, ModuleDeclaration

__all__ = [
    "DeclarationState",
    "ModuleDeclaration",
    "ModuleRegistry",
    "REGISTRY_EVENTS",
    "UNRESOLVED",
]
