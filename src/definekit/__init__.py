"""definekit - named module registry with asynchronous dependency resolution."""

from __future__ import annotations

# Core
from definekit.api import Definer, get_definer
from definekit.calls import (
    Anonymous,
    AsyncPlaceholder,
    Bulk,
    DefineCall,
    Delete,
    NamedNoDeps,
    NamedWithDeps,
    classify_call,
)
from definekit.loader import ResourceLoader
from definekit.paths import PathResolver, is_absolute_path
from definekit.registry import (
    REGISTRY_EVENTS,
    UNRESOLVED,
    DeclarationState,
    ModuleDeclaration,
    ModuleRegistry,
)
from definekit.resolver import RESOURCE_PATTERN, DependencyResolver, is_module_name

# Config
from definekit.config import Config, ConfigOptions

# Errors
from definekit.errors import (
    ConfigError,
    DefineError,
    DuplicateDefinitionError,
    ErrorCodes,
    FactoryError,
    InvalidCallError,
    LoaderNotConfiguredError,
    LoaderRejectedError,
    UnregisteredDependencyError,
)

__version__ = "1.0.0"

# The process-wide definer; Definer().install() replaces it and
# restore_previous() puts it back.
define = Definer().install()

__all__ = [
    # Core
    "define",
    "Definer",
    "get_definer",
    "DependencyResolver",
    "ModuleRegistry",
    "ResourceLoader",
    "PathResolver",
    # Call shapes
    "DefineCall",
    "NamedNoDeps",
    "NamedWithDeps",
    "AsyncPlaceholder",
    "Delete",
    "Anonymous",
    "Bulk",
    "classify_call",
    # Registry types
    "ModuleDeclaration",
    "DeclarationState",
    "UNRESOLVED",
    "REGISTRY_EVENTS",
    # Helpers
    "is_absolute_path",
    "is_module_name",
    "RESOURCE_PATTERN",
    # Config
    "Config",
    "ConfigOptions",
    # Errors
    "ErrorCodes",
    "DefineError",
    "ConfigError",
    "InvalidCallError",
    "DuplicateDefinitionError",
    "UnregisteredDependencyError",
    "LoaderNotConfiguredError",
    "LoaderRejectedError",
    "FactoryError",
]
