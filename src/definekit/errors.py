"""Error hierarchy for the definekit module system."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "DefineError",
    "ConfigError",
    "InvalidCallError",
    "DuplicateDefinitionError",
    "UnregisteredDependencyError",
    "LoaderNotConfiguredError",
    "LoaderRejectedError",
    "FactoryError",
    "ErrorCodes",
]


class DefineError(Exception):
    """Base error for all definekit errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigError(DefineError):
    """Raised when configuration options are invalid."""

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="CONFIG_INVALID",
            message=message,
            details={"errors": errors or []},
            **kwargs,
        )


class InvalidCallError(DefineError):
    """Raised when define() receives arguments it cannot classify."""

    def __init__(self, message: str = "Invalid define() call", **kwargs: Any) -> None:
        super().__init__(code="INVALID_CALL", message=message, **kwargs)


class DuplicateDefinitionError(DefineError):
    """Raised when a name is declared again while it still holds a factory."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(
            code="DUPLICATE_DEFINITION",
            message=f"Duplicate module definition. Module name: {name}",
            details={"name": name},
            **kwargs,
        )

    @property
    def name(self) -> str:
        """The lowercased module name that was declared twice."""
        return self.details["name"]


class UnregisteredDependencyError(DefineError):
    """Raised when a module reference has no declaration at resolution time."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(
            code="UNREGISTERED_DEPENDENCY",
            message=f"A required module is not registered - module name: {name}",
            details={"name": name},
            **kwargs,
        )

    @property
    def name(self) -> str:
        """The missing module name."""
        return self.details["name"]


class LoaderNotConfiguredError(DefineError):
    """Raised when resources need fetching but no load function is set."""

    def __init__(self, resources: list[str], **kwargs: Any) -> None:
        super().__init__(
            code="LOADER_NOT_CONFIGURED",
            message=f"load must be set in the config options. Resources to load: {', '.join(resources)}",
            details={"resources": list(resources)},
            **kwargs,
        )

    @property
    def resources(self) -> list[str]:
        """The resource tokens that could not be loaded."""
        return self.details["resources"]


class LoaderRejectedError(DefineError):
    """Raised when the injected loader calls its failure continuation."""

    def __init__(self, resources: list[str], reason: Any = None, **kwargs: Any) -> None:
        suffix = f": {reason}" if reason is not None else ""
        super().__init__(
            code="LOADER_REJECTED",
            message=f"Failed to load resources {', '.join(resources)}{suffix}",
            details={"resources": list(resources), "reason": reason},
            **kwargs,
        )

    @property
    def resources(self) -> list[str]:
        """The resolved paths the loader was asked to fetch."""
        return self.details["resources"]

    @property
    def reason(self) -> Any:
        """Whatever the loader passed to its failure continuation."""
        return self.details["reason"]


class FactoryError(DefineError):
    """Raised when a module factory fails while computing its instance."""

    def __init__(self, name: str | None, cause: Exception, **kwargs: Any) -> None:
        label = name if name is not None else "<anonymous>"
        super().__init__(
            code="FACTORY_ERROR",
            message=f"Factory for module '{label}' failed: {cause}",
            details={"name": name},
            cause=cause,
            **kwargs,
        )

    @property
    def name(self) -> str | None:
        """The module whose factory raised, or None for anonymous modules."""
        return self.details["name"]


class ErrorCodes:
    """All definekit error codes as constants.

    Example:
        if error.code == ErrorCodes.UNREGISTERED_DEPENDENCY:
            register_fallback()
    """

    CONFIG_INVALID = "CONFIG_INVALID"
    INVALID_CALL = "INVALID_CALL"
    DUPLICATE_DEFINITION = "DUPLICATE_DEFINITION"
    UNREGISTERED_DEPENDENCY = "UNREGISTERED_DEPENDENCY"
    LOADER_NOT_CONFIGURED = "LOADER_NOT_CONFIGURED"
    LOADER_REJECTED = "LOADER_REJECTED"
    FACTORY_ERROR = "FACTORY_ERROR"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
