"""Configuration storage, validation and file loading."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import pydantic
import yaml
from pydantic import BaseModel, ConfigDict, Field

from definekit.errors import ConfigError

__all__ = ["Config", "ConfigOptions", "resolve_target"]


class ConfigOptions(BaseModel):
    """Accepted configuration keys. Only keys that were supplied are merged."""

    model_config = ConfigDict(extra="forbid")

    base_path: str = ""
    alias: dict[str, str] = Field(default_factory=dict)
    load: Optional[Callable[..., Any]] = None


def _validation_errors(exc: pydantic.ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "code": err["type"],
            "message": err["msg"],
        }
        for err in exc.errors()
    ]


def resolve_target(target_string: str) -> Callable[..., Any]:
    """Resolve 'package.module:callable' to the callable it names."""
    if ":" not in target_string:
        raise ConfigError(message=f"Invalid load target '{target_string}'. Expected 'module.path:callable_name'.")

    module_path, callable_name = target_string.split(":", 1)
    try:
        mod = importlib.import_module(module_path)
    except ImportError as exc:
        raise ConfigError(message=f"Cannot import module '{module_path}'.", cause=exc) from exc

    result: Any = mod
    for attr in callable_name.split("."):
        try:
            result = getattr(result, attr)
        except AttributeError as exc:
            raise ConfigError(
                message=f"Cannot find callable '{callable_name}' in module '{module_path}'.",
                cause=exc,
            ) from exc

    if not callable(result):
        raise ConfigError(message=f"Resolved target '{target_string}' is not callable.")
    return result


class Config:
    """Flat configuration store updated by shallow merge.

    Keys:
        base_path: Prefix for relative, non-aliased resource paths.
        alias: Mapping of leading path segments to replacement paths.
        load: Loader callable ``load(paths, on_success, on_failure)``.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = ConfigOptions().model_dump()
        if data:
            self.update(data)

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Build a Config from a YAML file.

        ``load`` may be given as a ``"package.module:callable"`` target string.
        """
        config_path = Path(path)
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(message=f"Configuration file not found: {config_path}", cause=exc) from exc

        try:
            parsed = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(message=f"Invalid YAML in configuration file: {config_path}", cause=exc) from exc

        if parsed is None:
            return cls()
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Configuration file must be a YAML mapping: {config_path}")

        if isinstance(parsed.get("load"), str):
            parsed["load"] = resolve_target(parsed["load"])
        return cls(parsed)

    def update(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Validate and shallow-merge options. Nested mappings are replaced, not merged."""
        merged = {**(options or {}), **kwargs}
        try:
            validated = ConfigOptions.model_validate(merged)
        except pydantic.ValidationError as exc:
            raise ConfigError(
                message="Invalid configuration options",
                errors=_validation_errors(exc),
                cause=exc,
            ) from exc
        self._data.update(validated.model_dump(exclude_unset=True))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        current: Any = self._data
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    @property
    def base_path(self) -> str:
        return self._data["base_path"]

    @property
    def alias(self) -> dict[str, str]:
        return self._data["alias"]

    @property
    def load(self) -> Callable[..., Any] | None:
        return self._data["load"]
