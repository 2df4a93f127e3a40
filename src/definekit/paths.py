"""Alias substitution and base-path prefixing for resource tokens."""

from __future__ import annotations

from definekit.config import Config
from definekit.errors import ConfigError

__all__ = ["PathResolver", "is_absolute_path"]

_ABSOLUTE_PREFIXES = ("/", "http://", "https://")


def is_absolute_path(path: str) -> bool:
    """Return True if the path starts at the root or carries a network scheme."""
    return path.startswith(_ABSOLUTE_PREFIXES)


class PathResolver:
    """Rewrites raw resource tokens into fetchable paths.

    Reads the alias table and base path from ``config`` on every call, so
    configuration updates apply to subsequent resolutions immediately.
    """

    def __init__(self, config: Config) -> None:
        self._config = config

    def resolve(self, token: str) -> str:
        """Resolve a token to its final path.

        Given ``alias={"scripts": "path/to/scripts/"}`` and
        ``base_path="/base/"``, ``"scripts/app.js"`` resolves to
        ``"/base/path/to/scripts/app.js"``. An alias pointing at an absolute
        path skips the base path entirely.

        Raises:
            ConfigError: If the alias table maps back onto an alias already applied.
        """
        applied: list[str] = []
        path = token
        while not is_absolute_path(path):
            head, sep, rest = path.partition("/")
            replacement = self._config.alias.get(head)
            if not replacement:
                return self._config.base_path + path
            if head in applied:
                raise ConfigError(message=f"Alias cycle while resolving '{token}': {' -> '.join([*applied, head])}")
            applied.append(head)
            if sep and replacement.endswith("/"):
                path = replacement + rest
            else:
                path = replacement + sep + rest
        return path
