"""The define() entry point and process-wide installation."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Mapping, Sequence

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
from definekit.config import Config
from definekit.loader import ResourceLoader
from definekit.paths import PathResolver
from definekit.registry import ModuleDeclaration, ModuleRegistry
from definekit.resolver import DependencyResolver

logger = logging.getLogger(__name__)

__all__ = ["Definer", "get_definer"]

_install_lock = threading.Lock()
_installed: Definer | None = None


def get_definer() -> Definer | None:
    """Return the process-wide installed Definer, if any."""
    return _installed


def _swap_installed(definer: Definer | None) -> Definer | None:
    global _installed
    with _install_lock:
        previous, _installed = _installed, definer
    return previous


class Definer:
    """A module context: registry, configuration and resolver behind one callable.

    Call shapes::

        define("name", factory)
        define("name", ["dep", "path/to/file.js"], factory)
        define("name", ["path/to/file.js"])     # async placeholder
        define(["dep"], factory)                # anonymous, runs immediately
        define({"config": {...}, "name": value})
        define("name", None)                    # delete

    Independent Definer instances share nothing, so callers needing
    isolation create their own instead of using the installed one.
    """

    def __init__(self, config: Config | Mapping[str, Any] | None = None) -> None:
        self._config = config if isinstance(config, Config) else Config(config)
        self._registry = ModuleRegistry()
        self._paths = PathResolver(self._config)
        self._loader = ResourceLoader(self._config, self._paths)
        self._resolver = DependencyResolver(self._registry, self._loader)
        self._previous: Definer | None = None
        self._background: set[asyncio.Future[Any]] = set()

    @property
    def registry(self) -> ModuleRegistry:
        return self._registry

    @property
    def settings(self) -> Config:
        """The Config instance read on every resource resolution."""
        return self._config

    @property
    def paths(self) -> PathResolver:
        return self._paths

    @property
    def resolver(self) -> DependencyResolver:
        return self._resolver

    def __call__(self, *args: Any) -> Any:
        """Classify the arguments and dispatch them.

        Returns:
            The ModuleDeclaration for named forms, None for bulk and delete
            forms. The anonymous form returns its task when an event loop is
            running, otherwise it runs to completion and returns the
            factory's result.
        """
        return self.dispatch(classify_call(*args))

    def dispatch(self, call: DefineCall) -> Any:
        if isinstance(call, Bulk):
            self._define_bulk(call.entries)
            return None
        if isinstance(call, Anonymous):
            return self._run_anonymous(call)
        if isinstance(call, Delete):
            self._registry.unregister(call.name)
            return None
        if isinstance(call, NamedNoDeps):
            return self._registry.register(call.name, (), call.factory)
        if isinstance(call, NamedWithDeps):
            return self._registry.register(call.name, call.dependencies, call.factory)
        if isinstance(call, AsyncPlaceholder):
            return self._registry.register(call.name, call.dependencies, None)
        raise TypeError(f"Unknown define call: {call!r}")

    def config(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Shallow-merge ``base_path``, ``alias`` and ``load`` into the configuration."""
        self._config.update(options, **kwargs)

    def lookup(self, name: str) -> ModuleDeclaration | None:
        return self._registry.lookup(name)

    async def require(self, dependencies: str | Sequence[str]) -> list[Any]:
        """Resolve dependencies and return their instances in token order."""
        return await self._resolver.resolve(dependencies)

    def install(self) -> Definer:
        """Make this the process-wide Definer, remembering the one it replaces."""
        previous = _swap_installed(self)
        if previous is not self:
            self._previous = previous
        return self

    def restore_previous(self) -> Definer:
        """Reinstall the Definer that was installed before this one and return this one."""
        _swap_installed(self._previous)
        return self

    def _define_bulk(self, entries: Mapping[str, Any]) -> None:
        remaining = dict(entries)
        options = remaining.pop("config", None)
        if options:
            self.config(options)

        for name, value in remaining.items():
            if isinstance(value, Mapping) and "dependencies" in value and "factory" in value:
                self.dispatch(classify_call(name, value["dependencies"], value["factory"]))
            else:
                self.dispatch(classify_call(name, value))

    def _run_anonymous(self, call: Anonymous) -> Any:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self._run_to_completion(call))

        task = self._resolver.resolve_and_run(call.dependencies, call.factory)
        self._background.add(task)
        task.add_done_callback(self._report_background)
        return task

    async def _run_to_completion(self, call: Anonymous) -> Any:
        return await self._resolver.resolve_and_run(call.dependencies, call.factory)

    def _report_background(self, task: asyncio.Future[Any]) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Anonymous module failed: %s", exc, exc_info=exc)
