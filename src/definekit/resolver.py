"""Dependency resolution and asynchronous composition of module instances."""

from __future__ import annotations

import asyncio
import inspect
import logging
import re
from typing import Any, Callable, Sequence

from definekit.errors import FactoryError, LoaderNotConfiguredError, UnregisteredDependencyError
from definekit.loader import ResourceLoader
from definekit.registry import DeclarationState, ModuleDeclaration, ModuleRegistry

logger = logging.getLogger(__name__)

__all__ = ["DependencyResolver", "RESOURCE_PATTERN", "is_module_name"]

RESOURCE_PATTERN = re.compile(r"\.(js|css|htm|html)$", re.IGNORECASE)


def is_module_name(token: str) -> bool:
    """Return True if the token names a module, False if it is a resource path."""
    return RESOURCE_PATTERN.search(token) is None


def _normalize(tokens: str | Sequence[str]) -> list[str]:
    if isinstance(tokens, str):
        tokens = [tokens]
    return [token.lower() for token in tokens]


def _consume(future: asyncio.Future[Any]) -> None:
    if not future.cancelled():
        future.exception()


class DependencyResolver:
    """Resolves dependency tokens into module instances.

    ``resolve`` does all classification, registry lookups and recursive
    kickoff synchronously, so missing modules and a missing loader are
    raised to the caller before anything is awaited. Loader rejections and
    factory failures surface through the returned future.

    Each declaration is instantiated at most once: while its instantiation
    is in flight, the declaration holds the pending task and every further
    requester awaits that same task.
    """

    def __init__(self, registry: ModuleRegistry, loader: ResourceLoader) -> None:
        self._registry = registry
        self._loader = loader

    def resolve(self, tokens: str | Sequence[str]) -> asyncio.Future[list[Any]]:
        """Resolve tokens to their instances, in token order.

        Resource tokens and modules whose instance is None contribute no
        entry to the result list.

        Raises:
            UnregisteredDependencyError: If a module token has no declaration.
            LoaderNotConfiguredError: If resources must be fetched without a loader.
        """
        keys = _normalize(tokens)
        self._check(keys, set())
        return self._start(keys)

    def _check(self, keys: list[str], seen: set[str]) -> None:
        """Validate the not-yet-instantiated graph before anything is started."""
        resources: list[str] = []
        for key in keys:
            if not is_module_name(key):
                resources.append(key)
                continue
            if key in seen:
                continue
            seen.add(key)
            declaration = self._registry.lookup(key)
            if declaration is None:
                raise UnregisteredDependencyError(name=key)
            if declaration.state is DeclarationState.NOT_STARTED:
                self._check(_normalize(declaration.dependencies), seen)

        if resources:
            if not self._loader.configured:
                raise LoaderNotConfiguredError(resources=resources)
            for resource in resources:
                self._loader.paths.resolve(resource)

    def _start(self, keys: list[str]) -> asyncio.Future[list[Any]]:
        loop = asyncio.get_running_loop()
        module_futures: list[asyncio.Future[Any]] = []
        resources: list[str] = []

        try:
            for key in keys:
                if not is_module_name(key):
                    resources.append(key)
                    continue
                declaration = self._registry.lookup(key)
                if declaration is None:
                    raise UnregisteredDependencyError(name=key)
                module_futures.append(self._instantiate(declaration))

            # one loader request per call, however many resource tokens it names
            load_future = self._loader.load(resources) if resources else None
        except Exception:
            # nobody will await the siblings already started
            for future in module_futures:
                future.add_done_callback(_consume)
            raise
        return loop.create_task(self._join(module_futures, load_future))

    def resolve_and_run(
        self,
        tokens: str | Sequence[str],
        on_ready: Callable[..., Any],
    ) -> asyncio.Future[Any]:
        """Resolve tokens, then call ``on_ready(*instances)``.

        Returns:
            A task fulfilled with ``on_ready``'s return value. ``on_ready`` is
            never called when any part of the resolution fails.
        """
        loop = asyncio.get_running_loop()
        dependencies = self.resolve(tokens)
        return loop.create_task(self._run(dependencies, on_ready))

    async def _run(self, dependencies: asyncio.Future[list[Any]], on_ready: Callable[..., Any]) -> Any:
        instances = await dependencies
        return await self._call_factory(None, on_ready, instances)

    async def _join(
        self,
        module_futures: list[asyncio.Future[Any]],
        load_future: asyncio.Future[Any] | None,
    ) -> list[Any]:
        waits = list(module_futures)
        if load_future is not None:
            waits.append(load_future)
        results = await asyncio.gather(*waits)
        return [instance for instance in results[: len(module_futures)] if instance is not None]

    def _instantiate(self, declaration: ModuleDeclaration) -> asyncio.Future[Any]:
        loop = asyncio.get_running_loop()
        state = declaration.state

        if state is DeclarationState.INSTANTIATED:
            done: asyncio.Future[Any] = loop.create_future()
            done.set_result(declaration.instance)
            return done
        if state is DeclarationState.PENDING:
            return declaration.pending  # type: ignore[return-value]

        dependencies = self._start(_normalize(declaration.dependencies))
        task = loop.create_task(self._complete(declaration, dependencies))
        declaration.pending = task
        return task

    async def _complete(self, declaration: ModuleDeclaration, dependencies: asyncio.Future[list[Any]]) -> Any:
        try:
            instances = await dependencies
            if declaration.is_placeholder:
                value = await self._redefined_instance(declaration)
            else:
                value = await self._call_factory(declaration.name, declaration.factory, instances)
        finally:
            declaration.pending = None

        logger.debug("Instantiated module '%s'", declaration.name)
        return declaration.set_instance(value)

    async def _redefined_instance(self, placeholder: ModuleDeclaration) -> Any:
        """Resolve the declaration that loading a placeholder's resources registered."""
        fetched = any(not is_module_name(token) for token in placeholder.dependencies)
        if placeholder.name is None or not fetched:
            return None

        current = self._registry.lookup(placeholder.name)
        if current is None or current is placeholder:
            logger.warning("Resources for module '%s' loaded but did not define it", placeholder.name)
            return None
        return await self._instantiate(current)

    async def _call_factory(self, name: str | None, factory: Any, instances: list[Any]) -> Any:
        """Call a callable factory with the instances, awaiting an awaitable result."""
        if not callable(factory):
            return factory
        try:
            value = factory(*instances)
            if inspect.isawaitable(value):
                value = await value
        except Exception as exc:
            raise FactoryError(name=name, cause=exc) from exc
        return value

