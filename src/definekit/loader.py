"""ResourceLoader: adapts the injected load function to asyncio futures."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Sequence

from definekit.config import Config
from definekit.errors import LoaderNotConfiguredError, LoaderRejectedError
from definekit.paths import PathResolver

logger = logging.getLogger(__name__)

__all__ = ["ResourceLoader"]


class ResourceLoader:
    """Resolves resource paths and hands them to the configured load function.

    The load function has the signature ``load(paths, on_success, on_failure)``
    and must eventually call exactly one of the two continuations. Both
    continuations may be called from any thread; settlement is marshalled
    onto the event loop that requested the load.
    """

    def __init__(self, config: Config, paths: PathResolver | None = None) -> None:
        self._config = config
        self._paths = paths or PathResolver(config)
        self._tasks: set[asyncio.Future[Any]] = set()

    @property
    def paths(self) -> PathResolver:
        return self._paths

    @property
    def configured(self) -> bool:
        """True when a load function is set."""
        return self._config.load is not None

    def load(self, resources: str | Sequence[str]) -> asyncio.Future[Any]:
        """Fetch one or more resources as a single loader request.

        Args:
            resources: A resource token or a list of them.

        Returns:
            A future fulfilled with whatever the loader passed to ``on_success``
            (None for no arguments, the value for one, a tuple for several).

        Raises:
            LoaderNotConfiguredError: If no load function is configured.
        """
        tokens = [resources] if isinstance(resources, str) else list(resources)

        load_fn = self._config.load
        if load_fn is None:
            raise LoaderNotConfiguredError(resources=tokens)

        paths = [self._paths.resolve(token) for token in tokens]
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()

        def settle(setter: Callable[[Any], None], value: Any) -> None:
            if future.cancelled():
                return
            if future.done():
                logger.warning("Loader settled more than once for %s, ignoring", paths)
                return
            setter(value)

        def on_success(*args: Any) -> None:
            if not args:
                value = None
            elif len(args) == 1:
                value = args[0]
            else:
                value = args
            loop.call_soon_threadsafe(settle, future.set_result, value)

        def on_failure(reason: Any = None) -> None:
            error = LoaderRejectedError(resources=paths, reason=reason)
            loop.call_soon_threadsafe(settle, future.set_exception, error)

        logger.debug("Loading %d resource(s): %s", len(paths), paths)
        try:
            outcome = load_fn(paths, on_success, on_failure)
        except Exception as exc:
            if not future.done():
                future.set_exception(LoaderRejectedError(resources=paths, reason=exc, cause=exc))
            return future

        if inspect.isawaitable(outcome):
            task = asyncio.ensure_future(outcome)
            self._tasks.add(task)
            task.add_done_callback(lambda t: self._finish(t, future, paths))

        return future

    def _finish(self, task: asyncio.Future[Any], future: asyncio.Future[Any], paths: list[str]) -> None:
        """Settle ``future`` from an awaitable loader unless a continuation already did."""
        self._tasks.discard(task)
        if future.done():
            if not task.cancelled() and task.exception() is not None:
                logger.warning("Loader for %s raised after settling: %s", paths, task.exception())
            return
        if task.cancelled():
            future.set_exception(LoaderRejectedError(resources=paths, reason="loader cancelled"))
            return
        exc = task.exception()
        if exc is not None:
            future.set_exception(LoaderRejectedError(resources=paths, reason=exc, cause=exc))
        else:
            future.set_result(task.result())
