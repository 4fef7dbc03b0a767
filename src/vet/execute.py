"""Execution wrapper: run a zero-argument callable and return a Result.

``Try.catch`` is the bridge between exception-raising code and results::

    url, error = Try.catch(lambda: parse_url(user_input))
    response, error = await Try.catch(lambda: client.get(url))

Synchronous callables produce a result immediately. Callables that return an
awaitable produce a coroutine that resolves to a result once awaited.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any, overload

from vet.result import Err, Ok, TryResult

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Coroutine

    from vet.config import TryConfig

log = logging.getLogger(__name__)


class Try:
    """Namespace for the ``catch`` entry point."""

    @overload
    @staticmethod
    def catch[T](
        thunk: Callable[[], Awaitable[T]], *, config: TryConfig | None = None
    ) -> Coroutine[Any, Any, TryResult[T]]: ...

    @overload
    @staticmethod
    def catch[T](
        thunk: Callable[[], T], *, config: TryConfig | None = None
    ) -> TryResult[T]: ...

    @staticmethod
    def catch(
        thunk: Callable[[], Any], *, config: TryConfig | None = None
    ) -> TryResult[Any] | Coroutine[Any, Any, TryResult[Any]]:
        """Call *thunk* and capture its outcome as a result.

        Args:
            thunk: Zero-argument callable. It may return a plain value or an
                awaitable (e.g. an ``async def`` function).
            config: Explicit configuration. Defaults to the innermost
                ``config_scope()``, else the process default.

        Returns:
            ``Ok(value)`` or ``Err(error)``; when *thunk* returns an awaitable,
            a coroutine resolving to one of them.

        Raises:
            TypeError: If *thunk* is not callable. Nothing raised by *thunk*
                itself escapes, apart from ``BaseException`` subclasses that
                are not ``Exception`` (cancellation, interpreter exit).
            ConfigurationError: If *config* is not given and the process
                default cannot be resolved, e.g. a ``VET_NORMALIZER`` that
                does not import. Failed resolutions are not cached, so every
                call raises until the setting is fixed.
        """
        if not callable(thunk):
            raise TypeError(f"Try.catch expects a callable, got {type(thunk).__name__}")

        if config is None:
            from vet.config import current_config

            config = current_config()

        try:
            output = thunk()
        except Exception as e:
            # Raised before any awaitable existed: report synchronously.
            log.debug("Captured %s from %r", type(e).__name__, thunk)
            return Err(config.normalize(e))

        if inspect.isawaitable(output):
            return _settle(output, config)
        return Ok(output)


async def _settle(awaitable: Awaitable[Any], config: TryConfig) -> TryResult[Any]:
    """Await *awaitable* (and anything it resolves to) into a result."""
    try:
        value = await awaitable
        while inspect.isawaitable(value):
            value = await value
    except Exception as e:
        log.debug("Captured %s from awaitable %r", type(e).__name__, awaitable)
        return Err(config.normalize(e))
    return Ok(value)


catch = Try.catch

#: Value / Error Tuple: shorthand for ``Try.catch``.
vet = Try.catch

__all__ = ["Try", "catch", "vet"]
