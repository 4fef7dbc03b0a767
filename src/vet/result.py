"""Result container: a value or an error, never both.

A result is a two-slot tuple, ``(value, error)``, so call sites can unpack it
directly::

    value, error = Try.catch(lambda: int(text))
    if error is not None:
        ...

It also carries named accessors and a couple of helpers. The two concrete
variants are :class:`Ok` and :class:`Err`; checking ``isinstance``, calling
:func:`is_ok` / :func:`is_err`, or pattern matching narrows to one of them.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Literal, Never, Self, TypeIs, overload

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Coroutine

    from vet.config import TryConfig


class Result[T](tuple[T | None, BaseException | None]):
    """Base class of :class:`Ok` and :class:`Err`.

    Slot 0 holds the value and slot 1 the error. Build instances with
    ``Ok(value)``, ``Err(error)``, :func:`ok` or :func:`err`.
    """

    __slots__ = ()

    def __new__(cls, *args: Any, **kwargs: Any) -> Self:  # noqa: ARG004
        raise TypeError("Result cannot be built directly; use Ok(...) or Err(...)")

    @property
    def value(self) -> T | None:
        """The success payload, or ``None`` on failure."""
        return self[0]

    @property
    def error(self) -> BaseException | None:
        """The stored exception, or ``None`` on success."""
        return self[1]

    @property
    def ok(self) -> bool:
        """True when no error is stored."""
        return self[1] is None

    def is_success(self) -> bool:
        return self.ok

    def is_failure(self) -> bool:
        return not self.ok

    def to_display_string(self) -> str:
        return str(self)

    def __str__(self) -> str:
        if self.ok:
            return f"Result.Ok({self[0]})"
        return f"Result.Error({_error_label(self[1])})"

    def __repr__(self) -> str:
        if self.ok:
            return f"Result.Ok({self[0]!r})"
        return f"Result.Error({self[1]!r})"


class Ok[T](Result[T]):
    """Successful result. Any value is a valid payload, ``None`` included."""

    __slots__ = ()
    __match_args__ = ("value",)

    def __new__(cls, value: T) -> Self:
        return tuple.__new__(cls, (value, None))

    def __getnewargs__(self) -> tuple[T]:  # type: ignore[override]
        return (self[0],)

    @property
    def value(self) -> T:
        return self[0]  # type: ignore[return-value]

    @property
    def error(self) -> None:
        return None

    @property
    def ok(self) -> Literal[True]:
        return True

    def unwrap(self) -> T:
        """Return the payload."""
        return self.value

    def unwrap_or(self, fallback: object) -> T:  # noqa: ARG002
        """Return the payload; *fallback* is ignored on success."""
        return self.value

    @overload
    def or_else(
        self, thunk: Callable[[], Coroutine[Any, Any, object]]
    ) -> Coroutine[Any, Any, Self]: ...

    @overload
    def or_else(self, thunk: Callable[[], object]) -> Self: ...

    def or_else(self, thunk: Callable[[], Any]) -> Any:
        """Return this result unchanged; *thunk* is never called.

        An ``async def`` *thunk* gets a coroutine resolving to this result, so
        ``await result.or_else(fetch)`` works whichever variant *result* is.
        """
        if inspect.iscoroutinefunction(thunk):
            return self._resolved()
        return self

    async def _resolved(self) -> Self:
        return self


class Err(Result[Never]):
    """Failed result carrying an exception instance."""

    __slots__ = ()
    __match_args__ = ("error",)

    def __new__(cls, error: BaseException) -> Self:
        if not isinstance(error, BaseException):
            raise TypeError(
                f"Err requires an exception instance, got {type(error).__name__}; "
                "use err() to normalize arbitrary causes"
            )
        return tuple.__new__(cls, (None, error))

    def __getnewargs__(self) -> tuple[BaseException]:  # type: ignore[override]
        return (self.error,)

    @property
    def value(self) -> None:
        return None

    @property
    def error(self) -> BaseException:
        return self[1]  # type: ignore[return-value]

    @property
    def ok(self) -> Literal[False]:
        return False

    def unwrap(self) -> Never:
        """Raise the stored exception at the call site."""
        raise self.error

    def unwrap_or[G](self, fallback: G) -> G:
        """Return *fallback*."""
        return fallback

    @overload
    def or_else[U](
        self, thunk: Callable[[], Awaitable[U]]
    ) -> Coroutine[Any, Any, TryResult[U]]: ...

    @overload
    def or_else[U](self, thunk: Callable[[], U]) -> TryResult[U]: ...

    def or_else(self, thunk: Callable[[], Any]) -> Any:
        """Run *thunk* through ``Try.catch`` and return its result."""
        from vet.execute import Try

        return Try.catch(thunk)


type TryResult[T] = Ok[T] | Err


def _error_label(error: BaseException | None) -> str:
    message = str(error)
    return message or type(error).__name__


# --- Factories ---


def ok[T](value: T) -> Ok[T]:
    """Build a successful result holding *value*."""
    return Ok(value)


def err(cause: object, *, config: TryConfig | None = None) -> Err:
    """Build a failed result, normalizing *cause* with the active config.

    Exceptions are stored as-is; other values become a ``CaughtError`` whose
    message is ``str(cause)``.
    """
    if config is None:
        from vet.config import current_config

        config = current_config()
    return Err(config.normalize(cause))


def from_pair[T](
    pair: tuple[T | None, object], *, config: TryConfig | None = None
) -> TryResult[T]:
    """Build a result from a plain ``(value, error)`` pair.

    A ``None`` error means success, regardless of the value. Any other error
    goes through the same normalizer as :func:`err`.
    """
    value, error = pair
    if error is None:
        return Ok(value)  # type: ignore[arg-type]
    return err(error, config=config)


# --- Narrowing helpers ---


def is_ok[T](result: TryResult[T]) -> TypeIs[Ok[T]]:
    """Return True if *result* is an :class:`Ok`."""
    return isinstance(result, Ok)


def is_err[T](result: TryResult[T]) -> TypeIs[Err]:
    """Return True if *result* is an :class:`Err`."""
    return isinstance(result, Err)


__all__ = [
    "Err",
    "Ok",
    "Result",
    "TryResult",
    "err",
    "from_pair",
    "is_err",
    "is_ok",
    "ok",
]
