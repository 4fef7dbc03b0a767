"""Exception hierarchy and error normalization for vet."""

from __future__ import annotations


class VetError(Exception):
    """Base exception for all vet errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(VetError):
    """Configuration validation or resolution failed."""


class CaughtError(VetError):
    """Generic error record for a failure cause that was not an exception.

    ``str(error)`` is the string form of the cause; the original object is
    kept on ``cause``.
    """

    def __init__(
        self, message: str, *, cause: object = None, hint: str | None = None
    ) -> None:
        super().__init__(message, hint=hint)
        self.cause = cause


def normalize_error(cause: object) -> BaseException:
    """Return *cause* as an exception instance.

    Exceptions are returned unchanged so callers can still match on their
    concrete type. Any other value is converted with ``str()`` and wrapped in
    a :class:`CaughtError`.
    """
    if isinstance(cause, BaseException):
        return cause
    return CaughtError(str(cause), cause=cause)
