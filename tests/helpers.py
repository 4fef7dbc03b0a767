"""Test helpers (small, reusable doubles)."""

from __future__ import annotations


class DomainError(Exception):
    """Application-level error used to exercise custom normalizers."""

    def __init__(self, message: str, *, original: object = None) -> None:
        super().__init__(message)
        self.original = original


def to_domain_error(cause: object) -> BaseException:
    """Normalizer double: wrap every cause in a DomainError."""
    return DomainError(str(cause), original=cause)


def to_plain_string(cause: object) -> object:
    """Misbehaving normalizer double: returns a string, not an exception."""
    return f"normalized:{cause}"
