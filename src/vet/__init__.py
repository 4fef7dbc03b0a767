"""vet: turn raised exceptions into explicit value-or-error results.

Public API:
    - Try.catch() / vet(): Run a callable and capture its outcome
    - Ok, Err, Result: The result container and its two variants
    - ok(), err(), from_pair(): Result factories
    - is_ok(), is_err(): Narrowing helpers
    - TryConfig, config_scope(): Error-normalization configuration
"""

from __future__ import annotations

import logging

from vet.config import TryConfig, config_scope, resolve_config
from vet.errors import CaughtError, ConfigurationError, VetError, normalize_error
from vet.execute import Try, catch, vet
from vet.result import (
    Err,
    Ok,
    Result,
    TryResult,
    err,
    from_pair,
    is_err,
    is_ok,
    ok,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("vet-result")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("vet").addHandler(logging.NullHandler())

__all__ = [
    "CaughtError",
    "ConfigurationError",
    "Err",
    "Ok",
    "Result",
    "Try",
    "TryConfig",
    "TryResult",
    "VetError",
    "catch",
    "config_scope",
    "err",
    "from_pair",
    "is_err",
    "is_ok",
    "normalize_error",
    "ok",
    "resolve_config",
    "vet",
]
