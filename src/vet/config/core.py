# src/vet/config/core.py

"""Core configuration schema and resolution for vet.

- Pydantic ``Settings`` is the single source of truth for fields and defaults.
- ``TryConfig`` is the immutable runtime payload ``Try.catch`` reads.
- ``config_scope`` sets an ambient config for the current context.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass, field
from functools import cache
import logging
from typing import TYPE_CHECKING, Any, Literal
import warnings

from pydantic import BaseModel, Field, ValidationError, field_validator

from vet.errors import ConfigurationError, normalize_error

from .utils import (
    ENV_PREFIX,
    describe_callable,
    field_spec_hint,
    get_pyproject_path,
    import_object,
    is_import_path,
    should_emit_debug,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Mapping
    from types import TracebackType

log = logging.getLogger(__name__)

# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Pydantic settings schema for configuration validation and defaults."""

    # Import path ("pkg.mod:func") or a callable; None keeps normalize_error.
    normalizer: Any = Field(default=None)

    model_config = {"extra": "allow"}

    @field_validator("normalizer", mode="before")
    @classmethod
    def validate_normalizer(cls, v: Any) -> Any:
        """Accept None, a callable, or an import path string."""
        if v is None or callable(v):
            return v
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return None
            if not is_import_path(s):
                raise ValueError(
                    f"normalizer must be an import path like 'pkg.mod:func', got {s!r}"
                )
            return s
        raise ValueError(
            f"normalizer must be a callable or an import path, got {type(v).__name__}"
        )


@cache
def _default_settings() -> dict[str, Any]:
    return Settings().model_dump()


# --- Immutable runtime payload ---


@dataclass(frozen=True)
class TryConfig:
    """Immutable configuration read by ``Try.catch``.

    Example:
        cfg = TryConfig(normalizer=my_normalizer)
        result = Try.catch(load, config=cfg)
    """

    #: Turns a raised or rejected cause into the stored error.
    normalizer: Callable[[object], BaseException] = normalize_error
    extra: Mapping[str, Any] = field(default_factory=dict)

    def normalize(self, cause: object) -> BaseException:
        """Run the configured normalizer, keeping the result an exception."""
        error = self.normalizer(cause)
        if isinstance(error, BaseException):
            return error
        log.debug(
            "Normalizer %s returned %s; coercing",
            describe_callable(self.normalizer),
            type(error).__name__,
        )
        return normalize_error(error)

    def __str__(self) -> str:
        """Return a compact representation naming the normalizer."""
        return f"TryConfig(normalizer={describe_callable(self.normalizer)})"

    __repr__ = __str__


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[TryConfig | None] = contextvars.ContextVar(
    "vet_ambient_config", default=None
)

_DOTENV_LOADED: bool = False


class ConfigScope:
    """Context manager that sets the ambient ``TryConfig``."""

    def __init__(self, cfg: TryConfig):
        """Initialize the context manager with a configuration."""
        self._token: contextvars.Token[TryConfig | None] | None = None
        self._cfg = cfg

    def __enter__(self) -> TryConfig:
        """Enter the context and set ambient configuration."""
        self._token = _AMBIENT.set(self._cfg)
        return self._cfg

    def __exit__(
        self,
        _: type[BaseException] | None,
        __: BaseException | None,
        ___: TracebackType | None,
    ) -> Literal[False]:
        """Exit the context and restore previous ambient configuration."""
        if self._token is not None:
            _AMBIENT.reset(self._token)
        return False


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | TryConfig | None = None,
    **overrides: object,
) -> Generator[TryConfig]:
    """Create a scoped configuration context.

    Thread-safe and async-safe: the config lives in a ``ContextVar``, so each
    task or thread sees only its own scope.

    Args:
        cfg_or_overrides: Either a TryConfig to use directly, or a mapping
            of overrides to apply during resolution.
        **overrides: Additional override values (merged with cfg_or_overrides
            if it's a mapping).

    Yields:
        The TryConfig active in this scope.

    Example:
        with config_scope(normalizer=to_domain_error):
            value, error = Try.catch(load_profile)
    """
    if isinstance(cfg_or_overrides, TryConfig):
        cfg = cfg_or_overrides
    else:
        combined_overrides = {**(cfg_or_overrides or {}), **overrides}
        cfg = resolve_config(overrides=combined_overrides)

    with ConfigScope(cfg):
        yield cfg


def _try_load_dotenv() -> None:
    """Load a .env file from the working directory once, with python-dotenv.

    Tolerant: an unreadable or undecodable .env is skipped, and loading is not
    retried, so configuration resolution never fails because of it.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    try:
        from dotenv import find_dotenv, load_dotenv

        load_dotenv(find_dotenv(usecwd=True))
    except Exception as e:
        log.debug("Skipping .env: %s", e)
    _DOTENV_LOADED = True


# --- Public resolution API ---


def resolve_config(overrides: Mapping[str, Any] | None = None) -> TryConfig:
    """Resolve configuration from all sources into a TryConfig.

    Precedence: defaults < pyproject ``[tool.vet]`` < ``VET_*`` env < overrides.
    Set ``VET_DEBUG_CONFIG=1`` to get a warning naming where the normalizer
    came from.

    Args:
        overrides: Programmatic configuration overrides.

    Returns:
        The frozen TryConfig.

    Raises:
        ConfigurationError: If validation fails or the normalizer cannot be
            imported.
    """
    _try_load_dotenv()

    from .loaders import load_env, load_pyproject

    merged, origins = _resolve_layers(
        overrides=overrides or {},
        env=load_env(),
        project=load_pyproject(),
    )

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        msg = err.get("msg") or ""
        # Remove "Value error, " prefix if present (Pydantic standard wrapper)
        if msg.startswith("Value error, "):
            msg = msg[13:]
        loc = err.get("loc") or ()
        hint = field_spec_hint(str(loc[0])) if loc else None
        raise ConfigurationError(
            f"Configuration validation failed: {msg}", hint=hint
        ) from e

    frozen = _freeze(settings, merged)

    if should_emit_debug():
        warnings.warn(
            f"Config audit\nnormalizer: {origins['normalizer']} "
            f"({describe_callable(frozen.normalizer)})",
            stacklevel=2,
        )

    return frozen


@cache
def default_config() -> TryConfig:
    """Return the process-wide default config, resolved once.

    Failed resolutions are not cached: with a broken ``VET_NORMALIZER`` every
    call raises ``ConfigurationError`` again. Call
    ``default_config.cache_clear()`` after changing the environment.
    """
    return resolve_config()


def current_config() -> TryConfig:
    """Return the innermost scoped config, else the process default."""
    scoped = _AMBIENT.get()
    if scoped is not None:
        return scoped
    return default_config()


# --- Internal helpers ---


def _freeze(settings: Settings, merged: Mapping[str, Any]) -> TryConfig:
    """Convert validated Settings to an immutable TryConfig."""
    known_fields = set(Settings.model_fields.keys())
    extra = {k: v for k, v in merged.items() if k not in known_fields}
    for name in extra:
        warnings.warn(
            f"Configuration: unknown field {name!r} ignored",
            UserWarning,
            stacklevel=3,
        )

    normalizer = settings.normalizer
    if normalizer is None:
        return TryConfig(extra=extra)

    if isinstance(normalizer, str):
        try:
            normalizer = import_object(normalizer)
        except (ImportError, AttributeError) as e:
            raise ConfigurationError(
                f"Cannot import normalizer {settings.normalizer!r}: {e}",
                hint=field_spec_hint("normalizer"),
            ) from e
        if not callable(normalizer):
            raise ConfigurationError(
                f"Normalizer {settings.normalizer!r} is not callable",
                hint="Point it at a function taking one argument.",
            )

    return TryConfig(normalizer=normalizer, extra=extra)


def _resolve_layers(
    *,
    overrides: Mapping[str, Any],
    env: Mapping[str, Any],
    project: Mapping[str, Any],
) -> tuple[dict[str, Any], dict[str, str]]:
    """Merge layers with last-wins precedence.

    Returns the merged values and, per field, a label for the winning layer
    (``default``, ``file:<path>``, ``env:<VAR>`` or ``overrides``).
    """
    out: dict[str, Any] = dict(_default_settings())
    origins = dict.fromkeys(out, "default")

    for k, v in project.items():
        out[k] = v
        origins[k] = f"file:{get_pyproject_path()}"
    for k, v in env.items():
        out[k] = v
        origins[k] = f"env:{ENV_PREFIX}{k.upper()}"
    for k, v in overrides.items():
        out[k] = v
        origins[k] = "overrides"

    return out, origins


__all__ = [
    "ConfigScope",
    "Settings",
    "TryConfig",
    "config_scope",
    "current_config",
    "default_config",
    "resolve_config",
]
