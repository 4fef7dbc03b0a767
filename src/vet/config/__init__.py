# src/vet/config/__init__.py

"""Configuration for vet.

Resolve once, freeze, then flow: settings are resolved from defaults,
``[tool.vet]`` in pyproject.toml, ``VET_*`` environment variables and
programmatic overrides into an immutable ``TryConfig``.

Key exports:
- resolve_config: Main API for configuration resolution
- TryConfig: Immutable configuration read by ``Try.catch``
- config_scope: Context manager for scoped configuration
- current_config / default_config: Ambient and process-wide lookups
"""

# ruff: noqa: I001

from .core import (
    ConfigScope,
    Settings,
    TryConfig,
    config_scope,
    current_config,
    default_config,
    resolve_config,
)
from .utils import field_spec_hint, import_object

__all__ = [  # noqa: RUF022
    # Main public API
    "resolve_config",
    "TryConfig",
    "config_scope",
    "current_config",
    "default_config",
    # Core types for typing and advanced usage
    "ConfigScope",
    "Settings",
    # Helpers
    "field_spec_hint",
    "import_object",
]
