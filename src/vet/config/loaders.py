# src/vet/config/loaders.py

"""Configuration loaders for environment and files.

Pure data loading: each loader returns a plain dictionary that the core
resolver merges and validates. Nothing here raises on missing or malformed
sources.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

# Python 3.11+ has tomllib in stdlib
import tomllib

from . import utils

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

# Meta/control variables that steer resolution but aren't config fields
META_ENV_FIELDS = {"pyproject_path", "debug_config"}


def load_env() -> Mapping[str, Any]:
    """Load configuration from ``VET_*`` environment variables.

    Meta variables (pyproject path, debug flag) are skipped. `.env` loading
    happens in the resolver; this function only reads ``os.environ``.
    """
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(utils.ENV_PREFIX):
            continue
        field_name = key[len(utils.ENV_PREFIX) :].lower()
        if field_name in META_ENV_FIELDS:
            continue
        config[field_name] = value
    return config


def _read_toml(path: Path) -> dict[str, Any]:
    """Read a TOML file, returning an empty dict when missing or invalid."""
    if not path.exists():
        return {}

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def load_pyproject() -> Mapping[str, Any]:
    """Load the ``[tool.vet]`` table from the project's pyproject.toml."""
    data = _read_toml(utils.get_pyproject_path())
    section = data.get("tool", {}).get(utils.CONFIG_TOOL_NAME, {})
    return dict(section) if isinstance(section, dict) else {}
