# src/vet/config/utils.py

"""Configuration utilities and shared functionality.

Pure helpers that can be imported without creating circular dependencies:
path resolution, environment flags and import-path handling.
"""

from __future__ import annotations

import importlib
import os
from pathlib import Path
import re
from typing import Any

# --- Constants ---

ENV_PREFIX = "VET_"
CONFIG_TOOL_NAME = "vet"

PYPROJECT_PATH_VAR = "VET_PYPROJECT_PATH"
DEBUG_CONFIG_VAR = "VET_DEBUG_CONFIG"

# "package.module:attr" or "package.module.attr"
_IMPORT_PATH_PATTERN = re.compile(
    r"^[A-Za-z_][\w]*(?:\.[A-Za-z_][\w]*)*(?::[A-Za-z_][\w]*(?:\.[A-Za-z_][\w]*)*)?$"
)


# --- Path Utilities ---


def get_pyproject_path() -> Path:
    """Return path to the project pyproject.toml, honouring VET_PYPROJECT_PATH."""
    if override := os.environ.get(PYPROJECT_PATH_VAR):
        return Path(override)
    return Path.cwd() / "pyproject.toml"


# --- Import paths ---


def is_import_path(value: str) -> bool:
    """Return True when *value* looks like ``module:attr`` or ``module.attr``."""
    return bool(_IMPORT_PATH_PATTERN.match(value)) and (
        ":" in value or "." in value
    )


def import_object(path: str) -> Any:
    """Import and return the object named by *path*.

    Accepts ``package.module:attr.sub`` or the dotted form
    ``package.module.attr``; the latter splits on the last dot.
    """
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")
    obj: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)
    return obj


def describe_callable(fn: Any) -> str:
    """Return ``module:qualname`` for *fn*, falling back to ``repr()``."""
    module = getattr(fn, "__module__", None)
    qualname = getattr(fn, "__qualname__", None)
    if module and qualname:
        return f"{module}:{qualname}"
    return repr(fn)


# --- Field Specification Helpers ---


def field_spec_hint(field: str) -> str:
    """Return a compact hint for setting a config field via env or files."""
    env_key = f"{ENV_PREFIX}{field.upper()}"
    return f"Set {env_key} or [tool.{CONFIG_TOOL_NAME}] {field} in pyproject.toml."


def should_emit_debug() -> bool:
    """Return True when debug audit is enabled via environment."""
    return os.environ.get(DEBUG_CONFIG_VAR, "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }
