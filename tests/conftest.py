"""Pytest configuration and fixtures.

Provides environment isolation for VET_* settings. All fixtures here are
autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import os

import pytest

from vet.config import default_config

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_vet_env(monkeypatch, tmp_path):
    """Clear VET_* variables and point config at an empty pyproject.toml."""
    for key in list(os.environ.keys()):
        if key.startswith("VET_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("VET_PYPROJECT_PATH", str(tmp_path / "pyproject.toml"))


@pytest.fixture(autouse=True)
def reset_default_config():
    """Drop the cached process-wide config before and after each test."""
    default_config.cache_clear()
    yield
    default_config.cache_clear()


@pytest.fixture
def pyproject(tmp_path):
    """Return a writer for the isolated pyproject.toml (not autouse)."""
    path = tmp_path / "pyproject.toml"

    def write(body: str) -> None:
        path.write_text(body, encoding="utf-8")

    return write
