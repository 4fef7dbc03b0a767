"""Configuration resolution, precedence and scoping tests."""

from __future__ import annotations

import asyncio
import os

import pytest

from vet import Ok, Try
from vet.config import (
    TryConfig,
    config_scope,
    current_config,
    default_config,
    resolve_config,
)
import vet.config.core as config_core
from vet.config.utils import import_object, is_import_path
from vet.errors import ConfigurationError, normalize_error

from tests.helpers import to_domain_error

pytestmark = pytest.mark.unit


class TestResolution:
    def test_defaults_use_builtin_normalizer(self) -> None:
        cfg = resolve_config()

        assert cfg.normalizer is normalize_error
        assert cfg.extra == {}

    def test_pyproject_table_is_read(self, pyproject) -> None:
        pyproject('[tool.vet]\nnormalizer = "builtins:LookupError"\n')

        assert resolve_config().normalizer is LookupError

    def test_env_wins_over_pyproject(self, pyproject, monkeypatch) -> None:
        pyproject('[tool.vet]\nnormalizer = "builtins:LookupError"\n')
        monkeypatch.setenv("VET_NORMALIZER", "builtins.RuntimeError")

        assert resolve_config().normalizer is RuntimeError

    def test_overrides_win_over_env(self, monkeypatch) -> None:
        monkeypatch.setenv("VET_NORMALIZER", "builtins:RuntimeError")

        cfg = resolve_config(overrides={"normalizer": to_domain_error})

        assert cfg.normalizer is to_domain_error

    def test_blank_env_value_means_default(self, monkeypatch) -> None:
        monkeypatch.setenv("VET_NORMALIZER", "   ")

        assert resolve_config().normalizer is normalize_error

    def test_malformed_pyproject_is_ignored(self, pyproject) -> None:
        pyproject("[tool.vet\nnormalizer = ")

        assert resolve_config().normalizer is normalize_error

    def test_unknown_fields_warn(self, pyproject) -> None:
        pyproject('[tool.vet]\nretries = 3\n')

        with pytest.warns(UserWarning, match="retries"):
            cfg = resolve_config()

        assert cfg.extra == {"retries": 3}

    def test_debug_audit_is_emitted(self, monkeypatch) -> None:
        monkeypatch.setenv("VET_DEBUG_CONFIG", "1")

        with pytest.warns(UserWarning, match="Config audit"):
            resolve_config()

    def test_debug_audit_names_the_winning_layer(self, monkeypatch) -> None:
        monkeypatch.setenv("VET_DEBUG_CONFIG", "1")
        monkeypatch.setenv("VET_NORMALIZER", "builtins:RuntimeError")

        with pytest.warns(UserWarning, match="env:VET_NORMALIZER"):
            resolve_config()


class TestDotenv:
    @pytest.fixture
    def fresh_dotenv(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config_core, "_DOTENV_LOADED", False)
        monkeypatch.chdir(tmp_path)
        return tmp_path / ".env"

    @pytest.mark.allow_dotenv
    def test_dotenv_values_are_read(self, fresh_dotenv) -> None:
        fresh_dotenv.write_text("VET_NORMALIZER=builtins:LookupError\n")

        try:
            assert resolve_config().normalizer is LookupError
        finally:
            os.environ.pop("VET_NORMALIZER", None)

    @pytest.mark.allow_dotenv
    def test_undecodable_dotenv_does_not_break_catch(self, fresh_dotenv) -> None:
        fresh_dotenv.write_bytes(b"VET_NORMALIZER=\xff\xfe\xfa\n")

        assert Try.catch(lambda: 1) == Ok(1)
        assert Try.catch(lambda: 2) == Ok(2)

    def test_loader_failure_is_skipped(self, fresh_dotenv, monkeypatch) -> None:
        def broken(*_args, **_kwargs):
            raise ValueError("unreadable .env")

        monkeypatch.setattr("dotenv.load_dotenv", broken)

        assert resolve_config().normalizer is normalize_error
        assert config_core._DOTENV_LOADED is True


class TestResolutionErrors:
    def test_malformed_path_is_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("VET_NORMALIZER", "not a path!")

        with pytest.raises(ConfigurationError, match="import path") as exc:
            resolve_config()

        assert exc.value.hint is not None
        assert "VET_NORMALIZER" in exc.value.hint

    def test_wrong_type_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="callable"):
            resolve_config(overrides={"normalizer": 42})

    def test_missing_module_is_reported(self, monkeypatch) -> None:
        monkeypatch.setenv("VET_NORMALIZER", "vet_missing_module_xyz:normalize")

        with pytest.raises(ConfigurationError, match="Cannot import"):
            resolve_config()

    def test_missing_attribute_is_reported(self, monkeypatch) -> None:
        monkeypatch.setenv("VET_NORMALIZER", "vet.errors:no_such_function")

        with pytest.raises(ConfigurationError, match="Cannot import"):
            resolve_config()

    def test_non_callable_target_is_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("VET_NORMALIZER", "vet.config.utils:ENV_PREFIX")

        with pytest.raises(ConfigurationError, match="not callable"):
            resolve_config()


class TestScoping:
    def test_default_config_is_cached(self) -> None:
        first = default_config()

        assert default_config() is first

        default_config.cache_clear()
        assert default_config() is not first

    def test_current_config_falls_back_to_default(self) -> None:
        assert current_config() is default_config()

    def test_scope_accepts_a_config_and_restores(self) -> None:
        cfg = TryConfig(normalizer=to_domain_error)

        with config_scope(cfg) as active:
            assert active is cfg
            assert current_config() is cfg

        assert current_config() is default_config()

    def test_nested_scopes_restore_outer(self) -> None:
        with config_scope(normalizer=to_domain_error) as outer:
            with config_scope({"normalizer": "builtins:RuntimeError"}) as inner:
                assert current_config() is inner
                assert inner.normalizer is RuntimeError
            assert current_config() is outer

    @pytest.mark.asyncio
    async def test_scopes_are_isolated_between_tasks(self) -> None:
        seen: dict[str, object] = {}
        entered = asyncio.Event()

        async def scoped() -> None:
            with config_scope(normalizer=to_domain_error):
                entered.set()
                await asyncio.sleep(0)
                seen["scoped"] = current_config().normalizer

        async def unscoped() -> None:
            await entered.wait()
            seen["unscoped"] = current_config().normalizer

        await asyncio.gather(scoped(), unscoped())

        assert seen["scoped"] is to_domain_error
        assert seen["unscoped"] is normalize_error

    def test_str_names_the_normalizer(self) -> None:
        assert str(TryConfig()) == "TryConfig(normalizer=vet.errors:normalize_error)"


class TestImportPaths:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("pkg.mod:func", True),
            ("pkg.mod.func", True),
            ("pkg:Cls.method", True),
            ("func", False),
            ("pkg mod:func", False),
            ("pkg.mod:", False),
        ],
    )
    def test_is_import_path(self, path: str, expected: bool) -> None:
        assert is_import_path(path) is expected

    def test_import_object_resolves_both_forms(self) -> None:
        assert import_object("vet.errors:normalize_error") is normalize_error
        assert import_object("vet.errors.normalize_error") is normalize_error
