"""Tests for TypecraftSettings: keyword overrides, env vars and TOML source."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from typecraft.config.discovery import CONFIG_ENV_VAR
from typecraft.config.logging import LOGGER_NAME
from typecraft.config.settings import TypecraftSettings, apply_settings, read_toml_settings
from typecraft.core.errors import DefinitionError
from typecraft.telemetry import disable_tracing, is_tracing_enabled


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("VERBOSE", "LOG_JSON", "TRACING", "CONFIG_PATH"):
        monkeypatch.delenv(f"TYPECRAFT_{name}", raising=False)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestTypecraftSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = TypecraftSettings.load(start=tmp_path)
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.tracing is False
        assert settings.config_path is None

    def test_frozen(self, tmp_path: Path) -> None:
        settings = TypecraftSettings.load(start=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "typecraft.toml"
        toml.write_text("verbose = true\ntracing = true\n")
        settings = TypecraftSettings.load(start=tmp_path)
        assert settings.verbose is True
        assert settings.tracing is True
        assert settings.log_json is False  # default preserved
        assert settings.config_path == toml

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "typecraft.toml").write_text("")
        settings = TypecraftSettings.load(start=tmp_path)
        assert settings.verbose is False

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("log_json = true\n")
        settings = TypecraftSettings.load(config_path=str(custom))
        assert settings.log_json is True
        assert settings.config_path == custom

    def test_missing_explicit_path_ignored(self, tmp_path: Path) -> None:
        settings = TypecraftSettings.load(config_path=tmp_path / "nope.toml")
        assert settings.config_path is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "typecraft.toml").write_text("verbose = \n")
        with pytest.raises(DefinitionError, match="Invalid TOML"):
            TypecraftSettings.load(start=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "typecraft.toml").write_text("verbose = true\n")
        monkeypatch.setenv("TYPECRAFT_VERBOSE", "false")
        settings = TypecraftSettings.load(start=tmp_path)
        assert settings.verbose is False

    def test_overrides_win(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "typecraft.toml").write_text("tracing = false\n")
        monkeypatch.setenv("TYPECRAFT_TRACING", "false")
        settings = TypecraftSettings.load(start=tmp_path, tracing=True)
        assert settings.tracing is True


class TestApplySettings:
    @pytest.fixture(autouse=True)
    def _restore(self) -> Generator[None]:
        root = logging.getLogger()
        handlers = root.handlers[:]
        level = root.level
        lib_level = logging.getLogger(LOGGER_NAME).level
        yield
        root.handlers = handlers
        root.setLevel(level)
        logging.getLogger(LOGGER_NAME).setLevel(lib_level)
        disable_tracing()

    def test_enables_tracing(self) -> None:
        apply_settings(TypecraftSettings(tracing=True))
        assert is_tracing_enabled()

    def test_disables_tracing(self) -> None:
        apply_settings(TypecraftSettings(tracing=True))
        apply_settings(TypecraftSettings(tracing=False))
        assert not is_tracing_enabled()

    def test_configures_logging(self) -> None:
        apply_settings(TypecraftSettings(verbose=True))
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG


class TestReadTomlSettings:
    def test_table_wins_over_top_level(self, tmp_path: Path) -> None:
        path = tmp_path / "typecraft.toml"
        path.write_text("verbose = false\n[typecraft]\nverbose = true\n")
        assert read_toml_settings(path, ["verbose"]) == {"verbose": True}

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "typecraft.toml"
        path.write_text('tracing = true\ncolour = "blue"\n')
        assert read_toml_settings(path, ["tracing", "verbose"]) == {"tracing": True}

    def test_settings_load_table(self, tmp_path: Path) -> None:
        (tmp_path / "typecraft.toml").write_text('[typecraft]\nlog_json = true\n[tool]\nx = 1\n')
        assert TypecraftSettings.load(start=tmp_path).log_json is True

    def test_config_path_not_read_from_file(self, tmp_path: Path) -> None:
        toml = tmp_path / "typecraft.toml"
        toml.write_text('config_path = "/elsewhere.toml"\n')
        assert TypecraftSettings.load(start=tmp_path).config_path == toml
