"""Unified settings: keyword overrides, env vars, and TOML config.

Priority chain (highest to lowest):
  1. Init kwargs: passed to :meth:`TypecraftSettings.load`
  2. Env vars: ``TYPECRAFT_*`` prefix
  3. TOML file: ``typecraft.toml`` discovered via walk-up
  4. Code defaults

The validation core never reads settings; applications opt in with
:func:`apply_settings`.
"""

from __future__ import annotations

import threading
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from typecraft.config.discovery import find_config
from typecraft.config.logging import configure_logging
from typecraft.core.errors import DefinitionError
from typecraft.telemetry import disable_tracing, enable_tracing


TOML_TABLE = "typecraft"


def read_toml_settings(path: Path, fields: Iterable[str]) -> dict[str, Any]:
    """Read the settings *fields* from a TOML file.

    Keys may sit at the top level or in a ``[typecraft]`` table; the table
    wins on conflicts. Keys that are not settings fields are ignored.

    Raises:
        DefinitionError: If the file is not valid TOML.
    """
    try:
        document = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise DefinitionError(msg) from exc

    table = document.get(TOML_TABLE)
    merged = {**document, **(table if isinstance(table, dict) else {})}
    wanted = set(fields)
    return {k: v for k, v in merged.items() if k in wanted}


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by :func:`read_toml_settings`."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            fields = set(settings_cls.model_fields) - {"config_path"}
            self._data = read_toml_settings(toml_path, fields)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class TypecraftSettings(BaseSettings):
    """Settings for logging and validation tracing.

    Attributes:
        verbose: DEBUG-level logging for the ``typecraft`` logger.
        log_json: JSON log lines instead of console output.
        tracing: Record a span per validation layer.
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TYPECRAFT_",
    }

    verbose: bool = False
    log_json: bool = False
    tracing: bool = False
    config_path: Path | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> TypecraftSettings:
        """Construct settings.

        Uses *config_path* when given, otherwise discovers ``typecraft.toml``
        walking up from *start* (default: cwd). *overrides* win over every
        other source.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None


def apply_settings(settings: TypecraftSettings) -> None:
    """Configure logging and tracing from *settings*."""
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    if settings.tracing:
        enable_tracing()
    else:
        disable_tracing()
