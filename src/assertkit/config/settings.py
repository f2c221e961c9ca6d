"""Unified settings — env vars and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — explicit overrides (e.g. pytest command-line flags)
  2. Env vars     — ``ASSERTKIT_*`` prefix
  3. TOML file    — ``assertkit.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`assertkit.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from assertkit.config.discovery import find_config, read_toml
from assertkit.config.models import CompareConfig, HttpConfig, ReportConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``assertkit.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class AssertSettings(BaseSettings):
    """Unified settings for assertkit.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        verbose: Emit DEBUG-level structured logs from assertkit.
        log_json: Render logs as JSON lines instead of console output.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ASSERTKIT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    verbose: bool = False
    log_json: bool = False

    compare: CompareConfig = Field(default_factory=CompareConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)

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
    ) -> AssertSettings:
        """Construct settings from the environment and config file.

        Discovers ``assertkit.toml`` via walk-up from *start* (or uses the
        explicit *config_path*) and applies *overrides* with top priority.
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


_active: AssertSettings | None = None


def get_settings() -> AssertSettings:
    """Return the active settings, loading them on first use."""
    global _active
    if _active is None:
        _active = AssertSettings.load()
    return _active


def use_settings(settings: AssertSettings) -> None:
    """Make *settings* the active settings (e.g. built from pytest options)."""
    global _active
    _active = settings


def reset_settings() -> None:
    """Drop the active settings so the next :func:`get_settings` reloads them."""
    global _active
    _active = None
