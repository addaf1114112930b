"""Layered settings for a Castors instance and the CLI.

Sources, strongest first: keyword overrides (CLI flags), ``CASTORS_*``
environment variables (``__`` separates nested keys, e.g.
``CASTORS_SEQUENCE__SEPARATOR``), the ``castors.toml`` file, and finally
the defaults baked into :mod:`castors.config.models`.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ImportString
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from castors.config.discovery import find_config
from castors.config.models import (
    BooleanConfig,
    CastorsConfig,
    DatetimeConfig,
    PluginsConfig,
    SequenceConfig,
)

# The file in effect while a CastorsSettings is being constructed.
_active_toml: ContextVar[Path | None] = ContextVar("castors_active_toml", default=None)


def _read_toml(path: Path | None) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one ``castors.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self.path = path
        self.data = _read_toml(path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self.data.get(field_name), field_name, field_name in self.data

    def __call__(self) -> dict[str, Any]:
        return dict(self.data)


class CastorsSettings(BaseSettings):
    """Everything a CLI run or an embedding application can configure.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        json_output: CLI commands print JSON instead of text and tables.
        verbose: DEBUG for the ``castors`` logger.
        log_json: Log lines as JSON instead of console output.
        anchors: Extra discovery anchors, as import strings.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CASTORS_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    anchors: list[ImportString[Any]] = Field(default_factory=list)
    datetime: DatetimeConfig = Field(default_factory=DatetimeConfig)
    boolean: BooleanConfig = Field(default_factory=BooleanConfig)
    sequence: SequenceConfig = Field(default_factory=SequenceConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        search_root: Path | None = None,
        **overrides: Any,
    ) -> CastorsSettings:
        """Build settings for one CLI invocation or library bootstrap.

        An explicit *config_path* that does not exist means no file at all;
        otherwise ``castors.toml`` is looked up from *search_root* (default:
        the working directory). *overrides* beat every other source.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(search_root)

        token = _active_toml.set(toml_path)
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _active_toml.reset(token)

    def to_config(self) -> CastorsConfig:
        """The converter-facing sections as a :class:`CastorsConfig`."""
        return CastorsConfig(
            anchors=list(self.anchors),
            datetime=self.datetime,
            boolean=self.boolean,
            sequence=self.sequence,
            plugins=self.plugins,
        )
