"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, castors.toml only contains overrides.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ImportString

from castors.converters.builtins import (
    DEFAULT_DATETIME_FORMATS,
    DEFAULT_FALSE_WORDS,
    DEFAULT_TRUE_WORDS,
)

ENTRY_POINT_GROUP = "castors.converters"


class DatetimeConfig(BaseModel):
    """[datetime] section."""

    model_config = {"frozen": True}

    formats: list[str] = Field(default_factory=lambda: list(DEFAULT_DATETIME_FORMATS))


class BooleanConfig(BaseModel):
    """[boolean] section."""

    model_config = {"frozen": True}

    true_words: list[str] = Field(default_factory=lambda: sorted(DEFAULT_TRUE_WORDS))
    false_words: list[str] = Field(default_factory=lambda: sorted(DEFAULT_FALSE_WORDS))


class SequenceConfig(BaseModel):
    """[sequence] section."""

    model_config = {"frozen": True}

    separator: str = ","


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    entry_points: bool = True
    group: str = ENTRY_POINT_GROUP
    local_dir: Path | None = None


class CastorsConfig(BaseModel):
    """Root configuration composing all sections.

    ``anchors`` holds import strings of marker types; every converter
    defined in a marker's package is discovered. Empty means the bundled
    converters.
    """

    model_config = {"frozen": True}

    anchors: list[ImportString[Any]] = Field(default_factory=list)
    datetime: DatetimeConfig = Field(default_factory=DatetimeConfig)
    boolean: BooleanConfig = Field(default_factory=BooleanConfig)
    sequence: SequenceConfig = Field(default_factory=SequenceConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
