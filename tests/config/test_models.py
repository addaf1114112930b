"""Tests for config models — defaults and sparse overrides."""

import pytest
from pydantic import ValidationError

from castors.config.models import ENTRY_POINT_GROUP, CastorsConfig, DatetimeConfig
from castors.converters.builtins import (
    DEFAULT_DATETIME_FORMATS,
    DEFAULT_TRUE_WORDS,
    ObjectToObject,
)


class TestCastorsConfig:
    def test_full_defaults(self) -> None:
        cfg = CastorsConfig()
        assert cfg.anchors == []
        assert cfg.datetime.formats == list(DEFAULT_DATETIME_FORMATS)
        assert set(cfg.boolean.true_words) == DEFAULT_TRUE_WORDS
        assert cfg.sequence.separator == ","
        assert cfg.plugins.entry_points is True
        assert cfg.plugins.group == ENTRY_POINT_GROUP
        assert cfg.plugins.local_dir is None

    def test_sparse_override(self) -> None:
        """Only override fields you care about — rest keeps defaults."""
        cfg = CastorsConfig.model_validate({"plugins": {"entry_points": False}})
        assert cfg.plugins.entry_points is False
        assert cfg.plugins.group == ENTRY_POINT_GROUP  # default preserved

    def test_anchor_import_strings(self) -> None:
        cfg = CastorsConfig.model_validate(
            {"anchors": ["castors.converters.builtins.ObjectToObject"]}
        )
        assert cfg.anchors == [ObjectToObject]

    def test_frozen(self) -> None:
        cfg = CastorsConfig()
        with pytest.raises(ValidationError):
            cfg.anchors = []  # type: ignore[misc]


class TestDatetimeConfig:
    def test_override_formats(self) -> None:
        cfg = DatetimeConfig.model_validate({"formats": ["%d/%m/%Y"]})
        assert cfg.formats == ["%d/%m/%Y"]
