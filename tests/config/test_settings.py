"""Tests for CastorsSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from castors.config.models import CastorsConfig
from castors.config.settings import CastorsSettings
from castors.converters.builtins import ObjectToString

pytestmark = pytest.mark.usefixtures("_isolated_config")


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = CastorsSettings.from_cli(search_root=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.to_config() == CastorsConfig()

    def test_frozen(self, tmp_path: Path) -> None:
        settings = CastorsSettings.from_cli(search_root=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "castors.toml"
        toml.write_text("[sequence]\nseparator = ';'\n[boolean]\ntrue_words = ['si']\n")
        settings = CastorsSettings.from_cli(search_root=tmp_path)
        assert settings.sequence.separator == ";"
        assert settings.boolean.true_words == ["si"]
        assert settings.plugins.entry_points is True  # default preserved
        assert settings.config_path == toml.resolve()

    def test_discovered_from_subdirectory(self, tmp_path: Path) -> None:
        (tmp_path / "castors.toml").write_text("verbose = true\n")
        child = tmp_path / "pkg" / "mod"
        child.mkdir(parents=True)
        assert CastorsSettings.from_cli(search_root=child).verbose is True

    def test_anchors_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "castors.toml").write_text(
            'anchors = ["castors.converters.builtins.ObjectToString"]\n'
        )
        settings = CastorsSettings.from_cli(search_root=tmp_path)
        assert settings.to_config().anchors == [ObjectToString]

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[sequence]\nseparator = '|'\n")
        settings = CastorsSettings.from_cli(config_path=str(custom))
        assert settings.sequence.separator == "|"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "castors.toml").write_text("[sequence\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            CastorsSettings.from_cli(search_root=tmp_path)


class TestCliFlags:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = CastorsSettings.from_cli(
            search_root=tmp_path, json_output=True, verbose=True, log_json=True
        )
        assert settings.json_output is True
        assert settings.verbose is True
        assert settings.log_json is True

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        """CLI flags take priority over TOML values."""
        (tmp_path / "castors.toml").write_text("verbose = true\n")
        settings = CastorsSettings.from_cli(search_root=tmp_path, verbose=False)
        assert settings.verbose is False


class TestEnvVars:
    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CASTORS_JSON_OUTPUT", "true")
        assert CastorsSettings.from_cli(search_root=tmp_path).json_output is True

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "castors.toml").write_text("[sequence]\nseparator = ';'\n")
        monkeypatch.setenv("CASTORS_SEQUENCE__SEPARATOR", "/")
        settings = CastorsSettings.from_cli(search_root=tmp_path)
        assert settings.sequence.separator == "/"

    def test_nested_env_var_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CASTORS_PLUGINS__ENTRY_POINTS", "false")
        settings = CastorsSettings.from_cli(search_root=tmp_path)
        assert settings.plugins.entry_points is False
