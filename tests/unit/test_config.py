"""Unit tests for configuration loading."""

from pathlib import Path
from typing import Any

import pytest
import yaml

from svggloo.config import (
    ExportConfig,
    NamingConfig,
    SvgglooConfig,
    create_default_config,
    find_config_file,
    load_config,
    load_config_from_dict,
    substitute_env_vars,
)
from svggloo.models import ExportTarget, NamingPolicy


class TestDefaults:
    """Tests for default configuration."""

    def test_default_config(self) -> None:
        """Test defaults render to ./output without export."""
        config = SvgglooConfig()

        assert config.output.dir == "output"
        assert config.naming.fields == []
        assert config.naming.separator == "-"
        assert config.export.target is None
        assert config.export.timeout == 300
        assert config.config_path is None

    def test_default_yaml_round_trip(self) -> None:
        """Test the generated default file loads to the defaults."""
        data = yaml.safe_load(create_default_config())

        config = load_config_from_dict(data)

        assert config.output.dir == "output"
        assert config.naming.to_policy() == NamingPolicy()
        assert config.export.export_target is None
        assert config.export.timeout == 300


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict."""

    def test_minimal(self, minimal_config: dict[str, Any]) -> None:
        """Test missing sections keep their defaults."""
        config = load_config_from_dict(minimal_config)

        assert config.output.dir == "renders"
        assert config.naming.fields == []
        assert config.export.target is None

    def test_full(self, full_config: dict[str, Any]) -> None:
        """Test every section is read."""
        config = load_config_from_dict(full_config)

        assert config.output.dir == "renders"
        assert config.naming.to_policy() == NamingPolicy(
            fields=("country", "state", "city"), separator="_"
        )
        assert config.export.export_target == ExportTarget.CAIROSVG
        assert config.export.timeout == 60

    def test_empty_sections(self) -> None:
        """Test sections left empty in YAML fall back to defaults."""
        config = load_config_from_dict({"output": None, "naming": None, "export": None})

        assert config.output.dir == "output"
        assert config.naming.fields == []
        assert config.export.target is None

    def test_invalid_export_target(self) -> None:
        """Test unknown converters are rejected."""
        with pytest.raises(ValueError, match="Invalid export target"):
            load_config_from_dict({"export": {"target": "rsvg"}})

    def test_invalid_timeout(self) -> None:
        """Test non-positive timeouts are rejected."""
        with pytest.raises(ValueError, match="timeout must be positive"):
            load_config_from_dict({"export": {"timeout": 0}})

    def test_fields_must_be_list(self) -> None:
        """Test a bare string is not accepted as a field list."""
        with pytest.raises(ValueError, match="naming.fields"):
            load_config_from_dict({"naming": {"fields": "city"}})

    def test_separator_must_be_string(self) -> None:
        """Test non-string separators are rejected."""
        with pytest.raises(ValueError, match="naming.separator"):
            NamingConfig(separator=1)  # type: ignore[arg-type]

    def test_env_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test ${VAR} references are expanded."""
        monkeypatch.setenv("SVGGLOO_OUT", "/tmp/renders")

        config = load_config_from_dict({"output": {"dir": "${SVGGLOO_OUT}/pdf"}})

        assert config.output.dir == "/tmp/renders/pdf"


class TestSubstituteEnvVars:
    """Tests for substitute_env_vars."""

    def test_nested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test dicts and lists are walked."""
        monkeypatch.setenv("FIELD", "city")

        assert substitute_env_vars({"fields": ["${FIELD}", "state"], "n": 3}) == {
            "fields": ["city", "state"],
            "n": 3,
        }

    def test_unset_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unset variables are an error."""
        monkeypatch.delenv("SVGGLOO_UNSET", raising=False)

        with pytest.raises(ValueError, match="SVGGLOO_UNSET"):
            substitute_env_vars("${SVGGLOO_UNSET}")


class TestExportConfig:
    """Tests for ExportConfig."""

    def test_target_normalized(self) -> None:
        """Test target names are case-insensitive."""
        assert ExportConfig(target="Inkscape").export_target == ExportTarget.INKSCAPE

    def test_timeout_none_allowed(self) -> None:
        """Test the timeout can be disabled."""
        assert ExportConfig(timeout=None).timeout is None


class TestFindConfigFile:
    """Tests for config file discovery."""

    def test_none_found(self, tmp_path: Path) -> None:
        """Test no config file yields None."""
        assert find_config_file(tmp_path) is None

    def test_root_file(self, tmp_path: Path) -> None:
        """Test svggloo.yaml is found."""
        (tmp_path / "svggloo.yaml").write_text("output: {}\n")

        assert find_config_file(tmp_path) == (tmp_path / "svggloo.yaml").resolve()

    def test_hidden_dir_wins(self, tmp_path: Path) -> None:
        """Test .svggloo/config.yaml takes priority over svggloo.yaml."""
        (tmp_path / "svggloo.yaml").write_text("output: {}\n")
        (tmp_path / ".svggloo").mkdir()
        (tmp_path / ".svggloo" / "config.yaml").write_text("output: {}\n")

        found = find_config_file(tmp_path)

        assert found == (tmp_path / ".svggloo" / "config.yaml").resolve()


class TestLoadConfig:
    """Tests for load_config."""

    def test_explicit_path(self, tmp_path: Path, full_config: dict[str, Any]) -> None:
        """Test an explicit file is loaded and remembered."""
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.safe_dump(full_config))

        config = load_config(path)

        assert config.export.export_target == ExportTarget.CAIROSVG
        assert config.config_path == path

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        """Test a missing explicit file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_auto_discover(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the working directory is searched."""
        (tmp_path / "svggloo.yaml").write_text("output:\n  dir: found\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().output.dir == "found"

    def test_auto_discover_disabled(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test discovery can be turned off."""
        (tmp_path / "svggloo.yaml").write_text("output:\n  dir: found\n")
        monkeypatch.chdir(tmp_path)

        assert load_config(auto_discover=False).output.dir == "output"

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file loads the defaults."""
        path = tmp_path / "svggloo.yaml"
        path.write_text("")

        assert load_config(path).output.dir == "output"

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        """Test YAML syntax errors are reported as invalid config."""
        path = tmp_path / "svggloo.yaml"
        path.write_text("naming: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML in"):
            load_config(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        """Test a YAML list is not a valid config."""
        path = tmp_path / "svggloo.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(path)
