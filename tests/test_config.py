"""Tests for settings loading."""

import pytest

from upgrade_lint.config import Settings, load_settings
from upgrade_lint.error_codes import ErrorCode
from upgrade_lint.exceptions import ConfigurationError


class TestSettings:
    """Test defaults and environment handling."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.output_format == "table"
        assert settings.checks == ["*"]
        assert settings.timeout_seconds == 300
        assert settings.qps == 50
        assert settings.burst == 100
        assert settings.fail_on_blocking is True
        assert settings.fail_on_advisory is False
        assert settings.log_level == "WARNING"

    def test_environment_variables(self, monkeypatch) -> None:
        monkeypatch.setenv("UPGRADE_LINT_OUTPUT_FORMAT", "JSON")
        monkeypatch.setenv("UPGRADE_LINT_CHECKS", "components, workloads.*")
        monkeypatch.setenv("UPGRADE_LINT_TIMEOUT_SECONDS", "45")

        settings = Settings()

        assert settings.output_format == "json"
        assert settings.checks == ["components", "workloads.*"]
        assert settings.timeout_seconds == 45

    @pytest.mark.parametrize(
        ("field", "value"),
        [("timeout_seconds", 0), ("qps", -1), ("burst", 0), ("log_level", "LOUD")],
    )
    def test_invalid_values(self, field, value) -> None:
        with pytest.raises(ValueError):
            Settings(**{field: value})


class TestLoadSettings:
    """Test YAML config discovery and precedence."""

    def test_no_file_uses_defaults(self) -> None:
        assert load_settings().output_format == "table"

    def test_default_file_in_working_directory(self, tmp_path) -> None:
        (tmp_path / "upgrade-lint.yaml").write_text(
            "output_format: yaml\nchecks:\n  - components\nfail_on_advisory: true\n",
            encoding="utf-8",
        )

        settings = load_settings()

        assert settings.output_format == "yaml"
        assert settings.checks == ["components"]
        assert settings.fail_on_advisory is True

    def test_config_env_var(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("qps: 5\nburst: 10\n", encoding="utf-8")
        monkeypatch.setenv("UPGRADE_LINT_CONFIG", str(path))

        settings = load_settings()

        assert (settings.qps, settings.burst) == (5, 10)

    def test_environment_beats_file(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "upgrade-lint.yaml"
        path.write_text("output_format: yaml\n", encoding="utf-8")
        monkeypatch.setenv("UPGRADE_LINT_OUTPUT_FORMAT", "json")

        assert load_settings(path).output_format == "json"

    def test_explicit_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_settings(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("checks: [components\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(path)

        assert exc_info.value.error_code == ErrorCode.CFG_PARSE.value
        assert "YAML syntax" in exc_info.value.suggestion

    def test_top_level_must_be_mapping(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_settings(path)

    def test_invalid_value_names_key(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("output_format: xml\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="output_format"):
            load_settings(path)
