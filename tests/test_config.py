"""Tests for configuration module."""

import pytest

from reqlens.config import (
    ConfigError,
    ReqlensConfig,
    find_config_path,
    get_default_config_yaml,
    load_config,
    save_config_value,
    validate_config,
)


class TestReqlensConfigDefaults:
    """Tests for ReqlensConfig default values."""

    def test_defaults(self):
        config = ReqlensConfig()
        assert config.request_timeout == 30.0
        assert config.probe_timeout == 5.0
        assert config.verify_ssl is True
        assert config.follow_redirects is False
        assert config.proxy is None
        assert config.default_headers == {}
        assert config.body_preview_length == 500
        assert config.analysis_preview_length == 1000
        assert config.waterfall_width == 60
        assert config.show_analysis is True

    def test_headers_not_shared(self):
        a = ReqlensConfig()
        a.default_headers["X"] = "1"
        assert ReqlensConfig().default_headers == {}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_no_file_returns_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == ReqlensConfig()

    def test_explicit_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            load_config(tmp_path / "missing.yaml")

    def test_load_wrapped(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text(
            "reqlens:\n"
            "  request_timeout: 10\n"
            "  verify_ssl: false\n"
            "  default_headers:\n"
            "    User-Agent: test-agent\n"
            "  waterfall_width: 40\n"
        )
        config = load_config(path)
        assert config.request_timeout == 10.0
        assert config.verify_ssl is False
        assert config.default_headers == {"User-Agent": "test-agent"}
        assert config.waterfall_width == 40

    def test_load_flat(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("proxy: http://127.0.0.1:8080\nshow_analysis: false\n")
        config = load_config(path)
        assert config.proxy == "http://127.0.0.1:8080"
        assert config.show_analysis is False

    def test_auto_discovery(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".reqlens.yml").write_text("probe_timeout: 2.5\n")
        assert load_config().probe_timeout == 2.5

    def test_empty_file(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text("")
        assert load_config(path) == ReqlensConfig()

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text("bogus: 1\nrequest_timeout: 3\n")
        assert load_config(path).request_timeout == 3.0

    def test_invalid_yaml_exits(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text("reqlens: [unclosed\n")
        with pytest.raises(SystemExit):
            load_config(path)

    def test_invalid_value_exits(self, tmp_path, capsys):
        path = tmp_path / "reqlens.yaml"
        path.write_text("request_timeout: -1\n")
        with pytest.raises(SystemExit):
            load_config(path)
        assert "must be positive" in capsys.readouterr().err

    def test_not_a_mapping_exits(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(SystemExit):
            load_config(path)


class TestFindConfigPath:
    def test_none(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert find_config_path() is None

    def test_priority(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".reqlens.yaml").write_text("")
        (tmp_path / "reqlens.yaml").write_text("")
        assert find_config_path() == tmp_path / "reqlens.yaml"


class TestValidateConfig:
    def test_valid_default(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text(get_default_config_yaml())
        assert validate_config(path) == []

    def test_errors(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text(
            "request_timeout: abc\n"
            "verify_ssl: maybe\n"
            "default_headers: [a]\n"
            "typo_key: 1\n"
        )
        errors = validate_config(path)
        assert len(errors) == 4
        assert any("request_timeout" in e for e in errors)
        assert any("verify_ssl" in e for e in errors)
        assert any("default_headers" in e for e in errors)
        assert any("typo_key" in e for e in errors)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text("a: [\n")
        errors = validate_config(path)
        assert len(errors) == 1
        assert "Invalid YAML" in errors[0]


class TestSaveConfigValue:
    def test_set_number(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text(get_default_config_yaml())
        save_config_value(path, "request_timeout", "12")
        assert load_config(path).request_timeout == 12.0

    def test_preserves_comments(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text(get_default_config_yaml())
        save_config_value(path, "verify_ssl", "false")
        text = path.read_text()
        assert "# Verify TLS certificates" in text
        assert load_config(path).verify_ssl is False

    def test_set_header(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text(get_default_config_yaml())
        save_config_value(path, "default_headers.User-Agent", "my-agent")
        assert load_config(path).default_headers == {"User-Agent": "my-agent"}

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text("reqlens: {}\n")
        with pytest.raises(ConfigError, match="Unknown key"):
            save_config_value(path, "nope", "1")

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text("reqlens: {}\n")
        with pytest.raises(ConfigError):
            save_config_value(path, "waterfall_width", "wide")


class TestDefaultConfigYaml:
    def test_contains_keys(self):
        text = get_default_config_yaml()
        for key in ("request_timeout", "probe_timeout", "verify_ssl", "default_headers", "waterfall_width"):
            assert key in text

    def test_loads_to_defaults(self, tmp_path):
        path = tmp_path / "reqlens.yaml"
        path.write_text(get_default_config_yaml())
        assert load_config(path) == ReqlensConfig()
