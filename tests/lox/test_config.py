"""Tests for Lox configuration loading."""

import pytest

from lox import LoxConfig


@pytest.fixture
def write_config(tmp_path):
    """Write configuration text to a temporary file and return its path."""
    def _write(text: str) -> str:
        path = tmp_path / "lox.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


class TestConfigValues:
    """Test configuration defaults and validation."""

    def test_defaults(self):
        """Test the default settings."""
        config = LoxConfig()
        assert config.max_nesting == 64
        assert config.max_depth == 200
        assert config.prompt == "> "

    @pytest.mark.parametrize("kwargs", [
        {"max_nesting": 0},
        {"max_depth": -1},
        {"max_depth": True},
        {"max_nesting": 2.5},
        {"max_depth": "10"},
        {"prompt": 3},
    ])
    def test_invalid_values(self, kwargs):
        """Test that invalid settings are rejected."""
        with pytest.raises(ValueError):
            LoxConfig(**kwargs)


class TestConfigLoading:
    """Test loading configuration from YAML files."""

    def test_load_values(self, write_config):
        """Test that file settings override the defaults."""
        config = LoxConfig.load_from_file(write_config('max_nesting: 10\nprompt: "lox> "\n'))
        assert config.max_nesting == 10
        assert config.max_depth == 200
        assert config.prompt == "lox> "

    def test_empty_file_gives_defaults(self, write_config):
        """Test that an empty file means all defaults."""
        assert LoxConfig.load_from_file(write_config("")) == LoxConfig()

    def test_missing_file(self, tmp_path):
        """Test that a missing file is reported."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            LoxConfig.load_from_file(str(tmp_path / "absent.yaml"))

    def test_not_a_mapping(self, write_config):
        """Test that the file must hold a mapping."""
        with pytest.raises(ValueError, match="must contain a mapping"):
            LoxConfig.load_from_file(write_config("- 1\n- 2\n"))

    def test_unknown_setting(self, write_config):
        """Test that unknown settings are rejected by name."""
        with pytest.raises(ValueError, match="Unknown configuration settings: bogus, extra"):
            LoxConfig.load_from_file(write_config("extra: 1\nbogus: 2\n"))

    def test_invalid_yaml(self, write_config):
        """Test that malformed YAML is reported as a value error."""
        with pytest.raises(ValueError, match="Invalid YAML"):
            LoxConfig.load_from_file(write_config("max_depth: [1\n"))

    def test_invalid_value_in_file(self, write_config):
        """Test that values from the file are validated."""
        with pytest.raises(ValueError, match="max_depth must be a positive integer"):
            LoxConfig.load_from_file(write_config("max_depth: 0\n"))
