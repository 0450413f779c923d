"""Tests for configuration management."""

import pytest
from pathlib import Path
from numfmt.config import (
    Config,
    GeneralConfig,
    ProfileConfig,
    parse_options,
    _find_config_file,
    _parse_string_to_int,
)
from numfmt.formatter import FormatOptions
from numfmt.presets import CURRENCY_OPTIONS


VALID_CONFIG = """
general:
  log_level: "debug"
  log_file: logs/numfmt.log

formatters:
  usd:
    preset: currency
  eur:
    group_separator: "."
    decimal_separator: ","
    round_places: 2
    min_decimal_places: 2
    template: "n €"
  ratio:
    preset: percent
    round_places: "1"
  plain:
"""


class TestGeneralConfig:
    """Tests for GeneralConfig dataclass."""

    def test_default_log_level(self):
        """Test default log level."""
        assert GeneralConfig().log_level == "INFO"

    def test_log_level_normalization(self):
        """Test that log level is normalized to uppercase."""
        config = GeneralConfig(log_level="warning")
        assert config.log_level == "WARNING"

    def test_invalid_log_level(self):
        """Test that invalid log level raises error."""
        with pytest.raises(ValueError, match="Log level must be one of"):
            GeneralConfig(log_level="LOUD")

    def test_default_log_file(self):
        """Test that file logging is off by default."""
        assert GeneralConfig().log_file is None

    def test_invalid_log_file(self):
        """Test that a non-string log file raises error."""
        with pytest.raises(ValueError, match="Log file must be a string"):
            GeneralConfig(log_file=5)


class TestProfileConfig:
    """Tests for ProfileConfig dataclass."""

    def test_valid_profile(self):
        """Test creating a valid profile."""
        profile = ProfileConfig(name="usd", options=CURRENCY_OPTIONS)
        assert profile.name == "usd"
        assert profile.options is CURRENCY_OPTIONS

    def test_missing_name(self):
        """Test that a missing name raises error."""
        with pytest.raises(ValueError, match="Profile name is required"):
            ProfileConfig(name="", options=FormatOptions())


class TestParseOptions:
    """Tests for parse_options function."""

    def test_empty_mapping_gives_defaults(self):
        """Test that no options means default options."""
        assert parse_options({}) == FormatOptions()

    def test_preset_with_override(self):
        """Test that explicit options override the preset."""
        options = parse_options({"preset": "currency", "round_places": 2})

        assert options.template == CURRENCY_OPTIONS.template
        assert options.min_decimal_places == 2
        assert options.round_places == 2

    def test_integer_strings(self):
        """Test that integer options accept integer strings."""
        options = parse_options({"shift": "2", "group_size": " 4 "})

        assert options.shift == 2
        assert options.group_size == 4

    def test_null_text_option_is_empty(self):
        """Test that a null separator disables it."""
        assert parse_options({"group_separator": None}).group_separator == ""

    def test_null_round_places(self):
        """Test that null round_places means no rounding."""
        assert parse_options({"round_places": None}).round_places is None

    def test_unknown_option(self):
        """Test that unknown options raise error."""
        with pytest.raises(ValueError, match="Unknown option 'places' in profile 'x'"):
            parse_options({"places": 2}, profile="x")

    def test_unknown_preset(self):
        """Test that unknown presets raise error."""
        with pytest.raises(ValueError, match="Preset must be one of"):
            parse_options({"preset": "btc"})

    def test_invalid_integer(self):
        """Test that non-integer values raise error."""
        with pytest.raises(ValueError, match="'shift' must be an integer"):
            parse_options({"shift": "two"})

    def test_not_a_mapping(self):
        """Test that a profile must be a mapping."""
        with pytest.raises(ValueError, match="must be a mapping"):
            parse_options(["n"], profile="bad")

    def test_negative_min_decimal_places(self):
        """Test that FormatOptions validation applies."""
        with pytest.raises(ValueError, match="cannot be negative"):
            parse_options({"min_decimal_places": -1})


class TestParseStringToInt:
    """Tests for _parse_string_to_int function."""

    @pytest.mark.parametrize("value,expected", [(3, 3), ("3", 3), ("-2", -2)])
    def test_valid(self, value, expected):
        """Test parsing integers and integer strings."""
        assert _parse_string_to_int("x", value) == expected

    @pytest.mark.parametrize("value", [True, 2.5, "2.5", "", None])
    def test_invalid(self, value):
        """Test that other values raise error."""
        with pytest.raises(ValueError, match="must be an integer"):
            _parse_string_to_int("x", value)


class TestConfigLoad:
    """Tests for Config.load() method."""

    def test_load_valid_config(self, tmp_path):
        """Test loading valid config file."""
        config_file = tmp_path / "numfmt.yaml"
        config_file.write_text(VALID_CONFIG, encoding="utf-8")

        config = Config.load(str(config_file))

        assert config.general.log_level == "DEBUG"
        assert config.general.log_file == "logs/numfmt.log"
        assert config.profile_names() == ["usd", "eur", "ratio", "plain"]
        assert config.profiles["usd"].options == CURRENCY_OPTIONS
        assert config.profiles["ratio"].options.round_places == 1
        assert config.profiles["plain"].options == FormatOptions()

    def test_formatter_for_profile(self, tmp_path):
        """Test formatting through loaded profiles."""
        config_file = tmp_path / "numfmt.yaml"
        config_file.write_text(VALID_CONFIG, encoding="utf-8")

        config = Config.load(str(config_file))

        assert config.formatter("usd").format("-123") == "-$123.00"
        assert config.formatter("eur").format("1234567.891") == "1.234.567,89 €"
        assert config.formatter("eur").format("-5") == "-5,00 €"
        assert config.formatter("ratio").format("0.12345") == "12.3%"

    def test_unknown_profile(self, tmp_path):
        """Test that unknown profile names raise KeyError."""
        config_file = tmp_path / "numfmt.yaml"
        config_file.write_text(VALID_CONFIG, encoding="utf-8")

        config = Config.load(str(config_file))

        with pytest.raises(KeyError, match="Unknown formatter profile"):
            config.formatter("gbp")

    def test_general_section_optional(self, tmp_path):
        """Test that the general section may be omitted."""
        config_file = tmp_path / "numfmt.yaml"
        config_file.write_text("formatters:\n  usd:\n    preset: currency\n")

        config = Config.load(str(config_file))

        assert config.general.log_level == "INFO"
        assert config.general.log_file is None

    def test_missing_formatters_section(self, tmp_path):
        """Test that missing formatters section raises error."""
        config_file = tmp_path / "numfmt.yaml"
        config_file.write_text("general:\n  log_level: INFO\n")

        with pytest.raises(ValueError, match="Missing 'formatters' section"):
            Config.load(str(config_file))

    def test_empty_file(self, tmp_path):
        """Test that empty config file raises error."""
        config_file = tmp_path / "numfmt.yaml"
        config_file.write_text("")

        with pytest.raises(ValueError, match="Config file is empty"):
            Config.load(str(config_file))

    def test_non_mapping_file(self, tmp_path):
        """Test that a YAML list raises error."""
        config_file = tmp_path / "numfmt.yaml"
        config_file.write_text("- usd\n- eur\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            Config.load(str(config_file))

    def test_missing_explicit_file(self, tmp_path):
        """Test that a missing explicit path raises error."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            Config.load(str(tmp_path / "missing.yaml"))


class TestFindConfigFile:
    """Tests for _find_config_file function."""

    def test_env_var(self, tmp_path, monkeypatch):
        """Test that NUMFMT_CONFIG_PATH is used."""
        config_file = tmp_path / "custom.yaml"
        config_file.write_text(VALID_CONFIG, encoding="utf-8")
        monkeypatch.setenv("NUMFMT_CONFIG_PATH", str(config_file))

        assert _find_config_file(None) == str(config_file)

    def test_default_location(self, tmp_path, monkeypatch):
        """Test that numfmt.yaml in the working directory is found."""
        monkeypatch.delenv("NUMFMT_CONFIG_PATH", raising=False)
        monkeypatch.chdir(tmp_path)
        Path("numfmt.yaml").write_text(VALID_CONFIG, encoding="utf-8")

        assert _find_config_file(None) == "numfmt.yaml"

    def test_nested_default_location(self, tmp_path, monkeypatch):
        """Test that config/numfmt.yaml is found."""
        monkeypatch.delenv("NUMFMT_CONFIG_PATH", raising=False)
        monkeypatch.chdir(tmp_path)
        Path("config").mkdir()
        Path("config/numfmt.yaml").write_text(VALID_CONFIG, encoding="utf-8")

        assert _find_config_file(None) == "config/numfmt.yaml"

    def test_nothing_found(self, tmp_path, monkeypatch):
        """Test that missing config raises error listing locations."""
        monkeypatch.delenv("NUMFMT_CONFIG_PATH", raising=False)
        monkeypatch.chdir(tmp_path)

        with pytest.raises(FileNotFoundError, match="NUMFMT_CONFIG_PATH"):
            _find_config_file(None)
