"""Unit tests for config loading and CLI override merging."""

from pathlib import Path

import pytest

from json_objects_csv.config import (
    build_flatten_config,
    deep_get,
    load_config,
    parse_array_formatting,
    pick,
    read_delimiter,
)
from json_objects_csv.flattener import FlattenConfig, Plain, Surrounded


class TestDeepGet:
    """Tests for deep_get helper function."""

    def test_nested_keys(self) -> None:
        """Test nested key access."""
        assert deep_get({"a": {"b": {"c": 3}}}, ["a", "b", "c"]) == 3

    def test_missing_key_returns_default(self) -> None:
        """Test missing key returns default value."""
        assert deep_get({"a": 1}, ["b"]) is None
        assert deep_get({"a": 1}, ["a", "b"], "default") == "default"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid_config(self, tmp_path: Path) -> None:
        """Test loading a valid YAML config."""
        config_file = tmp_path / "config.yml"
        config_file.write_text("flatten:\n  key_separator: _\ncsv:\n  delimiter: ';'\n")
        cfg = load_config(config_file)
        assert cfg["flatten"]["key_separator"] == "_"
        assert cfg["csv"]["delimiter"] == ";"

    def test_load_missing_config_raises(self, tmp_path: Path) -> None:
        """Test loading missing config raises SystemExit."""
        with pytest.raises(SystemExit, match="config file not found"):
            load_config(tmp_path / "nonexistent.yml")

    def test_load_empty_config_returns_empty_dict(self, tmp_path: Path) -> None:
        """Test empty config returns empty dict."""
        config_file = tmp_path / "empty.yml"
        config_file.write_text("")
        assert load_config(config_file) == {}


class TestBuildFlattenConfig:
    """Tests for build_flatten_config function."""

    def test_defaults(self) -> None:
        assert build_flatten_config({}) == FlattenConfig()

    def test_from_config(self) -> None:
        cfg = {
            "flatten": {
                "key_separator": "/",
                "array_formatting": {"start": "<", "end": ">"},
                "preserve_empty_arrays": False,
            }
        }
        config = build_flatten_config(cfg)
        assert config.key_separator == "/"
        assert config.array_formatting == Surrounded("<", ">")
        assert config.preserve_empty_arrays is False
        assert config.preserve_empty_objects is True

    def test_cli_overrides_config(self) -> None:
        cfg = {"flatten": {"key_separator": "/", "array_formatting": "surrounded"}}
        overrides = {"key_separator": "_", "array_formatting": Plain(), "preserve_empty_objects": None}
        config = build_flatten_config(cfg, overrides)
        assert config.key_separator == "_"
        assert config.array_formatting == Plain()
        assert config.preserve_empty_objects is True


def test_pick_precedence() -> None:
    assert pick("cli", "cfg", "default") == "cli"
    assert pick(None, "cfg", "default") == "cfg"
    assert pick(None, None, "default") == "default"
    assert pick(False, True, True) is False


@pytest.mark.parametrize(
    "value, expected",
    [
        ("plain", Plain()),
        ("Surrounded", Surrounded("[", "]")),
        ({"start": "(", "end": ")"}, Surrounded("(", ")")),
    ],
)
def test_parse_array_formatting(value, expected) -> None:
    assert parse_array_formatting(value) == expected


def test_parse_array_formatting_invalid() -> None:
    with pytest.raises(ValueError, match="array_formatting"):
        parse_array_formatting("index")


def test_read_delimiter() -> None:
    assert read_delimiter({}) == ","
    assert read_delimiter({"csv": {"delimiter": ";"}}) == ";"
    assert read_delimiter({"csv": {"delimiter": ";"}}, "|") == "|"
    assert read_delimiter({}, "\\t") == "\t"
    with pytest.raises(ValueError, match="delimiter"):
        read_delimiter({}, ";;")
