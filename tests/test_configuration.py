"""
Load options configuration tests for envresolve.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from envresolve.configuration import load_load_options, parse_override_pairs
from envresolve.models import LoadOptions


def test_load_options_defaults():
    """
    Defaults load a single .env file with interpolation.
    """
    options = LoadOptions()
    assert options.files == [".env"]
    assert options.interpolate is True
    assert options.merge_with_process is False
    assert options.required_files is False


def test_load_options_rejects_unknown_fields_and_empty_files():
    """
    The schema forbids unknown fields, empty file lists and blank paths.
    """
    with pytest.raises(ValidationError):
        LoadOptions.model_validate({"files": [".env"], "unknown": True})
    with pytest.raises(ValidationError):
        LoadOptions(files=[])
    with pytest.raises(ValidationError):
        LoadOptions(files=["  "])


def test_load_load_options_from_yaml(tmp_path):
    """
    A YAML mapping is validated into load options.
    """
    path = tmp_path / "envresolve.yml"
    path.write_text(
        "files:\n  - .env\n  - .env.local\ninterpolate: false\nmerge_with_process: true\n",
        encoding="utf-8",
    )
    options = load_load_options(path)
    assert options.files == [".env", ".env.local"]
    assert options.interpolate is False
    assert options.merge_with_process is True


def test_load_load_options_empty_file_uses_defaults(tmp_path):
    """
    An empty YAML file yields default options.
    """
    path = tmp_path / "envresolve.yml"
    path.write_text("", encoding="utf-8")
    assert load_load_options(path) == LoadOptions()


def test_load_load_options_missing_file(tmp_path):
    """
    A missing options file raises FileNotFoundError.
    """
    with pytest.raises(FileNotFoundError, match="Load options file not found"):
        load_load_options(tmp_path / "absent.yml")


def test_load_load_options_requires_mapping(tmp_path):
    """
    A YAML document that is not a mapping is rejected.
    """
    path = tmp_path / "envresolve.yml"
    path.write_text("- .env\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_load_options(path)


def test_parse_override_pairs():
    """
    Overrides are literal key=value pairs; later pairs win.
    """
    overrides = parse_override_pairs(["A=1", "B= spaced = value", "A=2", "C="])
    assert overrides == {"A": "2", "B": " spaced = value", "C": ""}
    assert parse_override_pairs(None) == {}


@pytest.mark.parametrize("pair", ["NOEQUALS", "1BAD=x", "=x", "BAD-KEY=x"])
def test_parse_override_pairs_rejects_invalid(pair):
    """
    Pairs without an equals sign or with an invalid key are rejected.
    """
    with pytest.raises(ValueError):
        parse_override_pairs([pair])
