"""Tests for the document loader table."""

from pathlib import Path

import pytest

from mutator import ConfigurationError
from mutator.loaders import LOADERS, get_loader, load_document


def test_yml_is_an_alias_for_yaml():
    assert get_loader(Path("a.yml")) is LOADERS["yaml"]
    assert get_loader(Path("A.YAML")) is LOADERS["yaml"]


def test_unsupported_extension():
    with pytest.raises(ConfigurationError) as excinfo:
        get_loader(Path("settings"))

    assert excinfo.value.context["extension"] == ""


def test_load_json(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text('{"password": "x", "n": [1, 2]}', encoding="utf-8")

    assert load_document(path) == {"password": "x", "n": [1, 2]}


def test_load_yaml(tmp_path):
    path = tmp_path / "doc.yaml"
    path.write_text("password: x\nnested:\n  token: y\n", encoding="utf-8")

    assert load_document(path) == {"password": "x", "nested": {"token": "y"}}
