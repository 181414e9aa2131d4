import json

import pytest

from .config import FormatConfig


def test_defaults() -> None:
    config = FormatConfig()
    assert config.indent == 0
    assert config.label_indent == 0
    assert config.operator_spacing is False


def test_save_and_load(tmp_path) -> None:
    path = tmp_path / "format.json"
    FormatConfig(indent=4, operator_spacing=True).save(str(path))
    assert json.loads(path.read_text()) == {
        "indent": 4,
        "label_indent": 0,
        "operator_spacing": True,
    }
    assert FormatConfig.load(str(path)) == FormatConfig(indent=4, operator_spacing=True)


def test_unknown_keys_are_ignored() -> None:
    config = FormatConfig.from_dict({"indent": 2, "theme": "dark"})
    assert config == FormatConfig(indent=2)


def test_negative_indent_is_rejected() -> None:
    with pytest.raises(ValueError):
        FormatConfig(indent=-1)


def test_load_rejects_non_object(tmp_path) -> None:
    path = tmp_path / "format.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        FormatConfig.load(str(path))
