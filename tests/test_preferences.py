"""Test preferences and the layout config built from them"""

import json
from pathlib import Path

import pytest

from tablealign.preferences import (
    DEFAULT_PADDING,
    LayoutConfig,
    PrefKey,
    Preferences,
    initialize_preferences,
    preferences,
)


def test_preferences() -> None:
    """Test the Preferences class"""
    prefs = Preferences()
    prefs.set_default(PrefKey.TABLE_PADDING, 16)
    assert prefs.get(PrefKey.TABLE_PADDING) == 16
    prefs.set(PrefKey.TABLE_PADDING, 24)
    assert prefs.get(PrefKey.TABLE_PADDING) == 24
    assert prefs.defaults[PrefKey.TABLE_PADDING] == 16
    assert prefs.get(PrefKey.TABLE_CHARSETS) is None


def test_get_returns_copy() -> None:
    """Test changing a fetched value doesn't change the preference"""
    prefs = Preferences()
    initialize_preferences(prefs)
    charsets = prefs.get(PrefKey.TABLE_CHARSETS)
    charsets["mine"] = {"grid": "x" * 12, "vertical": "x"}
    assert prefs.get(PrefKey.TABLE_CHARSETS) == {}


def test_load(tmp_path: Path) -> None:
    """Test loading a prefs file, ignoring unknown keys"""
    prefs_file = tmp_path / "prefs.json"
    prefs_file.write_text(
        json.dumps({"table_padding": 4, "not_a_key": 1}), encoding="utf-8"
    )
    prefs = Preferences()
    initialize_preferences(prefs)
    prefs.load(str(prefs_file))
    assert prefs.get(PrefKey.TABLE_PADDING) == 4
    assert list(prefs.dict) == [PrefKey.TABLE_PADDING]

    prefs.load(str(tmp_path / "missing.json"))
    prefs.load(None)
    assert prefs.get(PrefKey.TABLE_PADDING) == 4

    prefs_file.write_text("{not json", encoding="utf-8")
    prefs.load(str(prefs_file))
    assert prefs.get(PrefKey.TABLE_PADDING) == 4


def test_layout_config_from_preferences() -> None:
    """Test the config reflects preferences, including extra charsets"""
    config = LayoutConfig.from_preferences(preferences)
    assert config.padding == DEFAULT_PADDING
    assert not config.full_height_bar
    assert config.default_dialect == "markdown"
    assert len(config.charsets) == 2

    preferences.set(PrefKey.TABLE_PADDING, 8)
    preferences.set(PrefKey.TABLE_DEFAULT_DIALECT, "org")
    preferences.set(
        PrefKey.TABLE_CHARSETS,
        {
            "heavy": {"grid": "┏━┳┓┣━╋┫┗━┻┛", "vertical": "┃"},
            "broken": {"grid": "+-+", "vertical": "|"},
            "incomplete": {"grid": "+-+++-+++-++"},
        },
    )
    config = LayoutConfig.from_preferences(preferences)
    assert config.padding == 8
    assert config.default_dialect == "org"
    assert len(config.charsets) == 3
    heavy = config.charsets.get("heavy")
    assert heavy is not None and heavy.vertical == "┃"
    assert config.charsets.match_rule("┏━━┳━━┓") is heavy
    assert config.charsets.get("broken") is None


def test_layout_config_validation() -> None:
    """Test invalid config values are refused"""
    with pytest.raises(ValueError):
        LayoutConfig(padding=-1)
    with pytest.raises(ValueError):
        LayoutConfig(default_dialect="rst")
