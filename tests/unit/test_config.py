# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for configuration snapshots and settings files."""

import json
import logging
from pathlib import Path

import pytest

from rco.config import ConfigError, OutlineConfig, load_settings


def test_cfg_001_defaults() -> None:
    config = OutlineConfig.from_settings({})

    assert config == OutlineConfig(max_depth=2, show_fragments=True, show_hooks=True)


def test_cfg_002_bare_dotted_and_nested_keys() -> None:
    assert OutlineConfig.from_settings({"maxJSXDepth": 4}).max_depth == 4
    dotted = OutlineConfig.from_settings({"reactOutline.showFragments": False})
    assert dotted.show_fragments is False
    assert (
        OutlineConfig.from_settings({"reactOutline": {"showHooks": False}}).show_hooks
        is False
    )


def test_cfg_003_dotted_key_wins_over_bare_key() -> None:
    config = OutlineConfig.from_settings(
        {"maxJSXDepth": 1, "reactOutline.maxJSXDepth": 5}
    )

    assert config.max_depth == 5


def test_cfg_004_wrong_types_fall_back_with_warning(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="rco.config"):
        config = OutlineConfig.from_settings(
            {"maxJSXDepth": "3", "showFragments": 0, "showHooks": "no"}
        )

    assert config == OutlineConfig()
    assert "key=maxJSXDepth" in caplog.text
    assert "key=showHooks" in caplog.text


def test_cfg_005_boolean_depth_is_rejected() -> None:
    assert OutlineConfig.from_settings({"maxJSXDepth": True}).max_depth == 2


def test_cfg_006_negative_depth_and_unknown_keys_are_accepted() -> None:
    config = OutlineConfig.from_settings({"maxJSXDepth": -3, "colorize": True})

    assert config.max_depth == -3
    assert config.show_fragments is True


def test_cfg_007_load_settings_file(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(
        json.dumps({"reactOutline.maxJSXDepth": 3, "editor.tabSize": 2}),
        encoding="utf-8",
    )

    assert load_settings(settings_path) == OutlineConfig(max_depth=3)


@pytest.mark.parametrize(
    "content",
    ["{not json", "[1, 2]"],
)
def test_cfg_008_invalid_settings_files_raise(tmp_path: Path, content: str) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(settings_path)


def test_cfg_009_missing_settings_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Failed to read settings file"):
        load_settings(tmp_path / "missing.json")
