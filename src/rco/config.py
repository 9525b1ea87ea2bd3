# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Outline configuration snapshot and settings loading."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SETTINGS_SECTION = "reactOutline"

DEFAULT_MAX_DEPTH = 2
DEFAULT_SHOW_FRAGMENTS = True
DEFAULT_SHOW_HOOKS = True


class ConfigError(ValueError):
    """Represent an unreadable or malformed settings file."""


@dataclass(frozen=True)
class OutlineConfig:
    """Represent the options read for one outline request.

    Attributes:
        max_depth: Number of markup levels shown under a component.
        show_fragments: Whether fragments appear as their own entries.
        show_hooks: Whether custom hooks appear in the outline.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    show_fragments: bool = DEFAULT_SHOW_FRAGMENTS
    show_hooks: bool = DEFAULT_SHOW_HOOKS

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "OutlineConfig":
        """Build a snapshot from editor-style settings.

        Keys are accepted bare (``maxJSXDepth``), dotted
        (``reactOutline.maxJSXDepth``) or nested under a ``reactOutline``
        section. Missing or wrongly typed values fall back to defaults;
        out-of-range depths are kept as given.

        Args:
            settings: Settings mapping.

        Returns:
            Configuration snapshot.
        """
        return cls(
            max_depth=_read_int(settings, "maxJSXDepth", DEFAULT_MAX_DEPTH),
            show_fragments=_read_bool(
                settings, "showFragments", DEFAULT_SHOW_FRAGMENTS
            ),
            show_hooks=_read_bool(settings, "showHooks", DEFAULT_SHOW_HOOKS),
        )


def load_settings(path: Path) -> OutlineConfig:
    """Load a configuration snapshot from a JSON settings file.

    Args:
        path: Settings file path.

    Returns:
        Configuration snapshot.

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read settings file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in settings file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Settings file must contain a JSON object: {path}")
    return OutlineConfig.from_settings(payload)


def _lookup(settings: Mapping[str, Any], key: str) -> Any:
    dotted = f"{SETTINGS_SECTION}.{key}"
    if dotted in settings:
        return settings[dotted]
    section = settings.get(SETTINGS_SECTION)
    if isinstance(section, Mapping) and key in section:
        return section[key]
    return settings.get(key)


def _read_int(settings: Mapping[str, Any], key: str, default: int) -> int:
    value = _lookup(settings, key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning(
            f"Ignoring setting with unexpected type (key={key} value={value!r})"
        )
        return default
    return value


def _read_bool(settings: Mapping[str, Any], key: str, default: bool) -> bool:
    value = _lookup(settings, key)
    if value is None:
        return default
    if not isinstance(value, bool):
        logger.warning(
            f"Ignoring setting with unexpected type (key={key} value={value!r})"
        )
        return default
    return value
