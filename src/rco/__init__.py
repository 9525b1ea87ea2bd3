# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Outline of components, hooks, and rendered markup in JSX/TSX sources."""

from rco.analyzer import OutlineAnalyzer
from rco.cancellation import CancellationToken
from rco.config import ConfigError, OutlineConfig, load_settings
from rco.model import OutlineSymbol, Position, Range, SymbolKind
from rco.provider import OutlineProvider, TextDocument

__all__ = [
    "CancellationToken",
    "ConfigError",
    "OutlineAnalyzer",
    "OutlineConfig",
    "OutlineProvider",
    "OutlineSymbol",
    "Position",
    "Range",
    "SymbolKind",
    "TextDocument",
    "load_settings",
]
