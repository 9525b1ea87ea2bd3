# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Outline analysis for one component source document."""

import logging

from rco.cancellation import CancellationToken
from rco.classifier import iter_declarations
from rco.config import OutlineConfig
from rco.model import OutlineSymbol
from rco.outline import build_declaration_symbol
from rco.syntax import ParseFailure, ParserRegistry

logger = logging.getLogger(__name__)


class OutlineAnalyzer:
    """Produce component and hook outlines from source text."""

    def __init__(
        self,
        config: OutlineConfig | None = None,
        registry: ParserRegistry | None = None,
    ) -> None:
        """Initialize analyzer.

        Args:
            config: Configuration snapshot; defaults apply when omitted.
            registry: Parser registry; a private one is created when omitted.
        """
        self._config = config or OutlineConfig()
        self._registry = registry or ParserRegistry()

    @property
    def config(self) -> OutlineConfig:
        return self._config

    def analyze(
        self,
        source: str,
        language_id: str = "typescriptreact",
        token: CancellationToken | None = None,
    ) -> list[OutlineSymbol]:
        """Build the outline of one document.

        Args:
            source: Full document text.
            language_id: ``javascriptreact`` or ``typescriptreact``.
            token: Optional cancellation signal, checked between declarations.

        Returns:
            One entry per accepted declaration in document order. Empty when
            the source does not parse; partial when cancelled.
        """
        try:
            tree = self._registry.parse(source, language_id)
        except ParseFailure as exc:
            logger.warning(f"Parse error (language_id={language_id} error={exc})")
            return []

        symbols: list[OutlineSymbol] = []
        for declaration in iter_declarations(tree):
            if token is not None and token.is_cancellation_requested:
                logger.debug(
                    f"Outline request cancelled (symbols_built={len(symbols)})"
                )
                break
            if declaration.kind == "hook" and not self._config.show_hooks:
                continue
            symbols.append(build_declaration_symbol(declaration, tree, self._config))
        return symbols
