# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Host-facing document symbol provider."""

import logging
from dataclasses import dataclass
from pathlib import Path

from rco.analyzer import OutlineAnalyzer
from rco.cancellation import CancellationToken
from rco.config import OutlineConfig
from rco.model import OutlineSymbol
from rco.syntax import GRAMMAR_BY_LANGUAGE, ParserRegistry, language_for_path

logger = logging.getLogger(__name__)

DOCUMENT_SELECTOR = frozenset(GRAMMAR_BY_LANGUAGE)


@dataclass(frozen=True)
class TextDocument:
    """Represent one open document handed over by the host.

    Attributes:
        text: Full document text.
        language_id: Host language id.
        uri: Document location, used for diagnostics only.
    """

    text: str
    language_id: str
    uri: str = ""

    @classmethod
    def from_path(cls, path: Path) -> "TextDocument":
        """Read a document from disk, selecting the language by suffix.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
            ValueError: If the suffix does not map to a supported language.
        """
        language_id = language_for_path(path)
        if language_id is None:
            raise ValueError(f"Unsupported file type: {path}")
        return cls(
            text=path.read_text(encoding="utf-8"),
            language_id=language_id,
            uri=str(path),
        )


class OutlineProvider:
    """Serve outline requests for ``javascriptreact``/``typescriptreact`` documents."""

    def __init__(self, config: OutlineConfig | None = None) -> None:
        self._analyzer = OutlineAnalyzer(config=config, registry=ParserRegistry())

    def provide_document_symbols(
        self, document: TextDocument, token: CancellationToken | None = None
    ) -> list[OutlineSymbol]:
        """Return the outline of a document.

        Args:
            document: Document to outline.
            token: Optional cancellation signal.

        Returns:
            Outline entries; empty for unsupported languages.
        """
        if document.language_id not in DOCUMENT_SELECTOR:
            logger.debug(
                f"Ignoring document outside selector (uri={document.uri}"
                f" language_id={document.language_id})"
            )
            return []
        if token is not None and token.is_cancellation_requested:
            return []
        symbols = self._analyzer.analyze(
            document.text, language_id=document.language_id, token=token
        )
        logger.debug(f"Outline built (uri={document.uri} symbols={len(symbols)})")
        return symbols
