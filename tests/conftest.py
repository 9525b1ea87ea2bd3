import sys
from collections.abc import Callable
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()

from rco import OutlineAnalyzer, OutlineConfig, OutlineSymbol  # noqa: E402


@pytest.fixture
def outline() -> Callable[..., list[OutlineSymbol]]:
    """Return a helper outlining source text with optional config overrides."""

    def _outline(
        source: str, language_id: str = "typescriptreact", **options: object
    ) -> list[OutlineSymbol]:
        analyzer = OutlineAnalyzer(config=OutlineConfig(**options))
        return analyzer.analyze(source, language_id=language_id)

    return _outline
