# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CLI harness printing component outlines for JSX/TSX files."""

import argparse
import json
import logging
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, TextIO

import pathspec
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.style import Style
from rich.tree import Tree

from rco import (
    ConfigError,
    OutlineConfig,
    OutlineProvider,
    OutlineSymbol,
    TextDocument,
    load_settings,
)
from rco.syntax import LANGUAGE_BY_SUFFIX

logger = logging.getLogger(__name__)

OUTLINE_SUFFIXES = frozenset({".jsx", ".tsx"})
SKIPPED_DIRS = frozenset({".git", "node_modules"})


@dataclass(frozen=True)
class FileOutline:
    """Represent the outline produced for one file."""

    path: str
    symbols: list[OutlineSymbol]


def load_ignore_spec(root: Path) -> pathspec.GitIgnoreSpec:
    """Compile every .gitignore under ``root`` into one root-relative spec.

    Raises:
        OSError: If .gitignore files cannot be read.
        UnicodeDecodeError: If .gitignore files contain invalid UTF-8.
    """
    patterns: list[str] = []
    for ignore_path in sorted(root.rglob(".gitignore")):
        base_parts = ignore_path.parent.relative_to(root).parts
        if SKIPPED_DIRS.intersection(base_parts):
            continue
        base = "/".join(base_parts)
        for line in ignore_path.read_text(encoding="utf-8").splitlines():
            patterns.append(_root_relative_pattern(line, base))
    return pathspec.GitIgnoreSpec.from_lines(patterns)


def _is_ignored(spec: pathspec.GitIgnoreSpec, relative: str, is_dir: bool) -> bool:
    if spec.match_file(relative):
        return True
    return is_dir and spec.match_file(f"{relative}/")


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    parser = argparse.ArgumentParser(prog="rco-outline")
    parser.add_argument(
        "--path", required=True, help="JSX/TSX file or directory to outline."
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Markup levels shown under each component (maxJSXDepth).",
    )
    parser.add_argument(
        "--hide-fragments",
        action="store_true",
        help="Collapse fragments into their parent entry.",
    )
    parser.add_argument(
        "--hide-hooks", action="store_true", help="Omit custom hooks."
    )
    parser.add_argument(
        "--settings",
        required=False,
        help="JSON settings file with reactOutline.* options.",
    )
    parser.add_argument(
        "--format",
        choices=("tree", "json"),
        default="tree",
        help="Output format.",
    )
    parser.add_argument(
        "--output",
        required=False,
        help="Optional output file path for raw JSON when --format json is used.",
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run the outline command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2

    target = Path(args.path)
    if not target.exists():
        logger.warning(f"Path does not exist (path={target})")
        stderr.write(f"Path does not exist: {target}\n")
        return 2

    try:
        config = resolve_config(args)
    except ConfigError as exc:
        logger.warning(f"Invalid settings (settings={args.settings} error={exc})")
        stderr.write(f"Invalid settings: {exc}\n")
        return 2

    try:
        files = discover_files(target)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to read .gitignore files (error={exc})")
        stderr.write(f"Failed to read .gitignore files: {exc}\n")
        return 2

    provider = OutlineProvider(config=config)
    outlines: list[FileOutline] = []
    for file_path in files:
        try:
            document = TextDocument.from_path(file_path)
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            logger.warning(f"Skipping unreadable file (path={file_path} error={exc})")
            stderr.write(f"Skipping {file_path}: {exc}\n")
            continue
        outlines.append(
            FileOutline(
                path=str(file_path),
                symbols=provider.provide_document_symbols(document),
            )
        )
    logger.info(
        f"Outline completed (path={target} files={len(outlines)}"
        f" symbols={sum(len(o.symbols) for o in outlines)})"
    )

    if args.format == "json":
        if args.output:
            try:
                _write_json_file(outlines=outlines, output_path=Path(args.output))
            except OSError as exc:
                logger.warning(
                    "Failed to write JSON output file"
                    f" (output_path={args.output} error={exc})"
                )
                stderr.write(f"Failed to write JSON output file: {args.output}\n")
                return 2
        else:
            _write_json(outlines=outlines, stdout=stdout)
    else:
        _write_tree(outlines=outlines, stdout=stdout)
    return 0


def resolve_config(args: argparse.Namespace) -> OutlineConfig:
    """Combine the settings file with command-line overrides.

    Raises:
        ConfigError: If the settings file is unreadable or malformed.
    """
    config = load_settings(Path(args.settings)) if args.settings else OutlineConfig()
    if args.max_depth is not None:
        config = replace(config, max_depth=args.max_depth)
    if args.hide_fragments:
        config = replace(config, show_fragments=False)
    if args.hide_hooks:
        config = replace(config, show_hooks=False)
    return config


def discover_files(target: Path) -> list[Path]:
    """List the files to outline under ``target``.

    A file is returned as given when its suffix is supported. Directories are
    walked for ``.jsx``/``.tsx`` files, honouring .gitignore rules and
    skipping ``.git`` and ``node_modules``.

    Raises:
        OSError: If .gitignore files cannot be read.
        UnicodeDecodeError: If .gitignore files contain invalid UTF-8.
    """
    if target.is_file():
        return [target] if target.suffix.lower() in LANGUAGE_BY_SUFFIX else []

    ignore_spec = load_ignore_spec(target)
    files: list[Path] = []
    queue: list[Path] = [target]
    while queue:
        current = queue.pop(0)
        for child in sorted(current.iterdir(), key=lambda item: item.name):
            relative = child.relative_to(target).as_posix()
            if child.is_dir():
                if child.name in SKIPPED_DIRS or _is_ignored(
                    ignore_spec, relative, True
                ):
                    continue
                queue.append(child)
                continue
            if child.suffix.lower() not in OUTLINE_SUFFIXES:
                continue
            if _is_ignored(ignore_spec, relative, False):
                continue
            files.append(child)
    return sorted(files)


def _payload(outlines: list[FileOutline]) -> dict[str, Any]:
    return {
        "files": [
            {
                "path": outline.path,
                "symbols": [symbol.to_dict() for symbol in outline.symbols],
            }
            for outline in outlines
        ]
    }


def _write_json(outlines: list[FileOutline], stdout: TextIO) -> None:
    """Write outlines in JSON format.

    Args:
        outlines: Per-file outlines.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(
        json.dumps(_payload(outlines), indent=2),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _write_json_file(outlines: list[FileOutline], output_path: Path) -> None:
    """Write raw JSON payload to an output file.

    Raises:
        OSError: If directory creation or file writing fails.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(_payload(outlines), indent=2), encoding="utf-8")


def _write_tree(outlines: list[FileOutline], stdout: TextIO) -> None:
    """Render each file's outline as a tree.

    Args:
        outlines: Per-file outlines.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    for outline in outlines:
        console.rule(escape(outline.path), style=Style(color="cyan"), characters="-")
        if not outline.symbols:
            console.print("(no components)", highlight=False)
            continue
        for symbol in outline.symbols:
            tree = Tree(_label(symbol))
            _add_branches(tree, symbol)
            console.print(tree)


def _add_branches(tree: Tree, symbol: OutlineSymbol) -> None:
    for child in symbol.children:
        _add_branches(tree.add(_label(child)), child)


def _label(symbol: OutlineSymbol) -> str:
    start = symbol.range.start
    location = f"[dim]{start.line + 1}:{start.character}[/dim]"
    if symbol.detail:
        return f"[bold]{escape(symbol.name)}[/bold] {escape(symbol.detail)} {location}"
    return f"{escape(symbol.name)} {location}"


def _root_relative_pattern(line: str, base: str) -> str:
    """Rebase a nested .gitignore line onto the scanned root.

    A pattern without an inner slash matches at any level below its
    .gitignore, so it is rebased under ``base/**/``.
    """
    stripped = line.strip()
    if not base or not stripped or stripped.startswith("#"):
        return line
    negated = stripped.startswith("!")
    pattern = stripped[1:] if negated else stripped
    if "/" in pattern.rstrip("/"):
        rebased = f"{base}/{pattern.lstrip('/')}"
    else:
        rebased = f"{base}/**/{pattern}"
    return f"!{rebased}" if negated else rebased


def main() -> None:
    """Run the outline CLI and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
