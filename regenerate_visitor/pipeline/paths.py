"""
Path helpers for grammar, visitor and backup files.
"""

from __future__ import annotations

from pathlib import Path

from .config import RegenerateConfig
from .errors import ArgumentError, ExtensionError


def resolve_grammar_path(path: str | Path | None, config: RegenerateConfig | None = None) -> Path:
    """Validate the grammar argument and resolve it to an absolute path.

    Raises:
        ArgumentError: If no path is given or it is not an existing file
        ExtensionError: If the path lacks the grammar extension
    """
    config = config or RegenerateConfig()
    if not path:
        raise ArgumentError("Not enough arguments: expected a grammar file")

    grammar_path = Path(path).resolve()
    if grammar_path.suffix != config.grammar_extension:
        raise ExtensionError(f"Expected extension {config.grammar_extension} but got {grammar_path.suffix or '(none)'}")
    if not grammar_path.is_file():
        raise ArgumentError(f"Grammar file not found: {grammar_path}")
    return grammar_path


def visitor_path_for(grammar_path: Path, config: RegenerateConfig | None = None) -> Path:
    """Path of the visitor generated for a grammar.

    Examples:
        /work/Expr.g4 -> /work/ExprVisitor.js
    """
    config = config or RegenerateConfig()
    profile = config.profile()
    grammar_name = grammar_path.name[: -len(config.grammar_extension)]
    return grammar_path.parent / f"{grammar_name}Visitor{profile.extension}"


def backup_path_for(visitor_path: Path, config: RegenerateConfig | None = None) -> Path:
    config = config or RegenerateConfig()
    return visitor_path.with_name(visitor_path.name + config.backup_suffix)
