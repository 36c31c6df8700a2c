"""
Stub extraction by brace counting.

Scans the lines of a generated visitor file and builds its structural
model: the raw lines, the body of every top-level stub and the distinct
dependency declarations.

This is a delimiter scanner, not a parser. Braces inside string or regex
literals are counted like any other brace, so a stub body containing an
unmatched brace in a literal is mis-delimited.

Only top-level lines count as dependency declarations: a `require(...)`
line inside a stub body stays in that body and is not collected as an import.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType

from .config import JAVASCRIPT, LanguageProfile
from .errors import ParseError
from .models import StructuralModel, StubSpan

logger = logging.getLogger(__name__)


def brace_delta(line: str) -> tuple[int, bool]:
    """Return the net brace count of a line and whether it opens any brace."""
    opens = line.count("{")
    return opens - line.count("}"), opens > 0


def find_closing_line(lines: list[str] | tuple[str, ...], start: int) -> int | None:
    """Find the line where the brace depth opened at ``start`` returns to zero.

    Args:
        lines: Lines of the file
        start: Index of the declaring line

    Returns:
        Index of the closing line, or None if the braces never balance
        before end-of-file
    """
    depth = 0
    opened = False
    for index in range(start, len(lines)):
        delta, opens = brace_delta(lines[index])
        depth += delta
        opened = opened or opens
        if opened and depth == 0:
            return index
    return None


def extract(source_text: str, profile: LanguageProfile = JAVASCRIPT) -> StructuralModel:
    """Build the structural model of a visitor source text.

    Never fails on malformed content. A declaration whose braces never
    balance is skipped with a warning, and a declaration that opens and
    closes on its own line has no body and is kept as scaffold, also with
    a warning since an edited body there would be lost on merge.

    Args:
        source_text: Full text of the visitor file
        profile: Lexical conventions of the target language

    Returns:
        The immutable structural model
    """
    lines = source_text.split("\n")
    stubs: dict[str, tuple[str, ...]] = {}
    spans: list[StubSpan] = []
    imports: dict[str, None] = {}

    index = 0
    while index < len(lines):
        line = lines[index]
        if profile.is_stub_declaration(line):
            end = find_closing_line(lines, index)
            if end is None:
                logger.warning("Unbalanced braces in stub declared at line %d, not treated as a stub", index + 1)
            elif end > index:
                name = profile.stub_name(line)
                if name in stubs:
                    logger.warning("Duplicate stub %s at line %d ignored", name, index + 1)
                else:
                    stubs[name] = tuple(lines[index + 1 : end])
                    spans.append(StubSpan(name=name, start=index, end=end))
                index = end + 1
                continue
            else:
                logger.warning(
                    "Stub %s declared on one line at line %d, its body cannot be preserved",
                    profile.stub_name(line),
                    index + 1,
                )

        if profile.is_import(line):
            imports.setdefault(line, None)
        index += 1

    logger.debug("Extracted %d stubs and %d imports from %d lines", len(stubs), len(imports), len(lines))
    return StructuralModel(
        lines=tuple(lines),
        stubs=MappingProxyType(stubs),
        imports=tuple(imports),
        spans=tuple(spans),
    )


def extract_file(path: Path, profile: LanguageProfile = JAVASCRIPT) -> StructuralModel:
    """Read a visitor file and extract its structural model.

    Raises:
        ParseError: If the file cannot be read
    """
    try:
        source_text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Could not read visitor file {path}: {e}") from e
    return extract(source_text, profile)
