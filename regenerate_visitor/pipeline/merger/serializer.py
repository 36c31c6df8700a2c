"""
Serialization of a merged visitor model.

The output is built by a single forward pass over the regenerated file's
lines: scaffold lines are copied verbatim and every stub span gets its
merged body between the declaring and the closing line.
"""

from __future__ import annotations

from ..config import JAVASCRIPT, LanguageProfile
from ..errors import WriteError
from ..models import MergedModel, StructuralModel


def pending_imports(new: StructuralModel, merged: MergedModel) -> list[str]:
    """Merged import lines that the regenerated file does not contain yet."""
    present = set(new.lines)
    return [line for line in merged.imports if line not in present]


def serialize(new: StructuralModel, merged: MergedModel, profile: LanguageProfile = JAVASCRIPT) -> str:
    """Render the merged visitor source.

    Imports missing from the regenerated file are inserted at the first
    top-level line at or after the profile's header offset, or appended
    when the file is shorter than its header.

    Args:
        new: Model of the regenerated file (fixes order and scaffold)
        merged: Merge result providing bodies and imports
        profile: Lexical conventions of the target language

    Returns:
        The merged source text, lines joined with "\\n"
    """
    lines = new.lines
    spans = {span.start: span for span in new.spans}
    pending = pending_imports(new, merged)
    result: list[str] = []

    index = 0
    while index < len(lines):
        if pending and index >= profile.header_lines:
            result.extend(pending)
            pending = []

        span = spans.get(index)
        if span is None:
            result.append(lines[index])
            index += 1
            continue

        result.append(lines[span.start])
        result.extend(merged.stubs.get(span.name, new.stubs[span.name]))
        result.append(lines[span.end])
        index = span.end + 1

    result.extend(pending)
    return "\n".join(result)


def validate_balanced(content: str) -> None:
    """Check that a serialized visitor has as many closing as opening braces.

    Raises:
        WriteError: If the braces are unbalanced
    """
    open_braces = content.count("{")
    close_braces = content.count("}")
    if open_braces != close_braces:
        raise WriteError(f"Merged visitor has unbalanced braces: {open_braces} open, {close_braces} close")
