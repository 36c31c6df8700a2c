"""
Structural models of a generated visitor file.

A model is built once per file read and never mutated afterwards. The
differ, resolver and serializer are plain functions over these values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def _frozen_mapping(items: Mapping[str, tuple[str, ...]] | None = None) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType(dict(items or {}))


@dataclass(frozen=True)
class StubSpan:
    """Line indices bounding one stub in its file.

    Attributes:
        name: Stub name derived from the declaring line
        start: Index of the declaring line
        end: Index of the closing line (where the brace depth returns to zero)
    """

    name: str
    start: int
    end: int


@dataclass(frozen=True)
class StructuralModel:
    """Parsed representation of one visitor source file.

    Attributes:
        lines: Raw lines, 1:1 with the source file
        stubs: Stub name -> body lines, in declaration order
        imports: Distinct dependency declaration lines, in first-appearance order
        spans: Location of each stub, in declaration order
    """

    lines: tuple[str, ...] = ()
    stubs: Mapping[str, tuple[str, ...]] = field(default_factory=_frozen_mapping)
    imports: tuple[str, ...] = ()
    spans: tuple[StubSpan, ...] = ()

    @property
    def stub_names(self) -> tuple[str, ...]:
        return tuple(self.stubs)


@dataclass(frozen=True)
class MergedModel:
    """Result of resolving an old and a new model; input of the serializer."""

    lines: tuple[str, ...] = ()
    stubs: Mapping[str, tuple[str, ...]] = field(default_factory=_frozen_mapping)
    imports: tuple[str, ...] = ()


@dataclass(frozen=True)
class MergeSummary:
    """What a merge keeps, takes over and loses, by stub name.

    Attributes:
        preserved: Stubs present in both files; the old (edited) body is kept
        adopted: Stubs only in the new file; the generated body is kept
        dropped: Stubs only in the old file; removed together with their edits
        carried_imports: Import lines only in the old file, carried into the merge
    """

    preserved: tuple[str, ...] = ()
    adopted: tuple[str, ...] = ()
    dropped: tuple[str, ...] = ()
    carried_imports: tuple[str, ...] = ()
