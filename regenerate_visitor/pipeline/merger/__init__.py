"""
Merger module.

Resolves an edited visitor against its regenerated successor and writes
the merged result back without ever leaving a half-written file.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .resolver import merge, merge_imports, summarize
from .serializer import serialize, validate_balanced

__all__ = [
    "AtomicWriter",
    "merge",
    "merge_imports",
    "summarize",
    "serialize",
    "validate_balanced",
]
