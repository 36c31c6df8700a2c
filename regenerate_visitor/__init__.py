"""Regenerate Visitor

Regenerates ANTLR visitor files while preserving the stub bodies that were
edited by hand in the previous generation.
"""

__version__ = "1.0.0"

from .pipeline import (
    AntlrGenerator,
    RegenerateConfig,
    RegenerationError,
    StructuralModel,
    VisitorRegenerator,
    equivalent,
    extract,
    merge,
    merge_visitor_files,
    serialize,
)

__all__ = [
    "VisitorRegenerator",
    "RegenerateConfig",
    "RegenerationError",
    "AntlrGenerator",
    "StructuralModel",
    "extract",
    "equivalent",
    "merge",
    "serialize",
    "merge_visitor_files",
]
