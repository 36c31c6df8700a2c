"""
Pipeline - regeneration of ANTLR visitors with hand-edit preservation.

Stages, run in order for a single visitor file:

1. Backup: copy the existing visitor to ``<visitor>.old``
2. Generator: run ANTLR to regenerate the visitor
3. Extractor: scan both files into structural models of stubs and imports
4. Differ: skip the merge when the stub bodies are identical
5. Merger: keep the new structure with the old bodies, then serialize
   and write atomically
"""

from __future__ import annotations

from .config import LanguageProfile, OutputConfig, RegenerateConfig, language_profile
from .differ import equivalent
from .errors import (
    ArgumentError,
    BackupError,
    ExtensionError,
    GenerationError,
    ParseError,
    RegenerationError,
    WriteError,
)
from .extractor import extract, extract_file
from .generator import AntlrGenerator
from .merger import AtomicWriter, merge, serialize, summarize
from .models import MergedModel, MergeSummary, StructuralModel, StubSpan
from .orchestrator import RegenerationResult, RegenerationState, VisitorRegenerator, merge_visitor_files

__all__ = [
    "AntlrGenerator",
    "ArgumentError",
    "AtomicWriter",
    "BackupError",
    "ExtensionError",
    "GenerationError",
    "LanguageProfile",
    "MergeSummary",
    "MergedModel",
    "OutputConfig",
    "ParseError",
    "RegenerateConfig",
    "RegenerationError",
    "RegenerationResult",
    "RegenerationState",
    "StructuralModel",
    "StubSpan",
    "VisitorRegenerator",
    "WriteError",
    "equivalent",
    "extract",
    "extract_file",
    "language_profile",
    "merge",
    "merge_visitor_files",
    "serialize",
    "summarize",
]
