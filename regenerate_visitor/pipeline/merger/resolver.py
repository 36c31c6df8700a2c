"""
Merge policy between an edited visitor and its regenerated successor.

The new model fixes the structure: which stubs exist, in which order, and
the scaffold lines around them. The old model contributes the body of
every stub it shares with the new one. Imports are only ever added.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from ..models import MergedModel, MergeSummary, StructuralModel

logger = logging.getLogger(__name__)


def merge_imports(old: StructuralModel, new: StructuralModel) -> tuple[str, ...]:
    """Union of both import sets: new imports first, then old-only ones in old order."""
    merged = dict.fromkeys(new.imports)
    merged.update(dict.fromkeys(old.imports))
    return tuple(merged)


def merge(old: StructuralModel, new: StructuralModel) -> MergedModel:
    """Resolve an old (edited) and a new (regenerated) model.

    Args:
        old: Model of the backup taken before regeneration
        new: Model of the freshly regenerated file

    Returns:
        Merged model with the new stub set and order, the old body for
        every shared stub name and the union of both import sets
    """
    stubs: dict[str, tuple[str, ...]] = {}
    for name, body in new.stubs.items():
        stubs[name] = old.stubs.get(name, body)

    for name in old.stubs:
        if name not in new.stubs:
            logger.warning("Stub %s no longer generated, its body is dropped", name)

    return MergedModel(
        lines=new.lines,
        stubs=MappingProxyType(stubs),
        imports=merge_imports(old, new),
    )


def summarize(old: StructuralModel, new: StructuralModel) -> MergeSummary:
    """Classify the stubs and imports of a merge without performing it."""
    new_imports = set(new.imports)
    return MergeSummary(
        preserved=tuple(name for name in new.stubs if name in old.stubs),
        adopted=tuple(name for name in new.stubs if name not in old.stubs),
        dropped=tuple(name for name in old.stubs if name not in new.stubs),
        carried_imports=tuple(line for line in old.imports if line not in new_imports),
    )
