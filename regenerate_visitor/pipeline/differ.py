"""
Structural comparison of two visitor models.

Equivalence is decided on stub bodies only: lines outside stubs (comments,
blank lines, the generated header) never make two models differ.
"""

from __future__ import annotations

from .models import StructuralModel


def equivalent(a: StructuralModel, b: StructuralModel) -> bool:
    """Check whether two models have the same stubs with identical bodies."""
    if len(a.stubs) != len(b.stubs):
        return False
    for name, body in a.stubs.items():
        if name not in b.stubs:
            return False
        if body != b.stubs[name]:
            return False
    return True
