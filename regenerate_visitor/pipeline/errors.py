"""
Error taxonomy for visitor regeneration.

Every failure is terminal for the invocation. The command line surfaces
the error kind (the class name) and its message once, at the top level.
"""

from __future__ import annotations


class RegenerationError(Exception):
    """Base class for all regeneration failures."""

    pass


class ArgumentError(RegenerationError):
    """Missing or malformed command line input. Raised before any side effect."""

    pass


class ExtensionError(RegenerationError):
    """The input file does not carry the grammar extension."""

    pass


class BackupError(RegenerationError):
    """The existing visitor file could not be copied to its backup path.

    Regeneration is not attempted, so an edited file that has not been
    backed up is never overwritten.
    """

    pass


class GenerationError(RegenerationError):
    """The external grammar tool could not be launched or exited non-zero.

    A backup made before the attempt is left in place.
    """

    pass


class ParseError(RegenerationError):
    """A visitor file could not be read for structural extraction.

    The regenerated file stays on disk un-merged.
    """

    pass


class WriteError(RegenerationError):
    """The merged visitor file could not be written.

    This happens when:
    - The target directory is not writable
    - The merged output fails validation (unbalanced braces)

    The regenerated file and the backup both remain for manual recovery.
    """

    pass
