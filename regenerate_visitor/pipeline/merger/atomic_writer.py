"""
Atomic file writer for the merged visitor.

Ensures an interrupted or failed write never leaves the visitor file
half-written: the regenerated file stays in place until the merged
content is complete and validated.
"""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import WriteError
from .serializer import validate_balanced


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    With ``atomic=False`` the target is overwritten directly after
    validation.
    """

    def __init__(
        self,
        validator: Callable[[str], None] | None = None,
        atomic: bool = True,
    ):
        """Initialize the atomic writer.

        Args:
            validator: Optional validation function, defaults to a balanced-brace check
            atomic: Whether to go through a temporary file and rename
        """
        self._validate = validator or validate_balanced
        self._atomic = atomic

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file.

        Content is written in text mode, so "\\n" becomes the platform
        line separator on disk.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            WriteError: If validation fails or file operations fail
        """
        path = Path(path)
        if validate:
            self._validate(content)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(f"Could not create directory {path.parent}: {e}") from e

        if not self._atomic:
            try:
                with open(path, "w", encoding="utf-8") as f:
                    f.write(content)
            except OSError as e:
                raise WriteError(f"Could not write visitor file {path}: {e}") from e
            return

        try:
            # Same directory ensures atomic rename on the same filesystem
            temp_fd, temp_path_str = tempfile.mkstemp(
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                text=True,
            )
        except OSError as e:
            raise WriteError(f"Could not create temporary file next to {path}: {e}") from e

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if path.exists():
                shutil.copymode(path, temp_path)

            # On POSIX systems, rename() is atomic if source and dest are on same filesystem
            temp_path.replace(path)

        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise WriteError(f"Could not write visitor file {path}: {e}") from e
