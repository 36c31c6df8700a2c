"""
ANTLR tool invocation.

Runs the grammar tool synchronously to regenerate the visitor. There is no
timeout: a hanging tool hangs the whole regeneration.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .config import RegenerateConfig
from .errors import GenerationError

logger = logging.getLogger(__name__)


class AntlrGenerator:
    """Generates visitor stubs by running the ANTLR jar through java."""

    def __init__(self, config: RegenerateConfig | None = None):
        self.config = config or RegenerateConfig()

    def build_command(self, grammar_path: Path) -> list[str]:
        """Build the ANTLR command line for a grammar file.

        Args:
            grammar_path: Absolute path of the grammar

        Returns:
            Argument list suitable for subprocess.run
        """
        cmd = [
            self.config.java,
            "-jar",
            self.config.antlr_jar,
            f"-Dlanguage={self.config.language}",
            str(grammar_path),
            "-visitor",
            "-no-listener",
        ]
        cmd.extend(self.config.extra_args)
        return cmd

    def generate(self, grammar_path: Path) -> subprocess.CompletedProcess:
        """Run ANTLR on the grammar and wait for it to finish.

        Raises:
            GenerationError: If the tool cannot be launched or exits non-zero
        """
        grammar_path = Path(grammar_path)
        cmd = self.build_command(grammar_path)
        logger.debug("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=grammar_path.parent,
            )
        except (subprocess.SubprocessError, OSError) as e:
            raise GenerationError(f"Could not regenerate visitor with antlr: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise GenerationError(f"Could not regenerate visitor with antlr (exit code {result.returncode}): {stderr}")

        logger.info("Regenerated visitor from %s via antlr", grammar_path)
        return result
