"""
Visitor regeneration orchestrator.

Sequences the regeneration of one grammar's visitor:

1. Back up the existing visitor file to ``<visitor>.old``
2. Regenerate the visitor with ANTLR
3. Extract the old and the new structural models
4. Skip when both have the same stub bodies
5. Otherwise merge, serialize and write the result over the new visitor

Every step works on the previous step's committed output on disk. Any
failure stops the run and leaves the backup and the regenerated file
in place for inspection. Concurrent runs against the same grammar share
the backup path and must be serialized by the caller.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .config import RegenerateConfig
from .differ import equivalent
from .errors import BackupError, RegenerationError
from .extractor import extract_file
from .generator import AntlrGenerator
from .merger import AtomicWriter, merge, serialize, summarize
from .models import MergeSummary
from .paths import backup_path_for, resolve_grammar_path, visitor_path_for

logger = logging.getLogger(__name__)


class RegenerationState(str, Enum):
    """Stages of a regeneration run."""

    IDLE = "idle"
    BACKED_UP = "backed_up"
    REGENERATED = "regenerated"
    MERGED = "merged"
    SKIPPED = "skipped"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RegenerationResult:
    """Outcome of a regeneration run, successful or failed.

    Attributes:
        grammar_path: Absolute path of the grammar
        visitor_path: Path of the regenerated (and possibly merged) visitor
        backup_path: Path of the backup, or None when there was nothing to merge
        history: States visited, in order; a failed run ends in FAILED
        summary: Merge classification, set only when a merge was written
    """

    grammar_path: Path
    visitor_path: Path
    backup_path: Path | None = None
    history: list[RegenerationState] = field(default_factory=lambda: [RegenerationState.IDLE])
    summary: MergeSummary | None = None

    @property
    def state(self) -> RegenerationState:
        return self.history[-1]

    @property
    def outcome(self) -> RegenerationState:
        """Last meaningful state of a finished run: MERGED, SKIPPED or REGENERATED."""
        states = [s for s in self.history if s is not RegenerationState.DONE]
        return states[-1]

    def transition(self, state: RegenerationState) -> None:
        logger.debug("%s: %s -> %s", self.visitor_path.name, self.state.value, state.value)
        self.history.append(state)


class VisitorRegenerator:
    """Regenerates a grammar's visitor while keeping hand-written stub bodies."""

    def __init__(
        self,
        config: RegenerateConfig | None = None,
        generator: AntlrGenerator | None = None,
        writer: AtomicWriter | None = None,
    ):
        self.config = config or RegenerateConfig()
        self.profile = self.config.profile()
        self.generator = generator or AntlrGenerator(self.config)
        self.writer = writer or AtomicWriter(atomic=self.config.output.atomic_write)
        # Result of the latest run, including a failed one
        self.last_result: RegenerationResult | None = None

    def run(self, grammar_path: str | Path) -> RegenerationResult:
        """Back up, regenerate and merge the visitor of a grammar.

        Args:
            grammar_path: Path of the grammar file

        Returns:
            The result of the run, ending in the DONE state

        Raises:
            RegenerationError: On the first failing step
        """
        grammar = resolve_grammar_path(grammar_path, self.config)
        visitor = visitor_path_for(grammar, self.config)
        backup = backup_path_for(visitor, self.config)
        result = RegenerationResult(grammar_path=grammar, visitor_path=visitor)
        self.last_result = result

        try:
            if visitor.exists():
                self._backup(visitor, backup)
                result.transition(RegenerationState.BACKED_UP)
            else:
                logger.info("No existing visitor at %s, skipping backup", visitor)

            self.generator.generate(grammar)
            result.transition(RegenerationState.REGENERATED)

            if backup.exists():
                result.backup_path = backup
                result.summary = self.merge_files(backup, visitor)
                result.transition(RegenerationState.SKIPPED if result.summary is None else RegenerationState.MERGED)
            else:
                logger.info("No backup at %s, skipping merge", backup)
        except RegenerationError:
            result.transition(RegenerationState.FAILED)
            raise

        result.transition(RegenerationState.DONE)
        return result

    def merge_files(
        self,
        old_path: Path,
        new_path: Path,
        output_path: Path | None = None,
    ) -> MergeSummary | None:
        """Merge the stub bodies of an edited visitor into a regenerated one.

        Args:
            old_path: The edited visitor (usually the backup)
            new_path: The regenerated visitor
            output_path: Where to write the merge, defaults to ``new_path``

        Returns:
            The merge summary, or None when the two files have the same
            stub bodies and the merge was skipped

        Raises:
            ParseError: If either file cannot be read
            WriteError: If the merged file cannot be written
        """
        output_path = Path(output_path or new_path)
        old = extract_file(old_path, self.profile)
        new = extract_file(new_path, self.profile)

        if equivalent(old, new):
            logger.info("No difference between old visitor and new visitor. Skipping merge...")
            if output_path != Path(new_path):
                self.writer.write(output_path, "\n".join(new.lines), validate=False)
            return None

        logger.info("Merging old visitor and new visitor")
        summary = summarize(old, new)
        merged = merge(old, new)
        content = serialize(new, merged, self.profile)
        self.writer.write(output_path, content, validate=self.config.output.validate_before_write)
        logger.info(
            "Generated new visitor file: %s (%d preserved, %d added, %d dropped)",
            output_path,
            len(summary.preserved),
            len(summary.adopted),
            len(summary.dropped),
        )
        return summary

    def _backup(self, visitor: Path, backup: Path) -> None:
        try:
            shutil.copyfile(visitor, backup)
        except OSError as e:
            raise BackupError(f"Could not copy {visitor} to {backup}: {e}") from e
        logger.info("Copied %s to %s", visitor, backup)


def merge_visitor_files(
    old_path: str | Path,
    new_path: str | Path,
    output_path: str | Path | None = None,
    config: RegenerateConfig | None = None,
) -> MergeSummary | None:
    """
    Convenience function to merge two visitor files without running ANTLR.

    Args:
        old_path: The edited visitor
        new_path: The regenerated visitor
        output_path: Where to write the merge, defaults to ``new_path``
        config: Regeneration configuration

    Returns:
        The merge summary, or None if the merge was skipped
    """
    regenerator = VisitorRegenerator(config)
    return regenerator.merge_files(Path(old_path), Path(new_path), Path(output_path) if output_path else None)
