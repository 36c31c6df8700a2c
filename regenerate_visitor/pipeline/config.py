"""
Configuration for visitor regeneration.

Holds the settings of the external ANTLR invocation, the output options
and the per-language conventions the stub scanner relies on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .errors import ArgumentError


@dataclass
class LanguageProfile:
    """Lexical conventions of a generated visitor file for one target language.

    Attributes:
        name: ANTLR target name passed as -Dlanguage
        extension: File extension of the generated visitor
        stub_pattern: Regex matching a line that declares a stub
        import_marker: Substring identifying a dependency declaration line
        header_lines: Number of fixed header lines before which imports are never inserted
    """

    name: str
    extension: str
    stub_pattern: str
    import_marker: str
    header_lines: int = 0

    @property
    def stub_regex(self) -> re.Pattern[str]:
        return re.compile(self.stub_pattern)

    def is_stub_declaration(self, line: str) -> bool:
        return self.stub_regex.match(line) is not None

    def stub_name(self, line: str) -> str:
        """Derive the stub name from its declaring line.

        The name is everything before the assignment operator, minus one
        trailing separator character.

        Examples:
            "ExprVisitor.prototype.visitProg = function(ctx) {" -> "ExprVisitor.prototype.visitProg"
        """
        head = line.partition("=")[0]
        if head and head[-1] in " \t":
            head = head[:-1]
        return head

    def is_import(self, line: str) -> bool:
        return self.import_marker in line


# Generated by `antlr4 -Dlanguage=JavaScript -visitor`: a comment line,
# a jshint directive and the antlr4 runtime require make up the header.
JAVASCRIPT = LanguageProfile(
    name="JavaScript",
    extension=".js",
    stub_pattern=r"^[A-Za-z_$][\w$.]*\s*=\s*function\s*\(\s*[A-Za-z_$][\w$]*\s*\)",
    import_marker="require(",
    header_lines=3,
)

PROFILES: dict[str, LanguageProfile] = {
    JAVASCRIPT.name: JAVASCRIPT,
}


def language_profile(name: str) -> LanguageProfile:
    """Look up the built-in profile for an ANTLR target language.

    Raises:
        ArgumentError: If no profile exists for the language
    """
    try:
        return PROFILES[name]
    except (KeyError, TypeError):
        supported = ", ".join(sorted(PROFILES))
        raise ArgumentError(f"Unsupported target language {name!r} (supported: {supported})") from None


@dataclass
class OutputConfig:
    """Configuration for writing the merged visitor file.

    Attributes:
        atomic_write: Whether to write through a temporary file and rename it into place
        validate_before_write: Whether to check the merged output for balanced braces
    """

    atomic_write: bool = True
    validate_before_write: bool = True


@dataclass
class RegenerateConfig:
    """Configuration options for visitor regeneration."""

    # ANTLR target language, also selects the language profile
    language: str = "JavaScript"

    # Java executable used to run the ANTLR tool
    java: str = "java"

    # Location of the ANTLR complete jar
    antlr_jar: str = "/usr/local/lib/antlr-4.7.2-complete.jar"

    # Extra arguments appended to the ANTLR command line
    extra_args: list[str] = field(default_factory=list)

    # Required extension of the grammar file
    grammar_extension: str = ".g4"

    # Suffix appended to the visitor path for the backup copy
    backup_suffix: str = ".old"

    # Profile overrides (None keeps the built-in value)
    stub_pattern: str | None = None
    import_marker: str | None = None
    header_lines: int | None = None

    output: OutputConfig = field(default_factory=OutputConfig)

    def profile(self) -> LanguageProfile:
        """Return the language profile with any configured overrides applied.

        Raises:
            ArgumentError: If the language is unknown or an override is malformed
        """
        base = language_profile(self.language)
        profile = LanguageProfile(
            name=base.name,
            extension=base.extension,
            stub_pattern=self.stub_pattern if self.stub_pattern is not None else base.stub_pattern,
            import_marker=self.import_marker if self.import_marker is not None else base.import_marker,
            header_lines=self.header_lines if self.header_lines is not None else base.header_lines,
        )
        try:
            re.compile(profile.stub_pattern)
        except (re.error, TypeError, ValueError) as e:
            raise ArgumentError(f"Invalid stub_pattern {profile.stub_pattern!r}: {e}") from e
        if not isinstance(profile.import_marker, str) or not profile.import_marker:
            raise ArgumentError(f"Invalid import_marker {profile.import_marker!r}: expected a non-empty string")
        if not isinstance(profile.header_lines, int) or isinstance(profile.header_lines, bool) or profile.header_lines < 0:
            raise ArgumentError(f"Invalid header_lines {profile.header_lines!r}: expected a non-negative integer")
        return profile

    @staticmethod
    def from_dict(d: dict) -> RegenerateConfig:
        """Create a config from a dictionary.

        Raises:
            ArgumentError: If the dictionary or its output section is not a mapping
        """
        if not isinstance(d, dict):
            raise ArgumentError(f"Config must be a JSON object, got {type(d).__name__}")
        config = RegenerateConfig()
        for k, v in d.items():
            if k == "output":
                if not isinstance(v, dict):
                    raise ArgumentError(f"Config 'output' must be a JSON object, got {type(v).__name__}")
                config.output = OutputConfig(
                    atomic_write=v.get("atomic_write", True),
                    validate_before_write=v.get("validate_before_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "language": self.language,
            "java": self.java,
            "antlr_jar": self.antlr_jar,
            "extra_args": self.extra_args,
            "grammar_extension": self.grammar_extension,
            "backup_suffix": self.backup_suffix,
            "stub_pattern": self.stub_pattern,
            "import_marker": self.import_marker,
            "header_lines": self.header_lines,
            "output": {
                "atomic_write": self.output.atomic_write,
                "validate_before_write": self.output.validate_before_write,
            },
        }
