"""Value objects shared by the classifier, the rules and the fixes. Pure data, no I/O."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from feature_boundary_linter.domain.rules import Violation


class FeatureStyle(Enum):
    """Naming convention a feature directory was matched with."""
    UNDERSCORE = "underscore"  # feature_auth/
    SLASH = "slash"            # features/auth/


class ArchLayer(Enum):
    """Clean-architecture layer a file belongs to."""
    DATA = "Data"
    DOMAIN = "Domain"
    UI = "UI"
    UNKNOWN = "Unknown"


class BarrelType(Enum):
    """Shape of a barrel file at a feature root."""
    MONOLITHIC = "monolithic"      # auth.dart
    SPLIT_DATA = "split_data"      # auth_data.dart
    SPLIT_DOMAIN = "split_domain"  # auth_domain.dart
    SPLIT_UI = "split_ui"          # auth_ui.dart
    NOT_BARREL = "not_barrel"


class DirectiveKind(Enum):
    """Kinds of URI-carrying directives handed to the rules."""
    IMPORT = "import"
    EXPORT = "export"


@dataclass(frozen=True)
class FeatureIdentity:
    """
    Structured identity of a feature-scoped path.

    feature_dir is the canonical directory token ('feature_auth' or 'features/auth'),
    feature_name the short name ('auth').
    """
    feature_dir: str
    feature_name: str
    style: FeatureStyle

    @classmethod
    def underscore(cls, name: str) -> "FeatureIdentity":
        """Build the identity for a feature_<name> directory."""
        return cls(feature_dir=f"feature_{name}", feature_name=name, style=FeatureStyle.UNDERSCORE)

    @classmethod
    def slash(cls, name: str) -> "FeatureIdentity":
        """Build the identity for a features/<name> directory."""
        return cls(feature_dir=f"features/{name}", feature_name=name, style=FeatureStyle.SLASH)

    @property
    def barrel_path(self) -> str:
        """Monolithic barrel path relative to the package root, e.g. feature_auth/auth.dart."""
        return f"{self.feature_dir}/{self.feature_name}.dart"


@dataclass(frozen=True)
class SourceSpan:
    """Character range in a source text."""
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def overlaps(self, other: "SourceSpan") -> bool:
        """True if the two ranges share at least one character."""
        return self.offset < other.end and other.offset < self.end


@dataclass(frozen=True)
class Directive:
    """
    An import or export directive as plain data.

    uri is None when the literal is not a plain string (e.g. interpolated).
    uri_span covers the quoted literal including its quotes; statement_span covers
    the keyword through the terminating semicolon.
    """
    kind: DirectiveKind
    uri: str | None
    uri_span: SourceSpan
    statement_text: str
    statement_span: SourceSpan
    quote: str = "'"

    def quoted(self, uri: str) -> str:
        """Return uri wrapped in this directive's quote character."""
        return f"{self.quote}{uri}{self.quote}"


@dataclass(frozen=True)
class RewriteResult:
    """A single text edit produced by a fix."""
    fix_id: str
    replacement_text: str
    span: SourceSpan


@dataclass(frozen=True)
class FixContext:
    """What a fix may know besides the directive: the current file's URI and text."""
    current_path: str
    source: str = ""


@dataclass(frozen=True)
class Diagnostic:
    """A violation rendered for output: filled message and 1-based line/column."""
    violation: "Violation"
    message: str
    line: int
    column: int
    fixable: bool = False

    @property
    def code(self) -> str:
        return self.violation.code


@dataclass(frozen=True)
class FileFinding:
    """Diagnostics found in one file. uri is the canonical path the rules saw."""
    path: str
    uri: str
    diagnostics: tuple[Diagnostic, ...]

    @property
    def violations(self) -> tuple["Violation", ...]:
        return tuple(diagnostic.violation for diagnostic in self.diagnostics)


@dataclass(frozen=True)
class AuditReport:
    """Outcome of a boundary check over a target path."""
    findings: tuple[FileFinding, ...] = ()
    files_scanned: int = 0
    skipped_files: tuple[str, ...] = ()

    @property
    def total_violations(self) -> int:
        return sum(len(finding.diagnostics) for finding in self.findings)

    @property
    def has_violations(self) -> bool:
        return self.total_violations > 0

    def counts_by_code(self) -> dict[str, int]:
        """Violation count per rule code, sorted by code."""
        counts: dict[str, int] = {}
        for finding in self.findings:
            for diagnostic in finding.diagnostics:
                counts[diagnostic.code] = counts.get(diagnostic.code, 0) + 1
        return dict(sorted(counts.items()))


@dataclass(frozen=True)
class FixSummary:
    """Outcome of a fix run."""
    fixes_applied: int = 0
    unfixable: int = 0
    dropped_edits: int = 0
    modified_files: tuple[str, ...] = ()
    skipped_files: tuple[str, ...] = ()
    dry_run: bool = False
    applied_by_fix: dict[str, int] = field(default_factory=dict)

    @property
    def files_modified(self) -> int:
        return len(self.modified_files)
