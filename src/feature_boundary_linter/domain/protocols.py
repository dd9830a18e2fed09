from typing import TYPE_CHECKING, Protocol

from feature_boundary_linter.domain.registry_types import RuleRegistryEntry

if TYPE_CHECKING:
    from feature_boundary_linter.domain.entities import Directive, RewriteResult


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class DirectiveScannerProtocol(Protocol):
    """Turns Dart source text into import/export directive records."""

    def scan(self, source: str) -> list["Directive"]:
        """Directives in source order, with exact offsets into source."""
        ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def find_project_root(self, path: str) -> str | None:
        """Nearest directory at or above path holding a pubspec.yaml."""
        ...

    def glob_dart_files(self, path: str, exclude_patterns: list[str] | None = None) -> list[str]:
        """Get all Dart files in path (recursive if directory), sorted."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...

    def create_backup(self, path: str) -> str:
        """Copy path to path + '.bak'. Returns the backup path."""
        ...

    def read_package_name(self, project_root: str) -> str | None:
        """The 'name' field of project_root/pubspec.yaml, if any."""
        ...

    def canonical_uri(
        self, path: str, project_root: str | None, package_name: str | None, lib_dir: str = "lib"
    ) -> str:
        """package:<name>/<path under lib> for library files, else the posix path."""
        ...


class TextEditProtocol(Protocol):
    """Applies rewrite results to source text."""

    def apply_edits(
        self, source: str, edits: list["RewriteResult"]
    ) -> tuple[str, list["RewriteResult"], list["RewriteResult"]]:
        """Return (new_source, applied, dropped). Overlapping later edits are dropped."""
        ...


class GuidanceServiceProtocol(Protocol):
    """Read access to the rule registry document."""

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        ...

    def get_entry(self, rule_code: str) -> RuleRegistryEntry | None:
        ...

    def get_correction(self, rule_code: str) -> str:
        ...

    def get_display_name(self, rule_code: str) -> str:
        ...
