"""Check use case: scan Dart files and evaluate every registered rule per directive."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from feature_boundary_linter.domain.entities import (
    AuditReport,
    Diagnostic,
    FileFinding,
    FixContext,
)

if TYPE_CHECKING:
    from feature_boundary_linter.domain.config import ConfigurationLoader
    from feature_boundary_linter.domain.protocols import (
        DirectiveScannerProtocol,
        FileSystemProtocol,
        TelemetryPort,
    )
    from feature_boundary_linter.domain.registry import RuleRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """A readable Dart file with the canonical URI the rules see."""
    path: str
    uri: str
    source: str


class CheckBoundariesUseCase:
    """Orchestrate boundary checks over a file or directory."""

    def __init__(
        self,
        registry: "RuleRegistry",
        scanner: "DirectiveScannerProtocol",
        filesystem: "FileSystemProtocol",
        config_loader: "ConfigurationLoader",
        telemetry: "TelemetryPort | None" = None,
    ) -> None:
        self.registry = registry
        self.scanner = scanner
        self.filesystem = filesystem
        self.config_loader = config_loader
        self.telemetry = telemetry

    def execute(self, target_path: str) -> AuditReport:
        """Check every Dart file under target_path."""
        if self.telemetry:
            self.telemetry.step(f"Checking feature boundaries in {target_path}")
        sources, skipped = self.load_sources(target_path)
        findings: list[FileFinding] = []
        for source_file in sources:
            diagnostics = self.check_source(source_file.uri, source_file.source)
            if diagnostics:
                findings.append(
                    FileFinding(
                        path=source_file.path,
                        uri=source_file.uri,
                        diagnostics=tuple(diagnostics),
                    )
                )
        report = AuditReport(
            findings=tuple(findings),
            files_scanned=len(sources),
            skipped_files=tuple(skipped),
        )
        logger.debug(
            "Checked %d files: %d violations, %d skipped",
            report.files_scanned,
            report.total_violations,
            len(skipped),
        )
        return report

    def load_sources(self, target_path: str) -> tuple[list[SourceFile], list[str]]:
        """Read every Dart file under target_path. Unreadable files are logged and returned as skipped."""
        project_root = self.filesystem.find_project_root(target_path)
        package_name = self.config_loader.package_name
        if package_name is None and project_root is not None:
            package_name = self.filesystem.read_package_name(project_root)
        if project_root is None:
            logger.info("No pubspec.yaml above %s; rules will see file paths", target_path)

        sources: list[SourceFile] = []
        skipped: list[str] = []
        for path in self.filesystem.glob_dart_files(target_path, self.config_loader.exclude_patterns):
            try:
                source = self.filesystem.read_text(path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping %s: %s", path, exc)
                if self.telemetry:
                    self.telemetry.warning(f"file={path} status=skipped reason=unreadable")
                skipped.append(path)
                continue
            uri = self.filesystem.canonical_uri(
                path, project_root, package_name, self.config_loader.lib_dir
            )
            sources.append(SourceFile(path=path, uri=uri, source=source))
        return sources, skipped

    def check_source(self, current_uri: str, source: str) -> list[Diagnostic]:
        """Evaluate every registered rule against every directive of one file."""
        diagnostics: list[Diagnostic] = []
        context = FixContext(current_path=current_uri, source=source)
        for directive in self.scanner.scan(source):
            for code in self.registry.rule_codes():
                violation = self.registry.evaluate(code, current_uri, directive)
                if violation is None:
                    continue
                line, column = CheckBoundariesUseCase.line_and_column(
                    source, violation.span.offset
                )
                fixable = any(
                    fix.compute(directive, context) is not None
                    for fix in self.registry.fixes_for(code)
                )
                diagnostics.append(
                    Diagnostic(
                        violation=violation,
                        message=self.registry.format_message(violation),
                        line=line,
                        column=column,
                        fixable=fixable,
                    )
                )
        return diagnostics

    @staticmethod
    def line_and_column(source: str, offset: int) -> tuple[int, int]:
        """1-based line and column of offset."""
        line = source.count("\n", 0, offset) + 1
        column = offset - (source.rfind("\n", 0, offset) + 1) + 1
        return line, column
