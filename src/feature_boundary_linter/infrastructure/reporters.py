"""Audit reporters: terminal text and JSON."""

import json
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from feature_boundary_linter.interface.reporters import AuditReporter

if TYPE_CHECKING:
    from feature_boundary_linter.domain.entities import AuditReport, FixSummary
    from feature_boundary_linter.domain.protocols import GuidanceServiceProtocol


class ReportPaths:
    """Display helpers shared by the reporters."""

    @staticmethod
    def display_path(path: str) -> str:
        """Path relative to the working directory when below it, else unchanged."""
        try:
            return Path(path).resolve().relative_to(Path.cwd().resolve()).as_posix()
        except ValueError:
            return path


class TerminalAuditReporter(AuditReporter):
    """Terminal reporter: one line per diagnostic, then a per-rule summary."""

    def __init__(self, guidance_service: "GuidanceServiceProtocol", show_corrections: bool = True) -> None:
        self.guidance_service = guidance_service
        self.show_corrections = show_corrections

    def report_audit(self, report: "AuditReport") -> None:
        for finding in report.findings:
            shown = ReportPaths.display_path(finding.path)
            for diagnostic in finding.diagnostics:
                entry = self.guidance_service.get_entry(diagnostic.code) or {}
                symbol = entry.get("symbol", diagnostic.code)
                marker = " (fixable)" if diagnostic.fixable else ""
                typer.echo(
                    f"{shown}:{diagnostic.line}:{diagnostic.column}: "
                    + typer.style(f"{diagnostic.code}", fg=typer.colors.RED, bold=True)
                    + f" [{symbol}] {diagnostic.message}{marker}"
                )
                if self.show_corrections:
                    typer.secho(
                        f"    -> {self.guidance_service.get_correction(diagnostic.code)}",
                        fg=typer.colors.BRIGHT_BLACK,
                    )

        for skipped in report.skipped_files:
            typer.secho(f"Skipped unreadable file: {ReportPaths.display_path(skipped)}", fg=typer.colors.YELLOW)

        if not report.has_violations:
            typer.echo(f"\n✅ No feature boundary violations detected ({report.files_scanned} files).")
            return

        typer.echo("")
        typer.secho("Feature Boundary Audit", bold=True)
        for code, count in report.counts_by_code().items():
            name = self.guidance_service.get_display_name(code)
            typer.echo(f"  {code}  {name:<32} {count:>5}")
        typer.secho(
            f"❌ {report.total_violations} violation(s) in {len(report.findings)} file(s) "
            f"({report.files_scanned} scanned).",
            fg=typer.colors.RED,
        )

    def report_fixes(self, summary: "FixSummary") -> None:
        verb = "Would apply" if summary.dry_run else "Applied"
        typer.echo(
            f"{verb} {summary.fixes_applied} fix(es) in {summary.files_modified} file(s)."
        )
        for fix_id, count in sorted(summary.applied_by_fix.items()):
            typer.echo(f"  {fix_id:<32} {count:>5}")
        for path in summary.modified_files:
            typer.echo(f"  {'~' if summary.dry_run else 'M'} {ReportPaths.display_path(path)}")
        if summary.unfixable:
            typer.secho(
                f"⚠️  {summary.unfixable} violation(s) have no automatic fix.", fg=typer.colors.YELLOW
            )
        if summary.dropped_edits:
            typer.secho(
                f"⚠️  {summary.dropped_edits} overlapping edit(s) skipped; run fix again.",
                fg=typer.colors.YELLOW,
            )
        for skipped in summary.skipped_files:
            typer.secho(f"Skipped file (I/O error): {ReportPaths.display_path(skipped)}", fg=typer.colors.YELLOW)


class JsonAuditReporter(AuditReporter):
    """Machine-readable report on stdout."""

    def __init__(self, guidance_service: "GuidanceServiceProtocol") -> None:
        self.guidance_service = guidance_service

    def report_audit(self, report: "AuditReport") -> None:
        violations = []
        for finding in report.findings:
            for diagnostic in finding.diagnostics:
                entry = self.guidance_service.get_entry(diagnostic.code) or {}
                violation = diagnostic.violation
                violations.append(
                    {
                        "path": finding.path,
                        "uri": finding.uri,
                        "code": diagnostic.code,
                        "symbol": entry.get("symbol", diagnostic.code),
                        "message": diagnostic.message,
                        "arguments": list(violation.message_args),
                        "line": diagnostic.line,
                        "column": diagnostic.column,
                        "offset": violation.span.offset,
                        "length": violation.span.length,
                        "fixable": diagnostic.fixable,
                    }
                )
        payload = {
            "files_scanned": report.files_scanned,
            "skipped_files": list(report.skipped_files),
            "total_violations": report.total_violations,
            "counts": report.counts_by_code(),
            "violations": violations,
        }
        typer.echo(json.dumps(payload, indent=2))

    def report_fixes(self, summary: "FixSummary") -> None:
        payload = {
            "dry_run": summary.dry_run,
            "fixes_applied": summary.fixes_applied,
            "files_modified": list(summary.modified_files),
            "applied_by_fix": dict(sorted(summary.applied_by_fix.items())),
            "unfixable": summary.unfixable,
            "dropped_edits": summary.dropped_edits,
            "skipped_files": list(summary.skipped_files),
        }
        typer.echo(json.dumps(payload, indent=2))
