"""Fix use case: re-run the checks and apply the first applicable fix per violation."""

import logging
from typing import TYPE_CHECKING

from feature_boundary_linter.domain.entities import FixContext, FixSummary, RewriteResult

if TYPE_CHECKING:
    from feature_boundary_linter.domain.entities import Diagnostic
    from feature_boundary_linter.domain.protocols import (
        FileSystemProtocol,
        TelemetryPort,
        TextEditProtocol,
    )
    from feature_boundary_linter.domain.registry import RuleRegistry
    from feature_boundary_linter.use_cases.check_boundaries import (
        CheckBoundariesUseCase,
        SourceFile,
    )

logger = logging.getLogger(__name__)


class ApplyFixesUseCase:
    """Orchestrate the resolution of boundary violations."""

    def __init__(
        self,
        check_use_case: "CheckBoundariesUseCase",
        registry: "RuleRegistry",
        text_edit: "TextEditProtocol",
        filesystem: "FileSystemProtocol",
        telemetry: "TelemetryPort | None" = None,
        create_backups: bool = True,
        dry_run: bool = False,
    ) -> None:
        self.check_use_case = check_use_case
        self.registry = registry
        self.text_edit = text_edit
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.create_backups = create_backups
        self.dry_run = dry_run

    def execute(self, target_path: str, rule_codes: list[str] | None = None) -> FixSummary:
        """Apply fixes to all files in target_path, limited to rule_codes when given."""
        selected = self._select_codes(rule_codes)
        if self.telemetry:
            mode = " (dry run)" if self.dry_run else ""
            self.telemetry.step(f"🔧 Starting Fix Logic on {target_path}{mode}")

        sources, skipped = self.check_use_case.load_sources(target_path)
        modified: list[str] = []
        applied_by_fix: dict[str, int] = {}
        fixes_applied = 0
        unfixable = 0
        dropped_edits = 0

        for source_file in sources:
            edits, file_unfixable = self._collect_edits(source_file, selected)
            unfixable += file_unfixable
            if not edits:
                continue
            new_source, applied, dropped = self.text_edit.apply_edits(source_file.source, edits)
            dropped_edits += len(dropped)
            if not applied or new_source == source_file.source:
                continue
            if not self.dry_run and not self._write(source_file.path, new_source):
                skipped.append(source_file.path)
                continue
            modified.append(source_file.path)
            fixes_applied += len(applied)
            for edit in applied:
                applied_by_fix[edit.fix_id] = applied_by_fix.get(edit.fix_id, 0) + 1
            if self.telemetry:
                self.telemetry.step(f"file={source_file.path} fixes={len(applied)}")

        if self.telemetry:
            self.telemetry.step(f"🛠️ Fix Suite complete. Files repaired: {len(modified)}")
        return FixSummary(
            fixes_applied=fixes_applied,
            unfixable=unfixable,
            dropped_edits=dropped_edits,
            modified_files=tuple(modified),
            skipped_files=tuple(skipped),
            dry_run=self.dry_run,
            applied_by_fix=applied_by_fix,
        )

    def _select_codes(self, rule_codes: list[str] | None) -> frozenset[str]:
        if not rule_codes:
            return frozenset(self.registry.rule_codes())
        selected: set[str] = set()
        for requested in rule_codes:
            code = self.registry.resolve_code(requested)
            if code is None:
                raise ValueError(f"Rule '{requested}' not registered.")
            selected.add(code)
        return frozenset(selected)

    def _collect_edits(
        self, source_file: "SourceFile", selected: frozenset[str]
    ) -> tuple[list[RewriteResult], int]:
        """First applicable rewrite per selected violation, plus the count with none."""
        context = FixContext(current_path=source_file.uri, source=source_file.source)
        diagnostics: list[Diagnostic] = self.check_use_case.check_source(
            source_file.uri, source_file.source
        )
        edits: list[RewriteResult] = []
        unfixable = 0
        for diagnostic in diagnostics:
            if diagnostic.code not in selected:
                continue
            edit = self._first_fix(diagnostic, context)
            if edit is None:
                unfixable += 1
            else:
                edits.append(edit)
        return edits, unfixable

    def _first_fix(self, diagnostic: "Diagnostic", context: FixContext) -> RewriteResult | None:
        for fix in self.registry.fixes_for(diagnostic.code):
            result = fix.compute(diagnostic.violation.directive, context)
            if result is not None:
                return result
        return None

    def _write(self, path: str, content: str) -> bool:
        try:
            if self.create_backups:
                backup = self.filesystem.create_backup(path)
                logger.debug("Backed up %s to %s", path, backup)
            self.filesystem.write_text(path, content)
        except OSError as exc:
            logger.warning("Could not write %s: %s", path, exc)
            if self.telemetry:
                self.telemetry.warning(f"file={path} status=skipped reason=unwritable")
            return False
        return True
