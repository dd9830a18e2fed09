"""Fixes that neutralise a directive instead of redirecting it."""

from feature_boundary_linter.domain.constants import CORE_IMPORT_MARKER, DISABLED_LINE_PREFIX
from feature_boundary_linter.domain.entities import (
    Directive,
    FixContext,
    RewriteResult,
    SourceSpan,
)
from feature_boundary_linter.domain.rules import Fixable


class CommentOutFeatureImportFix(Fixable):
    """
    Disable a core -> feature import without guessing a replacement.

    The statement becomes a marker comment followed by the original statement with every
    line behind '// ', so the URI survives verbatim for re-enabling.
    """

    fix_id: str = "comment_out_feature_import"
    description: str = "Comment out feature import"

    def compute(self, directive: Directive, context: FixContext) -> RewriteResult | None:
        if not directive.uri:
            return None
        disabled = "\n".join(
            DISABLED_LINE_PREFIX + line for line in directive.statement_text.split("\n")
        )
        replacement = f"{CORE_IMPORT_MARKER}\n{disabled}"
        return RewriteResult(
            fix_id=self.fix_id,
            replacement_text=replacement,
            span=directive.statement_span,
        )


class RemoveSelfBarrelImportFix(Fixable):
    """Delete the import; a directive alone on its line takes the whole line with it."""

    fix_id: str = "remove_self_barrel_import"
    description: str = "Remove self-barrel import"

    def compute(self, directive: Directive, context: FixContext) -> RewriteResult | None:
        return RewriteResult(
            fix_id=self.fix_id,
            replacement_text="",
            span=RemoveSelfBarrelImportFix.line_span(directive.statement_span, context.source),
        )

    @staticmethod
    def line_span(span: SourceSpan, source: str) -> SourceSpan:
        """Widen span to its full line (newline included) when nothing else is on that line."""
        if not source or span.end > len(source):
            return span
        if "\n" in source[span.offset:span.end]:
            return span
        line_start = source.rfind("\n", 0, span.offset) + 1
        newline = source.find("\n", span.end)
        line_end = len(source) if newline == -1 else newline + 1
        if source[line_start:span.offset].strip() or source[span.end:line_end].strip():
            return span
        return SourceSpan(offset=line_start, length=line_end - line_start)


class RemoveCrossFeatureExportFix(Fixable):
    fix_id: str = "remove_cross_feature_export"
    description: str = "Remove cross-feature export"

    def compute(self, directive: Directive, context: FixContext) -> RewriteResult | None:
        return RewriteResult(
            fix_id=self.fix_id,
            replacement_text="",
            span=directive.statement_span,
        )
