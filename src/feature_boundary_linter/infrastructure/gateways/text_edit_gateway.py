"""Text edit gateway: applies RewriteResults to source text."""

import logging

from feature_boundary_linter.domain.entities import RewriteResult
from feature_boundary_linter.domain.protocols import TextEditProtocol

logger = logging.getLogger(__name__)


class TextEditGateway(TextEditProtocol):
    """
    Applies edits for one file in a single pass.

    Edits are accepted in the order given; an edit overlapping one already accepted
    (or reaching past the end of the text) is dropped. Accepted edits are spliced
    bottom-up so earlier offsets stay valid.
    """

    def apply_edits(
        self, source: str, edits: list[RewriteResult]
    ) -> tuple[str, list[RewriteResult], list[RewriteResult]]:
        applied: list[RewriteResult] = []
        dropped: list[RewriteResult] = []
        for edit in edits:
            if edit.span.offset < 0 or edit.span.end > len(source):
                logger.warning("Dropping %s edit outside the text at %d", edit.fix_id, edit.span.offset)
                dropped.append(edit)
                continue
            clash = next((kept for kept in applied if self._conflicts(kept, edit)), None)
            if clash is not None:
                logger.warning(
                    "Dropping %s edit at %d: overlaps %s edit at %d",
                    edit.fix_id,
                    edit.span.offset,
                    clash.fix_id,
                    clash.span.offset,
                )
                dropped.append(edit)
                continue
            applied.append(edit)

        result = source
        for edit in sorted(applied, key=lambda e: e.span.offset, reverse=True):
            result = result[: edit.span.offset] + edit.replacement_text + result[edit.span.end:]
        return result, applied, dropped

    @staticmethod
    def _conflicts(first: RewriteResult, second: RewriteResult) -> bool:
        """Overlapping spans, or two insertions at the same offset."""
        if first.span.overlaps(second.span):
            return True
        return first.span.offset == second.span.offset and (
            first.span.length == 0 or second.span.length == 0
        )
