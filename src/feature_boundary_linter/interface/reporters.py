"""Interface for audit reporting."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from feature_boundary_linter.domain.entities import AuditReport, FixSummary


class AuditReporter(Protocol):
    """Protocol for reporting audit results."""

    def report_audit(self, report: "AuditReport") -> None:
        """Report audit results to the user."""
        ...

    def report_fixes(self, summary: "FixSummary") -> None:
        """Report the outcome of a fix run."""
        ...
