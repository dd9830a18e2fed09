"""Domain models for rules, fixes and violations."""

from dataclasses import dataclass

__all__ = [
    "Checkable",
    "Fixable",
    "Violation",
]

from typing import Protocol

from feature_boundary_linter.domain.entities import (
    Directive,
    DirectiveKind,
    FixContext,
    RewriteResult,
    SourceSpan,
)


@dataclass(frozen=True)
class Violation:
    """A rule violation: rule code, ordered message arguments and the offending directive."""

    code: str
    message_args: tuple[str, ...]
    span: SourceSpan
    directive: Directive

    @classmethod
    def from_directive(
        cls,
        *,
        code: str,
        directive: Directive,
        message_args: tuple[str, ...],
    ) -> "Violation":
        """Build a Violation spanning the whole directive statement."""
        return cls(
            code=code,
            message_args=message_args,
            span=directive.statement_span,
            directive=directive,
        )


# -----------------------------------------------------------------------------
# Rule protocols: Checkable (detect) and Fixable (rewrite). A rule is Checkable;
# fixes are separate Fixable producers attached to rules in the registry.
# -----------------------------------------------------------------------------


class Checkable(Protocol):
    """Stateless check of one directive in the context of the current file."""

    code: str
    symbol: str
    description: str
    directive_kinds: frozenset[DirectiveKind]

    def check(self, current_path: str, directive: Directive) -> Violation | None:
        """Return a violation, or None when the directive does not breach the rule."""
        ...


class Fixable(Protocol):
    """Computes an exact text rewrite for a flagged directive."""

    fix_id: str
    description: str

    def compute(self, directive: Directive, context: FixContext) -> RewriteResult | None:
        """
        Return the edit that resolves the violation, or None.

        None means no deterministic rewrite exists for this directive shape; the
        diagnostic is still reported.
        """
        ...
