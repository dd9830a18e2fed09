"""Barrel export rule (FB004)."""

from feature_boundary_linter.domain.entities import Directive, DirectiveKind
from feature_boundary_linter.domain.patterns import FeaturePathClassifier
from feature_boundary_linter.domain.rules import Checkable, Violation


class CrossFeatureBarrelExportRule(Checkable):
    """Rule for FB004: a barrel file re-exporting code from outside its feature."""

    code: str = "FB004"
    symbol: str = "avoid_cross_feature_barrel_exports"
    description: str = "Barrel scope: a barrel exports only its own feature's files."
    directive_kinds: frozenset[DirectiveKind] = frozenset({DirectiveKind.EXPORT})

    def check(self, current_path: str, directive: Directive) -> Violation | None:
        """Relative exports that climb with '../' and package exports of another feature are flagged."""
        uri = directive.uri
        if not uri or FeaturePathClassifier.is_test_file(current_path):
            return None
        current = FeaturePathClassifier.classify(current_path)
        if current is None or not FeaturePathClassifier.is_barrel_file(current_path, current):
            return None
        if FeaturePathClassifier.is_relative_uri(uri):
            escapes = "../" in uri
        else:
            exported = FeaturePathClassifier.classify(uri)
            escapes = exported is not None and exported.feature_dir != current.feature_dir
        if not escapes:
            return None
        return Violation.from_directive(
            code=self.code,
            directive=directive,
            message_args=(uri,),
        )
