"""Relative path simplification within one feature."""

from feature_boundary_linter.domain.entities import (
    Directive,
    FeatureIdentity,
    FixContext,
    RewriteResult,
)
from feature_boundary_linter.domain.patterns import FeaturePathClassifier
from feature_boundary_linter.domain.rules import Fixable


class SimplifyRelativePathFix(Fixable):
    """
    Rewrite '../../feature_x/data/y.dart' from inside feature_x as the shortest relative path.

    Returns None for cross-feature URIs, for targets that are the feature's own barrel
    (those are removed instead) and when the path is already minimal.
    """

    fix_id: str = "simplify_relative_path"
    description: str = "Simplify to direct relative path"

    def compute(self, directive: Directive, context: FixContext) -> RewriteResult | None:
        uri = directive.uri
        if not uri or not FeaturePathClassifier.is_relative_uri(uri):
            return None
        current = FeaturePathClassifier.classify(context.current_path)
        matched = FeaturePathClassifier.match_with_prefix(uri)
        if current is None or matched is None:
            return None
        _, imported = matched
        if imported.feature_dir != current.feature_dir:
            return None
        simplified = self._simplified_path(uri, context.current_path, current)
        if simplified is None or simplified == uri:
            return None
        return RewriteResult(
            fix_id=self.fix_id,
            replacement_text=directive.quoted(simplified),
            span=directive.uri_span,
        )

    @staticmethod
    def _simplified_path(uri: str, current_path: str, feature: FeatureIdentity) -> str | None:
        target = FeaturePathClassifier.segments_after_feature(uri, feature)
        current = FeaturePathClassifier.segments_after_feature(current_path, feature)
        if not target or current is None:
            return None
        if target == [f"{feature.feature_name}.dart"]:
            return None
        current_dir = current[:-1]
        common = 0
        for left, right in zip(current_dir, target):
            if left != right:
                break
            common += 1
        parts = [".."] * (len(current_dir) - common) + target[common:]
        if not parts:
            return None
        return "/".join(parts)
