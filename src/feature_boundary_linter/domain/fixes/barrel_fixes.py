"""URI-rewriting fixes: barrel redirection, layer-specific barrels, package imports."""

from feature_boundary_linter.domain.entities import (
    ArchLayer,
    BarrelType,
    Directive,
    FixContext,
    RewriteResult,
)
from feature_boundary_linter.domain.patterns import FeaturePathClassifier
from feature_boundary_linter.domain.rules import Fixable


class ReplaceWithBarrelImportFix(Fixable):
    """
    Point an internal import at the feature's barrel.

    '<prefix><feature_token>/<rest>' becomes '<prefix><feature_token>/<name>.dart', so
    package: and ../ addressing are both preserved. A URI that already stops at the
    feature root has no <rest> and gets no fix.
    """

    fix_id: str = "replace_with_barrel_import"
    description: str = "Replace with barrel file import"

    def compute(self, directive: Directive, context: FixContext) -> RewriteResult | None:
        matched = FeaturePathClassifier.match_with_prefix(directive.uri)
        if matched is None:
            return None
        prefix, identity = matched
        barrel_uri = f"{prefix}{identity.barrel_path}"
        return RewriteResult(
            fix_id=self.fix_id,
            replacement_text=directive.quoted(barrel_uri),
            span=directive.uri_span,
        )


class UseLayerSpecificBarrelFix(Fixable):
    """Swap the imported barrel for the one matching the current file's layer (auth_domain.dart)."""

    fix_id: str = "use_layer_specific_barrel"
    description: str = "Use layer-specific barrel file"

    def compute(self, directive: Directive, context: FixContext) -> RewriteResult | None:
        uri = directive.uri
        imported = FeaturePathClassifier.classify(uri)
        if not uri or imported is None:
            return None
        if FeaturePathClassifier.barrel_type(uri, imported) == BarrelType.NOT_BARREL:
            return None
        current_layer = FeaturePathClassifier.layer_of(context.current_path)
        if current_layer == ArchLayer.UNKNOWN:
            return None
        directory, _, _ = uri.rpartition("/")
        file_name = FeaturePathClassifier.barrel_file_name(imported.feature_name, current_layer)
        new_uri = f"{directory}/{file_name}"
        if new_uri == uri:
            return None
        return RewriteResult(
            fix_id=self.fix_id,
            replacement_text=directive.quoted(new_uri),
            span=directive.uri_span,
        )


class ConvertToPackageImportFix(Fixable):
    """Rewrite a relative feature import as package:<pkg>/<resolved path>."""

    fix_id: str = "convert_to_package_import"
    description: str = "Convert to package import"

    def compute(self, directive: Directive, context: FixContext) -> RewriteResult | None:
        uri = directive.uri
        if not uri or not FeaturePathClassifier.is_relative_uri(uri):
            return None
        resolved = FeaturePathClassifier.resolve_package_path(context.current_path, uri)
        if resolved is None or not FeaturePathClassifier.contains_feature_pattern(resolved):
            return None
        return RewriteResult(
            fix_id=self.fix_id,
            replacement_text=directive.quoted(f"package:{resolved}"),
            span=directive.uri_span,
        )
