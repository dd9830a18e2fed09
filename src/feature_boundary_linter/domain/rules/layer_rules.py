"""Layer rules: improper layer import (FB005), UI framework in logic layers (FB006)."""

from feature_boundary_linter.domain.constants import (
    FLUTTER_LOGIC_SAFE_IMPORTS,
    FLUTTER_PACKAGE_PREFIX,
)
from feature_boundary_linter.domain.entities import ArchLayer, Directive, DirectiveKind
from feature_boundary_linter.domain.patterns import FeaturePathClassifier
from feature_boundary_linter.domain.rules import Checkable, Violation

_LOGIC_LAYERS: frozenset[ArchLayer] = frozenset({ArchLayer.DATA, ArchLayer.DOMAIN})


class ImproperLayerImportRule(Checkable):
    """
    Rule for FB005: a logic layer importing another feature's split barrel of a layer
    it may not depend on (Domain -> Data/UI, Data -> UI).

    Monolithic barrels are never opened, so they pass.
    """

    code: str = "FB005"
    symbol: str = "avoid_improper_layer_import"
    description: str = "Layer direction: Domain and Data must not import higher layers' barrels."
    directive_kinds: frozenset[DirectiveKind] = frozenset({DirectiveKind.IMPORT})

    def check(self, current_path: str, directive: Directive) -> Violation | None:
        uri = directive.uri
        if not uri or FeaturePathClassifier.is_test_file(current_path):
            return None
        current = FeaturePathClassifier.classify(current_path)
        if current is None:
            return None
        current_layer = FeaturePathClassifier.layer_of(current_path)
        if current_layer not in _LOGIC_LAYERS:
            return None
        imported = FeaturePathClassifier.classify(uri)
        if imported is None or imported.feature_dir == current.feature_dir:
            return None
        barrel = FeaturePathClassifier.barrel_type(uri, imported)
        imported_layer = FeaturePathClassifier.layer_of_barrel(barrel)
        if imported_layer == ArchLayer.UNKNOWN:
            return None
        if FeaturePathClassifier.is_layer_import_allowed(current_layer, imported_layer):
            return None
        return Violation.from_directive(
            code=self.code,
            directive=directive,
            message_args=(current_layer.value, uri, imported_layer.value),
        )


class UiFrameworkInLogicRule(Checkable):
    """Rule for FB006: Flutter framework imports in Domain or Data files."""

    code: str = "FB006"
    symbol: str = "avoid_ui_framework_in_logic"
    description: str = "Framework independence: no package:flutter/ in Domain or Data."
    directive_kinds: frozenset[DirectiveKind] = frozenset({DirectiveKind.IMPORT})

    def check(self, current_path: str, directive: Directive) -> Violation | None:
        uri = directive.uri
        if not uri or not uri.startswith(FLUTTER_PACKAGE_PREFIX):
            return None
        if uri in FLUTTER_LOGIC_SAFE_IMPORTS:
            return None
        if FeaturePathClassifier.is_test_file(current_path):
            return None
        layer = FeaturePathClassifier.layer_of(current_path)
        if layer not in _LOGIC_LAYERS:
            return None
        return Violation.from_directive(
            code=self.code,
            directive=directive,
            message_args=(layer.value, uri),
        )
