"""Feature boundary rules: internal imports (FB001), core independence (FB002), self barrel (FB003), relative barrel (FB007)."""

from typing import TYPE_CHECKING

from feature_boundary_linter.domain.constants import UNCLASSIFIED_FEATURE_TOKEN
from feature_boundary_linter.domain.entities import (
    BarrelType,
    Directive,
    DirectiveKind,
    FeatureIdentity,
)
from feature_boundary_linter.domain.patterns import FeaturePathClassifier
from feature_boundary_linter.domain.rules import Checkable, Violation

if TYPE_CHECKING:
    from feature_boundary_linter.domain.config import ConfigurationLoader

_IMPORTS_ONLY: frozenset[DirectiveKind] = frozenset({DirectiveKind.IMPORT})


class InternalFeatureImportRule(Checkable):
    """Rule for FB001: importing another feature's internals instead of its barrel."""

    code: str = "FB001"
    symbol: str = "avoid_internal_feature_imports"
    description: str = "Feature internals: import other features through their barrel file."
    directive_kinds: frozenset[DirectiveKind] = _IMPORTS_ONLY

    def __init__(self, config_loader: "ConfigurationLoader | None" = None) -> None:
        self._config_loader = config_loader

    @property
    def internal_directories(self) -> frozenset[str]:
        if self._config_loader is None:
            return frozenset()
        return self._config_loader.extra_internal_directories

    def check(self, current_path: str, directive: Directive) -> Violation | None:
        """Check one import for FB001. Same-feature imports and test files are exempt."""
        uri = directive.uri
        if not uri or FeaturePathClassifier.is_test_file(current_path):
            return None
        imported = FeaturePathClassifier.classify(uri)
        if imported is None:
            return None
        current = FeaturePathClassifier.classify(current_path)
        if current is not None and current.feature_dir == imported.feature_dir:
            return None
        if FeaturePathClassifier.barrel_type(uri, imported) != BarrelType.NOT_BARREL:
            return None
        if not FeaturePathClassifier.is_internal_layer(uri, self.internal_directories):
            return None
        return Violation.from_directive(
            code=self.code,
            directive=directive,
            message_args=(imported.feature_dir, imported.barrel_path),
        )


class CoreFeatureImportRule(Checkable):
    """Rule for FB002: core modules must not depend on features."""

    code: str = "FB002"
    symbol: str = "avoid_core_importing_features"
    description: str = "Core independence: core/ must not import from features."
    directive_kinds: frozenset[DirectiveKind] = _IMPORTS_ONLY

    def check(self, current_path: str, directive: Directive) -> Violation | None:
        """Report iff the current file is under /core/ and the URI passes the feature pre-filter."""
        uri = directive.uri
        if not uri or not FeaturePathClassifier.is_core_module(current_path):
            return None
        if not FeaturePathClassifier.contains_feature_pattern(uri):
            return None
        imported = FeaturePathClassifier.classify(uri)
        # The pre-filter is looser than classify(), e.g. 'features/' with no name after it.
        feature_dir = imported.feature_dir if imported is not None else UNCLASSIFIED_FEATURE_TOKEN
        return Violation.from_directive(
            code=self.code,
            directive=directive,
            message_args=(feature_dir,),
        )


class SelfBarrelImportRule(Checkable):
    """Rule for FB003: a feature importing its own barrel file."""

    code: str = "FB003"
    symbol: str = "avoid_self_barrel_import"
    description: str = "Self barrel: import files of your own feature directly."
    directive_kinds: frozenset[DirectiveKind] = _IMPORTS_ONLY

    def __init__(self, config_loader: "ConfigurationLoader | None" = None) -> None:
        self._config_loader = config_loader

    @property
    def internal_directories(self) -> frozenset[str]:
        if self._config_loader is None:
            return frozenset()
        return self._config_loader.extra_internal_directories

    def check(self, current_path: str, directive: Directive) -> Violation | None:
        uri = directive.uri
        if not uri or FeaturePathClassifier.is_test_file(current_path):
            return None
        current = FeaturePathClassifier.classify(current_path)
        if current is None:
            return None

        if FeaturePathClassifier.is_relative_uri(uri) and (
            self._is_relative_barrel_import(uri, current_path, current)
            or self._is_redundant_relative_path(uri, current)
        ):
            return self._violation(directive, current)

        imported = FeaturePathClassifier.classify(uri)
        if imported is None or imported.feature_dir != current.feature_dir:
            return None
        if FeaturePathClassifier.is_internal_layer(uri, self.internal_directories):
            return None
        if uri.rsplit("/", 1)[-1] == f"{current.feature_name}.dart":
            return self._violation(directive, current)
        return None

    def _violation(self, directive: Directive, current: FeatureIdentity) -> Violation:
        return Violation.from_directive(
            code=self.code,
            directive=directive,
            message_args=(current.feature_dir,),
        )

    def _is_relative_barrel_import(
        self, uri: str, current_path: str, current: FeatureIdentity
    ) -> bool:
        """'../auth.dart' from feature_auth/ui/x.dart climbs exactly to the feature root."""
        if uri.rsplit("/", 1)[-1] != f"{current.feature_name}.dart":
            return False
        if FeaturePathClassifier.is_internal_layer(uri, self.internal_directories):
            return False
        return uri.count("../") == self.depth_within_feature(current_path, current)

    def _is_redundant_relative_path(self, uri: str, current: FeatureIdentity) -> bool:
        """'../../feature_x/data/y.dart' from inside feature_x leaves and re-enters it."""
        if "../" not in uri:
            return False
        imported = FeaturePathClassifier.classify(uri)
        return imported is not None and imported.feature_dir == current.feature_dir

    @staticmethod
    def depth_within_feature(path: str, feature: FeatureIdentity) -> int:
        """Directories between the feature root and the file: feature_auth/ui/x.dart -> 1."""
        segments = FeaturePathClassifier.segments_after_feature(path, feature)
        if not segments:
            return 0
        return len(segments) - 1


class RelativeBarrelImportRule(Checkable):
    """Rule for FB007: another feature's barrel imported by relative path."""

    code: str = "FB007"
    symbol: str = "avoid_relative_barrel_imports"
    description: str = "Relative barrel: import other features' barrels with package: URIs."
    directive_kinds: frozenset[DirectiveKind] = _IMPORTS_ONLY

    def check(self, current_path: str, directive: Directive) -> Violation | None:
        uri = directive.uri
        if not uri or not FeaturePathClassifier.is_relative_uri(uri):
            return None
        if FeaturePathClassifier.is_test_file(current_path):
            return None
        imported = FeaturePathClassifier.classify(uri)
        if imported is None:
            return None
        current = FeaturePathClassifier.classify(current_path)
        if current is not None and current.feature_dir == imported.feature_dir:
            return None
        if FeaturePathClassifier.barrel_type(uri, imported) == BarrelType.NOT_BARREL:
            return None
        suggestion = FeaturePathClassifier.resolve_package_path(current_path, uri)
        if suggestion is None:
            return None
        return Violation.from_directive(
            code=self.code,
            directive=directive,
            message_args=(suggestion,),
        )
