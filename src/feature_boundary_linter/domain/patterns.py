"""Path classifier: feature identity, layer and barrel detection on raw path strings. Pure, no I/O."""

import posixpath
import re
from functools import lru_cache

from feature_boundary_linter.domain.constants import (
    BARREL_SUFFIXES,
    CORE_DIRECTORY_MARKER,
    DART_EXTENSION,
    DEFAULT_INTERNAL_DIRECTORIES,
    LAYER_DIRECTORIES,
    TEST_DIRECTORY_MARKERS,
    TEST_FILE_SUFFIX,
)
from feature_boundary_linter.domain.entities import ArchLayer, BarrelType, FeatureIdentity

# Underscore style is tried first; first match wins.
_UNDERSCORE_FEATURE = re.compile(r"feature_([^/]+)")
_SLASH_FEATURE = re.compile(r"features/([^/]+)")

# Prefix-capturing forms used by rewrites. The trailing '/.+' requires a
# non-empty remainder after the feature token.
_UNDERSCORE_FEATURE_WITH_PREFIX = re.compile(r"^(.*?)(feature_([^/]+))/.+$")
_SLASH_FEATURE_WITH_PREFIX = re.compile(r"^(.*?)(features/([^/]+))/.+$")

_PACKAGE_URI = re.compile(r"^package:([^/]+)/(.*)$")

_BARREL_TYPES_BY_SUFFIX: dict[str, BarrelType] = {
    "": BarrelType.MONOLITHIC,
    "_data": BarrelType.SPLIT_DATA,
    "_domain": BarrelType.SPLIT_DOMAIN,
    "_ui": BarrelType.SPLIT_UI,
}

_LAYER_BY_BARREL_TYPE: dict[BarrelType, ArchLayer] = {
    BarrelType.SPLIT_DATA: ArchLayer.DATA,
    BarrelType.SPLIT_DOMAIN: ArchLayer.DOMAIN,
    BarrelType.SPLIT_UI: ArchLayer.UI,
}

# Which imported layers each layer may depend on. UI and UNKNOWN are unrestricted.
_ALLOWED_LAYER_IMPORTS: dict[ArchLayer, frozenset[ArchLayer]] = {
    ArchLayer.DOMAIN: frozenset({ArchLayer.DOMAIN}),
    ArchLayer.DATA: frozenset({ArchLayer.DATA, ArchLayer.DOMAIN}),
}


class FeaturePathClassifier:
    """
    Maps import URIs and file paths to architectural roles.

    Every method is a total function over strings: absence of a match is a normal
    result (None / False / UNKNOWN), never an exception.
    """

    @staticmethod
    @lru_cache(maxsize=4096)
    def classify(path: str | None) -> FeatureIdentity | None:
        """Return the feature identity of path, preferring feature_<name> over features/<name>."""
        if not path:
            return None
        underscore = _UNDERSCORE_FEATURE.search(path)
        if underscore is not None:
            return FeatureIdentity.underscore(underscore.group(1))
        slash = _SLASH_FEATURE.search(path)
        if slash is not None:
            return FeatureIdentity.slash(slash.group(1))
        return None

    @staticmethod
    def match_with_prefix(uri: str | None) -> tuple[str, FeatureIdentity] | None:
        """
        Match uri against <prefix><feature_token>/<rest> with a non-empty rest.

        Returns (prefix, identity) where prefix is whatever precedes the feature
        token ('package:myapp/', '../../', or ''). A URI that stops at the feature
        root does not match.
        """
        if not uri:
            return None
        underscore = _UNDERSCORE_FEATURE_WITH_PREFIX.match(uri)
        if underscore is not None:
            return underscore.group(1), FeatureIdentity.underscore(underscore.group(3))
        slash = _SLASH_FEATURE_WITH_PREFIX.match(uri)
        if slash is not None:
            return slash.group(1), FeatureIdentity.slash(slash.group(3))
        return None

    @staticmethod
    def contains_feature_pattern(path: str | None) -> bool:
        """Cheap pre-filter: raw 'feature_' or 'features/' substring."""
        if not path:
            return False
        return "feature_" in path or "features/" in path

    @staticmethod
    def is_test_file(path: str | None) -> bool:
        """True for files under test/, test_driver/, integration_test/ or named *_test.dart."""
        if not path:
            return False
        return any(marker in path for marker in TEST_DIRECTORY_MARKERS) or path.endswith(
            TEST_FILE_SUFFIX
        )

    @staticmethod
    def is_internal_layer(path: str | None, extra_directories: frozenset[str] = frozenset()) -> bool:
        """True if path has a layer directory (data/, ui/, domain/, ...) as a component."""
        if not path:
            return False
        directories = DEFAULT_INTERNAL_DIRECTORIES | extra_directories
        return any(f"/{name}/" in path for name in directories)

    @staticmethod
    def is_core_module(path: str | None) -> bool:
        if not path:
            return False
        return CORE_DIRECTORY_MARKER in path

    @staticmethod
    def is_relative_uri(uri: str | None) -> bool:
        if not uri:
            return False
        return uri.startswith("./") or uri.startswith("../")

    @staticmethod
    def is_barrel_file(path: str | None, identity: FeatureIdentity) -> bool:
        """True if path is the monolithic barrel at the root of identity's feature."""
        if not path:
            return False
        return path == identity.barrel_path or path.endswith(f"/{identity.barrel_path}")

    @staticmethod
    def segments_after_feature(path: str, identity: FeatureIdentity) -> list[str] | None:
        """Path segments following the feature token (file name included), or None if absent."""
        index = path.find(identity.feature_dir)
        if index == -1:
            return None
        rest = path[index + len(identity.feature_dir):]
        return [segment for segment in rest.split("/") if segment]

    @staticmethod
    def layer_of(path: str | None) -> ArchLayer:
        """
        Layer of a file from its first layer directory.

        Inside a feature only the directories below the feature token count; outside
        one, every directory of the path does.
        """
        if not path:
            return ArchLayer.UNKNOWN
        identity = FeaturePathClassifier.classify(path)
        segments: list[str] | None = None
        if identity is not None:
            segments = FeaturePathClassifier.segments_after_feature(path, identity)
        if segments is None:
            segments = [segment for segment in path.split("/") if segment]
        for directory in segments[:-1]:
            layer_value = LAYER_DIRECTORIES.get(directory)
            if layer_value is not None:
                return ArchLayer(layer_value)
        return ArchLayer.UNKNOWN

    @staticmethod
    def barrel_type(uri: str | None, identity: FeatureIdentity) -> BarrelType:
        """Classify the file a URI points at relative to identity's feature root."""
        if not uri:
            return BarrelType.NOT_BARREL
        segments = FeaturePathClassifier.segments_after_feature(uri, identity)
        if segments is None or len(segments) != 1:
            return BarrelType.NOT_BARREL
        file_name = segments[0]
        if not file_name.endswith(DART_EXTENSION):
            return BarrelType.NOT_BARREL
        stem = file_name[: -len(DART_EXTENSION)]
        if not stem.startswith(identity.feature_name):
            return BarrelType.NOT_BARREL
        suffix = stem[len(identity.feature_name):]
        return _BARREL_TYPES_BY_SUFFIX.get(suffix, BarrelType.NOT_BARREL)

    @staticmethod
    def layer_of_barrel(barrel: BarrelType) -> ArchLayer:
        """Layer exported by a split barrel; UNKNOWN for monolithic or non-barrels."""
        return _LAYER_BY_BARREL_TYPE.get(barrel, ArchLayer.UNKNOWN)

    @staticmethod
    def barrel_file_name(feature_name: str, layer: ArchLayer = ArchLayer.UNKNOWN) -> str:
        """'auth.dart' for UNKNOWN, 'auth_data.dart' / '_domain' / '_ui' for a layer."""
        suffix = BARREL_SUFFIXES.get(layer.value, "")
        return f"{feature_name}{suffix}{DART_EXTENSION}"

    @staticmethod
    def is_layer_import_allowed(current: ArchLayer, imported: ArchLayer) -> bool:
        """Domain imports Domain only; Data imports Data and Domain; UI and unknown import anything."""
        allowed = _ALLOWED_LAYER_IMPORTS.get(current)
        if allowed is None:
            return True
        return imported in allowed

    @staticmethod
    def resolve_package_path(current_path: str | None, relative_uri: str) -> str | None:
        """
        Resolve relative_uri against a package: current_path.

        Returns '<package>/<path>' without the scheme, or None if the current file
        has no package URI or the relative path climbs out of the package.
        """
        if not current_path:
            return None
        match = _PACKAGE_URI.match(current_path)
        if match is None:
            return None
        package_name, path_in_package = match.group(1), match.group(2)
        joined = posixpath.join(posixpath.dirname(path_in_package), relative_uri)
        resolved = posixpath.normpath(joined)
        if resolved in (".", "..") or resolved.startswith("../") or resolved.startswith("/"):
            return None
        return f"{package_name}/{resolved}"
