"""
Boundary Vocabulary: directory names, suffixes and marker text used by the rules.
"""

# Layer directories whose presence in an import marks it as a feature internal.
DEFAULT_INTERNAL_DIRECTORIES: frozenset[str] = frozenset(
    {
        "data",
        "ui",
        "models",
        "exceptions",
        "extensions",
        "domain",
        "presentation",
        "application",
        "infrastructure",
    }
)

TEST_DIRECTORY_MARKERS: tuple[str, ...] = ("/test/", "/test_driver/", "/integration_test/")
TEST_FILE_SUFFIX: str = "_test.dart"
CORE_DIRECTORY_MARKER: str = "/core/"
DART_EXTENSION: str = ".dart"

# Directory name -> layer value (see ArchLayer)
LAYER_DIRECTORIES: dict[str, str] = {
    "data": "Data",
    "infrastructure": "Data",
    "domain": "Domain",
    "ui": "UI",
    "presentation": "UI",
}

# Split barrel suffix per layer value; the monolithic barrel has none.
BARREL_SUFFIXES: dict[str, str] = {
    "Data": "_data",
    "Domain": "_domain",
    "UI": "_ui",
}

FLUTTER_PACKAGE_PREFIX: str = "package:flutter/"
# foundation.dart carries no widget tree and stays usable from logic layers.
FLUTTER_LOGIC_SAFE_IMPORTS: frozenset[str] = frozenset({"package:flutter/foundation.dart"})

CORE_IMPORT_MARKER: str = (
    "// TODO: Move this dependency out of core - core should not import features"
)
DISABLED_LINE_PREFIX: str = "// "

# Fallback argument when the feature pre-filter matches but classification does not.
UNCLASSIFIED_FEATURE_TOKEN: str = "feature"

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = ("*.g.dart", "*.freezed.dart", "*.mocks.dart")
SKIPPED_DIRECTORIES: frozenset[str] = frozenset({".dart_tool", "build", ".git"})

RULE_REGISTRY_PREFIX: str = "feature-boundary."
