"""Quick fixes: each computes one exact text edit for a flagged directive."""

from feature_boundary_linter.domain.fixes.barrel_fixes import (
    ConvertToPackageImportFix,
    ReplaceWithBarrelImportFix,
    UseLayerSpecificBarrelFix,
)
from feature_boundary_linter.domain.fixes.relative_path_fixes import SimplifyRelativePathFix
from feature_boundary_linter.domain.fixes.removal_fixes import (
    CommentOutFeatureImportFix,
    RemoveCrossFeatureExportFix,
    RemoveSelfBarrelImportFix,
)

__all__ = [
    "CommentOutFeatureImportFix",
    "ConvertToPackageImportFix",
    "RemoveCrossFeatureExportFix",
    "RemoveSelfBarrelImportFix",
    "ReplaceWithBarrelImportFix",
    "SimplifyRelativePathFix",
    "UseLayerSpecificBarrelFix",
]
