"""Shared fixtures: directive factory, real rule registry and a throwaway Dart project.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/ on the path.
"""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from feature_boundary_linter.domain.entities import Directive
from feature_boundary_linter.domain.registry import RegistryBuilder, RuleRegistry
from feature_boundary_linter.infrastructure.gateways.dart_directive_scanner import (
    DartDirectiveScanner,
)
from feature_boundary_linter.infrastructure.services.guidance_service import GuidanceService


def directive_from(statement: str) -> Directive:
    """First directive the scanner finds in statement."""
    directives = DartDirectiveScanner().scan(statement)
    assert directives, f"no directive in {statement!r}"
    return directives[0]


def check_use_case_required_deps(**overrides: object) -> dict[str, object]:
    """Return required dependency mocks for CheckBoundariesUseCase. Pass overrides to customize."""
    config_loader = MagicMock()
    config_loader.package_name = None
    config_loader.exclude_patterns = []
    config_loader.lib_dir = "lib"
    base = {
        "registry": MagicMock(),
        "scanner": MagicMock(),
        "filesystem": MagicMock(),
        "config_loader": config_loader,
        "telemetry": MagicMock(),
    }
    base.update(overrides)
    return base


@pytest.fixture
def make_directive() -> Callable[[str], Directive]:
    return directive_from


@pytest.fixture(scope="session")
def guidance_service() -> GuidanceService:
    return GuidanceService()


@pytest.fixture
def rule_registry(guidance_service: GuidanceService) -> RuleRegistry:
    return RegistryBuilder.defaults(guidance_service.get_registry()).build()


@pytest.fixture
def dart_project(tmp_path: Path) -> Path:
    """Minimal Flutter package 'myapp' with one clean file and one violating file."""
    (tmp_path / "pubspec.yaml").write_text("name: myapp\n", encoding="utf-8")
    ui_dir = tmp_path / "lib" / "feature_profile" / "ui"
    ui_dir.mkdir(parents=True)
    (ui_dir / "profile_page.dart").write_text(
        "import 'package:flutter/material.dart';\n"
        "import 'package:myapp/feature_auth/data/auth_repository.dart';\n"
        "\n"
        "class ProfilePage {}\n",
        encoding="utf-8",
    )
    auth_dir = tmp_path / "lib" / "feature_auth"
    (auth_dir / "data").mkdir(parents=True)
    (auth_dir / "auth.dart").write_text(
        "export 'data/auth_repository.dart';\n", encoding="utf-8"
    )
    (auth_dir / "data" / "auth_repository.dart").write_text(
        "class AuthRepository {}\n", encoding="utf-8"
    )
    return tmp_path
