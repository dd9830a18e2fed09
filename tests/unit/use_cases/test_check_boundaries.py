"""Unit tests for CheckBoundariesUseCase."""

import unittest
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from conftest import check_use_case_required_deps, directive_from

from feature_boundary_linter.domain.config import ConfigurationLoader
from feature_boundary_linter.domain.registry import RuleRegistry
from feature_boundary_linter.infrastructure.gateways.dart_directive_scanner import (
    DartDirectiveScanner,
)
from feature_boundary_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from feature_boundary_linter.use_cases.check_boundaries import CheckBoundariesUseCase


class TestCheckBoundariesWithMocks(unittest.TestCase):
    def setUp(self) -> None:
        self.deps = check_use_case_required_deps()
        self.use_case = CheckBoundariesUseCase(**self.deps)  # type: ignore[arg-type]

    def test_unreadable_file_is_skipped_with_warning(self) -> None:
        filesystem = self.deps["filesystem"]
        filesystem.find_project_root.return_value = None
        filesystem.glob_dart_files.return_value = ["/p/a.dart", "/p/b.dart"]
        filesystem.read_text.side_effect = [UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"), ""]
        filesystem.canonical_uri.return_value = "/p/b.dart"
        self.deps["scanner"].scan.return_value = []
        self.deps["registry"].rule_codes.return_value = ()

        report = self.use_case.execute("/p")

        self.assertEqual(report.skipped_files, ("/p/a.dart",))
        self.assertEqual(report.files_scanned, 1)
        self.assertFalse(report.has_violations)
        self.deps["telemetry"].warning.assert_called_once_with(
            "file=/p/a.dart status=skipped reason=unreadable"
        )

    def test_package_name_from_pubspec(self) -> None:
        filesystem = self.deps["filesystem"]
        filesystem.find_project_root.return_value = "/p"
        filesystem.read_package_name.return_value = "myapp"
        filesystem.glob_dart_files.return_value = ["/p/lib/a.dart"]
        filesystem.read_text.return_value = ""

        self.use_case.load_sources("/p/lib")

        filesystem.canonical_uri.assert_called_once_with("/p/lib/a.dart", "/p", "myapp", "lib")

    def test_configured_package_name_wins(self) -> None:
        self.deps["config_loader"].package_name = "override"
        filesystem = self.deps["filesystem"]
        filesystem.find_project_root.return_value = "/p"
        filesystem.glob_dart_files.return_value = ["/p/lib/a.dart"]
        filesystem.read_text.return_value = ""

        self.use_case.load_sources("/p/lib")

        filesystem.read_package_name.assert_not_called()
        filesystem.canonical_uri.assert_called_once_with("/p/lib/a.dart", "/p", "override", "lib")

    def test_line_and_column(self) -> None:
        source = "a\nbc\r\ndef"
        self.assertEqual(CheckBoundariesUseCase.line_and_column(source, 0), (1, 1))
        self.assertEqual(CheckBoundariesUseCase.line_and_column(source, 3), (2, 2))
        self.assertEqual(CheckBoundariesUseCase.line_and_column(source, 6), (3, 1))


class TestCheckBoundariesIntegration:
    @pytest.fixture
    def use_case(self, rule_registry: RuleRegistry) -> CheckBoundariesUseCase:
        return CheckBoundariesUseCase(
            registry=rule_registry,
            scanner=DartDirectiveScanner(),
            filesystem=FileSystemGateway(),
            config_loader=ConfigurationLoader({}),
            telemetry=MagicMock(),
        )

    def test_check_source_reports_each_rule_independently(
        self, use_case: CheckBoundariesUseCase
    ) -> None:
        source = (
            "import 'package:flutter/material.dart';\n"
            "import 'package:myapp/feature_auth/data/auth_repository.dart';\n"
            "import 'package:myapp/feature_$x/data/y.dart';\n"
            "import 'package:myapp/feature_auth/auth_ui.dart';\n"
        )
        diagnostics = use_case.check_source("package:myapp/feature_orders/domain/order.dart", source)
        assert [(d.code, d.line) for d in diagnostics] == [
            ("FB006", 1),
            ("FB001", 2),
            ("FB005", 4),
        ]
        assert [d.fixable for d in diagnostics] == [False, True, True]
        assert diagnostics[1].message == (
            "Import 'feature_auth' via its barrel file 'feature_auth/auth.dart' instead of internal path."
        )

    def test_execute_on_project(self, use_case: CheckBoundariesUseCase, dart_project: Path) -> None:
        report = use_case.execute(str(dart_project / "lib"))
        assert report.files_scanned == 3
        assert report.total_violations == 1
        finding = report.findings[0]
        assert finding.uri == "package:myapp/feature_profile/ui/profile_page.dart"
        assert finding.diagnostics[0].code == "FB001"
        assert (finding.diagnostics[0].line, finding.diagnostics[0].column) == (2, 1)
        assert report.counts_by_code() == {"FB001": 1}

    def test_single_violation_scenario(self, use_case: CheckBoundariesUseCase) -> None:
        directive = directive_from("import 'package:myapp/feature_auth/domain/session.dart';")
        diagnostics = use_case.check_source(
            "lib/feature_billing/ui/invoice_page.dart", directive.statement_text
        )
        assert [(d.code, d.violation.message_args) for d in diagnostics] == [
            ("FB001", ("feature_auth", "feature_auth/auth.dart"))
        ]
