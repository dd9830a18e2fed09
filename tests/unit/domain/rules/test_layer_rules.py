"""Unit tests for layer rules (FB005, FB006) and the barrel export rule (FB004)."""

import pytest
from conftest import directive_from

from feature_boundary_linter.domain.entities import DirectiveKind
from feature_boundary_linter.domain.rules.barrel_exports import CrossFeatureBarrelExportRule
from feature_boundary_linter.domain.rules.layer_rules import (
    ImproperLayerImportRule,
    UiFrameworkInLogicRule,
)


class TestImproperLayerImportRule:
    rule = ImproperLayerImportRule()

    @pytest.mark.parametrize(
        "current,uri,args",
        [
            (
                "package:app/feature_orders/domain/order.dart",
                "package:app/feature_auth/auth_data.dart",
                ("Domain", "package:app/feature_auth/auth_data.dart", "Data"),
            ),
            (
                "package:app/feature_orders/domain/order.dart",
                "package:app/feature_auth/auth_ui.dart",
                ("Domain", "package:app/feature_auth/auth_ui.dart", "UI"),
            ),
            (
                "package:app/feature_orders/data/order_repo.dart",
                "package:app/feature_auth/auth_ui.dart",
                ("Data", "package:app/feature_auth/auth_ui.dart", "UI"),
            ),
        ],
    )
    def test_upward_split_barrel_import_is_reported(
        self, current: str, uri: str, args: tuple[str, ...]
    ) -> None:
        violation = self.rule.check(current, directive_from(f"import '{uri}';"))
        assert violation is not None
        assert violation.code == "FB005"
        assert violation.message_args == args

    @pytest.mark.parametrize(
        "current,uri",
        [
            ("package:app/feature_orders/domain/o.dart", "package:app/feature_auth/auth_domain.dart"),
            ("package:app/feature_orders/data/o.dart", "package:app/feature_auth/auth_domain.dart"),
            ("package:app/feature_orders/ui/o.dart", "package:app/feature_auth/auth_data.dart"),
            ("package:app/feature_orders/domain/o.dart", "package:app/feature_auth/auth.dart"),
            ("package:app/feature_orders/o.dart", "package:app/feature_auth/auth_ui.dart"),
            ("package:app/feature_auth/domain/o.dart", "package:app/feature_auth/auth_ui.dart"),
            ("/p/test/feature_orders/domain/o_test.dart", "package:app/feature_auth/auth_ui.dart"),
        ],
    )
    def test_allowed_imports(self, current: str, uri: str) -> None:
        assert self.rule.check(current, directive_from(f"import '{uri}';")) is None


class TestUiFrameworkInLogicRule:
    rule = UiFrameworkInLogicRule()

    def test_material_in_domain_is_reported(self) -> None:
        directive = directive_from("import 'package:flutter/material.dart';")
        violation = self.rule.check("package:app/feature_auth/domain/user.dart", directive)
        assert violation is not None
        assert violation.message_args == ("Domain", "package:flutter/material.dart")

    def test_widgets_in_data_is_reported(self) -> None:
        directive = directive_from("import 'package:flutter/widgets.dart';")
        assert self.rule.check("lib/data/api_client.dart", directive) is not None

    def test_foundation_is_allowed(self) -> None:
        directive = directive_from("import 'package:flutter/foundation.dart';")
        assert self.rule.check("package:app/feature_auth/domain/user.dart", directive) is None

    def test_ui_layer_may_use_flutter(self) -> None:
        directive = directive_from("import 'package:flutter/material.dart';")
        assert self.rule.check("package:app/feature_auth/ui/login_page.dart", directive) is None

    def test_other_packages_are_ignored(self) -> None:
        directive = directive_from("import 'package:flutter_bloc/flutter_bloc.dart';")
        assert self.rule.check("package:app/feature_auth/domain/user.dart", directive) is None


class TestCrossFeatureBarrelExportRule:
    rule = CrossFeatureBarrelExportRule()
    barrel = "package:app/feature_auth/auth.dart"

    def test_only_exports_are_considered(self) -> None:
        assert self.rule.directive_kinds == frozenset({DirectiveKind.EXPORT})

    def test_relative_export_escaping_feature_is_reported(self) -> None:
        directive = directive_from("export '../feature_billing/billing.dart';")
        violation = self.rule.check(self.barrel, directive)
        assert violation is not None
        assert violation.message_args == ("../feature_billing/billing.dart",)

    def test_package_export_of_other_feature_is_reported(self) -> None:
        directive = directive_from("export 'package:app/feature_billing/data/invoice.dart';")
        assert self.rule.check(self.barrel, directive) is not None

    def test_own_files_are_fine(self) -> None:
        assert self.rule.check(self.barrel, directive_from("export 'data/auth_repo.dart';")) is None
        assert (
            self.rule.check(self.barrel, directive_from("export 'package:app/feature_auth/ui/x.dart';"))
            is None
        )

    def test_third_party_package_export_is_fine(self) -> None:
        directive = directive_from("export 'package:equatable/equatable.dart';")
        assert self.rule.check(self.barrel, directive) is None

    def test_non_barrel_file_is_ignored(self) -> None:
        directive = directive_from("export '../feature_billing/billing.dart';")
        assert self.rule.check("package:app/feature_auth/data/repo.dart", directive) is None
