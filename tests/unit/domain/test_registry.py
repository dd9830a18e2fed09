"""Unit tests for RuleRegistry and RegistryBuilder."""

from types import MappingProxyType

import pytest
from conftest import directive_from

from feature_boundary_linter.domain.config import ConfigurationLoader
from feature_boundary_linter.domain.entities import FixContext
from feature_boundary_linter.domain.fixes import ReplaceWithBarrelImportFix
from feature_boundary_linter.domain.registry import (
    RegistrationError,
    RegistryBuilder,
    RuleRegistry,
)
from feature_boundary_linter.domain.rules.feature_boundaries import (
    CoreFeatureImportRule,
    InternalFeatureImportRule,
)
from feature_boundary_linter.domain.rules.layer_rules import UiFrameworkInLogicRule

ENTRIES = {
    "feature-boundary.FB001": {
        "symbol": "avoid_internal_feature_imports",
        "message_template": "Import '{0}' via its barrel file '{1}' instead of internal path.",
        "fixable": True,
    },
    "feature-boundary.FB006": {
        "symbol": "avoid_ui_framework_in_logic",
        "message_template": "{0} layer imports {1}.",
        "fixable": False,
    },
}


class _NoCodeRule:
    code = ""
    symbol = "nameless"


class TestRegistryBuilder:
    def test_builds_registry(self) -> None:
        registry = (
            RegistryBuilder(ENTRIES)
            .add_rule(InternalFeatureImportRule())
            .add_fix("FB001", ReplaceWithBarrelImportFix())
            .add_rule(UiFrameworkInLogicRule())
            .build()
        )
        assert registry.rule_codes() == ("FB001", "FB006")
        assert [fix.fix_id for fix in registry.fixes_for("FB001")] == ["replace_with_barrel_import"]
        assert registry.fixes_for("FB006") == ()

    def test_rule_without_code_is_rejected(self) -> None:
        with pytest.raises(RegistrationError, match="has no code"):
            RegistryBuilder(ENTRIES).add_rule(_NoCodeRule())  # type: ignore[arg-type]

    def test_duplicate_rule_is_rejected(self) -> None:
        builder = RegistryBuilder(ENTRIES).add_rule(InternalFeatureImportRule())
        with pytest.raises(RegistrationError, match="Duplicate rule code 'FB001'"):
            builder.add_rule(InternalFeatureImportRule())

    def test_rule_without_message_template_is_rejected(self) -> None:
        with pytest.raises(RegistrationError, match="FB002"):
            RegistryBuilder(ENTRIES).add_rule(CoreFeatureImportRule())

    def test_fix_for_unknown_rule_is_rejected(self) -> None:
        with pytest.raises(RegistrationError, match="unknown rule 'FB999'"):
            RegistryBuilder(ENTRIES).add_fix("FB999", ReplaceWithBarrelImportFix())

    def test_symbol_mismatch_is_rejected(self) -> None:
        entries = {"feature-boundary.FB001": {**ENTRIES["feature-boundary.FB001"], "symbol": "other"}}
        with pytest.raises(RegistrationError, match="does not match"):
            RegistryBuilder(entries).add_rule(InternalFeatureImportRule())

    def test_fixable_flag_must_match_fixes(self) -> None:
        builder = RegistryBuilder(ENTRIES).add_rule(InternalFeatureImportRule())
        with pytest.raises(RegistrationError, match="fixable=True"):
            builder.build()

    def test_defaults_skip_disabled_rules(self, guidance_service) -> None:
        config = ConfigurationLoader({"disabled_rules": ["FB002", "avoid_ui_framework_in_logic"]})
        registry = RegistryBuilder.defaults(guidance_service.get_registry(), config).build()
        assert "FB002" not in registry.rule_codes()
        assert "FB006" not in registry.rule_codes()
        assert "FB001" in registry.rule_codes()


class TestRuleRegistry:
    def test_default_table(self, rule_registry: RuleRegistry) -> None:
        assert rule_registry.rule_codes() == (
            "FB001",
            "FB002",
            "FB003",
            "FB004",
            "FB005",
            "FB006",
            "FB007",
        )
        assert [fix.fix_id for fix in rule_registry.fixes_for("FB003")] == [
            "simplify_relative_path",
            "remove_self_barrel_import",
        ]

    def test_table_is_read_only(self, rule_registry: RuleRegistry) -> None:
        assert isinstance(rule_registry.rules, MappingProxyType)
        with pytest.raises(TypeError):
            rule_registry.rules["FB999"] = InternalFeatureImportRule()  # type: ignore[index]

    def test_resolve_by_symbol(self, rule_registry: RuleRegistry) -> None:
        assert rule_registry.resolve_code("avoid_core_importing_features") == "FB002"
        assert rule_registry.resolve_code("nope") is None

    def test_unknown_rule_raises(self, rule_registry: RuleRegistry) -> None:
        with pytest.raises(ValueError, match=r"Rule 'FB999' not registered\."):
            rule_registry.get_rule("FB999")

    def test_evaluate_and_format(self, rule_registry: RuleRegistry) -> None:
        directive = directive_from("import 'package:myapp/feature_auth/domain/session.dart';")
        violation = rule_registry.evaluate(
            "FB001", "lib/feature_billing/ui/invoice_page.dart", directive
        )
        assert violation is not None
        assert rule_registry.format_message(violation) == (
            "Import 'feature_auth' via its barrel file 'feature_auth/auth.dart' instead of internal path."
        )

    def test_evaluate_skips_other_directive_kinds(self, rule_registry: RuleRegistry) -> None:
        directive = directive_from("export 'package:myapp/feature_auth/domain/session.dart';")
        assert rule_registry.evaluate("FB001", "lib/feature_billing/billing.dart", directive) is None

    def test_compute_fixes(self, rule_registry: RuleRegistry) -> None:
        directive = directive_from("import 'package:myapp/feature_auth/data/auth_service.dart';")
        results = rule_registry.compute_fixes(
            "FB001", directive, FixContext(current_path="lib/feature_billing/ui/page.dart")
        )
        assert [result.replacement_text for result in results] == [
            "'package:myapp/feature_auth/auth.dart'"
        ]

    def test_only_one_scenario_violation(self, rule_registry: RuleRegistry) -> None:
        directive = directive_from("import 'package:myapp/feature_auth/domain/session.dart';")
        violations = [
            violation
            for code in rule_registry.rule_codes()
            if (
                violation := rule_registry.evaluate(
                    code, "lib/feature_billing/ui/invoice_page.dart", directive
                )
            )
            is not None
        ]
        assert [(v.code, v.message_args) for v in violations] == [
            ("FB001", ("feature_auth", "feature_auth/auth.dart"))
        ]
