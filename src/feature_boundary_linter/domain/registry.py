"""
Rule Registration Table: rule code -> rule -> fixes, plus message templates.

Built once by RegistryBuilder at startup; RuleRegistry is read-only afterwards.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from feature_boundary_linter.domain.entities import Directive, FixContext, RewriteResult
from feature_boundary_linter.domain.registry_types import RuleRegistryEntry
from feature_boundary_linter.domain.rule_msgs import RuleMsgBuilder
from feature_boundary_linter.domain.rules import Checkable, Fixable, Violation

if TYPE_CHECKING:
    from feature_boundary_linter.domain.config import ConfigurationLoader


class RegistrationError(Exception):
    """Malformed registration: a programming error surfaced at startup."""


class RuleRegistry:
    """Immutable registration table. Evaluation and fix computation go through here."""

    def __init__(
        self,
        rules: Mapping[str, Checkable],
        fixes: Mapping[str, tuple[Fixable, ...]],
        entries: Mapping[str, RuleRegistryEntry],
    ) -> None:
        self._rules = MappingProxyType(dict(rules))
        self._fixes = MappingProxyType(dict(fixes))
        self._entries = MappingProxyType(dict(entries))
        self._symbols = MappingProxyType({rule.symbol: code for code, rule in rules.items()})

    @property
    def rules(self) -> Mapping[str, Checkable]:
        return self._rules

    def rule_codes(self) -> tuple[str, ...]:
        """Registered rule codes in registration order."""
        return tuple(self._rules)

    def resolve_code(self, code_or_symbol: str) -> str | None:
        """Map 'FB001' or 'avoid_internal_feature_imports' to the rule code."""
        if code_or_symbol in self._rules:
            return code_or_symbol
        return self._symbols.get(code_or_symbol)

    def get_rule(self, rule_id: str) -> Checkable:
        code = self.resolve_code(rule_id)
        if code is None:
            raise ValueError(f"Rule '{rule_id}' not registered.")
        return self._rules[code]

    def fixes_for(self, rule_id: str) -> tuple[Fixable, ...]:
        """Fixes associated with a rule, in preference order. Empty for report-only rules."""
        code = self.resolve_code(rule_id)
        if code is None:
            raise ValueError(f"Rule '{rule_id}' not registered.")
        return self._fixes.get(code, ())

    def entry(self, rule_id: str) -> RuleRegistryEntry:
        code = self.resolve_code(rule_id)
        if code is None:
            raise ValueError(f"Rule '{rule_id}' not registered.")
        return self._entries[code]

    def message_template(self, rule_id: str) -> str:
        return str(self.entry(rule_id).get("message_template", ""))

    def format_message(self, violation: Violation) -> str:
        """Diagnostic text: the rule's template filled with the violation's arguments."""
        return RuleMsgBuilder.format_message(
            self.message_template(violation.code), violation.message_args
        )

    def evaluate(self, rule_id: str, current_path: str, directive: Directive) -> Violation | None:
        """Run one rule against one directive; directives of other kinds are skipped."""
        rule = self.get_rule(rule_id)
        if directive.kind not in rule.directive_kinds:
            return None
        return rule.check(current_path, directive)

    def compute_fixes(
        self, rule_id: str, directive: Directive, context: FixContext
    ) -> list[RewriteResult]:
        """Every applicable rewrite for the directive, in the rule's fix order."""
        results: list[RewriteResult] = []
        for fix in self.fixes_for(rule_id):
            result = fix.compute(directive, context)
            if result is not None:
                results.append(result)
        return results


class RegistryBuilder:
    """
    Collects rules and fixes, rejecting malformed registrations.

    Rules must carry a code, be unique and have a registry entry with a
    message_template; fixes may only attach to rules already added.
    """

    def __init__(self, registry_entries: Mapping[str, RuleRegistryEntry]) -> None:
        self._registry_entries = registry_entries
        self._rules: dict[str, Checkable] = {}
        self._entries: dict[str, RuleRegistryEntry] = {}
        self._fixes: dict[str, list[Fixable]] = {}

    def add_rule(self, rule: Checkable) -> "RegistryBuilder":
        code = getattr(rule, "code", None)
        if not isinstance(code, str) or not code:
            raise RegistrationError(f"Rule {type(rule).__name__} has no code.")
        if code in self._rules:
            raise RegistrationError(f"Duplicate rule code '{code}'.")
        entry = RuleMsgBuilder.get_entry(self._registry_entries, code)
        if entry is None or not entry.get("message_template"):
            raise RegistrationError(f"Rule '{code}' has no registry entry with a message_template.")
        symbol = entry.get("symbol")
        if symbol and symbol != getattr(rule, "symbol", symbol):
            raise RegistrationError(
                f"Rule '{code}' symbol '{rule.symbol}' does not match registry symbol '{symbol}'."
            )
        self._rules[code] = rule
        self._entries[code] = entry
        self._fixes[code] = []
        return self

    def add_fix(self, rule_code: str, fix: Fixable) -> "RegistryBuilder":
        if rule_code not in self._rules:
            raise RegistrationError(
                f"Fix '{getattr(fix, 'fix_id', type(fix).__name__)}' registered for unknown rule '{rule_code}'."
            )
        if not getattr(fix, "fix_id", None):
            raise RegistrationError(f"Fix {type(fix).__name__} has no fix_id.")
        self._fixes[rule_code].append(fix)
        return self

    def build(self) -> RuleRegistry:
        for code, entry in self._entries.items():
            has_fixes = bool(self._fixes[code])
            if bool(entry.get("fixable")) != has_fixes:
                raise RegistrationError(
                    f"Rule '{code}' is marked fixable={bool(entry.get('fixable'))} "
                    f"but has {len(self._fixes[code])} registered fixes."
                )
        return RuleRegistry(
            rules=self._rules,
            fixes={code: tuple(fixes) for code, fixes in self._fixes.items()},
            entries=self._entries,
        )

    @classmethod
    def defaults(
        cls,
        registry_entries: Mapping[str, RuleRegistryEntry],
        config_loader: "ConfigurationLoader | None" = None,
    ) -> "RegistryBuilder":
        """Builder preloaded with every boundary rule and its fixes. Disabled rules are left out."""
        from feature_boundary_linter.domain.fixes import (
            CommentOutFeatureImportFix,
            ConvertToPackageImportFix,
            RemoveCrossFeatureExportFix,
            RemoveSelfBarrelImportFix,
            ReplaceWithBarrelImportFix,
            SimplifyRelativePathFix,
            UseLayerSpecificBarrelFix,
        )
        from feature_boundary_linter.domain.rules.barrel_exports import (
            CrossFeatureBarrelExportRule,
        )
        from feature_boundary_linter.domain.rules.feature_boundaries import (
            CoreFeatureImportRule,
            InternalFeatureImportRule,
            RelativeBarrelImportRule,
            SelfBarrelImportRule,
        )
        from feature_boundary_linter.domain.rules.layer_rules import (
            ImproperLayerImportRule,
            UiFrameworkInLogicRule,
        )

        registrations: list[tuple[Checkable, list[Fixable]]] = [
            (InternalFeatureImportRule(config_loader), [ReplaceWithBarrelImportFix()]),
            (CoreFeatureImportRule(), [CommentOutFeatureImportFix()]),
            (
                SelfBarrelImportRule(config_loader),
                [SimplifyRelativePathFix(), RemoveSelfBarrelImportFix()],
            ),
            (CrossFeatureBarrelExportRule(), [RemoveCrossFeatureExportFix()]),
            (ImproperLayerImportRule(), [UseLayerSpecificBarrelFix()]),
            (UiFrameworkInLogicRule(), []),
            (RelativeBarrelImportRule(), [ConvertToPackageImportFix()]),
        ]
        builder = cls(registry_entries)
        for rule, fixes in registrations:
            if config_loader is not None and not config_loader.is_rule_enabled(
                rule.code, rule.symbol
            ):
                continue
            builder.add_rule(rule)
            for fix in fixes:
                builder.add_fix(rule.code, fix)
        return builder
