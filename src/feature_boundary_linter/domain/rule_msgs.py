"""Pure message-building from a registry dict. No I/O or infrastructure imports."""

from collections.abc import Mapping
from typing import cast

from feature_boundary_linter.domain.constants import RULE_REGISTRY_PREFIX
from feature_boundary_linter.domain.registry_types import RuleRegistryEntry


class RuleMsgBuilder:
    """
    Resolves registry entries and fills message templates.

    Templates use positional slots ('{0}', '{1}', ...) filled from Violation.message_args.
    """

    @staticmethod
    def get_entry(
        registry: Mapping[str, RuleRegistryEntry], rule_code: str
    ) -> RuleRegistryEntry | None:
        """Return registry entry for a rule by code ('FB001') or symbol."""
        rule_id = f"{RULE_REGISTRY_PREFIX}{rule_code}"
        entry = registry.get(rule_id)
        if isinstance(entry, dict):
            return cast(RuleRegistryEntry, dict(entry))
        for rid, e in registry.items():
            if not rid.startswith(RULE_REGISTRY_PREFIX):
                continue
            if isinstance(e, dict) and e.get("symbol") == rule_code:
                return cast(RuleRegistryEntry, dict(e))
        return None

    @staticmethod
    def format_message(template: str, message_args: tuple[str, ...]) -> str:
        """Fill positional slots. A template with more slots than args keeps the extra slots verbatim."""
        try:
            return template.format(*message_args)
        except (IndexError, KeyError):
            filled = template
            for index, arg in enumerate(message_args):
                filled = filled.replace(f"{{{index}}}", arg)
            return filled
