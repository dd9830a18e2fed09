from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    short_description: str
    display_name: str
    symbol: str
    message_template: str
    correction: str
    fixable: bool
    comment_only: bool
    rule_id: str
