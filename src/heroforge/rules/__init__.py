"""Static reference data for the rules engine."""

from .ruleset import (
    Ruleset,
    SkillBudgetRule,
    SkillDefinition,
    get_ruleset,
    load_ruleset,
    parse_ruleset,
)

__all__ = [
    "Ruleset",
    "SkillBudgetRule",
    "SkillDefinition",
    "get_ruleset",
    "load_ruleset",
    "parse_ruleset",
]
