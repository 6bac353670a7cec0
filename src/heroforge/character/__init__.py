"""Character rules: attributes, classes, skills and checks."""

from .attributes import (
    AttributeSet,
    adjust_attribute,
    calculate_modifiers,
    default_attributes,
    get_modifier,
    remaining_pool,
)
from .checks import CheckResult, DieRoller, parse_difficulty_class, roll_skill_check
from .classes import class_eligibility, get_eligible_classes, get_missing_requirements, is_eligible
from .sheet import CharacterSheet, format_modifier
from .skills import (
    SkillPointAllocation,
    empty_allocation,
    get_skill_total,
    max_skill_points,
    spend_skill_points,
)

__all__ = [
    "AttributeSet",
    "CharacterSheet",
    "CheckResult",
    "DieRoller",
    "SkillPointAllocation",
    "adjust_attribute",
    "calculate_modifiers",
    "class_eligibility",
    "default_attributes",
    "empty_allocation",
    "format_modifier",
    "get_eligible_classes",
    "get_missing_requirements",
    "get_modifier",
    "get_skill_total",
    "is_eligible",
    "max_skill_points",
    "parse_difficulty_class",
    "remaining_pool",
    "roll_skill_check",
    "spend_skill_points",
]
