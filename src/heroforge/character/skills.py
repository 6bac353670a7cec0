"""Skill-point budget for Heroforge.

The spendable pool is derived from the budget attribute's modifier and is
recomputed from the live attributes on every spend. Points already spent are
never clawed back when the budget later shrinks; only new spends are checked
against the current ceiling.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import structlog

from heroforge.errors import UnknownSkill
from heroforge.rules import Ruleset

from .attributes import get_modifier

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, eq=False)
class SkillPointAllocation(Mapping[str, int]):
    """Immutable mapping of skill name to points spent."""

    points: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", MappingProxyType(dict(self.points)))

    def __getitem__(self, name: str) -> int:
        try:
            return self.points[name]
        except KeyError:
            raise UnknownSkill(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def total(self) -> int:
        """Sum of points spent across all skills."""
        return sum(self.points.values())

    def with_points(self, name: str, value: int) -> "SkillPointAllocation":
        """Return a copy with one skill's points replaced."""
        if name not in self.points:
            raise UnknownSkill(name)
        return SkillPointAllocation({**self.points, name: value})

    def as_dict(self) -> dict[str, int]:
        """Return a plain, mutable copy of the points."""
        return dict(self.points)


def empty_allocation(ruleset: Ruleset) -> SkillPointAllocation:
    """Build an allocation with every skill at 0 points."""
    return SkillPointAllocation({name: 0 for name in ruleset.skill_names})


def max_skill_points(attributes: Mapping[str, int], ruleset: Ruleset) -> int:
    """
    Calculate the skill-point budget.

    budget = base_points + points_per_modifier * modifier(budget attribute)

    With the default rules this is 10 + 4 * INT modifier. The result may be
    zero or negative for very low scores, in which case every positive spend
    is rejected.
    """
    rule = ruleset.skill_budget
    modifier = get_modifier(attributes[rule.attribute])
    return rule.base_points + rule.points_per_modifier * modifier


def spend_skill_points(
    allocation: SkillPointAllocation,
    skill_name: str,
    delta: int,
    budget: int,
    ruleset: Ruleset,
) -> SkillPointAllocation:
    """
    Spend (or refund, with a negative delta) points on one skill.

    Rejected, returning ``allocation`` unchanged, when the skill would drop
    below 0 points or when the new total across all skills would exceed
    ``budget``.

    Args:
        allocation: Current allocation
        skill_name: Skill to change
        delta: Signed number of points
        budget: Ceiling computed from the live attributes
        ruleset: Ruleset holding the skill list

    Returns:
        A new SkillPointAllocation if accepted, otherwise ``allocation``

    Raises:
        UnknownSkill: If the skill is not defined
    """
    ruleset.get_skill(skill_name)
    new_value = allocation[skill_name] + delta

    if new_value < 0:
        logger.debug("skill_spend_rejected", skill=skill_name, delta=delta, reason="floor")
        return allocation

    new_total = allocation.total + delta
    if new_total > budget:
        logger.debug(
            "skill_spend_rejected",
            skill=skill_name,
            delta=delta,
            reason="budget",
            total=new_total,
            budget=budget,
        )
        return allocation

    return allocation.with_points(skill_name, new_value)


def get_skill_total(
    skill_name: str,
    attributes: Mapping[str, int],
    allocation: SkillPointAllocation,
    ruleset: Ruleset,
) -> int:
    """
    Calculate a skill's total: points spent plus the governing modifier.

    Raises:
        UnknownSkill: If the skill is not defined
    """
    skill = ruleset.get_skill(skill_name)
    return allocation[skill_name] + get_modifier(attributes[skill.attribute_modifier])
