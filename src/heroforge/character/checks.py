"""Skill check resolution for Heroforge.

A check rolls one die and succeeds when die + skill total meets the
difficulty class.
"""

import random
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

import structlog

from heroforge.errors import InvalidDifficultyClass
from heroforge.rules import Ruleset

from .skills import SkillPointAllocation, get_skill_total

logger = structlog.get_logger(__name__)

# Optional sign followed by ASCII digits only
DC_PATTERN = re.compile(r"[+-]?[0-9]+")


class DieRoller(Protocol):
    """Source of random integers; ``random.Random`` satisfies it."""

    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single skill check."""

    skill: str
    difficulty_class: int
    die: int
    skill_total: int  # points + governing modifier
    success: bool

    @property
    def grand_total(self) -> int:
        """Die plus skill total, the number compared with the DC."""
        return self.die + self.skill_total


def parse_difficulty_class(value: object) -> int:
    """
    Parse free-form difficulty input into an integer DC.

    Args:
        value: An int, or a string holding a base-10 integer

    Returns:
        The difficulty class

    Raises:
        InvalidDifficultyClass: If the value is not an integer
    """
    # bool is an int subclass but never a meaningful DC
    if isinstance(value, bool):
        raise InvalidDifficultyClass(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not DC_PATTERN.fullmatch(text):
            raise InvalidDifficultyClass(value)
        return int(text, 10)
    raise InvalidDifficultyClass(value)


def roll_skill_check(
    skill_name: str,
    difficulty_class: int,
    attributes: Mapping[str, int],
    allocation: SkillPointAllocation,
    ruleset: Ruleset,
    roller: DieRoller | None = None,
) -> CheckResult:
    """
    Resolve a skill check.

    Args:
        skill_name: Skill being tested
        difficulty_class: Already-parsed target number
        attributes: Attribute name -> score
        allocation: Skill points spent
        ruleset: Ruleset holding skills and die size
        roller: Random source; a fresh ``random.Random`` when omitted

    Returns:
        CheckResult for this roll

    Raises:
        UnknownSkill: If the skill is not defined
        InvalidDifficultyClass: If difficulty_class is not an int
    """
    if isinstance(difficulty_class, bool) or not isinstance(difficulty_class, int):
        raise InvalidDifficultyClass(difficulty_class)

    skill_total = get_skill_total(skill_name, attributes, allocation, ruleset)

    if roller is None:
        roller = random.Random()
    die = roller.randint(1, ruleset.die_sides)
    success = die + skill_total >= difficulty_class

    logger.debug(
        "skill_check_rolled",
        skill=skill_name,
        dc=difficulty_class,
        die=die,
        skill_total=skill_total,
        success=success,
    )

    return CheckResult(
        skill=skill_name,
        difficulty_class=difficulty_class,
        die=die,
        skill_total=skill_total,
        success=success,
    )
