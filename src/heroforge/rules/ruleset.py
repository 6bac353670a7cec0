"""
Ruleset module for Heroforge.

Defines the static reference data (attributes, class requirements, skills and
the numeric constants of the point-buy) and loads it from YAML.
"""

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

import structlog
import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from heroforge.config import get_settings
from heroforge.errors import RulesLoadError, UnknownAttribute, UnknownClass, UnknownSkill

logger = structlog.get_logger(__name__)


class SkillDefinition(BaseModel):
    """A skill paired with the attribute whose modifier governs it."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Display name of the skill")
    attribute_modifier: str = Field(..., description="Governing attribute name")


class SkillBudgetRule(BaseModel):
    """How the spendable skill-point pool is derived from one attribute."""

    model_config = ConfigDict(frozen=True)

    attribute: str = Field(default="Intelligence", description="Attribute feeding the budget")
    base_points: int = Field(default=10, description="Budget at modifier 0")
    points_per_modifier: int = Field(default=4, description="Budget change per modifier step")


class Ruleset(BaseModel):
    """
    Static reference data for the character builder.

    Attributes:
        attributes: Ordered attribute names
        classes: Class name -> {attribute name: minimum score}
        skills: Ordered skill definitions
        pool_ceiling: Maximum sum of all attribute scores
        default_score: Score every attribute starts at
        minimum_score: Floor for any single attribute score
        die_sides: Sides of the die used for skill checks
        skill_budget: Skill-point budget formula
    """

    model_config = ConfigDict(frozen=True)

    attributes: tuple[str, ...] = Field(..., min_length=1)
    classes: Mapping[str, Mapping[str, int]] = Field(default_factory=dict, validate_default=True)
    skills: tuple[SkillDefinition, ...] = Field(default_factory=tuple)
    pool_ceiling: int = 70
    default_score: int = 10
    minimum_score: int = 1
    die_sides: int = Field(default=20, ge=1)
    skill_budget: SkillBudgetRule = Field(default_factory=SkillBudgetRule)

    @field_validator("classes", mode="after")
    @classmethod
    def _freeze_classes(
        cls, value: Mapping[str, Mapping[str, int]]
    ) -> Mapping[str, Mapping[str, int]]:
        # Shared through the ruleset cache, so the tables must stay read-only
        return MappingProxyType(
            {name: MappingProxyType(dict(minimums)) for name, minimums in value.items()}
        )

    @model_validator(mode="after")
    def _check_references(self) -> "Ruleset":
        known = set(self.attributes)
        if len(known) != len(self.attributes):
            raise ValueError("duplicate attribute names")

        skill_names = [skill.name for skill in self.skills]
        if len(set(skill_names)) != len(skill_names):
            raise ValueError("duplicate skill names")

        for class_name, requirements in self.classes.items():
            unknown = set(requirements) - known
            if unknown:
                raise ValueError(
                    f"class {class_name!r} requires unknown attributes: {sorted(unknown)}"
                )

        for skill in self.skills:
            if skill.attribute_modifier not in known:
                raise ValueError(
                    f"skill {skill.name!r} is governed by unknown attribute "
                    f"{skill.attribute_modifier!r}"
                )

        if self.skill_budget.attribute not in known:
            raise ValueError(f"skill budget attribute {self.skill_budget.attribute!r} is unknown")

        if self.default_score < self.minimum_score:
            raise ValueError("default score is below the minimum score")

        # The starting character must already satisfy the pool ceiling
        if self.default_score * len(self.attributes) > self.pool_ceiling:
            raise ValueError(
                f"default attributes total {self.default_score * len(self.attributes)} "
                f"which exceeds the pool ceiling of {self.pool_ceiling}"
            )

        return self

    @property
    def class_names(self) -> list[str]:
        """Get class names in definition order."""
        return list(self.classes)

    @property
    def skill_names(self) -> list[str]:
        """Get skill names in definition order."""
        return [skill.name for skill in self.skills]

    def require_attribute(self, name: str) -> str:
        """Return the attribute name, raising UnknownAttribute if it is not defined."""
        if name not in self.attributes:
            raise UnknownAttribute(name)
        return name

    def get_class_requirements(self, class_name: str) -> dict[str, int]:
        """
        Get the minimum attribute table for a class.

        Args:
            class_name: Name of the class

        Returns:
            Copy of the class's {attribute: minimum} mapping

        Raises:
            UnknownClass: If the class is not defined
        """
        try:
            return dict(self.classes[class_name])
        except KeyError:
            raise UnknownClass(class_name) from None

    def get_skill(self, skill_name: str) -> SkillDefinition:
        """
        Get a skill definition by name.

        Raises:
            UnknownSkill: If the skill is not defined
        """
        for skill in self.skills:
            if skill.name == skill_name:
                return skill
        raise UnknownSkill(skill_name)


def parse_ruleset(data: Any, source: str = "<data>") -> Ruleset:
    """
    Validate raw ruleset data.

    Args:
        data: Parsed YAML content
        source: Description of where the data came from (for error messages)

    Raises:
        RulesLoadError: If the data does not describe a consistent ruleset
    """
    if not isinstance(data, dict):
        raise RulesLoadError(f"Ruleset in {source} must be a mapping")

    try:
        return Ruleset.model_validate(data)
    except ValidationError as e:
        raise RulesLoadError(f"Invalid ruleset in {source}: {e}") from e


def load_ruleset(path: Path) -> Ruleset:
    """
    Load a ruleset from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated Ruleset

    Raises:
        RulesLoadError: If the file cannot be read, parsed or validated
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise RulesLoadError(f"File not found: {path}") from None
    except yaml.YAMLError as e:
        raise RulesLoadError(f"YAML parsing error in {path}: {e}") from e

    if not data:
        raise RulesLoadError(f"Empty YAML file: {path}")

    ruleset = parse_ruleset(data, source=str(path))
    logger.info(
        "ruleset_loaded",
        path=str(path),
        attributes=len(ruleset.attributes),
        classes=len(ruleset.classes),
        skills=len(ruleset.skills),
    )
    return ruleset


@lru_cache
def get_ruleset() -> Ruleset:
    """Get the cached ruleset named by the application settings."""
    return load_ruleset(get_settings().effective_rules_path)
