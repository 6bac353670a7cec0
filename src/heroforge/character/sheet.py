"""Character sheet: the single owner of a character's mutable rules state.

Each accepted change replaces a whole snapshot, so a reader never observes a
half-applied update.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from heroforge.persistence.document import CharacterDocument, parse_document, validate_document
from heroforge.rules import Ruleset, get_ruleset

from .attributes import (
    AttributeSet,
    adjust_attribute,
    calculate_modifiers,
    default_attributes,
    get_modifier,
)
from .checks import CheckResult, DieRoller, parse_difficulty_class, roll_skill_check
from .classes import class_eligibility, get_eligible_classes
from .skills import (
    SkillPointAllocation,
    empty_allocation,
    get_skill_total,
    max_skill_points,
    spend_skill_points,
)

logger = structlog.get_logger(__name__)


def format_modifier(modifier: int) -> str:
    """Format a modifier with an explicit sign (e.g. "+2", "-1", "+0")."""
    return f"+{modifier}" if modifier >= 0 else str(modifier)


class CharacterSheet:
    """
    Rules state of one character under construction.

    Holds the attribute snapshot, the skill-point allocation, the selected
    class and the most recent skill check.
    """

    def __init__(
        self,
        ruleset: Ruleset | None = None,
        roller: DieRoller | None = None,
    ) -> None:
        """
        Initialize a sheet in the default state.

        Args:
            ruleset: Reference data; the configured ruleset when omitted
            roller: Random source for skill checks
        """
        self.ruleset = ruleset or get_ruleset()
        self.roller = roller
        self.attributes: AttributeSet = default_attributes(self.ruleset)
        self.skill_points: SkillPointAllocation = empty_allocation(self.ruleset)
        self.selected_class: str | None = None
        self.last_check: CheckResult | None = None

    # Attributes

    def adjust_attribute(self, name: str, delta: int) -> bool:
        """
        Apply a signed step to one attribute.

        Returns:
            True if the change was accepted, False if a rule rejected it
        """
        updated = adjust_attribute(self.attributes, name, delta, self.ruleset)
        if updated is self.attributes:
            return False
        self.attributes = updated
        return True

    def increase_attribute(self, name: str) -> bool:
        """Raise an attribute by one point."""
        return self.adjust_attribute(name, 1)

    def decrease_attribute(self, name: str) -> bool:
        """Lower an attribute by one point."""
        return self.adjust_attribute(name, -1)

    def modifiers(self) -> dict[str, int]:
        """Get the modifier of every attribute."""
        return calculate_modifiers(self.attributes)

    # Classes

    def class_eligibility(self) -> dict[str, bool]:
        """Map every class to whether the current attributes qualify."""
        return class_eligibility(self.attributes, self.ruleset)

    def eligible_classes(self) -> list[str]:
        """Get the classes the current attributes qualify for."""
        return get_eligible_classes(self.attributes, self.ruleset)

    def select_class(self, class_name: str | None) -> None:
        """
        Select a class, or clear the selection with None.

        Selection is independent of eligibility.

        Raises:
            UnknownClass: If the class is not defined
        """
        if class_name is not None:
            self.ruleset.get_class_requirements(class_name)
        self.selected_class = class_name

    def toggle_class(self, class_name: str) -> str | None:
        """
        Select a class, or clear it if it is already selected.

        Returns:
            The selection after the toggle
        """
        self.select_class(None if self.selected_class == class_name else class_name)
        return self.selected_class

    def selected_class_requirements(self) -> dict[str, int]:
        """Get the minimum attributes of the selected class (empty if none)."""
        if self.selected_class is None:
            return {}
        return self.ruleset.get_class_requirements(self.selected_class)

    # Skills

    def max_skill_points(self) -> int:
        """Get the skill-point budget for the current attributes."""
        return max_skill_points(self.attributes, self.ruleset)

    def total_skill_points(self) -> int:
        """Get the number of skill points spent."""
        return self.skill_points.total

    def remaining_skill_points(self) -> int:
        """Get the unspent budget; negative when the allocation is over budget."""
        return self.max_skill_points() - self.total_skill_points()

    def is_over_budget(self) -> bool:
        """Check whether earlier spends now exceed the current budget."""
        return self.remaining_skill_points() < 0

    def spend_skill_points(self, skill_name: str, delta: int) -> bool:
        """
        Spend (or refund) points on a skill against the live budget.

        Returns:
            True if the change was accepted, False if a rule rejected it
        """
        updated = spend_skill_points(
            self.skill_points, skill_name, delta, self.max_skill_points(), self.ruleset
        )
        if updated is self.skill_points:
            return False
        self.skill_points = updated
        return True

    def skill_total(self, skill_name: str) -> int:
        """Get a skill's points plus its governing modifier."""
        return get_skill_total(skill_name, self.attributes, self.skill_points, self.ruleset)

    # Checks

    def roll_check(self, skill_name: str, difficulty_class: int | str) -> CheckResult:
        """
        Roll a skill check and remember it as the last check.

        Args:
            skill_name: Skill being tested
            difficulty_class: Integer DC, or text such as "15"

        Raises:
            UnknownSkill: If the skill is not defined
            InvalidDifficultyClass: If the DC is not an integer
        """
        dc = parse_difficulty_class(difficulty_class)
        self.last_check = roll_skill_check(
            skill_name, dc, self.attributes, self.skill_points, self.ruleset, self.roller
        )
        return self.last_check

    # Persistence

    def to_document(self) -> CharacterDocument:
        """Snapshot the full state for saving."""
        return CharacterDocument(
            attributes=self.attributes.as_dict(),
            skill_points=self.skill_points.as_dict(),
            selected_class=self.selected_class,
        )

    def apply_document(self, data: CharacterDocument | Mapping[str, Any]) -> None:
        """
        Overwrite state from a loaded snapshot.

        Present keys replace the matching state wholesale and absent keys leave
        it untouched. The document is validated first; if it is rejected
        nothing changes.

        Raises:
            CharacterDocumentError: If the document is malformed
        """
        document = parse_document(data)
        validate_document(document, self.ruleset)

        if document.has("attributes"):
            self.attributes = AttributeSet(document.attributes)
        if document.has("skill_points"):
            self.skill_points = SkillPointAllocation(document.skill_points)
        if document.has("selected_class"):
            self.selected_class = document.selected_class

        logger.info(
            "character_document_applied",
            fields=sorted(document.model_fields_set),
            over_budget=self.is_over_budget(),
        )

    # Display

    def describe(self) -> str:
        """
        Format a plain-text summary of the sheet.

        Returns:
            Multi-line string with attributes, classes, skills and last check
        """
        lines = ["Attributes", "-" * len("Attributes")]
        for name, score in self.attributes.items():
            lines.append(f"{name}: {score} (modifier: {format_modifier(get_modifier(score))})")

        lines += ["", "Classes", "-" * len("Classes")]
        for name, eligible in self.class_eligibility().items():
            marker = "*" if name == self.selected_class else " "
            status = "eligible" if eligible else "not eligible"
            lines.append(f"{marker} {name} [{status}]")

        if self.selected_class is not None:
            requirements = ", ".join(
                f"{attr} {minimum}" for attr, minimum in self.selected_class_requirements().items()
            )
            lines.append(f"Selected Class: {self.selected_class} (minimum: {requirements})")

        lines += ["", "Skills", "-" * len("Skills")]
        lines.append(f"Total Points: {self.total_skill_points()} / {self.max_skill_points()}")
        for skill in self.ruleset.skills:
            modifier = get_modifier(self.attributes[skill.attribute_modifier])
            points = self.skill_points[skill.name]
            lines.append(
                f"{skill.name} - points: {points} "
                f"modifier ({skill.attribute_modifier}): {format_modifier(modifier)} "
                f"total: {points + modifier}"
            )

        if self.last_check is not None:
            check = self.last_check
            outcome = "Success" if check.success else "Fail"
            lines += [
                "",
                f"Skill Check: {check.skill} vs DC {check.difficulty_class}",
                f"Rolled: {check.die}",
                f"Total (Roll + Modifier + Points): {check.grand_total}",
                f"Result: {outcome}",
            ]

        return "\n".join(lines)
