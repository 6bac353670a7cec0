"""Tests for the skill-point budget."""

import pytest
from structlog.testing import capture_logs

from heroforge.character.attributes import default_attributes
from heroforge.character.skills import (
    SkillPointAllocation,
    empty_allocation,
    get_skill_total,
    max_skill_points,
    spend_skill_points,
)
from heroforge.errors import UnknownSkill


class TestMaxSkillPoints:
    """Tests for deriving the budget from Intelligence."""

    @pytest.mark.parametrize(
        ("intelligence", "budget"),
        [
            (10, 10),
            (11, 10),
            (12, 14),
            (18, 26),
            (9, 6),
            (4, -2),
            (1, -10),  # modifier floor(-4.5) = -5
        ],
    )
    def test_budget(self, ruleset, intelligence, budget):
        attributes = default_attributes(ruleset).with_score("Intelligence", intelligence)
        assert max_skill_points(attributes, ruleset) == budget

    def test_only_intelligence_matters(self, ruleset):
        attributes = default_attributes(ruleset).with_score("Wisdom", 20)
        assert max_skill_points(attributes, ruleset) == 10


class TestSpendSkillPoints:
    """Tests for spending points against the budget."""

    def test_empty_allocation(self, ruleset):
        allocation = empty_allocation(ruleset)
        assert set(allocation) == set(ruleset.skill_names)
        assert allocation.total == 0

    def test_spend(self, ruleset):
        allocation = empty_allocation(ruleset)
        updated = spend_skill_points(allocation, "Arcana", 1, 10, ruleset)

        assert updated["Arcana"] == 1
        assert allocation["Arcana"] == 0
        assert updated.total == 1

    def test_refund(self, ruleset):
        allocation = empty_allocation(ruleset).with_points("Arcana", 3)
        assert spend_skill_points(allocation, "Arcana", -1, 10, ruleset)["Arcana"] == 2

    def test_below_zero_rejected(self, ruleset):
        allocation = empty_allocation(ruleset)
        assert spend_skill_points(allocation, "Stealth", -1, 10, ruleset) is allocation

    def test_budget_is_shared_across_skills(self, ruleset):
        allocation = empty_allocation(ruleset)
        for skill in ("Arcana", "History", "Nature", "Religion", "Investigation"):
            allocation = spend_skill_points(allocation, skill, 2, 10, ruleset)
        assert allocation.total == 10

        assert spend_skill_points(allocation, "Stealth", 1, 10, ruleset) is allocation

    def test_negative_budget_rejects_any_spend(self, ruleset):
        allocation = empty_allocation(ruleset)
        assert spend_skill_points(allocation, "Arcana", 1, -10, ruleset) is allocation

    def test_zero_budget_rejects_any_spend(self, ruleset):
        allocation = empty_allocation(ruleset)
        assert spend_skill_points(allocation, "Arcana", 1, 0, ruleset) is allocation

    def test_unknown_skill(self, ruleset):
        with pytest.raises(UnknownSkill):
            spend_skill_points(empty_allocation(ruleset), "Cooking", 1, 10, ruleset)

    def test_rejection_is_logged(self, ruleset):
        with capture_logs() as logs:
            spend_skill_points(empty_allocation(ruleset), "Arcana", 1, 0, ruleset)

        assert logs[0]["event"] == "skill_spend_rejected"
        assert logs[0]["reason"] == "budget"

    def test_stale_allocation_is_not_clawed_back(self, ruleset):
        """An allocation above a shrunken budget stays, but new spends fail."""
        allocation = empty_allocation(ruleset).with_points("Arcana", 10)
        shrunk_budget = 6

        assert spend_skill_points(allocation, "History", 1, shrunk_budget, ruleset) is allocation
        assert allocation["Arcana"] == 10


class TestSkillTotal:
    """Tests for points plus governing modifier."""

    def test_total_uses_governing_attribute(self, ruleset):
        attributes = default_attributes(ruleset).with_score("Dexterity", 14)
        allocation = empty_allocation(ruleset).with_points("Stealth", 3)

        assert get_skill_total("Stealth", attributes, allocation, ruleset) == 5
        assert get_skill_total("Arcana", attributes, allocation, ruleset) == 0

    def test_negative_modifier(self, ruleset):
        attributes = default_attributes(ruleset).with_score("Strength", 7)
        allocation = empty_allocation(ruleset)
        assert get_skill_total("Athletics", attributes, allocation, ruleset) == -2

    def test_unknown_skill(self, ruleset):
        with pytest.raises(UnknownSkill):
            get_skill_total(
                "Cooking", default_attributes(ruleset), empty_allocation(ruleset), ruleset
            )

    def test_allocation_mapping(self):
        allocation = SkillPointAllocation({"Arcana": 2})
        assert allocation == {"Arcana": 2}
        with pytest.raises(UnknownSkill):
            allocation["Cooking"]
