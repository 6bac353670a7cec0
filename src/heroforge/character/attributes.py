"""Attribute point-buy and modifier calculations for Heroforge.

This module owns the AttributeSet snapshot and the allocator that enforces the
per-attribute floor and the aggregate point-pool ceiling.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import structlog

from heroforge.errors import UnknownAttribute
from heroforge.rules import Ruleset

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, eq=False)
class AttributeSet(Mapping[str, int]):
    """Immutable mapping of attribute name to score."""

    scores: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Copy so that later changes to the caller's dict cannot leak in
        object.__setattr__(self, "scores", MappingProxyType(dict(self.scores)))

    def __getitem__(self, name: str) -> int:
        try:
            return self.scores[name]
        except KeyError:
            raise UnknownAttribute(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self.scores)

    def __len__(self) -> int:
        return len(self.scores)

    @property
    def total(self) -> int:
        """Sum of all attribute scores."""
        return sum(self.scores.values())

    def with_score(self, name: str, value: int) -> "AttributeSet":
        """Return a copy with one score replaced."""
        if name not in self.scores:
            raise UnknownAttribute(name)
        return AttributeSet({**self.scores, name: value})

    def as_dict(self) -> dict[str, int]:
        """Return a plain, mutable copy of the scores."""
        return dict(self.scores)


def default_attributes(ruleset: Ruleset) -> AttributeSet:
    """
    Build the starting attribute snapshot.

    Every attribute in the ruleset starts at the ruleset's default score.
    """
    return AttributeSet({name: ruleset.default_score for name in ruleset.attributes})


def get_modifier(score: int) -> int:
    """Calculate D&D-style attribute modifier.

    Args:
        score: The attribute score

    Returns:
        The modifier: (score - 10) // 2, rounded toward negative infinity

    Examples:
        >>> get_modifier(10)
        0
        >>> get_modifier(9)
        -1
        >>> get_modifier(20)
        5
    """
    return (score - 10) // 2


def calculate_modifiers(attributes: AttributeSet) -> dict[str, int]:
    """Calculate the modifier of every attribute in the snapshot."""
    return {name: get_modifier(score) for name, score in attributes.items()}


def adjust_attribute(
    attributes: AttributeSet, name: str, delta: int, ruleset: Ruleset
) -> AttributeSet:
    """
    Apply a signed step to one attribute.

    The adjustment is rejected, and the same snapshot returned, when the
    attribute would fall below the ruleset's minimum score or when the sum of
    all scores would exceed the pool ceiling.

    Args:
        attributes: Current attribute snapshot
        name: Attribute to adjust
        delta: Signed step (usually +1 or -1)
        ruleset: Ruleset supplying the floor and ceiling

    Returns:
        A new AttributeSet if accepted, otherwise ``attributes`` itself

    Raises:
        UnknownAttribute: If ``name`` is not part of the ruleset
    """
    ruleset.require_attribute(name)
    current = attributes[name]
    new_value = current + delta

    if new_value < ruleset.minimum_score:
        logger.debug(
            "attribute_adjust_rejected",
            attribute=name,
            delta=delta,
            reason="floor",
            value=current,
        )
        return attributes

    new_total = attributes.total - current + new_value
    if new_total > ruleset.pool_ceiling:
        logger.debug(
            "attribute_adjust_rejected",
            attribute=name,
            delta=delta,
            reason="pool_ceiling",
            total=new_total,
        )
        return attributes

    return attributes.with_score(name, new_value)


def remaining_pool(attributes: AttributeSet, ruleset: Ruleset) -> int:
    """Get how many attribute points can still be added before the ceiling."""
    return ruleset.pool_ceiling - attributes.total
