"""Class eligibility for Heroforge.

A class is available when every attribute meets the class's minimum.
"""

from collections.abc import Mapping

from heroforge.rules import Ruleset


def is_eligible(class_name: str, attributes: Mapping[str, int], ruleset: Ruleset) -> bool:
    """
    Check whether the attributes satisfy a class's minimum requirements.

    A class with no requirements is always eligible.

    Args:
        class_name: Name of the class
        attributes: Attribute name -> score
        ruleset: Ruleset holding the requirement table

    Raises:
        UnknownClass: If the class is not defined
    """
    requirements = ruleset.get_class_requirements(class_name)
    return all(attributes[attr] >= minimum for attr, minimum in requirements.items())


def class_eligibility(attributes: Mapping[str, int], ruleset: Ruleset) -> dict[str, bool]:
    """Map every class in the ruleset to whether it is currently eligible."""
    return {name: is_eligible(name, attributes, ruleset) for name in ruleset.class_names}


def get_eligible_classes(attributes: Mapping[str, int], ruleset: Ruleset) -> list[str]:
    """Get the names of all eligible classes, in definition order."""
    return [name for name, ok in class_eligibility(attributes, ruleset).items() if ok]


def get_missing_requirements(
    class_name: str, attributes: Mapping[str, int], ruleset: Ruleset
) -> dict[str, int]:
    """
    Get how many points each unmet requirement is short by.

    Returns:
        Attribute name -> shortfall, empty when the class is eligible
    """
    requirements = ruleset.get_class_requirements(class_name)
    return {
        attr: minimum - attributes[attr]
        for attr, minimum in requirements.items()
        if attributes[attr] < minimum
    }
