"""Exceptions raised by the Heroforge rules engine.

Rule rejections (a floor or ceiling that would be crossed) are not errors:
operations return the unchanged state instead. The exceptions here signal
caller or configuration bugs.
"""


class RulesError(Exception):
    """Base class for all rules engine errors."""

    pass


class UnknownName(RulesError, KeyError):
    """Raised when a name is not part of the ruleset's reference data."""

    kind = "name"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown {self.kind}: {name!r}")
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise quote the whole message
        return str(self.args[0])


class UnknownAttribute(UnknownName):
    """Raised when an attribute name is not part of the ruleset."""

    kind = "attribute"


class UnknownClass(UnknownName):
    """Raised when a class name is not part of the ruleset."""

    kind = "class"


class UnknownSkill(UnknownName):
    """Raised when a skill name is not part of the ruleset."""

    kind = "skill"


class InvalidDifficultyClass(RulesError, ValueError):
    """Raised when a difficulty class is not an integer."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Difficulty class must be an integer, got {value!r}")
        self.value = value


class RulesLoadError(RulesError):
    """Raised when the ruleset cannot be loaded or is inconsistent."""

    pass


class CharacterDocumentError(RulesError, ValueError):
    """Raised when a character snapshot from persistence is malformed."""

    pass
