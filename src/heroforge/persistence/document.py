"""
Character snapshot document exchanged with the persistence service.

Wire shape::

    {
      "attributes": {"<AttributeName>": <int>, ...},
      "skillPoints": {"<SkillName>": <int>, ...},
      "selectedClass": "<ClassName>" | null
    }
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from heroforge.errors import CharacterDocumentError
from heroforge.rules import Ruleset


class CharacterDocument(BaseModel):
    """
    A full or partial character snapshot.

    Keys missing from an incoming document are left out of
    ``model_fields_set`` so that loading can leave that part of the state alone.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    attributes: dict[str, StrictInt] = Field(default_factory=dict)
    skill_points: dict[str, StrictInt] = Field(default_factory=dict, alias="skillPoints")
    selected_class: str | None = Field(default=None, alias="selectedClass")

    def has(self, field_name: str) -> bool:
        """Check whether a field was present in the source document."""
        return field_name in self.model_fields_set

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the wire key names."""
        return self.model_dump(by_alias=True)


def parse_document(data: Any) -> CharacterDocument:
    """
    Parse raw JSON data into a CharacterDocument.

    Raises:
        CharacterDocumentError: If the data has the wrong shape or types
    """
    if isinstance(data, CharacterDocument):
        return data
    if not isinstance(data, Mapping):
        raise CharacterDocumentError("Character document must be a JSON object")

    try:
        return CharacterDocument.model_validate(dict(data))
    except ValidationError as e:
        raise CharacterDocumentError(f"Malformed character document: {e}") from e


def validate_document(document: CharacterDocument, ruleset: Ruleset) -> None:
    """
    Check the present fields of a document against the ruleset.

    Skill totals above the current budget are allowed; everything else that
    would put the character in an invalid state is rejected.

    Raises:
        CharacterDocumentError: If any present field is invalid
    """
    if document.has("attributes"):
        scores = document.attributes
        if set(scores) != set(ruleset.attributes):
            raise CharacterDocumentError(
                f"Attributes must be exactly {list(ruleset.attributes)}, got {sorted(scores)}"
            )
        low = [name for name, score in scores.items() if score < ruleset.minimum_score]
        if low:
            raise CharacterDocumentError(
                f"Attributes below {ruleset.minimum_score}: {sorted(low)}"
            )
        total = sum(scores.values())
        if total > ruleset.pool_ceiling:
            raise CharacterDocumentError(
                f"Attributes total {total} which exceeds the pool ceiling of "
                f"{ruleset.pool_ceiling}"
            )

    if document.has("skill_points"):
        points = document.skill_points
        if set(points) != set(ruleset.skill_names):
            raise CharacterDocumentError(
                f"Skill points must cover exactly the known skills, got {sorted(points)}"
            )
        negative = [name for name, value in points.items() if value < 0]
        if negative:
            raise CharacterDocumentError(f"Negative skill points: {sorted(negative)}")

    if document.has("selected_class") and document.selected_class is not None:
        if document.selected_class not in ruleset.classes:
            raise CharacterDocumentError(f"Unknown class: {document.selected_class!r}")
