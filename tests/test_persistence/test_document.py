"""Tests for the character snapshot document."""

import pytest

from heroforge.errors import CharacterDocumentError
from heroforge.persistence import CharacterDocument, parse_document, validate_document


@pytest.fixture
def full_wire(ruleset):
    """A valid full document in wire format."""
    return {
        "attributes": {name: 10 for name in ruleset.attributes},
        "skillPoints": {name: 0 for name in ruleset.skill_names},
        "selectedClass": None,
    }


class TestParseDocument:
    """Tests for shape and type checks."""

    def test_full_document(self, full_wire):
        document = parse_document(full_wire)
        assert document.has("attributes")
        assert document.has("skill_points")
        assert document.has("selected_class")
        assert document.to_wire() == full_wire

    def test_subset_tracks_present_keys(self):
        document = parse_document({"selectedClass": "Bard"})
        assert document.model_fields_set == {"selected_class"}
        assert not document.has("attributes")

    def test_unrelated_keys_ignored(self):
        document = parse_document({"selectedClass": "Bard", "statusCode": 200})
        assert document.model_fields_set == {"selected_class"}

    def test_document_instance_passes_through(self):
        document = CharacterDocument(selected_class="Wizard")
        assert parse_document(document) is document

    @pytest.mark.parametrize(
        "data",
        [
            [],
            "character",
            {"attributes": None},
            {"attributes": {"Strength": "ten"}},
            {"attributes": {"Strength": 10.5}},
            {"skillPoints": {"Arcana": "1"}},
            {"selectedClass": 3},
        ],
    )
    def test_malformed(self, data):
        with pytest.raises(CharacterDocumentError):
            parse_document(data)


class TestValidateDocument:
    """Tests for checks against the ruleset."""

    def test_valid(self, full_wire, ruleset):
        validate_document(parse_document(full_wire), ruleset)

    def test_missing_attribute(self, full_wire, ruleset):
        del full_wire["attributes"]["Wisdom"]
        with pytest.raises(CharacterDocumentError, match="Attributes must be exactly"):
            validate_document(parse_document(full_wire), ruleset)

    def test_extra_attribute(self, full_wire, ruleset):
        full_wire["attributes"]["Luck"] = 1
        with pytest.raises(CharacterDocumentError):
            validate_document(parse_document(full_wire), ruleset)

    def test_attribute_below_floor(self, full_wire, ruleset):
        full_wire["attributes"]["Wisdom"] = 0
        with pytest.raises(CharacterDocumentError, match="below 1"):
            validate_document(parse_document(full_wire), ruleset)

    def test_attributes_over_ceiling(self, full_wire, ruleset):
        full_wire["attributes"]["Strength"] = 21
        with pytest.raises(CharacterDocumentError, match="pool ceiling"):
            validate_document(parse_document(full_wire), ruleset)

    def test_unknown_skill(self, full_wire, ruleset):
        full_wire["skillPoints"]["Cooking"] = 1
        with pytest.raises(CharacterDocumentError, match="known skills"):
            validate_document(parse_document(full_wire), ruleset)

    def test_negative_skill_points(self, full_wire, ruleset):
        full_wire["skillPoints"]["Arcana"] = -1
        with pytest.raises(CharacterDocumentError, match="Negative"):
            validate_document(parse_document(full_wire), ruleset)

    def test_over_budget_skill_points_allowed(self, full_wire, ruleset):
        full_wire["skillPoints"]["Arcana"] = 99
        validate_document(parse_document(full_wire), ruleset)

    def test_unknown_class(self, ruleset):
        with pytest.raises(CharacterDocumentError, match="Unknown class"):
            validate_document(parse_document({"selectedClass": "Paladin"}), ruleset)
