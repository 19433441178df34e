"""Tests for sheet export and import."""

from __future__ import annotations

import json
from decimal import Decimal

import pytest

from apollyon_sheet.core.exceptions import SheetImportError
from apollyon_sheet.engine.derived import recalculate
from apollyon_sheet.engine.editor import CharacterSheetEditor
from apollyon_sheet.engine.serializer import (
    deserialize,
    parse_int,
    parse_multiplier,
    parse_optional_int,
    parse_payload,
    serialize,
)
from apollyon_sheet.models.catalog import AbilityCatalog
from apollyon_sheet.models.enums import (
    CollectionKind,
    CoreAttributeName,
    CoreField,
    DerivedAttributeName,
    DerivedField,
)
from apollyon_sheet.models.sheet import AbilitySelection, create_blank_sheet


@pytest.fixture
def edited_editor(editor: CharacterSheetEditor) -> CharacterSheetEditor:
    """Provide an editor holding a sheet touched in every section."""
    editor.set_identity("name", "Kael")
    editor.set_identity("level", "4")
    editor.set_identity("experience", "1200")
    editor.set_identity("race", "Half-giant")
    editor.set_core(CoreAttributeName.GRIT, CoreField.BASE, 3)
    editor.set_core(CoreAttributeName.SPIRIT, CoreField.LEVEL_BONUS, 2)
    editor.set_derived(DerivedAttributeName.DR, DerivedField.BASE, 2)
    editor.set_derived(DerivedAttributeName.MAX_HP, DerivedField.MULTIPLIER, Decimal("1.5"))
    editor.set_derived(DerivedAttributeName.MAX_HP, DerivedField.EXTRA, 40)
    editor.set_category(0, "Shrail")
    editor.add_ability_row(0)
    editor.select_ability(0, 1, "Fury Casting")
    editor.set_category(1, "Numo")
    editor.add_item(CollectionKind.INVENTORY)
    editor.set_item_field(CollectionKind.INVENTORY, 0, "name", "Rope")
    editor.set_item_field(CollectionKind.INVENTORY, 1, "description", "Oil lamp")
    editor.set_item_field(CollectionKind.ENHANCEMENTS, 0, "cost", "3")
    editor.set_mastery_value("12")
    return editor


class TestScalarParsing:
    """Tests for lenient number parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("12", 12),
            (" -3 ", -3),
            ("", 0),
            ("abc", 0),
            ("2.9", 2),
            ("-2.9", -2),
            ("NaN", 0),
            ("9999999999999999", 9999999999999999),
            ("1e16", 0),
            ("1e999999999", 0),
        ],
    )
    def test_parse_int(self, text: str, expected: int) -> None:
        """Test blank and garbage read as the default."""
        assert parse_int(text) == expected

    def test_parse_optional_int(self) -> None:
        """Test blank reads as None."""
        assert parse_optional_int("") is None
        assert parse_optional_int("7") == 7

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("", "1"), ("1.25", "1.25"), ("junk", "1"), ("20", "20"), ("1e999999", "1")],
    )
    def test_parse_multiplier(self, text: str, expected: str) -> None:
        """Test blank multipliers read as 1."""
        assert parse_multiplier(text) == Decimal(expected)


class TestOutOfRangeNumbers:
    """Tests for numbers too large to keep on a sheet."""

    def test_huge_multiplier_reads_as_default(self, editor: CharacterSheetEditor) -> None:
        """Test an oversized multiplier imports as 1 instead of overflowing."""
        editor.import_text('{"calc": [{"mult": "1e999999"}]}')

        max_hp = editor.state.derived_attribute(DerivedAttributeName.MAX_HP)
        assert max_hp.multiplier == Decimal("1")
        assert max_hp.end == max_hp.base

    def test_huge_core_value_still_exports(self, editor: CharacterSheetEditor) -> None:
        """Test an oversized core value imports as 0 and the sheet exports again."""
        editor.import_text('{"core": [{"base": "1e5000", "mod": "1e999999999"}]}')

        strength = editor.state.core_attribute(CoreAttributeName.STRENGTH)
        assert strength.base == 0
        assert strength.modifier == 0
        assert json.loads(editor.export_text())["core"][0]["base"] == "0"


class TestSerialize:
    """Tests for export."""

    def test_blank_sheet_shape(self) -> None:
        """Test the wire keys and list lengths of a blank sheet."""
        sheet = create_blank_sheet()
        recalculate(sheet)

        data = json.loads(serialize(sheet))

        assert set(data) == {
            "name", "level", "exp", "race", "core", "calc", "inventory", "motes",
            "enhancements", "masteries", "masteryValue", "mindAlterations", "mindBreaks",
        }
        assert len(data["core"]) == 5
        assert len(data["calc"]) == 6
        assert len(data["motes"]) == 3
        assert data["calc"][0] == {
            "base": "30", "mod": "0", "temp": "0", "mult": "1", "end": "30", "extra": "0",
        }
        assert data["calc"][1]["extra"] == ""

    def test_compact(self) -> None:
        """Test the export text is a single line."""
        assert "\n" not in serialize(create_blank_sheet())

    def test_mote_state(self, edited_editor: CharacterSheetEditor) -> None:
        """Test each slot exports its category and rows."""
        data = json.loads(serialize(edited_editor.state))

        assert data["motes"][0] == {
            "mote": "Shrail",
            "abilities": [
                {"ability": "I Hit Back", "desc": "Retaliate when struck."},
                {"ability": "Fury Casting", "desc": "Cast through fury."},
            ],
        }
        assert data["motes"][2] == {"mote": "", "abilities": [{"ability": "", "desc": ""}]}

    def test_show_details_not_exported(self, edited_editor: CharacterSheetEditor) -> None:
        """Test the description toggle is presentational only."""
        edited_editor.toggle_description_detail(0, 0)

        assert "show" not in serialize(edited_editor.state).lower()


class TestRoundTrip:
    """Tests for export followed by import."""

    def test_blank_sheet(self, small_catalog: AbilityCatalog) -> None:
        """Test a blank sheet survives the round trip."""
        sheet = create_blank_sheet()
        recalculate(sheet)

        assert deserialize(serialize(sheet), small_catalog) == sheet

    def test_edited_sheet(self, edited_editor: CharacterSheetEditor) -> None:
        """Test every field survives the round trip in order."""
        state = edited_editor.state

        restored = deserialize(serialize(state), edited_editor.catalog)

        assert restored == state
        assert [item.description for item in restored.inventory] == ["", "Oil lamp"]


class TestParsePayload:
    """Tests for rejected payloads."""

    @pytest.mark.parametrize("text", ["", "{not json", "{\"name\": \"x\""])
    def test_malformed_json(self, text: str) -> None:
        """Test text that is not JSON is rejected."""
        with pytest.raises(SheetImportError) as exc_info:
            parse_payload(text)

        assert exc_info.value.details["reason"] == "json"

    @pytest.mark.parametrize("text", ["[]", "42", "{\"core\": \"strong\"}", "{\"motes\": [1]}"])
    def test_wrong_structure(self, text: str) -> None:
        """Test JSON of the wrong shape is rejected."""
        with pytest.raises(SheetImportError) as exc_info:
            parse_payload(text)

        assert exc_info.value.details["reason"] == "structure"

    def test_empty_object(self) -> None:
        """Test an empty object parses to a blank payload."""
        assert parse_payload("{}").name == ""


class TestDeserialize:
    """Tests for building a sheet from a payload."""

    def test_missing_fields_read_as_blank(self, small_catalog: AbilityCatalog) -> None:
        """Test an empty object imports as the floor configuration."""
        sheet = deserialize("{}", small_catalog)
        expected = create_blank_sheet()
        recalculate(expected)

        assert sheet == expected

    def test_totals_recomputed(self, small_catalog: AbilityCatalog) -> None:
        """Test exported totals and ends are ignored in favour of the formulas."""
        payload = {
            "core": [{}, {}, {"base": "2", "total": "99"}],
            "calc": [{"base": "1", "mult": "2", "end": "5"}],
        }

        sheet = deserialize(json.dumps(payload), small_catalog)

        assert sheet.core_attribute(CoreAttributeName.GRIT).total == 2
        hp = sheet.derived_attribute(DerivedAttributeName.MAX_HP)
        assert hp.base == 42
        assert hp.end == 84

    def test_non_numeric_text(self, small_catalog: AbilityCatalog) -> None:
        """Test garbage in number fields reads as the default."""
        payload = {"core": [{"base": "lots"}], "calc": [{}, {"base": "x", "mult": ""}]}

        sheet = deserialize(json.dumps(payload), small_catalog)

        assert sheet.core[0].base == 0
        assert sheet.derived[1].base == 0
        assert sheet.derived[1].multiplier == Decimal("1")

    def test_numbers_accepted_as_json_numbers(self, small_catalog: AbilityCatalog) -> None:
        """Test numeric JSON values import like their text form."""
        payload = {"level": 3, "core": [{"base": 4}], "calc": [{}, {"base": 2, "mult": 1.5}]}

        sheet = deserialize(json.dumps(payload), small_catalog)

        assert sheet.level == "3"
        assert sheet.core[0].base == 4
        assert sheet.derived[1].end == 3

    def test_unknown_category(self, small_catalog: AbilityCatalog) -> None:
        """Test a category missing from the catalog imports as unset."""
        payload = {"motes": [{"mote": "Nowhere", "abilities": [{"ability": "X", "desc": "Y"}]}]}

        sheet = deserialize(json.dumps(payload), small_catalog)

        assert sheet.motes[0].category == ""
        assert sheet.motes[0].abilities == [AbilitySelection()]

    def test_unknown_ability(self, small_catalog: AbilityCatalog) -> None:
        """Test an ability the category does not offer is left unselected."""
        payload = {
            "motes": [
                {
                    "mote": "Numo",
                    "abilities": [
                        {"ability": "Tide Step", "desc": "Move with the water."},
                        {"ability": "Fury Casting", "desc": "Cast through fury."},
                    ],
                }
            ]
        }

        sheet = deserialize(json.dumps(payload), small_catalog)

        assert sheet.motes[0].category == "Numo"
        assert [row.ability for row in sheet.motes[0].abilities] == ["Tide Step", ""]
        assert sheet.motes[0].abilities[1].description == ""

    def test_category_without_rows(self, small_catalog: AbilityCatalog) -> None:
        """Test a slot with no rows keeps its floor row on the first ability."""
        payload = {"motes": [{"mote": "Shrail", "abilities": []}]}

        sheet = deserialize(json.dumps(payload), small_catalog)

        assert sheet.motes[0].abilities == [
            AbilitySelection(ability="I Hit Back", description="Retaliate when struck.")
        ]

    def test_extra_slots_ignored(self, small_catalog: AbilityCatalog) -> None:
        """Test payload slots beyond the slot count are dropped."""
        payload = {"motes": [{"mote": "Shrail"}, {}, {}, {"mote": "Numo"}]}

        sheet = deserialize(json.dumps(payload), small_catalog)

        assert len(sheet.motes) == 3
        assert [slot.category for slot in sheet.motes] == ["Shrail", "", ""]

    def test_empty_collections_keep_floor(self, small_catalog: AbilityCatalog) -> None:
        """Test empty arrays leave one blank item."""
        payload = {"inventory": [], "masteries": None}

        sheet = deserialize(json.dumps(payload), small_catalog)

        assert len(sheet.inventory) == 1
        assert len(sheet.masteries) == 1

    def test_duplicates_imported_as_is(self, small_catalog: AbilityCatalog) -> None:
        """Test import does not repair duplicate selections."""
        payload = {"motes": [{"mote": "Shrail"}, {"mote": "Shrail"}]}

        sheet = deserialize(json.dumps(payload), small_catalog)

        assert [slot.category for slot in sheet.motes[:2]] == ["Shrail", "Shrail"]

    def test_extra_on_untracked_row_ignored(self, small_catalog: AbilityCatalog) -> None:
        """Test a current value on DR, AC or Speed is dropped."""
        payload = {"calc": [{}, {"extra": "9"}]}

        sheet = deserialize(json.dumps(payload), small_catalog)

        assert sheet.derived_attribute(DerivedAttributeName.DR).extra is None
