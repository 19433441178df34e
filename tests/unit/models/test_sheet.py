"""Tests for the sheet state models."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from apollyon_sheet.models.enums import (
    CollectionKind,
    CoreAttributeName,
    DerivedAttributeName,
)
from apollyon_sheet.models.sheet import (
    COLLECTION_ITEM_TYPES,
    AbilitySelection,
    CharacterSheetState,
    CoreAttribute,
    DerivedAttribute,
    Enhancement,
    MoteSlot,
    create_blank_sheet,
)


class TestCreateBlankSheet:
    """Tests for the floor configuration."""

    def test_identity_blank(self) -> None:
        """Test identity fields start empty."""
        sheet = create_blank_sheet()

        assert sheet.name == ""
        assert sheet.level == ""
        assert sheet.experience == ""
        assert sheet.race == ""
        assert sheet.mastery_value == ""

    def test_attribute_rows_in_display_order(self) -> None:
        """Test core and derived rows follow the enum order."""
        sheet = create_blank_sheet()

        assert [attr.name for attr in sheet.core] == list(CoreAttributeName)
        assert [attr.name for attr in sheet.derived] == list(DerivedAttributeName)

    def test_default_multiplier_is_one(self) -> None:
        """Test every derived row starts with multiplier 1."""
        sheet = create_blank_sheet()

        assert all(attr.multiplier == Decimal("1") for attr in sheet.derived)

    def test_extra_only_on_tracked_rows(self) -> None:
        """Test current values exist for Max HP, BP and Mana only."""
        sheet = create_blank_sheet()

        tracked = {attr.name for attr in sheet.derived if attr.extra is not None}
        assert tracked == {
            DerivedAttributeName.MAX_HP,
            DerivedAttributeName.BP,
            DerivedAttributeName.MANA,
        }

    def test_one_row_everywhere(self) -> None:
        """Test every collection and slot holds exactly one blank row."""
        sheet = create_blank_sheet()

        for kind in CollectionKind:
            items = sheet.collection(kind)
            assert len(items) == 1
            assert items[0] == COLLECTION_ITEM_TYPES[kind]()
        for slot in sheet.motes:
            assert slot.category == ""
            assert slot.abilities == [AbilitySelection()]

    @pytest.mark.parametrize("slot_count", [1, 3, 5])
    def test_slot_count(self, slot_count: int) -> None:
        """Test the number of mote slots is configurable."""
        assert len(create_blank_sheet(slot_count).motes) == slot_count


class TestCharacterSheetState:
    """Tests for CharacterSheetState lookups."""

    def test_core_attribute_lookup(self) -> None:
        """Test a core row is found by name."""
        sheet = create_blank_sheet()

        assert sheet.core_attribute(CoreAttributeName.GRIT).name == CoreAttributeName.GRIT

    def test_derived_attribute_lookup(self) -> None:
        """Test a derived row is found by name."""
        sheet = create_blank_sheet()

        row = sheet.derived_attribute(DerivedAttributeName.MANA)
        assert row.name == DerivedAttributeName.MANA
        assert row.extra_placeholder == "Mana"

    def test_collection_is_live(self) -> None:
        """Test the collection accessor returns the stored list."""
        sheet = create_blank_sheet()

        sheet.collection(CollectionKind.ENHANCEMENTS).append(Enhancement(name="Keen"))

        assert sheet.enhancements[-1].name == "Keen"

    def test_equality_by_value(self) -> None:
        """Test two blank sheets compare equal."""
        assert create_blank_sheet() == create_blank_sheet()

    def test_rejects_unknown_fields(self) -> None:
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            CharacterSheetState(nickname="x")


class TestRows:
    """Tests for the attribute and mote row models."""

    def test_assignment_validated(self) -> None:
        """Test assigning a non-integer to an attribute input fails."""
        attr = CoreAttribute(name=CoreAttributeName.STRENGTH)

        with pytest.raises(ValidationError):
            attr.base = "strong"

    def test_has_extra(self) -> None:
        """Test has_extra follows the attribute name."""
        assert DerivedAttribute(name=DerivedAttributeName.BP).has_extra
        assert not DerivedAttribute(name=DerivedAttributeName.AC).has_extra

    def test_mote_slot_never_empty(self) -> None:
        """Test a slot cannot be built without ability rows."""
        with pytest.raises(ValidationError):
            MoteSlot(abilities=[])

    def test_show_details_not_dumped(self) -> None:
        """Test the description toggle stays out of dumps."""
        row = AbilitySelection(ability="Tide Step", description="x", show_details=True)

        assert "show_details" not in row.model_dump()
