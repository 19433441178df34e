"""Mote selector controller.

A ``MoteSelector`` binds one ``MoteSlot`` of the sheet to the ability
catalog. It keeps every ability row consistent with the slot's category:
changing the category re-points every row at the new option list and
resets each row to that list's first entry.

The selector does not run the selection validator itself; the editor
facade validates after each change so that one pass covers all slots.
"""

from __future__ import annotations

from apollyon_sheet.core.constants import (
    COLLECTION_FLOOR,
    DEFAULT_THEME_CLASS,
    THEME_CLASS_PREFIX,
)
from apollyon_sheet.core.exceptions import SelectionError, SheetStateError
from apollyon_sheet.core.logging import get_logger
from apollyon_sheet.models.catalog import AbilityCatalog, AbilityRecord
from apollyon_sheet.models.sheet import AbilitySelection, MoteSlot


logger = get_logger(__name__)


def theme_class_for(category: str) -> str:
    """CSS theme class for a mote column.

    Example:
        >>> theme_class_for("Shrail")
        'mote-theme-shrail'
    """
    if not category:
        return DEFAULT_THEME_CLASS
    return f"{THEME_CLASS_PREFIX}{category.lower()}"


class MoteSelector:
    """Controller for one category dropdown and its ability picker rows.

    Attributes:
        slot: The sheet slot this selector edits in place.
        catalog: Ability lookups for the slot's category.
    """

    def __init__(self, slot: MoteSlot, catalog: AbilityCatalog) -> None:
        self.slot = slot
        self.catalog = catalog

    @property
    def category(self) -> str:
        return self.slot.category

    @property
    def options(self) -> tuple[AbilityRecord, ...]:
        """The option list every row of this slot offers."""
        return self.catalog.abilities_for(self.slot.category)

    @property
    def row_count(self) -> int:
        return len(self.slot.abilities)

    @property
    def can_remove_rows(self) -> bool:
        return self.row_count > COLLECTION_FLOOR

    def _row(self, row_index: int) -> AbilitySelection:
        if not 0 <= row_index < self.row_count:
            raise SheetStateError(
                "Ability row index out of range",
                details={"row_index": row_index, "row_count": self.row_count},
            )
        return self.slot.abilities[row_index]

    def _fresh_row(self) -> AbilitySelection:
        first = self.options[0]
        return AbilitySelection(ability=first.name, description=first.short_description)

    def set_category(self, category: str) -> None:
        """Switch the slot to another category.

        Every row is reset to the first option of the new category and
        back to short-description mode.

        Args:
            category: New category; "" or an unknown name leaves the slot
                with only the empty option.
        """
        self.slot.category = category
        first = self.options[0]
        for row in self.slot.abilities:
            row.ability = first.name
            row.description = first.short_description
            row.show_details = False

    def add_ability_row(self) -> AbilitySelection:
        """Append a picker row set to the first option of the current category.

        Returns:
            The new row.
        """
        row = self._fresh_row()
        self.slot.abilities.append(row)
        return row

    def remove_ability_row(self, row_index: int) -> bool:
        """Remove a picker row unless it is the last one.

        Args:
            row_index: Row to remove.

        Returns:
            True if the row was removed, False when it is the only row.
        """
        self._row(row_index)
        if not self.can_remove_rows:
            logger.debug("Refused to remove last ability row", category=self.category)
            return False
        del self.slot.abilities[row_index]
        return True

    def select_ability(self, row_index: int, ability_name: str) -> AbilitySelection:
        """Choose an ability in one row.

        Args:
            row_index: Row to change.
            ability_name: Name from the slot's option list.

        Returns:
            The updated row.

        Raises:
            SelectionError: If the current category does not offer the name.
        """
        row = self._row(row_index)
        record = self.catalog.find(self.slot.category, ability_name)
        if record is None:
            raise SelectionError(
                "Ability is not offered by this mote",
                category=self.slot.category,
                ability=ability_name,
            )
        row.ability = record.name
        row.description = record.short_description
        row.show_details = False
        return row

    def toggle_description_detail(self, row_index: int) -> bool:
        """Flip one row between short and long description.

        Nothing happens when the chosen ability has no long description.

        Returns:
            The row's show_details flag after the call.
        """
        row = self._row(row_index)
        record = self.catalog.find(self.slot.category, row.ability)
        if record is None or not record.long_description:
            return row.show_details
        row.show_details = not row.show_details
        return row.show_details

    def display_text(self, row_index: int) -> str:
        """Text the description box of a row shows."""
        row = self._row(row_index)
        if row.show_details:
            record = self.catalog.find(self.slot.category, row.ability)
            if record is not None and record.long_description:
                return record.long_description
        return row.description


__all__ = [
    "MoteSelector",
    "theme_class_for",
]
