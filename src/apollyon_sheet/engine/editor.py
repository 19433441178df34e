"""Character sheet editor facade.

``CharacterSheetEditor`` owns one ``CharacterSheetState`` together with the
ability catalog and is the only mutation surface the presentation layer
uses. Every applied edit runs the derived engine, re-runs the selection
validator where selections can have changed, and then notifies
subscribers with a ``SheetEvent``.

Edits that the current conflict set forbids are refused by returning
False rather than raising, so a caller without a UI cannot introduce new
duplicate selections either. Invalid targets (slot or row indexes out of
range, unknown field names) raise ``SheetStateError``.

Example:
    >>> from apollyon_sheet.engine.editor import CharacterSheetEditor
    >>> from apollyon_sheet.models import CoreAttributeName, CoreField, load_catalog
    >>> editor = CharacterSheetEditor(load_catalog())
    >>> editor.set_core(CoreAttributeName.GRIT, CoreField.BASE, 2)
    >>> editor.state.derived[0].end
    42
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from apollyon_sheet.core.config import Settings, get_settings
from apollyon_sheet.core.constants import DEFAULT_MOTE_SLOT_COUNT
from apollyon_sheet.core.exceptions import SelectionError, SheetImportError, SheetStateError
from apollyon_sheet.core.logging import get_logger
from apollyon_sheet.engine.collection_editor import CollectionEditor
from apollyon_sheet.engine.derived import has_computed_base, recalculate
from apollyon_sheet.engine.motes import MoteSelector
from apollyon_sheet.engine.serializer import deserialize, serialize
from apollyon_sheet.engine.validator import SelectionConflicts, validate
from apollyon_sheet.models.catalog import AbilityCatalog, load_catalog
from apollyon_sheet.models.enums import (
    CollectionKind,
    CoreAttributeName,
    CoreField,
    DerivedAttributeName,
    DerivedField,
    IdentityField,
    SheetEventKind,
)
from apollyon_sheet.models.sheet import (
    AbilitySelection,
    CharacterSheetState,
    MoteSlot,
    create_blank_sheet,
)


logger = get_logger(__name__)


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class SheetEvent:
    """Notification sent to subscribers after an applied mutation.

    Attributes:
        kind: What changed.
        details: Which target changed (slot, field, collection, ...).
    """

    kind: SheetEventKind
    details: dict[str, Any] = field(default_factory=dict)


SheetCallback = Callable[[SheetEvent], None]


def _coerce_enum(enum_type: type, value: Any, *, target: str) -> Any:
    try:
        return enum_type(value)
    except ValueError as exc:
        raise SheetStateError(
            f"Unknown {target}",
            details={"value": value},
        ) from exc


def _assign(model: BaseModel, attribute: str, value: Any) -> None:
    """Set a model field, reporting rejected values as SheetStateError."""
    try:
        setattr(model, attribute, value)
    except PydanticValidationError as exc:
        raise SheetStateError(
            "Invalid value for field",
            details={"field": attribute, "value": value},
        ) from exc


# =============================================================================
# Editor
# =============================================================================


class CharacterSheetEditor:
    """Mutation surface over one character sheet.

    Attributes:
        state: The sheet being edited.
        catalog: The ability catalog backing the mote selectors.
        slot_count: Number of mote selector slots.
        conflicts: The latest selection conflict set.
    """

    def __init__(
        self,
        catalog: AbilityCatalog,
        *,
        slot_count: int = DEFAULT_MOTE_SLOT_COUNT,
        state: CharacterSheetState | None = None,
    ) -> None:
        """Initialize the editor.

        Args:
            catalog: Ability catalog for the mote selectors.
            slot_count: Mote slots for a new sheet; ignored when ``state`` is given.
            state: Existing sheet to edit; a blank sheet is created otherwise.
        """
        self._catalog = catalog
        self._state = state if state is not None else create_blank_sheet(slot_count)
        self._slot_count = len(self._state.motes)
        self._callbacks: list[SheetCallback] = []

        recalculate(self._state)
        self._conflicts = validate(self._state)

        logger.debug(
            "Sheet editor initialized",
            slots=self._slot_count,
            abilities=len(catalog),
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        catalog: AbilityCatalog | None = None,
    ) -> "CharacterSheetEditor":
        """Build an editor with a blank sheet from application settings.

        Args:
            settings: Settings to use; the cached settings otherwise.
            catalog: Catalog to use; loaded from ``settings.catalog.path`` otherwise.

        Returns:
            A new editor.
        """
        settings = settings or get_settings()
        if catalog is None:
            catalog = load_catalog(settings.catalog.path)
        return cls(catalog, slot_count=settings.sheet.mote_slot_count)

    @property
    def state(self) -> CharacterSheetState:
        return self._state

    @property
    def catalog(self) -> AbilityCatalog:
        return self._catalog

    @property
    def slot_count(self) -> int:
        return self._slot_count

    @property
    def conflicts(self) -> SelectionConflicts:
        return self._conflicts

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, callback: SheetCallback) -> Callable[[], None]:
        """Register a callback invoked after every applied mutation.

        Args:
            callback: Function to call with each SheetEvent.

        Returns:
            A function that removes the callback again.
        """
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def _notify(self, kind: SheetEventKind, **details: Any) -> None:
        event = SheetEvent(kind=kind, details=details)
        for callback in list(self._callbacks):
            try:
                callback(event)
            except Exception:
                logger.exception("Sheet callback failed", kind=kind.value)

    def _revalidate(self) -> None:
        self._conflicts = validate(self._state)

    # -------------------------------------------------------------------------
    # Field edits
    # -------------------------------------------------------------------------

    def set_identity(self, field_name: IdentityField | str, value: str) -> None:
        """Set the name, level, experience or race text."""
        target = _coerce_enum(IdentityField, field_name, target="identity field")
        _assign(self._state, target.value, value)
        self._notify(SheetEventKind.IDENTITY_CHANGED, field=target.value)

    def set_core(
        self,
        attribute: CoreAttributeName | str,
        field_name: CoreField | str,
        value: int,
    ) -> None:
        """Set one input of a core attribute row and recompute.

        Args:
            attribute: Core attribute row.
            field_name: Input to change; ``total`` is derived and not editable.
            value: New integer value.

        Raises:
            SheetStateError: For an unknown attribute or field, or a non-integer value.
        """
        name = _coerce_enum(CoreAttributeName, attribute, target="core attribute")
        target = _coerce_enum(CoreField, field_name, target="core field")

        _assign(self._state.core_attribute(name), target.value, value)
        recalculate(self._state)
        self._notify(SheetEventKind.ATTRIBUTES_CHANGED, attribute=name.value, field=target.value)

    def set_derived(
        self,
        attribute: DerivedAttributeName | str,
        field_name: DerivedField | str,
        value: int | Decimal | float | str | None,
    ) -> bool:
        """Set one input of a derived attribute row and recompute.

        Args:
            attribute: Derived attribute row.
            field_name: Input to change; ``end`` is derived and not editable.
            value: New value. Multipliers accept any decimal-convertible value.

        Returns:
            True if applied; False for a formula-computed base or an extra
            value on a row that does not track one.

        Raises:
            SheetStateError: For an unknown attribute or field, or an invalid value.
        """
        name = _coerce_enum(DerivedAttributeName, attribute, target="derived attribute")
        target = _coerce_enum(DerivedField, field_name, target="derived field")
        row = self._state.derived_attribute(name)

        if target is DerivedField.BASE and has_computed_base(name):
            logger.debug("Refused write to computed base", attribute=name.value)
            return False
        if target is DerivedField.EXTRA and not row.has_extra:
            logger.debug("Refused extra value on row without one", attribute=name.value)
            return False

        if target is DerivedField.MULTIPLIER and isinstance(value, float):
            value = Decimal(str(value))
        _assign(row, target.value, value)
        recalculate(self._state)
        self._notify(SheetEventKind.ATTRIBUTES_CHANGED, attribute=name.value, field=target.value)
        return True

    def set_mastery_value(self, value: str) -> None:
        _assign(self._state, "mastery_value", value)
        self._notify(SheetEventKind.MASTERY_VALUE_CHANGED)

    # -------------------------------------------------------------------------
    # Mote edits
    # -------------------------------------------------------------------------

    def _slot(self, slot_index: int) -> MoteSlot:
        if not 0 <= slot_index < len(self._state.motes):
            raise SheetStateError(
                "Mote slot index out of range",
                details={"slot_index": slot_index, "slot_count": len(self._state.motes)},
            )
        return self._state.motes[slot_index]

    def _selector(self, slot_index: int) -> MoteSelector:
        return MoteSelector(self._slot(slot_index), self._catalog)

    def selector(self, slot_index: int) -> MoteSelector:
        """Get a read-only view of one mote slot for display.

        The selector works on a copy of the slot, so changes made through it
        never reach the sheet. Edit motes through the editor methods.

        Raises:
            SheetStateError: If the slot index is out of range.
        """
        return MoteSelector(self._slot(slot_index).model_copy(deep=True), self._catalog)

    def set_category(self, slot_index: int, category: str) -> bool:
        """Choose the category of one mote slot.

        All rows of the slot reset to the first ability of the new category.

        Args:
            slot_index: Slot to change.
            category: Catalog category, or "" to unset.

        Returns:
            True if applied; False when another slot already holds the category.

        Raises:
            SelectionError: If the category is not in the catalog.
        """
        selector = self._selector(slot_index)
        if category and not self._catalog.has_category(category):
            raise SelectionError("Unknown mote category", category=category)
        if self._conflicts.is_category_disabled(slot_index, category):
            logger.info("Refused duplicate category", slot=slot_index, category=category)
            return False

        selector.set_category(category)
        self._revalidate()
        self._notify(SheetEventKind.MOTES_CHANGED, slot=slot_index, category=category)
        return True

    def select_ability(self, slot_index: int, row_index: int, ability_name: str) -> bool:
        """Choose the ability of one picker row.

        Returns:
            True if applied; False when the ability is disabled for this row.

        Raises:
            SelectionError: If the slot's category does not offer the ability.
        """
        selector = self._selector(slot_index)
        if self._conflicts.is_ability_disabled(slot_index, row_index, ability_name):
            logger.info(
                "Refused duplicate ability",
                slot=slot_index,
                row=row_index,
                ability=ability_name,
            )
            return False

        selector.select_ability(row_index, ability_name)
        self._revalidate()
        self._notify(SheetEventKind.MOTES_CHANGED, slot=slot_index, row=row_index)
        return True

    def add_ability_row(self, slot_index: int) -> AbilitySelection:
        """Append a picker row to a slot."""
        row = self._selector(slot_index).add_ability_row()
        self._revalidate()
        self._notify(SheetEventKind.MOTES_CHANGED, slot=slot_index)
        return row

    def remove_ability_row(self, slot_index: int, row_index: int) -> bool:
        """Remove a picker row; the last row of a slot is kept."""
        removed = self._selector(slot_index).remove_ability_row(row_index)
        if removed:
            self._revalidate()
            self._notify(SheetEventKind.MOTES_CHANGED, slot=slot_index)
        return removed

    def toggle_description_detail(self, slot_index: int, row_index: int) -> bool:
        """Flip a row between short and long description.

        Returns:
            The row's show_details flag after the call.
        """
        shown = self._selector(slot_index).toggle_description_detail(row_index)
        self._notify(SheetEventKind.MOTES_CHANGED, slot=slot_index, row=row_index)
        return shown

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------

    def collection(self, kind: CollectionKind | str) -> CollectionEditor:
        """Get the list editor for one collection."""
        target = _coerce_enum(CollectionKind, kind, target="collection")
        return CollectionEditor.for_sheet(self._state, target)

    def add_item(self, kind: CollectionKind | str) -> BaseModel:
        """Append a blank item to a collection."""
        editor = self.collection(kind)
        item = editor.add()
        self._notify(SheetEventKind.COLLECTION_CHANGED, collection=editor.kind.value)
        return item

    def remove_item(self, kind: CollectionKind | str, index: int) -> bool:
        """Remove an item; the last item of a collection is kept."""
        editor = self.collection(kind)
        removed = editor.remove_at(index)
        if removed:
            self._notify(SheetEventKind.COLLECTION_CHANGED, collection=editor.kind.value)
        return removed

    def set_item_field(
        self,
        kind: CollectionKind | str,
        index: int,
        field_name: str,
        value: str,
    ) -> None:
        """Edit one text field of a collection item.

        Raises:
            SheetStateError: For an index out of range or an unknown field.
        """
        editor = self.collection(kind)
        items = editor.items
        if not 0 <= index < len(items):
            raise SheetStateError(
                "Collection index out of range",
                details={"collection": editor.kind.value, "index": index},
            )
        item = items[index]
        if field_name not in type(item).model_fields:
            raise SheetStateError(
                "Unknown collection item field",
                details={"collection": editor.kind.value, "field": field_name},
            )
        _assign(item, field_name, value)
        self._notify(
            SheetEventKind.COLLECTION_CHANGED,
            collection=editor.kind.value,
            index=index,
            field=field_name,
        )

    # -------------------------------------------------------------------------
    # Whole-sheet operations
    # -------------------------------------------------------------------------

    def export_text(self) -> str:
        """Serialize the sheet to its export text."""
        text = serialize(self._state)
        logger.info("Sheet exported", characters=len(text))
        return text

    def import_text(self, text: str | bytes) -> SelectionConflicts:
        """Replace the whole sheet with an exported payload.

        The new sheet is built and validated off to the side and swapped in
        only when complete, so a failed import leaves the current sheet as it was.

        Args:
            text: Export text.

        Returns:
            The conflict set of the imported sheet.

        Raises:
            SheetImportError: If the text cannot be parsed.
        """
        try:
            new_state = deserialize(text, self._catalog, slot_count=self._slot_count)
        except SheetImportError as exc:
            logger.warning("Sheet import rejected", reason=exc.details.get("reason"))
            raise

        conflicts = validate(new_state)
        self._state = new_state
        self._conflicts = conflicts

        if conflicts.has_duplicates:
            logger.warning("Imported sheet holds duplicate selections", count=len(conflicts.duplicates))
        logger.info("Sheet imported", name=new_state.name)
        self._notify(SheetEventKind.IMPORTED, duplicates=len(conflicts.duplicates))
        return conflicts

    def reset(self) -> None:
        """Clear the sheet back to its floor configuration."""
        new_state = create_blank_sheet(self._slot_count)
        recalculate(new_state)
        self._state = new_state
        self._revalidate()
        logger.info("Sheet reset")
        self._notify(SheetEventKind.RESET)


__all__ = [
    "CharacterSheetEditor",
    "SheetCallback",
    "SheetEvent",
]
