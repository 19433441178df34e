"""Export and import of the whole sheet as one text payload.

``serialize`` renders a ``CharacterSheetState`` as compact JSON in the wire
format described by ``models.payload``. ``deserialize`` is the inverse and
always performs a full replace:

1. start from a sheet in its floor configuration,
2. write every field the payload carries,
3. recompute derived values.

Running the selection validator over the result is the caller's job (the
editor does it exactly once per import). A payload that cannot be parsed
raises ``SheetImportError`` before any sheet is built.

Content problems are tolerated field by field: missing fields read as
blank, non-numeric text in a numeric field reads as blank, an unknown
category reads as unset, and an ability the category does not offer is
left unselected.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from pydantic import ValidationError as PydanticValidationError

from apollyon_sheet.core.constants import (
    DEFAULT_MOTE_SLOT_COUNT,
    MULTIPLIER_DEFAULT,
    NUMBER_MAX_EXPONENT,
)
from apollyon_sheet.core.exceptions import SheetImportError
from apollyon_sheet.core.logging import get_logger
from apollyon_sheet.engine.derived import recalculate
from apollyon_sheet.engine.motes import MoteSelector
from apollyon_sheet.models.catalog import AbilityCatalog
from apollyon_sheet.models.payload import (
    CalcPayload,
    CorePayload,
    EnhancementPayload,
    MasteryPayload,
    MoteAbilityPayload,
    MotePayload,
    NamedEntryPayload,
    SheetPayload,
)
from apollyon_sheet.models.sheet import (
    AbilitySelection,
    CharacterSheetState,
    Enhancement,
    InventoryItem,
    Mastery,
    MindAlteration,
    MindBreak,
    MoteSlot,
    create_blank_sheet,
)


logger = get_logger(__name__)


# =============================================================================
# Scalar Conversion
# =============================================================================


def _number_text(value: int | Decimal | None) -> str:
    return "" if value is None else str(value)


def _parse_decimal(text: str, *, field: str) -> Decimal | None:
    text = text.strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        logger.warning("Ignoring non-numeric value", field=field, value=text)
        return None
    if not value.is_finite():
        logger.warning("Ignoring non-finite value", field=field, value=text)
        return None
    if value.adjusted() > NUMBER_MAX_EXPONENT:
        logger.warning("Ignoring out-of-range value", field=field, value=text)
        return None
    return value


def parse_int(text: str, *, field: str = "", default: int = 0) -> int:
    """Read a wire number into an int field.

    Blank or non-numeric text gives ``default``; fractions truncate toward zero.
    """
    value = _parse_decimal(text, field=field)
    return default if value is None else int(value)


def parse_optional_int(text: str, *, field: str = "") -> int | None:
    """Read a wire number into an optional int field; blank gives None."""
    value = _parse_decimal(text, field=field)
    return None if value is None else int(value)


def parse_multiplier(text: str, *, field: str = "") -> Decimal:
    """Read a wire multiplier; blank gives the default multiplier of 1."""
    value = _parse_decimal(text, field=field)
    return MULTIPLIER_DEFAULT if value is None else value


# =============================================================================
# Export
# =============================================================================


def to_payload(state: CharacterSheetState) -> SheetPayload:
    """Convert a sheet to its wire model.

    Args:
        state: The sheet to export.

    Returns:
        The SheetPayload carrying every exported field.
    """
    return SheetPayload(
        name=state.name,
        level=state.level,
        exp=state.experience,
        race=state.race,
        core=[
            CorePayload(
                base=_number_text(attr.base),
                mod=_number_text(attr.modifier),
                temp=_number_text(attr.temporary),
                level=_number_text(attr.level_bonus),
                total=_number_text(attr.total),
            )
            for attr in state.core
        ],
        calc=[
            CalcPayload(
                base=_number_text(attr.base),
                mod=_number_text(attr.modifier),
                temp=_number_text(attr.temporary),
                mult=_number_text(attr.multiplier),
                end=_number_text(attr.end),
                extra=_number_text(attr.extra),
            )
            for attr in state.derived
        ],
        inventory=[
            NamedEntryPayload(name=item.name, desc=item.description) for item in state.inventory
        ],
        motes=[
            MotePayload(
                mote=slot.category,
                abilities=[
                    MoteAbilityPayload(ability=row.ability, desc=row.description)
                    for row in slot.abilities
                ],
            )
            for slot in state.motes
        ],
        enhancements=[
            EnhancementPayload(name=e.name, cost=e.cost, item=e.item, effect=e.effect)
            for e in state.enhancements
        ],
        masteries=[MasteryPayload(name=m.name, effect=m.effect) for m in state.masteries],
        mastery_value=state.mastery_value,
        mind_alterations=[
            NamedEntryPayload(name=item.name, desc=item.description)
            for item in state.mind_alterations
        ],
        mind_breaks=[
            NamedEntryPayload(name=item.name, desc=item.description) for item in state.mind_breaks
        ],
    )


def serialize(state: CharacterSheetState) -> str:
    """Render a sheet as its export text.

    Args:
        state: The sheet to export.

    Returns:
        Compact JSON text.
    """
    return to_payload(state).model_dump_json(by_alias=True)


# =============================================================================
# Import
# =============================================================================


def parse_payload(text: str | bytes) -> SheetPayload:
    """Parse export text into its wire model.

    Args:
        text: Text produced by ``serialize`` (or hand-edited).

    Returns:
        The parsed SheetPayload.

    Raises:
        SheetImportError: If the text is not JSON, is not a JSON object, or
            a known field has the wrong structure.
    """
    try:
        return SheetPayload.model_validate_json(text)
    except PydanticValidationError as exc:
        errors = exc.errors()
        reason = "json" if any(err["type"] == "json_invalid" for err in errors) else "structure"
        raise SheetImportError(
            "Character data could not be read",
            reason=reason,
            details={"errors": len(errors)},
        ) from exc


def _apply_core(state: CharacterSheetState, rows: list[CorePayload]) -> None:
    for attr, wire in zip(state.core, rows):
        field = attr.name.value
        attr.base = parse_int(wire.base, field=f"{field}.base")
        attr.modifier = parse_int(wire.mod, field=f"{field}.mod")
        attr.temporary = parse_int(wire.temp, field=f"{field}.temp")
        attr.level_bonus = parse_int(wire.level, field=f"{field}.level")


def _apply_calc(state: CharacterSheetState, rows: list[CalcPayload]) -> None:
    for attr, wire in zip(state.derived, rows):
        field = attr.name.value
        attr.base = parse_int(wire.base, field=f"{field}.base")
        attr.modifier = parse_int(wire.mod, field=f"{field}.mod")
        attr.temporary = parse_int(wire.temp, field=f"{field}.temp")
        attr.multiplier = parse_multiplier(wire.mult, field=f"{field}.mult")
        if attr.has_extra:
            attr.extra = parse_optional_int(wire.extra, field=f"{field}.extra")


def _imported_row(
    catalog: AbilityCatalog,
    category: str,
    wire: MoteAbilityPayload,
) -> AbilitySelection:
    record = catalog.find(category, wire.ability)
    if record is None:
        logger.warning("Imported ability not offered by mote", mote=category, ability=wire.ability)
        return AbilitySelection()
    return AbilitySelection(
        ability=record.name,
        description=wire.desc or record.short_description,
    )


def _apply_mote(slot: MoteSlot, catalog: AbilityCatalog, wire: MotePayload) -> None:
    category = wire.mote
    if category and not catalog.has_category(category):
        logger.warning("Imported mote not in catalog", mote=category)
        category = ""

    MoteSelector(slot, catalog).set_category(category)
    if wire.abilities:
        slot.abilities = [_imported_row(catalog, category, row) for row in wire.abilities]


def from_payload(
    payload: SheetPayload,
    catalog: AbilityCatalog,
    *,
    slot_count: int = DEFAULT_MOTE_SLOT_COUNT,
) -> CharacterSheetState:
    """Build a sheet from a parsed payload.

    Args:
        payload: The parsed wire model.
        catalog: Catalog that imported ability names are resolved against.
        slot_count: Mote slots on the new sheet; extra payload slots are ignored.

    Returns:
        A new sheet with derived values recomputed.
    """
    state = create_blank_sheet(slot_count)

    state.name = payload.name
    state.level = payload.level
    state.experience = payload.exp
    state.race = payload.race
    state.mastery_value = payload.mastery_value

    _apply_core(state, payload.core)
    _apply_calc(state, payload.calc)

    for slot, wire in zip(state.motes, payload.motes):
        _apply_mote(slot, catalog, wire)

    if payload.inventory:
        state.inventory = [
            InventoryItem(name=item.name, description=item.desc) for item in payload.inventory
        ]
    if payload.enhancements:
        state.enhancements = [
            Enhancement(name=e.name, cost=e.cost, item=e.item, effect=e.effect)
            for e in payload.enhancements
        ]
    if payload.masteries:
        state.masteries = [Mastery(name=m.name, effect=m.effect) for m in payload.masteries]
    if payload.mind_alterations:
        state.mind_alterations = [
            MindAlteration(name=item.name, description=item.desc)
            for item in payload.mind_alterations
        ]
    if payload.mind_breaks:
        state.mind_breaks = [
            MindBreak(name=item.name, description=item.desc) for item in payload.mind_breaks
        ]

    recalculate(state)
    return state


def deserialize(
    text: str | bytes,
    catalog: AbilityCatalog,
    *,
    slot_count: int = DEFAULT_MOTE_SLOT_COUNT,
) -> CharacterSheetState:
    """Parse export text into a new sheet.

    Args:
        text: Export text.
        catalog: Catalog that imported ability names are resolved against.
        slot_count: Mote slots on the new sheet.

    Returns:
        A new sheet.

    Raises:
        SheetImportError: If the text cannot be parsed.
    """
    return from_payload(parse_payload(text), catalog, slot_count=slot_count)


__all__ = [
    "parse_int",
    "parse_optional_int",
    "parse_multiplier",
    "to_payload",
    "serialize",
    "parse_payload",
    "from_payload",
    "deserialize",
]
