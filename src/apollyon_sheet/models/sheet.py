"""Sheet state models for the Apollyon character sheet.

The character sheet is one mutable ``CharacterSheetState`` aggregate. It is
the single source of truth for the editor: the presentation layer renders
it and never reads values back out of widgets.

Invariants kept by the engine rather than by these models:
- ``CoreAttribute.total`` and ``DerivedAttribute.end`` are derived values,
  written only by ``engine.derived.recalculate``.
- Every collection and every mote slot holds at least one row.

Example:
    >>> from apollyon_sheet.models.sheet import create_blank_sheet
    >>> sheet = create_blank_sheet(slot_count=3)
    >>> len(sheet.motes), len(sheet.inventory)
    (3, 1)
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from apollyon_sheet.core.constants import DEFAULT_MOTE_SLOT_COUNT, MULTIPLIER_DEFAULT
from apollyon_sheet.models.enums import (
    CollectionKind,
    CoreAttributeName,
    DerivedAttributeName,
)


# =============================================================================
# Attribute Rows
# =============================================================================


class CoreAttribute(BaseModel):
    """One row of the core attribute table.

    Attributes:
        name: Which core attribute this row holds.
        base: Base value entered by the player.
        modifier: Permanent modifier.
        temporary: Temporary adjustment.
        level_bonus: Bonus gained from levelling.
        total: Sum of the four inputs (derived).
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: CoreAttributeName
    base: int = Field(default=0, description="Base value")
    modifier: int = Field(default=0, description="Permanent modifier")
    temporary: int = Field(default=0, description="Temporary adjustment")
    level_bonus: int = Field(default=0, description="Bonus from levels")
    total: int = Field(default=0, description="base + modifier + temporary + level_bonus")


EXTRA_FIELD_PLACEHOLDERS: dict[DerivedAttributeName, str] = {
    DerivedAttributeName.MAX_HP: "HP",
    DerivedAttributeName.BP: "BP",
    DerivedAttributeName.MANA: "Mana",
}
"""Derived rows that track a current value next to their maximum."""


class DerivedAttribute(BaseModel):
    """One row of the derived attribute table.

    Attributes:
        name: Which derived attribute this row holds.
        base: Base value; computed from a core total for Max HP, BP, AC and Speed.
        modifier: Permanent modifier.
        temporary: Temporary adjustment.
        multiplier: Scale applied to the sum, never range-checked here.
        end: ceil((base + modifier + temporary) * multiplier) (derived).
        extra: Current value (current HP, BP or Mana), None for rows without one.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: DerivedAttributeName
    base: int = Field(default=0, description="Base value")
    modifier: int = Field(default=0, description="Permanent modifier")
    temporary: int = Field(default=0, description="Temporary adjustment")
    multiplier: Decimal = Field(default=MULTIPLIER_DEFAULT, description="Multiplier")
    end: int = Field(default=0, description="Final value")
    extra: int | None = Field(default=None, description="Current value tracker")

    @property
    def has_extra(self) -> bool:
        """Whether this row tracks a current value."""
        return self.name in EXTRA_FIELD_PLACEHOLDERS

    @property
    def extra_placeholder(self) -> str:
        """Placeholder shown in the current-value input."""
        return EXTRA_FIELD_PLACEHOLDERS.get(self.name, "")


# =============================================================================
# Mote Slots
# =============================================================================


class AbilitySelection(BaseModel):
    """One ability picker row inside a mote slot.

    Attributes:
        ability: Chosen ability name ("" when nothing is chosen).
        description: Short description shown for the chosen ability.
        show_details: Whether the long description is displayed instead.
            Presentational only; never exported.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    ability: str = ""
    description: str = ""
    show_details: bool = Field(default=False, exclude=True)


class MoteSlot(BaseModel):
    """A category dropdown plus its ability picker rows.

    Attributes:
        category: Selected mote category ("" when unset).
        abilities: Ability picker rows, never empty.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    category: str = ""
    abilities: list[AbilitySelection] = Field(
        default_factory=lambda: [AbilitySelection()],
        min_length=1,
    )


# =============================================================================
# Collection Items
# =============================================================================


class InventoryItem(BaseModel):
    """An inventory entry."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: str = ""
    description: str = ""


class Enhancement(BaseModel):
    """A known enhancement and the item it is bound to."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: str = ""
    cost: str = ""
    item: str = ""
    effect: str = ""


class Mastery(BaseModel):
    """A mastery and its effect."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: str = ""
    effect: str = ""


class MindAlteration(BaseModel):
    """A narrative mind alteration entry."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: str = ""
    description: str = ""


class MindBreak(BaseModel):
    """A narrative mind break entry."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: str = ""
    description: str = ""


CollectionItem = InventoryItem | Enhancement | Mastery | MindAlteration | MindBreak

COLLECTION_ITEM_TYPES: dict[CollectionKind, type[BaseModel]] = {
    CollectionKind.INVENTORY: InventoryItem,
    CollectionKind.ENHANCEMENTS: Enhancement,
    CollectionKind.MASTERIES: Mastery,
    CollectionKind.MIND_ALTERATIONS: MindAlteration,
    CollectionKind.MIND_BREAKS: MindBreak,
}


# =============================================================================
# Sheet Aggregate
# =============================================================================


def _default_core() -> list[CoreAttribute]:
    return [CoreAttribute(name=name) for name in CoreAttributeName]


def _default_derived() -> list[DerivedAttribute]:
    return [
        DerivedAttribute(name=name, extra=0 if name in EXTRA_FIELD_PLACEHOLDERS else None)
        for name in DerivedAttributeName
    ]


def _default_motes() -> list[MoteSlot]:
    return [MoteSlot() for _ in range(DEFAULT_MOTE_SLOT_COUNT)]


class CharacterSheetState(BaseModel):
    """The whole character sheet; the unit of export and import.

    Attributes:
        name: Character name.
        level: Character level as entered.
        experience: Experience as entered.
        race: Character race.
        core: The five core attribute rows in display order.
        derived: The six derived attribute rows in display order.
        motes: Mote selector slots.
        inventory: Inventory items.
        enhancements: Known enhancements.
        masteries: Masteries.
        mastery_value: Free-text mastery value.
        mind_alterations: Mind alteration entries.
        mind_breaks: Mind break entries.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: str = ""
    level: str = ""
    experience: str = ""
    race: str = ""

    core: list[CoreAttribute] = Field(default_factory=_default_core)
    derived: list[DerivedAttribute] = Field(default_factory=_default_derived)
    motes: list[MoteSlot] = Field(default_factory=_default_motes)

    inventory: list[InventoryItem] = Field(default_factory=lambda: [InventoryItem()])
    enhancements: list[Enhancement] = Field(default_factory=lambda: [Enhancement()])
    masteries: list[Mastery] = Field(default_factory=lambda: [Mastery()])
    mastery_value: str = ""
    mind_alterations: list[MindAlteration] = Field(
        default_factory=lambda: [MindAlteration()]
    )
    mind_breaks: list[MindBreak] = Field(default_factory=lambda: [MindBreak()])

    def core_attribute(self, name: CoreAttributeName) -> CoreAttribute:
        """Get a core attribute row by name.

        Args:
            name: The core attribute to look up.

        Returns:
            The matching row.
        """
        return next(attr for attr in self.core if attr.name == name)

    def derived_attribute(self, name: DerivedAttributeName) -> DerivedAttribute:
        """Get a derived attribute row by name.

        Args:
            name: The derived attribute to look up.

        Returns:
            The matching row.
        """
        return next(attr for attr in self.derived if attr.name == name)

    def collection(self, kind: CollectionKind) -> list:
        """Get the live list backing a collection.

        Args:
            kind: Which collection to return.

        Returns:
            The list object stored on this sheet (mutations are visible).
        """
        return getattr(self, kind.value)


def create_blank_sheet(slot_count: int = DEFAULT_MOTE_SLOT_COUNT) -> CharacterSheetState:
    """Create a sheet in its floor configuration.

    Every number holds its default, every category is unset, and every
    collection and slot holds exactly one blank row.

    Args:
        slot_count: Number of mote selector slots.

    Returns:
        A new CharacterSheetState. Derived values are not yet computed.
    """
    return CharacterSheetState(motes=[MoteSlot() for _ in range(slot_count)])


__all__ = [
    "CoreAttribute",
    "DerivedAttribute",
    "EXTRA_FIELD_PLACEHOLDERS",
    "AbilitySelection",
    "MoteSlot",
    "InventoryItem",
    "Enhancement",
    "Mastery",
    "MindAlteration",
    "MindBreak",
    "CollectionItem",
    "COLLECTION_ITEM_TYPES",
    "CharacterSheetState",
    "create_blank_sheet",
]
