"""Enumeration types for the Apollyon character sheet.

Enum members are declared in display order; the sheet tables are built by
iterating them.
"""

from __future__ import annotations

from enum import StrEnum


class CoreAttributeName(StrEnum):
    """The five primary character statistics."""

    STRENGTH = "Strength"
    AGILITY = "Agility"
    GRIT = "Grit"
    SPIRIT = "Spirit"
    SPEED = "Speed"


class DerivedAttributeName(StrEnum):
    """Secondary statistics computed from core totals plus adjustments."""

    MAX_HP = "Max HP"
    DR = "DR"
    AC = "AC"
    BP = "BP"
    """Boost Points, spent by many abilities."""

    SPEED = "Speed"
    MANA = "Mana"


class CollectionKind(StrEnum):
    """The variable-length lists on a sheet."""

    INVENTORY = "inventory"
    ENHANCEMENTS = "enhancements"
    MASTERIES = "masteries"
    MIND_ALTERATIONS = "mind_alterations"
    MIND_BREAKS = "mind_breaks"


class CoreField(StrEnum):
    """User-editable fields of a core attribute row."""

    BASE = "base"
    MODIFIER = "modifier"
    TEMPORARY = "temporary"
    LEVEL_BONUS = "level_bonus"


class DerivedField(StrEnum):
    """User-editable fields of a derived attribute row."""

    BASE = "base"
    MODIFIER = "modifier"
    TEMPORARY = "temporary"
    MULTIPLIER = "multiplier"
    EXTRA = "extra"


class IdentityField(StrEnum):
    """Free-text identity fields at the top of the sheet."""

    NAME = "name"
    LEVEL = "level"
    EXPERIENCE = "experience"
    RACE = "race"


class SheetEventKind(StrEnum):
    """Kinds of change notifications the editor emits."""

    IDENTITY_CHANGED = "identity_changed"
    ATTRIBUTES_CHANGED = "attributes_changed"
    MOTES_CHANGED = "motes_changed"
    COLLECTION_CHANGED = "collection_changed"
    MASTERY_VALUE_CHANGED = "mastery_value_changed"
    IMPORTED = "imported"
    RESET = "reset"


__all__ = [
    "CoreAttributeName",
    "DerivedAttributeName",
    "CollectionKind",
    "CoreField",
    "DerivedField",
    "IdentityField",
    "SheetEventKind",
]
