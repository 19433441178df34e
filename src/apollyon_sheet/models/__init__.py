"""Pydantic V2 schemas for the Apollyon character sheet.

Submodules:
    enums: Attribute names, collection kinds, editable field names.
    sheet: The mutable CharacterSheetState aggregate and its rows.
    catalog: The read-only ability catalog.
    payload: The export/import wire schema.

Example:
    >>> from apollyon_sheet.models import create_blank_sheet, CoreAttributeName
    >>> sheet = create_blank_sheet()
    >>> sheet.core_attribute(CoreAttributeName.GRIT).base
    0
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from apollyon_sheet.models.enums import (
    CollectionKind,
    CoreAttributeName,
    CoreField,
    DerivedAttributeName,
    DerivedField,
    IdentityField,
    SheetEventKind,
)

# =============================================================================
# Sheet State
# =============================================================================
from apollyon_sheet.models.sheet import (
    COLLECTION_ITEM_TYPES,
    AbilitySelection,
    CharacterSheetState,
    CollectionItem,
    CoreAttribute,
    DerivedAttribute,
    Enhancement,
    InventoryItem,
    Mastery,
    MindAlteration,
    MindBreak,
    MoteSlot,
    create_blank_sheet,
)

# =============================================================================
# Catalog
# =============================================================================
from apollyon_sheet.models.catalog import (
    EMPTY_ABILITY,
    AbilityCatalog,
    AbilityRecord,
    load_catalog,
    parse_catalog,
)

# =============================================================================
# Wire Payload
# =============================================================================
from apollyon_sheet.models.payload import SheetPayload


__all__ = [
    # Enums
    "CollectionKind",
    "CoreAttributeName",
    "CoreField",
    "DerivedAttributeName",
    "DerivedField",
    "IdentityField",
    "SheetEventKind",
    # Sheet
    "AbilitySelection",
    "CharacterSheetState",
    "CollectionItem",
    "COLLECTION_ITEM_TYPES",
    "CoreAttribute",
    "DerivedAttribute",
    "Enhancement",
    "InventoryItem",
    "Mastery",
    "MindAlteration",
    "MindBreak",
    "MoteSlot",
    "create_blank_sheet",
    # Catalog
    "AbilityCatalog",
    "AbilityRecord",
    "EMPTY_ABILITY",
    "load_catalog",
    "parse_catalog",
    # Payload
    "SheetPayload",
]
