"""Sheet engine for the Apollyon character sheet.

This module holds every rule that turns player input into a consistent
sheet: derived value recalculation, the mote selector controllers, the
selection validator, the collection editors, export/import, and the
editor facade that ties them together.

Submodules:
    derived: Core totals and derived attribute formulas
    motes: Category dropdown and ability picker controller
    validator: Duplicate-selection rules and conflict sets
    collection_editor: Add/remove editors for the variable-length lists
    serializer: Export and import of the whole sheet
    editor: CharacterSheetEditor, the single mutation surface

Example:
    >>> from apollyon_sheet.engine import CharacterSheetEditor
    >>> from apollyon_sheet.models import load_catalog
    >>>
    >>> editor = CharacterSheetEditor(load_catalog())
    >>> editor.set_category(0, "Shrail")
    True
    >>> editor.conflicts.is_category_disabled(1, "Shrail")
    True
"""

from __future__ import annotations

# =============================================================================
# Derived Values
# =============================================================================
from apollyon_sheet.engine.derived import (
    BASE_FORMULAS,
    computed_base,
    core_total,
    derived_end,
    has_computed_base,
    recalculate,
)

# =============================================================================
# Mote Selectors
# =============================================================================
from apollyon_sheet.engine.motes import MoteSelector, theme_class_for

# =============================================================================
# Selection Validation
# =============================================================================
from apollyon_sheet.engine.validator import (
    ConflictKind,
    DuplicateSelection,
    SelectionConflicts,
    is_repeatable_ability,
    validate,
)

# =============================================================================
# Collections
# =============================================================================
from apollyon_sheet.engine.collection_editor import CollectionEditor

# =============================================================================
# Export / Import
# =============================================================================
from apollyon_sheet.engine.serializer import (
    deserialize,
    from_payload,
    parse_payload,
    serialize,
    to_payload,
)

# =============================================================================
# Editor Facade
# =============================================================================
from apollyon_sheet.engine.editor import CharacterSheetEditor, SheetCallback, SheetEvent


__all__ = [
    # Derived
    "BASE_FORMULAS",
    "computed_base",
    "core_total",
    "derived_end",
    "has_computed_base",
    "recalculate",
    # Motes
    "MoteSelector",
    "theme_class_for",
    # Validation
    "ConflictKind",
    "DuplicateSelection",
    "SelectionConflicts",
    "is_repeatable_ability",
    "validate",
    # Collections
    "CollectionEditor",
    # Serializer
    "deserialize",
    "from_payload",
    "parse_payload",
    "serialize",
    "to_payload",
    # Editor
    "CharacterSheetEditor",
    "SheetCallback",
    "SheetEvent",
]
