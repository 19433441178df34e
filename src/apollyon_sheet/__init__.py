"""Apollyon - character sheet editor for the Apollyon tabletop RPG.

The sheet is one in-memory CharacterSheetState. The editor facade is the
only thing that mutates it: derived values follow the core attributes,
the mote selectors draw their options from the ability catalog, and the
whole sheet can be exported to and imported from a single JSON text.

Example:
    >>> from apollyon_sheet import CharacterSheetEditor, load_catalog
    >>>
    >>> editor = CharacterSheetEditor(load_catalog())
    >>> editor.set_identity("name", "Kael")
    >>> text = editor.export_text()
    >>> editor.reset()
    >>> editor.import_text(text)
    >>> editor.state.name
    'Kael'

Modules:
    core: Configuration, logging, constants and base exceptions.
    models: Pydantic V2 schemas for the sheet, the catalog and the wire payload.
    engine: Derived values, mote selectors, validation, collections, export/import.
    ui: Streamlit interface.
"""

from __future__ import annotations

# Core
from apollyon_sheet.core.config import Settings, get_settings
from apollyon_sheet.core.exceptions import ApollyonSheetError, SheetImportError
from apollyon_sheet.core.logging import configure_logging, get_logger

# Models
from apollyon_sheet.models import (
    AbilityCatalog,
    CharacterSheetState,
    CollectionKind,
    CoreAttributeName,
    DerivedAttributeName,
    create_blank_sheet,
    load_catalog,
)

# Engine
from apollyon_sheet.engine import (
    CharacterSheetEditor,
    SheetEvent,
    deserialize,
    serialize,
)


__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Settings",
    "get_settings",
    "ApollyonSheetError",
    "SheetImportError",
    "configure_logging",
    "get_logger",
    # Models
    "AbilityCatalog",
    "CharacterSheetState",
    "CollectionKind",
    "CoreAttributeName",
    "DerivedAttributeName",
    "create_blank_sheet",
    "load_catalog",
    # Engine
    "CharacterSheetEditor",
    "SheetEvent",
    "deserialize",
    "serialize",
]
