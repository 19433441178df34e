"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        ApollyonSheetError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        CatalogError: Ability catalog loading errors.
        SheetImportError: Payload import errors.
        SheetStateError: Invalid editor targets.
        SelectionError: Ability not offered by a slot's category.
        UIError: Presentation-layer errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from apollyon_sheet.core.config import (
    CatalogSettings,
    Settings,
    SheetSettings,
    UISettings,
    clear_settings_cache,
    get_settings,
)
from apollyon_sheet.core.exceptions import (
    ApollyonSheetError,
    CatalogError,
    ConfigurationError,
    SelectionError,
    SheetImportError,
    SheetStateError,
    UIError,
)
from apollyon_sheet.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "ApollyonSheetError",
    "ConfigurationError",
    "CatalogError",
    "SheetImportError",
    "SheetStateError",
    "SelectionError",
    "UIError",
    # Configuration
    "Settings",
    "CatalogSettings",
    "SheetSettings",
    "UISettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
