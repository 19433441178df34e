"""Configuration management for the Apollyon character sheet.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.

Example:
    >>> from apollyon_sheet.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.sheet.mote_slot_count
    3

Environment Variables:
    APOLLYON_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    APOLLYON_JSON_LOGS: Emit JSON log lines instead of console output
    APOLLYON_LOG_FILE: Append log lines to this file instead of stdout
    APOLLYON_CATALOG_PATH: Alternative ability catalog JSON file
    APOLLYON_SHEET_MOTE_SLOT_COUNT: Number of mote selector slots
    APOLLYON_UI_PAGE_TITLE: Browser page title
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from apollyon_sheet.core.constants import (
    DEFAULT_MOTE_SLOT_COUNT,
    MULTIPLIER_MAX,
    MULTIPLIER_MIN,
    MULTIPLIER_STEP,
)
from apollyon_sheet.core.exceptions import ConfigurationError


class CatalogSettings(BaseSettings):
    """Configuration for the ability catalog source.

    Attributes:
        path: Optional catalog JSON file replacing the packaged catalog.
    """

    model_config = SettingsConfigDict(
        env_prefix="APOLLYON_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    path: Path | None = Field(
        default=None,
        description="Ability catalog JSON file (defaults to the packaged catalog)",
    )


class SheetSettings(BaseSettings):
    """Configuration for the sheet layout and input constraints.

    Attributes:
        mote_slot_count: Number of mote selector slots on a sheet.
        multiplier_min: Lowest multiplier the input widgets offer.
        multiplier_max: Highest multiplier the input widgets offer.
        multiplier_step: Multiplier input granularity.
    """

    model_config = SettingsConfigDict(
        env_prefix="APOLLYON_SHEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mote_slot_count: int = Field(
        default=DEFAULT_MOTE_SLOT_COUNT,
        ge=1,
        le=10,
        description="Number of mote selector slots",
    )
    multiplier_min: Decimal = Field(
        default=MULTIPLIER_MIN,
        ge=0,
        description="Lowest multiplier offered by the input widgets",
    )
    multiplier_max: Decimal = Field(
        default=MULTIPLIER_MAX,
        description="Highest multiplier offered by the input widgets",
    )
    multiplier_step: Decimal = Field(
        default=MULTIPLIER_STEP,
        gt=0,
        description="Multiplier input granularity",
    )

    @model_validator(mode="after")
    def validate_multiplier_range(self) -> "SheetSettings":
        """Ensure the multiplier range is not inverted.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If multiplier_min > multiplier_max.
        """
        if self.multiplier_min > self.multiplier_max:
            raise ConfigurationError(
                f"multiplier_min ({self.multiplier_min}) must not exceed "
                f"multiplier_max ({self.multiplier_max})",
                config_key="multiplier_min",
            )
        return self


class UISettings(BaseSettings):
    """Configuration for the Streamlit UI.

    Attributes:
        page_title: Browser page title.
        layout: Streamlit page layout.
    """

    model_config = SettingsConfigDict(
        env_prefix="APOLLYON_UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    page_title: str = Field(
        default="Apollyon Character Sheet",
        description="Browser page title",
    )
    layout: Literal["wide", "centered"] = Field(
        default="wide",
        description="Streamlit page layout",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON log lines.
        log_file: Optional log file path.
        catalog: Ability catalog settings.
        sheet: Sheet layout settings.
        ui: UI settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="APOLLYON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Apollyon Character Sheet",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )
    log_file: Path | None = Field(
        default=None,
        description="Append log lines to this file instead of stdout",
    )

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    sheet: SheetSettings = Field(default_factory=SheetSettings)
    ui: UISettings = Field(default_factory=UISettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "CatalogSettings",
    "SheetSettings",
    "UISettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
