"""Tests for configuration management."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from apollyon_sheet.core.config import (
    CatalogSettings,
    Settings,
    SheetSettings,
    UISettings,
    clear_settings_cache,
    get_settings,
)
from apollyon_sheet.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each test away from any .env file."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestSheetSettings:
    """Tests for SheetSettings configuration."""

    def test_default_values(self) -> None:
        """Test default sheet settings."""
        settings = SheetSettings()

        assert settings.mote_slot_count == 3
        assert settings.multiplier_min == Decimal("0")
        assert settings.multiplier_max == Decimal("9.99")
        assert settings.multiplier_step == Decimal("0.01")

    def test_multiplier_range_validation(self) -> None:
        """Test that multiplier_min must not exceed multiplier_max."""
        with pytest.raises(ConfigurationError) as exc_info:
            SheetSettings(multiplier_min=Decimal("5"), multiplier_max=Decimal("2"))

        assert "multiplier_min" in str(exc_info.value)

    def test_slot_count_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test slot count is read from its environment variable."""
        monkeypatch.setenv("APOLLYON_SHEET_MOTE_SLOT_COUNT", "5")

        assert SheetSettings().mote_slot_count == 5


class TestCatalogSettings:
    """Tests for CatalogSettings configuration."""

    def test_defaults_to_packaged_catalog(self) -> None:
        """Test no catalog path is set by default."""
        assert CatalogSettings().path is None

    def test_path_from_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test a catalog path is read from the environment."""
        target = tmp_path / "catalog.json"
        monkeypatch.setenv("APOLLYON_CATALOG_PATH", str(target))

        assert CatalogSettings().path == target


class TestUISettings:
    """Tests for UISettings configuration."""

    def test_default_values(self) -> None:
        """Test default UI settings."""
        settings = UISettings()

        assert settings.page_title == "Apollyon Character Sheet"
        assert settings.layout == "wide"


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self) -> None:
        """Test default settings initialization."""
        settings = Settings()

        assert settings.app_name == "Apollyon Character Sheet"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.json_logs is False
        assert settings.log_file is None
        assert settings.sheet.mote_slot_count == 3

    def test_env_override(self, mock_env_vars: dict[str, str]) -> None:
        """Test environment variable overrides."""
        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"
        assert settings.sheet.mote_slot_count == 4
        assert settings.ui.layout == "centered"


class TestGetSettings:
    """Tests for the get_settings singleton."""

    def test_singleton_behavior(self) -> None:
        """Test that get_settings returns the same instance."""
        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_cache_clear(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that clearing the cache reloads settings."""
        settings1 = get_settings()
        monkeypatch.setenv("APOLLYON_LOG_LEVEL", "ERROR")
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2
        assert settings2.log_level == "ERROR"

    def test_invalid_env_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test an invalid environment value surfaces as ConfigurationError."""
        monkeypatch.setenv("APOLLYON_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            get_settings()
