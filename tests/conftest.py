"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Apollyon character sheet test suite.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from apollyon_sheet.engine.editor import CharacterSheetEditor
    from apollyon_sheet.models.catalog import AbilityCatalog


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from apollyon_sheet.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "APOLLYON_DEBUG": "true",
        "APOLLYON_LOG_LEVEL": "DEBUG",
        "APOLLYON_SHEET_MOTE_SLOT_COUNT": "4",
        "APOLLYON_UI_LAYOUT": "centered",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def small_catalog_records() -> list[dict[str, Any]]:
    """Provide a two-mote catalog in the source JSON format.

    Returns:
        List of ability objects.
    """
    return [
        {
            "mote": "Shrail",
            "name": "I Hit Back",
            "desc": "Retaliate when struck.",
            "details": "After taking melee damage, make one attack against the attacker.",
        },
        {
            "mote": "Shrail",
            "name": "Vitality of Rage",
            "desc": "Gain HP while raging.",
            "details": "",
        },
        {
            "mote": "Shrail",
            "name": "Fury Casting",
            "desc": "Cast through fury.",
            "details": "Use Strength as the casting stat for Shrail spells.",
        },
        {
            "mote": "Numo",
            "name": "Tide Step",
            "desc": "Move with the water.",
            "details": "",
        },
        {
            "mote": "Numo",
            "name": "Numo Casting",
            "desc": "Cast through the tide.",
            "details": "",
        },
    ]


@pytest.fixture
def small_catalog(small_catalog_records: list[dict[str, Any]]) -> AbilityCatalog:
    """Provide a small in-memory ability catalog."""
    from apollyon_sheet.models.catalog import parse_catalog

    return parse_catalog(json.dumps(small_catalog_records), source="test")


@pytest.fixture(scope="session")
def packaged_catalog() -> AbilityCatalog:
    """Provide the ability catalog shipped with the package."""
    from apollyon_sheet.models.catalog import load_catalog

    return load_catalog()


# =============================================================================
# Editor Fixtures
# =============================================================================


@pytest.fixture
def editor(small_catalog: AbilityCatalog) -> CharacterSheetEditor:
    """Provide an editor over a blank sheet and the small catalog."""
    from apollyon_sheet.engine.editor import CharacterSheetEditor

    return CharacterSheetEditor(small_catalog)


@pytest.fixture
def full_editor(packaged_catalog: AbilityCatalog) -> CharacterSheetEditor:
    """Provide an editor over a blank sheet and the packaged catalog."""
    from apollyon_sheet.engine.editor import CharacterSheetEditor

    return CharacterSheetEditor(packaged_catalog)
