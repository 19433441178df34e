"""Tests for the sheet theme helpers."""

from __future__ import annotations

from apollyon_sheet.models.catalog import AbilityCatalog
from apollyon_sheet.ui.theme import MOTE_ACCENTS, mote_theme_css


class TestMoteThemeCss:
    """Tests for the per-mote CSS rules."""

    def test_rule_per_mote(self) -> None:
        """Test every accented mote gets its theme class."""
        css = mote_theme_css()

        for mote in MOTE_ACCENTS:
            assert f".mote-theme-{mote.lower()} " in css
        assert ".mote-theme-default " in css

    def test_accents_cover_catalog(self, packaged_catalog: AbilityCatalog) -> None:
        """Test every packaged mote has an accent colour."""
        assert set(MOTE_ACCENTS) == set(packaged_catalog.categories_sorted()[1:])
