"""Apollyon Theme - dark sheet styling with per-mote accents.

Each mote column is wrapped in a ``mote-theme-<name>`` class so that the
column header and its ability cards pick up the mote's accent colour.
"""

from __future__ import annotations

import html

import streamlit as st

from apollyon_sheet.core.constants import DEFAULT_THEME_CLASS
from apollyon_sheet.engine.motes import theme_class_for


# =============================================================================
# Color Palette
# =============================================================================


class Colors:
    """Sheet color palette."""

    # Accent
    CYAN = "#22D3EE"
    CYAN_DARK = "#0891B2"

    # Backgrounds
    BG_DARK = "#0B1120"
    BG_CARD = "#111827"
    BG_ELEVATED = "#1F2937"

    # Text
    TEXT_PRIMARY = "#F9FAFB"
    TEXT_SECONDARY = "#9CA3AF"
    TEXT_MUTED = "#6B7280"

    # Borders
    BORDER = "#374151"

    # Status
    SUCCESS = "#22C55E"
    WARNING = "#F59E0B"
    ERROR = "#EF4444"


MOTE_ACCENTS: dict[str, str] = {
    "Anavani": "#A78BFA",
    "Dawel": "#FBBF24",
    "Etill": "#34D399",
    "Grisha": "#94A3B8",
    "Isheilah": "#F472B6",
    "Kative": "#60A5FA",
    "Lichor": "#4ADE80",
    "Morae": "#818CF8",
    "Numo": "#2DD4BF",
    "Pelian": "#FB923C",
    "Shrail": "#F87171",
    "Ursa": "#A3E635",
}
"""Accent colour per mote; unknown motes use the default theme."""


# =============================================================================
# CSS
# =============================================================================


THEME_CSS = """
<style>
    :root {
        --bg-dark: #0B1120;
        --bg-card: #111827;
        --bg-elevated: #1F2937;
        --text-primary: #F9FAFB;
        --text-secondary: #9CA3AF;
        --accent: #22D3EE;
        --border: #374151;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    .stDeployButton {display: none;}

    .main .block-container {
        padding: 1.5rem 2rem;
        color: var(--text-primary);
    }

    h1 {
        border-bottom: 2px solid var(--accent);
        padding-bottom: 0.5rem;
    }

    .sheet-section-title {
        font-size: 0.8rem;
        font-weight: 600;
        letter-spacing: 0.08em;
        text-transform: uppercase;
        color: var(--text-secondary);
        margin: 0.75rem 0 0.25rem 0;
    }

    .mote-column {
        border-radius: 8px;
        border: 1px solid var(--border);
        border-top: 4px solid var(--mote-accent, var(--accent));
        background: var(--bg-card);
        padding: 0.5rem 0.75rem;
        margin-bottom: 0.5rem;
        font-weight: 600;
        color: var(--mote-accent, var(--text-primary));
    }

    .mote-ability-text {
        font-size: 0.85rem;
        color: var(--text-primary);
        background: var(--bg-elevated);
        border-left: 3px solid var(--mote-accent, var(--border));
        border-radius: 4px;
        padding: 0.4rem 0.6rem;
        white-space: pre-wrap;
    }

    .sheet-derived-end {
        font-weight: 700;
        font-size: 1.1rem;
        color: var(--accent);
    }
</style>
"""


def mote_theme_css() -> str:
    """Build the per-mote accent rules."""
    rules = [f".{DEFAULT_THEME_CLASS} {{ --mote-accent: {Colors.TEXT_SECONDARY}; }}"]
    for mote, accent in MOTE_ACCENTS.items():
        rules.append(f".{theme_class_for(mote)} {{ --mote-accent: {accent}; }}")
    return "<style>\n" + "\n".join(rules) + "\n</style>"


def apply_theme() -> None:
    """Apply the sheet theme to the current page."""
    st.markdown(THEME_CSS, unsafe_allow_html=True)
    st.markdown(mote_theme_css(), unsafe_allow_html=True)


# =============================================================================
# Components
# =============================================================================


def render_section_title(title: str) -> None:
    """Render a small uppercase section label."""
    st.markdown(
        f'<div class="sheet-section-title">{html.escape(title)}</div>',
        unsafe_allow_html=True,
    )


def render_mote_header(category: str, slot_index: int) -> None:
    """Render the themed banner at the top of a mote column.

    Args:
        category: Selected category, "" when unset.
        slot_index: Zero-based slot position.
    """
    label = category or f"Mote {slot_index + 1}"
    st.markdown(
        f'<div class="mote-column {theme_class_for(category)}">{html.escape(label)}</div>',
        unsafe_allow_html=True,
    )


def render_ability_text(category: str, text: str) -> None:
    """Render a read-only ability description box in the mote's colours."""
    body = html.escape(text) if text else "&nbsp;"
    st.markdown(
        f'<div class="{theme_class_for(category)}">'
        f'<div class="mote-ability-text">{body}</div></div>',
        unsafe_allow_html=True,
    )


def render_derived_end(value: int) -> None:
    """Render a derived attribute's final value."""
    st.markdown(f'<div class="sheet-derived-end">{value}</div>', unsafe_allow_html=True)


__all__ = [
    "Colors",
    "MOTE_ACCENTS",
    "THEME_CSS",
    "apply_theme",
    "mote_theme_css",
    "render_ability_text",
    "render_derived_end",
    "render_mote_header",
    "render_section_title",
]
