"""Application-wide constants for the Apollyon character sheet.

This module defines the fixed rules constants of the sheet: slot counts,
multiplier input bounds, and the derived attribute formula coefficients.
"""

from __future__ import annotations

from decimal import Decimal

# =============================================================================
# Sheet Layout
# =============================================================================

DEFAULT_MOTE_SLOT_COUNT = 3
"""Number of mote selector slots on a sheet."""

COLLECTION_FLOOR = 1
"""Rows every collection and every mote slot keeps at minimum."""

# =============================================================================
# Multiplier Input Constraints
# =============================================================================

MULTIPLIER_DEFAULT = Decimal("1")
"""Multiplier applied when none is entered."""

MULTIPLIER_MIN = Decimal("0")
"""Lowest multiplier offered by the input widgets."""

MULTIPLIER_MAX = Decimal("9.99")
"""Highest multiplier offered by the input widgets."""

MULTIPLIER_STEP = Decimal("0.01")
"""Multiplier input granularity."""

# =============================================================================
# Derived Attribute Formulas
# =============================================================================

MAX_HP_PER_GRIT = 6
"""Max HP gained per point of Grit total."""

MAX_HP_FLAT = 30
"""Max HP every character starts with."""

BP_PER_SPIRIT = 2
"""Boost Points gained per point of Spirit total."""

BP_FLAT = 2
"""Boost Points every character starts with."""

AC_FLAT = 10
"""Armor class before Agility is added."""

# =============================================================================
# Selection Rules
# =============================================================================

REPEATABLE_ABILITY_MARKER = "casting"
"""Abilities whose name contains this (any case) may be chosen repeatedly."""

# =============================================================================
# Presentation
# =============================================================================

DEFAULT_THEME_CLASS = "mote-theme-default"
"""Theme class of a mote column with no category chosen."""

THEME_CLASS_PREFIX = "mote-theme-"
"""Prefix of the per-category theme class."""

# =============================================================================
# Imported Numbers
# =============================================================================

NUMBER_MAX_EXPONENT = 15
"""Largest decimal exponent accepted for a number read from text (below 1e16)."""
