"""Derived attribute recalculation.

Pure rules mapping the core attribute totals and the player's adjustments
to every computed value on the sheet:

- core total = base + modifier + temporary + level bonus
- Max HP base = 6 x Grit total + 30
- BP base = 2 x Spirit total + 2
- AC base = 10 + Agility total
- Speed base = Speed total
- DR and Mana bases are entered by the player
- end = ceil((base + modifier + temporary) x multiplier)

The multiplier is applied with exact decimal arithmetic and the product is
always rounded toward positive infinity. Out-of-range multipliers are
computed as given.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import ROUND_CEILING, Decimal

from apollyon_sheet.core.constants import (
    AC_FLAT,
    BP_FLAT,
    BP_PER_SPIRIT,
    MAX_HP_FLAT,
    MAX_HP_PER_GRIT,
)
from apollyon_sheet.models.enums import CoreAttributeName, DerivedAttributeName
from apollyon_sheet.models.sheet import CharacterSheetState, CoreAttribute


BaseFormula = Callable[[int], int]

BASE_FORMULAS: dict[DerivedAttributeName, tuple[CoreAttributeName, BaseFormula]] = {
    DerivedAttributeName.MAX_HP: (
        CoreAttributeName.GRIT,
        lambda total: MAX_HP_PER_GRIT * total + MAX_HP_FLAT,
    ),
    DerivedAttributeName.BP: (
        CoreAttributeName.SPIRIT,
        lambda total: BP_PER_SPIRIT * total + BP_FLAT,
    ),
    DerivedAttributeName.AC: (
        CoreAttributeName.AGILITY,
        lambda total: AC_FLAT + total,
    ),
    DerivedAttributeName.SPEED: (
        CoreAttributeName.SPEED,
        lambda total: total,
    ),
}
"""Derived rows whose base is computed, keyed to the core row they read."""


def has_computed_base(name: DerivedAttributeName) -> bool:
    """Whether a derived row's base is read-only and formula-driven."""
    return name in BASE_FORMULAS


def core_total(attr: CoreAttribute) -> int:
    """Sum the four inputs of a core attribute row."""
    return attr.base + attr.modifier + attr.temporary + attr.level_bonus


def derived_end(base: int, modifier: int, temporary: int, multiplier: Decimal) -> int:
    """Compute the final value of a derived row.

    Args:
        base: Row base value.
        modifier: Permanent modifier.
        temporary: Temporary adjustment.
        multiplier: Scale applied to the sum.

    Returns:
        ceil((base + modifier + temporary) * multiplier).

    Example:
        >>> derived_end(10, 2, 0, Decimal("1.5"))
        18
        >>> derived_end(1, 0, 0, Decimal("0.01"))
        1
    """
    product = Decimal(base + modifier + temporary) * multiplier
    return int(product.to_integral_value(rounding=ROUND_CEILING))


def computed_base(name: DerivedAttributeName, state: CharacterSheetState) -> int | None:
    """Compute a derived row's base from the current core totals.

    Args:
        name: Derived attribute to compute.
        state: Sheet whose core totals are read. Totals must be current.

    Returns:
        The formula result, or None for rows the player enters directly.
    """
    entry = BASE_FORMULAS.get(name)
    if entry is None:
        return None
    source, formula = entry
    return formula(state.core_attribute(source).total)


def recalculate(state: CharacterSheetState) -> None:
    """Bring every derived value on the sheet up to date.

    Core totals are written first so that formula bases read fresh totals.

    Args:
        state: Sheet to update in place.
    """
    for attr in state.core:
        attr.total = core_total(attr)

    for attr in state.derived:
        base = computed_base(attr.name, state)
        if base is not None:
            attr.base = base
        attr.end = derived_end(attr.base, attr.modifier, attr.temporary, attr.multiplier)


__all__ = [
    "BASE_FORMULAS",
    "has_computed_base",
    "core_total",
    "derived_end",
    "computed_base",
    "recalculate",
]
