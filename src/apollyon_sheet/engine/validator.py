"""Selection validation for the mote selectors.

Two advisory rules keep a sheet free of duplicate picks:

1. Category uniqueness: a non-empty category chosen in one slot is disabled
   in every other slot's category dropdown.
2. Ability uniqueness: within one slot, a non-empty ability chosen in one
   row is disabled in the slot's other rows. The second-to-last row of a
   slot is exempt, and so is any ability whose name contains "casting"
   (case-insensitive), in any row.

``validate`` is a pure function of the sheet. It never changes a
selection: duplicates that arrive through an import stay in place and are
only reported in ``SelectionConflicts.duplicates``.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import StrEnum

from apollyon_sheet.core.constants import REPEATABLE_ABILITY_MARKER
from apollyon_sheet.models.sheet import CharacterSheetState, MoteSlot


class ConflictKind(StrEnum):
    """What a duplicate selection collides on."""

    CATEGORY = "category"
    ABILITY = "ability"


@dataclass(frozen=True)
class DuplicateSelection:
    """A rule violation present in the sheet.

    Attributes:
        kind: Whether a category or an ability is duplicated.
        value: The duplicated category or ability name.
        slot_indexes: Slots involved (one slot for ability duplicates).
        row_indexes: Ability rows involved; empty for category duplicates.
    """

    kind: ConflictKind
    value: str
    slot_indexes: tuple[int, ...]
    row_indexes: tuple[int, ...] = ()


@dataclass(frozen=True)
class SelectionConflicts:
    """Options to disable, per slot and per ability row.

    Attributes:
        disabled_categories: For each slot, the categories its dropdown disables.
        disabled_abilities: For each slot, for each row, the abilities disabled.
        duplicates: Violations already present in the sheet.
    """

    disabled_categories: tuple[frozenset[str], ...] = ()
    disabled_abilities: tuple[tuple[frozenset[str], ...], ...] = ()
    duplicates: tuple[DuplicateSelection, ...] = ()

    @property
    def has_duplicates(self) -> bool:
        """Whether the sheet holds any rule violation."""
        return bool(self.duplicates)

    def is_category_disabled(self, slot_index: int, category: str) -> bool:
        """Check a category option of one slot's dropdown.

        The empty option is never disabled.
        """
        if not category or slot_index >= len(self.disabled_categories):
            return False
        return category in self.disabled_categories[slot_index]

    def is_ability_disabled(self, slot_index: int, row_index: int, ability: str) -> bool:
        """Check an ability option of one picker row.

        The empty option is never disabled.
        """
        if not ability or slot_index >= len(self.disabled_abilities):
            return False
        rows = self.disabled_abilities[slot_index]
        if row_index >= len(rows):
            return False
        return ability in rows[row_index]


def is_repeatable_ability(name: str) -> bool:
    """Whether an ability may be chosen in several rows of the same slot."""
    return REPEATABLE_ABILITY_MARKER in name.lower()


def _exempt_row(row_count: int) -> int:
    """Index of the second-to-last row, the one excused from rule 2."""
    return row_count - 2


def _disabled_categories(motes: list[MoteSlot]) -> tuple[frozenset[str], ...]:
    result = []
    for index, slot in enumerate(motes):
        taken_elsewhere = {
            other.category
            for other_index, other in enumerate(motes)
            if other_index != index and other.category
        }
        taken_elsewhere.discard(slot.category)
        result.append(frozenset(taken_elsewhere))
    return tuple(result)


def _disabled_abilities(slot: MoteSlot) -> tuple[frozenset[str], ...]:
    chosen = {row.ability for row in slot.abilities if row.ability}
    exempt = _exempt_row(len(slot.abilities))

    rows = []
    for row_index, row in enumerate(slot.abilities):
        if row_index == exempt:
            rows.append(frozenset())
            continue
        rows.append(
            frozenset(
                name
                for name in chosen
                if name != row.ability and not is_repeatable_ability(name)
            )
        )
    return tuple(rows)


def _category_duplicates(motes: list[MoteSlot]) -> list[DuplicateSelection]:
    counts = Counter(slot.category for slot in motes if slot.category)
    return [
        DuplicateSelection(
            kind=ConflictKind.CATEGORY,
            value=category,
            slot_indexes=tuple(i for i, slot in enumerate(motes) if slot.category == category),
        )
        for category, count in counts.items()
        if count > 1
    ]


def _ability_duplicates(slot_index: int, slot: MoteSlot) -> list[DuplicateSelection]:
    exempt = _exempt_row(len(slot.abilities))
    rows_by_ability: dict[str, list[int]] = {}
    for row_index, row in enumerate(slot.abilities):
        if row_index == exempt or not row.ability or is_repeatable_ability(row.ability):
            continue
        rows_by_ability.setdefault(row.ability, []).append(row_index)

    return [
        DuplicateSelection(
            kind=ConflictKind.ABILITY,
            value=ability,
            slot_indexes=(slot_index,),
            row_indexes=tuple(rows),
        )
        for ability, rows in rows_by_ability.items()
        if len(rows) > 1
    ]


def validate(state: CharacterSheetState) -> SelectionConflicts:
    """Compute the conflict set for a sheet.

    Args:
        state: The sheet to inspect. Not modified.

    Returns:
        The options to disable and any violations already present.
    """
    duplicates = _category_duplicates(state.motes)
    for slot_index, slot in enumerate(state.motes):
        duplicates.extend(_ability_duplicates(slot_index, slot))

    return SelectionConflicts(
        disabled_categories=_disabled_categories(state.motes),
        disabled_abilities=tuple(_disabled_abilities(slot) for slot in state.motes),
        duplicates=tuple(duplicates),
    )


__all__ = [
    "ConflictKind",
    "DuplicateSelection",
    "SelectionConflicts",
    "is_repeatable_ability",
    "validate",
]
