"""Export payload schema.

These models describe the portable text blob a player copies out of the
sheet and pastes back in later. Field names follow the wire format
(``mod``, ``temp``, ``masteryValue``...), numbers travel as strings, and
every field is optional so payloads written by older or newer sheets still
import.

Structure is validated strictly (a ``core`` that is not a list of objects is
rejected); scalar content is validated leniently (numbers are accepted where
text is expected and ``null`` reads as blank).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _coerce_text(value: Any) -> Any:
    """Accept JSON scalars where wire text is expected."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float | Decimal):
        return str(value)
    return value


def _coerce_list(value: Any) -> Any:
    """Read a null array as an empty one."""
    return [] if value is None else value


WireText = Annotated[str, BeforeValidator(_coerce_text)]


class WireModel(BaseModel):
    """Base class for payload records."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


# =============================================================================
# Attribute Rows
# =============================================================================


class CorePayload(WireModel):
    """Wire form of a core attribute row."""

    base: WireText = ""
    mod: WireText = ""
    temp: WireText = ""
    level: WireText = ""
    total: WireText = ""


class CalcPayload(WireModel):
    """Wire form of a derived attribute row."""

    base: WireText = ""
    mod: WireText = ""
    temp: WireText = ""
    mult: WireText = ""
    end: WireText = ""
    extra: WireText = ""


# =============================================================================
# Motes
# =============================================================================


class MoteAbilityPayload(WireModel):
    """Wire form of one ability picker row."""

    ability: WireText = ""
    desc: WireText = ""


class MotePayload(WireModel):
    """Wire form of a mote slot."""

    mote: WireText = ""
    abilities: Annotated[list[MoteAbilityPayload], BeforeValidator(_coerce_list)] = Field(
        default_factory=list
    )


# =============================================================================
# Collection Items
# =============================================================================


class NamedEntryPayload(WireModel):
    """Wire form of inventory, mind alteration and mind break entries."""

    name: WireText = ""
    desc: WireText = ""


class EnhancementPayload(WireModel):
    """Wire form of an enhancement."""

    name: WireText = ""
    cost: WireText = ""
    item: WireText = ""
    effect: WireText = ""


class MasteryPayload(WireModel):
    """Wire form of a mastery."""

    name: WireText = ""
    effect: WireText = ""


# =============================================================================
# Sheet
# =============================================================================


class SheetPayload(WireModel):
    """The complete export payload."""

    name: WireText = ""
    level: WireText = ""
    exp: WireText = ""
    race: WireText = ""

    core: Annotated[list[CorePayload], BeforeValidator(_coerce_list)] = Field(
        default_factory=list
    )
    calc: Annotated[list[CalcPayload], BeforeValidator(_coerce_list)] = Field(
        default_factory=list
    )
    inventory: Annotated[list[NamedEntryPayload], BeforeValidator(_coerce_list)] = Field(
        default_factory=list
    )
    motes: Annotated[list[MotePayload], BeforeValidator(_coerce_list)] = Field(
        default_factory=list
    )
    enhancements: Annotated[list[EnhancementPayload], BeforeValidator(_coerce_list)] = Field(
        default_factory=list
    )
    masteries: Annotated[list[MasteryPayload], BeforeValidator(_coerce_list)] = Field(
        default_factory=list
    )
    mastery_value: WireText = ""
    mind_alterations: Annotated[
        list[NamedEntryPayload], BeforeValidator(_coerce_list)
    ] = Field(default_factory=list)
    mind_breaks: Annotated[list[NamedEntryPayload], BeforeValidator(_coerce_list)] = Field(
        default_factory=list
    )


__all__ = [
    "WireText",
    "CorePayload",
    "CalcPayload",
    "MoteAbilityPayload",
    "MotePayload",
    "NamedEntryPayload",
    "EnhancementPayload",
    "MasteryPayload",
    "SheetPayload",
]
