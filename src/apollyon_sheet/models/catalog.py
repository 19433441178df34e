"""Ability catalog for the mote selectors.

The catalog maps each mote (ability category) to its ordered list of
ability records. It is built once at application start from an external
JSON source and is read-only afterwards; components that need lookups get
the catalog object passed in explicitly.

Source format (one object per ability, in display order):

    [{"mote": "Shrail", "name": "I Hit Back", "desc": "...", "details": "..."}]

Example:
    >>> catalog = load_catalog()
    >>> catalog.categories_sorted()[:2]
    ('', 'Anavani')
    >>> catalog.abilities_for("Shrail")[0].name
    'I Hit Back'
"""

from __future__ import annotations

from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from apollyon_sheet.core.exceptions import CatalogError
from apollyon_sheet.core.logging import get_logger


logger = get_logger(__name__)

PACKAGED_CATALOG = "abilities.json"


class AbilityRecord(BaseModel):
    """An immutable catalog entry.

    Attributes:
        category: Mote the ability belongs to.
        name: Ability name, unique within its category.
        short_description: One-line summary shown by default.
        long_description: Full rules text shown on request.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    category: str = Field(alias="mote")
    name: str
    short_description: str = Field(default="", alias="desc")
    long_description: str = Field(default="", alias="details")


EMPTY_ABILITY = AbilityRecord(category="", name="", short_description="", long_description="")
"""The single option offered while no category is chosen."""

_RECORDS_ADAPTER = TypeAdapter(list[AbilityRecord])


class AbilityCatalog:
    """Read-only lookup from category name to its ordered ability records."""

    def __init__(self, records: Iterable[AbilityRecord]) -> None:
        """Build the catalog.

        Args:
            records: Ability records in source order. Records of the same
                category keep their relative order.
        """
        grouped: dict[str, list[AbilityRecord]] = {}
        for record in records:
            if not record.category:
                continue
            grouped.setdefault(record.category, []).append(record)

        self._by_category = MappingProxyType(
            {category: tuple(items) for category, items in grouped.items()}
        )
        self._categories = ("", *sorted(self._by_category))

    def __len__(self) -> int:
        return sum(len(items) for items in self._by_category.values())

    def categories_sorted(self) -> tuple[str, ...]:
        """All category names in ascending order, preceded by the empty option."""
        return self._categories

    def has_category(self, category: str) -> bool:
        """Check whether a category exists in the catalog."""
        return category in self._by_category

    def abilities_for(self, category: str) -> tuple[AbilityRecord, ...]:
        """Get the option list for a category.

        Args:
            category: Category name; may be empty or unknown.

        Returns:
            The category's records in source order, or a one-element tuple
            holding EMPTY_ABILITY when the category is unset or unknown.
        """
        return self._by_category.get(category, (EMPTY_ABILITY,))

    def find(self, category: str, name: str) -> AbilityRecord | None:
        """Look up one ability by name within a category.

        Args:
            category: Category to search.
            name: Ability name.

        Returns:
            The record, or None when the category does not offer it.
        """
        for record in self.abilities_for(category):
            if record.name == name:
                return record
        return None


def parse_catalog(text: str | bytes, *, source: str | None = None) -> AbilityCatalog:
    """Build a catalog from the JSON source format.

    Args:
        text: JSON array of ability objects.
        source: Where the text came from, for error context.

    Returns:
        The constructed AbilityCatalog.

    Raises:
        CatalogError: If the text is not a JSON array of ability objects.
    """
    try:
        records = _RECORDS_ADAPTER.validate_json(text)
    except PydanticValidationError as exc:
        raise CatalogError(
            "Ability catalog is malformed",
            source_file=source,
            details={"errors": exc.error_count()},
        ) from exc
    return AbilityCatalog(records)


def load_catalog(path: Path | str | None = None) -> AbilityCatalog:
    """Load the ability catalog.

    Args:
        path: Catalog JSON file. Defaults to the catalog shipped with the package.

    Returns:
        The loaded AbilityCatalog.

    Raises:
        CatalogError: If the file cannot be read or parsed.
    """
    if path is None:
        source = resources.files("apollyon_sheet") / "data" / PACKAGED_CATALOG
        source_name = f"apollyon_sheet/data/{PACKAGED_CATALOG}"
    else:
        source = Path(path)
        source_name = str(source)

    try:
        text = source.read_bytes()
    except OSError as exc:
        raise CatalogError(
            f"Cannot read ability catalog: {exc}",
            source_file=source_name,
        ) from exc

    catalog = parse_catalog(text, source=source_name)
    logger.info(
        "Ability catalog loaded",
        source=source_name,
        categories=len(catalog.categories_sorted()) - 1,
        abilities=len(catalog),
    )
    return catalog


__all__ = [
    "AbilityRecord",
    "AbilityCatalog",
    "EMPTY_ABILITY",
    "parse_catalog",
    "load_catalog",
]
