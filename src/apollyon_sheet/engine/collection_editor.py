"""Variable-length list editors.

Inventory, enhancements, masteries, mind alterations and mind breaks all
share one contract: items can be appended and removed, never reordered,
and a collection always keeps at least one item.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from pydantic import BaseModel

from apollyon_sheet.core.constants import COLLECTION_FLOOR
from apollyon_sheet.core.logging import get_logger
from apollyon_sheet.models.enums import CollectionKind
from apollyon_sheet.models.sheet import COLLECTION_ITEM_TYPES, CharacterSheetState


logger = get_logger(__name__)

ItemT = TypeVar("ItemT", bound=BaseModel)


class CollectionEditor(Generic[ItemT]):
    """Add/remove editor over a live list on the sheet.

    Attributes:
        kind: Which collection this editor manages.
    """

    def __init__(
        self,
        kind: CollectionKind,
        items: list[ItemT],
        factory: Callable[[], ItemT],
    ) -> None:
        """Wrap a collection list.

        Args:
            kind: Which collection the list holds.
            items: The list stored on the sheet; edited in place.
            factory: Creates a blank item.
        """
        self.kind = kind
        self._items = items
        self._factory = factory

    @classmethod
    def for_sheet(cls, state: CharacterSheetState, kind: CollectionKind) -> "CollectionEditor":
        """Build the editor for one of a sheet's collections."""
        return cls(kind, state.collection(kind), COLLECTION_ITEM_TYPES[kind])

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> tuple[ItemT, ...]:
        """Snapshot of the current items in order."""
        return tuple(self._items)

    @property
    def can_remove(self) -> bool:
        """Whether the delete affordance should be offered."""
        return len(self._items) > COLLECTION_FLOOR

    def add(self) -> ItemT:
        """Append a blank item.

        Returns:
            The new item.
        """
        item = self._factory()
        self._items.append(item)
        return item

    def remove_at(self, index: int) -> bool:
        """Remove the item at a position.

        Returns:
            True if removed; False at the floor or for an index out of range.
        """
        if not 0 <= index < len(self._items):
            return False
        if not self.can_remove:
            logger.debug("Refused to remove last item", collection=self.kind.value)
            return False
        del self._items[index]
        return True

    def remove(self, item: ItemT) -> bool:
        """Remove a specific item object.

        Items are matched by identity, so two blank rows are never confused.

        Returns:
            True if removed; False at the floor or when the item is not present.
        """
        for index, candidate in enumerate(self._items):
            if candidate is item:
                return self.remove_at(index)
        return False


__all__ = ["CollectionEditor"]
