"""
Album slot placement.

Catalog ids are laid out in order: id 1 in binder 1, page 1, slot 1, then
filling each page, each binder, and moving on to the next binder. All
arithmetic is zero-based internally and one-based in results.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from binderdex.config import AlbumConfig
from binderdex.exceptions import InputRangeError, UnknownNameError
from binderdex.matching.normalize import normalize_text
from binderdex.models import Language, LookupResult, PlacementResult

if TYPE_CHECKING:
    from binderdex.catalog import CatalogIndex

logger = logging.getLogger(__name__)

NUMBER_QUERY = re.compile(r"[+-]?[0-9]+")


def format_name(name: str | None) -> str:
    """Capitalize the first character of a display name."""
    if not name:
        return ""
    return name[0].upper() + name[1:]


class SlotPlacer:
    """
    Map catalog ids to (binder, page, slot) addresses and back.

    Example:
        >>> placer = SlotPlacer()
        >>> placer.locate(25)
        PlacementResult(binder_index=1, page_index=3, slot_on_page=7, slot_in_binder=25)
        >>> placer.id_at(1, 3, 7)
        25
    """

    def __init__(self, album: AlbumConfig | None = None) -> None:
        self.album = album or AlbumConfig()

    def locate(self, entry_id: int) -> PlacementResult:
        """
        Place a catalog id in the album.

        Raises:
            InputRangeError: If the id is outside 1..max_id.
        """
        max_id = self.album.max_id
        valid = isinstance(entry_id, int) and not isinstance(entry_id, bool)
        if not valid or not 1 <= entry_id <= max_id:
            raise InputRangeError(
                f"Catalog number must be between 1 and {max_id}, got {entry_id!r}"
            )

        slots_per_page = self.album.slots_per_page
        slots_per_binder = self.album.slots_per_binder

        zero_based = entry_id - 1
        binder_index = zero_based // slots_per_binder + 1
        position_in_binder = zero_based % slots_per_binder

        return PlacementResult(
            binder_index=binder_index,
            page_index=position_in_binder // slots_per_page + 1,
            slot_on_page=position_in_binder % slots_per_page + 1,
            slot_in_binder=position_in_binder + 1,
        )

    def id_at(self, binder_index: int, page_index: int, slot_on_page: int) -> int | None:
        """
        Catalog id stored at an album position.

        Returns:
            The id, or None for a valid position past the end of the catalog.

        Raises:
            InputRangeError: If the position is outside the album geometry.
        """
        album = self.album
        self._check_position("binder", binder_index, album.binder_count)
        self._check_position("page", page_index, album.pages_per_binder)
        self._check_position("slot", slot_on_page, album.slots_per_page)

        zero_based = (
            (binder_index - 1) * album.slots_per_binder
            + (page_index - 1) * album.slots_per_page
            + (slot_on_page - 1)
        )
        entry_id = zero_based + 1
        return entry_id if entry_id <= album.max_id else None

    def page_ids(self, binder_index: int, page_index: int) -> list[int | None]:
        """Ids for every slot of one page, in slot order."""
        return [
            self.id_at(binder_index, page_index, slot)
            for slot in range(1, self.album.slots_per_page + 1)
        ]

    def lookup(
        self,
        query: str,
        index: CatalogIndex,
        language: Language | None = None,
    ) -> LookupResult:
        """
        Resolve a catalog number or exact name and place it.

        Numbers are tried first and work without any names loaded.

        Args:
            query: "25" or "Pikachu".
            index: Catalog to resolve names against.
            language: Name language; defaults to the catalog default.

        Raises:
            UnknownNameError: Empty query or unknown name.
            InputRangeError: Number outside the catalog range.
        """
        trimmed = query.strip()
        if not trimmed:
            raise UnknownNameError("Please enter a name or catalog number")

        if NUMBER_QUERY.fullmatch(trimmed):
            entry_id = int(trimmed)
            placement = self.locate(entry_id)
            return LookupResult(
                id=entry_id,
                display_name=index.display_name(entry_id, language),
                placement=placement,
            )

        table = index.table_for(language or index.default_language)
        key = normalize_text(trimmed, table.language)
        entry_id = table.get(key)
        if entry_id is None:
            logger.debug("Lookup miss for %r in %s table", key, table.language.value)
            raise UnknownNameError(f"I don't recognize {trimmed!r}")

        return LookupResult(
            id=entry_id,
            display_name=format_name(table.display_name(key)),
            placement=self.locate(entry_id),
        )

    @staticmethod
    def _check_position(label: str, value: int, upper: int) -> None:
        if not 1 <= value <= upper:
            raise InputRangeError(f"{label} must be between 1 and {upper}, got {value}")


_default_placer = SlotPlacer()


def locate(entry_id: int) -> PlacementResult:
    """Place an id using the default album geometry."""
    return _default_placer.locate(entry_id)
