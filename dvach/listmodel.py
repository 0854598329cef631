from __future__ import annotations

from typing import Iterable, Optional

from dvach.errors import SelectionOutOfRange
from dvach.models import ListEntry


class FilterableList:
    """
    Immutable list of entries plus the subset matching the current filter.

    - The backing entries never change after construction.
    - `visible` is always recomputed from the backing entries, so clearing
      the filter brings back every entry in its original order.
    - `cursor` is the highlighted row of the visible subset.
    """

    def __init__(self, entries: Iterable[ListEntry]):
        self._entries: tuple[ListEntry, ...] = tuple(entries)
        self._visible: tuple[ListEntry, ...] = self._entries
        self._needle = ""
        self._cursor = 0

    @property
    def entries(self) -> tuple[ListEntry, ...]:
        return self._entries

    @property
    def visible(self) -> tuple[ListEntry, ...]:
        return self._visible

    @property
    def needle(self) -> str:
        return self._needle

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._visible)

    def set_filter(self, needle: str) -> None:
        """Keep entries whose label contains `needle`, ignoring case."""
        self._needle = needle
        if needle:
            folded = needle.casefold()
            self._visible = tuple(e for e in self._entries if folded in e.label.casefold())
        else:
            self._visible = self._entries
        self._cursor = self._clamp(self._cursor)

    def select(self, index: int) -> str:
        """
        Return the key at `index` of the visible subset.

        Raises:
            SelectionOutOfRange: if index is outside the visible subset
        """
        if not 0 <= index < len(self._visible):
            raise SelectionOutOfRange(index, len(self._visible))
        return self._visible[index].key

    def move(self, delta: int) -> None:
        self._cursor = self._clamp(self._cursor + delta)

    def selected_key(self) -> Optional[str]:
        if not self._visible:
            return None
        return self.select(self._cursor)

    def _clamp(self, index: int) -> int:
        return max(0, min(len(self._visible) - 1, index))
