"""Client-side state of the records page: filters, paging and the visible window."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from company_dashboard.core.schema import CompanyRecord
from company_dashboard.domain import FilterSelection

from .debounce import DEFAULT_DELAY, Debouncer
from .pager import InfinitePager, PageFetcher
from .virtual import DEFAULT_OVERSCAN, DEFAULT_ROW_HEIGHT, LoadingRow, compute_window, materialize


class RecordBrowser:
    """Wires the draft filters, the search debouncer and the pager together.

    ``filters`` holds what the user has picked, including the search text as
    typed.  Only the debounced search takes part in a fetch, so the selection
    handed to the pager is ``filters`` with the committed search swapped in.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        *,
        limit: int = 100,
        debounce: float = DEFAULT_DELAY,
        row_height: int = DEFAULT_ROW_HEIGHT,
        overscan: int = DEFAULT_OVERSCAN,
    ) -> None:
        self.pager = InfinitePager(fetcher, limit=limit)
        self.filters = FilterSelection()
        self.committed_search = ""
        self.row_height = row_height
        self.overscan = overscan
        self._debouncer: Debouncer[str] = Debouncer(self._commit_search, delay=debounce)

    @property
    def committed(self) -> FilterSelection:
        return self.filters.with_search(self.committed_search)

    @property
    def records(self) -> list[CompanyRecord]:
        return self.pager.records

    async def start(self) -> None:
        await self.pager.set_filters(self.committed)

    # ------------------------------------------------------------------
    # filter input
    # ------------------------------------------------------------------
    def type_search(self, text: str) -> None:
        self.filters = replace(self.filters, search=text)
        self._debouncer.push(text)

    async def settle(self) -> None:
        """Wait until a pending search keystroke has been committed."""

        await self._debouncer.drain()

    async def _commit_search(self, text: str) -> None:
        self.committed_search = text.strip()
        await self.pager.set_filters(self.committed)

    async def select(self, dimension: str, values: Iterable[object]) -> None:
        self.filters = self.filters.with_values(dimension, values)
        await self.pager.set_filters(self.committed)

    async def clear_filters(self) -> None:
        self._debouncer.cancel()
        self.filters = FilterSelection()
        self.committed_search = ""
        await self.pager.set_filters(self.committed)

    # ------------------------------------------------------------------
    # scrolling & rendering
    # ------------------------------------------------------------------
    async def scroll(self, scroll_top: float, client_height: float, scroll_height: float) -> bool:
        return await self.pager.on_scroll(scroll_top, client_height, scroll_height)

    def visible_rows(self, scroll_offset: int, viewport_height: int) -> list[tuple[int, CompanyRecord | LoadingRow]]:
        window = compute_window(
            len(self.pager.records),
            int(scroll_offset),
            int(viewport_height),
            self.row_height,
            self.overscan,
            self.pager.is_fetching_next and self.pager.has_more,
        )
        return materialize(self.pager.records, window)

    def summary(self) -> dict[str, object]:
        """Count badge text and the number of active filter values."""

        total = self.pager.total or 0
        committed = self.committed
        if committed.is_empty:
            label = f"{total:,}"
        else:
            label = f"{self.pager.filtered_total or 0:,} of {total:,}"
        return {
            "label": label,
            "total": total,
            "filtered_total": self.pager.filtered_total,
            "active_filters": committed.active_count,
            "loaded": len(self.pager.records),
            "status": self.pager.status,
        }
