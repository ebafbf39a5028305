"""Cursor driven infinite fetching of record pages.

States::

    idle -> fetching-first -> idle | error
    idle -> fetching-next  -> idle | error   (repeats until next_cursor is None)

Each request is tagged with the selection and generation it was issued
under.  Changing the committed selection bumps the generation, clears the
accumulated rows and starts again from cursor 0; any response that arrives
for an older generation is dropped.
"""
from __future__ import annotations

import logging
from typing import Protocol

import httpx

from company_dashboard.core.schema import CompanyRecord, RecordPage
from company_dashboard.domain import FilterSelection

from .http import DashboardClientError

logger = logging.getLogger(__name__)

IDLE = "idle"
FETCHING_FIRST = "fetching-first"
FETCHING_NEXT = "fetching-next"
ERROR = "error"

SCROLL_THRESHOLD = 0.7


class PageFetcher(Protocol):
    async def fetch_page(self, selection: FilterSelection, cursor: int, limit: int) -> RecordPage: ...


class InfinitePager:
    def __init__(self, fetcher: PageFetcher, *, limit: int = 100, threshold: float = SCROLL_THRESHOLD) -> None:
        self._fetcher = fetcher
        self.limit = limit
        self.threshold = threshold

        self.selection = FilterSelection()
        self.records: list[CompanyRecord] = []
        self.next_cursor: int | None = None
        self.total: int | None = None
        self.filtered_total: int | None = None
        self.status = IDLE
        self.error: Exception | None = None
        self.started = False

        self._generation = 0
        self._next_in_flight = False
        self._failed_cursor: int | None = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None

    @property
    def is_fetching_next(self) -> bool:
        return self._next_in_flight

    # ------------------------------------------------------------------
    # transitions
    # ------------------------------------------------------------------
    async def set_filters(self, selection: FilterSelection) -> bool:
        """Commit a selection; a changed one restarts pagination from cursor 0."""

        if self.started and selection == self.selection:
            return False
        self.selection = selection
        return await self.refresh()

    async def refresh(self) -> bool:
        self._generation += 1
        self.started = True
        self.records = []
        self.next_cursor = None
        self.total = None
        self.filtered_total = None
        self.error = None
        self._failed_cursor = None
        self._next_in_flight = False
        return await self._fetch(0)

    async def fetch_next(self) -> bool:
        """Fetch the page after ``next_cursor``; no-op while another is in flight."""

        if self._next_in_flight or self.status != IDLE or self.next_cursor is None:
            return False
        generation = self._generation
        self._next_in_flight = True
        try:
            return await self._fetch(self.next_cursor)
        finally:
            if generation == self._generation:
                self._next_in_flight = False

    async def on_scroll(self, scroll_top: float, client_height: float, scroll_height: float) -> bool:
        if not self.has_more or self._next_in_flight or self.status != IDLE:
            return False
        if scroll_top + client_height < scroll_height * self.threshold:
            return False
        return await self.fetch_next()

    async def retry(self) -> bool:
        """Repeat the fetch that failed; nothing is retried automatically."""

        if self.status != ERROR or self._failed_cursor is None:
            return False
        if self._failed_cursor == 0:
            return await self.refresh()
        self.status = IDLE
        self.error = None
        self.next_cursor = self._failed_cursor
        self._failed_cursor = None
        return await self.fetch_next()

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------
    def _is_current(self, generation: int, selection: FilterSelection) -> bool:
        return generation == self._generation and selection == self.selection

    async def _fetch(self, cursor: int) -> bool:
        generation = self._generation
        selection = self.selection
        self.status = FETCHING_FIRST if cursor == 0 else FETCHING_NEXT
        try:
            page = await self._fetcher.fetch_page(selection, cursor, self.limit)
        except (DashboardClientError, httpx.HTTPError) as exc:
            if not self._is_current(generation, selection):
                logger.debug("ignoring failure of a superseded request (cursor=%s)", cursor)
                return False
            logger.warning("record fetch failed at cursor=%s: %s", cursor, exc)
            self.status = ERROR
            self.error = exc
            self._failed_cursor = cursor
            return False

        if not self._is_current(generation, selection):
            logger.debug("discarding stale page for cursor=%s", cursor)
            return False
        if page.records and self.records and page.records[0].id <= self.records[-1].id:
            logger.warning("discarding out-of-order page for cursor=%s", cursor)
            self.status = IDLE
            return False

        if cursor == 0:
            self.total = page.total
            self.filtered_total = page.filtered_total
        self.records.extend(page.records)
        self.next_cursor = page.next_cursor
        self.status = IDLE
        return True
