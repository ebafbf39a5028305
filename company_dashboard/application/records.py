"""Application service for the paginated record table."""
from __future__ import annotations

import asyncio
import logging

from company_dashboard.core.name_normalize import title_case
from company_dashboard.core.query_compiler import (
    DIMENSION_COLUMNS,
    compile_count_query,
    compile_distinct_query,
    compile_page_query,
)
from company_dashboard.core.schema import CompanyRecord, FilterOptionModel, FilterOptionsModel, RecordPage
from company_dashboard.domain import FilterOption, FilterSelection
from company_dashboard.infrastructure import CompanyRepository

logger = logging.getLogger(__name__)


class RecordService:
    """Serves keyset-paginated, filter-aware pages of company records."""

    def __init__(self, repository: CompanyRepository) -> None:
        self._repository = repository

    # ------------------------------------------------------------------
    # pages
    # ------------------------------------------------------------------
    def list_page(self, selection: FilterSelection, cursor: int, limit: int) -> RecordPage:
        query = compile_page_query(selection, cursor, limit)
        rows = self._repository.fetch_rows(query)
        records = [CompanyRecord(**row) for row in rows]

        # a full page implies more rows may follow
        next_cursor = records[-1].id if records and len(records) == limit else None
        page = RecordPage(records=records, next_cursor=next_cursor)

        if cursor == 0:
            total = int(self._repository.fetch_value(compile_count_query(FilterSelection())) or 0)
            if selection.is_empty:
                filtered_total = total
            else:
                filtered_total = int(self._repository.fetch_value(compile_count_query(selection)) or 0)
            page.total = total
            page.filtered_total = filtered_total

        logger.debug(
            "records page cursor=%s limit=%s filters=%s -> %s rows, next=%s",
            cursor,
            limit,
            selection.active_count,
            len(records),
            next_cursor,
        )
        return page

    async def list_page_async(self, selection: FilterSelection, cursor: int, limit: int) -> RecordPage:
        return await asyncio.to_thread(self.list_page, selection, cursor, limit)

    # ------------------------------------------------------------------
    # filter options
    # ------------------------------------------------------------------
    def _distinct(self, attribute: str, *, descending: bool = False) -> list[str]:
        column = DIMENSION_COLUMNS[attribute]
        if attribute == "years":
            column = f"CAST({column} AS INTEGER)"
        rows = self._repository.fetch_rows(compile_distinct_query(column, descending=descending))
        return [str(row["value"]) for row in rows]

    def filter_options(self) -> dict[str, list[FilterOption]]:
        return {
            "statuses": [FilterOption(value) for value in self._distinct("statuses")],
            "classes": [FilterOption(value) for value in self._distinct("classes")],
            "years": [FilterOption(value) for value in self._distinct("years", descending=True)],
            "industries": [FilterOption(value) for value in self._distinct("industries")],
            "stateCodes": [FilterOption(value, title_case(value)) for value in self._distinct("state_codes")],
        }

    async def filter_options_async(self) -> FilterOptionsModel:
        options = await asyncio.to_thread(self.filter_options)
        return FilterOptionsModel(
            **{
                name: [FilterOptionModel(value=option.value, label=option.label) for option in values]
                for name, values in options.items()
            }
        )
