"""Application service assembling the analytics summary."""
from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Callable

from company_dashboard.core import aggregates
from company_dashboard.core.query_compiler import CompiledQuery
from company_dashboard.core.schema import (
    AnalyticsSummary,
    CapitalStats,
    ClassCount,
    IndustryCount,
    StatusCount,
    YearCount,
)
from company_dashboard.infrastructure import CompanyRepository

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Runs the summary battery concurrently over the whole dataset."""

    def __init__(self, repository: CompanyRepository, *, today: Callable[[], date] = date.today) -> None:
        self._repository = repository
        self._today = today

    def _run(self, query: CompiledQuery) -> list[dict[str, Any]]:
        return self._repository.fetch_rows(query)

    async def summarize(self) -> AnalyticsSummary:
        queries = [
            aggregates.total_count(),
            aggregates.count_by_status(),
            aggregates.count_by_class(),
            aggregates.top_industries(),
            aggregates.capital_statistics(),
            aggregates.registration_trends(self._today()),
            aggregates.count_by_listing(),
        ]
        # the first failure propagates; no partial summary is ever built
        (
            total_rows,
            status_rows,
            class_rows,
            industry_rows,
            capital_rows,
            trend_rows,
            listing_rows,
        ) = await asyncio.gather(*(asyncio.to_thread(self._run, query) for query in queries))

        return AnalyticsSummary(
            total=int(total_rows[0]["total"]) if total_rows else 0,
            by_status=[StatusCount(status=row["status"], count=row["count"]) for row in status_rows],
            by_class=[ClassCount(company_class=row["class"], count=row["count"]) for row in class_rows],
            top_industries=[IndustryCount(industry=row["industry"], count=row["count"]) for row in industry_rows],
            capital=self._capital(capital_rows[0] if capital_rows else None),
            registration_trends=[YearCount(year=row["year"], count=row["count"]) for row in trend_rows],
            by_listing=[StatusCount(status=row["status"], count=row["count"]) for row in listing_rows],
        )

    @staticmethod
    def _capital(row: dict[str, Any] | None) -> CapitalStats | None:
        if not row or not (row["authorized_rows"] or row["paidup_rows"]):
            return None
        return CapitalStats(
            avg_authorized=row["avg_authorized"],
            max_authorized=row["max_authorized"],
            total_authorized=row["total_authorized"],
            avg_paidup=row["avg_paidup"],
            max_paidup=row["max_paidup"],
            total_paidup=row["total_paidup"],
        )
