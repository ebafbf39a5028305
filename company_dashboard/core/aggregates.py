"""The fixed battery of summary queries behind the analytics page.

Each query reads the whole ``companies`` table; filters and pagination never
apply here.
"""

from __future__ import annotations

from datetime import date

from company_dashboard.core.config import TOP_N, TREND_YEARS
from company_dashboard.core.query_compiler import TABLE, CompiledQuery


def _shift_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def total_count() -> CompiledQuery:
    return CompiledQuery(f"SELECT COUNT(*) AS total FROM {TABLE}")


def count_by_status(top_n: int = TOP_N) -> CompiledQuery:
    return CompiledQuery(
        f'SELECT company_status AS status, COUNT(*) AS "count" FROM {TABLE} '
        'GROUP BY company_status ORDER BY "count" DESC, status LIMIT ?',
        (top_n,),
    )


def count_by_class() -> CompiledQuery:
    return CompiledQuery(
        f'SELECT company_class AS "class", COUNT(*) AS "count" FROM {TABLE} '
        'GROUP BY company_class ORDER BY "count" DESC, "class"'
    )


def top_industries(top_n: int = TOP_N) -> CompiledQuery:
    return CompiledQuery(
        f'SELECT company_industrial_classification AS industry, COUNT(*) AS "count" FROM {TABLE} '
        'GROUP BY company_industrial_classification ORDER BY "count" DESC, industry LIMIT ?',
        (top_n,),
    )


def capital_statistics() -> CompiledQuery:
    # aggregate functions skip NULL capital values
    return CompiledQuery(
        "SELECT "
        "COUNT(authorized_capital) AS authorized_rows, "
        "COUNT(paidup_capital) AS paidup_rows, "
        "ROUND(AVG(authorized_capital), 2) AS avg_authorized, "
        "ROUND(MAX(authorized_capital), 2) AS max_authorized, "
        "ROUND(SUM(authorized_capital), 2) AS total_authorized, "
        "ROUND(AVG(paidup_capital), 2) AS avg_paidup, "
        "ROUND(MAX(paidup_capital), 2) AS max_paidup, "
        f"ROUND(SUM(paidup_capital), 2) AS total_paidup FROM {TABLE}"
    )


def registration_trends(today: date, years: int = TREND_YEARS) -> CompiledQuery:
    return CompiledQuery(
        'SELECT CAST(EXTRACT(YEAR FROM company_registration_date) AS INTEGER) AS "year", COUNT(*) AS "count" '
        f"FROM {TABLE} "
        "WHERE company_registration_date IS NOT NULL AND company_registration_date >= ? "
        'GROUP BY "year" ORDER BY "year"',
        (_shift_years(today, years),),
    )


def count_by_listing() -> CompiledQuery:
    return CompiledQuery(
        f'SELECT listing_status AS status, COUNT(*) AS "count" FROM {TABLE} '
        'GROUP BY listing_status ORDER BY "count" DESC, status'
    )
