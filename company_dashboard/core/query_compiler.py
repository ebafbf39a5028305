"""Compile a :class:`FilterSelection` into one parameterised SQL query.

Every active dimension becomes an OR-group and the groups are joined with
AND, so any combination of dimensions and values compiles to a single
statement.  Values are always bound as parameters; only column names and
operators from this module end up in the SQL text.

Pagination is keyset based: ``id > cursor`` with ``ORDER BY id``.  There is
no offset and no way to page backwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from company_dashboard.core.schema import COMPANY_COLUMNS
from company_dashboard.domain import FilterSelection

TABLE = "companies"
SELECT_COLUMNS = ", ".join(COMPANY_COLUMNS)
LIKE_ESCAPE = "\\"

# FilterSelection attribute -> SQL expression compared for equality
DIMENSION_COLUMNS: dict[str, str] = {
    "statuses": "company_status",
    "classes": "company_class",
    "years": "EXTRACT(YEAR FROM company_registration_date)",
    "industries": "company_industrial_classification",
    "state_codes": "company_state_code",
}
SEARCH_COLUMNS = ("company_name", "cin")


@dataclass(frozen=True, slots=True)
class Condition:
    sql: str
    params: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class AnyOf:
    conditions: tuple[Condition, ...]

    def render(self) -> tuple[str, list[Any]]:
        params: list[Any] = []
        parts: list[str] = []
        for condition in self.conditions:
            parts.append(condition.sql)
            params.extend(condition.params)
        if len(parts) == 1:
            return parts[0], params
        return "(" + " OR ".join(parts) + ")", params


@dataclass(frozen=True, slots=True)
class AllOf:
    groups: tuple[AnyOf, ...]

    def __bool__(self) -> bool:
        return bool(self.groups)

    def render(self) -> tuple[str, list[Any]]:
        params: list[Any] = []
        parts: list[str] = []
        for group in self.groups:
            sql, group_params = group.render()
            parts.append(sql)
            params.extend(group_params)
        return " AND ".join(parts), params


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    sql: str
    params: tuple[Any, ...] = ()


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user input only ever matches literally."""

    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def _equals_any(column: str, values: Sequence[Any]) -> AnyOf:
    return AnyOf(tuple(Condition(f"{column} = ?", (value,)) for value in values))


def _search_group(search: str) -> AnyOf:
    pattern = f"%{escape_like(search)}%"
    return AnyOf(
        tuple(
            Condition(f"{column} ILIKE ? ESCAPE '{LIKE_ESCAPE}'", (pattern,))
            for column in SEARCH_COLUMNS
        )
    )


def build_predicate(selection: FilterSelection) -> AllOf:
    groups: list[AnyOf] = []
    for attribute, column in DIMENSION_COLUMNS.items():
        values = getattr(selection, attribute)
        if values:
            groups.append(_equals_any(column, values))
    if selection.search:
        groups.append(_search_group(selection.search))
    return AllOf(tuple(groups))


def _where(predicate: AllOf, cursor: int = 0) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    if cursor > 0:
        clauses.append("id > ?")
        params.append(cursor)
    if predicate:
        sql, predicate_params = predicate.render()
        clauses.append(sql)
        params.extend(predicate_params)
    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params


def compile_page_query(selection: FilterSelection, cursor: int, limit: int) -> CompiledQuery:
    if cursor < 0:
        raise ValueError("cursor must be >= 0")
    if limit < 1:
        raise ValueError("limit must be >= 1")
    where, params = _where(build_predicate(selection), cursor)
    sql = f"SELECT {SELECT_COLUMNS} FROM {TABLE}{where} ORDER BY id LIMIT ?"
    params.append(limit)
    return CompiledQuery(sql, tuple(params))


def compile_count_query(selection: FilterSelection) -> CompiledQuery:
    where, params = _where(build_predicate(selection))
    return CompiledQuery(f"SELECT COUNT(*) AS total FROM {TABLE}{where}", tuple(params))


def compile_distinct_query(column: str, *, descending: bool = False) -> CompiledQuery:
    """Distinct non-null values of one dimension, used for the filter options."""

    direction = "DESC" if descending else "ASC"
    return CompiledQuery(
        f"SELECT DISTINCT {column} AS value FROM {TABLE} WHERE {column} IS NOT NULL ORDER BY value {direction}"
    )
