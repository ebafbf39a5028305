"""Infrastructure layer for the company record store."""
from __future__ import annotations

import threading
from typing import Any, Protocol

import duckdb
import pandas as pd

from company_dashboard.core.csvio import DATE_COLUMNS, NUMERIC_COLUMNS, prepare_companies
from company_dashboard.core.errors import UpstreamQueryFailure
from company_dashboard.core.query_compiler import TABLE, CompiledQuery
from company_dashboard.core.schema import COMPANY_COLUMNS

SCHEMA_DDL = f"""
CREATE TABLE IF NOT EXISTS {TABLE} (
    id BIGINT PRIMARY KEY,
    cin VARCHAR NOT NULL,
    company_name VARCHAR,
    company_roc_code VARCHAR,
    company_category VARCHAR,
    company_sub_category VARCHAR,
    company_class VARCHAR,
    authorized_capital DOUBLE,
    paidup_capital DOUBLE,
    company_registration_date DATE,
    registered_office_address VARCHAR,
    listing_status VARCHAR,
    company_status VARCHAR,
    company_state_code VARCHAR,
    company_indian_foreign VARCHAR,
    nic_code VARCHAR,
    company_industrial_classification VARCHAR
)
"""


class CompanyRepository(Protocol):
    """Read contract used by the record and analytics services."""

    def fetch_rows(self, query: CompiledQuery) -> list[dict[str, Any]]: ...

    def fetch_value(self, query: CompiledQuery) -> Any: ...

    def load_dataframe(self, df: pd.DataFrame) -> int: ...

    def count(self) -> int: ...

    def close(self) -> None: ...


def _select_expression(column: str) -> str:
    if column in NUMERIC_COLUMNS:
        # pandas keeps missing numbers as NaN
        return f"CASE WHEN isnan(CAST({column} AS DOUBLE)) THEN NULL ELSE CAST({column} AS DOUBLE) END"
    if column in DATE_COLUMNS:
        return f"CAST({column} AS DATE)"
    if column == "id":
        return "CAST(id AS BIGINT)"
    return f"CAST({column} AS VARCHAR)"


class DuckDBCompanyRepository:
    """DuckDB backed store; ``":memory:"`` for tests, a file path otherwise.

    Each query runs on its own cursor so concurrent aggregate queries issued
    from worker threads never share a connection object.
    """

    def __init__(self, database: str = ":memory:") -> None:
        self._connection = duckdb.connect(database)
        self._cursor_lock = threading.Lock()
        self._connection.execute(SCHEMA_DDL)

    def _cursor(self) -> duckdb.DuckDBPyConnection:
        with self._cursor_lock:
            return self._connection.cursor()

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------
    def fetch_rows(self, query: CompiledQuery) -> list[dict[str, Any]]:
        cursor = self._cursor()
        try:
            result = cursor.execute(query.sql, list(query.params))
            columns = [item[0] for item in result.description]
            return [dict(zip(columns, row)) for row in result.fetchall()]
        except duckdb.Error as exc:
            raise UpstreamQueryFailure(cause=exc) from exc
        finally:
            cursor.close()

    def fetch_value(self, query: CompiledQuery) -> Any:
        cursor = self._cursor()
        try:
            row = cursor.execute(query.sql, list(query.params)).fetchone()
        except duckdb.Error as exc:
            raise UpstreamQueryFailure(cause=exc) from exc
        finally:
            cursor.close()
        return row[0] if row else None

    def count(self) -> int:
        return int(self.fetch_value(CompiledQuery(f"SELECT COUNT(*) FROM {TABLE}")) or 0)

    # ------------------------------------------------------------------
    # ingestion
    # ------------------------------------------------------------------
    def load_dataframe(self, df: pd.DataFrame) -> int:
        """Insert prepared rows; returns the number of rows added."""

        frame = prepare_companies(df)
        if frame.empty:
            return 0
        columns = ", ".join(COMPANY_COLUMNS)
        expressions = ", ".join(_select_expression(column) for column in COMPANY_COLUMNS)
        cursor = self._cursor()
        try:
            cursor.register("incoming_companies", frame)
            cursor.execute(f"INSERT INTO {TABLE} ({columns}) SELECT {expressions} FROM incoming_companies")
            cursor.unregister("incoming_companies")
        finally:
            cursor.close()
        return len(frame)

    def close(self) -> None:
        self._connection.close()


__all__ = ["CompanyRepository", "DuckDBCompanyRepository", "SCHEMA_DDL"]
