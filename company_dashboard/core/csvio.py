from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from company_dashboard.core.schema import COMPANY_COLUMNS

NUMERIC_COLUMNS = ["authorized_capital", "paidup_capital"]
DATE_COLUMNS = ["company_registration_date"]
TEXT_COLUMNS = [
    column for column in COMPANY_COLUMNS if column not in {"id", *NUMERIC_COLUMNS, *DATE_COLUMNS}
]

# Header spellings seen in registrar exports
HEADER_ALIASES = {
    "corporate_identification_number": "cin",
    "companyname": "company_name",
    "company_roc": "company_roc_code",
    "roc_code": "company_roc_code",
    "paid_up_capital": "paidup_capital",
    "date_of_registration": "company_registration_date",
    "registration_date": "company_registration_date",
    "state_code": "company_state_code",
    "industrial_classification": "company_industrial_classification",
}


def _normalise_header(name: str) -> str:
    key = "_".join(str(name).strip().lower().replace("-", " ").split())
    return HEADER_ALIASES.get(key, key)


def prepare_companies(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce a raw frame into the ``companies`` column layout.

    Missing columns are added as nulls, capital becomes numeric, dates become
    ``datetime64`` (unparseable values turn into ``NaT``) and rows without an
    ``id`` are numbered after the highest existing id.
    """

    df = df.rename(columns=_normalise_header).copy()
    for column in COMPANY_COLUMNS:
        if column not in df.columns:
            df[column] = None

    for column in NUMERIC_COLUMNS:
        df[column] = pd.to_numeric(df[column], errors="coerce")
    for column in DATE_COLUMNS:
        df[column] = pd.to_datetime(df[column], errors="coerce")
    for column in TEXT_COLUMNS:
        values = df[column].astype("object")
        df[column] = values.where(values.notna(), None).map(lambda v: None if v is None else str(v).strip())

    ids = pd.to_numeric(df["id"], errors="coerce")
    if ids.isna().any():
        start = int(ids.max()) if ids.notna().any() else 0
        missing = ids.isna()
        ids = ids.copy()
        ids[missing] = list(range(start + 1, start + 1 + int(missing.sum())))
    df["id"] = ids.astype("int64")

    df = df[df["cin"].notna()]
    return df[COMPANY_COLUMNS].sort_values("id").reset_index(drop=True)


def read_companies_csv(path: Path) -> pd.DataFrame:
    return prepare_companies(pd.read_csv(path, dtype=str, keep_default_na=True))


def records_to_frame(rows: Iterable[dict]) -> pd.DataFrame:
    return prepare_companies(pd.DataFrame(list(rows)))
