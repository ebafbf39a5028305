from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from company_dashboard.application import configure_repository, reset_services
from company_dashboard.core.csvio import records_to_frame
from company_dashboard.infrastructure import DuckDBCompanyRepository

STATUSES = ["Active", "Active", "Strike Off", "Amalgamated"]
CLASSES = ["Private", "Public", "One Person Company"]
INDUSTRIES = ["Computer programming", "Food products", "Banking", "Construction", "Textiles"]
TODAY = date(2024, 6, 30)


def make_company(index: int) -> dict:
    year = 2000 + index % 25
    registered = None if index % 50 == 0 else date(year, 1 + index % 12, 1 + index % 28)
    authorized = None if index % 7 == 0 else float(index * 1000)
    name = f"Company {index:03d} Private Limited"
    if index % 10 == 7:
        name = f"ABC Traders {index:03d}"
    elif index == 13:
        name = "100% Pure Oils Limited"
    elif index == 14:
        name = "Under_score Holdings"
    elif index == 101:
        name = "Fabcon Steel Limited"
    cin = f"U{index:05d}KA{year}PTC{index:06d}"
    if index % 33 == 0:
        cin = f"abc{index:05d}KA{year}PLC{index:06d}"
    return {
        "id": index,
        "cin": cin,
        "company_name": name,
        "company_roc_code": "RoC-Bangalore",
        "company_category": "Company limited by Shares",
        "company_sub_category": "Non-govt company",
        "company_class": CLASSES[index % 3],
        "authorized_capital": authorized,
        "paidup_capital": None if authorized is None else authorized / 2,
        "company_registration_date": registered,
        "registered_office_address": f"{index} MG Road, Bengaluru",
        "listing_status": "Listed" if index % 20 == 0 else "Unlisted",
        "company_status": STATUSES[index % 4],
        "company_state_code": "KARNATAKA" if index % 2 else "TAMIL NADU",
        "company_indian_foreign": "Indian",
        "nic_code": f"{10000 + index % 5}",
        "company_industrial_classification": INDUSTRIES[index % 5],
    }


@pytest.fixture(autouse=True)
def static_users(monkeypatch):
    monkeypatch.setenv("USERS", "admin:admin123,analyst:s3cret")
    monkeypatch.delenv("SESSION_SECRET", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    yield


@pytest.fixture()
def companies() -> list[dict]:
    return [make_company(index) for index in range(1, 251)]


@pytest.fixture()
def repository(companies):
    repo = DuckDBCompanyRepository()
    repo.load_dataframe(records_to_frame(companies))
    configure_repository(repo, today=lambda: TODAY)
    yield repo
    reset_services()


@pytest.fixture()
def empty_repository():
    repo = DuckDBCompanyRepository()
    configure_repository(repo, today=lambda: TODAY)
    yield repo
    reset_services()


@pytest.fixture()
def client(repository):
    from company_dashboard.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def auth_client(client):
    response = client.post("/api/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    return client
