"""Environment driven settings for the dashboard service."""
from __future__ import annotations

import os
from datetime import timedelta

DEFAULT_SESSION_SECRET = "company-dashboard-development-secret"
DEFAULT_USERS = "admin:admin123"
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

SESSION_COOKIE_NAME = "auth-token"
SESSION_TTL = timedelta(days=7)

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000

TOP_N = 10
TREND_YEARS = 10


def database_path() -> str:
    return os.getenv("COMPANIES_DB") or ":memory:"


def seed_csv_path() -> str | None:
    value = os.getenv("COMPANIES_CSV", "").strip()
    return value or None


def session_secret() -> bytes:
    secret = os.getenv("SESSION_SECRET") or DEFAULT_SESSION_SECRET
    return secret.encode("utf-8")


def configured_users() -> str:
    return os.getenv("USERS") or DEFAULT_USERS


def cors_origins() -> list[str]:
    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def is_production() -> bool:
    return os.getenv("APP_ENV", "development").strip().lower() == "production"


def default_page_size() -> int:
    raw = os.getenv("RECORDS_PAGE_SIZE", "")
    try:
        size = int(raw)
    except ValueError:
        return DEFAULT_PAGE_SIZE
    return max(1, min(MAX_PAGE_SIZE, size))
