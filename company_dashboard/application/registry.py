"""Process-wide wiring of the repository and the services built on it."""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Callable

from company_dashboard.core import config
from company_dashboard.core.csvio import read_companies_csv
from company_dashboard.infrastructure import CompanyRepository, DuckDBCompanyRepository

from .analytics import AnalyticsService
from .records import RecordService

logger = logging.getLogger(__name__)

_repository: CompanyRepository | None = None
_record_service: RecordService | None = None
_analytics_service: AnalyticsService | None = None


def _default_repository() -> CompanyRepository:
    repository = DuckDBCompanyRepository(config.database_path())
    csv_path = config.seed_csv_path()
    if csv_path and repository.count() == 0:
        loaded = repository.load_dataframe(read_companies_csv(Path(csv_path)))
        logger.info("loaded %s company rows from %s", loaded, csv_path)
    return repository


def configure_repository(repository: CompanyRepository, *, today: Callable[[], date] | None = None) -> None:
    """Install the repository used by every service (tests, app start-up)."""

    global _repository, _record_service, _analytics_service
    _repository = repository
    _record_service = RecordService(repository)
    _analytics_service = AnalyticsService(repository, today=today or date.today)


def get_repository() -> CompanyRepository:
    if _repository is None:
        configure_repository(_default_repository())
    assert _repository is not None
    return _repository


def get_record_service() -> RecordService:
    get_repository()
    assert _record_service is not None
    return _record_service


def get_analytics_service() -> AnalyticsService:
    get_repository()
    assert _analytics_service is not None
    return _analytics_service


def reset_services() -> None:
    """Drop the configured repository (used in tests)."""

    global _repository, _record_service, _analytics_service
    if _repository is not None:
        _repository.close()
    _repository = None
    _record_service = None
    _analytics_service = None
