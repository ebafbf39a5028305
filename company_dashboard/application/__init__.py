"""Application services."""

from .analytics import AnalyticsService
from .records import RecordService
from .registry import (
    configure_repository,
    get_analytics_service,
    get_record_service,
    get_repository,
    reset_services,
)

__all__ = [
    "AnalyticsService",
    "RecordService",
    "configure_repository",
    "get_analytics_service",
    "get_record_service",
    "get_repository",
    "reset_services",
]
