"""Async client for browsing the record table."""

from .browser import RecordBrowser
from .debounce import Debouncer
from .http import DashboardClient, DashboardClientError, SessionExpired
from .pager import ERROR, FETCHING_FIRST, FETCHING_NEXT, IDLE, InfinitePager, PageFetcher
from .virtual import LOADING_ROW, VirtualWindow, compute_window, materialize

__all__ = [
    "DashboardClient",
    "DashboardClientError",
    "Debouncer",
    "ERROR",
    "FETCHING_FIRST",
    "FETCHING_NEXT",
    "IDLE",
    "InfinitePager",
    "LOADING_ROW",
    "PageFetcher",
    "RecordBrowser",
    "SessionExpired",
    "VirtualWindow",
    "compute_window",
    "materialize",
]
