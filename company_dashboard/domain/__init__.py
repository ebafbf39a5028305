"""Domain layer definitions."""

from .records import DIMENSION_PARAMS, FilterOption, FilterSelection
from .sessions import SessionUser

__all__ = [
    "DIMENSION_PARAMS",
    "FilterOption",
    "FilterSelection",
    "SessionUser",
]
