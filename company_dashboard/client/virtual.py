"""Visible-window arithmetic for a fixed row height table."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence, TypeVar

T = TypeVar("T")

DEFAULT_ROW_HEIGHT = 44
DEFAULT_OVERSCAN = 50


class LoadingRow:
    """Placeholder rendered after the last record while the next page loads."""

    def __repr__(self) -> str:
        return "LOADING_ROW"


LOADING_ROW = LoadingRow()


@dataclass(frozen=True, slots=True)
class VirtualWindow:
    start: int
    end: int
    padding_top: int
    padding_bottom: int
    loader: bool
    total_height: int


@lru_cache(maxsize=256)
def compute_window(
    count: int,
    scroll_offset: int,
    viewport_height: int,
    row_height: int = DEFAULT_ROW_HEIGHT,
    overscan: int = DEFAULT_OVERSCAN,
    loading: bool = False,
) -> VirtualWindow:
    """Rows ``[start, end)`` to materialise, with spacer heights above and below.

    ``loading`` adds one synthetic slot after the last record; ``loader`` is
    true when that slot falls inside the window.
    """

    if row_height <= 0:
        raise ValueError("row_height must be positive")
    slots = max(0, count) + (1 if loading else 0)
    total_height = slots * row_height
    if slots == 0:
        return VirtualWindow(0, 0, 0, 0, False, 0)

    viewport = max(1, int(viewport_height))
    offset = max(0, min(int(scroll_offset), max(0, total_height - viewport)))
    first_visible = offset // row_height
    last_visible = min(slots - 1, (offset + viewport - 1) // row_height)

    start = max(0, first_visible - overscan)
    end = min(slots, last_visible + 1 + overscan)
    return VirtualWindow(
        start=start,
        end=end,
        padding_top=start * row_height,
        padding_bottom=total_height - end * row_height,
        loader=loading and end == slots,
        total_height=total_height,
    )


def materialize(records: Sequence[T], window: VirtualWindow) -> list[tuple[int, T | LoadingRow]]:
    """Pair each materialised row with its absolute index."""

    stop = min(window.end, len(records))
    rows: list[tuple[int, T | LoadingRow]] = [(index, records[index]) for index in range(window.start, stop)]
    if window.loader:
        rows.append((len(records), LOADING_ROW))
    return rows
