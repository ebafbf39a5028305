"""Domain values describing what the record table is asked to show."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Mapping

from company_dashboard.core.errors import ValidationFailure

# query parameter name -> FilterSelection attribute
DIMENSION_PARAMS: dict[str, str] = {
    "statuses": "statuses",
    "classes": "classes",
    "years": "years",
    "industries": "industries",
    "stateCodes": "state_codes",
}


def _split(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    values: list[str] = []
    for item in raw.split(","):
        item = item.strip()
        if item and item not in values:
            values.append(item)
    return tuple(values)


def _as_years(values: Iterable[object]) -> tuple[int, ...]:
    years: list[int] = []
    for value in values:
        try:
            year = int(str(value).strip())
        except ValueError as exc:
            raise ValidationFailure(f"invalid year: {value!r}") from exc
        if year not in years:
            years.append(year)
    return tuple(years)


@dataclass(frozen=True, slots=True)
class FilterSelection:
    """Selected values per filterable dimension plus a free-text search.

    Dimensions combine with AND; values inside one dimension combine with OR.
    An empty tuple or an empty search means no constraint.
    """

    statuses: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()
    years: tuple[int, ...] = ()
    industries: tuple[str, ...] = ()
    state_codes: tuple[str, ...] = ()
    search: str = ""

    @classmethod
    def from_query_params(cls, params: Mapping[str, str | None]) -> "FilterSelection":
        """Parse the comma separated query string representation."""

        return cls(
            statuses=_split(params.get("statuses")),
            classes=_split(params.get("classes")),
            years=_as_years(_split(params.get("years"))),
            industries=_split(params.get("industries")),
            state_codes=_split(params.get("stateCodes")),
            search=(params.get("search") or "").strip(),
        )

    def to_query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        for name, attribute in DIMENSION_PARAMS.items():
            values = getattr(self, attribute)
            if values:
                params[name] = ",".join(str(value) for value in values)
        if self.search:
            params["search"] = self.search
        return params

    @property
    def is_empty(self) -> bool:
        return not self.active_count

    @property
    def active_count(self) -> int:
        selected = sum(len(getattr(self, attribute)) for attribute in DIMENSION_PARAMS.values())
        return selected + (1 if self.search else 0)

    def with_search(self, search: str) -> "FilterSelection":
        return replace(self, search=search.strip())

    def with_values(self, dimension: str, values: Iterable[object]) -> "FilterSelection":
        """Return a copy with one dimension replaced; ``dimension`` is the query name."""

        attribute = DIMENSION_PARAMS.get(dimension, dimension)
        if attribute not in DIMENSION_PARAMS.values():
            raise ValueError(f"unknown filter dimension: {dimension}")
        if attribute == "years":
            return replace(self, years=_as_years(values))
        cleaned = tuple(dict.fromkeys(str(value).strip() for value in values if str(value).strip()))
        return replace(self, **{attribute: cleaned})


@dataclass(frozen=True, slots=True)
class FilterOption:
    """One selectable value; ``label`` falls back to the value itself."""

    value: str
    label: str = field(default="")

    def __post_init__(self) -> None:
        if not self.label:
            object.__setattr__(self, "label", self.value)
