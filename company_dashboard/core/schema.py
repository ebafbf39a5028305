from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class CompanyRecord(BaseModel):
    id: int
    cin: str
    company_name: str | None = None
    company_roc_code: str | None = None
    company_category: str | None = None
    company_sub_category: str | None = None
    company_class: str | None = None
    authorized_capital: float | None = None
    paidup_capital: float | None = None
    company_registration_date: date | None = None
    registered_office_address: str | None = None
    listing_status: str | None = None
    company_status: str | None = None
    company_state_code: str | None = None
    company_indian_foreign: str | None = None
    nic_code: str | None = None
    company_industrial_classification: str | None = None


COMPANY_COLUMNS: list[str] = list(CompanyRecord.model_fields)


class RecordPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    records: list[CompanyRecord] = Field(default_factory=list)
    next_cursor: int | None = Field(default=None, alias="nextCursor")
    total: int | None = None
    filtered_total: int | None = Field(default=None, alias="filteredTotal")

    def to_payload(self) -> dict:
        """Wire shape; the counts are only present on a first page."""

        payload = self.model_dump(mode="json", by_alias=True)
        if self.total is None:
            payload.pop("total")
        if self.filtered_total is None:
            payload.pop("filteredTotal")
        return payload


class FilterOptionModel(BaseModel):
    value: str
    label: str


class FilterOptionsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    statuses: list[FilterOptionModel] = Field(default_factory=list)
    classes: list[FilterOptionModel] = Field(default_factory=list)
    years: list[FilterOptionModel] = Field(default_factory=list)
    industries: list[FilterOptionModel] = Field(default_factory=list)
    state_codes: list[FilterOptionModel] = Field(default_factory=list, alias="stateCodes")


class StatusCount(BaseModel):
    status: str | None = None
    count: int


class ClassCount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company_class: str | None = Field(default=None, alias="class")
    count: int


class IndustryCount(BaseModel):
    industry: str | None = None
    count: int


class YearCount(BaseModel):
    year: int
    count: int


class CapitalStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    avg_authorized: float | None = Field(default=None, alias="avgAuthorized")
    max_authorized: float | None = Field(default=None, alias="maxAuthorized")
    total_authorized: float | None = Field(default=None, alias="totalAuthorized")
    avg_paidup: float | None = Field(default=None, alias="avgPaidup")
    max_paidup: float | None = Field(default=None, alias="maxPaidup")
    total_paidup: float | None = Field(default=None, alias="totalPaidup")


class AnalyticsSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    by_status: list[StatusCount] = Field(default_factory=list, alias="byStatus")
    by_class: list[ClassCount] = Field(default_factory=list, alias="byClass")
    top_industries: list[IndustryCount] = Field(default_factory=list, alias="topIndustries")
    capital: CapitalStats | None = None
    registration_trends: list[YearCount] = Field(default_factory=list, alias="registrationTrends")
    by_listing: list[StatusCount] = Field(default_factory=list, alias="byListing")


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None
