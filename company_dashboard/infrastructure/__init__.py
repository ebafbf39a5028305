"""Infrastructure layer exports."""

from .companies import CompanyRepository, DuckDBCompanyRepository

__all__ = [
    "CompanyRepository",
    "DuckDBCompanyRepository",
]
