"""Error taxonomy shared by the HTTP surface and the services."""
from __future__ import annotations


class DashboardError(Exception):
    """Base class for failures that map onto an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class AuthenticationRequired(DashboardError):
    """Raised when a request carries no valid session."""

    status_code = 401
    default_message = "Unauthorized"


class ValidationFailure(DashboardError):
    """Raised when required input is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class InvalidCredentials(DashboardError):
    """Raised on any login mismatch; never says which part was wrong."""

    status_code = 401
    default_message = "Invalid username or password"


class UpstreamQueryFailure(DashboardError):
    """Raised when the record store cannot answer a query."""

    status_code = 500
    default_message = "Failed to query the company store"

    def __init__(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
