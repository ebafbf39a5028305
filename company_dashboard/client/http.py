"""Async HTTP client for the dashboard API."""
from __future__ import annotations

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from company_dashboard.core.schema import AnalyticsSummary, FilterOptionsModel, RecordPage
from company_dashboard.domain import FilterSelection, SessionUser

ModelT = TypeVar("ModelT", bound=BaseModel)


class DashboardClientError(RuntimeError):
    """Raised when the API answers with a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SessionExpired(DashboardClientError):
    """Raised on 401 from a session-guarded endpoint."""


class DashboardClient:
    """Cookie-carrying client; the session cookie set by ``login`` is reused."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        api_prefix: str = "/api",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._owns_client = http_client is None

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _url(self, path: str) -> str:
        return f"{self._prefix}{path}"

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return response.reason_phrase

    def _check(self, response: httpx.Response) -> Any:
        if response.status_code == 401:
            raise SessionExpired(self._error_message(response), status_code=401)
        if response.is_error:
            raise DashboardClientError(self._error_message(response), status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise DashboardClientError("Unexpected non-JSON response", status_code=response.status_code) from exc

    def _parse(self, response: httpx.Response, model: type[ModelT]) -> ModelT:
        body = self._check(response)
        try:
            return model.model_validate(body)
        except ValidationError as exc:
            raise DashboardClientError(
                f"Malformed {model.__name__} response", status_code=response.status_code
            ) from exc

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    async def login(self, username: str, password: str) -> SessionUser:
        response = await self._client.post(self._url("/login"), json={"username": username, "password": password})
        user = self._check(response)["user"]
        return SessionUser(username=user["username"], name=user["name"])

    async def logout(self) -> None:
        self._check(await self._client.post(self._url("/logout")))
        self._client.cookies.clear()

    async def session(self) -> SessionUser | None:
        user = self._check(await self._client.get(self._url("/session"))).get("user")
        if not user:
            return None
        return SessionUser(username=user["username"], name=user["name"])

    async def fetch_page(self, selection: FilterSelection, cursor: int, limit: int) -> RecordPage:
        params = {"cursor": str(cursor), "limit": str(limit), **selection.to_query_params()}
        response = await self._client.get(self._url("/records"), params=params)
        return self._parse(response, RecordPage)

    async def fetch_filter_options(self) -> FilterOptionsModel:
        response = await self._client.post(self._url("/records"))
        return self._parse(response, FilterOptionsModel)

    async def fetch_analytics(self) -> AnalyticsSummary:
        response = await self._client.get(self._url("/analytics"))
        return self._parse(response, AnalyticsSummary)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["DashboardClient", "DashboardClientError", "SessionExpired"]
