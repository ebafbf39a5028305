from __future__ import annotations

import asyncio

import httpx
import pytest

from company_dashboard.client import ERROR, IDLE, DashboardClient, DashboardClientError, InfinitePager, SessionExpired
from company_dashboard.domain import FilterSelection


def _client(handler) -> DashboardClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://dashboard.test")
    return DashboardClient(http_client=http_client)


def test_fetch_page_sends_selection_as_query_params():
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json={
                "records": [{"id": 7, "cin": "U7", "company_registration_date": "2010-01-02"}],
                "nextCursor": None,
                "total": 10,
                "filteredTotal": 1,
            },
        )

    selection = FilterSelection(statuses=("Active", "Strike Off"), years=(2010,), search="abc")
    page = asyncio.run(_client(handler).fetch_page(selection, 0, 50))

    assert captured["path"] == "/api/records"
    assert captured["params"] == {
        "cursor": "0",
        "limit": "50",
        "statuses": "Active,Strike Off",
        "years": "2010",
        "search": "abc",
    }
    assert page.records[0].id == 7
    assert page.next_cursor is None
    assert (page.total, page.filtered_total) == (10, 1)


def test_error_body_becomes_exception_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Failed to fetch records", "details": "boom"})

    with pytest.raises(DashboardClientError) as excinfo:
        asyncio.run(_client(handler).fetch_page(FilterSelection(), 0, 10))

    assert str(excinfo.value) == "Failed to fetch records"
    assert excinfo.value.status_code == 500
    assert not isinstance(excinfo.value, SessionExpired)


def test_unauthorized_raises_session_expired():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "Unauthorized"})

    with pytest.raises(SessionExpired):
        asyncio.run(_client(handler).fetch_analytics())


def test_non_json_error_falls_back_to_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad gateway")

    with pytest.raises(DashboardClientError, match="Bad gateway"):
        asyncio.run(_client(handler).fetch_filter_options())


def test_custom_prefix():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json={"user": None})

    client = DashboardClient(
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://dashboard.test"),
        api_prefix="",
    )
    assert asyncio.run(client.session()) is None
    assert seen == ["/session"]


def test_html_page_is_reported_as_client_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy login</html>", headers={"content-type": "text/html"})

    with pytest.raises(DashboardClientError) as excinfo:
        asyncio.run(_client(handler).fetch_page(FilterSelection(), 0, 10))

    assert excinfo.value.status_code == 200


def test_malformed_page_body_is_reported_as_client_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"records": [{"cin": "U1"}], "nextCursor": "soon"})

    with pytest.raises(DashboardClientError, match="RecordPage"):
        asyncio.run(_client(handler).fetch_page(FilterSelection(), 0, 10))


def test_pager_recovers_from_unreadable_response():
    responses = [
        httpx.Response(200, text="<html>proxy login</html>", headers={"content-type": "text/html"}),
        httpx.Response(200, json={"records": [{"id": 1, "cin": "U1"}], "nextCursor": None, "total": 1, "filteredTotal": 1}),
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    async def scenario():
        pager = InfinitePager(_client(handler), limit=10)
        assert not await pager.set_filters(FilterSelection())
        failed = (pager.status, pager.error)
        assert await pager.retry()
        return pager, failed

    pager, (failed_status, failed_error) = asyncio.run(scenario())
    assert failed_status == ERROR
    assert isinstance(failed_error, DashboardClientError)
    assert pager.status == IDLE
    assert [r.id for r in pager.records] == [1]
