from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from company_dashboard.application import get_record_service
from company_dashboard.core import config
from company_dashboard.core.errors import UpstreamQueryFailure, ValidationFailure
from company_dashboard.domain import FilterSelection, SessionUser

from .auth import require_session

router = APIRouter(prefix="/records", tags=["records"])
logger = logging.getLogger(__name__)


def _parse_int(raw: str | None, name: str, default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationFailure(f"{name} must be an integer") from exc


def _fetch_failed(detail: BaseException) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to fetch records", "details": str(detail)},
    )


@router.get("")
async def list_records(request: Request, user: SessionUser = Depends(require_session)):
    params = request.query_params
    cursor = _parse_int(params.get("cursor"), "cursor", 0)
    if cursor < 0:
        raise ValidationFailure("cursor must not be negative")
    limit = _parse_int(params.get("limit"), "limit", config.default_page_size())
    limit = max(1, min(config.MAX_PAGE_SIZE, limit))
    selection = FilterSelection.from_query_params(params)

    service = get_record_service()
    try:
        page = await service.list_page_async(selection, cursor, limit)
    except UpstreamQueryFailure as exc:
        logger.exception("records fetch failed")
        return _fetch_failed(exc.cause or exc)
    except Exception as exc:
        logger.exception("records fetch failed")
        return _fetch_failed(exc)
    return page.to_payload()


@router.post("")
async def filter_options(user: SessionUser = Depends(require_session)) -> dict:
    service = get_record_service()
    try:
        options = await service.filter_options_async()
    except UpstreamQueryFailure:
        logger.exception("filter options fetch failed")
        raise UpstreamQueryFailure("Failed to fetch filter options") from None
    return options.model_dump(by_alias=True)
