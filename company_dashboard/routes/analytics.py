from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from company_dashboard.application import get_analytics_service
from company_dashboard.core.errors import UpstreamQueryFailure
from company_dashboard.domain import SessionUser

from .auth import require_session

router = APIRouter(prefix="/analytics", tags=["analytics"])
logger = logging.getLogger(__name__)


@router.get("")
async def analytics(user: SessionUser = Depends(require_session)) -> dict:
    service = get_analytics_service()
    try:
        summary = await service.summarize()
    except UpstreamQueryFailure:
        logger.exception("analytics fetch failed")
        raise UpstreamQueryFailure("Internal server error") from None
    return summary.model_dump(mode="json", by_alias=True)
