from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response

from company_dashboard.core import config
from company_dashboard.core.auth import issue_token, validate_credentials, verify_token
from company_dashboard.core.errors import AuthenticationRequired, InvalidCredentials, ValidationFailure
from company_dashboard.core.schema import LoginRequest
from company_dashboard.domain import SessionUser

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


def current_user(request: Request) -> SessionUser | None:
    return verify_token(request.cookies.get(config.SESSION_COOKIE_NAME))


def require_session(request: Request) -> SessionUser:
    """Dependency guarding every data endpoint."""

    user = current_user(request)
    if user is None:
        raise AuthenticationRequired()
    return user


@router.post("/login")
async def login(payload: LoginRequest, response: Response) -> dict:
    if not payload.username or not payload.password:
        raise ValidationFailure("Username/email and password are required")

    user = validate_credentials(payload.username, payload.password)
    if user is None:
        raise InvalidCredentials()

    response.set_cookie(
        config.SESSION_COOKIE_NAME,
        issue_token(user),
        max_age=int(config.SESSION_TTL.total_seconds()),
        path="/",
        httponly=True,
        secure=config.is_production(),
        samesite="lax",
    )
    logger.info("user %s logged in", user.username)
    return {"success": True, "user": user.as_dict()}


@router.post("/logout")
async def logout(response: Response) -> dict:
    response.delete_cookie(config.SESSION_COOKIE_NAME, path="/")
    return {"success": True}


@router.get("/session")
async def session(request: Request) -> dict:
    user = current_user(request)
    return {"user": user.as_dict() if user else None}
