"""Request-scoped helpers shared by the routers."""

import logging
from pathlib import Path

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates

from ..clients.auth import AuthClient, AuthUser
from ..clients.llm import ChatModel
from ..config import Settings

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "sb-access-token"


class SignInRequired(Exception):
    """Raised by page dependencies when there is no signed-in user."""


class ApiUnauthorized(Exception):
    """Raised by API dependencies when there is no signed-in user."""


def json_error(status_code: int, message: str) -> JSONResponse:
    """The {"error": ...} body every API failure uses."""
    return JSONResponse(status_code=status_code, content={"error": message})


async def json_body(request: Request) -> dict:
    """The request body as a dict; anything else (or invalid JSON) reads as {}."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def get_templates(request: Request) -> Jinja2Templates:
    """Get templates from app state."""
    return request.app.state.templates


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db_path(request: Request) -> Path:
    return request.app.state.db_path


def get_chat_model(request: Request) -> ChatModel | None:
    return request.app.state.chat_model


def get_auth_client(request: Request) -> AuthClient:
    return request.app.state.auth_client


def _access_token(request: Request) -> str | None:
    header = request.headers.get("authorization") or ""
    if header.lower().startswith("bearer "):
        token = header.split(" ", 1)[1].strip()
        if token:
            return token
    return request.cookies.get(ACCESS_COOKIE) or None


async def current_user(request: Request) -> AuthUser | None:
    """The signed-in user, or None. Cached on the request."""
    if hasattr(request.state, "user"):
        return request.state.user

    user = None
    token = _access_token(request)
    if token:
        user = await get_auth_client(request).get_user(token)
    request.state.user = user
    return user


async def require_user(request: Request) -> AuthUser:
    """Page dependency: redirect to /signin when signed out."""
    user = await current_user(request)
    if user is None:
        raise SignInRequired()
    return user


async def require_api_user(request: Request) -> AuthUser:
    """API dependency: 401 when signed out."""
    user = await current_user(request)
    if user is None:
        logger.info("%s unauthorized", request.url.path)
        raise ApiUnauthorized()
    return user
