"""Sign-in, sign-up and sign-out routes."""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...clients.auth import AuthUser
from ...errors import AuthError
from ..deps import ACCESS_COOKIE, current_user, get_auth_client, get_settings, get_templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

CONFIRM_EMAIL_MESSAGE = "Check your email for a confirmation link, then sign in."
MIN_PASSWORD_LENGTH = 6


def _render(request: Request, signing_up: bool, error: str = "", email: str = "", status_code: int = 200):
    return get_templates(request).TemplateResponse(
        request,
        "signin.html",
        {
            "signing_up": signing_up,
            "error": error,
            "email": email,
            "min_password_length": MIN_PASSWORD_LENGTH,
        },
        status_code=status_code,
    )


@router.get("/signin", response_class=HTMLResponse)
async def signin_page(
    request: Request,
    mode: str = "signin",
    message: str = "",
    user: AuthUser | None = Depends(current_user),
):
    """Sign-in form (?mode=signup for the sign-up form)."""
    if user is not None:
        return RedirectResponse(url="/", status_code=302)
    return _render(request, signing_up=(mode == "signup"), error=message)


@router.post("/signin")
async def signin(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
):
    """Sign in and store the access token in an HttpOnly cookie."""
    auth_client = get_auth_client(request)
    try:
        session = await auth_client.sign_in(email, password)
    except AuthError as e:
        return _render(request, signing_up=False, error=str(e), email=email, status_code=400)

    response = RedirectResponse(url="/", status_code=302)
    response.set_cookie(
        ACCESS_COOKIE,
        session.access_token,
        httponly=True,
        samesite="lax",
        secure=get_settings(request).cookie_secure,
    )
    logger.info("User %s signed in", session.user.id)
    return response


@router.post("/signup")
async def signup(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
):
    """Create an account; the user confirms by email, then signs in."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return _render(
            request,
            signing_up=True,
            error=f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
            email=email,
            status_code=400,
        )

    auth_client = get_auth_client(request)
    try:
        await auth_client.sign_up(email, password)
    except AuthError as e:
        return _render(request, signing_up=True, error=str(e), email=email, status_code=400)

    return _render(request, signing_up=False, error=CONFIRM_EMAIL_MESSAGE)


@router.post("/signout")
async def signout():
    """Forget the access token."""
    response = RedirectResponse(url="/signin", status_code=302)
    response.delete_cookie(ACCESS_COOKIE)
    return response
