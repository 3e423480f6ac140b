"""User profile routes."""

import logging

import aiosqlite
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...clients.auth import AuthUser
from ...db.repositories import ProfileRepository
from ...models.profile import Gender, Profile, Role
from ..deps import get_db_path, get_templates, require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


def _render(request: Request, error: str | None = None, form: dict | None = None, status_code: int = 200):
    return get_templates(request).TemplateResponse(
        request,
        "profile.html",
        {
            "error": error,
            "form": form or {"full_name": "", "role": Role.HIGH_SCHOOL.value, "gender": Gender.MALE.value, "age": ""},
            "roles": list(Role),
            "genders": list(Gender),
        },
        status_code=status_code,
    )


@router.get("", response_class=HTMLResponse)
async def profile_page(request: Request, user: AuthUser = Depends(require_user)):
    """Profile form; users who already have a profile go straight to chat."""
    profile_repo = ProfileRepository(get_db_path(request))
    if await profile_repo.exists(user.id):
        return RedirectResponse(url="/chat", status_code=302)
    return _render(request)


@router.post("")
async def save_profile(
    request: Request,
    full_name: str = Form(""),
    role: Role = Form(Role.HIGH_SCHOOL),
    gender: Gender = Form(Gender.MALE),
    age: str = Form(""),
    user: AuthUser = Depends(require_user),
):
    """Create the user's profile."""
    form = {"full_name": full_name, "role": role.value, "gender": gender.value, "age": age}

    if not full_name.strip():
        return _render(request, "Please enter your full name.", form, status_code=400)
    try:
        age_value = int(age)
    except ValueError:
        age_value = 0
    if age_value < 1:
        return _render(request, "Please enter a valid age.", form, status_code=400)

    profile = Profile(
        id=user.id,
        full_name=full_name.strip(),
        role=role,
        gender=gender,
        age=age_value,
    )

    profile_repo = ProfileRepository(get_db_path(request))
    try:
        await profile_repo.create(profile)
    except aiosqlite.Error:
        logger.exception("Error inserting profile for user %s", user.id)
        return _render(request, "Failed to save profile — please try again.", form, status_code=500)

    return RedirectResponse(url="/chat", status_code=302)
