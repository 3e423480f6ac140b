"""Portfolio routes: past gameplans and their progress."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...clients.auth import AuthUser
from ...db.repositories import GameplanRepository
from ...parsers.flashcard import parse_flashcard
from ...services.gameplan import GameplanService
from ..deps import get_chat_model, get_db_path, get_settings, get_templates, require_user

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_class=HTMLResponse)
async def portfolio_list(request: Request, user: AuthUser = Depends(require_user)):
    """List the user's gameplans, newest first."""
    gameplan_repo = GameplanRepository(get_db_path(request))
    gameplans = await gameplan_repo.list_for_user(user.id)

    return get_templates(request).TemplateResponse(
        request,
        "portfolio/list.html",
        {"gameplans": gameplans},
    )


async def _render_detail(request: Request, gameplan_id: int, user: AuthUser, error: str | None = None):
    gameplan_repo = GameplanRepository(get_db_path(request))
    gameplan = await gameplan_repo.get(gameplan_id, user.id)

    parsed = []
    if gameplan is not None:
        parsed = [(fc, parse_flashcard(fc.content)) for fc in gameplan.flashcards]

    return get_templates(request).TemplateResponse(
        request,
        "portfolio/detail.html",
        {
            "gameplan": gameplan,
            "flashcards": parsed,
            "error": error,
            "image_domains": get_settings(request).image_domains,
        },
        status_code=200 if gameplan is not None else 404,
    )


@router.get("/{gameplan_id}", response_class=HTMLResponse)
async def portfolio_detail(request: Request, gameplan_id: int, user: AuthUser = Depends(require_user)):
    """Gameplan detail with goals and flashcards."""
    return await _render_detail(request, gameplan_id, user)


@router.post("/{gameplan_id}/complete")
async def complete_from_portfolio(request: Request, gameplan_id: int, user: AuthUser = Depends(require_user)):
    """Mark all goals completed and head back to chat."""
    service = GameplanService(get_chat_model(request), get_db_path(request))
    completed = await service.complete_all_goals(gameplan_id, user.id)
    if completed is None:
        return await _render_detail(request, gameplan_id, user)
    if not completed:
        return await _render_detail(request, gameplan_id, user, error="Failed to mark all goals as completed.")
    return RedirectResponse(url="/chat?completed=true", status_code=302)
