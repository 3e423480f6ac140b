"""Gameplan generation and tracking API."""

import logging

from fastapi import APIRouter, Depends, Request

from ...clients.auth import AuthUser
from ...db.repositories import GoalRepository
from ...errors import LLMError, LLMNotConfiguredError, MalformedGameplanError
from ...models.gameplan import GoalStatus
from ...parsers.flashcard import parse_flashcard
from ...services.gameplan import GameplanService
from ..deps import get_chat_model, get_db_path, get_settings, json_body, json_error, require_api_user
from .chat import MISCONFIGURED

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["gameplans"])


def _answers(raw) -> dict[int, str]:
    """Accept answers as a list or as a mapping of question index to letter."""
    if isinstance(raw, list):
        items = enumerate(raw)
    elif isinstance(raw, dict):
        items = raw.items()
    else:
        return {}

    answers = {}
    for key, value in items:
        try:
            idx = int(key)
        except (TypeError, ValueError):
            continue
        if isinstance(value, str):
            answers[idx] = value
    return answers


@router.post("/gameplan")
async def create_gameplan(request: Request, user: AuthUser = Depends(require_api_user)):
    """Generate a gameplan for the chosen topic and skill and store it."""
    body = await json_body(request)
    fields = [body.get("userId"), body.get("topic"), body.get("skill")]
    if not all(isinstance(value, str) for value in fields):
        return json_error(400, "Invalid request body")
    _, topic, skill = fields

    service = GameplanService(get_chat_model(request), get_db_path(request))
    try:
        result = await service.generate(user.id, topic, skill)
    except LLMNotConfiguredError:
        logger.error("Gameplan requested but OPENAI_API_KEY is not set")
        return json_error(500, MISCONFIGURED)
    except MalformedGameplanError as e:
        logger.error("Unusable gameplan for user %s: %s", user.id, e)
        return json_error(500, str(e))
    except LLMError:
        return json_error(500, "Failed to generate gameplan. Please try again.")

    return result.to_dict(get_settings(request).image_domains)


@router.patch("/goals/{goal_id}")
async def update_goal(goal_id: int, request: Request, user: AuthUser = Depends(require_api_user)):
    """Set a goal's status."""
    body = await json_body(request)
    try:
        status = GoalStatus(body.get("status"))
    except ValueError:
        return json_error(400, "Invalid status")

    goal_repo = GoalRepository(get_db_path(request))
    if not await goal_repo.update_status(goal_id, status, user.id):
        return json_error(404, "Goal not found")

    return {"id": goal_id, "status": status.value}


@router.post("/gameplans/{gameplan_id}/complete")
async def complete_gameplan(gameplan_id: int, request: Request, user: AuthUser = Depends(require_api_user)):
    """Mark the gameplan itself completed."""
    service = GameplanService(get_chat_model(request), get_db_path(request))
    if not await service.complete_gameplan(gameplan_id, user.id):
        return json_error(404, "Gameplan not found")
    return {"id": gameplan_id, "completed": True}


@router.post("/gameplans/{gameplan_id}/goals/complete")
async def complete_all_goals(gameplan_id: int, request: Request, user: AuthUser = Depends(require_api_user)):
    """Mark every goal of the gameplan completed."""
    service = GameplanService(get_chat_model(request), get_db_path(request))
    completed = await service.complete_all_goals(gameplan_id, user.id)
    if completed is None:
        return json_error(404, "Gameplan not found")
    if not completed:
        return json_error(500, "Failed to mark all goals as completed.")
    return {"id": gameplan_id, "status": GoalStatus.COMPLETED.value}


@router.post("/flashcards/grade")
async def grade_flashcard(request: Request, user: AuthUser = Depends(require_api_user)):
    """Score a set of answers against a flashcard's correct letters."""
    body = await json_body(request)
    content = body.get("content")
    if not isinstance(content, str):
        return json_error(400, "Invalid request body")

    result = parse_flashcard(content).grade(_answers(body.get("answers")))
    return result.to_dict()
