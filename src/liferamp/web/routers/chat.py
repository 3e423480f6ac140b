"""Coaching chat page and chat API."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...clients.auth import AuthUser
from ...db.repositories import ProfileRepository
from ...errors import LLMError, LLMNotConfiguredError
from ...models.topics import TOPIC_SKILLS
from ...services.chat import ChatService, HistoryMessage
from ..deps import (
    get_chat_model,
    get_db_path,
    get_templates,
    json_body,
    json_error,
    require_api_user,
    require_user,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

MISCONFIGURED = "Server misconfiguration: missing OpenAI API key"
CONGRATULATIONS = "Congratulations on completing your gameplan! Pick a new topic to keep going."


def _optional_str(value) -> str | None:
    return value if isinstance(value, str) and value else None


def _history(raw) -> list[HistoryMessage]:
    if not isinstance(raw, list):
        return []
    history = []
    for item in raw:
        if isinstance(item, dict) and isinstance(item.get("text"), str):
            history.append(HistoryMessage(sender=str(item.get("sender", "")), text=item["text"]))
    return history


@router.get("/chat", response_class=HTMLResponse)
async def chat_page(
    request: Request,
    completed: bool = False,
    user: AuthUser = Depends(require_user),
):
    """Chat page: topic and skill selection, gameplan, free chat."""
    profile_repo = ProfileRepository(get_db_path(request))
    profile = await profile_repo.get(user.id)
    if profile is None:
        return RedirectResponse(url="/profile", status_code=302)

    return get_templates(request).TemplateResponse(
        request,
        "chat.html",
        {
            "profile": profile,
            "topic_skills": TOPIC_SKILLS,
            "congratulations": CONGRATULATIONS if completed else None,
        },
    )


@router.post("/api/chat")
async def chat_api(request: Request, user: AuthUser = Depends(require_api_user)):
    """Forward the conversation to the LLM and return the coach's reply."""
    body = await json_body(request)

    user_message = body.get("userMessage")
    if not isinstance(user_message, str) or not user_message.strip():
        return json_error(400, "Invalid userMessage")

    service = ChatService(get_chat_model(request))
    try:
        reply = await service.reply(
            user_message,
            topic=_optional_str(body.get("selectedTopic")),
            skill=_optional_str(body.get("selectedSkill")),
            history=_history(body.get("chatHistory")),
        )
    except LLMNotConfiguredError:
        logger.error("Chat requested but OPENAI_API_KEY is not set")
        return json_error(500, MISCONFIGURED)
    except LLMError:
        return json_error(500, "Failed to get response from OpenAI")

    return {"botReply": reply}
