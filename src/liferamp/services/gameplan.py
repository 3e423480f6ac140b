"""Gameplan generation and completion tracking."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import aiosqlite

from ..clients.llm import ChatModel
from ..db.repositories import FlashcardRepository, GameplanRepository, GoalRepository
from ..errors import LLMNotConfiguredError
from ..models.gameplan import Goal, GoalStatus
from ..parsers.flashcard import parse_flashcard
from ..parsers.gameplan import parse_gameplan_response
from .prompts import build_gameplan_prompt

logger = logging.getLogger(__name__)


def tomorrow_utc(now: datetime | None = None) -> date:
    """Start date for newly generated goals."""
    now = now or datetime.now(timezone.utc)
    return (now.astimezone(timezone.utc) + timedelta(days=1)).date()


@dataclass
class GameplanResult:
    """What the gameplan endpoint returns."""

    gameplan_id: int | None
    goals: list[Goal] = field(default_factory=list)
    flashcards: list[str] = field(default_factory=list)

    def to_dict(self, image_domains: list[str] | None = None) -> dict:
        return {
            "gameplanId": self.gameplan_id,
            "goals": [{"id": g.id, "description": g.description} for g in self.goals],
            "flashcards": list(self.flashcards),
            "parsedFlashcards": [parse_flashcard(fc).to_dict(image_domains) for fc in self.flashcards],
        }


class GameplanService:
    """Generates gameplans with the LLM and persists them."""

    def __init__(self, model: ChatModel | None, db_path: Path | None = None):
        self.model = model
        self.gameplans = GameplanRepository(db_path)
        self.goals = GoalRepository(db_path)
        self.flashcards = FlashcardRepository(db_path)

    async def generate(
        self,
        user_id: str,
        topic: str,
        skill: str,
        now: datetime | None = None,
    ) -> GameplanResult:
        """Generate and store a week-long gameplan for the user.

        Persistence failures are logged and reflected in the result (no
        gameplan id, no goals) rather than raised; the generated flashcards
        are still returned.

        Raises:
            LLMNotConfiguredError: if no LLM is configured
            LLMError: if the completion call fails
            MalformedGameplanError: if the response cannot be used
        """
        if self.model is None:
            raise LLMNotConfiguredError("Missing OpenAI API key")

        raw = await self.model.complete(
            [{"role": "system", "content": build_gameplan_prompt(topic, skill)}]
        )
        logger.debug("Raw gameplan from LLM:\n%s", raw)

        payload = parse_gameplan_response(raw)
        result = GameplanResult(gameplan_id=None, flashcards=payload.flashcards)

        try:
            result.gameplan_id = await self.gameplans.create(user_id, topic, skill)
        except aiosqlite.Error:
            logger.exception("Error inserting gameplan record for user %s", user_id)
            return result

        try:
            result.goals = await self.goals.create_many(
                result.gameplan_id, payload.goals, tomorrow_utc(now)
            )
        except aiosqlite.Error:
            logger.exception("Error inserting goals for gameplan %s", result.gameplan_id)

        try:
            await self.flashcards.create_many(result.gameplan_id, payload.flashcards)
        except aiosqlite.Error:
            logger.exception("Error inserting flashcards for gameplan %s", result.gameplan_id)

        logger.info(
            "Created gameplan %s (%s / %s) with %d goals, %d flashcards",
            result.gameplan_id, topic, skill, len(result.goals), len(result.flashcards),
        )
        return result

    async def complete_all_goals(self, gameplan_id: int, user_id: str) -> bool | None:
        """Mark every goal of the user's gameplan completed.

        Returns:
            None if the gameplan is not found for this user, False if any
            update failed, True otherwise
        """
        gameplan = await self.gameplans.get(gameplan_id, user_id)
        if gameplan is None:
            return None

        try:
            results = await asyncio.gather(
                *(
                    self.goals.update_status(goal.id, GoalStatus.COMPLETED, user_id)
                    for goal in gameplan.goals
                )
            )
        except aiosqlite.Error:
            logger.exception("Error completing goals of gameplan %s", gameplan_id)
            return False
        return all(results)

    async def complete_gameplan(self, gameplan_id: int, user_id: str) -> bool:
        """Set the gameplan's completed flag."""
        return await self.gameplans.set_completed(gameplan_id, user_id)
