"""Tests for the SQLite repositories and the gameplan service."""

import asyncio
import json
from datetime import date, datetime, timezone

import aiosqlite
import pytest

from liferamp.db import (
    DocumentRepository,
    FlashcardRepository,
    GameplanRepository,
    GoalRepository,
    ProfileRepository,
)
from liferamp.errors import MalformedGameplanError
from liferamp.models.document import Document
from liferamp.models.gameplan import GoalStatus
from liferamp.services.gameplan import GameplanService, tomorrow_utc


class TestProfileRepository:
    """Tests for ProfileRepository."""

    def test_create_and_get(self, temp_db_path, sample_profile):
        repo = ProfileRepository(temp_db_path)

        async def run():
            await repo.create(sample_profile)
            return await repo.get("user-1"), await repo.exists("user-1"), await repo.exists("nobody")

        profile, exists, missing = asyncio.run(run())

        assert profile.full_name == "Ada Lovelace"
        assert profile.role == sample_profile.role
        assert profile.age == 28
        assert profile.created_at is not None
        assert exists is True
        assert missing is False

    def test_duplicate_profile_rejected(self, temp_db_path, sample_profile):
        repo = ProfileRepository(temp_db_path)
        asyncio.run(repo.create(sample_profile))

        with pytest.raises(aiosqlite.IntegrityError):
            asyncio.run(repo.create(sample_profile))


class TestGameplanRepositories:
    """Tests for gameplans, goals and flashcards."""

    def test_gameplan_round_trip(self, temp_db_path):
        gameplans = GameplanRepository(temp_db_path)
        goals = GoalRepository(temp_db_path)
        flashcards = FlashcardRepository(temp_db_path)

        async def run():
            gp_id = await gameplans.create("user-1", "Leadership", "DEI")
            await goals.create_many(gp_id, ["one", "two"], date(2026, 1, 2))
            await flashcards.create_many(gp_id, ["card text"])
            return gp_id, await gameplans.get(gp_id, "user-1")

        gp_id, gameplan = asyncio.run(run())

        assert gameplan.id == gp_id
        assert gameplan.completed is False
        assert [g.description for g in gameplan.goals] == ["one", "two"]
        assert all(g.status == GoalStatus.NOT_STARTED for g in gameplan.goals)
        assert gameplan.goals[0].start_date == date(2026, 1, 2)
        assert [f.content for f in gameplan.flashcards] == ["card text"]

    def test_gameplans_are_scoped_to_owner(self, temp_db_path):
        gameplans = GameplanRepository(temp_db_path)

        async def run():
            gp_id = await gameplans.create("user-1", "Leadership", "DEI")
            return (
                await gameplans.get(gp_id, "user-2"),
                await gameplans.set_completed(gp_id, "user-2"),
                await gameplans.list_for_user("user-2"),
            )

        other_get, other_complete, other_list = asyncio.run(run())

        assert other_get is None
        assert other_complete is False
        assert other_list == []

    def test_list_newest_first(self, temp_db_path):
        gameplans = GameplanRepository(temp_db_path)

        async def run():
            first = await gameplans.create("user-1", "Leadership", "DEI")
            second = await gameplans.create("user-1", "Resilience", "Goal Setting")
            return first, second, await gameplans.list_for_user("user-1")

        first, second, items = asyncio.run(run())

        assert [gp.id for gp in items] == [second, first]

    def test_set_completed(self, temp_db_path):
        gameplans = GameplanRepository(temp_db_path)

        async def run():
            gp_id = await gameplans.create("user-1", "Leadership", "DEI")
            updated = await gameplans.set_completed(gp_id, "user-1")
            return updated, await gameplans.get(gp_id, "user-1")

        updated, gameplan = asyncio.run(run())

        assert updated is True
        assert gameplan.completed is True

    def test_goal_status_update_checks_owner(self, temp_db_path):
        gameplans = GameplanRepository(temp_db_path)
        goals = GoalRepository(temp_db_path)

        async def run():
            gp_id = await gameplans.create("user-1", "Leadership", "DEI")
            [goal] = await goals.create_many(gp_id, ["one"], date(2026, 1, 2))
            denied = await goals.update_status(goal.id, GoalStatus.COMPLETED, "user-2")
            allowed = await goals.update_status(goal.id, GoalStatus.IN_PROGRESS, "user-1")
            return denied, allowed, await gameplans.get(gp_id, "user-1")

        denied, allowed, gameplan = asyncio.run(run())

        assert denied is False
        assert allowed is True
        assert gameplan.goals[0].status == GoalStatus.IN_PROGRESS


class TestDocumentRepository:
    """Tests for DocumentRepository."""

    def test_create_and_list(self, temp_db_path):
        repo = DocumentRepository(temp_db_path)
        document = Document(
            user_id="user-1",
            file_path="user-1/1.pdf",
            file_url="/ingest/documents/user-1/1.pdf",
            topics=["Leadership"],
            skills=["DEI", "Authenticity"],
        )

        async def run():
            await repo.create(document)
            return await repo.list_for_user("user-1"), await repo.list_for_user("user-2")

        mine, theirs = asyncio.run(run())

        assert len(mine) == 1
        assert mine[0].topics == ["Leadership"]
        assert mine[0].skills == ["DEI", "Authenticity"]
        assert mine[0].uploaded_at is not None
        assert theirs == []


class TestGameplanService:
    """Tests for GameplanService."""

    def test_tomorrow_utc(self):
        now = datetime(2026, 3, 31, 23, 30, tzinfo=timezone.utc)
        assert tomorrow_utc(now) == date(2026, 4, 1)

    def test_generate_persists_everything(self, temp_db_path, chat_model, sample_flashcard):
        service = GameplanService(chat_model, temp_db_path)
        now = datetime(2026, 1, 1, 12, tzinfo=timezone.utc)

        result = asyncio.run(service.generate("user-1", "Collaboration", "Active Listening", now=now))
        stored = asyncio.run(GameplanRepository(temp_db_path).get(result.gameplan_id, "user-1"))

        assert result.gameplan_id is not None
        assert len(result.goals) == 2
        assert result.flashcards == [sample_flashcard.strip()]
        assert stored.topic == "Collaboration"
        assert all(g.start_date == date(2026, 1, 2) for g in stored.goals)
        assert [f.content for f in stored.flashcards] == result.flashcards

        data = result.to_dict()
        assert data["gameplanId"] == result.gameplan_id
        assert set(data["goals"][0]) == {"id", "description"}
        assert len(data["parsedFlashcards"][0]["questions"]) == 2

    def test_generate_rejects_malformed_output(self, temp_db_path, make_chat_model):
        model = make_chat_model(replies=[json.dumps({"goals": "not a list"})])
        service = GameplanService(model, temp_db_path)

        with pytest.raises(MalformedGameplanError):
            asyncio.run(service.generate("user-1", "Leadership", "DEI"))
        assert asyncio.run(GameplanRepository(temp_db_path).list_all()) == []

    def test_complete_all_goals(self, temp_db_path, chat_model):
        service = GameplanService(chat_model, temp_db_path)
        result = asyncio.run(service.generate("user-1", "Collaboration", "Active Listening"))

        assert asyncio.run(service.complete_all_goals(result.gameplan_id, "user-2")) is None
        assert asyncio.run(service.complete_all_goals(result.gameplan_id, "user-1")) is True

        stored = asyncio.run(GameplanRepository(temp_db_path).get(result.gameplan_id))
        assert stored.all_goals_completed
        assert stored.completed is False

    def test_complete_all_goals_update_failure(self, temp_db_path, chat_model):
        service = GameplanService(chat_model, temp_db_path)
        result = asyncio.run(service.generate("user-1", "Collaboration", "Active Listening"))
        _execute(
            temp_db_path,
            """
            CREATE TRIGGER block_goal_updates BEFORE UPDATE ON goals
            BEGIN SELECT RAISE(ABORT, 'goals are read-only'); END
            """,
        )

        assert asyncio.run(service.complete_all_goals(result.gameplan_id, "user-1")) is False

    def test_gameplan_insert_failure(self, temp_db_path, chat_model, sample_flashcard):
        """Without a stored gameplan there is no id and no goals, but flashcards come back."""
        _execute(temp_db_path, "DROP TABLE gameplans")
        service = GameplanService(chat_model, temp_db_path)

        result = asyncio.run(service.generate("user-1", "Collaboration", "Active Listening"))
        data = result.to_dict()

        assert data["gameplanId"] is None
        assert data["goals"] == []
        assert data["flashcards"] == [sample_flashcard.strip()]

    def test_goal_insert_failure(self, temp_db_path, chat_model, sample_flashcard):
        _execute(temp_db_path, "DROP TABLE goals")
        service = GameplanService(chat_model, temp_db_path)

        result = asyncio.run(service.generate("user-1", "Collaboration", "Active Listening"))
        data = result.to_dict()

        assert data["gameplanId"] is not None
        assert data["goals"] == []
        assert data["flashcards"] == [sample_flashcard.strip()]
        assert len(data["parsedFlashcards"]) == 1

    def test_thumbnails_follow_image_domains(self, temp_db_path, chat_model):
        service = GameplanService(chat_model, temp_db_path)
        result = asyncio.run(service.generate("user-1", "Collaboration", "Active Listening"))

        [allowed] = result.to_dict(["i.ytimg.com"])["parsedFlashcards"]
        [blocked] = result.to_dict(["example.com"])["parsedFlashcards"]

        assert allowed["thumbnail_url"] == "https://i.ytimg.com/vi/abc123XYZ/hqdefault.jpg"
        assert blocked["thumbnail_url"] is None


def _execute(db_path, sql):
    async def run():
        async with aiosqlite.connect(db_path) as db:
            await db.execute(sql)
            await db.commit()

    asyncio.run(run())
