"""Data access layer for liferamp.

Every gameplan read or write takes the owning user's id so that one user can
never see or touch another user's gameplans, goals or flashcards.
"""

import json
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..models.document import Document
from ..models.gameplan import Flashcard, Gameplan, Goal, GoalStatus
from ..models.profile import Profile
from .engine import get_db_path


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class ProfileRepository:
    """Repository for user profiles."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, profile: Profile) -> None:
        """Insert a profile. Raises aiosqlite.IntegrityError if it exists."""
        data = profile.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO profiles (id, full_name, role, gender, age)
                VALUES (?, ?, ?, ?, ?)
                """,
                (data["id"], data["full_name"], data["role"], data["gender"], data["age"]),
            )
            await db.commit()

    async def get(self, user_id: str) -> Profile | None:
        """Get the profile for an auth user id."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM profiles WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return Profile.from_dict(dict(row), created_at=_parse_timestamp(row["created_at"]))

    async def exists(self, user_id: str) -> bool:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("SELECT 1 FROM profiles WHERE id = ?", (user_id,))
            return await cursor.fetchone() is not None


class GameplanRepository:
    """Repository for gameplans, including their goals and flashcards on read."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user_id: str, topic: str, skill: str) -> int:
        """Create a new (not completed) gameplan."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO gameplans (user_id, topic, skill, completed)
                VALUES (?, ?, ?, 0)
                """,
                (user_id, topic, skill),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, gameplan_id: int, user_id: str | None = None) -> Gameplan | None:
        """Get a gameplan with its goals and flashcards.

        Args:
            gameplan_id: Gameplan ID
            user_id: Owning user; None skips the ownership check (CLI use)
        """
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if user_id is None:
                cursor = await db.execute(
                    "SELECT * FROM gameplans WHERE id = ?", (gameplan_id,)
                )
            else:
                cursor = await db.execute(
                    "SELECT * FROM gameplans WHERE id = ? AND user_id = ?",
                    (gameplan_id, user_id),
                )
            row = await cursor.fetchone()
            if row is None:
                return None

            gameplan = self._row_to_gameplan(row)

            cursor = await db.execute(
                "SELECT * FROM goals WHERE gameplan_id = ? ORDER BY id", (gameplan_id,)
            )
            gameplan.goals = [GoalRepository.row_to_goal(r) for r in await cursor.fetchall()]

            cursor = await db.execute(
                "SELECT * FROM flashcards WHERE gameplan_id = ? ORDER BY id", (gameplan_id,)
            )
            gameplan.flashcards = [
                Flashcard(id=r["id"], gameplan_id=r["gameplan_id"], content=r["content"])
                for r in await cursor.fetchall()
            ]
            return gameplan

    async def list_for_user(self, user_id: str) -> list[Gameplan]:
        """List a user's gameplans, newest first (goals/flashcards not loaded)."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM gameplans WHERE user_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_gameplan(row) for row in rows]

    async def list_all(self) -> list[Gameplan]:
        """List every gameplan, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM gameplans ORDER BY created_at DESC, id DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_gameplan(row) for row in rows]

    async def set_completed(self, gameplan_id: int, user_id: str, completed: bool = True) -> bool:
        """Set the completed flag. Returns False if the gameplan is not the user's."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "UPDATE gameplans SET completed = ? WHERE id = ? AND user_id = ?",
                (1 if completed else 0, gameplan_id, user_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_gameplan(self, row: aiosqlite.Row) -> Gameplan:
        return Gameplan(
            id=row["id"],
            user_id=row["user_id"],
            topic=row["topic"],
            skill=row["skill"],
            completed=bool(row["completed"]),
            created_at=_parse_timestamp(row["created_at"]),
        )


class GoalRepository:
    """Repository for gameplan goals."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create_many(
        self, gameplan_id: int, descriptions: list[str], start_date: date
    ) -> list[Goal]:
        """Insert one not-started goal per description."""
        goals = []
        async with aiosqlite.connect(self.db_path) as db:
            for description in descriptions:
                cursor = await db.execute(
                    """
                    INSERT INTO goals (gameplan_id, description, status, start_date)
                    VALUES (?, ?, ?, ?)
                    """,
                    (gameplan_id, description, GoalStatus.NOT_STARTED.value, start_date.isoformat()),
                )
                goals.append(
                    Goal(
                        id=cursor.lastrowid,
                        gameplan_id=gameplan_id,
                        description=description,
                        start_date=start_date,
                    )
                )
            await db.commit()
        return goals

    async def update_status(self, goal_id: int, status: GoalStatus, user_id: str) -> bool:
        """Set a goal's status. Returns False if the goal is not in the user's gameplans."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE goals SET status = ?
                WHERE id = ? AND gameplan_id IN (
                    SELECT id FROM gameplans WHERE user_id = ?
                )
                """,
                (status.value, goal_id, user_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    @staticmethod
    def row_to_goal(row: aiosqlite.Row) -> Goal:
        return Goal(
            id=row["id"],
            gameplan_id=row["gameplan_id"],
            description=row["description"],
            status=GoalStatus(row["status"]),
            start_date=date.fromisoformat(row["start_date"]) if row["start_date"] else None,
        )


class FlashcardRepository:
    """Repository for raw flashcard content."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create_many(self, gameplan_id: int, contents: list[str]) -> list[int]:
        ids = []
        async with aiosqlite.connect(self.db_path) as db:
            for content in contents:
                cursor = await db.execute(
                    "INSERT INTO flashcards (gameplan_id, content) VALUES (?, ?)",
                    (gameplan_id, content),
                )
                ids.append(cursor.lastrowid)
            await db.commit()
        return ids


class DocumentRepository:
    """Repository for ingested document metadata."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, document: Document) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO documents
                (user_id, file_path, file_url, topics, skills, uploaded_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    document.user_id,
                    document.file_path,
                    document.file_url,
                    json.dumps(document.topics),
                    json.dumps(document.skills),
                    (document.uploaded_at or datetime.now()).isoformat(),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def list_for_user(self, user_id: str) -> list[Document]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM documents WHERE user_id = ? ORDER BY uploaded_at DESC, id DESC",
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [
                Document(
                    id=row["id"],
                    user_id=row["user_id"],
                    file_path=row["file_path"],
                    file_url=row["file_url"],
                    topics=json.loads(row["topics"]),
                    skills=json.loads(row["skills"]),
                    uploaded_at=_parse_timestamp(row["uploaded_at"]),
                )
                for row in rows
            ]
