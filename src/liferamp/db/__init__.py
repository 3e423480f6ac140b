"""Database layer for liferamp."""

from .engine import get_db_path, init_db
from .repositories import (
    DocumentRepository,
    FlashcardRepository,
    GameplanRepository,
    GoalRepository,
    ProfileRepository,
)

__all__ = [
    "DocumentRepository",
    "FlashcardRepository",
    "GameplanRepository",
    "get_db_path",
    "GoalRepository",
    "init_db",
    "ProfileRepository",
]
