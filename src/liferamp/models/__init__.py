"""Data models for liferamp."""

from .document import Document
from .gameplan import Flashcard, Gameplan, Goal, GoalStatus
from .profile import Gender, Profile, Role
from .topics import TOPIC_SKILLS, TOPICS, get_skills

__all__ = [
    "Document",
    "Flashcard",
    "Gameplan",
    "Gender",
    "get_skills",
    "Goal",
    "GoalStatus",
    "Profile",
    "Role",
    "TOPIC_SKILLS",
    "TOPICS",
]
