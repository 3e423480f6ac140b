"""Gameplan, goal and flashcard data models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class GoalStatus(str, Enum):
    """Goal lifecycle. Any value may be set at any time."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return {
            GoalStatus.NOT_STARTED: "Not Started",
            GoalStatus.IN_PROGRESS: "In Progress",
            GoalStatus.COMPLETED: "Completed",
        }[self]


@dataclass
class Goal:
    """A trackable task within a gameplan."""

    description: str
    status: GoalStatus = GoalStatus.NOT_STARTED
    start_date: date | None = None
    gameplan_id: int | None = None
    id: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "gameplan_id": self.gameplan_id,
            "description": self.description,
            "status": self.status.value,
            "start_date": self.start_date.isoformat() if self.start_date else None,
        }


@dataclass
class Flashcard:
    """A flashcard as stored: unstructured text, parsed on read."""

    content: str
    gameplan_id: int | None = None
    id: int | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "gameplan_id": self.gameplan_id, "content": self.content}


@dataclass
class Gameplan:
    """A generated weekly set of goals and flashcards for one skill."""

    user_id: str
    topic: str
    skill: str
    completed: bool = False
    goals: list[Goal] = field(default_factory=list)
    flashcards: list[Flashcard] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None

    @property
    def all_goals_completed(self) -> bool:
        return bool(self.goals) and all(g.status == GoalStatus.COMPLETED for g in self.goals)

    @property
    def title(self) -> str:
        return f"{self.topic} – {self.skill}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "topic": self.topic,
            "skill": self.skill,
            "completed": self.completed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "goals": [g.to_dict() for g in self.goals],
            "flashcards": [f.to_dict() for f in self.flashcards],
        }

    def get_summary(self) -> str:
        """Plain-text summary used by the CLI."""
        lines = [f"{self.title} ({'completed' if self.completed else 'open'})"]
        if self.goals:
            lines.append("Goals:")
            for goal in self.goals:
                start = goal.start_date.isoformat() if goal.start_date else "-"
                lines.append(f"  [{goal.status.value}] {goal.description} (start {start})")
        lines.append(f"Flashcards: {len(self.flashcards)}")
        return "\n".join(lines)
