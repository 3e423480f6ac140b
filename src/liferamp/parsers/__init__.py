"""Parsers for LLM-produced text."""

from .flashcard import GradeResult, ParsedFlashcard, Question, parse_flashcard
from .gameplan import GameplanPayload, normalize_flashcard, parse_gameplan_response

__all__ = [
    "GameplanPayload",
    "GradeResult",
    "normalize_flashcard",
    "parse_flashcard",
    "parse_gameplan_response",
    "ParsedFlashcard",
    "Question",
]
