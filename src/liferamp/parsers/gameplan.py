"""Parsing of the LLM's gameplan JSON payload."""

import json
import logging
import re
from dataclasses import dataclass

from ..errors import MalformedGameplanError

logger = logging.getLogger(__name__)

JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

MALFORMED_DATA = "Malformed gameplan data from OpenAI."
MALFORMED_GOALS = "Malformed goals array from OpenAI."
MALFORMED_FLASHCARDS = "Malformed flashcards array from OpenAI."


@dataclass
class GameplanPayload:
    """Validated goals and normalized raw flashcard strings."""

    goals: list[str]
    flashcards: list[str]


def extract_json(raw: str):
    """Parse the response as JSON, falling back to the outermost {...} span."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        match = JSON_OBJECT_RE.search(raw)
        if not match:
            logger.error("Could not parse JSON from gameplan response: %s", e)
            raise MalformedGameplanError(MALFORMED_DATA) from e
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as inner:
            logger.error("Extracted gameplan JSON is invalid: %s", inner)
            raise MalformedGameplanError(MALFORMED_DATA) from inner


def normalize_flashcard(item) -> str:
    """Convert one flashcard item from the payload to the stored text format."""
    if isinstance(item, str):
        return item.strip()

    if isinstance(item, dict) and all(k in item for k in ("video_url", "description", "questions")):
        text = f"Video: {item['video_url']}\n"
        text += f"Description: {item['description']}\n"
        text += "Questions:\n"
        questions = item["questions"] if isinstance(item["questions"], list) else []
        for line in questions:
            if isinstance(line, str):
                text += f"{line}\n"
        return text.strip()

    return json.dumps(item)


def parse_gameplan_response(raw: str) -> GameplanPayload:
    """Validate a raw gameplan response.

    Raises:
        MalformedGameplanError: with a message suitable for the user
    """
    parsed = extract_json(raw)
    if not isinstance(parsed, dict):
        parsed = {}

    goals = parsed.get("goals")
    if not isinstance(goals, list) or any(not isinstance(g, str) for g in goals):
        logger.error("'goals' field is not an array of strings: %r", parsed)
        raise MalformedGameplanError(MALFORMED_GOALS)

    flashcards = parsed.get("flashcards")
    if not isinstance(flashcards, list):
        logger.error("'flashcards' field is not an array: %r", parsed)
        raise MalformedGameplanError(MALFORMED_FLASHCARDS)

    return GameplanPayload(
        goals=list(goals),
        flashcards=[normalize_flashcard(item) for item in flashcards],
    )
