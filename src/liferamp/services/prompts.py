"""Prompt templates for the coaching LLM."""

COACH_NAME = "Liferramp360"

GAMEPLAN_SYSTEM = """
You are an AI coaching assistant. Generate a week-long game plan for the skill area "{skill}" under topic "{topic}".
Return a single JSON object with exactly these 2 fields:
1. "goals": an array of 1–3 concise goal descriptions (strings).
2. "flashcards": an array of 1–3 items. Each item can be either:
   • A single string that contains a YouTube video URL, a description, and 3–5 MCQs, OR
   • A JSON object with keys "video_url", "description", and "questions" (where "questions" is an array of lines like "1. …", "A) …", "Correct: …").
Do NOT include any text outside of that JSON object, and do not wrap the JSON in markdown code fences.
"""


def build_chat_system_prompt(topic: str | None, skill: str | None) -> str:
    """System prompt for the coaching chat.

    Args:
        topic: Selected main topic, if any
        skill: Selected skill area, if any
    """
    return " ".join([
        f"You are an AI coaching assistant for {COACH_NAME}.",
        f'The user’s selected topic is: "{topic or "none"}".',
        f'The user’s selected skill area is: "{skill or "none"}".',
        "Maintain a helpful, encouraging tone and build on the user’s input.",
    ])


def build_gameplan_prompt(topic: str, skill: str) -> str:
    """System prompt asking for a strict JSON gameplan."""
    return GAMEPLAN_SYSTEM.format(topic=topic, skill=skill).strip()
