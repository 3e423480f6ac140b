"""Flashcard text parser.

Flashcards are stored as loosely structured text produced by the LLM. This
module turns one such blob into a ParsedFlashcard with a video link, the
description lines and the multiple-choice questions.

Flashcard Format Reference:
- An optional "Video: <url>" line (any YouTube watch URL in the text is used)
- A "Description:" line, optionally followed by more description lines
- A "Questions:" line, followed by question blocks
- Each question block: "N. prompt", "a)".."d)" option lines, "Correct: x"
- Any other line in a question block continues the last option, or the
  prompt when the question has no options yet

Example:
```
Video: https://www.youtube.com/watch?v=abc123
Description: Active listening means giving full attention.
Questions:
1. What is the first step of active listening?
a) Interrupting
b) Paying attention
c) Planning a reply
d) Checking your phone
Correct: b
```

Malformed lines are dropped; the parser never raises.
"""

import re
from dataclasses import dataclass, field
from urllib.parse import parse_qs, urlparse

VIDEO_URL_RE = re.compile(r"https?://(www\.)?youtube\.com/watch\?v=[\w-]+", re.IGNORECASE)
QUESTION_RE = re.compile(r"^\d+\.\s")
QUESTION_PREFIX_RE = re.compile(r"^\d+\.\s*")
OPTION_RE = re.compile(r"^[a-d]\)", re.IGNORECASE)
OPTION_PREFIX_RE = re.compile(r"^[a-d]\)\s*", re.IGNORECASE)
CORRECT_RE = re.compile(r"^Correct:\s*", re.IGNORECASE)

OPTION_LETTERS = "abcd"
THUMBNAIL_HOST = "i.ytimg.com"


@dataclass
class Question:
    """A multiple-choice question."""

    prompt: str
    options: list[str] = field(default_factory=list)
    correct: str = ""  # raw text after "Correct:", e.g. "b" or "B) Paying attention"

    @property
    def correct_letter(self) -> str:
        """Lowercase option letter of the correct answer, or "" if unknown."""
        if not self.correct:
            return ""
        letter = self.correct[0].lower()
        return letter if letter in OPTION_LETTERS else ""

    def is_correct(self, answer: str | None) -> bool:
        if not answer or not self.correct_letter:
            return False
        return answer.strip().lower()[:1] == self.correct_letter

    def to_dict(self) -> dict:
        return {
            "prompt": self.prompt,
            "options": list(self.options),
            "correct": self.correct,
            "correct_letter": self.correct_letter,
        }


@dataclass
class GradeResult:
    """Outcome of answering one flashcard's questions."""

    correct: int
    total: int
    results: list[dict]

    def to_dict(self) -> dict:
        return {"correct": self.correct, "total": self.total, "results": self.results}


@dataclass
class ParsedFlashcard:
    """A flashcard broken into video, description and questions."""

    video_url: str | None
    description_lines: list[str] = field(default_factory=list)
    questions: list[Question] = field(default_factory=list)

    @property
    def embed_url(self) -> str | None:
        if not self.video_url:
            return None
        return self.video_url.replace("watch?v=", "embed/")

    @property
    def video_id(self) -> str | None:
        if not self.video_url:
            return None
        ids = parse_qs(urlparse(self.video_url).query).get("v")
        return ids[0] if ids else None

    def thumbnail_url(self, allowed_domains: list[str]) -> str | None:
        """YouTube thumbnail URL, if the thumbnail host is allow-listed."""
        video_id = self.video_id
        if not video_id or THUMBNAIL_HOST not in allowed_domains:
            return None
        return f"https://{THUMBNAIL_HOST}/vi/{video_id}/hqdefault.jpg"

    def grade(self, answers: dict[int, str]) -> GradeResult:
        """Score answers keyed by question index (0-based) to option letter."""
        results = []
        correct = 0
        for idx, question in enumerate(self.questions):
            answer = answers.get(idx)
            is_correct = question.is_correct(answer)
            if is_correct:
                correct += 1
            results.append({
                "index": idx,
                "answer": answer.strip().lower() if answer else None,
                "correct_letter": question.correct_letter,
                "is_correct": is_correct,
            })
        return GradeResult(correct=correct, total=len(self.questions), results=results)

    def to_dict(self, image_domains: list[str] | None = None) -> dict:
        return {
            "video_url": self.video_url,
            "embed_url": self.embed_url,
            "thumbnail_url": self.thumbnail_url(image_domains or []),
            "description_lines": list(self.description_lines),
            "questions": [q.to_dict() for q in self.questions],
        }


def _split_sections(content: str) -> tuple[list[str], list[str]]:
    """Split cleaned lines into the description block and the question block."""
    lines = [
        line.strip()
        for line in content.split("\n")
        if not line.startswith("Video: ")
    ]
    lines = [line for line in lines if line]

    description_lines: list[str] = []
    question_lines: list[str] = []
    section = None

    for line in lines:
        if line.startswith("Description:") and section != "questions":
            section = "description"
            rest = line[len("Description:"):].strip()
            if rest:
                description_lines.append(rest)
        elif line.startswith("Questions:"):
            section = "questions"
        elif section == "description":
            description_lines.append(line)
        elif section == "questions":
            question_lines.append(line)

    return description_lines, question_lines


def _parse_questions(lines: list[str]) -> list[Question]:
    questions: list[Question] = []
    current: Question | None = None

    for line in lines:
        if QUESTION_RE.match(line):
            if current:
                questions.append(current)
            current = Question(prompt=QUESTION_PREFIX_RE.sub("", line, count=1).strip())
        elif OPTION_RE.match(line):
            if current:
                current.options.append(OPTION_PREFIX_RE.sub("", line, count=1).strip())
        elif CORRECT_RE.match(line):
            if current:
                current.correct = CORRECT_RE.sub("", line, count=1).strip()
        elif current and current.options:
            current.options[-1] += " " + line
        elif current:
            current.prompt += " " + line

    if current:
        questions.append(current)
    return questions


def parse_flashcard(content: str) -> ParsedFlashcard:
    """Parse one raw flashcard string.

    Args:
        content: Raw flashcard text as stored

    Returns:
        ParsedFlashcard; missing parts come back empty rather than raising
    """
    match = VIDEO_URL_RE.search(content or "")
    video_url = match.group(0) if match else None

    description_lines, question_lines = _split_sections(content or "")
    return ParsedFlashcard(
        video_url=video_url,
        description_lines=description_lines,
        questions=_parse_questions(question_lines),
    )
