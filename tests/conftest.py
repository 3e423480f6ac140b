"""Pytest configuration and fixtures."""

import asyncio
import json
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from liferamp.clients.auth import AuthSession, AuthUser
from liferamp.config import Settings
from liferamp.db import ProfileRepository, init_db
from liferamp.errors import AuthError, LLMError
from liferamp.models.profile import Gender, Profile, Role
from liferamp.web import create_app


SAMPLE_FLASHCARD = """Video: https://www.youtube.com/watch?v=abc123XYZ
Description: Active listening means giving the speaker your full attention.
It builds trust.
Questions:
1. What is the first step of active listening?
a) Interrupting
b) Paying attention
c) Checking your phone
d) Planning your reply
Correct: b
2. Which habit builds trust?
a) Summarizing what you heard
b) Changing the subject
c) Finishing their sentences
d) Looking away
Correct: a
"""

SAMPLE_GAMEPLAN = {
    "goals": [
        "Practice reflective listening in one meeting",
        "Ask two open-ended questions per day",
    ],
    "flashcards": [SAMPLE_FLASHCARD],
}


class FakeChatModel:
    """ChatModel that replays canned replies and records what it was sent."""

    def __init__(self, replies: list[str] | None = None, error: Exception | None = None):
        self.replies = list(replies or ["  Hello from your coach!  "])
        self.error = error
        self.calls: list[list[dict]] = []

    async def complete(self, messages, temperature=None) -> str:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]


class FakeAuthClient:
    """AuthClient with a fixed set of accounts and tokens."""

    def __init__(self):
        self.users = {
            "good-token": AuthUser(id="user-1", email="ada@example.com"),
            "other-token": AuthUser(id="user-2", email="bob@example.com"),
        }
        self.passwords = {"ada@example.com": ("secret123", "good-token")}
        self.signups: list[str] = []

    async def sign_up(self, email: str, password: str) -> None:
        if email in self.passwords:
            raise AuthError("User already registered")
        self.signups.append(email)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        expected = self.passwords.get(email)
        if expected is None or expected[0] != password:
            raise AuthError("Invalid login credentials")
        token = expected[1]
        return AuthSession(access_token=token, user=self.users[token])

    async def get_user(self, access_token: str) -> AuthUser | None:
        return self.users.get(access_token)


@pytest.fixture
def temp_data_dir():
    """Create a temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_db_path(temp_data_dir):
    """Create an initialized temporary database."""
    db_path = temp_data_dir / "test.db"
    asyncio.run(init_db(db_path))
    return db_path


@pytest.fixture
def settings(temp_data_dir):
    return Settings(data_dir=temp_data_dir, log_level="DEBUG")


@pytest.fixture
def chat_model():
    return FakeChatModel(replies=[json.dumps(SAMPLE_GAMEPLAN)])


@pytest.fixture
def auth_client():
    return FakeAuthClient()


@pytest.fixture
def app(settings, auth_client, chat_model):
    return create_app(settings, auth_client=auth_client, chat_model=chat_model)


@pytest.fixture
def client(app):
    """Signed-out test client."""
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture
def authed_client(client):
    """Test client carrying user-1's access token."""
    client.headers["Authorization"] = "Bearer good-token"
    return client


@pytest.fixture
def sample_profile():
    return Profile(
        id="user-1",
        full_name="Ada Lovelace",
        role=Role.YOUNG_PROFESSIONAL,
        gender=Gender.FEMALE,
        age=28,
    )


@pytest.fixture
def profiled_client(authed_client, app, sample_profile):
    """Signed-in client whose user already has a profile."""
    asyncio.run(ProfileRepository(app.state.db_path).create(sample_profile))
    return authed_client


@pytest.fixture
def sample_flashcard():
    return SAMPLE_FLASHCARD


@pytest.fixture
def make_chat_model():
    return FakeChatModel


@pytest.fixture
def failing_model():
    return FakeChatModel(error=LLMError("boom"))
