"""Client for the hosted authentication provider (Supabase Auth)."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from supabase import AuthError as SupabaseAuthError
from supabase import Client, create_client

from ..errors import AuthError, AuthNotConfiguredError

logger = logging.getLogger(__name__)


@dataclass
class AuthUser:
    """An authenticated account."""

    id: str
    email: str | None = None


@dataclass
class AuthSession:
    """Tokens issued on sign-in."""

    access_token: str
    user: AuthUser
    refresh_token: str | None = None


@runtime_checkable
class AuthClient(Protocol):
    """Protocol for auth providers."""

    async def sign_up(self, email: str, password: str) -> None:
        ...

    async def sign_in(self, email: str, password: str) -> AuthSession:
        ...

    async def get_user(self, access_token: str) -> AuthUser | None:
        ...


class SupabaseAuthClient:
    """Supabase Auth via the supabase client library.

    The library is synchronous, so calls run in a worker thread.
    """

    def __init__(self, url: str | None, anon_key: str | None, client: Client | None = None):
        self._client = client
        if self._client is None and url and anon_key:
            self._client = create_client(url, anon_key)

    @property
    def configured(self) -> bool:
        return self._client is not None

    def _require_client(self) -> Client:
        if self._client is None:
            raise AuthNotConfiguredError("Authentication provider is not configured")
        return self._client

    async def sign_up(self, email: str, password: str) -> None:
        """Register an account; the provider emails a confirmation link."""
        client = self._require_client()
        try:
            await asyncio.to_thread(
                client.auth.sign_up, {"email": email, "password": password}
            )
        except SupabaseAuthError as e:
            raise AuthError(e.message) from e

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password.

        Raises:
            AuthError: with the provider's message on bad credentials
        """
        client = self._require_client()
        try:
            response = await asyncio.to_thread(
                client.auth.sign_in_with_password, {"email": email, "password": password}
            )
        except SupabaseAuthError as e:
            raise AuthError(e.message) from e

        if response.session is None or response.user is None:
            raise AuthError("Sign-in did not return a session")

        return AuthSession(
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            user=AuthUser(id=str(response.user.id), email=response.user.email),
        )

    async def get_user(self, access_token: str) -> AuthUser | None:
        """Resolve an access token to its user, or None if it is not valid."""
        if self._client is None:
            logger.warning("Auth provider not configured; treating request as signed out")
            return None
        try:
            response = await asyncio.to_thread(self._client.auth.get_user, access_token)
        except SupabaseAuthError as e:
            logger.info("Rejected access token: %s", e.message)
            return None

        if response is None or response.user is None:
            return None
        return AuthUser(id=str(response.user.id), email=response.user.email)
