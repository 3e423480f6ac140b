"""Clients for the external auth provider and LLM."""

from .auth import AuthClient, AuthSession, AuthUser, SupabaseAuthClient
from .llm import ChatMessage, ChatModel, OpenAIChatModel

__all__ = [
    "AuthClient",
    "AuthSession",
    "AuthUser",
    "ChatMessage",
    "ChatModel",
    "OpenAIChatModel",
    "SupabaseAuthClient",
]
