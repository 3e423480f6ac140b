"""Coaching services."""

from .chat import ChatService, HistoryMessage
from .gameplan import GameplanResult, GameplanService

__all__ = ["ChatService", "GameplanResult", "GameplanService", "HistoryMessage"]
