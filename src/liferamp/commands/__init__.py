"""CLI commands for liferamp."""

from .flashcards import flashcards
from .gameplans import gameplans
from .init import init
from .serve import serve
from .topics import topics

__all__ = ["flashcards", "gameplans", "init", "serve", "topics"]
