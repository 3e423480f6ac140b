"""Application settings loaded from the environment."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Default data directory (repository root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"

DEFAULT_IMAGE_DOMAINS = ["i.ytimg.com", "lh3.googleusercontent.com"]


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Runtime configuration.

    LLM and auth settings are optional at startup; the features that need
    them report a per-request error when they are missing.
    """

    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    data_dir: Path = DATA_DIR
    image_domains: list[str] = field(default_factory=lambda: list(DEFAULT_IMAGE_DOMAINS))
    cookie_secure: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "Settings":
        """Build settings from environment variables (and a .env file)."""
        load_dotenv(env_file)
        data_dir = os.getenv("LIFERAMP_DATA_DIR")
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            openai_temperature=float(os.getenv("OPENAI_TEMPERATURE", "0.7")),
            supabase_url=os.getenv("SUPABASE_URL") or None,
            supabase_anon_key=os.getenv("SUPABASE_ANON_KEY") or None,
            data_dir=Path(data_dir) if data_dir else DATA_DIR,
            image_domains=_env_list("LIFERAMP_IMAGE_DOMAINS", DEFAULT_IMAGE_DOMAINS),
            cookie_secure=_env_bool("LIFERAMP_COOKIE_SECURE"),
            log_level=os.getenv("LIFERAMP_LOG_LEVEL", "INFO").upper(),
        )

    @property
    def documents_dir(self) -> Path:
        """Directory for ingested documents."""
        return self.data_dir / "documents"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the app and the CLI."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
