"""Shared CLI utilities."""

import asyncio
from functools import wraps
from pathlib import Path

import click

from ..config import Settings
from ..db import get_db_path


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_data_dir() -> Path:
    """Data directory from LIFERAMP_DATA_DIR (or the default)."""
    return Settings.from_env().data_dir


def cli_db_path() -> Path:
    return get_db_path(get_data_dir())


def ensure_initialized(ctx: click.Context) -> None:
    """Exit unless the database exists."""
    if not cli_db_path().exists():
        echo_error("Project not initialized. Run 'liferamp init' first.")
        ctx.exit(1)


def echo_success(message: str) -> None:
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    click.echo(click.style("[INFO] ", fg="blue") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Left-aligned plain-text table; empty string when there are no rows."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    def line(cells) -> str:
        return "".join(str(c).ljust(widths[i] + padding) for i, c in enumerate(cells)).rstrip()

    lines = [line(headers), line("-" * w for w in widths)]
    lines.extend(line(row) for row in rows)
    return "\n".join(lines)


def truncate(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."
