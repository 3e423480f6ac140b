"""Initialize project command."""

import click

from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success, get_data_dir


@click.command()
@async_command
async def init():
    """Create the data directory and the SQLite database."""
    data_dir = get_data_dir()
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing liferamp in {data_dir}")
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "documents").mkdir(exist_ok=True)

    await init_db(db_path)
    echo_success(f"Database initialized at {db_path}")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Put OPENAI_API_KEY, SUPABASE_URL and SUPABASE_ANON_KEY in .env")
    click.echo("  2. Start the web interface:")
    click.echo("     liferamp serve")
