"""Gameplan inspection commands."""

import json

import click

from ..db import GameplanRepository
from .base import (
    async_command,
    cli_db_path,
    echo_error,
    echo_info,
    ensure_initialized,
    format_table,
    truncate,
)


@click.group()
@click.pass_context
def gameplans(ctx):
    """Inspect stored gameplans."""
    ensure_initialized(ctx)


@gameplans.command(name="list")
@click.option("--user", "user_id", default=None, help="Only gameplans owned by this user id")
@async_command
async def list_gameplans(user_id: str | None):
    """List gameplans, newest first."""
    repo = GameplanRepository(cli_db_path())
    items = await repo.list_for_user(user_id) if user_id else await repo.list_all()

    if not items:
        echo_info("No gameplans found.")
        return

    headers = ["ID", "User", "Topic", "Skill", "Done", "Created"]
    rows = [
        [
            str(gp.id),
            truncate(gp.user_id, 12),
            gp.topic,
            truncate(gp.skill, 30),
            "yes" if gp.completed else "no",
            gp.created_at.strftime("%Y-%m-%d") if gp.created_at else "N/A",
        ]
        for gp in items
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(items)} gameplan(s)")


@gameplans.command()
@click.argument("gameplan_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Print the gameplan as JSON")
@click.pass_context
@async_command
async def show(ctx, gameplan_id: int, as_json: bool):
    """Show one gameplan with its goals."""
    repo = GameplanRepository(cli_db_path())
    gameplan = await repo.get(gameplan_id)
    if not gameplan:
        echo_error(f"Gameplan ID {gameplan_id} not found")
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(gameplan.to_dict(), indent=2))
        return

    click.echo()
    click.echo(gameplan.get_summary())
