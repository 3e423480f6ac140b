"""Topic catalog command."""

import click

from ..models.topics import TOPICS, get_skills


@click.command()
@click.argument("topic", required=False)
def topics(topic: str | None):
    """List coaching topics, or the skill areas of TOPIC."""
    if topic is None:
        for name in TOPICS:
            click.echo(f"{name} ({len(get_skills(name))} skills)")
        return

    skills = get_skills(topic)
    if not skills:
        raise click.BadParameter(f"Unknown topic: {topic}", param_hint="TOPIC")
    for skill in skills:
        click.echo(skill)
