"""Flashcard parsing command."""

import json

import click

from ..parsers import parse_flashcard


@click.group()
def flashcards():
    """Work with flashcard text."""


@flashcards.command()
@click.argument("source", type=click.File("r"))
@click.option("--json", "as_json", is_flag=True, help="Print the parsed card as JSON")
def parse(source, as_json: bool):
    """Parse a flashcard from SOURCE (a file, or - for stdin)."""
    card = parse_flashcard(source.read())

    if as_json:
        click.echo(json.dumps(card.to_dict(), indent=2))
        return

    click.echo(f"Video: {card.video_url or '(none)'}")
    for line in card.description_lines:
        click.echo(f"  {line}")
    click.echo()
    for idx, question in enumerate(card.questions, 1):
        click.echo(f"{idx}. {question.prompt}")
        for letter, option in zip("abcd", question.options):
            marker = "*" if letter == question.correct_letter else " "
            click.echo(f"  {marker} {letter}) {option}")
    if not card.questions:
        click.echo("(no questions)")
