"""CLI entry point for liferamp."""

import click

from . import __version__
from .commands import flashcards, gameplans, init, serve, topics
from .config import Settings, configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="liferamp")
def main():
    """liferamp: AI coaching with weekly gameplans.

    Example usage:

        # Create the database
        liferamp init

        # Run the web interface
        liferamp serve

        # Inspect what has been generated
        liferamp gameplans list
        liferamp gameplans show 1
    """
    configure_logging(Settings.from_env().log_level)


main.add_command(init)
main.add_command(serve)
main.add_command(gameplans)
main.add_command(flashcards)
main.add_command(topics)


def run():
    main()


if __name__ == "__main__":
    run()
