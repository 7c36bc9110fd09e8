"""CLI entry point for exercise-tracker."""

import click

from . import __version__
from .commands import init, logs, serve, users
from .config import get_settings
from .observability import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="exercise-tracker")
def main():
    """exercise-tracker: track users and their logged exercises.

    Serves an HTTP API for creating users, logging exercises and querying
    exercise history, and offers commands to inspect the same data.

    Example usage:

        # Initialize the database
        exercise-tracker init

        # Start the API server
        exercise-tracker serve --port 3000

        # Inspect stored data
        exercise-tracker users
        exercise-tracker logs 1 --from 2023-01-01 --limit 10
    """
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)


# Register commands
main.add_command(init)
main.add_command(serve)
main.add_command(users)
main.add_command(logs)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
