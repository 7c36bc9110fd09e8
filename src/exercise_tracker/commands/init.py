"""Initialize database command."""

import click

from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the exercise-tracker database.

    Creates the data directory and the users and exercise tables. Running it
    again on an existing database leaves the data untouched.
    """
    db_path = get_db_path()

    echo_info(f"Initializing database at {db_path}")
    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("Start the API with:")
    click.echo("  exercise-tracker serve")
