"""User listing command."""

import click

from ..db import ExerciseRepository, UserRepository, get_db_path
from .base import async_command, echo_info, ensure_initialized, format_table


@click.command()
@click.pass_context
@async_command
async def users(ctx):
    """List all users with their exercise counts."""
    ensure_initialized(ctx)
    db_path = get_db_path()
    user_repo = UserRepository(db_path)
    exercise_repo = ExerciseRepository(db_path)

    all_users = await user_repo.list_all()

    if not all_users:
        echo_info("No users found. Create one with POST /api/users")
        return

    rows = []
    for user in all_users:
        count = await exercise_repo.count_for_user(user.id)
        rows.append([str(user.id), user.username, str(count)])

    click.echo()
    click.echo(format_table(["ID", "Username", "Exercises"], rows))
    click.echo()
    click.echo(f"Total: {len(all_users)} user(s)")
