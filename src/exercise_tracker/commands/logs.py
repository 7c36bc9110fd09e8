"""Exercise log command."""

import click

from ..db import ExerciseRepository, UserRepository, get_db_path
from ..errors import ValidationError
from ..validation import validate_date, validate_limit
from .base import async_command, echo_error, echo_info, ensure_initialized, format_table


@click.command()
@click.argument("user_id", type=int)
@click.option("--from", "date_from", default=None, help="Earliest date, YYYY-MM-DD")
@click.option("--to", "date_to", default=None, help="Latest date, YYYY-MM-DD")
@click.option("--limit", "-n", default=None, help="Maximum entries (default 100, at most 1000)")
@click.pass_context
@async_command
async def logs(ctx, user_id: int, date_from: str | None, date_to: str | None, limit: str | None):
    """Show a user's exercise log, oldest first."""
    ensure_initialized(ctx)

    try:
        start = validate_date(date_from) if date_from else None
        end = validate_date(date_to) if date_to else None
        max_entries = validate_limit(limit)
    except ValidationError as e:
        echo_error(e.message)
        ctx.exit(1)

    db_path = get_db_path()
    user = await UserRepository(db_path).get(user_id)
    if user is None:
        echo_error(f"User ID {user_id} not found")
        ctx.exit(1)

    entries = await ExerciseRepository(db_path).list_for_user(
        user.id, date_from=start, date_to=end, limit=max_entries
    )

    click.echo()
    click.echo(f"Exercise log for {user.username} (ID: {user.id})")
    click.echo()

    if not entries:
        echo_info("No exercises found")
        return

    rows = [
        [entry.date_str, str(entry.duration), entry.description]
        for entry in entries
    ]
    click.echo(format_table(["Date", "Minutes", "Description"], rows))
    click.echo()
    click.echo(f"Total: {len(entries)} exercise(s)")
