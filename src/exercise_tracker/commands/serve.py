"""Web server command."""

import click

from ..config import get_settings


@click.command()
@click.option("--host", default=None, help="Host to bind to (default: from settings, 127.0.0.1)")
@click.option("--port", "-p", default=None, type=int, help="Port to bind to (default: from settings, 3000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def serve(host: str | None, port: int | None, reload: bool):
    """Start the API server.

    The database schema is created on startup if it does not exist yet.

    Examples:

        # Start on the configured port (PORT or 3000)
        exercise-tracker serve

        # Expose to network (all interfaces)
        exercise-tracker serve --host 0.0.0.0

        # Development mode with auto-reload
        exercise-tracker serve --reload
    """
    import uvicorn

    from ..web import create_app

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    click.echo()
    click.echo(click.style("Starting exercise-tracker API...", fg="green"))
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo()

    uvicorn.run(
        create_app() if not reload else "exercise_tracker.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
        log_config=None,
    )
