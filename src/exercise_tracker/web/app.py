"""FastAPI application for exercise-tracker."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..config import Settings, get_settings
from ..db.engine import get_db_path, init_db
from ..observability import setup_logging
from .errors import register_error_handlers
from .routers import users

logger = logging.getLogger(__name__)

# Template and static file paths
TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)

    # Startup: create the schema if it is missing
    await init_db(app.state.db_path)
    logger.info(f"exercise-tracker {__version__} using {app.state.db_path}")
    yield


def create_app(
    settings: Settings | None = None,
    db_path: Path | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration to use, defaults to the environment
        db_path: Database file overriding the one derived from settings
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="exercise-tracker",
        description="Track users and their logged exercises",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_path = db_path or get_db_path(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount static files
    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    templates = Jinja2Templates(directory=TEMPLATES_DIR)

    register_error_handlers(app)
    app.include_router(users.router)

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        """Index page with forms for the API."""
        return templates.TemplateResponse(
            request,
            "index.html",
            {"version": __version__},
        )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
