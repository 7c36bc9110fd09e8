"""Database engine setup and initialization."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from ..config import Settings, get_settings


def get_db_path(settings: Settings | None = None) -> Path:
    """Get the database file path, creating its directory."""
    if settings is None:
        settings = get_settings()
    db_path = settings.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with row access by name and foreign keys enforced."""
    async with aiosqlite.connect(db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        yield db


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with connect(db_path) as db:
        # Users table
        await db.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT NOT NULL UNIQUE
            )
        """)

        # Exercise log table
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercise (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                userId INTEGER NOT NULL,
                description TEXT NOT NULL,
                duration REAL NOT NULL,
                date TEXT NOT NULL,
                FOREIGN KEY (userId) REFERENCES users(id)
            )
        """)

        # Logs are always read per user in date order
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_user_date
            ON exercise(userId, date)
        """)

        await db.commit()
