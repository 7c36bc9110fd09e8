"""Data access layer for exercise-tracker."""

import logging
from datetime import date
from pathlib import Path

import aiosqlite

from ..errors import ConflictError, NotFoundError, StoreError
from ..models import Exercise, User
from .engine import connect, get_db_path

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for users."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, username: str) -> User:
        """Insert a user, failing with ConflictError on a duplicate username."""
        try:
            async with connect(self.db_path) as db:
                cursor = await db.execute(
                    "INSERT INTO users (username) VALUES (?)", (username,)
                )
                await db.commit()
                return User(username=username, id=cursor.lastrowid)
        except aiosqlite.IntegrityError:
            raise ConflictError("Username already exists")
        except (aiosqlite.Error, OverflowError) as e:
            logger.error("Failed to insert user", exc_info=True, extra={"error": str(e)})
            raise StoreError("Failed to create user") from e

    async def get(self, user_id: int) -> User | None:
        """Get a user by ID."""
        return await self._fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))

    async def find_by_username(self, username: str) -> User | None:
        """Get a user by username."""
        return await self._fetch_one(
            "SELECT * FROM users WHERE username = ?", (username,)
        )

    async def list_all(self) -> list[User]:
        """List all users in insertion order."""
        try:
            async with connect(self.db_path) as db:
                cursor = await db.execute("SELECT * FROM users ORDER BY id ASC")
                rows = await cursor.fetchall()
        except (aiosqlite.Error, OverflowError) as e:
            logger.error("Failed to list users", exc_info=True, extra={"error": str(e)})
            raise StoreError() from e
        return [User.from_dict(dict(row)) for row in rows]

    async def _fetch_one(self, query: str, params: tuple) -> User | None:
        try:
            async with connect(self.db_path) as db:
                cursor = await db.execute(query, params)
                row = await cursor.fetchone()
        except (aiosqlite.Error, OverflowError) as e:
            logger.error("Failed to look up user", exc_info=True, extra={"error": str(e)})
            raise StoreError() from e
        if row is None:
            return None
        return User.from_dict(dict(row))


class ExerciseRepository:
    """Repository for logged exercises."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(
        self,
        user_id: int,
        description: str,
        duration: int | float,
        exercise_date: date,
    ) -> Exercise:
        """Insert an exercise for an existing user.

        Raises:
            NotFoundError: if ``user_id`` does not reference a user
            StoreError: on any other database failure
        """
        exercise = Exercise(
            user_id=user_id,
            description=description,
            duration=duration,
            date=exercise_date,
        )
        try:
            async with connect(self.db_path) as db:
                cursor = await db.execute(
                    """
                    INSERT INTO exercise (userId, description, duration, date)
                    VALUES (?, ?, ?, ?)
                    """,
                    (user_id, description, duration, exercise.date_str),
                )
                await db.commit()
                exercise.id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            if "FOREIGN KEY" in str(e):
                raise NotFoundError("User not found")
            logger.error("Failed to insert exercise", exc_info=True, extra={"error": str(e)})
            raise StoreError("Failed to create exercise") from e
        except (aiosqlite.Error, OverflowError) as e:
            logger.error("Failed to insert exercise", exc_info=True, extra={"error": str(e)})
            raise StoreError("Failed to create exercise") from e
        return exercise

    async def list_for_user(
        self,
        user_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
        limit: int = 100,
    ) -> list[Exercise]:
        """List a user's exercises in ascending date order.

        Args:
            user_id: Owner of the exercises
            date_from: Inclusive lower bound, applied only when given
            date_to: Inclusive upper bound, applied only when given
            limit: Maximum number of entries, always the earliest ones

        Returns:
            Matching exercises, oldest first
        """
        query = "SELECT * FROM exercise WHERE userId = ?"
        params: list = [user_id]

        if date_from is not None:
            query += " AND date >= ?"
            params.append(date_from.isoformat())

        if date_to is not None:
            query += " AND date <= ?"
            params.append(date_to.isoformat())

        query += " ORDER BY date ASC, id ASC LIMIT ?"
        params.append(limit)

        try:
            async with connect(self.db_path) as db:
                cursor = await db.execute(query, params)
                rows = await cursor.fetchall()
        except (aiosqlite.Error, OverflowError) as e:
            logger.error("Failed to list exercises", exc_info=True, extra={"error": str(e)})
            raise StoreError() from e
        return [Exercise.from_dict(dict(row)) for row in rows]

    async def count_for_user(self, user_id: int) -> int:
        """Count all exercises logged by a user."""
        try:
            async with connect(self.db_path) as db:
                cursor = await db.execute(
                    "SELECT COUNT(*) FROM exercise WHERE userId = ?", (user_id,)
                )
                row = await cursor.fetchone()
        except (aiosqlite.Error, OverflowError) as e:
            logger.error("Failed to count exercises", exc_info=True, extra={"error": str(e)})
            raise StoreError() from e
        return row[0]
