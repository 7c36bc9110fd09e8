"""User and exercise log routes."""

import logging
import re

from fastapi import APIRouter, Depends, Request, status

from ...db.repositories import ExerciseRepository, UserRepository
from ...errors import ConflictError, NotFoundError
from ...models import User
from ...validation import MAX_SQLITE_INT
from ..schemas import (
    CreateUserRequest,
    LogExerciseRequest,
    LogQuery,
    body_of,
    log_query,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["users"])

USER_ID_PATTERN = re.compile(r"\d{1,19}", re.ASCII)


def get_user_repo(request: Request) -> UserRepository:
    """Build a user repository on the app's database."""
    return UserRepository(request.app.state.db_path)


def get_exercise_repo(request: Request) -> ExerciseRepository:
    """Build an exercise repository on the app's database."""
    return ExerciseRepository(request.app.state.db_path)


def _parse_user_id(raw_id: str) -> int | None:
    """Parse a path ID, or return None when it cannot name a stored user."""
    if not USER_ID_PATTERN.fullmatch(raw_id):
        return None
    user_id = int(raw_id)
    if user_id > MAX_SQLITE_INT:
        return None
    return user_id


async def _require_user(users: UserRepository, raw_id: str) -> User:
    """Look up a user by path ID, raising NotFoundError when absent."""
    user_id = _parse_user_id(raw_id)
    if user_id is None:
        raise NotFoundError("User not found")

    user = await users.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: CreateUserRequest = Depends(body_of(CreateUserRequest)),
    users: UserRepository = Depends(get_user_repo),
):
    """Create a user with a unique username."""
    if await users.find_by_username(body.username):
        raise ConflictError("Username already exists")

    user = await users.create(body.username)
    logger.info("User created", extra={"user_id": user.id})

    return {
        "message": "User created",
        "response": {"_id": user.id, "username": user.username},
    }


@router.get("/users")
async def list_users(users: UserRepository = Depends(get_user_repo)):
    """List every user in creation order."""
    all_users = await users.list_all()
    return {
        "message": "Success",
        "response": [user.to_dict() for user in all_users],
    }


@router.post("/users/{user_id}/exercises", status_code=status.HTTP_201_CREATED)
async def log_exercise(
    user_id: str,
    body: LogExerciseRequest = Depends(body_of(LogExerciseRequest)),
    users: UserRepository = Depends(get_user_repo),
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    """Log an exercise for an existing user."""
    user = await _require_user(users, user_id)

    exercise = await exercises.create(
        user.id,
        body.description,
        body.duration,
        body.date,
    )
    logger.info(
        f"Exercise {exercise.id} logged",
        extra={"user_id": user.id},
    )

    return {
        "userId": user.id,
        "exerciseId": exercise.id,
        "description": exercise.description,
        "duration": exercise.duration,
        "date": exercise.date_str,
    }


@router.get("/users/{user_id}/logs")
async def list_logs(
    user_id: str,
    query: LogQuery = Depends(log_query),
    users: UserRepository = Depends(get_user_repo),
    exercises: ExerciseRepository = Depends(get_exercise_repo),
):
    """Get a user's exercise log, oldest first."""
    user = await _require_user(users, user_id)

    logs = await exercises.list_for_user(
        user.id,
        date_from=query.date_from,
        date_to=query.date_to,
        limit=query.limit,
    )

    return {
        "userId": user.id,
        "username": user.username,
        "count": len(logs),
        "logs": [log.to_log_entry() for log in logs],
    }
