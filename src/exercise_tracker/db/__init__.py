"""Database layer for exercise-tracker."""

from .engine import connect, get_db_path, init_db
from .repositories import ExerciseRepository, UserRepository

__all__ = [
    "connect",
    "ExerciseRepository",
    "get_db_path",
    "init_db",
    "UserRepository",
]
