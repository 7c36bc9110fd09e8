"""Data models for exercise-tracker."""

from .exercise import Exercise
from .user import User

__all__ = [
    "Exercise",
    "User",
]
