"""CLI commands for exercise-tracker."""

from .init import init
from .logs import logs
from .serve import serve
from .users import users

__all__ = [
    "init",
    "logs",
    "serve",
    "users",
]
