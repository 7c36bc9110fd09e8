"""Request schemas, one per endpoint input.

Each field runs the matching validator from :mod:`exercise_tracker.validation`.
Fields are declared in the order the rules are checked: pydantic reports
errors in declaration order and the error handler surfaces only the first,
so an earlier failure masks later ones.
"""

import datetime
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from .. import validation
from ..errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
INVALID_BODY_MESSAGE = "Invalid request body"


def _check(validator, value):
    """Run a validator, translating its error for pydantic."""
    try:
        return validator(value)
    except ValidationError as e:
        raise PydanticCustomError(e.code, e.message)


class CreateUserRequest(BaseModel):
    """Body of ``POST /api/users``."""

    username: str = Field(default=None, validate_default=True)

    @field_validator("username", mode="before")
    @classmethod
    def _validate_username(cls, value):
        return _check(validation.validate_username, value)


class LogExerciseRequest(BaseModel):
    """Body of ``POST /api/users/{id}/exercises``."""

    description: str = Field(default=None, validate_default=True)
    duration: int | float = Field(default=None, validate_default=True)
    date: datetime.date = Field(default=None, validate_default=True)

    @field_validator("description", mode="before")
    @classmethod
    def _validate_description(cls, value):
        return _check(validation.validate_description, value)

    @field_validator("duration", mode="before")
    @classmethod
    def _validate_duration(cls, value):
        return _check(validation.validate_duration, value)

    @field_validator("date", mode="before")
    @classmethod
    def _validate_date(cls, value):
        return _check(validation.validate_date, value)


class LogQuery(BaseModel):
    """Query string of ``GET /api/users/{id}/logs``."""

    date_from: datetime.date | None = Field(default=None, alias="from")
    date_to: datetime.date | None = Field(default=None, alias="to")
    limit: int = Field(default=None, validate_default=True)

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _validate_bound(cls, value):
        if value is None or value == "":
            return None
        return _check(validation.validate_date, value)

    @field_validator("limit", mode="before")
    @classmethod
    def _validate_limit(cls, value):
        return _check(validation.validate_limit, value)


async def read_payload(request: Request) -> dict:
    """Read a JSON or form-encoded request body as a dictionary."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError(ValidationError.INVALID_FORMAT, INVALID_BODY_MESSAGE)
    if not isinstance(payload, dict):
        raise ValidationError(ValidationError.INVALID_FORMAT, INVALID_BODY_MESSAGE)
    return payload


def body_of(model: type[ModelT]):
    """Build a dependency that validates the request body as ``model``."""

    async def dependency(request: Request) -> ModelT:
        payload = await read_payload(request)
        return model.model_validate(payload)

    return dependency


async def log_query(request: Request) -> LogQuery:
    """Dependency validating the logs query string."""
    return LogQuery.model_validate(dict(request.query_params))
