"""Error hierarchy for exercise-tracker.

Every error carries the HTTP status it maps to and a user-facing message.
Storage errors use generic messages; the underlying exception is logged by
the repository that caught it and never reaches the client.
"""


class ExerciseTrackerError(Exception):
    """Base class for all exercise-tracker errors."""

    http_status: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        """Build the JSON error body."""
        return {"error": self.message}


class ValidationError(ExerciseTrackerError):
    """A request value broke a validation rule."""

    http_status = 400

    # Failure kinds reported by the validators
    INVALID_FORMAT = "invalid_format"
    INVALID_DATE = "invalid_date"
    MISSING_FIELD = "missing_field"
    INVALID_VALUE = "invalid_value"

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


class NotFoundError(ExerciseTrackerError):
    """The referenced user does not exist."""

    http_status = 404


class ConflictError(ExerciseTrackerError):
    """A user with the same username already exists."""

    http_status = 400


class StoreError(ExerciseTrackerError):
    """The database failed to complete an operation."""

    http_status = 500

    def __init__(self, message: str = "Database error"):
        super().__init__(message)
