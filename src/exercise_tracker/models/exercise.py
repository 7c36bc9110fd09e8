"""Exercise log entry model."""

from dataclasses import dataclass
from datetime import date as date_type


@dataclass
class Exercise:
    """A single recorded activity owned by one user."""

    user_id: int
    description: str
    duration: int | float  # minutes
    date: date_type
    id: int | None = None

    @property
    def date_str(self) -> str:
        """Date formatted as YYYY-MM-DD."""
        return self.date.isoformat()

    def to_dict(self) -> dict:
        """Convert to the raw row shape."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "description": self.description,
            "duration": self.duration,
            "date": self.date_str,
        }

    def to_log_entry(self) -> dict:
        """Convert to the entry shape returned by the logs endpoint."""
        return {
            "description": self.description,
            "duration": self.duration,
            "date": self.date_str,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from a row or dictionary."""
        duration = data["duration"]
        if isinstance(duration, float) and duration.is_integer():
            duration = int(duration)
        return cls(
            user_id=data["userId"],
            description=data["description"],
            duration=duration,
            date=date_type.fromisoformat(data["date"]),
            id=data.get("id"),
        )
