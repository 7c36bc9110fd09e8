"""User model."""

from dataclasses import dataclass


@dataclass
class User:
    """An account identified by a unique username."""

    username: str
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to the raw row shape."""
        return {
            "id": self.id,
            "username": self.username,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create from a row or dictionary."""
        return cls(
            username=data["username"],
            id=data.get("id"),
        )
