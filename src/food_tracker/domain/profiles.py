"""User profile model."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserProfile:
    """Display profile kept next to the auth account."""

    user_id: UUID
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    photo_url: str | None = None

    @property
    def full_name(self) -> str:
        """Return "First Last", falling back to the email."""
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.email or "User"

    @property
    def initials(self) -> str:
        if self.first_name and self.last_name:
            return f"{self.first_name[0]}{self.last_name[0]}".upper()
        return self.email[0].upper() if self.email else "U"
