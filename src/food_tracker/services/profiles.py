"""User profile service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from food_tracker.domain.errors import NotFoundError, PersistenceError
from food_tracker.domain.profiles import UserProfile

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def upsert_profile(self, profile: UserProfile) -> None:
        """Create or replace a profile."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""

    def update_photo_url(self, user_id: UUID, photo_url: str) -> bool:
        """Set the avatar URL; False when the user has no profile."""


@dataclass
class ProfileService:
    """Reads and updates the signed-in user's profile."""

    repository: ProfileRepository

    def create_profile(
        self, user_id: UUID, email: str, first_name: str, last_name: str
    ) -> UserProfile:
        """Store the profile captured at sign-up."""
        profile = UserProfile(
            user_id=user_id, email=email, first_name=first_name, last_name=last_name
        )
        try:
            self.repository.upsert_profile(profile)
        except Exception as exc:
            _logger.exception(
                "Failed to save user profile", extra={"user_id": user_id}
            )
            raise PersistenceError("Failed to save user profile") from exc
        return profile

    def get_profile(self, user_id: UUID) -> UserProfile:
        try:
            profile = self.repository.get_profile(user_id)
        except Exception as exc:
            _logger.exception(
                "Failed to get user profile", extra={"user_id": user_id}
            )
            raise PersistenceError("Failed to get user profile") from exc
        if profile is None:
            raise NotFoundError("User profile not found")
        return profile

    def update_photo_url(self, user_id: UUID, photo_url: str) -> UserProfile:
        """Point the avatar at an uploaded image and return the profile."""
        try:
            updated = self.repository.update_photo_url(user_id, photo_url)
        except Exception as exc:
            _logger.exception(
                "Failed to update user photo URL", extra={"user_id": user_id}
            )
            raise PersistenceError("Failed to update user photo URL") from exc
        if not updated:
            raise NotFoundError("User profile not found")
        _logger.info("User avatar updated: user_id=%s", user_id)
        return self.get_profile(user_id)
