"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_tracker.domain.profiles import UserProfile
from food_tracker.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the ``users`` profile table."""

    client: Client

    def upsert_profile(self, profile: UserProfile) -> None:
        """Insert the profile row, replacing an existing one."""
        self.client.table("users").upsert(
            {
                "id": str(profile.user_id),
                "email": profile.email,
                "first_name": profile.first_name,
                "last_name": profile.last_name,
            }
        ).execute()

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("users")
            .select("id, email, first_name, last_name, photo_url")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserProfile(
            user_id=UUID(row["id"]),
            email=row.get("email"),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            photo_url=row.get("photo_url"),
        )

    def update_photo_url(self, user_id: UUID, photo_url: str) -> bool:
        """Set the avatar URL on the user's row."""
        response = (
            self.client.table("users")
            .update({"photo_url": photo_url})
            .eq("id", str(user_id))
            .execute()
        )
        return bool(response.data)
