"""Supabase Auth provider."""

from collections.abc import Callable
from dataclasses import dataclass

from supabase import Client

from food_tracker.domain.auth import AuthSession
from food_tracker.services.auth import AuthProvider


@dataclass
class SupabaseAuthProvider(AuthProvider):
    """Auth provider backed by Supabase Auth.

    Every call gets a fresh client from ``client_factory``. Signing a user in
    rewrites the Authorization header of the client that performed it, so a
    client used here is never shared with table repositories or reused for
    admin calls.
    """

    client_factory: Callable[[], Client]

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> AuthSession:
        """Create a Supabase user with profile metadata."""
        response = self.client_factory().auth.sign_up(
            {"email": email, "password": password, "options": {"data": metadata}}
        )
        if response.user is None:
            raise RuntimeError("Sign up returned no user")
        return _to_session(response)

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        response = self.client_factory().auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        if response.user is None:
            raise RuntimeError("Sign in returned no user")
        return _to_session(response)

    def sign_out(self, access_token: str) -> None:
        """Revoke the session for an access token."""
        self.client_factory().auth.admin.sign_out(access_token)

    def send_password_reset(self, email: str) -> None:
        """Send the recovery email."""
        self.client_factory().auth.reset_password_for_email(email)

    def reset_password(self, email: str, code: str, new_password: str) -> None:
        """Verify the recovery code and set the new password."""
        response = self.client_factory().auth.verify_otp(
            {"email": email, "token": code, "type": "recovery"}
        )
        if response.user is None:
            raise RuntimeError("Invalid or expired reset code")
        self.client_factory().auth.admin.update_user_by_id(
            response.user.id, {"password": new_password}
        )

    def get_user_id(self, access_token: str) -> str | None:
        """Return the user id for an access token."""
        response = self.client_factory().auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        return str(response.user.id)


def _to_session(response: object) -> AuthSession:
    session = getattr(response, "session", None)
    return AuthSession(
        user_id=str(response.user.id),
        access_token=getattr(session, "access_token", None),
        refresh_token=getattr(session, "refresh_token", None),
    )
