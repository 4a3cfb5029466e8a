"""Supabase Auth client for email/password sessions."""

from collections.abc import Callable
from dataclasses import dataclass

from supabase import Client

from recipe_planner.domain.errors import AuthenticationError
from recipe_planner.domain.profiles import AuthSession
from recipe_planner.services.auth import AuthClient, SessionListener


@dataclass
class SupabaseAuthClient(AuthClient):
    """Supabase implementation of the auth provider."""

    client: Client

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Register a user with email and password."""
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except Exception as exc:
            raise AuthenticationError(str(exc)) from exc
        if response.user is None:
            raise AuthenticationError("Sign-up did not return a user")
        access_token = response.session.access_token if response.session else None
        return AuthSession(
            user_id=str(response.user.id),
            email=response.user.email,
            access_token=access_token,
        )

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            raise AuthenticationError(str(exc)) from exc
        session = _to_session(response.session)
        if session is None:
            raise AuthenticationError("Sign-in did not return a session")
        return session

    def sign_out(self) -> None:
        self.client.auth.sign_out()

    def get_session(self) -> AuthSession | None:
        return _to_session(self.client.auth.get_session())

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        """Forward provider auth events to a listener."""
        subscription = self.client.auth.on_auth_state_change(
            lambda _event, session: listener(_to_session(session))
        )
        return subscription.unsubscribe


def _to_session(session: object | None) -> AuthSession | None:
    user = getattr(session, "user", None)
    if session is None or user is None:
        return None
    return AuthSession(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        access_token=getattr(session, "access_token", None),
    )
