"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field

import pytest

from recipe_planner.adapters.supabase_auth_client import SupabaseAuthClient
from recipe_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from recipe_planner.domain.errors import AuthenticationError, ProfilePersistenceError
from recipe_planner.domain.profiles import AuthSession, UserProfile


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeUser:
    id: str
    email: str | None = None


@dataclass
class FakeSession:
    user: FakeUser
    access_token: str = "access-token"


@dataclass
class FakeAuthResponse:
    user: FakeUser | None
    session: FakeSession | None


@dataclass
class FakeSubscription:
    unsubscribed: bool = False

    def unsubscribe(self) -> None:
        self.unsubscribed = True


@dataclass
class FakeGoTrue:
    session: FakeSession | None = None
    error: Exception | None = None
    callback: object | None = None
    subscription: FakeSubscription = field(default_factory=FakeSubscription)
    signed_out: bool = False

    def sign_up(self, credentials: dict[str, str]) -> FakeAuthResponse:
        if self.error:
            raise self.error
        user = FakeUser(id="user-1", email=credentials["email"])
        return FakeAuthResponse(user=user, session=None)

    def sign_in_with_password(self, credentials: dict[str, str]) -> FakeAuthResponse:
        if self.error:
            raise self.error
        user = FakeUser(id="user-1", email=credentials["email"])
        self.session = FakeSession(user=user)
        return FakeAuthResponse(user=user, session=self.session)

    def sign_out(self) -> None:
        self.signed_out = True

    def get_session(self) -> FakeSession | None:
        return self.session

    def on_auth_state_change(self, callback) -> FakeSubscription:  # type: ignore[no-untyped-def]
        self.callback = callback
        return self.subscription


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)
    auth: FakeGoTrue = field(default_factory=FakeGoTrue)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


_ROW = {
    "id": "user-1",
    "email": "cook@example.com",
    "dietaryPreferences": ["Vegan"],
    "healthGoals": "Muscle Gain",
    "allergies": ["Nuts"],
    "enableMealPlanning": False,
    "bodyWeight": 180,
}


def test_supabase_profile_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("profiles")
    profiles_table.queue("insert", [_ROW])
    profiles_table.queue("select", [_ROW])

    repository = SupabaseProfileRepository(client)
    created = repository.create_profile(UserProfile(user_id="user-1", email=None))
    fetched = repository.get_profile("user-1")

    assert created.dietary_preferences == ("Vegan",)
    assert profiles_table.last_payload["bodyWeight"] == 150
    assert fetched is not None
    assert fetched.body_weight == 180
    assert fetched.enable_meal_planning is False
    assert ("id", "user-1") in profiles_table.last_filters


def test_supabase_profile_repository_missing_row() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    assert repository.get_profile("user-1") is None


def test_supabase_profile_repository_update_maps_columns() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("profiles")
    profiles_table.queue("update", [_ROW])

    SupabaseProfileRepository(client).update_profile(
        "user-1", {"allergies": ("Soy",), "body_weight": 170}
    )

    payload = profiles_table.last_payload
    assert payload["allergies"] == ["Soy"]
    assert payload["bodyWeight"] == 170
    assert "updated_at" in payload


def test_supabase_profile_repository_update_without_rows_raises() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    with pytest.raises(ProfilePersistenceError):
        repository.update_profile("user-1", {"health_goals": "Maintenance"})


def test_supabase_auth_client_sign_in_and_session() -> None:
    client = FakeSupabaseClient()
    auth = SupabaseAuthClient(client)

    session = auth.sign_in("cook@example.com", "pw")

    assert session == AuthSession(
        user_id="user-1", email="cook@example.com", access_token="access-token"
    )
    assert auth.get_session() == session

    auth.sign_out()
    assert client.auth.signed_out is True


def test_supabase_auth_client_sign_up_without_session() -> None:
    auth = SupabaseAuthClient(FakeSupabaseClient())

    session = auth.sign_up("new@example.com", "pw")

    assert session.user_id == "user-1"
    assert session.access_token is None


def test_supabase_auth_client_wraps_errors() -> None:
    client = FakeSupabaseClient()
    client.auth.error = RuntimeError("Invalid login credentials")
    auth = SupabaseAuthClient(client)

    with pytest.raises(AuthenticationError):
        auth.sign_in("cook@example.com", "bad")


def test_supabase_auth_client_forwards_state_changes() -> None:
    client = FakeSupabaseClient()
    seen: list[AuthSession | None] = []

    unsubscribe = SupabaseAuthClient(client).on_session_change(seen.append)
    client.auth.callback("SIGNED_IN", FakeSession(user=FakeUser(id="user-1")))
    client.auth.callback("SIGNED_OUT", None)
    unsubscribe()

    assert seen[0].user_id == "user-1"
    assert seen[1] is None
    assert client.auth.subscription.unsubscribed is True
