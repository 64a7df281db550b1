import httpx
import pytest

from app.client.backend import (
    SESSION_STORAGE_KEY,
    AuthEvent,
    BackendClient,
    TableQuery,
    create_backend_client,
)
from app.client.config import ClientSettings
from app.client.errors import AuthApiError, BackendError
from app.client.storage import LocalStorage

from helpers import PASSWORD, board_payload, register


class Clock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def backend(api, storage):
    return BackendClient(api, storage=storage)


@pytest.fixture()
def signed_in_backend(api, backend):
    register(api, "client@example.com")
    backend.auth.sign_in_with_password(email="client@example.com", password=PASSWORD)
    return backend


def test_create_backend_client_without_url_returns_none():
    assert create_backend_client(ClientSettings(BACKEND_URL=None), LocalStorage()) is None


def test_create_backend_client_with_url():
    client = create_backend_client(ClientSettings(BACKEND_URL="http://localhost:8080"), LocalStorage())
    try:
        assert isinstance(client, BackendClient)
        assert client.api_prefix == "/api/v1"
    finally:
        client.close()


def test_table_query_builds_postgrest_params(backend):
    query = backend.table("game_boards").select().eq("user_id", "u1").order("created_at", desc=True).limit(10)
    assert query.build_params() == [
        ("user_id", "eq.u1"),
        ("order", "created_at.desc"),
        ("limit", "10"),
    ]


def test_unknown_table_is_rejected(backend):
    with pytest.raises(ValueError):
        TableQuery(backend, "players")


def test_sign_in_persists_session_and_emits_event(api, storage):
    register(api, "persist@example.com")
    backend = BackendClient(api, storage=storage)
    events = []
    backend.auth.on_auth_state_change(lambda event, session: events.append(event))

    session = backend.auth.sign_in_with_password(email="persist@example.com", password=PASSWORD)

    assert events == [AuthEvent.SIGNED_IN]
    assert SESSION_STORAGE_KEY in storage
    # un nouveau process relit la session depuis le stockage local
    restored = BackendClient(api, storage=storage).auth.get_session()
    assert restored is not None
    assert restored.access_token == session.access_token
    assert restored.user["email"] == "persist@example.com"


def test_wrong_credentials_raise_auth_error(api, backend):
    register(api, "wrong@example.com")
    with pytest.raises(AuthApiError) as excinfo:
        backend.auth.sign_in_with_password(email="wrong@example.com", password="bad-password")
    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Invalid login credentials"


def test_expired_access_token_is_refreshed_before_request(api, storage):
    register(api, "refresh@example.com")
    clock = Clock()
    backend = BackendClient(api, storage=storage, clock=clock)
    first = backend.auth.sign_in_with_password(email="refresh@example.com", password=PASSWORD)
    events = []
    backend.auth.on_auth_state_change(lambda event, session: events.append(event))

    clock.now += first.expires_in + 1
    rows = backend.table("game_boards").select().execute()

    assert rows == []
    assert events == [AuthEvent.TOKEN_REFRESHED]
    assert backend.auth.get_session().refresh_token != first.refresh_token


def test_revoked_refresh_token_signs_out(api, storage):
    register(api, "revoked@example.com")
    clock = Clock()
    backend = BackendClient(api, storage=storage, clock=clock)
    session = backend.auth.sign_in_with_password(email="revoked@example.com", password=PASSWORD)
    api.post("/api/v1/auth/logout", json={"refresh_token": session.refresh_token})

    events = []
    backend.auth.on_auth_state_change(lambda event, s: events.append(event))
    clock.now += session.expires_in + 1

    assert backend.auth.get_session() is None
    assert events == [AuthEvent.SIGNED_OUT]
    assert SESSION_STORAGE_KEY not in storage


def test_sign_out_clears_session(signed_in_backend, storage):
    events = []
    signed_in_backend.auth.on_auth_state_change(lambda event, session: events.append(event))

    signed_in_backend.auth.sign_out()

    assert signed_in_backend.auth.get_session() is None
    assert SESSION_STORAGE_KEY not in storage
    assert events == [AuthEvent.SIGNED_OUT]


def test_update_user_refreshes_cached_user(signed_in_backend):
    events = []
    signed_in_backend.auth.on_auth_state_change(lambda event, session: events.append((event, session)))

    user = signed_in_backend.auth.update_user(data={"full_name": "New Name"})

    assert user["user_metadata"]["full_name"] == "New Name"
    assert events[0][0] is AuthEvent.USER_UPDATED
    assert signed_in_backend.auth.get_session().user["user_metadata"]["full_name"] == "New Name"


def test_update_user_without_session_fails(backend):
    with pytest.raises(AuthApiError) as excinfo:
        backend.auth.update_user(data={"full_name": "x"})
    assert excinfo.value.status_code == 401


def test_unsubscribe_is_idempotent(backend):
    events = []
    subscription = backend.auth.on_auth_state_change(lambda event, session: events.append(event))
    subscription.unsubscribe()
    subscription.unsubscribe()
    backend.auth.sign_out()
    assert events == []


def test_insert_single_returns_row(signed_in_backend):
    row = signed_in_backend.table("game_boards").insert(board_payload()).select().single().execute()
    assert row["title"] == "Quiz Night"


def test_single_without_match_raises(signed_in_backend):
    with pytest.raises(BackendError) as excinfo:
        signed_in_backend.table("game_boards").update({"title": "x"}).eq("id", "missing").select().single().execute()
    assert excinfo.value.status_code == 406


def test_backend_error_carries_detail(signed_in_backend):
    with pytest.raises(BackendError) as excinfo:
        signed_in_backend.table("game_boards").delete().execute()
    assert excinfo.value.status_code == 400
    assert "filter" in excinfo.value.message


def test_transport_failure_becomes_backend_error(storage):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(transport=httpx.MockTransport(refuse), base_url="http://backend.test")
    backend = BackendClient(http, storage=storage)
    with pytest.raises(BackendError) as excinfo:
        backend.table("game_boards").select().execute()
    assert excinfo.value.status_code is None
    assert "Network error" in excinfo.value.message
