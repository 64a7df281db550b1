import httpx

from app.client.app_state import create_app_state
from app.client.auth_store import AuthStore
from app.client.backend import BackendClient
from app.client.config import ClientSettings
from app.client.errors import BackendNotConfiguredError
from app.client.storage import LocalStorage

from helpers import PASSWORD


def _failing_logout_client(storage):
    """Backend qui connecte bien mais refuse la déconnexion."""

    def handler(request):
        if request.url.path.endswith("/auth/sign-in"):
            return httpx.Response(
                200,
                json={
                    "access_token": "a",
                    "refresh_token": "r",
                    "token_type": "bearer",
                    "expires_in": 900,
                    "user": {"id": "u1", "email": "x@example.com", "user_metadata": {}},
                },
            )
        return httpx.Response(500, json={"detail": "Backend exploded"})

    http = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://backend.test")
    return BackendClient(http, storage=storage)


def test_unconfigured_backend_returns_explicit_error():
    store = AuthStore(None)
    result = store.sign_in("a@example.com", PASSWORD)
    assert not result.ok
    assert isinstance(result.error, BackendNotConfiguredError)
    assert result.message == "Backend client not initialized. Please check your environment variables."
    assert store.loading is False


def test_register_then_sign_in(app_state):
    auth = app_state.auth
    result = auth.register("new@example.com", PASSWORD, "New Player")
    assert result.ok
    assert result.data["user_metadata"] == {"full_name": "New Player"}
    # l'inscription ne connecte pas
    assert auth.is_authenticated is False

    result = auth.sign_in("new@example.com", PASSWORD)
    assert result.ok
    assert auth.is_authenticated is True
    assert auth.user.email == "new@example.com"
    assert auth.user.full_name == "New Player"


def test_provider_errors_become_results(app_state):
    auth = app_state.auth
    auth.register("dup@example.com", PASSWORD)

    result = auth.register("dup@example.com", PASSWORD)
    assert not result.ok
    assert result.message == "User already registered"

    result = auth.sign_in("dup@example.com", "wrong-password")
    assert not result.ok
    assert result.message == "Invalid login credentials"
    assert auth.is_authenticated is False


def test_sign_out_clears_state(signed_in_state):
    auth = signed_in_state.auth
    result = auth.sign_out()
    assert result.ok
    assert auth.user is None
    assert auth.is_authenticated is False


def test_sign_out_clears_state_even_when_provider_fails(caplog):
    storage = LocalStorage()
    store = AuthStore(_failing_logout_client(storage))
    assert store.sign_in("x@example.com", PASSWORD).ok
    assert store.is_authenticated

    result = store.sign_out()

    assert result.ok
    assert store.user is None
    assert store.is_authenticated is False
    assert "Error signing out" in caplog.text


def test_reset_password_is_ok_for_any_email(app_state):
    assert app_state.auth.reset_password("nobody@example.com").ok


def test_update_profile_stores_metadata(signed_in_state):
    auth = signed_in_state.auth
    result = auth.update_profile(full_name="Renamed Host", avatar_url="https://img.example.com/a.png")
    assert result.ok
    assert auth.user.full_name == "Renamed Host"
    assert auth.user.avatar_url == "https://img.example.com/a.png"


def test_update_profile_requires_session(app_state):
    result = app_state.auth.update_profile(full_name="Nobody")
    assert not result.ok
    assert result.error.status_code == 401


def test_initialize_auth_restores_persisted_session(signed_in_state, api, storage, clock):
    fresh = create_app_state(ClientSettings(BACKEND_URL=None), http=api, storage=storage, clock=clock)
    assert fresh.auth.is_authenticated is False

    result = fresh.start()

    assert result.ok
    assert fresh.auth.is_authenticated is True
    assert fresh.auth.user.email == "host@example.com"
    fresh.auth.dispose()


def test_initialize_auth_subscribes_once(app_state):
    auth = app_state.auth
    listeners = app_state.client.auth._listeners

    auth.initialize_auth()
    auth.initialize_auth()
    assert len(listeners) == 1

    # les évènements du fournisseur mettent l'état à jour
    auth.register("evt@example.com", PASSWORD)
    app_state.client.auth.sign_in_with_password(email="evt@example.com", password=PASSWORD)
    assert auth.is_authenticated is True
    app_state.client.auth.sign_out()
    assert auth.is_authenticated is False

    auth.dispose()
    auth.dispose()
    assert listeners == []


def test_initialize_auth_without_backend():
    result = AuthStore(None).initialize_auth()
    assert isinstance(result.error, BackendNotConfiguredError)
