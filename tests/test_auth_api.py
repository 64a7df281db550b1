from fastapi import Depends
from sqlmodel import Session

from app.api.v1.dependencies import get_auth_service
from app.core.config import jwt_settings
from app.db.repositories.refresh_tokens import RefreshTokenRepository
from app.db.repositories.users import UserRepository
from app.db.session import get_session
from app.features.authentication.services import AuthService
from app.main import app as fastapi_app

from helpers import PASSWORD, auth_headers, register, sign_in


def test_sign_up_returns_user_with_metadata(api):
    user = register(api, "Alice@Example.com", full_name="Alice")
    assert user["email"] == "alice@example.com"
    assert user["user_metadata"] == {"full_name": "Alice"}
    assert "hashed_password" not in user


def test_sign_up_twice_conflicts(api):
    register(api, "bob@example.com")
    res = api.post("/api/v1/auth/sign-up", json={"email": "bob@example.com", "password": PASSWORD})
    assert res.status_code == 409
    assert res.json()["detail"] == "User already registered"


def test_sign_up_rejects_short_password(api):
    res = api.post("/api/v1/auth/sign-up", json={"email": "short@example.com", "password": "abc"})
    assert res.status_code == 422


def test_sign_in_with_wrong_password(api):
    register(api, "carol@example.com")
    res = api.post("/api/v1/auth/sign-in", json={"email": "carol@example.com", "password": "nope-nope"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid login credentials"


def test_sign_in_returns_session(api):
    register(api, "dave@example.com")
    session = sign_in(api, "DAVE@example.com")
    assert session["token_type"] == "bearer"
    assert session["expires_in"] == int(jwt_settings.access_ttl.total_seconds())
    assert session["user"]["email"] == "dave@example.com"


def test_refresh_rotates_and_revokes_previous_token(api):
    register(api, "erin@example.com")
    session = sign_in(api, "erin@example.com")

    res = api.post("/api/v1/auth/refresh", json={"refresh_token": session["refresh_token"]})
    assert res.status_code == 200
    rotated = res.json()
    assert rotated["refresh_token"] != session["refresh_token"]

    replay = api.post("/api/v1/auth/refresh", json={"refresh_token": session["refresh_token"]})
    assert replay.status_code == 401


def test_refresh_rejects_access_token(api):
    register(api, "frank@example.com")
    session = sign_in(api, "frank@example.com")
    res = api.post("/api/v1/auth/refresh", json={"refresh_token": session["access_token"]})
    assert res.status_code == 401


def test_logout_revokes_refresh_and_is_idempotent(api):
    register(api, "gina@example.com")
    session = sign_in(api, "gina@example.com")

    assert api.post("/api/v1/auth/logout", json={"refresh_token": session["refresh_token"]}).status_code == 204
    assert api.post("/api/v1/auth/logout", json={"refresh_token": session["refresh_token"]}).status_code == 204
    assert api.post("/api/v1/auth/logout", json={"refresh_token": "garbage"}).status_code == 204

    res = api.post("/api/v1/auth/refresh", json={"refresh_token": session["refresh_token"]})
    assert res.status_code == 401


def test_get_user_requires_bearer(api):
    res = api.get("/api/v1/auth/user")
    # selon la version de FastAPI, HTTPBearer répond 401 ou 403
    assert res.status_code in (401, 403)

    res = api.get("/api/v1/auth/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


def test_update_user_merges_metadata(api):
    register(api, "hugo@example.com", full_name="Hugo", avatar_url="http://img/1.png")
    session = sign_in(api, "hugo@example.com")

    res = api.put(
        "/api/v1/auth/user",
        json={"data": {"full_name": "Hugo B.", "avatar_url": None}},
        headers=auth_headers(session),
    )
    assert res.status_code == 200
    assert res.json()["user_metadata"] == {"full_name": "Hugo B."}

    me = api.get("/api/v1/auth/user", headers=auth_headers(session)).json()
    assert me["user_metadata"] == {"full_name": "Hugo B."}


def test_update_user_password_and_email(api):
    register(api, "ines@example.com")
    register(api, "taken@example.com")
    session = sign_in(api, "ines@example.com")

    res = api.put("/api/v1/auth/user", json={"email": "taken@example.com"}, headers=auth_headers(session))
    assert res.status_code == 409

    res = api.put(
        "/api/v1/auth/user",
        json={"email": "ines.new@example.com", "password": "brand-new-pass"},
        headers=auth_headers(session),
    )
    assert res.status_code == 200
    assert res.json()["email"] == "ines.new@example.com"
    sign_in(api, "ines.new@example.com", "brand-new-pass")


def test_recover_is_silent_for_unknown_email(api):
    res = api.post("/api/v1/auth/recover", json={"email": "ghost@example.com"})
    assert res.status_code == 204


def test_recovery_token_signs_user_in(api):
    sent = []

    def capturing_auth_service(session: Session = Depends(get_session)) -> AuthService:
        return AuthService(
            user_repo=UserRepository(session),
            refresh_repo=RefreshTokenRepository(session),
            jwt_settings=jwt_settings,
            notify_recovery=lambda email, token: sent.append((email, token)),
        )

    fastapi_app.dependency_overrides[get_auth_service] = capturing_auth_service
    register(api, "jules@example.com")
    old_session = sign_in(api, "jules@example.com")

    assert api.post("/api/v1/auth/recover", json={"email": "jules@example.com"}).status_code == 204
    assert len(sent) == 1
    email, token = sent[0]
    assert email == "jules@example.com"

    res = api.post("/api/v1/auth/verify", json={"token": token})
    assert res.status_code == 200
    res_session = res.json()
    assert res.json()["user"]["email"] == "jules@example.com"

    # les sessions ouvertes avant la récupération sont fermées
    res = api.post("/api/v1/auth/refresh", json={"refresh_token": old_session["refresh_token"]})
    assert res.status_code == 401
    res = api.post("/api/v1/auth/refresh", json={"refresh_token": res_session["refresh_token"]})
    assert res.status_code == 200

    # le lien ne sert qu'une fois
    res = api.post("/api/v1/auth/verify", json={"token": token})
    assert res.status_code == 401

    # un token de récupération n'est pas un access token
    res = api.get("/api/v1/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


def test_themes_are_public(api):
    res = api.get("/api/v1/themes")
    assert res.status_code == 200
    names = [theme["name"] for theme in res.json()]
    assert names == ["Classic Blue", "Royal Purple", "Emerald Green", "Sunset Orange"]

    assert api.get("/api/v1/themes/royal purple").json()["card_color"] == "#7c3aed"
    assert api.get("/api/v1/themes/unknown").status_code == 404


def test_new_recovery_link_supersedes_previous_one(api):
    sent = []

    def capturing_auth_service(session: Session = Depends(get_session)) -> AuthService:
        return AuthService(
            user_repo=UserRepository(session),
            refresh_repo=RefreshTokenRepository(session),
            jwt_settings=jwt_settings,
            notify_recovery=lambda email, token: sent.append(token),
        )

    fastapi_app.dependency_overrides[get_auth_service] = capturing_auth_service
    register(api, "mia@example.com")
    api.post("/api/v1/auth/recover", json={"email": "mia@example.com"})
    api.post("/api/v1/auth/recover", json={"email": "mia@example.com"})
    first, second = sent

    assert api.post("/api/v1/auth/verify", json={"token": first}).status_code == 401
    assert api.post("/api/v1/auth/verify", json={"token": second}).status_code == 200
    assert api.post("/api/v1/auth/verify", json={"token": second}).status_code == 401
