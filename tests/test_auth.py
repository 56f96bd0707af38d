import pytest

from conftest import FakeResponse, add_user, space_payload
from auth_service.app.services import authservices
from parking_service.app.crud.space_crud import create_space
from parking_service.app.schemas.space_schemas import SpaceCreate
from shared.core.auth import create_access_token, verify_token
from shared.core.errors import AppError
from shared.models.users import Users


@pytest.fixture
def google(monkeypatch):
    calls = []
    identity = {"email": "New.Driver@Example.com", "verified_email": True,
                "name": "New Driver", "picture": "https://pics.test/me.png"}
    state = {"status": 200, "identity": identity}

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params))
        return FakeResponse(state["status"], state["identity"])

    monkeypatch.setattr(authservices.requests, "get", fake_get)
    state["calls"] = calls
    return state


def test_first_google_sign_in_creates_user(auth_client, auth_app, google):
    resp = auth_client.post("/api/auth/google", json={"access_token": "ya29.token"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["is_new_user"] is True
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "new.driver@example.com"
    assert body["user"]["full_name"] == "New Driver"
    assert body["user"]["role"] == "driver"
    url, params = google["calls"][0]
    assert url == "https://userinfo.test/v2/userinfo"
    assert params["access_token"] == "ya29.token"

    claims = verify_token(auth_app.state.settings, body["access_token"])
    assert claims.email == "new.driver@example.com"
    assert claims.user_id == body["user"]["id"]


def test_second_sign_in_reuses_the_account(auth_client, auth_app, google):
    first = auth_client.post("/api/auth/google", json={"access_token": "a"}).json()
    google["identity"] = {**google["identity"], "email": "new.driver@example.com"}
    second = auth_client.post("/api/auth/google", json={"access_token": "b"}).json()

    assert second["is_new_user"] is False
    assert second["user"]["id"] == first["user"]["id"]
    db = auth_app.state.auth_db.SessionLocal()
    try:
        assert db.query(Users).count() == 1
    finally:
        db.close()


def test_rejected_provider_token_is_401(auth_client, google):
    google["status"] = 401
    resp = auth_client.post("/api/auth/google", json={"access_token": "expired"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid access token", "kind": "unauthorized"}


def test_unverified_email_is_refused(auth_client, google):
    google["identity"] = {**google["identity"], "verified_email": False}
    resp = auth_client.post("/api/auth/google", json={"access_token": "t"})
    assert resp.status_code == 401


def test_blank_access_token_is_400(auth_client, google):
    resp = auth_client.post("/api/auth/google", json={"access_token": "  "})
    assert resp.status_code == 400
    assert google["calls"] == []


def test_inactive_account_cannot_sign_in(auth_client, auth_app, google):
    db = auth_app.state.auth_db.SessionLocal()
    try:
        add_user(db, email="new.driver@example.com", is_active=False)
    finally:
        db.close()

    resp = auth_client.post("/api/auth/google", json={"access_token": "t"})

    assert resp.status_code == 403


def test_profile_lists_owned_spaces(auth_client, auth_app, settings):
    auth_db = auth_app.state.auth_db.SessionLocal()
    parking_db = auth_app.state.parking_db.SessionLocal()
    try:
        host = add_user(auth_db, email="host@example.com", name="Harriet Host")
        owned = create_space(parking_db, SpaceCreate(**space_payload(host_id=host.id)))
        create_space(parking_db, SpaceCreate(**space_payload()))
        token = create_access_token(settings, host)
    finally:
        auth_db.close()
        parking_db.close()

    resp = auth_client.get("/api/user/me", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 200
    assert resp.json()["email"] == "host@example.com"
    assert resp.json()["space_ids"] == [str(owned.id)]


def test_profile_requires_token(auth_client):
    assert auth_client.get("/api/user/me").status_code == 401


def test_token_signed_with_other_secret_is_rejected(settings, user):
    token = create_access_token(settings, user)
    other = settings.model_copy(update={"JWT_SECRET": "another-secret"})
    with pytest.raises(AppError) as exc:
        verify_token(other, token)
    assert exc.value.http_status == 401


def test_missing_jwt_secret_is_configuration_error(settings, user):
    broken = settings.model_copy(update={"JWT_SECRET": None})
    with pytest.raises(AppError) as exc:
        create_access_token(broken, user)
    assert exc.value.http_status == 500
