from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from flask import Flask
from flask.testing import FlaskClient

from portal.app import create_app
from portal.infrastructure.sessions.memory_store import InMemorySessionStore
from portal.shared.config import AppConfig, CredentialsConfig, SessionConfig

NO_STORE = "no-store, no-cache, must-revalidate, proxy-revalidate"


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def config() -> AppConfig:
    return AppConfig(  # type: ignore[call-arg]
        APP_ENV="development",
        session=SessionConfig(SESSION_SECRET="test-secret", SESSION_TTL=3600),  # type: ignore[call-arg]
        credentials=CredentialsConfig(DEMO_USER="prueba", DEMO_PASS="1234"),  # type: ignore[call-arg]
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock: FakeClock) -> InMemorySessionStore:
    return InMemorySessionStore(ttl_seconds=3600, clock=clock)


@pytest.fixture()
def app(config: AppConfig, store: InMemorySessionStore) -> Flask:
    return create_app(config, session_store=store)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


def _login(client: FlaskClient, username: str = "prueba", password: str = "1234"):
    return client.post("/login", data={"username": username, "password": password})


def test_form_login_redirects_to_landing(client: FlaskClient, store: InMemorySessionStore) -> None:
    response = _login(client)

    assert response.status_code == 302
    assert response.headers["Location"] == "/inicio"
    assert client.get_cookie("sid") is not None
    assert len(store) == 1


def test_api_login_returns_redirect_target(client: FlaskClient) -> None:
    response = client.post("/api/login", json={"username": "prueba", "password": "1234"})

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "redirect": "/inicio"}
    assert client.get_cookie("sid") is not None


@pytest.mark.parametrize(
    ("username", "password"),
    [("prueba", "wrong"), ("PRUEBA", "1234"), ("", ""), ("admin", "admin")],
)
def test_bad_credentials_create_no_session(
    client: FlaskClient, store: InMemorySessionStore, username: str, password: str
) -> None:
    response = _login(client, username, password)

    assert response.status_code == 401
    assert client.get_cookie("sid") is None
    assert len(store) == 0
    assert client.get("/api/me").status_code == 401


def test_api_bad_credentials_payload(client: FlaskClient) -> None:
    response = client.post("/api/login", json={"username": "prueba", "password": "nope"})

    assert response.status_code == 401
    assert response.get_json() == {"ok": False, "error": "Usuario o contraseña incorrectos"}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"data": "{not json", "content_type": "application/json"},
        {"json": ["prueba", "1234"]},
        {"json": {"username": 1234, "password": 1234}},
        {"data": b"", "content_type": "text/plain"},
        {"data": '{"username": "\\ud800", "password": "1234"}', "content_type": "application/json"},
    ],
)
def test_malformed_bodies_count_as_bad_credentials(client: FlaskClient, kwargs: dict) -> None:
    response = client.post("/api/login", **kwargs)

    assert response.status_code == 401
    assert response.get_json()["ok"] is False


def test_landing_without_session_redirects_to_login(client: FlaskClient) -> None:
    response = client.get("/inicio")

    assert response.status_code == 302
    assert response.headers["Location"] == "/login"


def test_landing_subpaths_are_gated(client: FlaskClient) -> None:
    response = client.get("/inicio/algo")

    assert response.status_code == 302
    assert response.headers["Location"] == "/login"


def test_landing_after_login_has_cache_suppression(client: FlaskClient) -> None:
    _login(client)

    response = client.get("/inicio")

    assert response.status_code == 200
    assert response.headers["Cache-Control"] == NO_STORE
    assert response.headers["Pragma"] == "no-cache"
    assert response.headers["Expires"] == "0"
    assert "Inicio" in response.get_data(as_text=True)


def test_landing_file_is_not_a_static_asset(client: FlaskClient) -> None:
    response = client.get("/inicio.html")

    assert response.status_code == 302
    assert response.headers["Location"] == "/inicio"


def test_default_demo_credentials_expose_user(client: FlaskClient) -> None:
    _login(client)

    response = client.get("/api/me")

    assert response.status_code == 200
    assert response.get_json() == {"user": {"username": "prueba"}}


def test_api_without_session_is_unauthorized(client: FlaskClient) -> None:
    for path in ("/api/me", "/api/datos", "/api/unknown"):
        response = client.get(path)
        assert response.status_code == 401
        assert response.get_json() == {"error": "unauthorized"}


def test_protected_data_after_login(client: FlaskClient) -> None:
    _login(client)

    response = client.get("/api/datos")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["ok"] is True
    assert payload["msg"] == "Solo con sesión"
    assert isinstance(payload["ts"], int)


@pytest.mark.parametrize("logout_path", ["/logout", "/api/logout"])
def test_logout_revokes_old_cookie(
    client: FlaskClient, store: InMemorySessionStore, logout_path: str
) -> None:
    _login(client)
    old_cookie = client.get_cookie("sid")
    assert old_cookie is not None

    response = client.post(logout_path)

    assert response.status_code == 302
    assert response.headers["Location"] == "/login"
    assert client.get_cookie("sid") is None
    assert len(store) == 0

    client.set_cookie("sid", old_cookie.value)
    assert client.get("/inicio").status_code == 302
    assert client.get("/api/me").status_code == 401


def test_logout_while_anonymous_redirects(client: FlaskClient) -> None:
    response = client.post("/logout")

    assert response.status_code == 302
    assert response.headers["Location"] == "/login"


def test_tampered_cookie_is_rejected(client: FlaskClient) -> None:
    _login(client)
    cookie = client.get_cookie("sid")
    assert cookie is not None
    session_id, _, _signature = cookie.value.rpartition(".")

    client.set_cookie("sid", f"{session_id}.forged")
    assert client.get("/api/me").status_code == 401

    client.set_cookie("sid", session_id)
    assert client.get("/api/me").status_code == 401


def test_expired_session_loses_access(client: FlaskClient, clock: FakeClock) -> None:
    _login(client)
    assert client.get("/api/me").status_code == 200

    clock.now += timedelta(hours=1)

    assert client.get("/api/me").status_code == 401
    assert client.get("/inicio").headers["Location"] == "/login"


def test_session_cookie_max_age_matches_ttl(client: FlaskClient) -> None:
    response = _login(client)

    set_cookie = response.headers["Set-Cookie"]
    assert "Max-Age=3600" in set_cookie
    assert "HttpOnly" in set_cookie
    assert "Secure" not in set_cookie


@pytest.mark.parametrize("path", ["/salud", "/api/salud"])
def test_health_check_always_ok(client: FlaskClient, path: str) -> None:
    response = client.get(path)
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "ok"
    assert response.mimetype == "text/plain"

    client.set_cookie("sid", "garbage")
    assert client.get(path).status_code == 200

    client.delete_cookie("sid")
    _login(client)
    assert client.get(path).status_code == 200


def test_root_redirects_to_login(client: FlaskClient) -> None:
    response = client.get("/")

    assert response.status_code == 302
    assert response.headers["Location"] == "/login"


def test_login_page_and_static_assets(client: FlaskClient) -> None:
    page = client.get("/login")
    assert page.status_code == 200
    assert 'action="/login"' in page.get_data(as_text=True)
    page.close()

    css = client.get("/styles.css")
    assert css.status_code == 200
    css.close()


def test_unknown_route_is_plain_404(client: FlaskClient) -> None:
    response = client.get("/no-existe")

    assert response.status_code == 404
    assert response.get_data(as_text=True) == "Página no encontrada"


def test_security_headers_present(client: FlaskClient) -> None:
    response = client.get("/salud")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Referrer-Policy"] == "no-referrer"
    assert "Content-Security-Policy" not in response.headers
    assert "Strict-Transport-Security" not in response.headers
    assert response.headers["X-Request-ID"]


def test_request_id_is_echoed(client: FlaskClient) -> None:
    response = client.get("/salud", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"


def test_production_cookies_are_secure(store: InMemorySessionStore) -> None:
    config = AppConfig(  # type: ignore[call-arg]
        APP_ENV="production",
        session=SessionConfig(SESSION_SECRET="a-long-random-production-secret"),  # type: ignore[call-arg]
        credentials=CredentialsConfig(DEMO_USER="demo", DEMO_PASS="s3cret"),  # type: ignore[call-arg]
    )
    app = create_app(config, session_store=store)

    response = app.test_client().post("/login", data={"username": "demo", "password": "s3cret"})

    assert response.status_code == 302
    assert "Secure" in response.headers["Set-Cookie"]
