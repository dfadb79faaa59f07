from datetime import timedelta

import pytest
from fastapi import Response
from starlette.requests import Request

from boxoffice.api.deps import get_identity_provider
from boxoffice.api.identity import IdentityProvider, SessionIdentityProvider, StaticIdentityProvider
from boxoffice.core.config import settings
from boxoffice.core.security import create_session_token, decode_session_token
from boxoffice.main import app


def make_request(cookie=None):
    headers = []
    if cookie:
        headers.append((b"cookie", f"{settings.SESSION_COOKIE_NAME}={cookie}".encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


def test_identity_provider_is_abstract():
    with pytest.raises(TypeError):
        IdentityProvider()

    class Incomplete(IdentityProvider):
        pass

    with pytest.raises(TypeError):
        Incomplete()
    assert isinstance(StaticIdentityProvider(None), IdentityProvider)


def test_session_token_round_trip():
    assert decode_session_token(create_session_token("7")) == "7"


def test_expired_or_forged_token_is_rejected():
    assert decode_session_token(create_session_token("7", timedelta(minutes=-1))) is None
    assert decode_session_token("not-a-token") is None


def test_falls_back_to_first_admin_and_sets_cookie(db, admin, customer):
    response = Response()

    current = SessionIdentityProvider().resolve(make_request(), response, db)

    assert current == admin
    assert settings.SESSION_COOKIE_NAME in response.headers["set-cookie"]


def test_cookie_selects_the_user(db, admin, customer):
    response = Response()
    token = create_session_token(str(customer.id))

    current = SessionIdentityProvider().resolve(make_request(token), response, db)

    assert current == customer
    assert "set-cookie" not in response.headers


def test_no_admin_means_no_user(db, customer):
    assert SessionIdentityProvider().resolve(make_request(), Response(), db) is None


def test_session_provider_over_http(client, db, admin, customer):
    app.dependency_overrides[get_identity_provider] = SessionIdentityProvider
    spectacle_id = client.post("/admin/spectacle", data={"title": "Hamlet"}).json()["id"]
    client.cookies.set(settings.SESSION_COOKIE_NAME, create_session_token(str(customer.id)))

    response = client.post(f"/spectacle/{spectacle_id}/review", json={"rating": 3})

    assert response.status_code == 201
    assert response.json()["user_id"] == customer.id
