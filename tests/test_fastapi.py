# tests/test_fastapi.py
import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from pkg_jwt import FixedClock, encode
from pkg_jwt.config import JWTSettings
from pkg_jwt.integrations.fastapi import FastAPITokenAuth, create_fastapi_auth

from .conftest import HMAC_SECRET, NOW, OTHER_SECRET


@pytest.fixture
def client():
    auth = create_fastapi_auth(
        JWTSettings(algorithm="HS256", key=HMAC_SECRET),
        clock=FixedClock(NOW),
    )
    app = FastAPI()

    @app.get("/me")
    async def me(claims=Depends(auth.get_current_claims)):
        return {"sub": claims["sub"]}

    @app.get("/maybe")
    async def maybe(claims=Depends(auth.get_optional_claims)):
        return {"sub": claims["sub"] if claims else None}

    @app.get("/partner")
    async def partner(claims=Depends(auth.require_issuer("partner"))):
        return {"iss": claims["iss"]}

    return TestClient(app)


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_valid_bearer_token(client):
    token = encode("HS256", {"sub": "alice"}, HMAC_SECRET).unwrap()
    resp = client.get("/me", headers=_bearer(token))
    assert resp.status_code == 200
    assert resp.json() == {"sub": "alice"}


def test_cookie_token(client):
    token = encode("HS256", {"sub": "bob"}, HMAC_SECRET).unwrap()
    client.cookies.set("access_token", token)
    resp = client.get("/me")
    assert resp.status_code == 200
    assert resp.json() == {"sub": "bob"}


def test_missing_token(client):
    resp = client.get("/me")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Not authenticated"


def test_expired_token(client):
    token = encode("HS256", {"sub": "a", "exp": NOW - 1}, HMAC_SECRET).unwrap()
    resp = client.get("/me", headers=_bearer(token))
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token expired"


def test_bad_signature(client):
    token = encode("HS256", {"sub": "a"}, OTHER_SECRET).unwrap()
    resp = client.get("/me", headers=_bearer(token))
    assert resp.status_code == 401
    assert resp.json()["detail"] == "invalid_signature"


def test_optional_claims(client):
    assert client.get("/maybe").json() == {"sub": None}
    assert client.get("/maybe", headers=_bearer("a.b")).json() == {"sub": None}

    token = encode("HS256", {"sub": "alice"}, HMAC_SECRET).unwrap()
    assert client.get("/maybe", headers=_bearer(token)).json() == {"sub": "alice"}


def test_require_issuer(client):
    ours = encode("HS256", {"iss": "us"}, HMAC_SECRET).unwrap()
    assert client.get("/partner", headers=_bearer(ours)).status_code == 403

    partner = encode("HS256", {"iss": "partner"}, HMAC_SECRET).unwrap()
    resp = client.get("/partner", headers=_bearer(partner))
    assert resp.status_code == 200
    assert resp.json() == {"iss": "partner"}


class RecordingDecoder:
    """TokenDecoder double that remembers which tokens reached it."""

    def __init__(self):
        self.seen = []

    def decode(self, token):
        self.seen.append(token)
        return {"sub": "recorded"}


def _app_for(auth):
    app = FastAPI()

    @app.get("/me")
    async def me(claims=Depends(auth.get_current_claims)):
        return {"sub": claims["sub"]}

    return TestClient(app)


@pytest.mark.parametrize("token", ["a.b", "a.b.c.d", "opaque-session-id", "...."])
def test_non_compact_token_never_reaches_decoder(token):
    decoder = RecordingDecoder()
    client = _app_for(FastAPITokenAuth(decoder=decoder))

    resp = client.get("/me", headers=_bearer(token))
    assert resp.status_code == 401
    assert resp.json()["detail"] == "invalid_token"
    assert resp.headers["WWW-Authenticate"] == "Bearer"
    assert decoder.seen == []


def test_bearer_header_wins_over_cookie():
    decoder = RecordingDecoder()
    client = _app_for(FastAPITokenAuth(decoder=decoder))
    client.cookies.set("access_token", "c.c.c")

    assert client.get("/me", headers=_bearer("h.h.h")).status_code == 200
    assert client.get("/me").status_code == 200
    assert decoder.seen == ["h.h.h", "c.c.c"]


def test_cookie_name_comes_from_settings():
    auth = create_fastapi_auth(
        JWTSettings(algorithm="HS256", key=HMAC_SECRET, cookie_name="session"),
        clock=FixedClock(NOW),
    )
    assert auth.cookie_name == "session"
    client = _app_for(auth)
    token = encode("HS256", {"sub": "carol"}, HMAC_SECRET).unwrap()

    client.cookies.set("access_token", token)
    assert client.get("/me").status_code == 401

    client.cookies.set("session", token)
    resp = client.get("/me")
    assert resp.status_code == 200
    assert resp.json() == {"sub": "carol"}
