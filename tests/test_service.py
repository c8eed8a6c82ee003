# tests/test_service.py
import json

import pytest

from pkg_jwt import (
    ErrorReason,
    FixedClock,
    Hourly,
    InvalidSignatureError,
    Jwks,
    KeyResolutionError,
    PipelineTokenDecoder,
    TaggedKey,
    TokenExpiredError,
    encode,
)
from pkg_jwt.config import JWTSettings, settings_from_env
from pkg_jwt.integrations.common.token_service import create_token_service

from .conftest import HMAC_SECRET, NOW, OTHER_SECRET


# --- PipelineTokenDecoder ------------------------------------------------------


def test_pipeline_decoder_returns_claims():
    token = encode("HS256", {"sub": "a"}, HMAC_SECRET).unwrap()
    assert PipelineTokenDecoder(HMAC_SECRET).decode(token) == {"sub": "a"}


def test_pipeline_decoder_raises_domain_errors():
    decoder = PipelineTokenDecoder(HMAC_SECRET)

    expired = encode("HS256", {"exp": 1}, HMAC_SECRET).unwrap()
    with pytest.raises(TokenExpiredError):
        decoder.decode(expired)

    forged = encode("HS256", {"sub": "a"}, OTHER_SECRET).unwrap()
    with pytest.raises(InvalidSignatureError):
        decoder.decode(forged)

    jwks_decoder = PipelineTokenDecoder(b"", Jwks([{"kty": "oct", "kid": "x", "k": "c2VjcmV0"}]))
    with pytest.raises(KeyResolutionError) as info:
        jwks_decoder.decode(encode("HS256", {}, TaggedKey("y", b"s")).unwrap())
    assert info.value.reason is ErrorReason.KEY_NOT_FOUND


# --- settings + service ----------------------------------------------------------


def test_settings_rejects_unknown_algorithm():
    with pytest.raises(ValueError):
        JWTSettings(algorithm="PS256", key="k")


def test_settings_keys(rsa_pem):
    private_pem, public_pem = rsa_pem
    settings = JWTSettings(algorithm="RS256", key=private_pem, verify_key=public_pem, key_id="k1")
    assert settings.signing_key.kid == "k1"
    assert settings.verification_key == public_pem

    plain = JWTSettings(algorithm="HS256", key="secret")
    assert plain.signing_key == "secret"
    assert plain.verification_key == "secret"


def test_token_service_round_trip(rsa_pem):
    private_pem, public_pem = rsa_pem
    clock = FixedClock(NOW)
    service = create_token_service(
        JWTSettings(
            algorithm="RS256",
            key=private_pem,
            verify_key=public_pem,
            expiration=Hourly(3600),
        ),
        clock=clock,
    )

    token = service.issue({"sub": "a"}).unwrap()
    assert service.verify(token).unwrap() == {"sub": "a", "exp": NOW - 900 + 3600}

    clock.advance(2700)
    assert service.verify(token).error is ErrorReason.EXPIRED
    with pytest.raises(TokenExpiredError):
        service.token_decoder().decode(token)


def test_token_service_issuer_keys():
    service = create_token_service(
        JWTSettings(algorithm="HS256", key=HMAC_SECRET, issuer_keys={"partner": OTHER_SECRET}),
    )
    partner_token = encode("HS256", {"iss": "partner"}, OTHER_SECRET).unwrap()
    assert service.verify(partner_token).ok
    assert service.verify(service.issue({"iss": "us"}).unwrap()).ok


def test_settings_from_env(monkeypatch, tmp_path):
    jwks_file = tmp_path / "jwks.json"
    jwks_file.write_text(json.dumps({"keys": [{"kty": "oct", "kid": "k1", "k": "c2VjcmV0"}]}))
    key_file = tmp_path / "key.txt"
    key_file.write_text("file-secret")

    for name in ("JWT_KEY", "JWT_VERIFY_KEY", "JWT_VERIFY_KEY_FILE", "JWT_ISSUER_KEYS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("JWT_ALGORITHM", "HS384")
    monkeypatch.setenv("JWT_KEY_FILE", str(key_file))
    monkeypatch.setenv("JWT_KEY_ID", "k1")
    monkeypatch.setenv("JWT_EXPIRATION", "daily:3600")
    monkeypatch.setenv("JWT_JWKS_FILE", str(jwks_file))
    monkeypatch.setenv("JWT_COOKIE_NAME", "session")

    settings = settings_from_env()
    assert settings.algorithm == "HS384"
    assert settings.key == "file-secret"
    assert settings.key_id == "k1"
    assert settings.expiration.offset == 3600
    assert settings.jwks.keys[0]["kid"] == "k1"
    assert settings.cookie_name == "session"

    monkeypatch.delenv("JWT_COOKIE_NAME")
    assert settings_from_env().cookie_name == "access_token"


def test_settings_from_env_missing_key(monkeypatch):
    monkeypatch.delenv("JWT_KEY", raising=False)
    monkeypatch.delenv("JWT_KEY_FILE", raising=False)
    with pytest.raises(RuntimeError, match="JWT_KEY"):
        settings_from_env()
