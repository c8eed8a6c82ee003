from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from ..domain.value_objects import Jwks, parse_expiration
from .settings import JWTSettings


def settings_from_env() -> JWTSettings:
    """
    Build JWTSettings from environment variables:

      JWT_ALGORITHM            default HS256
      JWT_KEY / JWT_KEY_FILE   signing secret or private key PEM (one required)
      JWT_VERIFY_KEY[_FILE]    verification key, defaults to the signing key
      JWT_KEY_ID               kid written into issued tokens
      JWT_EXPIRATION           "3600", "hourly:1800" or "daily:0"
      JWT_ISSUER_KEYS          JSON object mapping issuer -> key
      JWT_JWKS_FILE            path to a JWKS document
      JWT_COOKIE_NAME          cookie holding the token, default access_token
    """
    def _read(key: str) -> Optional[str]:
        raw = os.getenv(key)
        if raw:
            return raw
        path = os.getenv(f"{key}_FILE")
        if path:
            return Path(path).read_text(encoding="utf-8")
        return None

    algorithm = os.getenv("JWT_ALGORITHM") or "HS256"
    key = _read("JWT_KEY")
    if not key:
        raise RuntimeError("Missing JWT settings: JWT_KEY or JWT_KEY_FILE")

    raw_expiration = os.getenv("JWT_EXPIRATION")
    raw_issuer_keys = os.getenv("JWT_ISSUER_KEYS")
    jwks_file = os.getenv("JWT_JWKS_FILE")

    issuer_keys = json.loads(raw_issuer_keys) if raw_issuer_keys else {}
    if not isinstance(issuer_keys, dict):
        raise RuntimeError("JWT_ISSUER_KEYS must be a JSON object")

    return JWTSettings(
        algorithm=algorithm,
        key=key,
        verify_key=_read("JWT_VERIFY_KEY"),
        key_id=os.getenv("JWT_KEY_ID") or None,
        expiration=parse_expiration(raw_expiration) if raw_expiration else None,
        issuer_keys=issuer_keys,
        jwks=Jwks.from_json(Path(jwks_file).read_bytes()) if jwks_file else None,
        cookie_name=os.getenv("JWT_COOKIE_NAME") or "access_token",
    )
