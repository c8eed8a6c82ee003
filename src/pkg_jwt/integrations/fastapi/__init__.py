from __future__ import annotations

from typing import Optional

from .deps import FastAPITokenAuth
from .security import bearer_scheme, extract_token_from_request
from ..common.token_service import TokenService, create_token_service
from ...config.settings import JWTSettings
from ...domain.ports import Clock


def create_fastapi_auth(
    settings: JWTSettings,
    *,
    clock: Optional[Clock] = None,
) -> FastAPITokenAuth:
    """
    High-level helper for FastAPI apps:

    - Creates a TokenService from JWTSettings
    - Wraps its decoder in FastAPITokenAuth, reading cookies named
      `settings.cookie_name`, exposing dependencies like:

        fastapi_auth.get_current_claims
        fastapi_auth.get_optional_claims
        fastapi_auth.require_issuer(...)

    Typical wiring:

        from pkg_jwt.config import settings_from_env
        from pkg_jwt.integrations.fastapi import create_fastapi_auth

        fastapi_auth = create_fastapi_auth(settings_from_env())
        get_current_claims = fastapi_auth.get_current_claims
    """
    service: TokenService = create_token_service(settings, clock=clock)
    return FastAPITokenAuth(decoder=service.token_decoder(), cookie_name=settings.cookie_name)


__all__ = [
    "FastAPITokenAuth",
    "bearer_scheme",
    "create_fastapi_auth",
    "extract_token_from_request",
]
