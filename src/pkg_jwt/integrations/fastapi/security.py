from __future__ import annotations

from typing import Iterator, Optional

from fastapi import HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...domain.constants import ErrorReason

# OpenAPI-visible scheme; auto_error is off so cookie-only clients still reach the route
bearer_scheme = HTTPBearer(auto_error=False)

DEFAULT_COOKIE_NAME = "access_token"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def is_compact_token(token: str) -> bool:
    """True for text shaped like a compact JWS: three dot-separated segments."""
    return token.count(".") == 2


def token_candidates(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
    cookie_name: str,
) -> Iterator[str]:
    """Non-empty tokens carried by the request, in order of preference."""
    if credentials is not None and credentials.credentials:
        yield credentials.credentials.strip()

    scheme, _, value = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        yield value.strip()

    cookie_token = request.cookies.get(cookie_name)
    if cookie_token:
        yield cookie_token


def extract_token_from_request(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> str:
    """
    Return the request's token: the bearer header wins over the cookie.

    Raises HTTPException(401) when there is no token, or when the preferred
    token is not a compact JWS; the latter never reaches the decoder.
    """
    token = next(token_candidates(request, credentials, cookie_name), None)
    if token is None:
        raise _unauthorized("Not authenticated")
    if not is_compact_token(token):
        raise _unauthorized(str(ErrorReason.INVALID_TOKEN))
    return token
