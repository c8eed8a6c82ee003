from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from ...domain.exceptions import AuthenticationError, TokenExpiredError
from ...domain.ports import TokenDecoder
from .security import DEFAULT_COOKIE_NAME, bearer_scheme, extract_token_from_request


@dataclass(slots=True)
class FastAPITokenAuth:
    """
    FastAPI integration for pkg_jwt.

    Wraps any TokenDecoder (usually `TokenService.token_decoder()`) into
    route dependencies that hand the verified claims to the handler.
    """

    decoder: TokenDecoder
    cookie_name: str = DEFAULT_COOKIE_NAME

    # ------------------------------------------------------------------ #
    # Base dependencies
    # ------------------------------------------------------------------ #

    async def get_current_claims(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> Mapping[str, Any]:
        """Dependency: require a valid token."""
        token = extract_token_from_request(request, credentials, self.cookie_name)
        try:
            return self.decoder.decode(token)
        except TokenExpiredError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token expired",
            ) from exc
        except AuthenticationError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(exc.reason),
            ) from exc

    async def get_optional_claims(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> Mapping[str, Any] | None:
        """Dependency: claims if a valid token is present, else None."""
        try:
            token = extract_token_from_request(request, credentials, self.cookie_name)
        except HTTPException:
            # no token anywhere -> anonymous
            return None

        try:
            return self.decoder.decode(token)
        except AuthenticationError:
            return None

    # ------------------------------------------------------------------ #
    # Claim-based dependency factories
    # ------------------------------------------------------------------ #

    def require_issuer(self, *issuers: str) -> Callable:
        """
        Dependency factory: require the token's `iss` to be one of `issuers`.
        """

        async def dependency(
                claims: Mapping[str, Any] = Depends(self.get_current_claims),
        ) -> Mapping[str, Any]:
            if claims.get("iss") not in issuers:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Issuer not accepted: {claims.get('iss')!r}",
                )
            return claims

        return dependency
