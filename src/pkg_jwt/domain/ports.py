from __future__ import annotations

from typing import Any, Mapping, Protocol

from .results import Result
from .value_objects import Jwks, Key


class TokenDecoder(Protocol):
    """
    Port for decoding an access token into claims.

    Framework integrations depend on this port rather than on the pipeline.
    """

    def decode(self, token: str) -> Mapping[str, Any]:
        """
        Decode and verify the given token.

        Should:
          - verify signature
          - check expiry
        Raises:
          - TokenExpiredError
          - InvalidTokenError
          - or other domain-specific auth exceptions
        """
        ...


class Clock(Protocol):
    """Source of the current time as whole Unix epoch seconds."""

    def now(self) -> int:
        ...


class KeyIdResolver(Protocol):
    """
    Port for extracting usable key material for a kid from a JWKS.

    Must not raise for unknown kids or unusable sets: failures are returned
    as a `Result` carrying KEY_NOT_FOUND or INVALID_JWKS.
    """

    def resolve(self, kid: str, jwks: Jwks) -> Result[Key]:
        ...
