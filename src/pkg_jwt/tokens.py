"""
Functional entry points: `encode` and `decode`.

Both return a `Result` and never raise for malformed tokens, unknown
algorithms or unusable keys. Call `.unwrap()` on the result to get the
value or the matching domain exception.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from .adapters.clock import SystemClock
from .adapters.jwks.resolver import PyJWKSetResolver
from .application.key_resolver import IssuerKeys, KeyResolver
from .application.use_cases.decode import DecodeTokenUseCase
from .application.use_cases.encode import EncodeTokenUseCase
from .domain.constants import Algorithm
from .domain.ports import Clock
from .domain.results import Result
from .domain.value_objects import ClaimsInput, Expiration, Jwks, Key, TaggedKey


def encode(
        algorithm: Algorithm | str,
        claims: ClaimsInput,
        key: Key | TaggedKey,
        *,
        expiration: Optional[Expiration] = None,
        clock: Optional[Clock] = None,
) -> Result[str]:
    """
    Build and sign a token.

    `expiration` is either seconds from now, `Hourly(offset)` or
    `Daily(offset)`; it overwrites any `exp` already in `claims`.
    """
    use_case = EncodeTokenUseCase(clock=clock or SystemClock())
    return use_case.execute(algorithm, claims, key, expiration)


def decode(
        token: str,
        key: Key | Jwks | Mapping[str, Key],
        issuer_keys: IssuerKeys = None,
        *,
        clock: Optional[Clock] = None,
) -> Result[dict[str, Any]]:
    """
    Verify a token and return its claims.

    `key` is the default verification key. `issuer_keys` is either a
    mapping of `iss` -> key or a `Jwks` used when the header carries a kid.
    Called with only a `Jwks` or an issuer mapping, that value is used as
    `issuer_keys` with an empty default key.
    """
    if issuer_keys is None and isinstance(key, (Jwks, Mapping)):
        key, issuer_keys = b"", key
    use_case = DecodeTokenUseCase(
        key_resolver=KeyResolver(kid_resolver=PyJWKSetResolver()),
        clock=clock or SystemClock(),
    )
    return use_case.execute(token, key, issuer_keys)
