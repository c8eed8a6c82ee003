from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from typing import Any, Optional

from ...adapters.clock import SystemClock
from ...adapters.codec import encode_bytes, encode_segment
from ...adapters.crypto.primitives import sign
from ...domain.constants import NONCE_BYTES, TOKEN_TYPE, Algorithm, ErrorReason
from ...domain.exceptions import InvalidKeyError
from ...domain.ports import Clock
from ...domain.results import Result
from ...domain.value_objects import (
    ClaimsInput,
    Expiration,
    Key,
    TaggedKey,
    expiration_to_epoch,
    normalize_claims,
)

logger = logging.getLogger(__name__)


def build_header(algorithm: str, kid: Optional[str]) -> dict[str, Any]:
    header: dict[str, Any] = {
        "alg": algorithm,
        "nonce": secrets.token_hex(NONCE_BYTES),
        "typ": TOKEN_TYPE,
    }
    if kid is not None:
        header["kid"] = kid
    return header


@dataclass(slots=True)
class EncodeTokenUseCase:
    """
    Application use case:
    - optionally stamp an `exp` claim
    - build header + claims segments
    - sign `header.claims` and append the signature

    A `TaggedKey` puts its kid into the header so that verifiers can pick
    the key out of a JWKS.
    """

    clock: Clock = field(default_factory=SystemClock)

    def execute(
            self,
            algorithm: Algorithm | str,
            claims: ClaimsInput,
            key: Key | TaggedKey,
            expiration: Optional[Expiration] = None,
    ) -> Result[str]:
        kid: Optional[str] = None
        if isinstance(key, TaggedKey):
            kid, key = key.kid, key.key

        alg = Algorithm.lookup(algorithm)
        if alg is None:
            return Result.failure(
                ErrorReason.ALGORITHM_NOT_SUPPORTED,
                f"Algorithm {algorithm!s} is not supported",
            )

        payload_claims = normalize_claims(claims)
        if expiration is not None:
            # replaces any `exp` the caller already set
            payload_claims["exp"] = expiration_to_epoch(expiration, self.clock.now())

        signing_input = (
            f"{encode_segment(build_header(alg.jws_name, kid))}."
            f"{encode_segment(payload_claims)}"
        )

        try:
            signature = sign(alg, signing_input.encode("ascii"), key)
        except InvalidKeyError as exc:
            return Result.failure(ErrorReason.INVALID_KEY, str(exc))

        if signature is None:
            return Result.failure(
                ErrorReason.ALGORITHM_NOT_SUPPORTED,
                f"No {alg} signer for key of type {type(key).__name__}",
            )

        logger.debug("Issued %s token (kid=%s)", alg, kid)
        return Result.success(f"{signing_input}.{encode_bytes(signature)}")
