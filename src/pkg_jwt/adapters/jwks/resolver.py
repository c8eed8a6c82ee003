from __future__ import annotations

import logging
from collections.abc import Mapping

from jwt import PyJWKSet
from jwt.exceptions import PyJWKSetError

from ...domain.constants import ErrorReason
from ...domain.ports import KeyIdResolver
from ...domain.results import Result
from ...domain.value_objects import Jwks, Key

logger = logging.getLogger(__name__)


class PyJWKSetResolver(KeyIdResolver):
    """
    Adapter implementing KeyIdResolver with PyJWT's JWK set parser.

    Entries with an unknown `kty` are skipped. A set with no usable entry,
    or an entry missing a member its `kty` requires, is INVALID_JWKS.
    """

    def resolve(self, kid: str, jwks: Jwks) -> Result[Key]:
        entries = [dict(k) for k in jwks.keys if isinstance(k, Mapping)]
        try:
            key_set = PyJWKSet(entries)
        except (PyJWKSetError, KeyError, TypeError, ValueError) as exc:
            # PyJWT raises the bare errors for entries missing required members
            logger.debug("Unusable JWKS: %s", exc)
            return Result.failure(ErrorReason.INVALID_JWKS, str(exc))

        try:
            jwk = key_set[kid]
        except KeyError:
            return Result.failure(ErrorReason.KEY_NOT_FOUND, f"No key for kid {kid!r}")
        return Result.success(jwk.key)
