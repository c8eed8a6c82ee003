from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from ..domain.ports import KeyIdResolver
from ..domain.results import Result
from ..domain.value_objects import Jwks, Key

IssuerKeys = Union[Mapping[str, Key], Jwks, None]


@dataclass(slots=True)
class KeyResolver:
    """
    Picks the verification key for a parsed token.

    Precedence:
      1. header `kid` + a JWKS (passed as `issuer_keys`, or JSON text passed
         as the default key)
      2. claims `iss` looked up in the issuer mapping
      3. the default key, unchanged

    When the header has a kid and a JWKS is available, (1) decides alone:
    its failure is final and (2) is never tried.
    """

    kid_resolver: KeyIdResolver

    def resolve(
            self,
            header: Mapping[str, Any],
            claims: Mapping[str, Any],
            default_key: Key,
            issuer_keys: IssuerKeys = None,
    ) -> Result[Key]:
        kid = header.get("kid")
        if kid is not None:
            jwks = self._as_jwks(default_key, issuer_keys)
            if jwks is not None:
                return self.kid_resolver.resolve(kid, jwks)

        return Result.success(self._by_issuer(claims, default_key, issuer_keys))

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _as_jwks(default_key: Key, issuer_keys: IssuerKeys) -> Jwks | None:
        if isinstance(issuer_keys, Jwks):
            return issuer_keys
        if isinstance(default_key, Jwks):
            return default_key
        if isinstance(default_key, (str, bytes)):
            try:
                return Jwks.from_json(default_key)
            except ValueError:
                # Not a JWKS: the text is a plain key
                return None
        return None

    @staticmethod
    def _by_issuer(claims: Mapping[str, Any], default_key: Key, issuer_keys: IssuerKeys) -> Key:
        if not isinstance(issuer_keys, Mapping):
            return default_key
        issuer = claims.get("iss")
        if not isinstance(issuer, str):
            return default_key
        return issuer_keys.get(issuer, default_key)
