from __future__ import annotations

from typing import Any, Mapping, Optional

from ..application.key_resolver import IssuerKeys, KeyResolver
from ..application.use_cases.decode import DecodeTokenUseCase
from ..domain.ports import TokenDecoder
from .jwks.resolver import PyJWKSetResolver
from ..domain.value_objects import Key


class PipelineTokenDecoder(TokenDecoder):
    """
    Adapter implementing the TokenDecoder port on top of DecodeTokenUseCase.

    Holds the verification key material so that framework integrations only
    pass the token; failures are raised as domain exceptions.
    """

    def __init__(
        self,
        key: Key,
        issuer_keys: IssuerKeys = None,
        use_case: Optional[DecodeTokenUseCase] = None,
    ) -> None:
        self._key = key
        self._issuer_keys = issuer_keys
        self._use_case = use_case or DecodeTokenUseCase(
            key_resolver=KeyResolver(kid_resolver=PyJWKSetResolver()),
        )

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def decode(self, token: str) -> Mapping[str, Any]:
        """
        Decode and validate JWT token.

        Returns:
            Mapping of token claims (dict-like).

        Raises:
            TokenExpiredError
            InvalidTokenError
            InvalidSignatureError
            KeyResolutionError
        """
        return self._use_case.execute(token, self._key, self._issuer_keys).unwrap()
