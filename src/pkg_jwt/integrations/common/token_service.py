from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ...adapters.clock import SystemClock
from ...adapters.jwks.resolver import PyJWKSetResolver
from ...adapters.token_decoder import PipelineTokenDecoder
from ...application.key_resolver import IssuerKeys, KeyResolver
from ...application.use_cases.decode import DecodeTokenUseCase
from ...application.use_cases.encode import EncodeTokenUseCase
from ...config.settings import JWTSettings
from ...domain.ports import Clock, TokenDecoder
from ...domain.results import Result
from ...domain.value_objects import ClaimsInput, Expiration, Key, TaggedKey


@dataclass(slots=True)
class TokenService:
    """
    Framework-agnostic facade bundling one signing setup and one
    verification setup.

    Integrations (FastAPI, CLI, etc.) adapt this to their own needs.
    """

    encode_use_case: EncodeTokenUseCase
    decode_use_case: DecodeTokenUseCase
    algorithm: str
    signing_key: Key | TaggedKey
    verification_key: Key
    issuer_keys: IssuerKeys = None
    default_expiration: Optional[Expiration] = None

    # --- Core operations --------------------------------------------------

    def issue(
            self,
            claims: ClaimsInput,
            expiration: Optional[Expiration] = None,
    ) -> Result[str]:
        """Claims -> signed token, using the default expiration if none given."""
        return self.encode_use_case.execute(
            self.algorithm,
            claims,
            self.signing_key,
            expiration if expiration is not None else self.default_expiration,
        )

    def verify(self, token: str) -> Result[dict[str, Any]]:
        """Token -> claims (or the failure reason)."""
        return self.decode_use_case.execute(token, self.verification_key, self.issuer_keys)

    def token_decoder(self) -> TokenDecoder:
        """Raising TokenDecoder port over this service's verification setup."""
        return PipelineTokenDecoder(
            key=self.verification_key,
            issuer_keys=self.issuer_keys,
            use_case=self.decode_use_case,
        )


def create_token_service(
        settings: JWTSettings,
        *,
        clock: Optional[Clock] = None,
) -> TokenService:
    """
    High-level factory: JWTSettings -> TokenService.

    - a configured JWKS takes the issuer-keys slot (kid lookup wins anyway)
    - otherwise the issuer mapping is used, falling back to the verify key
    """
    clock = clock or SystemClock()
    issuer_keys: IssuerKeys = settings.jwks if settings.jwks is not None else settings.issuer_keys

    return TokenService(
        encode_use_case=EncodeTokenUseCase(clock=clock),
        decode_use_case=DecodeTokenUseCase(
            key_resolver=KeyResolver(kid_resolver=PyJWKSetResolver()),
            clock=clock,
        ),
        algorithm=settings.algorithm,
        signing_key=settings.signing_key,
        verification_key=settings.verification_key,
        issuer_keys=issuer_keys or None,
        default_expiration=settings.expiration,
    )
