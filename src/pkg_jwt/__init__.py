"""
pkg_jwt

Clean-architecture JSON Web Token issuing and verification: HMAC, RSA and
ECDSA signatures, key selection by JWKS kid or by issuer, and expiry
enforcement with hourly / daily rollover helpers.
"""

__version__ = "0.1.0"

from .domain.constants import Algorithm, ErrorReason, Family, HashName
from .domain.exceptions import (
    JWTError,
    AuthenticationError,
    InvalidTokenError,
    InvalidSignatureError,
    TokenExpiredError,
    KeyResolutionError,
    AlgorithmNotSupportedError,
    InvalidKeyError,
)
from .domain.results import Result
from .domain.value_objects import Daily, Hourly, Jwks, TaggedKey, parse_expiration
from .domain.ports import Clock, KeyIdResolver, TokenDecoder

from .application.key_resolver import KeyResolver
from .application.use_cases.decode import DecodeTokenUseCase
from .application.use_cases.encode import EncodeTokenUseCase

from .adapters.clock import FixedClock, SystemClock
from .adapters.jwks.resolver import PyJWKSetResolver
from .adapters.token_decoder import PipelineTokenDecoder

from .tokens import decode, encode

__all__ = [
    "__version__",
    # functional API
    "encode",
    "decode",
    # domain core
    "Algorithm",
    "ErrorReason",
    "Family",
    "HashName",
    "Result",
    "TaggedKey",
    "Jwks",
    "Hourly",
    "Daily",
    "parse_expiration",
    "Clock",
    "KeyIdResolver",
    "TokenDecoder",
    # exceptions
    "JWTError",
    "AuthenticationError",
    "InvalidTokenError",
    "InvalidSignatureError",
    "TokenExpiredError",
    "KeyResolutionError",
    "AlgorithmNotSupportedError",
    "InvalidKeyError",
    # use cases
    "KeyResolver",
    "DecodeTokenUseCase",
    "EncodeTokenUseCase",
    # adapters
    "FixedClock",
    "SystemClock",
    "PyJWKSetResolver",
    "PipelineTokenDecoder",
]
