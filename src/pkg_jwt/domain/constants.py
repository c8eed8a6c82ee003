from __future__ import annotations

from enum import Enum
from typing import Optional

TOKEN_TYPE = "JWT"
NONCE_BYTES = 16

HOUR = 3600
DAY = HOUR * 24


class Family(Enum):
    HMAC = "hmac"
    RSA = "rsa"
    ECDSA = "ecdsa"


class HashName(Enum):
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"


class Algorithm(Enum):
    """
    Closed registry of the signature algorithms this package can sign and
    verify. Each member carries its (family, hash) pair.

    ES384, ES512 and PS256/384/512 are valid JWS names but are not supported;
    `lookup` returns None for them like for any unknown name.
    """

    HS256 = ("HS256", Family.HMAC, HashName.SHA256)
    HS384 = ("HS384", Family.HMAC, HashName.SHA384)
    HS512 = ("HS512", Family.HMAC, HashName.SHA512)
    RS256 = ("RS256", Family.RSA, HashName.SHA256)
    RS384 = ("RS384", Family.RSA, HashName.SHA384)
    RS512 = ("RS512", Family.RSA, HashName.SHA512)
    ES256 = ("ES256", Family.ECDSA, HashName.SHA256)

    def __init__(self, jws_name: str, family: Family, hash_name: HashName) -> None:
        self.jws_name = jws_name
        self.family = family
        self.hash_name = hash_name

    def __str__(self) -> str:
        return self.jws_name

    @classmethod
    def lookup(cls, name: "str | Algorithm | None") -> Optional["Algorithm"]:
        if isinstance(name, Algorithm):
            return name
        if not isinstance(name, str):
            return None
        for member in cls:
            if member.jws_name == name:
                return member
        return None


class ErrorReason(str, Enum):
    INVALID_TOKEN = "invalid_token"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    KEY_NOT_FOUND = "key_not_found"
    INVALID_JWKS = "invalid_jwks"
    ALGORITHM_NOT_SUPPORTED = "algorithm_not_supported"
    INVALID_KEY = "invalid_key"

    def __str__(self) -> str:
        return self.value
