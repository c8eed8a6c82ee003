from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..domain.constants import Algorithm
from ..domain.value_objects import Expiration, Jwks, Key, TaggedKey


@dataclass(slots=True)
class JWTSettings:
    """
    Token issuing + verification settings.

    Host code decides how to construct this (env, config file, etc.).
    """
    algorithm: str
    key: Key
    verify_key: Optional[Key] = None
    key_id: Optional[str] = None
    expiration: Optional[Expiration] = None

    # Verification wiring
    issuer_keys: Dict[str, Key] = field(default_factory=dict)
    jwks: Optional[Jwks] = None

    # HTTP integrations read the token from this cookie when no bearer header is sent
    cookie_name: str = "access_token"

    def __post_init__(self) -> None:
        if Algorithm.lookup(self.algorithm) is None:
            raise ValueError(f"Unsupported algorithm: {self.algorithm!r}")

    @property
    def signing_key(self) -> Key | TaggedKey:
        if self.key_id:
            return TaggedKey(self.key_id, self.key)
        return self.key

    @property
    def verification_key(self) -> Key:
        return self.verify_key if self.verify_key is not None else self.key
