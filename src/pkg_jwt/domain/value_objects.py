# src/pkg_jwt/domain/value_objects.py

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Tuple, Union

from .constants import DAY, HOUR


# --- Keys -----------------------------------------------------------------

# HMAC secret, PEM text, or a `cryptography` key object.
Key = Any


@dataclass(frozen=True, slots=True)
class TaggedKey:
    """
    A signing key together with the identifier it is published under in a
    JWKS. The kid is written into the token header on encode.
    """
    kid: str
    key: Key

    def __post_init__(self) -> None:
        if not isinstance(self.kid, str) or not self.kid:
            raise ValueError(f"Invalid key id: {self.kid!r}")


@dataclass(frozen=True, slots=True)
class Jwks:
    """
    A decoded JSON Web Key Set.

    Only the shape is checked here (an object with a `keys` array); turning
    an entry into usable key material is the resolver's job.
    """
    keys: Tuple[Mapping[str, Any], ...]

    def __init__(self, keys: Iterable[Mapping[str, Any]]) -> None:
        object.__setattr__(self, "keys", tuple(keys))

    @classmethod
    def from_mapping(cls, document: Mapping[str, Any]) -> "Jwks":
        keys = document.get("keys") if isinstance(document, Mapping) else None
        if not isinstance(keys, list):
            raise ValueError("JWKS document must be an object with a 'keys' array")
        return cls(keys)

    @classmethod
    def from_json(cls, raw: str | bytes) -> "Jwks":
        """
        Raises:
            ValueError if `raw` is not JSON text of a JWKS document.
        """
        try:
            document = json.loads(raw)
        except (TypeError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            raise ValueError(f"Not a JWKS document: {exc}") from exc
        return cls.from_mapping(document)

    def as_dict(self) -> dict[str, Any]:
        return {"keys": [dict(k) for k in self.keys]}


# --- Expiration -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Hourly:
    """Expire `offset` seconds after the start of the current hour."""
    offset: int

    period = HOUR


@dataclass(frozen=True, slots=True)
class Daily:
    """Expire `offset` seconds after the start of the current UTC day."""
    offset: int

    period = DAY


Expiration = Union[int, Hourly, Daily]


def expiration_to_epoch(expiration: Expiration, now: int) -> int:
    """
    Turn an expiration directive into a concrete `exp` value.

    Offsets larger than the period roll into later periods; an offset that
    lands before `now` produces an already-expired token.
    """
    if isinstance(expiration, (Hourly, Daily)):
        return (now - (now % expiration.period)) + expiration.offset
    if isinstance(expiration, bool) or not isinstance(expiration, int):
        raise TypeError(f"Unsupported expiration: {expiration!r}")
    return now + expiration


def parse_expiration(raw: str) -> Expiration:
    """
    Parse the textual form used by configuration and the CLI:

      "3600"         -> 3600 seconds from now
      "hourly:1800"  -> Hourly(1800)
      "daily:0"      -> Daily(0)
    """
    text = raw.strip()
    kind, sep, value = text.partition(":")
    try:
        if not sep:
            return int(text)
        if kind == "hourly":
            return Hourly(int(value))
        if kind == "daily":
            return Daily(int(value))
    except ValueError as exc:
        raise ValueError(f"Invalid expiration: {raw!r}") from exc
    raise ValueError(f"Invalid expiration: {raw!r}")


# --- Claims ---------------------------------------------------------------


ClaimsInput = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def normalize_claims(claims: ClaimsInput) -> dict[str, Any]:
    """
    Accept claims as a mapping or as ordered (name, value) pairs and return
    a fresh dict. Insertion order is kept; for pairs, a later duplicate
    name overwrites an earlier one.
    """
    if isinstance(claims, Mapping):
        return dict(claims)
    if isinstance(claims, (str, bytes)):
        raise TypeError("Claims must be a mapping or (name, value) pairs")
    return {name: value for name, value in claims}
