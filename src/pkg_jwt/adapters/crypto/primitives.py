"""
Signature dispatch from an `Algorithm` to PyJWT's primitive classes.

`sign` and `verify` are the only places that touch key material; both take
PEM text or `cryptography` key objects for the asymmetric families and
`bytes` / `str` secrets for HMAC.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.ec import (
    EllipticCurvePrivateKey,
    EllipticCurvePublicKey,
)
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from jwt.algorithms import ECAlgorithm, HMACAlgorithm, RSAAlgorithm
from jwt.exceptions import PyJWTError
from jwt.utils import force_bytes

from ...domain.constants import Algorithm, Family
from ...domain.exceptions import InvalidKeyError
from ...domain.value_objects import Key
from .pem import load_pem_key, looks_like_pem

logger = logging.getLogger(__name__)

_PRIMITIVES = {
    Family.HMAC: HMACAlgorithm,
    Family.RSA: RSAAlgorithm,
    Family.ECDSA: ECAlgorithm,
}

_PRIVATE_TYPES = {
    Family.RSA: RSAPrivateKey,
    Family.ECDSA: EllipticCurvePrivateKey,
}

_PUBLIC_TYPES = {
    Family.RSA: (RSAPublicKey, RSAPrivateKey),
    Family.ECDSA: (EllipticCurvePublicKey, EllipticCurvePrivateKey),
}

# Errors a primitive may raise for bad input; verification maps them to False.
_PRIMITIVE_ERRORS = (
    PyJWTError,
    InvalidKeyError,
    ValueError,
    TypeError,
    AttributeError,
    UnsupportedAlgorithm,
)


def _primitive(algorithm: Algorithm) -> Any:
    cls = _PRIMITIVES[algorithm.family]
    # PyJWT names each family's hash object SHA256 / SHA384 / SHA512
    return cls(getattr(cls, algorithm.hash_name.name))


def _asymmetric_key(key: Key) -> Any:
    if isinstance(key, (str, bytes)):
        return load_pem_key(key)
    return key


def sign(algorithm: Algorithm | str | None, payload: bytes, key: Key) -> Optional[bytes]:
    """
    Sign `payload` and return the raw signature bytes.

    Returns None when the algorithm is not in the registry or the key is
    not of the algorithm's family.

    Raises:
        InvalidKeyError if PEM text cannot be decoded or the primitive
        rejects the key.
    """
    alg = Algorithm.lookup(algorithm)
    if alg is None:
        return None

    if alg.family is Family.HMAC:
        if not isinstance(key, (str, bytes)) or looks_like_pem(key):
            return None
        return _primitive(alg).sign(payload, force_bytes(key))

    material = _asymmetric_key(key)
    if not isinstance(material, _PRIVATE_TYPES[alg.family]):
        logger.debug("Key of type %s cannot sign %s", type(material).__name__, alg)
        return None
    try:
        return _primitive(alg).sign(payload, material)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyError(f"Cannot sign with {alg}: {exc}") from exc


def verify(algorithm: Algorithm | str | None, payload: bytes, signature: bytes, key: Key) -> bool:
    """
    Check `signature` over `payload`. Never raises: unknown algorithms, keys
    of the wrong family and primitive errors all come back as False.
    """
    alg = Algorithm.lookup(algorithm)
    if alg is None:
        return False

    try:
        if alg.family is Family.HMAC:
            # a PEM public key is never an HMAC secret
            if not isinstance(key, (str, bytes)) or looks_like_pem(key):
                return False
            return _primitive(alg).verify(payload, force_bytes(key), signature)

        material = _asymmetric_key(key)
        if not isinstance(material, _PUBLIC_TYPES[alg.family]):
            return False
        if isinstance(material, (RSAPrivateKey, EllipticCurvePrivateKey)):
            material = material.public_key()
        return bool(_primitive(alg).verify(payload, material, signature))
    except _PRIMITIVE_ERRORS as exc:
        logger.debug("Signature check for %s failed: %s", alg, exc)
        return False
