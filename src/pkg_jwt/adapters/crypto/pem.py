from __future__ import annotations

import re
from typing import Any

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from jwt.utils import force_bytes

from ...domain.exceptions import InvalidKeyError

_PEM_BLOCK = re.compile(
    rb"-----BEGIN ([A-Z0-9 ]+)-----\r?\n.*?-----END \1-----",
    re.DOTALL,
)


def looks_like_pem(value: Any) -> bool:
    return isinstance(value, (str, bytes)) and b"-----BEGIN " in force_bytes(value)


def _select_block(data: bytes) -> tuple[str, bytes]:
    """
    Pick the key block out of a PEM bundle.

    OpenSSL writes EC keys as an `EC PARAMETERS` block followed by the key
    itself; the parameters block is skipped.
    """
    blocks = [
        (m.group(1).decode("ascii"), m.group(0))
        for m in _PEM_BLOCK.finditer(data)
        if m.group(1) != b"EC PARAMETERS"
    ]
    if not blocks:
        raise InvalidKeyError("No PEM key block found")
    return blocks[-1]


def load_pem_key(pem: str | bytes) -> Any:
    """
    Decode PEM text into a `cryptography` key object.

    Private keys (PKCS#1, PKCS#8, SEC1), public keys (SPKI, PKCS#1) and
    X.509 certificates (their public key) are accepted.

    Raises:
        InvalidKeyError if the text holds no loadable key.
    """
    label, block = _select_block(force_bytes(pem))
    try:
        if label == "CERTIFICATE":
            return x509.load_pem_x509_certificate(block).public_key()
        if label.endswith("PRIVATE KEY"):
            return serialization.load_pem_private_key(block, password=None)
        return serialization.load_pem_public_key(block)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyError(f"Cannot load {label}: {exc}") from exc
