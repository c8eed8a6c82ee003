# src/pkg_jwt/cli.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from .domain.constants import Algorithm
from .domain.value_objects import Jwks, TaggedKey, parse_expiration
from .tokens import decode, encode


def _read_key(value: str) -> str:
    """`@path` reads the key from a file, anything else is the key itself."""
    if value.startswith("@"):
        return Path(value[1:]).read_text(encoding="utf-8")
    return value


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkg-jwt",
        description="Issue and verify JSON Web Tokens",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="Sign a claims object into a token.")
    enc.add_argument(
        "--alg",
        default=Algorithm.HS256.jws_name,
        help="Signature algorithm (default: HS256).",
    )
    enc.add_argument(
        "--claims",
        default="{}",
        help="Claims as a JSON object.",
    )
    enc.add_argument(
        "--key",
        "-k",
        required=True,
        help="HMAC secret or private key PEM; prefix with @ to read a file.",
    )
    enc.add_argument("--kid", help="Key id to put in the token header.")
    enc.add_argument(
        "--exp",
        help="Expiration: seconds from now, 'hourly:<offset>' or 'daily:<offset>'.",
    )

    dec = sub.add_parser("decode", help="Verify a token and print its claims.")
    dec.add_argument("token")
    dec.add_argument(
        "--key",
        "-k",
        default="",
        help="Default key (secret or public key PEM); prefix with @ to read a file.",
    )
    dec.add_argument(
        "--issuer-key",
        "-I",
        nargs=2,
        action="append",
        metavar=("ISSUER", "KEY"),
        help="Key to use for tokens from ISSUER; may repeat.",
    )
    dec.add_argument("--jwks", help="Path to a JWKS document for kid lookup.")

    return parser.parse_args(args=argv)


def _run(args: argparse.Namespace) -> dict[str, Any]:
    if args.command == "encode":
        key = _read_key(args.key)
        result = encode(
            args.alg,
            json.loads(args.claims),
            TaggedKey(args.kid, key) if args.kid else key,
            expiration=parse_expiration(args.exp) if args.exp else None,
        )
        if not result.ok:
            return {"ok": False, "error": str(result.error), "detail": result.detail}
        return {"ok": True, "token": result.value}

    issuer_keys: Any = None
    if args.jwks:
        issuer_keys = Jwks.from_json(Path(args.jwks).read_bytes())
    elif args.issuer_key:
        issuer_keys = {iss: _read_key(k) for iss, k in args.issuer_key}

    result = decode(args.token, _read_key(args.key), issuer_keys)
    if not result.ok:
        return {"ok": False, "error": str(result.error), "detail": result.detail}
    return {"ok": True, "claims": result.value}


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), stream=sys.stderr)

    summary = _run(args)
    json.dump(summary, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0 if summary["ok"] else 1


if __name__ == "__main__":
    sys.exit(main())
