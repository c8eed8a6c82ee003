from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from numbers import Real
from typing import Any, Callable, Mapping, Optional, Sequence

from ...adapters.clock import SystemClock
from ...adapters.codec import decode_bytes, decode_segment
from ...adapters.crypto.primitives import verify
from ...domain.constants import ErrorReason
from ...domain.ports import Clock
from ...domain.results import Result
from ...domain.value_objects import Key
from ..key_resolver import IssuerKeys, KeyResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DecodeContext:
    """
    State threaded through the decode steps. Each step returns a copy with
    more fields filled in; nothing outlives the call.
    """
    token: str
    header_segment: Optional[str] = None
    claims_segment: Optional[str] = None
    signature_segment: Optional[str] = None
    header: Optional[Mapping[str, Any]] = None
    claims: Optional[dict[str, Any]] = None
    key: Key = None

    @property
    def signing_input(self) -> bytes:
        return f"{self.header_segment}.{self.claims_segment}".encode("ascii")


Step = Callable[[DecodeContext], Result[DecodeContext]]


# ---------------------------------------------------------------------- #
# Steps
# ---------------------------------------------------------------------- #


def split_token(ctx: DecodeContext) -> Result[DecodeContext]:
    token = ctx.token
    if isinstance(token, bytes):
        token = token.decode("ascii", errors="replace")
    if not isinstance(token, str) or not token.isascii():
        return Result.failure(ErrorReason.INVALID_TOKEN, "Token must be ASCII text")
    parts = token.split(".")
    if len(parts) != 3:
        return Result.failure(ErrorReason.INVALID_TOKEN, "Token must have three segments")
    header, claims, signature = parts
    return Result.success(replace(
        ctx,
        header_segment=header,
        claims_segment=claims,
        signature_segment=signature,
    ))


def parse_segments(ctx: DecodeContext) -> Result[DecodeContext]:
    try:
        header = decode_segment(ctx.header_segment)
        claims = decode_segment(ctx.claims_segment)
    except (ValueError, RecursionError) as exc:
        return Result.failure(ErrorReason.INVALID_TOKEN, f"Malformed segment: {exc}")

    if not isinstance(header, dict) or not isinstance(claims, dict):
        return Result.failure(ErrorReason.INVALID_TOKEN, "Header and claims must be JSON objects")
    if not isinstance(header.get("alg"), str):
        return Result.failure(ErrorReason.INVALID_TOKEN, "Header has no 'alg'")
    return Result.success(replace(ctx, header=header, claims=claims))


def make_resolve_key(
        resolver: KeyResolver,
        default_key: Key,
        issuer_keys: IssuerKeys,
) -> Step:
    def resolve_key(ctx: DecodeContext) -> Result[DecodeContext]:
        found = resolver.resolve(ctx.header, ctx.claims, default_key, issuer_keys)
        if not found.ok:
            return Result.failure(found.error, found.detail)
        return Result.success(replace(ctx, key=found.value))

    return resolve_key


def check_signature(ctx: DecodeContext) -> Result[DecodeContext]:
    try:
        signature = decode_bytes(ctx.signature_segment)
    except ValueError:
        return Result.failure(ErrorReason.INVALID_SIGNATURE, "Undecodable signature")

    if not verify(ctx.header["alg"], ctx.signing_input, signature, ctx.key):
        return Result.failure(ErrorReason.INVALID_SIGNATURE, "Signature verification failed")
    return Result.success(ctx)


def make_check_expired(clock: Clock) -> Step:
    def check_expired(ctx: DecodeContext) -> Result[DecodeContext]:
        if "exp" not in ctx.claims:
            return Result.success(ctx)
        exp = ctx.claims["exp"]
        if isinstance(exp, bool) or not isinstance(exp, Real):
            return Result.failure(ErrorReason.INVALID_TOKEN, "'exp' must be a number")
        if not math.isfinite(exp):
            return Result.failure(ErrorReason.INVALID_TOKEN, "'exp' must be finite")
        if exp - clock.now() <= 0:
            return Result.failure(ErrorReason.EXPIRED, "Token has expired")
        return Result.success(ctx)

    return check_expired


def run_steps(ctx: DecodeContext, steps: Sequence[Step]) -> Result[DecodeContext]:
    """Apply `steps` in order, stopping at the first failure."""
    for step in steps:
        outcome = step(ctx)
        if not outcome.ok:
            return outcome
        ctx = outcome.value
    return Result.success(ctx)


# ---------------------------------------------------------------------- #
# Use case
# ---------------------------------------------------------------------- #


@dataclass(slots=True)
class DecodeTokenUseCase:
    """
    Application use case:
    - split, parse, resolve key, verify signature, check expiry
    - return the claims, or the reason of the first failing step

    Never raises for malformed input; see `PipelineTokenDecoder` for the
    raising variant.
    """

    key_resolver: KeyResolver
    clock: Clock = field(default_factory=SystemClock)

    def execute(
            self,
            token: str,
            key: Key,
            issuer_keys: IssuerKeys = None,
    ) -> Result[dict[str, Any]]:
        steps: list[Step] = [
            split_token,
            parse_segments,
            make_resolve_key(self.key_resolver, key, issuer_keys),
            check_signature,
            make_check_expired(self.clock),
        ]
        outcome = run_steps(DecodeContext(token=token), steps)
        if not outcome.ok:
            logger.debug("Token rejected: %s", outcome.error)
            return Result.failure(outcome.error, outcome.detail)
        return Result.success(outcome.value.claims)
