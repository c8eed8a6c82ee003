from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .constants import ErrorReason
from .exceptions import error_for

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """
    Tagged outcome of encode / decode.

    Exactly one of `value` and `error` is meaningful: `ok` tells which.
    `detail` carries a human-readable explanation for failures and is
    excluded from equality so that results compare by outcome only.
    """

    value: Optional[T] = None
    error: Optional[ErrorReason] = None
    detail: Optional[str] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self.value == other.value and self.error == other.error

    def __hash__(self) -> int:
        return hash(self.error)

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: ErrorReason, detail: str | None = None) -> "Result[T]":
        return cls(error=reason, detail=detail)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """
        Return the value, or raise the domain exception matching the error.

        Raises:
            InvalidTokenError, InvalidSignatureError, TokenExpiredError,
            KeyResolutionError, AlgorithmNotSupportedError, InvalidKeyError
        """
        if self.error is not None:
            raise error_for(self.error, self.detail)
        return self.value  # type: ignore[return-value]
