"""
pgp_keygen exception hierarchy.

All exceptions inherit from KeyGenError for easy catching.
"""

from collections.abc import Iterable
from typing import Any


class KeyGenError(Exception):
    """Base exception for all pgp_keygen errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class InvalidParameterError(KeyGenError):
    """A caller-supplied value is outside the allowed set."""

    def __init__(self, message: str, *, value: Any, allowed: Iterable[Any] = ()) -> None:
        allowed = tuple(allowed)
        super().__init__(message, value=value, allowed=allowed)
        self.value = value
        self.allowed = allowed


class GenerationFailedError(KeyGenError):
    """Domain parameter or key pair generation did not produce a usable result."""

    def __init__(
        self,
        message: str,
        *,
        algorithm: str,
        key_size: int,
        attempts: int | None = None,
    ) -> None:
        super().__init__(message, algorithm=algorithm, key_size=key_size, attempts=attempts)
        self.algorithm = algorithm
        self.key_size = key_size
        self.attempts = attempts
