"""Entropy sources and per-call generation context."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Self

from Crypto.Math.Numbers import Integer
from Crypto.Random import get_random_bytes

from pgp_keygen.config import KeyGenConfig


class SecureRandom:
    """
    Cryptographically secure byte source safe to share between threads.

    Reads are serialised with a lock, so wrapping a non thread-safe ``randfunc``
    is allowed. Defaults to the operating system CSPRNG.

    Example:
        ```python
        rng = SecureRandom()
        nonce = rng.read(16)
        x = rng.random_range(2, p - 1)
        ```
    """

    def __init__(self, randfunc: Callable[[int], bytes] | None = None) -> None:
        self._randfunc = randfunc if randfunc is not None else get_random_bytes
        self._lock = threading.Lock()
        self._bytes_read = 0

    def read(self, n: int) -> bytes:
        """
        Read ``n`` random bytes.

        Raises:
            ValueError: If ``n`` is negative or the source returned a short read.
        """
        if n < 0:
            msg = f"Cannot read a negative number of bytes: {n}"
            raise ValueError(msg)
        with self._lock:
            data = self._randfunc(n)
            self._bytes_read += len(data)
        if len(data) != n:
            msg = f"Random source returned {len(data)} bytes, expected {n}"
            raise ValueError(msg)
        return data

    def random_range(self, min_inclusive: int, max_exclusive: int) -> int:
        """Uniform integer in ``[min_inclusive, max_exclusive)``."""
        value = Integer.random_range(
            min_inclusive=min_inclusive,
            max_exclusive=max_exclusive,
            randfunc=self.read,
        )
        return int(value)

    @property
    def bytes_read(self) -> int:
        return self._bytes_read

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(bytes_read={self._bytes_read})"


@dataclass(frozen=True, kw_only=True)
class GenerationContext:
    """
    Explicit state handed to every generation call.

    Attributes:
        rng: Entropy source for this call.
        config: Generation limits and defaults.
    """

    rng: SecureRandom = field(default_factory=SecureRandom)
    config: KeyGenConfig = field(default_factory=KeyGenConfig)

    @classmethod
    def create(cls, config: KeyGenConfig | None = None) -> Self:
        """Build a context with its own fresh SecureRandom."""
        return cls(rng=SecureRandom(), config=config or KeyGenConfig())
