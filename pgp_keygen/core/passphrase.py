"""Wipeable passphrase container."""

import ctypes
import hmac
import warnings
from collections.abc import Iterable
from typing import Self


def _wipe(buffer: bytearray) -> None:
    if len(buffer) == 0:
        return
    try:
        address = ctypes.addressof((ctypes.c_char * len(buffer)).from_buffer(buffer))
        ctypes.memset(address, 0, len(buffer))
    except Exception as exc:
        warnings.warn(f"ctypes.memset failed, zeroing byte by byte: {exc}", RuntimeWarning)
        for i in range(len(buffer)):
            buffer[i] = 0


class Passphrase:
    """
    Sequence of characters protecting a secret key, stored UTF-8 encoded in a
    buffer that ``clear()`` zeroes in place.

    The library never wipes a passphrase on its own; whoever created it clears it
    once the key material has been exported.

    Example:
        ```python
        with Passphrase("correct horse") as passphrase:
            bundle = service.generate_identity(request_for(passphrase))
            export(bundle)
        ```
    """

    __slots__ = ("_buffer", "_length", "_cleared")

    def __init__(self, chars: str | Iterable[str]) -> None:
        text = chars if isinstance(chars, str) else "".join(chars)
        self._buffer = bytearray(text, "utf-8")
        self._length = len(text)
        self._cleared = False

    @classmethod
    def coerce(cls, value: "Passphrase | str | Iterable[str]") -> Self:
        """Return ``value`` unchanged if it already is a Passphrase, else wrap it."""
        if isinstance(value, cls):
            return value
        return cls(value)

    def __del__(self) -> None:
        self.clear()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.clear()

    def clear(self) -> None:
        """Zero the buffer. Idempotent."""
        if getattr(self, "_cleared", True):
            return
        _wipe(self._buffer)
        self._cleared = True

    def reveal(self) -> str:
        """Warning: the returned string cannot be wiped."""
        if self._cleared:
            raise RuntimeError("Passphrase has been cleared")
        return self._buffer.decode("utf-8")

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        if self._cleared:
            return "Passphrase(<cleared>)"
        return f"Passphrase(<{self._length} chars>)"

    def __eq__(self, other: object) -> bool:
        """Constant-time comparison."""
        if isinstance(other, Passphrase):
            if self._cleared or other._cleared:
                return False
            return hmac.compare_digest(self._buffer, other._buffer)
        if isinstance(other, str):
            if self._cleared:
                return False
            return hmac.compare_digest(self._buffer, other.encode("utf-8"))
        return NotImplemented

    def __hash__(self) -> int:
        raise TypeError("Passphrase is not hashable")
