"""
Identity assembly.

Combines an already generated DSA2 key pair and ElGamal key pair with the
user ID metadata into an immutable IdentityBundle.
"""

from collections.abc import Iterable, Sequence
from enum import IntEnum
from typing import TypeVar

import structlog
from pgpy.constants import CompressionAlgorithm, HashAlgorithm, SymmetricKeyAlgorithm

from pgp_keygen.config import KeyGenConfig
from pgp_keygen.core.passphrase import Passphrase
from pgp_keygen.exceptions import InvalidParameterError
from pgp_keygen.models.identity import AlgorithmPreferences, IdentityBundle, PreferenceEntry
from pgp_keygen.models.keys import Dsa2KeyPair, ElGamalKeyPair, SymmetricAlgorithm

logger = structlog.get_logger(__name__)

_AlgorithmT = TypeVar("_AlgorithmT", HashAlgorithm, SymmetricKeyAlgorithm, CompressionAlgorithm)
# Placeholder members of the pgpy enums that never name a real algorithm.
_NON_ALGORITHMS = frozenset({"Unknown", "Invalid"})


class KeyPairAssembler:
    """
    Builds IdentityBundles from generated key pairs.

    Only the protection cipher is resolved leniently: an unrecognized name falls
    back to Twofish with a logged warning. Every other input is validated strictly.

    Example:
        ```python
        assembler = KeyPairAssembler()
        bundle = assembler.assemble_identity(
            dsa2_key_pair,
            elgamal_key_pair,
            "aes256",
            "Alice <alice@example.com>",
            Passphrase("correct horse"),
            armor=True,
        )
        ```
    """

    def __init__(self, config: KeyGenConfig | None = None) -> None:
        """
        Args:
            config: Supplies the default cipher and preference lists.
        """
        self._config = config or KeyGenConfig()

    def assemble_identity(
        self,
        dsa2_key_pair: Dsa2KeyPair,
        elgamal_key_pair: ElGamalKeyPair,
        cipher_choice: str | None,
        identity: str,
        passphrase: Passphrase | str,
        armor: bool,
        preferred_hash_algorithms: Sequence[PreferenceEntry] | None = None,
        preferred_symmetric_algorithms: Sequence[PreferenceEntry] | None = None,
        preferred_compression_algorithms: Sequence[PreferenceEntry] | None = None,
    ) -> IdentityBundle:
        """
        Package two key pairs and their metadata into one identity.

        Args:
            dsa2_key_pair: Signing key pair.
            elgamal_key_pair: Encryption key pair.
            cipher_choice: Protection cipher name, matched case-insensitively.
                ``None`` selects the configured default.
            identity: User ID string.
            passphrase: Passphrase for later secret key protection. Not wiped here.
            armor: Whether the exported key should be ASCII-armored.
            preferred_hash_algorithms: Ordered hash preferences.
            preferred_symmetric_algorithms: Ordered symmetric cipher preferences.
            preferred_compression_algorithms: Ordered compression preferences.

        Returns:
            The assembled bundle.

        Raises:
            InvalidParameterError: If a key pair has the wrong type, the identity is
                empty, the cipher choice is not a string or a preference entry is unknown.
        """
        self._check_key_pairs(dsa2_key_pair, elgamal_key_pair)
        self.validate_identity(identity)
        preferences = self.resolve_preferences(
            preferred_hash_algorithms,
            preferred_symmetric_algorithms,
            preferred_compression_algorithms,
        )
        protection_cipher = self.resolve_cipher(cipher_choice)

        bundle = IdentityBundle(
            dsa2_key_pair=dsa2_key_pair,
            elgamal_key_pair=elgamal_key_pair,
            identity=identity,
            passphrase=Passphrase.coerce(passphrase),
            armor=bool(armor),
            protection_cipher=protection_cipher,
            preferred_hash_algorithms=preferences.hashes,
            preferred_symmetric_algorithms=preferences.ciphers,
            preferred_compression_algorithms=preferences.compression,
        )
        logger.info(
            "Assembled identity",
            dsa2_bits=dsa2_key_pair.key_size,
            elgamal_bits=elgamal_key_pair.key_size,
            cipher=protection_cipher.name,
            armor=bundle.armor,
        )
        return bundle

    def resolve_cipher(self, cipher_choice: str | None) -> SymmetricAlgorithm:
        """
        Resolve a protection cipher name, falling back to Twofish when unrecognized.

        Raises:
            InvalidParameterError: If ``cipher_choice`` is neither a string nor ``None``.
        """
        self.validate_cipher_choice(cipher_choice)
        name = self._config.default_cipher if cipher_choice is None else cipher_choice
        resolved = SymmetricAlgorithm.from_name(name)
        if name.casefold() != resolved.cipher_name:
            logger.warning(
                "Unrecognized protection cipher, falling back",
                cipher=name,
                fallback=resolved.name,
            )
        return resolved

    def resolve_preferences(
        self,
        hashes: Sequence[PreferenceEntry] | None,
        ciphers: Sequence[PreferenceEntry] | None,
        compression: Sequence[PreferenceEntry] | None,
    ) -> AlgorithmPreferences:
        """
        Resolve the three preference lists, keeping their order.

        Raises:
            InvalidParameterError: If any entry does not name a known algorithm.
        """
        return AlgorithmPreferences(
            hashes=_resolve_all(hashes, HashAlgorithm, self._config.default_hash_preferences),
            ciphers=_resolve_all(
                ciphers, SymmetricKeyAlgorithm, self._config.default_symmetric_preferences
            ),
            compression=_resolve_all(
                compression, CompressionAlgorithm, self._config.default_compression_preferences
            ),
        )

    @staticmethod
    def validate_cipher_choice(cipher_choice: object) -> None:
        if cipher_choice is None or isinstance(cipher_choice, str):
            return
        msg = f"Cipher choice must be a name, got {type(cipher_choice).__name__}"
        raise InvalidParameterError(msg, value=cipher_choice)

    @staticmethod
    def validate_identity(identity: str) -> None:
        if isinstance(identity, str) and identity.strip():
            return
        msg = "Identity must be a non-empty string"
        raise InvalidParameterError(msg, value=identity)

    @staticmethod
    def _check_key_pairs(dsa2_key_pair: object, elgamal_key_pair: object) -> None:
        if not isinstance(dsa2_key_pair, Dsa2KeyPair):
            msg = f"Expected a DSA2 key pair, got {type(dsa2_key_pair).__name__}"
            raise InvalidParameterError(msg, value=type(dsa2_key_pair).__name__)
        if not isinstance(elgamal_key_pair, ElGamalKeyPair):
            msg = f"Expected an ElGamal key pair, got {type(elgamal_key_pair).__name__}"
            raise InvalidParameterError(msg, value=type(elgamal_key_pair).__name__)


def _selectable(algorithms: type[_AlgorithmT]) -> dict[str, _AlgorithmT]:
    return {
        name.casefold(): member
        for name, member in algorithms.__members__.items()
        if not name.startswith("_") and name not in _NON_ALGORITHMS
    }


def _resolve_all(
    entries: Sequence[PreferenceEntry] | None,
    algorithms: type[_AlgorithmT],
    defaults: Iterable[_AlgorithmT],
) -> tuple[_AlgorithmT, ...]:
    if entries is None:
        return tuple(defaults)
    if isinstance(entries, (str, bytes)):
        msg = f"{algorithms.__name__} preferences must be a sequence, not a single string"
        raise InvalidParameterError(msg, value=entries)
    selectable = _selectable(algorithms)
    return tuple(_resolve_one(entry, algorithms, selectable) for entry in entries)


def _resolve_one(
    entry: PreferenceEntry,
    algorithms: type[_AlgorithmT],
    selectable: dict[str, _AlgorithmT],
) -> _AlgorithmT:
    member: IntEnum | None = None
    if isinstance(entry, IntEnum):
        # Members of another enum never match by value.
        member = entry if isinstance(entry, algorithms) and entry in selectable.values() else None
    elif isinstance(entry, str):
        member = selectable.get(entry.casefold())
    elif isinstance(entry, int) and not isinstance(entry, bool):
        member = next((m for m in selectable.values() if m.value == int(entry)), None)
    if member is None:
        msg = f"Unknown {algorithms.__name__}: {entry!r}"
        raise InvalidParameterError(msg, value=entry, allowed=[m.name for m in selectable.values()])
    return member
