"""
Identity generation request and result models.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from pgpy.constants import CompressionAlgorithm, HashAlgorithm, SymmetricKeyAlgorithm

from pgp_keygen.core.passphrase import Passphrase
from pgp_keygen.models.keys import Dsa2KeyPair, ElGamalKeyPair, SymmetricAlgorithm

# Preference entries may be given as enum members, OpenPGP ids or member names.
PreferenceEntry = int | str


@dataclass(frozen=True, kw_only=True, eq=False)
class IdentityRequest:
    """
    Everything needed to generate a DSA2 + ElGamal identity.

    Attributes:
        identity: User ID, e.g. ``"Alice <alice@example.com>"``.
        passphrase: Passphrase that will later protect the secret keys.
        key_size: DSA2 prime size in bits.
        elgamal_key_size: ElGamal modulus size in bits. Defaults to ``key_size``.
        cipher: Protection cipher name. ``None`` selects the configured default.
        armor: Whether the exported key should be ASCII-armored.
        preferred_hash_algorithms: ``None`` selects the configured defaults.
        preferred_symmetric_algorithms: ``None`` selects the configured defaults.
        preferred_compression_algorithms: ``None`` selects the configured defaults.
    """

    identity: str
    passphrase: Passphrase | str
    key_size: int = 2048
    elgamal_key_size: int | None = None
    cipher: str | None = None
    armor: bool = False
    preferred_hash_algorithms: Sequence[PreferenceEntry] | None = None
    preferred_symmetric_algorithms: Sequence[PreferenceEntry] | None = None
    preferred_compression_algorithms: Sequence[PreferenceEntry] | None = None

    @property
    def resolved_elgamal_key_size(self) -> int:
        return self.key_size if self.elgamal_key_size is None else self.elgamal_key_size


@dataclass(frozen=True, kw_only=True, eq=False)
class IdentityBundle:
    """
    A DSA2 signing key and an ElGamal encryption key bound to one identity.

    Consumed by packet encoders to build a transferable secret key. The bundle
    holds references to the key pairs it was built from and never copies them.
    """

    dsa2_key_pair: Dsa2KeyPair
    elgamal_key_pair: ElGamalKeyPair
    identity: str
    passphrase: Passphrase
    armor: bool
    protection_cipher: SymmetricAlgorithm
    preferred_hash_algorithms: tuple[HashAlgorithm, ...]
    preferred_symmetric_algorithms: tuple[SymmetricKeyAlgorithm, ...]
    preferred_compression_algorithms: tuple[CompressionAlgorithm, ...]

    @property
    def signing_key(self) -> Dsa2KeyPair:
        return self.dsa2_key_pair

    @property
    def encryption_key(self) -> ElGamalKeyPair:
        return self.elgamal_key_pair


@dataclass(frozen=True, kw_only=True)
class AlgorithmPreferences:
    """Resolved, ordered algorithm preferences of a user ID."""

    hashes: tuple[HashAlgorithm, ...]
    ciphers: tuple[SymmetricKeyAlgorithm, ...]
    compression: tuple[CompressionAlgorithm, ...]
