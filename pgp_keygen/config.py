"""
Key generation configuration.
"""

from dataclasses import dataclass

from pgpy.constants import CompressionAlgorithm, HashAlgorithm, SymmetricKeyAlgorithm


@dataclass(frozen=True, kw_only=True)
class KeyGenConfig:
    """
    Attributes:
        dsa_max_seed_attempts: Number of fresh seeds the DSA2 prime search may draw
            before giving up with GenerationFailedError.
        default_cipher: Protection cipher name used when a request does not name one.
        default_hash_preferences: Hash preferences used when a request omits them.
        default_symmetric_preferences: Symmetric preferences used when a request omits them.
        default_compression_preferences: Compression preferences used when a request omits them.
    """

    dsa_max_seed_attempts: int = 10_000
    default_cipher: str = "aes256"
    default_hash_preferences: tuple[HashAlgorithm, ...] = (
        HashAlgorithm.SHA256,
        HashAlgorithm.SHA384,
        HashAlgorithm.SHA512,
        HashAlgorithm.SHA224,
    )
    default_symmetric_preferences: tuple[SymmetricKeyAlgorithm, ...] = (
        SymmetricKeyAlgorithm.AES256,
        SymmetricKeyAlgorithm.AES192,
        SymmetricKeyAlgorithm.AES128,
    )
    default_compression_preferences: tuple[CompressionAlgorithm, ...] = (
        CompressionAlgorithm.ZLIB,
        CompressionAlgorithm.BZ2,
        CompressionAlgorithm.ZIP,
        CompressionAlgorithm.Uncompressed,
    )

    def __post_init__(self) -> None:
        if self.dsa_max_seed_attempts <= 0:
            msg = "dsa_max_seed_attempts must be positive"
            raise ValueError(msg)
        if not self.default_cipher:
            msg = "default_cipher must not be empty"
            raise ValueError(msg)
        if not self.default_hash_preferences:
            msg = "default_hash_preferences must not be empty"
            raise ValueError(msg)
        if not self.default_symmetric_preferences:
            msg = "default_symmetric_preferences must not be empty"
            raise ValueError(msg)
        if not self.default_compression_preferences:
            msg = "default_compression_preferences must not be empty"
            raise ValueError(msg)
