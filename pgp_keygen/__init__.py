"""
PGP dual-key identity generation.

Generates a DSA2 signing key and an ElGamal encryption key and binds them to
one user ID, ready for a packet encoder to export.

Example:
    ```python
    from pgp_keygen import IdentityRequest, IdentityService, Passphrase

    service = IdentityService()
    with Passphrase("correct horse") as passphrase:
        bundle = service.generate_identity(
            IdentityRequest(
                identity="Alice <alice@example.com>",
                passphrase=passphrase,
                key_size=2048,
                cipher="aes256",
                armor=True,
            )
        )
        print(bundle.dsa2_key_pair.parameters.subgroup_bits)  # 256
    ```
"""

from pgp_keygen.config import KeyGenConfig
from pgp_keygen.core.passphrase import Passphrase
from pgp_keygen.core.random_source import GenerationContext, SecureRandom
from pgp_keygen.crypto.dsa2 import generate_dsa2_key_pair, select_dsa2_parameters
from pgp_keygen.crypto.elgamal import build_elgamal_parameters, generate_elgamal_key_pair
from pgp_keygen.exceptions import GenerationFailedError, InvalidParameterError, KeyGenError
from pgp_keygen.models.identity import IdentityBundle, IdentityRequest
from pgp_keygen.models.keys import (
    Dsa2DomainParameters,
    Dsa2KeyPair,
    ElGamalDomainParameters,
    ElGamalKeyPair,
    SymmetricAlgorithm,
)
from pgp_keygen.services.assembler import KeyPairAssembler
from pgp_keygen.services.identity_service import IdentityService

__version__ = "0.1.0"

__all__ = [
    # Main service
    "IdentityService",
    "KeyPairAssembler",
    "KeyGenConfig",
    "GenerationContext",
    "SecureRandom",
    "Passphrase",
    # Operations
    "select_dsa2_parameters",
    "generate_dsa2_key_pair",
    "build_elgamal_parameters",
    "generate_elgamal_key_pair",
    # Models
    "IdentityRequest",
    "IdentityBundle",
    "Dsa2DomainParameters",
    "Dsa2KeyPair",
    "ElGamalDomainParameters",
    "ElGamalKeyPair",
    "SymmetricAlgorithm",
    # Exceptions
    "KeyGenError",
    "InvalidParameterError",
    "GenerationFailedError",
]
