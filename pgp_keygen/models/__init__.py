"""
Domain models for pgp_keygen.

These are immutable (frozen) dataclasses and enums describing key sizes,
domain parameters, key pairs and assembled identities.
"""

from pgp_keygen.models.identity import (
    AlgorithmPreferences,
    IdentityBundle,
    IdentityRequest,
)
from pgp_keygen.models.keys import (
    DSA2_CERTAINTY,
    ELGAMAL_GENERATOR,
    Dsa2DomainParameters,
    Dsa2KeyPair,
    Dsa2KeySize,
    Dsa2ParameterSpec,
    ElGamalDomainParameters,
    ElGamalKeyPair,
    ElGamalKeySize,
    SymmetricAlgorithm,
)

__all__ = [
    # Keys
    "DSA2_CERTAINTY",
    "ELGAMAL_GENERATOR",
    "Dsa2KeySize",
    "ElGamalKeySize",
    "Dsa2ParameterSpec",
    "Dsa2DomainParameters",
    "ElGamalDomainParameters",
    "Dsa2KeyPair",
    "ElGamalKeyPair",
    "SymmetricAlgorithm",
    # Identity
    "IdentityRequest",
    "IdentityBundle",
    "AlgorithmPreferences",
]
