"""
Identity assembly and orchestration services.
"""

from pgp_keygen.services.assembler import KeyPairAssembler
from pgp_keygen.services.identity_service import IdentityService

__all__ = [
    "KeyPairAssembler",
    "IdentityService",
]
