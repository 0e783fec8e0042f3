"""
Key generation primitives.

This module provides:
- MODP safe prime lookup for ElGamal groups
- DSA2 domain parameter search (FIPS 186-3, SHA-256)
- DSA2 and ElGamal key pair generation
"""

from pgp_keygen.crypto.dsa2 import (
    Dsa2ParameterGenerator,
    dsa2_parameter_spec,
    generate_dsa2_key_pair,
    select_dsa2_parameters,
)
from pgp_keygen.crypto.elgamal import build_elgamal_parameters, generate_elgamal_key_pair
from pgp_keygen.crypto.prime_table import get_safe_prime

__all__ = [
    "Dsa2ParameterGenerator",
    "dsa2_parameter_spec",
    "select_dsa2_parameters",
    "generate_dsa2_key_pair",
    "build_elgamal_parameters",
    "generate_elgamal_key_pair",
    "get_safe_prime",
]
