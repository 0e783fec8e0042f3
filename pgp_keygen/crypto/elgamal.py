"""
ElGamal domain parameters and key pair generation.

The modulus always comes from the MODP prime table; no prime search happens
on this path.
"""

import structlog
from Crypto.PublicKey import ElGamal

from pgp_keygen.core.random_source import GenerationContext
from pgp_keygen.crypto.prime_table import get_safe_prime
from pgp_keygen.exceptions import GenerationFailedError
from pgp_keygen.models.keys import (
    ELGAMAL_GENERATOR,
    ElGamalDomainParameters,
    ElGamalKeyPair,
    ElGamalKeySize,
    parse_key_size,
)

logger = structlog.get_logger(__name__)


def build_elgamal_parameters(key_size: int) -> ElGamalDomainParameters:
    """
    Build ElGamal domain parameters for a modulus size.

    Deterministic: the same size always yields the same parameters.

    Args:
        key_size: Modulus size in bits (1024, 2048, 3072 or 4096).

    Raises:
        InvalidParameterError: If ``key_size`` is not an allowed size.
    """
    size = parse_key_size(key_size, ElGamalKeySize, algorithm="ElGamal")
    return ElGamalDomainParameters(key_size=size, p=get_safe_prime(size), g=ELGAMAL_GENERATOR)


def generate_elgamal_key_pair(
    parameters: ElGamalDomainParameters, context: GenerationContext | None = None
) -> ElGamalKeyPair:
    """
    Generate an ElGamal key pair in the given group.

    The private exponent x is uniform in [2, p - 2] and the public value is g^x mod p.

    Args:
        parameters: Group to generate the key in.
        context: Generation context. A fresh one is created when omitted.

    Raises:
        GenerationFailedError: If the key components are rejected.
    """
    context = context if context is not None else GenerationContext.create()
    p, g = parameters.p, parameters.g
    x = context.rng.random_range(2, p - 1)
    y = pow(g, x, p)
    try:
        private_key = ElGamal.construct((p, g, y, x))
    except ValueError as e:
        msg = f"ElGamal key pair generation failed: {e}"
        raise GenerationFailedError(
            msg, algorithm="ElGamal", key_size=int(parameters.key_size)
        ) from e

    logger.debug("Generated ElGamal key pair", key_size=int(parameters.key_size))
    return ElGamalKeyPair(
        parameters=parameters,
        private_key=private_key,
        public_key=private_key.publickey(),
    )
