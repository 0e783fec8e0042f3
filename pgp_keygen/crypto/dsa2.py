"""
DSA2 domain parameter selection and key pair generation.

Parameters follow FIPS 186-3: the subgroup size N is 160 bits for 1024-bit
primes and 256 bits otherwise, and p and q are found with the appendix A.1.1.2
probable-prime construction driven by SHA-256 for every size. The search is
the slow step of identity generation: seconds at 1024 bits, up to minutes at
3072 bits, and it cannot be interrupted once started.
"""

import math
import time

import structlog
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import dsa
from pgpy.constants import HashAlgorithm

from pgp_keygen.core.random_source import GenerationContext
from pgp_keygen.crypto.primality import is_probable_prime
from pgp_keygen.exceptions import GenerationFailedError
from pgp_keygen.models.keys import (
    DSA2_CERTAINTY,
    Dsa2DomainParameters,
    Dsa2KeyPair,
    Dsa2KeySize,
    Dsa2ParameterSpec,
    parse_key_size,
)

logger = structlog.get_logger(__name__)

_ALGORITHM = "DSA"
_DIGEST = HashAlgorithm.SHA256


def dsa2_parameter_spec(key_size: int) -> Dsa2ParameterSpec:
    """
    Map a requested prime size to the inputs of the parameter search.

    Args:
        key_size: Prime size in bits (1024, 2048 or 3072).

    Returns:
        Spec with N = 160 for 1024 bits and N = 256 otherwise, certainty 80, SHA-256.

    Raises:
        InvalidParameterError: If ``key_size`` is not an allowed size.
    """
    prime_bits = parse_key_size(key_size, Dsa2KeySize, algorithm="DSA2")
    return Dsa2ParameterSpec(
        prime_bits=prime_bits,
        subgroup_bits=prime_bits.subgroup_bits,
        certainty=DSA2_CERTAINTY,
        digest=_DIGEST,
    )


class Dsa2ParameterGenerator:
    """
    FIPS 186-3 A.1.1.2 search for (p, q) plus an A.2.1 generator g.

    Example:
        ```python
        spec = dsa2_parameter_spec(2048)
        params = Dsa2ParameterGenerator(spec, GenerationContext.create()).generate()
        ```
    """

    def __init__(self, spec: Dsa2ParameterSpec, context: GenerationContext) -> None:
        """
        Args:
            spec: Sizes, certainty and digest of the search.
            context: Random source and the seed limit.
        """
        self._spec = spec
        self._rng = context.rng
        self._max_attempts = context.config.dsa_max_seed_attempts
        self._digest = getattr(hashes, spec.digest.name)()
        self._outlen = self._digest.digest_size * 8

    def generate(self) -> Dsa2DomainParameters:
        """
        Search for domain parameters.

        Raises:
            GenerationFailedError: If no parameters were found within the seed limit.
        """
        prime_bits = self._spec.prime_bits
        started = time.monotonic()
        logger.debug(
            "Searching DSA2 domain parameters",
            prime_bits=int(prime_bits),
            subgroup_bits=self._spec.subgroup_bits,
        )

        for attempt in range(1, self._max_attempts + 1):
            seed = self._rng.read(self._spec.subgroup_bits // 8)
            q = self._subgroup_order(seed)
            if not self._is_prime(q):
                continue
            found = self._search_modulus(seed, q)
            if found is None:
                continue
            p, counter = found
            parameters = Dsa2DomainParameters(
                spec=self._spec, p=p, q=q, g=self._generator(p, q), seed=seed, counter=counter
            )
            self._check(parameters, attempt)
            logger.info(
                "Generated DSA2 domain parameters",
                prime_bits=int(prime_bits),
                subgroup_bits=self._spec.subgroup_bits,
                attempts=attempt,
                elapsed=round(time.monotonic() - started, 3),
            )
            return parameters

        msg = f"No DSA2 domain parameters found after {self._max_attempts} seeds"
        raise GenerationFailedError(
            msg, algorithm=_ALGORITHM, key_size=int(prime_bits), attempts=self._max_attempts
        )

    def _subgroup_order(self, seed: bytes) -> int:
        n = self._spec.subgroup_bits
        u = self._hash(seed) % (1 << (n - 1))
        return (1 << (n - 1)) + u + 1 - (u % 2)

    def _search_modulus(self, seed: bytes, q: int) -> tuple[int, int] | None:
        prime_bits = self._spec.prime_bits
        blocks = math.ceil(prime_bits / self._outlen) - 1
        tail_bits = prime_bits - 1 - blocks * self._outlen
        seed_value = int.from_bytes(seed, "big")
        seed_modulus = 1 << (8 * len(seed))

        offset = 1
        for counter in range(4 * prime_bits):
            w = 0
            for j in range(blocks + 1):
                block_seed = (seed_value + offset + j) % seed_modulus
                v = self._hash(block_seed.to_bytes(len(seed), "big"))
                if j == blocks:
                    v %= 1 << tail_bits
                w += v << (j * self._outlen)
            x = w + (1 << (prime_bits - 1))
            p = x - (x % (2 * q) - 1)
            if p.bit_length() == prime_bits and self._is_prime(p):
                return p, counter
            offset += blocks + 1
        return None

    def _generator(self, p: int, q: int) -> int:
        e = (p - 1) // q
        while True:
            g = pow(self._rng.random_range(2, p - 1), e, p)
            if g != 1:
                return g

    def _hash(self, data: bytes) -> int:
        h = hashes.Hash(self._digest)
        h.update(data)
        return int.from_bytes(h.finalize(), "big")

    def _is_prime(self, candidate: int) -> bool:
        return is_probable_prime(candidate, self._spec.certainty, self._rng)

    def _check(self, parameters: Dsa2DomainParameters, attempt: int) -> None:
        try:
            parameters.validate()
        except ValueError as e:
            msg = f"Inconsistent DSA2 domain parameters: {e}"
            raise GenerationFailedError(
                msg,
                algorithm=_ALGORITHM,
                key_size=int(self._spec.prime_bits),
                attempts=attempt,
            ) from e


def select_dsa2_parameters(
    key_size: int, context: GenerationContext | None = None
) -> Dsa2DomainParameters:
    """
    Select and generate DSA2 domain parameters for a prime size.

    The size is validated before any entropy is drawn.

    Args:
        key_size: Prime size in bits (1024, 2048 or 3072).
        context: Generation context. A fresh one is created when omitted.

    Returns:
        Domain parameters whose subgroup size follows the N rule.

    Raises:
        InvalidParameterError: If ``key_size`` is not an allowed size.
        GenerationFailedError: If the search exhausts its seed limit.
    """
    spec = dsa2_parameter_spec(key_size)
    context = context if context is not None else GenerationContext.create()
    return Dsa2ParameterGenerator(spec, context).generate()


def generate_dsa2_key_pair(parameters: Dsa2DomainParameters) -> Dsa2KeyPair:
    """
    Generate a DSA key pair from explicit domain parameters.

    Raises:
        GenerationFailedError: If the parameters are rejected by the DSA implementation.
    """
    try:
        numbers = dsa.DSAParameterNumbers(p=parameters.p, q=parameters.q, g=parameters.g)
        private_key = numbers.parameters().generate_private_key()
    except Exception as e:
        msg = f"DSA key pair generation failed: {e}"
        raise GenerationFailedError(
            msg, algorithm=_ALGORITHM, key_size=int(parameters.prime_bits)
        ) from e

    logger.debug("Generated DSA2 key pair", prime_bits=int(parameters.prime_bits))
    return Dsa2KeyPair(
        parameters=parameters,
        private_key=private_key,
        public_key=private_key.public_key(),
    )
