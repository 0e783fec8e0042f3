"""
Probabilistic primality testing for the DSA2 prime search.

Candidates go through a cheap small-prime filter, then Miller-Rabin with a
round count derived from the requested certainty and the candidate size.
"""

import math

from Crypto.Math.Primality import PROBABLY_PRIME, miller_rabin_test
from Crypto.Util.number import sieve_base

from pgp_keygen.core.random_source import SecureRandom

_SMALL_PRIMES = sieve_base[:1000]
_SMALL_PRIMES_PRODUCT = math.prod(_SMALL_PRIMES)


def miller_rabin_rounds(bits: int, certainty: int) -> int:
    """
    Number of Miller-Rabin rounds for a candidate of ``bits`` bits.

    Each round has error probability at most 1/4, so ``certainty`` bits of
    confidence need ``ceil(certainty / 2)`` rounds; FIPS 186-3 table C.1
    minimums apply on top.
    """
    minimum = 40 if bits <= 1024 else 48 + 8 * ((bits - 1) // 1024)
    return max(minimum, (certainty + 1) // 2)


def is_probable_prime(candidate: int, certainty: int, rng: SecureRandom) -> bool:
    """
    Test ``candidate`` for primality.

    Args:
        candidate: Odd integer to test.
        certainty: Accept composites with probability below 2**-certainty.
        rng: Source of the Miller-Rabin bases.
    """
    if candidate < 2:
        return False
    if candidate in _SMALL_PRIMES:
        return True
    if math.gcd(candidate, _SMALL_PRIMES_PRODUCT) != 1:
        return False
    rounds = miller_rabin_rounds(candidate.bit_length(), certainty)
    return miller_rabin_test(candidate, rounds, randfunc=rng.read) == PROBABLY_PRIME
