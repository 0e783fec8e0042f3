from collections.abc import Callable
from unittest.mock import Mock

import pytest

from pgp_keygen.crypto.elgamal import build_elgamal_parameters
from pgp_keygen.models.keys import Dsa2KeyPair, ElGamalKeyPair


@pytest.fixture
def make_dsa2_key_pair() -> Callable[..., Dsa2KeyPair]:
    def _make(prime_bits: int = 2048, subgroup_bits: int = 256) -> Dsa2KeyPair:
        parameters = Mock(prime_bits=prime_bits, subgroup_bits=subgroup_bits)
        return Dsa2KeyPair(parameters=parameters, private_key=Mock(), public_key=Mock())

    return _make


@pytest.fixture
def make_elgamal_key_pair() -> Callable[..., ElGamalKeyPair]:
    def _make(key_size: int = 2048) -> ElGamalKeyPair:
        return ElGamalKeyPair(
            parameters=build_elgamal_parameters(key_size),
            private_key=Mock(),
            public_key=Mock(),
        )

    return _make
