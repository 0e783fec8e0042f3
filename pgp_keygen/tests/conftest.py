import pytest

from pgp_keygen.crypto.dsa2 import select_dsa2_parameters
from pgp_keygen.models.keys import Dsa2DomainParameters


@pytest.fixture(scope="session")
def dsa2_1024_parameters() -> Dsa2DomainParameters:
    return select_dsa2_parameters(1024)
