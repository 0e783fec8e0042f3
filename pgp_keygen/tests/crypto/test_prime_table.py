import pytest
from Crypto.Math.Primality import PROBABLY_PRIME, miller_rabin_test

from pgp_keygen.crypto.prime_table import (
    MODP_1024,
    MODP_2048,
    MODP_3072,
    MODP_4096,
    get_safe_prime,
)
from pgp_keygen.exceptions import InvalidParameterError


def _rfc_prime(text: str) -> int:
    return int("".join(text.split()), 16)


# RFC 2409 section 6.2, Second Oakley Group.
RFC2409_GROUP_2 = _rfc_prime(
    """
    FFFFFFFF FFFFFFFF C90FDAA2 2168C234 C4C6628B 80DC1CD1
    29024E08 8A67CC74 020BBEA6 3B139B22 514A0879 8E3404DD
    EF9519B3 CD3A431B 302B0A6D F25F1437 4FE1356D 6D51C245
    E485B576 625E7EC6 F44C42E9 A637ED6B 0BFF5CB6 F406B7ED
    EE386BFB 5A899FA5 AE9F2411 7C4B1FE6 49286651 ECE65381
    FFFFFFFF FFFFFFFF
    """
)

# RFC 3526 section 3, group 14.
RFC3526_GROUP_14 = _rfc_prime(
    """
    FFFFFFFF FFFFFFFF C90FDAA2 2168C234 C4C6628B 80DC1CD1
    29024E08 8A67CC74 020BBEA6 3B139B22 514A0879 8E3404DD
    EF9519B3 CD3A431B 302B0A6D F25F1437 4FE1356D 6D51C245
    E485B576 625E7EC6 F44C42E9 A637ED6B 0BFF5CB6 F406B7ED
    EE386BFB 5A899FA5 AE9F2411 7C4B1FE6 49286651 ECE45B3D
    C2007CB8 A163BF05 98DA4836 1C55D39A 69163FA8 FD24CF5F
    83655D23 DCA3AD96 1C62F356 208552BB 9ED52907 7096966D
    670C354E 4ABC9804 F1746C08 CA18217C 32905E46 2E36CE3B
    E39E772C 180E8603 9B2783A2 EC07A28F B5C55DF0 6F4C52C9
    DE2BCBF6 95581718 3995497C EA956AE5 15D22618 98FA0510
    15728E5A 8AACAA68 FFFFFFFF FFFFFFFF
    """
)

# RFC 3526 section 4, group 15.
RFC3526_GROUP_15 = _rfc_prime(
    """
    FFFFFFFF FFFFFFFF C90FDAA2 2168C234 C4C6628B 80DC1CD1
    29024E08 8A67CC74 020BBEA6 3B139B22 514A0879 8E3404DD
    EF9519B3 CD3A431B 302B0A6D F25F1437 4FE1356D 6D51C245
    E485B576 625E7EC6 F44C42E9 A637ED6B 0BFF5CB6 F406B7ED
    EE386BFB 5A899FA5 AE9F2411 7C4B1FE6 49286651 ECE45B3D
    C2007CB8 A163BF05 98DA4836 1C55D39A 69163FA8 FD24CF5F
    83655D23 DCA3AD96 1C62F356 208552BB 9ED52907 7096966D
    670C354E 4ABC9804 F1746C08 CA18217C 32905E46 2E36CE3B
    E39E772C 180E8603 9B2783A2 EC07A28F B5C55DF0 6F4C52C9
    DE2BCBF6 95581718 3995497C EA956AE5 15D22618 98FA0510
    15728E5A 8AAAC42D AD33170D 04507A33 A85521AB DF1CBA64
    ECFB8504 58DBEF0A 8AEA7157 5D060C7D B3970F85 A6E1E4C7
    ABF5AE8C DB0933D7 1E8C94E0 4A25619D CEE3D226 1AD2EE6B
    F12FFA06 D98A0864 D8760273 3EC86A64 521F2B18 177B200C
    BBE11757 7A615D6C 770988C0 BAD946E2 08E24FA0 74E5AB31
    43DB5BFC E0FD108E 4B82D120 A93AD2CA FFFFFFFF FFFFFFFF
    """
)

# RFC 3526 section 5, group 16.
RFC3526_GROUP_16 = _rfc_prime(
    """
    FFFFFFFF FFFFFFFF C90FDAA2 2168C234 C4C6628B 80DC1CD1
    29024E08 8A67CC74 020BBEA6 3B139B22 514A0879 8E3404DD
    EF9519B3 CD3A431B 302B0A6D F25F1437 4FE1356D 6D51C245
    E485B576 625E7EC6 F44C42E9 A637ED6B 0BFF5CB6 F406B7ED
    EE386BFB 5A899FA5 AE9F2411 7C4B1FE6 49286651 ECE45B3D
    C2007CB8 A163BF05 98DA4836 1C55D39A 69163FA8 FD24CF5F
    83655D23 DCA3AD96 1C62F356 208552BB 9ED52907 7096966D
    670C354E 4ABC9804 F1746C08 CA18217C 32905E46 2E36CE3B
    E39E772C 180E8603 9B2783A2 EC07A28F B5C55DF0 6F4C52C9
    DE2BCBF6 95581718 3995497C EA956AE5 15D22618 98FA0510
    15728E5A 8AAAC42D AD33170D 04507A33 A85521AB DF1CBA64
    ECFB8504 58DBEF0A 8AEA7157 5D060C7D B3970F85 A6E1E4C7
    ABF5AE8C DB0933D7 1E8C94E0 4A25619D CEE3D226 1AD2EE6B
    F12FFA06 D98A0864 D8760273 3EC86A64 521F2B18 177B200C
    BBE11757 7A615D6C 770988C0 BAD946E2 08E24FA0 74E5AB31
    43DB5BFC E0FD108E 4B82D120 A9210801 1A723C12 A787E6D7
    88719A10 BDBA5B26 99C32718 6AF4E23C 1A946834 B6150BDA
    2583E9CA 2AD44CE8 DBBBC2DB 04DE8EF9 2E8EFC14 1FBECAA6
    287C5947 4E6BC05D 99B2964F A090C3A2 233BA186 515BE7ED
    1F612970 CEE2D7AF B81BDD76 2170481C D0069127 D5B05AA9
    93B4EA98 8D8FDDC1 86FFB7DC 90A6C08F 4DF435C9 34063199
    FFFFFFFF FFFFFFFF
    """
)

PUBLISHED_PRIMES = {
    1024: RFC2409_GROUP_2,
    2048: RFC3526_GROUP_14,
    3072: RFC3526_GROUP_15,
    4096: RFC3526_GROUP_16,
}

ALL_PRIMES = {1024: MODP_1024, 2048: MODP_2048, 3072: MODP_3072, 4096: MODP_4096}


@pytest.mark.parametrize(("bits", "published"), PUBLISHED_PRIMES.items())
def test_lookup_matches_published_rfc_text(bits: int, published: int) -> None:
    assert get_safe_prime(bits) == published
    assert ALL_PRIMES[bits] == published


@pytest.mark.parametrize(("bits", "prime"), ALL_PRIMES.items())
def test_lookup_returns_prime_of_requested_size(bits: int, prime: int) -> None:
    assert get_safe_prime(bits) == prime
    assert prime.bit_length() == bits


@pytest.mark.parametrize("prime", ALL_PRIMES.values())
def test_primes_share_the_modp_shape(prime: int) -> None:
    mask = (1 << 64) - 1
    assert prime & mask == mask
    assert prime >> (prime.bit_length() - 64) == mask
    assert prime % 8 == 7


@pytest.mark.parametrize("prime", ALL_PRIMES.values())
def test_two_is_a_quadratic_residue(prime: int) -> None:
    assert pow(2, (prime - 1) // 2, prime) == 1


@pytest.mark.parametrize("prime", [MODP_1024, MODP_2048])
def test_primes_are_safe(prime: int) -> None:
    assert miller_rabin_test(prime, 4) == PROBABLY_PRIME
    assert miller_rabin_test((prime - 1) // 2, 4) == PROBABLY_PRIME


@pytest.mark.parametrize("bits", [0, -1024, 512, 1536, 8192])
def test_unknown_size_raises_invalid_parameter(bits: int) -> None:
    with pytest.raises(InvalidParameterError) as exc_info:
        get_safe_prime(bits)

    assert exc_info.value.value == bits
    assert exc_info.value.allowed == (1024, 2048, 3072, 4096)
