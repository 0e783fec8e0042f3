"""
Key material domain models.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import TypeVar

from Crypto.PublicKey.ElGamal import ElGamalKey
from cryptography.hazmat.primitives.asymmetric import dsa
from pgpy.constants import HashAlgorithm, PubKeyAlgorithm

from pgp_keygen.exceptions import InvalidParameterError

# Primality confidence for the DSA2 prime search: error probability below 2**-80.
DSA2_CERTAINTY = 80
ELGAMAL_GENERATOR = 2


class Dsa2KeySize(IntEnum):
    """Prime sizes accepted for DSA2 signing keys."""

    BITS_1024 = 1024
    BITS_2048 = 2048
    BITS_3072 = 3072

    @property
    def subgroup_bits(self) -> int:
        """Size of the subgroup order q (the N parameter)."""
        match self:
            case self.BITS_1024:
                return 160
            case _:
                return 256


class ElGamalKeySize(IntEnum):
    """Modulus sizes with a tabulated safe prime."""

    BITS_1024 = 1024
    BITS_2048 = 2048
    BITS_3072 = 3072
    BITS_4096 = 4096


_KeySizeT = TypeVar("_KeySizeT", Dsa2KeySize, ElGamalKeySize)


def parse_key_size(value: object, key_sizes: type[_KeySizeT], *, algorithm: str) -> _KeySizeT:
    """
    Convert a caller-supplied bit size into a member of ``key_sizes``.

    Raises:
        InvalidParameterError: If ``value`` is not one of the enumerated sizes.
    """
    allowed = tuple(int(size) for size in key_sizes)
    if isinstance(value, bool) or not isinstance(value, int) or value not in allowed:
        msg = f"{algorithm} key size must be one of {', '.join(map(str, allowed))}, got {value!r}"
        raise InvalidParameterError(msg, value=value, allowed=allowed)
    return key_sizes(value)


class SymmetricAlgorithm(IntEnum):
    """OpenPGP identifiers of the ciphers that may protect generated secret keys."""

    IDEA = 1
    TRIPLE_DES = 2
    CAST5 = 3
    BLOWFISH = 4
    DES = 6  # reserved "DES/SK" slot of RFC 4880
    AES_128 = 7
    AES_192 = 8
    AES_256 = 9
    TWOFISH = 10

    @classmethod
    def from_name(cls, name: str) -> "SymmetricAlgorithm":
        """
        Resolve a cipher name, ignoring case.

        Unrecognized names resolve to TWOFISH instead of raising. Callers that need
        strict validation must check the name against ``cipher_name`` themselves.
        """
        match name.casefold():
            case "aes256":
                return cls.AES_256
            case "aes192":
                return cls.AES_192
            case "aes128":
                return cls.AES_128
            case "blowfish":
                return cls.BLOWFISH
            case "twofish":
                return cls.TWOFISH
            case "cast5":
                return cls.CAST5
            case "idea":
                return cls.IDEA
            case "des":
                return cls.DES
            case "3des":
                return cls.TRIPLE_DES
            case _:
                return cls.TWOFISH

    @property
    def cipher_name(self) -> str:
        """Canonical lower-case name accepted by ``from_name``."""
        match self:
            case self.AES_256:
                return "aes256"
            case self.AES_192:
                return "aes192"
            case self.AES_128:
                return "aes128"
            case self.BLOWFISH:
                return "blowfish"
            case self.TWOFISH:
                return "twofish"
            case self.CAST5:
                return "cast5"
            case self.IDEA:
                return "idea"
            case self.DES:
                return "des"
            case _:
                return "3des"


@dataclass(frozen=True, kw_only=True)
class Dsa2ParameterSpec:
    """
    Inputs of the DSA2 domain parameter search.

    Attributes:
        prime_bits: Size L of the prime modulus p.
        subgroup_bits: Size N of the subgroup order q.
        certainty: Primality confidence; candidates are wrong with probability < 2**-certainty.
        digest: Hash function driving the search.
    """

    prime_bits: Dsa2KeySize
    subgroup_bits: int
    certainty: int
    digest: HashAlgorithm


@dataclass(frozen=True, kw_only=True)
class Dsa2DomainParameters:
    """
    DSA2 domain parameters (p, q, g) with the FIPS 186-3 seed and counter that produced them.
    """

    spec: Dsa2ParameterSpec
    p: int
    q: int
    g: int
    seed: bytes
    counter: int

    @property
    def prime_bits(self) -> int:
        return self.spec.prime_bits

    @property
    def subgroup_bits(self) -> int:
        return self.spec.subgroup_bits

    @property
    def certainty(self) -> int:
        return self.spec.certainty

    @property
    def digest(self) -> HashAlgorithm:
        return self.spec.digest

    def validate(self) -> None:
        """
        Check the structural relations between p, q and g.

        Raises:
            ValueError: If any relation does not hold.
        """
        if self.p.bit_length() != self.prime_bits:
            msg = f"p has {self.p.bit_length()} bits, expected {self.prime_bits}"
            raise ValueError(msg)
        if self.q.bit_length() != self.subgroup_bits:
            msg = f"q has {self.q.bit_length()} bits, expected {self.subgroup_bits}"
            raise ValueError(msg)
        if (self.p - 1) % self.q != 0:
            msg = "q does not divide p - 1"
            raise ValueError(msg)
        if not 1 < self.g < self.p or pow(self.g, self.q, self.p) != 1:
            msg = "g does not generate the order-q subgroup"
            raise ValueError(msg)


@dataclass(frozen=True, kw_only=True)
class ElGamalDomainParameters:
    """ElGamal group: a tabulated safe prime modulus and generator 2."""

    key_size: ElGamalKeySize
    p: int
    g: int = ELGAMAL_GENERATOR


@dataclass(frozen=True, kw_only=True)
class Dsa2KeyPair:
    """DSA2 signing key pair generated from explicit domain parameters."""

    parameters: Dsa2DomainParameters
    private_key: dsa.DSAPrivateKey
    public_key: dsa.DSAPublicKey

    @property
    def algorithm(self) -> PubKeyAlgorithm:
        return PubKeyAlgorithm.DSA

    @property
    def key_size(self) -> int:
        return self.parameters.prime_bits


@dataclass(frozen=True, kw_only=True)
class ElGamalKeyPair:
    """ElGamal encryption key pair over a tabulated MODP group."""

    parameters: ElGamalDomainParameters
    private_key: ElGamalKey
    public_key: ElGamalKey

    @property
    def algorithm(self) -> PubKeyAlgorithm:
        return PubKeyAlgorithm.ElGamal

    @property
    def key_size(self) -> int:
        return self.parameters.key_size
