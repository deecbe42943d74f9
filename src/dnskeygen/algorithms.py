"""DNSSEC algorithm numbers and the constraints each generatable algorithm puts on its keys.

Holds the one table mapping an algorithm to its key family, allowed size and curve, so that size validation and
generation dispatch read from the same place.

Typical usage example:

    profile = check_key_size(Algorithm.RSASHA256, 2048)
    name = mnemonic(8)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum
import typing

from cryptography.hazmat.primitives.asymmetric import ec

from dnskeygen.errors import InvalidKeySize
from dnskeygen.errors import UnsupportedAlgorithm


class Algorithm(enum.IntEnum):
    """IANA DNS Security Algorithm Numbers."""
    RSAMD5 = 1
    DH = 2
    DSA = 3
    RSASHA1 = 5
    DSANSEC3SHA1 = 6
    RSASHA1NSEC3SHA1 = 7
    RSASHA256 = 8
    RSASHA512 = 10
    ECCGOST = 12
    ECDSAP256SHA256 = 13
    ECDSAP384SHA384 = 14
    ED25519 = 15
    ED448 = 16
    INDIRECT = 252
    PRIVATEDNS = 253
    PRIVATEOID = 254


ALGORITHM_NAMES: dict[int, str] = {
    Algorithm.RSAMD5: "RSAMD5",
    Algorithm.DH: "DH",
    Algorithm.DSA: "DSA",
    Algorithm.RSASHA1: "RSASHA1",
    Algorithm.DSANSEC3SHA1: "DSA-NSEC3-SHA1",
    Algorithm.RSASHA1NSEC3SHA1: "RSASHA1-NSEC3-SHA1",
    Algorithm.RSASHA256: "RSASHA256",
    Algorithm.RSASHA512: "RSASHA512",
    Algorithm.ECCGOST: "ECC-GOST",
    Algorithm.ECDSAP256SHA256: "ECDSAP256SHA256",
    Algorithm.ECDSAP384SHA384: "ECDSAP384SHA384",
    Algorithm.ED25519: "ED25519",
    Algorithm.ED448: "ED448",
    Algorithm.INDIRECT: "INDIRECT",
    Algorithm.PRIVATEDNS: "PRIVATEDNS",
    Algorithm.PRIVATEOID: "PRIVATEOID",
}


class KeyFamily(enum.Enum):
    RSA = "RSA"
    ECDSA = "ECDSA"


class Curve(typing.NamedTuple):
    """A named NIST curve as used by the DNSSEC ECDSA algorithms.

    Attributes:
        name: Display name of the curve.
        bits: Size of the curve's field in bits.
        ec_type: The matching `cryptography` curve class.
    """
    name: str
    bits: int
    ec_type: type[ec.EllipticCurve]

    @property
    def bsize(self) -> int:
        """Length in octets of one point coordinate or of the private scalar."""
        return (self.bits + 7) // 8


P256 = Curve("P-256", 256, ec.SECP256R1)
P384 = Curve("P-384", 384, ec.SECP384R1)


class AlgorithmProfile(typing.NamedTuple):
    family: KeyFamily
    min_bits: int
    max_bits: int
    curve: Curve | None = None


PROFILES: dict[int, AlgorithmProfile] = {
    Algorithm.RSAMD5: AlgorithmProfile(KeyFamily.RSA, 512, 4096),
    Algorithm.RSASHA1: AlgorithmProfile(KeyFamily.RSA, 512, 4096),
    Algorithm.RSASHA1NSEC3SHA1: AlgorithmProfile(KeyFamily.RSA, 512, 4096),
    Algorithm.RSASHA256: AlgorithmProfile(KeyFamily.RSA, 512, 4096),
    Algorithm.RSASHA512: AlgorithmProfile(KeyFamily.RSA, 1024, 4096),
    Algorithm.ECDSAP256SHA256: AlgorithmProfile(KeyFamily.ECDSA, 256, 256, P256),
    Algorithm.ECDSAP384SHA384: AlgorithmProfile(KeyFamily.ECDSA, 384, 384, P384),
}


def mnemonic(algorithm: int) -> str:
    """Display name of an algorithm number, `UNKNOWN` if it has none."""
    return ALGORITHM_NAMES.get(algorithm, "UNKNOWN")


def from_mnemonic(name: str) -> Algorithm:
    """Resolves a display name (case-insensitive) or a plain number to an Algorithm.

    Args:
        name: The mnemonic, e.g. `RSASHA256`, or its decimal number.

    Returns:
        The matching Algorithm.

    Raises:
        UnsupportedAlgorithm: If nothing matches.
    """
    if name.isdigit():
        try:
            return Algorithm(int(name))
        except ValueError:
            raise UnsupportedAlgorithm(int(name)) from None
    for number, label in ALGORITHM_NAMES.items():
        if label.upper() == name.upper():
            return Algorithm(number)
    raise UnsupportedAlgorithm(name)


def profile_for(algorithm: int) -> AlgorithmProfile:
    """Looks up the key constraints of a generatable algorithm.

    Raises:
        UnsupportedAlgorithm: If keys cannot be generated for the algorithm.
    """
    try:
        return PROFILES[algorithm]
    except KeyError:
        raise UnsupportedAlgorithm(algorithm) from None


def check_key_size(algorithm: int, bits: int) -> AlgorithmProfile:
    """Validates a key size against the algorithm's allowed range.

    Args:
        algorithm: The DNSSEC algorithm number.
        bits: The requested key size in bits.

    Returns:
        The algorithm's profile.

    Raises:
        UnsupportedAlgorithm: If keys cannot be generated for the algorithm.
        InvalidKeySize: If `bits` is outside the allowed range.
    """
    profile = profile_for(algorithm)
    if not profile.min_bits <= bits <= profile.max_bits:
        raise InvalidKeySize(algorithm, bits, profile.min_bits, profile.max_bits)
    return profile
