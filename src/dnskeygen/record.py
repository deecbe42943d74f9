"""The DNSKEY resource record that owns a generated public key.

Provides the public-key encoders and decoders for RSA (RFC 3110) and ECDSA (RFC 6605) keys, the RDATA wire form,
key tag calculation (RFC 4034 Appendix B) and the presentation format used in BIND `.key` files. The wire form,
key tag and presentation text are produced through dnspython.

Typical usage example:

    rr = DNSKEYRecord("example.com.", Algorithm.ECDSAP256SHA256)
    rr.set_public_key_curve(x, y)
    print(rr.to_text(), rr.key_tag())
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import struct

import dns.dnssec
import dns.rdataclass
import dns.rdatatype
import dns.rdtypes.ANY.DNSKEY
import dns.rrset

from dnskeygen.algorithms import Algorithm
from dnskeygen.algorithms import KeyFamily
from dnskeygen.algorithms import PROFILES
from dnskeygen.arith import bytes_to_integer
from dnskeygen.arith import integer_to_bytes

ZONE_KEY = 256
SEP = 1
DNSSEC_PROTOCOL = 3


def encode_rsa_public_key(expo: int, mod: int) -> bytes:
    """Encodes an RSA public key as DNSKEY key material (RFC 3110 section 2).

    Args:
        expo: The public exponent.
        mod: The modulus.

    Returns:
        Exponent length, exponent and modulus as a single byte string.

    Raises:
        ValueError: If the exponent is too long to be encoded.
    """
    e_bytes = integer_to_bytes(expo)
    if len(e_bytes) <= 255:
        prefix = struct.pack("!B", len(e_bytes))
    elif len(e_bytes) <= 0xFFFF:
        prefix = struct.pack("!BH", 0, len(e_bytes))
    else:
        raise ValueError("Public exponent too long")
    return prefix + e_bytes + integer_to_bytes(mod)


def decode_rsa_public_key(payload: bytes) -> tuple[int, int]:
    """Reverses `encode_rsa_public_key`.

    Returns:
        The (exponent, modulus) pair.

    Raises:
        ValueError: If the payload is truncated.
    """
    if not payload:
        raise ValueError("Empty RSA public key")
    if payload[0] == 0:
        if len(payload) < 3:
            raise ValueError("Truncated RSA exponent length")
        e_len = struct.unpack("!H", payload[1:3])[0]
        offset = 3
    else:
        e_len = payload[0]
        offset = 1
    if len(payload) <= offset + e_len:
        raise ValueError("Truncated RSA public key")
    expo = bytes_to_integer(payload[offset:offset + e_len])
    mod = bytes_to_integer(payload[offset + e_len:])
    return expo, mod


def encode_curve_public_key(x: int, y: int, bsize: int) -> bytes:
    """Encodes an ECDSA public point as DNSKEY key material (RFC 6605 section 4).

    Args:
        x: X coordinate.
        y: Y coordinate.
        bsize: Length of one coordinate in octets.

    Returns:
        X and Y, each left-padded to `bsize`, concatenated.
    """
    return integer_to_bytes(x, bsize) + integer_to_bytes(y, bsize)


class DNSKEYRecord:
    """A DNSKEY resource record.

    Attributes:
        name: Owner name, always absolute.
        algorithm: DNSSEC algorithm number.
        flags: DNSKEY flags, 256 for a zone key, 257 when the SEP bit is set too.
        protocol: Always 3.
        ttl: Time to live in seconds.
        public_key: The algorithm-specific public key material.
    """

    def __init__(self,
                 name: str = ".",
                 algorithm: int = Algorithm.RSASHA256,
                 flags: int = ZONE_KEY,
                 ttl: int = 3600,
                 public_key: bytes = b"",
                 protocol: int = DNSSEC_PROTOCOL) -> None:
        self.name = name if name.endswith(".") else name + "."
        self.algorithm = algorithm
        self.flags = flags
        self.ttl = ttl
        self.protocol = protocol
        self.public_key = public_key

    def _family(self) -> KeyFamily | None:
        profile = PROFILES.get(self.algorithm)
        return profile.family if profile else None

    def set_public_key_rsa(self, expo: int, mod: int) -> None:
        """Stores an RSA public key.

        Raises:
            ValueError: If the record's algorithm is not an RSA algorithm.
        """
        if self._family() is not KeyFamily.RSA:
            raise ValueError(f"Algorithm {self.algorithm} does not take an RSA public key")
        self.public_key = encode_rsa_public_key(expo, mod)

    def set_public_key_curve(self, x: int, y: int) -> None:
        """Stores an ECDSA public point, padded to the size of the algorithm's curve.

        Raises:
            ValueError: If the record's algorithm is not an ECDSA algorithm.
        """
        if self._family() is not KeyFamily.ECDSA:
            raise ValueError(f"Algorithm {self.algorithm} does not take an ECDSA public key")
        curve = PROFILES[self.algorithm].curve
        self.public_key = encode_curve_public_key(x, y, curve.bsize)

    def public_key_rsa(self) -> tuple[int, int]:
        """Decodes the stored RSA public key into (exponent, modulus)."""
        if self._family() is not KeyFamily.RSA:
            raise ValueError(f"Algorithm {self.algorithm} does not hold an RSA public key")
        return decode_rsa_public_key(self.public_key)

    def public_key_curve(self) -> tuple[int, int]:
        """Decodes the stored ECDSA public key into (x, y)."""
        if self._family() is not KeyFamily.ECDSA:
            raise ValueError(f"Algorithm {self.algorithm} does not hold an ECDSA public key")
        bsize = PROFILES[self.algorithm].curve.bsize
        if len(self.public_key) != 2 * bsize:
            raise ValueError("ECDSA public key has the wrong length")
        return bytes_to_integer(self.public_key[:bsize]), bytes_to_integer(self.public_key[bsize:])

    def to_rdata(self) -> dns.rdtypes.ANY.DNSKEY.DNSKEY:
        """The record's RDATA as a dnspython DNSKEY.

        Raises:
            ValueError: If a field does not fit its wire size.
        """
        return dns.rdtypes.ANY.DNSKEY.DNSKEY(dns.rdataclass.IN, dns.rdatatype.DNSKEY, self.flags, self.protocol,
                                             self.algorithm, self.public_key)

    def rdata(self) -> bytes:
        """The record's RDATA in wire format."""
        return self.to_rdata().to_wire()

    def key_tag(self) -> int:
        """Computes the key tag as per RFC 4034 Appendix B.

        RSAMD5 keys use the legacy definition: the second-to-last two octets of the modulus.
        """
        if self.algorithm == Algorithm.RSAMD5 and len(self.public_key) < 3:
            return 0
        return dns.dnssec.key_id(self.to_rdata())

    def basename(self) -> str:
        """The BIND file basename for this key, e.g. `Kexample.com.+013+12345`."""
        return f"K{self.name}+{int(self.algorithm):03d}+{self.key_tag():05d}"

    def to_text(self) -> str:
        """The record in zone-file presentation format, key material on one line."""
        rrset = dns.rrset.from_rdata(self.name, self.ttl, self.to_rdata())
        return rrset.to_text(chunksize=0)

    def __repr__(self) -> str:
        return f"<DNSKEYRecord {self.name} flags={self.flags} algorithm={int(self.algorithm)}>"
