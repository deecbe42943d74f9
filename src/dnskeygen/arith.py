"""Integer helpers shared by key generation, record encoding and export.

Covers the Extended Euclidean Algorithm, the modular inverse built on it, and the big-endian/base64 marshalling of
non-negative integers used throughout DNSSEC key material.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such a that a*s0 + b*t0 = r0 = gcd(a, b).

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common denominator of two integers.
        As well as the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def modinv(a: int, m: int) -> int:
    """Computes the multiplicative inverse of `a` modulo `m`.

    Args:
        a: The number to invert.
        m: The modulus. Must be > 1.

    Returns:
        The unique x in [0, m) with a*x = 1 (mod m).

    Raises:
        ValueError: If `a` and `m` are not coprime or `m` is not > 1.
    """
    if m <= 1:
        raise ValueError("Modulus must be greater than 1")
    g, s, _ = eea(a % m, m)
    if g != 1:
        raise ValueError("Base is not invertible for the given modulus")
    return s % m


def bytes_to_integer(msg: bytes) -> int:
    """Converts a big-endian byte string to a non-negative integer."""
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int | None = None) -> bytes:
    """Converts a non-negative integer to big-endian bytes.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string.
            If not provided, uses the minimal length (zero becomes an empty string).

    Returns:
        The representative bytes.
    """
    if fixedlen is None:
        fixedlen = (msg.bit_length() + 7) // 8
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def b64_enc(msg: int, fixedlen: int | None = None) -> str:
    """Encodes an integer into a standard base64 string of its big-endian bytes.

    Args:
        msg: The integer to encode.
        fixedlen: Optional fixed byte length, see `integer_to_bytes`.

    Returns:
        A base64 encoded string.
    """
    return base64.b64encode(integer_to_bytes(msg, fixedlen)).decode("ascii")


def b64_dec(msg: str) -> int:
    """Decodes a base64 encoded string into an int.

    Raises:
        ValueError: If `msg` is not valid base64.
    """
    try:
        return bytes_to_integer(base64.b64decode(msg.encode("ascii"), validate=True))
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ValueError(f"Invalid base64 value: {msg!r}") from exc
