"""In-memory private key variants produced by key generation.

A private key is either an `RSAPrivKey` or an `ECDSAPrivKey`; `PrivateKey` names the union. Consumers are expected
to `match` over both classes and finish with `typing.assert_never`.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from dnskeygen.algorithms import Curve


class RSAPrivKey:
    """RSA private key with exactly two prime factors.

    CRT components are not stored, they are derived whenever a serialization needs them.

    Attributes:
        mod: The modulus of the keypair.
        pub_exp: The public exponent.
        priv_exp: The private exponent.
        p: Private Prime 1.
        q: Private Prime 2.
    """

    def __init__(self, mod: int, pub_exp: int, priv_exp: int, p: int, q: int) -> None:
        if p * q != mod:
            raise ValueError("Primes do not multiply to the modulus")
        self.mod = mod
        self.pub_exp = pub_exp
        self.priv_exp = priv_exp
        self.p = p
        self.q = q

    @property
    def bits(self) -> int:
        return self.mod.bit_length()

    def public_numbers(self) -> tuple[int, int]:
        """The public half as (exponent, modulus)."""
        return self.pub_exp, self.mod

    def __repr__(self) -> str:
        return f"<RSAPrivKey bits={self.bits} e={self.pub_exp}>"


class ECDSAPrivKey:
    """ECDSA private key on one of the DNSSEC curves.

    Attributes:
        curve: The curve the key lives on.
        scalar: The private scalar.
        x: X coordinate of the public point.
        y: Y coordinate of the public point.
    """

    def __init__(self, curve: Curve, scalar: int, x: int, y: int) -> None:
        self.curve = curve
        self.scalar = scalar
        self.x = x
        self.y = y

    @property
    def bits(self) -> int:
        return self.curve.bits

    def public_numbers(self) -> tuple[int, int]:
        """The public point as (x, y)."""
        return self.x, self.y

    def __repr__(self) -> str:
        return f"<ECDSAPrivKey curve={self.curve.name}>"


PrivateKey = RSAPrivKey | ECDSAPrivKey
