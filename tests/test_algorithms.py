# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from dnskeygen import algorithms
from dnskeygen.algorithms import Algorithm
from dnskeygen.algorithms import KeyFamily
from dnskeygen.errors import InvalidKeySize
from dnskeygen.errors import UnsupportedAlgorithm

RSA_RANGES = [
    (Algorithm.RSAMD5, 512, 4096),
    (Algorithm.RSASHA1, 512, 4096),
    (Algorithm.RSASHA256, 512, 4096),
    (Algorithm.RSASHA1NSEC3SHA1, 512, 4096),
    (Algorithm.RSASHA512, 1024, 4096),
]

UNSUPPORTED = [Algorithm.DH, Algorithm.DSA, Algorithm.DSANSEC3SHA1, Algorithm.ECCGOST, Algorithm.ED25519,
               Algorithm.ED448, Algorithm.INDIRECT, Algorithm.PRIVATEDNS, Algorithm.PRIVATEOID, 0, 4, 99, 255]


def test_profiles_one_family_each():
    for alg, profile in algorithms.PROFILES.items():
        assert profile.family in (KeyFamily.RSA, KeyFamily.ECDSA)
        assert (profile.curve is not None) == (profile.family is KeyFamily.ECDSA), alg


def test_profiles_cover_generatable():
    rsa = {alg for alg, _, _ in RSA_RANGES}
    ecdsa = {Algorithm.ECDSAP256SHA256, Algorithm.ECDSAP384SHA384}
    assert set(algorithms.PROFILES) == rsa | ecdsa


@pytest.mark.parametrize("alg,low,high", RSA_RANGES)
def test_check_key_size_rsa_boundaries(alg, low, high):
    assert algorithms.check_key_size(alg, low).family is KeyFamily.RSA
    assert algorithms.check_key_size(alg, high).family is KeyFamily.RSA
    for bad in (low - 1, high + 1):
        with pytest.raises(InvalidKeySize):
            algorithms.check_key_size(alg, bad)


@pytest.mark.parametrize("alg,bits,curve", [(Algorithm.ECDSAP256SHA256, 256, algorithms.P256),
                                            (Algorithm.ECDSAP384SHA384, 384, algorithms.P384)])
def test_check_key_size_ecdsa_exact(alg, bits, curve):
    assert algorithms.check_key_size(alg, bits).curve == curve
    for bad in (bits - 1, bits + 1, 0, 2048):
        with pytest.raises(InvalidKeySize):
            algorithms.check_key_size(alg, bad)


@pytest.mark.parametrize("alg", UNSUPPORTED)
@pytest.mark.parametrize("bits", [0, 256, 384, 1024, 100000])
def test_check_key_size_unsupported(alg, bits):
    with pytest.raises(UnsupportedAlgorithm):
        algorithms.check_key_size(alg, bits)


def test_invalid_key_size_message():
    with pytest.raises(InvalidKeySize, match="exactly 256") as exc_info:
        algorithms.check_key_size(Algorithm.ECDSAP256SHA256, 255)
    assert exc_info.value.bits == 255
    assert isinstance(exc_info.value, ValueError)


def test_curve_sizes():
    assert algorithms.P256.bsize == 32
    assert algorithms.P384.bsize == 48


@pytest.mark.parametrize("number,name", [(1, "RSAMD5"), (7, "RSASHA1-NSEC3-SHA1"), (8, "RSASHA256"),
                                         (13, "ECDSAP256SHA256"), (14, "ECDSAP384SHA384"), (99, "UNKNOWN")])
def test_mnemonic(number, name):
    assert algorithms.mnemonic(number) == name


@pytest.mark.parametrize("name,expected", [("RSASHA256", Algorithm.RSASHA256), ("rsasha1-nsec3-sha1",
                                                                               Algorithm.RSASHA1NSEC3SHA1),
                                           ("13", Algorithm.ECDSAP256SHA256), ("ED25519", Algorithm.ED25519)])
def test_from_mnemonic(name, expected):
    assert algorithms.from_mnemonic(name) is expected


@pytest.mark.parametrize("name", ["RSASHA384", "99", ""])
def test_from_mnemonic_unknown(name):
    with pytest.raises(UnsupportedAlgorithm):
        algorithms.from_mnemonic(name)
