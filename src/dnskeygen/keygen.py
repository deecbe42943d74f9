"""DNSSEC key pair generation.

Validates the requested size against the record's algorithm, generates the key pair and writes its public half
into the record. RSA primes come from `dnskeygen.primes`, ECDSA keys from `cryptography`.

Typical usage example:

    rr = DNSKEYRecord("example.com.", Algorithm.RSASHA256)
    pk = generate(rr, 2048)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import typing

from cryptography.exceptions import UnsupportedAlgorithm as BackendUnsupported
from cryptography.hazmat.primitives.asymmetric import ec

from dnskeygen.algorithms import check_key_size
from dnskeygen.algorithms import Curve
from dnskeygen.algorithms import KeyFamily
from dnskeygen.algorithms import mnemonic
from dnskeygen.errors import KeyGenerationFailed
from dnskeygen.keys import ECDSAPrivKey
from dnskeygen.keys import PrivateKey
from dnskeygen.keys import RSAPrivKey
from dnskeygen.primes import generate_rsa_components
from dnskeygen.record import DNSKEYRecord
from dnskeygen.record import encode_curve_public_key
from dnskeygen.record import encode_rsa_public_key

logger = logging.getLogger(__name__)


def _generate_rsa(bits: int, pub_exp: int) -> RSAPrivKey:
    try:
        n, e, d, p, q = generate_rsa_components(bits, pub_exp)
    except RuntimeError as exc:
        raise KeyGenerationFailed(f"RSA key generation failed: {exc}") from exc
    return RSAPrivKey(n, e, d, p, q)


def _generate_ecdsa(curve: Curve) -> ECDSAPrivKey:
    try:
        pk = ec.generate_private_key(curve.ec_type())
    except (BackendUnsupported, ValueError) as exc:
        raise KeyGenerationFailed(f"ECDSA key generation on {curve.name} failed: {exc}") from exc
    pubs = pk.public_key().public_numbers()
    return ECDSAPrivKey(curve, pk.private_numbers().private_value, pubs.x, pubs.y)


def generate(record: DNSKEYRecord, bits: int, pub_exp: int = 65537) -> PrivateKey:
    """Generates a key pair for the record's algorithm and stores the public key in the record.

    The size check runs before any random number is drawn. For the ECDSA algorithms the curve follows from the
    algorithm, `bits` must still equal the curve size. The record's public key is replaced only on success and its
    algorithm is never touched.

    Args:
        record: The DNSKEY record. Its `algorithm` selects what to generate.
        bits: The requested key size in bits.
        pub_exp: RSA public exponent. Ignored for ECDSA.

    Returns:
        The new private key.

    Raises:
        UnsupportedAlgorithm: If keys cannot be generated for the record's algorithm.
        InvalidKeySize: If `bits` does not suit the algorithm.
        KeyGenerationFailed: If the underlying generator fails.
        ValueError: If `pub_exp` is not an acceptable RSA public exponent.
    """
    profile = check_key_size(record.algorithm, bits)
    logger.debug("Generating %d-bit %s key for %s", bits, mnemonic(record.algorithm), record.name)
    priv: PrivateKey
    match profile.family:
        case KeyFamily.RSA:
            priv = _generate_rsa(bits, pub_exp)
            payload = encode_rsa_public_key(*priv.public_numbers())
        case KeyFamily.ECDSA:
            priv = _generate_ecdsa(profile.curve)
            payload = encode_curve_public_key(priv.x, priv.y, profile.curve.bsize)
        case _:
            typing.assert_never(profile.family)
    record.public_key = payload
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Generated %r, key tag %d", priv, record.key_tag())
    return priv
