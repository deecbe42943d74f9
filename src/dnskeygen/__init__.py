"""DNSSEC key pair generation and BIND private key export.

Generates RSA and ECDSA key pairs for DNSKEY records, storing the public half in the record, and serializes the
private half as BIND's `Private-key-format: v1.3` text (including the RSA CRT parameters) or as PKCS#8 PEM.

Typical usage example:

    rr = DNSKEYRecord("example.com.", Algorithm.RSASHA256)
    pk = generate(rr, 2048)
    print(rr.to_text())
    print(private_key_string(rr, pk))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from dnskeygen.algorithms import Algorithm
from dnskeygen.errors import DNSKeyError
from dnskeygen.errors import InvalidKeySize
from dnskeygen.errors import KeyGenerationFailed
from dnskeygen.errors import PrivateKeyFormatError
from dnskeygen.errors import UnsupportedAlgorithm
from dnskeygen.export import crt_components
from dnskeygen.export import private_key_string
from dnskeygen.export import read_private_key_string
from dnskeygen.keygen import generate
from dnskeygen.keys import ECDSAPrivKey
from dnskeygen.keys import PrivateKey
from dnskeygen.keys import RSAPrivKey
from dnskeygen.pem import private_key_pem
from dnskeygen.record import DNSKEYRecord

__version__ = "0.1.0"
__all__ = [
    "Algorithm",
    "DNSKEYRecord",
    "RSAPrivKey",
    "ECDSAPrivKey",
    "PrivateKey",
    "generate",
    "private_key_string",
    "read_private_key_string",
    "crt_components",
    "private_key_pem",
    "DNSKeyError",
    "InvalidKeySize",
    "UnsupportedAlgorithm",
    "KeyGenerationFailed",
    "PrivateKeyFormatError",
]
