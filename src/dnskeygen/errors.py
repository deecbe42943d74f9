"""Exceptions raised while generating, exporting and importing DNSSEC keys."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class DNSKeyError(Exception):
    """Base class for every error raised by dnskeygen."""


class InvalidKeySize(DNSKeyError, ValueError):
    """The requested key size is outside the range allowed for the algorithm."""

    def __init__(self, algorithm: int, bits: int, min_bits: int, max_bits: int) -> None:
        self.algorithm = algorithm
        self.bits = bits
        if min_bits == max_bits:
            allowed = f"exactly {min_bits}"
        else:
            allowed = f"{min_bits}-{max_bits}"
        super().__init__(f"Key size {bits} is invalid for algorithm {algorithm} (allowed: {allowed} bits)")


class UnsupportedAlgorithm(DNSKeyError, ValueError):
    """The algorithm is not one we can generate keys for."""

    def __init__(self, algorithm: int | str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Algorithm {algorithm} is not supported for key generation")


class KeyGenerationFailed(DNSKeyError, RuntimeError):
    """The underlying random source or generation algorithm failed."""


class PrivateKeyFormatError(DNSKeyError, ValueError):
    """A private-key text could not be parsed."""
