"""Prime search and RSA component generation for DNSSEC RSA keys, roughly based on FIPS 186-5.

Candidates come from `secrets` with their top two bits and low bit forced on. A candidate is first screened against
one fixed table of small primes with a single gcd, then put through Miller-Rabin with the round counts of
FIPS 186-5 Appendix C.1.

Typical usage example:

    p, q = generate_primes(2048)
    n, e, d, p, q = generate_rsa_components(1024)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import secrets

from dnskeygen.arith import modinv

logger = logging.getLogger(__name__)

_MINIMUM_KEY_SIZE = 512
_MINIMUM_PRIME_SEPARATION = 100
# (largest bit length, Miller-Rabin rounds), FIPS 186-5 Appendix C.1.
_ROUNDS = ((512, 40), (1024, 56), (1536, 64), (2048, 70))
_ROUNDS_ABOVE = 74


def _small_primes(limit: int) -> tuple[int, ...]:
    """Odd-only Sieve of Eratosthenes.

    Args:
        limit: Inclusive upper bound.

    Returns:
        All primes up to `limit` in ascending order.
    """
    if limit < 2:
        return ()
    odd = bytearray([1]) * ((limit - 1) // 2)  # odd[i] stands for 2 * i + 3
    for i in range((math.isqrt(limit) - 1) // 2):
        if odd[i]:
            r = 2 * i + 3
            start = (r * r - 3) // 2
            odd[start::r] = bytes(len(range(start, len(odd), r)))
    return (2,) + tuple(2 * i + 3 for i, flag in enumerate(odd) if flag)


SMALL_PRIMES = _small_primes(2000)
_SMALL_PRIME_SET = frozenset(SMALL_PRIMES)
_SMALL_PRIMES_PRODUCT = math.prod(SMALL_PRIMES)


def _miller_rabin(w: int, rounds: int) -> bool:
    """Miller-Rabin test with random bases.

    Args:
        w: The integer to test.
        rounds: Number of bases to try.

    Returns:
        True if `w` is probably prime, False if it is certainly composite.
    """
    if w < 5:
        return w in (2, 3)
    if not w & 1:
        return False
    s = ((w - 1) & -(w - 1)).bit_length() - 1
    d = (w - 1) >> s
    for _ in range(rounds):
        x = pow(secrets.randbelow(w - 3) + 2, d, w)
        if x in (1, w - 1):
            continue
        for _ in range(s - 1):
            x = x * x % w
            if x == w - 1:
                break
        else:
            return False
    return True


def _rounds_for(bits: int) -> int:
    return next((rounds for limit, rounds in _ROUNDS if bits <= limit), _ROUNDS_ABOVE)


def check_prime(candidate: int) -> bool:
    """Probabilistic primality check: small-prime screen, then Miller-Rabin."""
    if candidate <= SMALL_PRIMES[-1]:
        return candidate in _SMALL_PRIME_SET
    if math.gcd(candidate, _SMALL_PRIMES_PRODUCT) != 1:
        return False
    return _miller_rabin(candidate, _rounds_for(candidate.bit_length()))


def _random_prime(bits: int, pub_exp: int, other: int | None = None) -> int:
    """Draws a `bits`-long probable prime p with gcd(p - 1, pub_exp) == 1.

    Args:
        bits: Exact bit length of the result.
        pub_exp: The public exponent the prime has to suit.
        other: The first prime of the pair. The result then keeps more than 2**(bits - 100) away from it.

    Returns:
        A probable prime with its top two bits set.

    Raises:
        RuntimeError: If no prime turned up after an improbable number of candidates.
    """
    attempts = 5 * bits if other is None else 10 * bits
    gap = 1 << max(bits - _MINIMUM_PRIME_SEPARATION, 0)
    # Top two bits keep the product at full length, the low bit keeps candidates odd.
    mask = (1 << bits - 1) | (1 << bits - 2) | 1
    for _ in range(attempts):
        candidate = secrets.randbits(bits) | mask
        if other is not None and abs(other - candidate) <= gap:
            continue
        if math.gcd(candidate - 1, pub_exp) == 1 and check_prime(candidate):
            return candidate
    logger.warning("No %d-bit prime found after %d candidates", bits, attempts)
    raise RuntimeError(f"No prime among {attempts} candidates of {bits} bits, check the system random source")


def generate_primes(size: int, pub: int = 65537) -> tuple[int, int]:
    """Generates a pair of distinct primes whose product is exactly `size` bits long.

    For odd sizes p receives the extra bit.

    Args:
        size: The modulus size in bits, at least 512.
        pub: The public exponent. Has to be odd and in range `(2**16, 2**256)` exclusive.

    Returns:
        The (p, q) pair.

    Raises:
        ValueError: If `size` is below the supported minimum or `pub` does not meet requirements.
        RuntimeError: If the prime search gives up.
    """
    if size < _MINIMUM_KEY_SIZE:
        raise ValueError(f"Size must be at least {_MINIMUM_KEY_SIZE}.")
    if pub % 2 == 0 or not 2**16 < pub < 2**256:
        raise ValueError("Public exponent does not meet requirements.")
    q_bits = size // 2
    p = _random_prime(size - q_bits, pub)
    q = _random_prime(q_bits, pub, p)
    return p, q


def generate_rsa_components(size: int, pub: int = 65537) -> tuple[int, int, int, int, int]:
    """Generates the numbers of an RSA key pair.

    Args:
        size: The modulus size in bits.
        pub: The public exponent. See `generate_primes`.

    Returns:
        A tuple of (modulus, public exponent, private exponent, prime1, prime2).
    """
    p, q = generate_primes(size, pub)
    d = modinv(pub, math.lcm(p - 1, q - 1))
    return p * q, pub, d, p, q
