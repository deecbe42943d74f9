"""Private key text serialization in BIND's `Private-key-format: v1.3` layout.

Renders the contents of a BIND `K<zone>.+<alg>+<tag>.private` file for a generated key, deriving the RSA CRT
parameters on the way, and reads such text back into a private key.

Typical usage example:

    text = private_key_string(rr, pk)
    algorithm, pk = read_private_key_string(text)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import typing

from cryptography.hazmat.primitives.asymmetric import ec

from dnskeygen.algorithms import KeyFamily
from dnskeygen.algorithms import mnemonic
from dnskeygen.algorithms import profile_for
from dnskeygen.arith import b64_dec
from dnskeygen.arith import b64_enc
from dnskeygen.arith import modinv
from dnskeygen.errors import PrivateKeyFormatError
from dnskeygen.keys import ECDSAPrivKey
from dnskeygen.keys import PrivateKey
from dnskeygen.keys import RSAPrivKey
from dnskeygen.record import DNSKEYRecord

PRIVATE_KEY_FORMAT = "v1.3"

# "Modules" is what existing consumers of this output expect, so it stays.
RSA_FIELDS = ("Modules", "PublicExponent", "PrivateExponent", "Prime1", "Prime2", "Exponent1", "Exponent2",
              "Coefficient")


def crt_components(priv_exp: int, p: int, q: int) -> tuple[int, int, int]:
    """Derives the RSA CRT parameters.

    Args:
        priv_exp: The private exponent d.
        p: Prime 1.
        q: Prime 2.

    Returns:
        A tuple of (d mod (p-1), d mod (q-1), q^-1 mod p).
    """
    p_minus_1 = p - 1
    q_minus_1 = q - 1
    exponent1 = priv_exp % p_minus_1
    exponent2 = priv_exp % q_minus_1
    coefficient = modinv(q, p)
    return exponent1, exponent2, coefficient


def private_key_string(record: DNSKEYRecord, key: PrivateKey) -> str:
    """Converts a private key to the text of a BIND v1.3 private key file.

    The record only supplies the algorithm label. Neither argument is modified.

    Args:
        record: The DNSKEY record the key was generated for.
        key: The private key returned by `generate` for that record.

    Returns:
        Newline-terminated `Key: Value` lines.

    Raises:
        TypeError: If `key` is not a supported private key.
    """
    lines = [
        ("Private-key-format", PRIVATE_KEY_FORMAT),
        ("Algorithm", f"{int(record.algorithm)} ({mnemonic(record.algorithm)})"),
    ]
    match key:
        case RSAPrivKey():
            exp1, exp2, coeff = crt_components(key.priv_exp, key.p, key.q)
            values = (key.mod, key.pub_exp, key.priv_exp, key.p, key.q, exp1, exp2, coeff)
            lines.extend((label, b64_enc(value)) for label, value in zip(RSA_FIELDS, values, strict=True))
        case ECDSAPrivKey():
            lines.append(("PrivateKey", b64_enc(key.scalar, key.curve.bsize)))
        case _:
            raise TypeError(f"Unsupported private key type {type(key).__name__}")
    return "".join(f"{label}: {value}\n" for label, value in lines)


def _parse_fields(text: str) -> dict[str, str]:
    fields = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith(";"):
            continue
        label, sep, value = line.partition(":")
        if not sep:
            raise PrivateKeyFormatError(f"Line {lineno} is not a 'Key: Value' pair")
        fields[label.strip()] = value.strip()
    return fields


def _field_int(fields: dict[str, str], *labels: str) -> int:
    for label in labels:
        if label in fields:
            try:
                return b64_dec(fields[label])
            except ValueError as exc:
                raise PrivateKeyFormatError(f"Field {label} is not valid base64") from exc
    raise PrivateKeyFormatError(f"Missing field {labels[0]}")


def _check_rsa_numbers(key: RSAPrivKey) -> None:
    # CRT derivation needs two coprime factors above 1 and d inverting e.
    if key.p < 2 or key.q < 2 or math.gcd(key.p, key.q) != 1:
        raise PrivateKeyFormatError("Prime1 and Prime2 are not usable RSA factors")
    if (key.pub_exp * key.priv_exp) % math.lcm(key.p - 1, key.q - 1) != 1:
        raise PrivateKeyFormatError("PrivateExponent does not invert PublicExponent")


def read_private_key_string(text: str) -> tuple[int, PrivateKey]:
    """Parses the text of a BIND v1.x private key file.

    Accepts `Modulus` as well as `Modules` and ignores fields it does not use, such as BIND's timing metadata.
    For ECDSA keys the public point is recomputed from the scalar.

    Args:
        text: The file contents.

    Returns:
        A tuple of (algorithm number, private key).

    Raises:
        PrivateKeyFormatError: If the text is malformed or not a v1.x private key.
        UnsupportedAlgorithm: If keys of the stated algorithm are not supported.
    """
    fields = _parse_fields(text)
    version = fields.get("Private-key-format", "")
    if not version.startswith("v1."):
        raise PrivateKeyFormatError(f"Unsupported private key format {version!r}")
    try:
        algorithm = int(fields["Algorithm"].split()[0])
    except (KeyError, IndexError, ValueError):
        raise PrivateKeyFormatError("Missing or malformed Algorithm field") from None
    profile = profile_for(algorithm)
    key: PrivateKey
    match profile.family:
        case KeyFamily.RSA:
            numbers = (_field_int(fields, "Modules", "Modulus"), _field_int(fields, "PublicExponent"),
                       _field_int(fields, "PrivateExponent"), _field_int(fields, "Prime1"),
                       _field_int(fields, "Prime2"))
            try:
                key = RSAPrivKey(*numbers)
            except ValueError as exc:
                raise PrivateKeyFormatError(str(exc)) from exc
            _check_rsa_numbers(key)
        case KeyFamily.ECDSA:
            scalar = _field_int(fields, "PrivateKey")
            try:
                derived = ec.derive_private_key(scalar, profile.curve.ec_type())
            except ValueError as exc:
                raise PrivateKeyFormatError(f"Invalid {profile.curve.name} private scalar") from exc
            pubs = derived.public_key().public_numbers()
            key = ECDSAPrivKey(profile.curve, scalar, pubs.x, pubs.y)
        case _:
            typing.assert_never(profile.family)
    return algorithm, key
