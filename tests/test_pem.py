# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import os
import stat

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
import pytest

from dnskeygen import pem


def assert_armoured(text: str) -> None:
    lines = text.splitlines()
    assert lines[0] == pem.PEM_HEADER
    assert lines[-1] == pem.PEM_FOOTER
    assert all(len(line) <= 64 for line in lines[1:-1])


def test_rsa_pem(rsa_key, crypto_rsa):
    text = pem.private_key_pem(rsa_key)
    assert_armoured(text)
    loaded = serialization.load_pem_private_key(text.encode("ascii"), None)
    assert loaded.private_numbers() == crypto_rsa.private_numbers()


def test_ecdsa_pem(ec_key, crypto_ec):
    text = pem.private_key_pem(ec_key)
    assert_armoured(text)
    loaded = serialization.load_pem_private_key(text.encode("ascii"), None)
    assert isinstance(loaded, ec.EllipticCurvePrivateKey)
    assert isinstance(loaded.curve, ec.SECP256R1)
    assert loaded.private_numbers() == crypto_ec.private_numbers()


def test_encode_pem_empty():
    assert pem.encode_pem(b"") == pem.PEM_HEADER + "\n" + pem.PEM_FOOTER + "\n"


def test_unsupported_key_type():
    with pytest.raises(TypeError):
        pem.private_key_pem("not a key")


@pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
def test_write_secret_file(tmp_path):
    target = tmp_path / "secret.pem"
    pem.write_secret_file(target, "data\n")
    assert target.read_text(encoding="ascii") == "data\n"
    assert stat.S_IMODE(target.stat().st_mode) == 0o600
    pem.write_secret_file(target, "new\n")
    assert target.read_text(encoding="ascii") == "new\n"


@pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
def test_write_secret_file_tightens_existing(tmp_path):
    target = tmp_path / "K.private"
    target.write_text("old\n", encoding="ascii")
    target.chmod(0o644)
    pem.write_secret_file(target, "secret\n")
    assert target.read_text(encoding="ascii") == "secret\n"
    assert stat.S_IMODE(target.stat().st_mode) == 0o600
