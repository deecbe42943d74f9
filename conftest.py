"""Configures pytest further and provides shared reference keys."""
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

from dnskeygen.algorithms import P256
from dnskeygen.keys import ECDSAPrivKey
from dnskeygen.keys import RSAPrivKey


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme value extremely slow tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture(scope="session")
def crypto_rsa() -> rsa.RSAPrivateKey:
    """Reference RSA key from an independent implementation."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_key(crypto_rsa) -> RSAPrivKey:
    privs = crypto_rsa.private_numbers()
    pubs = privs.public_numbers
    return RSAPrivKey(pubs.n, pubs.e, privs.d, privs.p, privs.q)


@pytest.fixture(scope="session")
def crypto_ec() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_key(crypto_ec) -> ECDSAPrivKey:
    pubs = crypto_ec.public_key().public_numbers()
    return ECDSAPrivKey(P256, crypto_ec.private_numbers().private_value, pubs.x, pubs.y)
