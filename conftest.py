"""Configures pytest further."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random

from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

_PRIME_CACHE: dict[int, tuple[int, int]] = {}


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme value extremely slow tests")


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: slower tests, skipped by --skip-slow")
    config.addinivalue_line("markers", "extreme: extremely slow tests, only run with --run-extreme")


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


def rsa_primes(size: int) -> tuple[int, int]:
    """Realistic prime pair of a `size` bit modulus, generated once per session by the cryptography package."""
    if size not in _PRIME_CACHE:
        numbers = rsa.generate_private_key(public_exponent=65537, key_size=size).private_numbers()
        _PRIME_CACHE[size] = (numbers.p, numbers.q)
    return _PRIME_CACHE[size]


@pytest.fixture(scope="session")
def primes_1024() -> tuple[int, int]:
    return rsa_primes(1024)


@pytest.fixture(scope="session")
def primes_2048() -> tuple[int, int]:
    return rsa_primes(2048)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(20250917)
