# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import contextlib
import dataclasses
import random

import pytest
import sympy

import textrsa
import textrsa.rsa as rsau
from textrsa.errors import KeyGenerationError
from textrsa.errors import MissingKeyPartError
from textrsa.errors import ModulusOverflowError

standard_payload = "The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()-_=+[{}];:\\|<>,./?~`'\""
payloads = [
    b"",
    b"Quick!",
    b"12345678",
    b"\xff" * 64,
    standard_payload.encode("utf-8"),
    bytes(range(1, 120)),
]


@pytest.fixture(scope="module")
def toy_key() -> rsau.RSAKey:
    return rsau.generate_from_primes(12, 61, 53, 17)


@pytest.fixture(scope="module")
def keypair(primes_1024) -> rsau.RSAKey:
    return rsau.generate_from_primes(512, *primes_1024)


@pytest.fixture(scope="module")
def other_keypair(primes_2048) -> rsau.RSAKey:
    return rsau.generate_from_primes(1024, *primes_2048)


def test_generate_from_primes_concrete(toy_key):
    assert toy_key.bits == 12
    assert toy_key.n == 3233
    assert toy_key.e == 17
    assert toy_key.d == 2753
    assert rsau.raw_encrypt(toy_key, 65) == 2790
    assert rsau.raw_decrypt(toy_key, 2790) == 65


def test_generate_from_primes_default_exponent():
    key = rsau.generate_from_primes(12, 61, 53)
    assert key.e == 7
    assert key.d == 1783


def test_generate_from_primes_realistic(primes_1024):
    p, q = primes_1024
    key = rsau.generate_from_primes(512, p, q)
    assert key.n == p * q
    assert key.e == 65537
    assert key.d == sympy.mod_inverse(65537, (p - 1) * (q - 1))


@pytest.mark.parametrize("p,q,hint", [(2, 3, None), (61, 53, 4), (61, 53, 3121)])
def test_generate_from_primes_unusable(p, q, hint):
    with pytest.raises(KeyGenerationError):
        rsau.generate_from_primes(8, p, q, hint)


@pytest.mark.parametrize("bits", [8, 16, 64, 128])
def test_generate_small(bits, seeded_rng):
    with pytest.warns(RuntimeWarning, match="unsecure"):
        key = rsau.generate(bits, seeded_rng)
    assert key.bits == bits
    assert key.is_private
    message = key.n // 3
    assert rsau.raw_decrypt(key, rsau.raw_encrypt(key, message)) == message


@pytest.mark.parametrize("bits", [512, pytest.param(1024, marks=pytest.mark.slow)])
def test_generate_primes_in_range(mocker, bits):
    spy = mocker.spy(textrsa.keygen, "random_prime_distinct_from")
    with pytest.warns(RuntimeWarning) if bits < rsau.SECURE_BITS else contextlib.nullcontext():
        key = rsau.generate(bits)
    p = spy.spy_return
    q = key.n // p
    assert p != q
    assert p * q == key.n
    for prime in (p, q):
        assert prime.bit_length() == bits
        assert sympy.isprime(prime)
    assert (key.e * key.d) % ((p - 1) * (q - 1)) == 1


def test_generate_deterministic():
    with pytest.warns(RuntimeWarning):
        first = rsau.generate(64, random.Random(1234))
        second = rsau.generate(64, random.Random(1234))
    assert first == second


def test_generate_exponent_hint(seeded_rng):
    with pytest.warns(RuntimeWarning):
        key = rsau.generate(64, seeded_rng, exponent_hint=3)
    assert key.e % 2 == 1
    assert 3 <= key.e < 65537


def test_generate_tiny_ranges(seeded_rng):
    with pytest.warns(RuntimeWarning):
        assert rsau.generate(3, seeded_rng).n == 35
    with pytest.warns(RuntimeWarning), pytest.raises(KeyGenerationError):
        rsau.generate(2, seeded_rng)
    with pytest.raises(ValueError):
        rsau.generate(1, seeded_rng)


def test_key_validates():
    with pytest.raises(MissingKeyPartError):
        rsau.RSAKey(12, 3233)
    with pytest.raises(ValueError):
        rsau.RSAKey(12, 0, 17, 2753)


def test_key_immutable(toy_key):
    with pytest.raises(dataclasses.FrozenInstanceError):
        toy_key.d = None


def test_key_repr_hides_private_exponent(keypair):
    assert str(keypair.d) not in repr(keypair)
    assert str(keypair.e) in repr(keypair)


def test_key_bsize(toy_key, keypair):
    assert toy_key.bsize == 2
    assert keypair.bsize == 128


def test_public_view(keypair):
    pub = rsau.public_view(keypair)
    assert pub.d is None
    assert not pub.is_private
    assert (pub.bits, pub.n, pub.e) == (keypair.bits, keypair.n, keypair.e)
    assert keypair.d is not None
    assert keypair.public_view() == pub
    assert pub is not keypair


@pytest.mark.parametrize("payload", payloads)
def test_encrypt_decrypt(keypair, payload):
    ciphtext = rsau.encrypt(keypair.public_view(), payload)
    assert isinstance(ciphtext, bytes)
    assert len(ciphtext) == keypair.bsize
    assert rsau.decrypt(keypair, ciphtext) == payload


def test_encrypt_decrypt_text(keypair):
    ciphtext = keypair.public_view().encrypt(standard_payload)
    cleartext = keypair.decrypt(ciphtext)
    assert isinstance(cleartext, bytes)
    assert cleartext.decode("utf-8") == standard_payload


def test_encrypt_decrypt_unicode(keypair):
    msg = "Zażółć gęślą jaźń ✓"
    assert keypair.decrypt(keypair.encrypt(msg)) == msg.encode("utf-8")


@pytest.mark.parametrize("message", [0, 1, 65, 2**200 + 17])
def test_encrypt_decrypt_integer(keypair, message):
    ciphtext = rsau.encrypt(keypair, message)
    assert isinstance(ciphtext, int)
    assert rsau.decrypt(keypair, ciphtext) == message


def test_encrypt_decrypt_bytes_like(keypair):
    ciphtext = rsau.encrypt(keypair, bytearray(b"bytearray"))
    assert rsau.decrypt(keypair, memoryview(ciphtext)) == b"bytearray"


def test_encrypt_is_deterministic(keypair):
    assert rsau.encrypt(keypair, b"same") == rsau.encrypt(keypair, b"same")


def test_decrypt_drops_leading_zeros(keypair):
    assert rsau.decrypt(keypair, rsau.encrypt(keypair, b"\x00\x00abc")) == b"abc"


def test_decrypt_strict(keypair):
    ciphtext = rsau.encrypt(keypair, b"abc")
    assert rsau.decrypt(keypair, ciphtext, strict=True) == b"abc"
    forged = textrsa.integer_to_bytes(rsau.raw_encrypt(keypair, textrsa.bytes_to_integer(b"abcde\x01\x02\x03")))
    assert rsau.decrypt(keypair, forged) == b"abcde"
    with pytest.raises(textrsa.PaddingError):
        rsau.decrypt(keypair, forged, strict=True)


def test_decrypt_bad_padding(keypair):
    forged = textrsa.integer_to_bytes(rsau.raw_encrypt(keypair, textrsa.bytes_to_integer(b"abc\x00")))
    with pytest.raises(textrsa.PaddingError):
        rsau.decrypt(keypair, forged)


@pytest.mark.parametrize("payload", payloads + [standard_payload, 0, 123456789])
def test_sign_verify(keypair, payload):
    signature = rsau.sign(keypair, payload)
    pub = keypair.public_view()
    expected = payload.encode("utf-8") if isinstance(payload, str) else payload
    assert rsau.verify(pub, signature) == expected
    assert rsau.check_signature(pub, payload, signature)


def test_sign_is_private_exponentiation(toy_key):
    assert rsau.sign(toy_key, 2790) == 65
    assert rsau.verify(toy_key, 65) == 2790
    assert rsau.sign(toy_key, 65) == pow(65, 2753, 3233)


def test_check_signature_mismatch(keypair):
    pub = keypair.public_view()
    signature = keypair.sign(standard_payload)
    assert pub.check_signature(standard_payload, signature)
    assert not pub.check_signature("NONSTANDARDPAYLOAD", signature)
    assert not pub.check_signature(standard_payload.encode("utf-8")[:-1], signature)


def test_check_signature_tampered(keypair):
    pub = keypair.public_view()
    signature = bytearray(keypair.sign(b"Signed message"))
    for idx in (0, len(signature) // 2, len(signature) - 1):
        tampered = bytearray(signature)
        tampered[idx] ^= 0x5A
        assert not pub.check_signature(b"Signed message", bytes(tampered))


def test_check_signature_wrong_key(keypair, other_keypair):
    signature = other_keypair.sign(b"Signed message")
    assert not keypair.check_signature(b"Signed message", signature)
    assert not other_keypair.check_signature(b"Signed message", keypair.sign(b"Signed message"))


def test_check_signature_representations(keypair):
    assert not keypair.check_signature(65, keypair.sign(b"A"))
    assert not keypair.check_signature(b"A", keypair.sign(65))
    assert not keypair.check_signature(66, keypair.sign(65))
    assert not keypair.check_signature(65, keypair.n)


def test_check_signature_needs_public_exponent(keypair):
    private_only = rsau.RSAKey(keypair.bits, keypair.n, d=keypair.d)
    with pytest.raises(MissingKeyPartError):
        private_only.check_signature(b"A", private_only.sign(b"A"))


@pytest.mark.parametrize("action", [rsau.decrypt, rsau.sign])
def test_public_key_cannot_use_private_exponent(keypair, action):
    with pytest.raises(MissingKeyPartError):
        action(keypair.public_view(), b"payload")
    with pytest.raises(MissingKeyPartError):
        action(keypair.public_view(), 42)
    with pytest.raises(MissingKeyPartError):
        rsau.raw_decrypt(keypair.public_view(), 42)


@pytest.mark.parametrize("action", [rsau.encrypt, rsau.verify])
def test_private_only_key_cannot_use_public_exponent(keypair, action):
    private_only = rsau.RSAKey(keypair.bits, keypair.n, d=keypair.d)
    with pytest.raises(MissingKeyPartError):
        action(private_only, b"payload")
    with pytest.raises(MissingKeyPartError):
        action(private_only, 42)
    with pytest.raises(MissingKeyPartError):
        rsau.raw_encrypt(private_only, 42)


@pytest.mark.parametrize("flow", [-1, 1])
def test_overflow_underflow_raw(keypair, flow):
    with pytest.raises(ModulusOverflowError):
        rsau.raw_encrypt(keypair, keypair.n * flow)
    with pytest.raises(ModulusOverflowError):
        rsau.raw_decrypt(keypair, keypair.n * flow)
    with pytest.raises(ValueError):
        rsau.raw_encrypt(keypair, keypair.n + 1)


def test_overflow_messages(toy_key, keypair):
    with pytest.raises(ModulusOverflowError):
        rsau.encrypt(toy_key, b"A")
    with pytest.raises(ModulusOverflowError):
        rsau.sign(keypair, b"A" * keypair.bsize)
    with pytest.raises(ModulusOverflowError):
        rsau.decrypt(keypair, b"\xff" * keypair.bsize)


@pytest.mark.parametrize("message", [1.5, True, None, ["a"], {"a": 1}])
def test_unsupported_messages(keypair, message):
    for action in (rsau.encrypt, rsau.decrypt, rsau.sign, rsau.verify):
        with pytest.raises(TypeError):
            action(keypair, message)


def test_public_api_exports():
    for name in textrsa.__all__:
        assert hasattr(textrsa, name)
