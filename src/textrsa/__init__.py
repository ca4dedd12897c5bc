"""Textbook RSA Utilities in an Academic Sense.

Provides key generation from random or supplied primes, Encryption, Decryption, Signing and Verification of integers,
octet strings and text, using a fixed block padding for the latter two. Furthermore, provides the prime-generation
utilities used under-the-hood.

Typical usage example:

    pk = generate(1024)
    c = pk.public_view().encrypt("Hi there!")
    r = pk.decrypt(c)
    s = sign(pk, b"Signed")
    check_signature(public_view(pk), b"Signed", s)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from textrsa.codec import bytes_to_integer
from textrsa.codec import integer_to_bytes
from textrsa.codec import text_to_bytes
from textrsa.errors import EnvelopeError
from textrsa.errors import KeyGenerationError
from textrsa.errors import MissingKeyPartError
from textrsa.errors import ModulusOverflowError
from textrsa.errors import PaddingError
from textrsa.errors import RSAError
from textrsa.keygen import check_prime
from textrsa.keygen import random_prime
from textrsa.keygen import random_prime_distinct_from
from textrsa.padding import pad
from textrsa.padding import unpad
from textrsa.rsa import check_signature
from textrsa.rsa import decrypt
from textrsa.rsa import encrypt
from textrsa.rsa import generate
from textrsa.rsa import generate_from_primes
from textrsa.rsa import public_view
from textrsa.rsa import raw_decrypt
from textrsa.rsa import raw_encrypt
from textrsa.rsa import RSAKey
from textrsa.rsa import sign
from textrsa.rsa import verify

__version__ = "0.1.0"
__all__ = [
    "RSAKey",
    "generate",
    "generate_from_primes",
    "public_view",
    "encrypt",
    "decrypt",
    "sign",
    "verify",
    "check_signature",
    "raw_encrypt",
    "raw_decrypt",
    "pad",
    "unpad",
    "bytes_to_integer",
    "integer_to_bytes",
    "text_to_bytes",
    "check_prime",
    "random_prime",
    "random_prime_distinct_from",
    "RSAError",
    "KeyGenerationError",
    "MissingKeyPartError",
    "ModulusOverflowError",
    "PaddingError",
    "EnvelopeError",
]
