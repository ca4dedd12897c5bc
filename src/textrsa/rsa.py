"""Provides core RSA functionalities, such as key generation, encryption, decryption, signing and verification.

Facilitates "textbook" RSA: integer messages are exponentiated as they are, while octet strings and text are block
padded and marshalled to an integer representative first. Signing is the private-exponent trapdoor applied to the
message itself, verification recovers the message with the public exponent. There is no hashing and no randomised
padding involved, so none of this is fit to protect real data.

Typical usage example:

    pk = generate(1024)
    c = pk.public_view().encrypt("Hi there!")
    r = pk.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import dataclasses
import logging
import random
from typing import Callable
import warnings

from textrsa import keygen
from textrsa.codec import bytes_to_integer
from textrsa.codec import integer_to_bytes
from textrsa.codec import text_to_bytes
from textrsa.errors import MissingKeyPartError
from textrsa.errors import ModulusOverflowError
from textrsa.errors import PaddingError
from textrsa.padding import pad
from textrsa.padding import unpad

logger = logging.getLogger(__name__)

DEFAULT_BITS: int = 1024
SECURE_BITS: int = 1024

Message = int | bytes | str


@dataclasses.dataclass(frozen=True)
class RSAKey:
    """An immutable RSA key, either a full key pair or a public-only key.

    Attributes:
        bits: The declared bit length the key was generated for. Informational only.
        n: The modulus of the keypair.
        e: The public exponent. None if the key cannot encrypt or verify.
        d: The private exponent. None for a public-only key.
    """
    bits: int
    n: int
    e: int | None = None
    d: int | None = dataclasses.field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.n <= 0:
            raise ValueError("Modulus must be positive.")
        if self.e is None and self.d is None:
            raise MissingKeyPartError("A key needs at least one of the public and private exponents.")

    @property
    def bsize(self) -> int:
        """Byte length of the modulus, also the fixed length of every ciphertext and signature."""
        return (self.n.bit_length() + 7) // 8

    @property
    def is_private(self) -> bool:
        return self.d is not None

    def public_view(self) -> "RSAKey":
        return public_view(self)

    def encrypt(self, message: Message) -> int | bytes:
        return encrypt(self, message)

    def decrypt(self, ciphertext: Message, strict: bool = False) -> int | bytes:
        return decrypt(self, ciphertext, strict)

    def sign(self, message: Message) -> int | bytes:
        return sign(self, message)

    def verify(self, signature: Message, strict: bool = False) -> int | bytes:
        return verify(self, signature, strict)

    def check_signature(self, message: Message, signature: Message, strict: bool = False) -> bool:
        return check_signature(self, message, signature, strict)


def generate_from_primes(bit_length: int, p: int, q: int, exponent_hint: int | None = None) -> RSAKey:
    """Derives a full key pair from two primes.

    The primes are taken at face value, their primality is the caller's responsibility.

    Args:
        bit_length: The bit length to record in the key.
        p: Private Prime 1.
        q: Private Prime 2, distinct from `p`.
        exponent_hint: Optional starting candidate for the public exponent. See `keygen.select_exponent`.

    Returns:
        The key pair.

    Raises:
        KeyGenerationError: If no public exponent coprime to the totient exists for these primes.
    """
    n = p * q
    phi = (p - 1) * (q - 1)
    e = keygen.select_exponent(phi, exponent_hint)
    d = pow(e, -1, phi)
    return RSAKey(bits=bit_length, n=n, e=e, d=d)


def generate(bit_length: int = DEFAULT_BITS,
             rng: random.Random | None = None,
             exponent_hint: int | None = None) -> RSAKey:
    """Generates an RSA key pair from two fresh random primes.

    Both primes are drawn from `[2**(bit_length - 1), 2**bit_length)`, so the modulus is about twice `bit_length`.

    Args:
        bit_length: The bit length of each prime. Defaults to 1024.
        rng: Generator used for the prime search, e.g. a seeded `random.Random` for reproducible keys.
            Defaults to the system random source.
        exponent_hint: Optional starting candidate for the public exponent. See `keygen.select_exponent`.

    Returns:
        A new generated key pair.

    Raises:
        ValueError: If `bit_length` is smaller than 2.
        KeyGenerationError: If the range does not hold two usable primes.
    """
    if bit_length < 2:
        raise ValueError("Bit length must be at least 2.")
    if bit_length < SECURE_BITS:
        warnings.warn(f"{bit_length}-bit keys are unsecure! Please use with care.", RuntimeWarning)
    lo = max(3, 1 << (bit_length - 1))
    hi = 1 << bit_length
    logger.debug("Generating %d-bit key pair.", bit_length)
    p = keygen.random_prime(lo, hi, rng)
    q = keygen.random_prime_distinct_from(lo, hi, p, rng)
    return generate_from_primes(bit_length, p, q, exponent_hint)


def public_view(key: RSAKey) -> RSAKey:
    """Returns the distributable public key, without the private exponent."""
    return RSAKey(bits=key.bits, n=key.n, e=key.e)


def _check_range(key: RSAKey, rep: int) -> None:
    if not 0 <= rep < key.n:
        raise ModulusOverflowError("Message representative must be in range [0, n-1]")


def _public_exponent(key: RSAKey) -> int:
    if key.e is None:
        raise MissingKeyPartError("The key carries no public exponent.")
    return key.e


def _private_exponent(key: RSAKey) -> int:
    if key.d is None:
        raise MissingKeyPartError("The key carries no private exponent.")
    return key.d


def raw_encrypt(key: RSAKey, message: int) -> int:
    """Performs the public RSA primitive. (Encrypt/Verify)

    Args:
        key: Key carrying the public exponent.
        message: The int-marshalled message.

    Returns:
        `message**e mod n`.

    Raises:
        ModulusOverflowError: If the message is out of range for the key.
        MissingKeyPartError: If the key has no public exponent.
    """
    _check_range(key, message)
    return pow(message, _public_exponent(key), key.n)


def raw_decrypt(key: RSAKey, ciphertext: int) -> int:
    """Performs the private RSA primitive. (Decrypt/Sign)

    Args:
        key: Key carrying the private exponent.
        ciphertext: The int-marshalled ciphertext.

    Returns:
        `ciphertext**d mod n`.

    Raises:
        ModulusOverflowError: If the ciphertext is out of range for the key.
        MissingKeyPartError: If the key has no private exponent.
    """
    _check_range(key, ciphertext)
    return pow(ciphertext, _private_exponent(key), key.n)


def _seal(key: RSAKey, message: Message, primitive: Callable[[RSAKey, int], int]) -> int | bytes:
    """Pad, marshal and exponentiate. Octet output is expanded to the modulus length."""
    match message:
        case bool():
            raise TypeError("Booleans are not valid messages.")
        case int():
            return primitive(key, message)
        case str():
            return _seal(key, text_to_bytes(message), primitive)
        case bytes() | bytearray() | memoryview():
            rep = bytes_to_integer(pad(bytes(message)))
            return integer_to_bytes(primitive(key, rep), key.bsize)
        case _:
            raise TypeError(f"Unsupported message type: {type(message).__name__}")


def _open(key: RSAKey, message: Message, primitive: Callable[[RSAKey, int], int], strict: bool) -> int | bytes:
    """Exponentiate, unmarshal and unpad. Leading zero bytes of the original octet string do not survive."""
    match message:
        case bool():
            raise TypeError("Booleans are not valid messages.")
        case int():
            return primitive(key, message)
        case str():
            return _open(key, text_to_bytes(message), primitive, strict)
        case bytes() | bytearray() | memoryview():
            rep = primitive(key, bytes_to_integer(message))
            return unpad(integer_to_bytes(rep), strict)
        case _:
            raise TypeError(f"Unsupported message type: {type(message).__name__}")


def encrypt(key: RSAKey, message: Message) -> int | bytes:
    """Use the public key to encrypt the message.

    Args:
        key: Key carrying the public exponent.
        message: An integer below the modulus, or an octet string or text whose padded form fits below the modulus.

    Returns:
        The ciphertext as integer for integer messages, otherwise as octet string of `key.bsize` bytes.

    Raises:
        MissingKeyPartError: If the key has no public exponent.
        ModulusOverflowError: If the (padded) message does not fit below the modulus.
    """
    _public_exponent(key)
    return _seal(key, message, raw_encrypt)


def decrypt(key: RSAKey, ciphertext: Message, strict: bool = False) -> int | bytes:
    """Decrypts the ciphertext using the private key.

    Args:
        key: Key carrying the private exponent.
        ciphertext: Integer ciphertext, or octet string ciphertext as produced by `encrypt`.
        strict: Whether every padding byte is validated. Defaults to False.

    Returns:
        The cleartext, integer for integer ciphertexts and octet string otherwise.

    Raises:
        MissingKeyPartError: If the key has no private exponent.
        ModulusOverflowError: If the ciphertext is not below the modulus.
        PaddingError: If the recovered cleartext is not padded correctly.
    """
    _private_exponent(key)
    return _open(key, ciphertext, raw_decrypt, strict)


def sign(key: RSAKey, message: Message) -> int | bytes:
    """Signs the message using the private key.

    Same pipeline as `encrypt`, but with the private exponent.

    Args:
        key: Key carrying the private exponent.
        message: An integer below the modulus, or an octet string or text whose padded form fits below the modulus.

    Returns:
        The signature as integer for integer messages, otherwise as octet string of `key.bsize` bytes.

    Raises:
        MissingKeyPartError: If the key has no private exponent.
        ModulusOverflowError: If the (padded) message does not fit below the modulus.
    """
    _private_exponent(key)
    return _seal(key, message, raw_decrypt)


def verify(key: RSAKey, signature: Message, strict: bool = False) -> int | bytes:
    """Recovers the signed message from its signature using the public key.

    Args:
        key: Key carrying the public exponent.
        signature: Integer or octet string signature as produced by `sign`.
        strict: Whether every padding byte is validated. Defaults to False.

    Returns:
        The recovered message, integer for integer signatures and octet string otherwise.

    Raises:
        MissingKeyPartError: If the key has no public exponent.
        ModulusOverflowError: If the signature is not below the modulus.
        PaddingError: If the recovered message is not padded correctly.
    """
    _public_exponent(key)
    return _open(key, signature, raw_encrypt, strict)


def check_signature(key: RSAKey, message: Message, signature: Message, strict: bool = False) -> bool:
    """Verify the signature of the message.

    Args:
        key: Key carrying the public exponent.
        message: The message the signature should belong to. Text is compared by its UTF-8 encoding.
        signature: The signature to check.
        strict: Whether every padding byte is validated. Defaults to False.

    Returns:
        True if the signature recovers exactly `message`, False otherwise.

    Raises:
        MissingKeyPartError: If the key has no public exponent.
    """
    try:
        recovered = verify(key, signature, strict)
    except (PaddingError, ModulusOverflowError):
        return False
    if isinstance(message, str):
        message = text_to_bytes(message)
    if isinstance(recovered, int) != isinstance(message, int):
        return False
    return recovered == message
