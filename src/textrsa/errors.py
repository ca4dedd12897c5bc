"""Exceptions raised by textrsa.

Every error raised on purpose by the library derives from `RSAError`, and additionally from the builtin exception a
caller would otherwise expect for the same misuse, so `except ValueError` keeps working for range and padding faults.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSAError(Exception):
    """Base class for textrsa errors."""


class KeyGenerationError(RSAError, RuntimeError):
    """No usable key could be derived, e.g. no exponent coprime to the totient or no prime in range."""


class MissingKeyPartError(RSAError):
    """The operation needs a key half (public or private exponent) that the key does not carry."""


class ModulusOverflowError(RSAError, ValueError):
    """Message or ciphertext representative is not in range [0, n-1]."""


class PaddingError(RSAError, ValueError):
    """Trailing block padding is malformed."""


class EnvelopeError(RSAError, ValueError):
    """Transport envelope could not be decoded or carries an unexpected algorithm."""
