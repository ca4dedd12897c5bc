"""Fixed block padding applied to octet strings before they are turned into integer representatives.

Every padded string ends with `pad_len` copies of the byte `pad_len`, where `pad_len` is in [1, BLOCK_SIZE]. A string
already aligned to the block size still receives a full block, so removal is never ambiguous. The scheme is
deterministic and offers no protection against chosen-ciphertext attacks.

Typical usage example:

    pad(b"\x01\x02\x03\x04\x05")  # b"\x01\x02\x03\x04\x05\x03\x03\x03"
    unpad(b"\x01\x02\x03\x04\x05\x03\x03\x03")  # b"\x01\x02\x03\x04\x05"
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from textrsa.errors import PaddingError

BLOCK_SIZE: int = 8


def pad(msg: bytes) -> bytes:
    """Pads the message up to the next multiple of the block size.

    Args:
        msg: The octet string to pad. May be empty.

    Returns:
        The padded octet string, always strictly longer than `msg`.
    """
    pad_len = BLOCK_SIZE - (len(msg) % BLOCK_SIZE)
    return bytes(msg) + bytes([pad_len]) * pad_len


def unpad(msg: bytes, strict: bool = False) -> bytes:
    """Removes the block padding.

    Only the final byte is consulted by default, the remaining padding bytes are dropped unchecked.

    Args:
        msg: The padded octet string.
        strict: Whether to also require every padding byte to carry the padding length. Defaults to False.

    Returns:
        The octet string without padding.

    Raises:
        PaddingError: If the padding length is outside [1, BLOCK_SIZE], or under `strict` the padding is inconsistent.
    """
    if not msg:
        raise PaddingError("Cannot unpad an empty message.")
    pad_len = msg[-1]
    if not 1 <= pad_len <= BLOCK_SIZE:
        raise PaddingError(f"Padding length {pad_len} is outside [1, {BLOCK_SIZE}].")
    if strict and (len(msg) < pad_len or any(b != pad_len for b in msg[-pad_len:])):
        raise PaddingError("Padding bytes do not match the padding length.")
    return bytes(msg[:-pad_len])
