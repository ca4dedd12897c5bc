"""Marshalling between integers, octet strings and text.

All conversions are big-endian and unsigned. Only a fixed-length re-expansion restores leading zero octets, as the
integer representative cannot carry them.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an integer in accordance to preset procedures.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int | None = None) -> bytes:
    """Converts an integer to a byte string.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string. Optional, if not provided the shortest representation is used,
            so 0 becomes an empty byte string.

    Returns:
        The representative bytes. (AKA Octet String)

    Raises:
        OverflowError: If `msg` does not fit into `fixedlen` bytes.
    """
    if fixedlen is None:
        fixedlen = (msg.bit_length() + 7) // 8
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def text_to_bytes(text: str) -> bytes:
    """UTF-8 encode text."""
    return text.encode("utf-8")
