"""Marshalling between text, bytes and the integers RSA operates on.

Text is UTF-8 encoded and the bytes read as one big-endian unsigned integer, most significant byte first.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsasteps.errors import MalformedText


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an integer in accordance to preset procedures.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int) -> bytes:
    """Converts an integer to a fixed-length big-endian byte string.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string.

    Returns:
        The representative bytes. (AKA Octet String)
    """
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def text_to_integer(text: str) -> int:
    """Encodes text as the integer whose base-256 digits are its UTF-8 bytes.

    Args:
        text: The plaintext.

    Returns:
        The non-negative representative integer. Empty text gives 0.
    """
    return bytes_to_integer(text.encode("utf-8"))


def integer_to_text(value: int) -> str:
    """Decodes an integer produced by `text_to_integer` back into text.

    Uses the shortest whole-byte representation, never less than one byte, so 0 decodes to a single NUL character.
    Leading NUL characters of the original text therefore do not survive the round trip.

    Args:
        value: The non-negative representative integer.

    Returns:
        The decoded text.

    Raises:
        ValueError: If `value` is negative.
        MalformedText: If the bytes are not valid UTF-8.
    """
    if value < 0:
        raise ValueError("Only non-negative integers represent text.")
    raw = integer_to_bytes(value, max(1, (value.bit_length() + 7) // 8))
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as err:
        raise MalformedText(f"Integer {value} does not decode to UTF-8 text: {err.reason}.") from err
