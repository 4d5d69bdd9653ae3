#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
BigIntCodec - byte-level encodings shared by every SRP derivation.

The identity service treats big integers as signed, big-endian byte strings.
get_padded_hex() reproduces that encoding exactly; a single nibble of
difference yields a hash that is wrong but looks perfectly plausible.
"""

import base64
import binascii
import re

from cognitosrp.crypto.Errors import InvalidInputError

_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_HIGH_NIBBLE_RE = re.compile(r"^[89a-fA-F]")


def get_padded_hex(value: int) -> str:
    """
    Encode value as the minimal signed (two's complement) big-endian hex.

    Rules:
        * hex of |value|, left-padded with "0" to an even digit count
        * "00" prefixed when the top bit of the first byte would be set
        * negative values: complement every nibble, add one, and drop a
          redundant leading "ff" when the result starts with "ff8"

    Returns:
        str: lower-case hex, always an even number of digits.
    """
    hex_str = format(abs(value), "x")
    if len(hex_str) % 2:
        hex_str = "0" + hex_str
    if _HIGH_NIBBLE_RE.match(hex_str):
        hex_str = "00" + hex_str

    if value < 0:
        inverted = "".join(format(~int(nibble, 16) & 0xF, "x") for nibble in hex_str)
        hex_str = format(int(inverted, 16) + 1, "x")

        if hex_str.lower().startswith("ff8"):
            hex_str = hex_str[2:]

    return hex_str


def padded_bytes(value: int) -> bytes:
    """Byte form of get_padded_hex()."""
    return bytes.fromhex(get_padded_hex(value))


def hex_to_bytes(encoded: str) -> bytes:
    """
    Decode an even-length hex string.

    Raises:
        InvalidInputError: on odd length or non-hex characters.
    """
    if not isinstance(encoded, str) or not encoded or len(encoded) % 2 or not _HEX_RE.fullmatch(encoded):
        raise InvalidInputError(f"Invalid hex string: {encoded!r}")
    return bytes.fromhex(encoded)


def parse_hex_int(encoded: str, name: str = "value") -> int:
    """
    Parse a non-negative integer transmitted as hex.

    Multi-digit values must be byte aligned (even length); a single digit
    is accepted as a bare numeral.

    Raises:
        InvalidInputError: on empty, non-hex or odd-length multi-digit input.
    """
    if not isinstance(encoded, str) or not _HEX_RE.fullmatch(encoded):
        raise InvalidInputError(f"{name} is not a hex string: {encoded!r}")
    if len(encoded) > 1 and len(encoded) % 2:
        raise InvalidInputError(f"{name} has an odd number of hex digits ({len(encoded)})")
    return int(encoded, 16)


def url_b64_decode(encoded: str) -> bytes:
    """
    Decode URL-safe Base64, restoring stripped "=" padding.

    Standard alphabet input ("+", "/") decodes unchanged.

    Raises:
        InvalidInputError: on characters outside either alphabet or an
            impossible length.
    """
    if not isinstance(encoded, str):
        raise InvalidInputError(f"Base64 value must be a string, got {type(encoded).__name__}")

    padding = "=" * ((4 - len(encoded) % 4) % 4)
    standard = (encoded + padding).replace("-", "+").replace("_", "/")

    try:
        return base64.b64decode(standard, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"Invalid Base64 value: {e}") from e


def b64_encode(data: bytes) -> str:
    """Standard Base64 with padding, as ASCII text."""
    return base64.b64encode(data).decode("ascii")
