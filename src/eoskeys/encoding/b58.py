"""
Base58 (Bitcoin alphabet, no embedded checksum), bound to the base58 package.
"""

from __future__ import annotations

import base58

from ..errors import BadBase58


def b58encode(data: bytes) -> str:
    """
    Encode raw bytes as Base58 text.

    Args:
        data: Bytes to encode; leading zero bytes become leading '1's.

    Returns:
        ASCII Base58 string.
    """
    return base58.b58encode(data).decode("ascii")


def b58decode(text: str) -> bytes:
    """
    Decode Base58 text to raw bytes.

    Args:
        text: Base58 string (Bitcoin alphabet).

    Returns:
        Decoded bytes.

    Raises:
        BadBase58: text holds a character outside the alphabet, whitespace
            included.
    """
    # base58 silently strips trailing whitespace
    if text != text.rstrip():
        raise BadBase58("trailing whitespace in Base58 text")
    try:
        return base58.b58decode(text)
    except ValueError as exc:
        # UnicodeEncodeError is a ValueError too
        raise BadBase58(str(exc)) from exc


__all__: tuple[str, ...] = ("b58decode", "b58encode")
