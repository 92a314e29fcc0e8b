"""
RIPEMD-160 (160-bit digest), bound to pycryptodomex.

hashlib only exposes ripemd160 when the linked OpenSSL still ships its legacy
provider, so the digest comes from Cryptodome instead.
"""

from __future__ import annotations

from Cryptodome.Hash import RIPEMD160


def ripemd160(data: bytes) -> bytes:
    """
    RIPEMD-160 hash.

    Args:
        data: Input bytes (any length).

    Returns:
        20-byte digest.
    """
    return RIPEMD160.new(data).digest()


__all__: tuple[str, ...] = ("ripemd160",)
