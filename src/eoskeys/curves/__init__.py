"""Elliptic-curve crypto: secp256k1 (the K1 curve)."""

from .secp256k1 import (
    is_low_s,
    normalize_s,
    parse_compact,
    privkey_to_pubkey,
    recover_pubkey,
    sign_recoverable,
)

__all__: tuple[str, ...] = (
    "is_low_s",
    "normalize_s",
    "parse_compact",
    "privkey_to_pubkey",
    "recover_pubkey",
    "sign_recoverable",
)
