"""
secp256k1: compact signature parsing, low-s checks, key derivation, ECDSA sign
with recovery id, public key recovery.
"""

from __future__ import annotations

import hashlib

from ecdsa import SECP256k1, SigningKey
from ecdsa.util import sigencode_string

N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
HALF_N = N // 2

_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
_Gx = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
_Gy = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8


def _mod_inv(a: int, n: int) -> int:
    """Modular inverse via extended gcd."""
    if a < 0:
        a = (a % n + n) % n
    t, r = 0, n
    new_t, new_r = 1, a
    while new_r:
        q = r // new_r
        t, new_t = new_t, t - q * new_t
        r, new_r = new_r, r - q * new_r
    if r != 1:
        raise ValueError("no inverse")
    return t % n


def _point_add(px: int, py: int, qx: int, qy: int) -> tuple[int, int]:
    """Add two secp256k1 points in affine coords; (0,0) is identity. Returns (rx, ry)."""
    if (px, py) == (0, 0):
        return (qx, qy)
    if (qx, qy) == (0, 0):
        return (px, py)
    if px == qx:
        if py == qy:
            lam = (3 * px * px) * _mod_inv(2 * py, _P) % _P
        else:
            return (0, 0)
    else:
        lam = (qy - py) * _mod_inv(qx - px, _P) % _P
    rx = (lam * lam - px - qx) % _P
    ry = (lam * (px - rx) - py) % _P
    return (rx, ry)


def _point_mul(d: int, x: int, y: int) -> tuple[int, int]:
    """Scalar multiplication d * (x, y) on secp256k1; returns (rx, ry)."""
    d = d % N
    rx, ry = 0, 0
    while d:
        if d & 1:
            rx, ry = _point_add(rx, ry, x, y)
        x, y = _point_add(x, y, x, y)
        d >>= 1
    return (rx, ry)


def _encode_point(x: int, y: int) -> bytes:
    return bytes([0x04]) + x.to_bytes(32, "big") + y.to_bytes(32, "big")


def parse_compact(data: bytes) -> tuple[int, int]:
    """
    Split a 64-byte compact signature (r || s, big-endian) into scalars.

    Args:
        data: 64 bytes.

    Returns:
        (r, s), both in [1, n).
    """
    if len(data) != 64:
        raise ValueError("compact signature must be 64 bytes")
    r = int.from_bytes(data[:32], "big")
    s = int.from_bytes(data[32:], "big")
    if not 0 < r < N:
        raise ValueError("signature r out of range")
    if not 0 < s < N:
        raise ValueError("signature s out of range")
    return (r, s)


def serialize_compact(r: int, s: int) -> bytes:
    """64-byte r || s, big-endian."""
    return r.to_bytes(32, "big") + s.to_bytes(32, "big")


def is_low_s(s: int) -> bool:
    """True iff s is in the lower half of the group order (non-malleable form)."""
    return 0 < s <= HALF_N


def normalize_s(s: int) -> int:
    """Map s to its low-s equivalent (n - s when s > n/2)."""
    return N - s if s > HALF_N else s


def _signing_key(privkey: bytes) -> SigningKey:
    d = int.from_bytes(privkey, "big")
    if d == 0 or d >= N:
        raise ValueError("invalid privkey")
    return SigningKey.from_secret_exponent(d, curve=SECP256k1)


def privkey_to_pubkey(privkey: bytes) -> bytes:
    """
    Derive uncompressed public key (65 bytes: 0x04 || x || y) from 32-byte private key.

    Args:
        privkey: 32-byte secp256k1 private key.

    Returns:
        65-byte uncompressed public key.
    """
    if len(privkey) != 32:
        raise ValueError("privkey must be 32 bytes")
    return _signing_key(privkey).get_verifying_key().to_string("uncompressed")


def _recover_pubkey_from_sig(
    msg_hash: bytes, r: int, s: int, recid: int
) -> tuple[int, int]:
    """Recover public key from (r, s, recid). recid 0,1: x=r; recid 2,3: x=r+n; recid&1 selects y parity."""
    if recid not in (0, 1, 2, 3):
        raise ValueError("recid must be 0..3")
    if not 0 < r < N or not 0 < s < N:
        raise ValueError("r and s must be in [1, n)")
    if recid & 2:
        if r + N >= _P:
            raise ValueError("recid 2/3 but r+n >= p")
        x = r + N
    else:
        x = r
    rhs = (x * x * x + 7) % _P
    y_cand = pow(rhs, (_P + 1) // 4, _P)
    if (y_cand * y_cand) % _P != rhs:
        raise ValueError("no square root")
    if (recid & 1) != (y_cand & 1):
        y_cand = (_P - y_cand) % _P
    r_inv = _mod_inv(r, N)
    z = int.from_bytes(msg_hash, "big") % N
    u1 = (-z * r_inv) % N
    u2 = (s * r_inv) % N
    g_mul = _point_mul(u1, _Gx, _Gy)
    r_mul = _point_mul(u2, x, y_cand)
    qx, qy = _point_add(g_mul[0], g_mul[1], r_mul[0], r_mul[1])
    if (qx, qy) == (0, 0):
        raise ValueError("recovered point at infinity")
    return (qx, qy)


def recover_pubkey(msg_hash: bytes, r: int, s: int, recid: int) -> bytes:
    """
    Recover uncompressed public key (65 bytes) from ECDSA signature (msg_hash, r, s, recid).

    Args:
        msg_hash: 32-byte message hash that was signed.
        r, s: Signature components (scalars).
        recid: Recovery id (0-3) indicating which public key.

    Returns:
        65-byte uncompressed public key.
    """
    if len(msg_hash) != 32:
        raise ValueError("msg_hash must be 32 bytes")
    return _encode_point(*_recover_pubkey_from_sig(msg_hash, r, s, recid))


def sign_recoverable(privkey: bytes, msg_hash: bytes) -> tuple[int, int, int]:
    """
    ECDSA sign with recovery id; RFC 6979 nonce via python-ecdsa, s normalized to low-s.

    Args:
        privkey: 32-byte private key.
        msg_hash: 32-byte message hash to sign.

    Returns:
        (r, s, recid) with recid in 0..3.
    """
    if len(privkey) != 32 or len(msg_hash) != 32:
        raise ValueError("privkey and msg_hash must be 32 bytes")
    key = _signing_key(privkey)
    our_pub = key.get_verifying_key().to_string("uncompressed")
    sig = key.sign_digest_deterministic(
        msg_hash, hashfunc=hashlib.sha256, sigencode=sigencode_string
    )
    r, s = parse_compact(sig)
    s = normalize_s(s)
    for recid in range(4):
        try:
            rec = _recover_pubkey_from_sig(msg_hash, r, s, recid)
        except ValueError:
            continue
        if _encode_point(*rec) == our_pub:
            return (r, s, recid)
    raise ValueError("sign_recoverable: no recovery id matches our key")


__all__: tuple[str, ...] = (
    "HALF_N",
    "N",
    "is_low_s",
    "normalize_s",
    "parse_compact",
    "privkey_to_pubkey",
    "recover_pubkey",
    "serialize_compact",
    "sign_recoverable",
)
