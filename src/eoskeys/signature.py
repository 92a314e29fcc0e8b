"""
SIG_K1 recoverable signatures: 65-byte binary packing and the checksummed
Base58 text form.

Text layout (after the ``SIG_K1_`` prefix, Base58 of 69 bytes)::

    [0]      legacy byte = recovery_id + 31
    [1:65]   r || s, 32 bytes each, big-endian
    [65:69]  ripemd160([0:65] || b"K1")[:4]

The binary form is bytes [0:65] of the above, without checksum.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ecdsa.util import sigencode_der

from .curves import secp256k1
from .encoding import b58decode, b58encode
from .errors import (
    BadChecksum,
    InvalidLength,
    InvalidPrefix,
    InvalidRecoveryId,
    InvalidSignatureBytes,
)
from .hashes import ripemd160

logger = logging.getLogger(__name__)

SIG_PREFIX = "SIG_K1_"
CURVE_TAG = b"K1"
# 27 + 4: compressed-key flag on top of the historical v offset
LEGACY_OFFSET = 31
COMPACT_LEN = 64
SERIALIZED_LEN = 1 + COMPACT_LEN
CHECKSUM_LEN = 4
PAYLOAD_LEN = SERIALIZED_LEN + CHECKSUM_LEN


@dataclass(frozen=True)
class StandardSignature:
    """ECDSA (r, s) with the recovery id dropped."""

    r: int
    s: int

    def serialize_compact(self) -> bytes:
        return secp256k1.serialize_compact(self.r, self.s)

    def serialize_der(self) -> bytes:
        """Strict DER: SEQUENCE { INTEGER r, INTEGER s }."""
        return sigencode_der(self.r, self.s, secp256k1.N)


@dataclass(frozen=True)
class Signature:
    """
    Recoverable secp256k1 signature.

    Construction validates everything, so any instance can be serialized
    without failure.

    Attributes:
        recovery_id: 0..3, selects the public key candidate on recovery.
        compact: 64 bytes r || s.
    """

    recovery_id: int
    compact: bytes

    def __post_init__(self) -> None:
        compact = bytes(self.compact)
        if len(compact) != COMPACT_LEN:
            raise InvalidLength(COMPACT_LEN, len(compact))
        if (
            not isinstance(self.recovery_id, int)
            or isinstance(self.recovery_id, bool)
            or self.recovery_id not in (0, 1, 2, 3)
        ):
            raise InvalidRecoveryId(self.recovery_id)
        try:
            secp256k1.parse_compact(compact)
        except ValueError as exc:
            raise InvalidSignatureBytes(str(exc)) from exc
        object.__setattr__(self, "compact", compact)

    @classmethod
    def from_recoverable(cls, r: int, s: int, recovery_id: int) -> Signature:
        """Build from the (r, s, recid) triple returned by the curve module."""
        try:
            compact = secp256k1.serialize_compact(r, s)
        except OverflowError as exc:
            raise InvalidSignatureBytes("r and s must fit in 32 bytes") from exc
        return cls(recovery_id, compact)

    @classmethod
    def from_compact(cls, data: bytes) -> Signature:
        return signature_from_compact(data)

    @classmethod
    def parse(cls, text: str) -> Signature:
        return parse_signature(text)

    @property
    def r(self) -> int:
        return int.from_bytes(self.compact[:32], "big")

    @property
    def s(self) -> int:
        return int.from_bytes(self.compact[32:], "big")

    @property
    def legacy_byte(self) -> int:
        return self.recovery_id + LEGACY_OFFSET

    def serialize_compact(self) -> bytes:
        return serialize_compact(self)

    def is_canonical(self) -> bool:
        return is_canonical(self)

    def to_standard(self) -> StandardSignature:
        return to_standard(self)

    def __str__(self) -> str:
        return format_signature(self)


def serialize_compact(sig: Signature) -> bytes:
    """
    65-byte binary form: legacy byte followed by r || s.

    Args:
        sig: Signature to pack.

    Returns:
        65 bytes.
    """
    return bytes([sig.legacy_byte]) + sig.compact


def signature_from_compact(data: bytes) -> Signature:
    """
    Unpack the 65-byte binary form.

    Byte 0 is read as a legacy byte (id + 31) when it is >= 31 and as a raw
    recovery id otherwise. 27..30 are therefore not accepted as legacy bytes.

    Args:
        data: 65 bytes.

    Returns:
        Signature.
    """
    if len(data) != SERIALIZED_LEN:
        logger.debug("binary signature rejected: %d bytes", len(data))
        raise InvalidLength(SERIALIZED_LEN, len(data))
    header = data[0]
    recovery_id = header - LEGACY_OFFSET if header >= LEGACY_OFFSET else header
    return Signature(recovery_id, bytes(data[1:]))


def _checksum(packed: bytes) -> int:
    return int.from_bytes(ripemd160(packed + CURVE_TAG)[:CHECKSUM_LEN], "little")


def parse_signature(text: str) -> Signature:
    """
    Parse ``SIG_K1_<base58>`` text.

    Args:
        text: Signature string.

    Returns:
        Signature.

    Raises:
        InvalidPrefix, BadBase58, InvalidLength, BadChecksum, InvalidRecoveryId,
        InvalidSignatureBytes.
    """
    if not isinstance(text, str) or not text.startswith(SIG_PREFIX):
        logger.debug("signature text rejected: missing %s prefix", SIG_PREFIX)
        raise InvalidPrefix(f"signature must start with {SIG_PREFIX}")
    raw = b58decode(text[len(SIG_PREFIX) :])
    if len(raw) != PAYLOAD_LEN:
        logger.debug("signature text rejected: payload is %d bytes", len(raw))
        raise InvalidLength(PAYLOAD_LEN, len(raw))
    packed = raw[:SERIALIZED_LEN]
    actual = int.from_bytes(raw[SERIALIZED_LEN:], "little")
    expected = _checksum(packed)
    if expected != actual:
        logger.debug("signature text rejected: checksum mismatch")
        raise BadChecksum(expected, actual)
    return Signature(packed[0] - LEGACY_OFFSET, packed[1:])


def format_signature(sig: Signature) -> str:
    """
    Render as ``SIG_K1_<base58>``; inverse of parse_signature.

    Args:
        sig: Signature to render.

    Returns:
        Signature string.
    """
    packed = serialize_compact(sig)
    checksum = _checksum(packed).to_bytes(CHECKSUM_LEN, "little")
    return SIG_PREFIX + b58encode(packed + checksum)


def is_canonical(sig: Signature) -> bool:
    """True iff s is in low-s form."""
    return secp256k1.is_low_s(sig.s)


def to_standard(sig: Signature) -> StandardSignature:
    return StandardSignature(sig.r, sig.s)


__all__: tuple[str, ...] = (
    "CURVE_TAG",
    "LEGACY_OFFSET",
    "SIG_PREFIX",
    "Signature",
    "StandardSignature",
    "format_signature",
    "is_canonical",
    "parse_signature",
    "serialize_compact",
    "signature_from_compact",
    "to_standard",
)
