"""
Errors raised while decoding SIG_K1 signatures.

Everything derives from ValueError, so callers that only care about "bad input"
can keep catching that.
"""

from __future__ import annotations


class SignatureError(ValueError):
    """Base class for signature codec failures."""


class InvalidPrefix(SignatureError):
    """Text does not start with the SIG_K1_ prefix."""


class BadBase58(SignatureError):
    """Payload is not valid Base58."""


class InvalidLength(SignatureError):
    """Decoded payload or binary input has the wrong size."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class BadChecksum(SignatureError):
    """Checksum embedded in the text does not match the recomputed one."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"bad checksum: expected {expected:08x}, got {actual:08x}")
        self.expected = expected
        self.actual = actual


class InvalidRecoveryId(SignatureError):
    """Recovery id outside 0..3."""

    def __init__(self, recovery_id: int) -> None:
        super().__init__(f"invalid recovery id {recovery_id}")
        self.recovery_id = recovery_id


class UnderlyingCurveError(SignatureError):
    """The curve layer rejected the signature material."""


class InvalidSignatureBytes(UnderlyingCurveError):
    """The 64 signature bytes are not a valid (r, s) pair."""


__all__: tuple[str, ...] = (
    "BadBase58",
    "BadChecksum",
    "InvalidLength",
    "InvalidPrefix",
    "InvalidRecoveryId",
    "InvalidSignatureBytes",
    "SignatureError",
    "UnderlyingCurveError",
)
