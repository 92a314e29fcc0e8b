"""
EOSIO-style K1 signatures: SIG_K1_ text codec, 65-byte binary packing,
secp256k1 helpers. RIPEMD-160 via pycryptodomex, Base58 via base58.
"""

from .__about__ import __version__
from .curves import (
    is_low_s,
    normalize_s,
    parse_compact,
    privkey_to_pubkey,
    recover_pubkey,
    sign_recoverable,
)
from .encoding import b58decode, b58encode
from .errors import (
    BadBase58,
    BadChecksum,
    InvalidLength,
    InvalidPrefix,
    InvalidRecoveryId,
    InvalidSignatureBytes,
    SignatureError,
    UnderlyingCurveError,
)
from .hashes import ripemd160
from .signature import (
    Signature,
    StandardSignature,
    format_signature,
    is_canonical,
    parse_signature,
    serialize_compact,
    signature_from_compact,
    to_standard,
)

__all__: tuple[str, ...] = (
    # About
    "__version__",
    # Signatures: SIG_K1 codec
    "Signature",
    "StandardSignature",
    "format_signature",
    "is_canonical",
    "parse_signature",
    "serialize_compact",
    "signature_from_compact",
    "to_standard",
    # Errors
    "BadBase58",
    "BadChecksum",
    "InvalidLength",
    "InvalidPrefix",
    "InvalidRecoveryId",
    "InvalidSignatureBytes",
    "SignatureError",
    "UnderlyingCurveError",
    # Hashes
    "ripemd160",
    # Encoding
    "b58decode",
    "b58encode",
    # Curves: secp256k1
    "is_low_s",
    "normalize_s",
    "parse_compact",
    "privkey_to_pubkey",
    "recover_pubkey",
    "sign_recoverable",
)
