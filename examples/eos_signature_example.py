#!/usr/bin/env python3
"""Example: sign a digest, render it as SIG_K1 text, parse it back, recover the signer."""

import hashlib

from eoskeys import (
    Signature,
    parse_signature,
    privkey_to_pubkey,
    recover_pubkey,
    sign_recoverable,
)

privkey = bytes(31) + bytes([1])
pubkey = privkey_to_pubkey(privkey)
print("Public key (65 bytes uncompressed):", pubkey.hex()[:32] + "...")

digest = hashlib.sha256(b"Hello, EOS").digest()
print("Digest (SHA-256):", digest.hex()[:32] + "...")

sig = Signature.from_recoverable(*sign_recoverable(privkey, digest))
text = str(sig)
print("Signature:", text)
print("Binary (65 bytes):", sig.serialize_compact().hex()[:32] + "...")
print("Canonical:", sig.is_canonical())

parsed = parse_signature(text)
recovered = recover_pubkey(digest, parsed.r, parsed.s, parsed.recovery_id)
print("Recovered signer matches:", recovered == pubkey)
