"""Tests for the SIG_K1 text codec and the 65-byte binary form."""

from __future__ import annotations

import hashlib

import pytest

from eoskeys import (
    BadBase58,
    BadChecksum,
    InvalidLength,
    InvalidPrefix,
    InvalidRecoveryId,
    InvalidSignatureBytes,
    Signature,
    SignatureError,
    StandardSignature,
    UnderlyingCurveError,
    b58decode,
    b58encode,
    format_signature,
    is_canonical,
    parse_signature,
    ripemd160,
    serialize_compact,
    sign_recoverable,
    signature_from_compact,
    to_standard,
)
from eoskeys.curves.secp256k1 import N

SIG_VALID = (
    "SIG_K1_KBJgSuRYtHZcrWThugi4ygFabto756zuQQo8XeEpyRtBXLb9kbJtNW3xDcS14Rc14E8"
    "iHqLrdx46nenG5T7R4426Bspyzk"
)
SIG_NO_PREFIX = (
    "KomV6FEHKdtZxGDwhwSubEAcJ7VhtUQpEt5P6iDz33ic936aSXx87B2L56C8JLQkqNpp1W8ZXj"
    "rKiLHUEB4LCGeXvbtVuR"
)
SIG_VALID_R = bytes.fromhex(
    "7aae29283257ac487445248f039ec606698c8922eb74df9e4fec284a04cb100b"
)
SIG_VALID_S = bytes.fromhex(
    "5c76b3272ef1db7d3dd6848987acd9a9c3196c7a03aa211699b941a1c4ef8c10"
)
SIG_VALID_CHECKSUM = 0x6D2A3F01

# r = s = 1, one string per recovery id
R1_S1 = bytes(31) + b"\x01" + bytes(31) + b"\x01"
R1_S1_TEXT = {
    0: "SIG_K1_JuFmz3r6GzoRXehRgMdLyM9xLbBHNHTQPGA4J6LVF3Ge7o2JPKZ8uKLhRRnSEkB4XY5fhh11L8Zf2yQzsezmxXdbRLLz45",
    1: "SIG_K1_KUkKNUG8KPFF6SpLryqk4ucSKMK6fovT1XcYTztvUb9fKBCB8e2JnizL2EGeTCbi9UDiykt3sEiRh8avfuuME4YSDX24Lh",
    2: "SIG_K1_L4ErktgAMmh4fEwG3c49AU4vJ7SuyLPVdo52duTMi92gWZN3sxVUg8dxd2krff2MmQMnFpm6QLsCMHkrUAovVbTH444Ae8",
    3: "SIG_K1_LdjQ9K6CQA8tE34BEEGYG2XQGsajGrrYG4XWop1nwguhhwXvdGxeZYHbDqF4t7T1PLVqXte8wT1y1SvnGRiVm8N7ukfw9x",
}


def _raw_payload(text: str) -> bytes:
    return b58decode(text[len("SIG_K1_") :])


def _encode_payload(packed: bytes) -> str:
    """SIG_K1 text for 65 packed bytes with a correct checksum."""
    checksum = ripemd160(packed + b"K1")[:4]
    return "SIG_K1_" + b58encode(packed + checksum)


def test_parse_known_signature() -> None:
    sig = parse_signature(SIG_VALID)
    assert sig.recovery_id == 0
    assert sig.compact == SIG_VALID_R + SIG_VALID_S
    assert sig.is_canonical()
    assert is_canonical(sig)


def test_parse_missing_prefix() -> None:
    with pytest.raises(InvalidPrefix):
        parse_signature(SIG_NO_PREFIX)


@pytest.mark.parametrize(
    "text",
    ["", "SIG_K1", "sig_k1_" + SIG_VALID[7:], "SIG_R1_" + SIG_VALID[7:], "PUB_K1_abc"],
)
def test_parse_rejects_other_prefixes(text: str) -> None:
    with pytest.raises(InvalidPrefix):
        parse_signature(text)


def test_parse_rejects_non_str() -> None:
    with pytest.raises(InvalidPrefix):
        parse_signature(SIG_VALID.encode())  # type: ignore[arg-type]


def test_format_known_signature() -> None:
    sig = Signature(0, SIG_VALID_R + SIG_VALID_S)
    assert format_signature(sig) == SIG_VALID
    assert str(sig) == SIG_VALID


@pytest.mark.parametrize("recovery_id", [0, 1, 2, 3])
def test_format_fixed_vectors(recovery_id: int) -> None:
    sig = Signature(recovery_id, R1_S1)
    assert str(sig) == R1_S1_TEXT[recovery_id]
    assert Signature.parse(R1_S1_TEXT[recovery_id]) == sig


def test_checksum_is_little_endian_ripemd160_prefix() -> None:
    raw = _raw_payload(SIG_VALID)
    assert int.from_bytes(raw[65:], "little") == SIG_VALID_CHECKSUM
    assert raw[65:] == ripemd160(raw[:65] + b"K1")[:4]


@pytest.mark.parametrize("seed", [b"a", b"transfer", b"x" * 100])
def test_round_trip_signed(seed: bytes) -> None:
    priv = hashlib.sha256(b"key:" + seed).digest()
    msg_hash = hashlib.sha256(seed).digest()
    sig = Signature.from_recoverable(*sign_recoverable(priv, msg_hash))
    text = format_signature(sig)
    assert text.startswith("SIG_K1_")
    assert parse_signature(text) == sig


def test_round_trip_high_s() -> None:
    # not canonical, still round-trips
    sig = Signature.from_recoverable(1, N - 1, 2)
    assert not sig.is_canonical()
    assert parse_signature(str(sig)) == sig


@pytest.mark.parametrize("size", [0, 1, 64, 65, 68, 70, 100])
def test_parse_rejects_wrong_payload_length(size: int) -> None:
    text = "SIG_K1_" + b58encode(b"\x20" + bytes(size - 1) if size else b"")
    with pytest.raises(InvalidLength) as info:
        parse_signature(text)
    assert info.value.expected == 69


def test_parse_rejects_bad_base58() -> None:
    with pytest.raises(BadBase58):
        parse_signature("SIG_K1_" + "0" + SIG_VALID[8:])


@pytest.mark.parametrize("index", range(65))
def test_parse_detects_any_flipped_byte(index: int) -> None:
    raw = bytearray(_raw_payload(SIG_VALID))
    raw[index] ^= 0xFF
    with pytest.raises(BadChecksum) as info:
        parse_signature("SIG_K1_" + b58encode(bytes(raw)))
    assert info.value.actual == SIG_VALID_CHECKSUM
    assert info.value.expected != info.value.actual


def test_parse_detects_flipped_checksum() -> None:
    raw = bytearray(_raw_payload(SIG_VALID))
    raw[68] ^= 0x01
    with pytest.raises(BadChecksum) as info:
        parse_signature("SIG_K1_" + b58encode(bytes(raw)))
    assert info.value.expected == SIG_VALID_CHECKSUM


@pytest.mark.parametrize("legacy_byte", [0, 3, 27, 30, 35, 0xFF])
def test_parse_rejects_legacy_byte_out_of_range(legacy_byte: int) -> None:
    with pytest.raises(InvalidRecoveryId):
        parse_signature(_encode_payload(bytes([legacy_byte]) + R1_S1))


def test_parse_rejects_r_overflow() -> None:
    packed = b"\x1f" + N.to_bytes(32, "big") + (1).to_bytes(32, "big")
    with pytest.raises(InvalidSignatureBytes):
        parse_signature(_encode_payload(packed))


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        parse_signature(SIG_NO_PREFIX)
    assert issubclass(InvalidSignatureBytes, UnderlyingCurveError)
    assert issubclass(UnderlyingCurveError, SignatureError)


@pytest.mark.parametrize("recovery_id", [0, 1, 2, 3])
def test_serialize_compact_layout(recovery_id: int) -> None:
    sig = Signature(recovery_id, R1_S1)
    data = serialize_compact(sig)
    assert len(data) == 65
    assert data[0] == recovery_id + 31
    assert data[1:] == R1_S1
    assert sig.serialize_compact() == data


@pytest.mark.parametrize("recovery_id", [0, 1, 2, 3])
def test_from_compact_recovers_legacy_byte(recovery_id: int) -> None:
    sig = Signature(recovery_id, R1_S1)
    assert signature_from_compact(serialize_compact(sig)) == sig
    assert Signature.from_compact(sig.serialize_compact()).recovery_id == recovery_id


@pytest.mark.parametrize("recovery_id", [0, 1, 2, 3])
def test_from_compact_accepts_raw_recovery_id(recovery_id: int) -> None:
    sig = signature_from_compact(bytes([recovery_id]) + R1_S1)
    assert sig.recovery_id == recovery_id


@pytest.mark.parametrize("header", [4, 26, 27, 28, 30, 35, 0xFF])
def test_from_compact_rejects_header(header: int) -> None:
    with pytest.raises(InvalidRecoveryId):
        signature_from_compact(bytes([header]) + R1_S1)


@pytest.mark.parametrize("size", [0, 64, 66])
def test_from_compact_rejects_wrong_length(size: int) -> None:
    with pytest.raises(InvalidLength) as info:
        signature_from_compact(bytes([31]) * size)
    assert info.value.expected == 65
    assert info.value.actual == size


@pytest.mark.parametrize(
    "compact",
    [
        bytes(64),
        bytes(32) + (1).to_bytes(32, "big"),
        (1).to_bytes(32, "big") + N.to_bytes(32, "big"),
        b"\xff" * 64,
    ],
)
def test_from_compact_rejects_invalid_signature_bytes(compact: bytes) -> None:
    with pytest.raises(InvalidSignatureBytes):
        signature_from_compact(b"\x1f" + compact)


def test_from_compact_accepts_bytearray() -> None:
    sig = signature_from_compact(bytearray(b"\x20" + R1_S1))
    assert sig == Signature(1, R1_S1)
    assert isinstance(sig.compact, bytes)


def test_signature_rejects_bad_fields() -> None:
    with pytest.raises(InvalidLength):
        Signature(0, bytes(63))
    with pytest.raises(InvalidRecoveryId):
        Signature(4, R1_S1)
    with pytest.raises(InvalidSignatureBytes):
        Signature.from_recoverable(-1, 1, 0)
    with pytest.raises(InvalidSignatureBytes):
        Signature.from_recoverable(2**256, 1, 0)


def test_signature_is_immutable_and_hashable() -> None:
    sig = Signature(1, R1_S1)
    with pytest.raises(AttributeError):
        sig.recovery_id = 2  # type: ignore[misc]
    assert {sig, Signature(1, R1_S1)} == {sig}
    assert sig.legacy_byte == 32


def test_to_standard() -> None:
    sig = parse_signature(SIG_VALID)
    std = to_standard(sig)
    assert std == sig.to_standard()
    assert std == StandardSignature(sig.r, sig.s)
    assert std.serialize_compact() == SIG_VALID_R + SIG_VALID_S


def test_standard_der() -> None:
    assert StandardSignature(1, 0x80).serialize_der() == bytes.fromhex(
        "300702010102020080"
    )
    der = to_standard(parse_signature(SIG_VALID)).serialize_der()
    assert der[0] == 0x30
    assert der[1] == len(der) - 2
    # r has its high bit clear, s too: no padding bytes
    assert der[2:4] == b"\x02\x20"
    assert der[4:36] == SIG_VALID_R


@pytest.mark.parametrize("recovery_id", [1.0, True, False, "1", None, 0.5])
def test_signature_rejects_non_int_recovery_id(recovery_id: object) -> None:
    with pytest.raises(InvalidRecoveryId):
        Signature(recovery_id, R1_S1)  # type: ignore[arg-type]


@pytest.mark.parametrize("suffix", [" ", "  ", "\n", "\t"])
def test_parse_rejects_trailing_whitespace(suffix: str) -> None:
    with pytest.raises(BadBase58):
        parse_signature(SIG_VALID + suffix)
