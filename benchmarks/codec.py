"""
Benchmark the SIG_K1 codec: parse, format, 65-byte pack/unpack.
Reports time per call and peak memory (tracemalloc) per run.

Run from repo root:

  PYTHONPATH=src python benchmarks/codec.py

Or after pip install -e .:

  python benchmarks/codec.py
"""

from __future__ import annotations

import os
import sys
import time
import tracemalloc

_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_src = os.path.join(_root, "src")
if _src not in sys.path:
    sys.path.insert(0, _src)

from eoskeys import (
    format_signature,
    parse_signature,
    serialize_compact,
    signature_from_compact,
)

N_TIME = 5000
N_MEM = 1000
SIG_TEXT = (
    "SIG_K1_KBJgSuRYtHZcrWThugi4ygFabto756zuQQo8XeEpyRtBXLb9kbJtNW3xDcS14Rc14E8"
    "iHqLrdx46nenG5T7R4426Bspyzk"
)
SIG = parse_signature(SIG_TEXT)
SIG_BIN = serialize_compact(SIG)


def _time_per_call(fn, *args, n: int = N_TIME, **kwargs) -> float:
    for _ in range(20):
        fn(*args, **kwargs)
    start = time.perf_counter()
    for _ in range(n):
        fn(*args, **kwargs)
    return (time.perf_counter() - start) / n


def _peak_kb(fn, *args, n: int = N_MEM, **kwargs) -> float:
    tracemalloc.start()
    if hasattr(tracemalloc, "reset_peak"):
        tracemalloc.reset_peak()
    for _ in range(n):
        fn(*args, **kwargs)
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    return peak / 1024.0


def main() -> None:
    print("Benchmark: SIG_K1 codec")
    print()

    # Sanity
    assert format_signature(SIG) == SIG_TEXT
    assert signature_from_compact(SIG_BIN) == SIG
    print("  Sanity check: round trip ok.")
    print()

    print(f"  n = {N_TIME} (time), {N_MEM} (memory)")
    print()

    cases = (
        ("parse_signature", parse_signature, SIG_TEXT),
        ("format_signature", format_signature, SIG),
        ("serialize_compact", serialize_compact, SIG),
        ("signature_from_compact", signature_from_compact, SIG_BIN),
    )
    for name, fn, arg in cases:
        t = _time_per_call(fn, arg) * 1e6
        m = _peak_kb(fn, arg)
        print(f"  {name:<24} {t:9.2f} us   peak {m:.2f} KiB")


if __name__ == "__main__":
    main()
