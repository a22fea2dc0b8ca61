"""Decode throughput benchmark: replies/sec for common decoders at different reply sizes."""

import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from kv_reply import as_int64s, as_slowlogs, as_string_map, as_strings, from_native


def build_replies(n: int) -> dict:
    return {
        "as_strings": (as_strings, from_native([f"value_{i}".encode() for i in range(n)])),
        "as_int64s": (as_int64s, from_native([str(i).encode() for i in range(n)])),
        "as_string_map": (
            as_string_map,
            from_native([x for i in range(n) for x in (f"field_{i}".encode(), f"v_{i}".encode())]),
        ),
        "as_slowlogs": (
            as_slowlogs,
            from_native([[i, 1700000000 + i, 10 * i, [b"GET", f"key_{i}".encode()]] for i in range(n)]),
        ),
    }


def main():
    for n in [10, 100, 1_000, 10_000]:
        n_decodes = max(1, 100_000 // n)
        for name, (decode, reply) in build_replies(n).items():
            start = time.perf_counter()
            for _ in range(n_decodes):
                decode(reply)
            elapsed = time.perf_counter() - start
            print(f"{name:<14} {n:>6} elements -> {n_decodes / elapsed:>10.0f} replies/sec ({n_decodes} decodes in {elapsed:.2f}s)")
    print("Done.")


if __name__ == "__main__":
    main()
