#!/usr/bin/env python3
"""Profile escaper's encode/decode round trip on a local text file."""

import cProfile
import pstats
import sys
from pathlib import Path

from escaper import decode_html, encode_attribute, encode_minimal


def round_trip(text, iterations=10):
    """Return the name of the first encoder whose output fails to decode back, or None."""
    for _ in range(iterations):
        for encode in (encode_minimal, encode_attribute):
            if decode_html(encode(text)) != text:
                return encode.__name__
    return None


if len(sys.argv) > 1:
    text = Path(sys.argv[1]).read_text(encoding="utf-8")
else:
    text = Path(__file__).read_text(encoding="utf-8") * 200

print(f"Profiling {len(text)} characters.")

profiler = cProfile.Profile()
profiler.enable()
failed = round_trip(text)
profiler.disable()

if failed is not None:
    print(f"Round trip through {failed} changed the input.")
    sys.exit(1)

stats = pstats.Stats(profiler)
stats.sort_stats("tottime")
stats.print_stats(30)
