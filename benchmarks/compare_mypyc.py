#!/usr/bin/env python3
"""
Benchmark escaper, pure Python or mypyc-compiled.

Measures the same four cases for either build:
- encode_minimal / encode_attribute over a mixed-text corpus
- decode_html over each policy's output
"""

import argparse
import sys
import time
from pathlib import Path

from escaper import decode_html, encode_attribute, encode_minimal

CORPUS = (
    "Moonstone, chapter one. \"Rachel's\" diamond & the <Indian> jugglers;\n"
    "caf\xe9 cr\xe8me br\xfbl\xe9e \u2013 \xa3 5 \xa9 2024\ttab\rreturn "
    "AT&T <b>bold</b> 'quoted' \U0001f600\n"
) * 500


def check_compiled_modules():
    """Return the names of escaper modules loaded from compiled extensions."""
    from escaper import decode, entity_trie

    compiled = []
    for mod in (decode, entity_trie):
        if getattr(mod, "__file__", "").endswith((".so", ".pyd")):
            compiled.append(mod.__name__)
    return compiled


def _time(func, arg, iterations):
    start = time.perf_counter()
    for _ in range(iterations):
        func(arg)
    return time.perf_counter() - start


def run_benchmarks(iterations=50):
    compiled_modules = check_compiled_modules()
    if compiled_modules:
        print(f"\nCompiled modules detected: {', '.join(compiled_modules)}")
    else:
        print("\nNo compiled modules detected (running pure Python)")

    encoded_minimal = encode_minimal(CORPUS)
    encoded_attribute = encode_attribute(CORPUS)
    cases = [
        ("encode_minimal", encode_minimal, CORPUS),
        ("encode_attribute", encode_attribute, CORPUS),
        ("decode_minimal", decode_html, encoded_minimal),
        ("decode_attribute", decode_html, encoded_attribute),
    ]

    results = {}
    for name, func, arg in cases:
        elapsed = _time(func, arg, iterations)
        size_mb = len(arg.encode("utf-8")) * iterations / 1e6
        print("-" * 70)
        print(f"{name}: {elapsed:.4f}s for {iterations} iterations ({size_mb / elapsed:.2f} MB/s)")
        results[name] = elapsed
    print("=" * 70)
    return results


def main():
    parser = argparse.ArgumentParser(description="Compare performance of pure Python vs mypyc-compiled escaper")
    parser.add_argument(
        "--mode",
        choices=["pure", "compiled"],
        default="compiled",
        help="Which version to benchmark (default: compiled)",
    )
    parser.add_argument("--iterations", type=int, default=50)
    args = parser.parse_args()

    if args.mode == "pure":
        import escaper

        so_files = list(Path(escaper.__file__).parent.glob("*.so"))
        if so_files:
            print(f"Found {len(so_files)} compiled modules.")
            print("To run pure Python benchmarks, remove them and reinstall without ESCAPER_USE_MYPYC.")
            sys.exit(1)
    else:
        print("To build with mypyc:")
        print("  ESCAPER_USE_MYPYC=1 pip install -e .[mypyc] --no-build-isolation")

    run_benchmarks(args.iterations)


if __name__ == "__main__":
    main()
