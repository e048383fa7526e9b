#!/usr/bin/env python3
"""
Inspect the Huffman code of a file.

Builds the code table for the file contents, compresses it in memory and
prints size statistics. Nothing is written to disk.

Run with:
    huffman-inspect path/to/file [--show-codes] [--verify]
"""
import sys
from pathlib import Path

from huffman_core import HuffmanError
from huffman_service import HuffmanService, compression_ratio


def format_symbol(symbol):
    """Printable form of a byte value for the code listing."""
    ch = chr(symbol)
    if ch.isprintable() and not ch.isspace():
        return f"{ch!r:>6}"
    return f"  0x{symbol:02x}"


def print_code_listing(table):
    print(f"\n{'symbol':>6}  {'count':>8}  {'len':>3}  code")
    # Most frequent first, then by byte value
    rows = sorted(table.frequencies.items(), key=lambda item: (-item[1], item[0]))
    for symbol, freq in rows:
        code = table.codes[symbol]
        print(f"{format_symbol(symbol)}  {freq:>8}  {code.length:>3}  {code}")


def inspect(data, show_codes=False, verify=False):
    """Print statistics for ``data`` and return a process exit status."""
    svc = HuffmanService()
    table = svc.build_code_table(data)
    compressed = svc.compress(data, table)

    bits = table.encoded_bit_length()
    print(f"Original size:   {len(data)} bytes")
    print(f"Compressed size: {len(compressed)} bytes ({bits} bits + {len(compressed) * 8 - bits} padding)")
    print(f"Ratio:           {compression_ratio(data, compressed):.3f}")
    print(f"Distinct:        {len(table)} symbols")
    print(f"Avg code length: {bits / len(data):.3f} bits/symbol")

    if show_codes:
        print_code_listing(table)

    if verify:
        restored = svc.decompress(compressed, table, len(data))
        if restored != data:
            print("❌ Round-trip mismatch")
            return 1
        print("✅ Round-trip verified")

    return 0


def main(argv=None):
    """Main entry point for the inspector."""
    import argparse

    parser = argparse.ArgumentParser(description="Show the Huffman code of a file")
    parser.add_argument("path", type=str, help="File to analyse")
    parser.add_argument(
        "--show-codes",
        action="store_true",
        help="List every symbol with its count and code bits",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Decompress the result and compare it with the input",
    )

    args = parser.parse_args(argv)

    try:
        data = Path(args.path).read_bytes()
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        return inspect(data, show_codes=args.show_codes, verify=args.verify)
    except HuffmanError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
