# filename: huffman_cli.py

"""Command-line front end for the Huffman text compressor.

Run without a subcommand for the interactive menu:

    huffman-text
    huffman-text compress notes.txt -o notes.huf
    huffman-text decompress notes.huf -o notes.txt
"""

import argparse
import logging
import os
import sys

from huffman_errors import HuffmanError
from huffman_service import HuffmanService

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "test_huffman.txt"
DEFAULT_COMPRESSED = "compressed.txt"
DEFAULT_DECOMPRESSED = "decompressed.txt"

MENU = "1 - Compression\n2 - Decompression"


def compression_ratio(original_path, compressed_path):
    """Size of the compressed file as a percentage of the original."""
    original_size = os.path.getsize(original_path)
    if original_size == 0:
        raise ValueError(f"{original_path} is empty")
    return round(os.path.getsize(compressed_path) / original_size * 100, 2)


def run_compress(service, input_path, output_path):
    service.compress(input_path, output_path)
    try:
        ratio = compression_ratio(input_path, output_path)
    except ValueError:
        print("Compression Ratio = n/a")
    else:
        print(f"Compression Ratio = {ratio}%")


def run_decompress(service, input_path, output_path):
    service.decompress(input_path, output_path)
    print(f"Decompressed {input_path} to {output_path}")


def interactive(service, prompt=input):
    print(MENU)
    choice = prompt("Enter : ").strip()
    if choice == "1":
        run_compress(service, DEFAULT_INPUT, DEFAULT_COMPRESSED)
    elif choice == "2":
        run_decompress(service, DEFAULT_COMPRESSED, DEFAULT_DECOMPRESSED)
    else:
        print(f"Unknown option: {choice!r}")
        return 2
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="huffman-text", description="Huffman text compressor")
    parser.add_argument("--encoding", default="utf-8", help="Text encoding of uncompressed files (default: utf-8)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug output)")

    subparsers = parser.add_subparsers(dest="command")

    compress = subparsers.add_parser("compress", help="Compress a text file")
    compress.add_argument("input", nargs="?", default=DEFAULT_INPUT)
    compress.add_argument("-o", "--output", default=DEFAULT_COMPRESSED)

    decompress = subparsers.add_parser("decompress", help="Decompress a compressed file")
    decompress.add_argument("input", nargs="?", default=DEFAULT_COMPRESSED)
    decompress.add_argument("-o", "--output", default=DEFAULT_DECOMPRESSED)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    service = HuffmanService(encoding=args.encoding)
    try:
        if args.command == "compress":
            run_compress(service, args.input, args.output)
        elif args.command == "decompress":
            run_decompress(service, args.input, args.output)
        else:
            return interactive(service)
    except (HuffmanError, OSError, UnicodeError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
