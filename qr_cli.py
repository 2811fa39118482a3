#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Encode text into a QR code from the command line.

Usage:
    python qr_cli.py Hello world
    python qr_cli.py "https://example.com" --ecc Q --format png --output qr.png
"""

import argparse
import logging
import sys

from qrcore import ErrorCorrectionLevel, encode_segments, make_segments, to_ascii, to_png_bytes, to_svg
from qrcore.constants import DEFAULT_BORDER, DEFAULT_SCALE, MIN_VERSION, MAX_VERSION

logger = logging.getLogger("qr_cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Encode text into a QR Code symbol")
    parser.add_argument("text", nargs="+", help="Text to encode (words are joined with spaces)")
    parser.add_argument("--ecc", default="L", help="Error correction level L, M, Q or H (default: L)")
    parser.add_argument("--mask", default="auto", help="Mask 0-7 or 'auto' (default: auto)")
    parser.add_argument("--min-version", type=int, default=MIN_VERSION)
    parser.add_argument("--max-version", type=int, default=MAX_VERSION)
    parser.add_argument("--no-boost", action="store_true", help="Do not raise the ECC level")
    parser.add_argument("--border", type=int, default=DEFAULT_BORDER, help="Quiet zone in modules")
    parser.add_argument("--scale", type=int, default=DEFAULT_SCALE, help="Pixels per module (png)")
    parser.add_argument("--format", choices=("ascii", "svg", "png"), default="ascii")
    parser.add_argument("--output", "-o", help="Output file (default: stdout, required for png)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def _encode(args, text):
    mask = -1 if args.mask == "auto" else int(args.mask)
    return encode_segments(
        make_segments(text), ErrorCorrectionLevel.from_name(args.ecc),
        args.min_version, args.max_version, mask, not args.no_boost,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    text = " ".join(args.text)
    if args.format == "png" and not args.output:
        logger.error("PNG output needs --output")
        return 2

    try:
        qr = _encode(args, text)
    except ValueError as ex:
        logger.error(f"Could not encode: {ex}")
        return 2
    logger.debug(f"Version {qr.version}, ECC {qr.error_correction.name}, mask {qr.mask}")

    try:
        if args.format == "png":
            payload = to_png_bytes(qr, scale=args.scale, border=args.border)
        elif args.format == "svg":
            payload = to_svg(qr, border=args.border)
        else:
            payload = to_ascii(qr, border=args.border)
    except ValueError as ex:
        logger.error(f"Could not render: {ex}")
        return 2

    if args.output:
        if isinstance(payload, bytes):
            with open(args.output, "wb") as fh:
                fh.write(payload)
        else:
            with open(args.output, "w", encoding="utf-8") as fh:
                fh.write(payload)
        logger.info(f"QR code saved to {args.output}")
    else:
        if args.format == "ascii":
            print(f"Encoding: '{text}'\n")
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
