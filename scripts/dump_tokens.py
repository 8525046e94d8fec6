#!/usr/bin/env python3
"""Print the tokens of an order file."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from wraithpy.lexer import dump_tokens, prepare_tokens, tokenize


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump order-file tokens")
    parser.add_argument("path", type=Path, help="Order file to tokenize")
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Keep comments, spaces and blank lines",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write tokens to this file instead of stdout",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    tokens = tokenize(args.path.read_bytes())
    if not args.raw:
        tokens = prepare_tokens(tokens)

    if args.output is None:
        dump_tokens(tokens)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", encoding="utf-8") as f:
        dump_tokens(tokens, file=f)
    print(f"Wrote {len(tokens)} tokens to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
