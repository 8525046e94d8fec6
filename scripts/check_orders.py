#!/usr/bin/env python3
"""Parse order files and report their diagnostics."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from tqdm import tqdm

from wraithpy.parser import ParseMode, ParserOptions, render_debug_tree, render_tree
from wraithpy.pipeline import OrdersParseResult, parse_orders_file

logger = logging.getLogger("check_orders")


def _collect_order_files(paths: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(child for child in path.rglob("*.txt") if child.is_file()))
        else:
            files.append(path)
    return files


def _report(path: Path, result: OrdersParseResult, *, show_orders: bool, show_tree: bool, show_debug: bool) -> None:
    for diagnostic in result.diagnostics:
        print(f"{path}:{diagnostic}")
        if diagnostic.hint:
            print(f"    hint: {diagnostic.hint}")

    if show_orders:
        for order in result.orders():
            print(f"{path}:{order.line}: {order!r}")

    if show_tree and result.parsed.tree is not None:
        print(render_tree(result.parsed.tree))

    if show_debug:
        trace = result.parsed.failed_trace or result.parsed.debug_tree
        if trace is not None:
            print(render_debug_tree(trace))


def main() -> int:
    parser = argparse.ArgumentParser(description="Check order files for syntax and semantic errors")
    parser.add_argument("paths", nargs="+", type=Path, help="Order files or directories of *.txt order files")
    parser.add_argument(
        "--mode",
        type=ParseMode,
        choices=list(ParseMode),
        default=ParseMode.FAIL_FAST,
        help="Stop at the first bad line, or skip bad lines and keep going (default: fail_fast)",
    )
    parser.add_argument("--orders", action="store_true", help="Print the walked order commands")
    parser.add_argument("--tree", action="store_true", help="Print the parse tree")
    parser.add_argument("--debug-tree", action="store_true", help="Print the debug trace tree")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the tqdm progress bar",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = ParserOptions.for_mode(args.mode, emit_debug_trace=args.debug_tree)
    files = _collect_order_files(args.paths)
    if not files:
        logger.warning("no order files found")
        return 1

    failed = 0
    iterator = files if args.no_progress or len(files) == 1 else tqdm(files, desc="orders", unit="file")
    for path in iterator:
        try:
            result = parse_orders_file(path, options=options)
        except OSError as exc:
            logger.error("cannot read %s: %s", path, exc)
            failed += 1
            continue
        _report(
            path,
            result,
            show_orders=args.orders,
            show_tree=args.tree,
            show_debug=args.debug_tree,
        )
        if result.has_errors:
            failed += 1

    print(f"{len(files) - failed}/{len(files)} order files clean")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
