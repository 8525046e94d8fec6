"""Order-file pipeline entrypoints."""

from __future__ import annotations

import logging
from pathlib import Path

from wraithpy.lexer import prepare_tokens, tokenize
from wraithpy.parser import ParseMode, ParserOptions, parse_tokens
from wraithpy.parser.orders import resolve_options
from wraithpy.pipeline.result import OrdersParseResult

logger = logging.getLogger(__name__)


def parse_result(
    data: bytes | str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> OrdersParseResult:
    resolved_options = resolve_options(options=options, mode=mode)
    source_text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    tokens = prepare_tokens(tokenize(source_text))
    parsed = parse_tokens(tokens, resolved_options)
    return OrdersParseResult(
        source_text=source_text,
        tokens=tokens,
        parsed=parsed,
        options=resolved_options,
    )


def parse_orders_file(
    path: str | Path,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> OrdersParseResult:
    """Read an order file from disk and parse it."""
    data = Path(path).read_bytes()
    logger.debug("read %d bytes from %s", len(data), path)
    return parse_result(data, options=options, mode=mode)


__all__ = [
    "OrdersParseResult",
    "parse_orders_file",
    "parse_result",
]
