"""High-level parse entrypoint for order files."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from wraithpy.diagnostics import (
    PARSER_UNCONSUMED_INPUT,
    PARSER_UNKNOWN_ORDER,
    PARSER_UNRECOGNIZED_ORDER,
    Diagnostic,
)
from wraithpy.lexer import Token, TokenKind, prepare_tokens, tokenize
from wraithpy.parser.builder import NOT_ALL_TOKENS_CONSUMED, Builder
from wraithpy.parser.debug_tree import DebugRule
from wraithpy.parser.grammar import parse_order_file
from wraithpy.parser.options import ParseMode, ParserOptions
from wraithpy.parser.tree import NonTerminal, iter_tokens

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParsedOrders:
    """Output of one parse.

    `tree` is None when a fail-fast parse stopped on an unrecognized line;
    `failed_trace` then holds the debug node of the last `order` attempt.
    """

    tree: NonTerminal | None
    debug_tree: DebugRule | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    failed_trace: DebugRule | None = None

    @property
    def ok(self) -> bool:
        return self.tree is not None


def resolve_options(
    options: ParserOptions | None,
    mode: ParseMode | None,
) -> ParserOptions:
    if mode is not None and options is not None:
        raise ValueError("Pass either options or mode, not both")

    if options is not None:
        return options

    if mode is not None:
        return ParserOptions.for_mode(mode)

    return ParserOptions()


def parse_tokens(tokens: Sequence[Token], options: ParserOptions | None = None) -> ParsedOrders:
    """Run the grammar over prepared tokens."""
    resolved_options = options or ParserOptions()
    builder = Builder(tokens)
    accepted = parse_order_file(builder, stop_on_first_error=resolved_options.stop_on_first_error)
    tree = builder.parse_tree

    if accepted and tree is not None:
        diagnostics = _unknown_order_warnings(tree)
        logger.debug(
            "parsed %d orders from %d tokens (%s, %d skipped)",
            len(tree.child_rules("order")),
            len(tokens),
            resolved_options.mode,
            len(diagnostics),
        )
        return ParsedOrders(
            tree=tree,
            debug_tree=builder.debug_tree if resolved_options.emit_debug_trace else None,
            diagnostics=diagnostics,
        )

    failed_trace = _last_order_attempt(builder.debug_tree)
    if builder.error == NOT_ALL_TOKENS_CONSUMED:
        line = _first_unconsumed_line(builder)
        diagnostic = PARSER_UNCONSUMED_INPUT.at(line, f"Tokens left after end of file at line {line}.")
    else:
        line = _failed_order_line(builder, failed_trace)
        diagnostic = PARSER_UNRECOGNIZED_ORDER.at(line, _unrecognized_message(builder, line))
    logger.debug("parse failed at line %d: %s", line, builder.error)
    return ParsedOrders(
        tree=None,
        debug_tree=builder.debug_tree,
        diagnostics=[diagnostic],
        failed_trace=failed_trace,
    )


def parse(
    data: bytes | str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ParsedOrders:
    resolved_options = resolve_options(options=options, mode=mode)
    tokens = prepare_tokens(tokenize(data))
    return parse_tokens(tokens, resolved_options)


def _unknown_order_warnings(tree: NonTerminal) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for node in tree.child_rules("unknown"):
        line = node.line
        if line is None:
            continue
        text = " ".join(token.text for token in iter_tokens(node) if token.text)
        diagnostics.append(PARSER_UNKNOWN_ORDER.at(line, f"Unknown order skipped: {text!r}."))
    return diagnostics


def _last_order_attempt(debug_tree: DebugRule | None) -> DebugRule | None:
    if debug_tree is None:
        return None
    attempts = debug_tree.rules("order")
    return attempts[-1] if attempts else None


def _failed_order_line(builder: Builder, failed_trace: DebugRule | None) -> int:
    if failed_trace is not None:
        return failed_trace.line
    failure = builder.furthest_failure
    return failure.line if failure is not None else 1


def _unrecognized_message(builder: Builder, line: int) -> str:
    message = f"Line {line} does not match any order."
    failure = builder.furthest_failure
    if failure is None:
        return message
    if failure.kind == TokenKind.EOF:
        return f"{message} Parsing stopped at end of file."
    if failure.line != line:
        return f"{message} Parsing stopped at line {failure.line}."
    return message


def _first_unconsumed_line(builder: Builder) -> int:
    index = builder.current + 1
    if index < len(builder.tokens):
        return builder.tokens[index].line
    return builder.tokens[-1].line if builder.tokens else 1
