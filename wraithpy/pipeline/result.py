"""Parse-once/consume-many carrier for order files."""

from __future__ import annotations

from dataclasses import dataclass, field

from wraithpy.diagnostics import Diagnostic, collect_diagnostics, has_errors, sort_by_line
from wraithpy.lexer import Token
from wraithpy.orders import Order, WalkError, walk
from wraithpy.parser import ParsedOrders, ParserOptions


@dataclass(slots=True)
class OrdersParseResult:
    """Tokens, parse tree and lazily walked commands for one order file.

    `diagnostics` merges parser and walker output. In recovery mode an
    unrecognized line shows up twice on the same line: a parser
    `PARSER_UNKNOWN_ORDER` warning for the skipped text and a walker
    `WALKER_UNKNOWN_ORDER` error on the resulting `Unknown` command.
    """

    source_text: str
    tokens: list[Token]
    parsed: ParsedOrders
    options: ParserOptions
    _orders: list[Order] | None = field(default=None, init=False, repr=False)
    _walk_errors: list[WalkError] | None = field(default=None, init=False, repr=False)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        walker_diagnostics = [error.to_diagnostic() for error in self.walk_errors()]
        return sort_by_line(collect_diagnostics(self.parsed.diagnostics, walker_diagnostics))

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    def orders(self) -> list[Order]:
        if self._orders is not None:
            return self._orders
        orders, _ = self._walk()
        return orders

    def walk_errors(self) -> list[WalkError]:
        if self._walk_errors is not None:
            return self._walk_errors
        _, errors = self._walk()
        return errors

    def _walk(self) -> tuple[list[Order], list[WalkError]]:
        orders, errors = walk(self.parsed.tree) if self.parsed.tree is not None else ([], [])
        self._orders, self._walk_errors = orders, errors
        return orders, errors
