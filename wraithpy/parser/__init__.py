"""Parser."""

from wraithpy.parser.builder import Builder, TokenPattern, keyword, rule
from wraithpy.parser.debug_tree import DebugMatch, DebugNode, DebugRule, render_debug_tree
from wraithpy.parser.grammar import GRAMMAR, GRAMMAR_VERSION, ORDER_RULES, OrderKeyword, parse_order_file
from wraithpy.parser.options import ParseMode, ParserOptions
from wraithpy.parser.orders import ParsedOrders, parse, parse_tokens
from wraithpy.parser.tree import NonTerminal, ParseNode, Terminal, iter_tokens, render_tree

__all__ = [
    "GRAMMAR",
    "GRAMMAR_VERSION",
    "ORDER_RULES",
    "Builder",
    "DebugMatch",
    "DebugNode",
    "DebugRule",
    "NonTerminal",
    "OrderKeyword",
    "ParseMode",
    "ParseNode",
    "ParsedOrders",
    "ParserOptions",
    "Terminal",
    "TokenPattern",
    "iter_tokens",
    "keyword",
    "parse",
    "parse_order_file",
    "parse_tokens",
    "render_debug_tree",
    "render_tree",
]
