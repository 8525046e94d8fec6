"""Lexer."""

from wraithpy.lexer.classify import canonical_name, classify, split_tech_level
from wraithpy.lexer.filters import (
    prepare_tokens,
    remove_comments,
    remove_empty_lines,
    remove_spaces,
)
from wraithpy.lexer.lexer import Lexer, dump_tokens, tokenize
from wraithpy.lexer.tokens import Token, TokenKind

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "canonical_name",
    "classify",
    "dump_tokens",
    "prepare_tokens",
    "remove_comments",
    "remove_empty_lines",
    "remove_spaces",
    "split_tech_level",
    "tokenize",
]
