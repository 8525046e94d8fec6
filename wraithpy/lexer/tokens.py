"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum


class TokenKind(IntEnum):
    # -------------------------
    # Structural
    # -------------------------
    EOF = 1
    EOL = 2
    COMMA = 3
    PARENOP = 4  # (
    PARENCL = 5  # )
    COMMENT = 6  # ; to end of line
    SPACES = 7

    # -------------------------
    # Literals
    # -------------------------
    INTEGER = 10
    FLOAT = 11
    PERCENTAGE = 12
    TEXT = 13
    QUOTED_TEXT = 14

    # -------------------------
    # Domain-refined text
    # -------------------------
    POPULATION = 20
    RESOURCE = 21
    RESEARCH = 22
    PRODUCT = 23
    DEPOSIT_ID = 24
    FACTORY_GROUP_ID = 25
    MINE_GROUP_ID = 26


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token.

    `text` is the raw lexeme (the unquoted body for QUOTED_TEXT). `value`
    holds the numeric payload: the number for INTEGER/FLOAT/PERCENTAGE, the
    trailing number of ids like `fg-12` or `tl-3`, and a product's optional
    tech level.
    """

    line: int
    kind: TokenKind
    text: str = ""
    value: int | float | None = None

    @property
    def integer(self) -> int:
        if isinstance(self.value, int):
            return self.value
        return 0

    def __str__(self) -> str:
        match self.kind:
            case TokenKind.EOF:
                return f"{{{self.line} $$}}"
            case TokenKind.EOL:
                return f"{{{self.line} '\\n'}}"
            case TokenKind.COMMA:
                return f"{{{self.line} ','}}"
            case TokenKind.PARENOP:
                return f"{{{self.line} '('}}"
            case TokenKind.PARENCL:
                return f"{{{self.line} ')'}}"
            case TokenKind.COMMENT:
                return f"{{{self.line} ;...}}"
            case TokenKind.SPACES:
                return f"{{{self.line} ...}}"
            case TokenKind.QUOTED_TEXT:
                return f"{{{self.line} `{self.text}`}}"
            case TokenKind.TEXT:
                return f"{{{self.line} {self.text!r}}}"
            case _:
                return f"{{{self.line} {self.text}}}"
