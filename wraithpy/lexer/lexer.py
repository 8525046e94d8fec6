"""Lexer."""

import logging
from typing import TextIO

from wraithpy.lexer.classify import classify
from wraithpy.lexer.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

_REPLACEMENT_CHAR = "\ufffd"


class Lexer:
    """Single-pass lexer for order files.

    Never fails: anything it cannot make sense of becomes a TEXT token.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._line = 1

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def position(self) -> int:
        return self._position

    @property
    def line(self) -> int:
        return self._line

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def lex(self) -> list[Token]:
        """Lex the whole source.

        The result always ends with an EOL followed by an EOF.
        """
        tokens: list[Token] = []
        while not self.is_eof:
            token = self.next_token()
            tokens.append(token)
            if token.kind == TokenKind.EOL:
                self._line += 1

        if not tokens or tokens[-1].kind != TokenKind.EOL:
            tokens.append(Token(self._line, TokenKind.EOL))
        tokens.append(Token(self._line, TokenKind.EOF))
        return tokens

    def next_token(self) -> Token:
        if self.is_eof:
            return Token(self._line, TokenKind.EOF)

        ch = self._current_char()

        if ch == "\n":
            self._advance(1)
            return Token(self._line, TokenKind.EOL)
        if ch == ",":
            self._advance(1)
            return Token(self._line, TokenKind.COMMA, ",")
        if ch == "(":
            self._advance(1)
            return Token(self._line, TokenKind.PARENOP, "(")
        if ch == ")":
            self._advance(1)
            return Token(self._line, TokenKind.PARENCL, ")")

        if ch == ";":
            return self._lex_comment()

        if _is_space(ch):
            return self._lex_spaces()

        if ch == '"':
            return self._lex_quoted_text()

        if _is_digit(ch) or (ch in "+-" and _is_digit(self._peek_char())):
            number = self._lex_number()
            if number is not None:
                return number

        return self._lex_text()

    def _lex_comment(self) -> Token:
        # Consume until end of line, do not consume the newline itself.
        while not self.is_eof and self._current_char() != "\n":
            self._advance(1)
        return Token(self._line, TokenKind.COMMENT)

    def _lex_spaces(self) -> Token:
        start = self._position
        while not self.is_eof and _is_space(self._current_char()):
            self._advance(1)
        return Token(self._line, TokenKind.SPACES, self._source[start : self._position])

    def _lex_quoted_text(self) -> Token:
        # Consume opening quote
        self._advance(1)
        chars: list[str] = []
        while not self.is_eof:
            ch = self._current_char()
            if ch == "\n":
                break
            if ch == '"':
                self._advance(1)
                break
            if ch == "\\" and self._peek_char() == '"':
                chars.append('"')
                self._advance(2)
                continue
            chars.append(ch)
            self._advance(1)
        return Token(self._line, TokenKind.QUOTED_TEXT, "".join(chars))

    def _lex_number(self) -> Token | None:
        """Lex INTEGER, FLOAT or PERCENTAGE.

        Returns None (and rewinds) when the run is not followed by a
        delimiter, so the caller can lex it as TEXT instead.
        """
        start = self._position
        kind = TokenKind.INTEGER

        self._advance(1)
        while not self.is_eof and _is_digit(self._current_char()):
            self._advance(1)

        if self._current_char() == "." and _is_digit(self._peek_char()):
            kind = TokenKind.FLOAT
            self._advance(1)
            while not self.is_eof and _is_digit(self._current_char()):
                self._advance(1)
        elif self._current_char() == "%":
            kind = TokenKind.PERCENTAGE
            self._advance(1)

        if not (self.is_eof or _is_delimiter(self._current_char())):
            self._position = start
            return None

        lexeme = self._source[start : self._position]
        match kind:
            case TokenKind.FLOAT:
                return Token(self._line, kind, lexeme, float(lexeme))
            case TokenKind.PERCENTAGE:
                return Token(self._line, kind, lexeme, int(lexeme[:-1]))
            case _:
                return Token(self._line, kind, lexeme, int(lexeme))

    def _lex_text(self) -> Token:
        start = self._position
        while not self.is_eof:
            ch = self._current_char()
            if ch == "\n" or _is_space(ch):
                break
            self._advance(1)

        lexeme = self._source[start : self._position]
        kind, value = classify(lexeme)
        return Token(self._line, kind, lexeme, value)

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


def tokenize(data: bytes | str) -> list[Token]:
    """Lex an order file.

    Bytes are decoded as UTF-8; undecodable bytes become replacement
    characters, which the lexer treats as whitespace.
    """
    source = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    tokens = Lexer(source).lex()
    logger.debug("lexed %d tokens from %d characters", len(tokens), len(source))
    return tokens


def dump_tokens(tokens: list[Token], file: TextIO | None = None) -> None:
    """Print token list with kind, line, text and value for debugging."""
    for i, tok in enumerate(tokens):
        print(f"{i:03d} {tok.kind.name:<18} line={tok.line} text={tok.text!r} value={tok.value!r}", file=file)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_space(ch: str) -> bool:
    # newline is never a space; replacement characters are
    return ch != "\n" and ch != "\0" and (ch.isspace() or ch == _REPLACEMENT_CHAR)


def _is_delimiter(ch: str) -> bool:
    return ch in "\n,();" or _is_space(ch)
