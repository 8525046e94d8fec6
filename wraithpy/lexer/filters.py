"""Pure filters over a token list."""

from collections.abc import Sequence

from wraithpy.lexer.tokens import Token, TokenKind


def remove_comments(tokens: Sequence[Token]) -> list[Token]:
    return [token for token in tokens if token.kind != TokenKind.COMMENT]


def remove_spaces(tokens: Sequence[Token]) -> list[Token]:
    return [token for token in tokens if token.kind != TokenKind.SPACES]


def remove_empty_lines(tokens: Sequence[Token]) -> list[Token]:
    """Collapse runs of EOL into one.

    Leading blank lines are dropped as well. Comments and spaces must be
    removed first for lines holding only those to count as blank.
    """
    result: list[Token] = []
    prior_kind = TokenKind.EOL
    for token in tokens:
        if token.kind == TokenKind.EOL and prior_kind == TokenKind.EOL:
            continue
        result.append(token)
        prior_kind = token.kind
    return result


def prepare_tokens(tokens: Sequence[Token]) -> list[Token]:
    """Apply the filters the order grammar expects.

    The result ends with exactly one EOL followed by exactly one EOF.
    """
    prepared = remove_empty_lines(remove_spaces(remove_comments(tokens)))

    if prepared and prepared[-1].kind == TokenKind.EOF:
        eof = prepared.pop()
    else:
        line = tokens[-1].line if tokens else 1
        eof = Token(line, TokenKind.EOF)

    if not prepared or prepared[-1].kind != TokenKind.EOL:
        prepared.append(Token(eof.line, TokenKind.EOL))
    prepared.append(eof)
    return prepared
