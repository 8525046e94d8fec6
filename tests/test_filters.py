from wraithpy.lexer import (
    Token,
    TokenKind,
    prepare_tokens,
    remove_comments,
    remove_empty_lines,
    remove_spaces,
    tokenize,
)


def kinds(tokens: list[Token]) -> list[TokenKind]:
    return [token.kind for token in tokens]


def test_remove_spaces_is_idempotent() -> None:
    tokens = tokenize("  move 9 (1, 2, 3)  ; comment\n\n")

    once = remove_spaces(tokens)
    assert remove_spaces(once) == once
    assert TokenKind.SPACES not in kinds(once)


def test_remove_comments_is_idempotent() -> None:
    tokens = tokenize("; header\nmove 9 (1,2,3) ; trailing\n")

    once = remove_comments(tokens)
    assert remove_comments(once) == once
    assert TokenKind.COMMENT not in kinds(once)


def test_remove_empty_lines_collapses_and_drops_leading() -> None:
    tokens = remove_spaces(tokenize("\n\nmove\n\n\nabandon\n"))

    result = remove_empty_lines(tokens)
    assert kinds(result) == [
        TokenKind.TEXT,
        TokenKind.EOL,
        TokenKind.TEXT,
        TokenKind.EOL,
        TokenKind.EOF,
    ]
    assert remove_empty_lines(result) == result


def test_filters_do_not_reorder_tokens() -> None:
    tokens = tokenize("a ; x\n b\n")
    filtered = remove_spaces(remove_comments(tokens))

    assert [token.text for token in filtered if token.kind == TokenKind.TEXT] == ["a", "b"]


def test_comment_only_lines_become_blank_lines() -> None:
    prepared = prepare_tokens(tokenize("; one\n   ; two\nmove\n"))

    assert kinds(prepared) == [TokenKind.TEXT, TokenKind.EOL, TokenKind.EOF]
    assert prepared[0].line == 3


def test_prepare_tokens_ends_with_single_eol_eof() -> None:
    for source in ("", "\n\n", "move", "move\n\n\n", "; only a comment"):
        prepared = prepare_tokens(tokenize(source))
        assert kinds(prepared)[-2:] == [TokenKind.EOL, TokenKind.EOF]
        assert kinds(prepared).count(TokenKind.EOF) == 1
        assert len(prepared) < 3 or prepared[-3].kind != TokenKind.EOL


def test_prepare_tokens_on_empty_input() -> None:
    assert kinds(prepare_tokens(tokenize(""))) == [TokenKind.EOL, TokenKind.EOF]
    assert kinds(prepare_tokens([])) == [TokenKind.EOL, TokenKind.EOF]


def test_prepare_tokens_restores_missing_eol_and_eof() -> None:
    prepared = prepare_tokens([Token(1, TokenKind.TEXT, "move")])

    assert kinds(prepared) == [TokenKind.TEXT, TokenKind.EOL, TokenKind.EOF]
