import pytest

from wraithpy.lexer import Lexer, Token, TokenKind, canonical_name, classify, dump_tokens, split_tech_level, tokenize

from tests._debug import debug_dump_tokens


def lex(text: str | bytes) -> list[Token]:
    tokens = tokenize(text)
    debug_dump_tokens("lex", text if isinstance(text, str) else repr(text), tokens)
    return tokens


def kinds(tokens: list[Token]) -> list[TokenKind]:
    return [token.kind for token in tokens]


def test_bombard_line_tokens() -> None:
    tokens = lex("bombard 5 7 50%\n")

    assert kinds(tokens) == [
        TokenKind.TEXT,
        TokenKind.SPACES,
        TokenKind.INTEGER,
        TokenKind.SPACES,
        TokenKind.INTEGER,
        TokenKind.SPACES,
        TokenKind.PERCENTAGE,
        TokenKind.EOL,
        TokenKind.EOF,
    ]
    assert tokens[0].text == "bombard"
    assert tokens[2].value == 5
    assert tokens[4].value == 7
    assert tokens[6].value == 50
    assert tokens[6].text == "50%"


def test_token_list_always_ends_with_eol_then_eof() -> None:
    for source in ("", "move", "move\n", "move\n\n"):
        tokens = lex(source)
        assert kinds(tokens)[-2:] == [TokenKind.EOL, TokenKind.EOF]


def test_empty_source_is_eol_eof() -> None:
    assert kinds(lex("")) == [TokenKind.EOL, TokenKind.EOF]


def test_line_numbers_increment_after_each_newline() -> None:
    tokens = lex("a\nb\n\nc")

    assert [(token.kind, token.line) for token in tokens] == [
        (TokenKind.TEXT, 1),
        (TokenKind.EOL, 1),
        (TokenKind.TEXT, 2),
        (TokenKind.EOL, 2),
        (TokenKind.EOL, 3),
        (TokenKind.TEXT, 4),
        (TokenKind.EOL, 4),
        (TokenKind.EOF, 4),
    ]


def test_punctuation_tokens() -> None:
    tokens = lex("(1,2,3)")

    assert kinds(tokens) == [
        TokenKind.PARENOP,
        TokenKind.INTEGER,
        TokenKind.COMMA,
        TokenKind.INTEGER,
        TokenKind.COMMA,
        TokenKind.INTEGER,
        TokenKind.PARENCL,
        TokenKind.EOL,
        TokenKind.EOF,
    ]
    assert [token.value for token in tokens if token.kind == TokenKind.INTEGER] == [1, 2, 3]


def test_comment_runs_to_end_of_line_without_newline() -> None:
    tokens = lex("move ; go somewhere\nnext\n")

    assert kinds(tokens) == [
        TokenKind.TEXT,
        TokenKind.SPACES,
        TokenKind.COMMENT,
        TokenKind.EOL,
        TokenKind.TEXT,
        TokenKind.EOL,
        TokenKind.EOF,
    ]
    assert tokens[2].text == ""


def test_numbers_float_signed_and_percentage() -> None:
    tokens = [token for token in lex("3.25 -4 +6 12%") if token.kind != TokenKind.SPACES]

    assert tokens[0].kind == TokenKind.FLOAT
    assert tokens[0].value == 3.25
    assert tokens[1].kind == TokenKind.INTEGER
    assert tokens[1].value == -4
    assert tokens[2].kind == TokenKind.INTEGER
    assert tokens[2].value == 6
    assert tokens[3].kind == TokenKind.PERCENTAGE
    assert tokens[3].value == 12


def test_number_must_be_followed_by_delimiter() -> None:
    tokens = lex("12abc 7,")

    assert tokens[0].kind == TokenKind.TEXT
    assert tokens[0].text == "12abc"
    assert tokens[2].kind == TokenKind.INTEGER
    assert tokens[3].kind == TokenKind.COMMA


def test_number_followed_by_comment_or_paren() -> None:
    tokens = lex("4;x\n(5)")

    assert tokens[0].kind == TokenKind.INTEGER
    assert tokens[1].kind == TokenKind.COMMENT
    assert tokens[4].kind == TokenKind.INTEGER
    assert tokens[5].kind == TokenKind.PARENCL


def test_quoted_text_escape_and_unterminated() -> None:
    tokens = lex('"say \\"hi\\"" "open\nnext')

    assert tokens[0].kind == TokenKind.QUOTED_TEXT
    assert tokens[0].text == 'say "hi"'
    assert tokens[2].kind == TokenKind.QUOTED_TEXT
    assert tokens[2].text == "open"
    assert tokens[3].kind == TokenKind.EOL
    assert tokens[4].text == "next"


def test_carriage_return_is_whitespace() -> None:
    tokens = lex("move\r\n")

    assert kinds(tokens) == [TokenKind.TEXT, TokenKind.SPACES, TokenKind.EOL, TokenKind.EOF]
    assert tokens[0].text == "move"


def test_invalid_utf8_is_whitespace() -> None:
    tokens = lex(b"move\xff12\n")

    assert kinds(tokens) == [TokenKind.TEXT, TokenKind.SPACES, TokenKind.INTEGER, TokenKind.EOL, TokenKind.EOF]
    assert tokens[2].value == 12


def test_lexer_never_fails_on_odd_input() -> None:
    lexer = Lexer("@@@ )( ,,, \"\n;\n")
    tokens = lexer.lex()

    assert lexer.is_eof
    assert lexer.position == len(lexer.source)
    assert lexer.line == 3
    assert tokens[0].kind == TokenKind.TEXT
    assert tokens[-1].kind == TokenKind.EOF


def test_domain_words_are_classified() -> None:
    tokens = [token for token in lex("unsk FUEL fg-12 dp-3 mg-7 tl-3 research mine-2 lsu hello") if token.kind != TokenKind.SPACES]

    assert [(token.kind, token.value) for token in tokens[:-2]] == [
        (TokenKind.POPULATION, None),
        (TokenKind.RESOURCE, None),
        (TokenKind.FACTORY_GROUP_ID, 12),
        (TokenKind.DEPOSIT_ID, 3),
        (TokenKind.MINE_GROUP_ID, 7),
        (TokenKind.RESEARCH, 3),
        (TokenKind.RESEARCH, None),
        (TokenKind.PRODUCT, 2),
        (TokenKind.PRODUCT, None),
        (TokenKind.TEXT, None),
    ]


def test_numeric_literals_are_never_reclassified() -> None:
    tokens = lex("12 1.5 10%")

    assert {token.kind for token in tokens if token.kind != TokenKind.SPACES} == {
        TokenKind.INTEGER,
        TokenKind.FLOAT,
        TokenKind.PERCENTAGE,
        TokenKind.EOL,
        TokenKind.EOF,
    }


def test_classify_first_match_and_fallbacks() -> None:
    assert classify("Soldier") == (TokenKind.POPULATION, None)
    assert classify("non-metallics") == (TokenKind.RESOURCE, None)
    assert classify("fg-x") == (TokenKind.TEXT, None)
    assert classify("tl-") == (TokenKind.TEXT, None)
    assert classify("factory-10") == (TokenKind.PRODUCT, 10)
    assert classify("factory-ten") == (TokenKind.TEXT, None)
    assert classify("bombard") == (TokenKind.TEXT, None)


def test_split_tech_level() -> None:
    assert split_tech_level("hyper-engine-3") == ("hyper-engine", 3)
    assert split_tech_level("hyper-engine") == ("hyper-engine", None)
    assert split_tech_level("-3") == ("-3", None)


def test_canonical_name_expands_aliases() -> None:
    assert canonical_name(Token(1, TokenKind.POPULATION, "UNSK")) == "unskilled-worker"
    assert canonical_name(Token(1, TokenKind.PRODUCT, "slsu-2", 2)) == "super-light-structural-unit"
    assert canonical_name(Token(1, TokenKind.PRODUCT, "su")) == "structural-unit"
    assert canonical_name(Token(1, TokenKind.RESEARCH, "tl-4", 4)) == "research"
    assert canonical_name(Token(1, TokenKind.RESOURCE, "Gold")) == "gold"


def test_token_str_forms() -> None:
    assert str(Token(3, TokenKind.EOF)) == "{3 $$}"
    assert str(Token(3, TokenKind.EOL)) == "{3 '\\n'}"
    assert str(Token(3, TokenKind.QUOTED_TEXT, "hi")) == "{3 `hi`}"
    assert str(Token(3, TokenKind.INTEGER, "12", 12)) == "{3 12}"


def test_dump_tokens_prints_one_line_per_token(capsys: pytest.CaptureFixture[str]) -> None:
    dump_tokens(lex("draft 3 10 unsk\n"))

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 9
    assert lines[0].split() == ["000", "TEXT", "line=1", "text='draft'", "value=None"]
    assert lines[-1].startswith("008 EOF")
