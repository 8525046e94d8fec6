from pathlib import Path

import pytest

from wraithpy.diagnostics import (
    PARSER_UNKNOWN_ORDER,
    PARSER_UNRECOGNIZED_ORDER,
    WALKER_UNKNOWN_ORDER,
    WALKER_VALUE_OUT_OF_RANGE,
)
from wraithpy.lexer import TokenKind
from wraithpy.orders import Bombard, Unknown
from wraithpy.parser import ParseMode, ParserOptions, parse
from wraithpy.pipeline import parse_orders_file, parse_result

from tests._debug import debug_dump_diagnostics


def test_parse_result_exposes_orders_and_error_state() -> None:
    result = parse_result("bombard 5 7 50%\n")

    assert result.diagnostics == []
    assert result.has_errors is False
    assert result.orders() == [Bombard(line=1, id=5, target_id=7, pct_committed=50)]
    assert result.walk_errors() == []


def test_parse_result_caches_walked_orders() -> None:
    result = parse_result("bombard 5 7 50%\nmove 9 (1,2,3)\n")

    first = result.orders()
    second = result.orders()
    assert first is second
    assert result.walk_errors() is result.walk_errors()


def test_walk_errors_first_also_caches_orders() -> None:
    result = parse_result("bombard 5 7 101%\n")

    errors = result.walk_errors()
    orders = result.orders()

    assert [error.code for error in errors] == [WALKER_VALUE_OUT_OF_RANGE.code]
    assert orders[0].errors == errors
    assert result.orders() is orders
    assert result.walk_errors() is errors


def test_failed_parse_caches_empty_walk() -> None:
    result = parse_result("garbage line\n")

    assert result.walk_errors() == []
    assert result.orders() is result.orders()


def test_parse_result_keeps_prepared_tokens() -> None:
    result = parse_result("bombard 5 7 50% ; fire\n\n")

    assert [token.kind for token in result.tokens] == [
        TokenKind.TEXT,
        TokenKind.INTEGER,
        TokenKind.INTEGER,
        TokenKind.PERCENTAGE,
        TokenKind.EOL,
        TokenKind.EOF,
    ]


def test_parse_result_matches_parse_contract() -> None:
    source = "garbage line\nbombard 1 2 10%\n"

    fail_fast = parse_result(source)
    recovered = parse_result(source, mode=ParseMode.RECOVER)

    assert fail_fast.parsed.diagnostics == parse(source).diagnostics
    assert recovered.parsed.diagnostics == parse(source, mode=ParseMode.RECOVER).diagnostics
    assert fail_fast.options.mode == ParseMode.FAIL_FAST
    assert recovered.options.mode == ParseMode.RECOVER


def test_failed_parse_has_no_orders() -> None:
    result = parse_result("garbage line\nbombard 1 2 10%\n")

    debug_dump_diagnostics("failed_parse", result.diagnostics)

    assert result.orders() == []
    assert result.has_errors is True
    assert [diagnostic.code for diagnostic in result.diagnostics] == [PARSER_UNRECOGNIZED_ORDER.code]
    assert result.parsed.failed_trace is not None


def test_recovered_parse_merges_parser_and_walker_diagnostics() -> None:
    result = parse_result("garbage line\nbombard 1 2 101%\n", mode=ParseMode.RECOVER)

    debug_dump_diagnostics("recovered_parse", result.diagnostics)

    assert [type(order) for order in result.orders()] == [Unknown, Bombard]
    assert [(diagnostic.line, diagnostic.code) for diagnostic in result.diagnostics] == [
        (1, PARSER_UNKNOWN_ORDER.code),
        (1, WALKER_UNKNOWN_ORDER.code),
        (2, WALKER_VALUE_OUT_OF_RANGE.code),
    ]
    assert result.has_errors is True


def test_parse_result_accepts_bytes() -> None:
    result = parse_result(b"bombard 5 7 50%\n")

    assert result.source_text == "bombard 5 7 50%\n"
    assert len(result.orders()) == 1


def test_parse_result_rejects_options_and_mode_together() -> None:
    with pytest.raises(ValueError, match="either options or mode"):
        parse_result("", ParserOptions(), mode=ParseMode.FAIL_FAST)


def test_parse_orders_file_reads_from_disk(tmp_path: Path) -> None:
    path = tmp_path / "orders.txt"
    path.write_bytes(b"; turn 3\nsecret \"mdh\" \"wraith-1\" 3 \"s3cr3t\"\nration 75%\n")

    result = parse_orders_file(path)

    assert result.has_errors is False
    assert [order.keyword for order in result.orders()] == ["secret", "ration"]


def test_parse_orders_file_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        parse_orders_file(tmp_path / "missing.txt")
