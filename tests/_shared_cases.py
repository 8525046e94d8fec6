"""Centralized order-file cases used across parser/walker tests."""

from __future__ import annotations

from dataclasses import dataclass
import textwrap

from wraithpy.parser import OrderKeyword


@dataclass(frozen=True, slots=True)
class OrderCase:
    name: str
    source: str
    keyword: OrderKeyword | None = None
    should_parse: bool = True


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


# one minimal valid order per keyword
KEYWORD_CASES: tuple[OrderCase, ...] = (
    OrderCase("abandon", "abandon (1,2,3)\n", OrderKeyword.ABANDON),
    OrderCase("assemble", "assemble 12 dp-4 3 mine-2\n", OrderKeyword.ASSEMBLE),
    OrderCase("bombard", "bombard 5 7 50%\n", OrderKeyword.BOMBARD),
    OrderCase("buy", "buy 3 food 100 2.5\n", OrderKeyword.BUY),
    OrderCase("claim", "claim 3 (1,2,3,4)\n", OrderKeyword.CLAIM),
    OrderCase("disassemble", "disassemble 3 mg-2 10 mine\n", OrderKeyword.DISASSEMBLE),
    OrderCase("discharge", "discharge 3 100 soldier\n", OrderKeyword.DISCHARGE),
    OrderCase("draft", "draft 3 250 unsk\n", OrderKeyword.DRAFT),
    OrderCase("invade", "invade 5 7 100%\n", OrderKeyword.INVADE),
    OrderCase("move", "move 9 (4,5,6,2)\n", OrderKeyword.MOVE),
    OrderCase("name", 'name 9 "Lucky Star"\n', OrderKeyword.NAME),
    OrderCase("news", 'news (1,2,3) "We won" "The Editor"\n', OrderKeyword.NEWS),
    OrderCase("pay", "pay professional 1.25\n", OrderKeyword.PAY),
    OrderCase("probe", "probe 4 3\n", OrderKeyword.PROBE),
    OrderCase("raid", "raid 5 7 25% fuel\n", OrderKeyword.RAID),
    OrderCase("ration", "ration 80%\n", OrderKeyword.RATION),
    OrderCase("retool", "retool 8 fg-2 consumer-goods\n", OrderKeyword.RETOOL),
    OrderCase("secret", 'secret "handle" "game-1" 3 "token"\n', OrderKeyword.SECRET),
    OrderCase("sell", "sell 3 research 1000\n", OrderKeyword.SELL),
    OrderCase("setup", "setup 3 (10,20,30) colony transfer\n5 food\nend\n", OrderKeyword.SETUP),
    OrderCase("support", "support 4 5 60%\n", OrderKeyword.SUPPORT),
    OrderCase("survey", "survey 6\n", OrderKeyword.SURVEY),
    OrderCase("transfer", "transfer 3 500 fuel 4\n", OrderKeyword.TRANSFER),
)

FILE_CASES: tuple[OrderCase, ...] = (
    OrderCase("empty_file", ""),
    OrderCase("only_blank_lines", "\n\n\n"),
    OrderCase("only_comments", "; turn 1 orders\n   ; nothing yet\n"),
    OrderCase("no_trailing_newline", "bombard 5 7 50%"),
    OrderCase("uppercase_keyword", "BOMBARD 5 7 50%\n"),
    OrderCase(
        "mixed_file_with_comments",
        _dedent(
            """
            ; credentials first
            secret "mdh" "wraith-1" 4 "s3cr3t"

            move 9 (4,5,6,2)    ; head for the gas giant
            setup 3 (10,20,30,1) ship transfer
              100 unsk
              5 food
              2 research
            end
            ration 75%
            """
        ),
    ),
    OrderCase("garbage_line", "garbage line\nbombard 1 2 10%\n", should_parse=False),
    OrderCase("orbit_out_of_range", "move 9 (4,5,6,11)\n", should_parse=False),
    OrderCase("explicit_orbit_zero", "move 9 (4,5,6,0)\n", should_parse=False),
    OrderCase("missing_percentage", "bombard 5 7\n", should_parse=False),
    OrderCase("setup_missing_end", "setup 3 (1,2,3) ship transfer\n5 food\n", should_parse=False),
    OrderCase("keyword_not_first", "5 bombard 7 50%\n", should_parse=False),
)

ALL_ORDER_CASES: tuple[OrderCase, ...] = KEYWORD_CASES + FILE_CASES


def case_id(case: OrderCase) -> str:
    return case.name
