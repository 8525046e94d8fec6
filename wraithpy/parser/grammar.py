"""Order grammar.

Each order keyword has one rule. Rules return True when they matched; the
builder rewinds anything a failed rule consumed.
"""

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Final

from wraithpy.lexer import TokenKind
from wraithpy.parser.builder import Builder, RuleFn, TokenPattern, keyword, rule

GRAMMAR_VERSION: Final[str] = "2023.1"

GRAMMAR: Final[str] = """\
orders      = {order | EOL} EOF .
orders      = {order | EOL | unknown} EOF .    (recovery)
abandon     = "abandon" coordinate EOL .
assemble    = "assemble" CSID [DEPOSIT_ID | FACTORY_GROUP_ID | MINE_GROUP_ID] QUANTITY material EOL .
bombard     = "bombard" CSID CSID PERCENTAGE EOL .
buy         = "buy" CSID (RESEARCH | PRODUCT QUANTITY) number EOL .
claim       = "claim" CSID coordinate EOL .
disassemble = "disassemble" CSID [FACTORY_GROUP_ID | MINE_GROUP_ID] QUANTITY material EOL .
discharge   = "discharge" CSID QUANTITY POPULATION EOL .
draft       = "draft" CSID QUANTITY POPULATION EOL .
invade      = "invade" CSID CSID PERCENTAGE EOL .
move        = "move" CSID coordinate EOL .
name        = "name" (CSID | coordinate) QUOTED_TEXT EOL .
news        = "news" coordinate QUOTED_TEXT QUOTED_TEXT EOL .
pay         = "pay" [CSID] POPULATION number EOL .
probe       = "probe" CSID (INTEGER | coordinate) EOL .
raid        = "raid" CSID CSID PERCENTAGE cargo EOL .
ration      = "ration" [CSID] PERCENTAGE EOL .
retool      = "retool" CSID FACTORY_GROUP_ID material EOL .
secret      = "secret" QUOTED_TEXT QUOTED_TEXT INTEGER QUOTED_TEXT EOL .
sell        = "sell" CSID (RESEARCH | PRODUCT QUANTITY) number EOL .
setup       = "setup" CSID coordinate ("ship" | "colony") "transfer" EOL {xfer_detail} "end" EOL .
support     = "support" CSID CSID [CSID] PERCENTAGE EOL .
survey      = "survey" CSID [INTEGER | coordinate] EOL .
transfer    = "transfer" CSID QUANTITY cargo CSID EOL .

cargo       = POPULATION | PRODUCT | RESEARCH | RESOURCE .
coordinate  = "(" INTEGER "," INTEGER "," INTEGER ["," ORBIT] ")" .
material    = PRODUCT | RESEARCH .
number      = FLOAT | INTEGER .
xfer_detail = QUANTITY cargo EOL .
unknown     = {any token but EOL and EOF} [EOL] .

CSID, QUANTITY = INTEGER .
ORBIT = INTEGER in 1..10 .
"""

MIN_ORBIT: Final[int] = 1
MAX_ORBIT: Final[int] = 10


class OrderKeyword(StrEnum):
    ABANDON = "abandon"
    ASSEMBLE = "assemble"
    BOMBARD = "bombard"
    BUY = "buy"
    CLAIM = "claim"
    DISASSEMBLE = "disassemble"
    DISCHARGE = "discharge"
    DRAFT = "draft"
    INVADE = "invade"
    MOVE = "move"
    NAME = "name"
    NEWS = "news"
    PAY = "pay"
    PROBE = "probe"
    RAID = "raid"
    RATION = "ration"
    RETOOL = "retool"
    SECRET = "secret"
    SELL = "sell"
    SETUP = "setup"
    SUPPORT = "support"
    SURVEY = "survey"
    TRANSFER = "transfer"

    @classmethod
    def lookup(cls, text: str) -> "OrderKeyword | None":
        try:
            return cls(text.lower())
        except ValueError:
            return None


EOF: Final = TokenPattern(TokenKind.EOF)
EOL: Final = TokenPattern(TokenKind.EOL)
COMMA: Final = TokenPattern(TokenKind.COMMA)
PARENOP: Final = TokenPattern(TokenKind.PARENOP)
PARENCL: Final = TokenPattern(TokenKind.PARENCL)
INTEGER: Final = TokenPattern(TokenKind.INTEGER)
FLOAT: Final = TokenPattern(TokenKind.FLOAT)
PERCENTAGE: Final = TokenPattern(TokenKind.PERCENTAGE)
QUOTED_TEXT: Final = TokenPattern(TokenKind.QUOTED_TEXT)
POPULATION: Final = TokenPattern(TokenKind.POPULATION)
RESOURCE: Final = TokenPattern(TokenKind.RESOURCE)
RESEARCH: Final = TokenPattern(TokenKind.RESEARCH)
PRODUCT: Final = TokenPattern(TokenKind.PRODUCT)
DEPOSIT_ID: Final = TokenPattern(TokenKind.DEPOSIT_ID)
FACTORY_GROUP_ID: Final = TokenPattern(TokenKind.FACTORY_GROUP_ID)
MINE_GROUP_ID: Final = TokenPattern(TokenKind.MINE_GROUP_ID)

# unit ids and quantities are plain integers; the walker range-checks them
CSID: Final = INTEGER
QUANTITY: Final = INTEGER


def parse_order_file(builder: Builder, *, stop_on_first_error: bool = True) -> bool:
    """Run the root rule for the requested mode."""
    if stop_on_first_error:
        return orders(builder)
    return orders_with_recovery(builder)


@rule("orders")
def orders(b: Builder) -> bool:
    while order(b) or b.match(EOL):
        pass
    return b.match(EOF)


@rule("orders")
def orders_with_recovery(b: Builder) -> bool:
    while (token := b.peek(1)) is not None and token.kind != TokenKind.EOF:
        if order(b) or b.match(EOL):
            continue
        unknown(b)
    return b.match(EOF)


@rule("order")
def order(b: Builder) -> bool:
    token = b.peek(1)
    if token is None or token.kind != TokenKind.TEXT:
        return False
    order_keyword = OrderKeyword.lookup(token.text)
    if order_keyword is None:
        return False
    return ORDER_RULES[order_keyword](b)


@rule("unknown")
def unknown(b: Builder) -> bool:
    while (token := b.peek(1)) is not None and token.kind not in (TokenKind.EOL, TokenKind.EOF):
        b.match(TokenPattern(token.kind))
    b.match(EOL)
    return True


# -------------------------
# Orders
# -------------------------


@rule("abandon")
def abandon(b: Builder) -> bool:
    return b.match(keyword("abandon")) and coordinate(b) and b.match(EOL)


@rule("assemble")
def assemble(b: Builder) -> bool:
    if not (b.match(keyword("assemble")) and b.match(CSID)):
        return False
    b.match_any(DEPOSIT_ID, FACTORY_GROUP_ID, MINE_GROUP_ID)
    return b.match(QUANTITY) and material(b) and b.match(EOL)


@rule("bombard")
def bombard(b: Builder) -> bool:
    return b.match(keyword("bombard")) and b.match(CSID) and b.match(CSID) and b.match(PERCENTAGE) and b.match(EOL)


@rule("buy")
def buy(b: Builder) -> bool:
    return b.match(keyword("buy")) and b.match(CSID) and _trade_item(b) and number(b) and b.match(EOL)


@rule("claim")
def claim(b: Builder) -> bool:
    return b.match(keyword("claim")) and b.match(CSID) and coordinate(b) and b.match(EOL)


@rule("disassemble")
def disassemble(b: Builder) -> bool:
    if not (b.match(keyword("disassemble")) and b.match(CSID)):
        return False
    b.match_any(FACTORY_GROUP_ID, MINE_GROUP_ID)
    return b.match(QUANTITY) and material(b) and b.match(EOL)


@rule("discharge")
def discharge(b: Builder) -> bool:
    return (
        b.match(keyword("discharge"))
        and b.match(CSID)
        and b.match(QUANTITY)
        and b.match(POPULATION)
        and b.match(EOL)
    )


@rule("draft")
def draft(b: Builder) -> bool:
    return b.match(keyword("draft")) and b.match(CSID) and b.match(QUANTITY) and b.match(POPULATION) and b.match(EOL)


@rule("invade")
def invade(b: Builder) -> bool:
    return b.match(keyword("invade")) and b.match(CSID) and b.match(CSID) and b.match(PERCENTAGE) and b.match(EOL)


@rule("move")
def move(b: Builder) -> bool:
    return b.match(keyword("move")) and b.match(CSID) and coordinate(b) and b.match(EOL)


@rule("name")
def name(b: Builder) -> bool:
    if not b.match(keyword("name")):
        return False
    if not (b.match(CSID) or coordinate(b)):
        return False
    return b.match(QUOTED_TEXT) and b.match(EOL)


@rule("news")
def news(b: Builder) -> bool:
    return (
        b.match(keyword("news"))
        and coordinate(b)
        and b.match(QUOTED_TEXT)
        and b.match(QUOTED_TEXT)
        and b.match(EOL)
    )


@rule("pay")
def pay(b: Builder) -> bool:
    if not b.match(keyword("pay")):
        return False
    b.match(CSID)
    return b.match(POPULATION) and number(b) and b.match(EOL)


@rule("probe")
def probe(b: Builder) -> bool:
    if not (b.match(keyword("probe")) and b.match(CSID)):
        return False
    if not (b.match(INTEGER) or coordinate(b)):
        return False
    return b.match(EOL)


@rule("raid")
def raid(b: Builder) -> bool:
    return (
        b.match(keyword("raid"))
        and b.match(CSID)
        and b.match(CSID)
        and b.match(PERCENTAGE)
        and cargo(b)
        and b.match(EOL)
    )


@rule("ration")
def ration(b: Builder) -> bool:
    if not b.match(keyword("ration")):
        return False
    b.match(CSID)
    return b.match(PERCENTAGE) and b.match(EOL)


@rule("retool")
def retool(b: Builder) -> bool:
    return (
        b.match(keyword("retool"))
        and b.match(CSID)
        and b.match(FACTORY_GROUP_ID)
        and material(b)
        and b.match(EOL)
    )


@rule("secret")
def secret(b: Builder) -> bool:
    return (
        b.match(keyword("secret"))
        and b.match(QUOTED_TEXT)
        and b.match(QUOTED_TEXT)
        and b.match(INTEGER)
        and b.match(QUOTED_TEXT)
        and b.match(EOL)
    )


@rule("sell")
def sell(b: Builder) -> bool:
    return b.match(keyword("sell")) and b.match(CSID) and _trade_item(b) and number(b) and b.match(EOL)


@rule("setup")
def setup(b: Builder) -> bool:
    if not (b.match(keyword("setup")) and b.match(CSID) and coordinate(b)):
        return False
    if not (b.match(keyword("ship")) or b.match(keyword("colony"))):
        return False
    if not (b.match(keyword("transfer")) and b.match(EOL)):
        return False
    while xfer_detail(b):
        if b.check(TokenKind.EOF) or _at_keyword(b, "end"):
            break
    return b.match(keyword("end")) and b.match(EOL)


@rule("support")
def support(b: Builder) -> bool:
    if not (b.match(keyword("support")) and b.match(CSID) and b.match(CSID)):
        return False
    b.match(CSID)
    return b.match(PERCENTAGE) and b.match(EOL)


@rule("survey")
def survey(b: Builder) -> bool:
    if not (b.match(keyword("survey")) and b.match(CSID)):
        return False
    if not b.match(INTEGER):
        coordinate(b)
    return b.match(EOL)


@rule("transfer")
def transfer(b: Builder) -> bool:
    return (
        b.match(keyword("transfer"))
        and b.match(CSID)
        and b.match(QUANTITY)
        and cargo(b)
        and b.match(CSID)
        and b.match(EOL)
    )


# -------------------------
# Fragments
# -------------------------


@rule("cargo")
def cargo(b: Builder) -> bool:
    return b.match_any(POPULATION, PRODUCT, RESEARCH, RESOURCE)


@rule("coordinate")
def coordinate(b: Builder) -> bool:
    if not (
        b.match(PARENOP)
        and b.match(INTEGER)
        and b.match(COMMA)
        and b.match(INTEGER)
        and b.match(COMMA)
        and b.match(INTEGER)
    ):
        return False
    if b.match(COMMA):
        if not b.match(INTEGER):
            return False
        orbit = b.peek(0)
        if orbit is None or not MIN_ORBIT <= orbit.integer <= MAX_ORBIT:
            return False
    return b.match(PARENCL)


@rule("material")
def material(b: Builder) -> bool:
    return b.match_any(PRODUCT, RESEARCH)


@rule("number")
def number(b: Builder) -> bool:
    return b.match_any(FLOAT, INTEGER)


@rule("xfer_detail")
def xfer_detail(b: Builder) -> bool:
    return b.match(QUANTITY) and cargo(b) and b.match(EOL)


def _trade_item(b: Builder) -> bool:
    # research is traded whole, products by quantity
    return b.match(RESEARCH) or (b.match(PRODUCT) and b.match(QUANTITY))


def _at_keyword(b: Builder, text: str) -> bool:
    token = b.peek(1)
    return token is not None and keyword(text).matches(token)


ORDER_RULES: Final[Mapping[OrderKeyword, RuleFn]] = MappingProxyType(
    {
        OrderKeyword.ABANDON: abandon,
        OrderKeyword.ASSEMBLE: assemble,
        OrderKeyword.BOMBARD: bombard,
        OrderKeyword.BUY: buy,
        OrderKeyword.CLAIM: claim,
        OrderKeyword.DISASSEMBLE: disassemble,
        OrderKeyword.DISCHARGE: discharge,
        OrderKeyword.DRAFT: draft,
        OrderKeyword.INVADE: invade,
        OrderKeyword.MOVE: move,
        OrderKeyword.NAME: name,
        OrderKeyword.NEWS: news,
        OrderKeyword.PAY: pay,
        OrderKeyword.PROBE: probe,
        OrderKeyword.RAID: raid,
        OrderKeyword.RATION: ration,
        OrderKeyword.RETOOL: retool,
        OrderKeyword.SECRET: secret,
        OrderKeyword.SELL: sell,
        OrderKeyword.SETUP: setup,
        OrderKeyword.SUPPORT: support,
        OrderKeyword.SURVEY: survey,
        OrderKeyword.TRANSFER: transfer,
    }
)
