"""Lower a parse tree into typed order commands."""

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Final

from wraithpy.diagnostics import (
    WALKER_INVALID_VALUE,
    WALKER_MISSING_ELEMENT,
    WALKER_UNEXPECTED_ELEMENT,
    WALKER_UNKNOWN_ORDER,
    WALKER_VALUE_OUT_OF_RANGE,
    DiagnosticSpec,
)
from wraithpy.lexer import Token, TokenKind, canonical_name
from wraithpy.orders.model import (
    MAX_ORBIT,
    MIN_ORBIT,
    Abandon,
    Assemble,
    Bombard,
    Buy,
    Claim,
    Coordinates,
    Disassemble,
    Discharge,
    Draft,
    Invade,
    Move,
    NameOrbit,
    NameSystem,
    NameUnit,
    News,
    Order,
    PayAll,
    PayLocal,
    Probe,
    ProbeSystem,
    Raid,
    RationAll,
    RationLocal,
    Retool,
    Secret,
    Sell,
    Setup,
    SupportAttack,
    SupportDefend,
    Survey,
    SurveySystem,
    Transfer,
    TransferItem,
    Unit,
    Unknown,
    WalkError,
)
from wraithpy.parser import NonTerminal, OrderKeyword, ParseNode, Terminal, iter_tokens

logger = logging.getLogger(__name__)

SETUP_KINDS: Final[frozenset[str]] = frozenset({"colony", "ship"})
SETUP_ACTIONS: Final[frozenset[str]] = frozenset({"transfer"})


class _Reader:
    """Positional cursor over the children of one node.

    Every read either returns a value or records a WalkError and returns a
    default; nothing raises.
    """

    def __init__(
        self,
        node: NonTerminal,
        keyword: OrderKeyword | None = None,
        errors: list[WalkError] | None = None,
        line: int | None = None,
    ) -> None:
        self._node = node
        self._index = 0
        self._errors: list[WalkError] = errors if errors is not None else []
        self._line = line if line is not None else (node.line or 0)
        self._context = str(keyword) if keyword is not None else node.name
        if keyword is not None:
            self.keyword(str(keyword))

    @property
    def line(self) -> int:
        return self._line

    @property
    def errors(self) -> list[WalkError]:
        return self._errors

    def peek(self) -> ParseNode | None:
        if self._index < len(self._node.children):
            return self._node.children[self._index]
        return None

    def at_token(self, *kinds: TokenKind) -> bool:
        child = self.peek()
        return isinstance(child, Terminal) and child.token.kind in kinds

    def at_rule(self, name: str) -> bool:
        child = self.peek()
        return isinstance(child, NonTerminal) and child.name == name

    def token(self, kinds: TokenKind | tuple[TokenKind, ...], what: str) -> Token | None:
        expected = kinds if isinstance(kinds, tuple) else (kinds,)
        child = self.peek()
        if child is None:
            self.error(WALKER_MISSING_ELEMENT, f"expected {what}")
            return None
        self._index += 1
        if not isinstance(child, Terminal) or child.token.kind not in expected:
            self.error(WALKER_UNEXPECTED_ELEMENT, f"expected {what}, got {_describe(child)}")
            return None
        return child.token

    def optional_token(self, *kinds: TokenKind) -> Token | None:
        if not self.at_token(*kinds):
            return None
        child = self.peek()
        if not isinstance(child, Terminal):
            return None
        self._index += 1
        return child.token

    def rule(self, name: str, what: str) -> NonTerminal | None:
        child = self.peek()
        if child is None:
            self.error(WALKER_MISSING_ELEMENT, f"expected {what}")
            return None
        self._index += 1
        if not isinstance(child, NonTerminal) or child.name != name:
            self.error(WALKER_UNEXPECTED_ELEMENT, f"expected {what}, got {_describe(child)}")
            return None
        return child

    def keyword(self, text: str) -> str:
        token = self.token(TokenKind.TEXT, repr(text))
        if token is None:
            return ""
        if token.text.lower() != text:
            self.error(WALKER_UNEXPECTED_ELEMENT, f"expected {text!r}, got {token.text!r}")
        return token.text.lower()

    def word(self, choices: frozenset[str], what: str) -> str:
        token = self.token(TokenKind.TEXT, what)
        if token is None:
            return ""
        value = token.text.lower()
        if value not in choices:
            self.error(WALKER_INVALID_VALUE, f"{what} must be one of {', '.join(sorted(choices))}, got {token.text!r}")
        return value

    # -------------------------
    # Values
    # -------------------------

    def integer(self, what: str) -> int:
        token = self.token(TokenKind.INTEGER, what)
        return token.integer if token is not None else 0

    def csid(self, what: str = "unit id") -> int:
        token = self.token(TokenKind.INTEGER, what)
        if token is None:
            return 0
        return self._at_least(token.integer, 1, what)

    def optional_csid(self, what: str = "unit id") -> int | None:
        token = self.optional_token(TokenKind.INTEGER)
        if token is None:
            return None
        return self._at_least(token.integer, 1, what)

    def quantity(self, what: str = "quantity") -> int:
        token = self.token(TokenKind.INTEGER, what)
        if token is None:
            return 0
        return self._at_least(token.integer, 1, what)

    def percentage(self, what: str) -> int:
        token = self.token(TokenKind.PERCENTAGE, what)
        if token is None:
            return 0
        return self._within(token.integer, 0, 100, what)

    def orbit(self, lowest: int = MIN_ORBIT) -> int:
        token = self.token(TokenKind.INTEGER, "orbit")
        if token is None:
            return 0
        return self._within(token.integer, lowest, MAX_ORBIT, "orbit")

    def quoted(self, what: str) -> str:
        token = self.token(TokenKind.QUOTED_TEXT, what)
        return token.text if token is not None else ""

    def population(self, what: str = "profession") -> str:
        token = self.token(TokenKind.POPULATION, what)
        return canonical_name(token) if token is not None else ""

    def group(self, kind: TokenKind, what: str) -> int:
        token = self.token(kind, what)
        return token.integer if token is not None else 0

    def coordinates(self) -> Coordinates:
        node = self.rule("coordinate", "coordinates")
        if node is None:
            return Coordinates(0, 0, 0)
        reader = _Reader(node, errors=self._errors, line=self._line)
        reader.token(TokenKind.PARENOP, "'('")
        x = reader.integer("x")
        reader.token(TokenKind.COMMA, "','")
        y = reader.integer("y")
        reader.token(TokenKind.COMMA, "','")
        z = reader.integer("z")
        orbit = 0
        if reader.optional_token(TokenKind.COMMA) is not None:
            orbit = reader.orbit()
        reader.token(TokenKind.PARENCL, "')'")
        reader.finish(eol=False)
        if not MIN_ORBIT <= orbit <= MAX_ORBIT:
            orbit = 0
        return Coordinates(x, y, z, orbit)

    def cargo(self, what: str = "cargo") -> Unit:
        return self._unit_rule("cargo", what)

    def material(self, what: str = "material") -> Unit:
        return self._unit_rule("material", what)

    def number(self, what: str) -> float:
        node = self.rule("number", what)
        if node is None:
            return 0.0
        reader = _Reader(node, errors=self._errors, line=self._line)
        token = reader.token((TokenKind.FLOAT, TokenKind.INTEGER), what)
        reader.finish(eol=False)
        if token is None or token.value is None:
            return 0.0
        return float(token.value)

    def finish(self, *, eol: bool = True) -> list[WalkError]:
        if eol:
            self.token(TokenKind.EOL, "end of line")
        trailing = self._node.children[self._index :]
        if trailing:
            self.error(
                WALKER_UNEXPECTED_ELEMENT,
                f"unexpected {_describe(trailing[0])}" + (f" and {len(trailing) - 1} more" if len(trailing) > 1 else ""),
            )
            self._index = len(self._node.children)
        return self._errors

    def error(self, spec: DiagnosticSpec, message: str) -> None:
        self._errors.append(WalkError.from_spec(spec, self._line, f"{self._context}: {message}"))

    def _unit_rule(self, name: str, what: str) -> Unit:
        node = self.rule(name, what)
        if node is None:
            return Unit("")
        reader = _Reader(node, errors=self._errors, line=self._line)
        token = reader.token(
            (TokenKind.POPULATION, TokenKind.PRODUCT, TokenKind.RESEARCH, TokenKind.RESOURCE),
            what,
        )
        reader.finish(eol=False)
        return _unit(token) if token is not None else Unit("")

    def _at_least(self, value: int, lowest: int, what: str) -> int:
        if value < lowest:
            self.error(WALKER_VALUE_OUT_OF_RANGE, f"{what} must be at least {lowest}, got {value}")
        return value

    def _within(self, value: int, lowest: int, highest: int, what: str) -> int:
        if not lowest <= value <= highest:
            self.error(WALKER_VALUE_OUT_OF_RANGE, f"{what} must be in {lowest}..{highest}, got {value}")
        return value


def _unit(token: Token) -> Unit:
    return Unit(canonical_name(token), token.integer)


def _describe(node: ParseNode) -> str:
    if isinstance(node, Terminal):
        return str(node.token)
    return node.name


# -------------------------
# Orders
# -------------------------


def _walk_abandon(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.ABANDON)
    return Abandon(line=r.line, location=r.coordinates(), errors=r.finish())


def _walk_assemble(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.ASSEMBLE)
    order = Assemble(line=r.line, id=r.csid())
    if (token := r.optional_token(TokenKind.DEPOSIT_ID)) is not None:
        order.deposit_id = token.integer
    elif (token := r.optional_token(TokenKind.FACTORY_GROUP_ID)) is not None:
        order.factory_group = token.integer
    elif (token := r.optional_token(TokenKind.MINE_GROUP_ID)) is not None:
        order.mine_group = token.integer
    order.quantity = r.quantity()
    order.unit = r.material()
    order.errors = r.finish()
    return order


def _walk_bombard(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.BOMBARD)
    return Bombard(
        line=r.line,
        id=r.csid(),
        target_id=r.csid("target id"),
        pct_committed=r.percentage("percent committed"),
        errors=r.finish(),
    )


def _read_trade(r: _Reader) -> tuple[int, Unit]:
    if (token := r.optional_token(TokenKind.RESEARCH)) is not None:
        return 0, _unit(token)
    product = r.token(TokenKind.PRODUCT, "product or research")
    unit = _unit(product) if product is not None else Unit("")
    return r.quantity(), unit


def _walk_buy(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.BUY)
    order = Buy(line=r.line, id=r.csid())
    order.quantity, order.unit = _read_trade(r)
    order.bid = r.number("bid")
    order.errors = r.finish()
    return order


def _walk_claim(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.CLAIM)
    return Claim(line=r.line, id=r.csid(), location=r.coordinates(), errors=r.finish())


def _walk_disassemble(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.DISASSEMBLE)
    order = Disassemble(line=r.line, id=r.csid())
    if (token := r.optional_token(TokenKind.FACTORY_GROUP_ID)) is not None:
        order.factory_group = token.integer
    elif (token := r.optional_token(TokenKind.MINE_GROUP_ID)) is not None:
        order.mine_group = token.integer
    order.quantity = r.quantity()
    order.unit = r.material()
    order.errors = r.finish()
    return order


def _walk_discharge(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.DISCHARGE)
    return Discharge(
        line=r.line,
        id=r.csid(),
        quantity=r.quantity(),
        profession=r.population(),
        errors=r.finish(),
    )


def _walk_draft(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.DRAFT)
    return Draft(
        line=r.line,
        id=r.csid(),
        quantity=r.quantity(),
        profession=r.population(),
        errors=r.finish(),
    )


def _walk_invade(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.INVADE)
    return Invade(
        line=r.line,
        id=r.csid(),
        target_id=r.csid("target id"),
        pct_committed=r.percentage("percent committed"),
        errors=r.finish(),
    )


def _walk_move(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.MOVE)
    return Move(line=r.line, id=r.csid(), location=r.coordinates(), errors=r.finish())


def _walk_name(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.NAME)
    unit_id = r.optional_csid()
    if unit_id is not None:
        return NameUnit(line=r.line, id=unit_id, name=r.quoted("name"), errors=r.finish())

    location = r.coordinates()
    name = r.quoted("name")
    errors = r.finish()
    if location.orbit == 0:
        return NameSystem(line=r.line, location=location, name=name, errors=errors)
    return NameOrbit(line=r.line, location=location, name=name, errors=errors)


def _walk_news(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.NEWS)
    return News(
        line=r.line,
        location=r.coordinates(),
        article=r.quoted("article"),
        signature=r.quoted("signature"),
        errors=r.finish(),
    )


def _walk_pay(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.PAY)
    unit_id = r.optional_csid()
    profession = r.population()
    rate = r.number("rate")
    if rate < 0:
        r.error(WALKER_VALUE_OUT_OF_RANGE, f"rate must not be negative, got {rate}")
    errors = r.finish()
    if unit_id is None:
        return PayAll(line=r.line, profession=profession, rate=rate, errors=errors)
    return PayLocal(line=r.line, id=unit_id, profession=profession, rate=rate, errors=errors)


def _walk_probe(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.PROBE)
    unit_id = r.csid()
    if r.at_token(TokenKind.INTEGER):
        return Probe(line=r.line, id=unit_id, orbit=r.orbit(lowest=1), errors=r.finish())
    return ProbeSystem(line=r.line, id=unit_id, location=r.coordinates(), errors=r.finish())


def _walk_raid(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.RAID)
    return Raid(
        line=r.line,
        id=r.csid(),
        target_id=r.csid("target id"),
        pct_committed=r.percentage("percent committed"),
        target_unit=r.cargo(),
        errors=r.finish(),
    )


def _walk_ration(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.RATION)
    unit_id = r.optional_csid()
    rate = r.percentage("ration")
    errors = r.finish()
    if unit_id is None:
        return RationAll(line=r.line, rate=rate, errors=errors)
    return RationLocal(line=r.line, id=unit_id, rate=rate, errors=errors)


def _walk_retool(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.RETOOL)
    return Retool(
        line=r.line,
        id=r.csid(),
        factory_group=r.group(TokenKind.FACTORY_GROUP_ID, "factory group"),
        unit=r.material(),
        errors=r.finish(),
    )


def _walk_secret(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.SECRET)
    return Secret(
        line=r.line,
        handle=r.quoted("handle"),
        game=r.quoted("game"),
        turn=r.integer("turn"),
        token=r.quoted("token"),
        errors=r.finish(),
    )


def _walk_sell(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.SELL)
    order = Sell(line=r.line, id=r.csid())
    order.quantity, order.unit = _read_trade(r)
    order.ask = r.number("ask")
    order.errors = r.finish()
    return order


def _walk_setup(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.SETUP)
    order = Setup(
        line=r.line,
        id=r.csid(),
        location=r.coordinates(),
        kind=r.word(SETUP_KINDS, "kind"),
        action=r.word(SETUP_ACTIONS, "action"),
    )
    r.token(TokenKind.EOL, "end of line")
    while r.at_rule("xfer_detail") and (detail := r.rule("xfer_detail", "transfer detail")) is not None:
        item = _Reader(detail, errors=r.errors, line=detail.line)
        quantity = item.quantity()
        material = item.cargo()
        item.finish()
        order.items.append(TransferItem(material=material, quantity=quantity))
    r.keyword("end")
    order.errors = r.finish()
    return order


def _walk_support(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.SUPPORT)
    unit_id = r.csid()
    support_id = r.csid("supported unit id")
    target_id = r.optional_csid("target id")
    pct_committed = r.percentage("percent committed")
    errors = r.finish()
    if target_id is None:
        return SupportDefend(
            line=r.line,
            id=unit_id,
            support_id=support_id,
            pct_committed=pct_committed,
            errors=errors,
        )
    return SupportAttack(
        line=r.line,
        id=unit_id,
        support_id=support_id,
        target_id=target_id,
        pct_committed=pct_committed,
        errors=errors,
    )


def _walk_survey(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.SURVEY)
    unit_id = r.csid()
    if r.at_rule("coordinate"):
        return SurveySystem(line=r.line, id=unit_id, location=r.coordinates(), errors=r.finish())
    orbit = r.orbit(lowest=1) if r.at_token(TokenKind.INTEGER) else 0
    return Survey(line=r.line, id=unit_id, orbit=orbit, errors=r.finish())


def _walk_transfer(node: NonTerminal) -> Order:
    r = _Reader(node, OrderKeyword.TRANSFER)
    return Transfer(
        line=r.line,
        id=r.csid(),
        quantity=r.quantity(),
        unit=r.cargo(),
        target_id=r.csid("target id"),
        errors=r.finish(),
    )


def _walk_unknown(node: NonTerminal) -> Order:
    line = node.line or 0
    text = " ".join(token.text for token in iter_tokens(node) if token.text)
    error = WalkError.from_spec(WALKER_UNKNOWN_ORDER, line, f"unknown order: {text!r}")
    return Unknown(line=line, text=text, errors=[error])


type OrderWalker = Callable[[NonTerminal], Order]

ORDER_WALKERS: Final[Mapping[OrderKeyword, OrderWalker]] = MappingProxyType(
    {
        OrderKeyword.ABANDON: _walk_abandon,
        OrderKeyword.ASSEMBLE: _walk_assemble,
        OrderKeyword.BOMBARD: _walk_bombard,
        OrderKeyword.BUY: _walk_buy,
        OrderKeyword.CLAIM: _walk_claim,
        OrderKeyword.DISASSEMBLE: _walk_disassemble,
        OrderKeyword.DISCHARGE: _walk_discharge,
        OrderKeyword.DRAFT: _walk_draft,
        OrderKeyword.INVADE: _walk_invade,
        OrderKeyword.MOVE: _walk_move,
        OrderKeyword.NAME: _walk_name,
        OrderKeyword.NEWS: _walk_news,
        OrderKeyword.PAY: _walk_pay,
        OrderKeyword.PROBE: _walk_probe,
        OrderKeyword.RAID: _walk_raid,
        OrderKeyword.RATION: _walk_ration,
        OrderKeyword.RETOOL: _walk_retool,
        OrderKeyword.SECRET: _walk_secret,
        OrderKeyword.SELL: _walk_sell,
        OrderKeyword.SETUP: _walk_setup,
        OrderKeyword.SUPPORT: _walk_support,
        OrderKeyword.SURVEY: _walk_survey,
        OrderKeyword.TRANSFER: _walk_transfer,
    }
)


def walk(tree: NonTerminal) -> tuple[list[Order], list[WalkError]]:
    """Lower an `orders` tree into commands.

    Returns the commands in source order plus every walk error, flattened.
    """
    if tree.name != "orders":
        error = WalkError.from_spec(WALKER_UNEXPECTED_ELEMENT, tree.line or 0, f"expected orders, got {tree.name}")
        return [], [error]

    orders: list[Order] = []
    stray: list[WalkError] = []
    for child in tree.children:
        if isinstance(child, Terminal):
            if child.token.kind not in (TokenKind.EOL, TokenKind.EOF):
                stray.append(
                    WalkError.from_spec(WALKER_UNEXPECTED_ELEMENT, child.token.line, f"unexpected {child.token}")
                )
            continue
        if child.name == "unknown":
            orders.append(_walk_unknown(child))
        elif child.name == "order":
            orders.append(_walk_order(child))
        else:
            stray.append(WalkError.from_spec(WALKER_UNEXPECTED_ELEMENT, child.line or 0, f"unexpected {child.name}"))

    errors = stray + [error for order in orders for error in order.errors]
    errors.sort(key=lambda error: error.line)
    logger.debug("walked %d orders with %d errors", len(orders), len(errors))
    return orders, errors


def _walk_order(node: NonTerminal) -> Order:
    rules = node.child_rules()
    keyword = OrderKeyword.lookup(rules[0].name) if len(rules) == 1 else None
    if keyword is None:
        line = node.line or 0
        error = WalkError.from_spec(WALKER_UNKNOWN_ORDER, line, f"order: expected one order rule, got {len(rules)}")
        return Unknown(line=line, errors=[error])
    return ORDER_WALKERS[keyword](rules[0])
