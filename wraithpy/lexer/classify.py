"""Domain vocabulary used to refine TEXT tokens."""

from typing import Final

from wraithpy.lexer.tokens import Token, TokenKind

# alias -> canonical name
POPULATION_NAMES: Final[dict[str, str]] = {
    "civilian": "civilian",
    "construction-crew": "construction-crew",
    "professional": "professional",
    "soldier": "soldier",
    "spy": "spy",
    "unskilled-worker": "unskilled-worker",
    "unsk": "unskilled-worker",
}

RESOURCE_NAMES: Final[dict[str, str]] = {
    "fuel": "fuel",
    "gold": "gold",
    "metallics": "metallics",
    "non-metallics": "non-metallics",
}

PRODUCT_NAMES: Final[dict[str, str]] = {
    "anti-missile": "anti-missile",
    "assault-craft": "assault-craft",
    "assault-weapons": "assault-weapons",
    "automation": "automation",
    "consumer-goods": "consumer-goods",
    "energy-shield": "energy-shield",
    "energy-weapon": "energy-weapon",
    "factory": "factory",
    "farm": "farm",
    "food": "food",
    "hyper-engine": "hyper-engine",
    "life-support": "life-support",
    "light-structural-unit": "light-structural-unit",
    "lsu": "light-structural-unit",
    "military-robot": "military-robot",
    "military-supplies": "military-supplies",
    "mine": "mine",
    "missile": "missile",
    "missile-launcher": "missile-launcher",
    "sensor": "sensor",
    "space-drive": "space-drive",
    "structural-unit": "structural-unit",
    "su": "structural-unit",
    "super-light-structural-unit": "super-light-structural-unit",
    "slsu": "super-light-structural-unit",
    "transport": "transport",
}

RESEARCH_NAME: Final[str] = "research"

# prefix -> kind, for `<prefix><integer>` identifiers
_NUMBERED_PREFIXES: Final[tuple[tuple[str, TokenKind], ...]] = (
    ("dp-", TokenKind.DEPOSIT_ID),
    ("fg-", TokenKind.FACTORY_GROUP_ID),
    ("mg-", TokenKind.MINE_GROUP_ID),
)


def classify(text: str) -> tuple[TokenKind, int | None]:
    """Refine a TEXT lexeme into a domain kind.

    Returns the kind and the numeric payload (id number, tech level), or
    `(TokenKind.TEXT, None)` when nothing matches. First match wins.
    """
    lowered = text.lower()

    if lowered in POPULATION_NAMES:
        return TokenKind.POPULATION, None

    if lowered in RESOURCE_NAMES:
        return TokenKind.RESOURCE, None

    for prefix, kind in _NUMBERED_PREFIXES:
        if lowered.startswith(prefix):
            number = _parse_int(lowered[len(prefix) :])
            if number is not None:
                return kind, number

    if lowered == RESEARCH_NAME:
        return TokenKind.RESEARCH, None
    if lowered.startswith("tl-"):
        number = _parse_int(lowered[3:])
        if number is not None:
            return TokenKind.RESEARCH, number

    product, tech_level = split_tech_level(lowered)
    if product in PRODUCT_NAMES:
        return TokenKind.PRODUCT, tech_level

    return TokenKind.TEXT, None


def split_tech_level(text: str) -> tuple[str, int | None]:
    """Split `name-<n>` into `(name, n)`; names without a numeric suffix pass through."""
    head, sep, tail = text.rpartition("-")
    if not sep or not head:
        return text, None
    number = _parse_int(tail)
    if number is None:
        return text, None
    return head, number


def canonical_name(token: Token) -> str:
    """Canonical vocabulary name for a domain token (aliases expanded)."""
    lowered = token.text.lower()
    match token.kind:
        case TokenKind.POPULATION:
            return POPULATION_NAMES.get(lowered, lowered)
        case TokenKind.RESOURCE:
            return RESOURCE_NAMES.get(lowered, lowered)
        case TokenKind.RESEARCH:
            return RESEARCH_NAME
        case TokenKind.PRODUCT:
            product, _ = split_tech_level(lowered)
            return PRODUCT_NAMES.get(product, product)
        case _:
            return lowered


def _parse_int(text: str) -> int | None:
    if not text or not text.isascii() or not text.isdigit():
        return None
    return int(text)
