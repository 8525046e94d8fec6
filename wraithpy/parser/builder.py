"""Backtracking parse builder.

Grammar rules drive the builder through `enter`, `match` and `exit`. A rule
that fails rewinds the cursor to where it was entered and its partial subtree
is dropped. The debug tree records every attempt, successful or not.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from functools import cache, wraps

from wraithpy.lexer import Token, TokenKind
from wraithpy.parser.debug_tree import DebugMatch, DebugRule
from wraithpy.parser.tree import NonTerminal, ParseNode, Terminal

NOT_ALL_TOKENS_CONSUMED = "not all tokens consumed"
ROOT_RULE_FAILED = "root rule failed"


@dataclass(frozen=True, slots=True)
class TokenPattern:
    """Terminal to match: a token kind, optionally with keyword text."""

    kind: TokenKind
    keyword: str | None = None

    def matches(self, token: Token) -> bool:
        if token.kind != self.kind:
            return False
        return self.keyword is None or token.text.lower() == self.keyword

    def __str__(self) -> str:
        if self.keyword is not None:
            return repr(self.keyword)
        return self.kind.name


@cache
def keyword(text: str) -> TokenPattern:
    return TokenPattern(TokenKind.TEXT, text.lower())


@dataclass(slots=True)
class _Frame:
    name: str
    start: int
    children: list[ParseNode] = field(default_factory=list)


class Builder:
    """Cursor over a prepared token list plus the frame stack of open rules."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tuple(tokens)
        self._current = -1
        self._frames: list[_Frame] = []
        self._debug_frames: list[DebugRule] = []
        self._parse_tree: NonTerminal | None = None
        self._debug_tree: DebugRule | None = None
        self._error: str | None = None
        self._furthest_failure = -1

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    @property
    def current(self) -> int:
        """Index of the last consumed token, -1 before the first match."""
        return self._current

    @property
    def parse_tree(self) -> NonTerminal | None:
        return self._parse_tree

    @property
    def debug_tree(self) -> DebugRule | None:
        return self._debug_tree

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def furthest_failure(self) -> Token | None:
        """Token at the furthest position where a match failed."""
        return self._token_at(self._furthest_failure)

    def peek(self, offset: int) -> Token | None:
        """Token at `current + offset`; 0 is the last consumed token."""
        self._require_frame("peek")
        return self._token_at(self._current + offset)

    def check(self, kind: TokenKind, offset: int = 1) -> bool:
        token = self.peek(offset)
        return token is not None and token.kind == kind

    def match(self, pattern: TokenPattern) -> bool:
        self._require_frame("match")
        index = self._current + 1
        token = self._token_at(index)
        matched = token is not None and pattern.matches(token)
        self._debug_frames[-1].children.append(DebugMatch(expected=str(pattern), actual=token, matched=matched))

        if token is None or not matched:
            self._furthest_failure = max(self._furthest_failure, index)
            return False

        self._frames[-1].children.append(Terminal(token))
        self._current = index
        return True

    def match_any(self, *patterns: TokenPattern) -> bool:
        return any(self.match(pattern) for pattern in patterns)

    def enter(self, name: str) -> None:
        next_token = self._token_at(self._current + 1)
        line = next_token.line if next_token is not None else self._last_line()
        debug = DebugRule(name=name, line=line)
        if self._debug_frames:
            self._debug_frames[-1].children.append(debug)
        self._frames.append(_Frame(name=name, start=self._current))
        self._debug_frames.append(debug)

    def exit(self, success: bool) -> bool:
        self._require_frame("exit")
        frame = self._frames.pop()
        debug = self._debug_frames.pop()

        if success and not self._frames:
            # root frame: the whole input must be consumed
            if self._current == len(self._tokens) - 1:
                self._parse_tree = NonTerminal(frame.name, tuple(frame.children))
            else:
                self._error = NOT_ALL_TOKENS_CONSUMED
                success = False
        elif success:
            self._frames[-1].children.append(NonTerminal(frame.name, tuple(frame.children)))
        else:
            self._current = frame.start
            if not self._frames:
                self._error = ROOT_RULE_FAILED

        debug.result = success
        if not self._debug_frames:
            self._debug_tree = debug
        return success

    def _require_frame(self, operation: str) -> None:
        if not self._frames:
            raise RuntimeError(f"Builder.{operation}() called with no open rule")

    def _token_at(self, index: int) -> Token | None:
        if 0 <= index < len(self._tokens):
            return self._tokens[index]
        return None

    def _last_line(self) -> int:
        return self._tokens[-1].line if self._tokens else 1


type RuleFn = Callable[[Builder], bool]


def rule(name: str) -> Callable[[RuleFn], RuleFn]:
    """Wrap a grammar function in `enter(name)` / `exit(result)`."""

    def decorate(fn: RuleFn) -> RuleFn:
        @wraps(fn)
        def wrapper(builder: Builder) -> bool:
            builder.enter(name)
            return builder.exit(fn(builder))

        return wrapper

    return decorate
