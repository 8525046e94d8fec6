"""Debug trace of rule attempts and terminal matches."""

from __future__ import annotations

from dataclasses import dataclass, field

from wraithpy.lexer import Token


@dataclass(frozen=True, slots=True)
class DebugMatch:
    """One terminal match attempt."""

    expected: str
    actual: Token | None
    matched: bool

    @property
    def label(self) -> str:
        if self.actual is None:
            return f"<no tokens left> ≠ {self.expected}"
        relation = "=" if self.matched else "≠"
        return f"{self.actual} {relation} {self.expected}"


@dataclass(slots=True)
class DebugRule:
    """One rule attempt.

    `line` is the line of the next token when the rule was entered.
    `result` stays None until the rule exits.
    """

    name: str
    line: int
    result: bool | None = None
    children: list[DebugNode] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.name}({str(self.result).lower()})"

    def rules(self, name: str | None = None) -> list[DebugRule]:
        return [
            child
            for child in self.children
            if isinstance(child, DebugRule) and (name is None or child.name == name)
        ]

    def matches(self) -> list[DebugMatch]:
        return [child for child in self.children if isinstance(child, DebugMatch)]


type DebugNode = DebugRule | DebugMatch


def render_debug_tree(node: DebugNode) -> str:
    lines: list[str] = []

    def walk(current: DebugNode, depth: int) -> None:
        lines.append(f"{'  ' * depth}{current.label}")
        if isinstance(current, DebugRule):
            for child in current.children:
                walk(child, depth + 1)

    walk(node, 0)
    return "\n".join(lines)
