"""Concrete parse tree."""

from dataclasses import dataclass

from wraithpy.lexer import Token


@dataclass(frozen=True, slots=True)
class Terminal:
    """Leaf holding a matched token."""

    token: Token


@dataclass(frozen=True, slots=True)
class NonTerminal:
    """Rule node; children are in match order."""

    name: str
    children: tuple["ParseNode", ...]

    @property
    def line(self) -> int | None:
        """Line of the first token under this node."""
        for token in iter_tokens(self):
            return token.line
        return None

    def child_rules(self, name: str | None = None) -> list["NonTerminal"]:
        return [
            child
            for child in self.children
            if isinstance(child, NonTerminal) and (name is None or child.name == name)
        ]


type ParseNode = Terminal | NonTerminal


def iter_tokens(node: ParseNode):
    """Yield the tokens under a node, left to right."""
    if isinstance(node, Terminal):
        yield node.token
        return
    for child in node.children:
        yield from iter_tokens(child)


def render_tree(node: ParseNode) -> str:
    lines: list[str] = []

    def walk(current: ParseNode, depth: int) -> None:
        indent = "  " * depth
        if isinstance(current, Terminal):
            token = current.token
            lines.append(f"{indent}{token.kind.name} line={token.line} text={token.text!r}")
            return
        lines.append(f"{indent}{current.name}")
        for child in current.children:
            walk(child, depth + 1)

    walk(node, 0)
    return "\n".join(lines)
