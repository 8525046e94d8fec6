"""Diagnostics core types."""

from dataclasses import dataclass
from typing import Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the parser and the tree walker."""

    code: str
    message: str
    line: int
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None

    def __str__(self) -> str:
        return f"{self.line}: {self.severity} {self.code}: {self.message}"
