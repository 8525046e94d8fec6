"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final

from wraithpy.diagnostics.diagnostic import Diagnostic, Severity


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None

    def at(self, line: int, message: str | None = None) -> Diagnostic:
        return Diagnostic(
            code=self.code,
            message=message if message is not None else self.message,
            line=line,
            severity=self.severity,
            hint=self.hint,
            category=self.category,
        )


PARSER_UNRECOGNIZED_ORDER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNRECOGNIZED_ORDER",
    message="Line does not match any order.",
    hint="Check the order keyword and its arguments, or parse in recovery mode to continue past it.",
    severity="error",
    category="parser",
)

PARSER_UNKNOWN_ORDER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNKNOWN_ORDER",
    message="Unknown order skipped.",
    severity="warning",
    category="parser",
)

PARSER_UNCONSUMED_INPUT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNCONSUMED_INPUT",
    message="Not all tokens consumed.",
    severity="error",
    category="parser",
)

WALKER_MISSING_ELEMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="WALKER_MISSING_ELEMENT",
    message="Expected element is missing.",
    severity="error",
    category="walker",
)

WALKER_UNEXPECTED_ELEMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="WALKER_UNEXPECTED_ELEMENT",
    message="Unexpected element.",
    severity="error",
    category="walker",
)

WALKER_VALUE_OUT_OF_RANGE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="WALKER_VALUE_OUT_OF_RANGE",
    message="Value is out of range.",
    severity="error",
    category="walker",
)

WALKER_INVALID_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="WALKER_INVALID_VALUE",
    message="Invalid value.",
    severity="error",
    category="walker",
)

WALKER_UNKNOWN_ORDER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="WALKER_UNKNOWN_ORDER",
    message="Unknown order.",
    hint="Orders start with a keyword such as `bombard`, `move` or `setup`.",
    severity="error",
    category="walker",
)
