"""Diagnostics."""

from wraithpy.diagnostics.codes import (
    PARSER_UNCONSUMED_INPUT,
    PARSER_UNKNOWN_ORDER,
    PARSER_UNRECOGNIZED_ORDER,
    WALKER_INVALID_VALUE,
    WALKER_MISSING_ELEMENT,
    WALKER_UNEXPECTED_ELEMENT,
    WALKER_UNKNOWN_ORDER,
    WALKER_VALUE_OUT_OF_RANGE,
    DiagnosticSpec,
)
from wraithpy.diagnostics.diagnostic import Diagnostic, Severity
from wraithpy.diagnostics.report import collect_diagnostics, has_errors, sort_by_line

__all__ = [
    "PARSER_UNCONSUMED_INPUT",
    "PARSER_UNKNOWN_ORDER",
    "PARSER_UNRECOGNIZED_ORDER",
    "WALKER_INVALID_VALUE",
    "WALKER_MISSING_ELEMENT",
    "WALKER_UNEXPECTED_ELEMENT",
    "WALKER_UNKNOWN_ORDER",
    "WALKER_VALUE_OUT_OF_RANGE",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "has_errors",
    "sort_by_line",
]
