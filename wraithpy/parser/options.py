"""Parser modes and configuration options."""

from dataclasses import dataclass
from enum import StrEnum


class ParseMode(StrEnum):
    """Top-level parser behavior profile."""

    FAIL_FAST = "fail_fast"
    RECOVER = "recover"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Flags controlling error recovery and debug output."""

    stop_on_first_error: bool = True
    emit_debug_trace: bool = False

    @property
    def mode(self) -> ParseMode:
        return ParseMode.FAIL_FAST if self.stop_on_first_error else ParseMode.RECOVER

    @staticmethod
    def for_mode(mode: ParseMode, *, emit_debug_trace: bool = False) -> "ParserOptions":
        if mode == ParseMode.RECOVER:
            return ParserOptions(
                stop_on_first_error=False,
                emit_debug_trace=emit_debug_trace,
            )

        return ParserOptions(
            stop_on_first_error=True,
            emit_debug_trace=emit_debug_trace,
        )
