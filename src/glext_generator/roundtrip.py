"""Parse, print, reparse and compare: the self-check of the three printers."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, NamedTuple, Optional, Union

from .enums import enum_lines, render_enum_lines
from .errors import ParseError
from .functions import fun_lines, render_fun_lines
from .typemap import render_tm_lines, tm_lines

logger = logging.getLogger(__name__)


class Grammar(NamedTuple):
    parse: Callable[[str, str], list]
    render: Callable[[list], str]


GRAMMARS = {
    "enum": Grammar(enum_lines, render_enum_lines),
    "tm": Grammar(tm_lines, render_tm_lines),
    "fun": Grammar(fun_lines, render_fun_lines),
}


class RoundTripStatus(Enum):
    OK = "ok"
    ORIGINAL_PARSE_ERROR = "original-parse-error"
    PRINTED_PARSE_ERROR = "printed-parse-error"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class RoundTripResult:
    status: RoundTripStatus
    error: Optional[ParseError] = None
    mismatch_at: Optional[int] = None  # index of the first differing line

    @property
    def ok(self) -> bool:
        return self.status is RoundTripStatus.OK

    def message(self) -> str:
        if self.status is RoundTripStatus.OK:
            return "round trip ok"
        if self.status is RoundTripStatus.ORIGINAL_PARSE_ERROR:
            return f"error on original parse: {self.error}"
        if self.status is RoundTripStatus.PRINTED_PARSE_ERROR:
            return f"error on printed-result parse: {self.error}"
        return f"structural mismatch at line record {self.mismatch_at}"


def _grammar(kind: str) -> Grammar:
    try:
        return GRAMMARS[kind]
    except KeyError:
        raise ValueError(
            f"unknown registry kind {kind!r}, expected one of {sorted(GRAMMARS)}"
        ) from None


def canonical_text(text: str, kind: str, source: str = "<string>") -> str:
    """``render(parse(text))``; raises ParseError when ``text`` is invalid."""
    grammar = _grammar(kind)
    return grammar.render(grammar.parse(text, source))


def _first_difference(a: list, b: list) -> int:
    for i, (x, y) in enumerate(zip(a, b)):
        if x != y:
            return i
    return min(len(a), len(b))


def check_text(text: str, kind: str, source: str = "<string>") -> RoundTripResult:
    """Round-trip ``text`` and report how it went."""
    grammar = _grammar(kind)
    try:
        first = grammar.parse(text, source)
    except ParseError as e:
        return RoundTripResult(RoundTripStatus.ORIGINAL_PARSE_ERROR, error=e)
    printed = grammar.render(first)
    try:
        second = grammar.parse(printed, f"{source} (printed)")
    except ParseError as e:
        return RoundTripResult(RoundTripStatus.PRINTED_PARSE_ERROR, error=e)
    if first != second:
        return RoundTripResult(
            RoundTripStatus.MISMATCH, mismatch_at=_first_difference(first, second)
        )
    logger.debug("%s: %d lines survive the round trip", source, len(first))
    return RoundTripResult(RoundTripStatus.OK)


def reparse(path: Union[str, Path], kind: str) -> RoundTripResult:
    """Read a registry file and check that its printed form parses back."""
    path = Path(path)
    return check_text(path.read_text(), kind, str(path))
