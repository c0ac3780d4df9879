"""Line tokenizer primitives shared by the three registry grammars.

A :class:`Scanner` walks a resident text buffer. Every primitive either
consumes input and returns a value, or raises :class:`ParseError` without
moving. Alternatives are combined with :meth:`Scanner.choice`, which restores
the position after each failed branch, so no alternative ever leaves input
half-consumed.
"""

import logging
import re
from typing import Callable, Optional, TypeVar

from .errors import ParseError, UnknownVocabularyError

logger = logging.getLogger(__name__)

T = TypeVar("T")
Parser = Callable[["Scanner"], T]

BLANKS = re.compile(r"[ \t]*")
BLANKS1 = re.compile(r"[ \t]+")
IDENTIFIER = re.compile(r"[A-Za-z0-9_]+")
# Vendor-suffixed names contain underscores; they must not swallow the marker.
IDENTIFIER_BEFORE_DEPRECATED = re.compile(r"(?:(?!_DEPRECATED)[A-Za-z0-9_])+")
IDENTIFIER_CHAR = re.compile(r"[A-Za-z0-9_]")
HEX_LITERAL = re.compile(r"0x([0-9A-Fa-f]+)(ull|u)?")
DECIMAL = re.compile(r"[0-9]+")
REST_OF_LINE = re.compile(r"[^\n]*")


class Scanner:
    """Backtracking cursor over one registry text."""

    def __init__(self, text: str, source: str = "<string>") -> None:
        self.text = text
        self.source = source
        self.pos = 0

    # -- diagnostics -------------------------------------------------------

    def error(
        self,
        expected=(),
        message: Optional[str] = None,
        pos: Optional[int] = None,
        cls: type = ParseError,
    ) -> ParseError:
        """Build a position-tagged error; the caller raises it."""
        if pos is None:
            pos = self.pos
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        if isinstance(expected, str):
            expected = (expected,)
        return cls(self.source, line, column, expected, message, offset=pos)

    def unknown(self, kind: str, word: str, pos: int) -> UnknownVocabularyError:
        return self.error(
            message=f"unknown {kind} {word!r}", pos=pos, cls=UnknownVocabularyError
        )

    # -- raw matching ------------------------------------------------------

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def match(self, pattern: re.Pattern, expected: str) -> str:
        m = pattern.match(self.text, self.pos)
        if m is None:
            raise self.error(expected)
        self.pos = m.end()
        return m.group(0)

    def regex(self, pattern: re.Pattern, expected: str) -> re.Match:
        m = pattern.match(self.text, self.pos)
        if m is None:
            raise self.error(expected)
        self.pos = m.end()
        return m

    def not_followed_by(self, pattern: re.Pattern, expected: str) -> None:
        if pattern.match(self.text, self.pos):
            raise self.error(expected)

    def literal(self, s: str) -> str:
        if not self.text.startswith(s, self.pos):
            raise self.error(repr(s))
        self.pos += len(s)
        return s

    def opt(self, s: str) -> bool:
        """Consume ``s`` when present and report whether it was."""
        if self.text.startswith(s, self.pos):
            self.pos += len(s)
            return True
        return False

    # -- primitives --------------------------------------------------------

    def blanks(self) -> str:
        return self.match(BLANKS, "blanks")

    def blanks1(self) -> str:
        return self.match(BLANKS1, "blanks")

    def token(self, s: str) -> str:
        """A literal followed by any run of blanks."""
        self.literal(s)
        self.blanks()
        return s

    def identifier(self) -> str:
        return self.match(IDENTIFIER, "identifier")

    def identifier_(self) -> str:
        """An identifier followed by any run of blanks."""
        name = self.identifier()
        self.blanks()
        return name

    def identifier_before_deprecated(self) -> str:
        return self.match(IDENTIFIER_BEFORE_DEPRECATED, "identifier")

    def hex_literal(self) -> tuple[int, int, Optional[str]]:
        """Read ``0x<digits>[u|ull]``; returns value, digit count and suffix."""
        m = self.regex(HEX_LITERAL, "hexadecimal literal")
        digits = m.group(1)
        return int(digits, 16), len(digits), m.group(2)

    def decimal(self) -> int:
        return int(self.match(DECIMAL, "decimal literal"))

    def digit_pair(self) -> tuple[int, int]:
        """``<major>.<minor>`` as used by version and deprecated."""
        major = self.decimal()
        self.literal(".")
        return major, self.decimal()

    def rest_of_line(self) -> str:
        return self.match(REST_OF_LINE, "text")

    def eol(self) -> None:
        """The line terminator; a final line may end at end of input."""
        if self.at_end():
            return
        if self.text[self.pos] != "\n":
            raise self.error("end of line")
        self.pos += 1

    # -- combinators -------------------------------------------------------

    def attempt(self, parser: Parser[T]) -> Optional[T]:
        """Run ``parser``; on failure restore the position and return None."""
        start = self.pos
        try:
            return parser(self)
        except ParseError:
            self.pos = start
            return None

    def choice(self, *parsers: Parser[T]) -> T:
        """Ordered choice: the first alternative that succeeds wins.

        When all fail, the error that got furthest into the input is
        raised; errors at the same offset have their expectations merged.
        """
        start = self.pos
        best: Optional[ParseError] = None
        for parser in parsers:
            try:
                return parser(self)
            except ParseError as e:
                self.pos = start
                best = _furthest(best, e)
        if best is None:
            raise self.error("input")
        raise best

    def many(self, parser: Parser[T]) -> list[T]:
        results = []
        while True:
            start = self.pos
            item = self.attempt(parser)
            if item is None or self.pos == start:
                self.pos = start
                return results
            results.append(item)

    def sep_by(self, parser: Parser[T], separator: Parser[object]) -> list[T]:
        first = self.attempt(parser)
        if first is None:
            return []
        results = [first]
        while True:
            start = self.pos
            try:
                separator(self)
                results.append(parser(self))
            except ParseError:
                self.pos = start
                return results


def _furthest(best: Optional[ParseError], e: ParseError) -> ParseError:
    if best is None or e.offset > best.offset:
        return e
    if e.offset < best.offset:
        return best
    # Vocabulary errors are more precise than a list of expectations.
    if isinstance(best, UnknownVocabularyError) or best.message:
        return best
    if isinstance(e, UnknownVocabularyError) or e.message:
        return e
    expected = best.expected + tuple(x for x in e.expected if x not in best.expected)
    return ParseError(
        best.source, best.line, best.column, expected, None, offset=best.offset
    )


def parse_lines(text: str, line_parser: Parser[T], source: str) -> list[T]:
    """Apply ``line_parser`` until the whole text is consumed."""
    scanner = Scanner(text, source)
    lines = []
    while not scanner.at_end():
        start = scanner.pos
        lines.append(line_parser(scanner))
        if scanner.pos == start:
            raise scanner.error("line")
    logger.debug("%s: parsed %d lines", source, len(lines))
    return lines


def parse_one(text: str, line_parser: Parser[T], source: str) -> T:
    """Parse exactly one line; the text must contain nothing else."""
    scanner = Scanner(text, source)
    result = line_parser(scanner)
    if not scanner.at_end():
        raise scanner.error("end of input")
    return result
