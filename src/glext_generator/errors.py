"""Exceptions raised while parsing and assembling the registry files."""

from typing import Optional, Sequence


class SpecError(Exception):
    """Base class for every error raised by the generator."""


class ParseError(SpecError):
    """A line did not match any alternative of its grammar."""

    def __init__(
        self,
        source: str,
        line: int,
        column: int,
        expected: Sequence[str] = (),
        message: Optional[str] = None,
        offset: int = 0,
    ) -> None:
        self.source = source
        self.line = line
        self.column = column
        self.expected = tuple(expected)
        self.message = message
        self.offset = offset
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"{self.source}:{self.line}:{self.column}"
        if self.message:
            return f"{where}: {self.message}"
        if self.expected:
            return f"{where}: expected {' or '.join(self.expected)}"
        return f"{where}: parse error"


class UnknownVocabularyError(ParseError):
    """A flag, extension or type spelling outside the recognized set."""


class AssemblyError(SpecError):
    """The parsed lines are individually valid but inconsistent."""


class CrossReferenceError(AssemblyError):
    """Two records that must agree do not."""


class TypeMapError(CrossReferenceError):
    """A type name needed for rendering is missing from the type map."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"type {name!r} is not in the type map")


class OccurrenceError(AssemblyError):
    """A property is missing or occurs more often than allowed."""

    def __init__(self, function: str, kind: str, count: int) -> None:
        self.function = function
        self.kind = kind
        self.count = count
        if count == 0:
            detail = f"has no {kind} property"
        else:
            detail = f"has {count} {kind} properties"
        super().__init__(f"function {function} {detail}")


class GroupingError(AssemblyError):
    """An enum member appears before any category start line."""
