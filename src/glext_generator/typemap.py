"""Parse gl.tm, the table mapping gl.spec type names to C types."""

import logging
import re
from types import MappingProxyType
from typing import Iterator, Mapping

from .enums import blank_line
from .errors import TypeMapError
from .scanner import IDENTIFIER, Scanner, parse_lines, parse_one
from .types import BlankLine, TmComment, TmEntry, TmLine, TmType

logger = logging.getLogger(__name__)

# Spellings that are matched verbatim and never take a trailing '*'.
_FIXED_SPELLINGS = [
    TmType.CONST_GLUBYTE_STAR,
    TmType.GLVOID_STAR_CONST,
    TmType.GLU_NURBS_STAR,
    TmType.GLU_QUADRIC_STAR,
    TmType.GLU_TESSELATOR_STAR,
    TmType.CL_CONTEXT_STAR,
    TmType.CL_EVENT_STAR,
    TmType.GLFUNCPTR,
    TmType.STAR,
]
_FIXED = set(_FIXED_SPELLINGS)
_SCALARS = {t.value: t for t in TmType if t not in _FIXED}

_COMMENT = re.compile(r"[ \t]*#[^\n]*")


def _tm_comment(s: Scanner) -> TmComment:
    text = s.match(_COMMENT, "comment")
    s.eol()
    return TmComment(text)


def _tm_type(s: Scanner) -> tuple[TmType, bool]:
    for t in _FIXED_SPELLINGS:
        if s.text.startswith(t.value + ",", s.pos):
            s.pos += len(t.value)
            return t, False
    begin = s.pos
    word = s.match(IDENTIFIER, "type name")
    tm_type = _SCALARS.get(word)
    if tm_type is None:
        raise s.unknown("type map spelling", word, begin)
    return tm_type, s.opt("*")


def _tm_entry(s: Scanner) -> TmEntry:
    name = s.identifier()
    s.token(",*,*,")
    tm_type, pointer = _tm_type(s)
    s.literal(",*,*")
    s.opt(",")  # the GLenum line carries a stray trailing comma
    s.blanks()
    s.eol()
    return TmEntry(name, tm_type, pointer)


def _tm_line(s: Scanner) -> TmLine:
    return s.choice(_tm_comment, blank_line, _tm_entry)


def tm_lines(text: str, source: str = "gl.tm") -> list[TmLine]:
    """Parse a complete gl.tm."""
    return parse_lines(text, _tm_line, source)


def tm_line(text: str) -> TmLine:
    """Parse one gl.tm line; the trailing newline is optional."""
    return parse_one(text, _tm_line, "tm_line")


def render_tm_line(line: TmLine) -> str:
    """Canonical text of one gl.tm line, without the newline."""
    if isinstance(line, TmComment):
        return line.text
    if isinstance(line, BlankLine):
        return ""
    if isinstance(line, TmEntry):
        star = "*" if line.pointer else ""
        return f"{line.name},*,*,\t\t\t{line.type.value}{star},*,*"
    raise TypeError(f"not a gl.tm line: {line!r}")


def render_tm_lines(lines: list[TmLine]) -> str:
    """Canonical text of a whole gl.tm."""
    return "".join(render_tm_line(line) + "\n" for line in lines)


class TypeMap(Mapping):
    """Read-only ``name -> (TmType, pointer)`` lookup built from gl.tm."""

    def __init__(self, entries: Mapping[str, tuple[TmType, bool]]) -> None:
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def from_lines(cls, lines: list[TmLine]) -> "TypeMap":
        entries: dict[str, tuple[TmType, bool]] = {}
        for line in lines:
            if isinstance(line, TmEntry):
                if line.name in entries:
                    logger.debug("type map entry %s redefined", line.name)
                entries[line.name] = (line.type, line.pointer)
        return cls(entries)

    def __getitem__(self, name: str) -> tuple[TmType, bool]:
        try:
            return self._entries[name]
        except KeyError:
            raise TypeMapError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def get(self, name, default=None):
        return self._entries.get(name, default)

    def c_type(self, name: str) -> str:
        """The C spelling of ``name``, e.g. ``GLvoid*`` for VoidPointer."""
        tm_type, pointer = self[name]
        return tm_type.c_type + ("*" if pointer else "")


def make_type_map(text: str, source: str = "gl.tm") -> TypeMap:
    """Parse gl.tm and build the lookup table; last duplicate wins."""
    type_map = TypeMap.from_lines(tm_lines(text, source))
    logger.debug("%s: %d type map entries", source, len(type_map))
    return type_map
