"""Parse and print gl.spec.

The file is read line by line. A signature line (``Name(a, b)``) is followed
by indented property lines that belong to it; the association is rebuilt by
:mod:`glext_generator.assemble`. Column-0 ``tag: values`` lines are menus
listing the values a property may take.
"""

import logging
import re
from enum import Enum
from typing import Callable, Optional, TypeVar

from .enums import blank_line, category, comment
from .scanner import Scanner, parse_lines, parse_one
from .types import (
    AllowInside,
    Alias,
    BlankLine,
    ByArray,
    ByReference,
    ByValue,
    CategoryProp,
    Comment,
    Deprecated,
    DlFlag,
    Dlflags,
    ExtensionProp,
    ExtensionToken,
    FunLine,
    FunPassthru,
    Glextmask,
    GlfFlag,
    Glfflags,
    GlxFlag,
    Glxflags,
    Glxropcode,
    Glxsingle,
    Glxvectorequiv,
    Glxvendorpriv,
    Mark,
    Menu,
    NewCategory,
    Note,
    Number,
    Offset,
    Param,
    ParamType,
    Passing,
    Property,
    Question,
    Return,
    ReturnType,
    Signature,
    Subcategory,
    Vectorequiv,
    Version,
    WglFlag,
    Wglflags,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

TAG = re.compile(r"[A-Za-z0-9_\-]+")
TAG_VALUE = re.compile(r"[A-Za-z0-9_\-*.]+")
KEYWORD = re.compile(r"[a-z]+")
WORD = re.compile(r"[A-Za-z0-9_\-]+")
BOUND = re.compile(r"[^\n\]]*")


# ---------------------------------------------------------------------------
# Property payloads
# ---------------------------------------------------------------------------


def question(s: Scanner) -> Question:
    if s.opt("?"):
        return Mark()
    number = s.decimal()
    # Only glxropcode of PointParameteriv carries it; it has no meaning here.
    s.opt("re")
    return Number(number)


def _word(s: Scanner, vocabulary: type[E], kind: str) -> E:
    begin = s.pos
    word = s.match(WORD, kind)
    try:
        result = vocabulary(word)
    except ValueError:
        raise s.unknown(kind, word, begin) from None
    s.blanks()
    return result


def _words(s: Scanner, vocabulary: type[E], kind: str) -> tuple[E, ...]:
    words = []
    while not s.at_end() and WORD.match(s.text, s.pos):
        words.append(_word(s, vocabulary, kind))
    return tuple(words)


def _flag_lists(
    s: Scanner, vocabulary: type[E], kind: str, at_least_one: bool
) -> tuple[tuple[E, ...], Optional[tuple[E, ...]]]:
    flags = _words(s, vocabulary, kind)
    commented = None
    if s.opt("###"):
        s.blanks()
        commented = _words(s, vocabulary, kind)
    if at_least_one and not flags and not commented:
        raise s.error(kind)
    return flags, commented


def _return(s: Scanner) -> Return:
    begin = s.pos
    word = s.match(WORD, "return type")
    try:
        return Return(ReturnType(word))
    except ValueError:
        raise s.unknown("return type", word, begin) from None


def _passing(s: Scanner) -> Passing:
    if s.opt("value"):
        return ByValue()
    if s.opt("reference"):
        return ByReference()
    s.token("array")
    s.literal("[")
    bound = s.match(BOUND, "array bound")
    s.literal("]")
    s.blanks()
    return ByArray(bound, s.opt("retained"))


def _param(s: Scanner) -> Param:
    name = s.identifier_()
    type_name = s.identifier_()
    direction = s.match(KEYWORD, "in or out")
    if direction not in ("in", "out"):
        raise s.error("in or out", pos=s.pos - len(direction))
    s.blanks1()
    return Param(name, ParamType(type_name, direction == "in", _passing(s)))


def _category(s: Scanner) -> CategoryProp:
    current = category(s)
    s.blanks()

    def old(s: Scanner):
        s.token("#")
        s.token("old:")
        return category(s)

    return CategoryProp(current, s.attempt(old))


def _offset(s: Scanner) -> Offset:
    return Offset(s.attempt(question))


def _wglflags(s: Scanner) -> Wglflags:
    flags = _words(s, WglFlag, "wglflags flag")
    if not flags:
        raise s.error("wglflags flag")
    return Wglflags(flags)


def _glxflags(s: Scanner) -> Glxflags:
    return Glxflags(*_flag_lists(s, GlxFlag, "glxflags flag", at_least_one=False))


def _glfflags(s: Scanner) -> Glfflags:
    return Glfflags(*_flag_lists(s, GlfFlag, "glfflags flag", at_least_one=True))


def _glextmask(s: Scanner) -> Glextmask:
    def separator(s: Scanner) -> None:
        s.blanks()
        s.token("|")

    names = s.sep_by(lambda s: s.identifier(), separator)
    return Glextmask(tuple(names))


def _beginend(s: Scanner) -> AllowInside:
    s.literal("allow-inside")
    return AllowInside()


def _named(cls: Callable[[str], Property]) -> Callable[[Scanner], Property]:
    return lambda s: cls(s.identifier())


PROPERTY_PARSERS: dict[str, Callable[[Scanner], Property]] = {
    "return": _return,
    "param": _param,
    "category": _category,
    "subcategory": _named(Subcategory),
    "version": lambda s: Version(*s.digit_pair()),
    "deprecated": lambda s: Deprecated(*s.digit_pair()),
    "glxropcode": lambda s: Glxropcode(question(s)),
    "glxsingle": lambda s: Glxsingle(question(s)),
    "glxvendorpriv": lambda s: Glxvendorpriv(question(s)),
    "offset": _offset,
    "wglflags": _wglflags,
    "dlflags": lambda s: Dlflags(_word(s, DlFlag, "dlflags flag")),
    "glxflags": _glxflags,
    "glfflags": _glfflags,
    "extension": lambda s: ExtensionProp(
        _words(s, ExtensionToken, "extension token")
    ),
    "beginend": _beginend,
    "vectorequiv": _named(Vectorequiv),
    "glxvectorequiv": _named(Glxvectorequiv),
    "alias": _named(Alias),
    "glextmask": _glextmask,
}


# ---------------------------------------------------------------------------
# gl.spec lines
# ---------------------------------------------------------------------------


def property_line(s: Scanner) -> Property:
    """An indented ``keyword[:] payload`` line."""
    s.blanks1()
    begin = s.pos
    keyword = s.match(KEYWORD, "property")
    parser = PROPERTY_PARSERS.get(keyword)
    if parser is None:
        raise s.error(message=f"unknown property {keyword!r}", pos=begin)
    s.opt(":")
    s.blanks()
    prop = parser(s)
    s.blanks()
    s.eol()
    return prop


def fun_passthru(s: Scanner) -> FunPassthru:
    s.literal("passthru:")
    text = s.rest_of_line()
    s.eol()
    return FunPassthru(text)


def new_category(s: Scanner) -> NewCategory:
    s.token("newcategory:")
    cat = category(s)
    s.blanks()
    s.eol()
    return NewCategory(cat)


def menu(s: Scanner) -> Menu:
    name = s.match(TAG, "tag")
    s.literal(":")
    s.blanks()
    values = []
    while not s.at_end() and TAG_VALUE.match(s.text, s.pos):
        values.append(s.match(TAG_VALUE, "tag value"))
        s.blanks()
    s.eol()
    return Menu(name, tuple(values))


def signature(s: Scanner) -> Signature:
    name = s.identifier()
    s.literal("(")
    params = s.sep_by(lambda s: s.identifier(), lambda s: s.token(","))
    s.literal(")")
    s.blanks()
    s.eol()
    return Signature(name, tuple(params))


def note(s: Scanner) -> Note:
    s.token("@@@")
    text = s.rest_of_line()
    s.eol()
    return Note(text)


def _fun_line(s: Scanner) -> FunLine:
    return s.choice(
        comment,
        blank_line,
        fun_passthru,
        new_category,
        menu,
        signature,
        property_line,
        note,
    )


def fun_lines(text: str, source: str = "gl.spec") -> list[FunLine]:
    """Parse a complete gl.spec."""
    return parse_lines(text, _fun_line, source)


def fun_line(text: str) -> FunLine:
    """Parse one line; the trailing newline is optional."""
    return parse_one(text, _fun_line, "fun_line")


# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------


def render_question(q: Question) -> str:
    return "?" if isinstance(q, Mark) else str(q.value)


def render_passing(p: Passing) -> str:
    if isinstance(p, ByValue):
        return "value"
    if isinstance(p, ByReference):
        return "reference"
    if p.retained:
        return f"array [{p.bound}] retained"
    return f"array [{p.bound}]"


def _flags(flags, commented) -> str:
    text = " ".join(f.value for f in flags)
    if commented is not None:
        tail = " ".join(f.value for f in commented)
        text = f"{text} ### {tail}" if text else f"### {tail}"
    return text


def render_payload(prop: Property) -> str:
    """The text after the keyword of a property line."""
    if isinstance(prop, Return):
        return prop.type.value
    if isinstance(prop, Param):
        t = prop.type
        direction = "in" if t.is_input else "out"
        return f"{prop.name}\t\t{t.type} {direction} {render_passing(t.passing)}"
    if isinstance(prop, CategoryProp):
        if prop.old is None:
            return str(prop.category)
        return f"{prop.category}\t\t# old: {prop.old}"
    if isinstance(prop, (Version, Deprecated)):
        return f"{prop.major}.{prop.minor}"
    if isinstance(prop, (Glxropcode, Glxsingle, Glxvendorpriv)):
        return render_question(prop.value)
    if isinstance(prop, Offset):
        return "" if prop.value is None else render_question(prop.value)
    if isinstance(prop, Wglflags):
        return _flags(prop.flags, None)
    if isinstance(prop, Dlflags):
        return prop.flag.value
    if isinstance(prop, (Glxflags, Glfflags)):
        return _flags(prop.flags, prop.commented)
    if isinstance(prop, ExtensionProp):
        return " ".join(t.value for t in prop.tokens)
    if isinstance(prop, AllowInside):
        return "allow-inside"
    if isinstance(prop, (Subcategory, Vectorequiv, Glxvectorequiv, Alias)):
        return prop.name
    if isinstance(prop, Glextmask):
        return "|".join(prop.names)
    raise TypeError(f"not a gl.spec property: {prop!r}")


def _keyword_pad(keyword: str) -> str:
    # Payloads start at column 24 after a leading tab.
    return "\t" * max(1, (24 - (8 + len(keyword)) + 7) // 8)


def render_fun_line(line: FunLine) -> str:
    """Canonical text of one gl.spec line, without the newline."""
    if isinstance(line, Comment):
        return line.text
    if isinstance(line, BlankLine):
        return ""
    if isinstance(line, Property):
        payload = render_payload(line)
        if not payload:
            return f"\t{line.keyword}"
        return f"\t{line.keyword}{_keyword_pad(line.keyword)}{payload}"
    if isinstance(line, Signature):
        return f"{line.name}({', '.join(line.params)})"
    if isinstance(line, FunPassthru):
        return f"passthru:{line.text}"
    if isinstance(line, NewCategory):
        return f"newcategory: {line.category}"
    if isinstance(line, Menu):
        if not line.values:
            return f"{line.name}:"
        return f"{line.name}:\t\t{' '.join(line.values)}"
    if isinstance(line, Note):
        return f"@@@ {line.text}" if line.text else "@@@"
    raise TypeError(f"not a gl.spec line: {line!r}")


def render_fun_lines(lines: list[FunLine]) -> str:
    """Canonical text of a whole gl.spec."""
    return "".join(render_fun_line(line) + "\n" for line in lines)
