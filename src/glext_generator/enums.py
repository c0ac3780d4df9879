"""Parse and print enumext.spec.

The printer writes the canonical rendering: the one whose re-parse gives
back the same line records. The source aligns on 8-column tab stops, so
spaces, tabs and hexadecimal zero-padding may differ from a hand-edited
file, but never the parsed records.
"""

import logging
import re

from .scanner import IDENTIFIER_CHAR, Scanner, parse_lines, parse_one
from .types import (
    BlankLine,
    Category,
    Comment,
    Deci,
    Enumerant,
    EnumLine,
    ExtensionCategory,
    Hex,
    HexSuffix,
    Identifier,
    NameCategory,
    Passthru,
    Start,
    Use,
    Value,
    Vendor,
    VersionCategory,
)

logger = logging.getLogger(__name__)

ANNOTATION = re.compile(r"[A-Za-z0-9]+")
CATEGORY_NAME = re.compile(r"[A-Za-z0-9_\-]+")
COMMENT_TEXT = re.compile(r"[^\n]+")

# Longest first: MESAX before MESA, SGIS and SGIX before SGI.
VENDOR_PREFIXES = sorted(Vendor, key=lambda v: (-len(v.value), v.value))


# ---------------------------------------------------------------------------
# Shared grammar pieces, also used by gl.spec
# ---------------------------------------------------------------------------


def comment(s: Scanner) -> Comment:
    start = s.pos
    s.blanks()
    s.literal("#")
    s.rest_of_line()
    text = s.text[start:s.pos]
    s.eol()
    return Comment(text)


def blank_line(s: Scanner) -> BlankLine:
    begin = s.pos
    s.blanks()
    if s.at_end() and s.pos == begin:
        raise s.error("blank line")
    s.eol()
    return BlankLine()


def _version_category(s: Scanner) -> VersionCategory:
    s.literal("VERSION_")
    major = s.decimal()
    s.literal("_")
    minor = s.decimal()
    return VersionCategory(major, minor, s.opt("_DEPRECATED"))


def _vendor(s: Scanner) -> Vendor:
    for vendor in VENDOR_PREFIXES:
        if s.text.startswith(vendor.value + "_", s.pos):
            s.pos += len(vendor.value)
            return vendor
    raise s.error("vendor prefix")


def _extension_category(s: Scanner) -> ExtensionCategory:
    vendor = _vendor(s)
    s.literal("_")
    name = s.identifier_before_deprecated()
    return ExtensionCategory(vendor, name, s.opt("_DEPRECATED"))


def _name_category(s: Scanner) -> NameCategory:
    return NameCategory(s.match(CATEGORY_NAME, "category name"))


def category(s: Scanner) -> Category:
    """A category word; callers check what follows it.

    Each alternative must be followed by a non-name character, otherwise
    ``VERSION_1_2_foo`` would stop after ``VERSION_1_2``.
    """

    def whole(parser):
        def run(s: Scanner):
            result = parser(s)
            s.not_followed_by(CATEGORY_NAME, "end of category")
            return result

        return run

    return s.choice(
        whole(_version_category), whole(_extension_category), whole(_name_category)
    )


# ---------------------------------------------------------------------------
# enumext.spec lines
# ---------------------------------------------------------------------------


def value(s: Scanner) -> Value:
    def hex_value(s: Scanner) -> Hex:
        number, width, suffix = s.hex_literal()
        s.not_followed_by(IDENTIFIER_CHAR, "end of hexadecimal literal")
        return Hex(number, width, HexSuffix(suffix) if suffix else None)

    def deci_value(s: Scanner) -> Deci:
        number = s.decimal()
        s.not_followed_by(IDENTIFIER_CHAR, "end of decimal literal")
        return Deci(number)

    def identifier_value(s: Scanner) -> Identifier:
        return Identifier(s.identifier())

    return s.choice(hex_value, deci_value, identifier_value)


def start(s: Scanner) -> Start:
    cat = category(s)
    s.blanks()
    s.token("enum:")
    annotation = s.attempt(lambda s: s.match(ANNOTATION, "annotation"))
    s.blanks()
    s.eol()
    return Start(cat, annotation)


def passthru(s: Scanner) -> Passthru:
    s.token("passthru:")
    s.token("/*")
    end = s.text.find("*/", s.pos)
    newline = s.text.find("\n", s.pos)
    if end < 0 or (0 <= newline < end):
        raise s.error("'*/'")
    text = s.text[s.pos:end]
    s.pos = end + 2
    s.eol()
    return Passthru(text)


def enumerant(s: Scanner) -> Enumerant:
    s.blanks1()
    name = s.identifier_()
    s.literal("=")
    s.blanks()
    v = value(s)

    def trailing_comment(s: Scanner) -> str:
        s.blanks()
        s.literal("#")
        s.blanks()
        return s.match(COMMENT_TEXT, "comment")

    text = s.attempt(trailing_comment)
    s.blanks()
    s.eol()
    return Enumerant(name, v, text)


def use(s: Scanner) -> Use:
    s.blanks1()
    s.token("use")
    cat = s.identifier_()
    name = s.identifier_()
    s.eol()
    return Use(cat, name)


def _enum_line(s: Scanner) -> EnumLine:
    return s.choice(comment, blank_line, start, passthru, enumerant, use)


def enum_lines(text: str, source: str = "enumext.spec") -> list[EnumLine]:
    """Parse a complete enumext.spec."""
    return parse_lines(text, _enum_line, source)


def enum_line(text: str) -> EnumLine:
    """Parse one line; the trailing newline is optional."""
    return parse_one(text, _enum_line, "enum_line")


# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------


def tabstop(column: int, text: str) -> str:
    """Tabs that bring ``text`` to ``column`` on 8-column tab stops."""
    return "\t" * ((column - len(text)) // 8)


def render_hex(v: Hex) -> str:
    """Upper-case digits, zero-padded to the original width."""
    digits = f"{v.value:0{v.width}X}"
    suffix = v.suffix.value if v.suffix else ""
    return f"0x{digits}{suffix}"


def render_value(v: Value) -> str:
    """The source spelling of a value."""
    if isinstance(v, Hex):
        return render_hex(v)
    if isinstance(v, Deci):
        return str(v.value)
    return v.name


def render_enum_line(line: EnumLine) -> str:
    """Canonical text of one enumext.spec line, without the newline."""
    if isinstance(line, Comment):
        return line.text
    if isinstance(line, BlankLine):
        return ""
    if isinstance(line, Start):
        if line.annotation is None:
            return f"{line.category} enum:"
        return f"{line.category} enum: {line.annotation}"
    if isinstance(line, Passthru):
        return f"passthru: /* {line.text}*/"
    if isinstance(line, Enumerant):
        rendered = (
            f"\t{line.name}{tabstop(55, line.name)}= {render_value(line.value)}"
        )
        if line.comment is not None:
            rendered += f" # {line.comment}"
        return rendered
    if isinstance(line, Use):
        pad = tabstop(39, line.category + "    ")
        return f"\tuse {line.category}{pad}    {line.name}"
    raise TypeError(f"not an enumext.spec line: {line!r}")


def render_enum_lines(lines: list[EnumLine]) -> str:
    """Canonical text of a whole enumext.spec."""
    return "".join(render_enum_line(line) + "\n" for line in lines)
