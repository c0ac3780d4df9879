"""Assemble flat registry lines into validated records.

Functions are checked when they are built: return type and category occur
exactly once, every other property at most once, and the parameter
properties match the names of the signature line position by position.
"""

import logging
from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, Optional, TypeVar, Union

from .errors import CrossReferenceError, GroupingError, OccurrenceError
from .types import (
    AllowInside,
    Alias,
    BlankLine,
    Category,
    CategoryProp,
    CategorySection,
    Comment,
    Deprecated,
    Dlflags,
    Enumerant,
    EnumLine,
    EnumMember,
    EnumPassthru,
    EnumUse,
    EnumValue,
    Enumeration,
    ExtensionProp,
    Function,
    FunctionSection,
    FunLine,
    FunPassthru,
    Glextmask,
    Glfflags,
    Glxflags,
    Glxropcode,
    Glxsingle,
    Glxvectorequiv,
    Glxvendorpriv,
    HeaderSection,
    Menu,
    NewCategory,
    Note,
    Offset,
    Param,
    Parameter,
    Passthru,
    PassthruBlock,
    PassthruSection,
    Property,
    Return,
    Signature,
    Start,
    Subcategory,
    Use,
    Vectorequiv,
    Version,
    VersionCategory,
    Wglflags,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P", bound=Property)

# gl.spec revision 11742 carries these properties twice on one function.
# Exactly two occurrences are accepted there and the later one wins; any
# other duplicate is an error.
LEGACY_DUPLICATE_PROPERTIES = frozenset(
    {
        ("FramebufferTextureFaceARB", "version"),
        ("ProgramParameteriARB", "glxflags"),
    }
)

# Every property kind, in the order they are reported by property_presence.
PROPERTY_KINDS: tuple[type[Property], ...] = (
    Return,
    Param,
    CategoryProp,
    Subcategory,
    Version,
    Glxropcode,
    Offset,
    Wglflags,
    Dlflags,
    Glxflags,
    Glxsingle,
    Deprecated,
    ExtensionProp,
    Glxvendorpriv,
    Glfflags,
    AllowInside,
    Vectorequiv,
    Glxvectorequiv,
    Alias,
    Glextmask,
)


# ---------------------------------------------------------------------------
# Occurrence checks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class MissingRequired:
    kind: str


@dataclass(frozen=True)
class DuplicateViolation:
    kind: str
    count: int


Occurrence = Union[Ok, MissingRequired, DuplicateViolation]


def find_unique(
    function: str,
    properties: Iterable[Property],
    kind: type[P],
    tolerated: frozenset = LEGACY_DUPLICATE_PROPERTIES,
) -> Occurrence:
    """Look up the single property of ``kind`` in a function block."""
    matches = [p for p in properties if isinstance(p, kind)]
    if not matches:
        return MissingRequired(kind.keyword)
    if len(matches) == 1:
        return Ok(matches[0])
    if len(matches) == 2 and (function, kind.keyword) in tolerated:
        logger.info(
            "%s: using the second of two %s properties", function, kind.keyword
        )
        return Ok(matches[1])
    return DuplicateViolation(kind.keyword, len(matches))


def require(function: str, occurrence: Occurrence):
    """Unwrap an occurrence, raising OccurrenceError unless it is Ok."""
    if isinstance(occurrence, Ok):
        return occurrence.value
    if isinstance(occurrence, MissingRequired):
        raise OccurrenceError(function, occurrence.kind, 0)
    raise OccurrenceError(function, occurrence.kind, occurrence.count)


def optional(function: str, occurrence: Occurrence):
    """Like :func:`require`, but a missing property gives None."""
    if isinstance(occurrence, MissingRequired):
        return None
    return require(function, occurrence)


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


def make_function(
    name: str,
    param_names: Iterable[str],
    properties: Iterable[Property],
    tolerated: frozenset = LEGACY_DUPLICATE_PROPERTIES,
) -> Function:
    """Build a :class:`Function` from its signature and property block."""
    param_names = tuple(param_names)
    properties = tuple(properties)
    params = [p for p in properties if isinstance(p, Param)]
    others = [p for p in properties if not isinstance(p, Param)]

    if len(params) != len(param_names):
        raise CrossReferenceError(
            f"function {name} declares {len(param_names)} parameters "
            f"but has {len(params)} param properties"
        )
    parameters = []
    for position, (declared, param) in enumerate(zip(param_names, params)):
        if declared != param.name:
            raise CrossReferenceError(
                f"function {name}: parameter {position} is {declared!r} "
                f"in the signature but {param.name!r} in the properties"
            )
        t = param.type
        parameters.append(Parameter(declared, t.type, t.is_input, t.passing))

    def one(kind):
        return require(name, find_unique(name, others, kind, tolerated))

    def maybe(kind):
        return optional(name, find_unique(name, others, kind, tolerated))

    category = one(CategoryProp)
    version = maybe(Version)
    deprecated = maybe(Deprecated)
    glxropcode = maybe(Glxropcode)
    wglflags = maybe(Wglflags)
    dlflags = maybe(Dlflags)
    glxsingle = maybe(Glxsingle)
    extension = maybe(ExtensionProp)
    glxvendorpriv = maybe(Glxvendorpriv)
    subcategory = maybe(Subcategory)
    vectorequiv = maybe(Vectorequiv)
    glxvectorequiv = maybe(Glxvectorequiv)
    alias = maybe(Alias)
    glextmask = maybe(Glextmask)

    return Function(
        name=name,
        return_type=one(Return).type,
        parameters=tuple(parameters),
        category=category.category,
        old_category=category.old,
        subcategory=subcategory and subcategory.name,
        version=version and (version.major, version.minor),
        glxropcode=glxropcode and glxropcode.value,
        offset=maybe(Offset),
        wglflags=wglflags and wglflags.flags,
        dlflags=dlflags and dlflags.flag,
        glxflags=maybe(Glxflags),
        glxsingle=glxsingle and glxsingle.value,
        deprecated=deprecated and (deprecated.major, deprecated.minor),
        extension=extension and extension.tokens,
        glxvendorpriv=glxvendorpriv and glxvendorpriv.value,
        glfflags=maybe(Glfflags),
        allow_inside=maybe(AllowInside) is not None,
        vectorequiv=vectorequiv and vectorequiv.name,
        glxvectorequiv=glxvectorequiv and glxvectorequiv.name,
        alias=alias and alias.name,
        glextmask=glextmask and glextmask.names,
    )


@dataclass(frozen=True)
class FunctionBlock:
    """A signature line and the property lines that follow it."""

    name: str
    params: tuple[str, ...]
    properties: tuple[Property, ...]

    def has(self, kind: type[Property]) -> bool:
        return any(isinstance(p, kind) for p in self.properties)


def _walk(
    lines: Iterable[FunLine],
) -> Iterator[Union[FunPassthru, NewCategory, FunctionBlock]]:
    """Yield pass-throughs, new categories and function blocks in order.

    A block runs from its signature to the next signature, menu, new
    category, pass-through or blank line; comments inside it are skipped.
    """
    signature: Optional[Signature] = None
    properties: list[Property] = []

    def close():
        return FunctionBlock(signature.name, signature.params, tuple(properties))

    for line in lines:
        if isinstance(line, Property):
            if signature is None:
                raise GroupingError(
                    f"{line.keyword} property outside of a function block"
                )
            properties.append(line)
            continue
        if isinstance(line, (Comment, Note)):
            continue
        if signature is not None:
            yield close()
            signature, properties = None, []
        if isinstance(line, Signature):
            signature = line
        elif isinstance(line, (FunPassthru, NewCategory)):
            yield line
        # Menus and blank lines only end the current block.
    if signature is not None:
        yield close()


def function_blocks(lines: Iterable[FunLine]) -> list[FunctionBlock]:
    """The signature-plus-properties blocks of a gl.spec, in order."""
    return [item for item in _walk(lines) if isinstance(item, FunctionBlock)]


def extract_functions(
    lines: Iterable[FunLine], tolerated: frozenset = LEGACY_DUPLICATE_PROPERTIES
) -> list[Function]:
    """Validate every function block of a gl.spec."""
    functions = [
        make_function(b.name, b.params, b.properties, tolerated)
        for b in function_blocks(lines)
    ]
    logger.debug("assembled %d functions", len(functions))
    return functions


def property_presence(blocks: Iterable[FunctionBlock]) -> dict[str, bool]:
    """For each property kind, whether every function block carries it."""
    blocks = list(blocks)
    return {
        kind.keyword: all(block.has(kind) for block in blocks)
        for kind in PROPERTY_KINDS
    }


def with_version(
    functions: Iterable[Function], version: tuple[int, int]
) -> list[Function]:
    """Functions introduced in, or implementable against, core ``version``."""
    return [f for f in functions if f.version == version]


def with_category(
    functions: Iterable[Function], category: Category
) -> list[Function]:
    """Functions whose category is ``category``."""
    return [f for f in functions if f.category == category]


def with_name(functions: Iterable[Function], name: str) -> list[Function]:
    """Functions named ``name``."""
    return [f for f in functions if f.name == name]


def cross_check_menus(
    lines: Iterable[FunLine], functions: Iterable[Function]
) -> list[str]:
    """Compare function categories and versions with the file-level menus.

    Returns one message per disagreement; menus that are absent or
    wildcarded (``*``) are not checked.
    """
    lines = list(lines)
    menus = {line.name: set(line.values) for line in lines if isinstance(line, Menu)}
    problems = []

    def check(menu: str, function: Function, value: str) -> None:
        allowed = menus.get(menu)
        if allowed is None or "*" in allowed:
            return
        if value not in allowed:
            problems.append(
                f"{function.name}: {menu} {value} is not in the {menu} menu"
            )

    for f in functions:
        check("category", f, str(f.category))
        if f.old_category is not None:
            check("category", f, str(f.old_category))
        if f.version is not None:
            check("version", f, "%d.%d" % f.version)
        if f.deprecated is not None:
            check("deprecated", f, "%d.%d" % f.deprecated)
    return problems


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


def group_enums(
    lines: Iterable[EnumLine],
) -> list[Union[Enumeration, PassthruBlock]]:
    """Group enumext.spec lines into one :class:`Enumeration` per start line.

    Comments and blank lines are dropped.
    """
    groups: list[Union[Enumeration, PassthruBlock]] = []
    category: Optional[Category] = None
    members: list[EnumMember] = []

    def close():
        groups.append(Enumeration(category, tuple(members)))

    for line in lines:
        if isinstance(line, (Comment, BlankLine)):
            continue
        if isinstance(line, Start):
            if category is not None:
                close()
            category, members = line.category, []
        elif isinstance(line, Passthru):
            if category is None:
                groups.append(PassthruBlock(line.text))
            else:
                members.append(EnumPassthru(line.text))
        elif category is None:
            raise GroupingError(f"{line!r} appears before any enum start line")
        elif isinstance(line, Enumerant):
            members.append(EnumValue(line.name, line.value))
        elif isinstance(line, Use):
            members.append(EnumUse(line.category, line.name))
    if category is not None:
        close()
    return groups


# ---------------------------------------------------------------------------
# Header sections
# ---------------------------------------------------------------------------


def has_header_category(category: Category) -> bool:
    """Core 1.0 and 1.1 live in gl.h, not in glext.h."""
    return not (
        isinstance(category, VersionCategory)
        and (category.major, category.minor) in ((1, 0), (1, 1))
    )


def extract_header_sections(
    lines: Iterable[FunLine], tolerated: frozenset = LEGACY_DUPLICATE_PROPERTIES
) -> list[HeaderSection]:
    """Group gl.spec lines into the sections of the generated header.

    Consecutive functions with the same category share a section; a
    ``newcategory`` line opens a section of its own. Pass-through lines met
    inside a section stay attached to it, in order.
    """
    sections: list[HeaderSection] = []
    new_category: Optional[Category] = None
    functions: list[Function] = []
    passthrus: list[str] = []

    def flush():
        nonlocal new_category, functions, passthrus
        if functions:
            sections.append(FunctionSection(tuple(functions), tuple(passthrus)))
        elif new_category is not None:
            sections.append(CategorySection(new_category, tuple(passthrus)))
        new_category, functions, passthrus = None, [], []

    for item in _walk(lines):
        if isinstance(item, FunPassthru):
            if functions or new_category is not None:
                passthrus.append(item.text)
            else:
                sections.append(PassthruSection(item.text))
        elif isinstance(item, NewCategory):
            flush()
            new_category = item.category
        else:
            f = make_function(item.name, item.params, item.properties, tolerated)
            if not has_header_category(f.category):
                continue
            if not functions or functions[0].category != f.category:
                flush()
            functions.append(f)
    flush()
    return sections
