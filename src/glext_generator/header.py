"""Render the assembled records as glext.h.

The output reproduces the legacy glext.h published with the registry. A
handful of registry quirks are corrected by name below; each one should be
deleted once the registry itself is fixed.
"""

import logging
from typing import Iterable, Union

from .assemble import extract_header_sections, group_enums, has_header_category
from .enums import render_value
from .typemap import TypeMap
from .types import (
    ByValue,
    CategorySection,
    EnumLine,
    EnumMember,
    EnumPassthru,
    EnumUse,
    EnumValue,
    Enumeration,
    ExtensionCategory,
    Function,
    FunctionSection,
    FunLine,
    HeaderSection,
    Parameter,
    PassthruBlock,
    PassthruSection,
    Vendor,
)

logger = logging.getLogger(__name__)

GLEXT_VERSION = 63

# The registry opens MESA_ycbcr_texture twice with "newcategory".
YCBCR_TEXTURE = ExtensionCategory(Vendor.MESA, "ycbcr_texture")
# "newcategory: NV_fragment_program" is redundant with the functions of that
# category; its pass-through belongs to their section.
FRAGMENT_PROGRAM = ExtensionCategory(Vendor.NV, "fragment_program")
# The legacy glext.h defines the guard of this extension without members.
YCRCB_SUBSAMPLE = ExtensionCategory(Vendor.SGIX, "ycrcb_subsample")
# Defined twice, verbatim, in enumext.spec.
DUPLICATED_ENUMERANT = "2X_BIT_ATI"

SEPARATOR = "/*************************************************************/"


def preamble(glext_version: int = GLEXT_VERSION) -> list[str]:
    """Opening lines of glext.h, up to the first separator."""
    return [
        "#ifndef __glext_h_",
        "#define __glext_h_",
        "",
        "#ifdef __cplusplus",
        'extern "C" {',
        "#endif",
        "",
        "/* Header file version number, required by OpenGL ABI for Linux */",
        "/* This glext.h file was auto-generated from the spec files. */",
        "/* Current version at http://www.opengl.org/registry/ */",
        f"#define GL_GLEXT_VERSION {glext_version}",
        "/* Function declaration macros - to move into glplatform.h */",
        "",
        "#if defined(_WIN32) && !defined(APIENTRY) && !defined(__CYGWIN__)"
        " && !defined(__SCITECH_SNAP__)",
        "#define WIN32_LEAN_AND_MEAN 1",
        "#include <windows.h>",
        "#endif",
        "",
        "#ifndef APIENTRY",
        "#define APIENTRY",
        "#endif",
        "#ifndef APIENTRYP",
        "#define APIENTRYP APIENTRY *",
        "#endif",
        "#ifndef GLAPI",
        "#define GLAPI extern",
        "#endif",
        "",
        SEPARATOR,
        "",
    ]


EPILOGUE = [
    "",
    "#ifdef __cplusplus",
    "}",
    "#endif",
    "",
    "#endif",
]


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


def c_parameter(type_map: TypeMap, p: Parameter) -> str:
    """One C parameter declaration, e.g. ``const GLfloat *v``."""
    tm_type, pointer = type_map[p.type]
    base = tm_type.c_type
    if isinstance(p.passing, ByValue):
        const = ""
        spelled = base + (" *" if pointer else " ")
    else:
        const = "const " if p.is_input else ""
        spelled = base + ("* *" if pointer else " *")
    return f"{const}{spelled}{p.name}"


def c_parameters(type_map: TypeMap, parameters: Iterable[Parameter]) -> str:
    """The comma-separated parameter list; ``void`` when empty."""
    rendered = [c_parameter(type_map, p) for p in parameters]
    return ", ".join(rendered) if rendered else "void"


def c_return_type(type_map: TypeMap, f: Function) -> str:
    """The C spelling of the return type."""
    return type_map.c_type(f.return_type.value)


def c_declaration(type_map: TypeMap, f: Function) -> str:
    """``GLAPI void APIENTRY glFoo (GLenum target);``"""
    return " ".join(
        [
            "GLAPI",
            c_return_type(type_map, f),
            "APIENTRY",
            f"gl{f.name}",
            f"({c_parameters(type_map, f.parameters)});",
        ]
    )


def c_typedef(type_map: TypeMap, f: Function) -> str:
    """``typedef void (APIENTRYP PFNGLFOOPROC) (GLenum target);``"""
    return " ".join(
        [
            "typedef",
            c_return_type(type_map, f),
            f"(APIENTRYP PFNGL{f.name.upper()}PROC)",
            f"({c_parameters(type_map, f.parameters)});",
        ]
    )


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def render_member(member: EnumMember) -> str:
    """One line of an enum guard block."""
    if isinstance(member, EnumValue):
        pad = " " * (30 - len(member.name))
        return f"#define GL_{member.name}{pad} {render_value(member.value)}"
    if isinstance(member, EnumPassthru):
        return f"/* {member.text}*/"
    if isinstance(member, EnumUse):
        return f"/* reuse GL_{member.name} */"
    raise TypeError(f"not an enumeration member: {member!r}")


def render_enumeration(e: Union[Enumeration, PassthruBlock]) -> list[str]:
    """The guard block of an enumeration, or a top-level comment."""
    if isinstance(e, PassthruBlock):
        return [f"/* {e.text}*/"]
    return (
        [f"#ifndef GL_{e.category}"]
        + [render_member(m) for m in e.members]
        + ["#endif", ""]
    )


def _passthru_text(text: str) -> str:
    # Drop the separator that followed "passthru:".
    return text[1:]


def _guard(category) -> list[str]:
    return [f"#ifndef GL_{category}", f"#define GL_{category} 1"]


def render_section(type_map: TypeMap, section: HeaderSection) -> list[str]:
    """The lines of one function, category or pass-through section."""
    if isinstance(section, PassthruSection):
        return [_passthru_text(section.text)]
    passthrus = [_passthru_text(p) for p in section.passthrus]
    if isinstance(section, CategorySection):
        return _guard(section.category) + passthrus + ["#endif", ""]
    return (
        _guard(section.category)
        + passthrus
        + ["#ifdef GL_GLEXT_PROTOTYPES"]
        + [c_declaration(type_map, f) for f in section.functions]
        + ["#endif /* GL_GLEXT_PROTOTYPES */"]
        + [c_typedef(type_map, f) for f in section.functions]
        + ["#endif", ""]
    )


# ---------------------------------------------------------------------------
# Legacy corrections
# ---------------------------------------------------------------------------


def drop_duplicate_new_category(
    sections: list[HeaderSection],
) -> list[HeaderSection]:
    """Keep only the first ``newcategory: MESA_ycbcr_texture`` section."""
    duplicate = CategorySection(YCBCR_TEXTURE)
    result = []
    seen = False
    for section in sections:
        if section == duplicate:
            if seen:
                logger.info("dropping repeated newcategory %s", YCBCR_TEXTURE)
                continue
            seen = True
        result.append(section)
    return result


def fold_fragment_program(sections: list[HeaderSection]) -> list[HeaderSection]:
    """Move the NV_fragment_program pass-through into the next section."""
    result: list[HeaderSection] = []
    i = 0
    while i < len(sections):
        section = sections[i]
        following = sections[i + 1] if i + 1 < len(sections) else None
        if (
            isinstance(section, CategorySection)
            and section.category == FRAGMENT_PROGRAM
            and len(section.passthrus) == 1
            and isinstance(following, FunctionSection)
        ):
            logger.info("folding newcategory %s into its functions", FRAGMENT_PROGRAM)
            result.append(
                FunctionSection(
                    following.functions, section.passthrus + following.passthrus
                )
            )
            i += 2
            continue
        result.append(section)
        i += 1
    return result


def correct_enumeration(
    e: Union[Enumeration, PassthruBlock],
) -> Union[Enumeration, PassthruBlock]:
    """Apply the enumeration corrections that name this category."""
    if not isinstance(e, Enumeration):
        return e
    if e.category == YCRCB_SUBSAMPLE:
        logger.info("emptying enumeration %s", YCRCB_SUBSAMPLE)
        return Enumeration(e.category, ())
    members = []
    seen = False
    for m in e.members:
        if isinstance(m, EnumValue) and m.name == DUPLICATED_ENUMERANT:
            if seen:
                logger.info("dropping repeated enumerant %s", DUPLICATED_ENUMERANT)
                continue
            seen = True
        members.append(m)
    return Enumeration(e.category, tuple(members))


# ---------------------------------------------------------------------------
# Whole header
# ---------------------------------------------------------------------------


def render_header(
    enumerations: Iterable[Union[Enumeration, PassthruBlock]],
    sections: Iterable[HeaderSection],
    type_map: TypeMap,
    glext_version: int = GLEXT_VERSION,
) -> str:
    """Assemble preamble, enum blocks, sections and epilogue."""
    lines = preamble(glext_version)
    for e in enumerations:
        lines.extend(render_enumeration(e))
    lines.extend(["", SEPARATOR, ""])
    for section in sections:
        lines.extend(render_section(type_map, section))
    lines.extend(EPILOGUE)
    return "".join(line + "\n" for line in lines)


def header_enumerations(
    enum_lines: Iterable[EnumLine],
) -> list[Union[Enumeration, PassthruBlock]]:
    """Enumerations as they appear in glext.h, corrections applied."""
    return [
        correct_enumeration(e)
        for e in group_enums(enum_lines)
        if not isinstance(e, Enumeration) or has_header_category(e.category)
    ]


def header_sections(fun_lines: Iterable[FunLine]) -> list[HeaderSection]:
    """Function sections as they appear in glext.h, corrections applied."""
    sections = extract_header_sections(fun_lines)
    return fold_fragment_program(drop_duplicate_new_category(sections))


def compose_header(
    enum_lines: Iterable[EnumLine],
    type_map: TypeMap,
    fun_lines: Iterable[FunLine],
    glext_version: int = GLEXT_VERSION,
) -> str:
    """Build the complete glext.h text from the three parsed registries."""
    return render_header(
        header_enumerations(enum_lines),
        header_sections(fun_lines),
        type_map,
        glext_version,
    )
