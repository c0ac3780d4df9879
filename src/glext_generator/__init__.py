"""glext-generator - builds glext.h from the OpenGL registry spec files."""

__version__ = "0.1.0"

from .assemble import (
    extract_functions,
    extract_header_sections,
    group_enums,
    make_function,
)
from .enums import enum_line, enum_lines, render_enum_lines
from .errors import (
    AssemblyError,
    CrossReferenceError,
    GroupingError,
    OccurrenceError,
    ParseError,
    SpecError,
    TypeMapError,
    UnknownVocabularyError,
)
from .functions import fun_line, fun_lines, render_fun_lines
from .header import compose_header
from .roundtrip import RoundTripResult, RoundTripStatus, check_text, reparse
from .typemap import TypeMap, make_type_map, tm_line, tm_lines
from .types import Enumeration, Function, Parameter

__all__ = [
    "enum_line",
    "enum_lines",
    "render_enum_lines",
    "tm_line",
    "tm_lines",
    "make_type_map",
    "TypeMap",
    "fun_line",
    "fun_lines",
    "render_fun_lines",
    "make_function",
    "extract_functions",
    "group_enums",
    "extract_header_sections",
    "compose_header",
    "check_text",
    "reparse",
    "RoundTripResult",
    "RoundTripStatus",
    "Function",
    "Parameter",
    "Enumeration",
    "SpecError",
    "ParseError",
    "UnknownVocabularyError",
    "AssemblyError",
    "CrossReferenceError",
    "TypeMapError",
    "OccurrenceError",
    "GroupingError",
]
