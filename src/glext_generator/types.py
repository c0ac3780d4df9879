"""Data types for the OpenGL registry files and the assembled records.

Line records mirror one line of a registry file each. Assembled records
(:class:`Function`, :class:`Enumeration` and the header sections) are built
from them by :mod:`glext_generator.assemble`. Everything here is immutable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


class HexSuffix(Enum):
    U = "u"
    ULL = "ull"


@dataclass(frozen=True)
class Hex:
    """A hexadecimal literal; ``width`` is the original digit count."""

    value: int
    width: int
    suffix: Optional[HexSuffix] = None


@dataclass(frozen=True)
class Deci:
    value: int


@dataclass(frozen=True)
class Identifier:
    name: str


Value = Union[Hex, Deci, Identifier]


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class Vendor(Enum):
    """Vendor prefixes that may start an extension category."""

    DFX = "3DFX"
    AMD = "AMD"
    APPLE = "APPLE"
    ARB = "ARB"
    ATI = "ATI"
    EXT = "EXT"
    GREMEDY = "GREMEDY"
    HP = "HP"
    IBM = "IBM"
    INGR = "INGR"
    INTEL = "INTEL"
    MESA = "MESA"
    MESAX = "MESAX"
    NV = "NV"
    OES = "OES"
    OML = "OML"
    PGI = "PGI"
    REND = "REND"
    S3 = "S3"
    SGI = "SGI"
    SGIS = "SGIS"
    SGIX = "SGIX"
    SUN = "SUN"
    SUNX = "SUNX"
    WIN = "WIN"


class _Category(ABC):
    """Total order over every kind of category."""

    @abstractmethod
    def sort_key(self) -> tuple:
        """Version categories first, then extensions, then plain names."""

    def __lt__(self, other):
        if not isinstance(other, _Category):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other):
        if not isinstance(other, _Category):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other):
        if not isinstance(other, _Category):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other):
        if not isinstance(other, _Category):
            return NotImplemented
        return self.sort_key() >= other.sort_key()


@dataclass(frozen=True, eq=True, order=False)
class VersionCategory(_Category):
    """A core version, e.g. ``VERSION_1_2`` or ``VERSION_3_0_DEPRECATED``."""

    major: int
    minor: int
    deprecated: bool = False

    def sort_key(self) -> tuple:
        return (0, self.major, self.minor, self.deprecated)

    def __str__(self) -> str:
        s = f"VERSION_{self.major}_{self.minor}"
        return s + "_DEPRECATED" if self.deprecated else s


@dataclass(frozen=True, eq=True, order=False)
class ExtensionCategory(_Category):
    """A vendor extension, e.g. ``ARB_multitexture``."""

    vendor: Vendor
    name: str
    deprecated: bool = False

    def sort_key(self) -> tuple:
        return (1, self.vendor.value, self.name, self.deprecated)

    def __str__(self) -> str:
        s = f"{self.vendor.value}_{self.name}"
        return s + "_DEPRECATED" if self.deprecated else s


@dataclass(frozen=True, eq=True, order=False)
class NameCategory(_Category):
    """Any other category, e.g. ``AttribMask`` or ``display-list``."""

    name: str

    def sort_key(self) -> tuple:
        return (2, self.name)

    def __str__(self) -> str:
        return self.name


Category = Union[VersionCategory, ExtensionCategory, NameCategory]


# ---------------------------------------------------------------------------
# Lines shared by the registries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Comment:
    text: str  # leading blanks and the '#' included


@dataclass(frozen=True)
class BlankLine:
    pass


# ---------------------------------------------------------------------------
# enumext.spec
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Start:
    """Opens an enumeration: ``<category> enum: [annotation]``."""

    category: Category
    annotation: Optional[str] = None


@dataclass(frozen=True)
class Passthru:
    text: str  # interior of the /* ... */ pair, verbatim


@dataclass(frozen=True)
class Enumerant:
    name: str
    value: Value
    comment: Optional[str] = None


@dataclass(frozen=True)
class Use:
    """Reuse ``name`` as defined by ``category``."""

    category: str
    name: str


EnumLine = Union[Comment, BlankLine, Start, Passthru, Enumerant, Use]


# ---------------------------------------------------------------------------
# gl.tm
# ---------------------------------------------------------------------------


class TmType(Enum):
    """Canonical C types of the type map, keyed by their source spelling."""

    STAR = "*"
    CONST_GLUBYTE_STAR = "const GLubyte *"
    GLFUNCPTR = "_GLfuncptr"
    GLVOID_STAR_CONST = "GLvoid* const"
    GLU_NURBS_STAR = "GLUnurbs*"
    GLU_QUADRIC_STAR = "GLUquadric*"
    GLU_TESSELATOR_STAR = "GLUtesselator*"
    CL_CONTEXT_STAR = "struct _cl_context *"
    CL_EVENT_STAR = "struct _cl_event *"
    GLBITFIELD = "GLbitfield"
    GLBOOLEAN = "GLboolean"
    GLBYTE = "GLbyte"
    GLCHAR = "GLchar"
    GLCHARARB = "GLcharARB"
    GLCLAMPD = "GLclampd"
    GLCLAMPF = "GLclampf"
    GLDEBUGPROCAMD = "GLDEBUGPROCAMD"
    GLDEBUGPROCARB = "GLDEBUGPROCARB"
    GLDOUBLE = "GLdouble"
    GLENUM = "GLenum"
    GLFLOAT = "GLfloat"
    GLHALFNV = "GLhalfNV"
    GLHANDLEARB = "GLhandleARB"
    GLINT = "GLint"
    GLINT64 = "GLint64"
    GLINT64EXT = "GLint64EXT"
    GLINTPTR = "GLintptr"
    GLINTPTRARB = "GLintptrARB"
    GLSHORT = "GLshort"
    GLSIZEI = "GLsizei"
    GLSIZEIPTR = "GLsizeiptr"
    GLSIZEIPTRARB = "GLsizeiptrARB"
    GLSYNC = "GLsync"
    GLUBYTE = "GLubyte"
    GLUINT = "GLuint"
    GLUINT64 = "GLuint64"
    GLUINT64EXT = "GLuint64EXT"
    GLUSHORT = "GLushort"
    GLVDPAUSURFACENV = "GLvdpauSurfaceNV"
    GLVOID = "GLvoid"

    @property
    def c_type(self) -> str:
        """Spelling used in generated declarations."""
        if self is TmType.STAR:
            return "void"
        return self.value


@dataclass(frozen=True)
class TmComment:
    text: str


@dataclass(frozen=True)
class TmEntry:
    name: str
    type: TmType
    pointer: bool = False


TmLine = Union[TmComment, BlankLine, TmEntry]


# ---------------------------------------------------------------------------
# gl.spec properties
# ---------------------------------------------------------------------------


class ReturnType(Enum):
    BOOLEAN = "Boolean"
    BUFFER_OFFSET = "BufferOffset"
    ERROR_CODE = "ErrorCode"
    FRAMEBUFFER_STATUS = "FramebufferStatus"
    GLENUM = "GLenum"
    HANDLE_ARB = "handleARB"
    INT32 = "Int32"
    LIST = "List"
    STRING = "String"
    SYNC = "sync"
    UINT32 = "UInt32"
    VOID = "void"
    VOID_POINTER = "VoidPointer"


class WglFlag(Enum):
    CLIENT_HANDCODE = "client-handcode"
    SERVER_HANDCODE = "server-handcode"
    SMALL_DATA = "small-data"
    BATCHABLE = "batchable"


class DlFlag(Enum):
    NOTLISTABLE = "notlistable"
    HANDCODE = "handcode"


class GlxFlag(Enum):
    CLIENT_HANDCODE = "client-handcode"
    SERVER_HANDCODE = "server-handcode"
    CLIENT_INTERCEPT = "client-intercept"
    EXT = "EXT"
    SGI = "SGI"
    ARB = "ARB"
    IGNORE = "ignore"


class GlfFlag(Enum):
    CAPTURE_EXECUTE = "capture-execute"
    CAPTURE_HANDCODE = "capture-handcode"
    DECODE_HANDCODE = "decode-handcode"
    PIXEL_PACK = "pixel-pack"
    PIXEL_UNPACK = "pixel-unpack"
    GL_ENUM = "gl-enum"
    IGNORE = "ignore"


class ExtensionToken(Enum):
    SOFT = "soft"
    WINSOFT = "WINSOFT"
    NV10 = "NV10"
    NV20 = "NV20"
    NV50 = "NV50"
    NOT_IMPLEMENTED = "not_implemented"


@dataclass(frozen=True)
class Number:
    value: int


@dataclass(frozen=True)
class Mark:
    """The ``?`` placeholder of opcode properties."""


Question = Union[Number, Mark]


@dataclass(frozen=True)
class ByValue:
    pass


@dataclass(frozen=True)
class ByArray:
    bound: str
    retained: bool = False


@dataclass(frozen=True)
class ByReference:
    pass


Passing = Union[ByValue, ByArray, ByReference]


@dataclass(frozen=True)
class ParamType:
    type: str
    is_input: bool
    passing: Passing


class Property:
    """Marker base of the indented property lines of gl.spec."""

    keyword = ""


@dataclass(frozen=True)
class Return(Property):
    keyword = "return"
    type: ReturnType


@dataclass(frozen=True)
class Param(Property):
    keyword = "param"
    name: str
    type: ParamType


@dataclass(frozen=True)
class CategoryProp(Property):
    keyword = "category"
    category: Category
    old: Optional[Category] = None


@dataclass(frozen=True)
class Subcategory(Property):
    keyword = "subcategory"
    name: str


@dataclass(frozen=True)
class Version(Property):
    keyword = "version"
    major: int
    minor: int


@dataclass(frozen=True)
class Deprecated(Property):
    keyword = "deprecated"
    major: int
    minor: int


@dataclass(frozen=True)
class Glxropcode(Property):
    keyword = "glxropcode"
    value: Question


@dataclass(frozen=True)
class Glxsingle(Property):
    keyword = "glxsingle"
    value: Question


@dataclass(frozen=True)
class Glxvendorpriv(Property):
    keyword = "glxvendorpriv"
    value: Question


@dataclass(frozen=True)
class Offset(Property):
    keyword = "offset"
    value: Optional[Question] = None


@dataclass(frozen=True)
class Wglflags(Property):
    keyword = "wglflags"
    flags: tuple[WglFlag, ...]


@dataclass(frozen=True)
class Dlflags(Property):
    keyword = "dlflags"
    flag: DlFlag


@dataclass(frozen=True)
class Glxflags(Property):
    keyword = "glxflags"
    flags: tuple[GlxFlag, ...]
    commented: Optional[tuple[GlxFlag, ...]] = None  # after '###'


@dataclass(frozen=True)
class Glfflags(Property):
    keyword = "glfflags"
    flags: tuple[GlfFlag, ...]
    commented: Optional[tuple[GlfFlag, ...]] = None  # after '###'


@dataclass(frozen=True)
class ExtensionProp(Property):
    keyword = "extension"
    tokens: tuple[ExtensionToken, ...] = ()


@dataclass(frozen=True)
class AllowInside(Property):
    """``beginend allow-inside``; the only value the property ever has."""

    keyword = "beginend"


@dataclass(frozen=True)
class Vectorequiv(Property):
    keyword = "vectorequiv"
    name: str


@dataclass(frozen=True)
class Glxvectorequiv(Property):
    keyword = "glxvectorequiv"
    name: str


@dataclass(frozen=True)
class Alias(Property):
    keyword = "alias"
    name: str


@dataclass(frozen=True)
class Glextmask(Property):
    keyword = "glextmask"
    names: tuple[str, ...]


# ---------------------------------------------------------------------------
# gl.spec lines
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Menu:
    """A file-level ``tag: values`` declaration listing the valid values."""

    name: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class NewCategory:
    category: Category


@dataclass(frozen=True)
class FunPassthru:
    text: str  # everything after 'passthru:'


@dataclass(frozen=True)
class Signature:
    name: str
    params: tuple[str, ...] = ()


@dataclass(frozen=True)
class Note:
    """An ``@@@`` line."""

    text: str


FunLine = Union[
    Comment, BlankLine, Menu, NewCategory, FunPassthru, Signature, Property, Note
]


# ---------------------------------------------------------------------------
# Assembled records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Parameter:
    name: str  # "target"
    type: str  # "TextureTarget", a type map key
    is_input: bool
    passing: Passing


@dataclass(frozen=True)
class Function:
    """A validated gl.spec function block."""

    name: str  # "BindTexture"
    return_type: ReturnType
    parameters: tuple[Parameter, ...]
    category: Category
    old_category: Optional[Category] = None
    subcategory: Optional[str] = None
    version: Optional[tuple[int, int]] = None
    glxropcode: Optional[Question] = None
    offset: Optional[Offset] = None
    wglflags: Optional[tuple[WglFlag, ...]] = None
    dlflags: Optional[DlFlag] = None
    glxflags: Optional[Glxflags] = None
    glxsingle: Optional[Question] = None
    deprecated: Optional[tuple[int, int]] = None
    extension: Optional[tuple[ExtensionToken, ...]] = None
    glxvendorpriv: Optional[Question] = None
    glfflags: Optional[Glfflags] = None
    allow_inside: bool = False
    vectorequiv: Optional[str] = None
    glxvectorequiv: Optional[str] = None
    alias: Optional[str] = None
    glextmask: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class EnumValue:
    name: str
    value: Value


@dataclass(frozen=True)
class EnumPassthru:
    text: str


@dataclass(frozen=True)
class EnumUse:
    category: str
    name: str


EnumMember = Union[EnumValue, EnumPassthru, EnumUse]


@dataclass(frozen=True)
class Enumeration:
    category: Category
    members: tuple[EnumMember, ...] = ()


@dataclass(frozen=True)
class PassthruBlock:
    """A pass-through line that precedes every category."""

    text: str


@dataclass(frozen=True)
class PassthruSection:
    text: str  # everything after 'passthru:'


@dataclass(frozen=True)
class CategorySection:
    """A ``newcategory`` guard with no functions of its own."""

    category: Category
    passthrus: tuple[str, ...] = ()


@dataclass(frozen=True)
class FunctionSection:
    """A maximal run of functions sharing one category."""

    functions: tuple[Function, ...]
    passthrus: tuple[str, ...] = field(default_factory=tuple)

    @property
    def category(self) -> Category:
        return self.functions[0].category


HeaderSection = Union[PassthruSection, CategorySection, FunctionSection]
