"""Tests for glext.h rendering and the legacy corrections."""

import pytest

from glext_generator.enums import enum_lines
from glext_generator.errors import TypeMapError
from glext_generator.functions import fun_lines
from glext_generator.header import (
    FRAGMENT_PROGRAM,
    YCBCR_TEXTURE,
    YCRCB_SUBSAMPLE,
    c_declaration,
    c_parameter,
    c_parameters,
    c_typedef,
    compose_header,
    correct_enumeration,
    drop_duplicate_new_category,
    fold_fragment_program,
    render_enumeration,
    render_member,
    render_section,
)
from glext_generator.types import (
    ByArray,
    ByReference,
    ByValue,
    CategorySection,
    EnumPassthru,
    EnumUse,
    EnumValue,
    Enumeration,
    Function,
    FunctionSection,
    Hex,
    Parameter,
    PassthruBlock,
    PassthruSection,
    ReturnType,
    VersionCategory,
)


def function(name, *parameters, return_type=ReturnType.VOID):
    return Function(
        name=name,
        return_type=return_type,
        parameters=tuple(parameters),
        category=VersionCategory(1, 2),
    )


class TestDeclarations:
    """Test C parameter and prototype rendering."""

    def test_parameters(self, type_map):
        cases = [
            (Parameter("x", "Float32", True, ByValue()), "GLfloat x"),
            (Parameter("v", "Float32", True, ByArray("4")), "const GLfloat *v"),
            (Parameter("v", "Float32", False, ByArray("4")), "GLfloat *v"),
            (Parameter("params", "Float32", False, ByReference()), "GLfloat *params"),
            (Parameter("p", "VoidPointer", True, ByValue()), "GLvoid *p"),
            (Parameter("p", "VoidPointer", True, ByArray("n")), "const GLvoid* *p"),
            (Parameter("s", "String", True, ByValue()), "const GLubyte * s"),
        ]
        for parameter, expected in cases:
            assert c_parameter(type_map, parameter) == expected

    def test_unknown_type(self, type_map):
        with pytest.raises(TypeMapError):
            c_parameter(type_map, Parameter("x", "Float128", True, ByValue()))

    def test_no_parameters(self, type_map):
        assert c_parameters(type_map, []) == "void"

    def test_prototype(self, type_map):
        f = function(
            "ActiveTextureARB", Parameter("texture", "TextureTarget", True, ByValue())
        )
        assert c_declaration(type_map, f) == (
            "GLAPI void APIENTRY glActiveTextureARB (GLenum texture);"
        )
        assert c_typedef(type_map, f) == (
            "typedef void (APIENTRYP PFNGLACTIVETEXTUREARBPROC) (GLenum texture);"
        )

    def test_return_type_through_type_map(self, type_map):
        f = function("FenceSync", return_type=ReturnType.SYNC)
        assert c_declaration(type_map, f) == (
            "GLAPI GLsync APIENTRY glFenceSync (void);"
        )
        f = function("MapBuffer", return_type=ReturnType.VOID_POINTER)
        assert c_typedef(type_map, f) == (
            "typedef GLvoid* (APIENTRYP PFNGLMAPBUFFERPROC) (void);"
        )


class TestEnumerations:
    """Test enumeration blocks."""

    def test_member(self):
        assert render_member(EnumValue("FOO", Hex(0x1, 1))) == (
            "#define GL_FOO" + " " * 27 + " 0x1"
        )
        assert render_member(EnumUse("VERSION_1_2", "RESCALE_NORMAL")) == (
            "/* reuse GL_RESCALE_NORMAL */"
        )
        assert render_member(EnumPassthru("Reuse tokens ")) == "/* Reuse tokens */"

    def test_long_name_is_not_truncated(self):
        name = "A" * 40
        assert render_member(EnumValue(name, Hex(0x1, 1))) == f"#define GL_{name} 0x1"

    def test_block(self):
        e = Enumeration(VersionCategory(1, 2), (EnumValue("FOO", Hex(0x8032, 4)),))
        assert render_enumeration(e) == [
            "#ifndef GL_VERSION_1_2",
            "#define GL_FOO" + " " * 27 + " 0x8032",
            "#endif",
            "",
        ]

    def test_top_level_passthru(self):
        assert render_enumeration(PassthruBlock("top ")) == ["/* top */"]


class TestSections:
    """Test function sections."""

    def test_passthru_section(self, type_map):
        section = PassthruSection(" /* OpenGL 1.2 */")
        assert render_section(type_map, section) == ["/* OpenGL 1.2 */"]

    def test_category_section(self, type_map):
        section = CategorySection(YCBCR_TEXTURE)
        assert render_section(type_map, section) == [
            "#ifndef GL_MESA_ycbcr_texture",
            "#define GL_MESA_ycbcr_texture 1",
            "#endif",
            "",
        ]

    def test_function_section(self, type_map):
        section = FunctionSection((function("Flush"),), (" /* note */",))
        assert render_section(type_map, section) == [
            "#ifndef GL_VERSION_1_2",
            "#define GL_VERSION_1_2 1",
            "/* note */",
            "#ifdef GL_GLEXT_PROTOTYPES",
            "GLAPI void APIENTRY glFlush (void);",
            "#endif /* GL_GLEXT_PROTOTYPES */",
            "typedef void (APIENTRYP PFNGLFLUSHPROC) (void);",
            "#endif",
            "",
        ]


class TestCorrections:
    """Test the named legacy corrections."""

    def test_drop_duplicate_new_category(self):
        other = CategorySection(FRAGMENT_PROGRAM)
        sections = [
            CategorySection(YCBCR_TEXTURE),
            other,
            CategorySection(YCBCR_TEXTURE),
        ]
        assert drop_duplicate_new_category(sections) == [
            CategorySection(YCBCR_TEXTURE),
            other,
        ]

    def test_fold_fragment_program(self):
        f = function("ProgramNamedParameter4fNV")
        sections = [
            CategorySection(FRAGMENT_PROGRAM, (" /* shared */",)),
            FunctionSection((f,)),
        ]
        assert fold_fragment_program(sections) == [
            FunctionSection((f,), (" /* shared */",))
        ]

    def test_fold_needs_following_functions(self):
        sections = [CategorySection(FRAGMENT_PROGRAM, (" /* shared */",))]
        assert fold_fragment_program(sections) == sections

    def test_empty_ycrcb_subsample(self):
        e = Enumeration(YCRCB_SUBSAMPLE, (EnumValue("FOO", Hex(0x1, 1)),))
        assert correct_enumeration(e) == Enumeration(YCRCB_SUBSAMPLE, ())

    def test_dedupe_2x_bit(self):
        member = EnumValue("2X_BIT_ATI", Hex(0x1, 8))
        e = Enumeration(VersionCategory(1, 2), (member, member))
        assert correct_enumeration(e).members == (member,)

    def test_other_enumerations_untouched(self):
        e = Enumeration(VersionCategory(1, 2), (EnumValue("FOO", Hex(0x1, 1)),))
        assert correct_enumeration(e) == e
        assert correct_enumeration(PassthruBlock("x")) == PassthruBlock("x")


class TestComposeHeader:
    """Test the complete header on registry excerpts."""

    @pytest.fixture
    def header(self, enum_spec_text, type_map, fun_spec_text):
        return compose_header(
            enum_lines(enum_spec_text), type_map, fun_lines(fun_spec_text)
        )

    def test_frame(self, header):
        assert header.startswith("#ifndef __glext_h_\n#define __glext_h_\n")
        assert "#define GL_GLEXT_VERSION 63\n" in header
        assert header.endswith("#ifdef __cplusplus\n}\n#endif\n\n#endif\n")

    def test_version_override(self, enum_spec_text, type_map, fun_spec_text):
        header = compose_header(
            enum_lines(enum_spec_text), type_map, fun_lines(fun_spec_text), 64
        )
        assert "#define GL_GLEXT_VERSION 64\n" in header

    def test_core_1_1_excluded(self, header):
        assert "GL_VERSION_1_1" not in header
        assert "TEXTURE_BINDING_1D" not in header
        assert "glFlush" not in header

    def test_enumerations(self, header):
        assert (
            "#ifndef GL_VERSION_1_2\n"
            "#define GL_UNSIGNED_BYTE_3_3_2" + " " * 11 + " 0x8032\n"
            "#define GL_RESCALE_NORMAL" + " " * 16 + " 0x803A\n"
            "#endif\n"
        ) in header
        assert "/* reuse GL_RESCALE_NORMAL */\n" in header
        assert "#ifndef GL_SGIX_ycrcb_subsample\n#endif\n" in header
        assert header.count("GL_2X_BIT_ATI") == 1
        assert "/* Reuse tokens from ATI_fragment_shader */\n" in header

    def test_functions(self, header):
        assert "/* OpenGL 1.2 commands */\n" in header
        assert (
            "GLAPI void APIENTRY glBlendColor (GLclampf red, GLclampf green, "
            "GLclampf blue, GLclampf alpha);\n"
            "GLAPI void APIENTRY glBlendEquation (GLenum mode);\n"
            "#endif /* GL_GLEXT_PROTOTYPES */\n"
        ) in header
        assert (
            "typedef void (APIENTRYP PFNGLACTIVETEXTUREARBPROC) (GLenum texture);\n"
        ) in header

    def test_corrections_applied(self, header):
        assert header.count("#ifndef GL_MESA_ycbcr_texture") == 1
        assert header.count("#ifndef GL_NV_fragment_program") == 1
        assert (
            "#define GL_NV_fragment_program 1\n"
            "/* Some NV_fragment_program entry points are shared with "
            "ARB_vertex_program. */\n"
            "#ifdef GL_GLEXT_PROTOTYPES\n"
            "GLAPI void APIENTRY glProgramNamedParameter4fNV (GLuint id, "
            "GLsizei len, const GLubyte *name, GLfloat x);\n"
        ) in header
