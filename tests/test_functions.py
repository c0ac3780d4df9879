"""Tests for the gl.spec grammar and printer."""

import pytest

from glext_generator.errors import ParseError, UnknownVocabularyError
from glext_generator.functions import fun_line, fun_lines, render_fun_line
from glext_generator.types import (
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
    ExtensionCategory,
    ExtensionProp,
    ExtensionToken,
    FunPassthru,
    Glextmask,
    GlfFlag,
    Glfflags,
    GlxFlag,
    Glxflags,
    Glxropcode,
    Mark,
    Menu,
    NameCategory,
    NewCategory,
    Note,
    Number,
    Offset,
    Param,
    ParamType,
    Return,
    ReturnType,
    Signature,
    Vendor,
    Version,
    VersionCategory,
    WglFlag,
    Wglflags,
)


class TestProperties:
    """Test indented property lines."""

    def test_return(self):
        assert fun_line("\treturn\t\tvoid") == Return(ReturnType.VOID)

    def test_keyword_colon_is_accepted(self):
        assert fun_line("\treturn: void") == Return(ReturnType.VOID)

    def test_param_by_value(self):
        assert fun_line("\tparam\t\tvalue\t\tUInt32 in value") == Param(
            "value", ParamType("UInt32", True, ByValue())
        )

    def test_param_array(self):
        line = fun_line(
            "\tparam\t\tpointer\t\tVoid in array [COMPSIZE(size/type/stride)]"
            " retained"
        )
        assert line.type == ParamType(
            "Void", True, ByArray("COMPSIZE(size/type/stride)", retained=True)
        )

    def test_param_reference(self):
        line = fun_line("\tparam\t\tparams\t\tInt32 out reference")
        assert line.type == ParamType("Int32", False, ByReference())

    def test_param_direction(self):
        with pytest.raises(ParseError):
            fun_line("\tparam\t\tx\t\tInt32 both value")

    def test_category(self):
        assert fun_line("\tcategory\tVERSION_1_2") == CategoryProp(
            VersionCategory(1, 2)
        )
        assert fun_line("\tcategory\tdisplay-list") == CategoryProp(
            NameCategory("display-list")
        )

    def test_category_with_old(self):
        line = fun_line("\tcategory\tVERSION_1_0\t\t# old: misc")
        assert line == CategoryProp(VersionCategory(1, 0), NameCategory("misc"))
        assert render_fun_line(line) == "\tcategory\tVERSION_1_0\t\t# old: misc"

    def test_version_and_deprecated(self):
        assert fun_line("\tversion\t\t1.2") == Version(1, 2)
        assert fun_line("\tdeprecated\t3.1") == Deprecated(3, 1)

    def test_opcodes(self):
        assert fun_line("\tglxropcode\t4096") == Glxropcode(Number(4096))
        assert fun_line("\tglxropcode\t?") == Glxropcode(Mark())
        assert fun_line("\tglxropcode\t2065re") == Glxropcode(Number(2065))

    def test_offset(self):
        assert fun_line("\toffset\t\t217") == Offset(Number(217))
        assert fun_line("\toffset\t\t?") == Offset(Mark())
        assert fun_line("\toffset") == Offset()

    def test_flags(self):
        assert fun_line("\twglflags\tclient-handcode server-handcode") == Wglflags(
            (WglFlag.CLIENT_HANDCODE, WglFlag.SERVER_HANDCODE)
        )
        assert fun_line("\tdlflags\t\tnotlistable") == Dlflags(DlFlag.NOTLISTABLE)
        assert fun_line("\tglfflags\tignore") == Glfflags((GlfFlag.IGNORE,))

    def test_glxflags(self):
        assert fun_line("\tglxflags") == Glxflags(())
        line = fun_line("\tglxflags\tclient-handcode ### ignore")
        assert line == Glxflags((GlxFlag.CLIENT_HANDCODE,), (GlxFlag.IGNORE,))
        assert render_fun_line(line) == "\tglxflags\tclient-handcode ### ignore"

    def test_glfflags_requires_a_flag(self):
        with pytest.raises(ParseError):
            fun_line("\tglfflags")

    def test_extension(self):
        assert fun_line("\textension") == ExtensionProp()
        assert fun_line("\textension\tsoft WINSOFT NV10") == ExtensionProp(
            (ExtensionToken.SOFT, ExtensionToken.WINSOFT, ExtensionToken.NV10)
        )

    def test_misc(self):
        assert fun_line("\tbeginend\tallow-inside") == AllowInside()
        assert fun_line("\talias\t\tActiveTexture") == Alias("ActiveTexture")
        line = fun_line("\tglextmask\tGL_MASK_SGIX_a|GL_MASK_SGIX_b")
        assert line == Glextmask(("GL_MASK_SGIX_a", "GL_MASK_SGIX_b"))
        assert render_fun_line(line) == "\tglextmask\tGL_MASK_SGIX_a|GL_MASK_SGIX_b"

    def test_unknown_flag(self):
        with pytest.raises(UnknownVocabularyError) as info:
            fun_line("\twglflags\tfast")
        assert "fast" in str(info.value)

    def test_unknown_extension_token(self):
        with pytest.raises(UnknownVocabularyError):
            fun_line("\textension\tNV99")

    def test_unknown_return_type(self):
        with pytest.raises(UnknownVocabularyError):
            fun_line("\treturn\t\tFloat128")

    def test_unknown_keyword(self):
        with pytest.raises(ParseError) as info:
            fun_line("\tcolour\t\tred")
        assert "unknown property 'colour'" in str(info.value)


class TestLines:
    """Test the column-0 lines of gl.spec."""

    def test_signature(self):
        assert fun_line("BindTexture(target, texture)") == Signature(
            "BindTexture", ("target", "texture")
        )
        assert fun_line("Flush()") == Signature("Flush")

    def test_menu(self):
        assert fun_line("required-props:") == Menu("required-props")
        line = fun_line("version:\t1.0 1.1 1.2")
        assert line == Menu("version", ("1.0", "1.1", "1.2"))
        assert render_fun_line(line) == "version:\t\t1.0 1.1 1.2"

    def test_new_category(self):
        assert fun_line("newcategory: MESA_ycbcr_texture") == NewCategory(
            ExtensionCategory(Vendor.MESA, "ycbcr_texture")
        )

    def test_passthru(self):
        line = fun_line("passthru: /* OpenGL 1.2 */")
        assert line == FunPassthru(" /* OpenGL 1.2 */")
        assert render_fun_line(line) == "passthru: /* OpenGL 1.2 */"

    def test_note(self):
        assert fun_line("@@@ see below") == Note("see below")

    def test_comment_and_blank(self):
        assert fun_line("# comment") == Comment("# comment")
        assert fun_line("\t# indented") == Comment("\t# indented")
        assert fun_line("\n") == BlankLine()


PROPERTY_LINES = [
    "\treturn\t\tvoid",
    "\tparam\t\ttexture\t\tTextureTarget in value",
    "\tparam\t\tv\t\tFloat32 in array [4]",
    "\tparam\t\tpointer\t\tVoid in array [size] retained",
    "\tcategory\tARB_multitexture",
    "\tsubcategory\tdrawing",
    "\tversion\t\t1.2",
    "\tglxropcode\t?",
    "\toffset",
    "\twglflags\tsmall-data batchable",
    "\tglxflags\tEXT ### client-handcode",
    "\tglxflags\t### ignore",
    "\tglfflags\tcapture-execute gl-enum",
    "\tglxvectorequiv\tColor3bv",
    "\tvectorequiv\tColor3bv",
    "\tglxvendorpriv\t1308",
    "\textension\tnot_implemented",
]


class TestReprint:
    """A printed line parses back to the same record."""

    @pytest.mark.parametrize("text", PROPERTY_LINES)
    def test_property_reprint(self, text):
        record = fun_line(text)
        assert fun_line(render_fun_line(record)) == record

    def test_file(self, fun_spec_text):
        lines = fun_lines(fun_spec_text)
        assert len(lines) == fun_spec_text.count("\n")
        printed = "".join(render_fun_line(line) + "\n" for line in lines)
        assert fun_lines(printed) == lines
