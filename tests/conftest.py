"""Small but realistic excerpts of the three registry files."""

import pytest

from glext_generator.typemap import make_type_map

ENUM_SPEC = (
    "# enumext.spec excerpt\n"
    "\n"
    "VERSION_1_1 enum:\n"
    "\tTEXTURE_BINDING_1D\t\t\t\t\t= 0x8068\n"
    "\n"
    "VERSION_1_2 enum:\n"
    "\tUNSIGNED_BYTE_3_3_2\t\t\t\t\t= 0x8032\n"
    "\tRESCALE_NORMAL\t\t\t\t\t= 0x803A # 1 I\n"
    "\n"
    "ARB_multitexture enum:\n"
    "\tTEXTURE0_ARB\t\t\t\t\t\t= 0x84C0\n"
    "\tuse VERSION_1_2\t\t\t    RESCALE_NORMAL\n"
    "\n"
    "SGIX_ycrcb_subsample enum:\n"
    "\tPACK_SUBSAMPLE_RATE_SGIX\t\t\t\t= 0x85A0\n"
    "\n"
    "ATI_fragment_shader enum:\n"
    "\t2X_BIT_ATI\t\t\t\t\t\t= 0x00000001\n"
    "\t2X_BIT_ATI\t\t\t\t\t\t= 0x00000001\n"
    "passthru: /* Reuse tokens from ATI_fragment_shader */\n"
    "\tNUM_FRAGMENT_REGISTERS_ATI\t\t\t\t= 0x896E\n"
)

TYPE_MAP = (
    "# gl.tm excerpt\n"
    "void,*,*,*,*,*\n"
    "BlendEquationMode,*,*,\t\t\tGLenum,*,*\n"
    "ClampedColorF,*,*,\t\t\tGLclampf,*,*\n"
    "Float32,*,*,\t\t\tGLfloat,*,*\n"
    "GLenum,*,*,\t\t\tGLenum,*,*,\n"
    "SizeI,*,*,\t\t\tGLsizei,*,*\n"
    "String,*,*,\t\t\tconst GLubyte *,*,*\n"
    "TextureTarget,*,*,\t\t\tGLenum,*,*\n"
    "UInt32,*,*,\t\t\tGLuint,*,*\n"
    "UInt8,*,*,\t\t\tGLubyte,*,*\n"
    "VoidPointer,*,*,\t\t\tGLvoid*,*,*\n"
    "sync,*,*,\t\t\tGLsync,*,*\n"
)

FUN_SPEC = (
    "# gl.spec excerpt\n"
    "required-props:\n"
    "param:\t\tretval retained\n"
    "category:\tVERSION_1_0 VERSION_1_2 ARB_multitexture MESA_ycbcr_texture"
    " NV_fragment_program misc\n"
    "version:\t1.0 1.2\n"
    "\n"
    "###############################################################################\n"
    "#\n"
    "# OpenGL 1.0 commands\n"
    "#\n"
    "###############################################################################\n"
    "\n"
    "Flush()\n"
    "\treturn\t\tvoid\n"
    "\tcategory\tVERSION_1_0\t\t# old: misc\n"
    "\tversion\t\t1.0\n"
    "\tglxsingle\t142\n"
    "\toffset\t\t217\n"
    "\n"
    "passthru: /* OpenGL 1.2 commands */\n"
    "\n"
    "BlendColor(red, green, blue, alpha)\n"
    "\treturn\t\tvoid\n"
    "\tparam\t\tred\t\tClampedColorF in value\n"
    "\tparam\t\tgreen\t\tClampedColorF in value\n"
    "\tparam\t\tblue\t\tClampedColorF in value\n"
    "\tparam\t\talpha\t\tClampedColorF in value\n"
    "\tcategory\tVERSION_1_2\n"
    "\tglxflags\tEXT\n"
    "\tversion\t\t1.2\n"
    "\tglxropcode\t4096\n"
    "\toffset\t\t336\n"
    "\n"
    "BlendEquation(mode)\n"
    "\treturn\t\tvoid\n"
    "\tparam\t\tmode\t\tBlendEquationMode in value\n"
    "\tcategory\tVERSION_1_2\n"
    "\tglxflags\tEXT\n"
    "\tversion\t\t1.2\n"
    "\tglxropcode\t4097\n"
    "\toffset\t\t337\n"
    "\n"
    "ActiveTextureARB(texture)\n"
    "\treturn\t\tvoid\n"
    "\tparam\t\ttexture\t\tTextureTarget in value\n"
    "\tcategory\tARB_multitexture\n"
    "\tglxflags\tARB\n"
    "\tversion\t\t1.2\n"
    "\tglxropcode\t197\n"
    "\talias\t\tActiveTexture\n"
    "\n"
    "# (none)\n"
    "newcategory: MESA_ycbcr_texture\n"
    "\n"
    "# (none)\n"
    "newcategory: MESA_ycbcr_texture\n"
    "\n"
    "newcategory: NV_fragment_program\n"
    "passthru: /* Some NV_fragment_program entry points are shared with "
    "ARB_vertex_program. */\n"
    "\n"
    "ProgramNamedParameter4fNV(id, len, name, x)\n"
    "\treturn\t\tvoid\n"
    "\tparam\t\tid\t\tUInt32 in value\n"
    "\tparam\t\tlen\t\tSizeI in value\n"
    "\tparam\t\tname\t\tUInt8 in array [1]\n"
    "\tparam\t\tx\t\tFloat32 in value\n"
    "\tcategory\tNV_fragment_program\n"
    "\tversion\t\t1.2\n"
    "\textension\tsoft WINSOFT NV10\n"
    "\tglxflags\tignore\n"
    "\tglfflags\tignore\n"
)


@pytest.fixture
def enum_spec_text() -> str:
    return ENUM_SPEC


@pytest.fixture
def tm_text() -> str:
    return TYPE_MAP


@pytest.fixture
def fun_spec_text() -> str:
    return FUN_SPEC


@pytest.fixture
def type_map():
    return make_type_map(TYPE_MAP)
