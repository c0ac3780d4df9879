"""Settings of a header generation run."""

import argparse
from dataclasses import dataclass
from pathlib import Path

from .header import GLEXT_VERSION

SPEC_DIR = Path("spec-files") / "opengl"
DEFAULT_ENUM_SPEC = SPEC_DIR / "enumext.spec"
DEFAULT_TYPE_MAP = SPEC_DIR / "gl.tm"
DEFAULT_FUN_SPEC = SPEC_DIR / "gl.spec"
DEFAULT_OUTPUT = Path("glext.h")


@dataclass(frozen=True)
class GeneratorConfig:
    enum_spec: Path = DEFAULT_ENUM_SPEC
    type_map: Path = DEFAULT_TYPE_MAP
    fun_spec: Path = DEFAULT_FUN_SPEC
    output: Path = DEFAULT_OUTPUT
    glext_version: int = GLEXT_VERSION

    def inputs(self) -> dict[str, Path]:
        """Input files keyed by the command line flag that sets them."""
        return {
            "--enum-spec": self.enum_spec,
            "--type-map": self.type_map,
            "--fun-spec": self.fun_spec,
        }

    def missing_inputs(self) -> list[str]:
        """Flags whose input file does not exist."""
        return [flag for flag, path in self.inputs().items() if not path.exists()]


def config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    """Build a :class:`GeneratorConfig` from parsed ``header`` arguments."""
    return GeneratorConfig(
        enum_spec=args.enum_spec,
        type_map=args.type_map,
        fun_spec=args.fun_spec,
        output=args.output,
        glext_version=args.glext_version,
    )
