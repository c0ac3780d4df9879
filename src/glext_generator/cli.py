"""Command line interface for the glext.h generator."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .assemble import (
    cross_check_menus,
    extract_functions,
    function_blocks,
    property_presence,
)
from .config import (
    DEFAULT_ENUM_SPEC,
    DEFAULT_FUN_SPEC,
    DEFAULT_OUTPUT,
    DEFAULT_TYPE_MAP,
    GeneratorConfig,
    config_from_args,
)
from .enums import enum_lines
from .errors import SpecError
from .functions import fun_lines
from .header import GLEXT_VERSION, compose_header
from .roundtrip import GRAMMARS, reparse
from .typemap import make_type_map

logger = logging.getLogger(__name__)


def load_enum_lines(path: Path):
    return enum_lines(path.read_text(), str(path))


def load_fun_lines(path: Path):
    return fun_lines(path.read_text(), str(path))


def load_type_map(path: Path):
    return make_type_map(path.read_text(), str(path))


def generate_header(config: GeneratorConfig) -> str:
    """Read the three registries named by ``config`` and build glext.h."""
    return compose_header(
        load_enum_lines(config.enum_spec),
        load_type_map(config.type_map),
        load_fun_lines(config.fun_spec),
        config.glext_version,
    )


def cmd_header(args: argparse.Namespace) -> int:
    """Write glext.h, or list the missing input files."""
    config = config_from_args(args)
    missing = config.missing_inputs()
    if missing:
        for flag in missing:
            print(f"{flag} file not found: {config.inputs()[flag]}")
        return 1

    print(f"Generating {config.output} (GL_GLEXT_VERSION {config.glext_version})...")
    text = generate_header(config)
    config.output.write_text(text)
    print(f"Output written to: {config.output}")
    return 0


def cmd_reparse(args: argparse.Namespace) -> int:
    """Round-trip one registry file."""
    result = reparse(args.path, args.kind)
    print(f"{args.path}: {result.message()}")
    return 0 if result.ok else 1


def cmd_presence(args: argparse.Namespace) -> int:
    """Print which properties every function block carries."""
    blocks = function_blocks(load_fun_lines(args.fun_spec))
    for keyword, always in property_presence(blocks).items():
        print(f"{keyword}: {'always' if always else 'not always'}")
    return 0


def cmd_check_menus(args: argparse.Namespace) -> int:
    """Report functions that disagree with the gl.spec menus."""
    lines = load_fun_lines(args.fun_spec)
    problems = cross_check_menus(lines, extract_functions(lines))
    for problem in problems:
        logger.warning("%s", problem)
    print(f"{len(problems)} menu inconsistencies")
    return 1 if problems else 0


def build_argument_parser() -> argparse.ArgumentParser:
    """Argument parser with one subcommand per check."""
    parser = argparse.ArgumentParser(
        description="Generate glext.h from the OpenGL registry spec files"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    header = commands.add_parser("header", help="Generate glext.h")
    header.add_argument(
        "--enum-spec",
        type=Path,
        default=DEFAULT_ENUM_SPEC,
        help=f"Path to enumext.spec (default: {DEFAULT_ENUM_SPEC})",
    )
    header.add_argument(
        "--type-map",
        type=Path,
        default=DEFAULT_TYPE_MAP,
        help=f"Path to gl.tm (default: {DEFAULT_TYPE_MAP})",
    )
    header.add_argument(
        "--fun-spec",
        type=Path,
        default=DEFAULT_FUN_SPEC,
        help=f"Path to gl.spec (default: {DEFAULT_FUN_SPEC})",
    )
    header.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Generated header (default: {DEFAULT_OUTPUT})",
    )
    header.add_argument(
        "--glext-version",
        type=int,
        default=GLEXT_VERSION,
        help=f"Value of GL_GLEXT_VERSION (default: {GLEXT_VERSION})",
    )
    header.set_defaults(func=cmd_header)

    check = commands.add_parser(
        "reparse", help="Check that a registry file survives parse/print/parse"
    )
    check.add_argument("kind", choices=sorted(GRAMMARS))
    check.add_argument("path", type=Path)
    check.set_defaults(func=cmd_reparse)

    presence = commands.add_parser(
        "presence", help="Report which properties every function carries"
    )
    presence.add_argument("fun_spec", type=Path)
    presence.set_defaults(func=cmd_presence)

    menus = commands.add_parser(
        "check-menus", help="Check categories and versions against the menus"
    )
    menus.add_argument("fun_spec", type=Path)
    menus.set_defaults(func=cmd_check_menus)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_argument_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except SpecError as e:
        logger.debug("aborting", exc_info=True)
        print(f"Error: {e}")
        return 1
    except OSError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
