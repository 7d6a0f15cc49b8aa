"""Command-line entry point for objfile-debuginfo."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from .application import ObjectFile
from .domain.models import DebugObjectFileInfo, Symbol
from .exceptions import ObjectFileError
from .infrastructure.config import Config
from .infrastructure.logging import LoggerSetup, get_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="List symbols, sections, line tables and method/variable debug "
        "data of an object file",
        epilog="""
Examples:
  # Symbols and sections
  objfile-debuginfo build/foo.o --symbols --sections

  # Line table of one symbol
  objfile-debuginfo build/foo.o --lines main

  # Methods and local variable locations
  objfile-debuginfo build/foo.o --debug-info --strict

  # Using .env file for configuration
  echo 'OBJECT_FILE_PATH=build/foo.o' > .env
  objfile-debuginfo --debug-info
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "object_file",
        type=Path,
        nargs="?",
        help="Path to the object file (optional if OBJECT_FILE_PATH is set)",
    )
    parser.add_argument("--symbols", action="store_true", help="List symbols")
    parser.add_argument("--sections", action="store_true", help="List sections")
    parser.add_argument(
        "--lines",
        type=str,
        metavar="SYMBOL",
        help="Print the line table for the given symbol(s), comma-separated",
    )
    parser.add_argument(
        "--debug-info", action="store_true", help="Print methods and local variable locations"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Reject debug streams that end without their end markers",
    )
    parser.add_argument(
        "--log-dir", type=Path, help="Also write a debug log file to this directory"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output with debug logs"
    )
    return parser.parse_args(argv)


def format_debug_info(info: DebugObjectFileInfo | None) -> list[str]:
    """Render decoded debug information as text lines."""
    if info is None:
        return ["(no debug data)"]
    lines = []
    for method in info.methods:
        lines.append(f"{method.name}:")
        for var in method.variables:
            if var.is_register_relative:
                sign = "-" if var.offset < 0 else "+"
                location = f"[r{var.register} {sign} {abs(var.offset)}]"
            else:
                location = f"r{var.register}"
            lines.append(f"  {var.name}: {location}")
    if not info.methods:
        lines.append("(no methods)")
    return lines


def _find_symbols(symbols: list[Symbol], names: list[str]) -> list[Symbol]:
    by_name = {symbol.name: symbol for symbol in symbols}
    missing = [name for name in names if name not in by_name]
    if missing:
        raise ValueError(f"Symbol(s) not found: {', '.join(missing)}")
    return [by_name[name] for name in names]


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = Config.from_args(
            object_file_path=args.object_file,
            verbose=args.verbose,
            log_dir=args.log_dir,
            strict_debug_stream=args.strict,
        )
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    LoggerSetup.initialize(config.log_dir, verbose=config.verbose)
    logger = get_logger(__name__)
    logger.debug(f"Object file: {config.object_file_path}")

    if not (args.symbols or args.sections or args.lines or args.debug_info):
        logger.error("Nothing to do: pass --symbols, --sections, --lines or --debug-info")
        sys.exit(1)

    object_file_path = config.object_file_path
    if object_file_path is None:
        logger.error("No object file given (argument or OBJECT_FILE_PATH)")
        sys.exit(1)

    try:
        with ObjectFile.load(
            object_file_path, strict_debug_stream=config.strict_debug_stream
        ) as obj:
            if args.sections:
                for section in obj.get_sections():
                    print(section)

            if args.symbols:
                for symbol in obj.get_symbols():
                    print(symbol)

            if args.lines:
                names = [s.strip() for s in args.lines.split(",") if s.strip()]
                for symbol in _find_symbols(obj.get_symbols(), names):
                    print(f"{symbol.name}:")
                    for info in obj.get_line_infos(symbol):
                        print(f"  0x{info.address:08x} line {info.line_number}")

            if args.debug_info:
                for line in format_debug_info(obj.get_debug_info()):
                    print(line)

    except (ObjectFileError, ValueError) as e:
        logger.error(f"{e}")
        if config.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
