#!/usr/bin/env python3

"""ELF object file backend built on pyelftools.

Opens ELF object files and dumps their symbols, sections, line table rows and
a flattened debug stream (methods and local variable locations) in the same
raw shapes a native toolchain binding would hand back.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any

from elftools.common.exceptions import DWARFError, ELFError
from elftools.dwarf.compileunit import CompileUnit
from elftools.dwarf.die import DIE
from elftools.dwarf.dwarf_expr import DWARFExprParser
from elftools.dwarf.dwarfinfo import DWARFInfo
from elftools.dwarf.locationlists import LocationExpr, LocationParser
from elftools.elf.elffile import ELFFile
from elftools.elf.sections import SymbolTableSection

from ...domain.models import (
    DebugObjectFileInfo,
    MethodDebugInfo,
    Section,
    Symbol,
    VariableDebugInfo,
)
from ...domain.services.decoding import DebugStreamEncoder
from ...exceptions import OpenError, ReadError
from ..config import get_settings
from ..logging import ProgressTracker, get_logger, log_timing
from .base import LineTable
from .location_parser import flatten_location

logger = get_logger(__name__)

_VARIABLE_TAGS = ("DW_TAG_variable", "DW_TAG_formal_parameter")
# Scopes below a subprogram whose variables still belong to it
_SCOPE_TAGS = ("DW_TAG_lexical_block",)
# Attributes that point at the DIE carrying a definition's name
_NAME_ORIGIN_ATTRS = ("DW_AT_specification", "DW_AT_abstract_origin")


@dataclass
class ElfHandle:
    """An opened ELF file. The stream stays open until the handle is disposed."""

    path: Path
    stream: IO[bytes]
    elf_file: ELFFile
    # Parsed on first use; dwarf_loaded tells a cached None apart from "not read yet"
    dwarf_info: DWARFInfo | None = field(default=None, repr=False)
    dwarf_loaded: bool = False


@contextmanager
def _reading(handle: ElfHandle, what: str) -> Iterator[None]:
    """Turn pyelftools parse failures on an opened file into ReadError."""
    try:
        yield
    except (ELFError, DWARFError) as e:
        raise ReadError(f"Failed to read {what} from {handle.path}: {e}") from e


def _attribute_str(die: DIE, name: str) -> str | None:
    attr = die.attributes.get(name)
    if attr is None:
        return None
    value = attr.value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _die_name(die: DIE) -> str | None:
    """Name of a DIE, following DW_AT_specification/DW_AT_abstract_origin.

    Out-of-line definitions and concrete copies of inlined functions (and
    their parameters and variables) carry the name on the DIE they refer to.
    """
    name = _attribute_str(die, "DW_AT_name")
    if name:
        return name
    for attr_name in _NAME_ORIGIN_ATTRS:
        if attr_name in die.attributes:
            target = die.get_DIE_from_attribute(attr_name)  # type: ignore[no-untyped-call]
            return _die_name(target)
    return None


def _has_code(die: DIE) -> bool:
    return "DW_AT_low_pc" in die.attributes or "DW_AT_ranges" in die.attributes


class ElfBackend:
    """ObjectFileBackend implementation for ELF files using pyelftools."""

    def __init__(
        self,
        include_parameters: bool | None = None,
        include_unnamed_symbols: bool | None = None,
    ):
        settings = get_settings()
        self.include_parameters = (
            settings["INCLUDE_PARAMETERS"] if include_parameters is None else include_parameters
        )
        self.include_unnamed_symbols = (
            settings["INCLUDE_UNNAMED_SYMBOLS"]
            if include_unnamed_symbols is None
            else include_unnamed_symbols
        )
        self.encoder = DebugStreamEncoder()

    def open_object_file(self, path: Path) -> ElfHandle:
        path = Path(path)
        logger.debug(f"Opening object file: {path}")

        try:
            stream = open(path, "rb")
        except OSError as e:
            raise OpenError(f"Failed to open {path.absolute()}: {e}") from e

        try:
            elf_file = ELFFile(stream)  # type: ignore[no-untyped-call]
            # Section headers are read lazily; a truncated file must fail here
            section_count = sum(1 for _ in elf_file.iter_sections())  # type: ignore[no-untyped-call]
        except ELFError as e:
            stream.close()
            raise OpenError(f"Failed to read object file {path.absolute()}: {e}") from e

        arch = elf_file.get_machine_arch()  # type: ignore[no-untyped-call]
        logger.info(f"Opened {path} ({arch}, {section_count} sections)")
        return ElfHandle(path, stream, elf_file)

    def list_symbols(self, handle: ElfHandle) -> list[Symbol]:
        symbols = []
        with _reading(handle, "symbols"):
            for section in handle.elf_file.iter_sections():  # type: ignore[no-untyped-call]
                if not isinstance(section, SymbolTableSection):
                    continue
                for sym in section.iter_symbols():  # type: ignore[no-untyped-call]
                    if not sym.name and not self.include_unnamed_symbols:
                        continue
                    symbols.append(Symbol(sym.name, sym["st_value"], sym["st_size"]))
        logger.debug(f"Listed {len(symbols)} symbols from {handle.path}")
        return symbols

    def list_sections(self, handle: ElfHandle) -> list[Section]:
        with _reading(handle, "sections"):
            return [
                Section(section.name, section["sh_addr"], section["sh_size"], section["sh_offset"])
                for section in handle.elf_file.iter_sections()  # type: ignore[no-untyped-call]
            ]

    def _get_dwarf_info(self, handle: ElfHandle) -> DWARFInfo | None:
        if not handle.dwarf_loaded:
            handle.dwarf_info = self._load_dwarf_info(handle)
            handle.dwarf_loaded = True
        return handle.dwarf_info

    def _load_dwarf_info(self, handle: ElfHandle) -> DWARFInfo | None:
        elf_file = handle.elf_file
        with _reading(handle, "DWARF data"):
            if not elf_file.has_dwarf_info():  # type: ignore[no-untyped-call]
                return None
            # .eh_frame alone makes pyelftools report DWARF info
            if not any(
                elf_file.get_section_by_name(name) is not None  # type: ignore[no-untyped-call]
                for name in (".debug_info", ".zdebug_info")
            ):
                return None
            dwarf_info: DWARFInfo = elf_file.get_dwarf_info()  # type: ignore[no-untyped-call]
        if not dwarf_info.has_debug_info:
            return None
        logger.debug(f"Loaded DWARF data from {handle.path}")
        return dwarf_info

    @log_timing
    def line_table_for(self, handle: ElfHandle, address: int, size: int) -> LineTable:
        dwarf_info = self._get_dwarf_info(handle)
        if dwarf_info is None:
            return [], 0

        end = address + size
        pairs: list[int] = []
        with _reading(handle, "line table"):
            for cu in dwarf_info.iter_CUs():  # type: ignore[no-untyped-call]
                line_program = dwarf_info.line_program_for_CU(cu)  # type: ignore[no-untyped-call]
                if line_program is None:
                    continue
                for entry in line_program.get_entries():  # type: ignore[no-untyped-call]
                    state = entry.state
                    if state is None or state.end_sequence:
                        continue
                    if address <= state.address < end:
                        pairs.append(state.address)
                        pairs.append(state.line)

        return pairs, len(pairs) // 2

    @log_timing
    def debug_stream_for(self, handle: ElfHandle) -> bytes:
        dwarf_info = self._get_dwarf_info(handle)
        if dwarf_info is None:
            logger.debug(f"No DWARF debug info in {handle.path}")
            return b""

        tracker = ProgressTracker(logger)
        methods: list[MethodDebugInfo] = []

        with _reading(handle, "debug information"):
            location_parser = LocationParser(dwarf_info.location_lists())  # type: ignore[no-untyped-call]
            with tracker.track_operation(f"collect debug methods from {handle.path.name}"):
                for cu in dwarf_info.iter_CUs():  # type: ignore[no-untyped-call]
                    with tracker.track_cu(cu):
                        expr_parser = DWARFExprParser(cu.structs)  # type: ignore[no-untyped-call]
                        for die in cu.iter_DIEs():  # type: ignore[no-untyped-call]
                            if die.tag != "DW_TAG_subprogram":
                                continue
                            method = self._collect_method(
                                cu, die, location_parser, expr_parser, tracker
                            )
                            if method is not None:
                                methods.append(method)
                                tracker.count_method()

        tracker.report_summary()
        return self.encoder.encode(DebugObjectFileInfo(tuple(methods)))

    def _collect_method(
        self,
        cu: CompileUnit,
        die: DIE,
        location_parser: LocationParser,
        expr_parser: DWARFExprParser,
        tracker: ProgressTracker,
    ) -> MethodDebugInfo | None:
        # Declarations and abstract inline roots have no code to locate; the
        # out-of-line definition is collected instead
        if "DW_AT_declaration" in die.attributes or not _has_code(die):
            return None

        name = _die_name(die)
        if not name:
            return None

        version = cu["version"]
        frame_base = self._parse_location(
            die, "DW_AT_frame_base", version, location_parser, expr_parser
        )

        variables: list[VariableDebugInfo] = []
        for child in self._iter_variable_dies(die):
            var_name = _die_name(child)
            if not var_name:
                tracker.count_variable(flattened=False)
                logger.debug(f"{name}: skipping unnamed variable at 0x{child.offset:x}")
                continue
            ops = self._parse_location(
                child, "DW_AT_location", version, location_parser, expr_parser
            )
            location = flatten_location(ops, frame_base) if ops is not None else None
            tracker.count_variable(location is not None)
            if location is None:
                logger.debug(f"{name}: no flat location for variable '{var_name}'")
                continue
            variables.append(
                VariableDebugInfo(
                    var_name, location.is_register_relative, location.register, location.offset
                )
            )

        return MethodDebugInfo(name, tuple(variables))

    def _iter_variable_dies(self, die: DIE) -> Iterator[DIE]:
        """Yield variable DIEs owned by a subprogram, descending into lexical blocks."""
        tags = _VARIABLE_TAGS if self.include_parameters else ("DW_TAG_variable",)
        for child in die.iter_children():  # type: ignore[no-untyped-call]
            if child.tag in tags:
                yield child
            elif child.tag in _SCOPE_TAGS:
                yield from self._iter_variable_dies(child)

    @staticmethod
    def _parse_location(
        die: DIE,
        attr_name: str,
        version: int,
        location_parser: LocationParser,
        expr_parser: DWARFExprParser,
    ) -> list[Any] | None:
        attr = die.attributes.get(attr_name)
        if attr is None or not LocationParser.attribute_has_location(attr, version):  # type: ignore[no-untyped-call]
            return None
        location = location_parser.parse_from_attribute(attr, version, die)  # type: ignore[no-untyped-call]
        # Location lists describe several ranges and have no single flat form
        if not isinstance(location, LocationExpr):
            return None
        ops: list[Any] = expr_parser.parse_expr(location.loc_expr)  # type: ignore[no-untyped-call]
        return ops

    def dispose_handle(self, handle: ElfHandle) -> None:
        handle.stream.close()
        logger.debug(f"Closed object file: {handle.path}")
