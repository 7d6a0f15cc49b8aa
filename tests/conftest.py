"""Pytest configuration and shared fixtures."""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from objfile_debuginfo.domain.models import (
    DebugObjectFileInfo,
    MethodDebugInfo,
    Section,
    Symbol,
    VariableDebugInfo,
)
from objfile_debuginfo.infrastructure.logging import LoggerSetup

from .test_utils import FakeBackend

ELF_MAGIC = b"\x7fELF"
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_object_file_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of OBJFILE_* / .env settings on the host."""
    for key in (
        "OBJFILE_STRICT_DEBUG_STREAM",
        "OBJFILE_INCLUDE_PARAMETERS",
        "OBJFILE_INCLUDE_UNNAMED_SYMBOLS",
        "OBJECT_FILE_PATH",
        "LOG_DIR",
        "VERBOSE",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Allow a test to call LoggerSetup.initialize() and undo it afterwards."""
    LoggerSetup.shutdown()
    yield
    LoggerSetup.shutdown()


@pytest.fixture
def sample_debug_info() -> DebugObjectFileInfo:
    """Two methods, one without variables, registers at both ends of the range."""
    return DebugObjectFileInfo(
        (
            MethodDebugInfo(
                "java.lang.Object.<init>",
                (
                    VariableDebugInfo("this", True, 6, -8),
                    VariableDebugInfo("count", False, 0, 0),
                    VariableDebugInfo("größe", True, 255, 2**31 - 1),
                ),
            ),
            MethodDebugInfo("empty", ()),
        )
    )


@pytest.fixture
def sample_symbols() -> list[Symbol]:
    return [
        Symbol("main", 0x1000, 0x40),
        Symbol("helper", 0x1040, 0x10),
        Symbol("label", 0x1050, 0),
    ]


@pytest.fixture
def fake_backend(sample_symbols: list[Symbol]) -> FakeBackend:
    return FakeBackend(
        symbols=sample_symbols,
        sections=[Section(".text", 0x1000, 0x60, 0x40), Section(".debug_info", 0, 0x200, 0x400)],
        line_tables={(0x1000, 0x40): ([0x1000, 10, 0x1008, 11, 0x1008, 12], 3)},
    )


@pytest.fixture(scope="session")
def frame_base_object() -> Path:
    """x86-64 gcc -O0 object whose functions use an RBP frame base (see fixtures/README.md)."""
    return FIXTURES_DIR / "frame_base.o"


@pytest.fixture(scope="session")
def host_elf_file() -> Path:
    """An ELF file available on the test host (the running interpreter)."""
    candidate = Path(sys.executable).resolve()
    try:
        with open(candidate, "rb") as f:
            magic = f.read(4)
    except OSError:
        pytest.skip(f"Cannot read {candidate}")
    if magic != ELF_MAGIC:
        pytest.skip(f"{candidate} is not an ELF file")
    return candidate
