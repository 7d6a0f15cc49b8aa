#!/usr/bin/env python3

"""Unit tests for the debug stream encoder."""

import pytest

from objfile_debuginfo.domain.models import DebugObjectFileInfo, MethodDebugInfo, VariableDebugInfo
from objfile_debuginfo.domain.services.decoding import DebugStreamDecoder, DebugStreamEncoder
from tests.test_utils import END, SCENARIO_STREAM


@pytest.mark.unit
def test_encodes_scenario_layout() -> None:
    """The encoder writes the exact record layout, closed by both markers."""
    info = DebugObjectFileInfo(
        (MethodDebugInfo("hello", (VariableDebugInfo("foo", True, 254, 16),)),)
    )
    assert DebugStreamEncoder().encode(info) == SCENARIO_STREAM + END


@pytest.mark.unit
def test_encodes_no_methods_as_single_marker() -> None:
    assert DebugStreamEncoder().encode(DebugObjectFileInfo(())) == END


@pytest.mark.unit
def test_decoder_reads_back_encoded_stream(sample_debug_info: DebugObjectFileInfo) -> None:
    """Methods without variables and registers 0 and 255 survive the trip."""
    stream = DebugStreamEncoder().encode(sample_debug_info)
    assert DebugStreamDecoder(strict=True).decode(stream) == sample_debug_info


@pytest.mark.unit
def test_every_register_value_survives() -> None:
    """All 256 register values are written and read back unchanged."""
    variables = tuple(VariableDebugInfo(f"v{reg}", reg % 2 == 0, reg, reg - 128) for reg in range(256))
    info = DebugObjectFileInfo((MethodDebugInfo("all_registers", variables),))

    decoded = DebugStreamDecoder(strict=True).decode(DebugStreamEncoder().encode(info))

    assert decoded == info


@pytest.mark.unit
@pytest.mark.parametrize(
    "info",
    [
        DebugObjectFileInfo((MethodDebugInfo("", ()),)),
        DebugObjectFileInfo((MethodDebugInfo("m", (VariableDebugInfo("", False, 0, 0),)),)),
    ],
)
def test_empty_names_are_rejected(info: DebugObjectFileInfo) -> None:
    """An empty name would be read back as an end marker."""
    with pytest.raises(ValueError, match="empty name"):
        DebugStreamEncoder().encode(info)
