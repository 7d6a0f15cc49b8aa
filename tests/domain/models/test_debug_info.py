#!/usr/bin/env python3

"""Tests for the domain value types."""

import pytest

from objfile_debuginfo.domain.models import (
    DebugObjectFileInfo,
    LineInfo,
    MethodDebugInfo,
    Section,
    Symbol,
    VariableDebugInfo,
)


class TestVariableDebugInfo:
    """Range checks on register and offset."""

    @pytest.mark.unit
    @pytest.mark.parametrize("register", [0, 128, 255])
    def test_valid_registers(self, register: int) -> None:
        assert VariableDebugInfo("v", True, register, 0).register == register

    @pytest.mark.unit
    @pytest.mark.parametrize("register", [-1, 256, -2])
    def test_register_out_of_range(self, register: int) -> None:
        """Registers are unsigned bytes; negatives mean a sign-extension bug."""
        with pytest.raises(ValueError, match="Register"):
            VariableDebugInfo("v", True, register, 0)

    @pytest.mark.unit
    @pytest.mark.parametrize("offset", [-(2**31) - 1, 2**31])
    def test_offset_out_of_range(self, offset: int) -> None:
        with pytest.raises(ValueError, match="Offset"):
            VariableDebugInfo("v", True, 1, offset)

    @pytest.mark.unit
    def test_is_immutable(self) -> None:
        var = VariableDebugInfo("v", True, 1, 0)
        with pytest.raises(AttributeError):
            var.register = 2  # type: ignore[misc]


class TestMethodAndFileInfo:
    """Sequences are stored as tuples and compare by value."""

    @pytest.mark.unit
    def test_lists_become_tuples(self) -> None:
        method = MethodDebugInfo("m", [VariableDebugInfo("v", False, 0, 0)])  # type: ignore[arg-type]
        info = DebugObjectFileInfo([method])  # type: ignore[arg-type]

        assert isinstance(method.variables, tuple)
        assert isinstance(info.methods, tuple)
        assert info == DebugObjectFileInfo((MethodDebugInfo("m", (VariableDebugInfo("v", False, 0, 0),)),))

    @pytest.mark.unit
    def test_get_method(self, sample_debug_info: DebugObjectFileInfo) -> None:
        method = sample_debug_info.get_method("empty")
        assert method is not None and method.variables == ()
        assert sample_debug_info.get_method("missing") is None


class TestSymbolAndSection:
    """Symbol identity and string forms."""

    @pytest.mark.unit
    def test_symbol_identity_ignores_size(self) -> None:
        """Two symbols with the same name and address are the same symbol."""
        assert Symbol("main", 0x1000, 16) == Symbol("main", 0x1000, 32)
        assert hash(Symbol("main", 0x1000, 16)) == hash(Symbol("main", 0x1000, 32))
        assert Symbol("main", 0x1000) != Symbol("main", 0x2000)

    @pytest.mark.unit
    def test_string_forms(self) -> None:
        assert str(Symbol("main", 0x1000, 16)) == "main @0x00001000 +16"
        assert str(Section(".text", 0x40, 8)) == "'.text': @0x00000040 +8"

    @pytest.mark.unit
    def test_line_info_value_type(self) -> None:
        assert LineInfo(1, 2) == LineInfo(1, 2)
        assert {LineInfo(1, 2), LineInfo(1, 2)} == {LineInfo(1, 2)}
