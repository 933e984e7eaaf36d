"""Unit tests for inspection constants and helpers."""

from qopikun.core.inspection_constants import (
    GDT_SYMBOLS,
    find_gdt_symbol,
    get_role_display_name,
    validate_inspection_status,
    validate_role,
    validate_tolerance_type,
)


class TestInspectionConstants:

    def test_validate_role(self):
        assert validate_role("SUPERVISOR")
        assert not validate_role("GUEST")

    def test_validate_tolerance_type(self):
        assert validate_tolerance_type("+/-")
        assert not validate_tolerance_type("±")

    def test_validate_inspection_status(self):
        assert validate_inspection_status("ON_HOLD")
        assert not validate_inspection_status("PASS")

    def test_role_display_name(self):
        assert get_role_display_name("THIRD_PARTY_INSPECTOR") == "Third-Party Inspector"

    def test_gdt_symbol_lookup(self):
        """Test symbols are found by their code."""
        assert find_gdt_symbol("⏥")["name"] == "Flatness"
        assert find_gdt_symbol("⌖")["category"] == "Location"
        assert find_gdt_symbol("X") is None

    def test_gdt_symbols_unique(self):
        codes = [s["symbol"] for s in GDT_SYMBOLS]
        assert len(codes) == len(set(codes))
