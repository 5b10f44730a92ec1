"""Tests for regconv.utils.parsing module."""

import pytest

from regconv.utils.parsing import (
    format_registers,
    parse_register_value,
    parse_register_values,
    split_values,
)


class TestSplitValues:
    """Tests for split_values function."""

    def test_empty_input_returns_empty_list(self):
        assert split_values(None) == []
        assert split_values("") == []
        assert split_values("   ") == []
        assert split_values([]) == []

    def test_csv_values(self):
        assert split_values("1,2,3") == ["1", "2", "3"]
        assert split_values("10, 20, 30") == ["10", "20", "30"]

    def test_whitespace_values(self):
        assert split_values("0x3F80 0x0000") == ["0x3F80", "0x0000"]

    def test_argument_list(self):
        assert split_values(["0x3F80,", "0", "1,2"]) == ["0x3F80", "0", "1", "2"]


class TestParseRegisterValue:
    def test_bases(self):
        assert parse_register_value("0x3F80") == 0x3F80
        assert parse_register_value("100") == 100
        assert parse_register_value("0b101") == 5

    def test_negative_int16(self):
        assert parse_register_value("-1") == 0xFFFF
        assert parse_register_value("-32768") == 0x8000

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="out of 16-bit range"):
            parse_register_value("70000")
        with pytest.raises(ValueError):
            parse_register_value("-32769")

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid register value"):
            parse_register_value("abc")


def test_parse_register_values():
    assert parse_register_values("0x3F80,0x0000") == [0x3F80, 0]
    assert parse_register_values(["1", "2"]) == [1, 2]


def test_format_registers():
    assert format_registers([0x3F80, 0]) == "0x3F80 0x0000"
