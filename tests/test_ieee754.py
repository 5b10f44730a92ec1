import math
import struct

import pytest

from regconv.utils.ieee754 import (
    describe_float,
    from_bytes_to_float32,
    from_bytes_to_float64,
    to_float32,
)


def test_float32_normal():
    b = (0x41, 0x20, 0x00, 0x00)  # 10.0 in >f
    val = from_bytes_to_float32(bytes(b))
    assert isinstance(val, float)
    assert abs(val - 10.0) < 1e-6


def test_float32_nan():
    # quiet NaN pattern
    b = bytes([0x7F, 0xC0, 0x00, 0x01])
    assert math.isnan(from_bytes_to_float32(b))


def test_float32_inf():
    b = bytes([0xFF, 0x80, 0x00, 0x00])
    assert from_bytes_to_float32(b) == -math.inf


def test_float32_wrong_length():
    with pytest.raises(ValueError, match="exactly 4 bytes"):
        from_bytes_to_float32(b"\x00\x00")


def test_float64_normal():
    assert from_bytes_to_float64(bytes([0x40, 0x24, 0, 0, 0, 0, 0, 0])) == 10.0
    with pytest.raises(ValueError):
        from_bytes_to_float64(b"\x00" * 4)


def test_to_float32_rounds():
    assert to_float32(0.1) == struct.unpack(">f", struct.pack(">f", 0.1))[0]
    assert to_float32(0.5) == 0.5


def test_to_float32_overflow_is_infinite():
    assert to_float32(1e39) == math.inf
    assert to_float32(-1e39) == -math.inf


def test_to_float32_nan():
    assert math.isnan(to_float32(float("nan")))


def test_describe_float():
    assert describe_float(float("nan")) == "SENSOR FAULT"
    assert describe_float(float("inf")) == "OVERFLOW"
    assert describe_float(float("-inf")) == "OVERFLOW"
    assert describe_float(10.0) == "10"
    assert describe_float(3.14159265) == "3.14159"
