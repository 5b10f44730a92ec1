import math
import struct


def from_bytes_to_float32(b: bytes) -> float:
    """Interpret 4 bytes as a big-endian IEEE-754 float32.

    NaN and infinities are returned as-is; see :func:`describe_float` for
    display text.
    """
    if len(b) != 4:
        raise ValueError("float32 requires exactly 4 bytes")
    return struct.unpack('>f', b)[0]


def from_bytes_to_float64(b: bytes) -> float:
    """Interpret 8 bytes as a big-endian IEEE-754 float64."""
    if len(b) != 8:
        raise ValueError("float64 requires exactly 8 bytes")
    return struct.unpack('>d', b)[0]


def to_float32(value: float) -> float:
    """Round a Python float to the nearest binary32 value.

    Values beyond the binary32 range become signed infinity, the same as a
    C ``(float)`` cast.
    """
    try:
        return struct.unpack('>f', struct.pack('>f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def describe_float(value: float) -> str:
    """Display text for a decoded float.

    Returns "SENSOR FAULT" for NaN and "OVERFLOW" for infinities, which is
    how devices usually flag a broken or saturated sensor.
    """
    if math.isnan(value):
        return "SENSOR FAULT"
    if math.isinf(value):
        return "OVERFLOW"
    return f"{value:.6g}"
