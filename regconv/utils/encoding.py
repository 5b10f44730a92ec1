"""Value encoding helpers: the inverse of the register decoder.

Produces the register words a device using a given DataType layout would
transmit for a value, so that ``convert(encode(v, t), t) == v``. Used to
build test vectors and by the CLI `encode` command.
"""

import math
import struct
from typing import List, Union

from regconv.core.data_types import (
    DATA_TYPE_PROPERTIES,
    DataType,
    TypeCategory,
    is_float_type,
    parse_data_type,
)
from regconv.utils.byteorder import LAYOUTS_16, LAYOUTS_32, LAYOUTS_64, unorder
from regconv.utils.narrowing import int_range


class EncodingError(Exception):
    """Raised when encoding a value fails."""


def encode_bool(value: Union[bool, int], bit_pos: int = 0) -> List[int]:
    """Encode a boolean as a single register with only `bit_pos` set."""
    if isinstance(bit_pos, bool) or not isinstance(bit_pos, int) or not 0 <= bit_pos <= 15:
        raise EncodingError(f"Bit position {bit_pos!r} outside 0-15")
    if value not in (0, 1):
        raise EncodingError(f"Value {value!r} is not a boolean (0/1, true/false)")
    return [1 << bit_pos] if value else [0]


def encode_int(value: Union[int, float], data_type: DataType, scaling_factor: float = 1.0) -> List[int]:
    """Encode an integer for one of the INT8/16/32/64 data types.

    The decoder truncates ``raw * scaling_factor`` toward zero, so the raw
    word is the one nearest ``value / scaling_factor`` that truncates back
    to `value`. Integer types decode to whole numbers only, so a float with
    a fractional part is rejected rather than rounded.

    Raises:
        EncodingError: If value is not a whole finite number, no raw word
            decodes back to it, or the raw word is out of range
    """
    props = DATA_TYPE_PROPERTIES[data_type]
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise EncodingError(f"Cannot encode {value} as an integer")
        value = int(value)

    if scaling_factor == 1.0:
        raw = value
    else:
        guess = round(value / scaling_factor)
        for raw in (guess - 1, guess, guess + 1):
            if int(raw * float(scaling_factor)) == value:
                break
        else:
            raise EncodingError(
                f"No register value decodes to {value} with scaling factor {scaling_factor}"
            )

    lo, hi = int_range(props.bits, props.signed)
    if not lo <= raw <= hi:
        kind = "signed" if props.signed else "unsigned"
        raise EncodingError(f"Value {raw} out of {props.bits}-bit {kind} range ({lo} to {hi})")

    value_u = raw & ((1 << props.bits) - 1)
    if props.category is TypeCategory.INT8:
        return [value_u]

    bv = value_u.to_bytes(props.bits // 8, byteorder="big", signed=False)
    return unorder(bv, _layout(props))


def encode_float(value: float, data_type: DataType, scaling_factor: float = 1.0) -> List[int]:
    """Encode a float as IEEE-754 binary32 or binary64 registers."""
    props = DATA_TYPE_PROPERTIES[data_type]
    fmt = "!f" if props.category is TypeCategory.FLOAT32 else "!d"
    try:
        raw_be = struct.pack(fmt, float(value) / scaling_factor)
    except (struct.error, OverflowError, TypeError, ValueError) as e:
        raise EncodingError(f"Cannot encode {value!r} as float{props.bits}: {e}")
    return unorder(raw_be, _layout(props))


def encode(
    value: Union[bool, int, float],
    data_type: Union[DataType, str],
    bit_pos: int = 0,
    scaling_factor: float = 1.0,
) -> List[int]:
    """Encode a value into Modbus registers for `data_type`.

    This is the main entry point for encoding.

    Args:
        value: Value to encode (bool, int or float)
        data_type: DataType member or name
        bit_pos: Bit to set for BIT_BOOLEAN
        scaling_factor: The factor the decoder will multiply by

    Returns:
        List of 16-bit register values in transmission order

    Raises:
        EncodingError: If the value cannot be encoded
    """
    try:
        dtype = parse_data_type(data_type)
    except ValueError as exc:
        raise EncodingError(str(exc)) from None
    if scaling_factor == 0 or not math.isfinite(scaling_factor):
        raise EncodingError(f"Cannot encode with scaling factor {scaling_factor}")

    category = DATA_TYPE_PROPERTIES[dtype].category
    if category is TypeCategory.BIT:
        return encode_bool(value, bit_pos)
    if is_float_type(dtype):
        return encode_float(value, dtype, scaling_factor)
    return encode_int(value, dtype, scaling_factor)


def parse_value_text(value_text: str, data_type: Union[DataType, str]) -> Union[bool, int, float]:
    """Parse user input into a value suitable for `data_type`.

    Integers accept decimal or 0xHEX; booleans accept 0/1/true/false/on/off.
    """
    try:
        dtype = parse_data_type(data_type)
    except ValueError as exc:
        raise EncodingError(str(exc)) from None
    text = value_text.strip()
    category = DATA_TYPE_PROPERTIES[dtype].category

    if category is TypeCategory.BIT:
        lowered = text.lower()
        if lowered in ("1", "true", "on", "yes"):
            return True
        if lowered in ("0", "false", "off", "no"):
            return False
        raise EncodingError("Value must be 0/1 or true/false for boolean types")

    if is_float_type(dtype):
        if text.lower().startswith("0x"):
            raise EncodingError("Hex values are not allowed with float types")
        try:
            return float(text)
        except ValueError:
            raise EncodingError("Value must be a valid float for float types")

    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise EncodingError("Value must be an integer or 0xHEX format")


def _layout(props):
    if props.category is TypeCategory.INT16:
        return LAYOUTS_16[props.layout]
    if props.bits == 32:
        return LAYOUTS_32[props.layout]
    return LAYOUTS_64[props.layout]
