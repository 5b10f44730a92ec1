"""Register decoder.

Turns raw 16-bit register words into typed values: booleans, 8/16/32/64-bit
integers and IEEE-754 floats. `convert` is the main entry point and routes a
DataType to one of the specialized decoders below, each of which can also
be called directly.

All functions are pure. Failures raise a ConversionError subclass carrying
the matching ErrorCode.
"""

import logging
from typing import Optional, Sequence, Union

from regconv.core.data_types import (
    DATA_TYPE_PROPERTIES,
    DataType,
    TypeCategory,
    parse_data_type,
)
from regconv.errors import (
    InsufficientRegistersError,
    InvalidBitPositionError,
    InvalidTypeError,
    NullPointerError,
)
from regconv.utils.byteorder import LAYOUTS_16, LAYOUTS_32, LAYOUTS_64, reorder
from regconv.utils.ieee754 import from_bytes_to_float32, from_bytes_to_float64, to_float32
from regconv.utils.narrowing import (
    OVERFLOW_WRAP,
    check_overflow_policy,
    scale_and_narrow,
    to_signed,
)

logger = logging.getLogger(__name__)

Value = Union[bool, int, float]
DataTypeLike = Union[DataType, str]


def _resolve(data_type: DataTypeLike) -> DataType:
    try:
        return parse_data_type(data_type)
    except ValueError as exc:
        raise InvalidTypeError(str(exc)) from None


def _require(registers: Optional[Sequence[int]], needed: int, dtype_label: str) -> None:
    if registers is None:
        raise NullPointerError("registers must not be None")
    if len(registers) < needed:
        raise InsufficientRegistersError(
            f"{dtype_label} needs {needed} register(s), got {len(registers)}"
        )


def _expect(data_type: DataTypeLike, category: TypeCategory) -> DataType:
    dtype = _resolve(data_type)
    if DATA_TYPE_PROPERTIES[dtype].category is not category:
        raise InvalidTypeError(f"{dtype.value} is not a {category.value} data type")
    return dtype


def convert(
    registers: Optional[Sequence[int]],
    data_type: DataTypeLike,
    bit_pos: int = 0,
    scaling_factor: float = 1.0,
    *,
    count: Optional[int] = None,
    overflow: str = OVERFLOW_WRAP,
) -> Value:
    """Decode registers into the value described by `data_type`.

    Args:
        registers: 16-bit register words in the order they were received
        data_type: DataType member or any name accepted by parse_data_type
        bit_pos: bit of the first register to read (BIT_BOOLEAN only)
        scaling_factor: multiplier applied before narrowing (ignored for
            BIT_BOOLEAN)
        count: number of leading words of `registers` to use; defaults to
            all of them
        overflow: "wrap" keeps the low bits of scaled integers that do not
            fit, "error" raises ConversionOverflowError instead

    Returns:
        bool, int or float depending on the data type

    Raises:
        NullPointerError: `registers` is None
        InsufficientRegistersError: no words, or fewer than the type needs
        InvalidTypeError: unknown data type
        InvalidBitPositionError: `bit_pos` outside 0-15
        ConversionOverflowError: see `overflow`
    """
    if registers is None:
        raise NullPointerError("registers must not be None")

    words = list(registers)
    if count is not None:
        words = words[:max(0, int(count))]
    if not words:
        raise InsufficientRegistersError("no registers to convert")

    dtype = _resolve(data_type)
    policy = check_overflow_policy(overflow)
    props = DATA_TYPE_PROPERTIES[dtype]
    logger.debug("Converting %d register(s) as %s", len(words), dtype.value)

    if props.category is TypeCategory.BIT:
        return convert_bit_bool(words, bit_pos)
    if props.category is TypeCategory.INT8:
        if props.signed:
            return convert_int8_signed(words, scaling_factor, overflow=policy)
        return convert_int8_unsigned(words, scaling_factor, overflow=policy)
    if props.category is TypeCategory.INT16:
        swap = LAYOUTS_16[props.layout].swap
        if props.signed:
            return convert_int16_signed(words, swap, scaling_factor, overflow=policy)
        return convert_int16_unsigned(words, swap, scaling_factor, overflow=policy)
    if props.category is TypeCategory.INT32:
        return convert_int32(words, dtype, scaling_factor, overflow=policy)
    if props.category is TypeCategory.INT64:
        return convert_int64(words, dtype, scaling_factor, overflow=policy)
    if props.category is TypeCategory.FLOAT32:
        return convert_float32(words, dtype, scaling_factor)
    if props.category is TypeCategory.FLOAT64:
        return convert_float64(words, dtype, scaling_factor)

    raise InvalidTypeError(f"No decoder for data type {dtype.value}")


def convert_bit_bool(registers: Sequence[int], bit_pos: int) -> bool:
    """Return bit `bit_pos` (0 = least significant) of the first register."""
    if registers is None:
        raise NullPointerError("registers must not be None")
    if isinstance(bit_pos, bool) or not isinstance(bit_pos, int) or not 0 <= bit_pos <= 15:
        raise InvalidBitPositionError(f"Bit position {bit_pos!r} outside 0-15")
    _require(registers, 1, "Boolean")
    return bool((int(registers[0]) >> bit_pos) & 1)


def convert_int8_signed(registers: Sequence[int], scaling_factor: float = 1.0,
                        overflow: str = OVERFLOW_WRAP) -> int:
    """Low byte of the first register as a two's-complement int8, scaled."""
    _require(registers, 1, "Int8")
    raw = to_signed(int(registers[0]) & 0xFF, 8)
    return scale_and_narrow(raw, scaling_factor, 8, True, check_overflow_policy(overflow))


def convert_int8_unsigned(registers: Sequence[int], scaling_factor: float = 1.0,
                          overflow: str = OVERFLOW_WRAP) -> int:
    _require(registers, 1, "UInt8")
    raw = int(registers[0]) & 0xFF
    return scale_and_narrow(raw, scaling_factor, 8, False, check_overflow_policy(overflow))


def _int16_raw(registers: Sequence[int], swap_bytes: bool) -> int:
    layout = LAYOUTS_16["BA" if swap_bytes else "AB"]
    return int.from_bytes(reorder(registers, layout), byteorder="big")


def convert_int16_signed(registers: Sequence[int], swap_bytes: bool = False,
                         scaling_factor: float = 1.0, overflow: str = OVERFLOW_WRAP) -> int:
    """First register as int16; `swap_bytes` selects BA instead of AB."""
    _require(registers, 1, "Int16")
    raw = to_signed(_int16_raw(registers, swap_bytes), 16)
    return scale_and_narrow(raw, scaling_factor, 16, True, check_overflow_policy(overflow))


def convert_int16_unsigned(registers: Sequence[int], swap_bytes: bool = False,
                           scaling_factor: float = 1.0, overflow: str = OVERFLOW_WRAP) -> int:
    _require(registers, 1, "UInt16")
    raw = _int16_raw(registers, swap_bytes)
    return scale_and_narrow(raw, scaling_factor, 16, False, check_overflow_policy(overflow))


def convert_int32(registers: Sequence[int], data_type: DataTypeLike,
                  scaling_factor: float = 1.0, overflow: str = OVERFLOW_WRAP) -> int:
    """Two registers as a 32-bit integer in one of the ABCD/DCBA/BADC/CDAB layouts.

    Raises InvalidTypeError for anything but the eight INT32_* types.
    """
    dtype = _expect(data_type, TypeCategory.INT32)
    props = DATA_TYPE_PROPERTIES[dtype]
    _require(registers, 2, props.label)

    raw = int.from_bytes(reorder(registers, LAYOUTS_32[props.layout]), byteorder="big")
    if props.signed:
        raw = to_signed(raw, 32)
    return scale_and_narrow(raw, scaling_factor, 32, props.signed, check_overflow_policy(overflow))


def convert_int64(registers: Sequence[int], data_type: DataTypeLike,
                  scaling_factor: float = 1.0, overflow: str = OVERFLOW_WRAP) -> int:
    """Four registers as a 64-bit integer in one of the eight INT64 layouts."""
    dtype = _expect(data_type, TypeCategory.INT64)
    props = DATA_TYPE_PROPERTIES[dtype]
    _require(registers, 4, props.label)

    raw = int.from_bytes(reorder(registers, LAYOUTS_64[props.layout]), byteorder="big")
    if props.signed:
        raw = to_signed(raw, 64)
    return scale_and_narrow(raw, scaling_factor, 64, props.signed, check_overflow_policy(overflow))


def convert_float32(registers: Sequence[int], data_type: DataTypeLike,
                    scaling_factor: float = 1.0) -> float:
    """Two registers as an IEEE-754 binary32 value times `scaling_factor`.

    The product is rounded back to binary32 precision.
    """
    dtype = _expect(data_type, TypeCategory.FLOAT32)
    props = DATA_TYPE_PROPERTIES[dtype]
    _require(registers, 2, props.label)

    value = from_bytes_to_float32(reorder(registers, LAYOUTS_32[props.layout]))
    return to_float32(value * float(scaling_factor))


def convert_float64(registers: Sequence[int], data_type: DataTypeLike,
                    scaling_factor: float = 1.0) -> float:
    dtype = _expect(data_type, TypeCategory.FLOAT64)
    props = DATA_TYPE_PROPERTIES[dtype]
    _require(registers, 4, props.label)

    value = from_bytes_to_float64(reorder(registers, LAYOUTS_64[props.layout]))
    return value * float(scaling_factor)
