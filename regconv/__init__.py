"""regconv - decode Modbus register words into typed values.

Handles the byte/word orders used by different device vendors, linear
scaling and the inverse encoding, plus register maps for whole blocks.
"""

from .core import __version__
from .core.converter import (
    convert,
    convert_bit_bool,
    convert_float32,
    convert_float64,
    convert_int8_signed,
    convert_int8_unsigned,
    convert_int16_signed,
    convert_int16_unsigned,
    convert_int32,
    convert_int64,
)
from .core.data_types import DATA_TYPE_PROPERTIES, DataType, TypeCategory, parse_data_type
from .errors import (
    ConversionError,
    ConversionOverflowError,
    ErrorCode,
    InsufficientRegistersError,
    InvalidBitPositionError,
    InvalidTypeError,
    NullPointerError,
    error_description,
)
from .register_map import DecodedPoint, PointDefinition, RegisterMap, decode_block, load_register_map
from .utils.encoding import EncodingError, encode

__all__ = [
    "__version__",
    "convert",
    "convert_bit_bool",
    "convert_float32",
    "convert_float64",
    "convert_int8_signed",
    "convert_int8_unsigned",
    "convert_int16_signed",
    "convert_int16_unsigned",
    "convert_int32",
    "convert_int64",
    "DATA_TYPE_PROPERTIES",
    "DataType",
    "TypeCategory",
    "parse_data_type",
    "ConversionError",
    "ConversionOverflowError",
    "ErrorCode",
    "InsufficientRegistersError",
    "InvalidBitPositionError",
    "InvalidTypeError",
    "NullPointerError",
    "error_description",
    "DecodedPoint",
    "PointDefinition",
    "RegisterMap",
    "decode_block",
    "load_register_map",
    "EncodingError",
    "encode",
]
