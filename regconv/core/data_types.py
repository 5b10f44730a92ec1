from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union


class TypeCategory(str, Enum):
    """Width class of a data type; selects the decoder."""

    BIT = "bit"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"


class DataType(str, Enum):
    """Supported register data types.

    Multi-byte members carry the byte layout label: A is the first byte on
    the wire (high byte of the first register), B the second, and so on.
    """

    BIT_BOOLEAN = "bit_boolean"

    INT8_SIGNED = "int8_signed"
    INT8_UNSIGNED = "int8_unsigned"

    INT16_SIGNED_AB = "int16_signed_ab"
    INT16_SIGNED_BA = "int16_signed_ba"
    INT16_UNSIGNED_AB = "int16_unsigned_ab"
    INT16_UNSIGNED_BA = "int16_unsigned_ba"

    INT32_SIGNED_ABCD = "int32_signed_abcd"
    INT32_SIGNED_DCBA = "int32_signed_dcba"
    INT32_SIGNED_BADC = "int32_signed_badc"
    INT32_SIGNED_CDAB = "int32_signed_cdab"
    INT32_UNSIGNED_ABCD = "int32_unsigned_abcd"
    INT32_UNSIGNED_DCBA = "int32_unsigned_dcba"
    INT32_UNSIGNED_BADC = "int32_unsigned_badc"
    INT32_UNSIGNED_CDAB = "int32_unsigned_cdab"

    INT64_SIGNED_ABCDEFGH = "int64_signed_abcdefgh"
    INT64_SIGNED_HGFEDCBA = "int64_signed_hgfedcba"
    INT64_SIGNED_BADCFEHG = "int64_signed_badcfehg"
    INT64_SIGNED_CDABGHEF = "int64_signed_cdabghef"
    INT64_SIGNED_DCBAHGFE = "int64_signed_dcbahgfe"
    INT64_SIGNED_GHEFCDAB = "int64_signed_ghefcdab"
    INT64_SIGNED_FEHGBADC = "int64_signed_fehgbadc"
    INT64_SIGNED_EFGHABCD = "int64_signed_efghabcd"
    INT64_UNSIGNED_ABCDEFGH = "int64_unsigned_abcdefgh"
    INT64_UNSIGNED_HGFEDCBA = "int64_unsigned_hgfedcba"
    INT64_UNSIGNED_BADCFEHG = "int64_unsigned_badcfehg"
    INT64_UNSIGNED_CDABGHEF = "int64_unsigned_cdabghef"
    INT64_UNSIGNED_DCBAHGFE = "int64_unsigned_dcbahgfe"
    INT64_UNSIGNED_GHEFCDAB = "int64_unsigned_ghefcdab"
    INT64_UNSIGNED_FEHGBADC = "int64_unsigned_fehgbadc"
    INT64_UNSIGNED_EFGHABCD = "int64_unsigned_efghabcd"

    FLOAT32_ABCD = "float32_abcd"
    FLOAT32_CDAB = "float32_cdab"
    FLOAT32_DCBA = "float32_dcba"
    FLOAT32_BADC = "float32_badc"

    FLOAT64_ABCDEFGH = "float64_abcdefgh"
    FLOAT64_HGFEDCBA = "float64_hgfedcba"
    FLOAT64_BADCFEHG = "float64_badcfehg"
    FLOAT64_CDABGHEF = "float64_cdabghef"
    FLOAT64_DCBAHGFE = "float64_dcbahgfe"
    FLOAT64_GHEFCDAB = "float64_ghefcdab"
    FLOAT64_FEHGBADC = "float64_fehgbadc"
    FLOAT64_EFGHABCD = "float64_efghabcd"


@dataclass(frozen=True)
class DataTypeProperties:
    label: str
    category: TypeCategory
    bits: int
    register_count: int
    signed: Optional[bool]
    layout: Optional[str]


_CATEGORY_WIDTH = {
    TypeCategory.BIT: (1, 1),
    TypeCategory.INT8: (8, 1),
    TypeCategory.INT16: (16, 1),
    TypeCategory.INT32: (32, 2),
    TypeCategory.INT64: (64, 4),
    TypeCategory.FLOAT32: (32, 2),
    TypeCategory.FLOAT64: (64, 4),
}


def _describe(dtype: DataType) -> DataTypeProperties:
    parts = dtype.value.split("_")
    if dtype is DataType.BIT_BOOLEAN:
        category = TypeCategory.BIT
    else:
        category = TypeCategory(parts[0])
    bits, register_count = _CATEGORY_WIDTH[category]

    signed: Optional[bool] = None
    if "signed" in parts:
        signed = True
    elif "unsigned" in parts:
        signed = False

    layout = None
    if category not in (TypeCategory.BIT, TypeCategory.INT8):
        layout = parts[-1].upper()

    if category is TypeCategory.BIT:
        label = "Boolean (bit)"
    elif category in (TypeCategory.FLOAT32, TypeCategory.FLOAT64):
        label = f"Float{bits} {layout}"
    else:
        prefix = "Int" if signed else "UInt"
        label = f"{prefix}{bits}" + (f" {layout}" if layout else "")

    return DataTypeProperties(
        label=label,
        category=category,
        bits=bits,
        register_count=register_count,
        signed=signed,
        layout=layout,
    )


DATA_TYPE_PROPERTIES: Dict[DataType, DataTypeProperties] = {
    dtype: _describe(dtype) for dtype in DataType
}


def _build_aliases() -> Dict[str, DataType]:
    aliases: Dict[str, DataType] = {
        "bool": DataType.BIT_BOOLEAN,
        "boolean": DataType.BIT_BOOLEAN,
        "bit": DataType.BIT_BOOLEAN,
        "int8": DataType.INT8_SIGNED,
        "i8": DataType.INT8_SIGNED,
        "uint8": DataType.INT8_UNSIGNED,
        "u8": DataType.INT8_UNSIGNED,
        "int16": DataType.INT16_SIGNED_AB,
        "i16": DataType.INT16_SIGNED_AB,
        "uint16": DataType.INT16_UNSIGNED_AB,
        "u16": DataType.INT16_UNSIGNED_AB,
        "int32": DataType.INT32_SIGNED_ABCD,
        "i32": DataType.INT32_SIGNED_ABCD,
        "uint32": DataType.INT32_UNSIGNED_ABCD,
        "u32": DataType.INT32_UNSIGNED_ABCD,
        "int64": DataType.INT64_SIGNED_ABCDEFGH,
        "i64": DataType.INT64_SIGNED_ABCDEFGH,
        "uint64": DataType.INT64_UNSIGNED_ABCDEFGH,
        "u64": DataType.INT64_UNSIGNED_ABCDEFGH,
        "float": DataType.FLOAT32_ABCD,
        "float32": DataType.FLOAT32_ABCD,
        "f32": DataType.FLOAT32_ABCD,
        "real": DataType.FLOAT32_ABCD,
        "double": DataType.FLOAT64_ABCDEFGH,
        "float64": DataType.FLOAT64_ABCDEFGH,
        "f64": DataType.FLOAT64_ABCDEFGH,
        "lreal": DataType.FLOAT64_ABCDEFGH,
    }
    for dtype, props in DATA_TYPE_PROPERTIES.items():
        aliases[dtype.value] = dtype
        aliases[dtype.name.lower()] = dtype
        if props.layout and props.signed is not None:
            # int16_ba, uint32_cdab, ...
            prefix = "int" if props.signed else "uint"
            aliases[f"{prefix}{props.bits}_{props.layout.lower()}"] = dtype
    return aliases


_DATA_TYPE_ALIASES = _build_aliases()


def parse_data_type(value: Union[str, DataType, None]) -> DataType:
    """Resolve a DataType from a member, a member name or a short alias.

    Matching is case-insensitive and treats '-' and spaces like '_', so
    "UINT32-CDAB", "uint32_cdab" and "int32_unsigned_cdab" all resolve to
    DataType.INT32_UNSIGNED_CDAB.
    """
    if isinstance(value, DataType):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Unknown data type {value!r}")
    key = value.strip().lower().replace("-", "_").replace(" ", "_")
    dtype = _DATA_TYPE_ALIASES.get(key)
    if dtype is None:
        raise ValueError(f"Unknown data type '{value}'")
    return dtype


def types_in_category(category: TypeCategory) -> List[DataType]:
    return [d for d, p in DATA_TYPE_PROPERTIES.items() if p.category is category]


def is_float_type(dtype: DataType) -> bool:
    return DATA_TYPE_PROPERTIES[dtype].category in (TypeCategory.FLOAT32, TypeCategory.FLOAT64)
