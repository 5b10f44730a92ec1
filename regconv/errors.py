"""Conversion error codes, exceptions and description lookup.

Provides a canonical mapping of conversion error codes to human-readable
descriptions so the library, CLI and register map share the same data.
"""
from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    SUCCESS = 0
    NULL_POINTER = -1
    INVALID_TYPE = -2
    INVALID_BIT_POSITION = -3
    INSUFFICIENT_REGISTERS = -4
    UNKNOWN = -5
    OVERFLOW = -6


ERROR_DESCRIPTIONS = {
    ErrorCode.SUCCESS: "Success",
    ErrorCode.NULL_POINTER: "Null pointer error",
    ErrorCode.INVALID_TYPE: "Invalid data type",
    ErrorCode.INVALID_BIT_POSITION: "Invalid bit position (must be 0-15)",
    ErrorCode.INSUFFICIENT_REGISTERS: "Insufficient registers for conversion",
    ErrorCode.UNKNOWN: "Unknown error",
    ErrorCode.OVERFLOW: "Scaled value does not fit the target type",
}

UNRECOGNIZED_ERROR = "Unrecognized error code"


def error_description(code: Optional[int]) -> str:
    """Return the fixed description for an error code.

    Unknown codes, None and non-integers give "Unrecognized error code".
    """
    if isinstance(code, bool) or not isinstance(code, int):
        return UNRECOGNIZED_ERROR
    try:
        return ERROR_DESCRIPTIONS[ErrorCode(code)]
    except ValueError:
        return UNRECOGNIZED_ERROR


class ConversionError(Exception):
    """Base class for register conversion failures."""

    code = ErrorCode.UNKNOWN

    def __init__(self, message: Optional[str] = None):
        self.description = error_description(self.code)
        super().__init__(message or self.description)


class NullPointerError(ConversionError, TypeError):
    code = ErrorCode.NULL_POINTER


class InvalidTypeError(ConversionError, ValueError):
    code = ErrorCode.INVALID_TYPE


class InvalidBitPositionError(ConversionError, ValueError):
    code = ErrorCode.INVALID_BIT_POSITION


class InsufficientRegistersError(ConversionError, ValueError):
    code = ErrorCode.INSUFFICIENT_REGISTERS


class ConversionOverflowError(ConversionError, OverflowError):
    code = ErrorCode.OVERFLOW
