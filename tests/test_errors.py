import pytest

from regconv.errors import (
    ConversionError,
    ConversionOverflowError,
    ErrorCode,
    InsufficientRegistersError,
    InvalidBitPositionError,
    InvalidTypeError,
    NullPointerError,
    error_description,
)


@pytest.mark.parametrize("code,text", [
    (0, "Success"),
    (-1, "Null pointer error"),
    (-2, "Invalid data type"),
    (-3, "Invalid bit position (must be 0-15)"),
    (-4, "Insufficient registers for conversion"),
    (-5, "Unknown error"),
    (-6, "Scaled value does not fit the target type"),
])
def test_error_description_known_codes(code, text):
    assert error_description(code) == text
    assert error_description(ErrorCode(code)) == text


@pytest.mark.parametrize("code", [1, -7, 99, None, "x", True])
def test_error_description_unrecognized(code):
    assert error_description(code) == "Unrecognized error code"


@pytest.mark.parametrize("exc_cls,code", [
    (NullPointerError, ErrorCode.NULL_POINTER),
    (InvalidTypeError, ErrorCode.INVALID_TYPE),
    (InvalidBitPositionError, ErrorCode.INVALID_BIT_POSITION),
    (InsufficientRegistersError, ErrorCode.INSUFFICIENT_REGISTERS),
    (ConversionOverflowError, ErrorCode.OVERFLOW),
])
def test_exception_codes(exc_cls, code):
    exc = exc_cls("detail")
    assert isinstance(exc, ConversionError)
    assert exc.code == code
    assert exc.description == error_description(code)
    assert str(exc) == "detail"


def test_default_message_is_description():
    assert str(InvalidTypeError()) == "Invalid data type"


def test_builtin_bases():
    assert isinstance(InvalidTypeError(), ValueError)
    assert isinstance(InvalidBitPositionError(), ValueError)
    assert isinstance(ConversionOverflowError(), OverflowError)
