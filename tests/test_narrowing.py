import pytest

from regconv.errors import ConversionOverflowError
from regconv.utils.narrowing import (
    check_overflow_policy,
    int_range,
    scale_and_narrow,
    to_signed,
    wrap_int,
)


def test_int_range():
    assert int_range(8, True) == (-128, 127)
    assert int_range(16, False) == (0, 65535)
    assert int_range(64, True) == (-(2 ** 63), 2 ** 63 - 1)


def test_to_signed():
    assert to_signed(0xFF, 8) == -1
    assert to_signed(0x7F, 8) == 127
    assert to_signed(0x8000, 16) == -32768
    assert to_signed(0xFFFFFFFF, 32) == -1


def test_wrap_int():
    assert wrap_int(256, 8, False) == 0
    assert wrap_int(200, 8, True) == -56
    assert wrap_int(-1, 16, False) == 0xFFFF


class TestScaleAndNarrow:
    def test_identity_is_exact(self):
        assert scale_and_narrow(2 ** 64 - 1, 1.0, 64, False) == 2 ** 64 - 1
        assert scale_and_narrow(-(2 ** 63), 1.0, 64, True) == -(2 ** 63)

    def test_truncates_toward_zero(self):
        assert scale_and_narrow(-10, 0.25, 16, True) == -2
        assert scale_and_narrow(10, 0.25, 16, True) == 2

    def test_wraps_by_default(self):
        assert scale_and_narrow(100, 2.0, 8, True) == -56

    def test_error_policy(self):
        with pytest.raises(ConversionOverflowError, match="out of 8-bit signed range"):
            scale_and_narrow(100, 2.0, 8, True, "error")

    def test_error_policy_in_range(self):
        assert scale_and_narrow(50, 2.0, 8, True, "error") == 100

    def test_negative_factor_unsigned_wraps(self):
        assert scale_and_narrow(1, -1.0, 16, False) == 0xFFFF

    @pytest.mark.parametrize("factor", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_product(self, factor):
        with pytest.raises(ConversionOverflowError):
            scale_and_narrow(5, factor, 32, True)


def test_check_overflow_policy():
    assert check_overflow_policy("wrap") == "wrap"
    assert check_overflow_policy(" ERROR ") == "error"
    with pytest.raises(ValueError):
        check_overflow_policy("clamp")
