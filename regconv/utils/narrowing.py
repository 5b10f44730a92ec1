"""Scaling and integer narrowing helpers.

Scaled integer values are truncated toward zero and narrowed to the target
width. The default "wrap" policy keeps the low bits, the same result as a
two's-complement cast; "error" refuses values that do not fit.
"""

import logging
import math

from regconv.errors import ConversionOverflowError

logger = logging.getLogger(__name__)

OVERFLOW_WRAP = "wrap"
OVERFLOW_ERROR = "error"
OVERFLOW_POLICIES = (OVERFLOW_WRAP, OVERFLOW_ERROR)


def check_overflow_policy(overflow: str) -> str:
    policy = str(overflow).strip().lower()
    if policy not in OVERFLOW_POLICIES:
        raise ValueError(f"Unknown overflow policy '{overflow}' (expected wrap or error)")
    return policy


def int_range(bits: int, signed: bool) -> tuple:
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def to_signed(value: int, bits: int) -> int:
    """Reinterpret an unsigned bit pattern as two's complement."""
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


def wrap_int(value: int, bits: int, signed: bool) -> int:
    if signed:
        return to_signed(value, bits)
    return value & ((1 << bits) - 1)


def scale_and_narrow(raw: int, scaling_factor: float, bits: int, signed: bool,
                     overflow: str = OVERFLOW_WRAP) -> int:
    """Multiply `raw` by `scaling_factor` and narrow the product to `bits`.

    A factor of exactly 1.0 leaves `raw` untouched, so 64-bit values keep
    every bit. Any other factor is applied in double precision.

    Raises:
        ConversionOverflowError: the product is NaN or infinite, or it does
            not fit and the policy is "error"
    """
    if scaling_factor == 1.0:
        product = raw
    else:
        scaled = raw * float(scaling_factor)
        if not math.isfinite(scaled):
            raise ConversionOverflowError(
                f"Scaled value {scaled} cannot be stored in a {bits}-bit integer"
            )
        product = int(scaled)

    lo, hi = int_range(bits, signed)
    if lo <= product <= hi:
        return product
    if overflow == OVERFLOW_ERROR:
        kind = "signed" if signed else "unsigned"
        raise ConversionOverflowError(
            f"Scaled value {product} out of {bits}-bit {kind} range ({lo} to {hi})"
        )
    wrapped = wrap_int(product, bits, signed)
    logger.debug("Scaled value %d wrapped to %d (%d-bit)", product, wrapped, bits)
    return wrapped
