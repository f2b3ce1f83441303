"""IEEE-754 binary16 -> binary32 decoding.

Bit-level conversion, so that normalized pixel values do not depend on the
platform's own half-float support. `decode_half` handles one sample,
`decode_half_array` applies the same rules to a whole buffer.
"""

from __future__ import annotations

import numpy as np

_SIGN_MASK = 0x8000
_EXP_MASK = 0x1F
_MANT_MASK = 0x03FF
_IMPLICIT_BIT = 0x0400

_HALF_BIAS = 15
_SINGLE_BIAS = 127
_SINGLE_EXP_ALL_ONES = 0x7F800000
_MANT_SHIFT = 13  # 10-bit -> 23-bit mantissa


def half_to_single_bits(bits: int) -> int:
    """Return the binary32 bit pattern for a binary16 bit pattern."""

    half = int(bits) & 0xFFFF
    sign = (half & _SIGN_MASK) << 16
    exponent = (half >> 10) & _EXP_MASK
    mantissa = half & _MANT_MASK

    if exponent == 0:
        if mantissa == 0:
            return sign

        # Subnormal: shift until the implicit bit shows up.
        exponent_unbiased = 1 - _HALF_BIAS
        while (mantissa & _IMPLICIT_BIT) == 0:
            mantissa <<= 1
            exponent_unbiased -= 1
        mantissa &= _MANT_MASK
        return sign | ((exponent_unbiased + _SINGLE_BIAS) << 23) | (mantissa << _MANT_SHIFT)

    if exponent == _EXP_MASK:
        return sign | _SINGLE_EXP_ALL_ONES | (mantissa << _MANT_SHIFT)

    exponent_biased = exponent - _HALF_BIAS + _SINGLE_BIAS
    return sign | (exponent_biased << 23) | (mantissa << _MANT_SHIFT)


def decode_half(bits: int) -> np.float32:
    """Decode one binary16 bit pattern to a float32 value (total, never raises)."""

    single = np.array([half_to_single_bits(bits)], dtype=np.uint32)
    return single.view(np.float32)[0]


def decode_half_array(bits: np.ndarray) -> np.ndarray:
    """Vectorized `decode_half` over an array of uint16 bit patterns."""

    half = np.asarray(bits, dtype=np.uint16).astype(np.uint32)
    sign = (half & _SIGN_MASK) << 16
    exponent = (half >> 10) & _EXP_MASK
    mantissa = half & _MANT_MASK

    out = sign.copy()

    normal = (exponent != 0) & (exponent != _EXP_MASK)
    out[normal] |= ((exponent[normal] + (_SINGLE_BIAS - _HALF_BIAS)) << 23) | (
        mantissa[normal] << _MANT_SHIFT
    )

    special = exponent == _EXP_MASK
    out[special] |= _SINGLE_EXP_ALL_ONES | (mantissa[special] << _MANT_SHIFT)

    subnormal = (exponent == 0) & (mantissa != 0)
    if np.any(subnormal):
        sub_mant = mantissa[subnormal].astype(np.int64)
        sub_exp = np.full(sub_mant.shape, 1 - _HALF_BIAS, dtype=np.int64)
        pending = (sub_mant & _IMPLICIT_BIT) == 0
        while np.any(pending):
            sub_mant[pending] <<= 1
            sub_exp[pending] -= 1
            pending = (sub_mant & _IMPLICIT_BIT) == 0
        sub_bits = ((sub_exp + _SINGLE_BIAS) << 23) | ((sub_mant & _MANT_MASK) << _MANT_SHIFT)
        out[subnormal] |= sub_bits.astype(np.uint32)

    return out.view(np.float32)
