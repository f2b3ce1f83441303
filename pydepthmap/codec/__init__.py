"""Depth buffer decoding and 16-bit normalization."""

from __future__ import annotations

from .dispatch import dispatch, extract_multiarray, extract_pixel_buffer
from .half import decode_half, decode_half_array, half_to_single_bits
from .normalize import UINT16_MAX, normalize
from .strided import SampleDecoder, decode_float16, decode_float32, decode_uint8, read_strided

__all__ = [
    "SampleDecoder",
    "UINT16_MAX",
    "decode_float16",
    "decode_float32",
    "decode_half",
    "decode_half_array",
    "decode_uint8",
    "dispatch",
    "extract_multiarray",
    "extract_pixel_buffer",
    "half_to_single_bits",
    "normalize",
    "read_strided",
]
