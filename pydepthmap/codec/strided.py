from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from pydepthmap.codec.half import decode_half_array

# Maps an array of raw little-endian sample bit patterns (uint8/uint16/uint32)
# to float32 values of the same shape.
SampleDecoder = Callable[[np.ndarray], np.ndarray]


def decode_float32(raw: np.ndarray) -> np.ndarray:
    return np.ascontiguousarray(raw, dtype="<u4").view("<f4").astype(np.float32)


def decode_float16(raw: np.ndarray) -> np.ndarray:
    return decode_half_array(raw)


def decode_uint8(raw: np.ndarray) -> np.ndarray:
    return np.asarray(raw, dtype=np.uint8).astype(np.float32)


_RAW_DTYPES = {1: np.dtype("u1"), 2: np.dtype("<u2"), 4: np.dtype("<u4")}
_DEFAULT_DECODERS = {1: decode_uint8, 2: decode_float16, 4: decode_float32}


def read_strided(
    data: bytes,
    width: int,
    height: int,
    row_stride_bytes: int,
    sample_width_bytes: int,
    decode: Optional[SampleDecoder] = None,
) -> np.ndarray:
    """Extract a dense ``(height, width)`` float32 matrix from a row-strided buffer.

    Row ``y`` starts at byte ``y * row_stride_bytes``; sample ``x`` starts at
    ``x * sample_width_bytes`` inside that row. Bytes between the end of a row
    and the next row start are padding and never reach the output.
    """

    w, h = int(width), int(height)
    stride = int(row_stride_bytes)
    sample_width = int(sample_width_bytes)
    raw_dtype = _RAW_DTYPES.get(sample_width)
    if raw_dtype is None:
        raise ValueError(f"sample_width_bytes must be 1, 2 or 4, got {sample_width}")
    if w <= 0 or h <= 0:
        raise ValueError(f"width and height must be > 0, got {w}x{h}")
    if stride < w * sample_width:
        raise ValueError(f"row_stride_bytes={stride} is shorter than {w} samples")

    buf = np.frombuffer(data, dtype=np.uint8)
    required = (h - 1) * stride + w * sample_width
    if buf.size < required:
        raise ValueError(f"Buffer holds {buf.size} bytes, layout needs at least {required}")

    rows = np.ndarray(
        shape=(h, w),
        dtype=raw_dtype,
        buffer=buf[:required],
        strides=(stride, sample_width),
    )
    raw = np.ascontiguousarray(rows)

    if decode is None:
        decode = _DEFAULT_DECODERS[sample_width]
    values = np.asarray(decode(raw), dtype=np.float32)
    if values.shape != (h, w):
        raise ValueError(f"Sample decoder returned shape {values.shape}, expected {(h, w)}")
    return np.ascontiguousarray(values)
