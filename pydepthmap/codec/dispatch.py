from __future__ import annotations

import logging

import numpy as np

from pydepthmap.codec.strided import decode_float16, decode_float32, decode_uint8, read_strided
from pydepthmap.errors import UnsupportedFormatError, UnsupportedShapeError
from pydepthmap.inputs.pixel_format import PixelFormatKind, bytes_per_sample, needs_half_decoding
from pydepthmap.inputs.samples import MultiDimArraySample, PixelBufferSample, RawDepthSample

logger = logging.getLogger(__name__)


def extract_pixel_buffer(sample: PixelBufferSample) -> np.ndarray:
    fmt = sample.format
    if fmt is PixelFormatKind.UNKNOWN:
        raise UnsupportedFormatError(
            f"Model output pixel format {fmt.value!r} is not supported."
        )

    sample_width = bytes_per_sample(fmt)
    if needs_half_decoding(fmt):
        decode = decode_float16
    elif fmt is PixelFormatKind.UINT8_GRAY:
        decode = decode_uint8
    else:
        decode = decode_float32

    logger.debug(
        "Pixel buffer %s: %dx%d, row stride %d bytes",
        fmt.value,
        sample.width,
        sample.height,
        sample.row_stride_bytes,
    )
    return read_strided(
        sample.data,
        sample.width,
        sample.height,
        sample.row_stride_bytes,
        sample_width,
        decode,
    )


def extract_multiarray(sample: MultiDimArraySample) -> np.ndarray:
    """Read the (height, width) plane at leading index 0 through the array strides.

    Float64 arrays stay float64 so values beyond the float32 range survive
    until normalization.
    """

    shape = sample.shape
    if len(shape) not in (2, 3, 4):
        raise UnsupportedShapeError(
            f"Model output array must have 2, 3 or 4 dimensions, got shape {list(shape)}."
        )

    height, width = shape[-2], shape[-1]
    row_stride, col_stride = sample.strides[-2], sample.strides[-1]
    logger.debug(
        "Multi-array shape %s (%s), strides %s -> %dx%d",
        list(shape),
        sample.element_type.value,
        list(sample.strides),
        width,
        height,
    )

    # Leading (batch, channel) indices are fixed at 0, so the plane starts at offset 0.
    itemsize = sample.elements.itemsize
    plane = np.lib.stride_tricks.as_strided(
        sample.elements,
        shape=(height, width),
        strides=(row_stride * itemsize, col_stride * itemsize),
        writeable=False,
    )
    return np.ascontiguousarray(plane, dtype=sample.element_type.dtype)


def dispatch(sample: RawDepthSample) -> np.ndarray:
    """Route a raw depth result to its extractor, returning a dense float32 matrix."""

    if isinstance(sample, PixelBufferSample):
        return extract_pixel_buffer(sample)
    if isinstance(sample, MultiDimArraySample):
        return extract_multiarray(sample)
    raise UnsupportedFormatError(
        f"Unsupported depth result type: {type(sample).__name__}. "
        "Expected PixelBufferSample or MultiDimArraySample."
    )
