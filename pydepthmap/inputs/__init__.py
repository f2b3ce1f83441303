"""Raw depth results as handed back by a depth model.

A model returns either a pixel buffer in one of a handful of depth/disparity
formats or a float array of rank 2-4. Both are described explicitly; nothing
downstream guesses the layout.
"""

from __future__ import annotations

from .pixel_format import (
    ElementType,
    PixelFormatKind,
    bytes_per_sample,
    needs_half_decoding,
    parse_element_type,
    parse_pixel_format,
)
from .samples import MultiDimArraySample, PixelBufferSample, RawDepthSample
from .torch_ops import is_torch_tensor, tensor_to_numpy

__all__ = [
    "ElementType",
    "MultiDimArraySample",
    "PixelBufferSample",
    "PixelFormatKind",
    "RawDepthSample",
    "bytes_per_sample",
    "is_torch_tensor",
    "needs_half_decoding",
    "parse_element_type",
    "parse_pixel_format",
    "tensor_to_numpy",
]
