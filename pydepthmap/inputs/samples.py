from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np

from pydepthmap.inputs.pixel_format import (
    ElementType,
    PixelFormatKind,
    bytes_per_sample,
    needs_half_decoding,
    parse_element_type,
    parse_pixel_format,
)


def _contiguous_strides(shape: Sequence[int]) -> Tuple[int, ...]:
    strides = []
    step = 1
    for dim in reversed(shape):
        strides.append(step)
        step *= int(dim)
    return tuple(reversed(strides))


@dataclass(frozen=True)
class PixelBufferSample:
    """A raw, possibly row-padded pixel buffer returned by a depth model.

    Layout invariants are checked on construction and raise ``ValueError``;
    they describe memory the producer handed us, not bad depth data.
    ``UNKNOWN`` buffers are accepted here and rejected by the dispatcher.
    """

    format: PixelFormatKind
    width: int
    height: int
    row_stride_bytes: int
    data: bytes

    def __post_init__(self) -> None:
        fmt = parse_pixel_format(self.format)
        object.__setattr__(self, "format", fmt)
        object.__setattr__(self, "data", bytes(self.data))

        if int(self.width) <= 0 or int(self.height) <= 0:
            raise ValueError(f"width and height must be > 0, got {self.width}x{self.height}")
        if fmt is PixelFormatKind.UNKNOWN:
            return

        sample_width = bytes_per_sample(fmt)
        row_bytes = int(self.width) * sample_width
        if int(self.row_stride_bytes) < row_bytes:
            raise ValueError(
                f"row_stride_bytes={self.row_stride_bytes} is shorter than one row "
                f"({self.width} x {sample_width} bytes)"
            )
        required = (int(self.height) - 1) * int(self.row_stride_bytes) + row_bytes
        if len(self.data) < required:
            raise ValueError(
                f"Buffer holds {len(self.data)} bytes, layout needs at least {required}"
            )

    @property
    def sample_width_bytes(self) -> int:
        return bytes_per_sample(self.format)

    @classmethod
    def from_array(
        cls,
        array: np.ndarray,
        format: str | PixelFormatKind,
        *,
        row_padding: int = 0,
    ) -> "PixelBufferSample":
        """Pack a 2D array into a little-endian buffer with optional row padding."""

        fmt = parse_pixel_format(format)
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValueError(f"Expected 2D array, got shape {arr.shape}")
        if fmt is PixelFormatKind.UNKNOWN:
            raise ValueError("Cannot pack an array as 'unknown' pixel format.")

        if fmt is PixelFormatKind.UINT8_GRAY:
            packed = arr.astype(np.uint8)
        elif needs_half_decoding(fmt):
            packed = arr.astype("<f2")
        else:
            packed = arr.astype("<f4")

        height, width = packed.shape
        rows = packed.view(np.uint8).reshape(height, -1)
        pad = int(row_padding)
        if pad < 0:
            raise ValueError(f"row_padding must be >= 0, got {pad}")
        if pad:
            rows = np.concatenate([rows, np.zeros((height, pad), dtype=np.uint8)], axis=1)
        return cls(
            format=fmt,
            width=int(width),
            height=int(height),
            row_stride_bytes=int(rows.shape[1]),
            data=rows.tobytes(),
        )


@dataclass(frozen=True, eq=False)
class MultiDimArraySample:
    """A 2-4 dimensional float array returned by a depth model.

    `strides` are per-dimension element strides into the flat `elements`
    buffer; ``None`` means C-contiguous. The last two dimensions are
    (height, width).
    """

    shape: Tuple[int, ...]
    element_type: ElementType
    elements: np.ndarray
    strides: Optional[Tuple[int, ...]] = None

    def __post_init__(self) -> None:
        shape = tuple(int(d) for d in self.shape)
        element_type = parse_element_type(self.element_type)
        raw = self.elements
        if isinstance(raw, (bytes, bytearray, memoryview)):
            raw = np.frombuffer(raw, dtype=element_type.dtype)
        elements = np.ascontiguousarray(np.asarray(raw, dtype=element_type.dtype).reshape(-1))
        strides = _contiguous_strides(shape) if self.strides is None else tuple(
            int(s) for s in self.strides
        )

        if not shape or any(d <= 0 for d in shape):
            raise ValueError(f"shape entries must be > 0, got {shape}")
        if len(strides) != len(shape):
            raise ValueError(f"strides {strides} do not match shape {shape}")
        if any(s < 0 for s in strides):
            raise ValueError(f"strides must be >= 0, got {strides}")
        last = sum((d - 1) * s for d, s in zip(shape, strides))
        if last >= elements.size:
            raise ValueError(
                f"Array of {elements.size} elements is too small for shape {shape} "
                f"with strides {strides}"
            )

        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "element_type", element_type)
        object.__setattr__(self, "elements", elements)
        object.__setattr__(self, "strides", strides)

    @classmethod
    def from_numpy(cls, array: Any) -> "MultiDimArraySample":
        arr = np.asarray(array)
        if arr.dtype == np.float64:
            element_type = ElementType.FLOAT64
        else:
            element_type = ElementType.FLOAT32
        arr = np.ascontiguousarray(arr, dtype=element_type.dtype)
        return cls(shape=tuple(arr.shape), element_type=element_type, elements=arr.reshape(-1))


RawDepthSample = Union[PixelBufferSample, MultiDimArraySample]
