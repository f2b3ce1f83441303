from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from pydepthmap.errors import DimensionMismatchError


@dataclass(frozen=True, eq=False)
class GrayscaleImage16:
    """Single-channel 16-bit grayscale image, little-endian samples, no alpha.

    `pixels` is a read-only ``(height, width)`` uint16 array.
    """

    width: int
    height: int
    pixels: np.ndarray
    byte_order: str = "little"

    bits_per_component: ClassVar[int] = 16
    bits_per_pixel: ClassVar[int] = 16
    channels: ClassVar[int] = 1

    @property
    def bytes_per_row(self) -> int:
        return self.width * (self.bits_per_pixel // 8)

    def to_bytes(self) -> bytes:
        """Pixel data as tightly packed little-endian rows."""

        return np.ascontiguousarray(self.pixels, dtype="<u2").tobytes()


def encode(matrix: np.ndarray, width: int, height: int) -> GrayscaleImage16:
    """Wrap a normalized uint16 matrix as a `GrayscaleImage16`.

    `matrix` may be flat or already shaped ``(height, width)``.
    """

    arr = np.asarray(matrix)
    w, h = int(width), int(height)
    if w <= 0 or h <= 0:
        raise DimensionMismatchError(f"width and height must be > 0, got {w}x{h}")
    if arr.size != w * h:
        raise DimensionMismatchError(
            f"Matrix holds {arr.size} values but {w}x{h} needs {w * h}."
        )
    if arr.ndim == 2 and arr.shape != (h, w):
        raise DimensionMismatchError(f"Matrix shape {arr.shape} does not match {h}x{w}.")
    if arr.dtype != np.uint16:
        raise ValueError(f"Expected dtype=uint16, got {arr.dtype}")

    pixels = np.array(arr, dtype=np.uint16, copy=True).reshape(h, w)
    pixels.setflags(write=False)
    return GrayscaleImage16(width=w, height=h, pixels=pixels)
