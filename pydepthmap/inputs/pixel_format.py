from __future__ import annotations

from enum import Enum

import numpy as np

from pydepthmap.errors import UnsupportedFormatError


class PixelFormatKind(str, Enum):
    """Pixel formats a depth model may hand back as a raw buffer."""

    FLOAT32_DEPTH = "float32_depth"
    FLOAT32_DISPARITY = "float32_disparity"
    FLOAT16_DEPTH = "float16_depth"
    FLOAT16_DISPARITY = "float16_disparity"
    FLOAT16_GENERIC = "float16_generic"
    UINT8_GRAY = "uint8_gray"
    UNKNOWN = "unknown"


class ElementType(str, Enum):
    """Element types of a multi-dimensional model output."""

    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype("<f4") if self is ElementType.FLOAT32 else np.dtype("<f8")


FLOAT32_FORMATS = frozenset({PixelFormatKind.FLOAT32_DEPTH, PixelFormatKind.FLOAT32_DISPARITY})
FLOAT16_FORMATS = frozenset(
    {
        PixelFormatKind.FLOAT16_DEPTH,
        PixelFormatKind.FLOAT16_DISPARITY,
        PixelFormatKind.FLOAT16_GENERIC,
    }
)

_BYTES_PER_SAMPLE = {
    **{fmt: 4 for fmt in FLOAT32_FORMATS},
    **{fmt: 2 for fmt in FLOAT16_FORMATS},
    PixelFormatKind.UINT8_GRAY: 1,
}


def parse_pixel_format(raw: str | PixelFormatKind) -> PixelFormatKind:
    if isinstance(raw, PixelFormatKind):
        return raw
    try:
        return PixelFormatKind(str(raw).strip().lower())
    except Exception as exc:  # noqa: BLE001 - value validation helper
        choices = ", ".join(fmt.value for fmt in PixelFormatKind)
        raise ValueError(f"Unknown pixel format: {raw!r}. Choose from: {choices}.") from exc


def parse_element_type(raw: str | ElementType) -> ElementType:
    if isinstance(raw, ElementType):
        return raw
    try:
        return ElementType(str(raw).strip().lower())
    except Exception as exc:  # noqa: BLE001 - value validation helper
        raise ValueError(f"Unknown element type: {raw!r}. Choose from: float32, float64.") from exc


def bytes_per_sample(fmt: str | PixelFormatKind) -> int:
    """Sample width in bytes for a routable pixel format."""

    kind = parse_pixel_format(fmt)
    width = _BYTES_PER_SAMPLE.get(kind)
    if width is None:
        raise UnsupportedFormatError(f"Pixel format {kind.value!r} has no decoder.")
    return width


def needs_half_decoding(fmt: str | PixelFormatKind) -> bool:
    return parse_pixel_format(fmt) in FLOAT16_FORMATS
