from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np

from pydepthmap.inputs.pixel_format import PixelFormatKind, bytes_per_sample, parse_pixel_format
from pydepthmap.inputs.samples import MultiDimArraySample, PixelBufferSample, RawDepthSample

ARRAY_SUFFIXES = frozenset({".npy", ".npz"})
RAW_SUFFIXES = frozenset({".raw", ".bin"})
SAMPLE_SUFFIXES = ARRAY_SUFFIXES | RAW_SUFFIXES

NPZ_DEPTH_KEY = "depth"


def load_array_sample(path: str | Path) -> MultiDimArraySample:
    """Load a saved model output array (.npy, or .npz with a `depth` entry)."""

    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".npy":
        arr = np.load(p, allow_pickle=False)
    elif suffix == ".npz":
        with np.load(p, allow_pickle=False) as archive:
            keys = list(archive.files)
            if NPZ_DEPTH_KEY in keys:
                arr = archive[NPZ_DEPTH_KEY]
            elif len(keys) == 1:
                arr = archive[keys[0]]
            else:
                raise ValueError(
                    f"{str(p)!r} holds arrays {keys}; expected a single array "
                    f"or one named {NPZ_DEPTH_KEY!r}."
                )
    else:
        raise ValueError(f"Unsupported array file: {str(p)!r}. Supported: .npy, .npz.")
    return MultiDimArraySample.from_numpy(arr)


def load_raw_sample(
    path: str | Path,
    *,
    pixel_format: str | PixelFormatKind,
    width: int,
    height: int,
    row_stride_bytes: Optional[int] = None,
) -> PixelBufferSample:
    """Load a raw pixel buffer dump; the row stride defaults to tightly packed rows."""

    fmt = parse_pixel_format(pixel_format)
    stride = row_stride_bytes
    if stride is None:
        stride = int(width) * bytes_per_sample(fmt)
    data = Path(path).read_bytes()
    return PixelBufferSample(
        format=fmt,
        width=int(width),
        height=int(height),
        row_stride_bytes=int(stride),
        data=data,
    )


def load_depth_sample(
    path: str | Path,
    *,
    pixel_format: str | PixelFormatKind | None = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    row_stride_bytes: Optional[int] = None,
) -> RawDepthSample:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input not found: {p}")

    suffix = p.suffix.lower()
    if suffix in ARRAY_SUFFIXES:
        return load_array_sample(p)
    if suffix in RAW_SUFFIXES:
        if pixel_format is None or width is None or height is None:
            raise ValueError(
                f"Raw buffer {str(p)!r} requires pixel_format, width and height."
            )
        return load_raw_sample(
            p,
            pixel_format=pixel_format,
            width=width,
            height=height,
            row_stride_bytes=row_stride_bytes,
        )
    raise ValueError(
        f"Unsupported depth file type: {str(p)!r}. "
        f"Supported: {', '.join(sorted(SAMPLE_SUFFIXES))}."
    )
