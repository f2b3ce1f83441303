"""Quick start: turn simulated depth model outputs into 16-bit TIFFs.

No model is needed. The example fakes the two result shapes a depth model
hands back:

- a padded half-float disparity pixel buffer
- a ``(1, 1, H, W)`` float32 array
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from pydepthmap import PixelBufferSample, PixelFormatKind, TiffCompressionMode, export_tiff, normalize_depth
from pydepthmap.inputs import MultiDimArraySample
from pydepthmap.io import read_tiff


def _fake_depth(h: int, w: int) -> np.ndarray:
    yy, xx = np.mgrid[0:h, 0:w].astype(np.float32)
    return 1.0 + 0.5 * np.sin(xx / 9.0) + yy / float(h)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    out_dir = Path("depth_out")

    depth = _fake_depth(120, 160)

    buffer_sample = PixelBufferSample.from_array(
        depth, PixelFormatKind.FLOAT16_DISPARITY, row_padding=64
    )
    image = normalize_depth(buffer_sample)
    path = export_tiff(image, TiffCompressionMode.NONE, out_dir / "buffer_depth.tiff")

    array_sample = MultiDimArraySample.from_numpy(depth[None, None])
    image_lzw = normalize_depth(array_sample)
    path_lzw = export_tiff(image_lzw, TiffCompressionMode.LZW, out_dir / "array_depth.tiff")

    for p in (path, path_lzw):
        loaded, meta = read_tiff(p)
        print(
            f"{p}: {loaded.width}x{loaded.height}, {meta.bits_per_sample}-bit, "
            f"compression tag {meta.compression_tag}, "
            f"range [{int(loaded.pixels.min())}, {int(loaded.pixels.max())}]"
        )


if __name__ == "__main__":
    main()
