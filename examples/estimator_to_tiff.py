"""Plug any depth model into the export pipeline.

The estimator below is a stand-in: it returns a brightness-based pseudo depth
as a ``(1, 1, H, W)`` array. Swap in a real model (torch tensors work too) and
keep the rest unchanged.

Usage:
    python examples/estimator_to_tiff.py photo.jpg
"""

from __future__ import annotations

import sys

import numpy as np

from pydepthmap import default_output_path, export_tiff, generate_depth_map
from pydepthmap.inference import ModelCache

_CACHE: ModelCache = ModelCache()


def _load_model():
    def estimator(image_rgb_u8_hwc: np.ndarray) -> np.ndarray:
        gray = image_rgb_u8_hwc.astype(np.float32).mean(axis=2)
        return gray[None, None]

    return estimator


def main(argv: list[str]) -> int:
    if len(argv) != 1:
        print(__doc__)
        return 2

    estimator = _CACHE.get_or_load(_load_model)
    image = generate_depth_map(argv[0], estimator)
    out = export_tiff(image, "lzw", default_output_path(argv[0]))
    print(f"wrote {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
