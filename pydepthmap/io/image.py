from __future__ import annotations

from pathlib import Path
from typing import Literal

import numpy as np

from pydepthmap.errors import ImageLoadError

ColorMode = Literal["bgr", "rgb"]

IMAGE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".heic", ".tif", ".tiff", ".bmp"})


def read_image(path: str | Path, *, color: ColorMode = "rgb") -> np.ndarray:
    """Read an input photo from disk via OpenCV as uint8 ``(H, W, 3)``.

    Parameters
    ----------
    path:
        Image file path.
    color:
        - "rgb": converted to RGB, the order depth models expect (default)
        - "bgr": OpenCV's native ordering
    """

    import cv2

    if color not in ("rgb", "bgr"):
        raise ValueError(f"Unknown color mode: {color!r}. Choose from: rgb, bgr.")

    path_str = str(path)
    img = cv2.imread(path_str, cv2.IMREAD_COLOR)
    if img is None:
        raise ImageLoadError(f"Failed to load the input image: {path_str}")

    if color == "rgb":
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    return img
