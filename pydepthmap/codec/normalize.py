from __future__ import annotations

import logging

import numpy as np

from pydepthmap.errors import DegenerateRangeError

logger = logging.getLogger(__name__)

UINT16_MAX = 65535.0


def normalize(matrix: np.ndarray) -> np.ndarray:
    """Stretch a float depth matrix onto the full uint16 range.

    The global minimum maps to 0 and the global maximum to 65535; values in
    between are ``floor((v - min) / range * 65535)``. Fractions are truncated,
    never rounded, and float error that lands on 65536 is clamped to 65535.

    The arithmetic runs in float64, so any finite float32 input (and any
    float64 input whose span is finite) has a usable range.

    Raises
    ------
    DegenerateRangeError
        When ``max - min`` is not a positive finite number (flat image,
        NaN/inf in the data). No flat image is produced in that case.
    """

    values = np.asarray(matrix, dtype=np.float64)
    if values.size == 0:
        raise DegenerateRangeError("Depth matrix is empty.", min_val=float("nan"), max_val=float("nan"))

    min_val = float(np.min(values))
    max_val = float(np.max(values))
    value_range = max_val - min_val
    logger.debug("Depth values range: %s to %s", min_val, max_val)

    if not np.isfinite(value_range) or not value_range > 0:
        raise DegenerateRangeError(
            f"Depth values span no usable range (min={min_val}, max={max_val}).",
            min_val=min_val,
            max_val=max_val,
        )

    scaled = ((values - min_val) / value_range) * UINT16_MAX
    scaled = np.clip(np.floor(scaled), 0.0, UINT16_MAX)
    return np.ascontiguousarray(scaled.astype(np.uint16))
