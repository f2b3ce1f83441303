"""Contract for the external depth model.

The model itself is not part of this package. It is any callable that takes
an RGB image and returns a raw depth result; this module turns that result
into something the decoder understands and caches the loaded model.
"""

from __future__ import annotations

from .estimator import (
    DEFAULT_MODEL_NAMES,
    DEFAULT_MODEL_SUFFIXES,
    DepthEstimator,
    ModelCache,
    locate_model,
    to_raw_sample,
)

__all__ = [
    "DEFAULT_MODEL_NAMES",
    "DEFAULT_MODEL_SUFFIXES",
    "DepthEstimator",
    "ModelCache",
    "locate_model",
    "to_raw_sample",
]
