from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Generic, Iterable, Optional, Protocol, Sequence, TypeVar

import numpy as np

from pydepthmap.errors import ModelNotFoundError, NoDepthResultError
from pydepthmap.inputs.samples import MultiDimArraySample, PixelBufferSample, RawDepthSample
from pydepthmap.inputs.torch_ops import is_torch_tensor, tensor_to_numpy

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Candidate model names, most preferred first.
DEFAULT_MODEL_NAMES: tuple[str, ...] = (
    "DepthAnythingV2SmallF16",
    "DepthAnythingV2Small",
    "DepthPro",
    "DepthProNormalizedInverseDepth",
)
DEFAULT_MODEL_SUFFIXES: tuple[str, ...] = (".mlmodelc", ".mlpackage", ".onnx", ".pt", ".pth")


class DepthEstimator(Protocol):
    """Anything that maps an RGB uint8 ``(H, W, 3)`` image to a depth result.

    The result may be a `PixelBufferSample`, a `MultiDimArraySample`, a numpy
    array, a torch tensor, or ``None`` when the model produced nothing.
    """

    def __call__(self, image_rgb_u8_hwc: np.ndarray) -> Any:
        ...


def to_raw_sample(result: Any) -> RawDepthSample:
    """Coerce an estimator result into a `RawDepthSample`."""

    if result is None:
        raise NoDepthResultError("The depth model did not return a depth result.")
    if isinstance(result, (PixelBufferSample, MultiDimArraySample)):
        return result
    if is_torch_tensor(result):
        return MultiDimArraySample.from_numpy(tensor_to_numpy(result))
    if isinstance(result, np.ndarray):
        if not (np.issubdtype(result.dtype, np.floating) or np.issubdtype(result.dtype, np.integer)):
            raise NoDepthResultError(f"Depth result has non-numeric dtype {result.dtype}.")
        return MultiDimArraySample.from_numpy(result)
    raise NoDepthResultError(
        f"Unsupported depth result type: {type(result).__name__}. "
        "Expected a pixel buffer, an array or a tensor."
    )


class ModelCache(Generic[T]):
    """Holds at most one loaded model; concurrent callers share a single load."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._model: Optional[T] = None

    @property
    def loaded(self) -> bool:
        return self._model is not None

    def get_or_load(self, loader: Callable[[], T]) -> T:
        with self._lock:
            if self._model is None:
                logger.info("Loading depth model")
                self._model = loader()
            return self._model

    def clear(self) -> None:
        with self._lock:
            self._model = None


def locate_model(
    search_dirs: Iterable[str | Path],
    *,
    names: Sequence[str] = DEFAULT_MODEL_NAMES,
    suffixes: Sequence[str] = DEFAULT_MODEL_SUFFIXES,
) -> Path:
    """Return the first existing model file, trying `names` in priority order."""

    dirs = [Path(d) for d in search_dirs]
    for name in names:
        for directory in dirs:
            for suffix in suffixes:
                candidate = directory / f"{name}{suffix}"
                if candidate.exists():
                    logger.debug("Found depth model at %s", candidate)
                    return candidate

    searched = ", ".join(str(d) for d in dirs) or "<none>"
    raise ModelNotFoundError(
        f"Depth estimation model not found. Looked for {list(names)} in: {searched}"
    )
