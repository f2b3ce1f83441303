"""Exception types raised by the depth conversion pipeline.

Every runtime failure is terminal for the current invocation. Callers can catch
:class:`DepthError` for all of them, or the specific subclass. Subclasses also
derive from the closest builtin (``ValueError``/``OSError``) so generic handlers
keep working.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class DepthError(Exception):
    """Base class for all pipeline failures."""

    @property
    def description(self) -> str:
        return str(self)


class UnsupportedFormatError(DepthError, ValueError):
    """The pixel format of a raw buffer cannot be routed to a decoder."""


class UnsupportedShapeError(DepthError, ValueError):
    """A multi-dimensional array has a rank other than 2, 3 or 4."""


class DimensionMismatchError(DepthError, ValueError):
    """Matrix length does not match the declared width/height."""


class DegenerateRangeError(DepthError, ValueError):
    """Depth values span no usable range (flat, inverted or non-finite)."""

    def __init__(self, message: str, *, min_val: float, max_val: float) -> None:
        super().__init__(message)
        self.min_val = float(min_val)
        self.max_val = float(max_val)


class WriteFailedError(DepthError, OSError):
    """The TIFF destination could not be created or finalized."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class InferenceError(DepthError):
    """Failure inside the depth inference collaborator."""


class ImageLoadError(InferenceError):
    pass


class ModelNotFoundError(InferenceError):
    pass


class NoDepthResultError(InferenceError):
    pass


__all__ = [
    "DegenerateRangeError",
    "DepthError",
    "DimensionMismatchError",
    "ImageLoadError",
    "InferenceError",
    "ModelNotFoundError",
    "NoDepthResultError",
    "UnsupportedFormatError",
    "UnsupportedShapeError",
    "WriteFailedError",
]
