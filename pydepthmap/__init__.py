"""pydepthmap - 16-bit grayscale depth maps from depth model outputs.

Keep top-level imports lightweight: OpenCV and torch are only needed on some
paths. Exports are lazy-loaded on demand.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    # Modules
    "codec",
    "config",
    "inference",
    "inputs",
    "io",
    # Core API
    "GrayscaleImage16",
    "MultiDimArraySample",
    "PixelBufferSample",
    "PixelFormatKind",
    "TiffCompressionMode",
    "default_output_path",
    "export_tiff",
    "generate_depth_map",
    "normalize_depth",
    # Errors
    "DepthError",
]


_LAZY_SUBMODULES = {
    "codec",
    "config",
    "inference",
    "inputs",
    "io",
}

_LAZY_EXPORTS = {
    "GrayscaleImage16": ("image", "GrayscaleImage16"),
    "MultiDimArraySample": ("inputs.samples", "MultiDimArraySample"),
    "PixelBufferSample": ("inputs.samples", "PixelBufferSample"),
    "PixelFormatKind": ("inputs.pixel_format", "PixelFormatKind"),
    "TiffCompressionMode": ("io.tiff", "TiffCompressionMode"),
    "default_output_path": ("api", "default_output_path"),
    "export_tiff": ("api", "export_tiff"),
    "generate_depth_map": ("api", "generate_depth_map"),
    "normalize_depth": ("api", "normalize_depth"),
    "DepthError": ("errors", "DepthError"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin delegation
    if name in _LAZY_SUBMODULES:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module

    target = _LAZY_EXPORTS.get(name)
    if target is not None:
        module_name, attr = target
        module = import_module(f"{__name__}.{module_name}")
        value = getattr(module, attr)
        globals()[name] = value
        return value

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:  # pragma: no cover - tooling convenience
    return sorted(set(globals()) | set(__all__))
