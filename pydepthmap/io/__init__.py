from __future__ import annotations

from .image import read_image
from .samples import load_array_sample, load_depth_sample, load_raw_sample
from .tiff import TiffCompressionMode, TiffMetadata, parse_compression_mode, read_tiff, write_tiff

__all__ = [
    "TiffCompressionMode",
    "TiffMetadata",
    "load_array_sample",
    "load_depth_sample",
    "load_raw_sample",
    "parse_compression_mode",
    "read_image",
    "read_tiff",
    "write_tiff",
]
