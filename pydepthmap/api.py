from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydepthmap.codec.dispatch import dispatch
from pydepthmap.codec.normalize import normalize
from pydepthmap.image import GrayscaleImage16, encode
from pydepthmap.inference.estimator import DepthEstimator, to_raw_sample
from pydepthmap.inputs.samples import RawDepthSample
from pydepthmap.io.image import read_image
from pydepthmap.io.tiff import TiffCompressionMode, write_tiff

logger = logging.getLogger(__name__)

TIFF_SUFFIX = ".tiff"


def normalize_depth(sample: RawDepthSample) -> GrayscaleImage16:
    """Decode a raw depth result and stretch it to a 16-bit grayscale image."""

    matrix = dispatch(sample)
    height, width = matrix.shape
    return encode(normalize(matrix), width, height)


def export_tiff(
    image: GrayscaleImage16,
    mode: str | TiffCompressionMode,
    path: str | Path,
) -> Path:
    return write_tiff(image, mode, path)


def default_output_path(
    input_path: str | Path,
    *,
    suffix: str = "_depth",
    output_dir: Optional[str | Path] = None,
) -> Path:
    """``photo.jpg`` -> ``photo_depth.tiff``, beside the input unless `output_dir` is set."""

    src = Path(input_path)
    directory = Path(output_dir) if output_dir is not None else src.parent
    return directory / f"{src.stem}{suffix}{TIFF_SUFFIX}"


def generate_depth_map(image_path: str | Path, estimator: DepthEstimator) -> GrayscaleImage16:
    """Run `estimator` on a photo and return the normalized depth image."""

    image = read_image(image_path, color="rgb")
    logger.debug("Running depth estimator on %s (%dx%d)", image_path, image.shape[1], image.shape[0])
    sample = to_raw_sample(estimator(image))
    return normalize_depth(sample)
