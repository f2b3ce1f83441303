from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Tuple

import numpy as np

from pydepthmap.errors import WriteFailedError
from pydepthmap.image import GrayscaleImage16, encode

logger = logging.getLogger(__name__)

# Baseline TIFF tag ids.
TAG_BITS_PER_SAMPLE = 258
TAG_COMPRESSION = 259
TAG_PHOTOMETRIC = 262
TAG_SAMPLES_PER_PIXEL = 277

PHOTOMETRIC_MIN_IS_BLACK = 1


class TiffCompressionMode(str, Enum):
    NONE = "none"
    LZW = "lzw"

    @property
    def tag_value(self) -> int:
        return 1 if self is TiffCompressionMode.NONE else 5

    @property
    def pillow_name(self) -> str:
        return "raw" if self is TiffCompressionMode.NONE else "tiff_lzw"


def parse_compression_mode(raw: str | TiffCompressionMode) -> TiffCompressionMode:
    if isinstance(raw, TiffCompressionMode):
        return raw
    try:
        return TiffCompressionMode(str(raw).strip().lower())
    except Exception as exc:  # noqa: BLE001 - value validation helper
        raise ValueError(f"Unknown TIFF compression: {raw!r}. Choose from: none, lzw.") from exc


@dataclass(frozen=True)
class TiffMetadata:
    compression_tag: int
    bits_per_sample: int
    samples_per_pixel: int
    photometric: int


def _to_pil(image: GrayscaleImage16):
    from PIL import Image

    # "I;16" is Pillow's little-endian unsigned 16-bit single-channel mode.
    return Image.frombytes("I;16", (image.width, image.height), image.to_bytes())


def _new_file_mode() -> int:
    # mkstemp creates 0600; give the output the mode open() would. The umask
    # can only be read by setting it.
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


def write_tiff(
    image: GrayscaleImage16,
    mode: str | TiffCompressionMode,
    path: str | Path,
) -> Path:
    """Write `image` as a single-page 16-bit grayscale TIFF.

    The file is encoded into a temporary sibling and renamed over `path` only
    after the encoder finished, so a failed write never leaves a partial file
    at the destination.
    """

    compression = parse_compression_mode(mode)
    target = Path(path)

    tmp_name: str | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        pil_image = _to_pil(image)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.stem}.", suffix=".tiff.part", dir=str(target.parent)
        )
        os.close(fd)
        os.chmod(tmp_name, _new_file_mode())
        pil_image.save(tmp_name, format="TIFF", compression=compression.pillow_name)
        os.replace(tmp_name, target)
        tmp_name = None
    except (OSError, ValueError) as exc:
        raise WriteFailedError(
            f"Failed to write TIFF to {str(target)!r}: {exc}", path=target
        ) from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.info(
        "Wrote %dx%d 16-bit TIFF (%s) to %s",
        image.width,
        image.height,
        compression.value,
        target,
    )
    return target


def _scalar_tag(value: Any) -> int:
    if isinstance(value, (tuple, list)):
        value = value[0]
    return int(value)


def read_tiff(path: str | Path) -> Tuple[GrayscaleImage16, TiffMetadata]:
    """Decode a 16-bit grayscale TIFF written by `write_tiff`."""

    from PIL import Image

    with Image.open(Path(path)) as img:
        tags = img.tag_v2
        metadata = TiffMetadata(
            compression_tag=_scalar_tag(tags.get(TAG_COMPRESSION, 1)),
            bits_per_sample=_scalar_tag(tags.get(TAG_BITS_PER_SAMPLE, 1)),
            samples_per_pixel=_scalar_tag(tags.get(TAG_SAMPLES_PER_PIXEL, 1)),
            photometric=_scalar_tag(tags.get(TAG_PHOTOMETRIC, PHOTOMETRIC_MIN_IS_BLACK)),
        )
        if img.mode != "I;16":
            raise ValueError(f"Expected a 16-bit grayscale TIFF (mode 'I;16'), got mode {img.mode!r}")
        width, height = img.size
        pixels = np.frombuffer(img.tobytes(), dtype="<u2").astype(np.uint16)

    return encode(pixels, width, height), metadata
