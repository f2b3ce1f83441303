from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from pydepthmap.api import default_output_path, export_tiff, generate_depth_map, normalize_depth
from pydepthmap.errors import DegenerateRangeError, ImageLoadError, NoDepthResultError
from pydepthmap.inputs.pixel_format import PixelFormatKind
from pydepthmap.inputs.samples import MultiDimArraySample, PixelBufferSample
from pydepthmap.io.tiff import TiffCompressionMode, read_tiff


def _write_png(path: Path, *, h: int = 6, w: int = 9) -> None:
    img = np.zeros((h, w, 3), dtype=np.uint8)
    img[..., 0] = 200  # R
    img[..., 1] = 10  # G
    Image.fromarray(img).save(path)


def test_normalize_depth_then_export_reference_values(tmp_path):
    sample = MultiDimArraySample.from_numpy(np.array([[10.0, 20.0], [30.0, 40.0]], dtype=np.float32))
    image = normalize_depth(sample)
    assert image.pixels.ravel().tolist() == [0, 21845, 43690, 65535]

    for mode in (TiffCompressionMode.NONE, TiffCompressionMode.LZW):
        out = export_tiff(image, mode, tmp_path / f"e2e_{mode.value}.tiff")
        loaded, meta = read_tiff(out)
        assert meta.compression_tag == mode.tag_value
        assert loaded.pixels.ravel().tolist() == [0, 21845, 43690, 65535]


def test_normalize_depth_padded_half_buffer():
    depth = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]], dtype=np.float16)
    sample = PixelBufferSample.from_array(depth, PixelFormatKind.FLOAT16_DISPARITY, row_padding=10)

    image = normalize_depth(sample)
    assert (image.width, image.height) == (3, 2)
    assert image.pixels[0, 0] == 0
    assert image.pixels[1, 2] == 65535


def test_normalize_depth_uint8_is_stretched():
    gray = np.array([[50, 100], [150, 200]], dtype=np.uint8)
    image = normalize_depth(PixelBufferSample.from_array(gray, PixelFormatKind.UINT8_GRAY))
    assert image.pixels[0, 0] == 0
    assert image.pixels[1, 1] == 65535


def test_normalize_depth_flat_input_fails():
    with pytest.raises(DegenerateRangeError):
        normalize_depth(MultiDimArraySample.from_numpy(np.full((1, 1, 3, 3), 2.0)))


def test_default_output_path():
    assert default_output_path("/photos/IMG_0001.jpeg") == Path("/photos/IMG_0001_depth.tiff")
    assert default_output_path("a/b.png", output_dir="/out") == Path("/out/b_depth.tiff")
    assert default_output_path("a/b.png", suffix="-z") == Path("a/b-z.tiff")


def test_generate_depth_map_runs_estimator_on_rgb(tmp_path):
    photo = tmp_path / "photo.png"
    _write_png(photo)
    seen = {}

    def estimator(image):
        seen["shape"] = image.shape
        seen["pixel"] = image[0, 0].tolist()
        return np.arange(12, dtype=np.float32).reshape(1, 1, 3, 4)

    image = generate_depth_map(photo, estimator)
    assert seen["shape"] == (6, 9, 3)
    assert seen["pixel"] == [200, 10, 0]
    assert (image.width, image.height) == (4, 3)
    assert image.pixels[0, 0] == 0
    assert image.pixels[2, 3] == 65535


def test_generate_depth_map_without_result(tmp_path):
    photo = tmp_path / "photo.png"
    _write_png(photo)
    with pytest.raises(NoDepthResultError):
        generate_depth_map(photo, lambda image: None)


def test_generate_depth_map_unreadable_image(tmp_path):
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"not an image")
    with pytest.raises(ImageLoadError, match="Failed to load"):
        generate_depth_map(broken, lambda image: np.zeros((2, 2)))


def test_normalize_depth_float64_array_beyond_float32_range():
    sample = MultiDimArraySample.from_numpy(np.array([[0.0, 1.0e40]]))
    image = normalize_depth(sample)
    assert image.pixels.tolist() == [[0, 65535]]
