import os
import stat

import numpy as np
import pytest

from pydepthmap.errors import DepthError, WriteFailedError
from pydepthmap.image import encode
from pydepthmap.io.tiff import TiffCompressionMode, parse_compression_mode, read_tiff, write_tiff


def _image_4x4():
    values = np.array(
        [0, 1, 255, 256, 1000, 4096, 12345, 21845, 30000, 32768, 43690, 50000, 60000, 65000, 65534, 65535],
        dtype=np.uint16,
    )
    return encode(values, 4, 4)


def _leftover_parts(directory):
    return [p for p in directory.iterdir() if p.name.endswith(".part")]


def test_write_uncompressed_tiff_header_and_pixels(tmp_path):
    image = _image_4x4()
    out = write_tiff(image, TiffCompressionMode.NONE, tmp_path / "depth.tiff")

    assert out == tmp_path / "depth.tiff"
    assert out.read_bytes()[:2] == b"II"

    loaded, meta = read_tiff(out)
    assert meta.compression_tag == 1
    assert meta.bits_per_sample == 16
    assert meta.samples_per_pixel == 1
    assert meta.photometric == 1
    assert (loaded.width, loaded.height) == (4, 4)
    assert np.array_equal(loaded.pixels, image.pixels)


def test_write_lzw_tiff_round_trip(tmp_path):
    image = _image_4x4()
    out = write_tiff(image, "lzw", tmp_path / "depth_lzw.tiff")

    loaded, meta = read_tiff(out)
    assert meta.compression_tag == 5
    assert meta.bits_per_sample == 16
    assert np.array_equal(loaded.pixels, image.pixels)


def test_write_tiff_reference_pixels(tmp_path):
    image = encode(np.array([0, 21845, 43690, 65535], dtype=np.uint16), 2, 2)
    for mode in TiffCompressionMode:
        loaded, _ = read_tiff(write_tiff(image, mode, tmp_path / f"ref_{mode.value}.tiff"))
        assert loaded.pixels.ravel().tolist() == [0, 21845, 43690, 65535]


def test_write_tiff_creates_parent_dirs_and_replaces_existing(tmp_path):
    target = tmp_path / "nested" / "out.tiff"
    write_tiff(encode(np.zeros(4, dtype=np.uint16), 2, 2), "none", target)
    write_tiff(encode(np.full(4, 9, dtype=np.uint16), 2, 2), "none", target)

    loaded, _ = read_tiff(target)
    assert loaded.pixels.ravel().tolist() == [9, 9, 9, 9]
    assert _leftover_parts(target.parent) == []


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
@pytest.mark.parametrize("umask, expected", [(0o022, 0o644), (0o027, 0o640), (0o077, 0o600)])
def test_write_tiff_mode_follows_umask(tmp_path, umask, expected):
    target = tmp_path / "out.tiff"
    previous = os.umask(umask)
    try:
        write_tiff(_image_4x4(), "none", target)
    finally:
        os.umask(previous)
    assert stat.S_IMODE(target.stat().st_mode) == expected

def test_write_tiff_into_directory_fails_cleanly(tmp_path):
    target = tmp_path / "taken.tiff"
    target.mkdir()

    with pytest.raises(WriteFailedError) as exc:
        write_tiff(_image_4x4(), "none", target)
    assert isinstance(exc.value, DepthError)
    assert isinstance(exc.value, OSError)
    assert exc.value.path == target
    assert target.is_dir()
    assert _leftover_parts(tmp_path) == []


def test_write_tiff_invalid_parent_fails(tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(WriteFailedError):
        write_tiff(_image_4x4(), "none", blocker / "out.tiff")


def test_write_tiff_encoder_failure_leaves_no_file(tmp_path, monkeypatch):
    from PIL import Image

    def _boom(self, *args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(Image.Image, "save", _boom)
    target = tmp_path / "out.tiff"

    with pytest.raises(WriteFailedError, match="disk full"):
        write_tiff(_image_4x4(), "lzw", target)
    assert not target.exists()
    assert _leftover_parts(tmp_path) == []


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("none", TiffCompressionMode.NONE),
        ("LZW", TiffCompressionMode.LZW),
        (TiffCompressionMode.LZW, TiffCompressionMode.LZW),
    ],
)
def test_parse_compression_mode(raw, expected):
    assert parse_compression_mode(raw) is expected


def test_parse_compression_mode_rejects_unknown():
    with pytest.raises(ValueError, match="none, lzw"):
        parse_compression_mode("zip")


def test_compression_tag_values():
    assert TiffCompressionMode.NONE.tag_value == 1
    assert TiffCompressionMode.LZW.tag_value == 5
