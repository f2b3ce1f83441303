import numpy as np
import pytest

from pydepthmap.codec.normalize import normalize
from pydepthmap.errors import DegenerateRangeError, DepthError


def test_normalize_reference_values():
    matrix = np.array([[10.0, 20.0], [30.0, 40.0]], dtype=np.float32)
    out = normalize(matrix)
    assert out.dtype == np.uint16
    assert out.tolist() == [[0, 21845], [43690, 65535]]


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_normalize_stretches_to_full_range(seed):
    rng = np.random.default_rng(seed)
    matrix = rng.normal(loc=5.0, scale=3.0, size=(17, 23)).astype(np.float32)

    out = normalize(matrix)
    assert out.shape == matrix.shape
    assert int(out.min()) == 0
    assert int(out.max()) == 65535
    assert out.flat[int(np.argmin(matrix))] == 0
    assert out.flat[int(np.argmax(matrix))] == 65535


def test_normalize_preserves_order():
    matrix = np.array([[3.0, -1.0, 2.0, 0.5]], dtype=np.float32)
    out = normalize(matrix).ravel()
    order = np.argsort(matrix.ravel(), kind="stable")
    assert np.all(np.diff(out[order].astype(np.int64)) >= 0)


def test_normalize_truncates_instead_of_rounding():
    matrix = np.array([[0.0, 0.75, 65535.0]], dtype=np.float32)
    out = normalize(matrix)
    assert out.tolist() == [[0, 0, 65535]]


@pytest.mark.parametrize("shape", [(1, 1), (1, 5), (3, 4)])
def test_normalize_constant_image_is_degenerate(shape):
    matrix = np.ones(shape, dtype=np.float32)
    with pytest.raises(DegenerateRangeError) as exc:
        normalize(matrix)
    assert isinstance(exc.value, DepthError)
    assert isinstance(exc.value, ValueError)
    assert exc.value.min_val == 1.0
    assert exc.value.max_val == 1.0


@pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
def test_normalize_non_finite_range_is_degenerate(bad):
    matrix = np.array([[0.0, 1.0], [2.0, bad]], dtype=np.float32)
    with pytest.raises(DegenerateRangeError):
        normalize(matrix)


def test_normalize_empty_matrix_is_degenerate():
    with pytest.raises(DegenerateRangeError):
        normalize(np.zeros((0, 3), dtype=np.float32))


def test_normalize_wide_float32_range_is_not_degenerate():
    # max - min exceeds the float32 maximum but is a valid positive range.
    matrix = np.array([[-3.0e38, 0.0], [1.0, 3.0e38]], dtype=np.float32)
    out = normalize(matrix)
    assert out[0, 0] == 0
    assert out[1, 1] == 65535
    assert out[0, 1] == out[1, 0] == 32767


def test_normalize_float64_values_beyond_float32_range():
    matrix = np.array([[0.0, 1.0e40]], dtype=np.float64)
    assert normalize(matrix).tolist() == [[0, 65535]]
