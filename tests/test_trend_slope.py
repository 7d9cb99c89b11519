import pathlib
import sys

import numpy as np
import pytest

sys.path.insert(0, f"{pathlib.Path(__file__).parents[1].resolve().as_posix()}/src")
from fftprep.trend import slope # noqa: E402

rng = np.random.default_rng()

def test_func_axis_slope():

    # TEST CASE 1: Even extent
    assert np.isclose(slope.axis_slope(3 * np.arange(8.0), 0), 3)

    # TEST CASE 2: Odd extent excludes the middle sample
    data = np.array([0.0, 1.0, 100.0, 3.0, 4.0])
    assert np.isclose(slope.axis_slope(data, 0), 1)

    # TEST CASE 3: Single sample
    assert slope.axis_slope(np.ones((1, 4)), 0) == 0

def test_func_avgslope_linear():
    shape = (5, 6, 7)
    j0, j1, j2 = np.meshgrid(*[np.arange(n) for n in shape], indexing="ij")
    data = 5 + 0.5 * j0 - 2 * j1 + 3 * j2
    mean_ref = data.mean()
    mean, slopes = slope.avgslope(data)
    assert np.isclose(mean, mean_ref)
    assert np.allclose(slopes, [3, -2, 0.5])
    assert np.allclose(data, 0)

def test_func_avgslope_complex():
    ramp = np.arange(16) * (1 - 2j) + (4 + 1j)
    data = np.tile(ramp, (3, 1)).astype(np.complex64)
    mean, slopes = slope.avgslope(data)
    assert np.isclose(mean, ramp.mean())
    assert np.allclose(slopes, [1 - 2j, 0])
    assert data.dtype == np.complex64
    assert np.allclose(data, 0, atol=1e-5)

def test_func_avgslope_window():
    data = np.full((6, 9), 7.0)
    data[:4, :5] = rng.random((4, 5))
    region = data[:4, :5].copy()
    mean, slopes = slope.avgslope(data, shape=(4, 5))
    assert np.isclose(mean, region.mean())
    assert np.isclose(data[:4, :5].mean(), 0)
    assert np.all(data[4:] == 7) and np.all(data[:, 5:] == 7)
    assert slopes.shape == (2,)

def test_func_avgslope_invalid():
    with pytest.raises(TypeError):
        slope.avgslope(np.arange(4))
    with pytest.raises(ValueError):
        slope.avgslope(np.ones((2, 2, 2, 2, 2)))
