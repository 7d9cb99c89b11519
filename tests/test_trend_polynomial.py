import pathlib
import sys

import numpy as np
import pytest

sys.path.insert(0, f"{pathlib.Path(__file__).parents[1].resolve().as_posix()}/src")
from fftprep.algorithm.index import exponent_table # noqa: E402
from fftprep.trend import polynomial # noqa: E402

rng = np.random.default_rng()

def design_matrix(shape, order):
    coords = np.meshgrid(*[polynomial.axis_coordinates(n) for n in shape],
                         indexing="ij")
    columns = []
    for k in exponent_table(len(shape), order):
        monomial = np.ones(shape)
        for i, k_i in enumerate(k):
            monomial *= coords[len(shape) - 1 - i] ** k_i
        columns.append(monomial.ravel())
    return np.stack(columns, axis=1)

def test_func_axis_coordinates():
    assert np.allclose(polynomial.axis_coordinates(8),
                       (np.arange(1, 9) - 4.5) / 8)
    assert np.allclose(polynomial.axis_coordinates(5),
                       [-0.4, -0.2, 0, 0.2, 0.4])
    assert np.allclose(polynomial.axis_moments(5, 2), [5, 0, 0.4])

@pytest.mark.parametrize("shape", [(7,), (4, 5), (3, 4, 5), (3, 4, 3, 5)])
def test_func_normal_matrix(shape):
    order = 2
    design = design_matrix(shape, order)
    matrix = polynomial.normal_matrix(shape, order)
    assert np.allclose(matrix, design.T @ design)
    assert np.allclose(matrix, matrix.T)

def test_class_normal_equations():

    # TEST CASE 1: Order 0 reduces to a 1x1 matrix holding the number of
    # samples
    system = polynomial.NormalEquations((4, 6), 0)
    assert system.n_coefficients == 1
    assert np.allclose(system.matrix, [[24]])

    # TEST CASE 2: Cached arrays are read-only
    system = polynomial.NormalEquations((4, 6), 2)
    assert system.n_coefficients == 6
    assert system.exponents.shape == (6, 2)
    for array in (system.matrix, system.factor, system.pivots,
                  system.exponents):
        with pytest.raises(ValueError):
            array[0] = 0

    # TEST CASE 3: Solving against the Gram matrix recovers the vector
    x = rng.random(6)
    assert np.allclose(system.solve(system.matrix @ x), x)
    assert np.allclose(system.solve(np.column_stack((system.matrix @ x,
                                                     2 * system.matrix @ x))),
                       np.column_stack((x, 2 * x)))

    # TEST CASE 4: Wrong number of right-hand-side rows
    with pytest.raises(ValueError):
        system.solve(np.ones(5))

def test_class_normal_equations_singular():

    # TEST CASE 1: Order equals extent
    with pytest.raises(polynomial.SingularSystemError) as excinfo:
        polynomial.NormalEquations((3,), 3)
    assert excinfo.value.status != 0

    # TEST CASE 2: Order exceeds extent along one axis only
    with pytest.raises(polynomial.SingularSystemError):
        polynomial.NormalEquations((8, 2), 2)

    # TEST CASE 3: Degenerate axis with a single sample
    with pytest.raises(polynomial.SingularSystemError):
        polynomial.NormalEquations((1, 16), 1)

    # TEST CASE 4: Invalid arguments
    with pytest.raises(ValueError):
        polynomial.NormalEquations((2, 2, 2, 2, 2), 0)
    with pytest.raises(ValueError):
        polynomial.NormalEquations((8,), -1)
    with pytest.raises(TypeError):
        polynomial.NormalEquations((5,), 1.7)

    # TEST CASE 5: Reciprocal condition number below machine precision
    with pytest.raises(polynomial.SingularSystemError) as excinfo:
        polynomial.NormalEquations((512,), 16)
    assert excinfo.value.status != 0

    # TEST CASE 6: Near-singular but usable system
    with pytest.warns(UserWarning):
        system = polynomial.NormalEquations((64,), 10)
    assert system.matrix.shape == (11, 11)

def test_func_polyfit_line():
    data = (2 * np.arange(8) + 3).astype(np.float32)
    system = polynomial.NormalEquations((8,), 1)
    coefficients = polynomial.polyfit(data, system)
    assert coefficients.imag is None
    assert np.allclose(coefficients.real, [10, 16])

    # Input is not modified
    assert np.array_equal(data, 2 * np.arange(8) + 3)

    polynomial.polysub(data, coefficients, 1)
    assert data.dtype == np.float32
    assert np.allclose(data, 0, atol=1e-5)

def test_func_polyfit_axis_order():

    # x1 is the last (fastest-varying) NumPy axis
    shape = (5, 7)
    x2, x1 = np.meshgrid(polynomial.axis_coordinates(5),
                         polynomial.axis_coordinates(7), indexing="ij")
    data = 1.5 - 2 * x1 + 4 * x2
    coefficients = polynomial.polyfit(
        data, polynomial.NormalEquations(shape, 1)
    )
    assert np.allclose(coefficients.real, [1.5, -2, 4])

def test_func_polyfit_mean():
    data = rng.random((6, 5, 4))
    coefficients = polynomial.polyfit(
        data, polynomial.NormalEquations(data.shape, 0)
    )
    assert np.allclose(coefficients.real, data.mean())

@pytest.mark.parametrize("n_dims", [1, 2, 3, 4])
@pytest.mark.parametrize("order", [0, 1, 2])
@pytest.mark.parametrize("complex_", [False, True])
def test_func_round_trip(n_dims, order, complex_):
    shape = tuple(rng.integers(3, 7, size=n_dims))
    system = polynomial.NormalEquations(shape, order)
    coefficients = rng.uniform(-1, 1, system.n_coefficients)
    if complex_:
        coefficients = coefficients \
                       + 1j * rng.uniform(-1, 1, system.n_coefficients)
    data = polynomial.polyval(coefficients, shape, order)
    assert data.shape == shape
    assert np.iscomplexobj(data) == complex_

    fit = polynomial.detrend(data, order, system=system)
    assert np.allclose(fit.real, coefficients.real)
    if complex_:
        assert np.allclose(fit.imag, coefficients.imag)
    else:
        assert fit.imag is None
    assert np.allclose(data, 0, atol=1e-8)

@pytest.mark.parametrize("dtype", [np.float32, np.complex64])
def test_func_round_trip_single_precision(dtype):
    shape = (6, 8, 10)
    system = polynomial.NormalEquations(shape, 2)
    coefficients = rng.uniform(-1, 1, system.n_coefficients)
    if dtype is np.complex64:
        coefficients = coefficients \
                       + 1j * rng.uniform(-1, 1, system.n_coefficients)
    data = polynomial.polyval(coefficients, shape, 2).astype(dtype)
    polynomial.detrend(data, 2, system=system)
    assert data.dtype == dtype
    assert np.allclose(data, 0, atol=1e-5)

def test_func_polysub_layouts():
    shape = (4, 5)
    system = polynomial.NormalEquations(shape, 1)
    data = rng.random(shape) + 1j * rng.random(shape)
    coefficients = polynomial.polyfit(data, system)
    assert coefficients.is_complex

    # TEST CASE 1: Concatenated real and imaginary blocks
    concatenated = coefficients.concatenate()
    assert concatenated.shape == (6,)
    copy = data.copy()
    polynomial.polysub(copy, concatenated, 1)
    reference = data.copy()
    polynomial.polysub(reference, coefficients, 1)
    assert np.allclose(copy, reference)

    # TEST CASE 2: Complex coefficient vector
    copy = data.copy()
    polynomial.polysub(copy, coefficients.real + 1j * coefficients.imag, 1)
    assert np.allclose(copy, reference)

    # TEST CASE 3: Zero coefficients leave the array unchanged
    copy = data.copy()
    polynomial.polysub(copy, np.zeros(3), 1)
    assert np.array_equal(copy, data)

    # TEST CASE 4: Complex coefficients and real-valued array
    with pytest.raises(TypeError):
        polynomial.polysub(data.real.copy(), coefficients, 1)

    # TEST CASE 5: Wrong number of coefficients
    with pytest.raises(ValueError):
        polynomial.polysub(data, np.zeros(4), 1)

def test_func_window():

    # Working region embedded in a larger allocation
    shape = (5, 6)
    x2, x1 = np.meshgrid(polynomial.axis_coordinates(5),
                         polynomial.axis_coordinates(6), indexing="ij")
    data = np.full((8, 9), np.nan)
    data[:5, :6] = 3 + x1 - x2 + 0.5 * x1 * x2 + x2 ** 2
    coefficients = polynomial.detrend(data, 2, shape=shape)
    assert np.allclose(coefficients.real, [3, 1, 0, -1, 0.5, 1])
    assert np.allclose(data[:5, :6], 0)
    assert np.isnan(data[5:]).all() and np.isnan(data[:, 6:]).all()

    # Strided views are also accepted
    data = np.zeros((10, 12))
    view = data[::2, ::2]
    view[:] = 2.5
    polynomial.detrend(view, 0)
    assert np.allclose(data, 0)

def test_func_invalid():
    system = polynomial.NormalEquations((4, 4), 1)

    # TEST CASE 1: Shape does not match the normal equations
    with pytest.raises(ValueError):
        polynomial.polyfit(np.ones((4, 5)), system)

    # TEST CASE 2: System does not match the order
    with pytest.raises(ValueError):
        polynomial.detrend(np.ones((4, 4)), 2, system=system)

    # TEST CASE 3: Read-only array
    data = np.ones((4, 4))
    data.flags.writeable = False
    with pytest.raises(ValueError):
        polynomial.detrend(data, 1)

    # TEST CASE 4: Integer array cannot be detrended in place
    with pytest.raises(TypeError):
        polynomial.detrend(np.ones((4, 4), dtype=int), 1)

    # TEST CASE 5: Working region larger than the array
    with pytest.raises(ValueError):
        polynomial.detrend(np.ones((4, 4)), 1, shape=(5, 4))

    # TEST CASE 6: Singular system leaves the array untouched
    data = rng.random(3)
    copy = data.copy()
    with pytest.raises(polynomial.SingularSystemError):
        polynomial.detrend(data, 3)
    assert np.array_equal(data, copy)

    # TEST CASE 7: Complex coefficient blocks in a structured pair
    data = np.ones(4)
    with pytest.raises(TypeError):
        polynomial.polysub(
            data, polynomial.TrendCoefficients(np.ones(2) + 1j, None), 1
        )
    assert np.all(data == 1)

def test_func_solve_failure():
    system = polynomial.NormalEquations((6,), 1)
    data = np.ones(6)
    data[2] = np.nan
    with pytest.raises(polynomial.SolveError):
        polynomial.polyfit(data, system)

    # Other arrays sharing the system are unaffected
    assert np.allclose(polynomial.polyfit(np.ones(6), system).real, [1, 0])
