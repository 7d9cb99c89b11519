r"""
Polynomial trends
=================

This module fits multivariate polynomials to one- to four-dimensional
arrays using linear least squares and subtracts them in place.

The polynomial of total degree :math:`d` in :math:`N` dimensions is

.. math::

   p(x_1,\ldots,x_N)=\sum_{k_1+\cdots+k_N\leq d}
   c_{a(k_1,\ldots,k_N)}x_1^{k_1}\cdots x_N^{k_N}

where the coefficient index :math:`a` is given by
:func:`fftprep.algorithm.index.coefficient_index` and the coordinate
along axis :math:`i` with extent :math:`n_i` is

.. math::

   x_i=\frac{j_i-(n_i+1)/2}{n_i}

for the one-based sample index :math:`j_i`. Axis :math:`1` is the
fastest-varying axis, which is the *last* axis of a C-ordered NumPy
array.

The normal equations only depend on the array extents and the
polynomial order, so they are built and factored once in a
:class:`NormalEquations` object and reused for every array of the same
shape:

>>> system = NormalEquations((64, 64), 2)
>>> coefficients = polyfit(image, system)
>>> polysub(image, coefficients, 2)
"""

from collections.abc import Sequence
import logging
from numbers import Integral
from typing import NamedTuple, Union
import warnings

import numpy as np
from scipy.linalg import lapack

from .. import MAX_DIMS
from ..algorithm.index import exponent_table, n_coefficients
from ..algorithm.utility import check_shape, check_writeable, get_region

RCOND_TOLERANCE = np.finfo(float).eps
RCOND_WARNING = 1e-12

class SingularSystemError(np.linalg.LinAlgError):

    """
    Raised when the normal equations for a shape and polynomial order
    cannot be factored or are numerically singular.

    Parameters
    ----------
    message : `str`
        Error message.

    status : `int`, default: :code:`1`
        Non-zero status. Positive values returned by LAPACK give the
        one-based index of the zero diagonal block.
    """

    def __init__(self, message: str, status: int = 1) -> None:
        super().__init__(message)
        self.status = status

class SolveError(np.linalg.LinAlgError):

    """
    Raised when the factored normal equations cannot be solved for the
    right-hand side of a specific array.

    Parameters
    ----------
    message : `str`
        Error message.

    status : `int`, default: :code:`1`
        Non-zero status, usually passed through from LAPACK.
    """

    def __init__(self, message: str, status: int = 1) -> None:
        super().__init__(message)
        self.status = status

class TrendCoefficients(NamedTuple):

    """
    Coefficients of a fitted polynomial trend.

    Parameters
    ----------
    real : `numpy.ndarray`
        Coefficients fit to the real part of the data (or to the data
        itself if it is real-valued), in coefficient index order.

    imag : `numpy.ndarray`, optional
        Coefficients fit to the imaginary part of complex-valued data.
    """

    real: np.ndarray
    imag: np.ndarray = None

    @property
    def is_complex(self) -> bool:
        return self.imag is not None

    def concatenate(self) -> np.ndarray:

        """
        Returns the coefficients as one vector with the real block
        followed by the imaginary block (if any).
        """

        if self.imag is None:
            return np.array(self.real, dtype=float)
        return np.concatenate((self.real, self.imag))

def axis_coordinates(n: int) -> np.ndarray[float]:

    r"""
    Fit coordinates :math:`x_j=(j-(n+1)/2)/n` for the one-based sample
    indices :math:`j=1,\ldots,n` along an axis.

    Parameters
    ----------
    n : `int`
        Axis extent :math:`n`.

    Returns
    -------
    x : `numpy.ndarray`
        Coordinates, centered on zero and spanning approximately
        :math:`[-0.5,\,0.5]`.

        **Shape**: :math:`(n,)`.
    """

    return (np.arange(1, n + 1) - (n + 1) / 2) / n

def _vandermonde(n: int, order: int) -> np.ndarray[float]:
    return axis_coordinates(n)[:, None] ** np.arange(order + 1)

def axis_moments(n: int, max_power: int) -> np.ndarray[float]:

    r"""
    Power sums :math:`S(p)=\sum_jx_j^p` of the fit coordinates along an
    axis for :math:`p=0,\ldots,p_\mathrm{max}`.

    Parameters
    ----------
    n : `int`
        Axis extent :math:`n`.

    max_power : `int`
        Largest power :math:`p_\mathrm{max}`.

    Returns
    -------
    moments : `numpy.ndarray`
        Power sums.

        **Shape**: :math:`(p_\mathrm{max}+1,)`.
    """

    return _vandermonde(n, max_power).sum(axis=0)

def normal_matrix(shape: Sequence[int], order: int) -> np.ndarray[float]:

    r"""
    Builds the normal-equation (Gram) matrix for fitting a polynomial
    of total degree :math:`d` on a grid.

    Since the basis consists of products of one-dimensional monomials,
    the sum over the grid separates into per-axis power sums:

    .. math::

       G_{ab}=\sum_\mathrm{grid}\prod_ix_i^{k_i^{(a)}+k_i^{(b)}}
       =\prod_iS_i\left(k_i^{(a)}+k_i^{(b)}\right)

    Parameters
    ----------
    shape : `tuple`
        Grid extents, in NumPy axis order.

    order : `int`
        Total degree :math:`d`.

    Returns
    -------
    matrix : `numpy.ndarray`
        Symmetric Gram matrix.

        **Shape**: :math:`(M,\,M)`.
    """

    exponents = exponent_table(len(shape), order)
    powers = exponents[:, None, :] + exponents[None, :, :]
    matrix = np.ones(powers.shape[:2])
    for i, n in enumerate(shape[::-1]):
        matrix *= axis_moments(n, 2 * order)[powers[..., i]]
    return matrix

class NormalEquations:

    """
    Factored normal equations for fitting polynomials of a given total
    degree to arrays of a given shape.

    The object holds no sample values and is not modified after
    construction, so it can be shared by any number of
    :func:`polyfit` calls, including calls from multiple threads. It
    must be rebuilt when the shape or order changes.

    Parameters
    ----------
    shape : `tuple`
        Extents of the arrays to be fit, in NumPy axis order.

    order : `int`
        Total degree :math:`d` of the polynomial.

    verbose : `bool`, keyword-only, default: :code:`False`
        Determines whether construction details are logged.

    Raises
    ------
    SingularSystemError
        If `order` is not smaller than every extent, or if the Gram
        matrix is singular to working precision.
    """

    def __init__(
            self, shape: Sequence[int], order: int, *,
            verbose: bool = False) -> None:

        logging.basicConfig(format="{asctime} | {levelname:^8s} | {message}",
                            style="{",
                            level=logging.INFO if verbose else logging.WARNING)

        self._shape = tuple(int(n) for n in shape)
        if not isinstance(order, Integral):
            raise TypeError(f"The polynomial order must be an integer, not "
                            f"{order!r}.")
        self._order = int(order)
        if not 1 <= len(self._shape) <= MAX_DIMS:
            raise ValueError(f"'shape' must have between 1 and {MAX_DIMS} "
                             f"extents, not {len(self._shape)}.")
        if any(n < 1 for n in self._shape):
            raise ValueError(f"Invalid shape {self._shape}.")
        self._n_coefficients = n_coefficients(len(self._shape), self._order)

        for axis, n in enumerate(self._shape):
            if self._order >= n:
                raise SingularSystemError(
                    f"A polynomial of order {self._order} cannot be fit "
                    f"along axis {axis} with only {n} sample(s)."
                )

        self._exponents = exponent_table(len(self._shape), self._order)
        self._matrix = normal_matrix(self._shape, self._order)
        self._factor, self._pivots, info = lapack.dsytrf(self._matrix)
        if info != 0:
            raise SingularSystemError(
                f"Factorization of the {self._n_coefficients}x"
                f"{self._n_coefficients} normal equations failed "
                f"(info={info}).",
                info
            )

        anorm = np.abs(self._matrix).sum(axis=0).max()
        self._rcond, info = lapack.dsycon(self._factor, self._pivots, anorm)
        if info != 0 or self._rcond < RCOND_TOLERANCE:
            raise SingularSystemError(
                f"The normal equations for shape {self._shape} and order "
                f"{self._order} are singular to working precision "
                f"(rcond={self._rcond:.3e}).",
                info or 1
            )
        if self._rcond < RCOND_WARNING:
            warnings.warn(
                f"The normal equations for shape {self._shape} and order "
                f"{self._order} are ill-conditioned "
                f"(rcond={self._rcond:.3e}); fitted coefficients may be "
                "inaccurate."
            )

        logging.info(f"Factored {self._n_coefficients}x"
                     f"{self._n_coefficients} normal equations for shape "
                     f"{self._shape} and order {self._order} "
                     f"(rcond={self._rcond:.3e}).")

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(shape={self._shape}, "
                f"order={self._order})")

    @staticmethod
    def _readonly(array: np.ndarray) -> np.ndarray:
        view = array.view()
        view.flags.writeable = False
        return view

    @property
    def shape(self) -> tuple[int]:
        """
        Extents of the arrays the system applies to, in NumPy axis
        order.
        """

        return self._shape

    @property
    def order(self) -> int:
        """
        Total degree of the polynomial.
        """

        return self._order

    @property
    def n_coefficients(self) -> int:
        """
        Number of polynomial coefficients :math:`M`.
        """

        return self._n_coefficients

    @property
    def exponents(self) -> np.ndarray[int]:
        """
        Exponent tuples :math:`(k_1,\\ldots,k_N)` in coefficient order.

        **Shape**: :math:`(M,\\,N)`.
        """

        return self._readonly(self._exponents)

    @property
    def matrix(self) -> np.ndarray[float]:
        """
        Gram matrix of the polynomial basis on the grid.

        **Shape**: :math:`(M,\\,M)`.
        """

        return self._readonly(self._matrix)

    @property
    def factor(self) -> np.ndarray[float]:
        """
        Symmetric-indefinite (Bunch–Kaufman) factor of the Gram matrix
        as returned by LAPACK :code:`dsytrf`.
        """

        return self._readonly(self._factor)

    @property
    def pivots(self) -> np.ndarray[int]:
        """
        Pivot indices from the factorization.
        """

        return self._readonly(self._pivots)

    @property
    def rcond(self) -> float:
        """
        Estimated reciprocal condition number of the Gram matrix.
        """

        return self._rcond

    def solve(self, rhs: np.ndarray[float]) -> np.ndarray[float]:

        r"""
        Solves the normal equations for one or more right-hand sides.

        Parameters
        ----------
        rhs : `numpy.ndarray`
            Projections of the data onto the polynomial basis.

            **Shape**: :math:`(M,)` or :math:`(M,\,K)`.

        Returns
        -------
        solution : `numpy.ndarray`
            Polynomial coefficients.

            **Shape**: Same as `rhs`.

        Raises
        ------
        SolveError
            If LAPACK reports an error or the solution is not finite.
        """

        rhs = np.asarray(rhs, dtype=float)
        if rhs.shape[0] != self._n_coefficients:
            raise ValueError(f"'rhs' must have {self._n_coefficients} rows, "
                             f"not {rhs.shape[0]}.")
        solution, info = lapack.dsytrs(
            self._factor, self._pivots,
            rhs.reshape(self._n_coefficients, -1)
        )
        if info != 0:
            raise SolveError(f"Solving the normal equations failed "
                             f"(info={info}).", info)
        if not np.isfinite(solution).all():
            raise SolveError("Solving the normal equations produced "
                             "non-finite coefficients.")
        return solution.reshape(rhs.shape)

def _project(
        region: np.ndarray, order: int, exponents: np.ndarray[int]
    ) -> np.ndarray:

    """
    Projects the samples onto every monomial in the basis, one axis at
    a time.
    """

    dtype = complex if np.iscomplexobj(region) else float
    projection = np.asarray(region, dtype=dtype)
    for n in region.shape:
        projection = np.tensordot(projection, _vandermonde(n, order),
                                  axes=(0, 0))
    return projection[tuple(exponents[:, ::-1].T)]

def _evaluate(
        coefficients: np.ndarray, shape: Sequence[int], order: int
    ) -> np.ndarray:

    """
    Evaluates the polynomial on the grid, one axis at a time.
    """

    exponents = exponent_table(len(shape), order)
    trend = np.zeros((order + 1,) * len(shape), dtype=coefficients.dtype)
    trend[tuple(exponents[:, ::-1].T)] = coefficients
    for n in shape:
        trend = np.tensordot(trend, _vandermonde(n, order), axes=(0, 1))
    return trend

def _as_coefficient_vector(
        coefficients: Union[TrendCoefficients, np.ndarray], n_dims: int,
        order: int) -> np.ndarray:

    """
    Converts coefficients in any supported layout to one (real or
    complex) vector in coefficient order.
    """

    m = n_coefficients(n_dims, order)
    if isinstance(coefficients, TrendCoefficients):
        if np.iscomplexobj(coefficients.real) \
                or np.iscomplexobj(coefficients.imag):
            raise TypeError("The real and imaginary coefficient blocks must "
                            "both be real-valued.")
        real = np.asarray(coefficients.real, dtype=float)
        if real.shape != (m,) or coefficients.imag is not None \
                and np.shape(coefficients.imag) != (m,):
            raise ValueError(f"A polynomial of order {order} in {n_dims} "
                             f"dimension(s) has {m} coefficients.")
        if coefficients.imag is None:
            return real
        return real + 1j * np.asarray(coefficients.imag, dtype=float)

    coefficients = np.asarray(coefficients)
    if coefficients.ndim != 1:
        raise ValueError("'coefficients' must be one-dimensional.")
    if np.iscomplexobj(coefficients):
        if coefficients.shape[0] == m:
            return coefficients.astype(complex)
    elif coefficients.shape[0] == m:
        return coefficients.astype(float)
    elif coefficients.shape[0] == 2 * m:
        return coefficients[:m] + 1j * coefficients[m:]
    raise ValueError(
        f"A polynomial of order {order} in {n_dims} dimension(s) has {m} "
        f"coefficients, but {coefficients.shape[0]} were provided."
    )

def polyfit(
        data: np.ndarray, system: NormalEquations, *,
        shape: Sequence[int] = None) -> TrendCoefficients:

    r"""
    Fits a polynomial to an array by linear least squares.

    The real and imaginary parts of complex-valued data are fit
    independently against the same basis.

    Parameters
    ----------
    data : `numpy.ndarray`
        Real- or complex-valued array with one to four dimensions. It
        is not modified.

    system : `NormalEquations`
        Factored normal equations for the working region's shape and
        the desired polynomial order.

    shape : `tuple`, keyword-only, optional
        Extents of the working region in the leading corner of `data`,
        in NumPy axis order. If not specified, all of `data` is used.

    Returns
    -------
    coefficients : `TrendCoefficients`
        Fitted coefficients.

    Raises
    ------
    SolveError
        If the normal equations cannot be solved for this array.
    """

    data = np.asarray(data)
    shape = check_shape(data, shape)
    if shape != system.shape:
        raise ValueError(f"The working region {shape} does not match the "
                         f"shape {system.shape} of the normal equations.")
    rhs = _project(get_region(data, shape), system.order, system.exponents)
    if np.iscomplexobj(rhs):
        solution = system.solve(np.column_stack((rhs.real, rhs.imag)))
        return TrendCoefficients(solution[:, 0].copy(),
                                 solution[:, 1].copy())
    return TrendCoefficients(system.solve(rhs))

def polyval(
        coefficients: Union[TrendCoefficients, np.ndarray],
        shape: Sequence[int], order: int) -> np.ndarray:

    r"""
    Evaluates a polynomial on a grid.

    Parameters
    ----------
    coefficients : `TrendCoefficients` or `numpy.ndarray`
        Polynomial coefficients in coefficient index order. A real
        vector of length :math:`2M` is interpreted as a real block
        followed by an imaginary block.

    shape : `tuple`
        Grid extents, in NumPy axis order.

    order : `int`
        Total degree :math:`d`.

    Returns
    -------
    trend : `numpy.ndarray`
        Double-precision polynomial values, complex if the coefficients
        are complex.

        **Shape**: `shape`.
    """

    shape = tuple(int(n) for n in shape)
    return _evaluate(_as_coefficient_vector(coefficients, len(shape), order),
                     shape, order)

def polysub(
        data: np.ndarray, coefficients: Union[TrendCoefficients, np.ndarray],
        order: int, *, shape: Sequence[int] = None) -> None:

    r"""
    Subtracts a polynomial from an array in place.

    The coordinates and coefficient order are those used by
    :func:`polyfit`.

    Parameters
    ----------
    data : `numpy.ndarray`
        Real- or complex-valued array with one to four dimensions.
        Modified in place.

    coefficients : `TrendCoefficients` or `numpy.ndarray`
        Polynomial coefficients. Complex coefficients require
        complex-valued `data`.

    order : `int`
        Total degree :math:`d`.

    shape : `tuple`, keyword-only, optional
        Extents of the working region in the leading corner of `data`,
        in NumPy axis order. If not specified, all of `data` is used.
    """

    check_writeable(data)
    shape = check_shape(data, shape)
    coefficients = _as_coefficient_vector(coefficients, len(shape), order)
    if np.iscomplexobj(coefficients) and not np.iscomplexobj(data):
        raise TypeError("Complex coefficients cannot be subtracted from a "
                        "real-valued array.")
    region = get_region(data, shape)
    np.subtract(region, _evaluate(coefficients, shape, order), out=region,
                casting="same_kind")

def detrend(
        data: np.ndarray, order: int, *, shape: Sequence[int] = None,
        system: NormalEquations = None,
        verbose: bool = False) -> TrendCoefficients:

    """
    Fits a polynomial to an array and subtracts it in place.

    Parameters
    ----------
    data : `numpy.ndarray`
        Real- or complex-valued array with one to four dimensions.
        Modified in place.

    order : `int`
        Total degree of the polynomial.

    shape : `tuple`, keyword-only, optional
        Extents of the working region in the leading corner of `data`,
        in NumPy axis order. If not specified, all of `data` is used.

    system : `NormalEquations`, keyword-only, optional
        Previously built normal equations for the working region's
        shape and `order`. If not specified, they are built.

    verbose : `bool`, keyword-only, default: :code:`False`
        Determines whether progress is logged.

    Returns
    -------
    coefficients : `TrendCoefficients`
        Coefficients of the subtracted polynomial.
    """

    check_writeable(data)
    shape = check_shape(data, shape)
    if system is None:
        system = NormalEquations(shape, order, verbose=verbose)
    elif system.shape != shape or system.order != order:
        raise ValueError(f"{system!r} does not match shape {shape} and "
                         f"order {order}.")
    coefficients = polyfit(data, system, shape=shape)
    polysub(data, coefficients, order, shape=shape)
    logging.info(f"Removed polynomial trend of order {order} from "
                 f"{'complex' if coefficients.is_complex else 'real'} "
                 f"array region {shape}.")
    return coefficients
