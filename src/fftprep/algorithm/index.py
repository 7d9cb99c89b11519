r"""
Multi-index map
===============

This module maps the exponent tuples :math:`(k_1,\ldots,k_N)` of the
monomials in an :math:`N`-dimensional polynomial of total degree
:math:`d`,

.. math::

   p(x_1,\ldots,x_N)=\sum_{k_1+\cdots+k_N\leq d}
   c_{a(k_1,\ldots,k_N)}x_1^{k_1}\cdots x_N^{k_N}

to one-based linear coefficient indices :math:`a\in[1,M]` with
:math:`M=\binom{d+N}{N}`. The enumeration increases :math:`k_1` fastest,
then :math:`k_2`, and so on, mirroring the fastest-to-slowest axis order
of the arrays the polynomial is fit to. For :math:`N\leq4`, the indices
agree with

.. math::

   \begin{align*}
     a_{1\mathrm{D}}&=k_1+1\\
     a_{2\mathrm{D}}&=k_1+1+\frac{k_2(2d+3-k_2)}{2}
   \end{align*}

and the corresponding cubic and quartic expressions for three and
four dimensions.
"""

from collections.abc import Sequence
from math import comb

import numpy as np

from .. import MAX_DIMS
from .accelerated import (numba_coefficient_index, numba_coefficient_indices,
                          numba_exponent_table)

def _check_order(n_dims: int, order: int) -> None:

    if not 1 <= n_dims <= MAX_DIMS:
        raise ValueError(f"The number of dimensions must be between 1 and "
                         f"{MAX_DIMS}, not {n_dims}.")
    if order < 0:
        raise ValueError(f"The polynomial order must be non-negative, not "
                         f"{order}.")

def n_coefficients(n_dims: int, order: int) -> int:

    r"""
    Number of coefficients :math:`M=\binom{d+N}{N}` in an
    :math:`N`-dimensional polynomial of total degree :math:`d`.

    Parameters
    ----------
    n_dims : `int`
        Number of dimensions :math:`N`.

    order : `int`
        Total degree :math:`d`.

    Returns
    -------
    n_coefficients : `int`
        Number of coefficients :math:`M`.
    """

    _check_order(n_dims, order)
    return comb(order + n_dims, n_dims)

def coefficient_index(exponents: Sequence[int], order: int) -> int:

    r"""
    One-based linear index of the coefficient for the monomial
    :math:`x_1^{k_1}\cdots x_N^{k_N}`.

    Parameters
    ----------
    exponents : `tuple` or `numpy.ndarray`
        Exponents :math:`(k_1,\ldots,k_N)`, fastest-varying axis
        first.

    order : `int`
        Total degree :math:`d`.

    Returns
    -------
    index : `int`
        Coefficient index :math:`a`.

    Examples
    --------
    >>> coefficient_index((0, 1), 2)
    4
    >>> coefficient_index((1, 1), 2)
    5
    """

    exponents = np.asarray(exponents, dtype=np.int64)
    if exponents.ndim != 1:
        raise ValueError("'exponents' must be one-dimensional.")
    _check_order(exponents.shape[0], order)
    if (exponents < 0).any() or exponents.sum() > order:
        raise ValueError(
            f"The exponents {tuple(exponents.tolist())} do not describe a "
            f"monomial of a polynomial with total degree {order}."
        )
    return int(numba_coefficient_index(exponents, order))

def coefficient_indices(table: np.ndarray[int], order: int) -> np.ndarray[int]:

    r"""
    Vectorized :func:`coefficient_index` for multiple exponent tuples.

    Parameters
    ----------
    table : `numpy.ndarray`
        Exponent tuples, one per row.

        **Shape**: :math:`(M,\,N)`.

    order : `int`
        Total degree :math:`d`.

    Returns
    -------
    indices : `numpy.ndarray`
        One-based coefficient indices.

        **Shape**: :math:`(M,)`.
    """

    table = np.ascontiguousarray(table, dtype=np.int64)
    if table.ndim != 2:
        raise ValueError("'table' must be two-dimensional.")
    _check_order(table.shape[1], order)
    if (table < 0).any() or (table.sum(axis=1) > order).any():
        raise ValueError("'table' contains exponents that exceed the total "
                         f"degree {order}.")
    return numba_coefficient_indices(table, order)

def exponent_table(n_dims: int, order: int) -> np.ndarray[int]:

    r"""
    Exponent tuples of all monomials in an :math:`N`-dimensional
    polynomial of total degree :math:`d`, in coefficient order.

    Row :math:`a-1` holds the exponents of the monomial whose
    coefficient has index :math:`a`.

    Parameters
    ----------
    n_dims : `int`
        Number of dimensions :math:`N`.

    order : `int`
        Total degree :math:`d`.

    Returns
    -------
    table : `numpy.ndarray`
        Exponent tuples :math:`(k_1,\ldots,k_N)`.

        **Shape**: :math:`(M,\,N)`.
    """

    _check_order(n_dims, order)
    return numba_exponent_table(n_dims, order)
