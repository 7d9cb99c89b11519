"""
Accelerated algorithms
======================

This module contains Numba-accelerated kernels for the multi-index map
that orders the coefficients of multivariate polynomials.
"""

import numba
import numpy as np


@numba.njit
def numba_binomial(n: int, k: int) -> int:
    r"""
    Serial Numba-accelerated binomial coefficient
    :math:`\binom{n}{k}` for non-negative integers.

    Parameters
    ----------
    n : `int`
        Number of items :math:`n`.

    k : `int`
        Number of chosen items :math:`k`.

    Returns
    -------
    coefficient : `int`
        Binomial coefficient. Zero if :math:`k>n` or :math:`k<0`.
    """

    if k < 0 or k > n:
        return 0
    if k > n - k:
        k = n - k
    coefficient = 1
    for i in range(1, k + 1):
        coefficient = coefficient * (n - k + i) // i
    return coefficient


@numba.njit
def numba_coefficient_index(exponents: np.ndarray[int], order: int) -> int:
    r"""
    Serial Numba-accelerated closed-form linear index of the monomial
    :math:`x_1^{k_1}\cdots x_N^{k_N}` in a polynomial of total degree
    :math:`d`.

    .. math::

       a=1+k_1+\sum_{j=2}^N\left[\binom{r_j+j}{j}
       -\binom{r_j-k_j+j}{j}\right],\quad r_j=d-\sum_{i>j}k_i

    Parameters
    ----------
    exponents : `np.ndarray`
        Exponents :math:`(k_1,\ldots,k_N)`, fastest-varying axis first.
        Must satisfy :math:`\sum_ik_i\leq d`.

        **Shape**: :math:`(N,)`.

    order : `int`
        Total degree :math:`d`.

    Returns
    -------
    index : `int`
        One-based coefficient index :math:`a`.
    """

    index = 1 + exponents[0]
    remainder = order
    for j in range(exponents.shape[0] - 1, 0, -1):
        k = exponents[j]
        index += (numba_binomial(remainder + j + 1, j + 1)
                  - numba_binomial(remainder - k + j + 1, j + 1))
        remainder -= k
    return index


@numba.njit
def numba_coefficient_indices(
    table: np.ndarray[int], order: int
) -> np.ndarray[int]:
    r"""
    Serial Numba-accelerated closed-form linear indices for multiple
    exponent tuples.

    Parameters
    ----------
    table : `np.ndarray`
        Exponent tuples, one per row.

        **Shape**: :math:`(M,\,N)`.

    order : `int`
        Total degree :math:`d`.

    Returns
    -------
    indices : `np.ndarray`
        One-based coefficient indices.

        **Shape**: :math:`(M,)`.
    """

    indices = np.empty(table.shape[0], dtype=np.int64)
    for i in range(table.shape[0]):
        indices[i] = numba_coefficient_index(table[i], order)
    return indices


@numba.njit
def numba_exponent_table(n_dims: int, order: int) -> np.ndarray[int]:
    r"""
    Serial Numba-accelerated enumeration of all exponent tuples
    :math:`(k_1,\ldots,k_N)` with :math:`\sum_ik_i\leq d`, with
    :math:`k_1` varying fastest.

    Parameters
    ----------
    n_dims : `int`
        Number of dimensions :math:`N`.

    order : `int`
        Total degree :math:`d`.

    Returns
    -------
    table : `np.ndarray`
        Exponent tuples in coefficient order.

        **Shape**: :math:`(M,\,N)`, where
        :math:`M=\binom{d+N}{N}`.
    """

    n_terms = numba_binomial(order + n_dims, n_dims)
    table = np.zeros((n_terms, n_dims), dtype=np.int64)
    exponents = np.zeros(n_dims, dtype=np.int64)
    for a in range(n_terms):
        table[a, :] = exponents
        for i in range(n_dims):
            exponents[i] += 1
            if exponents.sum() <= order:
                break
            exponents[i] = 0
    return table
