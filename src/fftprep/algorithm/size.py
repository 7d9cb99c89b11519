r"""
FFT-friendly sizes
==================

This module contains functions for choosing array extents that fast
Fourier transform (FFT) libraries handle efficiently, i.e., integers of
the form

.. math::

   n=2^m\prod_jp_j

where :math:`m\geq\max(0,m_\mathrm{min})` and the odd primes
:math:`p_j` are at most :math:`\min(19,p_\mathrm{max})`.
"""

from collections.abc import Sequence

import sympy

INT_MAX = 2 ** 31 - 1
INVALID_SIZE = -1
ODD_PRIMES = (3, 5, 7, 11, 13, 17, 19)

def _allowed_primes(max_odd_prime: int) -> tuple[int]:
    return tuple(p for p in ODD_PRIMES if p <= max_odd_prime)

def _odd_products(primes: Sequence[int], limit: int) -> list[int]:

    """
    Enumerates all products of the given odd primes (including the
    empty product) that do not exceed `limit`.
    """

    products = [1]
    for p in primes:
        new = []
        for q in products:
            q *= p
            while q <= limit:
                new.append(q)
                q *= p
        products.extend(new)
    return products

def nice_size(
        target: int, min_exp2: int = 0, max_odd_prime: int = 19) -> int:

    r"""
    Finds the smallest FFT-friendly integer that is greater than or
    equal to a target.

    Parameters
    ----------
    target : `int`
        Target size. Values smaller than :math:`1` are treated as
        :math:`1`.

    min_exp2 : `int`, default: :code:`0`
        Minimum power of two :math:`m_\mathrm{min}` in the result.
        Negative values are treated as :math:`0`.

    max_odd_prime : `int`, default: :code:`19`
        Largest odd prime :math:`p_\mathrm{max}` allowed in the
        factorization of the result. Values above :math:`19` are
        treated as :math:`19`.

    Returns
    -------
    size : `int`
        Smallest FFT-friendly integer :math:`\geq` `target`, or
        :code:`-1` if `target` or :math:`2^{m_\mathrm{min}}` exceeds
        half the largest 32-bit signed integer.

    Examples
    --------
    >>> nice_size(100, 0, 5)
    100
    >>> nice_size(101, 0, 5)
    108
    """

    min_exp2 = max(0, min_exp2)
    if target > INT_MAX // 2 or min_exp2 >= 31 \
            or 2 ** min_exp2 > INT_MAX // 2:
        return INVALID_SIZE
    target = max(1, target)

    # A power of two always qualifies and bounds the search
    upper = 2 ** min_exp2
    while upper < target:
        upper *= 2

    best = upper
    for q in _odd_products(_allowed_primes(max_odd_prime),
                           upper >> min_exp2):
        candidate = q << min_exp2
        while candidate < target:
            candidate *= 2
        best = min(best, candidate)
    return best

def nice_small_size(
        target: int, min_exp2: int = 0, max_odd_prime: int = 19) -> int:

    r"""
    Finds the largest FFT-friendly integer that is less than or equal
    to a target.

    Parameters
    ----------
    target : `int`
        Target size.

    min_exp2 : `int`, default: :code:`0`
        Minimum power of two :math:`m_\mathrm{min}` in the result.
        Negative values are treated as :math:`0`.

    max_odd_prime : `int`, default: :code:`19`
        Largest odd prime :math:`p_\mathrm{max}` allowed in the
        factorization of the result. Values above :math:`19` are
        treated as :math:`19`.

    Returns
    -------
    size : `int`
        Largest FFT-friendly integer :math:`\leq` `target`, or
        :code:`-1` if `target` exceeds half the largest 32-bit signed
        integer or :math:`2^{m_\mathrm{min}}` exceeds `target`.
    """

    min_exp2 = max(0, min_exp2)
    if target > INT_MAX // 2 or min_exp2 >= 31 or 2 ** min_exp2 > target:
        return INVALID_SIZE

    best = INVALID_SIZE
    for q in _odd_products(_allowed_primes(max_odd_prime),
                           target >> min_exp2):
        best = max(best, q << ((target // q).bit_length() - 1))
    return best

def is_nice_size(
        value: int, min_exp2: int = 0, max_odd_prime: int = 19) -> bool:

    r"""
    Determines whether an integer is FFT-friendly.

    Parameters
    ----------
    value : `int`
        Integer to check.

    min_exp2 : `int`, default: :code:`0`
        Minimum power of two :math:`m_\mathrm{min}`.

    max_odd_prime : `int`, default: :code:`19`
        Largest odd prime :math:`p_\mathrm{max}` allowed.

    Returns
    -------
    nice : `bool`
        Whether `value` factors as :math:`2^m\prod_jp_j` with the
        constraints above.
    """

    if value < 1:
        return False
    factors = sympy.ntheory.factorint(value)
    if factors.pop(2, 0) < max(0, min_exp2):
        return False
    allowed = _allowed_primes(max_odd_prime)
    return all(p in allowed for p in factors)

def nice_shape(
        shape: Sequence[int], min_exp2: int = 0, max_odd_prime: int = 19,
        *, smaller: bool = False) -> tuple[int]:

    """
    Applies :func:`nice_size` (or :func:`nice_small_size`) to every
    extent of an array shape.

    Parameters
    ----------
    shape : `tuple`
        Array shape.

    min_exp2 : `int`, default: :code:`0`
        Minimum power of two in each extent.

    max_odd_prime : `int`, default: :code:`19`
        Largest odd prime allowed in each extent.

    smaller : `bool`, keyword-only, default: :code:`False`
        Determines whether to search downwards instead of upwards.

    Returns
    -------
    shape : `tuple`
        FFT-friendly shape. Extents for which no valid size exists are
        :code:`-1`.
    """

    search = nice_small_size if smaller else nice_size
    return tuple(search(n, min_exp2, max_odd_prime) for n in shape)
