r"""
Average-slope trends
====================

This module removes linear trends from one- to four-dimensional arrays
using the average slope method [1]_. Along an axis with extent
:math:`n`, the slope is estimated from the means :math:`\bar{y}_-` and
:math:`\bar{y}_+` of the leading and trailing :math:`h=\lfloor n/2
\rfloor` samples as

.. math::

   s=\frac{\bar{y}_+-\bar{y}_-}{n-h}

since the centers of the two halves are :math:`n-h` samples apart. The
trend

.. math::

   y_\mathrm{trend}=\bar{y}+\sum_is_i\left(j_i-\frac{n_i-1}{2}\right)

with zero-based sample indices :math:`j_i` is then subtracted.

References
----------
.. [1] J. S. Bendat and A. G. Piersol, *Random Data: Analysis and
   Measurement Procedures*, 1st ed. (Wiley, 1971), p. 288.
"""

from collections.abc import Sequence
from typing import Union

import numpy as np

from ..algorithm.utility import check_shape, check_writeable, get_region

def axis_slope(
        region: np.ndarray, axis: int) -> Union[float, complex]:

    """
    Average slope of an array along one axis.

    Parameters
    ----------
    region : `numpy.ndarray`
        Real- or complex-valued array.

    axis : `int`
        Axis along which to estimate the slope.

    Returns
    -------
    slope : `float` or `complex`
        Average slope per sample. Zero for axes with a single sample.
    """

    n = region.shape[axis]
    h = n // 2
    if h == 0:
        return 0.0
    dtype = complex if np.iscomplexobj(region) else float
    leading = np.take(region, np.arange(h), axis=axis).mean(dtype=dtype)
    trailing = np.take(region, np.arange(n - h, n), axis=axis).mean(
        dtype=dtype
    )
    return (trailing - leading) / (n - h)

def avgslope(
        data: np.ndarray, *, shape: Sequence[int] = None
    ) -> tuple[Union[float, complex], np.ndarray]:

    r"""
    Removes the mean and the average linear slope from an array in
    place.

    Parameters
    ----------
    data : `numpy.ndarray`
        Real- or complex-valued array with one to four dimensions.
        Modified in place.

    shape : `tuple`, keyword-only, optional
        Extents of the working region in the leading corner of `data`,
        in NumPy axis order. If not specified, all of `data` is used.

    Returns
    -------
    mean : `float` or `complex`
        Mean :math:`\bar{y}` of the working region before the trend
        was removed.

    slopes : `numpy.ndarray`
        Slopes :math:`s_i` per sample, fastest-varying axis first
        (i.e., `slopes[0]` belongs to the last NumPy axis).

        **Shape**: :math:`(N,)`.
    """

    check_writeable(data)
    shape = check_shape(data, shape)
    region = get_region(data, shape)
    dtype = complex if np.iscomplexobj(region) else float

    mean = region.mean(dtype=dtype)
    slopes = np.array([axis_slope(region, axis)
                       for axis in range(region.ndim)], dtype=dtype)
    trend = np.full(shape, mean, dtype=dtype)
    for axis, (n, s) in enumerate(zip(shape, slopes)):
        ramp = s * (np.arange(n) - (n - 1) / 2)
        trend += ramp.reshape((-1,) + (1,) * (region.ndim - axis - 1))
    np.subtract(region, trend, out=region, casting="same_kind")
    return mean, slopes[::-1].copy()
