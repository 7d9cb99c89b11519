"""
Padding
=======

This module fills the tail of each axis of an array beyond its valid
samples, either with a constant or with linear ramps that join the last
valid sample back to the first one so that the padded array is
approximately continuous when treated as periodic.

The valid samples occupy the leading corner with extents `n` of a
padded region with extents `shape`, which may itself be the leading
corner of a larger allocation.
"""

from collections.abc import Sequence
from typing import Union

import numpy as np

from ..algorithm.utility import check_shape, check_writeable, get_region

def _check_extents(
        n: Sequence[int], shape: tuple[int]) -> tuple[int]:
    n = tuple(int(m) for m in n)
    if len(n) != len(shape):
        raise ValueError(f"'n' has {len(n)} extents, but the array has "
                         f"{len(shape)} dimensions.")
    if any(m < 1 or m > s for m, s in zip(n, shape)):
        raise ValueError(f"The valid extents {n} do not fit inside the "
                         f"padded region {shape}.")
    return n

def pad(
        data: np.ndarray, n: Sequence[int], value: Union[float, complex],
        *, shape: Sequence[int] = None) -> None:

    """
    Fills the padded part of an array with a constant in place.

    Parameters
    ----------
    data : `numpy.ndarray`
        Real- or complex-valued array with one to four dimensions.
        Modified in place.

    n : `tuple`
        Extents of the valid samples, in NumPy axis order.

    value : `float` or `complex`
        Fill value.

    shape : `tuple`, keyword-only, optional
        Extents of the padded region, in NumPy axis order. If not
        specified, all of `data` is padded.
    """

    check_writeable(data)
    shape = check_shape(data, shape)
    if np.iscomplexobj(value) and not np.iscomplexobj(data):
        raise TypeError("A real-valued array cannot be padded with a "
                        "complex value.")
    n = _check_extents(n, shape)
    region = get_region(data, shape)
    for axis, m in enumerate(n):
        index = [slice(None)] * region.ndim
        index[axis] = slice(m, None)
        region[tuple(index)] = value

def padramp(
        data: np.ndarray, n: Sequence[int], *,
        shape: Sequence[int] = None) -> None:

    r"""
    Fills the padded part of an array with linear ramps in place.

    The axes are processed fastest-varying (last) first. Along an axis
    with :math:`m` valid samples and :math:`p` padded samples, the
    :math:`q`-th padded sample (:math:`q=1,\ldots,p`) is

    .. math::

       y_{m-1+q}=y_{m-1}+\frac{q}{p+1}\left(y_0-y_{m-1}\right)

    so that the ramp would reach :math:`y_0` one sample past the end.
    Later axes ramp between values already padded along earlier
    axes, which fills the corners.

    Parameters
    ----------
    data : `numpy.ndarray`
        Real- or complex-valued array with one to four dimensions.
        Modified in place.

    n : `tuple`
        Extents of the valid samples, in NumPy axis order.

    shape : `tuple`, keyword-only, optional
        Extents of the padded region, in NumPy axis order. If not
        specified, all of `data` is padded.
    """

    check_writeable(data)
    shape = check_shape(data, shape)
    n = _check_extents(n, shape)
    region = get_region(data, shape)
    for axis in reversed(range(region.ndim)):
        m, total = n[axis], shape[axis]
        if m == total:
            continue

        # Slower axes are restricted to their valid samples
        index = [slice(n[a]) if a < axis else slice(None)
                 for a in range(region.ndim)]
        valid = region[tuple(index)]
        first = np.take(valid, [0], axis=axis)
        last = np.take(valid, [m - 1], axis=axis)
        t = np.arange(1, total - m + 1) / (total - m + 1)
        t = t.reshape((-1,) + (1,) * (region.ndim - axis - 1))
        index[axis] = slice(m, total)
        region[tuple(index)] = last + (first - last) * t
