"""
Utility algorithms
==================

This module contains array bookkeeping functions used by other FFTPrep
modules to handle arrays embedded in larger allocations.
"""

from collections.abc import Sequence

import numpy as np

from .. import MAX_DIMS

def check_shape(
        data: np.ndarray, shape: Sequence[int] = None, *,
        name: str = "data") -> tuple[int]:

    """
    Validates the dimensionality of an array and the extents of the
    working region within it.

    Parameters
    ----------
    data : `numpy.ndarray`
        Array with one to four dimensions. Its own extents are the
        window in which the working region is embedded.

    shape : `tuple`, optional
        Extents of the working region, in NumPy axis order. If not
        specified, the entire array is used.

    name : `str`, keyword-only, default: :code:`"data"`
        Name of the array, used in error messages.

    Returns
    -------
    shape : `tuple`
        Extents of the working region.
    """

    if not 1 <= data.ndim <= MAX_DIMS:
        raise ValueError(f"'{name}' must have between 1 and {MAX_DIMS} "
                         f"dimensions, not {data.ndim}.")
    if shape is None:
        return tuple(data.shape)
    shape = tuple(int(n) for n in shape)
    if len(shape) != data.ndim:
        raise ValueError(f"'shape' has {len(shape)} extents, but '{name}' "
                         f"has {data.ndim} dimensions.")
    if any(n < 1 or n > w for n, w in zip(shape, data.shape)):
        raise ValueError(f"The working region {shape} does not fit inside "
                         f"'{name}' with shape {data.shape}.")
    return shape

def get_region(data: np.ndarray, shape: Sequence[int]) -> np.ndarray:

    """
    Returns a view of the leading corner of an array.

    Parameters
    ----------
    data : `numpy.ndarray`
        Array.

    shape : `tuple`
        Extents of the leading corner, in NumPy axis order.

    Returns
    -------
    region : `numpy.ndarray`
        View of `data[:shape[0], :shape[1], ...]`.
    """

    return data[tuple(slice(n) for n in shape)]

def check_writeable(data: np.ndarray, name: str = "data") -> None:

    """
    Ensures that an array can be modified in place.
    """

    if not isinstance(data, np.ndarray):
        raise TypeError(f"'{name}' must be a NumPy array to be modified in "
                        "place.")
    if not data.flags.writeable:
        raise ValueError(f"'{name}' is read-only.")
    if not np.issubdtype(data.dtype, np.inexact):
        raise TypeError(f"'{name}' must have a floating-point or complex "
                        f"data type, not '{data.dtype}'.")
