"""
Multiplication
==============

This module multiplies arrays element by element in place, either by
another array or by the outer product of one-dimensional factors (e.g.,
separable apodization windows).
"""

from collections.abc import Sequence

import numpy as np

from ..algorithm.utility import check_shape, check_writeable, get_region

def multiply(
        in_: np.ndarray, inout: np.ndarray, *,
        shape: Sequence[int] = None) -> None:

    """
    Multiplies an array by another array element by element in place.

    Parameters
    ----------
    in_ : `numpy.ndarray`
        Real- or complex-valued multiplier with the same number of
        dimensions as `inout`. Only its leading corner is used.

    inout : `numpy.ndarray`
        Real- or complex-valued array with one to four dimensions.
        Modified in place.

    shape : `tuple`, keyword-only, optional
        Extents of the working region in the leading corners of both
        arrays, in NumPy axis order. If not specified, all of `inout`
        is used.
    """

    check_writeable(inout, "inout")
    in_ = np.asarray(in_)
    shape = check_shape(inout, shape, name="inout")
    check_shape(in_, shape, name="in_")
    if np.iscomplexobj(in_) and not np.iscomplexobj(inout):
        raise TypeError("A real-valued array cannot be multiplied in place "
                        "by a complex-valued array.")
    region = get_region(inout, shape)
    np.multiply(region, get_region(in_, shape), out=region,
                casting="same_kind")

def multiply_separable(
        factors: Sequence[np.ndarray], inout: np.ndarray, *,
        shape: Sequence[int] = None) -> None:

    r"""
    Multiplies an array in place by the outer product of
    one-dimensional factors,

    .. math::

       y_{j_1\cdots j_N}\leftarrow y_{j_1\cdots j_N}
       \prod_if^{(i)}_{j_i}

    Parameters
    ----------
    factors : `list`
        One-dimensional real- or complex-valued factors, one per axis
        in NumPy axis order. Each must be at least as long as the
        working region along its axis.

    inout : `numpy.ndarray`
        Real- or complex-valued array with one to four dimensions.
        Modified in place.

    shape : `tuple`, keyword-only, optional
        Extents of the working region in the leading corner of
        `inout`, in NumPy axis order. If not specified, all of `inout`
        is used.
    """

    check_writeable(inout, "inout")
    shape = check_shape(inout, shape, name="inout")
    if len(factors) != len(shape):
        raise ValueError(f"{len(factors)} factors were provided for an "
                         f"array with {len(shape)} dimensions.")
    region = get_region(inout, shape)
    for axis, (n, factor) in enumerate(zip(shape, factors)):
        factor = np.asarray(factor)
        if factor.ndim != 1 or factor.shape[0] < n:
            raise ValueError(f"The factor for axis {axis} must be a "
                             f"one-dimensional array with at least {n} "
                             "elements.")
        if np.iscomplexobj(factor) and not np.iscomplexobj(region):
            raise TypeError("A real-valued array cannot be multiplied in "
                            "place by a complex-valued factor.")
        factor = factor[:n].reshape((-1,) + (1,) * (region.ndim - axis - 1))
        np.multiply(region, factor, out=region, casting="same_kind")

def multiply_separable_plane(
        plane: np.ndarray, line: np.ndarray, inout: np.ndarray, *,
        axis: int = 0, shape: Sequence[int] = None) -> None:

    r"""
    Multiplies a three-dimensional array in place by the outer product
    of a two-dimensional factor and a one-dimensional factor.

    For `axis=0`,

    .. math::

       y_{ijk}\leftarrow y_{ijk}\,f_i\,g_{jk},

    and similarly for the other axes, with :math:`f` running along
    `axis` and :math:`g` covering the two remaining axes in order.

    Parameters
    ----------
    plane : `numpy.ndarray`
        Two-dimensional real- or complex-valued factor :math:`g`.

        **Shape**: :math:`(N_a,\,N_b)`, where :math:`N_a` and
        :math:`N_b` are at least the extents of the two axes other than
        `axis`.

    line : `numpy.ndarray`
        One-dimensional real- or complex-valued factor :math:`f`.

        **Shape**: :math:`(N_\mathrm{axis},)` or longer.

    inout : `numpy.ndarray`
        Three-dimensional real- or complex-valued array. Modified in
        place.

    axis : `int`, keyword-only, default: :code:`0`
        NumPy axis along which `line` runs.

    shape : `tuple`, keyword-only, optional
        Extents of the working region in the leading corner of `inout`,
        in NumPy axis order. If not specified, all of `inout` is used.
    """

    check_writeable(inout, "inout")
    shape = check_shape(inout, shape, name="inout")
    if len(shape) != 3:
        raise ValueError("A plane and a line factor require a "
                         "three-dimensional array.")
    if axis not in range(-3, 3):
        raise ValueError(f"Invalid axis {axis} for a three-dimensional "
                         "array.")
    axis %= 3
    n_plane = tuple(n for a, n in enumerate(shape) if a != axis)
    plane = np.asarray(plane)
    line = np.asarray(line)
    if plane.ndim != 2 or any(m < n for m, n in zip(plane.shape, n_plane)):
        raise ValueError("The plane factor must be a two-dimensional array "
                         f"covering at least {n_plane}.")
    if line.ndim != 1 or line.shape[0] < shape[axis]:
        raise ValueError("The line factor must be a one-dimensional array "
                         f"with at least {shape[axis]} elements.")
    if (np.iscomplexobj(plane) or np.iscomplexobj(line)) \
            and not np.iscomplexobj(inout):
        raise TypeError("A real-valued array cannot be multiplied in "
                        "place by a complex-valued factor.")
    region = get_region(inout, shape)
    factor = np.expand_dims(plane[:n_plane[0], :n_plane[1]], axis) \
             * line[:shape[axis]].reshape((-1,) + (1,) * (2 - axis))
    np.multiply(region, factor, out=region, casting="same_kind")
