"""
Wiener filtering
================

This module turns a transfer function stored in an array into its
simplified Wiener filter in place.
"""

from collections.abc import Sequence

import numpy as np

from ..algorithm.utility import check_shape, check_writeable, get_region

def wiener(
        inout: np.ndarray, k: float, scale: float, *,
        shape: Sequence[int] = None) -> None:

    r"""
    Replaces an array with its simplified Wiener filter in place,

    .. math::

       A\leftarrow\frac{sA^*}{AA^*+k},

    where :math:`s` and :math:`k` are constants. For real-valued arrays,
    this reduces to :math:`sA/(A^2+k)`.

    Parameters
    ----------
    inout : `numpy.ndarray`
        Real- or complex-valued array with one to four dimensions
        holding :math:`A`. Modified in place.

    k : `float`
        Regularization constant added to the power spectrum. Elements
        where :math:`AA^*+k` vanishes become :code:`nan` or
        :code:`inf`.

    scale : `float`
        Overall scale factor :math:`s`.

    shape : `tuple`, keyword-only, optional
        Extents of the working region in the leading corner of `inout`,
        in NumPy axis order. If not specified, all of `inout` is used.
    """

    check_writeable(inout, "inout")
    shape = check_shape(inout, shape, name="inout")
    if np.iscomplexobj(k) or np.iscomplexobj(scale):
        raise TypeError("'k' and 'scale' must be real-valued.")
    region = get_region(inout, shape)
    a = region.astype(np.complex128 if np.iscomplexobj(region)
                      else np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        filtered = scale * np.conj(a) / ((a * np.conj(a)).real + k)
    np.copyto(region, filtered, casting="same_kind")
