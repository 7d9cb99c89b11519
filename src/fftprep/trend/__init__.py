"""
Trend removal
=============

This module provides polynomial and average-slope trend removal for
one- to four-dimensional real and complex arrays, typically applied
before the arrays are Fourier transformed.
"""

from . import polynomial, slope

__all__ = ["polynomial", "slope"]
