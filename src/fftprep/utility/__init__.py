"""
Array utilities
===============

This module provides the element-wise padding, multiplication and
Wiener filtering routines used alongside trend removal when preparing
arrays for fast Fourier transforms.
"""

from . import multiply, pad, wiener

__all__ = ["multiply", "pad", "wiener"]
