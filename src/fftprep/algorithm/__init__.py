"""
Algorithms
==========

This module is a collection of algorithms used in other FFTPrep
(sub)modules.
"""

from . import accelerated, index, size, utility

__all__ = ["accelerated", "index", "size", "utility"]
