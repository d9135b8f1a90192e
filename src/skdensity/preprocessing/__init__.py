"""
The :mod:`skdensity.preprocessing` module provides the shift-and-scale transformer
that maps samples and evaluation points onto the unit interval before fast
density derivative estimation.
"""

from ._data import UnitIntervalScaler

__all__ = ["UnitIntervalScaler"]
