"""
The :mod:`skdensity.utils` module includes the error bounds, expansion coefficients
and helpers used by the density derivative estimators.
"""

from ._grid import evaluation_grid
from ._hermite import (
    cluster_coefficients,
    expansion_polynomials,
    hermite_coefficients,
)
from ._truncation import (
    cutoff_radius,
    scale_factor,
    scaled_tolerance,
    truncation_error,
    truncation_number,
)
from ._validation import check_points

__all__ = [
    "check_points",
    "cluster_coefficients",
    "cutoff_radius",
    "evaluation_grid",
    "expansion_polynomials",
    "hermite_coefficients",
    "scale_factor",
    "scaled_tolerance",
    "truncation_error",
    "truncation_number",
]
