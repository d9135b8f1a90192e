"""
This module implements the fast estimation of derivatives of Gaussian kernel
density estimates.

The direct evaluation of the r-th derivative of a kernel density estimate of `N`
sample points at `M` evaluation points costs `O(MN)`, which is prohibitive for the
large samples collected along molecular dynamics trajectories. Here we offer an
implementation of the fast Gauss transform for univariate density derivatives,
which partitions the (normalized) sample space into clusters, expands the kernels
in truncated Hermite series around the cluster centres, and evaluates the estimate
to a user specified absolute error in `O(M + N)`.

The following classes and functions are available:

* :class:`GaussianDensityDerivative` estimates the r-th derivative of a Gaussian
  kernel density estimate, either by the fast expansion or by direct summation.
* :class:`AMISEOptimalBandwidth` selects the AMISE-optimal bandwidth through the
  fast estimation of density functionals.
* :func:`cluster_centres` and :class:`NearestCentreAssigner` partition the unit
  interval.
"""

from ._bandwidth import AMISEOptimalBandwidth
from ._density_derivative import GaussianDensityDerivative
from ._space_partition import NearestCentreAssigner, cluster_centres

__all__ = [
    "AMISEOptimalBandwidth",
    "GaussianDensityDerivative",
    "NearestCentreAssigner",
    "cluster_centres",
]
