import warnings
from typing import Union

import numpy as np
from numpy.typing import ArrayLike
from scipy.special import eval_hermitenorm, factorial
from sklearn.base import BaseEstimator
from sklearn.utils import Bunch
from tqdm import tqdm

from ..exceptions import ConfigurationError
from ..preprocessing import UnitIntervalScaler
from ..utils._hermite import (
    cluster_coefficients,
    expansion_polynomials,
    hermite_coefficients,
)
from ..utils._truncation import (
    SQRT2PI,
    cutoff_radius,
    scale_factor,
    scaled_tolerance,
    truncation_number,
)
from ..utils._validation import check_points
from ._space_partition import NearestCentreAssigner, cluster_centres


class GaussianDensityDerivative(BaseEstimator):
    """Estimate derivatives of a one-dimensional Gaussian kernel density.

    The r-th derivative of the kernel density estimate of a sample
    :math:`x_1, \\dots, x_N` with bandwidth :math:`h` is

    .. math::
        \\hat{p}^{(r)}(y) = \\frac{(-1)^r}{\\sqrt{2 \\pi} N h^{r+1}} \\sum_{i=1}^N
        He_r\\left(\\frac{y - x_i}{h}\\right)
        \\exp\\left(-\\frac{(y - x_i)^2}{2 h^2}\\right)

    where :math:`He_r` is the r-th probabilists' Hermite polynomial. Evaluating
    this sum directly at :math:`M` points costs :math:`O(MN)`.
    :meth:`estimate_approx` instead maps the data onto the unit interval, groups
    the sample into clusters of width at most :math:`h/2`, expands each kernel in a
    truncated Hermite series around its cluster centre and ignores clusters beyond
    a cutoff radius, which costs :math:`O(M + N)`. The truncation number and the
    cutoff radius are chosen such that the absolute error of the estimate is below
    ``error_bound``. :meth:`estimate_direct` evaluates the exact sum.

    See Raykar, Duraiswami and Zhao, `Fast computation of kernel estimators
    <https://doi.org/10.1198/jcgs.2010.09046>`_.

    .. note::
        Only the Gaussian kernel is supported.

    Parameters
    ----------
    bandwidth : float, default=None
        The bandwidth of the Gaussian kernel, in the units of the sample.
    deriv_order : int, default=None
        The order of the density derivative, zero for the density itself.
    error_bound : float, default=None
        The absolute error bound of :meth:`estimate_approx`, in :math:`(0, 1)`.
    max_terms : int, default=500
        The largest admissible number of series terms. If the error bound requires
        more terms, a :class:`~skdensity.exceptions.NumericalDivergenceError` is
        raised.
    chunk_size : int, default=1024
        The number of sample or evaluation points processed at once.
    verbose : bool, default=False
        Whether to print progress.

    Examples
    --------
    >>> import numpy as np
    >>> from skdensity.neighbors import GaussianDensityDerivative
    >>> rng = np.random.RandomState(0)
    >>> sample = rng.normal(size=1000)
    >>> eval_points = np.linspace(-3.0, 3.0, 7)
    >>> estimator = GaussianDensityDerivative(
    ...     bandwidth=0.3, deriv_order=2, error_bound=1e-6
    ... )
    >>> approx = estimator.estimate_approx(sample, eval_points)
    >>> direct = estimator.estimate_direct(sample, eval_points)
    >>> bool(np.max(np.abs(approx - direct)) < 1e-6)
    True

    The parameters of the expansion can be inspected

    >>> _, diagnostics = estimator.estimate_approx(
    ...     sample, eval_points, return_diagnostics=True
    ... )
    >>> diagnostics.n_terms > 0
    True
    >>> diagnostics.coef_b.shape == (diagnostics.n_clusters, diagnostics.n_terms, 3)
    True
    """

    def __init__(
        self,
        bandwidth: Union[float, None] = None,
        deriv_order: Union[int, None] = None,
        error_bound: Union[float, None] = None,
        max_terms: int = 500,
        chunk_size: int = 1024,
        verbose: bool = False,
    ) -> None:
        self.bandwidth = bandwidth
        self.deriv_order = deriv_order
        self.error_bound = error_bound
        self.max_terms = max_terms
        self.chunk_size = chunk_size
        self.verbose = verbose

    def estimate_approx(
        self,
        sample: ArrayLike,
        eval_points: ArrayLike,
        return_diagnostics: bool = False,
    ):
        """Estimate the density derivative through the truncated Hermite expansion.

        Parameters
        ----------
        sample : array-like of shape (n_samples,)
            The sample the density is estimated from.

        eval_points : array-like of shape (n_points,)
            The points at which the density derivative is estimated.

        return_diagnostics : bool, default=False
            Whether to return the intermediate quantities of the expansion.

        Returns
        -------
        deriv : numpy.ndarray of shape (n_points,)
            The estimated density derivative at each evaluation point.

        diagnostics : sklearn.utils.Bunch
            Only returned if ``return_diagnostics=True``. Dictionary-like object
            with the following attributes, all in normalized coordinates:

            shift, scale : float --
                The parameters mapping the data onto the unit interval.
            bandwidth : float --
                The normalized bandwidth.
            q, eps_prime : float --
                The normalization constant and the per-sample tolerance.
            interaction_radius, cutoff_radius : float --
                The radii bounding the expansion.
            n_terms, n_clusters : int --
                The truncation number and the number of clusters.
            centres, labels : numpy.ndarray --
                The cluster centres and the cluster of each sample point.
            coef_a, coef_b : numpy.ndarray --
                The data independent and per-cluster expansion coefficients.
        """
        self._check_configured()
        sample = check_points(sample, name="sample", copy=True)
        eval_points = check_points(eval_points, name="eval_points", copy=True)
        n_samples = len(sample)
        deriv_order = int(self.deriv_order)

        scaler = UnitIntervalScaler(copy=False).fit(sample, eval_points)
        sample = scaler.transform(sample)
        eval_points = scaler.transform(eval_points)
        bandwidth = self.bandwidth * scaler.scale_

        q = scale_factor(n_samples)
        eps_prime = scaled_tolerance(
            n_samples, self.error_bound, q, self.bandwidth, deriv_order
        )
        centres = cluster_centres(bandwidth)
        interaction_radius = 1.0 / len(centres)
        cutoff = cutoff_radius(bandwidth, eps_prime, interaction_radius, deriv_order)
        n_terms = truncation_number(
            deriv_order,
            bandwidth,
            interaction_radius,
            cutoff,
            eps_prime,
            max_terms=self.max_terms,
        )
        if n_terms == 0:
            warnings.warn(
                f"The error bound {self.error_bound} exceeds the contribution of "
                "every single kernel, the estimate is identically zero.",
                stacklevel=2,
            )

        assigner = NearestCentreAssigner().fit(centres)
        labels = assigner.predict(sample)
        # rounding error of the largest cluster sum of dimensionless kernels
        precision = (
            np.finfo(float).eps
            * np.sqrt(factorial(deriv_order))
            * np.max(assigner.cluster_npoints_)
        )
        if eps_prime < precision:
            warnings.warn(
                f"The error bound {self.error_bound} is below the floating point "
                f"precision at bandwidth {self.bandwidth} and derivative order "
                f"{deriv_order}, the estimate may be dominated by rounding errors.",
                stacklevel=2,
            )

        coef_a = hermite_coefficients(deriv_order)
        coef_b = cluster_coefficients(
            sample,
            centres,
            labels,
            bandwidth,
            n_terms,
            deriv_order,
            chunk_size=self.chunk_size,
        )
        poly = expansion_polynomials(coef_a, coef_b, deriv_order)

        deriv = self._evaluate_expansion(eval_points, centres, poly, bandwidth, cutoff)
        deriv *= (-1) ** deriv_order * q / bandwidth ** (deriv_order + 1)
        # back to the original coordinates
        deriv *= scaler.scale_ ** (deriv_order + 1)

        if not return_diagnostics:
            return deriv

        diagnostics = Bunch(
            shift=scaler.shift_,
            scale=scaler.scale_,
            bandwidth=bandwidth,
            q=q,
            eps_prime=eps_prime,
            interaction_radius=interaction_radius,
            cutoff_radius=cutoff,
            n_terms=n_terms,
            n_clusters=len(centres),
            centres=centres,
            labels=labels,
            coef_a=coef_a,
            coef_b=coef_b,
        )
        return deriv, diagnostics

    def estimate_direct(self, sample: ArrayLike, eval_points: ArrayLike) -> np.ndarray:
        """Estimate the density derivative by direct summation over all pairs.

        Parameters
        ----------
        sample : array-like of shape (n_samples,)
            The sample the density is estimated from.

        eval_points : array-like of shape (n_points,)
            The points at which the density derivative is estimated.

        Returns
        -------
        deriv : numpy.ndarray of shape (n_points,)
            The density derivative at each evaluation point.
        """
        self._check_configured()
        sample = check_points(sample, name="sample")
        eval_points = check_points(eval_points, name="eval_points")
        n_samples = len(sample)
        deriv_order = int(self.deriv_order)

        deriv = np.zeros(len(eval_points))
        # bound the size of the pairwise distance blocks
        chunk_size = max(1, min(self.chunk_size, 2**22 // n_samples))
        for start in tqdm(
            range(0, len(eval_points), chunk_size),
            desc="Summing kernel derivatives",
            disable=not self.verbose,
        ):
            u = (
                eval_points[start : start + chunk_size, np.newaxis]
                - sample[np.newaxis, :]
            ) / self.bandwidth
            deriv[start : start + chunk_size] = np.sum(
                eval_hermitenorm(deriv_order, u) * np.exp(-0.5 * u**2), axis=1
            )

        deriv *= (-1) ** deriv_order / (
            n_samples * self.bandwidth ** (deriv_order + 1) * SQRT2PI
        )

        return deriv

    def _check_configured(self):
        missing = [
            name
            for name in ("bandwidth", "deriv_order", "error_bound")
            if getattr(self, name) is None
        ]
        if missing:
            raise ConfigurationError(
                f"{type(self).__name__} is not configured: {', '.join(missing)} "
                "must be set before estimating."
            )

    def _evaluate_expansion(self, eval_points, centres, poly, bandwidth, cutoff):
        """Sum the expansions of all clusters within the cutoff radius of each
        evaluation point."""
        deriv = np.zeros(len(eval_points))
        for start in tqdm(
            range(0, len(eval_points), self.chunk_size),
            desc="Evaluating cluster expansions",
            disable=not self.verbose,
        ):
            y = eval_points[start : start + self.chunk_size]

            # centres are sorted, so the clusters in range are contiguous
            lower = np.searchsorted(centres, y - cutoff, side="left")
            upper = np.searchsorted(centres, y + cutoff, side="right")
            counts = upper - lower
            point = np.repeat(np.arange(len(y)), counts)
            cluster = np.repeat(lower, counts) + (
                np.arange(np.sum(counts)) - np.repeat(np.cumsum(counts) - counts, counts)
            )

            d = (y[point] - centres[cluster]) / bandwidth
            value = np.zeros(len(d))
            for m in range(poly.shape[1] - 1, -1, -1):
                value = value * d + poly[cluster, m]

            deriv[start : start + len(y)] = np.bincount(
                point, weights=np.exp(-0.5 * d**2) * value, minlength=len(y)
            )

        return deriv
