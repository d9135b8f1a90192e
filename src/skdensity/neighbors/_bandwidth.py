import numpy as np
from scipy.optimize import brentq
from sklearn.base import BaseEstimator

from ..exceptions import DegenerateInputError, NumericalDivergenceError
from ..utils._truncation import SQRT2PI
from ..utils._validation import check_points
from ._density_derivative import GaussianDensityDerivative


SQRTPI = np.sqrt(np.pi)


class AMISEOptimalBandwidth(BaseEstimator):
    """Select the bandwidth of a Gaussian kernel density estimate minimizing the
    asymptotic mean integrated squared error (AMISE).

    The AMISE-optimal bandwidth of a Gaussian kernel is

    .. math::
        h = \\left(\\frac{1}{2 \\sqrt{\\pi} \\Phi_4 N}\\right)^{1/5}

    where :math:`\\Phi_r = \\int p^{(r)}(x) p(x) dx` is a density functional which
    itself has to be estimated. Following the "solve-the-equation" plug-in rule of
    Sheather and Jones, :math:`\\Phi_4` is estimated with a pilot bandwidth
    :math:`\\gamma(h)` depending on :math:`h`, and the equation is solved for
    :math:`h`. The pilot bandwidths are obtained from the normal reference rule
    for :math:`\\Phi_6` and :math:`\\Phi_8`. All functionals are estimated with
    :class:`GaussianDensityDerivative`, so the selection runs in linear time.

    See Raykar and Duraiswami, `Fast optimal bandwidth selection for kernel
    density estimation <https://doi.org/10.1137/1.9781611972764.53>`_.

    Parameters
    ----------
    error_bound : float, default=1e-4
        The absolute error bound of the functional estimates, for data scaled to
        unit variance.
    max_terms : int, default=500
        The largest admissible number of series terms of the fast estimates.
    xtol : float, default=1e-6
        The absolute tolerance of the root finding, for data scaled to unit
        variance.
    max_bracket_iter : int, default=50
        The largest number of halvings or doublings when searching an interval
        containing the optimal bandwidth.

    Attributes
    ----------
    bandwidth_ : float
        The AMISE-optimal bandwidth, in the units of the data.
    sigma_ : float
        The standard deviation of the data.
    n_samples_ : int
        The number of sample points.
    phi4_ : float
        The estimate of :math:`\\Phi_4` at the first pilot bandwidth.
    phi6_ : float
        The estimate of :math:`\\Phi_6` at the second pilot bandwidth.

    Examples
    --------
    >>> import numpy as np
    >>> from skdensity.neighbors import AMISEOptimalBandwidth
    >>> rng = np.random.RandomState(0)
    >>> sample = rng.normal(scale=2.0, size=5000)
    >>> selector = AMISEOptimalBandwidth().fit(sample)
    >>> normal_reference = 1.06 * selector.sigma_ * len(sample) ** (-1 / 5)
    >>> bool(abs(selector.bandwidth_ / normal_reference - 1.0) < 0.25)
    True
    """

    def __init__(self, error_bound=1e-4, max_terms=500, xtol=1e-6, max_bracket_iter=50):
        self.error_bound = error_bound
        self.max_terms = max_terms
        self.xtol = xtol
        self.max_bracket_iter = max_bracket_iter

    def fit(self, X, y=None):
        """Compute the AMISE-optimal bandwidth of the sample.

        Parameters
        ----------
        X : array-like of shape (n_samples,)
            The sample.

        y : None
            Ignored. This parameter exists only for compatibility with
            :class:`~sklearn.pipeline.Pipeline`.

        Returns
        -------
        self : object
            Returns the instance itself.
        """
        X = check_points(X, name="X")
        n_samples = len(X)
        if n_samples < 2:
            raise DegenerateInputError(
                "At least two sample points are required to select a bandwidth."
            )
        sigma = float(np.std(X, ddof=1))
        if not sigma > 0.0:
            raise DegenerateInputError("Cannot select a bandwidth for zero variance.")
        X = X / sigma

        # normal reference functionals for unit variance
        phi6_reference = -15.0 / (16.0 * SQRTPI)
        phi8_reference = 105.0 / (32.0 * SQRTPI)
        g1 = (-6.0 / (SQRT2PI * phi6_reference * n_samples)) ** (1.0 / 7.0)
        g2 = (30.0 / (SQRT2PI * phi8_reference * n_samples)) ** (1.0 / 9.0)

        self.phi4_ = self._functional(X, g1, 4)
        self.phi6_ = self._functional(X, g2, 6)
        if not (self.phi4_ > 0.0 and self.phi6_ < 0.0):
            raise NumericalDivergenceError(
                f"Invalid density functional estimates phi4={self.phi4_:.3e} and "
                f"phi6={self.phi6_:.3e}; decrease the error bound."
            )
        pilot_factor = (-6.0 * np.sqrt(2.0) * self.phi4_ / self.phi6_) ** (1.0 / 7.0)

        def amise_equation(h):
            phi4 = self._functional(X, pilot_factor * h ** (5.0 / 7.0), 4)
            if not phi4 > 0.0:
                raise NumericalDivergenceError(
                    f"Non-positive estimate phi4={phi4:.3e} at bandwidth {h:.3e}."
                )
            return h - (1.0 / (2.0 * SQRTPI * phi4 * n_samples)) ** (1.0 / 5.0)

        normal_reference = (4.0 / (3.0 * n_samples)) ** (1.0 / 5.0)
        lower, upper = self._bracket(amise_equation, normal_reference)
        h = brentq(amise_equation, lower, upper, xtol=self.xtol)

        self.bandwidth_ = h * sigma
        self.sigma_ = sigma
        self.n_samples_ = n_samples

        return self

    def _functional(self, X, bandwidth, deriv_order):
        """Estimate the density functional of the given order as the mean of the
        density derivative over the sample."""
        estimator = GaussianDensityDerivative(
            bandwidth=bandwidth,
            deriv_order=deriv_order,
            error_bound=self.error_bound,
            max_terms=self.max_terms,
        )
        return float(np.mean(estimator.estimate_approx(X, X)))

    def _bracket(self, fun, guess):
        """Find an interval around ``guess`` on which ``fun`` changes sign."""
        lower, upper = 0.5 * guess, 2.0 * guess
        for _ in range(self.max_bracket_iter):
            if fun(lower) < 0.0:
                break
            lower *= 0.5
        else:
            raise NumericalDivergenceError("No lower bound for the bandwidth found.")
        for _ in range(self.max_bracket_iter):
            if fun(upper) > 0.0:
                break
            upper *= 2.0
        else:
            raise NumericalDivergenceError("No upper bound for the bandwidth found.")

        return lower, upper
