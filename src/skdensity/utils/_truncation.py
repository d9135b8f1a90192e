"""Error bounds controlling the truncated Hermite expansion of the fast Gauss
transform. See Raykar, Duraiswami and Zhao, `Fast computation of kernel
estimators <https://doi.org/10.1198/jcgs.2010.09046>`_, for the derivation."""

import numpy as np
from scipy.special import gammaln

from ..exceptions import NumericalDivergenceError


SQRT2PI = np.sqrt(2.0 * np.pi)


def scale_factor(n_samples):
    """
    Normalization constant of a Gaussian kernel density estimate.

    Parameters
    ----------
    n_samples : int
        The number of sample points.

    Returns
    -------
    float
        :math:`q = 1 / (N \\sqrt{2 \\pi})`.

    Examples
    --------
    >>> from skdensity.utils import scale_factor
    >>> print(round(scale_factor(10), 6))
    0.039894
    """
    return 1.0 / (n_samples * SQRT2PI)


def scaled_tolerance(n_samples, error_bound, q, bandwidth, deriv_order):
    """
    Per-sample tolerance guaranteeing an absolute error bound of the estimate.

    The r-th density derivative is :math:`(-1)^r q h^{-r-1}` times a sum of
    :math:`N` dimensionless kernel terms. If the error of every term is below

    .. math::
        \\epsilon' = \\frac{\\epsilon h^{r+1}}{N q}

    the error of the estimate is below :math:`\\epsilon`.

    Parameters
    ----------
    n_samples : int
        The number of sample points.
    error_bound : float
        The absolute error bound :math:`\\epsilon` of the density derivative.
    q : float
        The normalization constant, see :func:`scale_factor`.
    bandwidth : float
        The bandwidth in the units of the requested estimate.
    deriv_order : int
        The derivative order.

    Returns
    -------
    float
        The per-sample tolerance :math:`\\epsilon'`.
    """
    return error_bound * bandwidth ** (deriv_order + 1) / (n_samples * q)


def cutoff_radius(bandwidth, eps_prime, interaction_radius, deriv_order):
    """
    Distance from a cluster centre beyond which its contribution is dropped.

    A single Hermite-weighted Gaussian is bounded by
    :math:`\\sqrt{r!} \\exp(-d^2 / 4 h^2)`, which falls below :math:`\\epsilon'` at
    :math:`d = 2 h \\sqrt{\\ln(\\sqrt{r!} / \\epsilon')}`. The cluster interaction
    radius is added to account for the spread of the points around the centre.
    Distances in normalized coordinates never exceed one.

    Parameters
    ----------
    bandwidth : float
        The bandwidth in normalized coordinates.
    eps_prime : float
        The per-sample tolerance, see :func:`scaled_tolerance`.
    interaction_radius : float
        The cluster interaction radius.
    deriv_order : int
        The derivative order.

    Returns
    -------
    float
        The cutoff radius :math:`r_c`.

    Examples
    --------
    >>> from skdensity.utils import cutoff_radius
    >>> print(round(cutoff_radius(0.01, 1e-6, 0.005, 2), 6))
    0.080265
    """
    log_ratio = 0.5 * gammaln(deriv_order + 1) - np.log(eps_prime)
    radius = interaction_radius + 2.0 * bandwidth * np.sqrt(max(log_ratio, 0.0))

    return float(min(radius, 1.0))


def truncation_error(n_terms, deriv_order, bandwidth, interaction_radius, cutoff):
    """
    Bound on the error of truncating the Hermite expansion after ``n_terms`` terms.

    .. math::
        E(p) = \\frac{\\sqrt{r!}}{p!} \\left(\\frac{r_i b}{h^2}\\right)^p
        \\exp\\left(-\\frac{(r_i - b)^2}{h^2}\\right), \\quad
        b = \\min\\left(r_c, \\frac{r_i + \\sqrt{r_i^2 + 8 p h^2}}{2}\\right)

    The bound is evaluated in log space.

    Parameters
    ----------
    n_terms : int
        The truncation number :math:`p`.
    deriv_order : int
        The derivative order :math:`r`.
    bandwidth : float
        The bandwidth :math:`h` in normalized coordinates.
    interaction_radius : float
        The cluster interaction radius :math:`r_i`.
    cutoff : float
        The cutoff radius :math:`r_c`.

    Returns
    -------
    float
        The error bound :math:`E(p)`.
    """
    h2 = bandwidth**2
    b = min(
        cutoff,
        0.5 * (interaction_radius + np.sqrt(interaction_radius**2 + 8 * n_terms * h2)),
    )
    log_error = 0.5 * gammaln(deriv_order + 1) - gammaln(n_terms + 1)
    if n_terms > 0:
        log_error += n_terms * np.log(interaction_radius * b / h2)
    log_error -= (interaction_radius - b) ** 2 / h2

    return float(np.exp(log_error))


def truncation_number(
    deriv_order, bandwidth, interaction_radius, cutoff, eps_prime, max_terms=500
):
    """
    Smallest number of series terms satisfying the truncation error bound.

    Parameters
    ----------
    deriv_order : int
        The derivative order.
    bandwidth : float
        The bandwidth in normalized coordinates.
    interaction_radius : float
        The cluster interaction radius.
    cutoff : float
        The cutoff radius.
    eps_prime : float
        The per-sample tolerance, see :func:`scaled_tolerance`.
    max_terms : int, default=500
        The largest admissible truncation number.

    Returns
    -------
    int
        The smallest :math:`p \\geq 0` with :math:`E(p) \\leq \\epsilon'`, see
        :func:`truncation_error`.

    Raises
    ------
    NumericalDivergenceError
        If no truncation number up to ``max_terms`` satisfies the bound.

    Examples
    --------
    >>> from skdensity.utils import truncation_number
    >>> truncation_number(2, 0.1, 0.05, 0.5, 1e-6)
    7
    """
    for n_terms in range(max_terms + 1):
        error = truncation_error(
            n_terms, deriv_order, bandwidth, interaction_radius, cutoff
        )
        if error <= eps_prime:
            return n_terms

    raise NumericalDivergenceError(
        f"No truncation number up to max_terms={max_terms} satisfies the error "
        f"bound {eps_prime:.3e} (bandwidth={bandwidth:.3e}, "
        f"deriv_order={deriv_order}); increase max_terms or the error bound."
    )
