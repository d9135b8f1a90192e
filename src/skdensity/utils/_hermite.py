"""Coefficients of the truncated Hermite expansion of Gaussian kernel derivatives.

Writing :math:`d = (y - c)/h` and :math:`\\delta = (x - c)/h` for a query point
:math:`y` and a sample point :math:`x` close to a cluster centre :math:`c`, the
derivative kernel factorizes as

.. math::
    He_r(d - \\delta) e^{-(d - \\delta)^2 / 2} \\approx
    \\sum_{s, t} a_{st} \\sum_{j < p} e^{-d^2 / 2} d^{j + r - 2s - t}
    \\frac{e^{-\\delta^2 / 2} \\delta^{j + t}}{j!}

which separates the data independent coefficients :math:`a_{st}` from the sums over
the sample points of each cluster.
"""

import numpy as np
from scipy.special import factorial

from ..exceptions import NonFiniteCoefficientError


def hermite_coefficients(deriv_order):
    """
    Data independent coefficients of the expanded Hermite polynomial.

    .. math::
        a_{st} = \\frac{(-1)^{s + t} r!}{2^s s! t! (r - 2s - t)!}, \\quad
        0 \\leq s \\leq \\lfloor r/2 \\rfloor, \\quad 0 \\leq t \\leq r - 2s

    Row zero holds the signed binomial coefficients and each following row is
    obtained from the previous one by the ratio
    :math:`a_{st} / a_{s-1,t} = -(r - 2s - t + 2)(r - 2s - t + 1) / 2s`.

    Parameters
    ----------
    deriv_order : int
        The derivative order :math:`r`.

    Returns
    -------
    numpy.ndarray
        The triangular table flattened row by row, of length
        :math:`\\sum_s (r - 2s + 1)`.

    Examples
    --------
    >>> from skdensity.utils import hermite_coefficients
    >>> hermite_coefficients(2)
    array([ 1., -2.,  1., -1.])
    >>> hermite_coefficients(4)
    array([ 1., -4.,  6., -4.,  1., -6., 12., -6.,  3.])
    """
    n_rows = deriv_order // 2 + 1
    table = np.zeros((n_rows, deriv_order + 1))

    table[0, 0] = 1.0
    for t in range(1, deriv_order + 1):
        table[0, t] = -table[0, t - 1] * (deriv_order - t + 1) / t

    for s in range(1, n_rows):
        t = np.arange(deriv_order - 2 * s + 1)
        ratio = -(deriv_order - 2 * s - t + 2) * (deriv_order - 2 * s - t + 1) / (2 * s)
        table[s, : len(t)] = table[s - 1, : len(t)] * ratio

    return np.concatenate(
        [table[s, : deriv_order - 2 * s + 1] for s in range(n_rows)]
    )


def cluster_coefficients(
    X, centres, labels, bandwidth, n_terms, deriv_order, chunk_size=None
):
    """
    Data dependent expansion coefficients of each cluster.

    .. math::
        B_{kjt} = \\frac{1}{j!} \\sum_{x \\in k} e^{-\\delta^2 / 2} \\delta^{j + t},
        \\quad \\delta = \\frac{x - c_k}{h}

    Every point contributes to the cluster it is assigned to only, so the cost is
    linear in the number of points.

    Parameters
    ----------
    X : numpy.ndarray of shape (n_samples,)
        The sample points in normalized coordinates.
    centres : numpy.ndarray of shape (n_clusters,)
        The cluster centres.
    labels : numpy.ndarray of shape (n_samples,)
        The index of the cluster centre of each sample point.
    bandwidth : float
        The bandwidth in normalized coordinates.
    n_terms : int
        The truncation number :math:`p`.
    deriv_order : int
        The derivative order :math:`r`.
    chunk_size : int, default=None
        The number of sample points accumulated at once. All points are
        accumulated at once if None.

    Returns
    -------
    numpy.ndarray of shape (n_clusters, n_terms, deriv_order + 1)
        The coefficients :math:`B_{kjt}`.

    Raises
    ------
    NonFiniteCoefficientError
        If any coefficient is NaN or infinite.
    """
    n_powers = n_terms + deriv_order
    if chunk_size is None:
        chunk_size = max(len(X), 1)

    moments = np.zeros((len(centres), n_powers))
    for start in range(0, len(X), chunk_size):
        chunk = slice(start, start + chunk_size)
        delta = (X[chunk] - centres[labels[chunk]]) / bandwidth
        weighted_powers = np.exp(-0.5 * delta**2)[:, np.newaxis] * (
            delta[:, np.newaxis] ** np.arange(n_powers)
        )
        np.add.at(moments, labels[chunk], weighted_powers)

    j = np.arange(n_terms)
    t = np.arange(deriv_order + 1)
    coef_b = (
        moments[:, j[:, np.newaxis] + t[np.newaxis, :]]
        / factorial(j)[np.newaxis, :, np.newaxis]
    )

    if not np.all(np.isfinite(coef_b)):
        raise NonFiniteCoefficientError(
            f"Non-finite expansion coefficients for bandwidth={bandwidth:.3e} "
            f"and {n_terms} series terms."
        )

    return coef_b


def expansion_polynomials(coef_a, coef_b, deriv_order):
    """
    Combine both coefficient tables into one polynomial per cluster.

    .. math::
        C_{km} = \\sum_{j + r - 2s - t = m} a_{st} B_{kjt}

    such that the contribution of cluster :math:`k` to a query point at scaled
    distance :math:`d` is :math:`e^{-d^2/2} \\sum_m C_{km} d^m`.

    Parameters
    ----------
    coef_a : numpy.ndarray
        The flattened table returned by :func:`hermite_coefficients`.
    coef_b : numpy.ndarray of shape (n_clusters, n_terms, deriv_order + 1)
        The table returned by :func:`cluster_coefficients`.
    deriv_order : int
        The derivative order :math:`r`.

    Returns
    -------
    numpy.ndarray of shape (n_clusters, n_terms + deriv_order)
        The polynomial coefficients :math:`C_{km}` in increasing order of powers.
    """
    n_clusters, n_terms, _ = coef_b.shape
    poly = np.zeros((n_clusters, n_terms + deriv_order))

    idx = 0
    for s in range(deriv_order // 2 + 1):
        for t in range(deriv_order - 2 * s + 1):
            offset = deriv_order - 2 * s - t
            poly[:, offset : offset + n_terms] += coef_a[idx] * coef_b[:, :, t]
            idx += 1

    return poly
