import numpy as np

from ._validation import check_points


def evaluation_grid(X, bandwidth, max_eval_point_dist, eval_range_cutoff=5.0):
    """
    Equally spaced evaluation points covering a sample and its kernel tails.

    The grid extends ``eval_range_cutoff`` bandwidths beyond the smallest and the
    largest sample point, and the distance between neighbouring points does not
    exceed ``max_eval_point_dist``.

    Parameters
    ----------
    X : array-like of shape (n_samples,)
        The sample.
    bandwidth : float
        The kernel bandwidth.
    max_eval_point_dist : float
        The largest admissible distance between neighbouring evaluation points.
    eval_range_cutoff : float, default=5.0
        The number of bandwidths by which the grid extends beyond the sample.

    Returns
    -------
    numpy.ndarray
        The sorted evaluation points.

    Examples
    --------
    >>> from skdensity.utils import evaluation_grid
    >>> evaluation_grid([0.0, 1.0], 0.25, 0.5, eval_range_cutoff=2.0)
    array([-0.5,  0. ,  0.5,  1. ,  1.5])
    """
    if not max_eval_point_dist > 0.0:
        raise ValueError("max_eval_point_dist must be positive.")
    X = check_points(X, name="X")

    lo = np.min(X) - eval_range_cutoff * bandwidth
    hi = np.max(X) + eval_range_cutoff * bandwidth
    n_points = int(np.ceil((hi - lo) / max_eval_point_dist)) + 1

    return np.linspace(lo, hi, n_points)
