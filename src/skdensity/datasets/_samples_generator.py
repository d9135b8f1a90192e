import numpy as np
from sklearn.utils import check_random_state


def make_gaussian_mixture(
    n_samples=100,
    means=(-1.0, 0.0, 5.0),
    scales=(0.5, 0.1, 1.5),
    random_state=None,
):
    """Generate a one-dimensional sample from a mixture of Gaussians.

    The default mixture combines a broad, a narrow and a distant component, which
    requires both small and large bandwidths to resolve.

    Parameters
    ----------
    n_samples : int, default=100
        The number of points drawn from each component.
    means : array-like of shape (n_components,), default=(-1.0, 0.0, 5.0)
        The mean of each component.
    scales : array-like of shape (n_components,), default=(0.5, 0.1, 1.5)
        The standard deviation of each component.
    random_state : int, RandomState instance or None, default=None
        Determines random number generation. Pass an int for reproducible results
        across multiple function calls.

    Returns
    -------
    X : numpy.ndarray of shape (n_samples * n_components,)
        The sample, with one point of each component after another.

    Examples
    --------
    >>> from skdensity.datasets import make_gaussian_mixture
    >>> X = make_gaussian_mixture(10, random_state=0)
    >>> X.shape
    (30,)
    """
    means = np.asarray(means, dtype=float)
    scales = np.asarray(scales, dtype=float)
    if means.ndim != 1 or means.shape != scales.shape:
        raise ValueError("means and scales must be one-dimensional of equal length.")

    rng = check_random_state(random_state)
    X = rng.normal(loc=means, scale=scales, size=(n_samples, len(means)))

    return X.ravel()
