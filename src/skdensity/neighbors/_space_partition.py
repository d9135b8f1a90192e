from typing import Union

import numpy as np
from numpy.typing import ArrayLike

from ..utils._validation import check_points


def cluster_centres(bandwidth: float) -> np.ndarray:
    """Place uniformly spaced cluster centres over the unit interval.

    The unit interval is divided into :math:`K = \\lceil 2 / h \\rceil` intervals of
    equal length :math:`1/K \\leq h/2` and a centre is placed in the middle of each
    interval, so that every point of :math:`[0, 1]` lies within half a spacing of
    a centre.

    Parameters
    ----------
    bandwidth : float
        The bandwidth :math:`h` of the Gaussian kernel in normalized coordinates.

    Returns
    -------
    numpy.ndarray of shape (n_clusters,)
        The sorted cluster centres.

    Examples
    --------
    >>> from skdensity.neighbors import cluster_centres
    >>> cluster_centres(0.5)
    array([0.125, 0.375, 0.625, 0.875])
    >>> cluster_centres(10.0)
    array([0.5])
    """
    n_clusters = int(np.ceil(2.0 / bandwidth))
    spacing = 1.0 / n_clusters

    return spacing * (np.arange(n_clusters) + 0.5)


class NearestCentreAssigner:
    """Assign points to their nearest cluster centre. This is an auxiliary class.

    Ties between two equally distant centres are broken in favour of the centre
    with the lower index, so that the assignment is identical to a brute-force
    ``argmin`` over all centres.

    Attributes
    ----------
    centres : numpy.ndarray
        An array of sorted cluster centres.
    cluster_npoints_ : numpy.ndarray
        An array of number of points assigned to each centre.
    labels_ : numpy.ndarray
        An array of centre indices for each point.

    Examples
    --------
    >>> import numpy as np
    >>> from skdensity.neighbors import NearestCentreAssigner
    >>> assigner = NearestCentreAssigner().fit(np.array([0.25, 0.75]))
    >>> assigner.predict([0.0, 0.5, 0.6, 1.0])
    array([0, 0, 1, 1])
    >>> assigner.cluster_npoints_
    array([2, 2])
    """

    def __init__(self) -> None:
        self.centres = None
        self.cluster_npoints_ = None
        self.labels_ = None

    def fit(self, centres: ArrayLike, y: Union[np.ndarray, None] = None):
        """Store the cluster centres.

        Parameters
        ----------
            centres : numpy.ndarray
                An array of strictly increasing centre positions.
            y : numpy.ndarray, optional, default=None
                Ignored.
        """
        centres = check_points(centres, name="centres")
        if np.any(np.diff(centres) <= 0):
            raise ValueError("Cluster centres must be strictly increasing.")
        self.centres = centres

        return self

    def predict(
        self, X: ArrayLike, y: Union[np.ndarray, None] = None
    ) -> np.ndarray:
        """Predict the nearest centre of each point.

        Parameters
        ----------
        X : numpy.ndarray
            Points to assign to the cluster centres.
        y : numpy.ndarray, optional, default=None
            Ignored.

        Returns
        -------
        numpy.ndarray
            Array of centre indices.
        """
        X = check_points(X, name="X")
        n_clusters = len(self.centres)

        # the nearest centre is one of the two centres bracketing each point
        upper = np.searchsorted(self.centres, X)
        candidates = np.clip(np.stack([upper - 1, upper]), 0, n_clusters - 1)
        dist = np.abs(X - self.centres[candidates])
        self.labels_ = candidates[np.argmin(dist, axis=0), np.arange(len(X))]
        self.cluster_npoints_ = np.bincount(self.labels_, minlength=n_clusters)

        return self.labels_
