import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from ..utils._validation import check_points


class UnitIntervalScaler(TransformerMixin, BaseEstimator):
    """Shift and scale one-dimensional data onto the unit interval.

    The shift and the scaling factor are computed jointly from one or two sets of
    points (typically a sample and a set of evaluation points), such that

        z = (x + shift) * scale

    maps the union of both ranges onto :math:`[0, 1]`. The parameters are stored
    for later use on other data through :py:meth:`transform` and can be undone
    through :py:meth:`inverse_transform`.

    If all points coincide, i.e. the range is zero within the tolerances, no
    scaling is applied and the shift places the single value at ``0.5``.

    Parameters
    ----------
    rtol: float, default=numpy.finfo(float).eps
        The relative tolerance: the range is considered zero when it is less than
        max(abs(min), abs(max)) * rtol + atol.

    atol: float, default=numpy.finfo(float).eps
        The absolute tolerance: the range is considered zero when it is less than
        max(abs(min), abs(max)) * rtol + atol.

    copy : bool, default=True
        Copy the input X or transform it in place.

    Attributes
    ----------
    n_samples_in_: int
        Number of points the scaler was fitted on.

    shift_ : float
        The shift added to each value before scaling.

    scale_ : float
        The scaling factor, ``1 / (max - min)``, or one for a zero range.

    data_range_ : float
        The range ``max - min`` of the fitted points, or one for a zero range.

    Examples
    --------
    >>> import numpy as np
    >>> from skdensity.preprocessing import UnitIntervalScaler
    >>> sample = np.array([-1.0, 0.5, 2.0])
    >>> eval_points = np.array([0.0, 3.0])
    >>> scaler = UnitIntervalScaler().fit(sample, eval_points)
    >>> scaler.shift_, scaler.scale_
    (1.0, 0.25)
    >>> scaler.transform(sample)
    array([0.   , 0.375, 0.75 ])
    >>> scaler.inverse_transform(scaler.transform(eval_points))
    array([0., 3.])
    """

    def __init__(
        self,
        rtol=np.finfo(float).eps,
        atol=np.finfo(float).eps,
        copy=True,
    ):
        self.rtol = rtol
        self.atol = atol
        self.copy = copy

    def fit(self, X, Y=None):
        """Compute the shift and scaling factor mapping X and Y onto [0, 1].

        Parameters
        ----------
        X : array-like of shape (n_samples,)
            The points used to compute the shift and scaling factor, e.g. the
            sample of a density estimate.

        Y : array-like of shape (n_points,), default=None
            Additional points which must also be mapped into the unit interval,
            e.g. the evaluation points of a density estimate.

        Returns
        -------
        self : object
            Fitted scaler.
        """
        X = check_points(X, name="X")
        self.n_samples_in_ = len(X)

        lo, hi = np.min(X), np.max(X)
        if Y is not None:
            Y = check_points(Y, name="Y")
            lo, hi = min(lo, np.min(Y)), max(hi, np.max(Y))

        data_range = hi - lo
        if data_range <= self.atol + max(abs(lo), abs(hi)) * self.rtol:
            self.shift_ = float(0.5 - lo)
            self.data_range_ = 1.0
        else:
            self.shift_ = float(-lo)
            self.data_range_ = float(data_range)
        self.scale_ = 1.0 / self.data_range_

        return self

    def transform(self, X, y=None, copy=None):
        """Map X using the previously computed shift and scaling factor.

        Parameters
        ----------
        X : array-like of shape (n_points,)
            The points to transform.

        y: None
            Ignored.

        copy : bool, default=None
            Copy the input X or not. Defaults to the ``copy`` parameter of the
            scaler.

        Returns
        -------
        X_tr : numpy.ndarray of shape (n_points,)
            Transformed points.
        """
        check_is_fitted(self, attributes=["shift_", "scale_"])
        copy = copy if copy is not None else self.copy
        X = check_points(X, name="X", copy=copy)

        X += self.shift_
        # dividing by the range keeps the image of the maximum exactly at one
        X /= self.data_range_

        return X

    def inverse_transform(self, X, copy=None):
        """Map transformed points back onto the original interval.

        Parameters
        ----------
        X : array-like of shape (n_points,)
            The transformed points.

        copy : bool, default=None
            Copy the input X or not. Defaults to the ``copy`` parameter of the
            scaler.

        Returns
        -------
        X_original : numpy.ndarray of shape (n_points,)
            Points in the original coordinates.
        """
        check_is_fitted(self, attributes=["shift_", "scale_"])
        copy = copy if copy is not None else self.copy
        X = check_points(X, name="X", copy=copy)

        X *= self.data_range_
        X -= self.shift_

        return X
