import numpy as np
from sklearn.utils.validation import FLOAT_DTYPES, check_array, column_or_1d

from ..exceptions import DegenerateInputError


def check_points(X, name="X", copy=False):
    """Validate a one-dimensional sequence of points.

    Parameters
    ----------
    X : array-like of shape (n_points,) or (n_points, 1)
        The points to validate.
    name : str, default="X"
        Name of the input, used in error messages.
    copy : bool, default=False
        Whether a copy is forced.

    Returns
    -------
    X : numpy.ndarray of shape (n_points,)
        The validated points as a float array.

    Raises
    ------
    DegenerateInputError
        If ``X`` does not contain any point.
    ValueError
        If ``X`` contains NaN or infinite values or has more than one column.
    """
    if np.size(X) == 0:
        raise DegenerateInputError(f"{name} must contain at least one point.")
    X = check_array(X, ensure_2d=False, dtype=FLOAT_DTYPES, copy=copy, input_name=name)

    return column_or_1d(X)
