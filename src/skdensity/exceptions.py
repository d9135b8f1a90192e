"""
The :mod:`skdensity.exceptions` module includes all custom warnings and error
classes used across scikit-density.
"""

__all__ = [
    "ConfigurationError",
    "DegenerateInputError",
    "NumericalDivergenceError",
    "NonFiniteCoefficientError",
]


class ConfigurationError(ValueError):
    """Exception class to raise if an estimator is used before all of its required
    parameters have been set.

    Examples
    --------
    >>> from skdensity.neighbors import GaussianDensityDerivative
    >>> from skdensity.exceptions import ConfigurationError
    >>> try:
    ...     GaussianDensityDerivative(bandwidth=0.1).estimate_direct([0.0], [0.0])
    ... except ConfigurationError as e:
    ...     print(repr(e))
    ConfigurationError('GaussianDensityDerivative is not configured: deriv_order, error_bound must be set before estimating.')
    """  # noqa: E501


class DegenerateInputError(ValueError):
    """Exception class to raise if the sample or evaluation points cannot be used
    for density estimation, e.g. because they are empty."""


class NumericalDivergenceError(ArithmeticError):
    """Exception class to raise if a numerical procedure fails to reach the requested
    accuracy, e.g. if no truncation number satisfies the error bound within the
    allowed number of series terms."""


class NonFiniteCoefficientError(NumericalDivergenceError):
    """Exception class to raise if NaN or infinite values appear in intermediate
    expansion coefficients."""
