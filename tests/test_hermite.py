import math
import unittest

import numpy as np
from scipy.special import eval_hermitenorm

from skdensity.exceptions import NonFiniteCoefficientError
from skdensity.neighbors import NearestCentreAssigner, cluster_centres
from skdensity.utils import (
    cluster_coefficients,
    expansion_polynomials,
    hermite_coefficients,
)


def _coefficient(deriv_order, s, t):
    return (
        (-1) ** (s + t)
        * math.factorial(deriv_order)
        / (
            2**s
            * math.factorial(s)
            * math.factorial(t)
            * math.factorial(deriv_order - 2 * s - t)
        )
    )


class HermiteCoefficientTests(unittest.TestCase):
    def test_second_order(self):
        self.assertTrue(np.all(hermite_coefficients(2) == [1, -2, 1, -1]))

    def test_fifth_order(self):
        self.assertTrue(
            np.all(
                hermite_coefficients(5)
                == [1, -5, 10, -10, 5, -1, -10, 30, -30, 10, 15, -15]
            )
        )

    def test_zeroth_order(self):
        self.assertTrue(np.all(hermite_coefficients(0) == [1]))

    def test_closed_form(self):
        """Checks every coefficient up to order 12 against the closed form."""
        for deriv_order in range(13):
            expected = [
                _coefficient(deriv_order, s, t)
                for s in range(deriv_order // 2 + 1)
                for t in range(deriv_order - 2 * s + 1)
            ]
            np.testing.assert_allclose(
                hermite_coefficients(deriv_order), expected, rtol=1e-12
            )

    def test_hermite_polynomial(self):
        """Checks that the coefficients with t = 0 are those of the probabilists'
        Hermite polynomial."""
        x = np.linspace(-4.0, 4.0, 17)
        for deriv_order in range(9):
            coef_a = hermite_coefficients(deriv_order)
            value = np.zeros_like(x)
            idx = 0
            for s in range(deriv_order // 2 + 1):
                value += coef_a[idx] * x ** (deriv_order - 2 * s)
                idx += deriv_order - 2 * s + 1
            np.testing.assert_allclose(
                value, eval_hermitenorm(deriv_order, x), rtol=1e-12, atol=1e-12
            )


class ClusterCoefficientTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.random_state = np.random.RandomState(0)
        cls.X = cls.random_state.uniform(0.0, 1.0, size=200)
        cls.bandwidth = 0.1
        cls.centres = cluster_centres(cls.bandwidth)
        cls.labels = NearestCentreAssigner().fit(cls.centres).predict(cls.X)

    def test_brute_force(self):
        """Checks the coefficients against an explicit sum over the points."""
        n_terms, deriv_order = 6, 3
        coef_b = cluster_coefficients(
            self.X, self.centres, self.labels, self.bandwidth, n_terms, deriv_order
        )
        self.assertEqual(coef_b.shape, (len(self.centres), n_terms, deriv_order + 1))

        expected = np.zeros_like(coef_b)
        for x, k in zip(self.X, self.labels):
            delta = (x - self.centres[k]) / self.bandwidth
            for j in range(n_terms):
                for t in range(deriv_order + 1):
                    expected[k, j, t] += (
                        math.exp(-0.5 * delta**2)
                        * delta ** (j + t)
                        / math.factorial(j)
                    )
        np.testing.assert_allclose(coef_b, expected, rtol=1e-10, atol=1e-10)

    def test_chunked(self):
        """Checks that accumulating the sample in chunks gives the same
        coefficients."""
        args = (self.X, self.centres, self.labels, self.bandwidth, 6, 3)
        coef_b = cluster_coefficients(*args)
        for chunk_size in [1, 7, 64, 1000]:
            np.testing.assert_allclose(
                cluster_coefficients(*args, chunk_size=chunk_size),
                coef_b,
                rtol=1e-12,
                atol=1e-12,
            )

    def test_empty_clusters(self):
        """Checks that clusters without points have zero coefficients."""
        X = np.array([0.01, 0.02])
        labels = NearestCentreAssigner().fit(self.centres).predict(X)
        coef_b = cluster_coefficients(X, self.centres, labels, self.bandwidth, 4, 2)
        self.assertTrue(np.all(coef_b[1:] == 0.0))
        self.assertGreater(coef_b[0, 0, 0], 0.0)

    def test_non_finite(self):
        """Checks that non-finite coefficients raise."""
        with np.errstate(all="ignore"):
            with self.assertRaises(NonFiniteCoefficientError):
                cluster_coefficients(
                    np.array([0.5]), np.array([0.5]), np.array([0]), 0.0, 3, 2
                )


class ExpansionPolynomialTests(unittest.TestCase):
    def test_shape(self):
        coef_b = np.ones((4, 5, 3))
        poly = expansion_polynomials(hermite_coefficients(2), coef_b, 2)
        self.assertEqual(poly.shape, (4, 7))

    def test_point_at_centre(self):
        """Checks that a single point at the centre reproduces the Hermite polynomial
        exactly."""
        centre = np.array([0.5])
        d = np.linspace(-3.0, 3.0, 13)
        for deriv_order in range(7):
            coef_b = cluster_coefficients(
                centre, centre, np.array([0]), 0.1, 1, deriv_order
            )
            poly = expansion_polynomials(
                hermite_coefficients(deriv_order), coef_b, deriv_order
            )
            value = np.polynomial.polynomial.polyval(d, poly[0])
            np.testing.assert_allclose(
                value, eval_hermitenorm(deriv_order, d), rtol=1e-12, atol=1e-12
            )

    def test_kernel_derivative(self):
        """Checks that a long expansion converges to the kernel derivative of a point
        close to the centre."""
        bandwidth, centre, x = 0.1, np.array([0.5]), np.array([0.53])
        delta = (x[0] - centre[0]) / bandwidth
        d = np.linspace(-3.0, 3.0, 13)
        for deriv_order in range(6):
            coef_b = cluster_coefficients(
                x, centre, np.array([0]), bandwidth, 40, deriv_order
            )
            poly = expansion_polynomials(
                hermite_coefficients(deriv_order), coef_b, deriv_order
            )
            value = np.exp(-0.5 * d**2) * np.polynomial.polynomial.polyval(
                d, poly[0]
            )
            u = d - delta
            np.testing.assert_allclose(
                value,
                eval_hermitenorm(deriv_order, u) * np.exp(-0.5 * u**2),
                rtol=1e-10,
                atol=1e-12,
            )


if __name__ == "__main__":
    unittest.main(verbosity=2)
