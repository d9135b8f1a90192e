import math
import unittest

import numpy as np

from skdensity.exceptions import NumericalDivergenceError
from skdensity.neighbors import cluster_centres
from skdensity.utils import (
    cutoff_radius,
    scale_factor,
    scaled_tolerance,
    truncation_error,
    truncation_number,
)


class TruncationNumberTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.n_samples = [10, 100, 1000]
        cls.bandwidths = [1.0, 0.1, 0.01, 0.001, 0.0001]
        cls.error_bounds = [1e-1, 1e-2, 1e-3, 1e-4, 1e-5, 1e-6]
        cls.deriv_orders = [0, 2, 5]

    def _parameters(self, n_samples, bandwidth, error_bound, deriv_order):
        q = scale_factor(n_samples)
        eps_prime = scaled_tolerance(n_samples, error_bound, q, bandwidth, deriv_order)
        interaction_radius = 1.0 / len(cluster_centres(bandwidth))
        cutoff = cutoff_radius(bandwidth, eps_prime, interaction_radius, deriv_order)
        return eps_prime, interaction_radius, cutoff

    def test_error_bound(self):
        """Checks that the truncation number satisfies the error bound and that it
        is the smallest number that does."""
        for n_samples in self.n_samples:
            for bandwidth in self.bandwidths:
                for error_bound in self.error_bounds:
                    for deriv_order in self.deriv_orders:
                        eps_prime, ri, cutoff = self._parameters(
                            n_samples, bandwidth, error_bound, deriv_order
                        )
                        n_terms = truncation_number(
                            deriv_order, bandwidth, ri, cutoff, eps_prime
                        )
                        self.assertLessEqual(
                            truncation_error(
                                n_terms, deriv_order, bandwidth, ri, cutoff
                            ),
                            eps_prime,
                        )
                        if n_terms > 0:
                            self.assertGreater(
                                truncation_error(
                                    n_terms - 1, deriv_order, bandwidth, ri, cutoff
                                ),
                                eps_prime,
                            )

    def test_truncation_error(self):
        """Checks the error bound against its closed form."""
        bandwidth, ri, cutoff = 0.1, 0.05, 0.5
        for deriv_order in self.deriv_orders:
            for n_terms in range(8):
                b = min(
                    cutoff, 0.5 * (ri + math.sqrt(ri**2 + 8 * n_terms * bandwidth**2))
                )
                expected = (
                    math.sqrt(math.factorial(deriv_order))
                    / math.factorial(n_terms)
                    * (ri * b / bandwidth**2) ** n_terms
                    * math.exp(-((ri - b) ** 2) / bandwidth**2)
                )
                self.assertAlmostEqual(
                    truncation_error(n_terms, deriv_order, bandwidth, ri, cutoff)
                    / expected,
                    1.0,
                    places=10,
                )

    def test_cutoff_radius(self):
        """Checks that the cutoff radius lies between the interaction radius and
        one."""
        for bandwidth in self.bandwidths:
            for error_bound in self.error_bounds:
                eps_prime, ri, cutoff = self._parameters(100, bandwidth, error_bound, 2)
                self.assertGreaterEqual(cutoff, min(ri, 1.0))
                self.assertLessEqual(cutoff, 1.0)

    def test_cutoff_radius_large_tolerance(self):
        """Checks that the cutoff radius equals the interaction radius when a single
        kernel never exceeds the tolerance."""
        self.assertEqual(cutoff_radius(0.1, 10.0, 0.05, 2), 0.05)

    def test_scaled_tolerance(self):
        """Checks the per-sample tolerance."""
        q = scale_factor(100)
        self.assertAlmostEqual(q, 1.0 / (100 * math.sqrt(2 * math.pi)))
        eps_prime = scaled_tolerance(100, 1e-3, q, 0.5, 2)
        self.assertAlmostEqual(eps_prime, 1e-3 * 0.5**3 * math.sqrt(2 * math.pi))

    def test_max_terms(self):
        """Checks that exceeding the largest admissible truncation number raises."""
        with self.assertRaises(NumericalDivergenceError):
            truncation_number(2, 0.1, 0.05, 0.5, 1e-6, max_terms=3)
        with self.assertRaises(ArithmeticError):
            truncation_number(2, 0.1, 0.05, 0.5, 1e-300, max_terms=10)
        self.assertEqual(truncation_number(2, 0.1, 0.05, 0.5, 1e-6, max_terms=7), 7)


if __name__ == "__main__":
    unittest.main(verbosity=2)
