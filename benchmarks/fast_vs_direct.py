import time

import numpy as np
from matplotlib import pyplot as plt
from tqdm import tqdm

from skdensity.datasets import make_gaussian_mixture
from skdensity.neighbors import GaussianDensityDerivative


bandwidth = 0.1
deriv_order = 2
error_bound = 1e-6
sizes = np.logspace(2, 4.5, 8).astype(int)

estimator = GaussianDensityDerivative(
    bandwidth=bandwidth, deriv_order=deriv_order, error_bound=error_bound
)
approx_times = np.zeros(len(sizes))
direct_times = np.zeros(len(sizes))
errors = np.zeros(len(sizes))

for i, n_samples in enumerate(tqdm(sizes)):
    X = make_gaussian_mixture(n_samples // 3, random_state=i)
    eval_points = np.linspace(np.min(X), np.max(X), len(X))

    start = time.time()
    approx = estimator.estimate_approx(X, eval_points)
    approx_times[i] = time.time() - start

    start = time.time()
    direct = estimator.estimate_direct(X, eval_points)
    direct_times[i] = time.time() - start

    errors[i] = np.max(np.abs(approx - direct))

for n_samples, t_approx, t_direct, error in zip(
    sizes, approx_times, direct_times, errors
):
    print(
        f"N={n_samples:6d}  fast {t_approx:.3f} s  direct {t_direct:.3f} s  "
        f"max error {error:.2e}"
    )

plt.loglog(sizes, approx_times, "o-", label="fast")
plt.loglog(sizes, direct_times, "o-", label="direct")
plt.xlabel("number of sample and evaluation points")
plt.ylabel("time / s")
plt.legend()
plt.show()
