"""
Closed-form Gaussian fit through three samples.

The logarithm of a Gaussian is a parabola in x, so three samples with
distinct m/z determine mean, standard deviation and integral exactly.
No iterative optimisation is involved.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


@dataclass(frozen=True, slots=True)
class TripletFit:
    """
    Parameters of the Gaussian passing through a sample triplet.

    Attributes:
        mu: Fitted mean (peak m/z).
        sigma: Fitted standard deviation.
        area: Integral of the fitted Gaussian.
        valid: False when the fit is numerically degenerate.
    """
    mu: float
    sigma: float
    area: float
    valid: bool

    @property
    def apex_height(self) -> float:
        """Height of the fitted Gaussian at its mean."""
        return float(scaled_gaussian(self.mu, self.mu, self.sigma, self.area))


def fit_triplet(
    p1: tuple[float, float],
    p2: tuple[float, float],
    p3: tuple[float, float],
) -> TripletFit:
    """
    Fit the unique Gaussian through three (mz, intensity) samples.

    Samples must have distinct m/z, ordered p1 < p2 < p3. Degenerate input
    (non-positive intensities, points collinear in log space, a valley
    instead of a peak) yields non-finite parameters and ``valid=False``;
    nothing is raised.

    Args:
        p1: Left sample.
        p2: Centre sample.
        p3: Right sample.

    Returns:
        TripletFit with mu, sigma, area and the validity flag.

    Example:
        >>> fit = fit_triplet((99.9, 60.65), (100.0, 100.0), (100.1, 60.65))
        >>> round(fit.mu, 6)
        100.0
    """
    x1, y1 = float(p1[0]), float(p1[1])
    x2, y2 = float(p2[0]), float(p2[1])
    x3, y3 = float(p3[0]), float(p3[1])

    # Both sums below have coefficients adding up to zero, so shifting x and
    # ln(y) by the centre sample leaves them unchanged and avoids cancellation.
    u1 = x1 - x2
    u3 = x3 - x2

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        ly1, ly2, ly3 = np.log(np.array([y1, y2, y3], dtype=np.float64))
        l1 = ly1 - ly2
        l3 = ly3 - ly2

        # ln(y1^(x3-x2) * y2^(x1-x3) * y3^(x2-x1))
        denom = u3 * l1 - u1 * l3
        mu_offset = 0.5 * (u3 * u3 * l1 - u1 * u1 * l3) / denom
        mu = x2 + mu_offset
        sigma = np.sqrt(0.5 * ((x1 - x3) * (x2 - x1) * (x3 - x2)) / denom)
        area = (
            np.sqrt(2.0 * np.pi * sigma * sigma)
            * np.power(y1 * y2 * y3, 1.0 / 3.0)
            * np.exp(
                ((u1 - mu_offset) ** 2 + mu_offset ** 2 + (u3 - mu_offset) ** 2)
                / (6.0 * sigma * sigma)
            )
        )

    valid = bool(
        np.isfinite(area) and np.isfinite(mu) and np.isfinite(sigma) and sigma > 0.0
    )
    return TripletFit(mu=float(mu), sigma=float(sigma), area=float(area), valid=valid)


def scaled_gaussian(
    x: ArrayLike,
    mu: float,
    sigma: float,
    area: float,
) -> float | NDArray[np.float64]:
    """
    Evaluate a Gaussian with the given integral at ``x``.

    Returns ``area / sqrt(2*pi*sigma^2) * exp(-(x - mu)^2 / (2*sigma^2))``.
    Scalars in, float out; arrays in, array out.
    """
    x_arr = np.asarray(x, dtype=np.float64)
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        value = (area / np.sqrt(2.0 * np.pi * sigma * sigma)) * np.exp(
            -((x_arr - mu) ** 2) / (2.0 * sigma * sigma)
        )
    if value.ndim == 0:
        return float(value)
    return value
