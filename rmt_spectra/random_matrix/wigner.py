"""
Wigner semicircle law.

For a real symmetric n×n matrix with i.i.d. off-diagonal entries of
variance σ², the eigenvalues divided by √n converge to the semicircle
of radius R = 2σ:

    ρ(x) = (2/(πR²)) √(R² - x²),   |x| ≤ R

The unnormalised GOE produced by ``sample_goe`` therefore has a limiting
spectrum on [-2√n, 2√n].

References:
- Wigner (1955), "Characteristic vectors of bordered matrices with
  infinite dimensions"
"""

import numpy as np

from ..core.numerics import (as_output, as_points, require_off_axis,
                             require_positive, safe_sqrt, stieltjes_branch)


def semicircle_radius(sigma_sq: float = 1.0) -> float:
    """Radius R = 2σ of the semicircle for entry variance σ²."""
    sigma_sq = require_positive("sigma_sq", sigma_sq)
    return 2.0 * float(np.sqrt(sigma_sq))


def wigner_semicircle_density(x, radius: float = 2.0):
    """
    Wigner semicircle probability density.

    Parameters
    ----------
    x : float or array_like
        Points to evaluate density.
    radius : float
        Support radius R > 0.

    Returns
    -------
    float or np.ndarray
        Density at each x; 0 for |x| ≥ R.

    Examples
    --------
    >>> round(wigner_semicircle_density(0.0, 2.0), 6)  # 1/π
    0.31831
    """
    radius = require_positive("radius", radius)
    x, scalar = as_points(x)

    pdf = np.zeros_like(x)
    mask = np.abs(x) < radius

    if np.any(mask):
        x_valid = x[mask]
        pdf[mask] = 2 / (np.pi * radius ** 2) * safe_sqrt(radius ** 2 - x_valid ** 2)

    return as_output(pdf, scalar)


def wigner_semicircle_cdf(x, radius: float = 2.0):
    """
    Semicircle cumulative distribution function.

    F(x) = 1/2 + x√(R²-x²)/(πR²) + arcsin(x/R)/π  on [-R, R].
    """
    radius = require_positive("radius", radius)
    x, scalar = as_points(x)

    u = np.clip(x / radius, -1.0, 1.0)
    cdf = 0.5 + (u * safe_sqrt(1 - u ** 2) + np.arcsin(u)) / np.pi
    cdf = np.clip(cdf, 0.0, 1.0)

    return as_output(cdf, scalar)


def wigner_semicircle_stieltjes(z, radius: float = 2.0):
    """
    Closed-form Stieltjes transform of the semicircle law.

    m(z) solves (R²/4)m² + z·m + 1 = 0 on the branch with
    sign(Im m) = sign(Im z).

    Parameters
    ----------
    z : complex or array_like
        Query points off the real axis.
    radius : float
        Support radius R.

    Returns
    -------
    complex or np.ndarray
    """
    radius = require_positive("radius", radius)
    scalar = np.ndim(z) == 0
    z = require_off_axis(z)

    a = radius ** 2 / 4
    disc = np.sqrt(z * z - 4 * a)
    m = stieltjes_branch((-z + disc) / (2 * a), (-z - disc) / (2 * a), z)

    return as_output(m, scalar)
