"""
Marchenko-Pastur distribution analysis.

The Marchenko-Pastur law describes the limiting eigenvalue distribution
of sample covariance matrices. For a p×n matrix X with i.i.d. entries of
variance σ², the eigenvalues of (1/p)XᵀX converge to the MP law with
ratio q = n/p as n, p → ∞.

For q > 1 the matrix is rank deficient and the law carries a point mass
of weight 1 - 1/q at zero. The density functions here return the
continuous part only; the atom is reported by ``marchenko_pastur_support``.

References:
- Marchenko & Pastur (1967), "Distribution of eigenvalues for some
  sets of random matrices"
- Bai & Silverstein (2010), "Spectral Analysis of Large Dimensional
  Random Matrices", Ch. 3
"""

import warnings
from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np
from scipy import integrate, optimize, stats

from ..core.errors import InsufficientData
from ..core.numerics import (as_float_array, as_output, as_points, require_off_axis,
                             require_positive, safe_log, safe_sqrt,
                             stieltjes_branch)


class MPSupport(NamedTuple):
    """
    Support of the Marchenko-Pastur law.

    Attributes
    ----------
    lower : float
        λ₋ = σ²(1 - √q)².
    upper : float
        λ₊ = σ²(1 + √q)².
    atom : float
        Weight of the point mass at zero, max(0, 1 - 1/q).
    """
    lower: float
    upper: float
    atom: float


def marchenko_pastur_support(q: float, sigma_sq: float = 1.0) -> MPSupport:
    """
    Support bounds and zero atom of the MP distribution.

    Parameters
    ----------
    q : float
        Aspect ratio p/n, finite and positive.
    sigma_sq : float
        Variance of the matrix entries.

    Returns
    -------
    MPSupport
        ``(lower, upper, atom)``.
    """
    q = require_positive("q", q)
    sigma_sq = require_positive("sigma_sq", sigma_sq)
    return _support(q, sigma_sq)


def _support(q: float, sigma_sq: float) -> MPSupport:
    sqrt_q = np.sqrt(q)
    lower = sigma_sq * (1 - sqrt_q) ** 2
    upper = sigma_sq * (1 + sqrt_q) ** 2
    return MPSupport(float(lower), float(upper), max(0.0, 1 - 1 / q))


def marchenko_pastur_density(x, q: float, sigma_sq: float = 1.0):
    """
    Marchenko-Pastur probability density function (continuous part).

    - λ_± = σ²(1 ± √q)²  (support bounds)
    - p(x) = √((λ₊-x)(x-λ₋)) / (2πqσ²x)  for x ∈ (λ₋, λ₊)

    Points on the support boundary, outside it, or at x = 0 evaluate to 0.

    Parameters
    ----------
    x : float or array_like
        Points to evaluate density.
    q : float
        Aspect ratio p/n.
    sigma_sq : float
        Variance of the matrix entries.

    Returns
    -------
    float or np.ndarray
        Density at each x.

    Raises
    ------
    DomainError
        If q or sigma_sq is not finite and positive, or x contains NaN.
    """
    q = require_positive("q", q)
    sigma_sq = require_positive("sigma_sq", sigma_sq)
    x, scalar = as_points(x)

    lambda_minus, lambda_plus, _ = _support(q, sigma_sq)

    pdf = np.zeros_like(x)
    mask = (x > lambda_minus) & (x < lambda_plus) & (x > 0)

    if np.any(mask):
        x_valid = x[mask]
        pdf[mask] = (safe_sqrt((lambda_plus - x_valid) * (x_valid - lambda_minus)) /
                     (2 * np.pi * q * sigma_sq * x_valid))

    return as_output(pdf, scalar)


def marchenko_pastur_cdf(x, q: float, sigma_sq: float = 1.0):
    """
    Marchenko-Pastur cumulative distribution function.

    Includes the atom at zero when q > 1, so F(0) = 1 - 1/q. The bulk
    integral is computed in the variable θ with t = λ₋ + (λ₊-λ₋)sin²θ,
    which makes the integrand smooth at both edges and at t = 0 when q = 1.

    Parameters
    ----------
    x : float or array_like
        Points to evaluate CDF.
    q : float
        Aspect ratio p/n.
    sigma_sq : float
        Variance parameter.

    Returns
    -------
    float or np.ndarray
        CDF values.
    """
    q = require_positive("q", q)
    sigma_sq = require_positive("sigma_sq", sigma_sq)
    x, scalar = as_points(x)

    lambda_minus, lambda_plus, point_mass = _support(q, sigma_sq)
    span = lambda_plus - lambda_minus
    norm = 2 * np.pi * q * sigma_sq

    def integrand(theta):
        s2 = np.sin(theta) ** 2
        c2 = np.cos(theta) ** 2
        t = lambda_minus + span * s2
        return 2 * span ** 2 * s2 * c2 / (norm * t)

    cdf = np.zeros(x.shape)
    flat_x = x.reshape(-1)
    flat_cdf = cdf.reshape(-1)

    for i, xi in enumerate(flat_x):
        if xi < 0:
            flat_cdf[i] = 0.0
        elif xi <= lambda_minus:
            flat_cdf[i] = point_mass
        elif xi >= lambda_plus:
            flat_cdf[i] = 1.0
        else:
            theta_max = np.arcsin(np.sqrt((xi - lambda_minus) / span))
            integral, _ = integrate.quad(integrand, 0.0, theta_max, limit=200)
            flat_cdf[i] = min(1.0, point_mass + integral)

    return as_output(cdf, scalar)


def marchenko_pastur_stieltjes(z, q: float, sigma_sq: float = 1.0):
    """
    Closed-form Stieltjes transform of the MP law, atom included.

    m(z) solves  qσ²z·m² + (z - σ²(1-q))·m + 1 = 0  on the branch with
    sign(Im m) = sign(Im z).

    Parameters
    ----------
    z : complex or array_like
        Query points off the real axis.
    q : float
        Aspect ratio p/n.
    sigma_sq : float
        Variance parameter.

    Returns
    -------
    complex or np.ndarray
    """
    q = require_positive("q", q)
    sigma_sq = require_positive("sigma_sq", sigma_sq)
    scalar = np.ndim(z) == 0
    z = require_off_axis(z)

    a = q * sigma_sq * z
    b = z - sigma_sq * (1 - q)
    disc = np.sqrt(b * b - 4 * a)
    m = stieltjes_branch((-b + disc) / (2 * a), (-b - disc) / (2 * a), z)

    return as_output(m, scalar)


@dataclass
class MPFit:
    """
    Result of fitting the MP law to an observed spectrum.

    Attributes
    ----------
    q : float
        Estimated (or fixed) aspect ratio.
    sigma_sq : float
        Estimated variance parameter.
    ks_statistic : float
        Kolmogorov-Smirnov distance between the positive eigenvalues and
        the fitted law conditioned on x > 0.
    ks_pvalue : float
        KS test p-value.
    support : MPSupport
        Support of the fitted law.
    """
    q: float
    sigma_sq: float
    ks_statistic: float
    ks_pvalue: float
    support: MPSupport


def fit_marchenko_pastur(eigenvalues, q: Optional[float] = None) -> MPFit:
    """
    Fit the Marchenko-Pastur distribution to observed eigenvalues.

    Zero eigenvalues (the atom) are discarded and the likelihood of the
    remaining ones is taken under the continuous part renormalised to
    unit mass. Starting values come from moments, E[x] = σ² and
    Var[x] = σ⁴q, and are refined by Nelder-Mead on (log q, log σ²).

    Parameters
    ----------
    eigenvalues : array_like
        Observed eigenvalues (e.g. of a sample covariance matrix).
    q : float, optional
        If known, fix the aspect ratio and fit σ² only.

    Returns
    -------
    MPFit
    """
    eigenvalues = as_float_array("eigenvalues", eigenvalues)
    # rank-deficient spectra carry rounding-level "zeros" that belong to the atom
    if len(eigenvalues):
        eigenvalues = eigenvalues[eigenvalues > 1e-10 * np.max(np.abs(eigenvalues))]
    if len(eigenvalues) < 2:
        raise InsufficientData(
            f"need at least 2 positive eigenvalues to fit, got {len(eigenvalues)}")

    mean_eig = np.mean(eigenvalues)
    var_eig = np.var(eigenvalues)

    if q is not None:
        q = require_positive("q", q)
        start = [np.log(mean_eig / max(1.0, q))]
    else:
        q0 = np.clip(var_eig / mean_eig ** 2, 0.01, 1.0)
        start = [np.log(q0), np.log(mean_eig)]

    def unpack(params):
        if q is not None:
            return q, np.exp(params[0])
        return np.exp(params[0]), np.exp(params[1])

    def neg_log_likelihood(params):
        q_val, s_val = unpack(params)
        if not (np.isfinite(q_val) and np.isfinite(s_val) and q_val > 0 and s_val > 0):
            return np.inf
        pdf_vals = marchenko_pastur_density(eigenvalues, q_val, s_val) * max(1.0, q_val)
        return -np.sum(safe_log(pdf_vals))

    result = optimize.minimize(neg_log_likelihood, start, method='Nelder-Mead',
                               options={'maxiter': 500})
    if result.success:
        q_fit, sigma_sq_fit = unpack(result.x)
    else:
        warnings.warn(f"Marchenko-Pastur fit did not converge ({result.message}); "
                      "returning moment estimates", RuntimeWarning)
        q_fit, sigma_sq_fit = unpack(start)

    q_fit, sigma_sq_fit = float(q_fit), float(sigma_sq_fit)
    support = _support(q_fit, sigma_sq_fit)

    def conditional_cdf(t):
        return ((np.asarray(marchenko_pastur_cdf(t, q_fit, sigma_sq_fit)) - support.atom) /
                (1 - support.atom))

    ks = stats.kstest(eigenvalues, conditional_cdf)

    return MPFit(
        q=q_fit,
        sigma_sq=sigma_sq_fit,
        ks_statistic=float(ks.statistic),
        ks_pvalue=float(ks.pvalue),
        support=support
    )


def expected_condition_number(q: float) -> float:
    """
    Limiting condition number of the bulk.

    κ = √(λ₊/λ₋) = (1 + √q)/(1 - √q) with q replaced by min(q, 1/q).

    Parameters
    ----------
    q : float
        Aspect ratio.

    Returns
    -------
    float
        Expected condition number (inf at q = 1).
    """
    q = require_positive("q", q)
    q = min(q, 1 / q)

    if q >= 1:
        return np.inf

    sqrt_q = np.sqrt(q)
    return float((1 + sqrt_q) / (1 - sqrt_q))


def marchenko_pastur_outliers(eigenvalues, q: float, sigma_sq: float = 1.0,
                              threshold: float = 3.0) -> np.ndarray:
    """
    Detect eigenvalues that lie outside the MP bulk.

    The largest bulk eigenvalue fluctuates on the Tracy-Widom scale
    σ²·n^(-2/3), so the support is widened by ``threshold`` of those units
    on both sides before flagging.

    Parameters
    ----------
    eigenvalues : array_like
        Observed eigenvalues.
    q : float
        Aspect ratio.
    sigma_sq : float
        Variance parameter.
    threshold : float
        Number of edge-fluctuation units beyond the MP bounds.

    Returns
    -------
    np.ndarray
        Boolean mask of outliers.
    """
    eigenvalues = as_float_array("eigenvalues", eigenvalues)
    lambda_minus, lambda_plus, _ = marchenko_pastur_support(q, sigma_sq)
    threshold = require_positive("threshold", threshold)

    n = len(eigenvalues)
    if n == 0:
        return np.zeros(0, dtype=bool)
    tw_scale = sigma_sq * n ** (-2 / 3)

    lower_bound = lambda_minus - threshold * tw_scale
    upper_bound = lambda_plus + threshold * tw_scale

    return (eigenvalues < lower_bound) | (eigenvalues > upper_bound)
