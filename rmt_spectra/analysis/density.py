"""
Empirical spectral density via equal-width histograms.
"""

from dataclasses import dataclass

import numpy as np

from ..core.errors import DomainError, InsufficientData
from ..core.numerics import (as_float_array, bin_counts, histogram_bin_width, histogram_edges,
                             require_bins)


@dataclass(frozen=True, eq=False)
class SpectralDensity:
    """
    Histogram estimate of a spectral density.

    Attributes
    ----------
    edges : np.ndarray
        k + 1 bin edges partitioning [min λ, max λ].
    centers : np.ndarray
        k bin centres.
    density : np.ndarray
        Density per bin; Σ density·bin_width = 1.
    bin_width : float
        Common width of every bin.
    """
    edges: np.ndarray
    centers: np.ndarray
    density: np.ndarray
    bin_width: float

    def mass(self) -> float:
        """Total probability mass, 1 up to rounding."""
        return float(np.sum(self.density) * self.bin_width)

    def __len__(self) -> int:
        return len(self.density)


def empirical_spectral_density(eigenvalues, bins: int) -> SpectralDensity:
    """
    Normalised histogram of an eigenvalue sample.

    The observed range [min, max] is split into ``bins`` equal-width bins,
    half-open except the last which also holds the maximum. When all
    eigenvalues coincide the result is a single bin of width 1 centred on
    that value, with density 1, regardless of ``bins``.

    Parameters
    ----------
    eigenvalues : array_like
        Eigenvalues in any order, at least one.
    bins : int
        Number of bins k ≥ 1.

    Returns
    -------
    SpectralDensity

    Raises
    ------
    InvalidBinCount
        If ``bins`` is not a positive integer.
    InsufficientData
        If no eigenvalues are given.
    DomainError
        If an eigenvalue is NaN or infinite, or a single bin would be wider
        than the largest float.
    """
    k = require_bins(bins)
    eigenvalues = as_float_array("eigenvalues", eigenvalues)

    n = len(eigenvalues)
    if n == 0:
        raise InsufficientData("Empirical density needs at least one eigenvalue")

    lo = float(np.min(eigenvalues))
    hi = float(np.max(eigenvalues))

    if lo == hi:
        return SpectralDensity(
            edges=np.array([lo - 0.5, lo + 0.5]),
            centers=np.array([lo]),
            density=np.array([1.0]),
            bin_width=1.0
        )

    bin_width = histogram_bin_width(lo, hi, k)
    if not np.isfinite(bin_width):
        raise DomainError(f"Range [{lo}, {hi}] is too wide for {k} bin(s)")

    edges = histogram_edges(lo, hi, k)
    counts = bin_counts(eigenvalues, edges)

    return SpectralDensity(
        edges=edges,
        centers=edges[:-1] / 2 + edges[1:] / 2,
        density=counts / n / bin_width,
        bin_width=bin_width
    )
