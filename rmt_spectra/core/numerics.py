"""
Numeric support utilities shared by densities, samplers and statistics.

Contains the domain guards, the floating-point tolerance policy and the
equal-width binning used by the empirical spectral density.
"""

import numbers
from dataclasses import dataclass
from typing import Union

import numpy as np

from .errors import DomainError, InvalidBinCount, InvalidDimension

ArrayLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class NumericPolicy:
    """
    Floating-point tolerance policy.

    Parameters
    ----------
    spacing_rtol : float
        A denominator gap in a spacing ratio is treated as zero when it is
        at most ``spacing_rtol * max(|λ|)``. The default of a few machine
        epsilons only catches gaps that are pure rounding residue.
    symmetry_rtol : float
        Relative tolerance used when accepting caller-supplied matrices as
        symmetric. Sampler outputs are exactly symmetric regardless.
    log_floor : float
        Smallest argument passed to the logarithm by ``safe_log``.
    """
    spacing_rtol: float = 8 * np.finfo(float).eps
    symmetry_rtol: float = 1e-10
    log_floor: float = 1e-300

    def __post_init__(self):
        for name in ("spacing_rtol", "symmetry_rtol", "log_floor"):
            value = getattr(self, name)
            if not np.isfinite(value) or value < 0:
                raise DomainError(f"{name} must be finite and non-negative, got {value}")


DEFAULT_POLICY = NumericPolicy()


def _unwrap_0d(value):
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return value.item()
    return value


def require_positive(name: str, value) -> float:
    """Return ``value`` as a float, or raise DomainError unless finite and > 0."""
    value = _unwrap_0d(value)
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise DomainError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not np.isfinite(value) or value <= 0:
        raise DomainError(f"{name} must be finite and positive, got {value}")
    return value


def require_dimension(name: str, value) -> int:
    """Return ``value`` as an int, or raise InvalidDimension unless an integer >= 1."""
    value = _unwrap_0d(value)
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise InvalidDimension(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidDimension(f"{name} must be >= 1, got {value}")
    return int(value)


def require_bins(value) -> int:
    """Return ``value`` as an int, or raise InvalidBinCount unless an integer >= 1."""
    value = _unwrap_0d(value)
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise InvalidBinCount(f"bins must be an integer, got {value!r}")
    if value < 1:
        raise InvalidBinCount(f"bins must be >= 1, got {value}")
    return int(value)


def as_float_array(name: str, values) -> np.ndarray:
    """Convert to a 1-D float array, rejecting NaN and infinities."""
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        arr = arr.ravel()
    if not np.all(np.isfinite(arr)):
        raise DomainError(f"{name} must contain only finite values")
    return arr


def safe_sqrt(x: ArrayLike) -> ArrayLike:
    """
    Square root with negative rounding residue clamped to zero.

    Products such as ``(λ₊ - x)(x - λ₋)`` can come out as ``-1e-17`` at the
    support edges; those evaluate to 0 instead of NaN.
    """
    return np.sqrt(np.maximum(x, 0.0))


def safe_log(x: ArrayLike, floor: float = DEFAULT_POLICY.log_floor) -> ArrayLike:
    """Natural logarithm with the argument floored at ``floor``."""
    return np.log(np.maximum(x, floor))


def as_output(value: np.ndarray, scalar_input: bool):
    """Return a Python scalar when the caller passed a scalar."""
    if scalar_input:
        return value.item()
    return value


def histogram_edges(lo: float, hi: float, k: int) -> np.ndarray:
    """
    Edges of ``k`` equal-width bins partitioning ``[lo, hi]``.

    The outer edges are pinned to ``lo`` and ``hi`` exactly so the observed
    extremes always fall inside the partition.
    """
    span = hi - lo
    if np.isfinite(span):
        edges = lo + span * np.arange(k + 1) / k
    else:
        # range wider than the largest float; interpolate instead
        t = np.arange(k + 1) / k
        edges = lo * (1 - t) + hi * t
    edges[0] = lo
    edges[-1] = hi
    return edges


def histogram_bin_width(lo: float, hi: float, k: int) -> float:
    """Width of one of ``k`` equal bins over ``[lo, hi]``, without overflow."""
    span = hi - lo
    if np.isfinite(span):
        return span / k
    return hi / k - lo / k


def bin_counts(values: np.ndarray, edges: np.ndarray) -> np.ndarray:
    """
    Count values per bin.

    Bins are half-open ``[e_i, e_{i+1})`` except the last, which is closed
    so that ``max(values)`` is counted.
    """
    k = len(edges) - 1
    idx = np.searchsorted(edges, values, side="right") - 1
    idx = np.clip(idx, 0, k - 1)
    return np.bincount(idx, minlength=k)


def require_off_axis(z) -> np.ndarray:
    """Convert ``z`` to a complex array, raising DomainError on real points."""
    z = np.asarray(z, dtype=complex)
    if not np.all(np.isfinite(z)):
        raise DomainError("z must be finite")
    if np.any(z.imag == 0):
        raise DomainError("z must have a nonzero imaginary part; the transform "
                          "has poles on the real axis")
    return z


def stieltjes_branch(root_a: np.ndarray, root_b: np.ndarray, z: np.ndarray) -> np.ndarray:
    """
    Pick the physical root of a quadratic Stieltjes equation.

    The transform of a probability measure maps the upper half-plane to
    itself, so the root whose imaginary part has the sign of ``Im z`` is kept.
    """
    sign = np.where(z.imag >= 0.0, 1.0, -1.0)
    return np.where(sign * root_a.imag > 0.0, root_a, root_b)


def as_points(x):
    """
    Convert evaluation points to a float array.

    Returns
    -------
    points : np.ndarray
    scalar : bool
        Whether ``x`` was a scalar.
    """
    scalar = np.ndim(x) == 0
    points = np.asarray(x, dtype=float)
    if np.any(np.isnan(points)):
        raise DomainError("evaluation points must not contain NaN")
    return points, scalar
