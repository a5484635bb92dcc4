"""
Random matrix ensemble samplers.

Wishart: W = XᵀX for a p×n standard Gaussian X. The eigenvalues of W/p
follow the Marchenko-Pastur law with ratio q = n/p.

GOE: G = (A + Aᵀ)/√2 for an n×n standard Gaussian A. Off-diagonal
entries have variance 1 and diagonal entries variance 2; the spectrum
fills the semicircle of radius 2√n.

Both samplers return matrices that are symmetric bit-for-bit, not merely
up to rounding. Entropy comes from the ``rng`` argument only, drawn in
row-major order over X (Wishart) or A (GOE).
"""

import logging
from typing import Optional, Union

import numpy as np

from ..core.numerics import require_dimension
from ..core.random_source import RandomSource, as_random_source
from .eigen import Eigensolver, decompose

logger = logging.getLogger(__name__)

RngLike = Union[None, int, np.random.Generator, RandomSource]


def sample_wishart(n: int, p: int, rng: RngLike = None) -> np.ndarray:
    """
    Sample a Wishart matrix W = XᵀX.

    Parameters
    ----------
    n : int
        Dimension of W (columns of X).
    p : int
        Degrees of freedom (rows of X).
    rng : int, np.random.Generator or RandomSource, optional
        Source of standard-normal deviates.

    Returns
    -------
    np.ndarray
        n×n symmetric positive-semidefinite matrix.

    Examples
    --------
    >>> W = sample_wishart(4, 10, rng=0)
    >>> bool(np.all(W == W.T))
    True
    """
    n = require_dimension("n", n)
    p = require_dimension("p", p)
    source = as_random_source(rng)

    X = source.standard_normal((p, n))
    logger.debug("sample_wishart: X shape %s", X.shape)

    # W_ij = Σ_k X_ki X_kj, taken from the upper triangle and mirrored
    W = X.T @ X
    upper = np.triu(W)
    return upper + np.triu(W, 1).T


def sample_goe(n: int, rng: RngLike = None, normalize: bool = False) -> np.ndarray:
    """
    Sample a Gaussian Orthogonal Ensemble matrix.

    Parameters
    ----------
    n : int
        Matrix dimension.
    rng : int, np.random.Generator or RandomSource, optional
        Source of standard-normal deviates.
    normalize : bool
        If True, divide by √n so the semicircle radius is 2 for every n.

    Returns
    -------
    np.ndarray
        n×n real symmetric matrix.
    """
    n = require_dimension("n", n)
    source = as_random_source(rng)

    A = source.standard_normal((n, n))
    logger.debug("sample_goe: n=%d normalize=%s", n, normalize)

    # A_ij + A_ji == A_ji + A_ij exactly, so symmetry is preserved bit-for-bit
    G = (A + A.T) / np.sqrt(2)

    if normalize:
        G = G / np.sqrt(n)

    return G


def wishart_eigenvalues(n: int, p: int, rng: RngLike = None,
                        solver: Optional[Eigensolver] = None,
                        normalize: bool = True) -> np.ndarray:
    """
    Sample a Wishart matrix and return its ascending spectrum.

    Parameters
    ----------
    n, p : int
        Shape parameters as in ``sample_wishart``.
    rng : int, np.random.Generator or RandomSource, optional
        Source of standard-normal deviates.
    solver : Eigensolver, optional
        Eigensolver backend.
    normalize : bool
        If True, return the spectrum of W/p, which follows the
        Marchenko-Pastur law with q = n/p and σ² = 1.

    Returns
    -------
    np.ndarray
        n ascending eigenvalues.
    """
    W = sample_wishart(n, p, rng)
    if normalize:
        W = W / p
    return decompose(W, solver)


def goe_eigenvalues(n: int, rng: RngLike = None,
                    solver: Optional[Eigensolver] = None,
                    normalize: bool = False) -> np.ndarray:
    """Sample a GOE matrix and return its ascending spectrum."""
    return decompose(sample_goe(n, rng, normalize=normalize), solver)
