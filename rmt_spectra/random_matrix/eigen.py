"""
Eigen-decomposition adapter.

The symmetric eigensolver is an injected collaborator. ``Eigensolver``
subclasses only provide the raw ``eigvalsh`` call; validation of the input
matrix and of the returned spectrum (length, finiteness, ascending order)
lives in ``Eigensolver.decompose`` so the contract holds for any backend.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
from scipy import linalg

from ..core.errors import DomainError, InvalidDimension
from ..core.numerics import DEFAULT_POLICY, NumericPolicy

logger = logging.getLogger(__name__)


class Eigensolver(ABC):
    """
    Abstract symmetric eigensolver.

    Parameters
    ----------
    policy : NumericPolicy, optional
        Tolerance policy; ``symmetry_rtol`` bounds the accepted asymmetry
        of caller-supplied matrices.
    """

    def __init__(self, policy: Optional[NumericPolicy] = None):
        self.policy = policy or DEFAULT_POLICY

    @abstractmethod
    def eigvalsh(self, matrix: np.ndarray) -> np.ndarray:
        """
        Eigenvalues of a real symmetric matrix, in any order.

        Parameters
        ----------
        matrix : np.ndarray
            Validated n×n finite symmetric matrix.

        Returns
        -------
        np.ndarray
            n real eigenvalues.
        """
        pass

    def decompose(self, matrix) -> np.ndarray:
        """
        Ascending eigenvalues of a symmetric matrix.

        Parameters
        ----------
        matrix : array_like
            n×n real symmetric matrix.

        Returns
        -------
        np.ndarray
            Read-only array of n eigenvalues in ascending order.

        Raises
        ------
        InvalidDimension
            If the input is not a non-empty square 2-D array.
        DomainError
            If the input has non-finite entries or is not symmetric.
        """
        A = np.asarray(matrix, dtype=float)

        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise InvalidDimension(f"Expected a square matrix, got shape {A.shape}")
        if A.shape[0] < 1:
            raise InvalidDimension("Matrix must be at least 1x1")
        if not np.all(np.isfinite(A)):
            raise DomainError("Matrix contains non-finite entries")

        scale = np.max(np.abs(A))
        asymmetry = np.max(np.abs(A - A.T))
        if asymmetry > self.policy.symmetry_rtol * scale:
            raise DomainError(f"Matrix is not symmetric (max |A - Aᵀ| = {asymmetry:.3e})")

        n = A.shape[0]
        logger.debug("%s: decomposing %dx%d matrix", type(self).__name__, n, n)

        eigenvalues = np.sort(np.asarray(self.eigvalsh(A), dtype=float))

        if eigenvalues.shape != (n,):
            raise RuntimeError(f"{type(self).__name__} returned {eigenvalues.shape[0]} "
                               f"eigenvalues for a {n}x{n} matrix")
        if not np.all(np.isfinite(eigenvalues)):
            raise RuntimeError(f"{type(self).__name__} returned non-finite eigenvalues")

        eigenvalues.setflags(write=False)
        return eigenvalues


class ScipyEigensolver(Eigensolver):
    """
    LAPACK symmetric solver via ``scipy.linalg.eigvalsh``.

    Parameters
    ----------
    driver : str, optional
        LAPACK driver passed to scipy ("ev", "evd", "evr", "evx").
    """

    def __init__(self, driver: Optional[str] = None,
                 policy: Optional[NumericPolicy] = None):
        super().__init__(policy)
        self.driver = driver

    def eigvalsh(self, matrix: np.ndarray) -> np.ndarray:
        return linalg.eigvalsh(matrix, driver=self.driver, check_finite=False)

    def __repr__(self) -> str:
        return f"ScipyEigensolver(driver={self.driver!r})"


class NumpyEigensolver(Eigensolver):
    """Symmetric solver via ``numpy.linalg.eigvalsh``."""

    def eigvalsh(self, matrix: np.ndarray) -> np.ndarray:
        return np.linalg.eigvalsh(matrix)

    def __repr__(self) -> str:
        return "NumpyEigensolver()"


def decompose(matrix, solver: Optional[Eigensolver] = None) -> np.ndarray:
    """
    Ascending eigenvalues of a symmetric matrix.

    Parameters
    ----------
    matrix : array_like
        n×n real symmetric matrix.
    solver : Eigensolver, optional
        Backend to use. Defaults to ``ScipyEigensolver()``.

    Returns
    -------
    np.ndarray
        Read-only array of n ascending eigenvalues.
    """
    if solver is None:
        solver = ScipyEigensolver()
    return solver.decompose(matrix)
