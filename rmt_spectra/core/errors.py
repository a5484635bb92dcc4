"""
Error types raised by the spectral toolkit.

All errors derive from ``RMTError`` which itself is a ``ValueError``, so
existing ``except ValueError`` handlers keep working. Every check is made
before any computation starts; no partial result is ever returned alongside
an error.
"""


class RMTError(ValueError):
    """Base class for all random matrix theory errors."""


class DomainError(RMTError):
    """Scale, ratio or evaluation parameter outside the valid domain."""


class InvalidDimension(RMTError):
    """Matrix dimension is not a positive integer or shape is not square."""


class InsufficientData(RMTError):
    """Eigenvalue sequence too short for the requested statistic."""


class DegenerateSpacing(RMTError):
    """
    Two consecutive eigenvalues coincide, so a spacing ratio is undefined.

    Attributes
    ----------
    index : int
        Position of the zero gap: ``eigenvalues[index] - eigenvalues[index - 1]``.
    """

    def __init__(self, message: str, index: int):
        super().__init__(message)
        self.index = index


class InvalidBinCount(RMTError):
    """Histogram bin count is not a positive integer."""
