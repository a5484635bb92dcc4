"""
RMT Spectra
===========

Numerical primitives from random matrix theory for spectral analysis
of covariance-like matrices:

- Eigenvalue density laws (Marchenko-Pastur, Wigner semicircle)
- Ensemble sampling (Wishart, Gaussian Orthogonal Ensemble)
- Empirical diagnostics (level spacing ratios, histogram densities,
  Stieltjes transform)

Random sources and the symmetric eigensolver are injected per call;
there is no global state.
"""

import logging

__version__ = "0.1.0"

from . import core
from . import random_matrix
from . import analysis

from .core.errors import (RMTError, DomainError, InvalidDimension, InsufficientData,
                          DegenerateSpacing, InvalidBinCount)
from .random_matrix import (marchenko_pastur_density, marchenko_pastur_support,
                            wigner_semicircle_density, sample_wishart, sample_goe,
                            decompose)
from .analysis import level_spacing_ratios, empirical_spectral_density, stieltjes_transform

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "core", "random_matrix", "analysis",
    "RMTError", "DomainError", "InvalidDimension", "InsufficientData",
    "DegenerateSpacing", "InvalidBinCount",
    "marchenko_pastur_density", "marchenko_pastur_support", "wigner_semicircle_density",
    "sample_wishart", "sample_goe", "decompose",
    "level_spacing_ratios", "empirical_spectral_density", "stieltjes_transform"
]
