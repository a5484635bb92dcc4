"""
Spectral statistics computed from eigenvalue sequences.
"""

from .spacing import (level_spacing_ratios, bounded_spacing_ratios, mean_spacing_ratio,
                      spacing_ratio_surmise, GOE_MEAN_RATIO, POISSON_MEAN_RATIO)
from .density import empirical_spectral_density, SpectralDensity
from .stieltjes import stieltjes_transform, stieltjes_density

__all__ = [
    "level_spacing_ratios", "bounded_spacing_ratios", "mean_spacing_ratio",
    "spacing_ratio_surmise", "GOE_MEAN_RATIO", "POISSON_MEAN_RATIO",
    "empirical_spectral_density", "SpectralDensity",
    "stieltjes_transform", "stieltjes_density"
]
