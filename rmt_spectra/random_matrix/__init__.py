"""
Random matrix laws, ensemble samplers and the eigensolver adapter.
"""

from .marchenko_pastur import (marchenko_pastur_density, marchenko_pastur_support,
                               marchenko_pastur_cdf, marchenko_pastur_stieltjes,
                               fit_marchenko_pastur, marchenko_pastur_outliers,
                               expected_condition_number, MPSupport, MPFit)
from .wigner import (wigner_semicircle_density, wigner_semicircle_cdf,
                     wigner_semicircle_stieltjes, semicircle_radius)
from .ensembles import sample_wishart, sample_goe, wishart_eigenvalues, goe_eigenvalues
from .eigen import Eigensolver, ScipyEigensolver, NumpyEigensolver, decompose

__all__ = [
    "marchenko_pastur_density", "marchenko_pastur_support", "marchenko_pastur_cdf",
    "marchenko_pastur_stieltjes", "fit_marchenko_pastur", "marchenko_pastur_outliers",
    "expected_condition_number", "MPSupport", "MPFit",
    "wigner_semicircle_density", "wigner_semicircle_cdf", "wigner_semicircle_stieltjes",
    "semicircle_radius",
    "sample_wishart", "sample_goe", "wishart_eigenvalues", "goe_eigenvalues",
    "Eigensolver", "ScipyEigensolver", "NumpyEigensolver", "decompose"
]
