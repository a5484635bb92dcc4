"""Unit tests for spacing ratios, empirical densities and the Stieltjes transform."""

import numpy as np
import pytest
from scipy import integrate

from rmt_spectra.analysis.density import SpectralDensity, empirical_spectral_density
from rmt_spectra.analysis.spacing import (GOE_MEAN_RATIO, POISSON_MEAN_RATIO,
                                          bounded_spacing_ratios, level_spacing_ratios,
                                          mean_spacing_ratio, spacing_ratio_surmise)
from rmt_spectra.analysis.stieltjes import stieltjes_density, stieltjes_transform
from rmt_spectra.core.errors import (DegenerateSpacing, DomainError, InsufficientData,
                                     InvalidBinCount)
from rmt_spectra.core.numerics import NumericPolicy
from rmt_spectra.random_matrix.ensembles import goe_eigenvalues, wishart_eigenvalues
from rmt_spectra.random_matrix.marchenko_pastur import marchenko_pastur_stieltjes
from rmt_spectra.random_matrix.wigner import wigner_semicircle_stieltjes


@pytest.fixture
def goe_spectrum():
    """Normalised GOE spectrum (semicircle of radius 2)."""
    return goe_eigenvalues(600, np.random.default_rng(21), normalize=True)


@pytest.fixture
def poisson_spectrum():
    """Sorted i.i.d. uniform levels (uncorrelated)."""
    return np.sort(np.random.default_rng(22).uniform(0, 1, 4000))


# ---------------------------------------------------------------- spacing ratios

def test_spacing_ratios_known_values():
    ratios = level_spacing_ratios([1.0, 2.0, 4.0, 7.0])
    np.testing.assert_array_equal(ratios, [2.0, 1.5])


def test_spacing_ratios_length(goe_spectrum):
    assert len(level_spacing_ratios(goe_spectrum)) == len(goe_spectrum) - 2


@pytest.mark.parametrize("eigenvalues", [[], [1.0], [1.0, 2.0]])
def test_spacing_ratios_insufficient_data(eigenvalues):
    with pytest.raises(InsufficientData):
        level_spacing_ratios(eigenvalues)


def test_spacing_ratios_degenerate():
    with pytest.raises(DegenerateSpacing) as excinfo:
        level_spacing_ratios([1.0, 1.0, 2.0])
    assert excinfo.value.index == 1

    with pytest.raises(DegenerateSpacing) as excinfo:
        level_spacing_ratios([1.0, 2.0, 2.0, 3.0])
    assert excinfo.value.index == 2


def test_spacing_ratios_zero_numerator_allowed():
    np.testing.assert_array_equal(level_spacing_ratios([1.0, 2.0, 2.0]), [0.0])


def test_spacing_ratio_tolerance_policy():
    levels = [1e6, 1e6 + 1e-10, 1e6 + 1.0]

    with pytest.raises(DegenerateSpacing):
        level_spacing_ratios(levels)

    ratios = level_spacing_ratios(levels, policy=NumericPolicy(spacing_rtol=0.0))
    assert ratios[0] > 1e9


def test_spacing_ratio_small_numerator_not_snapped():
    levels = [1e6, 1e6 + 1.0, 1e6 + 1.0 + 1e-10]
    ratios = level_spacing_ratios(levels)

    assert 0.0 < ratios[0] < 1e-9
    assert 0.0 < bounded_spacing_ratios(levels)[0] < 1e-9


def test_spacing_ratios_require_ascending():
    with pytest.raises(DomainError):
        level_spacing_ratios([3.0, 1.0, 2.0])


def test_bounded_spacing_ratios():
    np.testing.assert_allclose(bounded_spacing_ratios([1.0, 2.0, 4.0, 7.0]), [0.5, 2 / 3])


def test_bounded_ratios_in_unit_interval(goe_spectrum):
    r = bounded_spacing_ratios(goe_spectrum)
    assert np.all((r >= 0) & (r <= 1))


def test_mean_spacing_ratio_goe_vs_poisson(goe_spectrum, poisson_spectrum):
    r_goe = mean_spacing_ratio(goe_spectrum)
    r_poisson = mean_spacing_ratio(poisson_spectrum)

    assert r_goe == pytest.approx(GOE_MEAN_RATIO, abs=0.04)
    assert r_poisson == pytest.approx(POISSON_MEAN_RATIO, abs=0.02)
    assert r_goe > r_poisson
    assert isinstance(r_goe, float)


@pytest.mark.parametrize("beta", [0, 1, 2, 4])
def test_spacing_surmise_normalised(beta):
    integral, _ = integrate.quad(spacing_ratio_surmise, 0, np.inf, args=(beta,))
    assert integral == pytest.approx(1.0, abs=1e-6)


def test_spacing_surmise_values():
    assert spacing_ratio_surmise(0.0, beta=1) == 0.0
    assert spacing_ratio_surmise(0.0, beta=0) == pytest.approx(1.0)
    assert spacing_ratio_surmise(-1.0, beta=1) == 0.0
    assert spacing_ratio_surmise(np.array([0.5, 1.0]), beta=2).shape == (2,)

    with pytest.raises(DomainError):
        spacing_ratio_surmise(1.0, beta=3)


# ---------------------------------------------------------------- empirical density

def test_empirical_density_known_partition():
    esd = empirical_spectral_density([0.0, 0.0, 1.0, 2.0, 3.0], 3)

    np.testing.assert_allclose(esd.edges, [0.0, 1.0, 2.0, 3.0])
    np.testing.assert_allclose(esd.centers, [0.5, 1.5, 2.5])
    np.testing.assert_allclose(esd.density, [0.4, 0.2, 0.4])
    assert esd.bin_width == pytest.approx(1.0)
    assert esd.mass() == pytest.approx(1.0)
    assert len(esd) == 3


def test_empirical_density_degenerate_sample():
    esd = empirical_spectral_density([2.5, 2.5, 2.5], 10)

    assert isinstance(esd, SpectralDensity)
    np.testing.assert_allclose(esd.edges, [2.0, 3.0])
    np.testing.assert_allclose(esd.centers, [2.5])
    np.testing.assert_allclose(esd.density, [1.0])
    assert esd.bin_width == 1.0
    assert esd.mass() == 1.0


@pytest.mark.parametrize("bins", [1, 7, 37, 200])
def test_empirical_density_normalised(bins):
    sample = np.random.default_rng(bins).normal(size=1000)
    esd = empirical_spectral_density(sample, bins)

    assert len(esd) == bins
    assert esd.edges[0] == sample.min()
    assert esd.edges[-1] == sample.max()
    assert esd.mass() == pytest.approx(1.0, abs=1e-12)
    counts = esd.density * len(sample) * esd.bin_width
    np.testing.assert_allclose(counts, np.round(counts), atol=1e-9)


def test_empirical_density_range_wider_than_float_max():
    esd = empirical_spectral_density([-1e308, 0.0, 1e308], 2)

    np.testing.assert_array_equal(esd.edges, [-1e308, 0.0, 1e308])
    np.testing.assert_allclose(esd.centers, [-5e307, 5e307])
    assert np.isfinite(esd.bin_width)
    assert esd.bin_width == pytest.approx(1e308)
    np.testing.assert_allclose(esd.density * esd.bin_width, [1 / 3, 2 / 3])
    assert esd.mass() == pytest.approx(1.0)

    with pytest.raises(DomainError):
        empirical_spectral_density([-1e308, 1e308], 1)


def test_empirical_density_order_independent():
    sample = np.random.default_rng(0).uniform(size=50)
    a = empirical_spectral_density(sample, 5)
    b = empirical_spectral_density(sample[::-1], 5)
    np.testing.assert_array_equal(a.density, b.density)


@pytest.mark.parametrize("bins", [0, -2, 2.5, True])
def test_empirical_density_invalid_bins(bins):
    with pytest.raises(InvalidBinCount):
        empirical_spectral_density([1.0, 2.0], bins)


def test_empirical_density_bad_eigenvalues():
    with pytest.raises(InsufficientData):
        empirical_spectral_density([], 3)
    with pytest.raises(DomainError):
        empirical_spectral_density([1.0, np.nan], 3)


# ---------------------------------------------------------------- Stieltjes transform

def test_stieltjes_known_value():
    expected = 0.5 * (1 / (0 - 1j) + 1 / (1 - 1j))
    assert stieltjes_transform([0.0, 1.0], 1j) == pytest.approx(expected)
    assert isinstance(stieltjes_transform([0.0, 1.0], 1j), complex)


@pytest.mark.parametrize("z", [0.5, 0.5 + 0j, np.array([1j, 2.0])])
def test_stieltjes_rejects_real_axis(z):
    with pytest.raises(DomainError):
        stieltjes_transform([0.0, 1.0], z)


def test_stieltjes_rejects_overflow_near_eigenvalue():
    with pytest.raises(DomainError):
        stieltjes_transform([0.5, 1.0], 0.5 + 5e-324j)
    with pytest.raises(DomainError):
        stieltjes_transform([0.5, 1.0], np.array([2.0 + 1j, 1.0 - 5e-324j]))


def test_stieltjes_array_and_symmetry():
    eigs = [-1.0, 0.5, 2.0]
    z = np.array([[1 + 1j, -2 + 0.1j], [0.5 + 3j, 4 - 1j]])
    m = stieltjes_transform(eigs, z)

    assert m.shape == (2, 2)
    np.testing.assert_allclose(stieltjes_transform(eigs, np.conj(z)), np.conj(m))
    assert stieltjes_transform(eigs, -2 + 0.1j) == pytest.approx(m[0, 1])


def test_stieltjes_empty():
    with pytest.raises(InsufficientData):
        stieltjes_transform([], 1j)


def test_stieltjes_wishart_matches_mp():
    eigs = wishart_eigenvalues(400, 800, np.random.default_rng(17))
    z = 1.0 + 0.5j

    assert stieltjes_transform(eigs, z) == pytest.approx(
        marchenko_pastur_stieltjes(z, 0.5), abs=0.02)


def test_stieltjes_density_goe(goe_spectrum):
    x = np.array([-1.0, 0.0, 1.0])
    eta = 0.1
    expected = np.imag(wigner_semicircle_stieltjes(x + 1j * eta, 2.0)) / np.pi

    np.testing.assert_allclose(stieltjes_density(goe_spectrum, x, eta), expected, atol=0.02)
    assert isinstance(stieltjes_density(goe_spectrum, 0.0, eta), float)

    with pytest.raises(DomainError):
        stieltjes_density(goe_spectrum, 0.0, eta=0.0)
