"""
Empirical Stieltjes transform.

    m(z) = (1/n) Σᵢ 1/(λᵢ - z)

The transform is only evaluated off the real axis; on the axis it has
poles at every eigenvalue and would need principal-value handling.
Its imaginary part at z = x + iη, divided by π, is the spectral density
smoothed by a Cauchy kernel of width η (Stieltjes inversion).
"""

import numpy as np

from ..core.errors import DomainError, InsufficientData
from ..core.numerics import (as_float_array, as_output, as_points, require_off_axis,
                             require_positive)


def stieltjes_transform(eigenvalues, z):
    """
    Stieltjes transform of the empirical spectral measure.

    Parameters
    ----------
    eigenvalues : array_like
        Eigenvalue sample, at least one.
    z : complex or array_like
        Query point(s) with nonzero imaginary part.

    Returns
    -------
    complex or np.ndarray
        m(z), with the shape of ``z``.

    Raises
    ------
    DomainError
        If any z lies on the real axis, or so close to an eigenvalue that
        m(z) overflows.

    Examples
    --------
    >>> stieltjes_transform([0.0, 1.0], 1j)
    (0.25+0.75j)
    """
    eigenvalues = as_float_array("eigenvalues", eigenvalues)
    if len(eigenvalues) == 0:
        raise InsufficientData("Stieltjes transform needs at least one eigenvalue")

    scalar = np.ndim(z) == 0
    z = require_off_axis(z)

    flat_z = z.reshape(-1)
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        m = np.mean(1.0 / (eigenvalues[:, None] - flat_z[None, :]), axis=0)

    if not np.all(np.isfinite(m)):
        bad = flat_z[~np.isfinite(m)][0]
        raise DomainError(f"Stieltjes transform overflows at z = {bad}; "
                          f"Im z is too small for this spectrum")

    return as_output(m.reshape(z.shape), scalar)


def stieltjes_density(eigenvalues, x, eta: float = 1e-2):
    """
    Smoothed spectral density Im m(x + iη)/π.

    Parameters
    ----------
    eigenvalues : array_like
        Eigenvalue sample.
    x : float or array_like
        Real evaluation points.
    eta : float
        Imaginary offset (smoothing width), > 0.

    Returns
    -------
    float or np.ndarray
        Density estimate at each x.
    """
    eta = require_positive("eta", eta)
    x, scalar = as_points(x)

    m = stieltjes_transform(eigenvalues, np.atleast_1d(x) + 1j * eta)

    return as_output(np.imag(m).reshape(x.shape) / np.pi, scalar)
