"""The 4PL response function and its inverse.

.. math::
    y = d + \\frac{a - d}{1 + (x / c)^b}

``a`` is the zero-dose asymptote, ``d`` the infinite-dose asymptote, ``c``
the inflection dose and ``b`` the slope at ``c``.  With ``b > 0`` the curve
runs from ``a`` at low dose to ``d`` at high dose, which is the usual
sandwich-ELISA shape.

Inside the fitter the curve is written on the log-dose scale,

.. math::
    y = d + (a - d) \\, \\sigma, \\qquad
    \\sigma = \\frac{1}{1 + \\exp\\bigl(b (\\ln x - \\ln c)\\bigr)}

which is the same function.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.special import expit


def _safe_log_dose(dose: NDArray[np.floating]) -> NDArray[np.floating]:
    """Compute log(dose) with dose=0 mapped to -inf (IEEE 754 compliant)."""
    with np.errstate(divide="ignore"):
        return np.where(dose > 0, np.log(dose), -np.inf)


def logistic(
    log_dose: ArrayLike,
    b: float,
    log_c: float,
) -> NDArray[np.floating]:
    """``1 / (1 + exp(b (log_dose - log_c)))`` without overflow.

    Equals 1 at zero dose (``log_dose = -inf``) for ``b > 0``.
    """
    log_dose = np.asarray(log_dose, dtype=np.float64)
    return expit(-b * (log_dose - log_c))


def four_pl(
    dose: ArrayLike,
    a: float,
    b: float,
    c: float,
    d: float,
) -> NDArray[np.floating]:
    """Evaluate the 4PL curve at *dose*.

    Parameters
    ----------
    dose : array
        Dose (concentration) values.  May contain zeros.
    a : float
        Zero-dose asymptote.
    b : float
        Slope factor.
    c : float
        Inflection dose (> 0).
    d : float
        Infinite-dose asymptote.

    Returns
    -------
    NDArray
        Predicted response values.
    """
    dose = np.asarray(dose, dtype=np.float64)
    sigmoid = logistic(_safe_log_dose(dose), b, np.log(c))
    return d + (a - d) * sigmoid


def inverse_four_pl(
    response: ArrayLike,
    a: float,
    b: float,
    c: float,
    d: float,
) -> NDArray[np.floating]:
    """Dose that produces *response* on the 4PL curve.

    ``x = c * ((a - d) / (y - d) - 1) ** (1 / b)``

    Responses outside the open interval between the asymptotes have no
    real solution; they come back as NaN (inf at ``y == d``, 0 at ``y == a``)
    rather than raising.
    """
    y = np.asarray(response, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        base = (a - d) / (y - d) - 1.0
        return c * np.power(base, 1.0 / b)
