"""4PL curve fitting by batch gradient descent.

Works on blank-corrected standards in log-dose space, so the inflection
point is fitted as ``ln c`` and exponentiated at the end.  Every iteration
uses all standards (batch descent) with a fixed learning rate per parameter;
by default the iteration budget is fixed and there is no early stop, so the
same plate always yields exactly the same curve.

After each update the zero-dose asymptote ``a`` is clamped between the
corrected control and the weakest corrected standard.

Starting values
---------------
1.  ``a``: corrected control mean.
2.  ``b``: 1.
3.  ``d``: strongest corrected standard response.
4.  ``c``: midpoint (log scale) of the adjacent pair of standards with the
    steepest positive slope; ``ln c = 0`` if no slope is positive.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyelisa.plate import PlateAggregate
from pyelisa.regression._common import FourPLParams
from pyelisa.regression._models import _safe_log_dose, logistic

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, FourPLParams], None]


@dataclass(frozen=True)
class DescentConfig:
    """Gradient-descent settings.

    ``tol=None`` runs the full ``iterations`` budget.  With a tolerance the
    descent stops once no parameter moves by more than ``tol`` in one step.
    """

    iterations: int = 100_000
    lr_a: float = 0.1
    lr_b: float = 1.0
    lr_c: float = 1.0
    lr_d: float = 0.1
    tol: float | None = None
    report_every: int = 1000

    def __post_init__(self) -> None:
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        for name in ("lr_a", "lr_b", "lr_c", "lr_d"):
            lr = getattr(self, name)
            if not (math.isfinite(lr) and lr > 0):
                raise ValueError(f"{name} must be positive and finite, got {lr}")
        if self.tol is not None and not self.tol > 0:
            raise ValueError(f"tol must be positive, got {self.tol}")
        if self.report_every < 1:
            raise ValueError(f"report_every must be >= 1, got {self.report_every}")


@dataclass(frozen=True)
class DescentResult:
    """Fitted parameters and how the descent ended."""

    params: FourPLParams
    n_iter: int
    converged: bool  # only meaningful with a tolerance


# ---------------------------------------------------------------------------
# Blank correction
# ---------------------------------------------------------------------------

def blank_correct(aggregate: PlateAggregate) -> PlateAggregate:
    """Subtract the blank mean from standards, unknowns and control.

    The returned aggregate keeps the raw ``blank`` so it can be reported.
    """
    blank = aggregate.blank
    return replace(
        aggregate,
        control=aggregate.control - blank,
        standards=tuple((x, y - blank) for x, y in aggregate.standards),
        unknowns=tuple((x, y - blank, label) for x, y, label in aggregate.unknowns),
    )


# ---------------------------------------------------------------------------
# Starting values
# ---------------------------------------------------------------------------

def _initial_log_c(log_dose: NDArray, response: NDArray) -> float:
    """Log-dose midpoint of the steepest rising segment."""
    with np.errstate(divide="ignore", invalid="ignore"):
        slopes = np.diff(response) / np.diff(log_dose)
        midpoints = (log_dose[:-1] + log_dose[1:]) / 2.0
    slopes = np.nan_to_num(slopes, nan=0.0)
    if slopes.size == 0 or not np.max(slopes) > 0:
        return 0.0
    return float(midpoints[int(np.argmax(slopes))])


def _initial_params(
    log_dose: NDArray,
    response: NDArray,
    control: float,
) -> NDArray[np.floating]:
    """Starting ``[a, b, ln c, d]``."""
    return np.array(
        [control, 1.0, _initial_log_c(log_dose, response), float(np.max(response))],
        dtype=np.float64,
    )


def _params(a: float, b: float, log_c: float, d: float) -> FourPLParams:
    return FourPLParams(a=float(a), b=float(b), c=float(np.exp(log_c)), d=float(d))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fit_four_pl(
    dose: ArrayLike,
    response: ArrayLike,
    *,
    control: float,
    config: DescentConfig | None = None,
    callback: ProgressCallback | None = None,
) -> DescentResult:
    """Fit a 4PL curve to blank-corrected standards.

    Parameters
    ----------
    dose : array
        Standard concentrations, ascending.  Zero is allowed.
    response : array
        Blank-corrected standard measurements.
    control : float
        Blank-corrected control mean; lower bound for ``a``.
    config : DescentConfig or None
        Descent settings; defaults to 100,000 fixed iterations.
    callback : callable or None
        Called as ``callback(iteration, params)`` every
        ``config.report_every`` iterations, with ``c`` on the dose scale.

    Returns
    -------
    DescentResult
    """
    if config is None:
        config = DescentConfig()

    dose = np.asarray(dose, dtype=np.float64)
    y = np.asarray(response, dtype=np.float64)

    if dose.ndim != 1 or y.ndim != 1:
        raise ValueError("dose and response must be 1-D arrays")
    if dose.shape != y.shape:
        raise ValueError(
            f"dose and response must have same shape, got {dose.shape} and {y.shape}"
        )
    if len(dose) < 4:
        raise ValueError(f"Need at least 4 standards for a 4PL fit, got {len(dose)}")

    n = len(dose)
    x_hat = _safe_log_dose(dose)
    zero_dose = np.isneginf(x_hat)

    a_lo = float(control)
    a_hi = float(np.min(y))
    a, b, log_c, d = _initial_params(x_hat, y, a_lo)
    logger.debug(
        "Initial guess: a=%g b=%g c=%g d=%g", a, b, float(np.exp(log_c)), d
    )

    converged = False
    n_iter = config.iterations
    for i in range(config.iterations):
        t = x_hat - log_c
        sigmoid = logistic(x_hat, b, log_c)
        resid = y - d - (a - d) * sigmoid
        # exp(b t) * sigmoid^2, written so it cannot overflow
        slope = sigmoid * (1.0 - sigmoid)
        t = np.where(zero_dose, 0.0, t)

        grad_a = -2.0 / n * np.sum(resid * sigmoid)
        grad_b = 2.0 * (a - d) / n * np.sum(resid * t * slope)
        grad_c = -2.0 * b * (a - d) / n * np.sum(resid * slope)
        grad_d = -2.0 / n * np.sum(resid * (1.0 - sigmoid))

        step_a = config.lr_a * grad_a
        step_b = config.lr_b * grad_b
        step_c = config.lr_c * grad_c
        step_d = config.lr_d * grad_d

        a_new = min(max(a - step_a, a_lo), a_hi)
        moved = max(abs(a_new - a), abs(step_b), abs(step_c), abs(step_d))
        a = a_new
        b -= step_b
        log_c -= step_c
        d -= step_d

        if i % config.report_every == 0:
            logger.debug("iter %d: a=%g b=%g ln(c)=%g d=%g", i, a, b, log_c, d)
            if callback is not None:
                callback(i, _params(a, b, log_c, d))

        if config.tol is not None and moved < config.tol:
            converged = True
            n_iter = i + 1
            break

    return DescentResult(
        params=_params(a, b, log_c, d), n_iter=n_iter, converged=converged
    )
