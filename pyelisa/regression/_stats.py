"""Goodness-of-fit statistics over the calibration standards."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from pyelisa.regression._common import FitStatistics, FourPLParams

N_PARAMS = 4


def fit_statistics(
    params: FourPLParams,
    dose: ArrayLike,
    response: ArrayLike,
) -> FitStatistics:
    """SSE, MSE, RMSE, Sy.x and (squared) R² of a fitted curve.

    The curve is evaluated at the standards' doses (not log-transformed).

    ``Sy.x = sqrt(SSE / (n - 4))``.  With exactly four standards there are
    no residual degrees of freedom and Sy.x is ``+inf``, which is reported
    rather than raised.

    ``R² = (1 - SSE / SS_total) ** 2``, i.e. the usual coefficient of
    determination squared.
    """
    dose = np.asarray(dose, dtype=np.float64)
    y = np.asarray(response, dtype=np.float64)
    n = len(y)

    resid = y - params.predict(dose)
    sse = float(np.sum(resid**2))
    mse = sse / n
    rmse = float(np.sqrt(mse))

    dof = n - N_PARAMS
    sy_x = float(np.sqrt(sse / dof)) if dof > 0 else float("inf")

    ss_total = float(np.sum((y - np.mean(y)) ** 2))
    with np.errstate(divide="ignore", invalid="ignore"):
        r = 1.0 - np.float64(sse) / np.float64(ss_total)
    r_squared = float(r * r)

    return FitStatistics(sse=sse, mse=mse, rmse=rmse, sy_x=sy_x, r_squared=r_squared)
