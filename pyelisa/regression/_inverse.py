"""Back-calculating concentrations from the fitted curve.

A measurement outside the range the curve can produce has no dose; the
backfit is then NaN (or inf at an asymptote) and the caller decides how to
present it.  Nothing here raises on such values.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyelisa.regression._common import (
    BackfitRow,
    CalibrationRow,
    FourPLParams,
    Regression,
)

logger = logging.getLogger(__name__)


def backfit(params: FourPLParams, response: ArrayLike) -> NDArray[np.floating]:
    """Dose estimates for blank-corrected *response* values."""
    return params.inverse(response)


def recovery(backfit_dose: float, known_dose: float) -> float:
    """Percent of the known dose recovered by the backfit.

    Returns NaN for a zero known dose.
    """
    if known_dose == 0:
        return float("nan")
    return backfit_dose / known_dose * 100.0


def backfit_unknowns(
    params: FourPLParams,
    unknowns: tuple[tuple[float, float, str], ...],
) -> tuple[tuple[float, float, str], ...]:
    """Fill in the concentration slot of ``(x, measurement, label)`` triples."""
    if not unknowns:
        return ()
    doses = backfit(params, [y for _, y, _ in unknowns])
    result = tuple(
        (float(x), y, label) for x, (_, y, label) in zip(doses, unknowns)
    )
    for x, y, label in result:
        if not math.isfinite(x):
            logger.warning(
                "Unknown %r (corrected signal %g) is outside the curve; "
                "concentration not back-calculable",
                label, y,
            )
    return result


def calibration_table(regression: Regression) -> list[CalibrationRow]:
    """Standards read back through the curve, with percent recovery."""
    if not regression.standards:
        return []
    doses = np.array([x for x, _ in regression.standards])
    ys = np.array([y for _, y in regression.standards])
    fitted = backfit(regression.params, ys)
    return [
        CalibrationRow(
            name=f"Standard {i + 1}",
            dose=float(x),
            measurement=float(y),
            backfit=float(bf),
            recovery=recovery(float(bf), float(x)),
        )
        for i, (x, y, bf) in enumerate(zip(doses, ys, fitted))
    ]


def unknowns_table(regression: Regression) -> list[BackfitRow]:
    """Unknown groups with their backfit concentrations."""
    return [
        BackfitRow(label=label, measurement=y, backfit=x)
        for x, y, label in regression.unknowns
    ]
