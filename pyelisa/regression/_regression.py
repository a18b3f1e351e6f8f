"""Calibrate a microplate: validate, fit, back-calculate, score."""

from __future__ import annotations

import logging

import numpy as np

from pyelisa.plate import Microplate, aggregate_plate
from pyelisa.regression._common import Regression
from pyelisa.regression._fit import (
    DescentConfig,
    ProgressCallback,
    blank_correct,
    fit_four_pl,
)
from pyelisa.regression._inverse import backfit_unknowns
from pyelisa.regression._stats import fit_statistics

logger = logging.getLogger(__name__)


def fit_regression(
    plate: Microplate,
    *,
    config: DescentConfig | None = None,
    callback: ProgressCallback | None = None,
) -> Regression:
    """Fit a 4PL calibration curve to a microplate.

    Parameters
    ----------
    plate : Microplate
        Plate with blank, control, standard and unknown wells.  Read only.
    config : DescentConfig or None
        Gradient-descent settings.
    callback : callable or None
        Progress observer, see :func:`fit_four_pl`.

    Returns
    -------
    Regression

    Raises
    ------
    PlateValidationError
        If the plate cannot be fitted.  Raised before any numerical work.

    Examples
    --------
    >>> reg = fit_regression(plate)                       # doctest: +SKIP
    >>> print(reg.summary())                              # doctest: +SKIP
    """
    logger.debug("Calibrating %s", plate.describe())
    corrected = blank_correct(aggregate_plate(plate))

    dose = np.array([x for x, _ in corrected.standards], dtype=np.float64)
    response = np.array([y for _, y in corrected.standards], dtype=np.float64)

    logger.info(
        "Fitting 4PL curve to %d standards (%d unknown groups)",
        len(dose), len(corrected.unknowns),
    )
    descent = fit_four_pl(
        dose, response, control=corrected.control, config=config, callback=callback
    )
    params = descent.params
    logger.info(
        "Fit finished after %d iterations: a=%g b=%g c=%g d=%g",
        descent.n_iter, params.a, params.b, params.c, params.d,
    )

    return Regression(
        params=params,
        blank=corrected.blank,
        control=corrected.control,
        standards=corrected.standards,
        unknowns=backfit_unknowns(params, corrected.unknowns),
        stats=fit_statistics(params, dose, response),
        n_iter=descent.n_iter,
    )
