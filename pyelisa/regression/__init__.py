"""
Four-parameter logistic calibration for immunoassays.

Fits ``y = d + (a - d) / (1 + (x / c)^b)`` to blank-corrected standards by
batch gradient descent in log-dose space, scores the fit and inverts the
curve to estimate unknown concentrations.
"""

from pyelisa.regression._common import (
    FourPLParams,
    FitStatistics,
    Regression,
    CalibrationRow,
    BackfitRow,
)
from pyelisa.regression._models import four_pl, inverse_four_pl
from pyelisa.regression._fit import (
    DescentConfig,
    DescentResult,
    blank_correct,
    fit_four_pl,
)
from pyelisa.regression._stats import fit_statistics
from pyelisa.regression._inverse import (
    backfit,
    recovery,
    calibration_table,
    unknowns_table,
)
from pyelisa.regression._regression import fit_regression

__all__ = [
    "FourPLParams",
    "FitStatistics",
    "Regression",
    "CalibrationRow",
    "BackfitRow",
    "DescentConfig",
    "DescentResult",
    "four_pl",
    "inverse_four_pl",
    "blank_correct",
    "fit_four_pl",
    "fit_statistics",
    "backfit",
    "recovery",
    "calibration_table",
    "unknowns_table",
    "fit_regression",
]
