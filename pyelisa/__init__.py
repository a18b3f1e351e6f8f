"""
PyELISA: four-parameter logistic quantification of ELISA plates.

Reads a microplate layout with blank, control, standard and unknown wells,
fits a 4PL calibration curve to the standards and back-calculates the
concentrations of the unknowns.

Usage:
    from pyelisa import plate, regression
"""

__version__ = "0.1.0"

from pyelisa import plate
from pyelisa import regression
from pyelisa._logging import configure_logging
from pyelisa.plate import Microplate, SampleRole, Sample, Group
from pyelisa.regression import Regression, fit_regression

__all__ = [
    "__version__",
    "plate",
    "regression",
    "configure_logging",
    "Microplate",
    "SampleRole",
    "Sample",
    "Group",
    "Regression",
    "fit_regression",
]
