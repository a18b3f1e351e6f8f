"""Shared result types for 4PL calibration."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

PARAM_NAMES = ("a", "b", "c", "d")


@dataclass(frozen=True)
class FourPLParams:
    """Parameters of a fitted 4PL curve.

    ``y = d + (a - d) / (1 + (x / c)^b)``
    """

    a: float  # zero-dose asymptote
    b: float  # slope factor
    c: float  # inflection dose
    d: float  # infinite-dose asymptote

    def predict(self, dose: ArrayLike) -> NDArray[np.floating]:
        """Predict response at given dose levels."""
        from pyelisa.regression._models import four_pl

        return four_pl(dose, self.a, self.b, self.c, self.d)

    def inverse(self, response: ArrayLike) -> NDArray[np.floating]:
        """Back-calculate dose from response (NaN where not possible)."""
        from pyelisa.regression._models import inverse_four_pl

        return inverse_four_pl(response, self.a, self.b, self.c, self.d)

    def to_array(self) -> NDArray[np.floating]:
        return np.array([self.a, self.b, self.c, self.d], dtype=np.float64)

    @staticmethod
    def from_array(params: ArrayLike) -> FourPLParams:
        a, b, c, d = (float(p) for p in np.asarray(params, dtype=np.float64))
        return FourPLParams(a=a, b=b, c=c, d=d)

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.a, self.b, self.c, self.d))


@dataclass(frozen=True)
class FitStatistics:
    """Goodness of fit over the standards.

    ``r_squared`` is ``(1 - SSE / SS_total) ** 2``, the square of the
    classical coefficient of determination.
    """

    sse: float
    mse: float
    rmse: float
    sy_x: float  # +inf with exactly four standards
    r_squared: float


@dataclass(frozen=True)
class CalibrationRow:
    """A standard read back through the fitted curve."""

    name: str
    dose: float
    measurement: float  # blank corrected
    backfit: float
    recovery: float  # percent


@dataclass(frozen=True)
class BackfitRow:
    """An unknown group's estimated concentration."""

    label: str
    measurement: float  # blank corrected
    backfit: float

    @property
    def back_calculable(self) -> bool:
        return math.isfinite(self.backfit)


@dataclass(frozen=True)
class Regression:
    """Result of calibrating one microplate.

    All measurements stored here are blank corrected; ``blank`` keeps the
    raw blank mean that was subtracted.
    """

    params: FourPLParams
    blank: float
    control: float
    standards: tuple[tuple[float, float], ...]  # (dose, measurement), by dose
    unknowns: tuple[tuple[float, float, str], ...]  # (backfit, measurement, label)
    stats: FitStatistics
    n_iter: int

    @property
    def abcd(self) -> tuple[float, float, float, float]:
        p = self.params
        return (p.a, p.b, p.c, p.d)

    @property
    def n_standards(self) -> int:
        return len(self.standards)

    def predict(self, dose: ArrayLike) -> NDArray[np.floating]:
        """Blank-corrected response of the fitted curve at *dose*."""
        return self.params.predict(dose)

    def inverse(self, response: ArrayLike) -> NDArray[np.floating]:
        """Dose for a blank-corrected *response*."""
        return self.params.inverse(response)

    def summary(self) -> str:
        """Human-readable summary of the fit."""
        lines = [
            "Four parameter logistic fit",
            "",
            "Parameter estimates:",
        ]
        for name, val in zip(PARAM_NAMES, self.abcd):
            lines.append(f"  {name:>4s} = {val:>14.6g}")

        s = self.stats
        lines.append("")
        lines.append(f"  SSE  = {s.sse:.6g}")
        lines.append(f"  MSE  = {s.mse:.6g}")
        lines.append(f"  RMSE = {s.rmse:.6g}")
        lines.append(f"  Sy.x = {s.sy_x:.6g}")
        lines.append(f"  R^2  = {s.r_squared:.6f}")
        lines.append(f"  n    = {self.n_standards}")
        lines.append(f"  Blank = {self.blank:.6g}, control (corrected) = {self.control:.6g}")

        if self.unknowns:
            lines.append("")
            lines.append("Backfit concentrations:")
            for backfit, y, label in self.unknowns:
                name = label or "(unlabelled)"
                lines.append(f"  {name:<16s} y = {y:<10.4g} x = {backfit:.4g}")
        return "\n".join(lines)
