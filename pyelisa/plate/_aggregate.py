"""Reduce a microplate to per-role, per-group means and validate them.

The checks run in a fixed order and the first failure is raised:

1.  per well, in plate order: value present, value finite, group index valid;
2.  per referenced standard group, in list order: concentration present,
    finite and non-negative;
3.  at least four standard groups with data;
4.  control mean, then blank mean, not above the weakest standard response.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from pyelisa.plate._common import Microplate, SampleRole
from pyelisa.plate._errors import (
    BlankTooBig,
    ControlTooBig,
    GroupIndexError,
    InvalidConcentration,
    InvalidValue,
    NotEnoughStandards,
    UnassignedConcentration,
    UnassignedValue,
)

logger = logging.getLogger(__name__)

MIN_STANDARDS = 4


@dataclass(frozen=True)
class PlateAggregate:
    """Validated means ready for curve fitting.

    ``standards`` is sorted ascending by dose.  ``unknowns`` hold a ``0.0``
    placeholder concentration until the curve is inverted.
    """

    blank: float
    control: float
    standards: tuple[tuple[float, float], ...]
    unknowns: tuple[tuple[float, float, str], ...]

    @property
    def standard_min(self) -> float:
        """Weakest standard response (not necessarily the lowest dose)."""
        return min(y for _, y in self.standards)


def _mean(total: float, count: int) -> float:
    return total / count if count else 0.0


def aggregate_plate(plate: Microplate) -> PlateAggregate:
    """Validate *plate* and compute the means a 4PL fit needs.

    Parameters
    ----------
    plate : Microplate
        The plate to read.  It is not modified.

    Returns
    -------
    PlateAggregate

    Raises
    ------
    PlateValidationError
        The first problem found, as one of its typed subclasses.
    """
    n_std = len(plate.standard_groups)
    n_unk = len(plate.unknown_groups)

    blank_sum, blank_n = 0.0, 0
    control_sum, control_n = 0.0, 0
    std_sum, std_n = [0.0] * n_std, [0] * n_std
    unk_sum, unk_n = [0.0] * n_unk, [0] * n_unk

    for well, sample in enumerate(plate.samples):
        role = sample.role
        if role is SampleRole.UNUSED:
            continue

        value = sample.value
        if value is None:
            raise UnassignedValue(well=well)
        if not math.isfinite(value):
            raise InvalidValue(well=well)

        if role is SampleRole.BLANK:
            blank_sum += value
            blank_n += 1
        elif role is SampleRole.CONTROL:
            control_sum += value
            control_n += 1
        else:
            n_groups = n_std if role is SampleRole.STANDARD else n_unk
            if not 0 <= sample.group < n_groups:
                raise GroupIndexError(
                    f"Well {well} refers to {role.value} group {sample.group}, "
                    f"but the plate has {n_groups}.",
                    well=well,
                    group=sample.group,
                )
            if role is SampleRole.STANDARD:
                std_sum[sample.group] += value
                std_n[sample.group] += 1
            else:
                unk_sum[sample.group] += value
                unk_n[sample.group] += 1

    blank = _mean(blank_sum, blank_n)
    control = _mean(control_sum, control_n)

    standards: list[tuple[float, float]] = []
    for i, group in enumerate(plate.standard_groups):
        if std_n[i] == 0:
            continue
        conc = group.concentration
        if conc is None:
            raise UnassignedConcentration(group=i)
        if not math.isfinite(conc) or conc < 0:
            raise InvalidConcentration(group=i)
        standards.append((float(conc), std_sum[i] / std_n[i]))

    unknowns = tuple(
        (0.0, unk_sum[i] / unk_n[i], group.label)
        for i, group in enumerate(plate.unknown_groups)
        if unk_n[i]
    )

    if len(standards) < MIN_STANDARDS:
        raise NotEnoughStandards(
            f"Microplate has {len(standards)} usable standards; "
            f"four parameter analysis needs at least {MIN_STANDARDS}."
        )

    # list.sort is stable: equal concentrations keep plate order
    standards.sort(key=lambda point: point[0])

    aggregate = PlateAggregate(
        blank=blank,
        control=control,
        standards=tuple(standards),
        unknowns=unknowns,
    )

    standard_min = aggregate.standard_min
    if control > standard_min:
        raise ControlTooBig()
    if blank > standard_min:
        raise BlankTooBig()

    logger.debug(
        "Aggregated plate: blank=%g control=%g standards=%d unknowns=%d",
        blank, control, len(standards), len(unknowns),
    )
    return aggregate
