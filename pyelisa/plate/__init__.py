"""
Microplate layout, aggregation and validation.

A plate assigns each well a role (blank, control, standard, unknown) and,
for standards and unknowns, a group.  :func:`aggregate_plate` turns the
per-well readings into the validated means a 4PL calibration needs.
"""

from pyelisa.plate._common import (
    SampleRole,
    Sample,
    Group,
    Microplate,
)
from pyelisa.plate._errors import (
    PlateError,
    PlateValidationError,
    UnassignedValue,
    InvalidValue,
    UnassignedConcentration,
    InvalidConcentration,
    NotEnoughStandards,
    ControlTooBig,
    BlankTooBig,
    GroupIndexError,
    GridError,
    GridWidthError,
    GridHeightError,
    GridValueError,
)
from pyelisa.plate._aggregate import aggregate_plate, PlateAggregate, MIN_STANDARDS
from pyelisa.plate._grid import parse_value_grid, format_value_grid

__all__ = [
    "SampleRole",
    "Sample",
    "Group",
    "Microplate",
    "PlateAggregate",
    "MIN_STANDARDS",
    "aggregate_plate",
    "parse_value_grid",
    "format_value_grid",
    "PlateError",
    "PlateValidationError",
    "UnassignedValue",
    "InvalidValue",
    "UnassignedConcentration",
    "InvalidConcentration",
    "NotEnoughStandards",
    "ControlTooBig",
    "BlankTooBig",
    "GroupIndexError",
    "GridError",
    "GridWidthError",
    "GridHeightError",
    "GridValueError",
]
