"""Error types raised while reading a microplate.

Validation is first-failure-wins: the aggregator raises the first problem it
meets and never returns a partial result.  Every validation error carries a
message suitable for showing to the user as-is.
"""

from __future__ import annotations


class PlateError(ValueError):
    """Base class for all microplate errors."""


class PlateValidationError(PlateError):
    """A microplate cannot be used for a 4PL fit."""

    default_message = "Microplate is not valid for four parameter analysis."

    def __init__(
        self,
        message: str | None = None,
        *,
        well: int | None = None,
        group: int | None = None,
    ) -> None:
        self.well = well
        self.group = group
        super().__init__(message or self.default_message)


class UnassignedValue(PlateValidationError):
    default_message = "Microplate has a sample without a value."


class InvalidValue(PlateValidationError):
    default_message = "Microplate has a sample with an invalid value."


class UnassignedConcentration(PlateValidationError):
    default_message = "Microplate has a standard sample without a concentration."


class InvalidConcentration(PlateValidationError):
    default_message = "Microplate has a standard sample with an invalid concentration."


class NotEnoughStandards(PlateValidationError):
    default_message = (
        "Microplate does not have enough standards for four parameter analysis."
    )


class ControlTooBig(PlateValidationError):
    default_message = "The control is greater than one of the standard measurements."


class BlankTooBig(PlateValidationError):
    default_message = "The blank is greater than one of the standard measurements."


class GroupIndexError(PlateValidationError):
    """A sample refers to a group that does not exist on the plate."""

    default_message = "Microplate has a sample assigned to a missing group."


# ---------------------------------------------------------------------------
# Value-grid parsing
# ---------------------------------------------------------------------------

class GridError(PlateError):
    """Base class for value-grid parsing errors."""


class GridWidthError(GridError):
    """A grid row has more values than the plate has columns."""


class GridHeightError(GridError):
    """The grid has more rows than the plate."""


class GridValueError(GridError):
    """A grid cell could not be parsed as a number."""
