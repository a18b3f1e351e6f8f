"""Microplate data model.

A plate is an ordered, row-major collection of wells.  Standard and unknown
wells point into the plate's group lists by index; the group carries the
known concentration (standards) and a free-text label.

The plate is owned by whatever edits it.  Nothing in this package mutates a
plate: helpers that change values return a new one.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Sequence


class SampleRole(enum.Enum):
    """What a well contributes to the analysis."""

    UNUSED = "unused"
    BLANK = "blank"  # background signal
    CONTROL = "control"  # nominal zero dose
    STANDARD = "standard"  # known concentration, calibrates the curve
    UNKNOWN = "unknown"  # concentration to estimate


@dataclass(frozen=True)
class Sample:
    """A single well."""

    role: SampleRole = SampleRole.UNUSED
    group: int = 0  # index into the plate's standard or unknown groups
    value: float | None = None


@dataclass(frozen=True)
class Group:
    """A set of wells sharing a concentration (standards) or a label."""

    concentration: float | None = None  # standards only
    label: str = ""


@dataclass(frozen=True)
class Microplate:
    """A ``width`` x ``height`` plate with its group definitions."""

    width: int
    height: int
    samples: tuple[Sample, ...]
    standard_groups: tuple[Group, ...] = (Group(),)
    unknown_groups: tuple[Group, ...] = (Group(),)
    name: str = ""
    description: str = ""
    metadata: dict[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"plate dimensions must be positive, got {self.width}x{self.height}"
            )
        # Accept lists from callers but store immutable tuples
        object.__setattr__(self, "samples", tuple(self.samples))
        object.__setattr__(self, "standard_groups", tuple(self.standard_groups))
        object.__setattr__(self, "unknown_groups", tuple(self.unknown_groups))
        if len(self.samples) != self.width * self.height:
            raise ValueError(
                f"plate of {self.width}x{self.height} needs "
                f"{self.width * self.height} samples, got {len(self.samples)}"
            )

    @classmethod
    def new(cls, width: int, height: int, *, name: str = "") -> Microplate:
        """Empty plate: every well unused, one blank group of each kind."""
        return cls(
            width=width,
            height=height,
            samples=tuple(Sample() for _ in range(width * height)),
            name=name,
        )

    def well_index(self, row: int, col: int) -> int:
        """Position of ``(row, col)`` in :attr:`samples`."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(
                f"well ({row}, {col}) is outside a {self.width}x{self.height} plate"
            )
        return row * self.width + col

    def sample_at(self, row: int, col: int) -> Sample:
        return self.samples[self.well_index(row, col)]

    def with_values(self, grid: Sequence[Sequence[float | None]]) -> Microplate:
        """Return a copy whose well values are taken from a row-major grid.

        The grid may be smaller than the plate; wells it does not cover keep
        their current values.
        """
        if len(grid) > self.height:
            raise ValueError(f"grid has {len(grid)} rows, plate has {self.height}")
        samples = list(self.samples)
        for row, values in enumerate(grid):
            if len(values) > self.width:
                raise ValueError(
                    f"grid row {row} has {len(values)} values, plate has {self.width}"
                )
            for col, value in enumerate(values):
                idx = row * self.width + col
                samples[idx] = replace(samples[idx], value=value)
        return replace(self, samples=tuple(samples))

    def wells(self, role: SampleRole) -> list[int]:
        """Indices of all wells with the given role."""
        return [i for i, s in enumerate(self.samples) if s.role is role]

    def describe(self) -> str:
        """One-line human-readable overview of the plate layout."""
        counts = {role: len(self.wells(role)) for role in SampleRole}
        used = ", ".join(
            f"{counts[role]} {role.value}"
            for role in SampleRole
            if role is not SampleRole.UNUSED and counts[role]
        )
        title = self.name or "Microplate"
        return f"{title} ({self.width}x{self.height}): {used or 'no wells assigned'}"

