"""Plain-text value grids, as pasted from a plate reader export.

One line per plate row, values separated by whitespace.  ``_`` marks an
empty well and a comma is accepted as decimal separator (``0,25``).
"""

from __future__ import annotations

from typing import Sequence

from pyelisa.plate._errors import GridHeightError, GridValueError, GridWidthError

MISSING = "_"


def parse_value_grid(text: str, width: int, height: int) -> list[list[float | None]]:
    """Parse a pasted grid of measurements.

    Parameters
    ----------
    text : str
        Grid text.  Rows may be shorter than *width*.
    width, height : int
        Plate dimensions the grid must fit in.

    Returns
    -------
    list of list
        Row-major values, ``None`` for missing wells.

    Raises
    ------
    GridWidthError, GridHeightError
        The grid does not fit the plate.
    GridValueError
        A token is neither a number nor ``_``.
    """
    grid: list[list[float | None]] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        row: list[float | None] = []
        for token in line.split():
            if token == MISSING:
                row.append(None)
                continue
            try:
                row.append(float(token.replace(",", ".")))
            except ValueError:
                raise GridValueError(
                    f"line {line_no}: cannot read {token!r} as a number"
                ) from None
        if len(row) > width:
            raise GridWidthError(
                f"line {line_no} has {len(row)} values, plate is {width} wide"
            )
        grid.append(row)

    if len(grid) > height:
        raise GridHeightError(f"grid has {len(grid)} rows, plate is {height} high")
    return grid


def format_value_grid(grid: Sequence[Sequence[float | None]]) -> str:
    """Render *grid* in the format :func:`parse_value_grid` reads."""
    lines = []
    for row in grid:
        lines.append(" ".join(MISSING if v is None else repr(float(v)) for v in row))
    return "\n".join(lines) + ("\n" if lines else "")
