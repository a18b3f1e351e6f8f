"""Shared plate builders for the test suite."""

import pytest

from pyelisa.plate import Group, Microplate, Sample, SampleRole


def build_plate(
    blanks=(),
    controls=(),
    standards=(),
    unknowns=(),
    width=12,
    height=8,
):
    """Lay wells out in order: blanks, controls, standards, unknowns.

    ``standards`` is a sequence of ``(concentration, [values])`` and
    ``unknowns`` a sequence of ``(label, [values])``; each entry becomes one
    group.
    """
    samples = []
    for v in blanks:
        samples.append(Sample(SampleRole.BLANK, 0, v))
    for v in controls:
        samples.append(Sample(SampleRole.CONTROL, 0, v))
    for g, (_, values) in enumerate(standards):
        for v in values:
            samples.append(Sample(SampleRole.STANDARD, g, v))
    for g, (_, values) in enumerate(unknowns):
        for v in values:
            samples.append(Sample(SampleRole.UNKNOWN, g, v))

    n_wells = width * height
    assert len(samples) <= n_wells
    samples.extend(Sample() for _ in range(n_wells - len(samples)))

    return Microplate(
        width=width,
        height=height,
        samples=samples,
        standard_groups=[Group(concentration=c) for c, _ in standards] or [Group()],
        unknown_groups=[Group(label=label) for label, _ in unknowns] or [Group()],
    )


# Dilution series used across the end-to-end tests
ELISA_STANDARDS = [
    (100.0, [2.0, 2.0]),
    (50.0, [1.8, 1.8]),
    (25.0, [1.5, 1.5]),
    (12.5, [1.0, 1.0]),
    (6.25, [0.6, 0.6]),
    (3.125, [0.3, 0.3]),
    (1.5625, [0.15, 0.15]),
    (0.78125, [0.08, 0.08]),
]


@pytest.fixture(scope="session")
def plate_builder():
    return build_plate


@pytest.fixture(scope="session")
def elisa_plate():
    """Blank 0.05, control 0.07, eight standards, one unknown at 0.9."""
    return build_plate(
        blanks=[0.04, 0.06],
        controls=[0.07, 0.07],
        standards=ELISA_STANDARDS,
        unknowns=[("Sample A", [0.88, 0.92])],
    )


@pytest.fixture(scope="session")
def elisa_standards():
    return ELISA_STANDARDS
