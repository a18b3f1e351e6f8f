"""Tests for aggregate_plate (means + validation)."""

import math

import pytest

from pyelisa.plate import (
    BlankTooBig,
    ControlTooBig,
    Group,
    GroupIndexError,
    InvalidConcentration,
    InvalidValue,
    Microplate,
    NotEnoughStandards,
    PlateValidationError,
    Sample,
    SampleRole,
    UnassignedConcentration,
    UnassignedValue,
    aggregate_plate,
)


FOUR_STANDARDS = [
    (1.0, [0.2]),
    (10.0, [0.8]),
    (100.0, [1.6]),
    (1000.0, [1.9]),
]


# ---------------------------------------------------------------------------
# Means
# ---------------------------------------------------------------------------

class TestMeans:

    def test_role_and_group_means(self, plate_builder):
        p = plate_builder(
            blanks=[0.04, 0.06],
            controls=[0.08, 0.10],
            standards=[(1.0, [0.2, 0.4]), (10.0, [0.8]), (100.0, [1.5, 1.7]),
                       (1000.0, [1.9])],
            unknowns=[("S1", [0.5, 0.7]), ("S2", [1.2])],
        )
        agg = aggregate_plate(p)
        assert agg.blank == pytest.approx(0.05)
        assert agg.control == pytest.approx(0.09)
        assert [x for x, _ in agg.standards] == [1.0, 10.0, 100.0, 1000.0]
        assert [y for _, y in agg.standards] == pytest.approx([0.3, 0.8, 1.6, 1.9])
        assert agg.unknowns[0][0] == 0.0
        assert agg.unknowns[0][1] == pytest.approx(0.6)
        assert agg.unknowns[0][2] == "S1"
        assert agg.unknowns[1] == (0.0, 1.2, "S2")

    def test_blank_and_control_default_to_zero(self, plate_builder):
        agg = aggregate_plate(plate_builder(standards=FOUR_STANDARDS))
        assert agg.blank == 0.0
        assert agg.control == 0.0

    def test_unused_wells_ignored(self, plate_builder):
        # unused wells have no value and that is fine
        p = plate_builder(standards=FOUR_STANDARDS)
        assert p.samples[-1].role is SampleRole.UNUSED
        assert p.samples[-1].value is None
        aggregate_plate(p)

    def test_empty_groups_dropped(self, plate_builder):
        p = plate_builder(
            standards=FOUR_STANDARDS + [(5000.0, [])],
            unknowns=[("empty", []), ("S2", [1.0])],
        )
        agg = aggregate_plate(p)
        assert len(agg.standards) == 4
        assert [label for _, _, label in agg.unknowns] == ["S2"]

    def test_plate_not_modified(self, plate_builder):
        p = plate_builder(blanks=[0.05], standards=FOUR_STANDARDS)
        before = p.samples
        aggregate_plate(p)
        assert p.samples is before
        assert p.samples[0].value == 0.05


class TestStandardOrder:

    def test_sorted_by_concentration(self, plate_builder):
        p = plate_builder(standards=[
            (100.0, [1.6]), (1.0, [0.2]), (1000.0, [1.9]), (10.0, [0.8]),
        ])
        agg = aggregate_plate(p)
        assert [x for x, _ in agg.standards] == [1.0, 10.0, 100.0, 1000.0]
        assert [y for _, y in agg.standards] == [0.2, 0.8, 1.6, 1.9]

    def test_ties_keep_group_order(self, plate_builder):
        p = plate_builder(standards=[
            (10.0, [0.9]), (1.0, [0.2]), (10.0, [0.7]), (100.0, [1.6]),
        ])
        agg = aggregate_plate(p)
        assert agg.standards == ((1.0, 0.2), (10.0, 0.9), (10.0, 0.7), (100.0, 1.6))

    def test_standard_min_is_weakest_response(self, plate_builder):
        # lowest dose is not the weakest signal
        p = plate_builder(standards=[
            (1.0, [0.3]), (2.0, [0.2]), (10.0, [0.8]), (100.0, [1.6]),
        ])
        agg = aggregate_plate(p)
        assert agg.standards[0] == (1.0, 0.3)
        assert agg.standard_min == 0.2

    def test_zero_concentration_allowed(self, plate_builder):
        p = plate_builder(standards=[(0.0, [0.1])] + FOUR_STANDARDS)
        agg = aggregate_plate(p)
        assert agg.standards[0] == (0.0, 0.1)


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------

class TestValueErrors:

    def test_unassigned_value(self, plate_builder):
        p = plate_builder(blanks=[None], standards=FOUR_STANDARDS)
        with pytest.raises(UnassignedValue) as exc:
            aggregate_plate(p)
        assert exc.value.well == 0

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_invalid_value(self, plate_builder, bad):
        p = plate_builder(standards=FOUR_STANDARDS, unknowns=[("S", [bad])])
        with pytest.raises(InvalidValue):
            aggregate_plate(p)

    def test_errors_are_value_errors(self, plate_builder):
        p = plate_builder(controls=[None], standards=FOUR_STANDARDS)
        with pytest.raises(ValueError, match="without a value"):
            aggregate_plate(p)


class TestGroupIndex:

    def test_standard_group_out_of_range(self):
        samples = [Sample(SampleRole.STANDARD, 3, 0.5)] + [Sample()] * 3
        p = Microplate(width=2, height=2, samples=samples,
                       standard_groups=[Group(1.0)])
        with pytest.raises(GroupIndexError) as exc:
            aggregate_plate(p)
        assert exc.value.group == 3
        assert exc.value.well == 0

    def test_unknown_group_out_of_range(self, plate_builder):
        p = plate_builder(standards=FOUR_STANDARDS)
        samples = list(p.samples)
        samples[-1] = Sample(SampleRole.UNKNOWN, 1, 0.5)
        p = Microplate(width=p.width, height=p.height, samples=samples,
                       standard_groups=p.standard_groups,
                       unknown_groups=p.unknown_groups)
        with pytest.raises(GroupIndexError, match="unknown group 1"):
            aggregate_plate(p)

    def test_negative_group(self):
        samples = [Sample(SampleRole.UNKNOWN, -1, 0.5)] + [Sample()] * 3
        p = Microplate(width=2, height=2, samples=samples)
        with pytest.raises(GroupIndexError):
            aggregate_plate(p)

    def test_groups_not_extended(self):
        samples = [Sample(SampleRole.STANDARD, 1, 0.5)] + [Sample()] * 3
        p = Microplate(width=2, height=2, samples=samples)
        with pytest.raises(GroupIndexError):
            aggregate_plate(p)
        assert len(p.standard_groups) == 1


class TestConcentrationErrors:

    def test_unassigned_concentration(self, plate_builder):
        p = plate_builder(standards=FOUR_STANDARDS + [(None, [2.0])])
        with pytest.raises(UnassignedConcentration) as exc:
            aggregate_plate(p)
        assert exc.value.group == 4

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -1.0])
    def test_invalid_concentration(self, plate_builder, bad):
        p = plate_builder(standards=[(bad, [0.5])] + FOUR_STANDARDS)
        with pytest.raises(InvalidConcentration):
            aggregate_plate(p)

    def test_unreferenced_group_not_checked(self, plate_builder):
        p = plate_builder(standards=FOUR_STANDARDS + [(None, [])])
        agg = aggregate_plate(p)
        assert len(agg.standards) == 4


class TestNotEnoughStandards:

    def test_three_standards(self, plate_builder):
        p = plate_builder(standards=FOUR_STANDARDS[:3])
        with pytest.raises(NotEnoughStandards, match="3 usable"):
            aggregate_plate(p)

    def test_wells_without_group_data_do_not_count(self, plate_builder):
        p = plate_builder(standards=FOUR_STANDARDS[:3] + [(1000.0, [])])
        with pytest.raises(NotEnoughStandards):
            aggregate_plate(p)

    def test_exactly_four_is_enough(self, plate_builder):
        agg = aggregate_plate(plate_builder(standards=FOUR_STANDARDS))
        assert len(agg.standards) == 4


class TestBlankControlBounds:

    def test_control_too_big(self, plate_builder):
        p = plate_builder(controls=[0.25], standards=FOUR_STANDARDS)
        with pytest.raises(ControlTooBig):
            aggregate_plate(p)

    def test_blank_too_big(self, plate_builder):
        p = plate_builder(blanks=[0.25], standards=FOUR_STANDARDS)
        with pytest.raises(BlankTooBig):
            aggregate_plate(p)

    def test_equal_to_weakest_standard_is_allowed(self, plate_builder):
        p = plate_builder(blanks=[0.2], controls=[0.2], standards=FOUR_STANDARDS)
        agg = aggregate_plate(p)
        assert agg.blank == agg.control == agg.standard_min

    def test_bound_uses_weakest_response_not_lowest_dose(self, plate_builder):
        standards = [(1.0, [0.5]), (2.0, [0.15]), (10.0, [0.8]), (100.0, [1.6])]
        p = plate_builder(controls=[0.3], standards=standards)
        with pytest.raises(ControlTooBig):
            aggregate_plate(p)


# ---------------------------------------------------------------------------
# Which error wins
# ---------------------------------------------------------------------------

class TestValidationOrder:
    """The first failure in the documented order is the one raised."""

    def test_unassigned_value_before_not_enough_standards(self, plate_builder):
        p = plate_builder(blanks=[None], standards=FOUR_STANDARDS[:2])
        with pytest.raises(UnassignedValue):
            aggregate_plate(p)

    def test_plate_order_decides_between_value_errors(self, plate_builder):
        p = plate_builder(blanks=[math.nan], controls=[None], standards=FOUR_STANDARDS)
        with pytest.raises(InvalidValue):
            aggregate_plate(p)

    def test_group_index_checked_in_plate_order(self):
        samples = [
            Sample(SampleRole.STANDARD, 5, 0.5),
            Sample(SampleRole.BLANK, 0, None),
            Sample(),
            Sample(),
        ]
        p = Microplate(width=2, height=2, samples=samples)
        # well 0 is checked first and its group is invalid
        with pytest.raises(GroupIndexError):
            aggregate_plate(p)

    def test_missing_value_checked_before_its_group(self):
        samples = [Sample(SampleRole.STANDARD, 5, None)] + [Sample()] * 3
        p = Microplate(width=2, height=2, samples=samples)
        with pytest.raises(UnassignedValue):
            aggregate_plate(p)

    def test_concentration_before_not_enough_standards(self, plate_builder):
        p = plate_builder(standards=[(None, [0.5])])
        with pytest.raises(UnassignedConcentration):
            aggregate_plate(p)

    def test_concentration_errors_in_group_order(self, plate_builder):
        p = plate_builder(standards=[(math.nan, [0.5]), (None, [0.6])] + FOUR_STANDARDS)
        with pytest.raises(InvalidConcentration):
            aggregate_plate(p)

    def test_not_enough_standards_before_control(self, plate_builder):
        p = plate_builder(controls=[5.0], standards=FOUR_STANDARDS[:3])
        with pytest.raises(NotEnoughStandards):
            aggregate_plate(p)

    def test_control_before_blank(self, plate_builder):
        p = plate_builder(blanks=[5.0], controls=[5.0], standards=FOUR_STANDARDS)
        with pytest.raises(ControlTooBig):
            aggregate_plate(p)

    def test_all_errors_share_a_base(self, plate_builder):
        p = plate_builder(blanks=[5.0], standards=FOUR_STANDARDS)
        with pytest.raises(PlateValidationError, match="blank is greater"):
            aggregate_plate(p)
