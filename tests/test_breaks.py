"""Tests for class break computation and class lookup."""

import pytest

from choropleth.core.breaks import (
    ClassificationMethod,
    calculate_breaks,
    class_of,
    list_methods,
    natural_breaks,
)
from choropleth.core.exceptions import (
    ClassificationError,
    InvalidClassCountError,
    UnknownMethodError,
)

VALUES = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]


class TestEqualInterval:
    def test_five_classes(self):
        breaks = calculate_breaks(VALUES, 5, "equalInterval")
        assert breaks == pytest.approx([1, 2.8, 4.6, 6.4, 8.2, 10])

    def test_last_break_is_exact_max(self):
        values = [0.1, 0.2, 0.7]
        breaks = calculate_breaks(values, 3, ClassificationMethod.EQUAL_INTERVAL)
        assert breaks[-1] == 0.7
        assert breaks[0] == 0.1

    def test_constant_values(self):
        assert calculate_breaks([4, 4, 4], 3) == [4, 4, 4, 4]


class TestQuantile:
    def test_two_classes(self):
        assert calculate_breaks(VALUES, 2, "quantile") == [1, 6, 10]

    def test_more_classes_than_values(self):
        breaks = calculate_breaks([1, 2, 3], 5, "quantile")
        assert len(breaks) == 6
        assert breaks[0] == 1
        assert breaks[-1] == 3
        assert breaks == sorted(breaks)


class TestNaturalBreaks:
    def test_break_placed_between_distinct_values(self):
        assert natural_breaks([1, 2, 3, 4, 5, 6], 2) == [1, 4.5, 6]

    def test_plateaus(self):
        values = [1, 1, 1, 5, 5, 5, 9, 9, 9]
        assert calculate_breaks(values, 3, "naturalBreaks") == [1, 7, 9, 9]

    def test_no_more_values_than_classes(self):
        # The values themselves are the breaks, closed by the maximum
        assert calculate_breaks([3, 7], 5, "naturalBreaks") == [3, 7, 7]


@pytest.mark.parametrize("method", list(ClassificationMethod))
def test_breaks_are_bounded_and_sorted(method):
    values = [2, 3, 3, 5, 8, 13, 21, 34, 55, 89, 144]
    breaks = calculate_breaks(values, 4, method)
    assert breaks[0] == values[0]
    assert breaks[-1] == values[-1]
    assert breaks == sorted(breaks)
    assert len(breaks) == 5


@pytest.mark.parametrize("method", list(ClassificationMethod))
def test_empty_values(method):
    assert calculate_breaks([], 5, method) == []


@pytest.mark.parametrize("num_classes", [0, -3, 2.5, True, None])
def test_invalid_class_count(num_classes):
    with pytest.raises(InvalidClassCountError):
        calculate_breaks(VALUES, num_classes)


def test_invalid_class_count_checked_even_without_values():
    with pytest.raises(InvalidClassCountError):
        calculate_breaks([], 0)


def test_unknown_method():
    with pytest.raises(UnknownMethodError) as excinfo:
        calculate_breaks(VALUES, 3, "jenks")
    assert isinstance(excinfo.value, ClassificationError)
    assert "equalInterval" in str(excinfo.value)


class TestMethodCoercion:
    def test_by_value(self):
        assert ClassificationMethod.coerce("quantile") is ClassificationMethod.QUANTILE

    def test_by_name(self):
        assert ClassificationMethod.coerce("natural_breaks") is ClassificationMethod.NATURAL_BREAKS

    def test_member(self):
        member = ClassificationMethod.EQUAL_INTERVAL
        assert ClassificationMethod.coerce(member) is member

    def test_labels(self):
        assert list_methods() == {
            "equalInterval": "Equal interval",
            "quantile": "Quantile",
            "naturalBreaks": "Natural breaks",
        }


class TestClassOf:
    BREAKS = [0, 10, 20, 30]

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, 0),
            (5, 0),
            (10, 0),  # upper bound closed
            (10.01, 1),
            (20, 1),
            (25, 2),
            (30, 2),
        ],
    )
    def test_lookup(self, value, expected):
        assert class_of(value, self.BREAKS) == expected

    def test_below_range(self):
        assert class_of(-5, self.BREAKS) == 0

    def test_above_range(self):
        assert class_of(99, self.BREAKS) == 2
