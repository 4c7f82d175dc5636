"""Tests for value classification and array homogeneity."""

import sys
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tomlwriter import (
    MixedArrayTypesError,
    NestedTableArrayError,
    NilArrayElementError,
    UnrepresentableTypeError,
)
from tomlwriter.classify import classify, element_kind
from tomlwriter.types import Key, Kind


@dataclass
class Point:
    x: int
    y: int


class Stamp(datetime):
    def marshal_text(self):
        return b"never used"


class TestClassify:
    """Test the value to kind mapping."""

    @pytest.mark.parametrize(
        "value, kind",
        [
            (True, Kind.BOOLEAN),
            (0, Kind.INTEGER),
            (1.5, Kind.FLOAT),
            ("s", Kind.STRING),
            (datetime(2020, 1, 1, tzinfo=timezone.utc), Kind.DATETIME),
            ([], Kind.ARRAY),
            ([1, 2], Kind.ARRAY),
            ([[1], [2]], Kind.ARRAY),
            ([{"a": 1}], Kind.ARRAY_OF_TABLES),
            ([Point(1, 2)], Kind.ARRAY_OF_TABLES),
            ({}, Kind.TABLE),
            (Point(1, 2), Kind.TABLE),
            (None, Kind.ABSENT),
        ],
    )
    def test_kinds(self, value, kind):
        assert classify(value) is kind

    def test_datetime_takes_priority_over_marshaler(self):
        assert classify(Stamp(2020, 1, 1)) is Kind.DATETIME

    def test_marshaler_takes_priority_over_shape(self):
        @dataclass
        class Id:
            n: int

            def marshal_text(self):
                return str(self.n)

        assert classify(Id(3)) is Kind.STRING

    @pytest.mark.parametrize("value", [date(2020, 1, 1), b"x", frozenset(), 1j])
    def test_unrepresentable(self, value):
        with pytest.raises(UnrepresentableTypeError) as exc_info:
            classify(value, Key(("a", "b")))
        assert "a.b" in str(exc_info.value)

    def test_table_like(self):
        assert Kind.TABLE.is_table_like
        assert Kind.ARRAY_OF_TABLES.is_table_like
        assert not Kind.ARRAY.is_table_like


class TestElementKind:
    """Test array homogeneity rules."""

    @pytest.mark.parametrize(
        "values, kind",
        [
            ([True, False], Kind.BOOLEAN),
            ([1, 2, 3], Kind.INTEGER),
            ((1.0, 2.0), Kind.FLOAT),
            (["a"], Kind.STRING),
            ([[1], ["a"]], Kind.ARRAY),
            ([[[1]], [[2, 3]]], Kind.ARRAY),
            ([{"x": 1}, Point(1, 2)], Kind.TABLE),
        ],
    )
    def test_homogeneous(self, values, kind):
        assert element_kind(values) is kind

    def test_empty(self):
        assert element_kind([]) is None

    def test_mixed_reported_against_first(self):
        with pytest.raises(MixedArrayTypesError):
            element_kind([1, 2, "x", None])

    def test_absent_before_mixed(self):
        with pytest.raises(NilArrayElementError):
            element_kind([1, None, "x"])

    def test_array_of_tables_as_element(self):
        with pytest.raises(NestedTableArrayError):
            element_kind([[1, 2], [{"x": 1}]])

    def test_deep_table_inside_arrays(self):
        with pytest.raises(NestedTableArrayError):
            element_kind([[[{"x": 1}]]])

    def test_error_carries_key(self):
        with pytest.raises(MixedArrayTypesError) as exc_info:
            element_kind([1, "x"], Key(("arr",)))
        assert exc_info.value.key == ("arr",)
