"""Tests for the built-in comparison strategies.

Strategies are exercised directly and through compare_attr_values so the
dispatch-by-target-type path is covered as well.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from attrcheck.errors import ErrorCode
from attrcheck.validation import (
    CompareOp,
    compare_attr_values,
    compare_bool,
    compare_decimal,
    compare_empty_sequence,
    compare_float64,
    compare_int64,
    compare_ints,
    compare_string,
    compare_strings,
)
from attrcheck.values import (
    AttrType,
    BoolValue,
    Float64Value,
    Int64Value,
    ListValue,
    NumberValue,
    SetValue,
    StringValue,
)

ORDERED_OPS = [
    CompareOp.EQUAL,
    CompareOp.NOT_EQUAL,
    CompareOp.LESS_THAN,
    CompareOp.LESS_THAN_OR_EQUAL_TO,
    CompareOp.GREATER_THAN,
    CompareOp.GREATER_THAN_OR_EQUAL_TO,
]


def _strings(*items: str) -> tuple[StringValue, ...]:
    return tuple(StringValue(s) for s in items)


def _ints(*items: int) -> tuple[Int64Value, ...]:
    return tuple(Int64Value(i) for i in items)


def _code(result) -> ErrorCode:
    return result.unwrap_err().code


# ============================================================================
# CompareOp
# ============================================================================


class TestCompareOp:
    @pytest.mark.parametrize(
        "op, symbol",
        [
            (CompareOp.EQUAL, "=="),
            (CompareOp.NOT_EQUAL, "<>"),
            (CompareOp.LESS_THAN, "<"),
            (CompareOp.LESS_THAN_OR_EQUAL_TO, "<="),
            (CompareOp.GREATER_THAN, ">"),
            (CompareOp.GREATER_THAN_OR_EQUAL_TO, ">="),
            (CompareOp.ONE_OF, "|"),
            (CompareOp.NOT_ONE_OF, "^|"),
        ],
    )
    def test_symbol(self, op: CompareOp, symbol: str) -> None:
        assert str(op) == symbol

    def test_op_name(self) -> None:
        assert CompareOp.NOT_ONE_OF.op_name == "not_one_of"


# ============================================================================
# Scalar strategies
# ============================================================================


class TestCompareBool:
    @pytest.mark.parametrize(
        "op, target, ok",
        [
            (CompareOp.EQUAL, True, True),
            (CompareOp.EQUAL, False, False),
            (CompareOp.NOT_EQUAL, False, True),
            (CompareOp.NOT_EQUAL, True, False),
            (CompareOp.EQUAL, "true", True),
        ],
    )
    def test_grid(self, op: CompareOp, target, ok: bool) -> None:
        result = compare_bool(BoolValue(True), op, target)
        assert result.is_ok() is ok
        if not ok:
            assert _code(result) is ErrorCode.E1003_COMPARISON_FAILED

    def test_ordering_unsupported(self) -> None:
        result = compare_bool(BoolValue(True), CompareOp.LESS_THAN, True)
        assert _code(result) is ErrorCode.E1001_NO_COMPARISON_FUNC_REGISTERED

    def test_non_bool_attribute(self) -> None:
        result = compare_bool(Int64Value(1), CompareOp.EQUAL, True)
        assert _code(result) is ErrorCode.E1005_UNEXPECTED_ACTUAL_TYPE

    def test_uncoercible_target(self) -> None:
        result = compare_bool(BoolValue(True), CompareOp.EQUAL, "maybe")
        assert _code(result) is ErrorCode.E1004_UNEXPECTED_TARGET_TYPE


class TestCompareFloat64:
    @pytest.mark.parametrize(
        "op, ok",
        list(
            zip(
                ORDERED_OPS,
                [False, True, False, False, True, True],
            )
        ),
    )
    def test_grid(self, op: CompareOp, ok: bool) -> None:
        assert compare_float64(Float64Value(1.5), op, 1.0).is_ok() is ok

    @pytest.mark.parametrize(
        "value",
        [Int64Value(2), NumberValue(Decimal("2")), StringValue("2.0"), Float64Value(2.0)],
    )
    def test_attribute_kinds(self, value) -> None:
        assert compare_float64(value, CompareOp.EQUAL, 2.0).is_ok()

    def test_unconvertible_attribute(self) -> None:
        result = compare_float64(StringValue("abc"), CompareOp.EQUAL, 1.0)
        assert _code(result) is ErrorCode.E1002_TYPE_CONVERSION_FAILED

    def test_unsupported_op(self) -> None:
        result = compare_float64(Float64Value(1.0), CompareOp.ONE_OF, 1.0)
        assert _code(result) is ErrorCode.E1001_NO_COMPARISON_FUNC_REGISTERED

    def test_bad_target(self) -> None:
        result = compare_float64(Float64Value(1.0), CompareOp.EQUAL, "x")
        assert _code(result) is ErrorCode.E1004_UNEXPECTED_TARGET_TYPE

    def test_failure_metadata(self) -> None:
        error = compare_float64(Float64Value(1.0), CompareOp.GREATER_THAN, 2.0).unwrap_err()
        assert error.metadata["actual"] == 1.0
        assert error.metadata["expected"] == 2.0


class TestCompareInt64:
    @pytest.mark.parametrize(
        "op, ok",
        list(zip(ORDERED_OPS, [True, False, False, True, False, True])),
    )
    def test_grid(self, op: CompareOp, ok: bool) -> None:
        assert compare_int64(Int64Value(5), op, 5).is_ok() is ok

    def test_whole_float_attribute(self) -> None:
        assert compare_int64(Float64Value(3.0), CompareOp.EQUAL, 3).is_ok()

    def test_fractional_attribute_rejected(self) -> None:
        error = compare_int64(Float64Value(2.5), CompareOp.EQUAL, 2).unwrap_err()
        assert error.code is ErrorCode.E1002_TYPE_CONVERSION_FAILED
        assert error.matches(ErrorCode.E3003_PRECISION_LOSS)

    def test_fractional_attribute_truncated(self, allow_truncation) -> None:
        assert compare_int64(NumberValue(Decimal("2.9")), CompareOp.EQUAL, 2).is_ok()

    def test_fractional_target_rejected(self) -> None:
        result = compare_int64(Int64Value(2), CompareOp.EQUAL, 2.5)
        assert _code(result) is ErrorCode.E1004_UNEXPECTED_TARGET_TYPE

    def test_unsupported_op(self) -> None:
        result = compare_int64(Int64Value(2), CompareOp.NOT_ONE_OF, 2)
        assert _code(result) is ErrorCode.E1001_NO_COMPARISON_FUNC_REGISTERED


class TestCompareDecimal:
    @pytest.mark.parametrize(
        "op, ok",
        list(zip(ORDERED_OPS, [False, True, True, True, False, False])),
    )
    def test_grid(self, op: CompareOp, ok: bool) -> None:
        assert compare_decimal(NumberValue(Decimal("1.25")), op, Decimal("1.5")).is_ok() is ok

    def test_float_attribute_is_exact(self) -> None:
        assert compare_decimal(Float64Value(0.1), CompareOp.EQUAL, Decimal("0.1")).is_ok()

    @pytest.mark.parametrize("op", [CompareOp.EQUAL, CompareOp.NOT_EQUAL, CompareOp.LESS_THAN])
    def test_nan_never_compares(self, op: CompareOp) -> None:
        result = compare_decimal(NumberValue(Decimal("NaN")), op, Decimal(1))
        assert _code(result) is ErrorCode.E1003_COMPARISON_FAILED

    def test_unsupported_op(self) -> None:
        result = compare_decimal(NumberValue(Decimal(1)), CompareOp.ONE_OF, Decimal(1))
        assert _code(result) is ErrorCode.E1001_NO_COMPARISON_FUNC_REGISTERED


class TestCompareString:
    def test_case_sensitive_by_default(self) -> None:
        result = compare_string(StringValue("Hello"), CompareOp.EQUAL, "hello")
        assert _code(result) is ErrorCode.E1003_COMPARISON_FAILED

    def test_case_insensitive(self) -> None:
        assert compare_string(StringValue("Hello"), CompareOp.EQUAL, "hello", True).is_ok()
        result = compare_string(StringValue("Hello"), CompareOp.NOT_EQUAL, "HELLO", True)
        assert _code(result) is ErrorCode.E1003_COMPARISON_FAILED

    def test_non_string_attribute_renders(self) -> None:
        assert compare_string(Int64Value(5), CompareOp.EQUAL, "5").is_ok()

    def test_ordering_unsupported(self) -> None:
        result = compare_string(StringValue("a"), CompareOp.LESS_THAN, "b")
        assert _code(result) is ErrorCode.E1001_NO_COMPARISON_FUNC_REGISTERED

    def test_bad_target(self) -> None:
        result = compare_string(StringValue("a"), CompareOp.EQUAL, 1)
        assert _code(result) is ErrorCode.E1004_UNEXPECTED_TARGET_TYPE


# ============================================================================
# Collection strategies
# ============================================================================


class TestCompareStrings:
    @pytest.mark.parametrize(
        "op, value, ok",
        [
            (CompareOp.ONE_OF, "b", True),
            (CompareOp.ONE_OF, "c", False),
            (CompareOp.NOT_ONE_OF, "c", True),
            (CompareOp.NOT_ONE_OF, "b", False),
        ],
    )
    def test_membership(self, op: CompareOp, value: str, ok: bool) -> None:
        assert compare_strings(StringValue(value), op, ["a", "b"]).is_ok() is ok

    def test_membership_ignoring_case(self) -> None:
        assert compare_strings(StringValue("B"), CompareOp.ONE_OF, ["a", "b"], True).is_ok()

    def test_scalar_equality_unsupported(self) -> None:
        result = compare_strings(StringValue("a"), CompareOp.EQUAL, ["a"])
        assert _code(result) is ErrorCode.E1001_NO_COMPARISON_FUNC_REGISTERED

    @pytest.mark.parametrize(
        "elements, target, ok",
        [
            (("a", "b"), ["a", "b"], True),
            (("b", "a"), ["a", "b"], False),
            (("a",), ["a", "b"], False),
            (("a", "b"), ["A", "B"], False),
        ],
    )
    def test_ordered_equality(self, elements, target, ok: bool) -> None:
        value = ListValue(AttrType.STRING, _strings(*elements))
        assert compare_strings(value, CompareOp.EQUAL, target).is_ok() is ok

    def test_set_equality_ignoring_case(self) -> None:
        value = SetValue(AttrType.STRING, _strings("a", "b"))
        assert compare_strings(value, CompareOp.EQUAL, ("A", "B"), True).is_ok()

    def test_not_equal(self) -> None:
        value = ListValue(AttrType.STRING, _strings("a"))
        assert compare_strings(value, CompareOp.NOT_EQUAL, ["b"]).is_ok()
        assert compare_strings(value, CompareOp.NOT_EQUAL, ["a"]).is_err()

    def test_first_mismatch_reported(self) -> None:
        value = ListValue(AttrType.STRING, _strings("a", "x", "y"))
        error = compare_strings(value, CompareOp.EQUAL, ["a", "b", "c"]).unwrap_err()
        assert error.metadata["actual"] == "x"
        assert error.metadata["expected"] == "b"

    @pytest.mark.parametrize(
        "value",
        [ListValue(AttrType.INT64, _ints(1)), BoolValue(True), Int64Value(1)],
    )
    def test_wrong_attribute_kind(self, value) -> None:
        result = compare_strings(value, CompareOp.EQUAL, ["1"])
        assert _code(result) is ErrorCode.E1005_UNEXPECTED_ACTUAL_TYPE

    def test_mixed_target(self) -> None:
        result = compare_strings(StringValue("a"), CompareOp.ONE_OF, ["a", 1])
        assert _code(result) is ErrorCode.E1004_UNEXPECTED_TARGET_TYPE

    def test_target_not_mutated(self) -> None:
        target = ["A", "B"]
        compare_strings(StringValue("a"), CompareOp.ONE_OF, target, True)
        assert target == ["A", "B"]


class TestCompareInts:
    @pytest.mark.parametrize(
        "value, op, ok",
        [
            (Int64Value(3), CompareOp.ONE_OF, True),
            (Int64Value(4), CompareOp.ONE_OF, False),
            (Int64Value(4), CompareOp.NOT_ONE_OF, True),
            (NumberValue(Decimal("2")), CompareOp.ONE_OF, True),
            (NumberValue(Decimal("2")), CompareOp.NOT_ONE_OF, False),
        ],
    )
    def test_membership(self, value, op: CompareOp, ok: bool) -> None:
        assert compare_ints(value, op, [1, 2, 3]).is_ok() is ok

    def test_unset_scalar_fails(self) -> None:
        error = compare_ints(Int64Value(null=True), CompareOp.ONE_OF, [0]).unwrap_err()
        assert error.code is ErrorCode.E1003_COMPARISON_FAILED
        assert "actual" not in error.metadata

    def test_fractional_number_rejected(self) -> None:
        result = compare_ints(NumberValue(Decimal("2.5")), CompareOp.ONE_OF, [2])
        assert _code(result) is ErrorCode.E1002_TYPE_CONVERSION_FAILED

    @pytest.mark.parametrize(
        "value, target, ok",
        [
            (ListValue(AttrType.INT64, _ints(1, 2)), [1, 2], True),
            (ListValue(AttrType.INT64, _ints(2, 1)), [1, 2], False),
            (SetValue(AttrType.INT64, _ints(7)), (7,), True),
            (ListValue(AttrType.NUMBER, (NumberValue(Decimal("4")),)), [4], True),
        ],
    )
    def test_ordered_equality(self, value, target, ok: bool) -> None:
        assert compare_ints(value, CompareOp.EQUAL, target).is_ok() is ok

    def test_fractional_number_element(self) -> None:
        value = SetValue(AttrType.NUMBER, (NumberValue(Decimal("1.5")),))
        error = compare_ints(value, CompareOp.EQUAL, [1]).unwrap_err()
        assert error.code is ErrorCode.E1002_TYPE_CONVERSION_FAILED
        assert error.matches(ErrorCode.E3005_ELEMENT_COERCION_FAILED)

    @pytest.mark.parametrize("target", [[True], ["1"], [1.0], "1"])
    def test_bad_target(self, target) -> None:
        result = compare_ints(Int64Value(1), CompareOp.ONE_OF, target)
        assert _code(result) is ErrorCode.E1004_UNEXPECTED_TARGET_TYPE

    @pytest.mark.parametrize(
        "value",
        [StringValue("1"), ListValue(AttrType.STRING, _strings("1")), Float64Value(1.0)],
    )
    def test_wrong_attribute_kind(self, value) -> None:
        result = compare_ints(value, CompareOp.EQUAL, [1])
        assert _code(result) is ErrorCode.E1005_UNEXPECTED_ACTUAL_TYPE


class TestCompareEmptySequence:
    @pytest.mark.parametrize(
        "value, op, ok",
        [
            (StringValue("a"), CompareOp.ONE_OF, False),
            (StringValue("a"), CompareOp.NOT_ONE_OF, True),
            (Int64Value(1), CompareOp.NOT_ONE_OF, True),
            (ListValue(AttrType.STRING), CompareOp.EQUAL, True),
            (SetValue(AttrType.INT64), CompareOp.EQUAL, True),
            (ListValue(AttrType.INT64, _ints(1)), CompareOp.EQUAL, False),
        ],
    )
    def test_dispatch(self, value, op: CompareOp, ok: bool) -> None:
        assert compare_empty_sequence(value, op, []).is_ok() is ok

    def test_unsupported_kind(self) -> None:
        result = compare_empty_sequence(BoolValue(True), CompareOp.EQUAL, [])
        assert _code(result) is ErrorCode.E1005_UNEXPECTED_ACTUAL_TYPE


# ============================================================================
# Dispatch and algebraic properties
# ============================================================================


class TestDispatch:
    @pytest.mark.parametrize(
        "value, target",
        [
            (BoolValue(False), False),
            (Float64Value(-0.5), -0.5),
            (Int64Value(42), 42),
            (NumberValue(Decimal("3.14")), Decimal("3.14")),
            (StringValue("x"), "x"),
            (ListValue(AttrType.STRING, _strings("a", "b")), ["a", "b"]),
            (ListValue(AttrType.INT64, _ints(1, 2)), [1, 2]),
            (ListValue(AttrType.STRING), []),
        ],
    )
    def test_equality_is_reflexive(self, value, target) -> None:
        assert compare_attr_values(value, CompareOp.EQUAL, target).is_ok()
        assert compare_attr_values(value, CompareOp.NOT_EQUAL, target).is_err()

    @pytest.mark.parametrize("a, b", [(1, 2), (2, 1), (3, 3), (-5, 5)])
    def test_ordering_is_total(self, a: int, b: int) -> None:
        outcomes = [
            compare_attr_values(Int64Value(a), op, b).is_ok()
            for op in (CompareOp.LESS_THAN, CompareOp.EQUAL, CompareOp.GREATER_THAN)
        ]
        assert outcomes.count(True) == 1

    def test_case_insensitive_meta_forwarded(self) -> None:
        assert compare_attr_values(StringValue("ABC"), CompareOp.EQUAL, "abc", True).is_ok()

    def test_target_type_selects_strategy(self) -> None:
        # bool and int targets must not share a strategy
        assert _code(compare_attr_values(Int64Value(1), CompareOp.EQUAL, True)) is (
            ErrorCode.E1005_UNEXPECTED_ACTUAL_TYPE
        )
        assert compare_attr_values(Int64Value(1), CompareOp.EQUAL, 1).is_ok()

    def test_tuple_target_dispatches_like_list(self) -> None:
        assert compare_attr_values(StringValue("b"), CompareOp.ONE_OF, ("a", "b")).is_ok()


# ============================================================================
# Signaling NaN and non-ASCII digits
# ============================================================================


class TestUnusualInput:
    def test_signaling_nan_actual_against_decimal(self) -> None:
        result = compare_attr_values(NumberValue(Decimal("sNaN")), CompareOp.EQUAL, Decimal(1))
        assert result.unwrap_err().code is ErrorCode.E1003_COMPARISON_FAILED

    def test_signaling_nan_target(self) -> None:
        result = compare_attr_values(NumberValue(Decimal(1)), CompareOp.NOT_EQUAL, Decimal("sNaN"))
        assert result.unwrap_err().code is ErrorCode.E1003_COMPARISON_FAILED

    def test_signaling_nan_actual_against_float(self) -> None:
        error = compare_attr_values(NumberValue(Decimal("sNaN")), CompareOp.EQUAL, 1.0).unwrap_err()
        assert error.code is ErrorCode.E1002_TYPE_CONVERSION_FAILED
        assert error.matches(ErrorCode.E3004_OUT_OF_RANGE)

    @pytest.mark.parametrize("raw", ["５", "٣", "１２"])
    def test_full_width_digits_are_not_integers(self, raw: str) -> None:
        error = compare_attr_values(StringValue(raw), CompareOp.EQUAL, 5).unwrap_err()
        assert error.code is ErrorCode.E1002_TYPE_CONVERSION_FAILED
        assert error.matches(ErrorCode.E3002_INVALID_FORMAT)
