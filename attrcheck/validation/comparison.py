"""Comparison Registry and Strategies

Type-erased comparison of an attribute value against a caller-supplied
target. The target's runtime type selects the strategy; the strategy then
normalizes the attribute side into its own representation.

Features:
- Explicit registry object with lock-guarded lookups
- Built-in strategies for bool, float, int, Decimal, str, list[str], list[int]
- Result-based outcomes: ComparisonFailed, TypeConversionFailed,
  UnexpectedTargetType, UnexpectedActualType, NoComparisonFuncRegistered
- Targets are never mutated

Usage:
    registry = ComparisonRegistry()
    registry.compare(Int64Value(5), CompareOp.GREATER_THAN_OR_EQUAL_TO, 5)

    # Module-level default registry
    compare_attr_values(StringValue("Hello"), CompareOp.EQUAL, "hello", True)
"""
from __future__ import annotations

import operator
import threading
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Mapping, Protocol

from attrcheck.config import get_settings
from attrcheck.conv import (
    Accuracy,
    attribute_value_to_decimal,
    attribute_value_to_float64,
    attribute_value_to_int64,
    attribute_value_to_string,
    int64_list_to_ints,
    int64_set_to_ints,
    number_list_to_ints,
    number_set_to_ints,
    string_list_to_strings,
    string_set_to_strings,
    try_coerce_to_bool,
    try_coerce_to_decimal,
    try_coerce_to_float64,
    try_coerce_to_int64,
)
from attrcheck.errors import (
    AppError,
    Err,
    Ok,
    Result,
    comparison_failed,
    no_comparison_func_registered,
    precision_loss,
    type_conversion_failed,
    unexpected_actual_type,
    unexpected_target_type,
)
from attrcheck.logging import comparison_logger
from attrcheck.values import (
    AttrType,
    AttrValue,
    BoolValue,
    Int64Value,
    ListValue,
    NumberValue,
    SetValue,
    StringValue,
)


class CompareOp(Enum):
    """Comparison operators. str() renders the symbol."""
    EQUAL = "=="
    NOT_EQUAL = "<>"
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL_TO = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL_TO = ">="
    ONE_OF = "|"
    NOT_ONE_OF = "^|"

    def __str__(self) -> str:
        return self.value

    @property
    def op_name(self) -> str:
        return self.name.lower()


class ComparisonFunc(Protocol):
    """Strategy comparing an attribute value to a target.

    Returns Ok(None) on success, otherwise an Err whose code is one of
    E1003 (predicate false), E1002 (attribute conversion failed), E1004 or
    E1005 (wrong shape), or E1001 (operator not supported).
    """

    def __call__(self, av: AttrValue, op: CompareOp, target: Any, *meta: Any) -> Result[None, AppError]: ...


_ORDERED_OPS: dict[CompareOp, Callable[[Any, Any], bool]] = {
    CompareOp.EQUAL: operator.eq,
    CompareOp.NOT_EQUAL: operator.ne,
    CompareOp.LESS_THAN: operator.lt,
    CompareOp.LESS_THAN_OR_EQUAL_TO: operator.le,
    CompareOp.GREATER_THAN: operator.gt,
    CompareOp.GREATER_THAN_OR_EQUAL_TO: operator.ge,
}

# Three-way result predicates for Decimal
_THREE_WAY_OPS: dict[CompareOp, Callable[[int], bool]] = {
    CompareOp.EQUAL: lambda c: c == 0,
    CompareOp.NOT_EQUAL: lambda c: c != 0,
    CompareOp.LESS_THAN: lambda c: c == -1,
    CompareOp.LESS_THAN_OR_EQUAL_TO: lambda c: c in (-1, 0),
    CompareOp.GREATER_THAN: lambda c: c == 1,
    CompareOp.GREATER_THAN_OR_EQUAL_TO: lambda c: c in (0, 1),
}


def _case_insensitive(meta: tuple[Any, ...]) -> bool:
    return bool(meta) and meta[0] is True


def _truncation_allowed() -> bool:
    return get_settings().ALLOW_NUMERIC_TRUNCATION


# =============================================================================
# Scalar strategies
# =============================================================================

def compare_bool(av: AttrValue, op: CompareOp, target: Any, *_: Any) -> Result[None, AppError]:
    if not isinstance(av, BoolValue):
        return unexpected_actual_type("compare_bool", type(av).__name__, op, "BoolValue")
    coerced = try_coerce_to_bool(target)
    if coerced.is_err():
        return unexpected_target_type("compare_bool", target, op, "bool", coerced.unwrap_err())
    expected = coerced.unwrap()
    actual = av.value
    match op:
        case CompareOp.EQUAL:
            if actual == expected:
                return Ok(None)
        case CompareOp.NOT_EQUAL:
            if actual != expected:
                return Ok(None)
        case _:
            return no_comparison_func_registered(op, av)
    return comparison_failed(actual, op, expected)


def compare_float64(av: AttrValue, op: CompareOp, target: Any, *_: Any) -> Result[None, AppError]:
    converted = attribute_value_to_float64(av)
    if converted.is_err():
        return type_conversion_failed(converted.unwrap_err())
    actual, _ = converted.unwrap()
    coerced = try_coerce_to_float64(target)
    if coerced.is_err():
        return unexpected_target_type("compare_float64", target, op, "float", coerced.unwrap_err())
    expected = coerced.unwrap()
    predicate = _ORDERED_OPS.get(op)
    if predicate is None:
        return no_comparison_func_registered(op, av)
    if predicate(actual, expected):
        return Ok(None)
    return comparison_failed(actual, op, expected)


def compare_int64(av: AttrValue, op: CompareOp, target: Any, *_: Any) -> Result[None, AppError]:
    """Compare as 64-bit integers.

    Float and Number attributes that do not hold a whole number fail with
    E1002 unless numeric truncation is allowed.
    """
    converted = attribute_value_to_int64(av)
    if converted.is_err():
        return type_conversion_failed(converted.unwrap_err())
    actual, accuracy = converted.unwrap()
    if accuracy is not Accuracy.EXACT and not _truncation_allowed():
        return type_conversion_failed(precision_loss(str(av), "int64").unwrap_err())
    coerced = try_coerce_to_int64(target)
    if coerced.is_err():
        return unexpected_target_type("compare_int64", target, op, "int", coerced.unwrap_err())
    expected = coerced.unwrap()
    predicate = _ORDERED_OPS.get(op)
    if predicate is None:
        return no_comparison_func_registered(op, av)
    if predicate(actual, expected):
        return Ok(None)
    return comparison_failed(actual, op, expected)


def _three_way(actual: Decimal, expected: Decimal) -> int | None:
    """-1, 0 or 1; None when either side is NaN, quiet or signaling."""
    if actual.is_nan() or expected.is_nan():
        return None
    return int(actual.compare(expected))


def compare_decimal(av: AttrValue, op: CompareOp, target: Any, *_: Any) -> Result[None, AppError]:
    converted = attribute_value_to_decimal(av)
    if converted.is_err():
        return type_conversion_failed(converted.unwrap_err())
    actual = converted.unwrap()
    coerced = try_coerce_to_decimal(target)
    if coerced.is_err():
        return unexpected_target_type("compare_decimal", target, op, "Decimal", coerced.unwrap_err())
    expected = coerced.unwrap()
    predicate = _THREE_WAY_OPS.get(op)
    if predicate is None:
        return no_comparison_func_registered(op, av)
    cmp = _three_way(actual, expected)
    if cmp is not None and predicate(cmp):
        return Ok(None)
    return comparison_failed(actual, op, expected)


def compare_string(av: AttrValue, op: CompareOp, target: Any, *meta: Any) -> Result[None, AppError]:
    """Compare rendered attribute text to a string; meta[0] True ignores case."""
    if not isinstance(target, str):
        return unexpected_target_type("compare_string", target, op, "str")
    actual = attribute_value_to_string(av)
    expected = target
    if _case_insensitive(meta):
        actual, expected = actual.lower(), expected.lower()
    match op:
        case CompareOp.EQUAL:
            if actual == expected:
                return Ok(None)
        case CompareOp.NOT_EQUAL:
            if actual != expected:
                return Ok(None)
        case _:
            return no_comparison_func_registered(op, av)
    return comparison_failed(actual, op, expected)


# =============================================================================
# Collection strategies
# =============================================================================

def _scalar_in(actual: Any, op: CompareOp, targets: list) -> Result[None, AppError]:
    match op:
        case CompareOp.ONE_OF:
            if actual in targets:
                return Ok(None)
        case CompareOp.NOT_ONE_OF:
            if actual not in targets:
                return Ok(None)
        case _:
            return no_comparison_func_registered(op, targets)
    return comparison_failed(actual, op, targets)


def _sequence_equal(actuals: list, op: CompareOp, targets: list) -> Result[None, AppError]:
    """Ordered, length-sensitive element-wise equality."""
    match op:
        case CompareOp.EQUAL:
            if len(actuals) == len(targets):
                for actual, expected in zip(actuals, targets):
                    if actual != expected:
                        return comparison_failed(actual, op, expected)
                return Ok(None)
        case CompareOp.NOT_EQUAL:
            if actuals != targets:
                return Ok(None)
        case _:
            return no_comparison_func_registered(op, targets)
    return comparison_failed(actuals, op, targets)


def compare_strings(av: AttrValue, op: CompareOp, target: Any, *meta: Any) -> Result[None, AppError]:
    """Compare against a list of strings.

    A string attribute supports ONE_OF / NOT_ONE_OF. A list or set of
    strings supports EQUAL / NOT_EQUAL.
    """
    if not isinstance(target, (list, tuple)) or not all(isinstance(t, str) for t in target):
        return unexpected_target_type("compare_strings", target, op, "list[str]")
    fold = _case_insensitive(meta)
    targets = [t.lower() for t in target] if fold else list(target)

    match av:
        case StringValue():
            actual = av.value.lower() if fold else av.value
            return _scalar_in(actual, op, targets)
        case ListValue() | SetValue():
            if av.element_type is not AttrType.STRING:
                return unexpected_actual_type("compare_strings", str(av.element_type), op, str(AttrType.STRING))
            extract = string_list_to_strings if isinstance(av, ListValue) else string_set_to_strings
            actuals = extract(av)
            if fold:
                actuals = [a.lower() for a in actuals]
            return _sequence_equal(actuals, op, targets)
        case _:
            return unexpected_actual_type("compare_strings", type(av).__name__, op, str(AttrType.STRING))


def _scalar_to_int(av: Int64Value | NumberValue) -> Result[int | None, AppError]:
    if av.is_unknown() or av.is_null():
        return Ok(None)
    match attribute_value_to_int64(av):
        case Err(error):
            return type_conversion_failed(error)
        case Ok((value, accuracy)):
            if accuracy is not Accuracy.EXACT and not _truncation_allowed():
                return type_conversion_failed(precision_loss(str(av), "int64").unwrap_err())
            return Ok(value)


def _collection_to_ints(av: ListValue | SetValue, op: CompareOp) -> Result[list[int], AppError]:
    is_list = isinstance(av, ListValue)
    match av.element_type:
        case AttrType.INT64:
            return Ok(int64_list_to_ints(av) if is_list else int64_set_to_ints(av))
        case AttrType.NUMBER:
            converted = number_list_to_ints(av) if is_list else number_set_to_ints(av)
            if converted.is_err():
                return type_conversion_failed(converted.unwrap_err())
            return converted
        case _:
            return unexpected_actual_type("compare_ints", str(av.element_type), op, str(AttrType.INT64))


def compare_ints(av: AttrValue, op: CompareOp, target: Any, *_: Any) -> Result[None, AppError]:
    """Compare against a list of ints.

    Int64 and Number attributes support ONE_OF / NOT_ONE_OF. Lists and
    sets of Int64 or Number support EQUAL / NOT_EQUAL.
    """
    if not isinstance(target, (list, tuple)) or not all(
        isinstance(t, int) and not isinstance(t, bool) for t in target
    ):
        return unexpected_target_type("compare_ints", target, op, "list[int]")
    targets = list(target)

    match av:
        case Int64Value() | NumberValue():
            match _scalar_to_int(av):
                case Err() as failure:
                    return failure
                case Ok(None):
                    return comparison_failed(None, op, targets)
                case Ok(actual):
                    return _scalar_in(actual, op, targets)
        case ListValue() | SetValue():
            match _collection_to_ints(av, op):
                case Err() as failure:
                    return failure
                case Ok(actuals):
                    return _sequence_equal(actuals, op, targets)
        case _:
            return unexpected_actual_type("compare_ints", type(av).__name__, op, str(AttrType.INT64))


def compare_empty_sequence(av: AttrValue, op: CompareOp, target: Any, *meta: Any) -> Result[None, AppError]:
    """An empty target carries no element type; pick one from the attribute."""
    match av:
        case StringValue():
            return compare_strings(av, op, target, *meta)
        case Int64Value() | NumberValue():
            return compare_ints(av, op, target, *meta)
        case ListValue(element_type=AttrType.STRING) | SetValue(element_type=AttrType.STRING):
            return compare_strings(av, op, target, *meta)
        case ListValue() | SetValue():
            return compare_ints(av, op, target, *meta)
        case _:
            return unexpected_actual_type("compare_empty_sequence", type(av).__name__, op, "string or integer collection")


# =============================================================================
# Registry
# =============================================================================

EMPTY_SEQUENCE_KEY = "builtins.list[]"
MIXED_SEQUENCE_KEY = "builtins.list[*]"


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def type_key(exemplar: Any) -> str:
    """Registry key for the runtime type of ``exemplar``.

    Lists and tuples key by their element type, so ``["a"]`` and ``("a",)``
    both give "builtins.list[builtins.str]".
    """
    if exemplar is None:
        return "nil"
    if isinstance(exemplar, (list, tuple)):
        element_keys = {type_key(e) for e in exemplar}
        if not element_keys:
            return EMPTY_SEQUENCE_KEY
        if len(element_keys) > 1:
            return MIXED_SEQUENCE_KEY
        return f"builtins.list[{element_keys.pop()}]"
    return _qualified_name(type(exemplar))


def default_comparison_funcs() -> dict[str, ComparisonFunc]:
    """Fresh mapping of the built-in strategies, keyed by target type."""
    return {
        type_key(False): compare_bool,
        type_key(0.0): compare_float64,
        type_key(0): compare_int64,
        type_key(Decimal(0)): compare_decimal,
        type_key(""): compare_string,
        type_key([""]): compare_strings,
        type_key([0]): compare_ints,
        EMPTY_SEQUENCE_KEY: compare_empty_sequence,
    }


class ComparisonRegistry:
    """Strategies keyed by target type.

    The lock guards each individual map read or write; it is never held
    while a strategy runs.
    """

    def __init__(self, funcs: Mapping[str, ComparisonFunc] | None = None):
        self._lock = threading.Lock()
        self._funcs: dict[str, ComparisonFunc] = dict(default_comparison_funcs() if funcs is None else funcs)

    def set_comparison_func(self, exemplar: Any, fn: ComparisonFunc) -> None:
        """Install ``fn`` for the type of ``exemplar``. Last writer wins."""
        if fn is None:
            raise TypeError("comparison func must not be None")
        key = type_key(exemplar)
        with self._lock:
            replaced = key in self._funcs
            self._funcs[key] = fn
        comparison_logger().info("comparison_func_registered", target_type=key, replaced=replaced)

    def get_comparison_func(self, exemplar: Any) -> tuple[ComparisonFunc | None, bool]:
        key = type_key(exemplar)
        with self._lock:
            fn = self._funcs.get(key)
        return fn, fn is not None

    def reset(self) -> None:
        """Restore the built-in strategies, dropping any overrides."""
        defaults = default_comparison_funcs()
        with self._lock:
            self._funcs = defaults

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._funcs)

    def compare(self, av: AttrValue, op: CompareOp, target: Any, *meta: Any) -> Result[None, AppError]:
        fn, found = self.get_comparison_func(target)
        if not found:
            return no_comparison_func_registered(op, target)
        comparison_logger().debug(
            "comparison_dispatch",
            op=op.op_name,
            target_type=type_key(target),
            attr_kind=str(av.kind),
        )
        return fn(av, op, target, *meta)


DEFAULT_REGISTRY = ComparisonRegistry()


def set_comparison_func(exemplar: Any, fn: ComparisonFunc) -> None:
    DEFAULT_REGISTRY.set_comparison_func(exemplar, fn)


def get_comparison_func(exemplar: Any) -> tuple[ComparisonFunc | None, bool]:
    return DEFAULT_REGISTRY.get_comparison_func(exemplar)


def compare_attr_values(
    av: AttrValue,
    op: CompareOp,
    target: Any,
    *meta: Any,
    registry: ComparisonRegistry | None = None,
) -> Result[None, AppError]:
    """Compare ``av`` to ``target`` with the strategy registered for the target's type."""
    registry = DEFAULT_REGISTRY if registry is None else registry
    return registry.compare(av, op, target, *meta)
