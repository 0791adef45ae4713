"""Attribute Value Conversion

Helpers that turn host attribute values into native Python values and
back. Numeric conversions report an Accuracy alongside the result so
callers can tell an exact conversion from a rounded or truncated one.

Unknown and null scalars convert to the zero value of the requested
representation with EXACT accuracy; callers that care about definedness
classify the value first.
"""
from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Iterable

from attrcheck.errors import AppError, Ok, Result, out_of_range, value_type_unhandled
from attrcheck.values import (
    INT64_MAX,
    INT64_MIN,
    AttrType,
    AttrValue,
    Float64Value,
    Int64Value,
    ListValue,
    MapValue,
    NumberValue,
    SetValue,
    StringValue,
)

from .coercion import ElementwiseCoercion, ToDecimal, ToFloat64, ToInteger


class Accuracy(Enum):
    """Direction in which a converted value deviates from the exact value."""
    BELOW = -1
    EXACT = 0
    ABOVE = 1

    @classmethod
    def of(cls, converted, exact) -> Accuracy:
        if converted < exact:
            return cls.BELOW
        if converted > exact:
            return cls.ABOVE
        return cls.EXACT


def _is_unset(value: AttrValue) -> bool:
    return value.is_unknown() or value.is_null()


def _number_magnitude(value: NumberValue) -> Decimal:
    if _is_unset(value) or value.value is None:
        return Decimal(0)
    return value.value


# =============================================================================
# Strings and lengths
# =============================================================================

def attribute_value_to_string(value: AttrValue) -> str:
    """Raw text of a string (empty when unset), the rendered form of anything else."""
    if isinstance(value, StringValue):
        return value.value
    return str(value)


def attribute_value_to_strings(value: AttrValue) -> list[str]:
    """Element strings of a list or set; a one-element list for anything else."""
    match value:
        case ListValue() | SetValue():
            return [attribute_value_to_string(e) for e in value.elements]
        case _:
            return [attribute_value_to_string(value)]


def attribute_value_length(value: AttrValue) -> int:
    """Element count of a collection, or UTF-8 byte length of a string.

    Raises TypeError for kinds where length has no meaning.
    """
    match value:
        case ListValue() | SetValue() | MapValue():
            return len(value.elements)
        case StringValue():
            return len(value.value.encode("utf-8"))
        case _:
            raise TypeError(f"unable to determine length of attribute value of type {type(value).__name__}")


# =============================================================================
# Numeric conversion
# =============================================================================

def attribute_value_to_float64(value: AttrValue) -> Result[tuple[float, Accuracy], AppError]:
    match value:
        case Float64Value():
            return Ok((0.0 if _is_unset(value) else float(value.value), Accuracy.EXACT))
        case Int64Value():
            if _is_unset(value):
                return Ok((0.0, Accuracy.EXACT))
            f = float(value.value)
            return Ok((f, Accuracy.of(Decimal(f), value.value)))
        case NumberValue():
            magnitude = _number_magnitude(value)
            if magnitude.is_snan():
                return out_of_range(magnitude, "float64")
            if not magnitude.is_finite():
                return Ok((float(magnitude), Accuracy.EXACT))
            f = float(magnitude)
            if math.isinf(f):
                return out_of_range(magnitude, "float64")
            return Ok((f, Accuracy.of(Decimal(f), magnitude)))
        case StringValue():
            return ToFloat64().coerce(value.value).map(lambda f: (f, Accuracy.EXACT))
        case _:
            return value_type_unhandled("attr_to_float64", value)


def _truncate_to_int64(original, exact) -> Result[tuple[int, Accuracy], AppError]:
    if isinstance(exact, float) and not math.isfinite(exact):
        return out_of_range(original, "int64")
    if isinstance(exact, Decimal) and not exact.is_finite():
        return out_of_range(original, "int64")
    truncated = int(exact)
    if not INT64_MIN <= truncated <= INT64_MAX:
        return out_of_range(original, "int64")
    return Ok((truncated, Accuracy.of(truncated, exact)))


def attribute_value_to_int64(value: AttrValue) -> Result[tuple[int, Accuracy], AppError]:
    """Convert to int64, truncating toward zero.

    Accuracy reports the direction of any truncation. Values that do not fit
    in signed 64-bit are E3004_OUT_OF_RANGE.
    """
    match value:
        case Int64Value():
            return Ok((0 if _is_unset(value) else value.value, Accuracy.EXACT))
        case Float64Value():
            if _is_unset(value):
                return Ok((0, Accuracy.EXACT))
            return _truncate_to_int64(value.value, float(value.value))
        case NumberValue():
            magnitude = _number_magnitude(value)
            return _truncate_to_int64(magnitude, magnitude)
        case StringValue():
            return ToInteger(bits=64, allow_truncation=False).coerce(value.value).map(
                lambda i: (i, Accuracy.EXACT)
            )
        case _:
            return value_type_unhandled("attr_to_int64", value)


def attribute_value_to_decimal(value: AttrValue) -> Result[Decimal, AppError]:
    match value:
        case Float64Value() | Int64Value():
            if _is_unset(value):
                return Ok(Decimal(0))
            return ToDecimal().coerce(value.value)
        case NumberValue():
            return Ok(_number_magnitude(value))
        case StringValue():
            return ToDecimal().coerce(value.value)
        case _:
            return value_type_unhandled("attr_to_decimal", value)


# =============================================================================
# Collection element extraction
# =============================================================================

def _elements(value: AttrValue, shape: type, element_type: AttrType) -> tuple[AttrValue, ...]:
    if not isinstance(value, shape) or value.element_type is not element_type:
        raise TypeError(
            f"expected {shape.__name__} of {element_type}, got {type(value).__name__}"
            f" of {getattr(value, 'element_type', None)}"
        )
    return value.elements


def string_list_to_strings(value: ListValue) -> list[str]:
    return [attribute_value_to_string(e) for e in _elements(value, ListValue, AttrType.STRING)]


def string_set_to_strings(value: SetValue) -> list[str]:
    return [attribute_value_to_string(e) for e in _elements(value, SetValue, AttrType.STRING)]


def int64_list_to_ints(value: ListValue) -> list[int]:
    return [0 if _is_unset(e) else e.value for e in _elements(value, ListValue, AttrType.INT64)]


def int64_set_to_ints(value: SetValue) -> list[int]:
    return [0 if _is_unset(e) else e.value for e in _elements(value, SetValue, AttrType.INT64)]


def _numbers_to_ints(elements: Iterable[NumberValue]) -> Result[list[int], AppError]:
    magnitudes = [_number_magnitude(e) for e in elements]
    return ElementwiseCoercion(ToInteger(bits=None)).coerce(magnitudes)


def number_list_to_ints(value: ListValue) -> Result[list[int], AppError]:
    """Integer values of a number list; non-integral elements follow the truncation policy."""
    return _numbers_to_ints(_elements(value, ListValue, AttrType.NUMBER))


def number_set_to_ints(value: SetValue) -> Result[list[int], AppError]:
    return _numbers_to_ints(_elements(value, SetValue, AttrType.NUMBER))


# =============================================================================
# Construction
# =============================================================================

def strings_to_string_list(values: Iterable[str], null_on_empty: bool = False) -> ListValue:
    elements = tuple(StringValue(s) for s in values)
    if not elements and null_on_empty:
        return ListValue(AttrType.STRING, null=True)
    return ListValue(AttrType.STRING, elements)


def strings_to_string_set(values: Iterable[str], null_on_empty: bool = False) -> SetValue:
    elements = tuple(StringValue(s) for s in values)
    if not elements and null_on_empty:
        return SetValue(AttrType.STRING, null=True)
    return SetValue(AttrType.STRING, elements)


def ints_to_int64_list(values: Iterable[int], null_on_empty: bool = False) -> ListValue:
    elements = tuple(Int64Value(i) for i in values)
    if not elements and null_on_empty:
        return ListValue(AttrType.INT64, null=True)
    return ListValue(AttrType.INT64, elements)


def ints_to_int64_set(values: Iterable[int], null_on_empty: bool = False) -> SetValue:
    elements = tuple(Int64Value(i) for i in values)
    if not elements and null_on_empty:
        return SetValue(AttrType.INT64, null=True)
    return SetValue(AttrType.INT64, elements)
