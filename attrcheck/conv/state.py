"""Value State Classifier

An attribute value is in exactly one definedness state per evaluation,
checked from greatest to least significance:

    unknown > null > empty > valued

"Empty" means zero elements for lists, sets and maps, and zero length for
strings. Every other kind is never empty.
"""
from __future__ import annotations

from enum import Enum
from typing import assert_never

from attrcheck.errors import (
    AppError,
    ErrorCode,
    Ok,
    Result,
    value_is_empty,
    value_is_null,
    value_is_unknown,
)
from attrcheck.values import (
    AttrValue,
    BoolValue,
    Float64Value,
    Int64Value,
    ListValue,
    MapValue,
    NumberValue,
    ObjectValue,
    SetValue,
    StringValue,
)


class DefinednessState(Enum):
    UNKNOWN = "unknown"
    NULL = "null"
    EMPTY = "empty"
    VALUED = "valued"


def _is_empty(value: AttrValue) -> bool:
    match value:
        case ListValue() | SetValue() | MapValue():
            return len(value.elements) == 0
        case StringValue():
            return value.value == ""
        case BoolValue() | Int64Value() | Float64Value() | NumberValue() | ObjectValue():
            return False
        case _:
            raise TypeError(f"no emptiness rule for attribute value of type {type(value).__name__}")


def classify_state(value: AttrValue) -> DefinednessState:
    """Report the definedness state of ``value``.

    Raises TypeError for a value outside the attribute union, which means the
    embedding integration handed over something it should not have.
    """
    if not isinstance(value, AttrValue):
        raise TypeError(f"cannot classify non-attribute value of type {type(value).__name__}")
    if value.is_unknown():
        return DefinednessState.UNKNOWN
    if value.is_null():
        return DefinednessState.NULL
    if _is_empty(value):
        return DefinednessState.EMPTY
    return DefinednessState.VALUED


def check_value_state(value: AttrValue) -> Result[None, AppError]:
    """Return Ok(None) for a valued attribute, otherwise the matching state sentinel."""
    state = classify_state(value)
    match state:
        case DefinednessState.UNKNOWN:
            return value_is_unknown()
        case DefinednessState.NULL:
            return value_is_null()
        case DefinednessState.EMPTY:
            return value_is_empty()
        case DefinednessState.VALUED:
            return Ok(None)
        case _:
            assert_never(state)


def is_value_unknown_error(error: AppError | None) -> bool:
    return error is not None and error.matches(ErrorCode.E2001_VALUE_IS_UNKNOWN)


def is_value_null_error(error: AppError | None) -> bool:
    return error is not None and error.matches(ErrorCode.E2002_VALUE_IS_NULL)


def is_value_empty_error(error: AppError | None) -> bool:
    return error is not None and error.matches(ErrorCode.E2003_VALUE_IS_EMPTY)
