"""Value state classification, coercion of opaque values, attribute conversion."""
from .state import (
    DefinednessState,
    classify_state,
    check_value_state,
    is_value_unknown_error,
    is_value_null_error,
    is_value_empty_error,
)
from .coercion import (
    CoercionRule,
    ToBool,
    ToInteger,
    ToFloat64,
    ToDecimal,
    ElementwiseCoercion,
    ToDuration,
    try_coerce_to_bool,
    try_coerce_to_int,
    try_coerce_to_int64,
    try_coerce_to_float64,
    try_coerce_to_decimal,
    try_coerce_to_ints,
    try_coerce_to_floats,
    try_coerce_to_duration,
)
from .values import (
    Accuracy,
    attribute_value_to_string,
    attribute_value_to_strings,
    attribute_value_length,
    attribute_value_to_float64,
    attribute_value_to_int64,
    attribute_value_to_decimal,
    string_list_to_strings,
    string_set_to_strings,
    int64_list_to_ints,
    int64_set_to_ints,
    number_list_to_ints,
    number_set_to_ints,
    strings_to_string_list,
    strings_to_string_set,
    ints_to_int64_list,
    ints_to_int64_set,
)

__all__ = [
    # State
    "DefinednessState",
    "classify_state",
    "check_value_state",
    "is_value_unknown_error",
    "is_value_null_error",
    "is_value_empty_error",
    # Coercion
    "CoercionRule",
    "ToBool",
    "ToInteger",
    "ToFloat64",
    "ToDecimal",
    "ElementwiseCoercion",
    "ToDuration",
    "try_coerce_to_bool",
    "try_coerce_to_int",
    "try_coerce_to_int64",
    "try_coerce_to_float64",
    "try_coerce_to_decimal",
    "try_coerce_to_ints",
    "try_coerce_to_floats",
    "try_coerce_to_duration",
    # Attribute conversion
    "Accuracy",
    "attribute_value_to_string",
    "attribute_value_to_strings",
    "attribute_value_length",
    "attribute_value_to_float64",
    "attribute_value_to_int64",
    "attribute_value_to_decimal",
    "string_list_to_strings",
    "string_set_to_strings",
    "int64_list_to_ints",
    "int64_set_to_ints",
    "number_list_to_ints",
    "number_set_to_ints",
    "strings_to_string_list",
    "strings_to_string_set",
    "ints_to_int64_list",
    "ints_to_int64_set",
]
