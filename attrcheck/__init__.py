"""attrcheck: validation and comparison for tri-state configuration attributes.

Subpackages:
- errors: Result monad, AppError, ErrorCode taxonomy
- values: attribute value model, paths, configuration snapshot, diagnostics
- conv: value state classification, coercion, attribute conversion
- validation: comparison registry, validator wrapper and recipes
"""
from attrcheck.errors import AppError, Err, ErrorCode, Ok, Result
from attrcheck.values import (
    AttrType,
    AttrValue,
    BoolValue,
    Config,
    Diagnostics,
    Float64Value,
    Int64Value,
    ListValue,
    MapValue,
    NumberValue,
    ObjectValue,
    Path,
    SetValue,
    StringValue,
)
from attrcheck.conv import DefinednessState, check_value_state, classify_state
from attrcheck.validation import (
    CompareOp,
    ComparisonRegistry,
    GenericConfig,
    GenericRequest,
    GenericResponse,
    GenericValidator,
    compare_attr_values,
)

__version__ = "0.1.0"

__all__ = [
    "AppError",
    "Err",
    "ErrorCode",
    "Ok",
    "Result",
    "AttrType",
    "AttrValue",
    "BoolValue",
    "Config",
    "Diagnostics",
    "Float64Value",
    "Int64Value",
    "ListValue",
    "MapValue",
    "NumberValue",
    "ObjectValue",
    "Path",
    "SetValue",
    "StringValue",
    "DefinednessState",
    "check_value_state",
    "classify_state",
    "CompareOp",
    "ComparisonRegistry",
    "GenericConfig",
    "GenericRequest",
    "GenericResponse",
    "GenericValidator",
    "compare_attr_values",
]
