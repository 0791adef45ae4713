"""Monadic Error Handling System

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Base error type with full context and cause chaining
- ErrorCode: Hierarchical error code taxonomy
- Builder functions: Ergonomic error construction

Usage:
    from attrcheck.errors import Ok, Err, ErrorCode

    match compare_attr_values(value, CompareOp.EQUAL, 5):
        case Ok(_):
            ...
        case Err(error) if error.matches(ErrorCode.E1003_COMPARISON_FAILED):
            ...
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
)

from .builders import (
    # Comparison (E1xxx)
    comparison_error,
    no_comparison_func_registered,
    type_conversion_failed,
    comparison_failed,
    unexpected_target_type,
    unexpected_actual_type,
    # Value state (E2xxx)
    value_is_unknown,
    value_is_null,
    value_is_empty,
    # Coercion (E3xxx)
    coercion_error,
    unhandled_coercion_type,
    invalid_format,
    precision_loss,
    out_of_range,
    element_coercion_failed,
    # Attribute (E4xxx)
    attribute_not_found,
    value_type_unhandled,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    # Comparison (E1xxx)
    "comparison_error",
    "no_comparison_func_registered",
    "type_conversion_failed",
    "comparison_failed",
    "unexpected_target_type",
    "unexpected_actual_type",
    # Value state (E2xxx)
    "value_is_unknown",
    "value_is_null",
    "value_is_empty",
    # Coercion (E3xxx)
    "coercion_error",
    "unhandled_coercion_type",
    "invalid_format",
    "precision_loss",
    "out_of_range",
    "element_coercion_failed",
    # Attribute (E4xxx)
    "attribute_not_found",
    "value_type_unhandled",
]
