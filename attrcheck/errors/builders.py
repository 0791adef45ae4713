"""Domain-Specific Error Builders

Ergonomic constructors for typed errors across the comparison, value state,
coercion and attribute domains. Each builder creates an AppError with the
appropriate code and context, wrapped in Err.
"""
from typing import Any

from .types import AppError, ErrorCode, ErrorContext, Err


def _type_name(value: Any) -> str:
    return "None" if value is None else type(value).__name__


# =============================================================================
# Comparison Errors (E1xxx)
# =============================================================================

def comparison_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E1000_COMPARISON_GENERIC,
    origin: str = "",
    cause: AppError | Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create comparison error."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    ))


def no_comparison_func_registered(op: Any, target: Any, origin: str = "") -> Err[AppError]:
    return comparison_error(
        f"no comparison func registered for operation {str(op)!r} with target type {_type_name(target)}",
        code=ErrorCode.E1001_NO_COMPARISON_FUNC_REGISTERED,
        origin=origin,
        op=str(op),
        target_type=_type_name(target),
    )


def type_conversion_failed(cause: AppError | Exception, origin: str = "") -> Err[AppError]:
    return comparison_error(
        "type conversion failed",
        code=ErrorCode.E1002_TYPE_CONVERSION_FAILED,
        origin=origin,
        cause=cause,
    )


def comparison_failed(actual: Any, op: Any, expected: Any, origin: str = "") -> Err[AppError]:
    return comparison_error(
        f"comparison failed: {actual!r} {op} {expected!r}",
        code=ErrorCode.E1003_COMPARISON_FAILED,
        origin=origin,
        actual=actual,
        op=str(op),
        expected=expected,
    )


def unexpected_target_type(
    comparison: str,
    target: Any,
    op: Any,
    expected_type: str,
    cause: AppError | Exception | None = None,
) -> Err[AppError]:
    return comparison_error(
        f"{comparison}: unexpected target type {_type_name(target)} for operation {str(op)!r}, "
        f"expected {expected_type}",
        code=ErrorCode.E1004_UNEXPECTED_TARGET_TYPE,
        origin=comparison,
        cause=cause,
        op=str(op),
        target_type=_type_name(target),
        expected_type=expected_type,
    )


def unexpected_actual_type(
    comparison: str,
    actual_type: str,
    op: Any,
    expected_type: str,
) -> Err[AppError]:
    return comparison_error(
        f"{comparison}: unexpected attribute type {actual_type} for operation {str(op)!r}, "
        f"expected {expected_type}",
        code=ErrorCode.E1005_UNEXPECTED_ACTUAL_TYPE,
        origin=comparison,
        op=str(op),
        actual_type=actual_type,
        expected_type=expected_type,
    )


# =============================================================================
# Value State Sentinels (E2xxx)
# =============================================================================

def value_is_unknown() -> Err[AppError]:
    return Err(AppError(code=ErrorCode.E2001_VALUE_IS_UNKNOWN, message="value is unknown"))


def value_is_null() -> Err[AppError]:
    return Err(AppError(code=ErrorCode.E2002_VALUE_IS_NULL, message="value is nil"))


def value_is_empty() -> Err[AppError]:
    return Err(AppError(code=ErrorCode.E2003_VALUE_IS_EMPTY, message="value is empty"))


# =============================================================================
# Coercion Errors (E3xxx)
# =============================================================================

def coercion_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E3000_COERCION_GENERIC,
    value: Any = None,
    target: str | None = None,
    cause: AppError | Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create coercion error."""
    meta = {"value": value, "target": target, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin="coercion"),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def unhandled_coercion_type(value: Any, target: str) -> Err[AppError]:
    return coercion_error(
        f"unhandled type to {target} conversion: {_type_name(value)}",
        code=ErrorCode.E3001_INVALID_TYPE,
        target=target,
        source_type=_type_name(value),
    )


def invalid_format(value: str, target: str, cause: Exception | None = None) -> Err[AppError]:
    return coercion_error(
        f"cannot parse {value!r} as {target}",
        code=ErrorCode.E3002_INVALID_FORMAT,
        value=value,
        target=target,
        cause=cause,
    )


def precision_loss(value: Any, target: str) -> Err[AppError]:
    return coercion_error(
        f"converting {value!r} to {target} would truncate",
        code=ErrorCode.E3003_PRECISION_LOSS,
        value=value,
        target=target,
    )


def out_of_range(value: Any, target: str) -> Err[AppError]:
    return coercion_error(
        f"{value!r} is out of range for {target}",
        code=ErrorCode.E3004_OUT_OF_RANGE,
        value=value,
        target=target,
    )


def element_coercion_failed(offset: int, literal: Any, target: str, cause: AppError) -> Err[AppError]:
    return coercion_error(
        f"element at offset {offset} ({literal!r}) cannot be converted to {target}",
        code=ErrorCode.E3005_ELEMENT_COERCION_FAILED,
        target=target,
        cause=cause,
        offset=offset,
        literal=literal,
    )


# =============================================================================
# Attribute Errors (E4xxx)
# =============================================================================

def attribute_not_found(path: Any) -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E4001_ATTRIBUTE_NOT_FOUND,
        message=f"attribute {str(path)!r} not found in configuration",
        context=ErrorContext(origin="config"),
        metadata={"path": str(path)},
    ))


def value_type_unhandled(conversion: str, value: Any) -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E4002_VALUE_TYPE_UNHANDLED,
        message=f"{conversion}: unhandled attribute value type {_type_name(value)}",
        context=ErrorContext(origin=conversion),
        metadata={"value_type": _type_name(value)},
    ))
