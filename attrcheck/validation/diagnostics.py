"""Diagnostic Formatter

Renders comparison outcomes as attribute diagnostics. Operand values are
shown with their type, e.g. ``int(5)`` or ``str('abc')``.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from attrcheck.errors import AppError, ErrorCode

from .comparison import CompareOp
from .generic import to_generic_types

_FAILED_MESSAGES: dict[CompareOp, tuple[str, str]] = {
    CompareOp.EQUAL: ("Attribute value does not match expected", "must equal"),
    CompareOp.NOT_EQUAL: ("Attribute value is not allowed", "must not equal"),
    CompareOp.LESS_THAN: ("Value is above threshold", "must be less than"),
    CompareOp.LESS_THAN_OR_EQUAL_TO: ("Value is above threshold", "must be less than or equal to"),
    CompareOp.GREATER_THAN: ("Value is below threshold", "must be greater than"),
    CompareOp.GREATER_THAN_OR_EQUAL_TO: ("Value is below threshold", "must be greater than or equal to"),
    CompareOp.ONE_OF: ("Value is not within allowed list", "must be one of"),
    CompareOp.NOT_ONE_OF: ("Value is not within allowed list", "must not be one of"),
}


def printable_type_with_value(value: Any) -> str:
    """Render ``value`` as ``<type>(<value>)``."""
    type_name = "None" if value is None else type(value).__name__
    match value:
        case bool() | str():
            return f"{type_name}({value!r})"
        case int():
            return f"{type_name}({value:d})"
        case float():
            return f"{type_name}({value:f})"
        case Decimal():
            return f"{type_name}({value})"
        case _:
            return f"{type_name}({value!r})"


def add_comparison_failed_diagnostic(op: CompareOp, target: Any, req: Any, resp: Any, error: AppError) -> None:
    generic_req, generic_resp = to_generic_types(req, resp)
    messages = _FAILED_MESSAGES.get(op)
    if messages is None:
        generic_resp.diagnostics.add_attribute_error(
            generic_req.path,
            "Unknown comparison operation",
            f"Specified unknown comparison operation: {op}",
        )
        return
    summary, verb = messages
    generic_resp.diagnostics.add_attribute_error(
        generic_req.path,
        summary,
        f"Attribute value {verb} {printable_type_with_value(target)}; err={error}",
    )


def add_comparison_error_diagnostic(op: CompareOp, target: Any, req: Any, resp: Any, error: AppError) -> None:
    """Emit the diagnostic matching the error returned by a comparison."""
    if error.matches(ErrorCode.E1003_COMPARISON_FAILED):
        add_comparison_failed_diagnostic(op, target, req, resp, error)
        return
    generic_req, generic_resp = to_generic_types(req, resp)
    if error.matches(ErrorCode.E1002_TYPE_CONVERSION_FAILED):
        generic_resp.diagnostics.add_attribute_error(
            generic_req.path,
            "Could not convert attribute to target type for comparison",
            f"Unable to convert attribute value type {type(generic_req.config_value).__name__} "
            f"to {type(target).__name__} for {str(op)!r} comparison: {error}",
        )
        return
    generic_resp.diagnostics.add_attribute_error(
        generic_req.path,
        "Unexpected error during comparison",
        f"Unexpected error during comparison: {error}",
    )
