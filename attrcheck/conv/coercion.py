"""Best-effort Coercion of Opaque Values

Comparison targets arrive untyped. Coercion rules turn them into the
concrete representation a comparison strategy works in: bool, int, int64,
float64, Decimal, or lists thereof.

Features:
- Type-safe coercion with Result types
- Heterogeneous numeric sources: integers of any width, floats,
  Decimal, arbitrary-precision NumberValue and base-10 numeric strings
- Explicit narrowing policy: non-integral values become integers only when
  truncation is allowed, 64-bit range is always enforced for int64
- Element-wise collection coercion reporting the failing offset
"""
from __future__ import annotations

import numbers
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, Sequence, TypeVar

from attrcheck.config import get_settings
from attrcheck.errors import (
    AppError,
    Err,
    Ok,
    Result,
    element_coercion_failed,
    invalid_format,
    out_of_range,
    precision_loss,
    unhandled_coercion_type,
)
from attrcheck.logging import coercion_logger
from attrcheck.values import NumberValue

T = TypeVar("T")

_INT_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE | re.ASCII,
)

# Accepted boolean spellings
_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _unwrap_number(value: Any) -> Any:
    """Replace a valued NumberValue with its magnitude; no magnitude means zero."""
    if isinstance(value, NumberValue) and not (value.is_unknown() or value.is_null()):
        return Decimal(0) if value.value is None else value.value
    return value


@dataclass(frozen=True, slots=True)
class CoercionRule(ABC, Generic[T]):
    """Base class for coercion rules.

    Each rule defines:
    - Target type it coerces to
    - Validation of coercion feasibility
    - The actual coercion logic
    """

    @property
    @abstractmethod
    def target_name(self) -> str:
        """Name of the representation this rule coerces to."""

    @abstractmethod
    def coerce(self, value: Any) -> Result[T, AppError]:
        """Coerce value to target type. Returns Result."""

    def can_coerce(self, value: Any) -> bool:
        """Check if value can be coerced to target type."""
        return self.coerce(value).is_ok()

    def __call__(self, value: Any) -> Result[T, AppError]:
        return self.coerce(value)


@dataclass(frozen=True, slots=True)
class ToBool(CoercionRule[bool]):
    """Coerce bool or a boolean string ("1", "t", "true", ...) to bool."""

    @property
    def target_name(self) -> str:
        return "bool"

    def coerce(self, value: Any) -> Result[bool, AppError]:
        if isinstance(value, bool):
            return Ok(value)
        if isinstance(value, str):
            if value in _TRUE_STRINGS:
                return Ok(True)
            if value in _FALSE_STRINGS:
                return Ok(False)
            return invalid_format(value, self.target_name)
        return unhandled_coercion_type(value, self.target_name)


@dataclass(frozen=True, slots=True)
class ToInteger(CoercionRule[int]):
    """Coerce numeric value or base-10 string to int.

    bits=64 enforces signed 64-bit range; bits=None leaves the result
    unbounded. allow_truncation=None defers to Settings.
    """
    bits: int | None = 64
    allow_truncation: bool | None = None

    @property
    def target_name(self) -> str:
        return "int" if self.bits is None else f"int{self.bits}"

    def _truncation_allowed(self) -> bool:
        if self.allow_truncation is None:
            return get_settings().ALLOW_NUMERIC_TRUNCATION
        return self.allow_truncation

    def _bounded(self, original: Any, result: int) -> Result[int, AppError]:
        if self.bits is not None:
            low, high = -(2 ** (self.bits - 1)), 2 ** (self.bits - 1) - 1
            if not low <= result <= high:
                return out_of_range(original, self.target_name)
        return Ok(result)

    def _from_real(self, original: Any, value: Any) -> Result[int, AppError]:
        try:
            truncated = int(value)
        except (OverflowError, ValueError, InvalidOperation):
            return out_of_range(original, self.target_name)
        if truncated != value and not self._truncation_allowed():
            return precision_loss(original, self.target_name)
        return self._bounded(original, truncated)

    def coerce(self, value: Any) -> Result[int, AppError]:
        unwrapped = _unwrap_number(value)
        if isinstance(unwrapped, bool):
            return unhandled_coercion_type(value, self.target_name)
        if isinstance(unwrapped, numbers.Integral):
            return self._bounded(value, int(unwrapped))
        if isinstance(unwrapped, (Decimal, numbers.Real)):
            return self._from_real(value, unwrapped)
        if isinstance(unwrapped, str):
            if not _INT_PATTERN.fullmatch(unwrapped):
                return invalid_format(unwrapped, self.target_name)
            return self._bounded(value, int(unwrapped, 10))
        return unhandled_coercion_type(value, self.target_name)


@dataclass(frozen=True, slots=True)
class ToFloat64(CoercionRule[float]):
    """Coerce numeric value or base-10 string to float."""

    @property
    def target_name(self) -> str:
        return "float64"

    def coerce(self, value: Any) -> Result[float, AppError]:
        unwrapped = _unwrap_number(value)
        if isinstance(unwrapped, bool):
            return unhandled_coercion_type(value, self.target_name)
        if isinstance(unwrapped, str):
            if not _FLOAT_PATTERN.fullmatch(unwrapped):
                return invalid_format(unwrapped, self.target_name)
            return Ok(float(unwrapped))
        if isinstance(unwrapped, (Decimal, numbers.Real)):
            try:
                return Ok(float(unwrapped))
            except (OverflowError, ValueError):
                return out_of_range(value, self.target_name)
        return unhandled_coercion_type(value, self.target_name)


@dataclass(frozen=True, slots=True)
class ToDecimal(CoercionRule[Decimal]):
    """Coerce numeric value or base-10 string to Decimal.

    Floats go through their shortest repr, so 0.1 becomes Decimal("0.1")
    rather than the exact binary expansion.
    """

    @property
    def target_name(self) -> str:
        return "Decimal"

    def coerce(self, value: Any) -> Result[Decimal, AppError]:
        unwrapped = _unwrap_number(value)
        if isinstance(unwrapped, bool):
            return unhandled_coercion_type(value, self.target_name)
        if isinstance(unwrapped, Decimal):
            return Ok(unwrapped)
        if isinstance(unwrapped, numbers.Integral):
            return Ok(Decimal(int(unwrapped)))
        if isinstance(unwrapped, numbers.Real):
            return Ok(Decimal(repr(float(unwrapped))))
        if isinstance(unwrapped, str):
            if not _FLOAT_PATTERN.fullmatch(unwrapped):
                return invalid_format(unwrapped, self.target_name)
            return Ok(Decimal(unwrapped))
        return unhandled_coercion_type(value, self.target_name)


@dataclass(frozen=True, slots=True)
class ElementwiseCoercion(CoercionRule[list]):
    """Apply a scalar rule to every element of a list or tuple."""
    element_rule: CoercionRule

    @property
    def target_name(self) -> str:
        return f"[]{self.element_rule.target_name}"

    def coerce(self, value: Any) -> Result[list, AppError]:
        if not isinstance(value, (list, tuple)):
            return unhandled_coercion_type(value, self.target_name)
        out = []
        for offset, literal in enumerate(value):
            match self.element_rule.coerce(literal):
                case Ok(converted):
                    out.append(converted)
                case Err(error):
                    coercion_logger().debug(
                        "element_coercion_failed",
                        offset=offset,
                        target=self.element_rule.target_name,
                        code=error.code.name,
                    )
                    return element_coercion_failed(offset, literal, self.element_rule.target_name, error)
        return Ok(out)


def try_coerce_to_bool(value: Any) -> Result[bool, AppError]:
    return ToBool().coerce(value)


def try_coerce_to_int(value: Any, *, allow_truncation: bool | None = None) -> Result[int, AppError]:
    return ToInteger(bits=None, allow_truncation=allow_truncation).coerce(value)


def try_coerce_to_int64(value: Any, *, allow_truncation: bool | None = None) -> Result[int, AppError]:
    return ToInteger(bits=64, allow_truncation=allow_truncation).coerce(value)


def try_coerce_to_float64(value: Any) -> Result[float, AppError]:
    return ToFloat64().coerce(value)


def try_coerce_to_decimal(value: Any) -> Result[Decimal, AppError]:
    return ToDecimal().coerce(value)


def try_coerce_to_ints(
    values: Sequence[Any], *, allow_truncation: bool | None = None
) -> Result[list[int], AppError]:
    return ElementwiseCoercion(ToInteger(bits=None, allow_truncation=allow_truncation)).coerce(values)


def try_coerce_to_floats(values: Sequence[Any]) -> Result[list[float], AppError]:
    return ElementwiseCoercion(ToFloat64()).coerce(values)


_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_TERM = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)", re.ASCII)
_MAX_DURATION_NS = 2**63 - 1


@dataclass(frozen=True, slots=True)
class ToDuration(CoercionRule[timedelta]):
    """Coerce a unit-suffixed duration string to timedelta.

    Accepts a signed sequence of decimal terms with units ns, us, ms, s,
    m, h (e.g. "1h30m", "-1.5s", "300ms"). A bare "0" is zero; anything
    else without a unit is rejected. Durations beyond int64 nanoseconds
    are out of range.
    """

    @property
    def target_name(self) -> str:
        return "duration"

    def coerce(self, value: Any) -> Result[timedelta, AppError]:
        if not isinstance(value, str):
            return unhandled_coercion_type(value, self.target_name)
        body = value
        negative = body[:1] == "-"
        if body[:1] in ("-", "+"):
            body = body[1:]
        if body == "0":
            return Ok(timedelta(0))
        if not body:
            return invalid_format(value, self.target_name)

        total = Decimal(0)
        pos = 0
        while pos < len(body):
            term = _DURATION_TERM.match(body, pos)
            if term is None:
                return invalid_format(value, self.target_name)
            total += Decimal(term.group(1)) * _DURATION_UNITS[term.group(2)]
            pos = term.end()
        if total > _MAX_DURATION_NS:
            return out_of_range(value, self.target_name)
        nanoseconds = int(-total if negative else total)
        return Ok(timedelta(microseconds=nanoseconds / 1_000))


def try_coerce_to_duration(value: Any) -> Result[timedelta, AppError]:
    return ToDuration().coerce(value)
