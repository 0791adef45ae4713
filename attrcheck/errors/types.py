"""Monadic Error Handling Types

Result/Either types for deterministic, composable error propagation through
the comparison and validation pipeline. Comparison strategies, coercion rules
and attribute conversions all return a Result; exceptions are reserved for
programmer errors in the embedding integration.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, Iterator, NoReturn, TypeVar, Union, final

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E1xxx: Comparison dispatch and evaluation
    E2xxx: Value state sentinels (not true failures)
    E3xxx: Coercion of opaque values
    E4xxx: Attribute lookup and conversion
    E9xxx: Internal/Unknown errors
    """
    # Comparison (E1xxx)
    E1000_COMPARISON_GENERIC = 1000
    E1001_NO_COMPARISON_FUNC_REGISTERED = 1001
    E1002_TYPE_CONVERSION_FAILED = 1002
    E1003_COMPARISON_FAILED = 1003
    E1004_UNEXPECTED_TARGET_TYPE = 1004
    E1005_UNEXPECTED_ACTUAL_TYPE = 1005

    # Value state (E2xxx)
    E2000_VALUE_STATE_GENERIC = 2000
    E2001_VALUE_IS_UNKNOWN = 2001
    E2002_VALUE_IS_NULL = 2002
    E2003_VALUE_IS_EMPTY = 2003

    # Coercion (E3xxx)
    E3000_COERCION_GENERIC = 3000
    E3001_INVALID_TYPE = 3001
    E3002_INVALID_FORMAT = 3002
    E3003_PRECISION_LOSS = 3003
    E3004_OUT_OF_RANGE = 3004
    E3005_ELEMENT_COERCION_FAILED = 3005

    # Attribute (E4xxx)
    E4000_ATTRIBUTE_GENERIC = 4000
    E4001_ATTRIBUTE_NOT_FOUND = 4001
    E4002_VALUE_TYPE_UNHANDLED = 4002

    # Internal (E9xxx)
    E9000_INTERNAL_GENERIC = 9000
    E9001_UNEXPECTED_ERROR = 9001

    @property
    def category(self) -> str:
        """Human-readable error category."""
        code = self.value
        if 1000 <= code < 2000:
            return "comparison"
        if 2000 <= code < 3000:
            return "value_state"
        if 3000 <= code < 4000:
            return "coercion"
        if 4000 <= code < 5000:
            return "attribute"
        return "internal"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Where an error was raised: the strategy, rule or conversion name."""
    origin: str = ""


@dataclass(frozen=True, slots=True)
class AppError:
    """Base error with full context.

    All errors carry:
    - Typed error code from taxonomy
    - Human-readable message
    - Structured metadata for diagnostics
    - Origin context
    - Optional cause for error chaining (another AppError or an exception)
    """
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    metadata: dict = field(default_factory=dict)
    cause: AppError | Exception | None = None

    def with_metadata(self, **kwargs) -> AppError:
        """Create new error with additional metadata."""
        return AppError(
            code=self.code,
            message=self.message,
            context=self.context,
            metadata={**self.metadata, **kwargs},
            cause=self.cause,
        )

    def causes(self) -> Iterator[AppError | Exception]:
        """Walk this error and every chained cause, outermost first."""
        current: AppError | Exception | None = self
        while current is not None:
            yield current
            current = current.cause if isinstance(current, AppError) else current.__cause__

    def matches(self, code: ErrorCode) -> bool:
        """True if this error or any AppError in its cause chain has ``code``."""
        return any(isinstance(e, AppError) and e.code is code for e in self.causes())

    def to_dict(self) -> dict:
        """Serialize error for structured logging."""
        return {
            "error": {
                "code": self.code.name,
                "code_num": self.code.value,
                "message": self.message,
                "category": self.code.category,
                "origin": self.context.origin,
                "metadata": self.metadata,
            }
        }

    def __str__(self) -> str:
        if self.cause is None:
            return f"[{self.code.name}] {self.message}"
        return f"[{self.code.name}] {self.message}: {self.cause}"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result monad."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Extract the value. Safe because Ok always contains a value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U, AppError]:
        """Transform the success value."""
        return Ok(f(self.value))

    def and_then(self, f: Callable[[T], Result[U, AppError]]) -> Result[U, AppError]:
        """Chain operations that may fail."""
        return f(self.value)


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result monad.

    Wraps an AppError. Immutable and carries full error context.
    """
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises because Err has no value to unwrap."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        """Extract the error."""
        return self.error

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """No-op for Err variant."""
        return self  # type: ignore

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """No-op for Err variant."""
        return self  # type: ignore


# Type alias for Result monad
Result = Union[Ok[T], Err[E]]

