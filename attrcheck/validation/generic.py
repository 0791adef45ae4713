"""Attribute Validator Wrapper

A GenericValidator bundles a test function with skip-on-null and
skip-on-unknown policy. One validator serves every attribute kind: the
per-kind entry points bridge the host's request and response into the
generic shapes and delegate to validate().

Each validate() call is a single dispatch:

    classify -> skip (unknown/null per policy) | evaluate test_func

The only observable effect is diagnostic emission on the response.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, field_validator
from structlog.contextvars import bound_contextvars

from attrcheck.conv import check_value_state, is_value_null_error, is_value_unknown_error
from attrcheck.logging import validation_logger
from attrcheck.values import AttrValue, Config, Diagnostics, Path


@dataclass(frozen=True, slots=True, kw_only=True)
class GenericRequest:
    """Attribute under validation plus the configuration snapshot it lives in."""
    path: Path
    config_value: AttrValue
    path_expression: str = ""
    config: Config = field(default_factory=Config)


@dataclass(slots=True)
class GenericResponse:
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


TestFunc = Callable[[GenericRequest, GenericResponse], None]

_REQUEST_FIELDS = ("path", "path_expression", "config", "config_value")


def to_generic_request(src: Any) -> GenericRequest:
    if isinstance(src, GenericRequest):
        return src
    if all(hasattr(src, name) for name in _REQUEST_FIELDS):
        return GenericRequest(
            path=src.path,
            path_expression=src.path_expression,
            config=src.config,
            config_value=src.config_value,
        )
    raise TypeError(f"no conversion from request type {type(src).__name__} to GenericRequest")


def to_generic_response(src: Any) -> GenericResponse:
    """Wrap a host response; diagnostics added to the result land on ``src``."""
    if isinstance(src, GenericResponse):
        return src
    if isinstance(getattr(src, "diagnostics", None), Diagnostics):
        return GenericResponse(diagnostics=src.diagnostics)
    raise TypeError(f"no conversion from response type {type(src).__name__} to GenericResponse")


def to_generic_types(req: Any, resp: Any) -> tuple[GenericRequest, GenericResponse]:
    """Bridge host request/response objects into the generic shapes.

    Raises TypeError for a shape that does not expose the expected
    attributes; this is an integration error and is not recoverable.
    """
    return to_generic_request(req), to_generic_response(resp)


@runtime_checkable
class Describer(Protocol):
    def description(self) -> str: ...

    def markdown_description(self) -> str: ...


class GenericConfig(BaseModel):
    """Validator construction parameters.

    A missing or None test_func fails at construction time.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        extra="forbid",
    )

    description: str = ""
    markdown_description: str = ""
    describer: Describer | None = None
    test_func: TestFunc
    skip_when_null: bool = False
    skip_when_unknown: bool = False

    @field_validator("test_func", mode="before")
    @classmethod
    def _require_test_func(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("test function cannot be None")
        return value


class GenericValidator:
    """Validator applicable to any attribute kind."""

    __slots__ = ("_config",)

    def __init__(self, config: GenericConfig):
        self._config = config

    @property
    def config(self) -> GenericConfig:
        return self._config

    @property
    def skip_when_null(self) -> bool:
        return self._config.skip_when_null

    @property
    def skip_when_unknown(self) -> bool:
        return self._config.skip_when_unknown

    def validate(self, req: GenericRequest, resp: GenericResponse) -> None:
        state = check_value_state(req.config_value)
        error = state.unwrap_err() if state.is_err() else None
        with bound_contextvars(attribute_path=str(req.path)):
            log = validation_logger()
            if self._config.skip_when_unknown and is_value_unknown_error(error):
                log.debug("validation_skipped", reason="unknown")
                return
            if self._config.skip_when_null and is_value_null_error(error):
                log.debug("validation_skipped", reason="null")
                return
            before = len(resp.diagnostics)
            self._config.test_func(req, resp)
            if len(resp.diagnostics) > before:
                log.debug("validation_diagnostics_emitted", count=len(resp.diagnostics) - before)

    def description(self) -> str:
        if self._config.describer is not None:
            return self._config.describer.description()
        return self._config.description

    def markdown_description(self) -> str:
        if self._config.describer is not None:
            return self._config.describer.markdown_description()
        return self._config.markdown_description

    def _bridge(self, req: Any, resp: Any) -> None:
        generic_req, generic_resp = to_generic_types(req, resp)
        self.validate(generic_req, generic_resp)

    def validate_bool(self, req: Any, resp: Any) -> None:
        self._bridge(req, resp)

    def validate_float64(self, req: Any, resp: Any) -> None:
        self._bridge(req, resp)

    def validate_int64(self, req: Any, resp: Any) -> None:
        self._bridge(req, resp)

    def validate_list(self, req: Any, resp: Any) -> None:
        self._bridge(req, resp)

    def validate_map(self, req: Any, resp: Any) -> None:
        self._bridge(req, resp)

    def validate_number(self, req: Any, resp: Any) -> None:
        self._bridge(req, resp)

    def validate_object(self, req: Any, resp: Any) -> None:
        self._bridge(req, resp)

    def validate_set(self, req: Any, resp: Any) -> None:
        self._bridge(req, resp)

    def validate_string(self, req: Any, resp: Any) -> None:
        self._bridge(req, resp)
