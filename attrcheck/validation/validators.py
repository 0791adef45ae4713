"""Validator Recipes

Ready-made validators built on GenericValidator. Each recipe has a
``*_test`` factory returning the bare test function, so the check can be
reused inside a custom validator, and a constructor returning the
configured validator.

Parameterless validators are module-level singletons.

Usage:
    required()
    length(1, 64)
    compare(CompareOp.ONE_OF, ["tcp", "udp"])
    is_url_with("https", 443)
    mutually_exclusive_sibling("password_file")
"""
from __future__ import annotations

import json
import os
import re
from typing import Any
from urllib.parse import urlparse

from attrcheck.conv import attribute_value_length, attribute_value_to_string, check_value_state, try_coerce_to_duration
from attrcheck.logging import validation_logger
from attrcheck.values import ListValue, MapValue, SetValue, format_path_steps

from .comparison import CompareOp, ComparisonRegistry, compare_attr_values
from .diagnostics import add_comparison_error_diagnostic, printable_type_with_value
from .generic import GenericConfig, GenericRequest, GenericResponse, GenericValidator, TestFunc


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _validator(description: str, test_func: TestFunc, *, skip_when_null: bool = True, skip_when_unknown: bool = True) -> GenericValidator:
    return GenericValidator(GenericConfig(
        description=description,
        markdown_description=description,
        test_func=test_func,
        skip_when_null=skip_when_null,
        skip_when_unknown=skip_when_unknown,
    ))


# =============================================================================
# Required
# =============================================================================

def required_test() -> TestFunc:
    """Error unless the attribute holds a non-empty value."""
    def check(req: GenericRequest, resp: GenericResponse) -> None:
        if check_value_state(req.config_value).is_ok():
            return
        resp.diagnostics.add_attribute_error(
            req.path,
            "Attribute must be valued",
            "Attribute must have a value configured",
        )
    return check


_REQUIRED = _validator(
    "Asserts the attribute is defined and non-null",
    required_test(),
    skip_when_null=False,
    skip_when_unknown=True,
)


def required() -> GenericValidator:
    return _REQUIRED


# =============================================================================
# Regular expressions
# =============================================================================

def regexp_match_test(pattern: str) -> TestFunc:
    """Raises re.error immediately for an invalid pattern."""
    compiled = re.compile(pattern)

    def check(req: GenericRequest, resp: GenericResponse) -> None:
        text = attribute_value_to_string(req.config_value)
        if not compiled.search(text):
            resp.diagnostics.add_attribute_error(
                req.path,
                "Field value does not match expression",
                f"Field value {_quote(text)} does not match expression {_quote(pattern)}",
            )
    return check


def regexp_match(pattern: str) -> GenericValidator:
    return _validator(
        f"Asserts attribute string value matches expression {_quote(pattern)}",
        regexp_match_test(pattern),
    )


def regexp_not_match_test(pattern: str) -> TestFunc:
    compiled = re.compile(pattern)

    def check(req: GenericRequest, resp: GenericResponse) -> None:
        text = attribute_value_to_string(req.config_value)
        if compiled.search(text):
            resp.diagnostics.add_attribute_error(
                req.path,
                "Field value must NOT match expression",
                f"Field value {_quote(text)} matches expression {_quote(pattern)}, "
                "indicating it contains invalid characters",
            )
    return check


def regexp_not_match(pattern: str) -> GenericValidator:
    return _validator(
        f"Assert attribute string value does not match expression {_quote(pattern)}",
        regexp_not_match_test(pattern),
    )


# =============================================================================
# Length
# =============================================================================

def length_test(min_l: int, max_l: int) -> TestFunc:
    """Bound the length of a string, list, set or map. -1 means unbounded."""
    def check(req: GenericRequest, resp: GenericResponse) -> None:
        if min_l == -1 and max_l == -1:
            resp.diagnostics.add_attribute_warning(
                req.path,
                "Length validation is unbounded, there is nothing to verify",
                "Both min_l and max_l were set to -1. This has no purpose and should be rectified.",
            )
            return
        if min_l < -1 or max_l < -1:
            resp.diagnostics.add_attribute_error(
                req.path,
                "Cannot use negative value for length check",
                f"The provided min_l value of {min_l} and / or the provided max_l value {max_l} are negative. "
                'The only valid negative value is -1 to indicate "unbounded". This should be rectified.',
            )
            return
        if max_l != -1 and min_l > max_l:
            resp.diagnostics.add_attribute_error(
                req.path,
                "Minimum length value is greater than maximum length value",
                f"The provided minimum length {min_l} is greater than the provided maximum length of {max_l}. "
                "This should be rectified.",
            )
            return

        actual = attribute_value_length(req.config_value)
        if min_l > -1 and actual < min_l:
            resp.diagnostics.add_attribute_error(
                req.path,
                "Field value length is below minimum threshold",
                f"Field value length {actual} is less than minimum allowed of {min_l}",
            )
        if max_l > -1 and actual > max_l:
            resp.diagnostics.add_attribute_error(
                req.path,
                "Field value length is above maximum threshold",
                f"Field value length {actual} is greater than the maximum allowed of {max_l}",
            )
    return check


def length(min_l: int, max_l: int) -> GenericValidator:
    if min_l < -1 or max_l < -1 or (min_l == -1 and max_l == -1):
        validation_logger().warning("length_validator_misconfigured", min_l=min_l, max_l=max_l)
    return _validator(
        f"Asserts an attribute's value contains no less than {min_l} and no more than {max_l} elements, "
        "with -1 meaning unbounded",
        length_test(min_l, max_l),
    )


# =============================================================================
# Comparison
# =============================================================================

def compare_test(op: CompareOp, target: Any, *meta: Any, registry: ComparisonRegistry | None = None) -> TestFunc:
    """Run the strategy registered for ``target``'s type and report any failure."""
    def check(req: GenericRequest, resp: GenericResponse) -> None:
        result = compare_attr_values(req.config_value, op, target, *meta, registry=registry)
        if result.is_err():
            add_comparison_error_diagnostic(op, target, req, resp, result.unwrap_err())
    return check


def compare(op: CompareOp, target: Any, *meta: Any, registry: ComparisonRegistry | None = None) -> GenericValidator:
    return _validator(
        f"Asserts an attribute is {_quote(str(op))} to {printable_type_with_value(target)}",
        compare_test(op, target, *meta, registry=registry),
    )


# =============================================================================
# Format checks
# =============================================================================

def is_url_test(required_scheme: str = "", required_port: int = 0) -> TestFunc:
    """Check every element of a list, set or map, or the scalar value itself.

    An empty scheme or a port of 0 accepts any.
    """
    def validate_url(text: str, req: GenericRequest, resp: GenericResponse) -> None:
        try:
            parsed = urlparse(text)
            port = parsed.port
        except ValueError as e:
            resp.diagnostics.add_attribute_error(
                req.path,
                "Value is not parseable as URL",
                f"Value is not parseable as URL: {e}",
            )
            return
        if required_scheme and parsed.scheme != required_scheme:
            resp.diagnostics.add_attribute_error(
                req.path,
                "URL scheme mismatch",
                f"Defined scheme {_quote(parsed.scheme)} does not match required {_quote(required_scheme)}",
            )
        if required_port and port != required_port:
            defined = "" if port is None else str(port)
            resp.diagnostics.add_attribute_error(
                req.path,
                "URL port mismatch",
                f"Defined port {_quote(defined)} does not match required {_quote(str(required_port))}",
            )

    def check(req: GenericRequest, resp: GenericResponse) -> None:
        value = req.config_value
        match value:
            case ListValue() | SetValue():
                elements = value.elements
            case MapValue():
                elements = tuple(value.elements.values())
            case _:
                elements = (value,)
        for element in elements:
            validate_url(attribute_value_to_string(element), req, resp)
    return check


def is_url_with(required_scheme: str, required_port: int) -> GenericValidator:
    return _validator("Tests if provided value is parseable as URL", is_url_test(required_scheme, required_port))


def is_url() -> GenericValidator:
    return is_url_with("", 0)


def is_duration_string_test() -> TestFunc:
    """Accept unit-suffixed durations such as "300ms" or "1h30m"."""
    def check(req: GenericRequest, resp: GenericResponse) -> None:
        parsed = try_coerce_to_duration(attribute_value_to_string(req.config_value))
        if parsed.is_err():
            resp.diagnostics.add_attribute_error(
                req.path,
                "Value is not parseable as a duration",
                f"Value is not parseable as a duration: {parsed.unwrap_err()}",
            )
    return check


_IS_DURATION_STRING = _validator("Tests if value is a valid duration string", is_duration_string_test())


def is_duration_string() -> GenericValidator:
    return _IS_DURATION_STRING


# =============================================================================
# Environment
# =============================================================================

def env_var_valued_test() -> TestFunc:
    def check(req: GenericRequest, resp: GenericResponse) -> None:
        name = attribute_value_to_string(req.config_value)
        value = os.environ.get(name)
        if value is None or value.strip() == "":
            resp.diagnostics.add_attribute_error(
                req.path,
                "Environment variable is either undefined or empty",
                f"The provided environment variable {_quote(name)} is not defined or empty",
            )
    return check


_ENV_VAR_VALUED = _validator(
    "Tests if value is an environment variable name that itself is valued",
    env_var_valued_test(),
)


def env_var_valued() -> GenericValidator:
    return _ENV_VAR_VALUED


def file_is_readable_test() -> TestFunc:
    """Open the named file and read a single byte from it."""
    def check(req: GenericRequest, resp: GenericResponse) -> None:
        name = attribute_value_to_string(req.config_value)
        try:
            fh = open(name, "rb")
        except OSError as e:
            resp.diagnostics.add_attribute_error(
                req.path,
                "File could not be opened for reading",
                f"File {_quote(name)} could not be opened for reading: {e}",
            )
            return
        with fh:
            try:
                fh.read(1)
            except OSError as e:
                resp.diagnostics.add_attribute_error(
                    req.path,
                    "File is not readable",
                    f"File {_quote(name)} could not be read from: {e}",
                )
    return check


_FILE_IS_READABLE = _validator("Tests if value is a file that exists and is readable", file_is_readable_test())


def file_is_readable() -> GenericValidator:
    return _FILE_IS_READABLE


# =============================================================================
# Siblings
# =============================================================================

def _sibling_is_valued(req: GenericRequest, sibling: str) -> tuple[bool, Any]:
    sibling_path = req.path.parent_path().at_name(sibling)
    fetched = req.config.get_attribute(sibling_path)
    if fetched.is_err():
        return False, sibling_path
    return check_value_state(fetched.unwrap()).is_ok(), sibling_path


def mutually_exclusive_sibling_test(sibling: str) -> TestFunc:
    """Error when both this attribute and its sibling are valued."""
    def check(req: GenericRequest, resp: GenericResponse) -> None:
        if check_value_state(req.config_value).is_err():
            return
        valued, sibling_path = _sibling_is_valued(req, sibling)
        if not valued:
            return
        resp.diagnostics.add_attribute_error(
            req.path,
            "Mutually exclusive value error",
            f"Cannot provide value to both {_quote(format_path_steps(*req.path.steps))} "
            f"and {_quote(format_path_steps(*sibling_path.steps))}",
        )
    return check


def mutually_exclusive_sibling(sibling: str) -> GenericValidator:
    """Sibling means another attribute at the same step depth."""
    return _validator(
        f"Ensures attribute is only valued if sibling attribute {_quote(sibling)} is empty",
        mutually_exclusive_sibling_test(sibling),
    )


def mutually_inclusive_sibling_test(sibling: str) -> TestFunc:
    """Error when the sibling is valued but this attribute is not."""
    def check(req: GenericRequest, resp: GenericResponse) -> None:
        if check_value_state(req.config_value).is_ok():
            return
        valued, sibling_path = _sibling_is_valued(req, sibling)
        if not valued:
            return
        resp.diagnostics.add_attribute_error(
            req.path,
            "Mutually inclusive value error",
            f"Attribute {_quote(format_path_steps(*req.path.steps))} is required "
            f"when sibling attribute {_quote(format_path_steps(*sibling_path.steps))} is valued",
        )
    return check


def mutually_inclusive_sibling(sibling: str) -> GenericValidator:
    return _validator(
        f"Ensure attribute is valued when sibling attribute {_quote(sibling)} is also valued",
        mutually_inclusive_sibling_test(sibling),
        skip_when_null=False,
        skip_when_unknown=False,
    )
