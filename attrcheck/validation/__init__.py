"""Comparison and Validation

Key components:
- CompareOp / ComparisonRegistry: type-keyed comparison dispatch
- GenericValidator: skip-policy wrapper around a test function
- Diagnostic formatter for comparison outcomes
- Validator recipes: required, regexp, length, compare, URL, duration,
  environment, file and sibling checks

Usage:
    from attrcheck.validation import CompareOp, compare, required

    validators = [required(), compare(CompareOp.GREATER_THAN_OR_EQUAL_TO, 1)]
    for v in validators:
        v.validate(request, response)
"""
from .comparison import (
    CompareOp,
    ComparisonFunc,
    ComparisonRegistry,
    DEFAULT_REGISTRY,
    type_key,
    default_comparison_funcs,
    EMPTY_SEQUENCE_KEY,
    MIXED_SEQUENCE_KEY,
    set_comparison_func,
    get_comparison_func,
    compare_attr_values,
    compare_bool,
    compare_float64,
    compare_int64,
    compare_decimal,
    compare_string,
    compare_strings,
    compare_ints,
    compare_empty_sequence,
)
from .generic import (
    Describer,
    GenericConfig,
    GenericRequest,
    GenericResponse,
    GenericValidator,
    TestFunc,
    to_generic_request,
    to_generic_response,
    to_generic_types,
)
from .diagnostics import (
    printable_type_with_value,
    add_comparison_failed_diagnostic,
    add_comparison_error_diagnostic,
)
from .validators import (
    required_test,
    required,
    regexp_match_test,
    regexp_match,
    regexp_not_match_test,
    regexp_not_match,
    length_test,
    length,
    compare_test,
    compare,
    is_url_test,
    is_url_with,
    is_url,
    is_duration_string_test,
    is_duration_string,
    env_var_valued_test,
    env_var_valued,
    file_is_readable_test,
    file_is_readable,
    mutually_exclusive_sibling_test,
    mutually_exclusive_sibling,
    mutually_inclusive_sibling_test,
    mutually_inclusive_sibling,
)

__all__ = [
    # Comparison
    "CompareOp",
    "ComparisonFunc",
    "ComparisonRegistry",
    "DEFAULT_REGISTRY",
    "type_key",
    "default_comparison_funcs",
    "EMPTY_SEQUENCE_KEY",
    "MIXED_SEQUENCE_KEY",
    "set_comparison_func",
    "get_comparison_func",
    "compare_attr_values",
    "compare_bool",
    "compare_float64",
    "compare_int64",
    "compare_decimal",
    "compare_string",
    "compare_strings",
    "compare_ints",
    "compare_empty_sequence",
    # Wrapper
    "Describer",
    "GenericConfig",
    "GenericRequest",
    "GenericResponse",
    "GenericValidator",
    "TestFunc",
    "to_generic_request",
    "to_generic_response",
    "to_generic_types",
    # Diagnostics
    "printable_type_with_value",
    "add_comparison_failed_diagnostic",
    "add_comparison_error_diagnostic",
    # Recipes
    "required_test",
    "required",
    "regexp_match_test",
    "regexp_match",
    "regexp_not_match_test",
    "regexp_not_match",
    "length_test",
    "length",
    "compare_test",
    "compare",
    "is_url_test",
    "is_url_with",
    "is_url",
    "is_duration_string_test",
    "is_duration_string",
    "env_var_valued_test",
    "env_var_valued",
    "file_is_readable_test",
    "file_is_readable",
    "mutually_exclusive_sibling_test",
    "mutually_exclusive_sibling",
    "mutually_inclusive_sibling_test",
    "mutually_inclusive_sibling",
]
