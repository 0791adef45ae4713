"""Host attribute model: values, paths, configuration snapshots, diagnostics."""
from .types import (
    INT64_MAX,
    INT64_MIN,
    AnyAttrValue,
    AttrType,
    AttrValue,
    BoolValue,
    Float64Value,
    Int64Value,
    ListValue,
    MapValue,
    NumberValue,
    ObjectValue,
    SetValue,
    StringValue,
)
from .path import Path, PathStep, format_path_steps, format_paths
from .snapshot import Config
from .diagnostics import Diagnostic, Diagnostics, Severity

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "AnyAttrValue",
    "AttrType",
    "AttrValue",
    "BoolValue",
    "Float64Value",
    "Int64Value",
    "ListValue",
    "MapValue",
    "NumberValue",
    "ObjectValue",
    "SetValue",
    "StringValue",
    "Path",
    "PathStep",
    "format_path_steps",
    "format_paths",
    "Config",
    "Diagnostic",
    "Diagnostics",
    "Severity",
]
