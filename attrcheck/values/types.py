"""Tri-state Attribute Value Model

Every attribute value is one variant of a closed sum type and reports two
orthogonal flags: ``unknown`` (not yet known at evaluation time) and
``null`` (explicitly absent). A value that is neither carries a concrete
payload for its kind.

Usage:
    StringValue("abc")
    StringValue(null=True)
    Int64Value(unknown=True)
    ListValue(AttrType.STRING, (StringValue("a"), StringValue("b")))
"""
from __future__ import annotations

import json
from dataclasses import KW_ONLY, dataclass, field
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Mapping, Union

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class AttrType(Enum):
    """Declared kind of an attribute or collection element."""
    BOOL = "bool"
    INT64 = "int64"
    FLOAT64 = "float64"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    SET = "set"
    MAP = "map"
    OBJECT = "object"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class AttrValue:
    """Base for all attribute value variants."""
    kind: ClassVar[AttrType]

    _: KW_ONLY
    unknown: bool = False
    null: bool = False

    def is_unknown(self) -> bool:
        return self.unknown

    def is_null(self) -> bool:
        return self.null

    def _render(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        if self.unknown:
            return "<unknown>"
        if self.null:
            return "<null>"
        return self._render()


@dataclass(frozen=True, slots=True)
class BoolValue(AttrValue):
    kind: ClassVar[AttrType] = AttrType.BOOL
    value: bool = False

    def _render(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class Int64Value(AttrValue):
    kind: ClassVar[AttrType] = AttrType.INT64
    value: int = 0

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"Int64Value out of range: {self.value}")

    def _render(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Float64Value(AttrValue):
    kind: ClassVar[AttrType] = AttrType.FLOAT64
    value: float = 0.0

    def _render(self) -> str:
        return repr(float(self.value))


@dataclass(frozen=True, slots=True)
class NumberValue(AttrValue):
    """Arbitrary-precision number. A valued instance may carry no magnitude."""
    kind: ClassVar[AttrType] = AttrType.NUMBER
    value: Decimal | None = None

    def _render(self) -> str:
        return "<nil>" if self.value is None else str(self.value)


@dataclass(frozen=True, slots=True)
class StringValue(AttrValue):
    kind: ClassVar[AttrType] = AttrType.STRING
    value: str = ""

    def _render(self) -> str:
        return json.dumps(self.value, ensure_ascii=False)


def _check_elements(owner: str, element_type: AttrType, elements) -> None:
    for i, element in enumerate(elements):
        if not isinstance(element, AttrValue) or element.kind is not element_type:
            raise ValueError(
                f"{owner} element {i} has kind "
                f"{getattr(element, 'kind', type(element).__name__)}, expected {element_type}"
            )


@dataclass(frozen=True, slots=True)
class ListValue(AttrValue):
    """Ordered collection of elements sharing one declared element type."""
    kind: ClassVar[AttrType] = AttrType.LIST
    element_type: AttrType = AttrType.STRING
    elements: tuple[AttrValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))
        _check_elements("ListValue", self.element_type, self.elements)

    def _render(self) -> str:
        return "[" + ",".join(str(e) for e in self.elements) + "]"


@dataclass(frozen=True, slots=True)
class SetValue(AttrValue):
    """Unordered collection; element order is preserved as supplied."""
    kind: ClassVar[AttrType] = AttrType.SET
    element_type: AttrType = AttrType.STRING
    elements: tuple[AttrValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))
        _check_elements("SetValue", self.element_type, self.elements)

    def _render(self) -> str:
        return "[" + ",".join(str(e) for e in self.elements) + "]"


@dataclass(frozen=True, slots=True)
class MapValue(AttrValue):
    kind: ClassVar[AttrType] = AttrType.MAP
    element_type: AttrType = AttrType.STRING
    elements: Mapping[str, AttrValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", dict(self.elements))
        _check_elements("MapValue", self.element_type, self.elements.values())

    def _render(self) -> str:
        return "{" + ",".join(f"{json.dumps(k)}:{v}" for k, v in self.elements.items()) + "}"


@dataclass(frozen=True, slots=True)
class ObjectValue(AttrValue):
    """Named attributes of heterogeneous kinds."""
    kind: ClassVar[AttrType] = AttrType.OBJECT
    attributes: Mapping[str, AttrValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", dict(self.attributes))

    def _render(self) -> str:
        return "{" + ",".join(f"{json.dumps(k)}:{v}" for k, v in self.attributes.items()) + "}"


# Closed union used for exhaustive matching
AnyAttrValue = Union[
    BoolValue,
    Int64Value,
    Float64Value,
    NumberValue,
    StringValue,
    ListValue,
    SetValue,
    MapValue,
    ObjectValue,
]
