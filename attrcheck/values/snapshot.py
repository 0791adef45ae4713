"""Configuration snapshot: sibling attribute lookup by path."""
from __future__ import annotations

from dataclasses import dataclass, field

from attrcheck.errors import AppError, Ok, Result, attribute_not_found

from .path import Path
from .types import AttrValue, ListValue, MapValue, ObjectValue, SetValue


@dataclass(frozen=True, slots=True)
class Config:
    """Raw configuration values for one resource, rooted at an object."""
    raw: ObjectValue = field(default_factory=ObjectValue)

    def get_attribute(self, path: Path) -> Result[AttrValue, AppError]:
        """Resolve ``path`` against the snapshot.

        Name steps descend into objects and maps, integer steps into lists
        and sets. Any step that cannot be followed yields an
        E4001_ATTRIBUTE_NOT_FOUND error.
        """
        current: AttrValue = self.raw
        for step in path.steps:
            match current, step:
                case ObjectValue(attributes=attrs), str() if step in attrs:
                    current = attrs[step]
                case MapValue(elements=elems), str() if step in elems:
                    current = elems[step]
                case (ListValue(elements=elems) | SetValue(elements=elems)), int() if 0 <= step < len(elems):
                    current = elems[step]
                case _:
                    return attribute_not_found(path)
        return Ok(current)
