"""Attribute paths used for diagnostic attribution and sibling lookup."""
from __future__ import annotations

import json
from dataclasses import dataclass

PathStep = str | int


@dataclass(frozen=True, slots=True)
class Path:
    """Immutable sequence of attribute names and element keys.

    Example:
        Path.root("network").at_name("cidr_blocks").at_list_index(0)
        # renders as "network.cidr_blocks.0"
    """
    steps: tuple[PathStep, ...] = ()

    @classmethod
    def root(cls, name: str) -> Path:
        return cls((name,))

    def at_name(self, name: str) -> Path:
        return Path((*self.steps, name))

    def at_list_index(self, index: int) -> Path:
        return Path((*self.steps, index))

    def at_map_key(self, key: str) -> Path:
        return Path((*self.steps, key))

    def parent_path(self) -> Path:
        return Path(self.steps[:-1])

    def __str__(self) -> str:
        return format_path_steps(*self.steps)


def format_path_steps(*steps: PathStep) -> str:
    """Join one or more path steps together with "."."""
    return ".".join(str(step) for step in steps)


def format_paths(*paths: Path) -> str:
    """Render one or more paths as a pretty-printable list, e.g. ["a.b", "c"]."""
    return "[" + ", ".join(json.dumps(str(p)) for p in paths) + "]"
