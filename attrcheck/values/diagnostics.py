"""Append-only diagnostics sink.

Validators report failures here instead of raising. Entries are keyed by
attribute path where one is known.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from .path import Path


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str
    path: Path | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "severity": self.severity.value,
            "summary": self.summary,
            "detail": self.detail,
            "path": None if self.path is None else str(self.path),
        }


@dataclass
class Diagnostics:
    _entries: list[Diagnostic] = field(default_factory=list)

    def add_attribute_error(self, path: Path, summary: str, detail: str) -> None:
        self._entries.append(Diagnostic(Severity.ERROR, summary, detail, path))

    def add_attribute_warning(self, path: Path, summary: str, detail: str) -> None:
        self._entries.append(Diagnostic(Severity.WARNING, summary, detail, path))

    def add_error(self, summary: str, detail: str) -> None:
        self._entries.append(Diagnostic(Severity.ERROR, summary, detail))

    def has_error(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self._entries)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self._entries if d.severity is Severity.ERROR]

    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._entries if d.severity is Severity.WARNING]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
