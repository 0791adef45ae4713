"""Shared fixtures for the attrcheck test suite."""

from __future__ import annotations

import pytest

from attrcheck.config import get_settings
from attrcheck.validation import DEFAULT_REGISTRY, GenericRequest, GenericResponse
from attrcheck.values import AttrValue, Config, ObjectValue, Path


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; drop the cache around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_default_registry():
    yield
    DEFAULT_REGISTRY.reset()


@pytest.fixture
def allow_truncation(monkeypatch):
    monkeypatch.setenv("ATTRCHECK_ALLOW_NUMERIC_TRUNCATION", "true")
    get_settings.cache_clear()


@pytest.fixture
def make_request():
    """Build a request for an attribute at ``path`` inside ``siblings``."""

    def _make(value: AttrValue, path: Path | None = None, siblings: dict | None = None) -> GenericRequest:
        path = path or Path.root("attr")
        attributes = dict(siblings or {})
        if len(path.steps) == 1:
            attributes[path.steps[0]] = value
        return GenericRequest(
            path=path,
            config_value=value,
            config=Config(ObjectValue(attributes)),
        )

    return _make


@pytest.fixture
def response() -> GenericResponse:
    return GenericResponse()
