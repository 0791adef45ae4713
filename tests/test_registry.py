"""Tests for the comparison registry: keys, overrides and isolation."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from decimal import Decimal

import pytest

from attrcheck.errors import ErrorCode, Ok, comparison_failed
from attrcheck.validation import (
    DEFAULT_REGISTRY,
    EMPTY_SEQUENCE_KEY,
    MIXED_SEQUENCE_KEY,
    ComparisonRegistry,
    CompareOp,
    compare_attr_values,
    compare_int64,
    get_comparison_func,
    set_comparison_func,
    type_key,
)
from attrcheck.values import Float64Value, Int64Value, StringValue


@dataclass(frozen=True)
class Celsius:
    degrees: float


def compare_celsius(av, op, target, *meta):
    actual = av.value
    if op is CompareOp.LESS_THAN and actual < target.degrees:
        return Ok(None)
    return comparison_failed(actual, op, target.degrees)


def always_ok(av, op, target, *meta):
    return Ok(None)


# ============================================================================
# Keys
# ============================================================================


class TestTypeKey:
    @pytest.mark.parametrize(
        "exemplar, key",
        [
            (None, "nil"),
            (True, "builtins.bool"),
            (0, "builtins.int"),
            (0.0, "builtins.float"),
            ("", "builtins.str"),
            (Decimal(0), "decimal.Decimal"),
            (["a"], "builtins.list[builtins.str]"),
            (("a", "b"), "builtins.list[builtins.str]"),
            ([[1]], "builtins.list[builtins.list[builtins.int]]"),
            ([], EMPTY_SEQUENCE_KEY),
            (["a", 1], MIXED_SEQUENCE_KEY),
        ],
    )
    def test_keys(self, exemplar, key: str) -> None:
        assert type_key(exemplar) == key

    def test_user_type(self) -> None:
        assert type_key(Celsius(1.0)).endswith(".Celsius")

    def test_default_keys(self) -> None:
        assert ComparisonRegistry().keys() == sorted(
            [
                "builtins.bool",
                "builtins.float",
                "builtins.int",
                "decimal.Decimal",
                "builtins.str",
                "builtins.list[builtins.str]",
                "builtins.list[builtins.int]",
                EMPTY_SEQUENCE_KEY,
            ]
        )


# ============================================================================
# Registration
# ============================================================================


class TestRegistry:
    def test_missing_strategy(self) -> None:
        result = ComparisonRegistry().compare(Int64Value(1), CompareOp.EQUAL, object())
        assert result.unwrap_err().code is ErrorCode.E1001_NO_COMPARISON_FUNC_REGISTERED

    def test_mixed_target_has_no_strategy(self) -> None:
        result = compare_attr_values(StringValue("a"), CompareOp.ONE_OF, ["a", 1])
        assert result.unwrap_err().code is ErrorCode.E1001_NO_COMPARISON_FUNC_REGISTERED

    def test_register_user_type(self) -> None:
        registry = ComparisonRegistry()
        registry.set_comparison_func(Celsius(0), compare_celsius)
        assert registry.compare(Float64Value(10.0), CompareOp.LESS_THAN, Celsius(20.0)).is_ok()
        assert registry.compare(Float64Value(30.0), CompareOp.LESS_THAN, Celsius(20.0)).is_err()

    def test_override_builtin(self) -> None:
        registry = ComparisonRegistry()
        registry.set_comparison_func(0, always_ok)
        assert registry.compare(Int64Value(1), CompareOp.EQUAL, 2).is_ok()

    def test_reset_restores_builtins(self) -> None:
        registry = ComparisonRegistry()
        registry.set_comparison_func(0, always_ok)
        registry.set_comparison_func(Celsius(0), compare_celsius)
        registry.reset()
        fn, found = registry.get_comparison_func(0)
        assert found and fn is compare_int64
        assert registry.get_comparison_func(Celsius(0)) == (None, False)

    def test_none_func_rejected(self) -> None:
        with pytest.raises(TypeError):
            ComparisonRegistry().set_comparison_func(0, None)  # type: ignore[arg-type]

    def test_empty_registry(self) -> None:
        registry = ComparisonRegistry(funcs={})
        assert registry.keys() == []
        result = registry.compare(Int64Value(1), CompareOp.EQUAL, 1)
        assert result.unwrap_err().code is ErrorCode.E1001_NO_COMPARISON_FUNC_REGISTERED

    def test_registries_are_isolated(self) -> None:
        registry = ComparisonRegistry()
        registry.set_comparison_func(Celsius(0), compare_celsius)
        assert get_comparison_func(Celsius(0)) == (None, False)
        result = compare_attr_values(
            Float64Value(1.0), CompareOp.LESS_THAN, Celsius(2.0), registry=registry
        )
        assert result.is_ok()


class TestDefaultRegistry:
    def test_module_level_registration(self) -> None:
        set_comparison_func(Celsius(0), compare_celsius)
        fn, found = get_comparison_func(Celsius(5))
        assert found and fn is compare_celsius
        assert compare_attr_values(Float64Value(1.0), CompareOp.LESS_THAN, Celsius(2.0)).is_ok()

    def test_default_is_reset_between_tests(self) -> None:
        # registration in the previous test must not leak
        assert DEFAULT_REGISTRY.get_comparison_func(Celsius(0)) == (None, False)

    def test_last_writer_wins(self) -> None:
        set_comparison_func(Celsius(0), always_ok)
        set_comparison_func(Celsius(0), compare_celsius)
        assert get_comparison_func(Celsius(0))[0] is compare_celsius


# ============================================================================
# Concurrency
# ============================================================================


class TestConcurrency:
    def test_concurrent_register_and_compare(self) -> None:
        registry = ComparisonRegistry()
        workers = 8
        barrier = threading.Barrier(workers)
        errors: list[BaseException] = []

        def work(index: int) -> None:
            try:
                barrier.wait(timeout=5)
                for i in range(200):
                    fn = always_ok if (index + i) % 2 else compare_celsius
                    registry.set_comparison_func(Celsius(0), fn)
                    registry.compare(Float64Value(1.0), CompareOp.LESS_THAN, Celsius(2.0))
                    registry.compare(Int64Value(1), CompareOp.EQUAL, 1).unwrap()
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=work, args=(n,)) for n in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert errors == []
        assert not any(thread.is_alive() for thread in threads)

        registry.set_comparison_func(Celsius(0), compare_celsius)
        assert registry.get_comparison_func(Celsius(0))[0] is compare_celsius

    def test_strategy_may_use_registry(self) -> None:
        registry = ComparisonRegistry()

        def delegate(av, op, target, *meta):
            fn, found = registry.get_comparison_func(target.degrees)
            assert found
            return fn(av, op, target.degrees, *meta)

        registry.set_comparison_func(Celsius(0), delegate)
        results = []
        thread = threading.Thread(
            target=lambda: results.append(
                registry.compare(Float64Value(1.0), CompareOp.LESS_THAN, Celsius(2.0))
            )
        )
        thread.start()
        thread.join(timeout=5)

        assert not thread.is_alive()
        assert results[0].is_ok()
