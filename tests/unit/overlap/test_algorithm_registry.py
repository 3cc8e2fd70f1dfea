from __future__ import annotations

import pytest

from pattern_overlap.overlap import (
    ALGORITHM_NAMES,
    DEFAULT_ALGORITHM,
    AlgorithmRegistry,
    UnknownAlgorithmError,
    build_algorithm_registry,
    dp_overlap,
    naive_overlap,
    rolling_overlap,
)


def test_builtin_algorithms_register_in_deterministic_order() -> None:
    registry = build_algorithm_registry()

    assert registry.names() == ("naive", "dp", "rolling")
    assert ALGORITHM_NAMES == registry.names()
    assert registry.resolve("naive") is naive_overlap
    assert registry.resolve("dp") is dp_overlap
    assert registry.resolve("rolling") is rolling_overlap


def test_default_algorithm_is_polynomial_variant() -> None:
    assert DEFAULT_ALGORITHM == "rolling"


def test_unknown_algorithm_raises_explicit_error() -> None:
    registry = AlgorithmRegistry()

    assert registry.get("dp") is None
    with pytest.raises(UnknownAlgorithmError) as excinfo:
        registry.resolve("quantum")

    assert excinfo.value.code == "UNKNOWN_ALGORITHM"
    assert str(excinfo.value) == "Unknown overlap algorithm: quantum"
