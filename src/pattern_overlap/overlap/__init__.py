"""Pattern overlap decision procedure."""

from .engine import OverlapFn, dp_overlap, naive_overlap, overlap, rolling_overlap
from .registry import (
    ALGORITHM_NAMES,
    DEFAULT_ALGORITHM,
    AlgorithmRegistry,
    UnknownAlgorithmError,
    build_algorithm_registry,
)

__all__ = [
    "ALGORITHM_NAMES",
    "DEFAULT_ALGORITHM",
    "AlgorithmRegistry",
    "OverlapFn",
    "UnknownAlgorithmError",
    "build_algorithm_registry",
    "dp_overlap",
    "naive_overlap",
    "overlap",
    "rolling_overlap",
]
