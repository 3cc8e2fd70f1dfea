"""Named lookup of the interchangeable overlap implementations."""

from __future__ import annotations

from dataclasses import dataclass, field

from pattern_overlap.overlap.engine import OverlapFn, dp_overlap, naive_overlap, rolling_overlap

DEFAULT_ALGORITHM = "rolling"


@dataclass(slots=True, frozen=True)
class UnknownAlgorithmError(Exception):
    """Raised when an overlap algorithm name is not registered."""

    code: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class AlgorithmRegistry:
    """In-memory algorithm registry preserving deterministic insertion order."""

    _algorithms: dict[str, OverlapFn] = field(default_factory=dict)

    def register(self, name: str, algorithm: OverlapFn) -> None:
        """Register a named overlap function."""
        self._algorithms[name] = algorithm

    def get(self, name: str) -> OverlapFn | None:
        """Return an overlap function by name."""
        return self._algorithms.get(name)

    def names(self) -> tuple[str, ...]:
        """Return registered algorithm names in deterministic order."""
        return tuple(self._algorithms.keys())

    def resolve(self, name: str) -> OverlapFn:
        """Return a registered overlap function or raise UnknownAlgorithmError."""
        algorithm = self.get(name)
        if algorithm is None:
            raise UnknownAlgorithmError(
                code="UNKNOWN_ALGORITHM",
                message=f"Unknown overlap algorithm: {name}",
            )
        return algorithm


def build_algorithm_registry() -> AlgorithmRegistry:
    """Register the naive, full-table and rolling-row implementations."""
    registry = AlgorithmRegistry()
    registry.register("naive", naive_overlap)
    registry.register("dp", dp_overlap)
    registry.register("rolling", rolling_overlap)
    return registry


ALGORITHM_NAMES: tuple[str, ...] = build_algorithm_registry().names()
