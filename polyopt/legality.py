"""Legality checks for loop transformations driven by a list of dependences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from polyopt.dependence import Dependence, Direction

_MAYBE_BACKWARD = frozenset({Direction.GT, Direction.GE, Direction.STAR})


def _direction_at(dep: Dependence, level: int) -> Direction:
    """Direction of ``dep`` at ``level``; unknown (``*``) past its depth."""
    if 0 <= level < len(dep.direction):
        return dep.direction[level]
    return Direction.STAR


def _true_dependences(deps: Iterable[Dependence]) -> Iterable[Dependence]:
    return (dep for dep in deps if dep.kind.is_true_dependence())


@dataclass
class DependenceAnalysis:
    """Answers questions about which transformations a set of dependences allows."""

    verbose: bool = False
    precise: bool = True

    def is_interchange_legal(
        self, deps: Sequence[Dependence], level_i: int, level_j: int
    ) -> bool:
        """Whether swapping loops ``level_i`` and ``level_j`` keeps every dependence."""
        for dep in _true_dependences(deps):
            dir_i = _direction_at(dep, level_i)
            dir_j = _direction_at(dep, level_j)
            # level_j moves outward; a backward direction there is illegal.
            if dir_j is Direction.GT:
                return False
            if dir_i in _MAYBE_BACKWARD and dir_j in _MAYBE_BACKWARD:
                if dir_i is Direction.GT or dir_j is Direction.GT:
                    return False
        return True

    def is_tiling_legal(self, deps: Sequence[Dependence], level: int) -> bool:
        """Tiling at ``level`` is legal when no true dependence runs backward there."""
        return all(
            _direction_at(dep, level) is not Direction.GT
            for dep in _true_dependences(deps)
        )

    def is_fusion_legal(
        self,
        deps: Sequence[Dependence],
        group1: Sequence[Any],
        group2: Sequence[Any],
    ) -> bool:
        """Fusion is legal when no true dependence goes from ``group2`` to ``group1``."""
        return not any(
            dep.source in group2 and dep.target in group1
            for dep in _true_dependences(deps)
        )

    def is_parallelizable(self, deps: Sequence[Dependence], level: int) -> bool:
        """Whether the loop at ``level`` carries no true dependence."""
        for dep in _true_dependences(deps):
            if dep.level is not None and dep.level == level:
                return False
            if _direction_at(dep, level) is not Direction.EQ:
                return False
        return True

    def find_parallel_level(
        self, deps: Sequence[Dependence], max_depth: int
    ) -> Optional[int]:
        """The outermost level below ``max_depth`` that can run in parallel."""
        return next(
            (level for level in range(max_depth) if self.is_parallelizable(deps, level)),
            None,
        )

    def get_distance_at_level(self, dep: Dependence, level: int) -> Optional[int]:
        """The distance of ``dep`` at ``level``, if it is known."""
        if dep.distance is None or not 0 <= level < len(dep.distance):
            return None
        return dep.distance[level]

    def are_dependences_uniform(self, deps: Sequence[Dependence]) -> bool:
        """True when every dependence has a constant distance vector."""
        return all(dep.distance is not None for dep in deps)

    def min_positive_distance(
        self, deps: Sequence[Dependence], level: int
    ) -> Optional[int]:
        """The smallest positive distance at ``level`` across ``deps``."""
        positives = [
            dist
            for dist in (self.get_distance_at_level(dep, level) for dep in deps)
            if dist is not None and dist > 0
        ]
        return min(positives, default=None)