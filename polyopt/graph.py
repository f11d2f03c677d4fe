"""A graph of statements connected by their data dependences."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Optional

from polyopt.dependence import Dependence, DependenceKind


@dataclass
class DependenceGraphSummary:
    """Counts describing a dependence graph."""

    num_statements: int
    num_dependences: int
    num_flow: int
    num_anti: int
    num_output: int
    num_loop_carried: int
    num_loop_independent: int
    has_cycle: bool
    max_depth: int

    def __str__(self) -> str:
        lines = [
            "Dependence Graph Summary:",
            f"  Statements: {self.num_statements}",
            f"  Total dependences: {self.num_dependences}",
            f"    Flow (RAW): {self.num_flow}",
            f"    Anti (WAR): {self.num_anti}",
            f"    Output (WAW): {self.num_output}",
            f"  Loop-carried: {self.num_loop_carried}",
            f"  Loop-independent: {self.num_loop_independent}",
            f"  Has cycle: {str(self.has_cycle).lower()}",
            f"  Max depth: {self.max_depth}",
        ]
        return "".join(line + "\n" for line in lines)


@dataclass
class DependenceGraph:
    """Statements as nodes, dependences as edges (indices into ``edges``)."""

    statements: list[Hashable]
    edges: list[Dependence]
    successors: dict[Hashable, list[int]] = field(default_factory=dict)
    predecessors: dict[Hashable, list[int]] = field(default_factory=dict)

    @classmethod
    def from_dependences(
        cls, deps: Iterable[Dependence], statements: Iterable[Hashable]
    ) -> "DependenceGraph":
        """Build a graph over ``statements``; edges to unknown statements are not indexed."""
        stmts = list(statements)
        edges = list(deps)
        successors: dict[Hashable, list[int]] = {s: [] for s in stmts}
        predecessors: dict[Hashable, list[int]] = {s: [] for s in stmts}
        for index, dep in enumerate(edges):
            if dep.source in successors:
                successors[dep.source].append(index)
            if dep.target in predecessors:
                predecessors[dep.target].append(index)
        return cls(stmts, edges, successors, predecessors)

    def get_outgoing(self, stmt: Hashable) -> list[Dependence]:
        return [self.edges[i] for i in self.successors.get(stmt, ())]

    def get_incoming(self, stmt: Hashable) -> list[Dependence]:
        return [self.edges[i] for i in self.predecessors.get(stmt, ())]

    def has_dependence(self, source: Hashable, target: Hashable) -> bool:
        return any(dep.target == target for dep in self.get_outgoing(source))

    def true_dependences(self) -> list[Dependence]:
        return [dep for dep in self.edges if dep.kind.is_true_dependence()]

    def is_parallel_at(self, level: int) -> bool:
        """Whether every true dependence permits a parallel loop at ``level``."""
        return all(dep.is_parallelizable_at(level) for dep in self.true_dependences())

    def dependences_of_kind(self, kind: DependenceKind) -> list[Dependence]:
        return [dep for dep in self.edges if dep.kind is kind]

    def flow_dependences(self) -> list[Dependence]:
        return self.dependences_of_kind(DependenceKind.FLOW)

    def anti_dependences(self) -> list[Dependence]:
        return self.dependences_of_kind(DependenceKind.ANTI)

    def output_dependences(self) -> list[Dependence]:
        return self.dependences_of_kind(DependenceKind.OUTPUT)

    def has_cycle(self) -> bool:
        """True if some component has several statements or a loop-carried self edge."""
        return any(
            len(scc) > 1 or self._has_self_loop(scc[0])
            for scc in self.strongly_connected_components()
        )

    def _has_self_loop(self, stmt: Hashable) -> bool:
        return any(
            dep.target == stmt and not dep.is_loop_independent
            for dep in self.get_outgoing(stmt)
        )

    def loop_carried_dependences(self) -> list[Dependence]:
        return [dep for dep in self.edges if dep.is_loop_carried()]

    def loop_independent_dependences(self) -> list[Dependence]:
        return [dep for dep in self.edges if dep.is_loop_independent]

    def dependences_at_level(self, level: int) -> list[Dependence]:
        return [dep for dep in self.edges if dep.level == level]

    def topological_sort(self) -> Optional[list[Hashable]]:
        """Statements ordered by true dependences, or None if they form a cycle."""

        def counts(dep: Dependence) -> bool:
            return dep.kind.is_true_dependence() and dep.source != dep.target

        in_degree: dict[Hashable, int] = {s: 0 for s in self.statements}
        for dep in self.edges:
            if counts(dep):
                in_degree[dep.target] += 1

        stack = [s for s in self.statements if in_degree[s] == 0]
        order: list[Hashable] = []
        while stack:
            stmt = stack.pop()
            order.append(stmt)
            for dep in self.get_outgoing(stmt):
                if counts(dep):
                    in_degree[dep.target] -= 1
                    if in_degree[dep.target] == 0:
                        stack.append(dep.target)

        return order if len(order) == len(self.statements) else None

    def max_depth(self) -> int:
        """The longest direction vector among the edges."""
        return max((len(dep.direction) for dep in self.edges), default=0)

    def summary(self) -> DependenceGraphSummary:
        return DependenceGraphSummary(
            num_statements=len(self.statements),
            num_dependences=len(self.edges),
            num_flow=len(self.flow_dependences()),
            num_anti=len(self.anti_dependences()),
            num_output=len(self.output_dependences()),
            num_loop_carried=len(self.loop_carried_dependences()),
            num_loop_independent=len(self.loop_independent_dependences()),
            has_cycle=self.has_cycle(),
            max_depth=self.max_depth(),
        )

    def strongly_connected_components(self) -> list[list[Hashable]]:
        """Strongly connected components in Tarjan's order."""
        counter = 0
        stack: list[Hashable] = []
        indices: dict[Hashable, int] = {}
        lowlinks: dict[Hashable, int] = {}
        on_stack: set[Any] = set()
        sccs: list[list[Hashable]] = []

        def connect(v: Hashable) -> None:
            nonlocal counter
            indices[v] = lowlinks[v] = counter
            counter += 1
            stack.append(v)
            on_stack.add(v)

            for dep in self.get_outgoing(v):
                w = dep.target
                if w not in indices:
                    connect(w)
                    lowlinks[v] = min(lowlinks[v], lowlinks[w])
                elif w in on_stack:
                    lowlinks[v] = min(lowlinks[v], indices[w])

            if lowlinks[v] == indices[v]:
                scc = []
                while True:
                    w = stack.pop()
                    on_stack.discard(w)
                    scc.append(w)
                    if w == v:
                        break
                sccs.append(scc)

        for v in self.statements:
            if v not in indices:
                connect(v)
        return sccs