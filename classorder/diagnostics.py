"""
Diagnostic summaries of an ordering run.

Nothing here influences the computed order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import networkx as nx

from classorder.cycles import Cycle, format_cycle
from classorder.order import OrderResult
from classorder.sorter import dependency_violations


@dataclass(frozen=True)
class DiagnosticsReport:
    n_classes: int
    n_edges: int
    n_components: int
    cyclic_components: Tuple[Tuple[str, ...], ...]
    cycles: Tuple[Cycle, ...]
    moved: Tuple[str, ...]
    violations: Tuple[Tuple[str, str], ...]

    @staticmethod
    def from_result(result: OrderResult) -> "DiagnosticsReport":
        components = result.components
        return DiagnosticsReport(
            n_classes=len(result.classes),
            n_edges=int(result.graph.number_of_edges()),
            n_components=len(components),
            cyclic_components=tuple(
                components.ordered_members(cid) for cid in components.cyclic_components()
            ),
            cycles=tuple(result.cycles),
            moved=tuple(result.moved()),
            violations=tuple(
                dependency_violations(result.graph, result.order, components)
            ),
        )

    def summary_lines(self) -> List[str]:
        lines = [
            f"classes: {self.n_classes}",
            f"dependencies: {self.n_edges}",
            f"components: {self.n_components}",
            f"moved: {len(self.moved)}",
        ]
        for cycle in self.cycles:
            lines.append(f"cycle: {format_cycle(cycle)}")
        for dependent, dependency in self.violations:
            lines.append(f"violation: {dependent} before {dependency}")
        return lines


def describe_graph(graph: nx.DiGraph, classes: Sequence[str]) -> List[str]:
    """
    Render the graph structure as one ``CLASS: DEP DEP`` line per class.

    Classes are listed in ``classes`` order and dependencies sorted by their
    position in it.
    """
    position = {name: i for i, name in enumerate(classes)}
    lines: List[str] = []
    for name in classes:
        deps = sorted(graph.successors(name), key=lambda d: position.get(d, len(position)))
        lines.append(f"{name}: {' '.join(deps)}".rstrip())
    return lines


def describe_classes(classes: Sequence[str]) -> str:
    return " ".join(classes)
