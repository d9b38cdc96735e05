"""
Cycle reporting for dependency graphs.

Cycles are not errors: they are reported for diagnostics and the sorter
orders each cycle as one unit. Extraction works on a copy of the graph, the
graph used for sorting is never modified.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import networkx as nx

from classorder.components import reference_ranks
from classorder.graph import appearance_order

logger = logging.getLogger(__name__)

Cycle = Tuple[str, ...]


def format_cycle(cycle: Sequence[str]) -> str:
    """Format a cycle as ``A-B-C``."""
    return "-".join(str(name) for name in cycle)


class CycleReporter:
    """
    Detects and enumerates cycles of a dependency graph.
    """

    def __init__(self, graph: nx.DiGraph, reference: Optional[Sequence[str]] = None) -> None:
        """
        Args:
            graph: Directed dependency graph.
            reference: Optional order in which cycle searches are started.
                Defaults to the ``order`` node attribute.
        """
        self.graph = graph
        ranks = reference_ranks(reference) if reference is not None else appearance_order(graph)
        unranked = len(ranks)
        self._start_nodes = sorted(
            graph.nodes(), key=lambda n: (ranks.get(n, unranked), str(n))
        )

    def has_cycle(self) -> bool:
        return not nx.is_directed_acyclic_graph(self.graph)

    def extract_cycles(self) -> List[Cycle]:
        """
        Enumerate cycles by repeatedly removing one found cycle.

        Each iteration finds one cycle in a disposable copy of the graph,
        records it and deletes its edges, until the copy is acyclic. The
        particular decomposition depends on the search order; the set of
        cyclic edges covered is always complete.

        Returns:
            List of cycles. Each cycle lists its classes along the closed
            path without repeating the first one.
        """
        if not self.has_cycle():
            return []

        work = self.graph.copy()
        cycles: List[Cycle] = []
        while True:
            try:
                edges = nx.find_cycle(work, source=self._start_nodes, orientation="original")
            except nx.NetworkXNoCycle:
                break
            cycles.append(tuple(str(u) for u, _v, _direction in edges))
            work.remove_edges_from((u, v) for u, v, _direction in edges)
        return cycles

    def report(self, log: Optional[logging.Logger] = None) -> List[Cycle]:
        """
        Log every cycle as a warning.

        Args:
            log: Logger to report to. Defaults to this module's logger.

        Returns:
            The extracted cycles.
        """
        log = log or logger
        cycles = self.extract_cycles()
        if cycles:
            log.warning("Found %d dependency cycle(s)", len(cycles))
            for cycle in cycles:
                log.warning("Cycle: %s", format_cycle(cycle))
        return cycles
