"""
Dependency graph construction.

This module turns an initial class list and a declaration source into a
networkx directed graph. An edge ``u -> v`` means that class ``u`` depends on
class ``v``, so ``v`` has to be applied first. Classes named in declarations
are discovered breadth-first and appended to the class list in the order they
are first seen.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, List, Set, Tuple

import networkx as nx

from classorder.declarations import DeclarationSource, parse_declaration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    """
    Output of one graph build.

    Attributes:
        graph: Directed dependency graph. Every node carries an ``order``
            attribute holding its index in ``classes``.
        classes: Deduplicated classes, initial ones first, then discovered
            ones in discovery order.
        discovered: Classes that were not part of the initial list.
    """

    graph: nx.DiGraph
    classes: Tuple[str, ...]
    discovered: Tuple[str, ...]


class _BuildState:
    """Per-build bookkeeping: appearance order and the read memo."""

    def __init__(self) -> None:
        self.graph = nx.DiGraph()
        self.classes: List[str] = []
        self.read: Set[str] = set()

    def add_class(self, name: str) -> bool:
        if name in self.graph:
            return False
        self.graph.add_node(name, order=len(self.classes))
        self.classes.append(name)
        return True


class DependencyGraphBuilder:
    """
    Builds dependency graphs from declaration sources.
    """

    def __init__(self, source: DeclarationSource) -> None:
        """
        Initialize the builder.

        Args:
            source: Object providing ``lines_for(class_name)``.
        """
        self.source = source

    def build(self, classes: Iterable[str]) -> BuildResult:
        """
        Build the dependency graph for an initial class list.

        Names are trimmed and blank names skipped. A name repeated in the
        initial list keeps the position of its first appearance. Every
        reachable declaration is read exactly once.

        Args:
            classes: Initial classes in their original order.

        Returns:
            BuildResult with the graph and the complete class list.

        Raises:
            OSError: If the source fails to read an eligible declaration.
        """
        state = _BuildState()
        for raw in classes:
            name = str(raw).strip()
            if name:
                state.add_class(name)
        n_initial = len(state.classes)

        queue: Deque[str] = deque(state.classes)
        while queue:
            name = queue.popleft()
            if name in state.read:
                continue
            state.read.add(name)

            lines = self.source.lines_for(name)
            if lines is None:
                continue
            for dependency in parse_declaration(lines):
                if state.add_class(dependency):
                    logger.debug("Discovered class %s (required by %s)", dependency, name)
                    queue.append(dependency)
                state.graph.add_edge(name, dependency)

        logger.debug(
            "Built dependency graph with %d classes and %d edges",
            state.graph.number_of_nodes(),
            state.graph.number_of_edges(),
        )
        return BuildResult(
            graph=state.graph,
            classes=tuple(state.classes),
            discovered=tuple(state.classes[n_initial:]),
        )


def appearance_order(graph: nx.DiGraph) -> Dict[str, int]:
    """
    Return the ``order`` node attribute of every node that has one.
    """
    return {
        str(node): int(data["order"])
        for node, data in graph.nodes(data=True)
        if "order" in data
    }
