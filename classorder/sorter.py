"""
Order-preserving topological sort.

The sort places every class after the classes it depends on while keeping
the reference order wherever dependencies do not force a change. Cycles are
handled through strongly connected components: dependencies inside a
component are ignored for ordering, so a cycle is placed as one block and its
members keep their reference order.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

import networkx as nx

from classorder.components import ComponentAnalyzer, reference_ranks


class OrderPreservingSorter:
    """
    Depth-first topological sort that breaks ties by a reference order.

    The sorter holds only read-only data derived from the graph; each call to
    sort() keeps its own finished set and output list.
    """

    def __init__(
        self,
        graph: nx.DiGraph,
        reference: Sequence[str],
        components: Optional[ComponentAnalyzer] = None,
    ) -> None:
        """
        Prepare a sorter.

        Args:
            graph: Directed dependency graph (``u -> v``: u depends on v).
            reference: Reference order. Must contain every graph node.
            components: Precomputed components of ``graph``. Computed from
                the reference order when omitted.

        Raises:
            ValueError: If the reference order misses graph nodes.
        """
        self.graph = graph
        self.reference: Tuple[str, ...] = tuple(reference_ranks(reference))
        self._rank: Dict[str, int] = {name: i for i, name in enumerate(self.reference)}

        missing = [n for n in graph.nodes() if n not in self._rank]
        if missing:
            raise ValueError(
                f"Reference order is missing {len(missing)} class(es): "
                + ", ".join(sorted(map(str, missing)))
            )

        if components is None:
            components = ComponentAnalyzer(graph, self.reference)
        self.components = components
        self._successors: Dict[int, Tuple[str, ...]] = {}

    def successors(self, class_name: str) -> Tuple[str, ...]:
        """
        Return the classes that must be placed before a class.

        The dependencies of all members of the class's component are mapped
        to their components, the class's own component is dropped and the
        remaining components are expanded to their members.

        Returns:
            Classes in reference order.
        """
        cid = self.components.component_of(class_name)
        cached = self._successors.get(cid)
        if cached is None:
            members: Set[str] = set()
            for other in self.components.component_successors(cid):
                members.update(self.components.ordered_members(other))
            cached = tuple(sorted(members, key=self._rank.__getitem__))
            self._successors[cid] = cached
        return cached

    def sort(self, work: Optional[Sequence[str]] = None) -> List[str]:
        """
        Sort classes.

        Classes of ``work`` are processed in order. Before a class is placed,
        its unfinished successors are sorted and placed the same way.

        Args:
            work: Classes to process. Defaults to the reference order.

        Returns:
            The sorted classes, each at most once.
        """
        work = self.reference if work is None else tuple(work)
        if self.graph.number_of_edges() == 0:
            return list(reference_ranks(work))

        finished: Set[str] = set()
        output: List[str] = []

        def _place(name: str) -> None:
            finished.add(name)
            output.append(name)

        # Each frame is (pending classes, class placed once they are done).
        stack: List[Tuple[Iterator[str], Optional[str]]] = [(iter(work), None)]
        while stack:
            pending, owner = stack[-1]
            for name in pending:
                if name in finished:
                    continue
                before = [s for s in self.successors(name) if s not in finished]
                if before:
                    stack.append((iter(before), name))
                    break
                _place(name)
            else:
                stack.pop()
                if owner is not None and owner not in finished:
                    _place(owner)
        return output


def sort_classes(
    graph: nx.DiGraph,
    reference: Sequence[str],
    components: Optional[ComponentAnalyzer] = None,
) -> List[str]:
    """
    Sort all classes of ``graph`` using ``reference`` for tie-breaks.
    """
    return OrderPreservingSorter(graph, reference, components).sort()


def dependency_violations(
    graph: nx.DiGraph,
    order: Sequence[str],
    components: Optional[ComponentAnalyzer] = None,
) -> List[Tuple[str, str]]:
    """
    Return edges ``(dependent, dependency)`` whose dependency is placed late.

    Edges inside one component are never violations.
    """
    if components is None:
        components = ComponentAnalyzer(graph, order)
    position = {name: i for i, name in enumerate(order)}
    violations: List[Tuple[str, str]] = []
    for dependent, dependency in graph.edges():
        if components.same_component(dependent, dependency):
            continue
        if position[dependency] > position[dependent]:
            violations.append((str(dependent), str(dependency)))
    return violations
