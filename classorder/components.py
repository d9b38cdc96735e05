"""
Strongly connected component analysis for dependency graphs.

Classes that depend on each other through a cycle end up in the same
component. The sorter treats a component as one ordering unit, so the
component assignment is computed once per graph and then only queried.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

import networkx as nx

from classorder.graph import appearance_order


def reference_ranks(reference: Sequence[str]) -> Dict[str, int]:
    """
    Map each class to the index of its first occurrence in ``reference``.
    """
    ranks: Dict[str, int] = {}
    for name in reference:
        if name not in ranks:
            ranks[name] = len(ranks)
    return ranks


class ComponentAnalyzer:
    """
    Assigns every class of a dependency graph to exactly one component.

    Component ids are numbered 0..k-1 by the best reference rank among their
    members, which makes the ids stable for a given graph and reference order.
    """

    def __init__(
        self,
        graph: nx.DiGraph,
        reference: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Compute components of a graph.

        Args:
            graph: Directed dependency graph.
            reference: Optional reference order used for numbering and for
                ordered_members(). Defaults to the ``order`` node attribute.
        """
        self.graph = graph
        ranks: Mapping[str, int] = (
            reference_ranks(reference) if reference is not None else appearance_order(graph)
        )
        unranked = len(ranks)

        def _key(node: str) -> Tuple[int, str]:
            return (ranks.get(node, unranked), str(node))

        members = [
            tuple(sorted(component, key=_key))
            for component in nx.strongly_connected_components(graph)
        ]
        members.sort(key=lambda m: _key(m[0]))

        self._members: List[Tuple[str, ...]] = members
        self._component_of: Dict[str, int] = {
            node: cid for cid, component in enumerate(members) for node in component
        }

    def __len__(self) -> int:
        return len(self._members)

    @property
    def components(self) -> List[FrozenSet[str]]:
        """All components, indexed by component id."""
        return [frozenset(m) for m in self._members]

    def component_of(self, class_name: str) -> int:
        """
        Return the component id of a class.

        Raises:
            KeyError: If the class is not part of the graph.
        """
        try:
            return self._component_of[class_name]
        except KeyError:
            raise KeyError(f"Class {class_name!r} is not part of the graph") from None

    def members_of(self, component_id: int) -> FrozenSet[str]:
        return frozenset(self.ordered_members(component_id))

    def ordered_members(self, component_id: int) -> Tuple[str, ...]:
        """
        Return the members of a component in reference order.

        Raises:
            KeyError: If the component id is unknown.
        """
        if not 0 <= int(component_id) < len(self._members):
            raise KeyError(f"Unknown component id {component_id!r}")
        return self._members[int(component_id)]

    def same_component(self, a: str, b: str) -> bool:
        return self.component_of(a) == self.component_of(b)

    def cyclic_components(self) -> List[int]:
        """
        Return ids of components that contain a cycle.

        A component is cyclic when it has more than one member or its single
        member depends on itself.
        """
        cyclic: List[int] = []
        for cid, members in enumerate(self._members):
            if len(members) > 1 or self.graph.has_edge(members[0], members[0]):
                cyclic.append(cid)
        return cyclic

    def component_successors(self, component_id: int) -> FrozenSet[int]:
        """
        Return ids of the components that the given component depends on.

        Edges inside the component are ignored.
        """
        own = int(component_id)
        result = set()
        for member in self.ordered_members(own):
            for dependency in self.graph.successors(member):
                cid = self._component_of[dependency]
                if cid != own:
                    result.add(cid)
        return frozenset(result)
