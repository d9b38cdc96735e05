"""
End-to-end class ordering: build, analyse, report and sort.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import networkx as nx

from classorder.components import ComponentAnalyzer
from classorder.cycles import Cycle, CycleReporter
from classorder.declarations import DeclarationSource
from classorder.graph import DependencyGraphBuilder
from classorder.sorter import OrderPreservingSorter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderResult:
    """
    Result of ordering a class list.

    Attributes:
        order: Final class order, a permutation of ``classes``.
        classes: Deduplicated classes in appearance order (the reference).
        graph: Dependency graph the order was computed from.
        components: Component assignment of ``graph``.
        cycles: Cycles found in the graph, empty when it is acyclic or when
            reporting was disabled.
    """

    order: Tuple[str, ...]
    classes: Tuple[str, ...]
    graph: nx.DiGraph
    components: ComponentAnalyzer
    cycles: Tuple[Cycle, ...]

    @property
    def has_cycles(self) -> bool:
        return bool(self.components.cyclic_components())

    def moved(self) -> List[str]:
        """Classes whose position differs from their reference position."""
        return [a for a, b in zip(self.order, self.classes) if a != b]


def compute_class_order(
    classes: Iterable[str],
    source: DeclarationSource,
    *,
    report_cycles: bool = True,
    log: Optional[logging.Logger] = None,
) -> OrderResult:
    """
    Compute the order in which classes are applied.

    Args:
        classes: Initial classes in their original order.
        source: Declaration source providing ``lines_for(class_name)``.
        report_cycles: Extract cycles and log them as warnings.
        log: Logger used for cycle reports.

    Returns:
        OrderResult holding the final order and the data it was derived from.

    Raises:
        OSError: If an eligible declaration cannot be read.
    """
    built = DependencyGraphBuilder(source).build(classes)
    components = ComponentAnalyzer(built.graph, built.classes)

    cycles: Tuple[Cycle, ...] = ()
    if report_cycles:
        cycles = tuple(CycleReporter(built.graph, built.classes).report(log))

    order = OrderPreservingSorter(built.graph, built.classes, components).sort()
    logger.info("Ordered %d classes (%d discovered)", len(order), len(built.discovered))
    return OrderResult(
        order=tuple(order),
        classes=built.classes,
        graph=built.graph,
        components=components,
        cycles=cycles,
    )
