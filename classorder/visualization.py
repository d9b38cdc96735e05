"""
Visualization of dependency graphs.

Draws classes as nodes and dependencies as arrows. Members of cyclic
components are highlighted so cycles are visible at a glance.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Set

import matplotlib.pyplot as plt
import networkx as nx

from classorder.components import ComponentAnalyzer


class DependencyGraphVisualizer:
    """
    Plots dependency graphs with matplotlib.
    """

    @staticmethod
    def dependency_graph(
        graph: nx.DiGraph,
        order: Optional[Sequence[str]] = None,
        ax: Optional[plt.Axes] = None,
        *,
        layout: str = "spring",
        components: Optional[ComponentAnalyzer] = None,
    ) -> plt.Axes:
        """
        Plot a dependency graph.

        Args:
            graph: Directed dependency graph.
            order: Final class order. When given, node labels are prefixed
                with the position of the class in it.
            ax: Matplotlib axes to plot on. If None, creates new figure.
            layout: Graph layout algorithm ("spring", "circular", "hierarchical").
            components: Precomputed components of ``graph``.

        Returns:
            Matplotlib axes object.

        Raises:
            ValueError: If layout is unknown.
        """
        layout_name = str(layout).strip().lower()
        if layout_name not in {"spring", "circular", "hierarchical"}:
            raise ValueError(f"Unknown layout: {layout!r}")

        if ax is None:
            _, ax = plt.subplots(figsize=(10, 8))

        if graph.number_of_nodes() == 0:
            ax.text(0.5, 0.5, "No classes", ha="center", va="center", fontsize=12)
            ax.set_title("Dependency Graph")
            ax.axis("off")
            return ax

        if components is None:
            components = ComponentAnalyzer(graph, order)

        if layout_name == "circular":
            pos = nx.circular_layout(graph)
        elif layout_name == "hierarchical":
            try:
                from networkx.drawing.nx_agraph import graphviz_layout

                pos = graphviz_layout(graph, prog="dot")
            except ImportError:
                pos = nx.spring_layout(graph, seed=42, k=1.0, iterations=50)
        else:
            pos = nx.spring_layout(graph, seed=42, k=1.0, iterations=50)

        in_cycle: Set[str] = set()
        for cid in components.cyclic_components():
            in_cycle.update(components.ordered_members(cid))

        nodes = list(graph.nodes())
        node_colors = ["#e74c3c" if n in in_cycle else "#3498db" for n in nodes]
        nx.draw_networkx_nodes(
            graph,
            pos,
            nodelist=nodes,
            node_size=700,
            node_color=node_colors,
            ax=ax,
        )

        # Edges inside a component do not constrain the order and are dashed.
        internal = [(u, v) for u, v in graph.edges() if components.same_component(u, v)]
        external = [(u, v) for u, v in graph.edges() if not components.same_component(u, v)]
        nx.draw_networkx_edges(
            graph, pos, edgelist=external, arrows=True, arrowsize=15, alpha=0.8, ax=ax
        )
        if internal:
            nx.draw_networkx_edges(
                graph,
                pos,
                edgelist=internal,
                arrows=True,
                arrowsize=15,
                style="dashed",
                edge_color="#e74c3c",
                alpha=0.8,
                ax=ax,
            )

        labels: Dict[str, str] = {n: str(n) for n in nodes}
        if order is not None:
            position = {name: i for i, name in enumerate(order)}
            for n in nodes:
                if n in position:
                    labels[n] = f"{position[n] + 1}. {n}"
        nx.draw_networkx_labels(graph, pos, labels=labels, font_size=8, ax=ax)

        title = (
            f"Dependency Graph ({graph.number_of_nodes()} classes, "
            f"{graph.number_of_edges()} dependencies"
        )
        n_cyclic = len(components.cyclic_components())
        if n_cyclic:
            title += f", {n_cyclic} cycle(s)"
        title += ")"
        ax.set_title(title)
        ax.axis("off")
        return ax
