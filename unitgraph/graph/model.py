"""
Unit Graph
==========

Directed graph of units. Edge A -> B carries `factor`, the number of B
units in one A unit, so converting a quantity is a multiplication:

    quantity_in_B = quantity_in_A * factor(A, B)

The graph is frozen at construction. Rebuild it to pick up table changes;
readers may share one instance freely.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

import networkx as nx

from unitgraph.units import Unit


class UnitGraph:
    """
    Immutable wrapper around a frozen networkx DiGraph keyed by Unit.

    Units keep table order, which is also the tie-break order for fuzzy
    name resolution and the order of the unit listing.
    """

    def __init__(self, digraph: nx.DiGraph, skipped_lines: Sequence = ()):
        self._graph = nx.freeze(digraph)
        self._units: Tuple[Unit, ...] = tuple(self._graph.nodes)
        self.skipped_lines = tuple(skipped_lines)

    @property
    def digraph(self) -> nx.DiGraph:
        """The underlying frozen graph (read-only)."""
        return self._graph

    @property
    def units(self) -> Tuple[Unit, ...]:
        return self._units

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    @property
    def component_count(self) -> int:
        """Number of groups of mutually convertible units."""
        if not self._units:
            return 0
        return nx.number_weakly_connected_components(self._graph)

    def has_edge(self, source: Unit, target: Unit) -> bool:
        return self._graph.has_edge(source, target)

    def factor(self, source: Unit, target: Unit) -> Optional[float]:
        """Weight of the direct edge source -> target, or None."""
        data = self._graph.get_edge_data(source, target)
        if data is None:
            return None
        return data['factor']

    def edges(self) -> List[Tuple[Unit, Unit, float]]:
        return [(a, b, d['factor']) for a, b, d in self._graph.edges(data=True)]

    def __contains__(self, unit: object) -> bool:
        return unit in self._graph

    def __iter__(self) -> Iterator[Unit]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __repr__(self) -> str:
        return f"UnitGraph(units={len(self)}, edges={self.edge_count})"
