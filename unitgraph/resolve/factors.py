"""
Conversion Resolver
===================

Multiplicative factor between two resolved units.

    quantity_in_target = quantity_in_source * conversion_factor(graph, source, target)

A direct edge is simply a one-hop path: the factor is always the product
of edge factors along the shortest (fewest hops, breadth-first) path, so
direct and chained conversions follow the same rule.

Compound ("per") conversions resolve numerator and denominator pairs
independently:

    value * factor(num_src, num_tgt) / factor(den_src, den_tgt)
"""

import logging
from typing import List, Tuple

import networkx as nx

from unitgraph.errors import NoConversionPath
from unitgraph.graph.model import UnitGraph
from unitgraph.units import Unit

logger = logging.getLogger(__name__)


def is_convertible(graph: UnitGraph, source: Unit, target: Unit) -> bool:
    """True if some chain of equivalences leads from source to target."""
    if source not in graph or target not in graph:
        return False
    return nx.has_path(graph.digraph, source, target)


def conversion_path(graph: UnitGraph, source: Unit, target: Unit) -> List[Unit]:
    """
    Shortest path by hop count from source to target.

    Raises:
        NoConversionPath: If the units are not connected
    """
    if not is_convertible(graph, source, target):
        raise NoConversionPath(source.full_name, target.full_name)
    return nx.shortest_path(graph.digraph, source, target)


def path_factor(graph: UnitGraph, path: List[Unit]) -> float:
    """Product of edge factors along consecutive hops of path."""
    factor = 1.0
    for previous, current in zip(path, path[1:]):
        factor *= graph.factor(previous, current)
    return factor


def conversion_factor(graph: UnitGraph, source: Unit, target: Unit) -> float:
    """
    Factor converting a quantity in source to one in target.

    Args:
        graph: Unit graph
        source: Resolved source unit
        target: Resolved target unit

    Returns:
        Positive float; multiply the source quantity by it

    Raises:
        NoConversionPath: If no chain of equivalences connects the units
    """
    if source == target:
        return 1.0

    direct = graph.factor(source, target)
    if direct is not None:
        return direct

    path = conversion_path(graph, source, target)
    factor = path_factor(graph, path)
    logger.debug(
        f"{source.full_name} -> {target.full_name} via "
        f"{' -> '.join(u.full_name for u in path)} = {factor}"
    )
    return factor


def compound_factor(
    graph: UnitGraph,
    source: Tuple[Unit, Unit],
    target: Tuple[Unit, Unit],
) -> float:
    """
    Factor for a ratio conversion, e.g. mile/hour -> kilometer/hour.

    Args:
        source: (numerator, denominator) units of the quantity
        target: (numerator, denominator) units to convert to

    Raises:
        NoConversionPath: If either pair is not connected
    """
    numerator = conversion_factor(graph, source[0], target[0])
    denominator = conversion_factor(graph, source[1], target[1])
    return numerator / denominator
