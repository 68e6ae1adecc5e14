"""
UnitGraph Graph Layer
=====================

- model: frozen UnitGraph (networkx DiGraph of Unit nodes)
- builder: equivalence table -> UnitGraph (import from unitgraph.graph.builder)
"""

from .model import UnitGraph

__all__ = ['UnitGraph']
