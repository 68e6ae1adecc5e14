"""
UnitGraph - Table-Driven Unit Conversion
========================================

Converts quantities between named units using a table of equivalences.

    TABLE → GRAPH → RESOLVE NAMES → COMPOSE FACTORS

Architecture:
    - graph/: Graph Builder (table lines -> frozen directed graph)
    - resolve/: Name Resolver (exact + fuzzy) and Conversion Resolver (paths)
    - query.py: conversion query grammar
    - convert.py: one-call facade, results, unit listing
    - server/: HTTP handler

Usage:
    from unitgraph import build_graph, UnitConverter

    converter = UnitConverter(build_graph(open("table.txt").read()))
    print(converter.convert_text("1 mi to in"))
"""

__version__ = "1.0.0"

from .graph.builder import build_graph, load_table
from .graph.model import UnitGraph
from .convert import UnitConverter, ConversionResult, list_units
from .units import Unit

__all__ = [
    'build_graph',
    'load_table',
    'UnitGraph',
    'UnitConverter',
    'ConversionResult',
    'list_units',
    'Unit',
    '__version__',
]
