"""
Unit Converter
==============

Ties the pieces together for one request:

    Query -> Name Resolver -> Conversion Resolver -> ConversionResult

Usage:
    >>> from unitgraph.graph.builder import build_graph
    >>> from unitgraph.convert import UnitConverter
    >>> converter = UnitConverter(build_graph("12 inches(in) = 1 foot(ft)"))
    >>> str(converter.convert_text("24 in to ft"))
    '2.0 foot'
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from unitgraph.errors import MalformedQuery, UnresolvedUnit
from unitgraph.graph.model import UnitGraph
from unitgraph.query import Query, UnitExpr, parse_query
from unitgraph.resolve.factors import compound_factor, conversion_factor
from unitgraph.resolve.names import find_unit
from unitgraph.units import Unit, singularize

logger = logging.getLogger(__name__)


DISPLAY_DECIMALS = 5
ROUNDING_THRESHOLD = 1e-5


def display_value(value: float) -> float:
    """Round to five decimals, unless that would erase a tiny magnitude."""
    if abs(value) > ROUNDING_THRESHOLD:
        return round(value, DISPLAY_DECIMALS)
    return value


@dataclass(frozen=True)
class ConversionResult:
    """Converted quantity plus the resolved target unit name(s)."""
    value: float
    unit: str
    query: Optional[Query] = None

    @property
    def display_value(self) -> float:
        return display_value(self.value)

    def to_dict(self) -> dict:
        return {
            'value': self.value,
            'display_value': self.display_value,
            'unit': self.unit,
            'query': self.query.text if self.query else None,
        }

    def __str__(self) -> str:
        return f"{self.display_value} {self.unit}"


def list_units(graph: UnitGraph) -> List[str]:
    """Every unit as full_name(abbreviation), in table order."""
    return [unit.label for unit in graph.units]


class UnitConverter:
    """
    Converts quantities using one shared, immutable UnitGraph.

    Holds no per-request state, so a single instance can serve any number
    of callers.
    """

    def __init__(self, graph: UnitGraph, max_distance: int = 2):
        if max_distance < 0:
            raise ValueError(f"max_distance must be >= 0, got {max_distance}")
        self.graph = graph
        self.max_distance = max_distance

    def resolve(self, token: str) -> Unit:
        """
        Resolve one unit token as typed in a query.

        An exact match on the token as typed comes first (table abbreviations
        such as 'lbs' are never singularized), then an exact match on its
        singular form, and only then fuzzy matching on the singular form.

        Raises:
            UnresolvedUnit: If no unit, or more than one, matches
        """
        token = token.strip().lower()
        singular = singularize(token)
        unit = find_unit(self.graph, token, 0)
        if unit is None and singular != token:
            unit = find_unit(self.graph, singular, 0)
        if unit is None and self.max_distance > 0:
            unit = find_unit(self.graph, singular, self.max_distance)
        if unit is None:
            raise UnresolvedUnit(token)
        return unit

    def factor(self, source: Union[str, UnitExpr], target: Union[str, UnitExpr]) -> float:
        """
        Factor converting source to target (names or ratio expressions).

        Raises:
            MalformedQuery: One side is a ratio and the other is not
        """
        if isinstance(source, str):
            source = UnitExpr(source)
        if isinstance(target, str):
            target = UnitExpr(target)

        if source.is_compound != target.is_compound:
            raise MalformedQuery(f"{source} -> {target}", "both sides must be simple units or both ratios")

        if source.is_compound:
            return compound_factor(
                self.graph,
                (self.resolve(source.numerator), self.resolve(source.denominator)),
                (self.resolve(target.numerator), self.resolve(target.denominator)),
            )

        return conversion_factor(self.graph, self.resolve(source.numerator), self.resolve(target.numerator))

    def convert(self, query: Query) -> ConversionResult:
        """
        Convert a parsed query.

        Raises:
            UnresolvedUnit: A unit token does not resolve
            NoConversionPath: The resolved units are not connected
        """
        if query.is_compound:
            numerator = self.resolve(query.target.numerator)
            denominator = self.resolve(query.target.denominator)
            unit_name = f"{numerator.full_name}/{denominator.full_name}"
        else:
            unit_name = self.resolve(query.target.numerator).full_name

        factor = self.factor(query.source, query.target)
        result = ConversionResult(value=query.value * factor, unit=unit_name, query=query)
        logger.debug(f"{query.value} {query.source} -> {result.value} {unit_name} (factor {factor})")
        return result

    def convert_text(self, text: str) -> ConversionResult:
        """Parse and convert free text like '2.4 meters in mm'."""
        return self.convert(parse_query(text))

    def convert_value(self, value: float, source: str, target: str) -> float:
        """Convert a bare number between two unit names."""
        return value * self.factor(source, target)

    def list_units(self) -> List[str]:
        return list_units(self.graph)
