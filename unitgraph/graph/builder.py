"""
Graph Builder
=============

Parses an equivalence table into a UnitGraph.

Table format, one equivalence per line:

    12 inches(in) = 1 foot(ft)
    1 mile(mi) = 5280 feet
    # comment lines and blank lines are skipped

A line `v1 A = v2 B` stores edge A -> B with factor v2/v1 (B units per A
unit). Once every line is read, the reverse edge B -> A (factor v1/v2) is
synthesized for each entry unless the table authored it explicitly.

Usage:
    from unitgraph.graph.builder import build_graph, load_table

    graph = build_graph(load_table("table.txt"))
"""

import logging
import math
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import networkx as nx

from unitgraph.errors import MalformedTableLine
from unitgraph.graph.model import UnitGraph
from unitgraph.resolve.names import match_index
from unitgraph.units import Unit, normalize_abbreviation, normalize_name

logger = logging.getLogger(__name__)


# Edit distance tolerated between repeated mentions of one unit in a table
NAME_DEDUP_DISTANCE = 2


# =============================================================================
# LINE PARSING
# =============================================================================

_NUMBER = r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?'
_NAME = r"[^\W\d_][\w.'\-]*"
_SIDE = re.compile(
    rf'\s*(?P<value>{_NUMBER})\s*(?P<name>{_NAME})\s*'
    rf'(?:\(\s*(?P<abbreviation>[^()\s]+)\s*\))?\s*'
)


@dataclass(frozen=True)
class TableSide:
    """One side of an equivalence: value, normalized name, optional abbreviation."""
    value: float
    name: str
    abbreviation: Optional[str] = None


def parse_side(text: str, line_number: int, line: str) -> TableSide:
    """Parse '<number> <name>[(<abbrev>)]'."""
    match = _SIDE.fullmatch(text)
    if not match:
        tokens = text.split()
        if not tokens:
            raise MalformedTableLine(line_number, line, "empty side of '='")
        try:
            float(tokens[0])
        except ValueError:
            raise MalformedTableLine(line_number, line, f"'{tokens[0]}' is not a number")
        raise MalformedTableLine(line_number, line, f"cannot parse unit in '{text.strip()}'")

    value = float(match.group('value'))
    if not math.isfinite(value) or value <= 0:
        raise MalformedTableLine(line_number, line, f"value must be positive, got {match.group('value')}")

    return TableSide(
        value=value,
        name=normalize_name(match.group('name')),
        abbreviation=normalize_abbreviation(match.group('abbreviation')),
    )


def parse_line(line: str, line_number: int = 0) -> Tuple[TableSide, TableSide]:
    """
    Parse one table line into its two sides.

    Raises:
        MalformedTableLine: If the line is not '<side> = <side>'
    """
    parts = line.split('=')
    if len(parts) != 2:
        raise MalformedTableLine(line_number, line, "expected exactly one '='")

    left = parse_side(parts[0], line_number, line)
    right = parse_side(parts[1], line_number, line)
    return left, right


def is_skippable(line: str) -> bool:
    """Blank lines and '#' comments carry no equivalence."""
    stripped = line.strip()
    return not stripped or stripped.startswith('#')


# =============================================================================
# BUILD
# =============================================================================

class _TableState:
    """Mutable build state; discarded once the frozen graph exists."""

    def __init__(self):
        self.units: List[Unit] = []
        self.edges: Dict[Tuple[int, int], float] = {}

    def intern(self, side: TableSide) -> int:
        """Return the position of the unit named by side, creating it if new."""
        if side.abbreviation is not None:
            index = match_index(self.units, side.abbreviation, 0)
            if index is not None:
                return index

            index = match_index(self.units, side.name, 0)
            if index is not None:
                unit = self.units[index]
                if unit.abbreviation is None:
                    self.units[index] = replace(unit, abbreviation=side.abbreviation)
                    return index
                if unit.abbreviation == side.abbreviation:
                    return index
        else:
            index = match_index(self.units, side.name, NAME_DEDUP_DISTANCE)
            if index is not None:
                return index

        unit = Unit(side.name, side.abbreviation)
        if unit in self.units:
            return self.units.index(unit)
        self.units.append(unit)
        return len(self.units) - 1

    def add_entry(self, left: TableSide, right: TableSide, line_number: int) -> None:
        source = self.intern(left)
        target = self.intern(right)

        if source == target:
            logger.debug(f"Line {line_number}: {self.units[source].label} relates to itself, ignored")
            return

        if (source, target) in self.edges:
            logger.warning(
                f"Line {line_number}: duplicate equivalence "
                f"{self.units[source].label} -> {self.units[target].label}, keeping the first"
            )
            return

        self.edges[(source, target)] = right.value / left.value

    def add_reverse_edges(self) -> int:
        """Synthesize B -> A for every A -> B the table did not author."""
        added = 0
        for (source, target), factor in list(self.edges.items()):
            if (target, source) not in self.edges:
                self.edges[(target, source)] = 1.0 / factor
                added += 1
        return added

    def to_digraph(self) -> nx.DiGraph:
        digraph = nx.DiGraph()
        digraph.add_nodes_from(self.units)
        for (source, target), factor in self.edges.items():
            digraph.add_edge(self.units[source], self.units[target], factor=factor)
        return digraph


def build_graph(table: Union[str, Iterable[str]], strict: bool = False) -> UnitGraph:
    """
    Build the conversion graph from an equivalence table.

    Args:
        table: Table text, or an iterable of lines
        strict: Abort on the first malformed line instead of skipping it

    Returns:
        Frozen UnitGraph

    Raises:
        MalformedTableLine: If strict and a line does not parse
    """
    lines = table.splitlines() if isinstance(table, str) else list(table)

    state = _TableState()
    skipped: List[MalformedTableLine] = []

    for line_number, line in enumerate(lines, start=1):
        if is_skippable(line):
            continue
        try:
            left, right = parse_line(line, line_number)
        except MalformedTableLine as e:
            if strict:
                raise
            logger.warning(f"Skipping malformed table line. {e}")
            skipped.append(e)
            continue
        state.add_entry(left, right, line_number)

    n_authored = len(state.edges)
    n_synthesized = state.add_reverse_edges()

    graph = UnitGraph(state.to_digraph(), skipped_lines=skipped)
    logger.info(
        f"Built unit graph: {len(graph)} units, {n_authored} equivalences "
        f"(+{n_synthesized} reverse), {graph.component_count} components, "
        f"{len(skipped)} lines skipped"
    )
    return graph


def load_table(path: Union[str, Path]) -> str:
    """Read a table file as UTF-8 text."""
    path = Path(path)
    logger.debug(f"Reading table from {path}")
    return path.read_text(encoding='utf-8')
