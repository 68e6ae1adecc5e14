"""
Test Graph Builder
==================
"""

import networkx as nx
import pytest

from unitgraph.errors import MalformedTableLine
from unitgraph.graph.builder import build_graph, load_table, parse_line
from unitgraph.units import Unit, singularize


def test_parse_line_with_abbreviations():
    """Both sides carry value, singular name and abbreviation."""
    left, right = parse_line("12 Inches(IN) = 1 foot(ft)")

    assert left.value == 12.0
    assert left.name == 'inche'
    assert left.abbreviation == 'in'
    assert right.value == 1.0
    assert right.name == 'foot'
    assert right.abbreviation == 'ft'


def test_parse_line_flexible_whitespace():
    """Whitespace around tokens, parentheses and '=' is optional."""
    left, right = parse_line("  1.5e3meters ( m )=1.5   kilometers")

    assert left.value == 1500.0
    assert left.name == 'meter'
    assert left.abbreviation == 'm'
    assert right.name == 'kilometer'
    assert right.abbreviation is None


def test_singularize_keeps_seconds_abbreviation():
    """A lone 's' is not stripped."""
    assert singularize('s') == 's'
    assert singularize('miles') == 'mile'
    assert singularize('foot') == 'foot'


@pytest.mark.parametrize('line', [
    "twelve inches = 1 foot",
    "12 inches 1 foot",
    "12 inches = 1 foot = 2 feet",
    "0 inches = 1 foot",
    "12 = 1 foot",
])
def test_malformed_lines_rejected(line):
    """Unparsable lines raise MalformedTableLine."""
    with pytest.raises(MalformedTableLine):
        parse_line(line, 7)


def test_malformed_line_skipped_by_default():
    """A bad line is skipped and recorded; the rest of the table is built."""
    graph = build_graph("12 inches(in) = 1 foot(ft)\nabc miles = 1 foot\n3 feet = 1 yard(yd)")

    assert len(graph) == 3
    assert len(graph.skipped_lines) == 1
    assert graph.skipped_lines[0].line_number == 2


def test_malformed_line_strict_aborts():
    """strict=True raises on the first bad line."""
    with pytest.raises(MalformedTableLine) as exc:
        build_graph("12 inches(in) = 1 foot(ft)\n\n1 foot = x yards", strict=True)

    assert exc.value.line_number == 3
    assert "not a number" in str(exc.value)


def test_comments_and_blank_lines_skipped():
    """Blank lines and '#' lines are not equivalences."""
    graph = build_graph("# lengths\n\n   \n12 inches(in) = 1 foot(ft)\n")

    assert len(graph) == 2
    assert graph.skipped_lines == ()


def test_reverse_edges_synthesized(graph):
    """Every entry is traversable both ways with reciprocal factors."""
    inch = Unit('inche', 'in')
    foot = Unit('foot', 'ft')

    assert graph.factor(inch, foot) == pytest.approx(1 / 12, rel=1e-9)
    assert graph.factor(foot, inch) == pytest.approx(12.0, rel=1e-9)
    assert graph.edge_count == 16


def test_every_edge_has_reciprocal(graph):
    """Each listed edge pairs with a reverse edge of the reciprocal factor."""
    edges = graph.edges()
    factors = {(source, target): factor for source, target, factor in edges}

    assert len(edges) == graph.edge_count
    for (source, target), factor in factors.items():
        assert factors[(target, source)] == pytest.approx(1 / factor, rel=1e-9)


def test_explicit_reverse_preserved():
    """An authored reverse entry wins over a synthesized one."""
    graph = build_graph("1 foot(ft) = 12 inches(in)\n1 inch = 0.08 feet")
    inch = Unit('inche', 'in')
    foot = Unit('foot', 'ft')

    assert graph.factor(foot, inch) == pytest.approx(12.0)
    assert graph.factor(inch, foot) == pytest.approx(0.08)
    assert graph.edge_count == 2


def test_duplicate_entry_keeps_first():
    """A repeated A -> B entry does not replace the first."""
    graph = build_graph("1 foot(ft) = 12 inches(in)\n1 foot = 13 inches")

    assert graph.factor(Unit('foot', 'ft'), Unit('inche', 'in')) == pytest.approx(12.0)


def test_dedup_by_name_tolerates_typos(graph):
    """'feet' is the same node as 'foot' (edit distance 2)."""
    names = [u.full_name for u in graph.units]

    assert 'feet' not in names
    assert names.count('foot') == 1
    assert len(graph) == 11


def test_dedup_by_abbreviation_is_exact():
    """Units with distinct abbreviations stay distinct even if names are close."""
    graph = build_graph("1 metre(mr) = 1 meter(m)")

    assert len(graph) == 2


def test_abbreviation_adopted_on_later_mention():
    """A unit first seen without abbreviation takes one given later."""
    graph = build_graph("12 inches = 1 foot\n3 foot(ft) = 1 yard(yd)")

    assert Unit('foot', 'ft') in graph
    assert Unit('foot') not in graph
    assert len(graph) == 3


def test_abbreviations_unique(graph):
    """No two units share a real abbreviation."""
    abbreviations = [u.abbreviation for u in graph.units if u.abbreviation is not None]

    assert len(abbreviations) == len(set(abbreviations))


def test_missing_abbreviation_is_none():
    """No placeholder token is invented for missing abbreviations."""
    graph = build_graph("1 league = 3 miles")

    assert [u.abbreviation for u in graph.units] == [None, None]
    assert [u.label for u in graph.units] == ['league', 'mile']


def test_graph_is_frozen(graph):
    """The built graph rejects mutation."""
    with pytest.raises(nx.NetworkXError):
        graph.digraph.add_edge(Unit('a'), Unit('b'), factor=1.0)


def test_disconnected_components(graph):
    """Length, time and mass are separate components."""
    assert graph.component_count == 3


def test_load_table(tmp_path):
    """Table files are read as text."""
    path = tmp_path / 'table.txt'
    path.write_text("60 seconds(s) = 1 minute(min)\n", encoding='utf-8')

    graph = build_graph(load_table(path))

    assert [u.label for u in graph.units] == ['second(s)', 'minute(min)']


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
