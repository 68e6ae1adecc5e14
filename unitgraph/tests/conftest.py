import pytest

from unitgraph.convert import UnitConverter
from unitgraph.graph.builder import build_graph


TABLE = """
12 inches(in) = 1 foot(ft)
1 mile(mi) = 5280 feet
3 feet = 1 yard(yd)
1 mile = 1.609344 kilometers(km)
1000 meters(m) = 1 kilometer

60 seconds(s) = 1 minute(min)
60 minutes = 1 hour(hr)

1000 grams(g) = 1 kilogram(kg)
"""


@pytest.fixture
def graph():
    return build_graph(TABLE)


@pytest.fixture
def converter(graph):
    return UnitConverter(graph, max_distance=2)
