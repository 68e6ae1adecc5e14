"""
Name Resolver
=============

Maps a free-text unit token to exactly one unit.

Order of precedence:
    1. Exactly one unit whose full name or abbreviation equals the query.
    2. No exact match, fuzzy matching allowed and query longer than
       FUZZY_MIN_LENGTH: the unit with the smallest Levenshtein distance to
       its full name or abbreviation, if within max_distance.
    3. Otherwise no match. Several exact matches are never guessed between.

Usage:
    >>> from unitgraph.resolve.names import find_unit, edit_distance
    >>> edit_distance("kitten", "sitting")
    3
    >>> find_unit(graph, "metr", max_distance=2)
    Unit(full_name='meter', abbreviation='m')
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from unitgraph.graph.model import UnitGraph
from unitgraph.units import Unit

logger = logging.getLogger(__name__)


# Queries this short (abbreviations, mostly) are never fuzzy matched
FUZZY_MIN_LENGTH = 3


# =============================================================================
# EDIT DISTANCE
# =============================================================================

def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance between two strings.

    Wagner-Fischer dynamic programming, keeping only the previous and
    current rows; insertion, deletion and substitution each cost 1.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    len_a, len_b = len(a), len(b)
    prev_row: List[int] = list(range(len_b + 1))
    curr_row: List[int] = [0] * (len_b + 1)

    for i in range(1, len_a + 1):
        curr_row[0] = i
        for j in range(1, len_b + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            curr_row[j] = min(
                prev_row[j] + 1,         # deletion
                curr_row[j - 1] + 1,     # insertion
                prev_row[j - 1] + cost,  # substitution
            )
        prev_row, curr_row = curr_row, prev_row

    return prev_row[len_b]


def unit_distance(query: str, unit: Unit) -> int:
    """Smallest edit distance from query to the unit's full name or abbreviation."""
    distance = edit_distance(query, unit.full_name)
    if unit.abbreviation is not None:
        distance = min(distance, edit_distance(query, unit.abbreviation))
    return distance


# =============================================================================
# RESOLUTION
# =============================================================================

def match_index(units: Sequence[Unit], query: str, max_distance: int) -> Optional[int]:
    """
    Resolve query against a sequence of units, returning the unit's position.

    Works on a plain sequence so the graph builder can deduplicate units
    before the graph exists.
    """
    exact = [i for i, unit in enumerate(units) if unit.matches(query)]
    if len(exact) == 1:
        return exact[0]
    if exact:
        logger.debug(f"'{query}' is ambiguous: {[units[i].label for i in exact]}")
        return None

    if max_distance <= 0 or len(query) <= FUZZY_MIN_LENGTH or not units:
        return None

    distances = np.array([unit_distance(query, unit) for unit in units])
    best = int(np.argmin(distances))  # first minimum in table order
    if distances[best] > max_distance:
        return None

    logger.debug(f"'{query}' fuzzy matched {units[best].label} (distance {distances[best]})")
    return best


def find_unit(graph: UnitGraph, query: str, max_distance: int) -> Optional[Unit]:
    """
    Resolve a lower-cased query token to one unit of the graph.

    Args:
        graph: Unit graph to search
        query: Lower-cased token
        max_distance: Allowed edit distance for fuzzy matching (0 disables)

    Returns:
        The matched Unit, or None when nothing (or more than one unit) matches
    """
    index = match_index(graph.units, query, max_distance)
    if index is None:
        return None
    return graph.units[index]
