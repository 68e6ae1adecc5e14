"""
Unit Nodes
==========

A unit is a node of the conversion graph: a lower-cased, singularized
full name plus an optional abbreviation.

Usage:
    >>> from unitgraph.units import Unit, normalize_name
    >>> normalize_name("Inches")
    'inche'
    >>> Unit("foot", "ft").label
    'foot(ft)'
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Unit:
    """
    A named measurement unit recognized by the graph.

    abbreviation is None when the table never supplied one. None is never
    displayed and never matches a query.
    """
    full_name: str
    abbreviation: Optional[str] = None

    @property
    def label(self) -> str:
        """Listing form: full_name(abbreviation), or just full_name."""
        if self.abbreviation is None:
            return self.full_name
        return f"{self.full_name}({self.abbreviation})"

    def matches(self, text: str) -> bool:
        """Exact match on either name."""
        return self.full_name == text or self.abbreviation == text

    def __str__(self) -> str:
        return self.label


def singularize(name: str) -> str:
    """
    Strip a single trailing 's'.

    The bare name "s" (seconds) is left alone, as is any name that would
    become empty.
    """
    if name.endswith("s") and name != "s" and len(name) > 1:
        return name[:-1]
    return name


def normalize_name(name: str) -> str:
    """Lower-case, trim and singularize a unit name token."""
    return singularize(name.strip().lower())


def normalize_abbreviation(abbreviation: Optional[str]) -> Optional[str]:
    """Lower-case an abbreviation; empty strings become None."""
    if abbreviation is None:
        return None
    abbreviation = abbreviation.strip().lower()
    return abbreviation or None
