"""
Conversion Query Parsing
========================

Turns user text into a Query. Unit tokens are kept lower-cased as typed;
the converter singularizes them when resolving.

Grammar:
    query     := number side connector side
               | number unit ratio unit          (bare form: unit -> unit)
    side      := unit | unit ratio unit
    connector := 'to' | 'in' | '->'
    ratio     := '/' | 'per'

The token right after the number is always a unit, so "24 in to ft" reads
"in" as inches. Both sides must be simple, or both compound.

Usage:
    >>> parse_query("60 miles/hour to km/hour")
    Query(value=60.0, source=UnitExpr('miles', 'hour'), target=UnitExpr('km', 'hour'), ...)
"""

import math
import re
from dataclasses import dataclass
from typing import List, Optional

from unitgraph.errors import InvalidQuantity, MalformedQuery

CONNECTORS = ('to', 'in', '->')
RATIOS = ('/', 'per')

_TOKEN = re.compile(r'->|/|(?:(?!->)[^\s/])+')


@dataclass(frozen=True)
class UnitExpr:
    """A unit, or a ratio of two units (numerator per denominator)."""
    numerator: str
    denominator: Optional[str] = None

    @property
    def is_compound(self) -> bool:
        return self.denominator is not None

    def __str__(self) -> str:
        if self.denominator is None:
            return self.numerator
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class Query:
    """A parsed conversion request."""
    value: float
    source: UnitExpr
    target: UnitExpr
    text: str = ""

    @property
    def is_compound(self) -> bool:
        return self.source.is_compound


def tokenize(text: str) -> List[str]:
    """Split on whitespace; '/' and '->' are tokens of their own."""
    return _TOKEN.findall(text.strip().lower())


def parse_value(token: str) -> float:
    """Parse the quantity token; raises InvalidQuantity (nan and inf included)."""
    try:
        value = float(token)
    except ValueError as e:
        raise InvalidQuantity(token) from e
    if not math.isfinite(value):
        raise InvalidQuantity(token)
    return value


def _unit_token(token: str, text: str) -> str:
    if token in RATIOS or token == '->':
        raise MalformedQuery(text, f"expected a unit, got '{token}'")
    return token


def _parse_side(tokens: List[str], text: str) -> UnitExpr:
    if len(tokens) == 1:
        return UnitExpr(_unit_token(tokens[0], text))
    if len(tokens) == 3 and tokens[1] in RATIOS:
        return UnitExpr(_unit_token(tokens[0], text), _unit_token(tokens[2], text))
    raise MalformedQuery(text, f"cannot read unit '{' '.join(tokens)}'")


def _find_connector(tokens: List[str]) -> Optional[int]:
    """Index of the first connector that is not itself a unit position."""
    for i in range(1, len(tokens)):
        if tokens[i] in CONNECTORS and tokens[i - 1] not in RATIOS:
            return i
    return None


def parse_query(text: str) -> Query:
    """
    Parse '<number> <unit> to <unit>' or its compound form.

    Raises:
        InvalidQuantity: If the leading value is not a number
        MalformedQuery: If the rest does not follow the grammar
    """
    tokens = tokenize(text)
    if len(tokens) < 3:
        raise MalformedQuery(text, "expected '<number> <unit> to <unit>'")

    value = parse_value(tokens[0])
    rest = tokens[1:]

    connector = _find_connector(rest)
    if connector is None:
        # Bare '<number> <unit> per <unit>'
        if len(rest) == 3 and rest[1] in RATIOS:
            return Query(
                value=value,
                source=UnitExpr(_unit_token(rest[0], text)),
                target=UnitExpr(_unit_token(rest[2], text)),
                text=text,
            )
        raise MalformedQuery(text, "missing 'to', 'in' or '->'")

    source = _parse_side(rest[:connector], text)
    target = _parse_side(rest[connector + 1:], text) if rest[connector + 1:] else None
    if target is None:
        raise MalformedQuery(text, "missing target unit")

    if source.is_compound != target.is_compound:
        raise MalformedQuery(text, "both sides must be simple units or both ratios")

    return Query(value=value, source=source, target=target, text=text)
