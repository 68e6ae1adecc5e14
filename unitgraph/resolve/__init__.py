"""
UnitGraph Resolvers
===================

- names: free-text token -> unit (exact, then fuzzy)
- factors: unit pair -> conversion factor (direct or along a path)
"""

from .names import find_unit, edit_distance, FUZZY_MIN_LENGTH
from .factors import conversion_factor, compound_factor, conversion_path, is_convertible

__all__ = [
    'find_unit',
    'edit_distance',
    'FUZZY_MIN_LENGTH',
    'conversion_factor',
    'compound_factor',
    'conversion_path',
    'is_convertible',
]
