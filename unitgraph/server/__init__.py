"""
UnitGraph Server
================

HTTP handler for conversion queries.
"""

from .routes import create_app

__all__ = ['create_app']
