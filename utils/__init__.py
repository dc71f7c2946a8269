"""
==========================
Utility Functions Package.
==========================

Reusable helpers for engine creation and for shaping the results of
executed statements.

Modules:
    database_utils: MySQL engine creation for connect.Connect
    results: Fetch helpers turning results into rows, columns, pairs or frames
"""

__version__ = "1.0.0"
__all__ = [
    'DatabaseConnectionError',
    'create_sqlalchemy_engine',
    'fetch_all',
    'fetch_row',
    'fetch_column',
    'fetch_value',
    'fetch_pairs',
    'fetch_frame'
]

from .database_utils import DatabaseConnectionError, create_sqlalchemy_engine
from .results import fetch_all, fetch_column, fetch_frame, fetch_pairs, fetch_row, fetch_value
