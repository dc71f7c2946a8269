"""
Result-shaping helpers for executed SELECT statements.

Each helper takes the result of ``connect.exec()`` (a SQLAlchemy result, or
anything with ``keys()`` and ``fetchall()``) and returns plain Python data.

Example:
    >>> result = connect.select('users', ['id', 'name']).exec()
    >>> fetch_pairs(result)
    {1: 'Ann', 2: 'Bob'}
"""

from typing import Any, Dict, List, Optional

import pandas as pd

from statements.errors import MalformedFetchShapeError


def fetch_all(result) -> List[Dict[str, Any]]:
    """Return every row as a dict keyed by column name."""
    keys = list(result.keys())
    return [dict(zip(keys, row)) for row in result.fetchall()]


def fetch_row(result) -> Optional[Dict[str, Any]]:
    """Return the first row as a dict, or None for an empty result."""
    keys = list(result.keys())
    row = result.fetchone()
    return None if row is None else dict(zip(keys, row))


def fetch_column(result, column: int = 0) -> List[Any]:
    """Return one column of every row (the first by default)."""
    return [row[column] for row in result.fetchall()]


def fetch_value(result) -> Any:
    """Return the first column of the first row, or None for an empty result."""
    row = result.fetchone()
    return None if row is None else row[0]


def fetch_pairs(result) -> Dict[Any, Any]:
    """
    Map the first column to the second for every row.

    Raises:
        MalformedFetchShapeError: If the result does not have exactly two columns
    """
    keys = list(result.keys())
    if len(keys) != 2:
        raise MalformedFetchShapeError(
            f"fetch_pairs needs exactly 2 columns, got {len(keys)}: {', '.join(keys)}"
        )
    return {row[0]: row[1] for row in result.fetchall()}


def fetch_frame(result) -> pd.DataFrame:
    """Return the result as a pandas DataFrame with the result's column names."""
    return pd.DataFrame([tuple(row) for row in result.fetchall()], columns=list(result.keys()))
