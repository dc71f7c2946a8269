"""
===================================
Pytest suite for utils/results.py
===================================

Sections:
---------
1. Unit tests - Each fetch helper
2. Edge case tests - Empty results and wrong shapes

Available markers:
------------------
unit, edge_case

How to Execute:
---------------
All tests:          pytest tests/tests_utils/test_results.py -v
"""

import pandas as pd
import pytest

from statements.errors import MalformedFetchShapeError
from utils.results import fetch_all, fetch_column, fetch_frame, fetch_pairs, fetch_row, fetch_value

# ====================
# Mock Helper Classes
# ====================


class FakeResult:
    """Mock SQLAlchemy result with column names and tuple rows."""
    def __init__(self, keys, rows):
        self._keys = keys
        self.rows = list(rows)

    def keys(self):
        return list(self._keys)

    def fetchall(self):
        rows, self.rows = self.rows, []
        return rows

    def fetchone(self):
        return self.rows.pop(0) if self.rows else None


def users():
    return FakeResult(["id", "name"], [(1, "Ann"), (2, "Bob")])


# ===============
# 1. UNIT TESTS
# ===============


@pytest.mark.unit
def test_fetch_all():
    """
    Test rows become dicts keyed by column name.
    """
    assert fetch_all(users()) == [{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bob"}]


@pytest.mark.unit
def test_fetch_row_and_value():
    """
    Test the first row and the first value.
    """
    assert fetch_row(users()) == {"id": 1, "name": "Ann"}
    assert fetch_value(users()) == 1


@pytest.mark.unit
def test_fetch_column():
    """
    Test the first column by default and another by position.
    """
    assert fetch_column(users()) == [1, 2]
    assert fetch_column(users(), 1) == ["Ann", "Bob"]


@pytest.mark.unit
def test_fetch_pairs():
    """
    Test two-column results map first column to second.
    """
    assert fetch_pairs(users()) == {1: "Ann", 2: "Bob"}


@pytest.mark.unit
def test_fetch_frame():
    """
    Test the DataFrame keeps column names and row order.
    """
    frame = fetch_frame(users())

    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns) == ["id", "name"]
    assert frame["name"].tolist() == ["Ann", "Bob"]


# ===================
# 2. EDGE CASE TESTS
# ===================


@pytest.mark.edge_case
def test_empty_result():
    """
    Test helpers on a result without rows.
    """
    empty = ["id", "name"]

    assert fetch_all(FakeResult(empty, [])) == []
    assert fetch_row(FakeResult(empty, [])) is None
    assert fetch_value(FakeResult(empty, [])) is None
    assert fetch_frame(FakeResult(empty, [])).empty


@pytest.mark.edge_case
@pytest.mark.parametrize("keys", [["id"], ["id", "name", "email"]])
def test_fetch_pairs_requires_two_columns(keys):
    """
    Test fetch_pairs rejects results that are not exactly two columns wide.
    """
    with pytest.raises(MalformedFetchShapeError):
        fetch_pairs(FakeResult(keys, []))
