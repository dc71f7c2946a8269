"""
==============================================================
Pytest suite for connect/base.py escaping and connect/debug.py
==============================================================

Sections:
---------
1. Unit tests - Value escaping rules
2. Integration tests - Factories and recording executor
3. Edge case tests - Unescapable values and special characters

Available markers:
------------------
unit, integration, edge_case

How to Execute:
---------------
All tests:          pytest tests/tests_connect/test_debug.py -v
"""

from datetime import datetime

import pytest

from connect.debug import ConnectDebug
from statements.errors import UnescapableValueError
from statements.raw import Raw
from statements.select import Select
from statements.where import Where

# ===============
# 1. UNIT TESTS
# ===============


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        ("hello", "'hello'"),
        ("O'Brien", "'O\\'Brien'"),
        (True, "1"),
        (False, "0"),
        (None, "null"),
        (42, "42"),
        (-1.5, "-1.5"),
        (Raw("NOW()"), "NOW()"),
        (Raw("`a`+%s", "b"), "`a`+'b'"),
    ],
)
def test_escape_scalars(value, expected):
    """
    Test each supported value type renders its SQL literal.
    """
    assert ConnectDebug().escape(value) == expected


@pytest.mark.unit
def test_escape_composites_as_json_strings():
    """
    Test lists, tuples and dicts are stored as compact JSON string literals.
    """
    connect = ConnectDebug()

    assert connect.escape([1, "a"]) == "'[1,\\\"a\\\"]'"
    assert connect.escape({"k": None}) == "'{\\\"k\\\":null}'"
    assert connect.escape(()) == "'[]'"


@pytest.mark.unit
def test_last_ids_are_zero():
    """
    Test the no-op executor reports zero ids and affected rows.
    """
    connect = ConnectDebug()

    assert connect.exec("DELETE FROM `t`") is True
    assert connect.last_insert_id() == 0
    assert connect.last_affected_rows() == 0


# ======================
# 2. INTEGRATION TESTS
# ======================


@pytest.mark.integration
def test_factories_bind_statements_to_connection():
    """
    Test factory methods create statements bound to the connection.
    """
    connect = ConnectDebug()

    assert isinstance(connect.where(), Where)
    assert connect.where().connect is connect
    assert isinstance(connect.select("t"), Select)
    assert connect.select("t").connect is connect


@pytest.mark.integration
def test_executed_records_in_order():
    """
    Test every exec() is recorded in call order.
    """
    connect = ConnectDebug()
    connect.insert("t", {"a": 1}).exec()
    connect.delete("t", {"a": 1}).exec()

    assert connect.executed == [
        "INSERT `t`(`a`) VALUE (1)",
        "DELETE FROM `t` WHERE `a`=1",
    ]


@pytest.mark.integration
def test_where_uses_escaped_string():
    """
    Test a quote inside a value cannot end the literal.
    """
    connect = ConnectDebug()

    assert connect.where().eq("name", "O'Brien").query() == "`name`='O\\'Brien'"


# ===================
# 3. EDGE CASE TESTS
# ===================


@pytest.mark.edge_case
@pytest.mark.parametrize("value", [object(), b"bytes", {1, 2}])
def test_unescapable_values_raise(value):
    """
    Test unsupported types are rejected instead of stringified.
    """
    with pytest.raises(UnescapableValueError):
        ConnectDebug().escape(value)


@pytest.mark.edge_case
def test_escape_backslash_double_quote_and_nul():
    """
    Test backslash is escaped first so added escapes are not doubled.
    """
    connect = ConnectDebug()

    assert connect.escape_string("a\\b") == "a\\\\b"
    assert connect.escape_string('say "hi"') == 'say \\"hi\\"'
    assert connect.escape_string("nul\x00") == "nul\\0"
    assert connect.escape("\\'") == "'\\\\\\''"


@pytest.mark.edge_case
def test_percent_in_string_is_untouched():
    """
    Test '%' in values passes through escaping unchanged.
    """
    assert ConnectDebug().escape("100%") == "'100%'"


@pytest.mark.edge_case
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_floats_raise(value):
    """
    Test NaN and infinities have no SQL literal.
    """
    with pytest.raises(UnescapableValueError):
        ConnectDebug().escape(value)


@pytest.mark.edge_case
@pytest.mark.parametrize(
    "value",
    [[Raw("NOW()")], {"at": datetime(2024, 1, 1)}, [float("nan")], ({1, 2},)],
)
def test_composites_json_cannot_encode_raise(value):
    """
    Test lists and dicts holding non-JSON values raise the builder error.
    """
    with pytest.raises(UnescapableValueError):
        ConnectDebug().escape(value)
