"""
=====================================================================
Pytest suite for statements/helpers.py, ordering.py, table.py, raw.py
=====================================================================

Sections:
---------
1. Unit tests - Identifier quoting and clause rendering
2. Edge case tests - Invalid names and empty inputs

Available markers:
------------------
unit, edge_case

How to Execute:
---------------
All tests:          pytest tests/tests_statements/test_helpers.py -v
"""

import pytest

from statements.errors import InvalidColumnNameError, UnsupportedColumnExpressionError
from statements.helpers import (
    escape_name,
    escape_name_unsafe,
    prepare_cols,
    prepare_join_on,
    prepare_limit,
    prepare_on_dup_key_update,
    prepare_row,
    prepare_where,
)
from statements.ordering import GroupBy, OrderBy
from statements.raw import Raw
from statements.table import TableFactor
from statements.where import Where

# ===============
# 1. UNIT TESTS
# ===============


@pytest.mark.unit
def test_escape_name_unsafe_forms():
    """
    Test plain, pre-quoted, pre-joined and pair names.
    """
    assert escape_name_unsafe("id") == "`id`"
    assert escape_name_unsafe("`id`") == "`id`"
    assert escape_name_unsafe("o`.`id") == "`o`.`id`"
    assert escape_name_unsafe(("o", "id")) == "`o`.`id`"
    assert escape_name_unsafe(["db", "o", "id"]) == "`db`.`o`.`id`"


@pytest.mark.unit
def test_escape_name_strict():
    """
    Test the strict helper accepts dot-separated word segments.
    """
    assert escape_name("users") == "`users`"
    assert escape_name("shop.users.id") == "`shop`.`users`.`id`"


@pytest.mark.unit
def test_prepare_row(connect):
    """
    Test row rendering keeps mapping order.
    """
    assert prepare_row(connect, {"id": 1, "label": "hello"}) == "(`id`,`label`) VALUE (1,'hello')"


@pytest.mark.unit
def test_prepare_cols():
    """
    Test column lists and the empty case.
    """
    assert prepare_cols(["id", "label"]) == "(`id`,`label`)"
    assert prepare_cols([]) == ""


@pytest.mark.unit
def test_prepare_on_dup_key_update(connect):
    """
    Test ON DUPLICATE KEY UPDATE with literal and Raw values.
    """
    result = prepare_on_dup_key_update(connect, {"e": Raw("`e`+%s", 1), "le": Raw("NOW()")})

    assert result == "ON DUPLICATE KEY UPDATE `e`=`e`+1,`le`=NOW()"


@pytest.mark.unit
def test_prepare_where_mapping_and_builder(connect):
    """
    Test the mapping fast path and a Where builder.
    """
    assert prepare_where(connect, "WHERE", {"id": 1, "label": "x"}) == " WHERE `id`=1 AND `label`='x'"
    assert prepare_where(connect, "HAVING", Where(connect).gt("n", 2)) == " HAVING `n`>2"


@pytest.mark.unit
def test_prepare_join_on(connect):
    """
    Test join conditions from a column pair and from a Where.
    """
    assert prepare_join_on((("items", "user_id"), ("users", "id"))) == " ON `items`.`user_id`=`users`.`id`"
    assert prepare_join_on(Where(connect).cond("`a`.`x`=`b`.`x`")) == " ON (`a`.`x`=`b`.`x`)"


@pytest.mark.unit
def test_prepare_limit():
    """
    Test LIMIT with and without OFFSET.
    """
    assert prepare_limit(10) == " LIMIT 10"
    assert prepare_limit(10, 20) == " LIMIT 10 OFFSET 20"
    assert prepare_limit(None, 20) == ""


@pytest.mark.unit
def test_order_by(connect):
    """
    Test names, positions and expressions in ORDER BY.
    """
    assert OrderBy(connect).asc("name").query() == "`name`"
    assert OrderBy(connect).desc(2).query() == "2 DESC"
    assert OrderBy(connect).expr_desc("DATE(`created_at`)").asc("order").query() == "DATE(`created_at`) DESC,`order`"
    assert OrderBy(connect).desc(("o", "id")).expr_asc(Raw("FIELD(`s`,%s,%s)", "a", "b")).query() == (
        "`o`.`id` DESC,FIELD(`s`,'a','b')"
    )


@pytest.mark.unit
def test_group_by(connect):
    """
    Test GROUP BY terms.
    """
    assert GroupBy(connect).add("country").add(2).expr("YEAR(`created_at`)").query() == (
        "`country`,2,YEAR(`created_at`)"
    )


@pytest.mark.unit
def test_table_factor(connect):
    """
    Test table factors for names and derived tables.
    """
    assert TableFactor("orders", alias="o", partition="p1", index_hint_list="USE INDEX (i)").query() == (
        "`orders` PARTITION (p1) AS `o` USE INDEX (i)"
    )
    assert TableFactor(connect.select("t", ["id"]), alias="d").query() == "(SELECT `id` FROM `t`) AS `d`"


@pytest.mark.unit
def test_raw_render(connect):
    """
    Test Raw without params is verbatim and with params escapes them.
    """
    assert Raw("NOW()").render(connect) == "NOW()"
    assert Raw("CONCAT(%s, `name`)", "Dr. ").render(connect) == "CONCAT('Dr. ', `name`)"


# ===================
# 2. EDGE CASE TESTS
# ===================


@pytest.mark.edge_case
@pytest.mark.parametrize("name", ["users;drop", "a b", "a..b", ".a", "", "`a`"])
def test_escape_name_rejects_unsafe(name):
    """
    Test the strict helper rejects anything but word segments.
    """
    with pytest.raises(InvalidColumnNameError):
        escape_name(name)


@pytest.mark.edge_case
def test_escape_name_unsafe_rejects_non_string_parts():
    """
    Test a non-string element in a qualified name is rejected.
    """
    with pytest.raises(InvalidColumnNameError):
        escape_name_unsafe(("o", 1))


@pytest.mark.edge_case
def test_prepare_where_empty_inputs(connect):
    """
    Test empty mapping, empty builder and None all render nothing.
    """
    assert prepare_where(connect, "WHERE", {}) == ""
    assert prepare_where(connect, "WHERE", Where(connect)) == ""
    assert prepare_where(connect, "WHERE", None) == ""


@pytest.mark.edge_case
def test_prepare_join_on_rejects_malformed_pair():
    """
    Test an ON pair without two (table, column) sides is rejected.
    """
    with pytest.raises(UnsupportedColumnExpressionError):
        prepare_join_on(("items", "user_id"))


@pytest.mark.edge_case
def test_raw_is_immutable():
    """
    Test a Raw cannot be modified after creation.
    """
    raw = Raw("NOW()")

    with pytest.raises(AttributeError):
        raw.expression = "1"
    assert raw == Raw("NOW()")
