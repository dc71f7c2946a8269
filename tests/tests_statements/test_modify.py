"""
==============================================================
Pytest suite for statements/delete.py and statements/update.py
==============================================================

Sections:
---------
1. Unit tests - Clause rendering
2. Integration tests - Shortcuts, ordering and execution
3. Edge case tests - Empty WHERE

Available markers:
------------------
unit, integration, edge_case

How to Execute:
---------------
All tests:          pytest tests/tests_statements/test_modify.py -v
"""

import pytest

from statements.delete import Delete
from statements.errors import EmptyAssignmentListError
from statements.raw import Raw
from statements.update import Update
from statements.where import Where

# ===============
# 1. UNIT TESTS
# ===============


@pytest.mark.unit
def test_delete_full_grammar(connect):
    """
    Test every DELETE clause in grammar order.
    """
    delete = (
        Delete(connect, "logs", {"level": "debug"}, limit=100)
        .set_ignore()
        .set_table_alias("l")
        .set_partitions("p0,p1")
        .order_asc("created_at")
    )

    assert delete.query() == (
        "DELETE IGNORE FROM `logs` AS `l` PARTITION (p0,p1) "
        "WHERE `level`='debug' ORDER BY `created_at` LIMIT 100"
    )


@pytest.mark.unit
def test_update_full_grammar(connect):
    """
    Test every UPDATE clause in grammar order.
    """
    update = (
        Update(connect, "users", {"name": "Ann", "visits": Raw("`visits`+%s", 1)})
        .assignment(("u", "flag"), None)
        .set_ignore()
        .set_table_alias("u")
        .set_partitions("p2")
        .where_eq("id", 7)
        .order_desc("id")
        .set_limit(1)
    )

    assert update.query() == (
        "UPDATE IGNORE `users` AS `u` PARTITION (p2) "
        "SET `name`='Ann',`visits`=`visits`+1,`u`.`flag`=null "
        "WHERE `id`=7 ORDER BY `id` DESC LIMIT 1"
    )


@pytest.mark.unit
def test_update_assignments_chain(connect):
    """
    Test assignments() keeps mapping order after earlier assignments.
    """
    update = connect.update("t").assignment("a", 1).assignments({"b": 2, "c": "x"})

    assert update.query() == "UPDATE `t` SET `a`=1,`b`=2,`c`='x'"


# ======================
# 2. INTEGRATION TESTS
# ======================


@pytest.mark.integration
def test_delete_order_expressions(connect):
    """
    Test ORDER BY expressions and positions on DELETE.
    """
    delete = Delete(connect, "t").order_expr("FIELD(`s`,'a')").order_expr_desc(Raw("`n`*%s", 2)).order_asc(1)

    assert delete.query() == "DELETE FROM `t` ORDER BY FIELD(`s`,'a'),`n`*2 DESC,1"


@pytest.mark.integration
def test_delete_raw_order_text_is_kept(connect):
    """
    Test raw ORDER BY text stays first when the builder is used.
    """
    delete = Delete(connect, "t", order="`a` DESC").order_asc("b")

    assert delete.query() == "DELETE FROM `t` ORDER BY `a` DESC,`b`"


@pytest.mark.integration
def test_delete_or_where_shortcuts(connect):
    """
    Test OR shortcuts and sub-groups on DELETE.
    """
    delete = (
        connect.delete("sessions")
        .where_lt("expires_at", Raw("NOW()"))
        .or_where_sub_fn(lambda sub: sub.eq("revoked", True).is_not_null("revoked_at"))
    )

    assert delete.query() == (
        "DELETE FROM `sessions` WHERE `expires_at`<NOW() OR  (`revoked`=1 AND `revoked_at` IS NOT NULL)"
    )


@pytest.mark.integration
def test_update_exec(connect):
    """
    Test UPDATE exec() forwards the SQL to the connection.
    """
    result = connect.update("t", {"a": 1}, where={"id": 2}).exec()

    assert result is True
    assert connect.executed == ["UPDATE `t` SET `a`=1 WHERE `id`=2"]


@pytest.mark.integration
def test_set_where_replaces_condition(connect):
    """
    Test set_where swaps the WHERE and set_table changes the target.
    """
    delete = Delete(connect, "a", {"id": 1}).set_where(Where(connect).gt("id", 5)).set_table("b")

    assert delete.query() == "DELETE FROM `b` WHERE `id`>5"


# ===================
# 3. EDGE CASE TESTS
# ===================


@pytest.mark.edge_case
def test_delete_without_where(connect):
    """
    Test an empty WHERE renders no keyword.
    """
    assert Delete(connect, "t", Where(connect)).query() == "DELETE FROM `t`"
    assert Delete(connect, "t", {}).query() == "DELETE FROM `t`"


@pytest.mark.edge_case
def test_update_without_assignments_raises(connect):
    """
    Test an UPDATE with nothing to SET is rejected instead of rendered.
    """
    update = Update(connect, "t", where={"id": 1})

    with pytest.raises(EmptyAssignmentListError):
        update.query()
    with pytest.raises(EmptyAssignmentListError):
        connect.update("t", {}).exec()
    assert connect.executed == []

    assert update.assignment("a", 1).query() == "UPDATE `t` SET `a`=1 WHERE `id`=1"
