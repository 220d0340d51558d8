"""Unit tests for UpdateClause, DeleteClause and InsertClause."""
from __future__ import annotations

import pytest

from sqlchain import ClauseClosedError, Statement


# ---------------------------------------------------------------------------
# UPDATE
# ---------------------------------------------------------------------------


def test_update_single_set():
    stmt = Statement().update("users").set("name", "bob").end()
    assert stmt.render() == "update users set name=?"
    assert stmt.parameters() == ["bob"]


def test_update_multiple_sets_and_mapping_with_where():
    stmt = (
        Statement()
        .update("users")
        .set("name", "bob")
        .set({"age": 30, "city": "Paris"})
        .where().eq("id", 1)
        .end()
    )
    assert stmt.render() == "update users set name=?, age=?, city=? where id=?"
    assert stmt.parameters() == ["bob", 30, "Paris", 1]


def test_update_empty_mapping_writes_nothing():
    stmt = Statement().update("users").set({}).end()
    assert stmt.render() == "update users"
    assert stmt.parameters() == []


def test_update_manual_grouping():
    stmt = (
        Statement()
        .update("t")
        .set("a", 1)
        .append("where")
        .lb()
        .append("x = ? or y = ?", 2, 3)
        .rb()
        .end()
    )
    assert stmt.render() == "update t set a=? where ( x = ? or y = ? )"
    assert stmt.parameters() == [1, 2, 3]


def test_update_closed_after_where():
    update = Statement().update("t").set("a", 1)
    update.where().eq("id", 1).end()
    with pytest.raises(ClauseClosedError):
        update.set("b", 2)


# ---------------------------------------------------------------------------
# DELETE
# ---------------------------------------------------------------------------


def test_delete_with_where():
    stmt = Statement().delete("users").where().eq("id", 3).and_().in_("role", "a", "b").end()
    assert stmt.render() == "delete from users where id=? and (role in (?,?))"
    assert stmt.parameters() == [3, "a", "b"]


def test_delete_without_predicates():
    stmt = Statement().delete("users").where().like("name", None).end()
    assert stmt.render() == "delete from users"


def test_delete_with_embedded_statement():
    cond = Statement().append("where id in (select user_id from bans where until > ?)", 5)
    stmt = Statement().delete("users").append_statement(cond).end()
    assert stmt.render() == (
        "delete from users where id in (select user_id from bans where until > ?)"
    )
    assert stmt.parameters() == [5]


# ---------------------------------------------------------------------------
# INSERT
# ---------------------------------------------------------------------------


def test_insert_columns_and_values():
    stmt = Statement().insert("t").add("a", 1).add("b", 2).end()
    assert stmt.render() == "insert into t(a,b) values(?,?)"
    assert stmt.parameters() == [1, 2]


def test_insert_last_write_wins():
    stmt = Statement().insert("t").add("a", 1).add({"b": 2, "a": 3}).end()
    assert stmt.render() == "insert into t(a,b) values(?,?)"
    assert stmt.parameters() == [3, 2]


def test_insert_params_follow_column_order():
    row = {"z": "last", "m": "middle", "a": "first"}
    stmt = Statement().insert("t").add(row).end()
    sql = stmt.render()
    columns = sql[sql.index("(") + 1 : sql.index(")")].split(",")
    assert stmt.parameters() == [row[c] for c in columns]


def test_insert_nothing_added_is_degenerate_but_allowed():
    stmt = Statement().insert("t").end()
    assert stmt.render() == "insert into t() values()"
    assert stmt.parameters() == []


def test_insert_closed_after_end():
    insert = Statement().insert("t").add("a", 1)
    insert.end()
    with pytest.raises(ClauseClosedError) as exc_info:
        insert.add("b", 2)
    assert exc_info.value.clause == "InsertClause"
