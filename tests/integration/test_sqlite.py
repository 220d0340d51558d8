"""Integration tests: build → execute against a real SQLite in-memory DB.

Covers SELECT with eq / between / in / sub-query predicates, derived tables,
INSERT, UPDATE and DELETE, plus WHERE clauses assembled from optional
filters where some criteria are empty.
"""
from __future__ import annotations

import sqlite3

import pytest

from sqlchain import Statement

_DDL = """
CREATE TABLE users (
    id      INTEGER PRIMARY KEY,
    name    TEXT    NOT NULL,
    age     INTEGER NOT NULL,
    region  TEXT
);
CREATE TABLE orders (
    id       INTEGER PRIMARY KEY,
    user_id  INTEGER NOT NULL REFERENCES users(id),
    total    REAL    NOT NULL,
    status   TEXT    NOT NULL
);
"""

_USERS = [
    (1, "ann", 31, "eu"),
    (2, "bob", 17, "us"),
    (3, "cy", 45, "eu"),
    (4, "dee", 52, None),
]

_ORDERS = [
    (10, 1, 120.0, "paid"),
    (11, 1, 15.5, "open"),
    (12, 3, 300.0, "paid"),
    (13, 2, 8.0, "paid"),
]


@pytest.fixture()
def db() -> sqlite3.Connection:
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.executescript(_DDL)
    conn.executemany("INSERT INTO users VALUES (?, ?, ?, ?)", _USERS)
    conn.executemany("INSERT INTO orders VALUES (?, ?, ?, ?)", _ORDERS)
    yield conn
    conn.close()


def _run(conn: sqlite3.Connection, stmt: Statement) -> list[sqlite3.Row]:
    return conn.execute(*stmt.build().as_tuple()).fetchall()


def test_select_eq(db):
    stmt = Statement().select("name").from_("users").where().eq("region", "eu").end()
    rows = _run(db, stmt.append("order by id"))
    assert [r["name"] for r in rows] == ["ann", "cy"]


def test_select_between_and_in(db):
    stmt = (
        Statement()
        .select("id").from_("users")
        .where().between("age", 18, 50).and_().in_("region", "eu", "us")
        .end()
        .append("order by id")
    )
    assert [r["id"] for r in _run(db, stmt)] == [1, 3]


def test_optional_filters_skip_empty_criteria(db):
    filters: dict = {"exact": {}, "ranges": {"age": [40, 60]}, "ids": []}
    stmt = (
        Statement()
        .select("id").from_("users")
        .where()
        .eq(filters["exact"])
        .and_().between(filters["ranges"])
        .and_().in_("id", *filters["ids"])
        .end()
        .append("order by id")
    )
    assert stmt.render() == "select id from users where (age between ? and ?) order by id"
    assert [r["id"] for r in _run(db, stmt)] == [3, 4]


def test_in_sub_query(db):
    paid = (
        Statement()
        .select("user_id").from_("orders")
        .where().eq("status", "paid").and_().eq("total", 100, ">")
        .end()
    )
    stmt = (
        Statement()
        .select("name").from_("users")
        .where().in_("id", paid)
        .end()
        .append("order by id")
    )
    assert [r["name"] for r in _run(db, stmt)] == ["ann", "cy"]


def test_projected_sub_query_and_derived_table(db):
    order_count = (
        Statement()
        .select("count(*)").from_("orders o")
        .where().append("o.user_id = u.id").end()
        .alias("n")
    )
    derived = (
        Statement()
        .select("u.id")
        .sub(order_count)
        .from_("users u")
        .end()
        .alias("c")
    )
    stmt = (
        Statement()
        .select("c.id", "c.n")
        .end()
        .append("from")
        .append_statement(derived)
        .append("where c.n >= ? order by c.id", 1)
    )
    rows = _run(db, stmt)
    assert [(r[0], r[1]) for r in rows] == [(1, 2), (2, 1), (3, 1)]


def test_insert_then_select(db):
    stmt = Statement().insert("users").add({"id": 5, "name": "eve", "age": 29}).add("region", "us").end()
    db.execute(*stmt.build().as_tuple())
    row = db.execute("SELECT name, age, region FROM users WHERE id = 5").fetchone()
    assert tuple(row) == ("eve", 29, "us")


def test_update(db):
    stmt = (
        Statement()
        .update("users")
        .set({"age": 18, "region": "us"})
        .where().eq("name", "bob")
        .end()
    )
    db.execute(*stmt.build().as_tuple())
    row = db.execute("SELECT age, region FROM users WHERE id = 2").fetchone()
    assert tuple(row) == (18, "us")


def test_delete(db):
    stmt = Statement().delete("orders").where().eq("status", "open").or_().eq("total", 10, "<").end()
    db.execute(*stmt.build().as_tuple())
    remaining = [r[0] for r in db.execute("SELECT id FROM orders ORDER BY id")]
    assert remaining == [10, 12]
