"""sqlchain – fluent builder for parameterized SQL.

Assemble SQL text and its positional parameters together so callers never
concatenate SQL strings by hand.

Public API
----------
``Statement``
    Root builder.  Open a clause with ``select`` / ``update`` / ``delete`` /
    ``insert``, chain clause calls, and ``end()`` back to the statement.

``RenderedSQL``
    Frozen ``(sql, params)`` result of ``Statement.build()``.

``BuilderOptions``
    Per-statement consistency-check configuration.

Example::

    from sqlchain import Statement

    stmt = (
        Statement()
        .select("*").from_("orders")
        .where()
        .eq("customer_id", 7)
        .and_().between("created_at", start, end)
        .end()
    )
    cursor.execute(stmt.render(), stmt.parameters())
"""

from __future__ import annotations

from sqlchain.build.clause_builders import (
    DeleteClause,
    InsertClause,
    SelectClause,
    UpdateClause,
)
from sqlchain.build.predicate_builder import PredicateClause
from sqlchain.converters import to_sqlalchemy
from sqlchain.errors import (
    ClauseClosedError,
    PlaceholderMismatchError,
    SqlChainError,
)
from sqlchain.schema.options import BuilderOptions
from sqlchain.schema.rendered import RenderedSQL
from sqlchain.statement import Statement

__all__ = [
    # Core
    "Statement",
    "RenderedSQL",
    "BuilderOptions",
    # Clauses
    "SelectClause",
    "PredicateClause",
    "UpdateClause",
    "DeleteClause",
    "InsertClause",
    # Converters
    "to_sqlalchemy",
    # Errors
    "SqlChainError",
    "PlaceholderMismatchError",
    "ClauseClosedError",
]
