"""Clause-level SQL builders.

Each class handles exactly one statement kind and writes straight into the
owning statement's buffer.  WHERE handling is delegated to
:class:`~sqlchain.build.predicate_builder.PredicateClause`.

Classes
-------
SelectClause   — ``select <cols> from <tables>`` with projected sub-queries
UpdateClause   — ``update <table> set k=?, …``
DeleteClause   — ``delete from <table>``
InsertClause   — ``insert into <table>(…) values(…)``
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlchain.build.base import ClauseBase, CommonClauseOps, requires_open, write_statement
from sqlchain.build.buffer import PLACEHOLDER
from sqlchain.build.predicate_builder import PredicateClause

if TYPE_CHECKING:
    from sqlchain.statement import Statement

logger = logging.getLogger(__name__)


class SelectClause(ClauseBase):
    """Builds ``select <cols> [from <tables>]``.

    Calling with no columns still writes ``select``; the projection is then
    expected to arrive through :meth:`sub`.
    """

    def __init__(self, statement: Statement, *columns: str) -> None:
        super().__init__(statement)
        self._has_items = bool(columns)
        self._buffer.write("select " + ",".join(columns))

    @requires_open
    def from_(self, *tables: str) -> SelectClause:
        self._buffer.write(" from " + ",".join(tables) + " ")
        return self

    @requires_open
    def sub(self, statement: Statement, parenthesize: bool = False) -> SelectClause:
        """Project a nested statement as one select item."""
        if self._has_items:
            self._buffer.trim_end()
            self._buffer.write(", ")
        write_statement(self._buffer, statement, parenthesize)
        self._has_items = True
        return self

    @requires_open
    def where(self) -> PredicateClause:
        self._close()
        return PredicateClause(self._statement)

    @requires_open
    def end(self) -> Statement:
        return self._close()


class UpdateClause(CommonClauseOps, ClauseBase):
    """Builds ``update <table> set k1=?, k2=?``."""

    def __init__(self, statement: Statement, table: str) -> None:
        super().__init__(statement)
        self._has_assignment = False
        self._buffer.write(f"update {table} ")

    @requires_open
    def set(self, key: str | Mapping[str, Any], value: Any = None) -> UpdateClause:
        """Assign ``value`` to column ``key``.

        A mapping assigns every entry in iteration order.
        """
        if isinstance(key, Mapping):
            for k, v in key.items():
                self._assign(k, v)
            return self
        self._assign(key, value)
        return self

    def _assign(self, key: str, value: Any) -> None:
        prefix = ", " if self._has_assignment else " set "
        self._buffer.write(f"{prefix}{key}={PLACEHOLDER}", [value])
        self._has_assignment = True

    @requires_open
    def where(self) -> PredicateClause:
        self._close()
        return PredicateClause(self._statement)

    @requires_open
    def end(self) -> Statement:
        return self._close()


class DeleteClause(CommonClauseOps, ClauseBase):
    """Builds ``delete from <table>``."""

    def __init__(self, statement: Statement, table: str) -> None:
        super().__init__(statement)
        self._buffer.write(f"delete from {table} ")

    @requires_open
    def where(self) -> PredicateClause:
        self._close()
        return PredicateClause(self._statement)

    @requires_open
    def end(self) -> Statement:
        return self._close()


class InsertClause(CommonClauseOps, ClauseBase):
    """Builds ``insert into <table>(c1,c2) values(?,?)``.

    Column values are buffered until :meth:`end`; adding the same column
    twice keeps its first position and the last value.
    """

    def __init__(self, statement: Statement, table: str) -> None:
        super().__init__(statement)
        self._values: dict[str, Any] = {}
        self._buffer.write(f"insert into {table}")

    @requires_open
    def add(self, key: str | Mapping[str, Any], value: Any = None) -> InsertClause:
        if isinstance(key, Mapping):
            self._values.update(key)
        else:
            self._values[key] = value
        return self

    @requires_open
    def end(self) -> Statement:
        """Write the column list and ``values(...)`` and return the statement."""
        # Columns and params come from the same pass so they stay aligned.
        columns = list(self._values)
        params = [self._values[c] for c in columns]
        marks = ",".join(PLACEHOLDER for _ in columns)
        self._buffer.write(f"({','.join(columns)}) values({marks}) ", params)
        logger.debug("Insert rendered %d column(s)", len(columns))
        return self._close()
