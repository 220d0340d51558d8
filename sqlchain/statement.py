"""The root builder: ``Statement``.

A ``Statement`` owns the text buffer and the ordered parameter list.  Clause
objects returned by :meth:`Statement.select`, :meth:`Statement.update`,
:meth:`Statement.delete` and :meth:`Statement.insert` write into it and hand
it back from their ``end()`` methods::

    stmt = (
        Statement()
        .select("id", "name").from_("users")
        .where().eq("status", "active").and_().in_("role", "admin", "owner")
        .end()
        .append("order by id")
    )
    cursor.execute(stmt.render(), stmt.parameters())
"""
from __future__ import annotations

import logging
from typing import Any

from sqlchain.build.base import write_statement
from sqlchain.build.buffer import SqlBuffer
from sqlchain.build.clause_builders import (
    DeleteClause,
    InsertClause,
    SelectClause,
    UpdateClause,
)
from sqlchain.errors import PlaceholderMismatchError
from sqlchain.schema.options import BuilderOptions
from sqlchain.schema.rendered import RenderedSQL

logger = logging.getLogger(__name__)


class Statement:
    """Accumulates parameterized SQL text.

    Args:
        options: Consistency-check configuration; defaults to
            ``BuilderOptions()``.
    """

    def __init__(self, options: BuilderOptions | None = None) -> None:
        self._options = options or BuilderOptions()
        self._buffer = SqlBuffer()

    @property
    def options(self) -> BuilderOptions:
        return self._options

    @property
    def buffer(self) -> SqlBuffer:
        """The owned buffer; clause objects write through this handle."""
        return self._buffer

    # ------------------------------------------------------------------
    # Clause entry points
    # ------------------------------------------------------------------

    def select(self, *columns: str) -> SelectClause:
        return SelectClause(self, *columns)

    def update(self, table: str) -> UpdateClause:
        return UpdateClause(self, table)

    def delete(self, table: str) -> DeleteClause:
        return DeleteClause(self, table)

    def insert(self, table: str) -> InsertClause:
        return InsertClause(self, table)

    # ------------------------------------------------------------------
    # Raw composition
    # ------------------------------------------------------------------

    def append(self, text: str, *params: Any) -> Statement:
        """Append ``text`` padded with spaces and bind ``params`` in order."""
        self._buffer.write(f" {text} ", params)
        return self

    def append_statement(self, other: Statement, parenthesize: bool = False) -> Statement:
        """Embed ``other``'s text; its parameters follow the existing ones."""
        write_statement(self._buffer, other, parenthesize)
        return self

    def alias(self, name: str) -> Statement:
        """Wrap everything so far as ``(<text>) as <name>``."""
        self._buffer.wrap("(", f") as {name} ")
        return self

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Return the SQL text, trimmed and with whitespace runs collapsed.

        Raises:
            PlaceholderMismatchError: If placeholder and parameter counts
                differ and ``options.check_placeholders`` is set.
        """
        self._check()
        return self._buffer.render()

    def parameters(self) -> list[Any]:
        """Return a copy of the bound values in placeholder order."""
        self._check()
        return list(self._buffer.params)

    sql = render
    params = parameters

    def build(self) -> RenderedSQL:
        rendered = RenderedSQL(sql=self.render(), params=self.parameters())
        logger.debug("Built statement: %s (%d params)", rendered.sql, len(rendered.params))
        return rendered

    def _check(self) -> None:
        if not self._options.check_placeholders:
            return
        placeholders = self._buffer.placeholder_count()
        if placeholders != len(self._buffer.params):
            raise PlaceholderMismatchError(
                placeholders, len(self._buffer.params), self._buffer.render()
            )

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Statement({self._buffer.render()!r}, params={self._buffer.params!r})"
