"""Utilities for handing built statements to external libraries.

SQLAlchemy converter
--------------------
:func:`to_sqlalchemy` turns a :class:`~sqlchain.statement.Statement` (or a
:class:`~sqlchain.schema.rendered.RenderedSQL`) into a SQLAlchemy
:class:`~sqlalchemy.sql.expression.TextClause` with named bind parameters.

Install the optional dependency before using this module::

    pip install "sqlchain[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from sqlchain.converters import to_sqlalchemy

    engine = create_engine("sqlite:///mydb.db")
    with engine.connect() as conn:
        rows = conn.execute(to_sqlalchemy(stmt)).all()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlchain.build.buffer import PLACEHOLDER
from sqlchain.schema.rendered import RenderedSQL

if TYPE_CHECKING:
    from sqlalchemy import TextClause

    from sqlchain.statement import Statement


def to_named(rendered: RenderedSQL, prefix: str = "param_") -> tuple[str, dict]:
    """Rewrite positional ``?`` placeholders as ``:param_N`` names.

    Colons already present in the text are backslash-escaped so SQLAlchemy
    does not read them as bind parameters.

    Args:
        rendered: A finished statement.
        prefix: Prefix for generated parameter names.

    Returns:
        ``(sql, params)`` where ``params`` maps each generated name to its
        value.
    """
    pieces = rendered.sql.replace(":", "\\:").split(PLACEHOLDER)
    names = [f"{prefix}{i}" for i in range(len(pieces) - 1)]
    sql = pieces[0] + "".join(f":{name}{piece}" for name, piece in zip(names, pieces[1:]))
    return sql, dict(zip(names, rendered.params))


def to_sqlalchemy(statement: Statement | RenderedSQL) -> TextClause:
    """Build a SQLAlchemy ``text()`` construct with bound values attached.

    Args:
        statement: A statement, or the result of ``Statement.build()``.

    Returns:
        A :class:`~sqlalchemy.sql.expression.TextClause` ready for
        ``Connection.execute``.
    """
    from sqlalchemy import text

    rendered = statement if isinstance(statement, RenderedSQL) else statement.build()
    sql, params = to_named(rendered)
    clause = text(sql)
    return clause.bindparams(**params) if params else clause
