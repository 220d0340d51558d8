"""Shared clause plumbing.

``ClauseBase``
    Holds the explicit handle to the owning
    :class:`~sqlchain.statement.Statement` and tracks whether the clause has
    handed control back.  Every public chain method is wrapped with
    :func:`requires_open`.

``CommonClauseOps``
    Raw escape hatches (``append``, ``append_statement``, ``lb``, ``rb``)
    for the UPDATE, DELETE, INSERT and WHERE clauses.
"""
from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from sqlchain.build.buffer import SqlBuffer
from sqlchain.errors import ClauseClosedError

if TYPE_CHECKING:
    from sqlchain.statement import Statement

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def requires_open(method: F) -> F:
    """Reject calls on a clause that has already been closed."""

    @functools.wraps(method)
    def wrapper(self: ClauseBase, *args: Any, **kwargs: Any) -> Any:
        self._ensure_open(method.__name__)
        return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def write_statement(buffer: SqlBuffer, other: Statement, parenthesize: bool) -> None:
    """Embed ``other``'s rendered text and parameters into ``buffer``."""
    sql = other.render()
    text = f" ({sql}) " if parenthesize else f" {sql} "
    buffer.write(text, other.parameters())


class ClauseBase:
    """Base for every clause object spawned by a statement.

    Args:
        statement: The statement this clause writes into and returns to.
    """

    def __init__(self, statement: Statement) -> None:
        self._statement = statement
        self._buffer: SqlBuffer = statement.buffer
        self._closed = False

    @property
    def statement(self) -> Statement:
        return self._statement

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self, operation: str) -> None:
        if not self._closed:
            return
        name = type(self).__name__
        if self._statement.options.strict:
            raise ClauseClosedError(name, operation)
        logger.warning("%s used after it was closed (called %s())", name, operation)

    def _close(self) -> Statement:
        self._closed = True
        return self._statement


class CommonClauseOps:
    """Raw text helpers mixed into clause classes.

    Writes go through :meth:`_raw_write` so a clause can redirect them (the
    WHERE clause writes into its private buffer).  ``append`` and
    ``append_statement`` use :meth:`_raw_fragment`, which the WHERE clause
    counts as a completed predicate.
    """

    _buffer: SqlBuffer

    def _raw_write(self, text: str, params: tuple[Any, ...] | list[Any] = ()) -> None:
        self._buffer.write(text, params)

    def _raw_fragment(self, text: str, params: tuple[Any, ...] | list[Any] = ()) -> None:
        self._raw_write(text, params)

    @requires_open
    def append(self, text: str, *params: Any):
        """Append ``text`` padded with spaces, plus its bound ``params``."""
        self._raw_fragment(f" {text} ", params)
        return self

    @requires_open
    def append_statement(self, other: Statement, parenthesize: bool = False):
        """Embed another statement's text and parameters."""
        scratch = SqlBuffer()
        write_statement(scratch, other, parenthesize)
        self._raw_fragment(scratch.text, scratch.params)
        return self

    @requires_open
    def lb(self):
        """Open a literal parenthesis."""
        self._raw_write(" ( ")
        return self

    @requires_open
    def rb(self):
        """Close a literal parenthesis."""
        self._raw_write(" ) ")
        return self
