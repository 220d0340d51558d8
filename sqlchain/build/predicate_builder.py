"""WHERE clause builder.

``PredicateClause`` renders predicate fragments into a private
:class:`~sqlchain.build.buffer.SqlBuffer` and merges them into the owning
statement only when :meth:`PredicateClause.end` finds something to merge.

Conditional composition
-----------------------
Every helper degrades to "no contribution" for empty input (an empty
mapping, a ``None`` LIKE value, an empty IN list, a blank sub-query) so that
a WHERE clause can be assembled straight from optional filter criteria::

    stmt = (
        Statement()
        .select("*").from_("users")
        .where()
        .eq("tenant_id", tenant)
        .and_().like("name", filters.get("name"))
        .and_().eq(filters.get("exact", {}))
        .end()
    )

When ``and_()`` / ``or_()`` writes a connector it records a checkpoint of
the buffer first.  A helper that ends up contributing nothing rolls the
buffer back to that checkpoint, which removes the dangling connector and
nothing else.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from sqlchain.build.base import ClauseBase, CommonClauseOps, requires_open
from sqlchain.build.buffer import PLACEHOLDER, Checkpoint, SqlBuffer, is_blank

if TYPE_CHECKING:
    from sqlchain.statement import Statement

logger = logging.getLogger(__name__)

AND = " and "
OR = " or "


def _column(key: str, table: str | None) -> str:
    return f"{table}.{key}" if table else key


def _is_range(value: Any) -> bool:
    return (
        isinstance(value, Sequence)
        and not isinstance(value, (str, bytes, bytearray))
        and len(value) >= 2
    )


class PredicateClause(CommonClauseOps, ClauseBase):
    """Builds the ``WHERE …`` clause of a statement.

    Obtained from ``select(...).where()``, ``update(...).where()`` or
    ``delete(...).where()``; never instantiated directly in application
    code.

    Args:
        statement: The statement the finished predicate is merged into.
    """

    def __init__(self, statement: Statement) -> None:
        super().__init__(statement)
        self._buffer = SqlBuffer()
        self._emitted = 0
        self._pending: Checkpoint | None = None

    @property
    def emitted_count(self) -> int:
        """Number of completed predicate fragments (connectors excluded)."""
        return self._emitted

    def render(self) -> str:
        """Return the locally buffered predicate text, without ``where``."""
        return self._buffer.render()

    def parameters(self) -> list[Any]:
        return list(self._buffer.params)

    # ------------------------------------------------------------------
    # Connectors and retraction
    # ------------------------------------------------------------------

    @requires_open
    def and_(self) -> PredicateClause:
        """Append ``and`` unless no predicate has been emitted yet."""
        self._connect(AND)
        return self

    @requires_open
    def or_(self) -> PredicateClause:
        """Append ``or`` unless no predicate has been emitted yet."""
        self._connect(OR)
        return self

    def _connect(self, connector: str) -> None:
        if self._emitted == 0:
            return
        # A second connector in a row replaces the first.
        if self._pending is not None:
            self._buffer.rollback(self._pending)
        else:
            self._pending = self._buffer.checkpoint()
        self._buffer.write(connector)

    def _retract(self, reason: str) -> PredicateClause:
        if self._pending is not None:
            logger.debug("Retracting connector: %s", reason)
            self._buffer.rollback(self._pending)
            self._pending = None
        return self

    def _fragment(self, text: str, params: Sequence[Any] = ()) -> None:
        self._buffer.write(text, params)
        self._emitted += 1
        self._pending = None

    def _raw_write(self, text: str, params: tuple[Any, ...] | list[Any] = ()) -> None:
        self._buffer.write(text, params)
        self._pending = None

    def _raw_fragment(self, text: str, params: tuple[Any, ...] | list[Any] = ()) -> None:
        if is_blank(text):
            self._raw_write(text, params)
        else:
            self._fragment(text, params)

    def _group(self, fragments: list[tuple[str, list[Any]]], use_or: bool) -> None:
        """Write ``fragments`` as one parenthesized group."""
        joiner = OR if use_or else AND
        text = joiner.join(fragment.strip() for fragment, _ in fragments)
        params = [p for _, fragment_params in fragments for p in fragment_params]
        self._fragment(f" ({text}) ", params)
        self._emitted += len(fragments) - 1

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    @requires_open
    def eq(
        self,
        key: str | Mapping[str, Any],
        value: Any = None,
        operator: str = "=",
        *,
        use_or: bool = False,
        table: str | None = None,
    ) -> PredicateClause:
        """Compare a column against a bound value.

        ``eq("age", 30, ">=")`` renders ``age>=?``.  Passing a mapping
        instead of a key renders one comparison per entry, joined by ``and``
        (or ``or`` when ``use_or`` is set) inside parentheses; an empty
        mapping contributes nothing.  For the mapping form the second
        positional argument is the operator: ``eq({"age": 18}, ">=")``.

        Args:
            key: Column name, or a mapping of column name to value.
            value: Bound value, or the operator for the mapping form.
            operator: Comparison operator written between column and ``?``.
            use_or: Join mapping entries with ``or`` instead of ``and``.
            table: Optional table qualifier prepended as ``table.key``.
        """
        if isinstance(key, Mapping):
            if value is not None:
                if not isinstance(value, str) or operator != "=":
                    raise TypeError(
                        "eq(mapping, operator) takes the operator as its second "
                        f"argument, got {value!r}"
                    )
                operator = value
            if not key:
                return self._retract("empty eq mapping")
            self._group(
                [(self._eq_text(k, operator, table), [v]) for k, v in key.items()],
                use_or,
            )
            return self
        self._fragment(self._eq_text(key, operator, table), [value])
        return self

    @staticmethod
    def _eq_text(key: str, operator: str, table: str | None) -> str:
        return f"{_column(key, table)}{operator}{PLACEHOLDER} "

    # ------------------------------------------------------------------
    # Substring match
    # ------------------------------------------------------------------

    @requires_open
    def like(
        self,
        key: str | Mapping[str, Any],
        value: Any = None,
        *,
        use_or: bool = False,
        table: str | None = None,
    ) -> PredicateClause:
        """Match ``value`` anywhere inside the column.

        Renders ``key like concat('%', ?, '%')``.  A ``None`` value
        contributes nothing.  The mapping form skips ``None`` entries and
        contributes nothing when no entry is left.
        """
        if isinstance(key, Mapping):
            if value is not None:
                raise TypeError("like(mapping) takes no separate value")
            entries = [(k, v) for k, v in key.items() if v is not None]
            if not entries:
                return self._retract("no like values")
            self._group([(self._like_text(k, table), [v]) for k, v in entries], use_or)
            return self
        if value is None:
            return self._retract(f"like value for {key!r} is None")
        self._fragment(self._like_text(key, table), [value])
        return self

    @staticmethod
    def _like_text(key: str, table: str | None) -> str:
        return f"{_column(key, table)} like concat('%', {PLACEHOLDER}, '%') "

    # ------------------------------------------------------------------
    # Range
    # ------------------------------------------------------------------

    @requires_open
    def between(
        self,
        key: str | Mapping[str, Any],
        *bounds: Any,
        use_or: bool = False,
        table: str | None = None,
    ) -> PredicateClause:
        """Restrict a column to an inclusive range.

        ``between("age", 18, 65)`` renders ``age between ? and ?``.  Fewer
        than two bounds contribute nothing; extra bounds are ignored.

        The mapping form expects each value to be a sequence of at least two
        bounds.  Entries whose value is not such a sequence are skipped.
        """
        if isinstance(key, Mapping):
            if bounds:
                raise TypeError("between(mapping) takes no separate bounds")
            entries = []
            for k, v in key.items():
                if _is_range(v):
                    entries.append((k, v))
                else:
                    logger.debug("Skipping between entry %r: not a range", k)
            if not entries:
                return self._retract("no between ranges")
            self._group(
                [(self._between_text(k, table), [v[0], v[1]]) for k, v in entries],
                use_or,
            )
            return self
        if len(bounds) < 2:
            return self._retract(f"between {key!r} needs two bounds")
        self._fragment(self._between_text(key, table), bounds[:2])
        return self

    @staticmethod
    def _between_text(key: str, table: str | None) -> str:
        return f"{_column(key, table)} between {PLACEHOLDER} and {PLACEHOLDER} "

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    @requires_open
    def in_(self, key: str, *values: Any, table: str | None = None) -> PredicateClause:
        """Test membership in a value list or a sub-query.

        ``in_("id", 1, 2, 3)`` renders ``(id in (?,?,?))``.  Passing a
        single :class:`~sqlchain.statement.Statement` embeds its rendered
        text as the list and appends its parameters.  No values, or a blank
        sub-query, contribute nothing.
        """
        from sqlchain.statement import Statement

        column = _column(key, table)
        if len(values) == 1 and (values[0] is None or isinstance(values[0], Statement)):
            sub = values[0]
            sub_sql = sub.render() if sub is not None else None
            if is_blank(sub_sql):
                return self._retract(f"blank sub-query for {key!r}")
            self._fragment(f" ({column} in ({sub_sql})) ", sub.parameters())
            return self
        if not values:
            return self._retract(f"no values for {key!r}")
        marks = ",".join(PLACEHOLDER for _ in values)
        self._fragment(f" ({column} in ({marks})) ", values)
        return self

    @requires_open
    def in_raw(self, key: str, sql: str | None, *, table: str | None = None) -> PredicateClause:
        """Use literal SQL text as the IN list; no parameters are bound."""
        if is_blank(sql):
            return self._retract(f"blank IN text for {key!r}")
        self._fragment(f" ({_column(key, table)} in ({sql})) ")
        return self

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    @requires_open
    def end(self) -> Statement:
        """Merge ``where <predicate>`` into the statement and return it.

        A connector with no predicate after it is dropped.  A clause that
        rendered nothing leaves the statement untouched.
        """
        self._retract("trailing connector")
        text = self._buffer.render()
        if text:
            self._statement.append(f"where {text}", *self._buffer.params)
        else:
            logger.debug("Empty WHERE clause; nothing merged")
        return self._close()
