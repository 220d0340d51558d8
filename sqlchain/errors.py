"""Custom exception hierarchy for sqlchain.

All public errors inherit from SqlChainError so callers can catch the base
class for any sqlchain-specific failure.

Inputs that simply contribute nothing (empty mappings, ``None`` LIKE values,
empty IN lists) are never errors; the builder retracts them silently.
"""
from __future__ import annotations


class SqlChainError(Exception):
    """Base exception for all sqlchain errors."""


class PlaceholderMismatchError(SqlChainError):
    """Raised when rendered text and the parameter list disagree.

    Every ``?`` written into a statement must line up with exactly one bound
    value.  A mismatch almost always means a raw ``append`` call was given
    the wrong number of parameters.

    Args:
        placeholders: Number of ``?`` characters found in the rendered text.
        param_count: Number of collected parameters.
        sql: The rendered text that failed the check.
    """

    def __init__(self, placeholders: int, param_count: int, sql: str) -> None:
        super().__init__(
            f"Statement has {placeholders} placeholder(s) but {param_count} "
            f"parameter(s): {sql!r}"
        )
        self.placeholders = placeholders
        self.param_count = param_count
        self.sql = sql


class ClauseClosedError(SqlChainError):
    """Raised when a clause object is used after it handed control back.

    A clause is closed by its ``end()`` call, or when it opens a WHERE clause
    that now owns the rest of the statement.

    Args:
        clause: Name of the clause type (e.g. ``'PredicateClause'``).
        operation: The method that was called on the closed clause.
    """

    def __init__(self, clause: str, operation: str | None = None) -> None:
        detail = f" (called {operation}())" if operation else ""
        super().__init__(
            f"{clause} is closed and can no longer be modified{detail}."
        )
        self.clause = clause
        self.operation = operation
