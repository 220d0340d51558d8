"""Pydantic model for a finished statement."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RenderedSQL(BaseModel):
    """The output of :meth:`Statement.build`.

    Attributes:
        sql: Whitespace-collapsed SQL text with ``?`` positional placeholders.
        params: Bound values, aligned 1:1 and left-to-right with the
            placeholders in ``sql``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    sql: str
    params: list[Any] = Field(default_factory=list)

    @property
    def placeholder_count(self) -> int:
        """Number of ``?`` characters in :attr:`sql`."""
        return self.sql.count("?")

    def as_tuple(self) -> tuple[str, list[Any]]:
        """Return ``(sql, params)`` ready for DB-API execution::

            cursor.execute(*rendered.as_tuple())
        """
        return self.sql, list(self.params)
