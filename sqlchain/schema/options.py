"""Pydantic model for per-statement builder configuration.

Options are attached to a :class:`~sqlchain.statement.Statement` when it is
created and shared with every clause object it spawns::

    from sqlchain import BuilderOptions, Statement

    stmt = Statement(options=BuilderOptions(check_placeholders=False))

Nested statements (sub-queries, embedded fragments) carry their own options;
they are not inherited from the statement they are embedded into.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BuilderOptions(BaseModel):
    """Controls the consistency checks a statement performs.

    Attributes:
        check_placeholders: Compare the ``?`` count in the rendered text with
            the number of collected parameters whenever the statement is
            observed (``render()``, ``parameters()``, ``build()``) and raise
            :class:`~sqlchain.errors.PlaceholderMismatchError` on a mismatch.
            Disable when raw SQL legitimately contains ``?`` characters, e.g.
            inside string literals.
        strict: Raise :class:`~sqlchain.errors.ClauseClosedError` when a
            clause object is used after it handed control back.  When
            ``False`` a warning is logged and the call proceeds.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    check_placeholders: bool = True
    strict: bool = True
