"""Text and parameter accumulator shared by a statement and its clauses.

``SqlBuffer`` is the only mutable state in the builder.  A
:class:`~sqlchain.statement.Statement` owns one; a
:class:`~sqlchain.build.predicate_builder.PredicateClause` owns a private one
that is merged into the statement when the clause ends.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, NamedTuple

PLACEHOLDER = "?"

_WHITESPACE_RE = re.compile(r"\s+")


def is_blank(text: str | None) -> bool:
    """Return ``True`` for ``None``, the empty string, or whitespace only."""
    return text is None or not text.strip()


def collapse_whitespace(text: str) -> str:
    """Strip ``text`` and collapse every whitespace run to a single space."""
    return _WHITESPACE_RE.sub(" ", text.strip())


class Checkpoint(NamedTuple):
    """Buffer position captured by :meth:`SqlBuffer.checkpoint`."""

    text_length: int
    param_count: int


@dataclass
class SqlBuffer:
    """Accumulates raw SQL text and its positional parameters.

    Text is stored unrendered; :meth:`render` produces the collapsed form.
    """

    text: str = ""
    params: list[Any] = field(default_factory=list)

    def write(self, text: str, params: Iterable[Any] = ()) -> None:
        """Append ``text`` verbatim and extend the parameter list."""
        self.text += text
        self.params.extend(params)

    def wrap(self, prefix: str, suffix: str) -> None:
        """Surround the collapsed text with ``prefix`` and ``suffix``."""
        self.text = f"{prefix}{collapse_whitespace(self.text)}{suffix}"

    def trim_end(self) -> None:
        """Drop trailing whitespace from the accumulated text."""
        self.text = self.text.rstrip()

    def checkpoint(self) -> Checkpoint:
        return Checkpoint(len(self.text), len(self.params))

    def rollback(self, checkpoint: Checkpoint) -> None:
        """Truncate text and parameters back to ``checkpoint``."""
        self.text = self.text[: checkpoint.text_length]
        del self.params[checkpoint.param_count :]

    def render(self) -> str:
        return collapse_whitespace(self.text)

    def placeholder_count(self) -> int:
        return self.text.count(PLACEHOLDER)

    def is_blank(self) -> bool:
        return is_blank(self.text)
