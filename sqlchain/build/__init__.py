"""sqlchain builder layer: statement buffer and clause sub-builders."""
from sqlchain.build.buffer import Checkpoint, SqlBuffer, collapse_whitespace, is_blank
from sqlchain.build.clause_builders import (
    DeleteClause,
    InsertClause,
    SelectClause,
    UpdateClause,
)
from sqlchain.build.predicate_builder import PredicateClause

__all__ = [
    "Checkpoint",
    "SqlBuffer",
    "collapse_whitespace",
    "is_blank",
    "DeleteClause",
    "InsertClause",
    "PredicateClause",
    "SelectClause",
    "UpdateClause",
]
