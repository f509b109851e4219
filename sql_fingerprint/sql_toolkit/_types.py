"""SQL toolkit shared types.

Every type here is implementation-agnostic. Consumer code operates on these
types exclusively. The backing implementation (SQLGlot today) converts
to/from its native types internally.

ZERO dependency on any SQL parsing library.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Text emitted wherever a clause has been cleared.
PLACEHOLDER = "..."

# ---------------------------------------------------------------------------
# Dialect
# ---------------------------------------------------------------------------


class Dialect(str, enum.Enum):
    """Supported SQL dialects."""

    GENERIC = "generic"
    MYSQL = "mysql"
    POSTGRES = "postgres"
    CLICKHOUSE = "clickhouse"
    SQLITE = "sqlite"
    DUCKDB = "duckdb"
    BIGQUERY = "bigquery"


# ---------------------------------------------------------------------------
# Statement Types
# ---------------------------------------------------------------------------


class StatementKind(str, enum.Enum):
    """Top-level statement variants the normaliser has clearing rules for.

    Everything else is ``OTHER`` and is passed through with only the
    statement-independent rules (identifier unquoting, savepoint naming).
    """

    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    SET_OPERATION = "set_operation"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class ParsedStatement:
    """One parsed SQL statement.

    ``raw`` holds the implementation-specific tree (e.g.
    ``sqlglot.exp.Expression``).  It is excluded from ``__eq__`` /
    ``__hash__`` so two statements compare equal when kind, source text and
    dialect match.
    """

    kind: StatementKind
    sql: str
    dialect: Dialect
    raw: Any = field(default=None, repr=False, compare=False, hash=False)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SqlToolkitError(Exception):
    """Base exception for all sql_toolkit errors."""


class SqlParseError(SqlToolkitError):
    """SQL could not be parsed."""

    def __init__(self, sql: str, reason: str) -> None:
        self.sql = sql
        self.reason = reason
        super().__init__(f"Failed to parse SQL: {reason}")


class SqlRenderError(SqlToolkitError):
    """A statement tree could not be rendered back to SQL."""


class SqlNormalizationError(SqlToolkitError):
    """A parsed statement could not be normalised."""
