"""Structural fingerprints of SQL statements.

A fingerprint is a statement with every value-bearing clause (projection,
predicates, literals, grouping, limits, ...) replaced by ``...`` and its
whitespace collapsed.  Queries that differ only in those values share a
fingerprint, which makes it a stable key for grouping statements in logs.

Example::

    >>> fingerprint_one("SELECT name, age FROM cheeses WHERE origin = 'France'")
    'SELECT ... FROM cheeses WHERE ...'

Both entry points accept any text and never raise for it: a statement that
cannot be parsed gets a whitespace-normalised copy of itself instead.
"""

from __future__ import annotations

import logging

from sql_fingerprint.config import get_settings
from sql_fingerprint.sql_toolkit import (
    Dialect,
    SavepointNamer,
    SqlToolkit,
    SqlToolkitError,
    get_sql_toolkit,
)

logger = logging.getLogger(__name__)

#: Separator used by :func:`fingerprint_one` for multi-statement input.
STATEMENT_SEPARATOR = "; "


def resolve_dialect(dialect: Dialect | str | None) -> Dialect:
    """Turn the ``dialect`` argument of the public functions into a :class:`Dialect`.

    ``None`` means the configured default, read once per process.

    Raises:
        ValueError: If *dialect* is a string that names no supported dialect.
    """
    if dialect is None:
        return get_settings().default_dialect
    if isinstance(dialect, Dialect):
        return dialect
    return Dialect(dialect.strip().lower())


def fallback_fingerprint(sql: str) -> str:
    """Best-effort fingerprint for text that did not parse: whitespace collapsed, trimmed."""
    return " ".join(sql.split())


def fingerprint_many(text: str, dialect: Dialect | str | None = None) -> list[str]:
    """Fingerprint every statement in *text*, in input order.

    Statements are independent of each other except for savepoint names,
    which are numbered across the whole call.  Blank input yields ``[]``.
    """
    resolved = resolve_dialect(dialect)
    toolkit = get_sql_toolkit()
    namer = SavepointNamer()
    return [
        _fingerprint_statement(toolkit, statement, resolved, namer)
        for statement in toolkit.splitter.split(text, resolved)
    ]


def fingerprint_one(text: str, dialect: Dialect | str | None = None) -> str:
    """Fingerprint *text* as a single string.

    Multi-statement input is fingerprinted as by :func:`fingerprint_many`
    and joined with ``"; "``.  Blank input yields ``""``.
    """
    return STATEMENT_SEPARATOR.join(fingerprint_many(text, dialect))


def _fingerprint_statement(
    toolkit: SqlToolkit,
    sql: str,
    dialect: Dialect,
    namer: SavepointNamer,
) -> str:
    try:
        parsed = toolkit.parser.parse_statement(sql, dialect)
        normalized = toolkit.normalizer.normalize(parsed, namer)
        return toolkit.renderer.render(normalized)
    except SqlToolkitError as exc:
        logger.debug("Using fallback fingerprint for %s statement: %s", dialect.value, exc)
        return fallback_fingerprint(sql)
