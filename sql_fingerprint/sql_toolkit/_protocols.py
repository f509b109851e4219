"""SQL toolkit protocol definitions.

These define the interface contract that ANY implementation must satisfy.
Consumer code depends on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ._savepoints import SavepointNamer
from ._types import Dialect, ParsedStatement

# ---------------------------------------------------------------------------
# Individual Capability Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class SqlSplitter(Protocol):
    """Split raw SQL text into single statements."""

    def split(
        self,
        sql: str,
        dialect: Dialect = Dialect.GENERIC,
    ) -> list[str]:
        """Split *sql* on statement separators.

        Separators inside string literals, quoted identifiers and comments
        are ignored.  Returned statements are trimmed and non-empty; blank
        input yields an empty list.  Never raises: text the lexer cannot
        tokenize comes back whole as a single statement.
        """
        ...


@runtime_checkable
class SqlParser(Protocol):
    """Parse one SQL statement into a tree."""

    def parse_statement(
        self,
        sql: str,
        dialect: Dialect = Dialect.GENERIC,
    ) -> ParsedStatement:
        """Parse exactly one statement.

        Raises:
            SqlParseError: If *sql* is not a single valid statement in
                *dialect*.
        """
        ...


@runtime_checkable
class SqlNormalizer(Protocol):
    """Replace value-bearing clauses of a statement with placeholders."""

    def normalize(
        self,
        statement: ParsedStatement,
        namer: SavepointNamer,
    ) -> ParsedStatement:
        """Return a normalised copy of *statement*; the input is left untouched.

        Savepoint identifiers are renamed through *namer*, which the caller
        owns for the duration of one fingerprinting call.
        """
        ...


@runtime_checkable
class SqlRenderer(Protocol):
    """Render statement trees back to SQL strings."""

    def render(self, statement: ParsedStatement) -> str:
        """Render *statement* as single-line SQL with upper-case keywords.

        Raises:
            SqlRenderError: If the tree cannot be rendered.
        """
        ...


# ---------------------------------------------------------------------------
# Composite Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class SqlToolkit(Protocol):
    """Composite protocol: a complete SQL toolkit implementation.

    This is what consumer code receives from the factory.
    """

    @property
    def splitter(self) -> SqlSplitter:
        ...

    @property
    def parser(self) -> SqlParser:
        ...

    @property
    def normalizer(self) -> SqlNormalizer:
        ...

    @property
    def renderer(self) -> SqlRenderer:
        ...
