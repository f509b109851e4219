"""SQL Toolkit: implementation-agnostic splitting, parsing, normalisation and rendering.

Usage::

    from sql_fingerprint.sql_toolkit import Dialect, SavepointNamer, get_sql_toolkit

    tk = get_sql_toolkit()
    namer = SavepointNamer()
    for sql in tk.splitter.split("SELECT 1; SELECT 2", Dialect.POSTGRES):
        statement = tk.parser.parse_statement(sql, Dialect.POSTGRES)
        print(tk.renderer.render(tk.normalizer.normalize(statement, namer)))

The default implementation delegates to SQLGlot.  A different backend can be
swapped in via ``register_implementation()`` without touching consumer code.
"""

from ._factory import get_sql_toolkit, register_implementation, reset_toolkit
from ._protocols import (
    SqlNormalizer,
    SqlParser,
    SqlRenderer,
    SqlSplitter,
    SqlToolkit,
)
from ._savepoints import SavepointNamer
from ._types import (
    PLACEHOLDER,
    Dialect,
    ParsedStatement,
    SqlNormalizationError,
    SqlParseError,
    SqlRenderError,
    SqlToolkitError,
    StatementKind,
)

__all__ = [
    # Factory
    "get_sql_toolkit",
    "register_implementation",
    "reset_toolkit",
    # Protocols
    "SqlToolkit",
    "SqlSplitter",
    "SqlParser",
    "SqlNormalizer",
    "SqlRenderer",
    # Types
    "PLACEHOLDER",
    "Dialect",
    "StatementKind",
    "ParsedStatement",
    "SavepointNamer",
    # Exceptions
    "SqlToolkitError",
    "SqlParseError",
    "SqlNormalizationError",
    "SqlRenderError",
]
