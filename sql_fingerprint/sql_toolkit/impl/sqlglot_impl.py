"""SQLGlot-backed implementation of the SQL toolkit protocols.

This is the ONLY file in the package that imports ``sqlglot`` directly.
All consumer code goes through the protocol interfaces defined in
:mod:`sql_fingerprint.sql_toolkit._protocols`.

Every supported :class:`Dialect` is backed by the matching SQLGlot dialect
plus tokenizer, parser and generator subclasses:

* the placeholder ``...`` is lexed as a single token, so a fingerprint can
  be parsed (and fingerprinted) again;
* ``SAVEPOINT``, ``RELEASE`` and ``DECLARE`` open raw commands, so
  savepoint and cursor statements parse in every dialect;
* explicit ``UNION DISTINCT``, bare ``JOIN`` and ``ROLLBACK TO SAVEPOINT``
  keep their spelling, and ``ON CONFLICT ... DO UPDATE ... WHERE`` parses.

Supports SQLGlot v25.x.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from sqlglot import exp
from sqlglot.dialects.dialect import Dialect as SqlglotDialect
from sqlglot.errors import SqlglotError
from sqlglot.tokens import Token, TokenType

from .._savepoints import SavepointNamer
from .._types import (
    PLACEHOLDER,
    Dialect,
    ParsedStatement,
    SqlNormalizationError,
    SqlParseError,
    SqlRenderError,
    StatementKind,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Internal: dialects
# ---------------------------------------------------------------------------

_SQLGLOT_DIALECT_NAMES: dict[Dialect, str] = {
    Dialect.GENERIC: "",
    Dialect.MYSQL: "mysql",
    Dialect.POSTGRES: "postgres",
    Dialect.CLICKHOUSE: "clickhouse",
    Dialect.SQLITE: "sqlite",
    Dialect.DUCKDB: "duckdb",
    Dialect.BIGQUERY: "bigquery",
}

# Tokens added on top of every dialect's keyword table.
_FINGERPRINT_KEYWORDS: dict[str, TokenType] = {
    PLACEHOLDER: TokenType.VAR,
    "SAVEPOINT": TokenType.COMMAND,
    "RELEASE": TokenType.COMMAND,
    "DECLARE": TokenType.COMMAND,
}

# SetOperation is the common base of Union/Intersect/Except in recent
# releases; older ones derive Intersect and Except from Union.
_SET_OPERATION: type[exp.Expression] = getattr(exp, "SetOperation", exp.Union)

_MODIFIER_KEYS: frozenset[str] = frozenset({"with", *exp.QUERY_MODIFIERS})

# A parenthesised query carrying one of these must keep its parentheses.
_TRAILING_KEYS: tuple[str, ...] = ("with", "order", "limit", "offset")

_SAFE_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_]+")
_WHITESPACE_RE = re.compile(r"\s+")
_RELEASE_RE = re.compile(r"(?P<keyword>SAVEPOINT\s+)?(?P<name>.+)", re.IGNORECASE | re.DOTALL)
_DECLARE_RE = re.compile(r"(?P<name>\S+)(?P<rest>.*)", re.DOTALL)
_CURSOR_QUERY_RE = re.compile(
    r"(?P<head>.*?\bFOR\s+)(?P<query>(?:SELECT|WITH|VALUES|\().*)",
    re.IGNORECASE | re.DOTALL,
)


# Spellings SQLGlot drops from its tree, recorded as extra node args.
_EXPLICIT_DISTINCT = "fingerprint_explicit_distinct"
_EXPLICIT_JOIN = "fingerprint_explicit_join"

# Older releases cannot parse ``ON CONFLICT ... DO UPDATE SET ... WHERE``.
_NATIVE_CONFLICT_WHERE = "where" in exp.OnConflict.arg_types


class _FingerprintParser:
    """Parser mixin recording source spellings the stock tree does not keep.

    * ``UNION DISTINCT`` (and INTERSECT / EXCEPT) versus a bare operator;
    * ``a JOIN b`` without a condition versus the comma join ``a, b``;
    * the WHERE of an ``ON CONFLICT ... DO UPDATE`` action.
    """

    def reset(self) -> None:
        super().reset()  # type: ignore[misc]
        # One entry per set-operation keyword, popped when its node is built.
        self._set_operation_distinct: list[bool] = []

    def _match_set(self, types: Any, advance: bool = True) -> Any:
        matched = super()._match_set(types, advance)  # type: ignore[misc]
        if matched and advance and TokenType.UNION in types and self._prev.token_type in types:  # type: ignore[attr-defined]
            following = self._curr  # type: ignore[attr-defined]
            self._set_operation_distinct.append(following is not None and following.token_type == TokenType.DISTINCT)
        return matched

    def expression(self, exp_class: Any, *args: Any, **kwargs: Any) -> Any:
        instance = super().expression(exp_class, *args, **kwargs)  # type: ignore[misc]
        if isinstance(instance, _SET_OPERATION) and self._set_operation_distinct:
            if self._set_operation_distinct.pop():
                instance.set(_EXPLICIT_DISTINCT, True)
        return instance

    def _parse_join(self, *args: Any, **kwargs: Any) -> Any:
        start = self._curr  # type: ignore[attr-defined]
        join = super()._parse_join(*args, **kwargs)  # type: ignore[misc]
        if join is not None and start is not None and start.token_type != TokenType.COMMA:
            join.set(_EXPLICIT_JOIN, True)
        return join

    def _parse_on_conflict(self) -> Any:
        conflict = super()._parse_on_conflict()  # type: ignore[misc]
        if conflict is not None and not _NATIVE_CONFLICT_WHERE:
            where = self._parse_where()  # type: ignore[attr-defined]
            if where is not None:
                conflict.set("where", where)
        return conflict


class _FingerprintGenerator:
    """Generator mixin emitting what :class:`_FingerprintParser` recorded."""

    def _explicit_distinct(self, expression: exp.Expression, sql: str) -> str:
        if not expression.args.get(_EXPLICIT_DISTINCT) or "DISTINCT" in sql.split():
            return sql
        keyword, _, rest = sql.partition(" ")
        return " ".join(part for part in (keyword, "DISTINCT", rest) if part)

    # Recent releases render every operator through set_operation(); older
    # ones dispatch to <key>_op().
    def set_operation(self, expression: exp.Expression) -> str:
        return self._explicit_distinct(expression, super().set_operation(expression))  # type: ignore[misc]

    def union_op(self, expression: exp.Expression) -> str:
        return self._explicit_distinct(expression, super().union_op(expression))  # type: ignore[misc]

    def intersect_op(self, expression: exp.Expression) -> str:
        return self._explicit_distinct(expression, super().intersect_op(expression))  # type: ignore[misc]

    def except_op(self, expression: exp.Expression) -> str:
        return self._explicit_distinct(expression, super().except_op(expression))  # type: ignore[misc]

    def join_sql(self, expression: exp.Expression) -> str:
        sql = super().join_sql(expression)  # type: ignore[misc]
        if expression.args.get(_EXPLICIT_JOIN) and sql.startswith(", "):
            return f" JOIN {sql[2:]}"
        return sql

    def rollback_sql(self, expression: exp.Expression) -> str:
        sql = super().rollback_sql(expression)  # type: ignore[misc]
        if expression.args.get("savepoint") is not None and " TO SAVEPOINT " not in sql:
            sql = sql.replace(" TO ", " TO SAVEPOINT ", 1)
        return sql

    def onconflict_sql(self, expression: exp.Expression) -> str:
        sql = super().onconflict_sql(expression)  # type: ignore[misc]
        if _NATIVE_CONFLICT_WHERE:
            return sql
        return f"{sql}{self.sql(expression, 'where')}"  # type: ignore[attr-defined]


class _FingerprintDialect:
    """A SQLGlot dialect paired with fingerprinting tokenizer, parser and generator.

    The derived classes only exist inside this wrapper; SQLGlot's registry
    and its stock dialects are never modified.
    """

    def __init__(self, name: str) -> None:
        self.sqlglot = SqlglotDialect.get_or_raise(name)
        tokenizer_base = self.sqlglot.tokenizer_class

        class Tokenizer(tokenizer_base):  # type: ignore[misc, valid-type]
            KEYWORDS = {**tokenizer_base.KEYWORDS, **_FINGERPRINT_KEYWORDS}

        class Parser(_FingerprintParser, self.sqlglot.parser_class):  # type: ignore[misc, name-defined]
            pass

        class Generator(_FingerprintGenerator, self.sqlglot.generator_class):  # type: ignore[misc, name-defined]
            pass

        self._tokenizer_class = Tokenizer
        self._parser_class = Parser
        self._generator_class = Generator
        self.keywords: frozenset[str] = frozenset(key.upper() for key in Tokenizer.KEYWORDS)

    def tokenize(self, sql: str) -> list[Token]:
        return self._tokenizer_class(dialect=self.sqlglot).tokenize(sql)

    def parse(self, sql: str) -> list[exp.Expression | None]:
        return self._parser_class(dialect=self.sqlglot).parse(self.tokenize(sql), sql)

    def generate(self, tree: exp.Expression) -> str:
        sql = self._generator_class(dialect=self.sqlglot, comments=False).generate(tree)
        return _WHITESPACE_RE.sub(" ", sql).strip()


def _build_dialects() -> dict[Dialect, _FingerprintDialect]:
    return {dialect: _FingerprintDialect(name) for dialect, name in _SQLGLOT_DIALECT_NAMES.items()}


# ---------------------------------------------------------------------------
# Internal: tree helpers
# ---------------------------------------------------------------------------


def _classify_statement(node: exp.Expression) -> StatementKind:
    """Map a SQLGlot root expression to a :class:`StatementKind`."""
    if isinstance(node, exp.Select):
        return StatementKind.SELECT
    if isinstance(node, _SET_OPERATION):
        return StatementKind.SET_OPERATION
    if isinstance(node, exp.Insert):
        return StatementKind.INSERT
    if isinstance(node, exp.Update):
        return StatementKind.UPDATE
    if isinstance(node, exp.Delete):
        return StatementKind.DELETE
    return StatementKind.OTHER


def _marker() -> exp.Expression:
    """Return a fresh clause marker; it renders as the placeholder."""
    return exp.Var(this=PLACEHOLDER)


def _assignment_marker() -> exp.Expression:
    return exp.EQ(this=_marker(), expression=_marker())


def _is_star(node: exp.Expression) -> bool:
    """``*`` or ``t.*``."""
    return isinstance(node, exp.Star) or (isinstance(node, exp.Column) and isinstance(node.this, exp.Star))


def _has_modifiers(node: exp.Expression) -> bool:
    return any(node.args.get(key) for key in _MODIFIER_KEYS)


def _unwrap_parens(node: exp.Expression) -> exp.Expression:
    """Strip bare parentheses around a query.

    A parenthesised query that carries its own alias, WITH, ORDER BY or
    LIMIT is left wrapped.
    """
    while isinstance(node, (exp.Subquery, exp.Paren)):
        inner = node.this
        if not isinstance(inner, (exp.Select, _SET_OPERATION)):
            break
        if any(value for key, value in node.args.items() if key != "this"):
            break
        if any(inner.args.get(key) for key in _TRAILING_KEYS):
            break
        node = inner
    return node


def _clear_where(node: exp.Expression) -> None:
    where = node.args.get("where")
    if isinstance(where, exp.Where):
        where.set("this", _marker())
    elif where is not None:
        node.set("where", _marker())


def _clear_returning(node: exp.Expression) -> None:
    returning = node.args.get("returning")
    if isinstance(returning, exp.Returning) and returning.expressions:
        returning.set("expressions", [_marker()])


def _clear_order(node: exp.Expression) -> None:
    """Keep only the first sort key, with its direction, and erase the key."""
    order = node.args.get("order")
    if not isinstance(order, exp.Order) or not order.expressions:
        return
    first = order.expressions[0]
    if isinstance(first, exp.Ordered):
        first.set("this", _marker())
    else:
        first = _marker()
    order.set("expressions", [first])


def _clear_limits(node: exp.Expression) -> None:
    """Erase LIMIT / OFFSET / FETCH values, including ClickHouse ``LIMIT n BY``."""
    limit = node.args.get("limit")
    if isinstance(limit, exp.Limit):
        if limit.args.get("expression") is not None:
            limit.set("expression", _marker())
        if limit.expressions:
            limit.set("expressions", [_marker()])
    elif isinstance(limit, exp.Fetch):
        if limit.args.get("count") is not None:
            limit.set("count", _marker())

    offset = node.args.get("offset")
    if isinstance(offset, exp.Offset):
        if offset.args.get("expression") is not None:
            offset.set("expression", _marker())
        if offset.expressions:
            offset.set("expressions", [_marker()])


def _maybe_unquote(identifier: exp.Identifier, keywords: frozenset[str]) -> None:
    """Drop quotes from plain names; keywords stay quoted so output parses back."""
    name = identifier.name
    if identifier.args.get("quoted") and _SAFE_IDENTIFIER_RE.fullmatch(name) and name.upper() not in keywords:
        identifier.set("quoted", False)


# ---------------------------------------------------------------------------
# Internal: the fingerprinting visitor
# ---------------------------------------------------------------------------


class _FingerprintingVisitor:
    """Pre-order walk that clears clauses in place.

    Each node is rewritten before its children are queued, so subtrees that
    were replaced by a marker are never visited.  The walk uses an explicit
    stack; deeply nested statements do not hit the recursion limit.
    """

    def __init__(self, namer: SavepointNamer, dialect: _FingerprintDialect) -> None:
        self._namer = namer
        self._dialect = dialect

    def run(self, tree: exp.Expression) -> exp.Expression:
        """Normalise *tree* in place and return its (possibly new) root."""
        root = self._visit(tree)
        stack = list(reversed(list(root.iter_expressions())))
        while stack:
            node = self._visit(stack.pop())
            stack.extend(reversed(list(node.iter_expressions())))
        return root

    def _visit(self, node: exp.Expression) -> exp.Expression:
        if isinstance(node, _SET_OPERATION):
            if not isinstance(node.parent, _SET_OPERATION):
                node = self._flatten_set_operation(node)
            _clear_order(node)
            _clear_limits(node)
        elif isinstance(node, exp.Select):
            self._visit_select(node)
        elif isinstance(node, exp.Insert):
            self._visit_insert(node)
        elif isinstance(node, exp.Update):
            if node.expressions:
                node.set("expressions", [_assignment_marker()])
            _clear_where(node)
            _clear_returning(node)
            _clear_order(node)
            _clear_limits(node)
        elif isinstance(node, exp.Delete):
            _clear_where(node)
            _clear_returning(node)
            _clear_order(node)
            _clear_limits(node)
        elif isinstance(node, exp.Join):
            self._visit_join(node)
        elif isinstance(node, exp.Unnest):
            self._visit_unnest(node)
        elif isinstance(node, exp.Rollback):
            savepoint = node.args.get("savepoint")
            if savepoint is not None:
                node.set("savepoint", exp.to_identifier(self._namer.name_for(savepoint.name)))
        elif isinstance(node, exp.Command):
            self._visit_command(node)
        elif isinstance(node, exp.Identifier):
            _maybe_unquote(node, self._dialect.keywords)
        return node

    # -- queries -------------------------------------------------------------

    def _visit_select(self, select: exp.Select) -> None:
        projections = select.expressions
        if projections:
            first = projections[0]
            select.set("expressions", [first if _is_star(first) else _marker()])

        distinct = select.args.get("distinct")
        if isinstance(distinct, exp.Distinct) and distinct.args.get("on") is not None:
            distinct.set("on", exp.Tuple(expressions=[_marker()]))

        _clear_where(select)

        group = select.args.get("group")
        if isinstance(group, exp.Group) and any(
            group.args.get(key) for key in ("expressions", "grouping_sets", "cube", "rollup")
        ):
            select.set("group", exp.Group(expressions=[_marker()], all=group.args.get("all")))

        _clear_order(select)
        _clear_limits(select)

    def _flatten_set_operation(self, node: exp.Expression) -> exp.Expression:
        """Rebuild a set-operation tree as a left-associative chain.

        Leaves and operators keep their left-to-right order; parentheses and
        right-nested groups disappear.  Modifiers of the outermost operation
        (WITH, ORDER BY, LIMIT, ...) move to the new root.
        """
        leaves: list[exp.Expression] = []
        operators: list[exp.Expression] = []
        pending: list[tuple[bool, exp.Expression]] = [(False, node)]
        while pending:
            is_operator, current = pending.pop()
            if is_operator:
                operators.append(current)
                continue
            if current is not node:
                current = _unwrap_parens(current)
                if isinstance(current, _SET_OPERATION) and _has_modifiers(current):
                    leaves.append(current)
                    continue
            if isinstance(current, _SET_OPERATION):
                pending.append((False, current.expression))
                pending.append((True, current))
                pending.append((False, current.this))
            else:
                leaves.append(current)

        chain = leaves[0]
        for operator, leaf in zip(operators, leaves[1:]):
            args = {
                key: value
                for key, value in operator.args.items()
                if key not in _MODIFIER_KEYS and key not in ("this", "expression")
            }
            chain = operator.__class__(this=chain, expression=leaf, **args)

        for key in _MODIFIER_KEYS:
            value = node.args.get(key)
            if value:
                chain.set(key, value)

        if node.parent is not None:
            node.replace(chain)
        return chain

    # -- DML -----------------------------------------------------------------

    def _visit_insert(self, insert: exp.Insert) -> None:
        target = insert.this
        if isinstance(target, exp.Schema) and target.expressions:
            target.set("expressions", [_marker()])

        source = insert.expression
        if isinstance(source, exp.Values):
            source.set("expressions", [exp.Tuple(expressions=[_marker()])])

        conflict = insert.args.get("conflict")
        if isinstance(conflict, exp.OnConflict):
            if conflict.args.get("conflict_keys"):
                conflict.set("conflict_keys", [_marker()])
            if conflict.expressions:
                conflict.set("expressions", [_assignment_marker()])
            _clear_where(conflict)

        _clear_where(insert)
        _clear_returning(insert)

    # -- FROM clause ---------------------------------------------------------

    def _visit_join(self, join: exp.Join) -> None:
        if join.args.get("on") is not None:
            join.set("on", _marker())
        if join.args.get("using"):
            join.set("using", [_marker()])

    def _visit_unnest(self, unnest: exp.Unnest) -> None:
        if unnest.expressions:
            unnest.set("expressions", [_marker()])
        alias = unnest.args.get("alias")
        if isinstance(alias, exp.TableAlias) and alias.columns:
            alias.set("columns", [_marker()])

    # -- raw commands --------------------------------------------------------

    def _visit_command(self, command: exp.Command) -> None:
        keyword = str(command.this).upper()
        argument = command.expression
        text = argument.name.strip() if isinstance(argument, exp.Expression) else ""
        if not text:
            return

        if keyword == "SAVEPOINT":
            rewritten = self._namer.name_for(text)
        elif keyword == "RELEASE":
            match = _RELEASE_RE.fullmatch(text)
            if match is None:
                return
            prefix = "SAVEPOINT " if match.group("keyword") else ""
            rewritten = f"{prefix}{self._namer.name_for(match.group('name'))}"
        elif keyword == "DECLARE":
            rewritten = self._declare_text(text)
        else:
            return

        command.set("expression", exp.Literal.string(rewritten))

    def _declare_text(self, text: str) -> str:
        """``c CURSOR FOR SELECT a FROM t`` -> ``... CURSOR FOR SELECT ... FROM t``."""
        match = _DECLARE_RE.fullmatch(text)
        if match is None:
            return text
        rest = match.group("rest")
        cursor = _CURSOR_QUERY_RE.fullmatch(rest.strip())
        if cursor is None:
            return f"{PLACEHOLDER}{rest}"
        query = self._fingerprint_fragment(cursor.group("query"))
        return f"{PLACEHOLDER} {cursor.group('head')}{query}"

    def _fingerprint_fragment(self, sql: str) -> str:
        """Fingerprint an embedded query with this visitor's namer.

        Unparsable fragments are kept as written.
        """
        try:
            trees = self._dialect.parse(sql)
        except Exception as exc:
            logger.debug("Keeping unparsable embedded query as-is: %s", exc)
            return sql
        parts = [self._dialect.generate(self.run(tree)) for tree in trees if tree is not None]
        return " ".join(parts) or sql


# ---------------------------------------------------------------------------
# SqlGlotSplitter
# ---------------------------------------------------------------------------


class SqlGlotSplitter:
    """SQLGlot-backed :class:`SqlSplitter` implementation.

    Splits on semicolon tokens from the dialect's own tokenizer, so
    semicolons inside strings, quoted identifiers and comments never split.
    """

    def __init__(self, dialects: dict[Dialect, _FingerprintDialect]) -> None:
        self._dialects = dialects

    def split(
        self,
        sql: str,
        dialect: Dialect = Dialect.GENERIC,
    ) -> list[str]:
        """Split *sql* into trimmed, non-empty statements."""
        if not sql.strip():
            return []

        try:
            tokens = self._dialects[dialect].tokenize(sql)
        except SqlglotError as exc:
            logger.debug("Tokenizer rejected SQL; keeping it as one statement: %s", exc)
            return [sql.strip()]

        statements: list[str] = []
        start: int | None = None
        end = 0
        for token in tokens:
            if token.token_type == TokenType.SEMICOLON:
                if start is not None:
                    statements.append(sql[start : end + 1].strip())
                start = None
                continue
            if start is None:
                start = token.start
            end = token.end

        if start is not None:
            statements.append(sql[start : end + 1].strip())
        return [statement for statement in statements if statement]


# ---------------------------------------------------------------------------
# SqlGlotParser
# ---------------------------------------------------------------------------


class SqlGlotParser:
    """SQLGlot-backed :class:`SqlParser` implementation."""

    def __init__(self, dialects: dict[Dialect, _FingerprintDialect]) -> None:
        self._dialects = dialects

    def parse_statement(
        self,
        sql: str,
        dialect: Dialect = Dialect.GENERIC,
    ) -> ParsedStatement:
        """Parse a single SQL statement."""
        try:
            trees = self._dialects[dialect].parse(sql)
        except Exception as exc:
            # SQLGlot also fails with AttributeError or IndexError on some
            # malformed input.
            raise SqlParseError(sql, str(exc)) from exc

        statements = [tree for tree in trees if tree is not None]
        if len(statements) != 1:
            raise SqlParseError(sql, f"Expected exactly 1 statement, got {len(statements)}")

        tree = statements[0]
        return ParsedStatement(
            kind=_classify_statement(tree),
            sql=sql,
            dialect=dialect,
            raw=tree,
        )


# ---------------------------------------------------------------------------
# SqlGlotNormalizer
# ---------------------------------------------------------------------------


class SqlGlotNormalizer:
    """SQLGlot-backed :class:`SqlNormalizer` implementation.

    Clearing rules:

    * SELECT: projection (a leading ``*`` is kept), WHERE, GROUP BY,
      DISTINCT ON, JOIN ON/USING, UNNEST arguments, first ORDER BY key,
      LIMIT/OFFSET/FETCH values.
    * INSERT: column list, VALUES rows, ON CONFLICT keys/assignments/WHERE,
      RETURNING.
    * UPDATE: SET list, WHERE, RETURNING.  DELETE: WHERE, RETURNING.
    * Set operations are flattened into a left-associative chain first.
    * SAVEPOINT / RELEASE / ROLLBACK TO names go through the namer.
    * ``DECLARE`` cursor names are erased; their queries are normalised.
    * Quoted identifiers made of ASCII letters, digits and ``_`` lose
      their quotes, unless the name is a keyword of the dialect.

    Anything else is left untouched.
    """

    def __init__(self, dialects: dict[Dialect, _FingerprintDialect]) -> None:
        self._dialects = dialects

    def normalize(
        self,
        statement: ParsedStatement,
        namer: SavepointNamer,
    ) -> ParsedStatement:
        """Return a normalised copy of *statement*."""
        raw = statement.raw
        if not isinstance(raw, exp.Expression):
            raise TypeError(f"Expected sqlglot Expression, got {type(raw).__name__}")

        visitor = _FingerprintingVisitor(namer, self._dialects[statement.dialect])
        try:
            tree = visitor.run(raw.copy())
        except Exception as exc:
            raise SqlNormalizationError(f"Failed to normalise SQL: {statement.sql[:200]}") from exc
        return ParsedStatement(
            kind=_classify_statement(tree),
            sql=statement.sql,
            dialect=statement.dialect,
            raw=tree,
        )


# ---------------------------------------------------------------------------
# SqlGlotRenderer
# ---------------------------------------------------------------------------


class SqlGlotRenderer:
    """SQLGlot-backed :class:`SqlRenderer` implementation."""

    def __init__(self, dialects: dict[Dialect, _FingerprintDialect]) -> None:
        self._dialects = dialects

    def render(self, statement: ParsedStatement) -> str:
        """Render *statement* without comments, on a single line."""
        raw: Any = statement.raw
        if not isinstance(raw, exp.Expression):
            raise TypeError(f"Expected sqlglot Expression, got {type(raw).__name__}")

        try:
            result = self._dialects[statement.dialect].generate(raw)
        except Exception as exc:
            raise SqlRenderError(f"Failed to render SQL: {statement.sql[:200]}") from exc
        if not result:
            raise SqlRenderError(f"Rendering produced no SQL: {statement.sql[:200]}")
        return result


# ---------------------------------------------------------------------------
# SqlGlotToolkit (composite)
# ---------------------------------------------------------------------------


class SqlGlotToolkit:
    """Composite :class:`SqlToolkit` backed by SQLGlot.

    Builds the fingerprinting dialects once and shares them between the
    individual protocol implementations.  This is the default
    implementation returned by :func:`get_sql_toolkit`.
    """

    def __init__(self) -> None:
        dialects = _build_dialects()
        self._splitter = SqlGlotSplitter(dialects)
        self._parser = SqlGlotParser(dialects)
        self._normalizer = SqlGlotNormalizer(dialects)
        self._renderer = SqlGlotRenderer(dialects)

    @property
    def splitter(self) -> SqlGlotSplitter:
        return self._splitter

    @property
    def parser(self) -> SqlGlotParser:
        return self._parser

    @property
    def normalizer(self) -> SqlGlotNormalizer:
        return self._normalizer

    @property
    def renderer(self) -> SqlGlotRenderer:
        return self._renderer
