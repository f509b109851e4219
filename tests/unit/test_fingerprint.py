"""Unit tests for sql_fingerprint.fingerprint."""

from __future__ import annotations

import logging

import pytest

from sql_fingerprint import Dialect, fingerprint_many, fingerprint_one
from sql_fingerprint.fingerprint import fallback_fingerprint, resolve_dialect
from sql_fingerprint.config import reset_settings
from sql_fingerprint.sql_toolkit import reset_toolkit


@pytest.fixture(autouse=True)
def _reset_singleton():
    reset_toolkit()
    reset_settings()
    yield
    reset_toolkit()
    reset_settings()


# ---------------------------------------------------------------------------
# SELECT
# ---------------------------------------------------------------------------


class TestSelect:
    def test_projection_and_predicate_cleared(self):
        sql = "SELECT name, age /* computed */ FROM cheeses WHERE origin = 'France'"
        assert fingerprint_one(sql) == "SELECT ... FROM cheeses WHERE ..."

    def test_star_projection_kept(self):
        assert fingerprint_one("SELECT *, a FROM t") == "SELECT * FROM t"

    def test_group_by_cleared(self):
        assert fingerprint_one("SELECT a, COUNT(*) FROM t GROUP BY a, b") == "SELECT ... FROM t GROUP BY ..."

    def test_order_by_keeps_first_direction(self):
        assert fingerprint_one("SELECT a FROM t ORDER BY a DESC, b ASC") == "SELECT ... FROM t ORDER BY ... DESC"

    def test_order_by_without_direction(self):
        assert fingerprint_one("SELECT a FROM t ORDER BY a, b") == "SELECT ... FROM t ORDER BY ..."

    def test_limit_and_offset_cleared(self):
        assert fingerprint_one("SELECT a FROM t LIMIT 10 OFFSET 20") == "SELECT ... FROM t LIMIT ... OFFSET ..."

    def test_join_condition_cleared(self):
        sql = "SELECT t.a, u.b FROM t JOIN u ON t.id = u.id AND u.kind = 'x'"
        assert fingerprint_one(sql) == "SELECT ... FROM t JOIN u ON ..."

    def test_join_without_condition_keeps_keyword(self):
        assert fingerprint_one("SELECT a, b FROM c JOIN d") == "SELECT ... FROM c JOIN d"

    def test_comma_join_keeps_comma(self):
        assert fingerprint_one("SELECT a FROM c, d") == "SELECT ... FROM c, d"

    def test_subquery_is_fingerprinted(self):
        sql = "SELECT a FROM (SELECT b FROM u WHERE c = 1) AS s"
        assert fingerprint_one(sql) == "SELECT ... FROM (SELECT ... FROM u WHERE ...) AS s"

    def test_distinct_on_cleared(self):
        sql = "SELECT DISTINCT ON (a) a, b FROM t"
        assert fingerprint_one(sql, Dialect.POSTGRES) == "SELECT DISTINCT ON (...) ... FROM t"

    def test_unnest_arguments_cleared(self):
        assert fingerprint_one("SELECT * FROM UNNEST([1,2,3])") == "SELECT * FROM UNNEST(...)"

    def test_literals_do_not_survive(self):
        result = fingerprint_one("SELECT 42, 'secret' FROM t WHERE id IN (1, 2, 3) LIMIT 7")
        for value in ("42", "secret", "7"):
            assert value not in result


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


class TestIdentifiers:
    def test_simple_quoted_identifier_unquoted(self):
        assert fingerprint_one('SELECT * FROM "cheeses"') == "SELECT * FROM cheeses"

    def test_identifier_with_space_stays_quoted(self):
        assert fingerprint_one('SELECT * FROM "my table"') == 'SELECT * FROM "my table"'

    def test_mysql_backticks(self):
        assert fingerprint_one("SELECT * FROM `cheeses`", Dialect.MYSQL) == "SELECT * FROM cheeses"

    def test_mysql_backticks_kept_when_needed(self):
        assert fingerprint_one("SELECT * FROM `my table`", Dialect.MYSQL) == "SELECT * FROM `my table`"

    def test_quoted_keyword_stays_quoted(self):
        result = fingerprint_one('SELECT * FROM "select"')
        assert result == 'SELECT * FROM "select"'
        assert fingerprint_one(result) == result


# ---------------------------------------------------------------------------
# Set operations
# ---------------------------------------------------------------------------


class TestSetOperations:
    EXPECTED = "SELECT ... FROM t1 UNION SELECT ... FROM t2 UNION ALL SELECT ... FROM t3"

    def test_chain(self):
        sql = "SELECT a FROM t1 UNION SELECT b FROM t2 UNION ALL SELECT c FROM t3"
        assert fingerprint_one(sql) == self.EXPECTED

    def test_right_nested_group_is_flattened(self):
        sql = "SELECT a FROM t1 UNION (SELECT b FROM t2 UNION ALL SELECT c FROM t3)"
        assert fingerprint_one(sql) == self.EXPECTED

    def test_parenthesised_operands_are_flattened(self):
        sql = "(SELECT a FROM t1) UNION (SELECT b FROM t2)"
        assert fingerprint_one(sql) == "SELECT ... FROM t1 UNION SELECT ... FROM t2"

    def test_operands_are_cleared(self):
        sql = "SELECT a FROM t1 WHERE x = 1 INTERSECT SELECT b FROM t2 WHERE y = 2"
        assert fingerprint_one(sql) == "SELECT ... FROM t1 WHERE ... INTERSECT SELECT ... FROM t2 WHERE ..."

    def test_explicit_distinct_is_kept(self):
        sql = "SELECT a FROM t1 UNION DISTINCT SELECT b FROM t2"
        assert fingerprint_one(sql) == "SELECT ... FROM t1 UNION DISTINCT SELECT ... FROM t2"

    def test_bare_union_gains_no_distinct(self):
        assert fingerprint_one("SELECT a FROM t1 UNION SELECT b FROM t2") == "SELECT ... FROM t1 UNION SELECT ... FROM t2"

    def test_explicit_distinct_within_chain(self):
        sql = "SELECT a FROM t1 UNION ALL SELECT b FROM t2 EXCEPT DISTINCT SELECT c FROM t3"
        assert fingerprint_one(sql) == "SELECT ... FROM t1 UNION ALL SELECT ... FROM t2 EXCEPT DISTINCT SELECT ... FROM t3"


# ---------------------------------------------------------------------------
# DML
# ---------------------------------------------------------------------------


class TestDml:
    def test_insert_values(self):
        sql = "INSERT INTO t (a, b) VALUES (1, 2), (3, 4)"
        assert fingerprint_one(sql) == "INSERT INTO t (...) VALUES (...)"

    def test_insert_select_is_fingerprinted(self):
        sql = "INSERT INTO t (a) SELECT b FROM u WHERE c = 1"
        assert fingerprint_one(sql) == "INSERT INTO t (...) SELECT ... FROM u WHERE ..."

    def test_insert_on_conflict(self):
        sql = "INSERT INTO t (a) VALUES (1) ON CONFLICT (a) DO UPDATE SET a = 2 RETURNING id"
        result = fingerprint_one(sql, Dialect.POSTGRES)
        assert result.startswith("INSERT INTO t (...) VALUES (...) ON CONFLICT")
        assert result.endswith("RETURNING ...")
        assert "1" not in result
        assert "2" not in result

    def test_insert_on_conflict_update_where(self):
        sql = (
            'INSERT INTO a (b, c) VALUES (1, 2) ON CONFLICT("a", "b") '
            'DO UPDATE SET "d" = EXCLUDED.d WHERE e = f RETURNING b, c'
        )
        expected = "INSERT INTO a (...) VALUES (...) ON CONFLICT(...) DO UPDATE SET ... = ... WHERE ... RETURNING ..."
        assert fingerprint_one(sql, Dialect.POSTGRES) == expected

    def test_on_conflict_where_values_are_cleared(self):
        sql = "INSERT INTO a (b) VALUES (1) ON CONFLICT (a) DO UPDATE SET d = 1 WHERE e = 42"
        result = fingerprint_one(sql, Dialect.POSTGRES)
        assert result.endswith("DO UPDATE SET ... = ... WHERE ...")
        assert "42" not in result

    def test_update(self):
        sql = "UPDATE t SET a = 1, b = 'x' WHERE id = 3"
        assert fingerprint_one(sql) == "UPDATE t SET ... = ... WHERE ..."

    def test_delete(self):
        assert fingerprint_one("DELETE FROM t WHERE id = 3") == "DELETE FROM t WHERE ..."

    def test_delete_returning(self):
        sql = "DELETE FROM t WHERE id = 3 RETURNING id, name"
        assert fingerprint_one(sql, Dialect.POSTGRES) == "DELETE FROM t WHERE ... RETURNING ..."


# ---------------------------------------------------------------------------
# Savepoints and cursors
# ---------------------------------------------------------------------------


class TestSavepoints:
    def test_numbered_in_first_seen_order(self):
        assert fingerprint_many("SAVEPOINT abc; SAVEPOINT xyz;") == ["SAVEPOINT s1", "SAVEPOINT s2"]

    @pytest.mark.parametrize("sql", ["SAVEPOINT abc", "SAVEPOINT xyz"])
    def test_numbering_restarts_per_call(self, sql):
        assert fingerprint_many(sql) == ["SAVEPOINT s1"]

    def test_release_refers_to_same_token(self):
        result = fingerprint_many("SAVEPOINT abc; RELEASE SAVEPOINT abc")
        assert result == ["SAVEPOINT s1", "RELEASE SAVEPOINT s1"]

    def test_rollback_refers_to_same_token(self):
        result = fingerprint_many("SAVEPOINT abc; SAVEPOINT xyz; ROLLBACK TO SAVEPOINT abc")
        assert result == ["SAVEPOINT s1", "SAVEPOINT s2", "ROLLBACK TO SAVEPOINT s1"]

    def test_rollback_spelling_is_kept(self):
        assert fingerprint_one("ROLLBACK TO SAVEPOINT abc") == "ROLLBACK TO SAVEPOINT s1"

    def test_fingerprint_one_joins_savepoints(self):
        assert fingerprint_one("SAVEPOINT abc; SAVEPOINT xyz;") == "SAVEPOINT s1; SAVEPOINT s2"

    def test_repeated_name_reuses_token(self):
        assert fingerprint_many("SAVEPOINT abc; SAVEPOINT abc") == ["SAVEPOINT s1", "SAVEPOINT s1"]

    def test_quoting_is_ignored(self):
        assert fingerprint_many('SAVEPOINT "abc"; RELEASE abc') == ["SAVEPOINT s1", "RELEASE s1"]

    def test_declare_cursor(self):
        sql = "DECLARE c1 CURSOR FOR SELECT a, b FROM t WHERE x = 1"
        assert fingerprint_one(sql, Dialect.POSTGRES) == "DECLARE ... CURSOR FOR SELECT ... FROM t WHERE ..."

    def test_declare_cursor_keeps_join_keyword(self):
        sql = "DECLARE c CURSOR FOR SELECT a, b FROM c join d"
        assert fingerprint_one(sql) == "DECLARE ... CURSOR FOR SELECT ... FROM c JOIN d"


# ---------------------------------------------------------------------------
# Batches and fallback
# ---------------------------------------------------------------------------


class TestBatches:
    def test_blank_input(self):
        assert fingerprint_many("  \n ") == []
        assert fingerprint_one("  \n ") == ""

    def test_order_is_preserved(self):
        result = fingerprint_many("DELETE FROM t WHERE a = 1; SELECT b FROM u")
        assert result == ["DELETE FROM t WHERE ...", "SELECT ... FROM u"]

    def test_invalid_statement_does_not_affect_siblings(self):
        result = fingerprint_many("SELECT a FROM t WHERE b = 1; SELECT FROM WHERE; SELECT c FROM u")
        assert result == ["SELECT ... FROM t WHERE ...", "SELECT FROM WHERE", "SELECT ... FROM u"]

    def test_fingerprint_one_joins_statements(self):
        assert fingerprint_one("SELECT a FROM t; SELECT b FROM u") == "SELECT ... FROM t; SELECT ... FROM u"

    def test_invalid_input_does_not_raise(self):
        assert fingerprint_one("SELECT   FROM\n  WHERE") == "SELECT FROM WHERE"

    def test_fallback_is_logged(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.DEBUG, logger="sql_fingerprint.fingerprint"):
            fingerprint_one("SELECT * FROM (")
        assert "fallback fingerprint" in caplog.text

    def test_fallback_fingerprint_collapses_whitespace(self):
        assert fallback_fingerprint("  SELECT\t*\n FROM   (  ") == "SELECT * FROM ("

    def test_non_sqlglot_parse_failure_falls_back(self):
        result = fingerprint_many("SELECT a FROM t; SHOW TABLE", Dialect.MYSQL)
        assert result == ["SELECT ... FROM t", "SHOW TABLE"]

    def test_parser_crash_falls_back(self):
        assert fingerprint_one("SELECT MAP(1) FROM t", Dialect.CLICKHOUSE) == "SELECT MAP(1) FROM t"


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


IDEMPOTENCE_CASES = [
    "SELECT name, age FROM cheeses WHERE origin = 'France'",
    'SELECT * FROM "cheeses"',
    "SELECT a FROM t1 UNION SELECT b FROM t2 UNION ALL SELECT c FROM t3",
    "SELECT a FROM t JOIN u ON t.id = u.id ORDER BY a DESC LIMIT 5 OFFSET 10",
    "SELECT a, COUNT(*) FROM t GROUP BY a",
    "INSERT INTO t (a, b) VALUES (1, 2)",
    "UPDATE t SET a = 1 WHERE id = 2",
    "DELETE FROM t WHERE id = 3",
    "SAVEPOINT abc; SAVEPOINT xyz; RELEASE SAVEPOINT xyz",
    "SELECT * FROM UNNEST([1,2,3])",
    "SELECT a FROM t1 UNION DISTINCT SELECT b FROM t2",
    "SELECT a, b FROM c JOIN d",
    'SELECT * FROM "select"',
    "SAVEPOINT abc; ROLLBACK TO SAVEPOINT abc",
]


class TestProperties:
    @pytest.mark.parametrize("sql", IDEMPOTENCE_CASES)
    def test_idempotent(self, sql):
        once = fingerprint_one(sql)
        assert fingerprint_one(once) == once

    @pytest.mark.parametrize("sql", IDEMPOTENCE_CASES)
    def test_deterministic(self, sql):
        assert fingerprint_one(sql) == fingerprint_one(sql)

    def test_same_shape_same_fingerprint(self):
        first = fingerprint_one("SELECT a FROM t WHERE id = 1")
        second = fingerprint_one("select b, c from t where id > 99 and x like '%y%'")
        assert first == second

    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_every_dialect(self, dialect):
        assert fingerprint_one("SELECT a, b FROM t WHERE c = 1", dialect) == "SELECT ... FROM t WHERE ..."


# ---------------------------------------------------------------------------
# Dialect resolution
# ---------------------------------------------------------------------------


class TestResolveDialect:
    def test_member_passes_through(self):
        assert resolve_dialect(Dialect.SQLITE) is Dialect.SQLITE

    @pytest.mark.parametrize("value", ["postgres", "POSTGRES", " postgres "])
    def test_string_value(self, value):
        assert resolve_dialect(value) is Dialect.POSTGRES

    def test_unknown_string_raises(self):
        with pytest.raises(ValueError):
            resolve_dialect("oracle")

    def test_unknown_string_raises_from_public_api(self):
        with pytest.raises(ValueError):
            fingerprint_one("SELECT 1", "oracle")

    def test_none_uses_generic_by_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("SQL_FINGERPRINT_DEFAULT_DIALECT", raising=False)
        assert resolve_dialect(None) is Dialect.GENERIC

    def test_none_uses_configured_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SQL_FINGERPRINT_DEFAULT_DIALECT", "mysql")
        assert resolve_dialect(None) is Dialect.MYSQL
        assert fingerprint_one("SELECT * FROM `cheeses`") == "SELECT * FROM cheeses"

    def test_configured_default_is_read_once(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SQL_FINGERPRINT_DEFAULT_DIALECT", "mysql")
        assert resolve_dialect(None) is Dialect.MYSQL
        monkeypatch.setenv("SQL_FINGERPRINT_DEFAULT_DIALECT", "postgres")
        assert resolve_dialect(None) is Dialect.MYSQL
