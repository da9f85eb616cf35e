"""Tests for catalog snapshots, using a mocked psycopg connection."""

import logging
from unittest.mock import MagicMock

import psycopg
import pytest

from pgreconcile.db import Database, check_versions
from pgreconcile.db.functions import fetch_functions
from pgreconcile.db.indexes import strip_storage_parameters
from pgreconcile.db.schemas import Schema, fetch_schemas
from pgreconcile.db.tables import fetch_tables
from pgreconcile.db.types import fetch_base_types, fetch_range_types
from pgreconcile.exceptions import CatalogError, UnsupportedVersionError
from pgreconcile.options import OptionEntry
from pgreconcile.privileges import AclEntry


def mock_connection(*results):
    """Connection whose successive cursors return the given row lists."""
    conn = MagicMock()
    cursors = []
    for rows in results:
        cur = MagicMock()
        cur.fetchall.return_value = rows
        cur.fetchone.return_value = rows[0] if rows else None
        context = MagicMock()
        context.__enter__.return_value = cur
        cursors.append(context)
    conn.cursor.side_effect = cursors
    return conn


class TestFetch:
    """Rows are turned into records in query order."""

    def test_schemas(self):
        conn = mock_connection([
            (2200, "public", "postgres", "standard public schema", "{postgres=UC/postgres,=U/postgres}"),
            (16400, "app", "alice", None, None),
        ])

        schemas = fetch_schemas(conn)

        assert schemas[0] == Schema(
            "public",
            "postgres",
            comment="standard public schema",
            acl=(AclEntry("", "postgres", "U"), AclEntry("postgres", "postgres", "UC")),
        )
        assert schemas[1].acl is None
        assert schemas[1].oid == 16400

    def test_tables_group_columns_and_constraints(self):
        conn = mock_connection(
            # columns
            [
                (16500, "id", "integer", True, None, None, "d", "", None, 1),
                (16500, "name", "text", False, None, None, "", "", "display name", 2),
            ],
            # constraints
            [(16500, "t_pkey", "p", "PRIMARY KEY (id)", True, None)],
            # tables
            [(16500, "public", "t", "postgres", False, None, ["fillfactor=70"], None, None, None)],
        )

        (table,) = fetch_tables(conn)

        assert [c.column_name for c in table.columns] == ["id", "name"]
        assert table.columns[0].identity == "d"
        assert table.columns[1].comment == "display name"
        assert table.constraints[0].definition == "PRIMARY KEY (id)"
        assert table.options.entries == (OptionEntry("fillfactor", "70"),)
        assert table.key == ("public", "t")

    def test_functions(self):
        row = (
            16600, "public", "f", "a integer", "function", "integer", "sql", "SELECT a",
            "CREATE OR REPLACE FUNCTION public.f(a integer)...", "immutable", True, False,
            False, "safe", 100, 0, ["search_path=public, pg_temp"], "postgres", None, None,
        )

        (function,) = fetch_functions(mock_connection([row]))

        assert function.key == ("public", "f", "a integer")
        assert function.options.get("search_path").value == "public, pg_temp"
        assert function.cost == 100.0

    def test_base_types(self):
        row = (
            16700, "public", "complex", "postgres", "complex_in", "complex_out",
            "complex_recv", "complex_send", None, None, None, 16, False, "d", "p",
            "U", False, None, ",", False, None, "{postgres=U/postgres}",
        )

        (base,) = fetch_base_types(mock_connection([row]))

        assert base.key == ("public", "complex")
        assert base.receive == "complex_recv"
        assert base.typmod_in is None
        assert base.length == 16
        assert base.alignment == "d"
        assert base.acl == (AclEntry("postgres", "postgres", "U"),)

    def test_range_types(self):
        row = (
            16800, "public", "floatrange", "double precision", "postgres",
            None, None, None, "float8mi", "float range", None,
        )

        (rng,) = fetch_range_types(mock_connection([row]))

        assert rng.key == ("public", "floatrange")
        assert rng.subtype == "double precision"
        assert rng.subtype_opclass is None
        assert rng.subtype_diff == "float8mi"
        assert rng.comment == "float range"
        assert rng.oid == 16800

    def test_index_storage_parameters_are_stripped(self):
        definition = "CREATE INDEX i ON public.t USING btree (a) WITH (fillfactor='70') WHERE (a > 0)"

        assert strip_storage_parameters(definition) == (
            "CREATE INDEX i ON public.t USING btree (a) WHERE (a > 0)"
        )


class TestFetchAll:
    """Connection handling and server version checks."""

    def test_connection_errors_become_catalog_errors(self, monkeypatch):
        def fail(*args, **kwargs):
            raise psycopg.OperationalError("connection refused")

        monkeypatch.setattr(psycopg, "connect", fail)

        with pytest.raises(CatalogError, match="connection refused"):
            Database.from_connection_string("dbname=nowhere")

    def test_snapshot_transaction_is_rolled_back(self, monkeypatch):
        exits = []

        class Transaction:
            def __enter__(self):
                return self

            def __exit__(self, exc_type, exc, tb):
                exits.append(exc_type)
                # psycopg consumes the Rollback aimed at its own block
                return exc_type is psycopg.Rollback

        conn = MagicMock()
        conn.__enter__.return_value = conn
        conn.transaction.return_value = Transaction()
        monkeypatch.setattr(psycopg, "connect", lambda *args, **kwargs: conn)
        monkeypatch.setattr(Database, "_fetch_objects", lambda self, conn: None)

        Database(connection_string="dbname=snap").fetch_all()

        assert exits == [psycopg.Rollback]

    def test_old_servers_are_rejected(self):
        db = Database()
        conn = mock_connection([(90624, "9.6.24")])

        with pytest.raises(UnsupportedVersionError):
            db._fetch_objects(conn)


class TestCheckVersions:
    def test_same_version(self, caplog):
        source = Database(server_version_num=160002, server_version="16.2")
        target = Database(server_version_num=160002, server_version="16.2")

        with caplog.at_level(logging.WARNING, logger="pgreconcile.db.database"):
            check_versions(source, target)
        assert caplog.text == ""

    def test_newer_than_keyword_table(self):
        source = Database(server_version_num=180001, server_version="18.1")
        target = Database(server_version_num=160002, server_version="16.2")

        with pytest.raises(UnsupportedVersionError, match="ignore-version"):
            check_versions(source, target)

    def test_ignore_version(self, caplog):
        source = Database(server_version_num=180001, server_version="18.1")
        target = Database(server_version_num=180001, server_version="18.1")

        with caplog.at_level(logging.WARNING, logger="pgreconcile.db.database"):
            check_versions(source, target, ignore_version=True)
        assert "18.1" in caplog.text

    def test_older_target_warns(self, caplog):
        source = Database(server_version_num=160002, server_version="16.2")
        target = Database(server_version_num=140010, server_version="14.10")

        with caplog.at_level(logging.WARNING, logger="pgreconcile.db.database"):
            check_versions(source, target)
        assert "older than source" in caplog.text
